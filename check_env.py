#!/usr/bin/env python3
"""Helper script to check and create the .env file for the order backend."""

import os
import sys
from pathlib import Path

TEMPLATE = """# Supabase Configuration (required)
# Get these from: https://supabase.com/dashboard → Your Project → Settings → API
WHEATFLOW_SUPABASE_URL=https://your-project-id.supabase.co
WHEATFLOW_SUPABASE_KEY=your-service-role-key-here

# API Configuration
WHEATFLOW_API_PREFIX=/api
# Comma-separated: http://localhost:5173,http://127.0.0.1:5173
# WHEATFLOW_FRONTEND_ALLOWED_ORIGINS=

# Backups and exports are written below this directory
WHEATFLOW_DATA_ROOT=./data

# Stock updates: "atomic" needs the adjust_stock function from sql/schema.sql
WHEATFLOW_STOCK_ADJUST_MODE=atomic
"""


def _mask(line: str) -> str:
    name, _, value = line.partition("=")
    value = value.strip()
    if len(value) > 20:
        return f"{name}={value[:20]}...{value[-10:]}"
    return line


def main():
    project_root = Path(__file__).parent
    env_file = project_root / ".env"

    print("=" * 60)
    print("WheatFlow Environment Variables Checker")
    print("=" * 60)
    print()

    if not env_file.exists():
        print(f"❌ .env file NOT found at: {env_file}")
        with open(env_file, "w", encoding="utf-8") as f:
            f.write(TEMPLATE)
        print(f"✅ Created template .env file at: {env_file}")
        print("⚠️  Please edit .env and add your Supabase credentials!")
        return

    print(f"✅ Found .env file at: {env_file}")
    print("-" * 60)
    with open(env_file, "r", encoding="utf-8") as f:
        for line in f.read().split("\n"):
            print(_mask(line) if "SUPABASE_KEY" in line and "=" in line else line)
    print("-" * 60)
    print()

    for name in ("WHEATFLOW_SUPABASE_URL", "WHEATFLOW_SUPABASE_KEY"):
        value = os.getenv(name)
        if value:
            print(f"✅ {name} (from environment): {value[:20]}...")
        else:
            print(f"❌ {name} not found in environment")
    print()

    try:
        sys.path.insert(0, str(project_root / "src"))
        from wheatflow.config import settings
    except Exception as e:
        print(f"❌ Error loading config: {e}")
        print("Make sure you're running this from the project root directory")
        return

    print(f"Stock adjust mode: {settings.stock_adjust_mode}")
    print(f"Product slots: {', '.join(settings.product_slots)}")
    if settings.supabase_url and settings.supabase_key:
        print("✅ SUCCESS: Supabase is configured!")
    else:
        print("❌ ERROR: Supabase is NOT configured")
        print("1. Make sure .env file exists in project root")
        print("2. Make sure variables start with WHEATFLOW_ prefix")
        print("3. Restart backend after editing .env")


if __name__ == "__main__":
    main()
