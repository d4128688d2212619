"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...db import supabase as supabase_db

router = APIRouter(tags=["health"])

TABLES = ("customers", "areas", "drivers", "orders", "stock", "product_rates", "area_rates", "expenses")


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/database", status_code=status.HTTP_200_OK)
def check_database() -> dict:
    """Check database connection and report row counts per table."""
    supabase = supabase_db.get_supabase_client()
    if not supabase:
        return {
            "configured": False,
            "connected": False,
            "message": "Supabase not configured. Set WHEATFLOW_SUPABASE_URL and WHEATFLOW_SUPABASE_KEY environment variables.",
            "tables": {},
        }

    try:
        counts: dict[str, int] = {}
        for table in TABLES:
            response = supabase.table(table).select("id", count="exact").limit(1).execute()
            counts[table] = int(response.count or 0)
        return {
            "configured": True,
            "connected": True,
            "tables": counts,
            "message": f"Database connected. Found {counts.get('orders', 0)} order line(s).",
        }
    except Exception as exc:
        return {
            "configured": True,
            "connected": False,
            "error": str(exc),
            "message": f"Database connection error: {exc}",
        }
