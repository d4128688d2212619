"""Application configuration and settings management."""

from pathlib import Path
from typing import Any, Literal, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="WHEATFLOW_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "WheatFlow Orders API"
    api_prefix: str = "/api"
    log_level: str = "INFO"
    data_root: Path = Field(default=Path("data"), description="Root directory for backups and exports.")
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:8080",
            "http://127.0.0.1:8080",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    # Supabase configuration
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co).",
    )
    supabase_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key for backend operations.",
    )

    # Product catalogue
    product_slots: tuple[str, ...] = Field(
        default=("Tukdi", "Sasiya", "Tukdi D", "Sasiya D", "Other"),
        description="Fixed product slots. Their order drives payment allocation.",
    )
    other_product: str = Field(default="Other", description="Slot that collects every non-standard variety.")
    sentinel_product: str = Field(default="Null", description="Placeholder product used for carried-forward customers.")
    stock_adjust_mode: Literal["atomic", "read_write"] = Field(
        default="atomic",
        description="'atomic' uses the adjust_stock database function, 'read_write' reads then writes the row.",
    )
    default_low_stock_threshold: float = Field(default=10, ge=0)
    delete_batch_size: int = Field(default=500, ge=1)

    # Delivery slip
    shop_name: str = "WHEATFLOW"
    slip_header: str = "|| श्री स्वामीनारायण विजयतेतम् ||"
    slip_width: int = Field(default=42, ge=24, description="Characters per line on an 80mm thermal roll.")

    @field_validator("data_root", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("frontend_allowed_origins", "product_slots", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            # Try JSON first
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            # Try comma-separated
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            # Single value
            if value.strip():
                return (value.strip(),)
        return tuple()

    @property
    def standard_products(self) -> tuple[str, ...]:
        """Slots that carry their own stock row and global rate."""
        return tuple(slot for slot in self.product_slots if slot != self.other_product)

    @property
    def manual_rate_products(self) -> frozenset[str]:
        return frozenset({self.other_product, self.sentinel_product})


settings = Settings()
