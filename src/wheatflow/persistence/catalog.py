"""Areas, global product rates and area rate overrides."""

from __future__ import annotations

from typing import Optional, Sequence

from ..db.supabase import require_client
from ..models.domain import Area, AreaRate, ProductRate
from .records import coerce_float, row_to_area, row_to_area_rate, row_to_product_rate, utc_now_iso


def list_areas() -> list[Area]:
    supabase = require_client()
    response = supabase.table("areas").select("*").order("area_name").execute()
    return [row_to_area(row) for row in (response.data or [])]


def insert_area(area_name: str) -> Area:
    supabase = require_client()
    response = supabase.table("areas").insert({"area_name": area_name}).execute()
    if not response.data:
        raise RuntimeError(f"Area insert for '{area_name}' returned no row")
    return row_to_area(response.data[0])


def delete_area_rates(area_id: str) -> None:
    supabase = require_client()
    supabase.table("area_rates").delete().eq("area_id", area_id).execute()


def delete_area(area_id: str) -> None:
    supabase = require_client()
    supabase.table("areas").delete().eq("id", area_id).execute()


def get_area_rate(area_id: str, product_type: str) -> Optional[float]:
    """Area override rate, or None when no row exists."""
    supabase = require_client()
    response = (
        supabase.table("area_rates")
        .select("rate_per_kg")
        .eq("area_id", area_id)
        .eq("product_type", product_type)
        .limit(1)
        .execute()
    )
    if response.data and len(response.data) > 0:
        return coerce_float(response.data[0].get("rate_per_kg"))
    return None


def get_product_rate(product_type: str) -> Optional[float]:
    """Global rate for a product, or None when no row exists."""
    supabase = require_client()
    response = supabase.table("product_rates").select("rate_per_kg").eq("product_type", product_type).limit(1).execute()
    if response.data and len(response.data) > 0:
        return coerce_float(response.data[0].get("rate_per_kg"))
    return None


def list_product_rates() -> list[ProductRate]:
    supabase = require_client()
    response = supabase.table("product_rates").select("*").order("product_type").execute()
    return [row_to_product_rate(row) for row in (response.data or [])]


def insert_product_rate(product_type: str, rate_per_kg: float = 0) -> None:
    supabase = require_client()
    supabase.table("product_rates").insert({"product_type": product_type, "rate_per_kg": rate_per_kg}).execute()


def update_product_rate(product_type: str, rate_per_kg: float) -> None:
    supabase = require_client()
    supabase.table("product_rates").update(
        {"rate_per_kg": rate_per_kg, "updated_at": utc_now_iso()}
    ).eq("product_type", product_type).execute()


def delete_product_rate(product_type: str) -> None:
    supabase = require_client()
    supabase.table("product_rates").delete().eq("product_type", product_type).execute()


def list_area_rates(area_id: str) -> list[AreaRate]:
    supabase = require_client()
    response = supabase.table("area_rates").select("*").eq("area_id", area_id).execute()
    return [row_to_area_rate(row) for row in (response.data or [])]


def upsert_area_rates(rates: Sequence[AreaRate]) -> None:
    """Write one override per (area, product), replacing existing rows."""
    if not rates:
        return
    supabase = require_client()
    rows = [
        {"area_id": rate.area_id, "product_type": rate.product_type, "rate_per_kg": rate.rate_per_kg}
        for rate in rates
    ]
    supabase.table("area_rates").upsert(rows, on_conflict="area_id,product_type").execute()
