"""Stock table persistence."""

from __future__ import annotations

from typing import Optional

from ..db.supabase import require_client
from ..models.domain import StockItem
from .records import coerce_float, row_to_stock_item, utc_now_iso


def list_stock() -> list[StockItem]:
    supabase = require_client()
    response = supabase.table("stock").select("*").order("product_type").execute()
    return [row_to_stock_item(row) for row in (response.data or [])]


def get_stock_item(product_type: str) -> Optional[StockItem]:
    supabase = require_client()
    response = supabase.table("stock").select("*").eq("product_type", product_type).limit(1).execute()
    if response.data and len(response.data) > 0:
        return row_to_stock_item(response.data[0])
    return None


def insert_stock_item(product_type: str, low_stock_threshold: float, quantity_kg: float = 0) -> StockItem:
    supabase = require_client()
    response = supabase.table("stock").insert({
        "product_type": product_type,
        "quantity_kg": quantity_kg,
        "low_stock_threshold": low_stock_threshold,
    }).execute()
    if not response.data:
        raise RuntimeError(f"Stock insert for '{product_type}' returned no row")
    return row_to_stock_item(response.data[0])


def delete_stock_item(product_type: str) -> None:
    supabase = require_client()
    supabase.table("stock").delete().eq("product_type", product_type).execute()


def write_stock_quantity(stock_id: str, quantity_kg: float) -> None:
    supabase = require_client()
    supabase.table("stock").update(
        {"quantity_kg": quantity_kg, "last_updated": utc_now_iso()}
    ).eq("id", stock_id).execute()


def write_low_stock_threshold(stock_id: str, threshold: float) -> None:
    supabase = require_client()
    supabase.table("stock").update({"low_stock_threshold": threshold}).eq("id", stock_id).execute()


def increment_stock(product_type: str, delta: float) -> Optional[float]:
    """Apply ``quantity_kg = quantity_kg + delta`` inside the database.

    Calls the ``adjust_stock`` function, which performs a single UPDATE and returns
    the new quantity, or null when the product has no stock row.
    """
    supabase = require_client()
    response = supabase.rpc("adjust_stock", {"p_product_type": product_type, "p_delta": delta}).execute()
    if response.data is None:
        return None
    return coerce_float(response.data)
