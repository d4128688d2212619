"""Customer table persistence."""

from __future__ import annotations

from typing import Any, Optional

from ..db.supabase import require_client
from ..models.domain import Customer
from .records import row_to_customer, utc_now_iso


def find_customer_by_phone(phone: str) -> Optional[Customer]:
    supabase = require_client()
    response = supabase.table("customers").select("*, areas(area_name)").eq("phone", phone).limit(1).execute()
    if response.data and len(response.data) > 0:
        return row_to_customer(response.data[0])
    return None


def get_customer(customer_id: str) -> Optional[Customer]:
    supabase = require_client()
    response = supabase.table("customers").select("*, areas(area_name)").eq("id", customer_id).limit(1).execute()
    if response.data and len(response.data) > 0:
        return row_to_customer(response.data[0])
    return None


def list_customers() -> list[Customer]:
    supabase = require_client()
    response = supabase.table("customers").select("*, areas(area_name)").order("name").execute()
    return [row_to_customer(row) for row in (response.data or [])]


def list_customer_rows() -> list[dict]:
    """Raw customer rows, used for backups."""
    supabase = require_client()
    response = supabase.table("customers").select("*, areas(area_name)").order("name").execute()
    return list(response.data or [])


def insert_customer(name: str, phone: str, address: Optional[str], area_id: Optional[str]) -> str:
    """Insert a customer and return the generated id."""
    supabase = require_client()
    response = supabase.table("customers").insert({
        "name": name,
        "phone": phone,
        "address": address,
        "area_id": area_id,
    }).execute()
    if not response.data:
        raise RuntimeError(f"Customer insert for phone {phone} returned no row")
    return str(response.data[0]["id"])


def update_customer(customer_id: str, patch: dict[str, Any]) -> None:
    supabase = require_client()
    payload = {**patch, "updated_at": utc_now_iso()}
    supabase.table("customers").update(payload).eq("id", customer_id).execute()


def delete_customer(customer_id: str) -> None:
    supabase = require_client()
    supabase.table("customers").delete().eq("id", customer_id).execute()


def count_customers(area_id: Optional[str] = None) -> int:
    supabase = require_client()
    query = supabase.table("customers").select("id", count="exact")
    if area_id is not None:
        query = query.eq("area_id", area_id)
    response = query.execute()
    if response.count is not None:
        return int(response.count)
    return len(response.data or [])
