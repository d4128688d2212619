"""Driver table persistence."""

from __future__ import annotations

from typing import Optional

from ..db.supabase import require_client
from ..models.domain import Driver
from .records import row_to_driver


def list_drivers() -> list[Driver]:
    supabase = require_client()
    response = supabase.table("drivers").select("*").order("name").execute()
    return [row_to_driver(row) for row in (response.data or [])]


def list_driver_rows() -> list[dict]:
    supabase = require_client()
    response = supabase.table("drivers").select("*").order("name").execute()
    return list(response.data or [])


def insert_driver(
    name: str,
    phone: str,
    vehicle_number: Optional[str] = None,
    area_id: Optional[str] = None,
    sub_area: Optional[str] = None,
    address: Optional[str] = None,
) -> Driver:
    supabase = require_client()
    response = supabase.table("drivers").insert({
        "name": name,
        "phone": phone,
        "vehicle_number": vehicle_number,
        "area_id": area_id,
        "sub_area": sub_area,
        "address": address,
    }).execute()
    if not response.data:
        raise RuntimeError(f"Driver insert for '{name}' returned no row")
    return row_to_driver(response.data[0])


def delete_driver(driver_id: str) -> None:
    supabase = require_client()
    supabase.table("drivers").delete().eq("id", driver_id).execute()
