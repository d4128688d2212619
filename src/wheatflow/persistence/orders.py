"""Order line persistence.

There is no order header table: every row of ``orders`` is one product line and
logical orders are rebuilt from these rows by the grouping service.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Callable, Optional, Sequence

from ..config import settings
from ..db.supabase import require_client
from ..models.domain import OrderLine
from .records import row_to_order_line, utc_now_iso

ORDER_LINE_SELECT = "*, customers(name, phone, address, area_id, areas(area_name)), drivers(name, phone)"


def list_order_lines(
    *,
    customer_id: Optional[str] = None,
    exclude_sentinel: bool = False,
    order_by: str = "created_at",
    limit: Optional[int] = None,
) -> list[OrderLine]:
    """Load order lines with their customer, area and driver details, newest first."""
    supabase = require_client()
    query = supabase.table("orders").select(ORDER_LINE_SELECT)
    if customer_id is not None:
        query = query.eq("customer_id", customer_id)
    if exclude_sentinel:
        query = query.neq("product_type", settings.sentinel_product)
    query = query.order(order_by, desc=True)
    if limit:
        query = query.limit(limit)
    response = query.execute()
    return [row_to_order_line(row) for row in (response.data or [])]


def list_order_rows() -> list[dict]:
    """Raw order rows with embedded customer and driver, used for backups."""
    supabase = require_client()
    response = supabase.table("orders").select(ORDER_LINE_SELECT).order("created_at", desc=True).execute()
    return list(response.data or [])


def get_order_line(line_id: str) -> Optional[OrderLine]:
    supabase = require_client()
    response = supabase.table("orders").select(ORDER_LINE_SELECT).eq("id", line_id).limit(1).execute()
    if response.data and len(response.data) > 0:
        return row_to_order_line(response.data[0])
    return None


def insert_order_line(record: dict[str, Any]) -> str:
    """Insert one order line and return its id."""
    supabase = require_client()
    response = supabase.table("orders").insert(record).execute()
    if not response.data:
        raise RuntimeError(f"Order insert for product {record.get('product_type')} returned no row")
    return str(response.data[0]["id"])


def insert_order_lines(records: Sequence[dict[str, Any]], batch_size: int | None = None) -> int:
    """Insert many order lines in batches. Returns the number inserted."""
    supabase = require_client()
    size = batch_size or settings.delete_batch_size
    inserted = 0
    for i in range(0, len(records), size):
        batch = list(records[i:i + size])
        supabase.table("orders").insert(batch).execute()
        inserted += len(batch)
    return inserted


def update_order_line(line_id: str, patch: dict[str, Any]) -> None:
    supabase = require_client()
    payload = {**patch, "updated_at": utc_now_iso()}
    supabase.table("orders").update(payload).eq("id", line_id).execute()


def update_order_lines_status(line_ids: Sequence[str], status: str) -> None:
    """Set the status of several lines in a single call."""
    supabase = require_client()
    supabase.table("orders").update({"status": status, "updated_at": utc_now_iso()}).in_("id", list(line_ids)).execute()


def delete_order_lines(line_ids: Sequence[str]) -> None:
    if not line_ids:
        return
    supabase = require_client()
    supabase.table("orders").delete().in_("id", list(line_ids)).execute()


def delete_order_lines_for_customer(customer_id: str) -> None:
    supabase = require_client()
    supabase.table("orders").delete().eq("customer_id", customer_id).execute()


def count_order_lines(
    *,
    product_type: Optional[str] = None,
    order_date: Optional[date] = None,
    exclude_sentinel: bool = False,
) -> int:
    supabase = require_client()
    query = supabase.table("orders").select("id", count="exact")
    if product_type is not None:
        query = query.eq("product_type", product_type)
    if order_date is not None:
        query = query.eq("order_date", order_date.isoformat())
    if exclude_sentinel:
        query = query.neq("product_type", settings.sentinel_product)
    response = query.execute()
    if response.count is not None:
        return int(response.count)
    return len(response.data or [])


def list_sub_areas() -> list[str]:
    """Distinct non-empty sub-areas known from orders and drivers, sorted."""
    supabase = require_client()
    order_subs = supabase.table("orders").select("sub_area").execute()
    driver_subs = supabase.table("drivers").select("sub_area").execute()
    values: set[str] = set()
    for row in list(order_subs.data or []) + list(driver_subs.data or []):
        value = (row.get("sub_area") or "").strip()
        if value:
            values.add(value)
    return sorted(values)


def delete_all_rows(
    table: str,
    batch_size: int | None = None,
    on_batch: Optional[Callable[[int], None]] = None,
) -> int:
    """Delete every row of a table in id batches. Returns the number deleted.

    ``on_batch`` is called with the size of each batch once its delete has gone through.
    """
    supabase = require_client()
    size = batch_size or settings.delete_batch_size
    total_deleted = 0

    while True:
        response = supabase.table(table).select("id").limit(size).execute()
        if not response.data or len(response.data) == 0:
            break

        ids = [row["id"] for row in response.data]
        supabase.table(table).delete().in_("id", ids).execute()
        total_deleted += len(ids)
        if on_batch is not None:
            on_batch(len(ids))

        if len(response.data) < size:
            break

    logging.info(f"Deleted {total_deleted} row(s) from {table}")
    return total_deleted
