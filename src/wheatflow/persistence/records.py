"""Conversions between Supabase rows and domain records."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Optional

from ..models.domain import (
    Area,
    AreaRate,
    Customer,
    Driver,
    Expense,
    OrderLine,
    ProductRate,
    StockItem,
)


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def coerce_float(value: Any) -> float:
    if value is None or value == "":
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value).replace(",", ""))
    except ValueError as exc:
        raise ValueError(f"Unable to parse number from value '{value}'") from exc


def parse_date(value: Any) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    # Timestamps come back as full ISO strings; only the calendar day matters here
    return date.fromisoformat(str(value)[:10])


def parse_datetime(value: Any) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    text = str(value).replace("Z", "+00:00")
    return datetime.fromisoformat(text)


def _embedded(row: dict, name: str) -> dict:
    value = row.get(name)
    return value if isinstance(value, dict) else {}


def row_to_area(row: dict) -> Area:
    return Area(id=str(row["id"]), area_name=row.get("area_name") or "")


def row_to_customer(row: dict) -> Customer:
    area = _embedded(row, "areas")
    return Customer(
        id=str(row["id"]),
        name=row.get("name") or "",
        phone=row.get("phone") or "",
        address=row.get("address"),
        area_id=row.get("area_id"),
        area_name=area.get("area_name"),
        created_at=parse_datetime(row.get("created_at")),
    )


def row_to_driver(row: dict) -> Driver:
    return Driver(
        id=str(row["id"]),
        name=row.get("name") or "",
        phone=row.get("phone") or "",
        vehicle_number=row.get("vehicle_number"),
        area_id=row.get("area_id"),
        sub_area=row.get("sub_area"),
        address=row.get("address"),
        created_at=parse_datetime(row.get("created_at")),
    )


def row_to_product_rate(row: dict) -> ProductRate:
    return ProductRate(
        product_type=row["product_type"],
        rate_per_kg=coerce_float(row.get("rate_per_kg")),
        id=row.get("id"),
    )


def row_to_area_rate(row: dict) -> AreaRate:
    return AreaRate(
        area_id=str(row["area_id"]),
        product_type=row["product_type"],
        rate_per_kg=coerce_float(row.get("rate_per_kg")),
        id=row.get("id"),
    )


def row_to_stock_item(row: dict) -> StockItem:
    return StockItem(
        id=str(row["id"]),
        product_type=row["product_type"],
        quantity_kg=coerce_float(row.get("quantity_kg")),
        low_stock_threshold=coerce_float(row.get("low_stock_threshold")),
        last_updated=parse_datetime(row.get("last_updated")),
    )


def row_to_expense(row: dict) -> Expense:
    return Expense(
        id=str(row["id"]),
        reason=row.get("reason") or "",
        amount=coerce_float(row.get("amount")),
        created_at=parse_datetime(row.get("created_at")),
    )


def row_to_order_line(row: dict) -> OrderLine:
    """Build an order line, flattening the embedded customer/area/driver selections."""
    customer = _embedded(row, "customers")
    area = _embedded(customer, "areas")
    driver = _embedded(row, "drivers")
    order_number = row.get("order_number")
    return OrderLine(
        id=str(row["id"]),
        customer_id=str(row["customer_id"]),
        product_type=row.get("product_type") or "",
        quantity_kg=coerce_float(row.get("quantity_kg")),
        rate_per_kg=coerce_float(row.get("rate_per_kg")),
        total_amount=coerce_float(row.get("total_amount")),
        amount_paid=coerce_float(row.get("amount_paid")),
        order_date=parse_date(row.get("order_date")),
        delivery_date=parse_date(row.get("delivery_date")),
        sub_area=row.get("sub_area"),
        driver_id=row.get("driver_id"),
        status=row.get("status") or "pending",
        order_number=int(order_number) if order_number is not None else None,
        created_at=parse_datetime(row.get("created_at")),
        customer_name=customer.get("name"),
        customer_phone=customer.get("phone"),
        customer_address=customer.get("address"),
        customer_area_id=customer.get("area_id"),
        area_name=area.get("area_name"),
        driver_name=driver.get("name"),
        driver_phone=driver.get("phone"),
    )
