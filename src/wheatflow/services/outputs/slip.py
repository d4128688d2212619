"""Plain-text delivery slips for an 80mm thermal printer."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional

from ...config import settings
from ...models.domain import LogicalOrder
from ..orders.slots import is_sentinel, order_by_slot

PRODUCT_LABELS = {
    "Tukdi": "टुकड़ी",
    "Sasiya": "सासिया",
    "Tukdi D": "टुकड़ी डीलक्स",
    "Sasiya D": "सासिया डीलक्स",
    "Other": "अन्य",
    "Null": "अन्य",
}

SLIP_SEPARATOR = "\f"


@dataclass(slots=True)
class SlipItem:
    label: str
    quantity: float
    amount: float


@dataclass(slots=True)
class DeliverySlip:
    order_number: Optional[int]
    date: Optional[date]
    customer_name: str
    address: str
    location: str
    phone: str
    items: list[SlipItem] = field(default_factory=list)
    total: float = 0.0
    driver_name: Optional[str] = None
    driver_phone: Optional[str] = None


def product_label(product_type: str) -> str:
    return PRODUCT_LABELS.get(product_type, product_type)


def format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}".rstrip("0").rstrip(".")


def build_delivery_slip(order: LogicalOrder) -> DeliverySlip:
    lines = [line for line in order.lines if not is_sentinel(line.product_type) and line.quantity_kg > 0]
    items = [
        SlipItem(product_label(line.product_type), line.quantity_kg, line.total_amount)
        for line in order_by_slot(lines, lambda line: line.product_type)
    ]
    location = order.area_name or ""
    if order.sub_area:
        location = f"{location}, {order.sub_area}" if location else order.sub_area
    return DeliverySlip(
        order_number=order.order_number,
        date=order.date,
        customer_name=(order.customer_name or "").upper(),
        address=order.customer_address or "",
        location=location,
        phone=order.customer_phone or "",
        items=items,
        total=sum(item.amount for item in items),
        driver_name=order.driver_name if order.driver_id else None,
        driver_phone=order.driver_phone if order.driver_id else None,
    )


def _spread(left: str, right: str, width: int) -> str:
    gap = max(1, width - len(left) - len(right))
    return f"{left}{' ' * gap}{right}"


def _row(label: str, quantity: str, amount: str, width: int) -> str:
    amount_width = 10
    quantity_width = 10
    label_width = max(1, width - amount_width - quantity_width)
    return f"{label[:label_width]:<{label_width}}{quantity:>{quantity_width}}{amount:>{amount_width}}"


def render_slip_text(slip: DeliverySlip, width: Optional[int] = None) -> str:
    width = width or settings.slip_width
    day = slip.date.strftime("%d/%m/%Y") if slip.date else ""
    number = "" if slip.order_number is None else str(slip.order_number)

    out = [
        settings.slip_header.center(width).rstrip(),
        settings.shop_name.center(width).rstrip(),
        "-" * width,
        _spread(f"No: {number}", f"Date: {day}", width),
        "-" * width,
        "ग्राहक (Customer):",
        slip.customer_name,
    ]
    if slip.address:
        out.append(slip.address)
    if slip.location:
        out.append(slip.location)
    out.append(f"Mob: {slip.phone}")
    out.append("=" * width)
    out.append(_row("विवरण (Item)", "Qty", "Amt", width))
    out.append("=" * width)
    for item in slip.items:
        out.append(_row(item.label, f"{format_number(item.quantity)} Guni", f"₹{format_number(item.amount)}", width))
    out.append("-" * width)
    out.append(_spread("कुल (Total):", f"₹{format_number(slip.total)}", width))
    out.append("." * width)
    if slip.driver_name:
        out.append(_spread(f"Delivery By: {slip.driver_name}", slip.driver_phone or "", width))
    else:
        out.append("Pickup / No Driver".center(width).rstrip())
    out.append("")
    out.append(_spread("Signature:", "_" * 16, width))
    return "\n".join(out) + "\n"


def render_slips(orders: Iterable[LogicalOrder], width: Optional[int] = None) -> str:
    """Render several slips, one per page."""
    return SLIP_SEPARATOR.join(render_slip_text(build_delivery_slip(order), width) for order in orders)
