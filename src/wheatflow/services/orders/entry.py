"""Order entry: one visit's product lines into persisted order rows."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ...errors import OrderValidationError
from ...persistence.customers import find_customer_by_phone, insert_customer, update_customer
from ...persistence.orders import insert_order_line
from ...schemas.orders import OrderCreateRequest, OrderCreateResponse, OrderLineResult, ProductLineInput
from ..journal import WriteJournal
from ..rates import resolve_rate
from ..stock.service import adjust_stock
from ..validation import require_non_negative, require_text, validate_phone
from .allocation import allocate_payment
from .slots import order_by_slot, slot_for


@dataclass(slots=True)
class _PlannedLine:
    product_type: str
    quantity: float
    rate: float
    total: float = 0.0
    paid: float = 0.0


def validate_product_lines(lines: list[ProductLineInput], *, require_quantity: bool) -> list[ProductLineInput]:
    """Reject negative values, blank products and two products in one slot. Returns lines in slot order."""
    seen: set[str] = set()
    slots: set[str] = set()
    for line in lines:
        product_type = (line.product_type or "").strip()
        if not product_type:
            raise OrderValidationError("Product type is required for every line.")
        if product_type in seen:
            raise OrderValidationError(f"Product '{product_type}' appears more than once.")
        seen.add(product_type)
        slot = slot_for(product_type)
        if slot in slots:
            raise OrderValidationError(f"Only one product can be entered for the {slot} slot.")
        slots.add(slot)
        require_non_negative(line.quantity, f"Quantity for {product_type}")
        if line.rate is not None:
            require_non_negative(line.rate, f"Rate for {product_type}")
    if require_quantity and not any(line.quantity > 0 for line in lines):
        raise OrderValidationError("Enter a quantity for at least one product.")
    return order_by_slot(lines, lambda line: line.product_type.strip())


def create_order(request: OrderCreateRequest, *, today: Optional[date] = None) -> OrderCreateResponse:
    name = require_text(request.customer_name, "Customer name")
    phone = validate_phone(request.phone)
    area_id = require_text(request.area_id, "Area")
    amount_paid = require_non_negative(request.amount_paid, "Amount paid")
    ordered = validate_product_lines(list(request.lines), require_quantity=True)

    order_day = today or date.today()
    delivery_day = request.delivery_date or order_day
    sub_area = (request.sub_area or "").strip() or None
    address = (request.address or "").strip() or None

    journal = WriteJournal(f"create order for {phone}")
    with journal:
        planned = [
            _PlannedLine(
                product_type=line.product_type.strip(),
                quantity=float(line.quantity),
                rate=float(line.rate) if line.rate is not None else resolve_rate(line.product_type.strip(), area_id),
            )
            for line in ordered
            if line.quantity > 0
        ]
        for item in planned:
            item.total = item.quantity * item.rate
        for item, paid in zip(planned, allocate_payment([item.total for item in planned], amount_paid)):
            item.paid = paid

        existing = find_customer_by_phone(phone)
        if existing is not None:
            customer_id = existing.id
            update_customer(customer_id, {"address": address, "area_id": area_id})
            journal.record(f"customers.update {customer_id}")
        else:
            customer_id = insert_customer(name, phone, address, area_id)
            journal.record(f"customers.insert {customer_id}")

        results: list[OrderLineResult] = []
        for item in planned:
            line_id = insert_order_line({
                "customer_id": customer_id,
                "product_type": item.product_type,
                "quantity_kg": item.quantity,
                "rate_per_kg": item.rate,
                "total_amount": item.total,
                "amount_paid": item.paid,
                "status": "pending",
                "order_date": order_day.isoformat(),
                "delivery_date": delivery_day.isoformat(),
                "sub_area": sub_area,
                "driver_id": request.driver_id or None,
            })
            journal.record(f"orders.insert {line_id} ({item.product_type})")
            if adjust_stock(item.product_type, -item.quantity) is not None:
                journal.record(f"stock {item.product_type} -{item.quantity}")
            results.append(OrderLineResult(
                id=line_id,
                product_type=item.product_type,
                quantity=item.quantity,
                rate=item.rate,
                total_amount=item.total,
                amount_paid=item.paid,
            ))

    total = sum(item.total for item in planned)
    paid = sum(item.paid for item in planned)
    logging.info(f"Created {len(results)} order line(s) for customer {customer_id}, total {total}, paid {paid}")
    return OrderCreateResponse(
        customer_id=customer_id,
        customer_created=existing is None,
        lines=results,
        total_amount=total,
        amount_paid=paid,
        pending=total - paid,
    )
