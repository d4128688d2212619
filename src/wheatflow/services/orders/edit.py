"""Edit a logical order in place.

Each fixed slot is compared with the current line of that slot. The stock
counter moves by the difference between the old and new quantity, and the line
is updated, inserted or deleted. The new aggregate payment is spread over the
surviving lines in slot order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ...config import settings
from ...errors import OrderValidationError
from ...models.domain import GroupKey, OrderLine
from ...persistence.customers import update_customer
from ...persistence.orders import delete_order_lines, insert_order_line, update_order_line
from ...schemas.orders import OrderEditRequest, OrderEditResponse, ProductLineInput
from ..journal import WriteJournal
from ..rates import resolve_rate
from ..stock.service import adjust_stock
from ..validation import require_non_negative, require_text, validate_phone
from .allocation import allocate_payment
from .entry import validate_product_lines
from .lifecycle import ORDER_STATUSES, load_logical_order
from .slots import is_sentinel, slot_for


@dataclass(slots=True)
class _SlotPlan:
    slot: str
    old: Optional[OrderLine]
    product_type: str
    quantity: float
    rate: float
    total: float = 0.0
    paid: float = 0.0


def _requested_by_slot(lines: list[ProductLineInput]) -> dict[str, ProductLineInput]:
    requested: dict[str, ProductLineInput] = {}
    for line in lines:
        product_type = line.product_type.strip()
        if is_sentinel(product_type):
            raise OrderValidationError(f"Product '{product_type}' cannot be edited.")
        slot = slot_for(product_type)
        if slot in requested:
            raise OrderValidationError(f"Only one product can be entered for the {slot} slot.")
        requested[slot] = line
    return requested


def _keep(slot: str, line: OrderLine) -> _SlotPlan:
    return _SlotPlan(slot, line, line.product_type, line.quantity_kg, line.rate_per_kg)


def _plan_slots(
    existing: dict[str, list[OrderLine]],
    requested: dict[str, ProductLineInput],
    area_id: Optional[str],
) -> list[_SlotPlan]:
    plans: list[_SlotPlan] = []
    for slot in settings.product_slots:
        stored = list(existing.get(slot, []))
        wanted = requested.get(slot)
        if wanted is None:
            # omitted slots keep their current quantity and rate
            plans.extend(_keep(slot, line) for line in stored)
            continue

        product_type = wanted.product_type.strip()
        old = next((line for line in stored if line.product_type == product_type), stored[0] if stored else None)
        if wanted.rate is not None:
            rate = float(wanted.rate)
        elif old is not None and old.product_type == product_type:
            rate = old.rate_per_kg
        else:
            rate = resolve_rate(product_type, area_id)
        plans.append(_SlotPlan(slot, old, product_type, float(wanted.quantity), rate))
        # older rows may hold several varieties in one slot; the unmatched ones are kept as they are
        plans.extend(_keep(slot, line) for line in stored if line is not old)
    return plans


def edit_logical_order(key: GroupKey, request: OrderEditRequest) -> OrderEditResponse:
    name = require_text(request.customer_name, "Customer name")
    phone = validate_phone(request.phone)
    amount_paid = require_non_negative(request.amount_paid, "Amount paid")
    if request.status is not None and request.status not in ORDER_STATUSES:
        raise OrderValidationError(f"Unknown status '{request.status}'.")
    requested = _requested_by_slot(validate_product_lines(list(request.lines), require_quantity=False))

    group = load_logical_order(key)
    area_id = (request.area_id or "").strip() or group.area_id

    existing: dict[str, list[OrderLine]] = {}
    for line in group.lines:
        if not is_sentinel(line.product_type):
            existing.setdefault(slot_for(line.product_type), []).append(line)

    sub_area = request.sub_area.strip() if request.sub_area is not None else group.sub_area
    driver_id = request.driver_id.strip() if request.driver_id is not None else group.driver_id
    address = request.address.strip() if request.address is not None else group.customer_address
    delivery_day = request.delivery_date or group.date
    order_day = next((line.order_date for line in group.lines if line.order_date), None) or delivery_day or date.today()
    shared: dict = {
        "sub_area": sub_area or None,
        "driver_id": driver_id or None,
        "delivery_date": delivery_day.isoformat() if delivery_day else None,
    }
    if request.status is not None:
        shared["status"] = request.status

    journal = WriteJournal(f"edit order {key.as_string()}")
    with journal:
        plans = _plan_slots(existing, requested, area_id)
        surviving = [plan for plan in plans if plan.quantity > 0]
        for plan in surviving:
            plan.total = plan.quantity * plan.rate
        for plan, paid in zip(surviving, allocate_payment([plan.total for plan in surviving], amount_paid)):
            plan.paid = paid

        update_customer(group.customer_id, {
            "name": name,
            "phone": phone,
            "address": address or None,
            "area_id": area_id,
        })
        journal.record(f"customers.update {group.customer_id}")

        stock_changes: dict[str, float] = {}

        def move_stock(product_type: str, delta: float) -> None:
            if delta == 0:
                return
            if adjust_stock(product_type, delta) is not None:
                journal.record(f"stock {product_type} {delta:+}")
                stock_changes[product_type] = stock_changes.get(product_type, 0.0) + delta

        updated: list[str] = []
        inserted: list[str] = []
        deleted: list[str] = []
        for plan in plans:
            old = plan.old
            old_quantity = old.quantity_kg if old is not None else 0.0
            if old is not None and old.product_type != plan.product_type:
                move_stock(old.product_type, old_quantity)
                move_stock(plan.product_type, -plan.quantity)
            else:
                move_stock(plan.product_type, old_quantity - plan.quantity)

            if plan.quantity > 0:
                values = {
                    "product_type": plan.product_type,
                    "quantity_kg": plan.quantity,
                    "rate_per_kg": plan.rate,
                    "total_amount": plan.total,
                    "amount_paid": plan.paid,
                    **shared,
                }
                if old is not None:
                    update_order_line(old.id, values)
                    journal.record(f"orders.update {old.id} ({plan.product_type})")
                    updated.append(old.id)
                else:
                    line_id = insert_order_line({
                        "customer_id": group.customer_id,
                        "order_date": order_day.isoformat(),
                        "status": request.status or group.status,
                        **values,
                    })
                    journal.record(f"orders.insert {line_id} ({plan.product_type})")
                    inserted.append(line_id)
            elif old is not None:
                delete_order_lines([old.id])
                journal.record(f"orders.delete {old.id} ({old.product_type})")
                deleted.append(old.id)

    new_key = GroupKey(group.customer_id, delivery_day, sub_area or "")
    total = sum(plan.total for plan in surviving)
    paid = sum(plan.paid for plan in surviving)
    logging.info(
        f"Edited order {key.as_string()}: {len(updated)} updated, {len(inserted)} inserted, "
        f"{len(deleted)} deleted, stock {stock_changes}"
    )
    return OrderEditResponse(
        key=new_key.as_string(),
        customer_id=group.customer_id,
        date=delivery_day,
        sub_area=sub_area or "",
        updated_line_ids=updated,
        inserted_line_ids=inserted,
        deleted_line_ids=deleted,
        stock_changes=stock_changes,
        total_amount=total,
        amount_paid=paid,
        pending=total - paid,
    )
