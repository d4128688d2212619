"""Rebuild logical orders from persisted order lines.

A logical order is every line of one customer that shares the same effective
date (delivery date, else order date, else creation date) and sub-area.
Sentinel lines anchor a group but never count towards its totals.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, Literal, Optional, Sequence

from ...config import settings
from ...models.domain import GroupKey, LogicalOrder, OrderLine, ProductBreakdown
from .slots import is_sentinel, slot_for

PaymentFilter = Literal["all", "pending", "paid"]


def group_key_for(line: OrderLine) -> GroupKey:
    return GroupKey(line.customer_id, line.effective_date, (line.sub_area or "").strip())


def _new_group(key: GroupKey, line: OrderLine) -> LogicalOrder:
    return LogicalOrder(
        key=key,
        customer_id=line.customer_id,
        date=key.date,
        sub_area=key.sub_area,
        customer_name=line.customer_name or "Unknown",
        customer_phone=line.customer_phone,
        customer_address=line.customer_address,
        area_id=line.customer_area_id,
        area_name=line.area_name,
        status=line.status,
        products={slot: ProductBreakdown() for slot in settings.product_slots},
    )


def group_order_lines(lines: Iterable[OrderLine]) -> list[LogicalOrder]:
    """Group lines into logical orders, newest date first.

    Groups with the same date keep the order in which their first line appeared.
    """
    groups: dict[GroupKey, LogicalOrder] = {}
    status_set: set[GroupKey] = set()

    for line in lines:
        key = group_key_for(line)
        group = groups.get(key)
        if group is None:
            group = _new_group(key, line)
            groups[key] = group
        group.lines.append(line)

        if line.order_number is not None and (group.order_number is None or line.order_number < group.order_number):
            group.order_number = line.order_number
        if group.driver_id is None and line.driver_id:
            group.driver_id = line.driver_id
            group.driver_name = line.driver_name
            group.driver_phone = line.driver_phone

        if is_sentinel(line.product_type):
            continue

        if key not in status_set:
            group.status = line.status
            status_set.add(key)
        group.total_amount += line.total_amount
        group.total_paid += line.amount_paid
        group.total_quantity += line.quantity_kg
        breakdown = group.products[slot_for(line.product_type)]
        breakdown.quantity += line.quantity_kg
        breakdown.amount += line.total_amount

    return sorted(groups.values(), key=lambda group: group.date or date.min, reverse=True)


def find_group(groups: Iterable[LogicalOrder], key: GroupKey) -> Optional[LogicalOrder]:
    normalized = GroupKey(key.customer_id, key.date, (key.sub_area or "").strip())
    for group in groups:
        if group.key == normalized:
            return group
    return None


def filter_logical_orders(
    groups: Sequence[LogicalOrder],
    *,
    name: Optional[str] = None,
    phone: Optional[str] = None,
    area_id: Optional[str] = None,
    sub_area: Optional[str] = None,
    payment: PaymentFilter = "all",
) -> list[LogicalOrder]:
    name_query = name.strip().lower() if name and name.strip() else None
    phone_query = phone.strip() if phone and phone.strip() else None
    sub_area_query = sub_area.strip().lower() if sub_area and sub_area.strip() else None

    results: list[LogicalOrder] = []
    for group in groups:
        if name_query and name_query not in (group.customer_name or "").lower():
            continue
        if phone_query and phone_query not in (group.customer_phone or ""):
            continue
        if area_id and group.area_id != area_id:
            continue
        if sub_area_query and sub_area_query not in group.sub_area.lower():
            continue
        if payment == "pending" and group.is_paid:
            continue
        if payment == "paid" and not group.is_paid:
            continue
        results.append(group)
    return results


def split_by_year(groups: Sequence[LogicalOrder], year: int) -> tuple[list[LogicalOrder], list[LogicalOrder]]:
    """Split into (current year, earlier history). Undated groups count as current."""
    current: list[LogicalOrder] = []
    history: list[LogicalOrder] = []
    for group in groups:
        if group.date is not None and group.date.year < year:
            history.append(group)
        else:
            current.append(group)
    return current, history
