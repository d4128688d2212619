"""Lookup, status change and deletion of logical orders."""

from __future__ import annotations

import logging
from typing import Optional

from ...errors import NotFoundError, OrderValidationError
from ...models.domain import GroupKey, LogicalOrder
from ...persistence.orders import (
    delete_order_lines,
    get_order_line,
    list_order_lines,
    update_order_lines_status,
)
from ..journal import WriteJournal
from ..stock.service import adjust_stock
from .grouping import find_group, group_order_lines

ORDER_STATUSES = ("pending", "delivered", "cancelled")


def list_logical_orders(customer_id: Optional[str] = None) -> list[LogicalOrder]:
    return group_order_lines(list_order_lines(customer_id=customer_id))


def load_logical_order(key: GroupKey) -> LogicalOrder:
    group = find_group(list_logical_orders(customer_id=key.customer_id), key)
    if group is None:
        raise NotFoundError(f"No order for customer {key.customer_id} on {key.date} in sub-area '{key.sub_area}'.")
    return group


def update_group_status(key: GroupKey, status: str) -> LogicalOrder:
    if status not in ORDER_STATUSES:
        raise OrderValidationError(f"Unknown status '{status}'. Expected one of {', '.join(ORDER_STATUSES)}.")
    group = load_logical_order(key)
    journal = WriteJournal(f"set status {status} on {key.as_string()}")
    with journal:
        update_order_lines_status(group.line_ids, status)
        journal.record(f"orders.update status x{len(group.line_ids)}")
    for line in group.lines:
        line.status = status
    group.status = status
    return group


def _restore_stock(journal: WriteJournal, lines) -> dict[str, float]:
    restored: dict[str, float] = {}
    for line in lines:
        if line.quantity_kg <= 0:
            continue
        if adjust_stock(line.product_type, line.quantity_kg) is not None:
            journal.record(f"stock {line.product_type} +{line.quantity_kg}")
            restored[line.product_type] = restored.get(line.product_type, 0.0) + line.quantity_kg
    return restored


def delete_logical_order(key: GroupKey) -> tuple[list[str], dict[str, float]]:
    """Delete every line of the group and return stock to the counters."""
    group = load_logical_order(key)
    journal = WriteJournal(f"delete order {key.as_string()}")
    with journal:
        delete_order_lines(group.line_ids)
        journal.record(f"orders.delete x{len(group.line_ids)}")
        restored = _restore_stock(journal, group.lines)
    logging.info(f"Deleted order {key.as_string()} ({len(group.line_ids)} line(s)); stock restored {restored}")
    return group.line_ids, restored


def delete_order_line(line_id: str) -> dict[str, float]:
    line = get_order_line(line_id)
    if line is None:
        raise NotFoundError(f"Order line {line_id} not found.")
    journal = WriteJournal(f"delete order line {line_id}")
    with journal:
        delete_order_lines([line_id])
        journal.record(f"orders.delete {line_id}")
        restored = _restore_stock(journal, [line])
    return restored
