"""Business report and dashboard figures."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional

from ...models.domain import Expense, LogicalOrder, OrderLine, StockItem
from ...persistence.customers import count_customers
from ...persistence.expenses import list_expenses
from ...persistence.orders import count_order_lines, list_order_lines
from ...persistence.stock import list_stock
from ..orders.grouping import group_order_lines
from ..orders.slots import is_sentinel


@dataclass(slots=True)
class BusinessReport:
    total_income: float = 0.0
    total_quantity: float = 0.0
    order_count: int = 0
    total_expense: float = 0.0
    orders: list[LogicalOrder] = field(default_factory=list)

    @property
    def net_profit(self) -> float:
        return self.total_income - self.total_expense


@dataclass(slots=True)
class DashboardSnapshot:
    today_orders: int
    pending_payments: float
    total_customers: int
    total_stock: float
    stock_levels: list[StockItem]
    recent_lines: list[OrderLine]


def _within(group: LogicalOrder, start: Optional[date], end: Optional[date]) -> bool:
    if start is None and end is None:
        return True
    if group.date is None:
        return False
    if start is not None and group.date < start:
        return False
    if end is not None and group.date > end:
        return False
    return True


def build_business_report(
    groups: Iterable[LogicalOrder],
    expenses: Iterable[Expense],
    *,
    start: Optional[date] = None,
    end: Optional[date] = None,
    area_id: Optional[str] = None,
) -> BusinessReport:
    """Totals over logical orders. Groups holding only sentinel lines are not counted."""
    report = BusinessReport()
    for group in groups:
        if not _within(group, start, end):
            continue
        if area_id and group.area_id != area_id:
            continue
        if group.total_quantity <= 0:
            continue
        report.orders.append(group)
        report.order_count += 1
        report.total_income += group.total_amount
        report.total_quantity += group.total_quantity

    for expense in expenses:
        spent_on = expense.created_at.date() if expense.created_at else None
        if (start or end) and spent_on is None:
            continue
        if start is not None and spent_on < start:
            continue
        if end is not None and spent_on > end:
            continue
        report.total_expense += expense.amount
    return report


def business_report(
    *,
    start: Optional[date] = None,
    end: Optional[date] = None,
    area_id: Optional[str] = None,
) -> BusinessReport:
    groups = group_order_lines(list_order_lines(exclude_sentinel=True))
    return build_business_report(groups, list_expenses(), start=start, end=end, area_id=area_id)


def pending_payments(lines: Iterable[OrderLine]) -> float:
    return sum(max(0.0, line.pending_amount) for line in lines if not is_sentinel(line.product_type))


def dashboard_snapshot(today: Optional[date] = None, recent: int = 5) -> DashboardSnapshot:
    today = today or date.today()
    stock = list_stock()
    lines = list_order_lines(exclude_sentinel=True)
    return DashboardSnapshot(
        today_orders=count_order_lines(order_date=today, exclude_sentinel=True),
        pending_payments=pending_payments(lines),
        total_customers=count_customers(),
        total_stock=sum(item.quantity_kg for item in stock),
        stock_levels=stock,
        recent_lines=lines[:recent],
    )
