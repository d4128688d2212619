"""Shop expenses and the income/expense summary."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ...errors import OrderValidationError
from ...models.domain import Expense
from ...persistence import expenses as expense_store
from ..validation import require_text


@dataclass(slots=True)
class ExpenseSummary:
    total_income: float
    total_expense: float

    @property
    def net_profit(self) -> float:
        return self.total_income - self.total_expense


def list_expenses() -> list[Expense]:
    return expense_store.list_expenses()


def add_expense(reason: str, amount: float) -> Expense:
    reason = require_text(reason, "Expense reason")
    if amount is None or amount <= 0:
        raise OrderValidationError("Expense amount must be greater than zero.")
    expense = expense_store.insert_expense(reason, float(amount))
    logging.info(f"Recorded expense {expense.amount} for '{expense.reason}'")
    return expense


def remove_expense(expense_id: str) -> None:
    expense_store.delete_expense(expense_id)


def summarize_expenses() -> ExpenseSummary:
    expenses = expense_store.list_expenses()
    return ExpenseSummary(
        total_income=expense_store.sum_order_totals(),
        total_expense=sum(expense.amount for expense in expenses),
    )
