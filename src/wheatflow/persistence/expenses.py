"""Expense table persistence."""

from __future__ import annotations

from ..db.supabase import require_client
from ..models.domain import Expense
from .records import coerce_float, row_to_expense


def list_expenses() -> list[Expense]:
    supabase = require_client()
    response = supabase.table("expenses").select("*").order("created_at", desc=True).execute()
    return [row_to_expense(row) for row in (response.data or [])]


def list_expense_rows() -> list[dict]:
    supabase = require_client()
    response = supabase.table("expenses").select("*").order("created_at", desc=True).execute()
    return list(response.data or [])


def insert_expense(reason: str, amount: float) -> Expense:
    supabase = require_client()
    response = supabase.table("expenses").insert({"reason": reason, "amount": amount}).execute()
    if not response.data:
        raise RuntimeError("Expense insert returned no row")
    return row_to_expense(response.data[0])


def delete_expense(expense_id: str) -> None:
    supabase = require_client()
    supabase.table("expenses").delete().eq("id", expense_id).execute()


def sum_order_totals() -> float:
    """Sum of total_amount over every order line (income)."""
    supabase = require_client()
    response = supabase.table("orders").select("total_amount").execute()
    total = 0.0
    for row in response.data or []:
        value = row.get("total_amount")
        total += coerce_float(value)
    return total
