"""Year-end rollover: back up, clear transactions, carry customers forward."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Optional

from ...config import settings
from ...errors import OrderValidationError
from ...persistence.customers import list_customer_rows
from ...persistence.drivers import list_driver_rows
from ...persistence.expenses import list_expense_rows
from ...persistence.filesystem import FileStorage
from ...persistence.orders import delete_all_rows, insert_order_lines, list_order_rows
from ..export.spreadsheet import build_backup_workbook, workbook_bytes
from ..journal import WriteJournal


@dataclass(slots=True)
class RolloverResult:
    backup_path: Path
    deleted_orders: int
    deleted_expenses: int
    carried_customers: int


def latest_sub_areas(order_rows: list[dict]) -> dict[str, Optional[str]]:
    """Most recent non-empty sub-area per customer. Rows are expected newest first."""
    latest: dict[str, Optional[str]] = {}
    for row in order_rows:
        customer_id = row.get("customer_id")
        if not customer_id or latest.get(customer_id):
            continue
        value = (row.get("sub_area") or "").strip() or None
        latest[customer_id] = value
    return latest


def sentinel_rows(customer_rows: list[dict], sub_areas: dict[str, Optional[str]], today: date) -> list[dict]:
    return [
        {
            "customer_id": row["id"],
            "product_type": settings.sentinel_product,
            "quantity_kg": 0,
            "rate_per_kg": 0,
            "total_amount": 0,
            "amount_paid": 0,
            "status": "pending",
            "order_date": today.isoformat(),
            "delivery_date": today.isoformat(),
            "sub_area": sub_areas.get(row["id"]),
        }
        for row in customer_rows
    ]


def write_backup(storage: FileStorage, tables: dict[str, list[dict]]) -> Path:
    run_dir = storage.make_run_directory("backup")
    path = run_dir / f"wheatflow_backup_{date.today().isoformat()}.xlsx"
    storage.write_bytes(path, workbook_bytes(build_backup_workbook(tables)))
    storage.write_json(run_dir / "summary.json", {
        "status": "complete",
        "counts": {name: len(rows) for name, rows in tables.items()},
        "notes": "Backup written before the year rollover.",
    })
    return path


def run_year_rollover(
    *,
    confirm: bool,
    storage: Optional[FileStorage] = None,
    today: Optional[date] = None,
) -> RolloverResult:
    if not confirm:
        raise OrderValidationError("Year rollover must be confirmed.")
    today = today or date.today()

    with WriteJournal("year rollover backup"):
        tables = {
            "Customers": list_customer_rows(),
            "Orders": list_order_rows(),
            "Drivers": list_driver_rows(),
            "Expenses": list_expense_rows(),
        }
        backup_path = write_backup(storage or FileStorage(), tables)
    logging.info(f"Year rollover backup written to {backup_path}")

    customers = tables["Customers"]
    carried = sentinel_rows(customers, latest_sub_areas(tables["Orders"]), today)

    journal = WriteJournal("year rollover")
    with journal:
        deleted_orders = delete_all_rows("orders", on_batch=lambda n: journal.record(f"orders.delete {n} row(s)"))
        deleted_expenses = delete_all_rows("expenses", on_batch=lambda n: journal.record(f"expenses.delete {n} row(s)"))
        inserted = insert_order_lines(carried)
        journal.record(f"orders.insert sentinel x{inserted}")

    logging.info(
        f"Year rollover complete: {deleted_orders} order line(s) and {deleted_expenses} expense(s) removed, "
        f"{inserted} customer(s) carried forward"
    )
    return RolloverResult(
        backup_path=backup_path,
        deleted_orders=deleted_orders,
        deleted_expenses=deleted_expenses,
        carried_customers=inserted,
    )
