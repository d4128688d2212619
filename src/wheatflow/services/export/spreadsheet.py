"""Excel workbooks for orders, reports, drivers and backups."""

from __future__ import annotations

from io import BytesIO
from typing import Any, Iterable, Mapping, Sequence

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.worksheet.worksheet import Worksheet

from ...config import settings
from ...models.domain import Driver, LogicalOrder, OrderLine
from ..orders.slots import is_sentinel

ORDER_HEADERS = (
    "Order No",
    "Date",
    "Customer",
    "Phone",
    "Address",
    "Area",
    "Sub Area",
    "Product",
    "Qty (KG)",
    "Total Amount",
    "Pending Amount",
    "Status",
    "Driver Name",
    "Driver Phone",
)

DRIVER_HEADERS = ("Driver Name", "Phone Number", "Vehicle Number", "Joined Date")

_HEADER_FILL = PatternFill(start_color="1F3A8A", end_color="1F3A8A", fill_type="solid")
_HEADER_FONT = Font(bold=True, color="FFFFFF")
_MAX_COLUMN_WIDTH = 50


def report_headers() -> tuple[str, ...]:
    slots = tuple(f"{slot} (Guni)" for slot in settings.product_slots)
    return ("Date", "Customer", "Area", *slots, "Total Weight (Guni)", "Total Amount (₹)")


def _fill_sheet(sheet: Worksheet, headers: Sequence[str], rows: Iterable[Sequence[Any]]) -> None:
    if not headers:
        return
    sheet.append(list(headers))
    for cell in sheet[1]:
        cell.font = _HEADER_FONT
        cell.fill = _HEADER_FILL
        cell.alignment = Alignment(horizontal="center", vertical="center")
    for row in rows:
        sheet.append(list(row))

    for column in sheet.columns:
        longest = max((len(str(cell.value)) for cell in column if cell.value is not None), default=0)
        sheet.column_dimensions[column[0].column_letter].width = min(longest + 2, _MAX_COLUMN_WIDTH)


def _new_workbook(title: str) -> tuple[Workbook, Worksheet]:
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = title
    return workbook, sheet


def order_rows(lines: Iterable[OrderLine]) -> list[list[Any]]:
    rows: list[list[Any]] = []
    for line in lines:
        if is_sentinel(line.product_type):
            continue
        rows.append([
            line.order_number,
            line.effective_date,
            line.customer_name or "",
            line.customer_phone or "",
            line.customer_address or "",
            line.area_name or "",
            line.sub_area or "",
            line.product_type,
            line.quantity_kg,
            line.total_amount,
            line.pending_amount,
            line.status,
            line.driver_name or "",
            line.driver_phone or "",
        ])
    return rows


def report_rows(groups: Iterable[LogicalOrder]) -> list[list[Any]]:
    rows: list[list[Any]] = []
    for group in groups:
        if group.total_quantity <= 0:
            continue
        quantities = [group.products[slot].quantity if slot in group.products else 0 for slot in settings.product_slots]
        rows.append([
            group.date,
            group.customer_name,
            group.area_name or "",
            *quantities,
            group.total_quantity,
            group.total_amount,
        ])
    return rows


def build_orders_workbook(lines: Iterable[OrderLine]) -> Workbook:
    workbook, sheet = _new_workbook("Orders")
    _fill_sheet(sheet, ORDER_HEADERS, order_rows(lines))
    return workbook


def build_report_workbook(groups: Iterable[LogicalOrder]) -> Workbook:
    workbook, sheet = _new_workbook("Orders Report")
    _fill_sheet(sheet, report_headers(), report_rows(groups))
    return workbook


def build_drivers_workbook(drivers: Iterable[Driver]) -> Workbook:
    workbook, sheet = _new_workbook("Drivers")
    rows = [
        [
            driver.name,
            driver.phone,
            driver.vehicle_number or "N/A",
            driver.created_at.date() if driver.created_at else None,
        ]
        for driver in drivers
    ]
    _fill_sheet(sheet, DRIVER_HEADERS, rows)
    return workbook


def _flatten(row: Mapping[str, Any], prefix: str = "") -> dict[str, Any]:
    flat: dict[str, Any] = {}
    for key, value in row.items():
        name = f"{prefix}{key}"
        if isinstance(value, Mapping):
            flat.update(_flatten(value, f"{name}."))
        elif isinstance(value, (list, tuple)):
            flat[name] = ", ".join(str(item) for item in value)
        else:
            flat[name] = value
    return flat


def build_backup_workbook(tables: Mapping[str, Sequence[Mapping[str, Any]]]) -> Workbook:
    """One sheet per table, columns taken from the union of row keys in first-seen order."""
    workbook = Workbook()
    workbook.remove(workbook.active)
    for title, table_rows in tables.items():
        sheet = workbook.create_sheet(title=title)
        flat_rows = [_flatten(row) for row in table_rows]
        headers: list[str] = []
        for row in flat_rows:
            for key in row:
                if key not in headers:
                    headers.append(key)
        _fill_sheet(sheet, headers, ([row.get(header) for header in headers] for row in flat_rows))
    return workbook


def workbook_bytes(workbook: Workbook) -> bytes:
    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()
