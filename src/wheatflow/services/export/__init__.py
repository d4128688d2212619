"""Spreadsheet export helpers."""

from .spreadsheet import (
    build_backup_workbook,
    build_drivers_workbook,
    build_orders_workbook,
    build_report_workbook,
    workbook_bytes,
)

__all__ = [
    "build_backup_workbook",
    "build_drivers_workbook",
    "build_orders_workbook",
    "build_report_workbook",
    "workbook_bytes",
]
