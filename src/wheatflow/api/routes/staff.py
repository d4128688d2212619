"""Driver and expense endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Path, status
from fastapi.responses import Response

from ...schemas.staff import (
    DriverCreateRequest,
    DriverModel,
    ExpenseCreateRequest,
    ExpenseModel,
    ExpenseSummaryResponse,
)
from ...services.drivers import service as drivers
from ...services.expenses import service as expenses
from ...services.export import build_drivers_workbook, workbook_bytes
from ..errors import http_error

router = APIRouter(tags=["staff"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@router.get("/drivers", response_model=list[DriverModel])
def get_drivers() -> list[DriverModel]:
    try:
        return [DriverModel.from_driver(driver) for driver in drivers.list_drivers()]
    except Exception as exc:
        raise http_error(exc, "list drivers") from exc


@router.post("/drivers", response_model=DriverModel, status_code=status.HTTP_201_CREATED)
def post_driver(payload: DriverCreateRequest) -> DriverModel:
    try:
        driver = drivers.add_driver(
            payload.name,
            payload.phone,
            vehicle_number=payload.vehicle_number,
            area_id=payload.area_id,
            sub_area=payload.sub_area,
            address=payload.address,
        )
        return DriverModel.from_driver(driver)
    except Exception as exc:
        raise http_error(exc, "add driver") from exc


@router.delete("/drivers/{driver_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_driver(driver_id: str = Path(...)) -> None:
    try:
        drivers.remove_driver(driver_id)
    except Exception as exc:
        raise http_error(exc, "delete driver") from exc


@router.get("/drivers/export")
def export_drivers() -> Response:
    try:
        payload = workbook_bytes(build_drivers_workbook(drivers.list_drivers()))
    except Exception as exc:
        raise http_error(exc, "export drivers") from exc
    return Response(
        content=payload,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": 'attachment; filename="drivers.xlsx"'},
    )


@router.get("/expenses", response_model=list[ExpenseModel])
def get_expenses() -> list[ExpenseModel]:
    try:
        return [ExpenseModel.from_expense(expense) for expense in expenses.list_expenses()]
    except Exception as exc:
        raise http_error(exc, "list expenses") from exc


@router.post("/expenses", response_model=ExpenseModel, status_code=status.HTTP_201_CREATED)
def post_expense(payload: ExpenseCreateRequest) -> ExpenseModel:
    try:
        return ExpenseModel.from_expense(expenses.add_expense(payload.reason, payload.amount))
    except Exception as exc:
        raise http_error(exc, "add expense") from exc


@router.delete("/expenses/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_expense(expense_id: str = Path(...)) -> None:
    try:
        expenses.remove_expense(expense_id)
    except Exception as exc:
        raise http_error(exc, "delete expense") from exc


@router.get("/expenses/summary", response_model=ExpenseSummaryResponse)
def get_expense_summary() -> ExpenseSummaryResponse:
    try:
        summary = expenses.summarize_expenses()
        return ExpenseSummaryResponse(
            total_income=summary.total_income,
            total_expense=summary.total_expense,
            net_profit=summary.net_profit,
        )
    except Exception as exc:
        raise http_error(exc, "summarize expenses") from exc
