"""Business report, dashboard, export and backup manifest endpoints."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, HTTPException, Path, Query, status
from fastapi.responses import FileResponse, Response

from ...persistence.orders import list_order_lines
from ...schemas.catalog import StockItemModel
from ...schemas.orders import LogicalOrderModel, OrderLineModel
from ...schemas.reports import BusinessReportResponse, DashboardResponse, ReportExportModel, ReportRunModel
from ...services.export import build_orders_workbook, build_report_workbook, workbook_bytes
from ...services.reports import list_export_files, list_runs, resolve_export_file
from ...services.reports.summary import business_report, dashboard_snapshot
from ..errors import http_error

router = APIRouter(prefix="/reports", tags=["reports"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _xlsx_response(payload: bytes, filename: str) -> Response:
    return Response(
        content=payload,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/summary", response_model=BusinessReportResponse)
def get_business_report(
    start: date | None = Query(default=None, description="First day included"),
    end: date | None = Query(default=None, description="Last day included"),
    area_id: str | None = Query(default=None),
) -> BusinessReportResponse:
    try:
        report = business_report(start=start, end=end, area_id=area_id)
    except HTTPException:
        raise
    except Exception as exc:
        raise http_error(exc, "build report") from exc
    return BusinessReportResponse(
        total_income=report.total_income,
        total_quantity=report.total_quantity,
        order_count=report.order_count,
        total_expense=report.total_expense,
        net_profit=report.net_profit,
        orders=[LogicalOrderModel.from_group(group) for group in report.orders],
    )


@router.get("/summary/export")
def export_business_report(
    start: date | None = Query(default=None),
    end: date | None = Query(default=None),
    area_id: str | None = Query(default=None),
) -> Response:
    try:
        report = business_report(start=start, end=end, area_id=area_id)
        payload = workbook_bytes(build_report_workbook(report.orders))
    except Exception as exc:
        raise http_error(exc, "export report") from exc
    return _xlsx_response(payload, f"orders_report_{date.today().isoformat()}.xlsx")


@router.get("/orders/export")
def export_orders() -> Response:
    try:
        payload = workbook_bytes(build_orders_workbook(list_order_lines(exclude_sentinel=True)))
    except Exception as exc:
        raise http_error(exc, "export orders") from exc
    return _xlsx_response(payload, f"orders_{date.today().isoformat()}.xlsx")


@router.get("/dashboard", response_model=DashboardResponse)
def get_dashboard() -> DashboardResponse:
    try:
        snapshot = dashboard_snapshot()
    except Exception as exc:
        raise http_error(exc, "load dashboard") from exc
    return DashboardResponse(
        today_orders=snapshot.today_orders,
        pending_payments=snapshot.pending_payments,
        total_customers=snapshot.total_customers,
        total_stock=snapshot.total_stock,
        stock_levels=[StockItemModel.from_item(item) for item in snapshot.stock_levels],
        recent_orders=[OrderLineModel.from_line(line) for line in snapshot.recent_lines],
    )


@router.get("/exports", response_model=list[ReportExportModel])
def get_report_exports(
    run_type: str | None = Query(default=None, description="Filter by run type (e.g. backup)"),
    file_type: str | None = Query(default=None, description="Filter by file type (XLSX, JSON, etc.)"),
    search: str | None = Query(default=None, description="Case-insensitive search across name/description"),
    limit: int | None = Query(default=None, gt=0, description="Maximum number of exports to return"),
) -> list[ReportExportModel]:
    exports = list_export_files(run_type=run_type, file_type=file_type, search=search, limit=limit)
    return [ReportExportModel.model_validate(item) for item in exports]


@router.get("/runs", response_model=list[ReportRunModel])
def get_report_runs(
    run_type: str | None = Query(default=None, description="Filter by run type"),
    limit: int | None = Query(default=None, gt=0, description="Maximum number of runs to return"),
) -> list[ReportRunModel]:
    runs = list_runs(run_type=run_type, limit=limit)
    return [ReportRunModel.model_validate(item) for item in runs]


@router.get(
    "/exports/{run_id}/{file_name:path}",
    response_class=FileResponse,
    status_code=status.HTTP_200_OK,
)
def download_export_file(
    run_id: str = Path(..., description="Run directory identifier"),
    file_name: str = Path(..., description="File name within the run directory"),
) -> FileResponse:
    try:
        file_path = resolve_export_file(run_id, file_name)
    except FileNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    return FileResponse(
        path=file_path,
        filename=file_path.name,
        media_type=_get_media_type(file_path),
        headers={"Content-Disposition": f'attachment; filename="{file_path.name}"'},
    )


def _get_media_type(file_path) -> str:
    """Determine MIME type based on file extension."""
    suffix = file_path.suffix.lower()
    mime_types = {
        ".json": "application/json",
        ".xlsx": XLSX_MEDIA_TYPE,
        ".txt": "text/plain",
    }
    return mime_types.get(suffix, "application/octet-stream")
