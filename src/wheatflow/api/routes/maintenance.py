"""Maintenance endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...schemas.reports import RolloverRequest, RolloverResponse
from ...services.rollover.service import run_year_rollover
from ..errors import http_error

router = APIRouter(prefix="/maintenance", tags=["maintenance"])


@router.post("/new-year", response_model=RolloverResponse, status_code=status.HTTP_200_OK)
def start_new_year(payload: RolloverRequest) -> RolloverResponse:
    """Back up everything, clear orders and expenses, and carry every customer into the new year."""
    try:
        result = run_year_rollover(confirm=payload.confirm)
    except Exception as exc:
        raise http_error(exc, "start new year") from exc
    return RolloverResponse(
        backup_file=str(result.backup_path),
        deleted_orders=result.deleted_orders,
        deleted_expenses=result.deleted_expenses,
        carried_customers=result.carried_customers,
    )
