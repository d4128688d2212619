"""Customer endpoints."""

from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, HTTPException, Path, Query, status

from ...schemas.customers import (
    CustomerListResponse,
    CustomerModel,
    CustomerOverviewResponse,
    CustomerSummaryModel,
)
from ...services.customers import (
    compute_customer_overview,
    list_customer_summaries,
    lookup_customer,
    remove_customer,
    sub_area_suggestions,
)
from ..errors import http_error

router = APIRouter(tags=["customers"])


@router.get("/customers", response_model=CustomerListResponse)
def get_customers(
    search: str | None = Query(default=None, description="Search on name or phone"),
    area_id: str | None = Query(default=None),
    view: Literal["all", "pending", "completed"] = Query(default="all"),
    sort_by: Literal["name", "area", "totalAmount", "totalKg", "orderCount"] = Query(default="name"),
    descending: bool = Query(default=False),
) -> CustomerListResponse:
    try:
        summaries = list_customer_summaries(
            search=search,
            area_id=area_id,
            view=view,
            sort_by=sort_by,
            descending=descending,
        )
    except HTTPException:
        raise
    except Exception as exc:
        raise http_error(exc, "list customers") from exc

    items = [
        CustomerSummaryModel(
            customer=CustomerModel.from_customer(summary.customer),
            orderCount=summary.order_count,
            totalKg=summary.total_quantity,
            totalAmount=summary.total_amount,
            deliveredCount=summary.delivered_count,
            hasPending=summary.has_pending,
        )
        for summary in summaries
    ]
    return CustomerListResponse(items=items, total=len(items))


@router.get("/customers/stats", response_model=CustomerOverviewResponse)
def get_customer_stats(top_n: int = Query(default=3, ge=1, le=20)) -> CustomerOverviewResponse:
    try:
        return CustomerOverviewResponse.model_validate(compute_customer_overview(top_n=top_n))
    except Exception as exc:
        raise http_error(exc, "compute customer stats") from exc


@router.get("/customers/lookup", response_model=CustomerModel)
def get_customer_by_phone(phone: str = Query(..., description="10-digit phone number")) -> CustomerModel:
    """Pre-fill the order form for a returning customer."""
    try:
        return CustomerModel.from_customer(lookup_customer(phone))
    except Exception as exc:
        raise http_error(exc, "look up customer") from exc


@router.delete("/customers/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_customer(customer_id: str = Path(...)) -> None:
    try:
        remove_customer(customer_id)
    except Exception as exc:
        raise http_error(exc, "delete customer") from exc


@router.get("/sub-areas", response_model=list[str])
def get_sub_areas(
    q: str | None = Query(default=None, description="Filter suggestions"),
    limit: int | None = Query(default=None, gt=0),
) -> list[str]:
    try:
        return sub_area_suggestions(q, limit)
    except Exception as exc:
        raise http_error(exc, "list sub-areas") from exc
