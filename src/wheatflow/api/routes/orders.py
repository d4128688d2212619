"""Order entry, editing, listing and printing endpoints."""

from __future__ import annotations

import logging
from datetime import date
from typing import Literal, Optional

from fastapi import APIRouter, HTTPException, Path, Query, status
from fastapi.responses import PlainTextResponse

from ...models.domain import GroupKey
from ...schemas.orders import (
    DeleteResponse,
    LogicalOrderListResponse,
    LogicalOrderModel,
    OrderCreateRequest,
    OrderCreateResponse,
    OrderEditRequest,
    OrderEditResponse,
    SlipRequest,
    StatusUpdateRequest,
)
from ...services.orders.edit import edit_logical_order
from ...services.orders.entry import create_order
from ...services.orders.grouping import filter_logical_orders, split_by_year
from ...services.orders.lifecycle import (
    delete_logical_order,
    delete_order_line,
    list_logical_orders,
    load_logical_order,
    update_group_status,
)
from ...services.outputs.slip import render_slips
from ..errors import http_error

router = APIRouter(prefix="/orders", tags=["orders"])


def _group_key(customer_id: str, day: date, sub_area: Optional[str]) -> GroupKey:
    return GroupKey(customer_id, day, (sub_area or "").strip())


@router.post("", response_model=OrderCreateResponse, status_code=status.HTTP_201_CREATED)
def post_order(payload: OrderCreateRequest) -> OrderCreateResponse:
    """Record one customer visit: upsert the customer, write one line per product and move stock."""
    try:
        return create_order(payload)
    except HTTPException:
        raise
    except Exception as exc:
        raise http_error(exc, "create order") from exc


@router.get("", response_model=LogicalOrderListResponse)
def get_orders(
    name: str | None = Query(default=None, description="Case-insensitive customer name search"),
    phone: str | None = Query(default=None, description="Phone number search"),
    area_id: str | None = Query(default=None, description="Filter by area"),
    sub_area: str | None = Query(default=None, description="Filter by sub-area"),
    payment: Literal["all", "pending", "paid"] = Query(default="all"),
    year: int | None = Query(default=None, description="Orders before this year are returned as history"),
) -> LogicalOrderListResponse:
    try:
        groups = filter_logical_orders(
            list_logical_orders(),
            name=name,
            phone=phone,
            area_id=area_id,
            sub_area=sub_area,
            payment=payment,
        )
        current_year = year or date.today().year
        current, history = split_by_year(groups, current_year)
        return LogicalOrderListResponse(
            year=current_year,
            total=len(groups),
            orders=[LogicalOrderModel.from_group(group) for group in current],
            history=[LogicalOrderModel.from_group(group) for group in history],
        )
    except HTTPException:
        raise
    except Exception as exc:
        raise http_error(exc, "list orders") from exc


@router.get("/groups/{customer_id}/{day}", response_model=LogicalOrderModel)
def get_order_group(
    customer_id: str = Path(..., description="Customer id"),
    day: date = Path(..., description="Delivery (or order) date of the logical order"),
    sub_area: str | None = Query(default=None),
) -> LogicalOrderModel:
    try:
        return LogicalOrderModel.from_group(load_logical_order(_group_key(customer_id, day, sub_area)))
    except HTTPException:
        raise
    except Exception as exc:
        raise http_error(exc, "load order") from exc


@router.put("/groups/{customer_id}/{day}", response_model=OrderEditResponse)
def put_order_group(
    payload: OrderEditRequest,
    customer_id: str = Path(...),
    day: date = Path(...),
    sub_area: str | None = Query(default=None),
) -> OrderEditResponse:
    try:
        return edit_logical_order(_group_key(customer_id, day, sub_area), payload)
    except HTTPException:
        raise
    except Exception as exc:
        raise http_error(exc, "edit order") from exc


@router.patch("/groups/{customer_id}/{day}/status", response_model=LogicalOrderModel)
def patch_order_status(
    payload: StatusUpdateRequest,
    customer_id: str = Path(...),
    day: date = Path(...),
    sub_area: str | None = Query(default=None),
) -> LogicalOrderModel:
    try:
        group = update_group_status(_group_key(customer_id, day, sub_area), payload.status)
        return LogicalOrderModel.from_group(group)
    except HTTPException:
        raise
    except Exception as exc:
        raise http_error(exc, "update order status") from exc


@router.delete("/groups/{customer_id}/{day}", response_model=DeleteResponse)
def delete_order_group(
    customer_id: str = Path(...),
    day: date = Path(...),
    sub_area: str | None = Query(default=None),
) -> DeleteResponse:
    try:
        line_ids, restored = delete_logical_order(_group_key(customer_id, day, sub_area))
        return DeleteResponse(deleted_line_ids=line_ids, stock_restored=restored)
    except HTTPException:
        raise
    except Exception as exc:
        raise http_error(exc, "delete order") from exc


@router.delete("/lines/{line_id}", response_model=DeleteResponse)
def delete_line(line_id: str = Path(...)) -> DeleteResponse:
    try:
        restored = delete_order_line(line_id)
        return DeleteResponse(deleted_line_ids=[line_id], stock_restored=restored)
    except HTTPException:
        raise
    except Exception as exc:
        raise http_error(exc, "delete order line") from exc


@router.post("/slips", response_class=PlainTextResponse)
def print_slips(payload: SlipRequest) -> PlainTextResponse:
    """Delivery slips for the selected orders, separated by form feeds."""
    try:
        groups = [
            load_logical_order(_group_key(item.customer_id, item.date, item.sub_area))
            for item in payload.groups
        ]
        logging.info(f"Rendering {len(groups)} delivery slip(s)")
        return PlainTextResponse(render_slips(groups), media_type="text/plain; charset=utf-8")
    except HTTPException:
        raise
    except Exception as exc:
        raise http_error(exc, "print slips") from exc
