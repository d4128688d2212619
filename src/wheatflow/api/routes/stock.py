"""Stock endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Path

from ...schemas.catalog import StockItemModel, StockQuantityRequest, StockThresholdRequest
from ...services.stock import service as stock
from ..errors import http_error

router = APIRouter(prefix="/stock", tags=["stock"])


@router.get("", response_model=list[StockItemModel])
def get_stock() -> list[StockItemModel]:
    try:
        return [StockItemModel.from_item(item) for item in stock.list_stock_levels()]
    except Exception as exc:
        raise http_error(exc, "list stock") from exc


@router.post("/{product_type}/incoming", response_model=StockItemModel)
def post_incoming(payload: StockQuantityRequest, product_type: str = Path(...)) -> StockItemModel:
    """Add received stock to the counter."""
    try:
        return StockItemModel.from_item(stock.add_incoming_stock(product_type, payload.quantity))
    except Exception as exc:
        raise http_error(exc, "add stock") from exc


@router.put("/{product_type}/quantity", response_model=StockItemModel)
def put_quantity(payload: StockQuantityRequest, product_type: str = Path(...)) -> StockItemModel:
    try:
        return StockItemModel.from_item(stock.set_stock_quantity(product_type, payload.quantity))
    except Exception as exc:
        raise http_error(exc, "correct stock") from exc


@router.put("/{product_type}/threshold", response_model=StockItemModel)
def put_threshold(payload: StockThresholdRequest, product_type: str = Path(...)) -> StockItemModel:
    try:
        return StockItemModel.from_item(stock.set_low_stock_threshold(product_type, payload.threshold))
    except Exception as exc:
        raise http_error(exc, "update low stock threshold") from exc
