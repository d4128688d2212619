"""Area, product and rate endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Path, Query, status

from ...schemas.catalog import (
    AreaCreateRequest,
    AreaModel,
    AreaRateModel,
    AreaRatesRequest,
    ProductCreateRequest,
    ProductRateModel,
    RateUpdateRequest,
    ResolvedRateResponse,
    StockItemModel,
)
from ...services.catalog import service as catalog
from ...services.rates import resolve_rate
from ..errors import http_error

router = APIRouter(tags=["catalog"])


@router.get("/areas", response_model=list[AreaModel])
def get_areas() -> list[AreaModel]:
    try:
        return [AreaModel(id=area.id, area_name=area.area_name) for area in catalog.list_areas()]
    except Exception as exc:
        raise http_error(exc, "list areas") from exc


@router.post("/areas", response_model=AreaModel, status_code=status.HTTP_201_CREATED)
def post_area(payload: AreaCreateRequest) -> AreaModel:
    try:
        area = catalog.add_area(payload.area_name)
        return AreaModel(id=area.id, area_name=area.area_name)
    except Exception as exc:
        raise http_error(exc, "add area") from exc


@router.delete("/areas/{area_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_area(area_id: str = Path(...)) -> None:
    try:
        catalog.delete_area(area_id)
    except Exception as exc:
        raise http_error(exc, "delete area") from exc


@router.get("/areas/{area_id}/rates", response_model=list[AreaRateModel])
def get_area_rates(area_id: str = Path(...)) -> list[AreaRateModel]:
    try:
        return [
            AreaRateModel(area_id=rate.area_id, product_type=rate.product_type, rate=rate.rate_per_kg)
            for rate in catalog.list_area_rates(area_id)
        ]
    except Exception as exc:
        raise http_error(exc, "list area rates") from exc


@router.put("/areas/{area_id}/rates", response_model=list[AreaRateModel])
def put_area_rates(payload: AreaRatesRequest, area_id: str = Path(...)) -> list[AreaRateModel]:
    try:
        saved = catalog.save_area_rates(area_id, payload.rates)
        return [AreaRateModel(area_id=rate.area_id, product_type=rate.product_type, rate=rate.rate_per_kg) for rate in saved]
    except Exception as exc:
        raise http_error(exc, "save area rates") from exc


@router.get("/products", response_model=list[StockItemModel])
def get_products() -> list[StockItemModel]:
    try:
        return [StockItemModel.from_item(item) for item in catalog.list_products()]
    except Exception as exc:
        raise http_error(exc, "list products") from exc


@router.post("/products", response_model=StockItemModel, status_code=status.HTTP_201_CREATED)
def post_product(payload: ProductCreateRequest) -> StockItemModel:
    try:
        return StockItemModel.from_item(catalog.add_product(payload.product_type, payload.low_stock_threshold))
    except Exception as exc:
        raise http_error(exc, "add product") from exc


@router.delete("/products/{product_type}", status_code=status.HTTP_204_NO_CONTENT)
def remove_product(product_type: str = Path(...)) -> None:
    try:
        catalog.delete_product(product_type)
    except Exception as exc:
        raise http_error(exc, "delete product") from exc


@router.get("/rates", response_model=list[ProductRateModel])
def get_rates() -> list[ProductRateModel]:
    try:
        return [ProductRateModel(product_type=rate.product_type, rate=rate.rate_per_kg) for rate in catalog.list_product_rates()]
    except Exception as exc:
        raise http_error(exc, "list rates") from exc


@router.get("/rates/resolve", response_model=ResolvedRateResponse)
def get_resolved_rate(
    product_type: str = Query(..., description="Product to price"),
    area_id: str | None = Query(default=None, description="Customer's area"),
) -> ResolvedRateResponse:
    try:
        return ResolvedRateResponse(product_type=product_type, area_id=area_id, rate=resolve_rate(product_type, area_id))
    except HTTPException:
        raise
    except Exception as exc:
        raise http_error(exc, "resolve rate") from exc


@router.put("/rates/{product_type}", response_model=ProductRateModel)
def put_rate(payload: RateUpdateRequest, product_type: str = Path(...)) -> ProductRateModel:
    try:
        rate = catalog.update_product_rate(product_type, payload.rate)
        return ProductRateModel(product_type=rate.product_type, rate=rate.rate_per_kg)
    except Exception as exc:
        raise http_error(exc, "update rate") from exc
