"""Areas, products, rates and stock schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from ..models.domain import StockItem


class AreaModel(BaseModel):
    id: str
    area_name: str


class AreaCreateRequest(BaseModel):
    area_name: str


class StockItemModel(BaseModel):
    id: str
    product_type: str
    quantity: float
    low_stock_threshold: float
    is_low: bool
    last_updated: Optional[datetime] = None

    @classmethod
    def from_item(cls, item: StockItem) -> "StockItemModel":
        return cls(
            id=item.id,
            product_type=item.product_type,
            quantity=item.quantity_kg,
            low_stock_threshold=item.low_stock_threshold,
            is_low=item.is_low,
            last_updated=item.last_updated,
        )


class ProductCreateRequest(BaseModel):
    product_type: str
    low_stock_threshold: Optional[float] = Field(None, description="Defaults to the configured threshold.")


class StockQuantityRequest(BaseModel):
    quantity: float


class StockThresholdRequest(BaseModel):
    threshold: float


class ProductRateModel(BaseModel):
    product_type: str
    rate: float


class RateUpdateRequest(BaseModel):
    rate: float


class AreaRatesRequest(BaseModel):
    rates: dict[str, float] = Field(..., description="Rate per product for this area.")


class AreaRateModel(BaseModel):
    area_id: str
    product_type: str
    rate: float


class ResolvedRateResponse(BaseModel):
    product_type: str
    area_id: Optional[str] = None
    rate: float
