"""Pydantic request/response models for order endpoints."""

from __future__ import annotations

import datetime as dt
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..models.domain import LogicalOrder, OrderLine

OrderStatus = Literal["pending", "delivered", "cancelled"]


class ProductLineInput(BaseModel):
    model_config = ConfigDict(frozen=True)

    product_type: str
    quantity: float = Field(0, description="Quantity in Guni (bags).")
    rate: Optional[float] = Field(None, description="Rate per unit. Resolved from the area or global rate when omitted.")


class OrderCreateRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    customer_name: str
    phone: str
    address: Optional[str] = None
    area_id: Optional[str] = None
    sub_area: Optional[str] = None
    driver_id: Optional[str] = Field(None, description="Assigned driver; empty for self pickup.")
    delivery_date: Optional[dt.date] = None
    amount_paid: float = 0
    lines: list[ProductLineInput] = Field(default_factory=list)


class OrderEditRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    customer_name: str
    phone: str
    address: Optional[str] = None
    area_id: Optional[str] = None
    sub_area: Optional[str] = Field(None, description="New sub-area; the current one is kept when omitted.")
    driver_id: Optional[str] = None
    status: Optional[OrderStatus] = None
    delivery_date: Optional[dt.date] = None
    amount_paid: float = 0
    lines: list[ProductLineInput] = Field(default_factory=list)


class StatusUpdateRequest(BaseModel):
    status: OrderStatus


class OrderLineResult(BaseModel):
    id: str
    product_type: str
    quantity: float
    rate: float
    total_amount: float
    amount_paid: float


class OrderCreateResponse(BaseModel):
    customer_id: str
    customer_created: bool
    lines: list[OrderLineResult]
    total_amount: float
    amount_paid: float
    pending: float


class OrderEditResponse(BaseModel):
    key: str
    customer_id: str
    date: Optional[dt.date] = None
    sub_area: str = ""
    updated_line_ids: list[str]
    inserted_line_ids: list[str]
    deleted_line_ids: list[str]
    stock_changes: dict[str, float]
    total_amount: float
    amount_paid: float
    pending: float


class OrderLineModel(BaseModel):
    id: str
    order_number: Optional[int] = None
    product_type: str
    quantity: float
    rate: float
    total_amount: float
    amount_paid: float
    pending: float
    status: str

    @classmethod
    def from_line(cls, line: OrderLine) -> "OrderLineModel":
        return cls(
            id=line.id,
            order_number=line.order_number,
            product_type=line.product_type,
            quantity=line.quantity_kg,
            rate=line.rate_per_kg,
            total_amount=line.total_amount,
            amount_paid=line.amount_paid,
            pending=line.pending_amount,
            status=line.status,
        )


class ProductBreakdownModel(BaseModel):
    quantity: float
    amount: float


class LogicalOrderModel(BaseModel):
    key: str
    customer_id: str
    date: Optional[dt.date] = None
    sub_area: str
    order_number: Optional[int] = None
    customer_name: str
    customer_phone: Optional[str] = None
    customer_address: Optional[str] = None
    area_id: Optional[str] = None
    area_name: Optional[str] = None
    status: str
    driver_id: Optional[str] = None
    driver_name: Optional[str] = None
    driver_phone: Optional[str] = None
    total_amount: float
    total_paid: float
    total_quantity: float
    pending: float
    is_paid: bool
    products: dict[str, ProductBreakdownModel]
    line_ids: list[str]
    lines: list[OrderLineModel]

    @classmethod
    def from_group(cls, group: LogicalOrder) -> "LogicalOrderModel":
        return cls(
            key=group.key.as_string(),
            customer_id=group.customer_id,
            date=group.date,
            sub_area=group.sub_area,
            order_number=group.order_number,
            customer_name=group.customer_name,
            customer_phone=group.customer_phone,
            customer_address=group.customer_address,
            area_id=group.area_id,
            area_name=group.area_name,
            status=group.status,
            driver_id=group.driver_id,
            driver_name=group.driver_name,
            driver_phone=group.driver_phone,
            total_amount=group.total_amount,
            total_paid=group.total_paid,
            total_quantity=group.total_quantity,
            pending=group.pending,
            is_paid=group.is_paid,
            products={
                slot: ProductBreakdownModel(quantity=item.quantity, amount=item.amount)
                for slot, item in group.products.items()
            },
            line_ids=group.line_ids,
            lines=[OrderLineModel.from_line(line) for line in group.lines],
        )


class LogicalOrderListResponse(BaseModel):
    year: int
    total: int
    orders: list[LogicalOrderModel]
    history: list[LogicalOrderModel]


class GroupKeyModel(BaseModel):
    customer_id: str
    date: dt.date
    sub_area: str = ""


class SlipRequest(BaseModel):
    groups: list[GroupKeyModel] = Field(..., min_length=1)


class DeleteResponse(BaseModel):
    deleted_line_ids: list[str]
    stock_restored: dict[str, float]
