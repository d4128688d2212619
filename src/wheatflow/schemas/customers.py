"""Customer-facing API schemas."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from ..models.domain import Customer


class CustomerModel(BaseModel):
    id: str
    name: str
    phone: str
    address: Optional[str] = None
    area_id: Optional[str] = None
    area_name: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_customer(cls, customer: Customer) -> "CustomerModel":
        return cls(
            id=customer.id,
            name=customer.name,
            phone=customer.phone,
            address=customer.address,
            area_id=customer.area_id,
            area_name=customer.area_name,
            created_at=customer.created_at,
        )


class CustomerSummaryModel(BaseModel):
    customer: CustomerModel
    orderCount: int
    totalKg: float
    totalAmount: float
    deliveredCount: int
    hasPending: bool


class CustomerListResponse(BaseModel):
    items: List[CustomerSummaryModel]
    total: int


class TopAreaModel(BaseModel):
    name: str
    customers: int


class CustomerOverviewResponse(BaseModel):
    totalCustomers: int
    withPending: int
    withoutOrders: int
    areasDetected: int
    topAreas: list[TopAreaModel]
