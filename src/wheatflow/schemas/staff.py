"""Driver and expense schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from ..models.domain import Driver, Expense


class DriverModel(BaseModel):
    id: str
    name: str
    phone: str
    vehicle_number: Optional[str] = None
    area_id: Optional[str] = None
    sub_area: Optional[str] = None
    address: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_driver(cls, driver: Driver) -> "DriverModel":
        return cls(
            id=driver.id,
            name=driver.name,
            phone=driver.phone,
            vehicle_number=driver.vehicle_number,
            area_id=driver.area_id,
            sub_area=driver.sub_area,
            address=driver.address,
            created_at=driver.created_at,
        )


class DriverCreateRequest(BaseModel):
    name: str
    phone: str
    vehicle_number: Optional[str] = None
    area_id: Optional[str] = None
    sub_area: Optional[str] = None
    address: Optional[str] = None


class ExpenseModel(BaseModel):
    id: str
    reason: str
    amount: float
    created_at: Optional[datetime] = None

    @classmethod
    def from_expense(cls, expense: Expense) -> "ExpenseModel":
        return cls(id=expense.id, reason=expense.reason, amount=expense.amount, created_at=expense.created_at)


class ExpenseCreateRequest(BaseModel):
    reason: str
    amount: float


class ExpenseSummaryResponse(BaseModel):
    total_income: float
    total_expense: float
    net_profit: float
