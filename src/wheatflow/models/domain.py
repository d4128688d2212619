"""Domain models for customers, catalogue, stock and order lines."""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import NamedTuple, Optional


@dataclass(slots=True)
class Area:
    id: str
    area_name: str


@dataclass(slots=True)
class Customer:
    """A customer identified by phone number, attached to one delivery area."""

    id: str
    name: str
    phone: str
    address: Optional[str]
    area_id: Optional[str]
    area_name: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(slots=True)
class Driver:
    id: str
    name: str
    phone: str
    vehicle_number: Optional[str] = None
    area_id: Optional[str] = None
    sub_area: Optional[str] = None
    address: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(slots=True)
class ProductRate:
    product_type: str
    rate_per_kg: float
    id: Optional[str] = None


@dataclass(slots=True)
class AreaRate:
    area_id: str
    product_type: str
    rate_per_kg: float
    id: Optional[str] = None


@dataclass(slots=True)
class StockItem:
    id: str
    product_type: str
    quantity_kg: float
    low_stock_threshold: float
    last_updated: Optional[datetime] = None

    @property
    def is_low(self) -> bool:
        return self.quantity_kg <= self.low_stock_threshold


@dataclass(slots=True)
class Expense:
    id: str
    reason: str
    amount: float
    created_at: Optional[datetime] = None


@dataclass(slots=True)
class OrderLine:
    """One persisted row of the orders table: a single product of a customer visit."""

    id: str
    customer_id: str
    product_type: str
    quantity_kg: float
    rate_per_kg: float
    total_amount: float
    amount_paid: float
    order_date: Optional[date]
    delivery_date: Optional[date] = None
    sub_area: Optional[str] = None
    driver_id: Optional[str] = None
    status: str = "pending"
    order_number: Optional[int] = None
    created_at: Optional[datetime] = None
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    customer_address: Optional[str] = None
    customer_area_id: Optional[str] = None
    area_name: Optional[str] = None
    driver_name: Optional[str] = None
    driver_phone: Optional[str] = None

    @property
    def effective_date(self) -> Optional[date]:
        if self.delivery_date:
            return self.delivery_date
        if self.order_date:
            return self.order_date
        return self.created_at.date() if self.created_at else None

    @property
    def pending_amount(self) -> float:
        return self.total_amount - self.amount_paid


class GroupKey(NamedTuple):
    """Identity of a logical order: customer, delivery-or-order date and sub-area."""

    customer_id: str
    date: Optional[date]
    sub_area: str = ""

    def as_string(self) -> str:
        day = self.date.isoformat() if self.date else ""
        return f"{self.customer_id}_{day}_{self.sub_area}"


@dataclass(slots=True)
class ProductBreakdown:
    quantity: float = 0.0
    amount: float = 0.0


@dataclass(slots=True)
class LogicalOrder:
    """Order lines sharing customer, date and sub-area, presented as one order."""

    key: GroupKey
    customer_id: str
    date: Optional[date]
    sub_area: str
    customer_name: str
    customer_phone: Optional[str]
    customer_address: Optional[str]
    area_id: Optional[str]
    area_name: Optional[str]
    status: str
    order_number: Optional[int] = None
    driver_id: Optional[str] = None
    driver_name: Optional[str] = None
    driver_phone: Optional[str] = None
    total_amount: float = 0.0
    total_paid: float = 0.0
    total_quantity: float = 0.0
    products: dict[str, ProductBreakdown] = field(default_factory=dict)
    lines: list[OrderLine] = field(default_factory=list)

    @property
    def line_ids(self) -> list[str]:
        return [line.id for line in self.lines]

    @property
    def pending(self) -> float:
        return self.total_amount - self.total_paid

    @property
    def is_paid(self) -> bool:
        return self.pending <= 0
