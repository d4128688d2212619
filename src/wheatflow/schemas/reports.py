"""Report, dashboard and backup manifest API schemas."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .catalog import StockItemModel
from .orders import LogicalOrderModel, OrderLineModel


class ReportExportModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    run_id: str = Field(..., alias="runId")
    run_type: str = Field(..., alias="runType")
    file_name: str = Field(..., alias="fileName")
    file_type: str = Field(..., alias="fileType")
    size_bytes: int = Field(..., alias="sizeBytes")
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    description: Optional[str] = None
    download_path: str = Field(..., alias="downloadPath")


class ReportRunModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    run_type: str = Field(..., alias="runType")
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    counts: dict[str, int] = Field(default_factory=dict)
    notes: Optional[str] = None
    status: str


class BusinessReportResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_income: float = Field(..., alias="totalIncome")
    total_quantity: float = Field(..., alias="totalQuantity")
    order_count: int = Field(..., alias="orderCount")
    total_expense: float = Field(..., alias="totalExpense")
    net_profit: float = Field(..., alias="netProfit")
    orders: List[LogicalOrderModel]


class DashboardResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    today_orders: int = Field(..., alias="todayOrders")
    pending_payments: float = Field(..., alias="pendingPayments")
    total_customers: int = Field(..., alias="totalCustomers")
    total_stock: float = Field(..., alias="totalStock")
    stock_levels: List[StockItemModel] = Field(..., alias="stockLevels")
    recent_orders: List[OrderLineModel] = Field(..., alias="recentOrders")


class RolloverRequest(BaseModel):
    confirm: bool = False


class RolloverResponse(BaseModel):
    backup_file: str
    deleted_orders: int
    deleted_expenses: int
    carried_customers: int
