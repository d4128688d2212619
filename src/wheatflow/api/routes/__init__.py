"""Route group exports."""

from . import catalog, customers, health, maintenance, orders, reports, staff, stock

__all__ = ["catalog", "customers", "health", "maintenance", "orders", "reports", "staff", "stock"]
