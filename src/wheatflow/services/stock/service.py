"""Stock counters per product."""

from __future__ import annotations

import logging
from typing import Optional

from ...config import settings
from ...errors import NotFoundError, OrderValidationError
from ...models.domain import StockItem
from ...persistence.stock import (
    get_stock_item,
    increment_stock,
    list_stock,
    write_low_stock_threshold,
    write_stock_quantity,
)
from ..orders.slots import tracks_stock
from ..validation import require_non_negative


def adjust_stock(product_type: str, delta: float) -> Optional[float]:
    """Move the stock counter of ``product_type`` by ``delta``.

    Returns the new quantity, or None when nothing was written: manual products,
    a zero delta, or a product without a stock row. In ``read_write`` mode the
    row is read and then written back, with no floor at zero.
    """
    if delta == 0 or not tracks_stock(product_type):
        return None

    if settings.stock_adjust_mode == "atomic":
        new_quantity = increment_stock(product_type, delta)
    else:
        item = get_stock_item(product_type)
        if item is None:
            new_quantity = None
        else:
            new_quantity = item.quantity_kg + delta
            write_stock_quantity(item.id, new_quantity)

    if new_quantity is None:
        logging.info(f"No stock row for {product_type}; adjustment of {delta} skipped")
    else:
        logging.info(f"Stock {product_type} adjusted by {delta} to {new_quantity}")
    return new_quantity


def list_stock_levels() -> list[StockItem]:
    return list_stock()


def total_stock() -> float:
    return sum(item.quantity_kg for item in list_stock())


def _require_item(product_type: str) -> StockItem:
    item = get_stock_item(product_type)
    if item is None:
        raise NotFoundError(f"No stock row for product '{product_type}'.")
    return item


def add_incoming_stock(product_type: str, quantity: float) -> StockItem:
    if quantity is None or quantity <= 0:
        raise OrderValidationError("Incoming quantity must be greater than zero.")
    item = _require_item(product_type)
    if settings.stock_adjust_mode == "atomic":
        increment_stock(product_type, quantity)
    else:
        write_stock_quantity(item.id, item.quantity_kg + quantity)
    logging.info(f"Added {quantity} to stock of {product_type}")
    return _require_item(product_type)


def set_stock_quantity(product_type: str, quantity: float) -> StockItem:
    """Manual correction: overwrite the counter."""
    quantity = require_non_negative(quantity, "Stock quantity")
    item = _require_item(product_type)
    write_stock_quantity(item.id, quantity)
    logging.info(f"Stock of {product_type} set to {quantity}")
    return _require_item(product_type)


def set_low_stock_threshold(product_type: str, threshold: float) -> StockItem:
    threshold = require_non_negative(threshold, "Low stock threshold")
    item = _require_item(product_type)
    write_low_stock_threshold(item.id, threshold)
    return _require_item(product_type)
