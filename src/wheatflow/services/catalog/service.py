"""Areas, product varieties and their rates."""

from __future__ import annotations

import logging
from typing import Mapping, Optional

from ...config import settings
from ...errors import BusinessRuleError, NotFoundError, OrderValidationError
from ...models.domain import Area, AreaRate, ProductRate, StockItem
from ...persistence import catalog as catalog_store
from ...persistence.customers import count_customers
from ...persistence.orders import count_order_lines
from ...persistence.stock import delete_stock_item, get_stock_item, insert_stock_item, list_stock
from ..journal import WriteJournal
from ..validation import require_non_negative, require_text


def list_areas() -> list[Area]:
    return catalog_store.list_areas()


def add_area(area_name: str) -> Area:
    name = require_text(area_name, "Area name")
    existing = {area.area_name.strip().lower() for area in catalog_store.list_areas()}
    if name.lower() in existing:
        raise BusinessRuleError(f"Area '{name}' already exists.")
    area = catalog_store.insert_area(name)
    logging.info(f"Added area {area.area_name} ({area.id})")
    return area


def delete_area(area_id: str) -> None:
    """Delete an area and its rate overrides. Refused while customers belong to it."""
    customers = count_customers(area_id=area_id)
    if customers > 0:
        raise BusinessRuleError(f"Cannot delete area: {customers} customer(s) are assigned to it.")
    journal = WriteJournal(f"delete area {area_id}")
    with journal:
        catalog_store.delete_area_rates(area_id)
        journal.record(f"area_rates.delete {area_id}")
        catalog_store.delete_area(area_id)
        journal.record(f"areas.delete {area_id}")
    logging.info(f"Deleted area {area_id}")


def list_products() -> list[StockItem]:
    return list_stock()


def add_product(product_type: str, low_stock_threshold: Optional[float] = None) -> StockItem:
    """Register a variety: a stock row at zero and a global rate row at zero."""
    name = require_text(product_type, "Product name")
    if name == settings.sentinel_product:
        raise OrderValidationError(f"'{name}' is a reserved product name.")
    if get_stock_item(name) is not None:
        raise BusinessRuleError(f"Product '{name}' already exists.")
    threshold = settings.default_low_stock_threshold if low_stock_threshold is None else low_stock_threshold
    threshold = require_non_negative(threshold, "Low stock threshold")

    journal = WriteJournal(f"add product {name}")
    with journal:
        item = insert_stock_item(name, threshold)
        journal.record(f"stock.insert {name}")
        catalog_store.insert_product_rate(name, 0)
        journal.record(f"product_rates.insert {name}")
    return item


def delete_product(product_type: str) -> None:
    """Remove a variety. Refused while any order line references it."""
    if get_stock_item(product_type) is None:
        raise NotFoundError(f"Product '{product_type}' not found.")
    used_by = count_order_lines(product_type=product_type)
    if used_by > 0:
        raise BusinessRuleError(
            f"Cannot delete product: {used_by} order line(s) use '{product_type}'. Delete those orders first."
        )
    journal = WriteJournal(f"delete product {product_type}")
    with journal:
        delete_stock_item(product_type)
        journal.record(f"stock.delete {product_type}")
        catalog_store.delete_product_rate(product_type)
        journal.record(f"product_rates.delete {product_type}")


def list_product_rates() -> list[ProductRate]:
    return catalog_store.list_product_rates()


def update_product_rate(product_type: str, rate: float) -> ProductRate:
    rate = require_non_negative(rate, "Rate")
    if catalog_store.get_product_rate(product_type) is None:
        catalog_store.insert_product_rate(product_type, rate)
    else:
        catalog_store.update_product_rate(product_type, rate)
    logging.info(f"Global rate for {product_type} set to {rate}")
    return ProductRate(product_type=product_type, rate_per_kg=rate)


def list_area_rates(area_id: str) -> list[AreaRate]:
    return catalog_store.list_area_rates(area_id)


def save_area_rates(area_id: str, rates: Mapping[str, float]) -> list[AreaRate]:
    """Upsert one override per product for the area."""
    area_id = require_text(area_id, "Area")
    payload = [
        AreaRate(area_id=area_id, product_type=product_type, rate_per_kg=require_non_negative(rate, f"Rate for {product_type}"))
        for product_type, rate in rates.items()
        if product_type not in settings.manual_rate_products
    ]
    catalog_store.upsert_area_rates(payload)
    logging.info(f"Saved {len(payload)} rate override(s) for area {area_id}")
    return catalog_store.list_area_rates(area_id)
