"""Delivery drivers."""

from __future__ import annotations

import logging
from typing import Optional

from ...models.domain import Driver
from ...persistence import drivers as driver_store
from ..validation import require_text, validate_phone


def list_drivers() -> list[Driver]:
    return driver_store.list_drivers()


def add_driver(
    name: str,
    phone: str,
    vehicle_number: Optional[str] = None,
    area_id: Optional[str] = None,
    sub_area: Optional[str] = None,
    address: Optional[str] = None,
) -> Driver:
    driver = driver_store.insert_driver(
        name=require_text(name, "Driver name"),
        phone=validate_phone(phone),
        vehicle_number=(vehicle_number or "").strip() or None,
        area_id=area_id or None,
        sub_area=(sub_area or "").strip() or None,
        address=(address or "").strip() or None,
    )
    logging.info(f"Added driver {driver.name} ({driver.id})")
    return driver


def remove_driver(driver_id: str) -> None:
    driver_store.delete_driver(driver_id)
    logging.info(f"Deleted driver {driver_id}")
