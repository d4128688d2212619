"""Rate lookup for a product in a delivery area."""

from __future__ import annotations

import logging
from typing import Optional

from ...config import settings
from ...persistence.catalog import get_area_rate, get_product_rate


def pick_rate(product_type: str, area_rate: Optional[float], global_rate: Optional[float]) -> float:
    """Choose between an area override and the global rate.

    Manual products always resolve to 0 so the caller enters the rate. An area
    override wins only when it is positive.
    """
    if product_type in settings.manual_rate_products:
        return 0.0
    if area_rate is not None and area_rate > 0:
        return float(area_rate)
    if global_rate is not None:
        return float(global_rate)
    return 0.0


def resolve_rate(product_type: str, area_id: Optional[str] = None) -> float:
    if product_type in settings.manual_rate_products:
        return 0.0
    area_rate = get_area_rate(area_id, product_type) if area_id else None
    global_rate = None
    if area_rate is None or area_rate <= 0:
        global_rate = get_product_rate(product_type)
    rate = pick_rate(product_type, area_rate, global_rate)
    logging.debug(f"Resolved rate {rate} for {product_type} in area {area_id}")
    return rate
