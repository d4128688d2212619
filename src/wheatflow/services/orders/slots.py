"""Fixed product slots and their ordering."""

from __future__ import annotations

from typing import Callable, Iterable, TypeVar

from ...config import settings

T = TypeVar("T")


def is_sentinel(product_type: str) -> bool:
    return product_type == settings.sentinel_product


def tracks_stock(product_type: str) -> bool:
    """Whether lines of this product move a stock counter."""
    return bool(product_type) and product_type not in settings.manual_rate_products


def slot_for(product_type: str) -> str:
    """Known slot for a product; anything outside the fixed set folds into the Other slot."""
    if product_type in settings.product_slots:
        return product_type
    return settings.other_product


def slot_index(product_type: str) -> int:
    if is_sentinel(product_type):
        return len(settings.product_slots)
    return settings.product_slots.index(slot_for(product_type))


def order_by_slot(items: Iterable[T], product_of: Callable[[T], str]) -> list[T]:
    """Sort items into slot declaration order. Items sharing a slot keep their input order."""
    return sorted(items, key=lambda item: slot_index(product_of(item)))
