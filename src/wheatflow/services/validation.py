"""Input checks shared by the order, customer and driver services."""

from __future__ import annotations

import re
from typing import Optional

from ..errors import OrderValidationError

_PHONE_PATTERN = re.compile(r"^[0-9]{10}$")


def require_text(value: Optional[str], label: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise OrderValidationError(f"{label} is required.")
    return cleaned


def validate_phone(phone: Optional[str]) -> str:
    cleaned = (phone or "").strip()
    if not _PHONE_PATTERN.match(cleaned):
        raise OrderValidationError("Phone number must be exactly 10 digits.")
    return cleaned


def require_non_negative(value: Optional[float], label: str) -> float:
    number = float(value or 0)
    if number < 0:
        raise OrderValidationError(f"{label} cannot be negative.")
    return number
