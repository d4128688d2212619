"""Distribution of one aggregate payment across order lines."""

from __future__ import annotations

from typing import Sequence


def allocate_payment(line_totals: Sequence[float], amount_paid: float) -> list[float]:
    """Fill each line's paid amount from ``amount_paid`` in the given order.

    First line first: a line receives ``min(total, remaining)`` and the remainder
    moves on to the next line. Any overpayment beyond the sum of totals is not
    assigned to a line.
    """
    remaining = max(0.0, float(amount_paid))
    allocations: list[float] = []
    for total in line_totals:
        paid = min(float(total), remaining)
        remaining = max(0.0, remaining - paid)
        allocations.append(paid)
    return allocations
