"""Error types shared by services and routes."""

from __future__ import annotations

from typing import Sequence


class OrderValidationError(ValueError):
    """Input rejected before any write was attempted."""


class BusinessRuleError(ValueError):
    """A destructive action refused because other records still depend on the target."""


class NotFoundError(LookupError):
    pass


class StoreUnavailableError(ConnectionError):
    pass


class StoreError(RuntimeError):
    """A store call failed before the operation applied any write."""

    def __init__(self, operation: str, message: str) -> None:
        super().__init__(f"{operation} failed: {message}")
        self.operation = operation


class PartialWriteError(StoreError):
    """A store call failed after some writes of the same operation were applied.

    Completed writes are not rolled back; ``completed_steps`` lists them in order.
    """

    def __init__(self, operation: str, message: str, completed_steps: Sequence[str]) -> None:
        super().__init__(operation, message)
        self.completed_steps = list(completed_steps)

    def __str__(self) -> str:
        return f"{self.args[0]} (after {len(self.completed_steps)} completed write(s))"
