"""Write journal for multi-step store operations.

The store client has no transaction spanning several requests, so an operation
records each write it completes. When a later call fails, the journal turns the
failure into ``StoreError`` (nothing written yet) or ``PartialWriteError``
(some writes persisted) and logs the two cases differently.
"""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Optional

from ..errors import (
    BusinessRuleError,
    NotFoundError,
    OrderValidationError,
    PartialWriteError,
    StoreError,
    StoreUnavailableError,
)

_PASSTHROUGH = (OrderValidationError, BusinessRuleError, NotFoundError, StoreUnavailableError, StoreError)


class WriteJournal:
    def __init__(self, operation: str) -> None:
        self.operation = operation
        self.steps: list[str] = []

    def record(self, step: str) -> None:
        self.steps.append(step)

    def __enter__(self) -> "WriteJournal":
        logging.info(f"{self.operation}: started")
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> bool:
        if exc is None:
            logging.info(f"{self.operation}: completed {len(self.steps)} write(s)")
            return False
        if isinstance(exc, _PASSTHROUGH) or not isinstance(exc, Exception):
            return False
        if self.steps:
            logging.error(
                f"{self.operation}: PARTIAL failure after {len(self.steps)} write(s): {exc}. "
                f"Completed writes were kept: {self.steps}"
            )
            raise PartialWriteError(self.operation, str(exc), self.steps) from exc
        logging.warning(f"{self.operation}: failed before any write: {exc}")
        raise StoreError(self.operation, str(exc)) from exc
