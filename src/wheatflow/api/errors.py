"""Translation of service errors into HTTP responses."""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from ..errors import (
    BusinessRuleError,
    NotFoundError,
    OrderValidationError,
    PartialWriteError,
    StoreError,
)


def http_error(exc: Exception, action: str) -> HTTPException:
    """Map an exception raised while performing ``action`` to an HTTPException."""
    if isinstance(exc, HTTPException):
        return exc
    if isinstance(exc, BusinessRuleError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    if isinstance(exc, (OrderValidationError, ValueError)):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, ConnectionError):
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Database connection error: {exc}",
        )
    if isinstance(exc, PartialWriteError):
        return HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={
                "message": f"Failed to {action}; some changes were saved.",
                "operation": exc.operation,
                "completed_steps": list(exc.completed_steps),
                "error": str(exc),
            },
        )
    if isinstance(exc, StoreError):
        return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=f"Failed to {action}: {exc}")
    logging.exception(f"Error while trying to {action}: {exc}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed to {action}: {str(exc)}",
    )
