"""Map domain exceptions onto HTTP errors"""

import logging

from fastapi import HTTPException

from nepali_ledger.domain.exceptions import (
    DomainException,
    InvalidDateError,
    InvalidInputError,
    OutOfRangeError,
)
from nepali_ledger.infrastructure.observability.metrics import record_failure

logger = logging.getLogger(__name__)


def to_http_error(kind: str, error: DomainException, request_id: str) -> HTTPException:
    """
    Build the HTTPException for a rejected calculation.

    All domain failures are deterministic input problems, so they map to 422.
    """
    if isinstance(error, OutOfRangeError):
        record_failure(kind, "out_of_range")
        logger.warning(f"Date not supported: {error}", extra={"request_id": request_id})
        return HTTPException(status_code=422, detail=f"date not supported: {error}")

    if isinstance(error, InvalidDateError):
        record_failure(kind, "invalid_date")
        logger.warning(f"Invalid date: {error}", extra={"request_id": request_id})
        return HTTPException(status_code=422, detail=f"invalid date: {error}")

    if isinstance(error, InvalidInputError):
        record_failure(kind, "invalid_input")
        logger.warning(f"Invalid input: {error}", extra={"request_id": request_id})
        return HTTPException(
            status_code=422,
            detail={"message": "invalid input", "errors": error.field_errors},
        )

    record_failure(kind, "domain")
    logger.error(f"Unhandled domain error: {error}", extra={"request_id": request_id})
    return HTTPException(status_code=422, detail=str(error))
