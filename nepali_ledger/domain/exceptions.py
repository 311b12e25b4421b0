"""Domain-specific exceptions"""

from typing import Dict, Optional


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class OutOfRangeError(DomainException):
    """Requested BS year or AD date falls outside the almanac table"""

    pass


class InvalidDateError(DomainException):
    """Day exceeds the month's published length, or the date is malformed"""

    pass


class InvalidInputError(DomainException):
    """Calculation input rejected before any interest math runs"""

    def __init__(self, message: str, field_errors: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.field_errors: Dict[str, str] = dict(field_errors or {})
