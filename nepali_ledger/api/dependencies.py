"""Dependency injection for FastAPI endpoints"""

from typing import Any, Dict

from fastapi import Request

from nepali_ledger.config import settings
from nepali_ledger.domain.models import CurrentDate
from nepali_ledger.domain.today import resolve_current_date
from nepali_ledger.infrastructure.observability.metrics import degraded_today_counter


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_current_date() -> CurrentDate:
    """Provide today's BS date from the local clock"""
    current = resolve_current_date(tz_name=settings.local_timezone or None)
    if current.degraded:
        degraded_today_counter.inc()
    return current


def get_calculation_options() -> Dict[str, Any]:
    """Provide configured interest policy"""
    return {
        "interest_base": settings.interest_base,
        "days_per_month": settings.days_per_month,
    }
