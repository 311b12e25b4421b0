"""POST /v1/interest - interest calculator endpoint"""

import time

from fastapi import APIRouter, Depends, Request

from nepali_ledger.api.dependencies import get_calculation_options, get_current_date, get_request_id
from nepali_ledger.api.errors import to_http_error
from nepali_ledger.api.v1.schemas import InterestRequest, InterestResponse
from nepali_ledger.config import settings
from nepali_ledger.domain.conversion import parse_bs_date
from nepali_ledger.domain.exceptions import DomainException
from nepali_ledger.domain.interest import calculate_interest
from nepali_ledger.domain.models import BSDate, CurrentDate, InterestCalculationResult
from nepali_ledger.infrastructure.observability.logging import log_calculation
from nepali_ledger.infrastructure.observability.metrics import record_calculation

router = APIRouter()


def money(value: float) -> float:
    return round(value, settings.money_decimal_places)


def interest_response(result: InterestCalculationResult, start: BSDate, end: BSDate) -> InterestResponse:
    """Render a calculation result with amounts rounded for display"""
    return InterestResponse(
        principal=money(result.principal),
        monthly_rate_percent=result.monthly_rate_percent,
        start_date=str(start),
        end_date=str(end),
        elapsed_years=result.elapsed_years,
        elapsed_months=result.elapsed_months,
        elapsed_days=result.elapsed_days,
        compounded_amount=money(result.compounded_amount),
        months_interest=money(result.months_interest),
        days_interest=money(result.days_interest),
        total_interest=money(result.total_interest),
        final_amount=money(result.final_amount),
    )


@router.post("/interest", response_model=InterestResponse)
def create_interest_calculation(
    request_body: InterestRequest,
    request: Request,
    current: CurrentDate = Depends(get_current_date),
    options: dict = Depends(get_calculation_options),
):
    """
    Calculate interest between two BS dates.

    Flow:
    1. Parse start (and end, defaulting to today) as BS dates
    2. Run the tiered interest engine
    3. Record metrics and logs
    4. Return the breakdown rounded for display
    """
    start_time = time.time()
    request_id = get_request_id(request)

    if request_body.interest_base:
        options = {**options, "interest_base": request_body.interest_base}

    try:
        start = parse_bs_date(request_body.start_date)
        end = parse_bs_date(request_body.end_date) if request_body.end_date else current.bs_date
        result = calculate_interest(
            request_body.principal,
            request_body.monthly_rate_percent,
            start,
            end,
            **options,
        )
    except DomainException as e:
        raise to_http_error("interest", e, request_id)

    duration_ms = (time.time() - start_time) * 1000
    record_calculation("interest", result.principal)
    log_calculation(
        request_id,
        "interest",
        result.principal,
        result.final_amount,
        duration_ms,
        start_date=str(start),
        end_date=str(end),
    )

    return interest_response(result, start, end)
