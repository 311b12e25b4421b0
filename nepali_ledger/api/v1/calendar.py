"""GET /v1/calendar/* - AD <-> BS conversion endpoints"""

from datetime import date

from fastapi import APIRouter, Depends, Query, Request

from nepali_ledger.api.dependencies import get_current_date, get_request_id
from nepali_ledger.api.errors import to_http_error
from nepali_ledger.api.v1.schemas import BSDateResponse, ElapsedResponse, TodayResponse
from nepali_ledger.domain import almanac
from nepali_ledger.domain.conversion import (
    ad_to_bs,
    bs_to_ad,
    decompose_elapsed,
    difference_in_days,
    format_bs_date,
    parse_bs_date,
)
from nepali_ledger.domain.exceptions import DomainException
from nepali_ledger.domain.models import BSDate, CurrentDate
from nepali_ledger.infrastructure.observability.metrics import calculation_counter

router = APIRouter()


def _bs_date_payload(bs: BSDate, ad: date) -> dict:
    return {
        "bs_date": str(bs),
        "year": bs.year,
        "month": bs.month,
        "day": bs.day,
        "month_name": almanac.month_name(bs.month),
        "formatted": format_bs_date(bs, "full"),
        "ad_date": ad,
    }


@router.get("/calendar/today", response_model=TodayResponse)
def get_today(current: CurrentDate = Depends(get_current_date)):
    """
    Today's BS date from the local clock.

    Never fails: outside the supported calendar the nearest boundary date is
    returned with ``degraded=true``.
    """
    return TodayResponse(
        **_bs_date_payload(current.bs_date, current.ad_date),
        degraded=current.degraded,
    )


@router.get("/calendar/ad-to-bs", response_model=BSDateResponse)
def convert_ad_to_bs(
    request: Request,
    ad_date: date = Query(..., alias="date", description="AD date, YYYY-MM-DD"),
):
    """Convert an AD date to BS"""
    try:
        bs = ad_to_bs(ad_date)
    except DomainException as e:
        raise to_http_error("conversion", e, get_request_id(request))

    calculation_counter.labels(kind="conversion").inc()
    return BSDateResponse(**_bs_date_payload(bs, ad_date))


@router.get("/calendar/bs-to-ad", response_model=BSDateResponse)
def convert_bs_to_ad(
    request: Request,
    bs_date: str = Query(..., alias="date", description="BS date, YYYY-MM-DD"),
):
    """Convert a BS date to AD"""
    try:
        bs = parse_bs_date(bs_date)
        ad = bs_to_ad(bs)
    except DomainException as e:
        raise to_http_error("conversion", e, get_request_id(request))

    calculation_counter.labels(kind="conversion").inc()
    return BSDateResponse(**_bs_date_payload(bs, ad))


@router.get("/calendar/elapsed", response_model=ElapsedResponse)
def get_elapsed(
    request: Request,
    start: str = Query(..., description="BS start date, YYYY-MM-DD"),
    end: str = Query(..., description="BS end date, YYYY-MM-DD"),
):
    """Decompose the span between two BS dates into years, months and days"""
    try:
        start_bs = parse_bs_date(start)
        end_bs = parse_bs_date(end)
        elapsed = decompose_elapsed(start_bs, end_bs)
    except DomainException as e:
        raise to_http_error("conversion", e, get_request_id(request))

    return ElapsedResponse(
        start_date=str(start_bs),
        end_date=str(end_bs),
        years=elapsed.years,
        months=elapsed.months,
        days=elapsed.days,
        total_days=difference_in_days(start_bs, end_bs),
    )
