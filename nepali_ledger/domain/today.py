"""Resolve "today" as a BS date from the local system clock

This is the tolerant entry point used by render paths: it never fails for a
clock outside the almanac, it clamps to the nearest supported day and flags
the result as degraded. Explicit user-entered dates go through the strict
converter in ``conversion`` instead.
"""

import logging
from datetime import date, datetime
from typing import Callable, Optional, Tuple, Union
from zoneinfo import ZoneInfoNotFoundError

from nepali_ledger.domain import almanac
from nepali_ledger.domain.conversion import ad_to_bs
from nepali_ledger.domain.exceptions import OutOfRangeError
from nepali_ledger.domain.models import BSDate, CurrentDate
from nepali_ledger.utils.date_utils import local_now

logger = logging.getLogger(__name__)

Clock = Callable[[], Union[date, datetime]]


def first_supported_date() -> BSDate:
    return BSDate(almanac.MIN_YEAR, 1, 1)


def last_supported_date() -> BSDate:
    return BSDate(almanac.MAX_YEAR, 12, almanac.month_length(almanac.MAX_YEAR, 12))


def _read_clock(clock: Optional[Clock], tz_name: Optional[str]) -> Tuple[Union[date, datetime], bool]:
    """Call the clock; an unknown zone falls back to the system zone and reports degraded"""
    if clock is not None:
        return clock(), False
    try:
        return local_now(tz_name), False
    except (ZoneInfoNotFoundError, ValueError) as e:
        logger.warning(
            "Unknown local timezone, using system zone",
            extra={"tz_name": tz_name, "error": str(e)},
        )
        return local_now(), True


def resolve_current_date(clock: Optional[Clock] = None, tz_name: Optional[str] = None) -> CurrentDate:
    """
    Read the local clock and convert it to BS.

    Args:
        clock: zero-argument callable returning the local date/datetime
            (default: system clock in ``tz_name`` or the system zone)
        tz_name: IANA zone used by the default clock

    Returns:
        CurrentDate; ``degraded`` is True when the clock fell outside the
        almanac and the boundary date was substituted, or when ``tz_name``
        could not be loaded and the system zone was used
    """
    now, degraded = _read_clock(clock, tz_name)
    ad_date = now.date() if isinstance(now, datetime) else now

    try:
        return CurrentDate(bs_date=ad_to_bs(ad_date), ad_date=ad_date, degraded=degraded)
    except OutOfRangeError as e:
        fallback = first_supported_date() if ad_date < almanac.EPOCH_AD else last_supported_date()
        logger.warning(
            "Clock outside supported calendar, clamping to boundary",
            extra={"ad_date": ad_date.isoformat(), "fallback": str(fallback), "error": str(e)},
        )
        return CurrentDate(bs_date=fallback, ad_date=ad_date, degraded=True)


def get_current_bs_date(clock: Optional[Clock] = None, tz_name: Optional[str] = None) -> BSDate:
    """Today's BS date; never raises for an out-of-range clock"""
    return resolve_current_date(clock, tz_name).bs_date
