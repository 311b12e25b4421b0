"""AD <-> BS calendar conversion over the published almanac table"""

import re
from datetime import date, datetime, timedelta
from typing import Optional, Union

from nepali_ledger.domain import almanac
from nepali_ledger.domain.exceptions import InvalidDateError, InvalidInputError, OutOfRangeError
from nepali_ledger.domain.models import BSDate, ElapsedPeriod

_BS_DATE_PATTERN = re.compile(r"^\s*(\d{4})[-/](\d{1,2})[-/](\d{1,2})\s*$")


def _as_date(ad: Union[date, datetime]) -> date:
    if isinstance(ad, datetime):
        return ad.date()
    if isinstance(ad, date):
        return ad
    raise InvalidDateError(f"Unsupported type for AD date: {type(ad).__name__}")


def ad_to_bs(ad: Union[date, datetime]) -> BSDate:
    """
    Convert an AD date to its BS equivalent.

    Walks forward from the epoch year by year, then month by month, until the
    remaining offset fits inside the current month.

    Raises:
        OutOfRangeError: if the date precedes the epoch or lies past the table
    """
    ad_date = _as_date(ad)
    remaining = (ad_date - almanac.EPOCH_AD).days

    if remaining < 0:
        raise OutOfRangeError(
            f"AD date {ad_date.isoformat()} precedes the supported range "
            f"(starts {almanac.EPOCH_AD.isoformat()})"
        )
    if remaining >= almanac.total_days():
        raise OutOfRangeError(
            f"AD date {ad_date.isoformat()} is past BS year {almanac.MAX_YEAR}"
        )

    year = almanac.MIN_YEAR
    while remaining >= almanac.year_length(year):
        remaining -= almanac.year_length(year)
        year += 1

    month = 1
    for days_in_month in almanac.lookup(year):
        if remaining < days_in_month:
            break
        remaining -= days_in_month
        month += 1

    return BSDate(year, month, remaining + 1)


def days_since_epoch(bs: BSDate) -> int:
    """Absolute day offset of a BS date from BS MIN_YEAR/01/01"""
    months = almanac.lookup(bs.year)
    if not 1 <= bs.day <= months[bs.month - 1]:
        raise InvalidDateError(f"Invalid BS date: {bs.year}/{bs.month}/{bs.day}")
    return almanac.year_start_offset(bs.year) + sum(months[: bs.month - 1]) + bs.day - 1


def from_days_since_epoch(offset: int) -> BSDate:
    if not 0 <= offset < almanac.total_days():
        raise OutOfRangeError(f"Day offset {offset} is outside the almanac")
    return ad_to_bs(almanac.EPOCH_AD + timedelta(days=offset))


def bs_to_ad(bs: BSDate) -> date:
    """
    Convert a BS date to AD.

    Raises:
        InvalidDateError: if the day exceeds the month's published length
        OutOfRangeError: if the year is not in the table
    """
    return almanac.EPOCH_AD + timedelta(days=days_since_epoch(bs))


def difference_in_days(bs1: BSDate, bs2: BSDate) -> int:
    """Days from bs1 to bs2; positive when bs2 is later"""
    return days_since_epoch(bs2) - days_since_epoch(bs1)


def add_days(bs: BSDate, days: int) -> BSDate:
    return from_days_since_epoch(days_since_epoch(bs) + days)


def add_months(bs: BSDate, months: int, day: Optional[int] = None) -> BSDate:
    """
    Shift a BS date by whole months, keeping ``day`` (default: bs.day).

    The day is clamped to the target month's length, e.g. day 32 becomes 31
    when the target month has 31 days.
    """
    index = bs.year * 12 + (bs.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    wanted_day = bs.day if day is None else day
    return BSDate(year, month, min(wanted_day, almanac.month_length(year, month)))


def _step_fits(start: BSDate, months: int, end: BSDate) -> Optional[BSDate]:
    """Return start shifted by ``months`` if it stays within the table and <= end"""
    year = (start.year * 12 + start.month - 1 + months) // 12
    if year > almanac.MAX_YEAR:
        return None
    candidate = add_months(start, months)
    return candidate if candidate <= end else None


def decompose_elapsed(start: BSDate, end: BSDate) -> ElapsedPeriod:
    """
    Split the span start..end into whole BS years, then months, then days.

    Order is significant: years are taken greedily from start, months are
    advanced from the date the year stage lands on, and the leftover is
    counted in days. Each step keeps its anchor's day of month, clamped to
    the target month's length, so a clamp from the year stage carries into
    the month stage.

    Raises:
        InvalidInputError: if end precedes start
    """
    if end < start:
        raise InvalidInputError(
            f"End date {end} precedes start date {start}",
            {"end_date": "must not be before the start date"},
        )

    years = 0
    while _step_fits(start, (years + 1) * 12, end) is not None:
        years += 1
    year_anchor = add_months(start, years * 12)

    months = 0
    while _step_fits(year_anchor, months + 1, end) is not None:
        months += 1
    anchor = add_months(year_anchor, months)

    return ElapsedPeriod(years=years, months=months, days=difference_in_days(anchor, end))


def parse_bs_date(text: str) -> BSDate:
    """Parse 'YYYY-MM-DD' or 'YYYY/MM/DD' into a validated BSDate"""
    if not isinstance(text, str):
        raise InvalidDateError(f"BS date must be a string, got {type(text).__name__}")
    match = _BS_DATE_PATTERN.match(text)
    if not match:
        raise InvalidDateError(f"Malformed BS date: {text!r} (expected YYYY-MM-DD)")
    year, month, day = (int(part) for part in match.groups())
    return BSDate(year, month, day)


def format_bs_date(bs: BSDate, style: str = "numeric") -> str:
    """
    Format a BS date.

    Styles:
        numeric: 2080/03/10
        iso:     2080-03-10
        full:    10 Ashadh 2080
        short:   10 Ash 2080
    """
    if style == "numeric":
        return f"{bs.year}/{bs.month:02d}/{bs.day:02d}"
    if style == "iso":
        return str(bs)
    name = almanac.month_name(bs.month)
    if style == "full":
        return f"{bs.day} {name} {bs.year}"
    if style == "short":
        return f"{bs.day} {name[:3]} {bs.year}"
    raise ValueError(f"Unknown BS date format style: {style}")
