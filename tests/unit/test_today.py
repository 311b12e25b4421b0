"""Unit tests for the current-date resolver"""

import logging
from datetime import date, datetime
from nepali_ledger.domain.models import BSDate
from nepali_ledger.domain.today import (
    first_supported_date,
    get_current_bs_date,
    last_supported_date,
    resolve_current_date,
)


def test_resolve_inside_table():
    """Test a clock inside the calendar converts normally"""
    current = resolve_current_date(clock=lambda: date(2026, 10, 19))

    assert current.bs_date == BSDate(2083, 7, 3)
    assert current.ad_date == date(2026, 10, 19)
    assert current.degraded is False


def test_resolve_uses_local_calendar_day_of_datetime():
    current = resolve_current_date(clock=lambda: datetime(2024, 4, 13, 0, 5))
    assert current.bs_date == BSDate(2081, 1, 1)


def test_resolve_before_table_clamps_to_first_day(caplog):
    """Test a clock before the epoch degrades to the first supported day"""
    with caplog.at_level(logging.WARNING):
        current = resolve_current_date(clock=lambda: date(1900, 1, 1))

    assert current.bs_date == first_supported_date() == BSDate(2000, 1, 1)
    assert current.degraded is True
    assert "clamping" in caplog.text


def test_resolve_after_table_clamps_to_last_day():
    """Test a clock past the table degrades to the last supported day"""
    current = resolve_current_date(clock=lambda: date(2100, 1, 1))

    assert current.bs_date == last_supported_date() == BSDate(2090, 12, 30)
    assert current.degraded is True


def test_get_current_bs_date_never_raises():
    assert get_current_bs_date(clock=lambda: date(3000, 1, 1)) == last_supported_date()


def test_get_current_bs_date_system_clock():
    """Test the default clock yields a valid BS date"""
    assert isinstance(get_current_bs_date(), BSDate)
    assert isinstance(get_current_bs_date(tz_name="Asia/Kathmandu"), BSDate)


def test_resolve_unknown_timezone_uses_system_zone(caplog):
    """Test a bad zone name degrades to the system zone instead of failing"""
    with caplog.at_level(logging.WARNING):
        current = resolve_current_date(tz_name="Not/AZone")

    assert isinstance(current.bs_date, BSDate)
    assert current.degraded is True
    assert "Unknown local timezone" in caplog.text
    assert isinstance(get_current_bs_date(tz_name="Not/AZone"), BSDate)
