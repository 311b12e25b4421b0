"""Unit tests for the BS almanac table"""

import pytest
from datetime import date
from nepali_ledger.domain import almanac
from nepali_ledger.domain.exceptions import OutOfRangeError


def test_lookup_returns_twelve_months():
    """Test every supported year has 12 month lengths in 28..32"""
    for year in range(almanac.MIN_YEAR, almanac.MAX_YEAR + 1):
        months = almanac.lookup(year)
        assert len(months) == 12
        assert all(28 <= days <= 32 for days in months), year


def test_lookup_known_years():
    """Test published lengths for recent years"""
    assert almanac.lookup(2080) == (31, 32, 31, 32, 31, 30, 30, 30, 29, 29, 30, 30)
    assert almanac.lookup(2081) == (31, 32, 31, 32, 31, 30, 30, 30, 29, 30, 29, 31)
    assert almanac.year_length(2080) == 365
    assert almanac.year_length(2081) == 366


@pytest.mark.parametrize("year", [almanac.MIN_YEAR - 1, almanac.MAX_YEAR + 1, 1999, 2200])
def test_lookup_outside_table_fails(year: int):
    """Test lookups outside the table fail instead of extrapolating"""
    with pytest.raises(OutOfRangeError):
        almanac.lookup(year)


def test_month_length_rejects_bad_month():
    with pytest.raises(OutOfRangeError):
        almanac.month_length(2080, 13)


def test_year_start_offsets_are_contiguous():
    """Test each year starts where the previous one ended"""
    for year in range(almanac.MIN_YEAR + 1, almanac.MAX_YEAR + 1):
        assert almanac.year_start_offset(year) == (
            almanac.year_start_offset(year - 1) + almanac.year_length(year - 1)
        )
    assert almanac.total_days() == (
        almanac.year_start_offset(almanac.MAX_YEAR) + almanac.year_length(almanac.MAX_YEAR)
    )


def test_epoch_anchor():
    assert almanac.EPOCH_AD == date(1943, 4, 14)
    assert almanac.year_start_offset(almanac.MIN_YEAR) == 0


def test_month_names():
    assert almanac.month_name(1) == "Baisakh"
    assert almanac.month_name(3) == "Ashadh"
    assert almanac.month_name(12) == "Chaitra"
    with pytest.raises(OutOfRangeError):
        almanac.month_name(0)
