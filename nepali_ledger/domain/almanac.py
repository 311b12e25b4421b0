"""Bikram Sambat almanac - published month lengths per BS year

BS month lengths are fixed each year by the almanac committee and do not follow
a closed-form rule, so every supported year is listed explicitly. Lookups
outside the table fail instead of extrapolating.
"""

from datetime import date
from typing import Tuple

from nepali_ledger.domain.exceptions import OutOfRangeError


MIN_YEAR = 2000
MAX_YEAR = 2090

# AD date of BS 2000/01/01 (1 Baisakh 2000)
EPOCH_AD = date(1943, 4, 14)

# Indexed by (year - MIN_YEAR), Baisakh..Chaitra
_MONTH_LENGTHS: Tuple[Tuple[int, ...], ...] = (
    (30, 32, 31, 32, 31, 30, 30, 30, 29, 30, 29, 31),  # 2000
    (31, 31, 32, 31, 31, 31, 30, 29, 30, 29, 30, 30),  # 2001
    (31, 31, 32, 32, 31, 30, 30, 29, 30, 29, 30, 30),  # 2002
    (31, 32, 31, 32, 31, 30, 30, 30, 29, 29, 30, 31),  # 2003
    (30, 32, 31, 32, 31, 30, 30, 30, 29, 30, 29, 31),  # 2004
    (31, 31, 32, 31, 31, 31, 30, 29, 30, 29, 30, 30),  # 2005
    (31, 31, 32, 32, 31, 30, 30, 29, 30, 29, 30, 30),  # 2006
    (31, 32, 31, 32, 31, 30, 30, 30, 29, 29, 30, 31),  # 2007
    (31, 31, 31, 32, 31, 31, 29, 30, 30, 29, 29, 31),  # 2008
    (31, 31, 32, 31, 31, 31, 30, 29, 30, 29, 30, 30),  # 2009
    (31, 31, 32, 32, 31, 30, 30, 29, 30, 29, 30, 30),  # 2010
    (31, 32, 31, 32, 31, 30, 30, 30, 29, 29, 30, 31),  # 2011
    (31, 31, 31, 32, 31, 31, 29, 30, 30, 29, 30, 30),  # 2012
    (31, 31, 32, 31, 31, 31, 30, 29, 30, 29, 30, 30),  # 2013
    (31, 31, 32, 32, 31, 30, 30, 29, 30, 29, 30, 30),  # 2014
    (31, 32, 31, 32, 31, 30, 30, 30, 29, 29, 30, 31),  # 2015
    (31, 31, 31, 32, 31, 31, 29, 30, 30, 29, 30, 30),  # 2016
    (31, 31, 32, 31, 31, 31, 30, 29, 30, 29, 30, 30),  # 2017
    (31, 32, 31, 32, 31, 30, 30, 29, 30, 29, 30, 30),  # 2018
    (31, 32, 31, 32, 31, 30, 30, 30, 29, 30, 29, 31),  # 2019
    (31, 31, 31, 32, 31, 31, 30, 29, 30, 29, 30, 30),  # 2020
    (31, 31, 32, 31, 31, 31, 30, 29, 30, 29, 30, 30),  # 2021
    (31, 32, 31, 32, 31, 30, 30, 30, 29, 29, 30, 30),  # 2022
    (31, 32, 31, 32, 31, 30, 30, 30, 29, 30, 29, 31),  # 2023
    (31, 31, 31, 32, 31, 31, 30, 29, 30, 29, 30, 30),  # 2024
    (31, 31, 32, 31, 31, 31, 30, 29, 30, 29, 30, 30),  # 2025
    (31, 32, 31, 32, 31, 30, 30, 30, 29, 29, 30, 31),  # 2026
    (30, 32, 31, 32, 31, 30, 30, 30, 29, 30, 29, 31),  # 2027
    (31, 31, 32, 31, 31, 31, 30, 29, 30, 29, 30, 30),  # 2028
    (31, 31, 32, 31, 32, 30, 30, 29, 30, 29, 30, 30),  # 2029
    (31, 32, 31, 32, 31, 30, 30, 30, 29, 29, 30, 31),  # 2030
    (30, 32, 31, 32, 31, 30, 30, 30, 29, 30, 29, 31),  # 2031
    (31, 31, 32, 31, 31, 31, 30, 29, 30, 29, 30, 30),  # 2032
    (31, 31, 32, 32, 31, 30, 30, 29, 30, 29, 30, 30),  # 2033
    (31, 32, 31, 32, 31, 30, 30, 30, 29, 29, 30, 31),  # 2034
    (30, 32, 31, 32, 31, 31, 29, 30, 30, 29, 29, 31),  # 2035
    (31, 31, 32, 31, 31, 31, 30, 29, 30, 29, 30, 30),  # 2036
    (31, 31, 32, 32, 31, 30, 30, 29, 30, 29, 30, 30),  # 2037
    (31, 32, 31, 32, 31, 30, 30, 30, 29, 29, 30, 31),  # 2038
    (31, 31, 31, 32, 31, 31, 29, 30, 30, 29, 30, 30),  # 2039
    (31, 31, 32, 31, 31, 31, 30, 29, 30, 29, 30, 30),  # 2040
    (31, 31, 32, 32, 31, 30, 30, 29, 30, 29, 30, 30),  # 2041
    (31, 32, 31, 32, 31, 30, 30, 30, 29, 29, 30, 31),  # 2042
    (31, 31, 31, 32, 31, 31, 29, 30, 30, 29, 30, 30),  # 2043
    (31, 31, 32, 31, 31, 31, 30, 29, 30, 29, 30, 30),  # 2044
    (31, 32, 31, 32, 31, 30, 30, 29, 30, 29, 30, 30),  # 2045
    (31, 32, 31, 32, 31, 30, 30, 30, 29, 29, 30, 31),  # 2046
    (31, 31, 31, 32, 31, 31, 30, 29, 30, 29, 30, 30),  # 2047
    (31, 31, 32, 31, 31, 31, 30, 29, 30, 29, 30, 30),  # 2048
    (31, 32, 31, 32, 31, 30, 30, 30, 29, 29, 30, 30),  # 2049
    (31, 32, 31, 32, 31, 30, 30, 30, 29, 30, 29, 31),  # 2050
    (31, 31, 31, 32, 31, 31, 30, 29, 30, 29, 30, 30),  # 2051
    (31, 31, 32, 31, 31, 31, 30, 29, 30, 29, 30, 30),  # 2052
    (31, 32, 31, 32, 31, 30, 30, 30, 29, 29, 30, 30),  # 2053
    (31, 32, 31, 32, 31, 30, 30, 30, 29, 30, 29, 31),  # 2054
    (31, 31, 32, 31, 31, 31, 30, 29, 30, 29, 30, 30),  # 2055
    (31, 31, 32, 31, 32, 30, 30, 29, 30, 29, 30, 30),  # 2056
    (31, 32, 31, 32, 31, 30, 30, 30, 29, 29, 30, 31),  # 2057
    (30, 32, 31, 32, 31, 30, 30, 30, 29, 30, 29, 31),  # 2058
    (31, 31, 32, 31, 31, 31, 30, 29, 30, 29, 30, 30),  # 2059
    (31, 31, 32, 32, 31, 30, 30, 29, 30, 29, 30, 30),  # 2060
    (31, 32, 31, 32, 31, 30, 30, 30, 29, 29, 30, 31),  # 2061
    (30, 32, 31, 32, 31, 31, 29, 30, 29, 30, 29, 31),  # 2062
    (31, 31, 32, 31, 31, 31, 30, 29, 30, 29, 30, 30),  # 2063
    (31, 31, 32, 32, 31, 30, 30, 29, 30, 29, 30, 30),  # 2064
    (31, 32, 31, 32, 31, 30, 30, 30, 29, 29, 30, 31),  # 2065
    (31, 31, 31, 32, 31, 31, 29, 30, 30, 29, 29, 31),  # 2066
    (31, 31, 32, 31, 31, 31, 30, 29, 30, 29, 30, 30),  # 2067
    (31, 31, 32, 32, 31, 30, 30, 29, 30, 29, 30, 30),  # 2068
    (31, 32, 31, 32, 31, 30, 30, 30, 29, 29, 30, 31),  # 2069
    (31, 31, 31, 32, 31, 31, 29, 30, 30, 29, 30, 30),  # 2070
    (31, 31, 32, 31, 31, 31, 30, 29, 30, 29, 30, 30),  # 2071
    (31, 32, 31, 32, 31, 30, 30, 29, 30, 29, 30, 30),  # 2072
    (31, 32, 31, 32, 31, 30, 30, 30, 29, 29, 30, 31),  # 2073
    (31, 31, 31, 32, 31, 31, 30, 29, 30, 29, 30, 30),  # 2074
    (31, 31, 32, 31, 31, 31, 30, 29, 30, 29, 30, 30),  # 2075
    (31, 32, 31, 32, 31, 30, 30, 30, 29, 29, 30, 30),  # 2076
    (31, 32, 31, 32, 31, 30, 30, 30, 29, 30, 29, 31),  # 2077
    (31, 31, 31, 32, 31, 31, 30, 29, 30, 29, 30, 30),  # 2078
    (31, 31, 32, 31, 31, 31, 30, 29, 30, 29, 30, 30),  # 2079
    (31, 32, 31, 32, 31, 30, 30, 30, 29, 29, 30, 30),  # 2080
    (31, 32, 31, 32, 31, 30, 30, 30, 29, 30, 29, 31),  # 2081
    (31, 31, 32, 31, 31, 30, 30, 30, 29, 30, 30, 30),  # 2082
    (31, 31, 32, 31, 31, 30, 30, 30, 29, 30, 30, 30),  # 2083
    (31, 31, 32, 31, 31, 30, 30, 30, 29, 30, 30, 30),  # 2084
    (31, 32, 31, 32, 30, 31, 30, 30, 29, 30, 30, 30),  # 2085
    (30, 32, 31, 32, 31, 30, 30, 30, 29, 30, 30, 30),  # 2086
    (31, 31, 32, 31, 31, 31, 30, 30, 29, 30, 30, 30),  # 2087
    (30, 31, 32, 32, 30, 31, 30, 30, 29, 30, 30, 30),  # 2088
    (30, 32, 31, 32, 31, 30, 30, 30, 29, 30, 30, 30),  # 2089
    (30, 32, 31, 32, 31, 30, 30, 30, 29, 30, 30, 30),  # 2090
)

MONTH_NAMES = (
    "Baisakh", "Jestha", "Ashadh", "Shrawan", "Bhadra", "Ashwin",
    "Kartik", "Mangsir", "Poush", "Magh", "Falgun", "Chaitra",
)

# Cumulative day offset of each year's 1 Baisakh from the epoch
_YEAR_OFFSETS: Tuple[int, ...] = tuple(
    sum(sum(months) for months in _MONTH_LENGTHS[:index])
    for index in range(len(_MONTH_LENGTHS) + 1)
)


def lookup(year: int) -> Tuple[int, ...]:
    """Return the 12 month lengths of a BS year"""
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise OutOfRangeError(
            f"BS year {year} is not supported (supported: {MIN_YEAR}-{MAX_YEAR})"
        )
    return _MONTH_LENGTHS[year - MIN_YEAR]


def month_length(year: int, month: int) -> int:
    """Days in a BS month"""
    if not 1 <= month <= 12:
        raise OutOfRangeError(f"BS month {month} is not between 1 and 12")
    return lookup(year)[month - 1]


def year_length(year: int) -> int:
    return sum(lookup(year))


def year_start_offset(year: int) -> int:
    """Days from the epoch to 1 Baisakh of ``year``"""
    lookup(year)
    return _YEAR_OFFSETS[year - MIN_YEAR]


def total_days() -> int:
    """Number of days covered by the table"""
    return _YEAR_OFFSETS[-1]


def month_name(month: int) -> str:
    if not 1 <= month <= 12:
        raise OutOfRangeError(f"BS month {month} is not between 1 and 12")
    return MONTH_NAMES[month - 1]
