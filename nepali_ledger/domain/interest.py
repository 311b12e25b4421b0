"""Interest accrual engine - yearly compounding plus simple month/day tiers"""

from typing import Union

from nepali_ledger.domain.conversion import decompose_elapsed
from nepali_ledger.domain.exceptions import InvalidInputError
from nepali_ledger.domain.models import BSDate, InterestBase, InterestCalculationResult
from nepali_ledger.domain.validation import validate_interest_inputs

DEFAULT_DAYS_PER_MONTH = 30


def annual_rate_percent(monthly_rate_percent: float) -> float:
    return monthly_rate_percent * 12


def compound_yearly(principal: float, monthly_rate_percent: float, years: int) -> float:
    """Grow principal once per whole year at 12x the monthly rate"""
    growth = 1 + annual_rate_percent(monthly_rate_percent) / 100
    amount = principal
    for _ in range(years):
        amount = amount * growth
    return amount


def calculate_interest(
    principal: float,
    monthly_rate_percent: float,
    start: BSDate,
    end: BSDate,
    *,
    interest_base: Union[InterestBase, str] = InterestBase.COMPOUNDED,
    days_per_month: int = DEFAULT_DAYS_PER_MONTH,
) -> InterestCalculationResult:
    """
    Calculate interest on a principal between two BS dates.

    Tiers, applied in order over the decomposed span:
    1. Whole years: compounded once per year at the annual rate
       (12 x monthly rate), each year growing the prior year's amount
    2. Remaining months: simple interest at the monthly rate
    3. Remaining days: simple interest at monthly rate / days_per_month

    The month and day tiers accrue on the compounded amount by default, or on
    the original principal with ``interest_base=InterestBase.PRINCIPAL``.

    Example:
        100000 at 2%/month from 2079/01/01 to 2081/01/01
        -> 2 years, 0 months, 0 days
        -> 100000 x 1.24 x 1.24 = 153760
    """
    validate_interest_inputs(principal, monthly_rate_percent, start, end, days_per_month)
    try:
        base_mode = InterestBase(interest_base)
    except ValueError:
        raise InvalidInputError(
            f"Unknown interest base: {interest_base!r}",
            {"interest_base": "must be 'compounded' or 'principal'"},
        ) from None

    elapsed = decompose_elapsed(start, end)
    amount = compound_yearly(principal, monthly_rate_percent, elapsed.years)

    tier_base = amount if base_mode == InterestBase.COMPOUNDED else principal
    monthly_rate = monthly_rate_percent / 100
    months_interest = tier_base * monthly_rate * elapsed.months
    days_interest = tier_base * (monthly_rate / days_per_month) * elapsed.days

    total_interest = (amount - principal) + months_interest + days_interest

    return InterestCalculationResult(
        principal=principal,
        monthly_rate_percent=monthly_rate_percent,
        elapsed_years=elapsed.years,
        elapsed_months=elapsed.months,
        elapsed_days=elapsed.days,
        compounded_amount=amount,
        months_interest=months_interest,
        days_interest=days_interest,
        total_interest=total_interest,
        final_amount=principal + total_interest,
    )
