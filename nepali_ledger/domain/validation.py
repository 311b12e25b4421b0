"""Input validation boundary - rejects bad input before any interest math"""

import math
from typing import Dict

from nepali_ledger.domain.exceptions import InvalidInputError
from nepali_ledger.domain.models import BSDate, LoanDirection, LoanLedger


def _is_number(value) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def _check_amount(errors: Dict[str, str], field: str, value) -> None:
    if not _is_number(value):
        errors[field] = "must be a number"
    elif value <= 0:
        errors[field] = "must be greater than zero"


def _check_rate(errors: Dict[str, str], field: str, value) -> None:
    if not _is_number(value):
        errors[field] = "must be a number"
    elif value < 0:
        errors[field] = "must not be negative"


def _raise_if_errors(errors: Dict[str, str], message: str) -> None:
    if errors:
        details = "; ".join(f"{field}: {reason}" for field, reason in errors.items())
        raise InvalidInputError(f"{message}: {details}", errors)


def validate_interest_inputs(
    principal: float,
    monthly_rate_percent: float,
    start: BSDate,
    end: BSDate,
    days_per_month: int = 30,
) -> None:
    """Raise InvalidInputError listing every offending field"""
    errors: Dict[str, str] = {}
    _check_amount(errors, "principal", principal)
    _check_rate(errors, "monthly_rate_percent", monthly_rate_percent)

    if not isinstance(start, BSDate):
        errors["start_date"] = "is required"
    if not isinstance(end, BSDate):
        errors["end_date"] = "is required"
    if isinstance(start, BSDate) and isinstance(end, BSDate) and end < start:
        errors["end_date"] = "must not be before the start date"

    if isinstance(days_per_month, bool) or not isinstance(days_per_month, int) or days_per_month <= 0:
        errors["days_per_month"] = "must be a positive integer"

    _raise_if_errors(errors, "Invalid interest calculation input")


def validate_ledger(ledger: LoanLedger, as_of: BSDate) -> None:
    """
    Check a loan and its repayments before netting.

    Rules:
    - principal > 0, monthly rate >= 0
    - loan_date <= as_of
    - every repayment amount > 0 and loan_date <= repayment.date <= as_of
    - sum of repayment amounts <= principal
    """
    errors: Dict[str, str] = {}
    _check_amount(errors, "principal", ledger.principal)
    _check_rate(errors, "monthly_rate_percent", ledger.monthly_rate_percent)

    try:
        LoanDirection(ledger.direction)
    except ValueError:
        errors["direction"] = "must be 'given' or 'received'"

    if not isinstance(ledger.loan_date, BSDate):
        errors["loan_date"] = "is required"
    elif ledger.loan_date > as_of:
        errors["loan_date"] = f"must not be after the evaluation date {as_of}"

    total_repaid = 0.0
    for index, repayment in enumerate(ledger.repayments):
        prefix = f"repayments[{index}]"
        _check_amount(errors, f"{prefix}.amount", repayment.amount)
        if _is_number(repayment.amount):
            total_repaid += repayment.amount

        if not isinstance(repayment.date, BSDate):
            errors[f"{prefix}.date"] = "is required"
        elif isinstance(ledger.loan_date, BSDate) and repayment.date < ledger.loan_date:
            errors[f"{prefix}.date"] = f"must not be before the loan date {ledger.loan_date}"
        elif repayment.date > as_of:
            errors[f"{prefix}.date"] = f"must not be after the evaluation date {as_of}"

    if _is_number(ledger.principal) and total_repaid > ledger.principal:
        errors["repayments"] = (
            f"total repaid {total_repaid:g} exceeds the principal {ledger.principal:g}"
        )

    _raise_if_errors(errors, "Invalid loan ledger")
