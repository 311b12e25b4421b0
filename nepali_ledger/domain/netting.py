"""Repayment netting engine - values loan and repayments forward to one date"""

from typing import Optional, Union

from nepali_ledger.domain.interest import DEFAULT_DAYS_PER_MONTH, calculate_interest
from nepali_ledger.domain.models import (
    BalanceStatus,
    BSDate,
    InterestBase,
    LoanDirection,
    LoanLedger,
    NetBalanceResult,
)
from nepali_ledger.domain.today import get_current_bs_date
from nepali_ledger.domain.validation import validate_ledger

# Balances smaller than half a paisa count as settled
SETTLED_TOLERANCE = 0.005


def balance_status(direction: LoanDirection, net_balance: float) -> BalanceStatus:
    """
    Interpret the sign of a net balance for the loan's direction.

    given:    > 0 still to receive, < 0 borrower overpaid
    received: > 0 still to pay,     < 0 user overpaid
    """
    if abs(net_balance) < SETTLED_TOLERANCE:
        return BalanceStatus.SETTLED
    if net_balance < 0:
        return BalanceStatus.OVERPAID
    return BalanceStatus.TO_RECEIVE if direction == LoanDirection.GIVEN else BalanceStatus.TO_PAY


def calculate_net_balance(
    ledger: LoanLedger,
    as_of: Optional[BSDate] = None,
    *,
    interest_base: Union[InterestBase, str] = InterestBase.COMPOUNDED,
    days_per_month: int = DEFAULT_DAYS_PER_MONTH,
) -> NetBalanceResult:
    """
    Net a loan against its repayments as of ``as_of`` (default: today in BS).

    The loan grows from its own date, and each repayment is treated as a
    principal growing from the repayment date, so money returned earlier
    offsets more. Validation runs before any interest math.

    Raises:
        InvalidInputError: repayment dated outside loan_date..as_of, repayments
            exceeding the principal, or a bad amount/rate
    """
    if as_of is None:
        as_of = get_current_bs_date()

    validate_ledger(ledger, as_of)
    direction = LoanDirection(ledger.direction)

    loan_result = calculate_interest(
        ledger.principal,
        ledger.monthly_rate_percent,
        ledger.loan_date,
        as_of,
        interest_base=interest_base,
        days_per_month=days_per_month,
    )

    repayment_results = tuple(
        calculate_interest(
            repayment.amount,
            ledger.monthly_rate_percent,
            repayment.date,
            as_of,
            interest_base=interest_base,
            days_per_month=days_per_month,
        )
        for repayment in ledger.repayments
    )

    total_amount_due = loan_result.final_amount
    repayments_value_today = sum(result.final_amount for result in repayment_results)
    net_balance = total_amount_due - repayments_value_today
    signed_balance = net_balance if direction == LoanDirection.GIVEN else -net_balance

    return NetBalanceResult(
        direction=direction,
        as_of=as_of,
        total_amount_due=total_amount_due,
        repayments_value_today=repayments_value_today,
        net_balance=net_balance,
        signed_balance=signed_balance,
        status=balance_status(direction, net_balance),
        loan_result=loan_result,
        repayment_results=repayment_results,
    )
