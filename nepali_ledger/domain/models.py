"""Domain models - immutable value objects created fresh per calculation"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Tuple

from nepali_ledger.domain import almanac
from nepali_ledger.domain.exceptions import InvalidDateError


@dataclass(frozen=True, order=True)
class BSDate:
    """Bikram Sambat calendar date, validated against the almanac on construction"""

    year: int
    month: int
    day: int

    def __post_init__(self) -> None:
        for name in ("year", "month", "day"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidDateError(f"BS {name} must be an integer, got {value!r}")

        if not 1 <= self.month <= 12:
            raise InvalidDateError(f"Invalid BS month: {self.month}")

        # Raises OutOfRangeError for years outside the table
        days_in_month = almanac.month_length(self.year, self.month)
        if not 1 <= self.day <= days_in_month:
            raise InvalidDateError(
                f"Invalid BS date {self.year}/{self.month}/{self.day}: "
                f"{almanac.month_name(self.month)} {self.year} has {days_in_month} days"
            )

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"


@dataclass(frozen=True)
class ElapsedPeriod:
    """Calendar-aware span: whole years, then whole months, then days"""

    years: int
    months: int
    days: int


class InterestBase(str, Enum):
    """Amount the simple month/day tiers accrue on"""

    COMPOUNDED = "compounded"  # post-compounding amount
    PRINCIPAL = "principal"  # original principal


class LoanDirection(str, Enum):
    GIVEN = "given"  # user lent money out
    RECEIVED = "received"  # user borrowed money


class BalanceStatus(str, Enum):
    TO_RECEIVE = "to_receive"
    TO_PAY = "to_pay"
    OVERPAID = "overpaid"
    SETTLED = "settled"


@dataclass(frozen=True)
class InterestCalculationResult:
    """Tiered interest breakdown for one principal over one BS span"""

    principal: float
    monthly_rate_percent: float
    elapsed_years: int
    elapsed_months: int
    elapsed_days: int
    compounded_amount: float
    months_interest: float
    days_interest: float
    total_interest: float
    final_amount: float


@dataclass(frozen=True)
class RepaymentRecord:
    """Partial repayment against a loan"""

    amount: float
    date: BSDate


@dataclass(frozen=True)
class LoanLedger:
    """Loan with its dated partial repayments"""

    principal: float
    monthly_rate_percent: float
    loan_date: BSDate
    direction: LoanDirection = LoanDirection.GIVEN
    repayments: Tuple[RepaymentRecord, ...] = ()


@dataclass(frozen=True)
class NetBalanceResult:
    """Outstanding balance of a loan after netting repayments as of one date"""

    direction: LoanDirection
    as_of: BSDate
    total_amount_due: float
    repayments_value_today: float
    net_balance: float
    signed_balance: float  # positive means the user is owed money
    status: BalanceStatus
    loan_result: InterestCalculationResult
    repayment_results: Tuple[InterestCalculationResult, ...] = ()


@dataclass(frozen=True)
class CurrentDate:
    """Output of the tolerant "today" resolver"""

    bs_date: BSDate
    ad_date: date
    degraded: bool = False


@dataclass(frozen=True)
class LedgerEntry:
    """Single given/received transaction in a customer's history"""

    amount: float
    direction: LoanDirection
    date: BSDate
    description: str = ""


@dataclass(frozen=True)
class RunningBalanceRow:
    entry: LedgerEntry
    balance: float


@dataclass(frozen=True)
class CustomerSummary:
    """Per-customer balance shown on the dashboard"""

    name: str
    net_balance: float
    total_amount: float
    entry_count: int
    status: str  # "active" or "settled"
    loans: Tuple[NetBalanceResult, ...] = field(default=(), compare=False)


@dataclass(frozen=True)
class DashboardTotals:
    to_receive: float
    to_give: float
    total_customers: int
