"""Pydantic schemas for API request/response validation

BS dates travel as 'YYYY-MM-DD' strings and are parsed by the domain layer,
so malformed or out-of-table dates surface as domain errors.
"""

from datetime import date
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

Direction = Literal["given", "received"]
InterestBaseName = Literal["compounded", "principal"]


class BSDateResponse(BaseModel):
    """Single BS date with its AD equivalent"""

    bs_date: str
    year: int
    month: int
    day: int
    month_name: str
    formatted: str
    ad_date: date


class TodayResponse(BSDateResponse):
    """Response for GET /v1/calendar/today"""

    degraded: bool


class ElapsedResponse(BaseModel):
    """Response for GET /v1/calendar/elapsed"""

    start_date: str
    end_date: str
    years: int
    months: int
    days: int
    total_days: int


class InterestRequest(BaseModel):
    """Request body for POST /v1/interest"""

    principal: float = Field(..., gt=0, description="Amount lent or borrowed")
    monthly_rate_percent: float = Field(..., ge=0, description="Interest rate per month, in percent")
    start_date: str = Field(..., description="BS start date, YYYY-MM-DD")
    end_date: Optional[str] = Field(None, description="BS end date, defaults to today")
    interest_base: Optional[InterestBaseName] = None


class InterestResponse(BaseModel):
    """Tiered interest breakdown"""

    principal: float
    monthly_rate_percent: float
    start_date: str
    end_date: str
    elapsed_years: int
    elapsed_months: int
    elapsed_days: int
    compounded_amount: float
    months_interest: float
    days_interest: float
    total_interest: float
    final_amount: float


class RepaymentSchema(BaseModel):
    """Single partial repayment"""

    amount: float = Field(..., gt=0)
    date: str = Field(..., description="BS repayment date, YYYY-MM-DD")


class LoanSchema(BaseModel):
    """Loan with repayments"""

    principal: float = Field(..., gt=0)
    monthly_rate_percent: float = Field(..., ge=0)
    loan_date: str = Field(..., description="BS loan date, YYYY-MM-DD")
    direction: Direction = "given"
    repayments: List[RepaymentSchema] = Field(default_factory=list)


class NetBalanceRequest(LoanSchema):
    """Request body for POST /v1/net-balance"""

    as_of: Optional[str] = Field(None, description="BS evaluation date, defaults to today")
    interest_base: Optional[InterestBaseName] = None


class RepaymentValueSchema(BaseModel):
    amount: float
    date: str
    value_today: float
    interest: float


class NetBalanceResponse(BaseModel):
    """Response for POST /v1/net-balance"""

    direction: Direction
    as_of: str
    total_amount_due: float
    repayments_value_today: float
    net_balance: float
    signed_balance: float
    status: str
    loan: InterestResponse
    repayments: List[RepaymentValueSchema]


class CustomerLoansSchema(BaseModel):
    name: str = Field(..., min_length=1)
    loans: List[LoanSchema] = Field(default_factory=list)


class DashboardRequest(BaseModel):
    """Request body for POST /v1/dashboard"""

    customers: List[CustomerLoansSchema]
    as_of: Optional[str] = None


class CustomerSummarySchema(BaseModel):
    name: str
    net_balance: float
    total_amount: float
    loan_count: int
    status: str


class DashboardTotalsSchema(BaseModel):
    to_receive: float
    to_give: float
    total_customers: int


class DashboardResponse(BaseModel):
    """Response for POST /v1/dashboard"""

    as_of: str
    customers: List[CustomerSummarySchema]
    totals: DashboardTotalsSchema


class LedgerEntrySchema(BaseModel):
    amount: float = Field(..., gt=0)
    direction: Direction
    date: str
    description: str = ""


class RunningBalanceRequest(BaseModel):
    """Request body for POST /v1/running-balance"""

    entries: List[LedgerEntrySchema]


class RunningBalanceRow(BaseModel):
    date: str
    amount: float
    direction: Direction
    description: str
    balance: float


class RunningBalanceResponse(BaseModel):
    """Response for POST /v1/running-balance"""

    rows: List[RunningBalanceRow]
    final_balance: float
