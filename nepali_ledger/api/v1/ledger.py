"""Loan netting endpoints - net balance, dashboard totals, running balance"""

import time
from typing import List

from fastapi import APIRouter, Depends, Request

from nepali_ledger.api.dependencies import get_calculation_options, get_current_date, get_request_id
from nepali_ledger.api.errors import to_http_error
from nepali_ledger.api.v1.interest import interest_response, money
from nepali_ledger.api.v1.schemas import (
    CustomerSummarySchema,
    DashboardRequest,
    DashboardResponse,
    DashboardTotalsSchema,
    LoanSchema,
    NetBalanceRequest,
    NetBalanceResponse,
    RepaymentValueSchema,
    RunningBalanceRequest,
    RunningBalanceResponse,
    RunningBalanceRow,
)
from nepali_ledger.domain.conversion import parse_bs_date
from nepali_ledger.domain.dashboard import dashboard_totals, running_balance, summarize_customer
from nepali_ledger.domain.exceptions import DomainException
from nepali_ledger.domain.models import (
    BSDate,
    CurrentDate,
    LedgerEntry,
    LoanDirection,
    LoanLedger,
    RepaymentRecord,
)
from nepali_ledger.domain.netting import calculate_net_balance
from nepali_ledger.infrastructure.observability.logging import log_calculation
from nepali_ledger.infrastructure.observability.metrics import calculation_counter, record_calculation

router = APIRouter()


def to_ledger(loan: LoanSchema) -> LoanLedger:
    """Build a domain ledger from request data; raises on malformed dates"""
    return LoanLedger(
        principal=loan.principal,
        monthly_rate_percent=loan.monthly_rate_percent,
        loan_date=parse_bs_date(loan.loan_date),
        direction=LoanDirection(loan.direction),
        repayments=tuple(
            RepaymentRecord(amount=r.amount, date=parse_bs_date(r.date))
            for r in loan.repayments
        ),
    )


def _resolve_as_of(as_of: str | None, current: CurrentDate) -> BSDate:
    return parse_bs_date(as_of) if as_of else current.bs_date


@router.post("/net-balance", response_model=NetBalanceResponse)
def create_net_balance(
    request_body: NetBalanceRequest,
    request: Request,
    current: CurrentDate = Depends(get_current_date),
    options: dict = Depends(get_calculation_options),
):
    """
    Net a loan against its repayments as of a BS date (default: today).

    Each repayment accrues interest from its own date, so earlier repayments
    offset more of the grown loan.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    if request_body.interest_base:
        options = {**options, "interest_base": request_body.interest_base}

    try:
        ledger = to_ledger(request_body)
        as_of = _resolve_as_of(request_body.as_of, current)
        result = calculate_net_balance(ledger, as_of, **options)
    except DomainException as e:
        raise to_http_error("net_balance", e, request_id)

    duration_ms = (time.time() - start_time) * 1000
    record_calculation("net_balance", ledger.principal)
    log_calculation(
        request_id,
        "net_balance",
        ledger.principal,
        result.total_amount_due,
        duration_ms,
        net_balance=result.net_balance,
        repayment_count=len(ledger.repayments),
        as_of=str(as_of),
    )

    repayments = [
        RepaymentValueSchema(
            amount=money(record.amount),
            date=str(record.date),
            value_today=money(value.final_amount),
            interest=money(value.total_interest),
        )
        for record, value in zip(ledger.repayments, result.repayment_results)
    ]

    return NetBalanceResponse(
        direction=result.direction.value,
        as_of=str(as_of),
        total_amount_due=money(result.total_amount_due),
        repayments_value_today=money(result.repayments_value_today),
        net_balance=money(result.net_balance),
        signed_balance=money(result.signed_balance),
        status=result.status.value,
        loan=interest_response(result.loan_result, ledger.loan_date, as_of),
        repayments=repayments,
    )


@router.post("/dashboard", response_model=DashboardResponse)
def create_dashboard(
    request_body: DashboardRequest,
    request: Request,
    current: CurrentDate = Depends(get_current_date),
    options: dict = Depends(get_calculation_options),
):
    """
    Aggregate customer balances into "to receive" and "to give" totals.

    A customer's balance is the sum of the direction-adjusted net balances of
    their loans; positive means the customer owes the user.
    """
    request_id = get_request_id(request)

    try:
        as_of = _resolve_as_of(request_body.as_of, current)
        summaries = [
            summarize_customer(
                customer.name,
                [to_ledger(loan) for loan in customer.loans],
                as_of,
                **options,
            )
            for customer in request_body.customers
        ]
    except DomainException as e:
        raise to_http_error("dashboard", e, request_id)

    totals = dashboard_totals(summaries)
    calculation_counter.labels(kind="dashboard").inc()

    customers: List[CustomerSummarySchema] = [
        CustomerSummarySchema(
            name=s.name,
            net_balance=money(s.net_balance),
            total_amount=money(s.total_amount),
            loan_count=s.entry_count,
            status=s.status,
        )
        for s in summaries
    ]

    return DashboardResponse(
        as_of=str(as_of),
        customers=customers,
        totals=DashboardTotalsSchema(
            to_receive=money(totals.to_receive),
            to_give=money(totals.to_give),
            total_customers=totals.total_customers,
        ),
    )


@router.post("/running-balance", response_model=RunningBalanceResponse)
def create_running_balance(request_body: RunningBalanceRequest, request: Request):
    """Running balance of a customer's given/received history, oldest first"""
    try:
        entries = [
            LedgerEntry(
                amount=item.amount,
                direction=LoanDirection(item.direction),
                date=parse_bs_date(item.date),
                description=item.description,
            )
            for item in request_body.entries
        ]
    except DomainException as e:
        raise to_http_error("running_balance", e, get_request_id(request))

    rows = running_balance(entries)

    return RunningBalanceResponse(
        rows=[
            RunningBalanceRow(
                date=str(row.entry.date),
                amount=money(row.entry.amount),
                direction=row.entry.direction.value,
                description=row.entry.description,
                balance=money(row.balance),
            )
            for row in rows
        ],
        final_balance=money(rows[-1].balance) if rows else 0.0,
    )
