"""Unit tests for dashboard aggregation and running balance"""

import pytest
from nepali_ledger.domain.dashboard import dashboard_totals, running_balance, summarize_customer
from nepali_ledger.domain.models import (
    BSDate,
    CustomerSummary,
    LedgerEntry,
    LoanDirection,
    LoanLedger,
    RepaymentRecord,
)


def test_running_balance_sorted_oldest_first():
    """Test given adds, received subtracts, in BS date order"""
    entries = [
        LedgerEntry(amount=500, direction=LoanDirection.RECEIVED, date=BSDate(2081, 2, 1), description="cash back"),
        LedgerEntry(amount=2000, direction=LoanDirection.GIVEN, date=BSDate(2081, 1, 5), description="goods"),
        LedgerEntry(amount=300, direction=LoanDirection.GIVEN, date=BSDate(2081, 3, 1)),
    ]

    rows = running_balance(entries)

    assert [row.entry.date for row in rows] == [BSDate(2081, 1, 5), BSDate(2081, 2, 1), BSDate(2081, 3, 1)]
    assert [row.balance for row in rows] == [2000, 1500, 1800]


def test_running_balance_keeps_order_on_same_day():
    day = BSDate(2081, 1, 5)
    entries = [
        LedgerEntry(amount=100, direction=LoanDirection.GIVEN, date=day, description="first"),
        LedgerEntry(amount=40, direction=LoanDirection.RECEIVED, date=day, description="second"),
    ]

    rows = running_balance(entries)

    assert [row.entry.description for row in rows] == ["first", "second"]
    assert rows[-1].balance == 60


def test_running_balance_empty():
    assert running_balance([]) == []


def test_summarize_customer_nets_both_directions(given_loan: LoanLedger):
    """Test a customer's loans are summed with direction-adjusted signs"""
    borrowed = LoanLedger(
        principal=10000,
        monthly_rate_percent=1,
        loan_date=BSDate(2081, 1, 1),
        direction=LoanDirection.RECEIVED,
    )

    summary = summarize_customer("Ram", [given_loan, borrowed], BSDate(2081, 1, 1))

    assert summary.name == "Ram"
    assert summary.net_balance == pytest.approx(104160 - 10000)
    assert summary.total_amount == 110000
    assert summary.entry_count == 2
    assert summary.status == "active"
    assert len(summary.loans) == 2


def test_summarize_customer_settled():
    today = BSDate(2081, 1, 1)
    ledger = LoanLedger(
        principal=5000,
        monthly_rate_percent=2,
        loan_date=today,
        repayments=(RepaymentRecord(amount=5000, date=today),),
    )

    summary = summarize_customer("Sita", [ledger], today)

    assert summary.net_balance == 0
    assert summary.status == "settled"


def test_summarize_customer_without_loans():
    summary = summarize_customer("Hari", [], BSDate(2081, 1, 1))
    assert summary.net_balance == 0
    assert summary.status == "settled"


def test_dashboard_totals():
    """Test positive balances are to receive and negative ones to give"""
    summaries = [
        CustomerSummary(name="A", net_balance=1000, total_amount=1000, entry_count=1, status="active"),
        CustomerSummary(name="B", net_balance=-250.5, total_amount=500, entry_count=1, status="active"),
        CustomerSummary(name="C", net_balance=0, total_amount=700, entry_count=2, status="settled"),
        CustomerSummary(name="D", net_balance=49.5, total_amount=50, entry_count=1, status="active"),
    ]

    totals = dashboard_totals(summaries)

    assert totals.to_receive == pytest.approx(1049.5)
    assert totals.to_give == pytest.approx(250.5)
    assert totals.total_customers == 4


def test_dashboard_totals_empty():
    totals = dashboard_totals([])
    assert (totals.to_receive, totals.to_give, totals.total_customers) == (0, 0, 0)
