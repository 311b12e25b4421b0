"""Dashboard aggregation - customer balances and transaction running balance"""

from typing import Iterable, List, Optional, Sequence

from nepali_ledger.domain.models import (
    BSDate,
    CustomerSummary,
    DashboardTotals,
    LedgerEntry,
    LoanDirection,
    LoanLedger,
    RunningBalanceRow,
)
from nepali_ledger.domain.netting import SETTLED_TOLERANCE, calculate_net_balance
from nepali_ledger.domain.today import get_current_bs_date


def balance_impact(entry: LedgerEntry) -> float:
    """Money given raises what the customer owes; money received lowers it"""
    return entry.amount if LoanDirection(entry.direction) == LoanDirection.GIVEN else -entry.amount


def running_balance(entries: Iterable[LedgerEntry]) -> List[RunningBalanceRow]:
    """
    Running balance of a customer's history, oldest entry first.

    Entries on the same BS date keep their input order.
    """
    rows: List[RunningBalanceRow] = []
    balance = 0.0
    for entry in sorted(entries, key=lambda e: e.date):
        balance += balance_impact(entry)
        rows.append(RunningBalanceRow(entry=entry, balance=balance))
    return rows


def summarize_customer(
    name: str,
    ledgers: Sequence[LoanLedger],
    as_of: Optional[BSDate] = None,
    **calculation_options,
) -> CustomerSummary:
    """
    Net every loan of one customer as of a date and add up the signed balances.

    ``calculation_options`` are passed through to ``calculate_net_balance``
    (interest_base, days_per_month).
    """
    if as_of is None:
        as_of = get_current_bs_date()

    results = tuple(calculate_net_balance(ledger, as_of, **calculation_options) for ledger in ledgers)
    net_balance = sum(result.signed_balance for result in results)
    total_amount = sum(ledger.principal for ledger in ledgers)

    return CustomerSummary(
        name=name,
        net_balance=net_balance,
        total_amount=total_amount,
        entry_count=len(ledgers),
        status="settled" if abs(net_balance) < SETTLED_TOLERANCE else "active",
        loans=results,
    )


def dashboard_totals(summaries: Iterable[CustomerSummary]) -> DashboardTotals:
    """
    TO RECEIVE = sum of positive balances (customers owe the user)
    TO GIVE    = sum of negative balances (the user owes customers)
    """
    to_receive = 0.0
    to_give = 0.0
    count = 0
    for summary in summaries:
        count += 1
        if summary.net_balance >= SETTLED_TOLERANCE:
            to_receive += summary.net_balance
        elif summary.net_balance <= -SETTLED_TOLERANCE:
            to_give += abs(summary.net_balance)
    return DashboardTotals(to_receive=to_receive, to_give=to_give, total_customers=count)
