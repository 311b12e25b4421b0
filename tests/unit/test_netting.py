"""Unit tests for repayment netting and ledger validation"""

import pytest
from nepali_ledger.domain import netting
from nepali_ledger.domain.exceptions import InvalidInputError
from nepali_ledger.domain.models import (
    BalanceStatus,
    BSDate,
    InterestBase,
    LoanDirection,
    LoanLedger,
    RepaymentRecord,
)
from nepali_ledger.domain.netting import balance_status, calculate_net_balance
from nepali_ledger.domain.validation import validate_ledger


def test_given_loan_with_one_repayment(given_loan: LoanLedger):
    """
    Test netting a 2-year loan against a repayment made after one year.

    Loan: 100000 x 1.24 x 1.24 = 153760
    Repayment: 40000 x 1.24 = 49600
    Net: 104160 still to receive
    """
    result = calculate_net_balance(given_loan, BSDate(2081, 1, 1))

    assert result.total_amount_due == pytest.approx(153760)
    assert result.repayments_value_today == pytest.approx(49600)
    assert result.net_balance == pytest.approx(104160)
    assert result.signed_balance == pytest.approx(104160)
    assert result.status == BalanceStatus.TO_RECEIVE
    assert result.loan_result.elapsed_years == 2
    assert len(result.repayment_results) == 1
    assert result.repayment_results[0].elapsed_years == 1


def test_received_loan_inverts_sign(given_loan: LoanLedger):
    """Test a borrowed loan reports the same net as still to pay"""
    ledger = LoanLedger(
        principal=given_loan.principal,
        monthly_rate_percent=given_loan.monthly_rate_percent,
        loan_date=given_loan.loan_date,
        direction=LoanDirection.RECEIVED,
        repayments=given_loan.repayments,
    )
    result = calculate_net_balance(ledger, BSDate(2081, 1, 1))

    assert result.net_balance == pytest.approx(104160)
    assert result.signed_balance == pytest.approx(-104160)
    assert result.status == BalanceStatus.TO_PAY


def test_earlier_repayment_offsets_more():
    """Test the same repayment amount counts for more when paid earlier"""
    def net_with_repayment_on(repaid_on: BSDate) -> float:
        ledger = LoanLedger(
            principal=100000,
            monthly_rate_percent=2,
            loan_date=BSDate(2079, 1, 1),
            repayments=(RepaymentRecord(amount=40000, date=repaid_on),),
        )
        return calculate_net_balance(ledger, BSDate(2081, 1, 1)).net_balance

    assert net_with_repayment_on(BSDate(2079, 6, 1)) < net_with_repayment_on(BSDate(2080, 6, 1))


def test_netting_identity_zero_elapsed():
    """Test repayments summing to the amount due with no elapsed time settle the loan"""
    today = BSDate(2081, 4, 10)
    ledger = LoanLedger(
        principal=100000,
        monthly_rate_percent=2,
        loan_date=today,
        repayments=(
            RepaymentRecord(amount=60000, date=today),
            RepaymentRecord(amount=40000, date=today),
        ),
    )
    result = calculate_net_balance(ledger, today)

    assert result.total_amount_due == 100000
    assert result.repayments_value_today == 100000
    assert result.net_balance == 0
    assert result.status == BalanceStatus.SETTLED


def test_no_repayments():
    ledger = LoanLedger(principal=50000, monthly_rate_percent=1.5, loan_date=BSDate(2080, 3, 10))
    result = calculate_net_balance(ledger, BSDate(2080, 3, 25))

    assert result.repayments_value_today == 0
    assert result.net_balance == pytest.approx(50375)


def test_principal_interest_base_passes_through(given_loan: LoanLedger):
    result = calculate_net_balance(
        given_loan, BSDate(2081, 3, 15), interest_base=InterestBase.PRINCIPAL
    )
    assert result.loan_result.months_interest == pytest.approx(4000)


def test_as_of_defaults_to_today(monkeypatch, given_loan: LoanLedger):
    """Test the evaluation date falls back to the current BS date"""
    monkeypatch.setattr(netting, "get_current_bs_date", lambda: BSDate(2081, 1, 1))
    result = calculate_net_balance(given_loan)

    assert result.as_of == BSDate(2081, 1, 1)
    assert result.net_balance == pytest.approx(104160)


@pytest.mark.parametrize(
    "net, direction, status",
    [
        (100, LoanDirection.GIVEN, BalanceStatus.TO_RECEIVE),
        (-100, LoanDirection.GIVEN, BalanceStatus.OVERPAID),
        (100, LoanDirection.RECEIVED, BalanceStatus.TO_PAY),
        (-100, LoanDirection.RECEIVED, BalanceStatus.OVERPAID),
        (0.001, LoanDirection.GIVEN, BalanceStatus.SETTLED),
    ],
)
def test_balance_status(net: float, direction: LoanDirection, status: BalanceStatus):
    assert balance_status(direction, net) == status


def _ledger_with(*repayments: RepaymentRecord, principal: float = 100000) -> LoanLedger:
    return LoanLedger(
        principal=principal,
        monthly_rate_percent=2,
        loan_date=BSDate(2080, 1, 1),
        repayments=repayments,
    )


def test_rejects_repayment_before_loan_date():
    ledger = _ledger_with(RepaymentRecord(amount=1000, date=BSDate(2079, 12, 30)))
    with pytest.raises(InvalidInputError) as exc_info:
        calculate_net_balance(ledger, BSDate(2081, 1, 1))
    assert "repayments[0].date" in exc_info.value.field_errors


def test_rejects_repayment_after_as_of():
    ledger = _ledger_with(RepaymentRecord(amount=1000, date=BSDate(2081, 1, 2)))
    with pytest.raises(InvalidInputError) as exc_info:
        calculate_net_balance(ledger, BSDate(2081, 1, 1))
    assert "repayments[0].date" in exc_info.value.field_errors


def test_rejects_repayments_exceeding_principal():
    ledger = _ledger_with(
        RepaymentRecord(amount=60000, date=BSDate(2080, 2, 1)),
        RepaymentRecord(amount=50000, date=BSDate(2080, 3, 1)),
    )
    with pytest.raises(InvalidInputError) as exc_info:
        calculate_net_balance(ledger, BSDate(2081, 1, 1))
    assert "repayments" in exc_info.value.field_errors


def test_rejects_loan_after_as_of():
    with pytest.raises(InvalidInputError) as exc_info:
        validate_ledger(_ledger_with(), BSDate(2079, 1, 1))
    assert "loan_date" in exc_info.value.field_errors


def test_reports_every_offending_field():
    """Test all problems are reported together"""
    ledger = LoanLedger(
        principal=0,
        monthly_rate_percent=-1,
        loan_date=BSDate(2080, 1, 1),
        direction="lent",
        repayments=(RepaymentRecord(amount=-5, date=BSDate(2080, 2, 1)),),
    )
    with pytest.raises(InvalidInputError) as exc_info:
        validate_ledger(ledger, BSDate(2081, 1, 1))

    assert set(exc_info.value.field_errors) >= {
        "principal",
        "monthly_rate_percent",
        "direction",
        "repayments[0].amount",
    }
