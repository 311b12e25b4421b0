"""Pytest fixtures for testing"""

import pytest
from datetime import date
from fastapi.testclient import TestClient
from nepali_ledger.api.main import create_app
from nepali_ledger.api.dependencies import get_current_date
from nepali_ledger.domain.models import BSDate, CurrentDate, LoanDirection, LoanLedger, RepaymentRecord


# BS 2081/01/01 == AD 2024-04-13
FIXED_TODAY = CurrentDate(bs_date=BSDate(2081, 1, 1), ad_date=date(2024, 4, 13))


@pytest.fixture
def today() -> CurrentDate:
    return FIXED_TODAY


@pytest.fixture
def client(today: CurrentDate) -> TestClient:
    """Create FastAPI test client with a fixed "today" """
    app = create_app()
    app.dependency_overrides[get_current_date] = lambda: today
    return TestClient(app)


@pytest.fixture
def given_loan() -> LoanLedger:
    """100000 lent at 2%/month on 2079/01/01 with one 40000 repayment a year later"""
    return LoanLedger(
        principal=100000,
        monthly_rate_percent=2,
        loan_date=BSDate(2079, 1, 1),
        direction=LoanDirection.GIVEN,
        repayments=(RepaymentRecord(amount=40000, date=BSDate(2080, 1, 1)),),
    )
