"""
Unit tests for liabilities.py module.

Tests debt records and per-step amortization.
"""

import pytest

from networth.exceptions import ValidationError
from networth.liabilities import AmortizationStep, Liability, amortize, monthly_interest


class TestLiability:
    """Test liability records."""

    def test_empty_id_rejected(self):
        with pytest.raises(ValidationError):
            Liability(id="", name="Loan", balance=100.0)

    def test_with_balance_returns_copy(self, loan):
        paid = loan.with_balance(0.0)
        assert paid.balance == 0.0
        assert loan.balance == 10_000.0
        assert paid.interest_rate == loan.interest_rate

    def test_monthly_interest(self, loan):
        assert monthly_interest(loan) == pytest.approx(10_000.0 * 0.05 / 12)

    def test_monthly_interest_missing_rate(self):
        debt = Liability(id="d", name="Debt", balance=1_000.0, interest_rate=None)
        assert monthly_interest(debt) == 0.0


class TestAmortize:
    """Test one amortization step."""

    def test_quarter_pays_off_small_debt(self):
        debt = Liability(id="d", name="Debt", balance=1_000.0, interest_rate=12.0, minimum_payment=1_000.0)
        result = amortize(debt, 0.25)

        assert isinstance(result, AmortizationStep)
        assert result.interest == pytest.approx(1_000.0 * (1.12 ** 0.25 - 1))
        assert result.interest == pytest.approx(28.737, abs=1e-3)
        assert result.payment == pytest.approx(1_000.0 + result.interest)
        assert result.balance == 0.0

    def test_partial_payment(self):
        debt = Liability(id="d", name="Debt", balance=12_000.0, interest_rate=0.0, minimum_payment=1_000.0)
        result = amortize(debt, 1 / 12)
        assert result.interest == 0.0
        assert result.payment == pytest.approx(1_000.0)
        assert result.balance == pytest.approx(11_000.0)

    def test_no_payment_grows_balance(self):
        debt = Liability(id="d", name="Debt", balance=1_000.0, interest_rate=10.0)
        result = amortize(debt, 1.0)
        assert result.payment == 0.0
        assert result.balance == pytest.approx(1_100.0)

    def test_zero_balance_stays_zero(self):
        debt = Liability(id="d", name="Debt", balance=0.0, interest_rate=10.0, minimum_payment=100.0)
        result = amortize(debt, 0.5)
        assert result.payment == 0.0
        assert result.balance == 0.0

    def test_never_negative(self, loan):
        balance = loan
        for _ in range(60):
            step = amortize(balance, 1 / 12)
            assert step.balance >= 0.0
            assert step.balance <= balance.balance
            balance = balance.with_balance(step.balance)
        assert balance.balance == 0.0
