"""
Unit tests for cashflow.py module.

Tests income and expense streams, the investment policy and monthly
cash-flow figures.
"""

from datetime import date, datetime

import pytest

from networth.cashflow import (
    CashFlow,
    Expense,
    Income,
    InvestmentPolicy,
    current_net_worth,
    income_is_active,
    monthly_cash_flow,
    monthly_net,
)
from networth.liabilities import Liability


# ============================================================================
# INCOME DATE RANGES
# ============================================================================

class TestIncomeActive:
    """Test date-range gating of income."""

    def test_without_range_always_active(self, salary):
        assert income_is_active(salary, date(1990, 1, 1))
        assert income_is_active(salary, date(2090, 1, 1))

    def test_bounds_are_inclusive(self):
        bonus = Income(
            id="b", source="Contract", monthly_amount=100.0, has_date_range=True,
            start_date=date(2025, 3, 1), end_date=date(2025, 6, 30),
        )
        assert not income_is_active(bonus, date(2025, 2, 28))
        assert income_is_active(bonus, date(2025, 3, 1))
        assert income_is_active(bonus, datetime(2025, 6, 30, 18))
        assert not income_is_active(bonus, date(2025, 7, 1))

    def test_open_ended_range(self):
        pension = Income(id="p", source="Pension", monthly_amount=100.0, has_date_range=True,
                         start_date=date(2040, 1, 1))
        assert not income_is_active(pension, date(2039, 12, 31))
        assert income_is_active(pension, date(2080, 1, 1))

    def test_dates_ignored_without_flag(self):
        income = Income(id="i", source="Job", monthly_amount=100.0, has_date_range=False,
                        end_date=date(2000, 1, 1))
        assert income_is_active(income, date(2025, 1, 1))


# ============================================================================
# INVESTMENT POLICY
# ============================================================================

class TestInvestmentPolicy:
    """Test when the policy triggers purchases."""

    def test_default_does_not_buy(self):
        assert not InvestmentPolicy().buys_stock

    def test_stock_policy_buys(self):
        policy = InvestmentPolicy(investment_percentage=20, investment_type="stock",
                                  investment_stock_symbol="VOO")
        assert policy.buys_stock

    @pytest.mark.parametrize("kwargs", [
        dict(investment_percentage=0, investment_type="stock", investment_stock_symbol="VOO"),
        dict(investment_percentage=20, investment_type="rate", investment_stock_symbol="VOO"),
        dict(investment_percentage=20, investment_type="cash", investment_stock_symbol="VOO"),
        dict(investment_percentage=20, investment_type="stock", investment_stock_symbol=""),
    ])
    def test_incomplete_policies_do_not_buy(self, kwargs):
        assert not InvestmentPolicy(**kwargs).buys_stock


# ============================================================================
# MONTHLY FIGURES
# ============================================================================

class TestMonthlyCashFlow:
    """Test monthly cash-flow aggregation."""

    def test_income_minus_expenses(self, salary, rent):
        flow = monthly_cash_flow([salary], [rent], [])
        assert isinstance(flow, CashFlow)
        assert flow.income == 2_000.0
        assert flow.expenses == 1_500.0
        assert flow.outflow == 1_500.0
        assert flow.savings == 500.0

    def test_debt_service_included(self, salary, rent, loan):
        flow = monthly_cash_flow([salary], [rent], [loan])
        interest = 10_000.0 * 0.05 / 12
        assert flow.loan_payments == 500.0
        assert flow.loan_interest == pytest.approx(interest)
        assert flow.outflow == pytest.approx(2_000.0 + interest)
        assert flow.savings == pytest.approx(-interest)

    def test_paid_off_debt_still_counts_minimum_payment(self, salary):
        paid = Liability(id="l", name="Loan", balance=0.0, interest_rate=5.0, minimum_payment=300.0)
        flow = monthly_cash_flow([salary], [], [paid])
        assert flow.loan_interest == 0.0
        assert flow.savings == 1_700.0

    def test_dated_income_gated_by_instant(self, salary):
        later = Income(id="later", source="New job", monthly_amount=1_000.0, has_date_range=True,
                       start_date=date(2026, 1, 1))
        assert monthly_cash_flow([salary, later], [], [], date(2025, 6, 1)).income == 2_000.0
        assert monthly_cash_flow([salary, later], [], [], date(2026, 6, 1)).income == 3_000.0
        assert monthly_cash_flow([salary, later], [], []).income == 3_000.0

    def test_missing_amounts_count_as_zero(self):
        flow = monthly_cash_flow(
            [Income(id="i", source="?", monthly_amount=None)],
            [Expense(id="e", category="?", monthly_amount=float("nan"))],
            [],
        )
        assert flow.savings == 0.0

    def test_empty(self):
        assert monthly_cash_flow([], [], []).savings == 0.0


class TestCurrentFigures:
    """Test current net worth and monthly surplus."""

    def test_current_net_worth(self, bank, house, loan):
        assert current_net_worth([bank, house], [loan]) == pytest.approx(-8_000.0)

    def test_monthly_net(self, salary, rent, loan):
        assert monthly_net([salary], [rent], []) == 500.0
        assert monthly_net([salary], [rent], [loan]) == pytest.approx(-10_000.0 * 0.05 / 12)

    def test_snapshot_figures(self, household):
        assert household.net_worth() == pytest.approx(1_000.0 + 1_000.0 + 1_000.0 - 10_000.0)
        assert household.monthly_net() == pytest.approx(500.0 - 500.0 - 10_000.0 * 0.05 / 12)
