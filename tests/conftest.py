"""
Pytest configuration and fixtures for the networth test suite.

This module provides reusable snapshots and records for testing the
projection engine and its collaborators.
"""

from datetime import date, datetime

import pytest

from networth.assets import CashAsset, GrowthAsset, StockAsset, StockTarget
from networth.cashflow import Expense, Income, InvestmentPolicy
from networth.constants import CASH_RESERVOIR_ID
from networth.liabilities import Liability
from networth.projection import Snapshot


# ---------------------------------------------------------------------------
# Date Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def start() -> datetime:
    """Fixed projection start for reproducible runs."""
    return datetime(2025, 1, 1)


# ---------------------------------------------------------------------------
# Asset Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def bank() -> CashAsset:
    """Cash reservoir holding 1,000 with no interest."""
    return CashAsset(id=CASH_RESERVOIR_ID, name="Bank account", value=1_000.0)


@pytest.fixture
def house() -> GrowthAsset:
    """Property worth 1,000 appreciating 10% per year."""
    return GrowthAsset(id="house", name="House", value=1_000.0, growth_rate=10.0, kind="property")


@pytest.fixture
def msft() -> StockAsset:
    """10 shares at 100 per share, flat price."""
    return StockAsset(
        id="msft",
        name="Microsoft",
        value=1_000.0,
        stock_symbol="MSFT",
        quantity=10.0,
    )


@pytest.fixture
def msft_targets() -> StockAsset:
    """10 shares at 100 with price targets at the start of 2026 and 2027."""
    return StockAsset(
        id="msft",
        name="Microsoft",
        value=1_000.0,
        stock_symbol="MSFT",
        quantity=10.0,
        stock_growth_type="targets",
        stock_targets=(
            StockTarget(date(2027, 1, 1), 200.0),
            StockTarget(date(2026, 1, 1), 150.0),
        ),
    )


# ---------------------------------------------------------------------------
# Cash-Flow Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def salary() -> Income:
    return Income(id="salary", source="Salary", monthly_amount=2_000.0)


@pytest.fixture
def rent() -> Expense:
    return Expense(id="rent", category="Rent", monthly_amount=1_500.0)


@pytest.fixture
def loan() -> Liability:
    """Small loan: 10,000 at 5% with 500 per month."""
    return Liability(id="loan", name="Car loan", balance=10_000.0, interest_rate=5.0,
                     minimum_payment=500.0, type="auto")


# ---------------------------------------------------------------------------
# Snapshot Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def savings_snapshot(bank, salary, rent) -> Snapshot:
    """Bank of 1,000 with 500 per month of savings."""
    return Snapshot(assets=(bank,), incomes=(salary,), expenses=(rent,))


@pytest.fixture
def investing_snapshot(msft) -> Snapshot:
    """Empty bank, 1,000 per month of income, half of it bought as MSFT."""
    return Snapshot(
        assets=(CashAsset(id=CASH_RESERVOIR_ID, name="Bank account", value=0.0), msft),
        incomes=(Income(id="salary", source="Salary", monthly_amount=1_000.0),),
        policy=InvestmentPolicy(
            investment_percentage=50.0,
            investment_type="stock",
            investment_stock_symbol="MSFT",
        ),
    )


@pytest.fixture
def household(bank, house, msft, salary, rent, loan) -> Snapshot:
    """Snapshot touching every record type."""
    return Snapshot(
        assets=(bank, house, msft),
        liabilities=(loan,),
        incomes=(salary,),
        expenses=(rent,),
        policy=InvestmentPolicy(
            investment_percentage=25.0,
            investment_type="stock",
            investment_stock_symbol="MSFT",
        ),
        years_to_project=5.0,
    )
