"""
Cash-flow modeling for the net-worth projection.

Purpose
-------
Models the recurring side of a household snapshot and the figures derived
from it:

- Income: monthly income stream, optionally limited to a date range
- Expense: monthly expense stream
- InvestmentPolicy: share of monthly savings diverted into a stock
- CashFlow: income, expenses and debt service at one instant

The monthly saving at an instant is:
    savings = income − expenses − Σ minimum_payment − Σ monthly_interest

Income and expense records carry an annual growth rate, but the projection
holds their amounts constant over the horizon.

Example
-------
>>> salary = Income(id="i1", source="Salary", monthly_amount=2_000)
>>> rent = Expense(id="e1", category="Rent", monthly_amount=1_500)
>>> flow = monthly_cash_flow([salary], [rent], [])
>>> flow.savings
500.0
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Literal, Optional

from .assets import Asset
from .liabilities import Liability, monthly_interest
from .utils import as_datetime, safe_float

__all__ = [
    "Income",
    "Expense",
    "InvestmentType",
    "InvestmentPolicy",
    "CashFlow",
    "income_is_active",
    "monthly_cash_flow",
    "current_net_worth",
    "monthly_net",
]

InvestmentType = Literal["rate", "stock", "cash"]


# ---------------------------------------------------------------------------
# Streams
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Income:
    """
    Monthly income stream.

    Parameters
    ----------
    id : str
        Stable identity.
    source : str
        Display name (employer, rental, ...).
    monthly_amount : float
        Amount received per month.
    growth_rate : float, default 0.0
        Annual growth in percent (not compounded by the projection).
    has_date_range : bool, default False
        Limit the stream to ``[start_date, end_date]``.
    start_date, end_date : date, optional
        Inclusive bounds; a missing bound is open.
    """
    id: str
    source: str
    monthly_amount: float
    growth_rate: float = 0.0
    has_date_range: bool = False
    start_date: Optional[date] = None
    end_date: Optional[date] = None


@dataclass(frozen=True)
class Expense:
    """
    Monthly expense stream.

    Parameters
    ----------
    id : str
        Stable identity.
    category : str
        Display name (rent, groceries, ...).
    monthly_amount : float
        Amount spent per month.
    growth_rate : float, default 0.0
        Annual inflation in percent (not compounded by the projection).
    """
    id: str
    category: str
    monthly_amount: float
    growth_rate: float = 0.0


@dataclass(frozen=True)
class InvestmentPolicy:
    """
    Automatic investment of monthly savings.

    Only ``investment_type="stock"`` triggers purchases; the stock is the
    asset whose symbol equals ``investment_stock_symbol``.

    Parameters
    ----------
    investment_percentage : float, default 0.0
        Share of accumulated savings (0–100) used for purchases. The
        engine does not clamp it.
    investment_type : {"rate", "stock", "cash"}, default "rate"
    investment_rate : float, default 0.0
        Expected annual return in percent for the ``"rate"`` type.
    investment_stock_symbol : str, default ""
    """
    investment_percentage: float = 0.0
    investment_type: InvestmentType = "rate"
    investment_rate: float = 0.0
    investment_stock_symbol: str = ""

    @property
    def buys_stock(self) -> bool:
        """True when the policy asks for automatic stock purchases."""
        return (
            safe_float(self.investment_percentage) > 0
            and self.investment_type == "stock"
            and bool(self.investment_stock_symbol)
        )


# ---------------------------------------------------------------------------
# Cash-flow figures
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CashFlow:
    """Monthly cash-flow figures at one instant."""
    income: float
    expenses: float
    loan_payments: float
    loan_interest: float

    @property
    def outflow(self) -> float:
        """Expenses including debt service."""
        return self.expenses + self.loan_payments + self.loan_interest

    @property
    def savings(self) -> float:
        return self.income - self.outflow


def income_is_active(income: Income, at: date | datetime) -> bool:
    """Whether *income* contributes at *at*.

    Streams without a date range are always active. Bounds are inclusive
    and compared on calendar dates.
    """
    if not income.has_date_range:
        return True
    day = as_datetime(at).date()
    if income.start_date is not None and day < income.start_date:
        return False
    if income.end_date is not None and day > income.end_date:
        return False
    return True


def monthly_cash_flow(
    incomes: Iterable[Income],
    expenses: Iterable[Expense],
    liabilities: Iterable[Liability],
    at: Optional[date | datetime] = None,
) -> CashFlow:
    """
    Monthly cash-flow figures for the given streams and debts.

    Parameters
    ----------
    incomes, expenses : iterable
        Streams of the snapshot.
    liabilities : iterable of Liability
        Debts with their balances at this instant.
    at : date or datetime, optional
        Instant used to gate dated income. When None every stream counts.

    Returns
    -------
    CashFlow
    """
    liabilities = list(liabilities)
    total_income = sum(
        safe_float(i.monthly_amount)
        for i in incomes
        if at is None or income_is_active(i, at)
    )
    return CashFlow(
        income=float(total_income),
        expenses=float(sum(safe_float(e.monthly_amount) for e in expenses)),
        loan_payments=float(sum(safe_float(l.minimum_payment) for l in liabilities)),
        loan_interest=float(sum(monthly_interest(l) for l in liabilities)),
    )


# ---------------------------------------------------------------------------
# Current figures
# ---------------------------------------------------------------------------

def current_net_worth(assets: Iterable[Asset], liabilities: Iterable[Liability]) -> float:
    """Sum of asset values minus sum of liability balances, as of today."""
    total_assets = sum(safe_float(a.value) for a in assets)
    total_liabilities = sum(safe_float(l.balance) for l in liabilities)
    return float(total_assets - total_liabilities)


def monthly_net(
    incomes: Iterable[Income],
    expenses: Iterable[Expense],
    liabilities: Iterable[Liability],
) -> float:
    """Monthly surplus ignoring income date ranges (current-state figure)."""
    return monthly_cash_flow(incomes, expenses, liabilities).savings
