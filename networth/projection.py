"""Projection engine for networth

Advances a household snapshot through time and samples its balance sheet
and monthly cash flow at evenly spaced instants.

Per sample, in order:
1. revalue every asset at the sample date (see ``valuation``),
2. record a ``ProjectionPoint``,
3. unless it is the last sample, accrue the monthly savings over the step,
   deposit them into the cash reservoir and buy the policy stock at each
   destination's own distribution frequency, then amortize every liability.

State is threaded strictly forward in a ``SimulationState`` built fresh for
each run; the input ``Snapshot`` is frozen and never touched.

Typical usage
-------------
>>> from datetime import datetime
>>> from networth.assets import CashAsset, GrowthAsset
>>> from networth.cashflow import Income, Expense
>>> snapshot = Snapshot(
...     assets=(CashAsset(id="permanent-bank-account", name="Bank", value=1_000),),
...     incomes=(Income(id="i1", source="Salary", monthly_amount=2_000),),
...     expenses=(Expense(id="e1", category="Rent", monthly_amount=1_500),),
... )
>>> points = project(snapshot, 1, start=datetime(2025, 1, 1))
>>> len(points), round(points[-1].total_assets)
(100, 7000)
"""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from datetime import date, datetime
from typing import Iterable, List, Optional, Sequence, Tuple

import pandas as pd

from .assets import (
    Asset,
    CashAsset,
    StockAsset,
    distribution_interval,
    find_cash_reservoir,
    find_stock_by_symbol,
    is_cash_reservoir,
)
from .cashflow import (
    CashFlow,
    Expense,
    Income,
    InvestmentPolicy,
    current_net_worth,
    monthly_cash_flow,
    monthly_net,
)
from .constants import (
    CASH_RESERVOIR_ID,
    CASH_RESERVOIR_NAME,
    DEFAULT_SAMPLE_COUNT,
    FLUSH_TOLERANCE,
    MONTHS_PER_YEAR,
)
from .exceptions import ValidationError
from .liabilities import Liability, amortize
from .types import ProjectionPointDict, SnapshotSummaryDict
from .utils import add_years, as_datetime, safe_float
from .valuation import stock_price_at, value_at

__all__ = [
    "Snapshot",
    "ProjectionPoint",
    "Holding",
    "SimulationState",
    "ProjectionEngine",
    "project",
    "projection_to_frame",
]

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Input and output records
# ---------------------------------------------------------------------------

def _check_unique(kind: str, ids: Iterable[str]) -> None:
    seen = set()
    for item_id in ids:
        if item_id in seen:
            raise ValidationError(f"Duplicate {kind} id '{item_id}'.")
        seen.add(item_id)


@dataclass(frozen=True)
class Snapshot:
    """
    Complete financial state at year 0.

    Parameters
    ----------
    assets : sequence of Asset
        Holdings. Identities must be unique, so at most one asset can be the
        cash reservoir (``id == "permanent-bank-account"``).
    liabilities : sequence of Liability
    incomes : sequence of Income
    expenses : sequence of Expense
    policy : InvestmentPolicy
        Automatic investment settings.
    years_to_project : float, optional
        Preferred horizon stored alongside the data (used by the CLI).
    """
    assets: Tuple[Asset, ...] = ()
    liabilities: Tuple[Liability, ...] = ()
    incomes: Tuple[Income, ...] = ()
    expenses: Tuple[Expense, ...] = ()
    policy: InvestmentPolicy = field(default_factory=InvestmentPolicy)
    years_to_project: Optional[float] = None

    def __post_init__(self) -> None:
        for name in ("assets", "liabilities", "incomes", "expenses"):
            object.__setattr__(self, name, tuple(getattr(self, name)))
        _check_unique("asset", (a.id for a in self.assets))
        _check_unique("liability", (l.id for l in self.liabilities))

    @property
    def cash_reservoir(self) -> Optional[Asset]:
        return find_cash_reservoir(self.assets)

    def net_worth(self) -> float:
        """Current assets minus current liabilities."""
        return current_net_worth(self.assets, self.liabilities)

    def monthly_net(self) -> float:
        """Current monthly surplus after expenses and debt service."""
        return monthly_net(self.incomes, self.expenses, self.liabilities)

    def summary(self) -> SnapshotSummaryDict:
        """Current totals, net worth and monthly surplus."""
        return {
            "total_assets": float(sum(safe_float(a.value) for a in self.assets)),
            "total_liabilities": float(sum(safe_float(l.balance) for l in self.liabilities)),
            "net_worth": self.net_worth(),
            "monthly_net": self.monthly_net(),
        }

    def cash_flow(self, at: Optional[date | datetime] = None) -> CashFlow:
        return monthly_cash_flow(self.incomes, self.expenses, self.liabilities, at)

    def with_assets(self, assets: Sequence[Asset]) -> "Snapshot":
        return Snapshot(
            assets=tuple(assets),
            liabilities=self.liabilities,
            incomes=self.incomes,
            expenses=self.expenses,
            policy=self.policy,
            years_to_project=self.years_to_project,
        )


@dataclass(frozen=True)
class ProjectionPoint:
    """One sampled instant of a projection."""
    year: float
    date: datetime
    total_assets: float
    total_liabilities: float
    net_worth: float
    monthly_income: float
    monthly_expenses: float
    monthly_savings: float

    def to_dict(self) -> ProjectionPointDict:
        data = asdict(self)
        data["date"] = self.date.isoformat()
        return data  # type: ignore[return-value]


# ---------------------------------------------------------------------------
# Simulation state
# ---------------------------------------------------------------------------

@dataclass
class Holding:
    """Working copy of one asset during a run.

    Non-stock assets are valued from ``base_value`` compounded since
    ``anchor``; stocks from ``initial_price`` and ``quantity``.
    """
    asset: Asset
    value: float
    base_value: float
    anchor: datetime
    quantity: float = 0.0
    initial_price: float = 0.0


@dataclass
class SimulationState:
    """Mutable state of one projection run."""
    start: datetime
    holdings: List[Holding]
    liabilities: List[Liability]
    cash_pending: float = 0.0
    invest_pending: float = 0.0
    last_cash_flush: float = 0.0
    last_invest_flush: float = 0.0

    @classmethod
    def from_snapshot(cls, snapshot: Snapshot, start: datetime) -> "SimulationState":
        holdings = []
        for asset in snapshot.assets:
            value = safe_float(asset.value)
            if isinstance(asset, StockAsset):
                holdings.append(Holding(
                    asset=asset,
                    value=value,
                    base_value=value,
                    anchor=start,
                    quantity=safe_float(asset.quantity),
                    initial_price=asset.initial_price_per_share,
                ))
            else:
                holdings.append(Holding(asset=asset, value=value, base_value=value, anchor=start))
        return cls(start=start, holdings=holdings, liabilities=list(snapshot.liabilities))

    # -------------------- Valuation --------------------
    def price_per_share(self, holding: Holding, at: datetime) -> float:
        return stock_price_at(holding.asset, at, self.start, initial_price=holding.initial_price)

    def revalue(self, at: datetime) -> None:
        for h in self.holdings:
            h.value = value_at(
                h.asset, at, self.start,
                quantity=h.quantity,
                initial_price=h.initial_price,
                base_value=h.base_value,
                anchor=h.anchor,
            )

    @property
    def total_assets(self) -> float:
        return float(sum(h.value for h in self.holdings))

    @property
    def total_liabilities(self) -> float:
        return float(sum(safe_float(l.balance) for l in self.liabilities))

    # -------------------- Cash reservoir --------------------
    def reservoir(self, at: datetime) -> Holding:
        """Cash reservoir holding, created empty at *at* when missing."""
        for h in self.holdings:
            if is_cash_reservoir(h.asset):
                return h
        logger.debug("Cash reservoir missing, creating it at %s", at.isoformat())
        holding = Holding(
            asset=CashAsset(id=CASH_RESERVOIR_ID, name=CASH_RESERVOIR_NAME, value=0.0),
            value=0.0,
            base_value=0.0,
            anchor=at,
        )
        self.holdings.append(holding)
        return holding

    def adjust_reservoir(self, amount: float, at: datetime) -> None:
        """Add *amount* (negative to debit) to the reservoir and re-anchor its growth at *at*."""
        h = self.reservoir(at)
        h.value += amount
        h.base_value = h.value
        h.anchor = at

    def find_stock(self, symbol: Optional[str]) -> Optional[Holding]:
        stock = find_stock_by_symbol((h.asset for h in self.holdings), symbol)
        if stock is None:
            return None
        return next(h for h in self.holdings if h.asset is stock)

    # -------------------- Liabilities --------------------
    def amortize(self, step_years: float) -> None:
        self.liabilities = [
            l.with_balance(amortize(l, step_years).balance) for l in self.liabilities
        ]


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

class ProjectionEngine:
    """Deterministic net-worth projection over a fixed number of samples.

    Parameters
    ----------
    snapshot : Snapshot
        Financial state at year 0. Never modified.
    start : date or datetime, optional
        Calendar date of year 0. Defaults to the current local time; pass a
        fixed value for reproducible output.
    """

    def __init__(self, snapshot: Snapshot, start: Optional[date | datetime] = None):
        self.snapshot = snapshot
        self.start = as_datetime(start) if start is not None else datetime.now()

    def run(self, horizon_years: float, sample_count: int = DEFAULT_SAMPLE_COUNT) -> Tuple[ProjectionPoint, ...]:
        """Project ``horizon_years`` ahead and return ``sample_count`` points.

        The points span ``[0, horizon_years]`` inclusive. A single sample
        returns year 0 only; fewer than one returns an empty tuple. A
        negative horizon is read as zero.
        """
        horizon = max(safe_float(horizon_years), 0.0)
        n = int(sample_count)
        if n < 1:
            return ()

        step_years = horizon / (n - 1) if n > 1 else 0.0
        state = SimulationState.from_snapshot(self.snapshot, self.start)
        logger.debug(
            "Projecting %d assets and %d liabilities over %.4g years (%d samples, start %s)",
            len(state.holdings), len(state.liabilities), horizon, n, self.start.isoformat(),
        )

        points: List[ProjectionPoint] = []
        for i in range(n):
            year = horizon if 0 < i == n - 1 else i * step_years
            at = add_years(self.start, year)
            state.revalue(at)

            flow = monthly_cash_flow(self.snapshot.incomes, self.snapshot.expenses, state.liabilities, at)
            total_assets = state.total_assets
            total_liabilities = state.total_liabilities
            points.append(ProjectionPoint(
                year=year,
                date=at,
                total_assets=total_assets,
                total_liabilities=total_liabilities,
                net_worth=total_assets - total_liabilities,
                monthly_income=flow.income,
                monthly_expenses=flow.outflow,
                monthly_savings=flow.savings,
            ))

            if i < n - 1:
                next_year = horizon if i + 1 == n - 1 else (i + 1) * step_years
                self._distribute(state, flow.savings, at, step_years, next_year, final=(i == n - 2))
                state.amortize(step_years)

        logger.debug("Projection finished: net worth %.2f -> %.2f", points[0].net_worth, points[-1].net_worth)
        return tuple(points)

    # -------------------- Distribution --------------------
    def _distribute(
        self,
        state: SimulationState,
        savings: float,
        at: datetime,
        step_years: float,
        next_year: float,
        *,
        final: bool,
    ) -> None:
        """Accrue one step of savings and flush each destination that is due."""
        accrued = savings * step_years * MONTHS_PER_YEAR
        state.cash_pending += accrued
        state.invest_pending += accrued

        reservoir = find_cash_reservoir(h.asset for h in state.holdings)
        cash_interval = distribution_interval(reservoir.distribution_frequency if reservoir else None)
        if final or next_year - state.last_cash_flush + FLUSH_TOLERANCE >= cash_interval:
            state.adjust_reservoir(state.cash_pending, at)
            state.cash_pending = 0.0
            state.last_cash_flush = next_year

        policy = self.snapshot.policy
        target = state.find_stock(policy.investment_stock_symbol)
        invest_interval = distribution_interval(target.asset.distribution_frequency if target else None)
        if final or next_year - state.last_invest_flush + FLUSH_TOLERANCE >= invest_interval:
            if target is not None and policy.buys_stock:
                self._buy(state, target, state.invest_pending * safe_float(policy.investment_percentage) / 100.0, at)
            state.invest_pending = 0.0
            state.last_invest_flush = next_year

    def _buy(self, state: SimulationState, target: Holding, amount: float, at: datetime) -> None:
        price = state.price_per_share(target, at)
        if price <= 0 or amount <= 0:
            return
        shares = amount / price
        target.quantity += shares
        state.adjust_reservoir(-amount, at)
        logger.debug(
            "Bought %.6f %s at %.4f on %s (%.2f debited from cash)",
            shares, target.asset.stock_symbol, price, at.date().isoformat(), amount,
        )


def project(
    snapshot: Snapshot,
    horizon_years: float,
    sample_count: int = DEFAULT_SAMPLE_COUNT,
    *,
    start: Optional[date | datetime] = None,
) -> Tuple[ProjectionPoint, ...]:
    """Project *snapshot* over *horizon_years* and return the sampled points.

    See ``ProjectionEngine.run`` for the sampling rules.
    """
    return ProjectionEngine(snapshot, start=start).run(horizon_years, sample_count)


def projection_to_frame(points: Sequence[ProjectionPoint]) -> pd.DataFrame:
    """Tabulate projection points as a DataFrame indexed by sample date."""
    columns = list(ProjectionPointDict.__annotations__)
    if not points:
        return pd.DataFrame(columns=[c for c in columns if c != "date"], index=pd.DatetimeIndex([], name="date"))
    frame = pd.DataFrame([asdict(p) for p in points])
    return frame.set_index(pd.DatetimeIndex(frame.pop("date"), name="date"))
