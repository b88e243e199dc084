"""
Asset records for the net-worth projection.

Purpose
-------
Models the holdings of a household snapshot as a tagged union keyed by
asset type. Each variant carries only the fields that make sense for it:

- CashAsset   : bank and savings accounts (``type="cash"``)
- GrowthAsset : investments, property and other holdings that compound at
                a fixed annual rate (``type`` in investment/property/other)
- StockAsset  : a share position priced either at a fixed growth rate or
                from date-anchored price targets (``type="stock"``)

A cash asset cannot carry stock targets and a property cannot carry a
share count; invalid combinations simply cannot be built.

Design principles
-----------------
- Frozen dataclasses: the projection engine copies values into its own
  working state and never mutates a snapshot record
- Rates are annual percentages (``7.0`` means 7 %/year), as entered by users
- Every asset names how often it receives its share of accumulated savings

Example
-------
>>> from datetime import date
>>> from networth.assets import CashAsset, StockAsset, StockTarget
>>> bank = CashAsset(id="permanent-bank-account", name="Bank", value=5_000)
>>> aapl = StockAsset(
...     id="s1", name="Apple", value=1_900, stock_symbol="AAPL", quantity=10,
...     stock_growth_type="targets",
...     stock_targets=(StockTarget(date(2027, 1, 1), 250.0),),
... )
>>> aapl.initial_price_per_share
190.0
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Iterable, Literal, Optional, Tuple, Union

from .constants import (
    CASH_RESERVOIR_ID,
    DEFAULT_DISTRIBUTION_FREQUENCY,
    DISTRIBUTION_INTERVALS,
)
from .exceptions import ValidationError
from .utils import safe_float

__all__ = [
    "AssetType",
    "DistributionFrequency",
    "StockGrowthType",
    "StockTarget",
    "CashAsset",
    "GrowthAsset",
    "StockAsset",
    "Asset",
    "ASSET_TYPES",
    "distribution_interval",
    "is_cash_reservoir",
    "find_cash_reservoir",
    "find_stock_by_symbol",
]

AssetType = Literal["cash", "investment", "stock", "property", "other"]
DistributionFrequency = Literal["monthly", "quarterly", "yearly"]
StockGrowthType = Literal["rate", "targets"]

ASSET_TYPES: Tuple[str, ...] = ("cash", "investment", "stock", "property", "other")
_GROWTH_TYPES: Tuple[str, ...] = ("investment", "property", "other")


def distribution_interval(frequency: Optional[str]) -> float:
    """Interval in years between deposits for a distribution frequency.

    ``None`` falls back to the default frequency (monthly).
    """
    key = frequency or DEFAULT_DISTRIBUTION_FREQUENCY
    try:
        return DISTRIBUTION_INTERVALS[key]
    except KeyError:
        raise ValidationError(
            f"Unknown distribution frequency '{frequency}'. "
            f"Expected one of: {', '.join(DISTRIBUTION_INTERVALS)}."
        ) from None


def _check_identity(asset_id: str, name: str) -> None:
    if not asset_id:
        raise ValidationError(f"Asset '{name}' must have a non-empty id.")


# ---------------------------------------------------------------------------
# Stock target anchors
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class StockTarget:
    """
    Known or assumed future price of a stock.

    Parameters
    ----------
    date : date or None
        Anchor date. ``None`` or a blank string marks an incomplete entry,
        which the price resolver discards.
    expected_price : float
        Expected price per share at ``date``. Non-positive prices are
        discarded by the resolver.
    """
    date: Optional[date]
    expected_price: float

    @property
    def is_usable(self) -> bool:
        """True when the anchor has a date and a positive price."""
        if self.date is None or (isinstance(self.date, str) and not self.date.strip()):
            return False
        return safe_float(self.expected_price) > 0


# ---------------------------------------------------------------------------
# Asset variants
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CashAsset:
    """
    Cash holding (bank or savings account).

    The asset whose id equals ``CASH_RESERVOIR_ID`` is the permanent cash
    reservoir: it receives undistributed savings and funds automatic
    stock purchases.

    Parameters
    ----------
    id : str
        Stable identity.
    name : str
        Display name.
    value : float
        Current balance.
    growth_rate : float, default 0.0
        Annual interest in percent.
    distribution_frequency : {"monthly", "quarterly", "yearly"}, default "monthly"
        How often accumulated savings are deposited (reservoir only).
    """
    id: str
    name: str
    value: float
    growth_rate: float = 0.0
    distribution_frequency: DistributionFrequency = "monthly"
    type: Literal["cash"] = field(default="cash", init=False)

    def __post_init__(self) -> None:
        _check_identity(self.id, self.name)
        distribution_interval(self.distribution_frequency)

    @property
    def is_reservoir(self) -> bool:
        return self.id == CASH_RESERVOIR_ID

    def with_value(self, value: float) -> "CashAsset":
        return replace(self, value=value)


@dataclass(frozen=True)
class GrowthAsset:
    """
    Holding that compounds at a fixed annual rate.

    Parameters
    ----------
    id, name : str
        Identity and display name.
    value : float
        Current value.
    growth_rate : float, default 0.0
        Annual growth in percent. Negative rates model depreciation.
    kind : {"investment", "property", "other"}, default "investment"
        Asset type tag.
    distribution_frequency : {"monthly", "quarterly", "yearly"}, default "monthly"
    """
    id: str
    name: str
    value: float
    growth_rate: float = 0.0
    kind: Literal["investment", "property", "other"] = "investment"
    distribution_frequency: DistributionFrequency = "monthly"

    def __post_init__(self) -> None:
        _check_identity(self.id, self.name)
        if self.kind not in _GROWTH_TYPES:
            raise ValidationError(
                f"GrowthAsset kind must be one of {_GROWTH_TYPES}, got '{self.kind}'."
            )
        distribution_interval(self.distribution_frequency)

    @property
    def type(self) -> str:
        return self.kind

    def with_value(self, value: float) -> "GrowthAsset":
        return replace(self, value=value)


@dataclass(frozen=True)
class StockAsset:
    """
    Share position in a listed stock.

    Parameters
    ----------
    id, name : str
        Identity and display name.
    value : float
        Current market value of the whole position.
    stock_symbol : str, default ""
        Ticker used to match the investment policy and price providers.
    quantity : float, default 0.0
        Shares held.
    growth_rate : float, default 0.0
        Annual price growth in percent, used when ``stock_growth_type="rate"``.
    stock_growth_type : {"rate", "targets"}, default "rate"
        Price model: constant growth rate or date-anchored targets.
    stock_targets : tuple of StockTarget, default ()
        Price anchors for the ``"targets"`` model.
    use_estimation : bool, default False
        Interpolate linearly between anchors instead of holding each
        anchor's price until the next one.
    distribution_frequency : {"monthly", "quarterly", "yearly"}, default "monthly"
        How often automatic purchases are made when this stock is the
        investment target.
    """
    id: str
    name: str
    value: float
    stock_symbol: str = ""
    quantity: float = 0.0
    growth_rate: float = 0.0
    stock_growth_type: StockGrowthType = "rate"
    stock_targets: Tuple[StockTarget, ...] = ()
    use_estimation: bool = False
    distribution_frequency: DistributionFrequency = "monthly"
    type: Literal["stock"] = field(default="stock", init=False)

    def __post_init__(self) -> None:
        _check_identity(self.id, self.name)
        if self.stock_growth_type not in ("rate", "targets"):
            raise ValidationError(
                f"stock_growth_type must be 'rate' or 'targets', got '{self.stock_growth_type}'."
            )
        distribution_interval(self.distribution_frequency)
        # Accept any iterable of anchors but store a tuple
        object.__setattr__(self, "stock_targets", tuple(self.stock_targets))

    @property
    def initial_price_per_share(self) -> float:
        """Price per share implied by ``value / quantity`` (0 when undefined)."""
        value = safe_float(self.value)
        quantity = safe_float(self.quantity)
        if value and quantity:
            return value / quantity
        return 0.0

    def with_value(self, value: float) -> "StockAsset":
        return replace(self, value=value)


Asset = Union[CashAsset, GrowthAsset, StockAsset]


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------

def is_cash_reservoir(asset: Asset) -> bool:
    """True for the permanent bank account."""
    return asset.id == CASH_RESERVOIR_ID


def find_cash_reservoir(assets: Iterable[Asset]) -> Optional[Asset]:
    """Return the cash reservoir among *assets*, or None."""
    return next((a for a in assets if is_cash_reservoir(a)), None)


def find_stock_by_symbol(assets: Iterable[Asset], symbol: Optional[str]) -> Optional[StockAsset]:
    """Return the first stock whose symbol equals *symbol* (exact match)."""
    if not symbol:
        return None
    return next(
        (a for a in assets if isinstance(a, StockAsset) and a.stock_symbol == symbol),
        None,
    )
