"""Asset valuation at a simulated date.

Two regimes:

- Stocks are worth ``price_per_share(date) × quantity``. The price comes from
  the target resolver in ``"targets"`` mode, or from compounding the initial
  price at ``growth_rate`` in ``"rate"`` mode. Quantity only changes through
  automatic purchases, never through growth.
- Everything else is ``base_value × (1 + growth_rate/100) ** years`` where
  ``years`` is measured from an anchor date with a 365.25-day year. The
  anchor is the projection start unless the caller re-anchors the asset
  (the engine does this for the cash reservoir after each deposit).
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from .assets import Asset, StockAsset
from .pricing import resolve_price_per_share
from .utils import as_datetime, growth_factor, safe_float, years_between

__all__ = [
    "stock_price_at",
    "compounded_value",
    "value_at",
]


def stock_price_at(
    stock: StockAsset,
    at: date | datetime,
    start: date | datetime,
    *,
    initial_price: Optional[float] = None,
) -> float:
    """Price per share of *stock* at *at* for a projection starting at *start*."""
    if initial_price is None:
        initial_price = stock.initial_price_per_share
    if stock.stock_growth_type == "targets":
        return resolve_price_per_share(
            initial_price, stock.stock_targets, stock.use_estimation, at
        )
    years = years_between(as_datetime(start), as_datetime(at))
    return safe_float(initial_price) * growth_factor(stock.growth_rate, years)


def compounded_value(
    base_value: float,
    growth_rate: float,
    at: date | datetime,
    anchor: date | datetime,
) -> float:
    """``base_value`` compounded annually at ``growth_rate`` % from *anchor* to *at*."""
    years = years_between(as_datetime(anchor), as_datetime(at))
    return safe_float(base_value) * growth_factor(growth_rate, years)


def value_at(
    asset: Asset,
    at: date | datetime,
    start: date | datetime,
    *,
    quantity: Optional[float] = None,
    initial_price: Optional[float] = None,
    base_value: Optional[float] = None,
    anchor: Optional[date | datetime] = None,
) -> float:
    """
    Value of *asset* at *at*.

    Parameters
    ----------
    asset : Asset
        Snapshot record.
    at : date or datetime
        Date to value.
    start : date or datetime
        Projection start date.
    quantity : float, optional
        Shares held at this step (stocks). Defaults to ``asset.quantity``.
    initial_price : float, optional
        Price per share at the start (stocks). Defaults to
        ``asset.value / asset.quantity``.
    base_value : float, optional
        Value at ``anchor`` (non-stocks). Defaults to ``asset.value``.
    anchor : date or datetime, optional
        Date ``base_value`` refers to (non-stocks). Defaults to *start*.

    Returns
    -------
    float

    Examples
    --------
    >>> from datetime import datetime
    >>> from networth.assets import GrowthAsset
    >>> from networth.utils import add_years
    >>> start = datetime(2025, 1, 1)
    >>> house = GrowthAsset(id="h", name="House", value=1000, growth_rate=10, kind="property")
    >>> round(value_at(house, add_years(start, 1), start), 2)
    1100.0
    """
    if isinstance(asset, StockAsset):
        held = safe_float(asset.quantity if quantity is None else quantity)
        return stock_price_at(asset, at, start, initial_price=initial_price) * held

    return compounded_value(
        asset.value if base_value is None else base_value,
        asset.growth_rate,
        at,
        start if anchor is None else anchor,
    )
