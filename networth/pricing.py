"""
Stock price resolution from date-anchored targets.

A stock priced in ``"targets"`` mode has a sparse list of
``(date, expected_price)`` anchors. The price per share at any date is:

- the initial price before the first anchor (no backward extrapolation),
- the last anchor's price at or after the last anchor (growth stops there),
- between two anchors, either the earlier anchor's price (step function) or
  a linear interpolation on elapsed time when estimation is enabled.

Incomplete anchors (no date, non-positive price) are discarded first.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, List, Optional, Tuple

from .assets import StockTarget
from .utils import as_datetime, safe_float

__all__ = [
    "usable_targets",
    "resolve_price_per_share",
]


def usable_targets(targets: Optional[Iterable[StockTarget]]) -> List[Tuple[datetime, float]]:
    """Drop incomplete anchors and return ``(datetime, price)`` pairs sorted by date."""
    if not targets:
        return []
    anchors = [
        (as_datetime(t.date), safe_float(t.expected_price))
        for t in targets
        if t.is_usable
    ]
    # Stable sort keeps input order for anchors sharing a date
    anchors.sort(key=lambda pair: pair[0])
    return anchors


def resolve_price_per_share(
    initial_price: float,
    targets: Optional[Iterable[StockTarget]],
    use_estimation: bool,
    at: date | datetime,
) -> float:
    """
    Price per share effective at *at*.

    Parameters
    ----------
    initial_price : float
        Price per share at the projection start.
    targets : iterable of StockTarget, optional
        Price anchors in any order.
    use_estimation : bool
        Interpolate between anchors instead of holding the earlier price.
    at : date or datetime
        Date to price.

    Returns
    -------
    float

    Examples
    --------
    >>> from datetime import date
    >>> anchors = [StockTarget(date(2026, 1, 1), 100.0), StockTarget(date(2027, 1, 1), 200.0)]
    >>> resolve_price_per_share(50.0, anchors, False, date(2026, 6, 1))
    100.0
    >>> resolve_price_per_share(50.0, anchors, False, date(2028, 1, 1))
    200.0
    """
    initial_price = safe_float(initial_price)
    anchors = usable_targets(targets)
    if not anchors:
        return initial_price

    when = as_datetime(at)
    first_date, _ = anchors[0]
    last_date, last_price = anchors[-1]

    if when < first_date:
        return initial_price
    if when >= last_date:
        return last_price

    for (prev_date, prev_price), (next_date, next_price) in zip(anchors, anchors[1:]):
        if prev_date <= when < next_date:
            if not use_estimation:
                return prev_price
            span = (next_date - prev_date).total_seconds()
            if span <= 0:
                return prev_price
            progress = (when - prev_date).total_seconds() / span
            return prev_price + (next_price - prev_price) * progress

    # Unreachable for sorted anchors; kept so the function always returns a number
    return initial_price
