"""
Global constants for the net-worth projection toolkit.

Purpose
-------
Centralizes default values and magic numbers used throughout the package.
Using constants instead of hardcoded values keeps the engine, the CLI and
the configuration layer consistent with each other.

Usage
-----
>>> from networth.constants import DEFAULT_SAMPLE_COUNT, CASH_RESERVOIR_ID
>>> points = project(snapshot, 3, sample_count=DEFAULT_SAMPLE_COUNT)  # doctest: +SKIP

Categories
----------
- Projection: sample counts, horizon, calendar conversions
- Cash reservoir: reserved identity of the bank account
- Distribution: frequency intervals and flush tolerance
- Market data: cache lifetimes, base currency
- Plotting: figure sizes, line widths
"""

from typing import Dict, Tuple

__all__ = [
    # Projection
    "DEFAULT_SAMPLE_COUNT",
    "DEFAULT_HORIZON_YEARS",
    "DAYS_PER_YEAR",
    "MONTHS_PER_YEAR",
    # Cash reservoir
    "CASH_RESERVOIR_ID",
    "CASH_RESERVOIR_NAME",
    # Distribution
    "DISTRIBUTION_INTERVALS",
    "DEFAULT_DISTRIBUTION_FREQUENCY",
    "FLUSH_TOLERANCE",
    # Market data
    "DEFAULT_PRICE_CACHE_TTL",
    "DEFAULT_EXCHANGE_RATE_TTL",
    "BASE_CURRENCY",
    "VALUE_CHANGE_THRESHOLD",
    # Plotting
    "DEFAULT_FIGSIZE",
    "DEFAULT_LINEWIDTH",
    "DEFAULT_LINEWIDTH_THICK",
]


# =============================================================================
# Projection Defaults
# =============================================================================

DEFAULT_SAMPLE_COUNT: int = 100
"""Number of evenly spaced projection points produced per run."""

DEFAULT_HORIZON_YEARS: float = 3.0
"""Default projection horizon in years."""

DAYS_PER_YEAR: float = 365.25
"""Length of a year in days, used for fractional-year arithmetic."""

MONTHS_PER_YEAR: int = 12
"""Number of months in a year."""


# =============================================================================
# Cash Reservoir
# =============================================================================

CASH_RESERVOIR_ID: str = "permanent-bank-account"
"""Reserved identity of the permanent bank account (default savings sink)."""

CASH_RESERVOIR_NAME: str = "Bank account"
"""Display name used when the reservoir has to be created during a run."""


# =============================================================================
# Distribution Defaults
# =============================================================================

DISTRIBUTION_INTERVALS: Dict[str, float] = {
    "monthly": 1.0 / 12.0,
    "quarterly": 3.0 / 12.0,
    "yearly": 1.0,
}
"""Distribution frequency → interval between deposits, in years."""

DEFAULT_DISTRIBUTION_FREQUENCY: str = "monthly"
"""Frequency assumed for assets that do not specify one."""

FLUSH_TOLERANCE: float = 1e-9
"""Absolute tolerance (years) when comparing elapsed time to an interval."""


# =============================================================================
# Market Data Defaults
# =============================================================================

DEFAULT_PRICE_CACHE_TTL: float = 30.0
"""Lifetime of a cached stock price, in seconds."""

DEFAULT_EXCHANGE_RATE_TTL: float = 300.0
"""Lifetime of an exchange-rate table before it is considered stale."""

BASE_CURRENCY: str = "USD"
"""Currency all exchange rates are quoted against."""

VALUE_CHANGE_THRESHOLD: float = 0.01
"""Minimum change in a stock's value for a live price to be applied."""


# =============================================================================
# Plotting Defaults
# =============================================================================

DEFAULT_FIGSIZE: Tuple[int, int] = (12, 6)
"""Default figure size (width, height) in inches for projection charts."""

DEFAULT_LINEWIDTH: float = 1.0
"""Default line width for secondary series."""

DEFAULT_LINEWIDTH_THICK: float = 2.0
"""Line width for the net-worth series."""
