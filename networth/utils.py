"""General utilities for networth

Contents
--------
- Validation helpers
- Numeric sanitising (None / NaN → 0)
- Calendar helpers (fractional years ↔ datetimes)
- Rate helpers (annual % compounding)
- Matplotlib / text formatters
"""

from __future__ import annotations

import math
from datetime import date, datetime, timedelta
from typing import Optional, Union

from .constants import DAYS_PER_YEAR

__all__ = [
    # Validation
    "check_non_negative",
    # Numbers
    "safe_float",
    # Calendar
    "as_datetime",
    "years_between",
    "add_years",
    # Rates
    "growth_factor",
    # Formatters
    "thousands_formatter",
    "format_currency",
]

DateLike = Union[date, datetime, str]


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------

def check_non_negative(name: str, value: float) -> None:
    """Raise if *value* is negative (strict)."""
    if value < 0:
        raise ValueError(f"{name} must be non-negative (got {value}).")


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------

def safe_float(value: object, default: float = 0.0) -> float:
    """Coerce *value* to float, mapping None, NaN and garbage to *default*.

    Infinite values are kept; they are a caller's problem, not a missing
    field.
    """
    if value is None or isinstance(value, bool):
        return default
    try:
        out = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    if math.isnan(out):
        return default
    return out


# ---------------------------------------------------------------------------
# Calendar helpers
# ---------------------------------------------------------------------------

def as_datetime(value: DateLike) -> datetime:
    """Normalise a date, datetime or ISO string to a naive datetime.

    Plain dates map to midnight. Timezone-aware datetimes are converted to
    naive local time so they compare against the projection calendar.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone().replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        return as_datetime(datetime.fromisoformat(value.strip()))
    raise TypeError(f"Expected date, datetime or ISO string, got {type(value).__name__}.")


def years_between(start: datetime, end: datetime) -> float:
    """Fractional years from *start* to *end* using a 365.25-day year."""
    return (end - start) / timedelta(days=DAYS_PER_YEAR)


def add_years(start: datetime, years: float) -> datetime:
    """Shift *start* by a (possibly fractional) number of 365.25-day years."""
    return start + timedelta(days=years * DAYS_PER_YEAR)


# ---------------------------------------------------------------------------
# Rate helpers
# ---------------------------------------------------------------------------

def growth_factor(rate_pct: Optional[float], years: float) -> float:
    """Compounding factor ``(1 + rate/100) ** years`` for an annual % rate.

    Missing rates count as 0 %. Returns 0.0 for a -100 % rate instead of
    raising on a fractional power of zero.
    """
    base = 1.0 + safe_float(rate_pct) / 100.0
    if base <= 0.0:
        return 0.0
    return base ** years


# ---------------------------------------------------------------------------
# Matplotlib / text formatters
# ---------------------------------------------------------------------------

def thousands_formatter(x, pos):
    """
    Format axis values as thousands for matplotlib FuncFormatter.

    - 25_000 → "25k"
    - 12_500 → "12.5k"
    - 0 → "0"

    Parameters
    ----------
    x : float
        Value to format.
    pos : int
        Tick position (unused, required by FuncFormatter signature).

    Examples
    --------
    >>> from matplotlib.ticker import FuncFormatter
    >>> ax.yaxis.set_major_formatter(FuncFormatter(thousands_formatter))  # doctest: +SKIP
    """
    if x == 0:
        return '0'
    val = x / 1e3
    return f'{val:.0f}k' if val == int(val) else f'{val:.1f}k'


def format_currency(value, decimals=2, symbol='$'):
    """
    Format a monetary amount for tables and annotations.

    Examples
    --------
    >>> format_currency(1234.5)
    '$1,234.50'
    >>> format_currency(-99, decimals=0)
    '-$99'
    """
    value = safe_float(value)
    sign = '-' if value < 0 else ''
    return f'{sign}{symbol}{abs(value):,.{decimals}f}'
