"""
Market-data collaborators: live prices and exchange rates.

Purpose
-------
The projection engine never fetches anything; it works on numbers that are
already in the snapshot. This module holds the pieces that prepare those
numbers before a run:

- PriceProvider: protocol for anything that can quote a symbol
- StaticPriceProvider: in-memory quotes (offline use and tests)
- PriceCache / CachedPriceProvider: explicit time-stamped cache in front of
  a provider (30 s lifetime by default)
- ExchangeRateTable: base-currency rates with a staleness check and
  refresh from an injected fetch function
- seed_stock_prices: apply live prices to the stocks of a snapshot

All caches are plain objects owned by the caller, with injected clocks, so
nothing is shared between independent runs.

Example
-------
>>> snapshot = Snapshot(assets=(
...     StockAsset(id="s1", name="Apple", value=1_800, stock_symbol="AAPL", quantity=10),
... ))
>>> provider = CachedPriceProvider(StaticPriceProvider({"AAPL": 190.0}))
>>> result = seed_stock_prices(snapshot, provider)
>>> result.updated
('AAPL',)
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import date
from typing import Callable, Dict, Iterable, Mapping, Optional, Protocol, Tuple, runtime_checkable

from .assets import StockAsset
from .constants import (
    BASE_CURRENCY,
    DEFAULT_EXCHANGE_RATE_TTL,
    DEFAULT_PRICE_CACHE_TTL,
    VALUE_CHANGE_THRESHOLD,
)
from .exceptions import MarketDataError, PriceUnavailableError
from .projection import Snapshot
from .utils import check_non_negative, safe_float

__all__ = [
    "PriceProvider",
    "StaticPriceProvider",
    "PriceCache",
    "CachedPriceProvider",
    "ExchangeRateTable",
    "SeedResult",
    "seed_stock_prices",
]

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


# ---------------------------------------------------------------------------
# Price providers
# ---------------------------------------------------------------------------

@runtime_checkable
class PriceProvider(Protocol):
    """
    Protocol for price sources.

    Implementations return the price per share of *symbol*, or None when
    the symbol cannot be priced. They may raise ``MarketDataError`` for
    transport failures; callers in this package treat that like None.
    """

    def get_price(self, symbol: str, as_of: Optional[date] = None) -> Optional[float]:
        ...


class StaticPriceProvider:
    """Provider backed by a fixed symbol → price mapping (case-insensitive).

    With ``strict=True`` unknown symbols raise ``PriceUnavailableError``
    instead of returning None.
    """

    def __init__(self, prices: Mapping[str, float], strict: bool = False):
        self._prices: Dict[str, float] = {s.upper(): float(p) for s, p in prices.items()}
        self.strict = strict

    def get_price(self, symbol: str, as_of: Optional[date] = None) -> Optional[float]:
        price = self._prices.get(symbol.upper())
        if price is None and self.strict:
            raise PriceUnavailableError(f"No quote for '{symbol}'")
        return price


# ---------------------------------------------------------------------------
# Caching
# ---------------------------------------------------------------------------

@dataclass
class _CacheEntry:
    price: Optional[float]
    stored_at: float


class PriceCache:
    """
    Time-stamped price cache.

    Entries live for ``ttl_seconds`` according to ``clock``. Unavailable
    prices (None) are cached too, so a failing symbol is not retried on
    every call.

    Parameters
    ----------
    ttl_seconds : float, default 30
    clock : callable, default time.monotonic
        Returns the current time in seconds.
    """

    def __init__(self, ttl_seconds: float = DEFAULT_PRICE_CACHE_TTL, clock: Clock = time.monotonic):
        check_non_negative("ttl_seconds", ttl_seconds)
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, _CacheEntry] = {}

    def lookup(self, key: str) -> Tuple[bool, Optional[float]]:
        """Return ``(hit, price)``; expired entries are evicted and count as misses."""
        entry = self._entries.get(key)
        if entry is None:
            return False, None
        if self._clock() - entry.stored_at >= self.ttl_seconds:
            del self._entries[key]
            return False, None
        return True, entry.price

    def store(self, key: str, price: Optional[float]) -> None:
        self._entries[key] = _CacheEntry(price=price, stored_at=self._clock())

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


class CachedPriceProvider:
    """
    Provider wrapper that consults a ``PriceCache`` first.

    Cache keys are ``"<SYMBOL>-<CURRENCY>"`` so quotes in different display
    currencies do not collide.
    """

    def __init__(
        self,
        provider: PriceProvider,
        cache: Optional[PriceCache] = None,
        currency: str = BASE_CURRENCY,
    ):
        self.provider = provider
        self.cache = cache if cache is not None else PriceCache()
        self.currency = currency

    def _key(self, symbol: str) -> str:
        return f"{symbol}-{self.currency}".upper()

    def get_price(self, symbol: str, as_of: Optional[date] = None) -> Optional[float]:
        key = self._key(symbol)
        hit, price = self.cache.lookup(key)
        if hit:
            logger.debug("Returning cached price for %s", key)
            return price
        try:
            price = self.provider.get_price(symbol, as_of)
        except MarketDataError as e:
            logger.warning("Error fetching price for %s, treating as unavailable: %s", symbol, e)
            price = None
        self.cache.store(key, price)
        return price


# ---------------------------------------------------------------------------
# Exchange rates
# ---------------------------------------------------------------------------

class ExchangeRateTable:
    """
    Exchange rates quoted against a base currency.

    A rate ``r`` for currency ``C`` means ``1 BASE = r C``. Conversion goes
    through the base currency. Missing rates degrade gracefully: converting
    from or to the base currency assumes a rate of 1 for the missing side,
    and any other pair with a missing rate returns the amount unchanged.

    Parameters
    ----------
    rates : mapping, optional
        Initial rates. The base currency is always present at 1.0.
    ttl_seconds : float, default 300
        Age after which ``is_stale`` reports True.
    clock : callable, default time.time
    base : str, default "USD"
    """

    def __init__(
        self,
        rates: Optional[Mapping[str, float]] = None,
        *,
        ttl_seconds: float = DEFAULT_EXCHANGE_RATE_TTL,
        clock: Clock = time.time,
        base: str = BASE_CURRENCY,
    ):
        self.base = base
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._rates: Dict[str, float] = {base: 1.0}
        self.updated_at: Optional[float] = None
        if rates:
            self.update(rates)

    @property
    def rates(self) -> Dict[str, float]:
        return dict(self._rates)

    def update(self, rates: Mapping[str, float]) -> None:
        """Replace the table with *rates* (non-positive or missing rates are dropped)."""
        cleaned = {code.upper(): safe_float(r) for code, r in rates.items()}
        self._rates = {code: r for code, r in cleaned.items() if r > 0}
        self._rates[self.base] = 1.0
        self.updated_at = self._clock()

    def is_stale(self) -> bool:
        if self.updated_at is None:
            return True
        return self._clock() - self.updated_at >= self.ttl_seconds

    def refresh(self, fetch: Callable[[], Mapping[str, float]]) -> bool:
        """Reload rates from *fetch*; keep the current table when it fails.

        Returns True when the table was updated.
        """
        try:
            rates = fetch()
        except MarketDataError as e:
            logger.warning("Failed to update exchange rates, keeping cached rates: %s", e)
            return False
        if not rates:
            logger.warning("Exchange-rate source returned no rates, keeping cached rates")
            return False
        self.update(rates)
        logger.info("Exchange rates updated (%d currencies)", len(self._rates))
        return True

    def rate(self, from_currency: str, to_currency: str) -> float:
        """Multiplier converting one unit of *from_currency* into *to_currency*."""
        return self.convert(1.0, from_currency, to_currency)

    def convert(self, amount: float, from_currency: str, to_currency: str) -> float:
        src, dst = from_currency.upper(), to_currency.upper()
        if src == dst:
            return amount
        src_rate, dst_rate = self._rates.get(src), self._rates.get(dst)
        if src_rate is None or dst_rate is None:
            logger.warning("Missing exchange rate for %s or %s", src, dst)
            if src == self.base:
                return amount * (dst_rate or 1.0)
            if dst == self.base:
                return amount / (src_rate or 1.0)
            return amount
        return amount / src_rate * dst_rate


# ---------------------------------------------------------------------------
# Seeding snapshots with live prices
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SeedResult:
    """Outcome of ``seed_stock_prices``."""
    snapshot: Snapshot
    updated: Tuple[str, ...]
    failed: Tuple[str, ...]


def seed_stock_prices(
    snapshot: Snapshot,
    provider: PriceProvider,
    *,
    skip_symbols: Iterable[str] = (),
    as_of: Optional[date] = None,
) -> SeedResult:
    """
    Re-price the stocks of *snapshot* from *provider*.

    Each stock with a symbol and a non-zero quantity gets
    ``value = price × quantity`` when that moves its value by more than
    0.01. Symbols the provider cannot price are reported in ``failed``
    and left untouched. Symbols in *skip_symbols* are not queried.

    Returns
    -------
    SeedResult
        New snapshot plus the updated and failed symbols, in asset order.
    """
    skip = {s.upper() for s in skip_symbols}
    updated, failed = [], []
    assets = []
    for asset in snapshot.assets:
        if (
            not isinstance(asset, StockAsset)
            or not asset.stock_symbol
            or not safe_float(asset.quantity)
            or asset.stock_symbol.upper() in skip
        ):
            assets.append(asset)
            continue
        try:
            price = provider.get_price(asset.stock_symbol, as_of)
        except MarketDataError as e:
            logger.warning("Price lookup for %s failed: %s", asset.stock_symbol, e)
            price = None
        if price is None:
            failed.append(asset.stock_symbol)
            assets.append(asset)
            continue
        new_value = float(price) * safe_float(asset.quantity)
        if abs(safe_float(asset.value) - new_value) > VALUE_CHANGE_THRESHOLD:
            asset = asset.with_value(new_value)
            updated.append(asset.stock_symbol)
        assets.append(asset)
    return SeedResult(
        snapshot=snapshot.with_assets(assets),
        updated=tuple(updated),
        failed=tuple(failed),
    )
