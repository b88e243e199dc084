"""
Configuration management module for networth.

Purpose
-------
Pydantic models describing everything that enters the package from the
outside: the snapshot JSON schema (assets, liabilities, income, expenses,
investment policy), projection options, and environment settings.

The input models validate types and ranges and then convert into the
frozen domain records the engine consumes (``to_snapshot``). Snapshot JSON
uses camelCase keys (``growthRate``, ``stockTargets``, ...); snake_case
names are accepted as well.

Design Principles
-----------------
- Type-safe: Pydantic enforces types and validates ranges
- Immutable: Frozen models prevent accidental mutation
- Tagged assets: the ``type`` key selects the asset variant. Stock keys
  left on a non-stock row are ignored; any other unknown key is rejected
- Lenient numbers: null amounts are accepted and read as zero

Example
-------
>>> from networth.config import SnapshotConfig, ProjectionConfig
>>> cfg = SnapshotConfig.model_validate({
...     "assets": [{"id": "permanent-bank-account", "name": "Bank",
...                 "value": 5000, "type": "cash"}],
...     "income": [{"id": "i1", "source": "Salary", "monthlyAmount": 3000}],
... })
>>> snapshot = cfg.to_snapshot()
>>> ProjectionConfig(horizon_years=5).sample_count
100
"""

from __future__ import annotations

import datetime
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel
from pydantic_settings import BaseSettings, SettingsConfigDict

from .assets import Asset, CashAsset, GrowthAsset, StockAsset, StockTarget
from .cashflow import Expense, Income, InvestmentPolicy
from .constants import (
    BASE_CURRENCY,
    DEFAULT_EXCHANGE_RATE_TTL,
    DEFAULT_HORIZON_YEARS,
    DEFAULT_PRICE_CACHE_TTL,
    DEFAULT_SAMPLE_COUNT,
)
from .liabilities import Liability
from .projection import Snapshot
from .utils import safe_float

__all__ = [
    "StockTargetConfig",
    "CashAssetConfig",
    "GrowthAssetConfig",
    "StockAssetConfig",
    "AssetConfig",
    "LiabilityConfig",
    "IncomeConfig",
    "ExpenseConfig",
    "SnapshotConfig",
    "ProjectionConfig",
    "AppSettings",
]

Frequency = Literal["monthly", "quarterly", "yearly"]

# Keys the data-entry layer leaves behind when a stock row changes type.
_STOCK_ONLY_KEYS = (
    "stockSymbol", "stock_symbol",
    "quantity",
    "stockGrowthType", "stock_growth_type",
    "stockTargets", "stock_targets",
    "useEstimation", "use_estimation",
)


def _blank_to_none(v):
    """Treat empty strings from form-style JSON as missing values."""
    if isinstance(v, str) and not v.strip():
        return None
    return v


class _InputModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ---------------------------------------------------------------------------
# Asset Configuration
# ---------------------------------------------------------------------------

class StockTargetConfig(_InputModel):
    """
    Price anchor of a stock in ``targets`` mode.

    Attributes
    ----------
    date : datetime.date, optional
        Anchor date. Empty strings are read as missing.
    expected_price : float
        Expected price per share (JSON key ``expectedPrice``).

    Examples
    --------
    >>> StockTargetConfig.model_validate({"date": "2027-01-01", "expectedPrice": 250}).expected_price
    250.0
    """

    date: Optional[datetime.date] = Field(
        default=None,
        description="Anchor date (ISO format)"
    )
    expected_price: Optional[float] = Field(
        default=0.0,
        description="Expected price per share at the anchor date"
    )

    @field_validator("date", mode="before")
    @classmethod
    def blank_date(cls, v):
        return _blank_to_none(v)

    def to_target(self) -> StockTarget:
        return StockTarget(date=self.date, expected_price=safe_float(self.expected_price))


class _AssetFields(_InputModel):
    id: str = Field(
        min_length=1,
        description="Stable asset identity"
    )
    name: str = Field(
        default="",
        max_length=200,
        description="Display name"
    )
    value: Optional[float] = Field(
        default=0.0,
        description="Current value"
    )
    growth_rate: Optional[float] = Field(
        default=0.0,
        description="Annual growth in percent"
    )
    distribution_frequency: Frequency = Field(
        default="monthly",
        description="How often accumulated savings are deposited"
    )


class _PlainAssetFields(_AssetFields):
    @model_validator(mode="before")
    @classmethod
    def drop_stock_fields(cls, data):
        """Ignore stock keys left on a row whose type is no longer ``stock``."""
        if isinstance(data, dict):
            data = {k: v for k, v in data.items() if k not in _STOCK_ONLY_KEYS}
        return data


class CashAssetConfig(_PlainAssetFields):
    """Bank or savings account (``type: "cash"``)."""

    type: Literal["cash"] = "cash"

    def to_asset(self) -> CashAsset:
        return CashAsset(
            id=self.id,
            name=self.name,
            value=safe_float(self.value),
            growth_rate=safe_float(self.growth_rate),
            distribution_frequency=self.distribution_frequency,
        )


class GrowthAssetConfig(_PlainAssetFields):
    """Investment, property or other fixed-rate holding."""

    type: Literal["investment", "property", "other"]

    def to_asset(self) -> GrowthAsset:
        return GrowthAsset(
            id=self.id,
            name=self.name,
            value=safe_float(self.value),
            growth_rate=safe_float(self.growth_rate),
            kind=self.type,
            distribution_frequency=self.distribution_frequency,
        )


class StockAssetConfig(_AssetFields):
    """
    Share position (``type: "stock"``).

    Attributes
    ----------
    stock_symbol : str
        Ticker symbol.
    quantity : float
        Shares held.
    stock_growth_type : {"rate", "targets"}
        Price model.
    stock_targets : list of StockTargetConfig
        Price anchors for the ``targets`` model.
    use_estimation : bool
        Interpolate between anchors.
    """

    type: Literal["stock"] = "stock"
    stock_symbol: str = Field(
        default="",
        max_length=20,
        description="Ticker symbol"
    )
    quantity: Optional[float] = Field(
        default=0.0,
        description="Shares held"
    )
    stock_growth_type: Literal["rate", "targets"] = Field(
        default="rate",
        description="Price model: growth rate or price targets"
    )
    stock_targets: List[StockTargetConfig] = Field(
        default_factory=list,
        description="Date-anchored price targets"
    )
    use_estimation: bool = Field(
        default=False,
        description="Interpolate linearly between targets"
    )

    def to_asset(self) -> StockAsset:
        return StockAsset(
            id=self.id,
            name=self.name,
            value=safe_float(self.value),
            stock_symbol=self.stock_symbol,
            quantity=safe_float(self.quantity),
            growth_rate=safe_float(self.growth_rate),
            stock_growth_type=self.stock_growth_type,
            stock_targets=tuple(t.to_target() for t in self.stock_targets),
            use_estimation=self.use_estimation,
            distribution_frequency=self.distribution_frequency,
        )


AssetConfig = Annotated[
    Union[CashAssetConfig, GrowthAssetConfig, StockAssetConfig],
    Field(discriminator="type"),
]


# ---------------------------------------------------------------------------
# Liability / Income / Expense Configuration
# ---------------------------------------------------------------------------

class LiabilityConfig(_InputModel):
    """Outstanding debt."""

    id: str = Field(min_length=1, description="Stable liability identity")
    name: str = Field(default="", max_length=200, description="Display name")
    balance: Optional[float] = Field(default=0.0, description="Amount owed")
    interest_rate: Optional[float] = Field(default=0.0, description="Annual interest in percent")
    minimum_payment: Optional[float] = Field(default=0.0, description="Monthly payment")
    type: Literal["mortgage", "auto", "credit_card", "student", "other"] = Field(
        default="other",
        description="Liability category"
    )

    def to_liability(self) -> Liability:
        return Liability(
            id=self.id,
            name=self.name,
            balance=safe_float(self.balance),
            interest_rate=safe_float(self.interest_rate),
            minimum_payment=safe_float(self.minimum_payment),
            type=self.type,
        )


class IncomeConfig(_InputModel):
    """
    Monthly income stream.

    ``start_date`` / ``end_date`` only apply when ``has_date_range`` is set.
    """

    id: str = Field(min_length=1, description="Stable income identity")
    source: str = Field(default="", max_length=200, description="Income source")
    monthly_amount: Optional[float] = Field(default=0.0, description="Monthly amount")
    growth_rate: Optional[float] = Field(default=0.0, description="Annual growth in percent")
    has_date_range: bool = Field(default=False, description="Limit income to a date range")
    start_date: Optional[datetime.date] = Field(default=None, description="First active day")
    end_date: Optional[datetime.date] = Field(default=None, description="Last active day")

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def blank_dates(cls, v):
        return _blank_to_none(v)

    @field_validator("end_date")
    @classmethod
    def validate_range(cls, v, info):
        """Ensure end_date >= start_date when both are given."""
        start = info.data.get("start_date")
        if v is not None and start is not None and v < start:
            raise ValueError(f"end_date ({v}) must be >= start_date ({start})")
        return v

    def to_income(self) -> Income:
        return Income(
            id=self.id,
            source=self.source,
            monthly_amount=safe_float(self.monthly_amount),
            growth_rate=safe_float(self.growth_rate),
            has_date_range=self.has_date_range,
            start_date=self.start_date,
            end_date=self.end_date,
        )


class ExpenseConfig(_InputModel):
    """Monthly expense stream."""

    id: str = Field(min_length=1, description="Stable expense identity")
    category: str = Field(default="", max_length=200, description="Expense category")
    monthly_amount: Optional[float] = Field(default=0.0, description="Monthly amount")
    growth_rate: Optional[float] = Field(default=0.0, description="Annual inflation in percent")

    def to_expense(self) -> Expense:
        return Expense(
            id=self.id,
            category=self.category,
            monthly_amount=safe_float(self.monthly_amount),
            growth_rate=safe_float(self.growth_rate),
        )


# ---------------------------------------------------------------------------
# Snapshot Configuration
# ---------------------------------------------------------------------------

class SnapshotConfig(_InputModel):
    """
    Complete household snapshot as stored in JSON.

    Attributes
    ----------
    assets, liabilities, income, expenses : list
        Snapshot records. Asset and liability ids must be unique.
    investment_percentage : float
        Share of savings (0–100) used for automatic purchases.
    investment_type : {"rate", "stock", "cash"}
    investment_rate : float
        Expected return of the ``rate`` investment type.
    investment_stock_symbol : str
        Stock bought when ``investment_type == "stock"``.
    years_to_project : float, optional
        Preferred projection horizon.
    """

    assets: List[AssetConfig] = Field(default_factory=list)
    liabilities: List[LiabilityConfig] = Field(default_factory=list)
    income: List[IncomeConfig] = Field(default_factory=list)
    expenses: List[ExpenseConfig] = Field(default_factory=list)
    investment_percentage: float = Field(
        default=0.0,
        ge=0,
        le=100,
        description="Share of savings invested automatically (percent)"
    )
    investment_type: Literal["rate", "stock", "cash"] = Field(
        default="rate",
        description="Automatic investment vehicle"
    )
    investment_rate: Optional[float] = Field(
        default=0.0,
        description="Expected annual return of the rate vehicle (percent)"
    )
    investment_stock_symbol: str = Field(
        default="",
        max_length=20,
        description="Symbol of the stock bought automatically"
    )
    years_to_project: Optional[float] = Field(
        default=None,
        ge=0,
        le=100,
        description="Preferred projection horizon in years"
    )

    @field_validator("assets", "liabilities")
    @classmethod
    def validate_unique_ids(cls, v):
        """Ensure identities are unique within each collection."""
        seen = set()
        for item in v:
            if item.id in seen:
                raise ValueError(f"Duplicate id '{item.id}'")
            seen.add(item.id)
        return v

    def to_snapshot(self) -> Snapshot:
        """Convert into the frozen domain snapshot."""
        return Snapshot(
            assets=tuple(a.to_asset() for a in self.assets),
            liabilities=tuple(l.to_liability() for l in self.liabilities),
            incomes=tuple(i.to_income() for i in self.income),
            expenses=tuple(e.to_expense() for e in self.expenses),
            policy=InvestmentPolicy(
                investment_percentage=self.investment_percentage,
                investment_type=self.investment_type,
                investment_rate=safe_float(self.investment_rate),
                investment_stock_symbol=self.investment_stock_symbol,
            ),
            years_to_project=self.years_to_project,
        )

    @classmethod
    def from_snapshot(cls, snapshot: Snapshot) -> "SnapshotConfig":
        """Build the JSON-facing model from a domain snapshot."""
        return cls(
            assets=[_asset_config(a) for a in snapshot.assets],
            liabilities=[
                LiabilityConfig(
                    id=l.id, name=l.name, balance=l.balance, interest_rate=l.interest_rate,
                    minimum_payment=l.minimum_payment, type=l.type,
                )
                for l in snapshot.liabilities
            ],
            income=[
                IncomeConfig(
                    id=i.id, source=i.source, monthly_amount=i.monthly_amount,
                    growth_rate=i.growth_rate, has_date_range=i.has_date_range,
                    start_date=i.start_date, end_date=i.end_date,
                )
                for i in snapshot.incomes
            ],
            expenses=[
                ExpenseConfig(
                    id=e.id, category=e.category, monthly_amount=e.monthly_amount,
                    growth_rate=e.growth_rate,
                )
                for e in snapshot.expenses
            ],
            investment_percentage=snapshot.policy.investment_percentage,
            investment_type=snapshot.policy.investment_type,
            investment_rate=snapshot.policy.investment_rate,
            investment_stock_symbol=snapshot.policy.investment_stock_symbol,
            years_to_project=snapshot.years_to_project,
        )


def _asset_config(asset: Asset) -> Union[CashAssetConfig, GrowthAssetConfig, StockAssetConfig]:
    common = dict(
        id=asset.id,
        name=asset.name,
        value=asset.value,
        growth_rate=asset.growth_rate,
        distribution_frequency=asset.distribution_frequency,
    )
    if isinstance(asset, StockAsset):
        return StockAssetConfig(
            **common,
            stock_symbol=asset.stock_symbol,
            quantity=asset.quantity,
            stock_growth_type=asset.stock_growth_type,
            stock_targets=[
                StockTargetConfig(date=t.date, expected_price=t.expected_price)
                for t in asset.stock_targets
            ],
            use_estimation=asset.use_estimation,
        )
    if isinstance(asset, GrowthAsset):
        return GrowthAssetConfig(**common, type=asset.kind)
    return CashAssetConfig(**common)


# ---------------------------------------------------------------------------
# Projection Configuration
# ---------------------------------------------------------------------------

class ProjectionConfig(BaseModel):
    """
    Options of a projection run.

    Attributes
    ----------
    horizon_years : float
        Projection horizon (0-100 years).
    sample_count : int
        Number of evenly spaced points (1-10,000).
    start_date : datetime.date, optional
        Calendar date of year 0. None means "now".

    Examples
    --------
    >>> ProjectionConfig(horizon_years=10, sample_count=41).horizon_years
    10.0
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    horizon_years: float = Field(
        default=DEFAULT_HORIZON_YEARS,
        ge=0,
        le=100,
        description="Projection horizon in years"
    )
    sample_count: int = Field(
        default=DEFAULT_SAMPLE_COUNT,
        ge=1,
        le=10_000,
        description="Number of projection points"
    )
    start_date: Optional[datetime.date] = Field(
        default=None,
        description="Projection start date (default: today)"
    )


# ---------------------------------------------------------------------------
# Application Settings (Environment Variables)
# ---------------------------------------------------------------------------

class AppSettings(BaseSettings):
    """
    Global application settings loaded from environment variables.

    Supports .env files for local development. Environment variables
    are prefixed with NETWORTH_ (e.g., NETWORTH_LOG_LEVEL=DEBUG).

    Attributes
    ----------
    log_level : str
        Logging level: "DEBUG", "INFO", "WARNING", "ERROR"
    horizon_years : float
        Default projection horizon for the CLI
    sample_count : int
        Default number of projection points for the CLI
    price_cache_ttl : float
        Lifetime of cached stock prices in seconds
    exchange_rate_ttl : float
        Age after which exchange rates are considered stale
    currency : str
        Display currency

    Examples
    --------
    >>> settings = AppSettings()
    >>> settings.log_level  # doctest: +SKIP
    'WARNING'
    """

    model_config = SettingsConfigDict(
        env_prefix="NETWORTH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging level"
    )
    horizon_years: float = Field(
        default=DEFAULT_HORIZON_YEARS,
        ge=0,
        le=100,
        description="Default projection horizon in years"
    )
    sample_count: int = Field(
        default=DEFAULT_SAMPLE_COUNT,
        ge=1,
        le=10_000,
        description="Default number of projection points"
    )
    price_cache_ttl: float = Field(
        default=DEFAULT_PRICE_CACHE_TTL,
        ge=0,
        description="Stock price cache lifetime in seconds"
    )
    exchange_rate_ttl: float = Field(
        default=DEFAULT_EXCHANGE_RATE_TTL,
        ge=0,
        description="Exchange-rate staleness threshold in seconds"
    )
    currency: str = Field(
        default=BASE_CURRENCY,
        min_length=3,
        max_length=3,
        description="Display currency code"
    )
