"""
Unit tests for assets.py and valuation.py modules.

Tests asset records and their value at a simulated date.
"""

from datetime import date, datetime

import pytest

from networth.assets import (
    ASSET_TYPES,
    CashAsset,
    GrowthAsset,
    StockAsset,
    StockTarget,
    distribution_interval,
    find_cash_reservoir,
    find_stock_by_symbol,
    is_cash_reservoir,
)
from networth.constants import CASH_RESERVOIR_ID
from networth.exceptions import ValidationError
from networth.utils import add_years
from networth.valuation import compounded_value, stock_price_at, value_at


# ============================================================================
# ASSET RECORDS
# ============================================================================

class TestAssetRecords:
    """Test asset construction and helpers."""

    def test_type_tags(self, bank, house, msft):
        assert bank.type == "cash"
        assert house.type == "property"
        assert msft.type == "stock"
        assert {bank.type, house.type, msft.type} <= set(ASSET_TYPES)

    def test_empty_id_rejected(self):
        with pytest.raises(ValidationError):
            CashAsset(id="", name="Bank", value=0.0)

    def test_unknown_growth_kind_rejected(self):
        with pytest.raises(ValidationError):
            GrowthAsset(id="x", name="X", value=1.0, kind="stock")

    def test_unknown_frequency_rejected(self):
        with pytest.raises(ValidationError):
            CashAsset(id="x", name="X", value=1.0, distribution_frequency="weekly")

    def test_distribution_intervals(self):
        assert distribution_interval("monthly") == pytest.approx(1 / 12)
        assert distribution_interval("quarterly") == pytest.approx(0.25)
        assert distribution_interval("yearly") == 1.0
        assert distribution_interval(None) == pytest.approx(1 / 12)

    def test_initial_price_per_share(self, msft):
        assert msft.initial_price_per_share == 100.0
        empty = StockAsset(id="s", name="S", value=500.0, stock_symbol="S", quantity=0.0)
        assert empty.initial_price_per_share == 0.0

    def test_stock_targets_stored_as_tuple(self):
        stock = StockAsset(id="s", name="S", value=1.0, stock_targets=[StockTarget(date(2026, 1, 1), 2.0)])
        assert isinstance(stock.stock_targets, tuple)

    def test_reservoir_lookup(self, bank, house, msft):
        assert bank.is_reservoir
        assert is_cash_reservoir(bank)
        assert not is_cash_reservoir(house)
        assert find_cash_reservoir([house, bank]) is bank
        assert find_cash_reservoir([house]) is None
        assert bank.id == CASH_RESERVOIR_ID

    def test_stock_lookup(self, bank, msft):
        assert find_stock_by_symbol([bank, msft], "MSFT") is msft
        assert find_stock_by_symbol([bank, msft], "AAPL") is None
        assert find_stock_by_symbol([bank, msft], "") is None

    def test_with_value_returns_copy(self, house):
        richer = house.with_value(2_000.0)
        assert richer.value == 2_000.0
        assert house.value == 1_000.0


# ============================================================================
# VALUATION
# ============================================================================

class TestValuation:
    """Test value of assets at a date."""

    def test_compound_growth_one_year(self, house, start):
        assert value_at(house, add_years(start, 1), start) == pytest.approx(1_100.0)

    @pytest.mark.parametrize("years", [0.0, 0.5, 2.0, 7.25])
    def test_compound_growth_matches_formula(self, house, start, years):
        expected = 1_000.0 * 1.10 ** years
        assert value_at(house, add_years(start, years), start) == pytest.approx(expected)

    def test_negative_growth_depreciates(self, start):
        car = GrowthAsset(id="car", name="Car", value=10_000.0, growth_rate=-20.0, kind="other")
        assert value_at(car, add_years(start, 1), start) == pytest.approx(8_000.0)

    def test_reanchored_base_value(self, bank, start):
        anchor = add_years(start, 1)
        rich_bank = CashAsset(id=bank.id, name=bank.name, value=0.0, growth_rate=10.0)
        value = value_at(rich_bank, add_years(start, 2), start, base_value=500.0, anchor=anchor)
        assert value == pytest.approx(550.0)

    def test_compounded_value_accepts_dates(self):
        assert compounded_value(100.0, 0.0, date(2030, 1, 1), date(2025, 1, 1)) == 100.0

    def test_stock_rate_mode(self, start):
        stock = StockAsset(id="s", name="S", value=1_000.0, stock_symbol="S", quantity=10.0, growth_rate=10.0)
        assert stock_price_at(stock, add_years(start, 1), start) == pytest.approx(110.0)
        assert value_at(stock, add_years(start, 1), start) == pytest.approx(1_100.0)

    def test_stock_quantity_override(self, msft, start):
        assert value_at(msft, start, start, quantity=25.0) == pytest.approx(2_500.0)

    def test_stock_targets_mode(self, msft_targets, start):
        assert value_at(msft_targets, datetime(2025, 6, 1), start) == pytest.approx(1_000.0)
        assert value_at(msft_targets, datetime(2026, 6, 1), start) == pytest.approx(1_500.0)
        assert value_at(msft_targets, datetime(2030, 1, 1), start) == pytest.approx(2_000.0)

    def test_targets_mode_ignores_growth_rate(self, start):
        stock = StockAsset(
            id="s", name="S", value=100.0, stock_symbol="S", quantity=1.0, growth_rate=50.0,
            stock_growth_type="targets", stock_targets=(StockTarget(date(2030, 1, 1), 300.0),),
        )
        assert value_at(stock, add_years(start, 2), start) == pytest.approx(100.0)
