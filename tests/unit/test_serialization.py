"""
Unit tests for serialization.py module.

Tests snapshot files and projection export.
"""

import json
import warnings

import pandas as pd
import pydantic
import pytest

from networth.exceptions import SchemaVersionError, ValidationError
from networth.projection import project
from networth.serialization import (
    SCHEMA_VERSION,
    load_snapshot,
    projection_to_records,
    save_projection,
    save_snapshot,
    snapshot_from_dict,
    snapshot_to_dict,
)


# ============================================================================
# SNAPSHOT SERIALIZATION TESTS
# ============================================================================

class TestSnapshotSerialization:
    """Test snapshot dictionaries and files."""

    def test_snapshot_to_dict(self, household):
        data = snapshot_to_dict(household)

        assert data["schema_version"] == SCHEMA_VERSION
        assert list(data)[0] == "schema_version"
        assert data["investmentPercentage"] == 25.0
        assert data["investmentStockSymbol"] == "MSFT"
        assert data["yearsToProject"] == 5.0
        assert [a["type"] for a in data["assets"]] == ["cash", "property", "stock"]
        assert data["assets"][2]["stockSymbol"] == "MSFT"
        assert data["liabilities"][0]["minimumPayment"] == 500.0
        assert data["income"][0]["monthlyAmount"] == 2_000.0

    def test_dict_is_json_ready(self, household, msft_targets):
        snapshot = household.with_assets(household.assets[:2] + (msft_targets,))
        text = json.dumps(snapshot_to_dict(snapshot))
        assert '"2027-01-01"' in text

    def test_snapshot_from_dict(self, household):
        restored = snapshot_from_dict(snapshot_to_dict(household))
        assert restored == household

    def test_missing_version_accepted(self, household):
        data = snapshot_to_dict(household)
        del data["schema_version"]
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            assert snapshot_from_dict(data) == household

    def test_minor_version_mismatch_warns(self, household):
        data = snapshot_to_dict(household)
        data["schema_version"] = "0.9.0"
        with pytest.warns(UserWarning, match="differs from current version"):
            snapshot_from_dict(data)

    def test_major_version_mismatch_rejected(self, household):
        data = snapshot_to_dict(household)
        data["schema_version"] = "1.0.0"
        with pytest.raises(SchemaVersionError):
            snapshot_from_dict(data)

    def test_schema_error_is_validation_error(self):
        assert issubclass(SchemaVersionError, ValidationError)

    def test_non_object_rejected(self):
        with pytest.raises(ValidationError, match="JSON object"):
            snapshot_from_dict([1, 2, 3])

    def test_invalid_content_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            snapshot_from_dict({"assets": [{"id": "a", "type": "crypto"}]})

    def test_retyped_stock_row_loads(self):
        """A row switched from stock to property keeps its stock keys."""
        snap = snapshot_from_dict({"assets": [
            {"id": "a1", "name": "House", "value": 300000, "growthRate": 2, "type": "property",
             "stockSymbol": "", "quantity": 0, "stockGrowthType": "rate"},
        ]})
        assert snap.assets[0].kind == "property"
        assert snap.net_worth() == pytest.approx(300000)

    def test_save_and_load(self, household, tmp_path):
        path = tmp_path / "nested" / "household.json"
        save_snapshot(household, path)

        assert path.exists()
        with open(path) as f:
            assert json.load(f)["schema_version"] == SCHEMA_VERSION
        assert load_snapshot(path) == household


# ============================================================================
# PROJECTION EXPORT TESTS
# ============================================================================

class TestProjectionExport:
    """Test projection records and files."""

    def test_records(self, household, start):
        points = project(household, 1, 5, start=start)
        records = projection_to_records(points)
        assert len(records) == 5
        assert records[0]["date"] == "2025-01-01T00:00:00"
        assert records[-1]["year"] == 1.0

    def test_save_json(self, household, start, tmp_path):
        points = project(household, 1, 5, start=start)
        path = tmp_path / "projection.json"
        save_projection(points, path)

        with open(path) as f:
            data = json.load(f)
        assert data["schema_version"] == SCHEMA_VERSION
        assert len(data["points"]) == 5
        assert data["points"][-1]["net_worth"] == pytest.approx(points[-1].net_worth)

    def test_save_csv(self, household, start, tmp_path):
        points = project(household, 1, 5, start=start)
        path = tmp_path / "out" / "projection.csv"
        save_projection(points, path)

        frame = pd.read_csv(path, index_col="date", parse_dates=True)
        assert len(frame) == 5
        assert list(frame.columns) == [
            "year", "total_assets", "total_liabilities", "net_worth",
            "monthly_income", "monthly_expenses", "monthly_savings",
        ]
        assert frame["net_worth"].iloc[-1] == pytest.approx(points[-1].net_worth)
