"""
Unit tests for plotting.py module.

Tests the two-panel projection chart.
"""

import pytest

# Use non-interactive backend for testing
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from networth.plotting import plot_projection
from networth.projection import project


@pytest.fixture
def points(household, start):
    return project(household, 3, 37, start=start)


class TestPlotProjection:
    """Test projection charts."""

    def test_returns_both_panels(self, points):
        fig, axes = plot_projection(points, return_fig_ax=True)
        assert set(axes) == {"balance", "cash_flow"}
        balance_labels = [t.get_text() for t in axes["balance"].get_legend().get_texts()]
        flow_labels = [t.get_text() for t in axes["cash_flow"].get_legend().get_texts()]
        assert balance_labels == ["Total assets", "Total liabilities", "Net worth"]
        assert flow_labels == ["Income", "Expenses", "Savings"]
        plt.close(fig)

    def test_balance_only(self, points):
        fig, axes = plot_projection(points, show_cash_flow=False, return_fig_ax=True)
        assert set(axes) == {"balance"}
        assert axes["balance"].get_xlabel() == "Date"
        plt.close(fig)

    def test_years_axis(self, points):
        fig, axes = plot_projection(points, use_dates=False, return_fig_ax=True)
        assert axes["cash_flow"].get_xlabel() == "Years"
        xdata = axes["balance"].get_lines()[0].get_xdata()
        assert xdata[-1] == pytest.approx(3.0)
        plt.close(fig)

    def test_default_title(self, points):
        fig, _ = plot_projection(points, return_fig_ax=True)
        assert "3 years" in fig._suptitle.get_text()
        plt.close(fig)

    def test_custom_title(self, points):
        fig, _ = plot_projection(points, title="Household", return_fig_ax=True)
        assert fig._suptitle.get_text() == "Household"
        plt.close(fig)

    def test_save(self, points, tmp_path):
        path = tmp_path / "projection.png"
        assert plot_projection(points, save_path=str(path)) is None
        assert path.exists()

    def test_empty_rejected(self):
        with pytest.raises(ValueError, match="empty"):
            plot_projection(())
