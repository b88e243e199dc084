"""
Type definitions for the net-worth projection toolkit.

Purpose
-------
Provides TypedDict definitions for the plain-dictionary shapes that cross
the package boundary (JSON export, CLI summaries).
Using TypedDicts documents the expected keys and enables IDE completion.

Type Definitions
----------------
ProjectionPointDict
    Serialized projection point, as written by export helpers

SnapshotSummaryDict
    Current-state figures shown by the ``summary`` command
"""

from typing_extensions import TypedDict

__all__ = [
    "ProjectionPointDict",
    "SnapshotSummaryDict",
]


class ProjectionPointDict(TypedDict):
    """
    Projection point as exported to JSON or CSV.

    Attributes
    ----------
    year : float
        Fractional years since the projection start.
    date : str
        ISO timestamp of the sample.
    total_assets, total_liabilities, net_worth : float
        Balance-sheet aggregates at the sample.
    monthly_income, monthly_expenses, monthly_savings : float
        Cash-flow figures at the sample (expenses include debt service).
    """

    year: float
    date: str
    total_assets: float
    total_liabilities: float
    net_worth: float
    monthly_income: float
    monthly_expenses: float
    monthly_savings: float


class SnapshotSummaryDict(TypedDict):
    """Current-state figures for a snapshot (no projection involved)."""

    total_assets: float
    total_liabilities: float
    net_worth: float
    monthly_net: float
