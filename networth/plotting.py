"""
Plotting utilities for networth projections.

Purpose
-------
Visualizes a projection as a two-panel chart:

- Top: net worth with total assets and total liabilities
- Bottom: monthly income, expenses (including debt service) and savings

Matplotlib is imported lazily so the engine can be used without a display
stack.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

import numpy as np

from .constants import DEFAULT_FIGSIZE, DEFAULT_LINEWIDTH, DEFAULT_LINEWIDTH_THICK
from .projection import ProjectionPoint
from .utils import thousands_formatter

__all__ = ["plot_projection"]


def plot_projection(
    points: Sequence[ProjectionPoint],
    *,
    use_dates: bool = True,
    figsize: tuple = DEFAULT_FIGSIZE,
    title: Optional[str] = None,
    save_path: Optional[str] = None,
    return_fig_ax: bool = False,
    show_cash_flow: bool = True,
):
    """
    Plot a projection.

    Parameters
    ----------
    points : sequence of ProjectionPoint
        Output of ``project``.
    use_dates : bool, default True
        Calendar dates on the x-axis; otherwise fractional years.
    figsize : tuple, default (12, 6)
        Figure size (width, height).
    title : str, optional
        Figure title. Defaults to the horizon and final net worth.
    save_path : str, optional
        Path to save the figure.
    return_fig_ax : bool, default False
        If True, returns ``(fig, axes_dict)`` with keys ``"balance"`` and
        (when shown) ``"cash_flow"``.
    show_cash_flow : bool, default True
        Add the monthly cash-flow panel.

    Returns
    -------
    None or (fig, axes_dict)

    Examples
    --------
    >>> points = project(snapshot, 10, start=date(2025, 1, 1))  # doctest: +SKIP
    >>> plot_projection(points, save_path="projection.png")  # doctest: +SKIP
    """
    import matplotlib.pyplot as plt
    from matplotlib.ticker import FuncFormatter

    if not points:
        raise ValueError("Cannot plot an empty projection.")

    if use_dates:
        x = [p.date for p in points]
        xlabel = "Date"
    else:
        x = np.array([p.year for p in points])
        xlabel = "Years"

    net_worth = np.array([p.net_worth for p in points])
    assets = np.array([p.total_assets for p in points])
    liabilities = np.array([p.total_liabilities for p in points])

    if show_cash_flow:
        fig, (ax_balance, ax_flow) = plt.subplots(
            2, 1, figsize=figsize, sharex=True, gridspec_kw={"height_ratios": [2, 1]}
        )
    else:
        fig, ax_balance = plt.subplots(figsize=figsize)
        ax_flow = None

    # ========== Balance sheet ==========
    ax_balance.plot(x, assets, color="tab:green", linewidth=DEFAULT_LINEWIDTH, label="Total assets")
    ax_balance.plot(x, liabilities, color="tab:red", linewidth=DEFAULT_LINEWIDTH, label="Total liabilities")
    ax_balance.plot(x, net_worth, color="tab:blue", linewidth=DEFAULT_LINEWIDTH_THICK, label="Net worth")
    ax_balance.fill_between(x, 0, net_worth, where=net_worth >= 0, color="tab:blue", alpha=0.1, interpolate=True)
    ax_balance.axhline(0, color="grey", linewidth=0.5)
    ax_balance.yaxis.set_major_formatter(FuncFormatter(thousands_formatter))
    ax_balance.set_ylabel("Value")
    ax_balance.legend(loc="upper left")
    ax_balance.grid(alpha=0.3)

    # ========== Monthly cash flow ==========
    if ax_flow is not None:
        ax_flow.plot(x, [p.monthly_income for p in points], color="tab:green", linewidth=DEFAULT_LINEWIDTH, label="Income")
        ax_flow.plot(x, [p.monthly_expenses for p in points], color="tab:red", linewidth=DEFAULT_LINEWIDTH, label="Expenses")
        ax_flow.plot(x, [p.monthly_savings for p in points], color="tab:blue", linewidth=DEFAULT_LINEWIDTH_THICK, label="Savings")
        ax_flow.axhline(0, color="grey", linewidth=0.5)
        ax_flow.yaxis.set_major_formatter(FuncFormatter(thousands_formatter))
        ax_flow.set_ylabel("Per month")
        ax_flow.legend(loc="upper left")
        ax_flow.grid(alpha=0.3)
        ax_flow.set_xlabel(xlabel)
    else:
        ax_balance.set_xlabel(xlabel)

    if title is None:
        title = f"Net worth over {points[-1].year:g} years: {net_worth[-1]:,.0f}"
    fig.suptitle(title)
    if use_dates and isinstance(x[0], datetime):
        fig.autofmt_xdate()
    fig.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches="tight")

    if return_fig_ax:
        axes = {"balance": ax_balance}
        if ax_flow is not None:
            axes["cash_flow"] = ax_flow
        return fig, axes
    plt.close(fig)
    return None
