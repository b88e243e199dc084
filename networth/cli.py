"""
Command-Line Interface for networth.

Purpose
-------
Runs projections, summaries and charts from snapshot files without writing
Python code.

Commands
--------
- project: Project a snapshot and print / export the sampled points
- summary: Show current net worth and monthly surplus
- plot: Save a projection chart
- snapshot: Validate, display and create snapshot files
- info: Show version and dependency information

Example Usage
-------------
    # Project five years ahead, 21 points, export to CSV
    $ networth project -s household.json -y 5 -n 21 -o projection.csv

    # Current figures
    $ networth summary -s household.json

    # Starter snapshot file
    $ networth snapshot create household.json --template stocks
"""

from __future__ import annotations

import json
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .config import AppSettings, ProjectionConfig
from .constants import CASH_RESERVOIR_ID
from .utils import format_currency

# Version
__version__ = "0.1.0"


def _load(path: Path):
    """Load a snapshot or exit with status 1."""
    from .serialization import load_snapshot

    try:
        return load_snapshot(path)
    except Exception as e:
        click.echo(f"Error loading snapshot: {e}", err=True)
        sys.exit(1)


def _seed_prices(snapshot, prices_file: Optional[Path], settings: AppSettings, quiet: bool):
    """Apply prices from a ``{"SYMBOL": price}`` JSON file to the snapshot's stocks."""
    if prices_file is None:
        return snapshot
    from .market_data import CachedPriceProvider, PriceCache, StaticPriceProvider, seed_stock_prices

    with open(prices_file, "r") as f:
        prices = json.load(f)
    provider = CachedPriceProvider(
        StaticPriceProvider(prices),
        PriceCache(ttl_seconds=settings.price_cache_ttl),
        currency=settings.currency,
    )
    result = seed_stock_prices(snapshot, provider)
    if result.failed and not quiet:
        click.echo(f"No price for: {', '.join(result.failed)}", err=True)
    return result.snapshot


def _resolve_horizon(years: Optional[float], snapshot, settings: AppSettings) -> float:
    if years is not None:
        return years
    if snapshot.years_to_project is not None:
        return snapshot.years_to_project
    return settings.horizon_years


@click.group()
@click.version_option(version=__version__, prog_name="networth")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Logging level (default: NETWORTH_LOG_LEVEL or WARNING)",
)
@click.pass_context
def main(ctx: click.Context, quiet: bool, log_level: Optional[str]) -> None:
    """
    networth - Household net-worth projection.

    Projects assets, liabilities and savings forward from a snapshot
    file, including automatic stock investment and debt amortization.

    Use 'networth COMMAND --help' for command-specific help.
    """
    from .logging_config import setup_logging

    settings = AppSettings()
    setup_logging(level=log_level, settings=settings)

    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["console"] = Console()
    ctx.obj["settings"] = settings


# ---------------------------------------------------------------------------
# project
# ---------------------------------------------------------------------------

@main.command()
@click.option(
    "--snapshot", "-s",
    type=click.Path(exists=True, path_type=Path),
    required=True,
    help="Path to snapshot file (JSON)"
)
@click.option(
    "--years", "-y",
    type=click.FloatRange(min=0, max=100),
    default=None,
    help="Projection horizon in years (default: snapshot's yearsToProject, then settings)"
)
@click.option(
    "--samples", "-n",
    type=click.IntRange(min=1, max=10_000),
    default=None,
    help="Number of projection points (default: 100)"
)
@click.option(
    "--start",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Projection start date, YYYY-MM-DD (default: now)"
)
@click.option(
    "--prices",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="JSON file of current prices per symbol used to re-price stocks"
)
@click.option(
    "--output", "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Export points to a .csv or .json file"
)
@click.option(
    "--rows",
    type=click.IntRange(min=2),
    default=11,
    help="Number of points shown in the results table (default: 11)"
)
@click.pass_context
def project(
    ctx: click.Context,
    snapshot: Path,
    years: Optional[float],
    samples: Optional[int],
    start: Optional[datetime],
    prices: Optional[Path],
    output: Optional[Path],
    rows: int,
) -> None:
    """
    Project a snapshot forward in time.

    Example:
        networth project -s household.json -y 10 --start 2025-01-01
    """
    console = ctx.obj.get("console")
    quiet = ctx.obj.get("quiet", False)
    settings: AppSettings = ctx.obj["settings"]

    from .projection import project as run_projection
    from .serialization import save_projection

    snap = _seed_prices(_load(snapshot), prices, settings, quiet)
    options = ProjectionConfig(
        horizon_years=_resolve_horizon(years, snap, settings),
        sample_count=samples or settings.sample_count,
        start_date=start.date() if start else None,
    )

    if not quiet:
        console.print(
            f"[bold]Projecting {options.horizon_years:g} years ({options.sample_count} points)...[/bold]"
        )

    try:
        points = run_projection(snap, options.horizon_years, options.sample_count, start=options.start_date)
    except Exception as e:
        click.echo(f"Error during projection: {e}", err=True)
        sys.exit(1)

    if not quiet:
        table = Table(title="Projection", show_header=True)
        table.add_column("Year", justify="right", style="cyan")
        table.add_column("Date")
        table.add_column("Assets", justify="right")
        table.add_column("Liabilities", justify="right")
        table.add_column("Net Worth", justify="right", style="green")
        table.add_column("Savings/mo", justify="right")

        step = max(1, (len(points) - 1) // (rows - 1))
        shown = list(points[::step])
        if shown[-1] is not points[-1]:
            shown.append(points[-1])
        for p in shown:
            table.add_row(
                f"{p.year:.2f}",
                p.date.strftime("%Y-%m-%d"),
                f"{p.total_assets:,.2f}",
                f"{p.total_liabilities:,.2f}",
                f"{p.net_worth:,.2f}",
                f"{p.monthly_savings:,.2f}",
            )
        console.print(table)

    if output:
        save_projection(points, output)
        if not quiet:
            click.echo(f"Projection saved to {output}")


# ---------------------------------------------------------------------------
# summary
# ---------------------------------------------------------------------------

@main.command()
@click.option(
    "--snapshot", "-s",
    type=click.Path(exists=True, path_type=Path),
    required=True,
    help="Path to snapshot file (JSON)"
)
@click.option("--json", "as_json", is_flag=True, help="Print figures as JSON")
@click.pass_context
def summary(ctx: click.Context, snapshot: Path, as_json: bool) -> None:
    """
    Show current net worth and monthly surplus.

    Example:
        networth summary -s household.json
    """
    console = ctx.obj.get("console")
    snap = _load(snapshot)

    figures = snap.summary()

    if as_json:
        click.echo(json.dumps(figures, indent=2))
        return

    table = Table(title="Current Position")
    table.add_column("Figure", style="cyan")
    table.add_column("Value", style="green", justify="right")
    table.add_row("Total Assets", format_currency(figures["total_assets"], symbol=""))
    table.add_row("Total Liabilities", format_currency(figures["total_liabilities"], symbol=""))
    table.add_row("Net Worth", format_currency(figures["net_worth"], symbol=""))
    table.add_row("Monthly Surplus", format_currency(figures["monthly_net"], symbol=""))
    console.print(table)


# ---------------------------------------------------------------------------
# plot
# ---------------------------------------------------------------------------

@main.command()
@click.option(
    "--snapshot", "-s",
    type=click.Path(exists=True, path_type=Path),
    required=True,
    help="Path to snapshot file (JSON)"
)
@click.option("--years", "-y", type=click.FloatRange(min=0, max=100), default=None,
              help="Projection horizon in years")
@click.option("--samples", "-n", type=click.IntRange(min=1, max=10_000), default=None,
              help="Number of projection points")
@click.option("--start", type=click.DateTime(formats=["%Y-%m-%d"]), default=None,
              help="Projection start date, YYYY-MM-DD")
@click.option("--output", "-o", type=click.Path(path_type=Path), required=True,
              help="Image file to write (e.g. projection.png)")
@click.option("--title", type=str, default=None, help="Chart title")
@click.pass_context
def plot(
    ctx: click.Context,
    snapshot: Path,
    years: Optional[float],
    samples: Optional[int],
    start: Optional[datetime],
    output: Path,
    title: Optional[str],
) -> None:
    """
    Save a projection chart.

    Example:
        networth plot -s household.json -y 10 -o projection.png
    """
    quiet = ctx.obj.get("quiet", False)
    settings: AppSettings = ctx.obj["settings"]

    import matplotlib
    matplotlib.use("Agg")

    from .plotting import plot_projection
    from .projection import project as run_projection

    snap = _load(snapshot)
    points = run_projection(
        snap,
        _resolve_horizon(years, snap, settings),
        samples or settings.sample_count,
        start=start,
    )
    output.parent.mkdir(parents=True, exist_ok=True)
    plot_projection(points, title=title, save_path=str(output))
    if not quiet:
        click.echo(f"Chart saved to {output}")


# ---------------------------------------------------------------------------
# snapshot
# ---------------------------------------------------------------------------

@main.group()
def snapshot() -> None:
    """
    Snapshot file commands.

    Validate, display, and create snapshot files.
    """
    pass


@snapshot.command("validate")
@click.argument("snapshot_file", type=click.Path(exists=True, path_type=Path))
@click.pass_context
def snapshot_validate(ctx: click.Context, snapshot_file: Path) -> None:
    """
    Validate a snapshot file.

    Example:
        networth snapshot validate household.json
    """
    console = ctx.obj.get("console")
    quiet = ctx.obj.get("quiet", False)

    from .serialization import load_snapshot

    try:
        snap = load_snapshot(snapshot_file)
    except Exception as e:
        click.echo(f"Snapshot validation failed: {e}", err=True)
        sys.exit(1)

    if quiet:
        return
    info = (
        "[bold]Snapshot Valid[/bold]\n\n"
        f"[cyan]Assets:[/cyan] {len(snap.assets)}\n"
        f"[cyan]Liabilities:[/cyan] {len(snap.liabilities)}\n"
        f"[cyan]Income streams:[/cyan] {len(snap.incomes)}\n"
        f"[cyan]Expenses:[/cyan] {len(snap.expenses)}\n"
        f"[cyan]Cash reservoir:[/cyan] {'present' if snap.cash_reservoir else 'missing (created during projection)'}\n"
    )
    if snap.policy.buys_stock:
        info += (
            f"[cyan]Auto-invest:[/cyan] {snap.policy.investment_percentage:g}% "
            f"into {snap.policy.investment_stock_symbol}\n"
        )
    console.print(Panel(info, title="Snapshot Summary", border_style="green"))


@snapshot.command("show")
@click.argument("snapshot_file", type=click.Path(exists=True, path_type=Path))
@click.option("--format", "-f", type=click.Choice(["json", "table"]), default="table")
@click.pass_context
def snapshot_show(ctx: click.Context, snapshot_file: Path, format: str) -> None:
    """
    Display a snapshot.

    Example:
        networth snapshot show household.json --format table
    """
    console = ctx.obj.get("console")

    from .serialization import snapshot_to_dict

    snap = _load(snapshot_file)

    if format == "json":
        click.echo(json.dumps(snapshot_to_dict(snap), indent=2))
        return

    assets_table = Table(title="Assets")
    assets_table.add_column("Name", style="cyan")
    assets_table.add_column("Type")
    assets_table.add_column("Value", justify="right")
    assets_table.add_column("Growth", justify="right")
    assets_table.add_column("Distribution")
    for a in snap.assets:
        assets_table.add_row(a.name or a.id, a.type, f"{a.value:,.2f}", f"{a.growth_rate:g}%", a.distribution_frequency)
    console.print(assets_table)

    debts_table = Table(title="Liabilities")
    debts_table.add_column("Name", style="cyan")
    debts_table.add_column("Balance", justify="right")
    debts_table.add_column("Rate", justify="right")
    debts_table.add_column("Payment/mo", justify="right")
    for l in snap.liabilities:
        debts_table.add_row(l.name or l.id, f"{l.balance:,.2f}", f"{l.interest_rate:g}%", f"{l.minimum_payment:,.2f}")
    console.print(debts_table)

    flow_table = Table(title="Monthly Cash Flow")
    flow_table.add_column("Item", style="cyan")
    flow_table.add_column("Amount", justify="right")
    for i in snap.incomes:
        flow_table.add_row(f"+ {i.source or i.id}", f"{i.monthly_amount:,.2f}")
    for e in snap.expenses:
        flow_table.add_row(f"- {e.category or e.id}", f"{e.monthly_amount:,.2f}")
    console.print(flow_table)


@snapshot.command("create")
@click.argument("output_file", type=click.Path(path_type=Path))
@click.option("--template", "-t", type=click.Choice(["basic", "stocks"]), default="basic")
@click.pass_context
def snapshot_create(ctx: click.Context, output_file: Path, template: str) -> None:
    """
    Create a new snapshot file from a template.

    Example:
        networth snapshot create household.json --template basic
    """
    console = ctx.obj.get("console")
    quiet = ctx.obj.get("quiet", False)

    from .serialization import SCHEMA_VERSION

    snapshot_data = {
        "schema_version": SCHEMA_VERSION,
        "assets": [
            {
                "id": CASH_RESERVOIR_ID,
                "name": "Bank account",
                "value": 5000,
                "growthRate": 0,
                "type": "cash",
                "distributionFrequency": "monthly"
            },
            {
                "id": "home",
                "name": "Apartment",
                "value": 250000,
                "growthRate": 2,
                "type": "property"
            }
        ],
        "liabilities": [
            {
                "id": "mortgage",
                "name": "Mortgage",
                "balance": 180000,
                "interestRate": 3.5,
                "minimumPayment": 900,
                "type": "mortgage"
            }
        ],
        "income": [
            {"id": "salary", "source": "Salary", "monthlyAmount": 4000, "growthRate": 0}
        ],
        "expenses": [
            {"id": "living", "category": "Living costs", "monthlyAmount": 2200, "growthRate": 0}
        ],
        "investmentPercentage": 0,
        "investmentType": "rate",
        "investmentRate": 7,
        "yearsToProject": 10
    }

    if template == "stocks":
        snapshot_data["assets"].append({
            "id": "msft",
            "name": "Microsoft",
            "value": 4000,
            "growthRate": 0,
            "type": "stock",
            "stockSymbol": "MSFT",
            "quantity": 10,
            "stockGrowthType": "targets",
            "stockTargets": [
                {"date": "2027-01-01", "expectedPrice": 450},
                {"date": "2030-01-01", "expectedPrice": 600}
            ],
            "useEstimation": True,
            "distributionFrequency": "quarterly"
        })
        snapshot_data["investmentPercentage"] = 50
        snapshot_data["investmentType"] = "stock"
        snapshot_data["investmentStockSymbol"] = "MSFT"

    output_file.parent.mkdir(parents=True, exist_ok=True)
    with open(output_file, "w") as f:
        json.dump(snapshot_data, f, indent=2)

    if not quiet:
        console.print(f"[green]Created snapshot file: {output_file}[/green]")


# ---------------------------------------------------------------------------
# info
# ---------------------------------------------------------------------------

@main.command()
@click.pass_context
def info(ctx: click.Context) -> None:
    """
    Display system and package information.

    Shows version numbers of installed dependencies and the active
    settings.
    """
    console = ctx.obj.get("console")
    settings: AppSettings = ctx.obj["settings"]

    info_lines = [
        f"networth Version: {__version__}",
        f"Python: {sys.version.split()[0]}",
    ]

    dependencies = {
        "numpy": "numpy",
        "pandas": "pandas",
        "pydantic": "pydantic",
        "matplotlib": "matplotlib",
        "rich": "rich",
        "click": "click",
    }

    for name, module in dependencies.items():
        try:
            mod = __import__(module)
            version = getattr(mod, "__version__", "installed")
            info_lines.append(f"{name}: {version}")
        except ImportError:
            info_lines.append(f"{name}: not installed")

    info_lines.append(f"Log level: {settings.log_level}")
    info_lines.append(f"Default horizon: {settings.horizon_years:g} years, {settings.sample_count} points")
    console.print(Panel("\n".join(info_lines), title="System Information"))


if __name__ == "__main__":
    main()
