"""CyberLens CLI: read-only inspection of countries and GeoJSON files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from cyberlens import __version__
from cyberlens.utils.logging import configure_logging

app = typer.Typer(
    name="cyberlens",
    help="Filter, aggregate and map country cybersecurity metrics.",
    no_args_is_help=True,
)
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Filter, aggregate and map country cybersecurity metrics."""
    if verbose:
        configure_logging(logging.DEBUG)


COMPARE_MODES = ("regions", "risk", "top", "bottom")


def _load_records(path: Path) -> list:
    from cyberlens.importers.countries import load_countries_file

    try:
        return load_countries_file(path)
    except (OSError, ValueError) as e:
        console.print(f"[red]Could not load {path}:[/red] {e}")
        raise typer.Exit(1)


def _aggregate_table(title: str, aggregates: list) -> Table:
    table = Table(title=title)
    table.add_column("Group", style="cyan")
    table.add_column("Count", justify="right")
    for label in ("CEI %", "GCI", "NCSI", "DDL", "Risk %"):
        table.add_column(label, justify="right")
    for agg in aggregates:
        s = agg.display_stats
        table.add_row(
            agg.key, str(agg.count),
            f"{s.cei:.1f}", f"{s.gci:.1f}", f"{s.ncsi:.1f}", f"{s.ddl:.1f}", f"{s.risk_score:.1f}",
        )
    return table


def _record_table(title: str, records: list) -> Table:
    table = Table(title=title)
    table.add_column("#", justify="right")
    table.add_column("Country", style="cyan")
    table.add_column("Region")
    table.add_column("Category")
    table.add_column("Risk %", justify="right")
    for rank, r in enumerate(records, 1):
        table.add_row(
            str(rank), r.name, r.region, r.risk_category.value, f"{r.risk_score * 100:.1f}"
        )
    return table


@app.command()
def version() -> None:
    """Show CyberLens version."""
    console.print(f"cyberlens {__version__}")


@app.command()
def validate(records_file: Path = typer.Argument(..., help="Path to countries JSON")) -> None:
    """Check that a countries payload parses into metric records."""
    records = _load_records(records_file)
    if not records:
        console.print(f"[red]Validation failed:[/red] no usable records in {records_file}")
        raise typer.Exit(1)
    console.print(f"[green]Valid countries payload:[/green] {len(records)} records")


@app.command()
def summary(
    records_file: Path = typer.Argument(..., help="Path to countries JSON"),
    region: Optional[list[str]] = typer.Option(None, "--region", "-r", help="Restrict to region"),
    risk: Optional[list[str]] = typer.Option(None, "--risk", help="Restrict to risk category"),
    min_risk: float = typer.Option(0.0, "--min-risk", help="Lowest risk score (0-100)"),
    max_risk: float = typer.Option(100.0, "--max-risk", help="Highest risk score (0-100)"),
) -> None:
    """Filter a dataset and print regional aggregates."""
    from cyberlens.aggregation.engine import AggregationEngine
    from cyberlens.filtering.engine import apply_filters, category_counts, filter_summary
    from cyberlens.models.enums import Indicator
    from cyberlens.models.filters import FilterState

    records = _load_records(records_file)
    try:
        state = FilterState(regions=frozenset(region or []), risk_categories=risk or [])
    except ValueError as e:
        console.print(f"[red]Invalid filter:[/red] {e}")
        raise typer.Exit(1)
    state = state.with_range(Indicator.RISK_SCORE, min_risk, max_risk)

    filtered = apply_filters(records, state)
    engine = AggregationEngine()

    console.print(f"\n[bold]{len(filtered)} of {len(records)} countries shown[/bold]")
    console.print(f"Active filters: {filter_summary(state)}")
    counts = category_counts(filtered)
    console.print(
        "  " + "  ".join(f"{category.value}: {count}" for category, count in counts.items())
    )
    console.print(_aggregate_table("By region", engine.by_region(filtered)))


@app.command()
def compare(
    records_file: Path = typer.Argument(..., help="Path to countries JSON"),
    mode: str = typer.Option("regions", "--mode", "-m", help="regions, risk, top or bottom"),
    k: Optional[int] = typer.Option(None, "-k", help="How many countries for top/bottom"),
) -> None:
    """Print one of the comparison views."""
    from cyberlens.aggregation.engine import AggregationEngine

    if mode not in COMPARE_MODES:
        console.print(f"[red]Unknown mode {mode!r}[/red] (choose from {', '.join(COMPARE_MODES)})")
        raise typer.Exit(1)

    records = _load_records(records_file)
    engine = AggregationEngine()
    if mode == "regions":
        console.print(_aggregate_table("Regional comparison", engine.by_region(records)))
    elif mode == "risk":
        console.print(_aggregate_table("Risk level comparison", engine.by_risk_category(records)))
    elif mode == "top":
        console.print(_record_table("Highest risk", engine.top_by_risk(records, k)))
    else:
        console.print(_record_table("Lowest risk", engine.bottom_by_risk(records, k)))


@app.command()
def match(
    records_file: Path = typer.Argument(..., help="Path to countries JSON"),
    geojson_file: Path = typer.Argument(..., help="Path to GeoJSON FeatureCollection"),
    aliases: Optional[Path] = typer.Option(None, "--aliases", "-a", help="Alias table YAML"),
    unmatched: bool = typer.Option(False, "--unmatched", help="List polygons without data"),
) -> None:
    """Reconcile polygon names against the dataset."""
    from cyberlens.geo.reconciler import NameReconciler
    from cyberlens.importers.geojson import load_polygons_file
    from cyberlens.models.enums import MatchMethod

    records = _load_records(records_file)
    try:
        polygons = load_polygons_file(geojson_file)
    except (OSError, ValueError) as e:
        console.print(f"[red]Could not load {geojson_file}:[/red] {e}")
        raise typer.Exit(1)

    reconciler = NameReconciler.from_file(aliases) if aliases else NameReconciler()
    results = reconciler.resolve_all((p.name for p in polygons), records)

    console.print(f"\n[bold]{len(results)} polygons[/bold]")
    for method in MatchMethod:
        count = sum(1 for r in results if r.method is method)
        console.print(f"  {method.value}: {count}")

    if unmatched:
        console.print("\n[yellow]Without data:[/yellow]")
        for r in results:
            if not r.matched:
                console.print(f"  - {r.polygon_name or '(unnamed)'}")
