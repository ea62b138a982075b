"""Derived series handed to chart and table renderers."""

from __future__ import annotations

from collections import Counter
from typing import Iterable

from pydantic import BaseModel, Field

from cyberlens.models.aggregate import Aggregate
from cyberlens.models.enums import Indicator, RiskCategory, SortDirection, TrendDirection
from cyberlens.models.record import MetricRecord

TEXT_SORT_KEYS = ("name", "region", "risk_category")


class ScatterPoint(BaseModel):
    """One country plotted on two indicators (display scale)."""

    name: str
    region: str
    risk_category: RiskCategory
    x: float
    y: float
    original_x: float
    original_y: float


class RiskShare(BaseModel):
    category: RiskCategory
    count: int
    percentage: float


class RegionalBreakdown(BaseModel):
    """How many records of each risk category a region holds."""

    region: str
    count: int
    distribution: dict[RiskCategory, int] = Field(default_factory=dict)


class GroupTrend(BaseModel):
    """One aggregate compared against the global average on one indicator."""

    key: str
    count: int
    value: float
    global_average: float
    deviation: float
    direction: TrendDirection


class ChartRow(BaseModel):
    """Flat row for grouped bar charts."""

    label: str
    full_name: str
    values: dict[Indicator, float]
    count: int


def truncate_label(name: str, max_length: int = 15) -> str:
    if len(name) <= max_length:
        return name
    return name[:max_length] + "..."


def chart_rows(aggregates: Iterable[Aggregate], max_length: int = 15) -> list[ChartRow]:
    """Rounded chart rows, one per aggregate, order kept."""
    rows = []
    for agg in aggregates:
        shown = agg.display_stats
        rows.append(
            ChartRow(
                label=truncate_label(agg.key, max_length),
                full_name=agg.key,
                values={indicator: shown.get(indicator) for indicator in Indicator},
                count=agg.count,
            )
        )
    return rows


def search_records(records: Iterable[MetricRecord] | None, term: str = "") -> list[MetricRecord]:
    """Case-insensitive substring search over country and region names."""
    needle = term.strip().lower()
    if not needle:
        return list(records or [])
    return [
        r for r in records or []
        if needle in r.name.lower() or needle in r.region.lower()
    ]


def sort_records(
    records: Iterable[MetricRecord] | None,
    sort_by: str | Indicator = "name",
    direction: SortDirection = SortDirection.ASC,
) -> list[MetricRecord]:
    """Sort a table view by a text column or an indicator.

    Text columns compare case-insensitively. The sort is stable.
    """
    reverse = SortDirection(direction) is SortDirection.DESC
    if isinstance(sort_by, str) and sort_by in TEXT_SORT_KEYS:
        return sorted(
            records or [], key=lambda r: str(getattr(r, sort_by)).casefold(), reverse=reverse
        )
    indicator = Indicator(sort_by)
    return sorted(records or [], key=lambda r: r.value(indicator), reverse=reverse)


def scatter_points(
    records: Iterable[MetricRecord] | None, x: Indicator, y: Indicator
) -> list[ScatterPoint]:
    """Plot points for two indicators; points with a non-positive axis are dropped."""
    points = []
    for r in records or []:
        point = ScatterPoint(
            name=r.name,
            region=r.region,
            risk_category=r.risk_category,
            x=r.display_value(x),
            y=r.display_value(y),
            original_x=r.value(x),
            original_y=r.value(y),
        )
        if point.x > 0 and point.y > 0:
            points.append(point)
    return points


def points_by_region(points: Iterable[ScatterPoint]) -> dict[str, list[ScatterPoint]]:
    grouped: dict[str, list[ScatterPoint]] = {}
    for p in points:
        grouped.setdefault(p.region, []).append(p)
    return grouped


def risk_distribution(records: Iterable[MetricRecord] | None) -> list[RiskShare]:
    """Count and share of each category present, largest group first."""
    records = list(records or [])
    if not records:
        return []
    counts = Counter(r.risk_category for r in records)
    shares = [
        RiskShare(
            category=category,
            count=count,
            percentage=round(count / len(records) * 100, 1),
        )
        for category, count in counts.items()
    ]
    return sorted(shares, key=lambda s: s.count, reverse=True)


def regional_breakdown(records: Iterable[MetricRecord] | None) -> list[RegionalBreakdown]:
    """Per-region category counts, regions in order of first appearance."""
    groups: dict[str, list[MetricRecord]] = {}
    for r in records or []:
        groups.setdefault(r.region, []).append(r)
    return [
        RegionalBreakdown(
            region=region,
            count=len(members),
            distribution=dict(Counter(m.risk_category for m in members)),
        )
        for region, members in groups.items()
    ]


def trend_direction(
    value: float, global_average: float, tolerance: float = 1.0
) -> TrendDirection:
    """Classify ``value`` against the global average on the display scale.

    Differences strictly below ``tolerance`` count as stable.
    """
    if abs(value - global_average) < tolerance:
        return TrendDirection.STABLE
    return TrendDirection.UP if value > global_average else TrendDirection.DOWN


def compare_to_global(
    aggregates: Iterable[Aggregate],
    overview: Aggregate | None,
    indicator: Indicator,
    tolerance: float = 1.0,
) -> list[GroupTrend]:
    """Deviation of each aggregate from the overall mean, order kept.

    With no overview (no data) the global average is 0.0.
    """
    global_average = overview.stats.get(indicator) if overview is not None else 0.0
    trends = []
    for agg in aggregates:
        value = agg.stats.get(indicator)
        trends.append(
            GroupTrend(
                key=agg.key,
                count=agg.count,
                value=value,
                global_average=global_average,
                deviation=value - global_average,
                direction=trend_direction(value, global_average, tolerance),
            )
        )
    return trends
