"""Filter engine — applies a FilterState to a record set."""

from __future__ import annotations

from collections import Counter
from typing import Iterable

from cyberlens.filtering.predicates import passes_all_filters
from cyberlens.models.enums import Indicator, RiskCategory
from cyberlens.models.filters import DISPLAY_MAX, DISPLAY_MIN, FilterState, NumericRange
from cyberlens.models.record import MetricRecord


def apply_filters(
    records: Iterable[MetricRecord] | None, state: FilterState
) -> list[MetricRecord]:
    """Return the records passing every clause of ``state``, in input order.

    A missing record set is treated as empty.
    """
    if not records:
        return []
    return [r for r in records if passes_all_filters(r, state)]


def default_filter_state() -> FilterState:
    """Permissive state used before the user touches anything."""
    return FilterState()


def observed_ranges(records: Iterable[MetricRecord] | None) -> dict[Indicator, NumericRange]:
    """Observed ``[min, max]`` of every indicator on the display scale.

    Indicators fall back to the full 0-100 scale when there is no data.
    """
    records = list(records or [])
    ranges = {}
    for indicator in Indicator:
        if not records:
            ranges[indicator] = NumericRange.of(DISPLAY_MIN, DISPLAY_MAX)
            continue
        values = [r.display_value(indicator) for r in records]
        ranges[indicator] = NumericRange.of(min(values), max(values))
    return ranges


def cleared_filter_state(records: Iterable[MetricRecord] | None) -> FilterState:
    """State after "clear all": no selections, ranges span the current dataset."""
    ranges = observed_ranges(records)
    return FilterState(**{indicator.value: rng for indicator, rng in ranges.items()})


def available_regions(records: Iterable[MetricRecord] | None) -> list[str]:
    return sorted({r.region for r in records or []})


def available_categories(records: Iterable[MetricRecord] | None) -> list[RiskCategory]:
    """Categories present in the data, lowest risk first."""
    present = {r.risk_category for r in records or []}
    return [category for category in RiskCategory if category in present]


def category_counts(records: Iterable[MetricRecord] | None) -> dict[RiskCategory, int]:
    """Number of records per risk category; categories with no records report 0."""
    counts = Counter(r.risk_category for r in records or [])
    return {category: counts.get(category, 0) for category in RiskCategory}


def filter_summary(state: FilterState) -> str:
    """Short human-readable description of the active categorical filters."""
    parts = []
    if state.regions:
        parts.append(f"{len(state.regions)} regions")
    if state.risk_categories:
        parts.append(f"{len(state.risk_categories)} risk levels")
    return ", ".join(parts) if parts else "No filters applied"
