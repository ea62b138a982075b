"""Per-clause filter predicates for metric records."""

from __future__ import annotations

from cyberlens.models.enums import Indicator
from cyberlens.models.filters import FilterState
from cyberlens.models.record import MetricRecord


def is_region_selected(record: MetricRecord, state: FilterState) -> bool:
    """Pass if no region is selected or the record's region is."""
    if not state.regions:
        return True
    return record.region in state.regions


def is_category_selected(record: MetricRecord, state: FilterState) -> bool:
    """Pass if no category is selected or the record's category is."""
    if not state.risk_categories:
        return True
    return record.risk_category in state.risk_categories


def is_within_range(record: MetricRecord, state: FilterState, indicator: Indicator) -> bool:
    """Pass if the display-scale value lies inside the inclusive range."""
    return state.range_for(indicator).contains(record.display_value(indicator))


def is_within_ranges(record: MetricRecord, state: FilterState) -> bool:
    return all(is_within_range(record, state, indicator) for indicator in Indicator)


def passes_all_filters(record: MetricRecord, state: FilterState) -> bool:
    """Apply every clause. Returns True only if the record satisfies all of them."""
    return (
        is_region_selected(record, state)
        and is_category_selected(record, state)
        and is_within_ranges(record, state)
    )
