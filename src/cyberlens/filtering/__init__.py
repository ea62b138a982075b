"""Filter engine for metric records."""

from cyberlens.filtering.engine import (
    apply_filters,
    available_categories,
    available_regions,
    category_counts,
    cleared_filter_state,
    default_filter_state,
    filter_summary,
    observed_ranges,
)
from cyberlens.filtering.predicates import passes_all_filters

__all__ = [
    "apply_filters",
    "available_categories",
    "available_regions",
    "category_counts",
    "cleared_filter_state",
    "default_filter_state",
    "filter_summary",
    "observed_ranges",
    "passes_all_filters",
]
