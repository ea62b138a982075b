"""Aggregation engine and comparison helpers."""

from cyberlens.aggregation.engine import (
    AggregationEngine,
    PartitionFn,
    by_identity,
    by_region,
    by_risk_category,
)
from cyberlens.aggregation.selection import ComparisonSelection

__all__ = [
    "AggregationEngine",
    "ComparisonSelection",
    "PartitionFn",
    "by_identity",
    "by_region",
    "by_risk_category",
]
