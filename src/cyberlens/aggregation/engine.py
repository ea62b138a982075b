"""Aggregation engine — partition → summarize → rank."""

from __future__ import annotations

import logging
import math
from typing import Callable, Iterable

from cyberlens.config import Settings, load_settings
from cyberlens.models.aggregate import Aggregate, AggregateStats
from cyberlens.models.enums import Indicator
from cyberlens.models.record import MetricRecord

logger = logging.getLogger(__name__)

PartitionFn = Callable[[MetricRecord], str]

GLOBAL_KEY = "Global Average"


def by_region(record: MetricRecord) -> str:
    return record.region


def by_risk_category(record: MetricRecord) -> str:
    return record.risk_category.value


def by_identity(record: MetricRecord) -> str:
    return record.key


def _mean(values: list[float]) -> float:
    """Mean over non-missing values; 0.0 when nothing is left."""
    present = [v for v in values if not math.isnan(v)]
    if not present:
        return 0.0
    return math.fsum(present) / len(present)


class AggregationEngine:
    """Groups records and computes display-scale means per partition."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or load_settings()
        self._digits = self._settings.aggregation.display_digits
        self._top_k = self._settings.aggregation.top_k

    @property
    def settings(self) -> Settings:
        return self._settings

    def summarize(self, key: str, members: Iterable[MetricRecord]) -> Aggregate:
        """Build the aggregate for one partition.

        CEI and risk score are scaled to 0-100 here rather than at ingestion.
        """
        members = tuple(members)
        stats = AggregateStats(
            **{
                indicator.value: _mean([m.display_value(indicator) for m in members])
                for indicator in Indicator
            }
        )
        return Aggregate(
            key=key,
            members=members,
            count=len(members),
            stats=stats,
            display_digits=self._digits,
        )

    def aggregate(
        self, records: Iterable[MetricRecord] | None, partition: PartitionFn
    ) -> list[Aggregate]:
        """One aggregate per distinct partition key, in order of first appearance."""
        groups: dict[str, list[MetricRecord]] = {}
        for record in records or []:
            groups.setdefault(partition(record), []).append(record)
        logger.debug("Partitioned into %d groups", len(groups))
        return [self.summarize(key, members) for key, members in groups.items()]

    def by_region(self, records: Iterable[MetricRecord] | None) -> list[Aggregate]:
        """Regional aggregates, highest mean risk first.

        Ties keep the order in which regions were first seen.
        """
        return self._sorted_by_risk(self.aggregate(records, by_region))

    def by_risk_category(self, records: Iterable[MetricRecord] | None) -> list[Aggregate]:
        return self._sorted_by_risk(self.aggregate(records, by_risk_category))

    def by_identity(self, records: Iterable[MetricRecord] | None) -> list[Aggregate]:
        """One single-member aggregate per record, input order kept."""
        return self.aggregate(records, by_identity)

    def overview(self, records: Iterable[MetricRecord] | None) -> Aggregate | None:
        """Single aggregate over the whole set, or None when there is no data."""
        records = list(records or [])
        if not records:
            return None
        return self.summarize(GLOBAL_KEY, records)

    def top_by_risk(
        self, records: Iterable[MetricRecord] | None, k: int | None = None
    ) -> list[MetricRecord]:
        """Highest-risk records. Stable sort, so ties keep input order."""
        k = self._top_k if k is None else k
        ranked = sorted(records or [], key=lambda r: r.risk_score, reverse=True)
        return ranked[: max(k, 0)]

    def bottom_by_risk(
        self, records: Iterable[MetricRecord] | None, k: int | None = None
    ) -> list[MetricRecord]:
        """Lowest-risk records. Stable sort, so ties keep input order."""
        k = self._top_k if k is None else k
        ranked = sorted(records or [], key=lambda r: r.risk_score)
        return ranked[: max(k, 0)]

    @staticmethod
    def _sorted_by_risk(aggregates: list[Aggregate]) -> list[Aggregate]:
        # sorted() with reverse=True is still stable for equal keys
        return sorted(aggregates, key=lambda a: a.stats.risk_score, reverse=True)
