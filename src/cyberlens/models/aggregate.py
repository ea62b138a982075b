"""Per-partition summary statistics."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from cyberlens.models.enums import Indicator
from cyberlens.models.record import MetricRecord


class AggregateStats(BaseModel):
    """Mean of each indicator on the 0-100 display scale."""

    model_config = ConfigDict(frozen=True)

    cei: float = 0.0
    gci: float = 0.0
    ncsi: float = 0.0
    ddl: float = 0.0
    risk_score: float = 0.0

    def get(self, indicator: Indicator) -> float:
        return getattr(self, indicator.value)

    def rounded(self, digits: int = 1) -> AggregateStats:
        return AggregateStats(
            **{indicator.value: round(self.get(indicator), digits) for indicator in Indicator}
        )


class Aggregate(BaseModel):
    """Summary of one partition of records.

    ``stats`` keeps full precision for sorting and comparison;
    ``display_stats`` is what charts show.
    """

    model_config = ConfigDict(frozen=True)

    key: str
    members: tuple[MetricRecord, ...] = Field(default_factory=tuple)
    count: int = 0
    stats: AggregateStats = Field(default_factory=AggregateStats)
    display_digits: int = 1

    @property
    def display_stats(self) -> AggregateStats:
        return self.stats.rounded(self.display_digits)

    @property
    def member_names(self) -> list[str]:
        return [m.name for m in self.members]
