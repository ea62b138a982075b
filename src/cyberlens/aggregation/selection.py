"""Custom comparison selection — a small, ordered, capped set of records."""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict, Field, model_validator

from cyberlens.aggregation.engine import AggregationEngine
from cyberlens.models.aggregate import Aggregate
from cyberlens.models.record import MetricRecord

logger = logging.getLogger(__name__)

DEFAULT_MAX_SELECTION = 8


class ComparisonSelection(BaseModel):
    """Records picked for side-by-side comparison, in selection order.

    Every edit returns a new selection. Adding a duplicate or exceeding
    ``max_size`` returns the selection unchanged; constructing one directly
    drops repeated names and anything past ``max_size``.
    """

    model_config = ConfigDict(frozen=True)

    records: tuple[MetricRecord, ...] = Field(default_factory=tuple)
    max_size: int = Field(DEFAULT_MAX_SELECTION, ge=1)

    @model_validator(mode="after")
    def _enforce_cap(self) -> ComparisonSelection:
        kept: list[MetricRecord] = []
        for record in self.records:
            if any(r.key == record.key for r in kept):
                continue
            kept.append(record)
        if len(kept) > self.max_size:
            logger.debug("Selection truncated to %d of %d records", self.max_size, len(kept))
            kept = kept[: self.max_size]
        if len(kept) != len(self.records):
            object.__setattr__(self, "records", tuple(kept))
        return self

    def __len__(self) -> int:
        return len(self.records)

    def __contains__(self, name: object) -> bool:
        return any(r.key == name for r in self.records)

    @property
    def is_full(self) -> bool:
        return len(self.records) >= self.max_size

    def add(self, record: MetricRecord) -> ComparisonSelection:
        if record.key in self:
            logger.debug("%s already selected", record.key)
            return self
        if self.is_full:
            logger.debug("Selection full (%d), ignoring %s", self.max_size, record.key)
            return self
        return self.model_copy(update={"records": self.records + (record,)})

    def remove(self, name: str) -> ComparisonSelection:
        kept = tuple(r for r in self.records if r.key != name)
        if len(kept) == len(self.records):
            return self
        return self.model_copy(update={"records": kept})

    def clear(self) -> ComparisonSelection:
        return self.model_copy(update={"records": ()})

    def aggregates(self, engine: AggregationEngine) -> list[Aggregate]:
        """One single-member aggregate per selected record."""
        return engine.by_identity(self.records)

    @classmethod
    def for_engine(cls, engine: AggregationEngine) -> ComparisonSelection:
        """Empty selection sized from the engine's settings."""
        return cls(max_size=engine.settings.aggregation.max_comparison)
