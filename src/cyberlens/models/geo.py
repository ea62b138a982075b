"""Geometry models — external polygons and their enriched presentation form."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from cyberlens.models.enums import GeometryStatus, MatchMethod
from cyberlens.models.record import MetricRecord


class PolygonRecord(BaseModel):
    """One GeoJSON feature with the free-text country name it carries."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    properties: dict[str, Any] = Field(default_factory=dict)
    geometry: dict[str, Any] | None = None


class MatchResult(BaseModel):
    """Outcome of reconciling one polygon name against the record set."""

    model_config = ConfigDict(frozen=True)

    polygon_name: str
    record: MetricRecord | None = None
    method: MatchMethod = MatchMethod.NONE

    @property
    def matched(self) -> bool:
        return self.record is not None


class EnrichedPolygon(BaseModel):
    """A polygon joined with at most one record plus derived presentation values."""

    model_config = ConfigDict(frozen=True)

    polygon: PolygonRecord
    record: MetricRecord | None = None
    match_method: MatchMethod = MatchMethod.NONE
    status: GeometryStatus = GeometryStatus.NO_DATA
    fill_color: str
    stroke_color: str
    altitude: float = Field(ge=0.0)

    @property
    def name(self) -> str:
        return self.polygon.name
