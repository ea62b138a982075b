"""Dashboard snapshot — orchestrates filter → aggregate → reconcile → view."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from cyberlens.aggregation.engine import AggregationEngine
from cyberlens.aggregation.series import GroupTrend, compare_to_global
from cyberlens.filtering.engine import apply_filters, category_counts, filter_summary
from cyberlens.geo.presentation import enrich_polygons, status_counts
from cyberlens.geo.reconciler import NameReconciler
from cyberlens.importers.countries import load_countries
from cyberlens.importers.geojson import load_polygons
from cyberlens.models.aggregate import Aggregate
from cyberlens.models.enums import GeometryStatus, Indicator, RiskCategory
from cyberlens.models.filters import FilterState
from cyberlens.models.geo import EnrichedPolygon, PolygonRecord
from cyberlens.models.record import MetricRecord
from cyberlens.utils.hashing import (
    fingerprint_polygons,
    fingerprint_records,
    fingerprint_view,
    hash_filter_state,
)


def _loaded_now() -> datetime:
    return datetime.now(timezone.utc)


class DashboardView(BaseModel):
    """Everything the presentation layer needs for one filter state."""

    model_config = ConfigDict(frozen=True)

    records_available: bool
    polygons_available: bool
    total_records: int
    filtered: list[MetricRecord] = Field(default_factory=list)
    summary: str = "No filters applied"
    category_counts: dict[RiskCategory, int] = Field(default_factory=dict)
    by_region: list[Aggregate] = Field(default_factory=list)
    by_risk_category: list[Aggregate] = Field(default_factory=list)
    overview: Aggregate | None = None
    region_trends: list[GroupTrend] = Field(default_factory=list)
    top_risk: list[MetricRecord] = Field(default_factory=list)
    bottom_risk: list[MetricRecord] = Field(default_factory=list)
    polygons: list[EnrichedPolygon] = Field(default_factory=list)
    polygon_status: dict[GeometryStatus, int] = Field(default_factory=dict)
    fingerprint: str = ""

    @property
    def data_unavailable(self) -> bool:
        return not self.records_available


class DashboardSnapshot(BaseModel):
    """The two independently loaded inputs; either may still be missing.

    ``None`` means not loaded (pending or failed). Every derived view treats a
    missing input as an empty set.
    """

    model_config = ConfigDict(frozen=True)

    records: tuple[MetricRecord, ...] | None = None
    polygons: tuple[PolygonRecord, ...] | None = None
    loaded_at: datetime = Field(default_factory=_loaded_now)

    @classmethod
    def from_payloads(
        cls, countries: Any = None, geojson: Any = None
    ) -> DashboardSnapshot:
        records = tuple(load_countries(countries)) if countries is not None else None
        polygons = tuple(load_polygons(geojson)) if geojson is not None else None
        return cls(records=records, polygons=polygons)

    def with_records(self, records: list[MetricRecord] | None) -> DashboardSnapshot:
        loaded = tuple(records) if records is not None else None
        return self.model_copy(update={"records": loaded, "loaded_at": _loaded_now()})

    def with_polygons(self, polygons: list[PolygonRecord] | None) -> DashboardSnapshot:
        loaded = tuple(polygons) if polygons is not None else None
        return self.model_copy(update={"polygons": loaded, "loaded_at": _loaded_now()})

    def view(
        self,
        state: FilterState,
        engine: AggregationEngine | None = None,
        reconciler: NameReconciler | None = None,
    ) -> DashboardView:
        """Recompute the full view from scratch for ``state``."""
        engine = engine or AggregationEngine()
        reconciler = reconciler or NameReconciler()
        records = list(self.records or ())
        polygons = list(self.polygons or ())

        filtered = apply_filters(records, state)
        by_region = engine.by_region(filtered)
        overview = engine.overview(filtered)
        enriched = enrich_polygons(polygons, records, filtered, reconciler, engine.settings)

        return DashboardView(
            records_available=self.records is not None,
            polygons_available=self.polygons is not None,
            total_records=len(records),
            filtered=filtered,
            summary=filter_summary(state),
            category_counts=category_counts(filtered),
            by_region=by_region,
            by_risk_category=engine.by_risk_category(filtered),
            overview=overview,
            region_trends=compare_to_global(by_region, overview, Indicator.RISK_SCORE),
            top_risk=engine.top_by_risk(filtered),
            bottom_risk=engine.bottom_by_risk(filtered),
            polygons=enriched,
            polygon_status=status_counts(enriched),
            fingerprint=fingerprint_view(
                hash_filter_state(state),
                fingerprint_records(filtered),
                fingerprint_polygons(enriched),
            ),
        )
