"""Presentation values for enriched polygons — color and elevation by risk."""

from __future__ import annotations

from typing import Iterable

from cyberlens.config import ElevationSettings, Palette, Settings, load_settings
from cyberlens.geo.reconciler import NameReconciler
from cyberlens.models.enums import GeometryStatus
from cyberlens.models.geo import EnrichedPolygon, MatchResult, PolygonRecord
from cyberlens.models.record import MetricRecord


def elevation_for(record: MetricRecord, elevation: ElevationSettings) -> float:
    """Altitude proportional to risk score, never below the configured floor."""
    return max(record.risk_score * elevation.scale, elevation.floor)


def style_polygon(
    polygon: PolygonRecord,
    match: MatchResult,
    visible_keys: set[str],
    palette: Palette,
    elevation: ElevationSettings,
) -> EnrichedPolygon:
    record = match.record
    if record is None:
        return EnrichedPolygon(
            polygon=polygon,
            match_method=match.method,
            status=GeometryStatus.NO_DATA,
            fill_color=palette.no_data_fill,
            stroke_color=palette.stroke,
            altitude=elevation.no_data,
        )
    if record.key not in visible_keys:
        return EnrichedPolygon(
            polygon=polygon,
            record=record,
            match_method=match.method,
            status=GeometryStatus.FILTERED_OUT,
            fill_color=palette.muted_fill,
            stroke_color=palette.muted_stroke,
            altitude=elevation.muted,
        )
    return EnrichedPolygon(
        polygon=polygon,
        record=record,
        match_method=match.method,
        status=GeometryStatus.MATCHED,
        fill_color=palette.color_for(record.risk_category),
        stroke_color=palette.stroke,
        altitude=elevation_for(record, elevation),
    )


def enrich_polygons(
    polygons: Iterable[PolygonRecord] | None,
    records: Iterable[MetricRecord] | None,
    visible: Iterable[MetricRecord] | None,
    reconciler: NameReconciler,
    settings: Settings | None = None,
) -> list[EnrichedPolygon]:
    """Join every polygon with its record and style it.

    Matching runs against the full record set so that filtered-out countries
    are still recognised and muted rather than shown as "no data". Every
    input polygon appears in the output, in input order.
    """
    settings = settings or load_settings()
    polygons = list(polygons or [])
    matches = reconciler.resolve_all((p.name for p in polygons), records)
    visible_keys = {r.key for r in visible or []}
    return [
        style_polygon(polygon, match, visible_keys, settings.palette, settings.elevation)
        for polygon, match in zip(polygons, matches)
    ]


def status_counts(polygons: Iterable[EnrichedPolygon]) -> dict[GeometryStatus, int]:
    counts = {status: 0 for status in GeometryStatus}
    for p in polygons:
        counts[p.status] += 1
    return counts
