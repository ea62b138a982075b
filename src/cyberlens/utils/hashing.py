"""Fingerprinting utilities for CyberLens views."""

from __future__ import annotations

import hashlib
import json
from typing import TYPE_CHECKING, Any, Iterable

if TYPE_CHECKING:
    from cyberlens.models.filters import FilterState
    from cyberlens.models.geo import EnrichedPolygon
    from cyberlens.models.record import MetricRecord


def _stable_hash(data: Any) -> str:
    """Generate stable SHA256 hash from JSON-serializable data.

    Args:
        data: Structure to hash

    Returns:
        str: First 16 characters of hex digest
    """
    json_str = json.dumps(data, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(json_str.encode("utf-8")).hexdigest()[:16]


def hash_filter_state(state: FilterState) -> str:
    """Hash a filter state so unchanged edits can be detected.

    Selections are sorted first; set iteration order never affects the hash.

    Args:
        state: FilterState to hash

    Returns:
        str: Deterministic hash string
    """
    data = {
        "regions": sorted(state.regions),
        "risk_categories": sorted(c.value for c in state.risk_categories),
        "ranges": {
            indicator.value: list(rng.as_tuple())
            for indicator, rng in state.ranges().items()
        },
    }
    return _stable_hash(data)


def fingerprint_records(records: Iterable[MetricRecord]) -> str:
    """Hash an ordered record set.

    Order matters: two views with the same members in a different order
    render differently.

    Args:
        records: Records to hash

    Returns:
        str: Deterministic hash string
    """
    rows = [r.model_dump(mode="json") for r in records]
    return _stable_hash(rows)


def fingerprint_polygons(polygons: Iterable[EnrichedPolygon]) -> str:
    """Hash what a map layer draws for each polygon.

    Covers the matched record, status, colors and altitude, so a change in
    the full record set that flips a polygon between muted and "no data"
    changes the hash even when the filtered set does not.

    Args:
        polygons: Enriched polygons in render order

    Returns:
        str: Deterministic hash string
    """
    rows = [
        [
            p.name,
            p.record.key if p.record is not None else None,
            p.status.value,
            p.fill_color,
            p.stroke_color,
            p.altitude,
        ]
        for p in polygons
    ]
    return _stable_hash(rows)


def fingerprint_view(filter_hash: str, records_hash: str, polygons_hash: str) -> str:
    """Combine component hashes into one view fingerprint."""
    return _stable_hash(
        {"filter": filter_hash, "records": records_hash, "polygons": polygons_hash}
    )
