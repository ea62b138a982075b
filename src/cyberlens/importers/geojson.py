"""Import GeoJSON FeatureCollection features as PolygonRecords."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from cyberlens.importers.base import AbstractImporter
from cyberlens.models.geo import PolygonRecord

logger = logging.getLogger(__name__)


class GeoJsonImporter(AbstractImporter[PolygonRecord]):
    """Import a GeoJSON ``FeatureCollection``; names come from ``properties.name``."""

    @property
    def source_name(self) -> str:
        return "geojson"

    def import_payload(self, data: Any) -> list[PolygonRecord]:
        if data is None:
            return []
        if isinstance(data, dict):
            features = data.get("features", [])
        elif isinstance(data, list):
            features = data
        else:
            logger.warning("Unexpected GeoJSON payload type: %s", type(data).__name__)
            return []

        polygons = []
        for feature in features or []:
            if not isinstance(feature, dict):
                logger.warning("Skipping non-object feature: %r", feature)
                continue
            properties = feature.get("properties") or {}
            name = properties.get("name") or ""
            if not name:
                logger.debug("Feature without a name, it will carry no data")
            polygons.append(
                PolygonRecord(
                    name=str(name),
                    properties=properties,
                    geometry=feature.get("geometry"),
                )
            )
        return polygons


def load_polygons(data: Any) -> list[PolygonRecord]:
    return GeoJsonImporter().import_payload(data)


def load_polygons_file(path: Path) -> list[PolygonRecord]:
    return GeoJsonImporter().import_file(path)
