"""Country metrics importer — coerces backend JSON into MetricRecords."""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Any

from cyberlens.config import RiskBands, load_settings
from cyberlens.importers.base import AbstractImporter
from cyberlens.models.enums import RiskCategory
from cyberlens.models.record import MetricRecord

logger = logging.getLogger(__name__)

NUMERIC_FIELDS = ("CEI", "GCI", "NCSI", "DDL", "Risk_Score")


def coerce_number(value: Any) -> float:
    """Numeric value or 0.0 for anything missing, blank or unparseable."""
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return 0.0 if math.isnan(value) else float(value)
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return 0.0
        return 0.0 if math.isnan(number) else number
    return 0.0


class CountryImporter(AbstractImporter[MetricRecord]):
    """Import the ``/api/countries`` payload.

    Accepts either the bare record array or the ``{"data": [...]}`` envelope.
    """

    def __init__(self, bands: RiskBands | None = None) -> None:
        self._bands = bands or load_settings().risk_bands

    @property
    def source_name(self) -> str:
        return "countries"

    def import_payload(self, data: Any) -> list[MetricRecord]:
        if data is None:
            return []
        if isinstance(data, dict):
            data = data.get("data", [])
        if not isinstance(data, list):
            logger.warning("Unexpected countries payload type: %s", type(data).__name__)
            return []

        records = []
        seen: set[str] = set()
        for entry in data:
            record = self._parse_entry(entry)
            if record is None:
                continue
            if record.key in seen:
                logger.warning("Duplicate country %r, keeping the first entry", record.key)
                continue
            seen.add(record.key)
            records.append(record)
        return records

    def _parse_entry(self, entry: Any) -> MetricRecord | None:
        if not isinstance(entry, dict):
            logger.warning("Skipping non-object country entry: %r", entry)
            return None

        name = str(entry.get("Country") or "").strip()
        if not name:
            logger.warning("Skipping country entry without a name: %r", entry)
            return None

        category = RiskCategory.parse(entry.get("Risk_Category"))
        if category is None:
            logger.warning(
                "Skipping %s: unknown risk category %r", name, entry.get("Risk_Category")
            )
            return None

        values = {}
        for field in NUMERIC_FIELDS:
            raw = entry.get(field)
            values[field] = coerce_number(raw)
            if isinstance(raw, bool) or not isinstance(raw, (int, float)):
                logger.debug("%s: %s=%r coerced to %s", name, field, raw, values[field])

        record = MetricRecord(
            Country=name,
            Region=str(entry.get("Region") or "").strip(),
            Risk_Category=category,
            **values,
        )
        self._cross_check(record)
        return record

    def _cross_check(self, record: MetricRecord) -> None:
        """Log when the upstream category disagrees with the score bands."""
        expected = self._bands.expected_category(record.risk_score)
        if expected != record.risk_category:
            logger.info(
                "%s: upstream category %s differs from score band %s (score=%.2f)",
                record.name,
                record.risk_category.value,
                expected.value,
                record.risk_score,
            )


def load_countries(data: Any) -> list[MetricRecord]:
    return CountryImporter().import_payload(data)


def load_countries_file(path: Path) -> list[MetricRecord]:
    return CountryImporter().import_file(path)
