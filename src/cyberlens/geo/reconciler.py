"""Geo-name reconciler — maps free-text polygon names onto metric records."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Iterable, Mapping

import yaml

from cyberlens.models.enums import MatchMethod
from cyberlens.models.geo import MatchResult
from cyberlens.models.record import MetricRecord

logger = logging.getLogger(__name__)

_DEFAULT_ALIASES = Path(__file__).parent / "aliases.yaml"


def _read_aliases(path: Path) -> dict[str, str]:
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    return {str(k): str(v) for k, v in (data.get("aliases") or {}).items()}


@lru_cache(maxsize=1)
def _packaged_aliases() -> dict[str, str]:
    return _read_aliases(_DEFAULT_ALIASES)


def load_aliases(path: Path | None = None) -> dict[str, str]:
    """Load an alternate-name → canonical-name table from YAML.

    The packaged table is read from disk once; callers get a fresh copy.
    """
    if path is None:
        return dict(_packaged_aliases())
    return _read_aliases(path)


def _norm(name: str) -> str:
    return name.strip().lower()


class NameReconciler:
    """Resolve polygon names: exact, then alias, then substring containment.

    The first rule that yields a record wins. Within a rule, the first
    record in input order wins.
    """

    def __init__(self, aliases: Mapping[str, str] | None = None) -> None:
        if aliases is None:
            aliases = load_aliases()
        self._aliases = {_norm(k): v for k, v in aliases.items()}

    @classmethod
    def from_file(cls, path: Path) -> NameReconciler:
        return cls(load_aliases(path))

    @property
    def aliases(self) -> dict[str, str]:
        return dict(self._aliases)

    def match(
        self, polygon_name: str, records: Iterable[MetricRecord] | None
    ) -> MetricRecord | None:
        """Return the record a polygon name refers to, or None."""
        return self.resolve(polygon_name, records).record

    def resolve(
        self, polygon_name: str, records: Iterable[MetricRecord] | None
    ) -> MatchResult:
        """Like ``match`` but also reports which rule matched."""
        records = list(records or [])
        return self._resolve(polygon_name, records, self._index(records))

    def resolve_all(
        self, polygon_names: Iterable[str], records: Iterable[MetricRecord] | None
    ) -> list[MatchResult]:
        """Resolve many names against one record set, building the index once."""
        records = list(records or [])
        index = self._index(records)
        results = [self._resolve(name, records, index) for name in polygon_names]
        unmatched = sum(1 for r in results if not r.matched)
        logger.debug("Reconciled %d polygons, %d without data", len(results), unmatched)
        return results

    @staticmethod
    def _index(records: list[MetricRecord]) -> dict[str, MetricRecord]:
        index: dict[str, MetricRecord] = {}
        for record in records:
            index.setdefault(_norm(record.name), record)
        return index

    def _resolve(
        self,
        polygon_name: str,
        records: list[MetricRecord],
        index: dict[str, MetricRecord],
    ) -> MatchResult:
        wanted = _norm(polygon_name or "")
        if not wanted:
            return MatchResult(polygon_name=polygon_name or "")

        record = index.get(wanted)
        if record is not None:
            return MatchResult(polygon_name=polygon_name, record=record, method=MatchMethod.EXACT)

        canonical = self._aliases.get(wanted)
        if canonical is not None:
            record = index.get(_norm(canonical))
            if record is not None:
                return MatchResult(
                    polygon_name=polygon_name, record=record, method=MatchMethod.ALIAS
                )

        for record in records:
            candidate = _norm(record.name)
            if candidate and (candidate in wanted or wanted in candidate):
                return MatchResult(
                    polygon_name=polygon_name, record=record, method=MatchMethod.SUBSTRING
                )

        return MatchResult(polygon_name=polygon_name)
