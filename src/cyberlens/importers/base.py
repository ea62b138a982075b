"""Abstract base class for payload importers."""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AbstractImporter(ABC, Generic[T]):
    """Turns a decoded JSON payload into validated domain objects.

    Importers never raise on bad entries: they log and skip them, and a
    missing payload yields an empty list.
    """

    @abstractmethod
    def import_payload(self, data: Any) -> list[T]:
        """Parse an already-decoded JSON payload."""
        ...

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Name of the upstream source this importer handles."""
        ...

    def import_file(self, path: Path) -> list[T]:
        """Read a JSON file and parse it."""
        logger.info("Importing %s payload from %s", self.source_name, path)
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        items = self.import_payload(data)
        logger.info("Imported %d %s entries", len(items), self.source_name)
        return items
