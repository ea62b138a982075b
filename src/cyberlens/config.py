"""Runtime settings loaded from the packaged ``config.yaml``."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from cyberlens.models.enums import RiskCategory

_DEFAULT_CONFIG = Path(__file__).parent / "config.yaml"


class RiskBands(BaseModel):
    """Lower display-scale bounds of the Medium and High bands."""

    medium: float = 40.0
    high: float = 70.0

    def expected_category(self, risk_score: float) -> RiskCategory:
        """Band a 0-1 risk score. Used for cross-checks only."""
        display = risk_score * 100.0
        if display >= self.high:
            return RiskCategory.HIGH
        if display >= self.medium:
            return RiskCategory.MEDIUM
        return RiskCategory.LOW


class AggregationSettings(BaseModel):
    display_digits: int = Field(1, ge=0)
    top_k: int = Field(10, ge=1)
    max_comparison: int = Field(8, ge=1)
    label_max_length: int = Field(15, ge=1)


class Palette(BaseModel):
    risk: dict[RiskCategory, str] = Field(
        default_factory=lambda: {
            RiskCategory.LOW: "#27ae60",
            RiskCategory.MEDIUM: "#f39c12",
            RiskCategory.HIGH: "#e74c3c",
        }
    )
    unknown: str = "#95a5a6"
    no_data_fill: str = "#2c3e50"
    stroke: str = "#1a1a1a"
    muted_fill: str = "rgba(44, 62, 80, 0.1)"
    muted_stroke: str = "rgba(26, 26, 26, 0.3)"

    def color_for(self, category: RiskCategory) -> str:
        return self.risk.get(category, self.unknown)


class ElevationSettings(BaseModel):
    scale: float = Field(0.1, ge=0.0)
    floor: float = Field(0.02, ge=0.0)
    no_data: float = Field(0.015, ge=0.0)
    muted: float = Field(0.01, ge=0.0)


class Settings(BaseModel):
    """All tunable constants of the pipeline."""

    risk_bands: RiskBands = Field(default_factory=RiskBands)
    aggregation: AggregationSettings = Field(default_factory=AggregationSettings)
    palette: Palette = Field(default_factory=Palette)
    elevation: ElevationSettings = Field(default_factory=ElevationSettings)


def _read_config(path: Path) -> dict[str, Any]:
    with open(path) as f:
        return yaml.safe_load(f) or {}


@lru_cache(maxsize=1)
def _packaged_config() -> dict[str, Any]:
    return _read_config(_DEFAULT_CONFIG)


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from YAML, falling back to the packaged defaults.

    The packaged file is read once per process; an explicit ``path`` is
    always re-read.
    """
    data = _read_config(path) if path is not None else _packaged_config()
    return Settings.model_validate(data)
