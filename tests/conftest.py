"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from cyberlens.aggregation.engine import AggregationEngine
from cyberlens.config import Settings
from cyberlens.geo.reconciler import NameReconciler
from cyberlens.models.enums import RiskCategory
from cyberlens.models.record import MetricRecord

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def make_record(
    name: str,
    risk_score: float,
    region: str = "Europe",
    category: RiskCategory | None = None,
    cei: float = 0.5,
    gci: float = 50.0,
    ncsi: float = 50.0,
    ddl: float = 5.0,
) -> MetricRecord:
    if category is None:
        if risk_score >= 0.7:
            category = RiskCategory.HIGH
        elif risk_score >= 0.4:
            category = RiskCategory.MEDIUM
        else:
            category = RiskCategory.LOW
    return MetricRecord(
        name=name,
        region=region,
        cei=cei,
        gci=gci,
        ncsi=ncsi,
        ddl=ddl,
        risk_score=risk_score,
        risk_category=category,
    )


@pytest.fixture
def trio() -> list[MetricRecord]:
    return [
        make_record("Japan", 0.82, region="Asia", cei=0.3, gci=97.8, ncsi=70.1, ddl=7.9),
        make_record("Norway", 0.15, region="Europe", cei=0.12, gci=92.1, ncsi=83.0, ddl=8.6),
        make_record("Brazil", 0.55, region="South America", cei=0.45, gci=96.6, ncsi=59.7, ddl=6.1),
    ]


@pytest.fixture
def world() -> list[MetricRecord]:
    """Twenty-four records with distinct risk scores across four regions."""
    regions = ["Europe", "Asia", "Africa", "Americas"]
    return [
        make_record(
            f"Country {i:02d}",
            risk_score=round(0.02 + i * 0.04, 2),
            region=regions[i % len(regions)],
            cei=round(0.1 + (i % 5) * 0.15, 2),
            gci=40.0 + i * 2.5,
            ncsi=30.0 + (i % 7) * 9.0,
            ddl=2.0 + (i % 6),
        )
        for i in range(24)
    ]


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def engine(settings) -> AggregationEngine:
    return AggregationEngine(settings)


@pytest.fixture
def reconciler() -> NameReconciler:
    return NameReconciler()


@pytest.fixture
def countries_path() -> Path:
    return FIXTURES_DIR / "sample_countries.json"


@pytest.fixture
def geojson_path() -> Path:
    return FIXTURES_DIR / "sample_world.geojson"


@pytest.fixture
def record_factory():
    return make_record
