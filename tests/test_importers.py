"""Tests for payload importers."""

import json
import logging
from pathlib import Path

import pytest

from cyberlens.importers.analytics import load_analytics
from cyberlens.importers.countries import (
    CountryImporter,
    coerce_number,
    load_countries,
    load_countries_file,
)
from cyberlens.importers.geojson import load_polygons, load_polygons_file
from cyberlens.models.enums import RiskCategory


# ─── Countries ─────────────────────────────────────────────────────────


def test_import_countries_file(countries_path):
    records = load_countries_file(countries_path)
    assert [r.name for r in records] == [
        "Japan", "Norway", "Brazil", "Russia", "United States", "Nigeria",
    ]


def test_missing_and_string_numbers_are_coerced(countries_path):
    nigeria = load_countries_file(countries_path)[-1]
    assert nigeria.cei == pytest.approx(0.61)
    assert nigeria.ncsi == 0.0
    assert nigeria.risk_category is RiskCategory.HIGH


def test_bare_array_payload():
    records = load_countries(
        [{"Country": "Chile", "Region": "South America", "Risk_Category": "Low Risk"}]
    )
    assert len(records) == 1
    assert records[0].gci == 0.0


@pytest.mark.parametrize("payload", [None, "nonsense", 42, {"data": None}, {}])
def test_unusable_payloads_yield_empty(payload):
    assert load_countries(payload) == []


def test_duplicate_countries_keep_first():
    payload = [
        {"Country": "Chile", "Region": "A", "Risk_Category": "Low Risk", "Risk_Score": 0.1},
        {"Country": "Chile", "Region": "B", "Risk_Category": "Low Risk", "Risk_Score": 0.2},
    ]
    (record,) = load_countries(payload)
    assert record.region == "A"


def test_category_cross_check_only_logs(caplog):
    payload = [{"Country": "X", "Region": "Y", "Risk_Category": "Low Risk", "Risk_Score": 0.9}]
    with caplog.at_level(logging.INFO, logger="cyberlens.importers.countries"):
        (record,) = CountryImporter().import_payload(payload)
    assert record.risk_category is RiskCategory.LOW
    assert "differs from score band" in caplog.text


@pytest.mark.parametrize(
    "raw, expected",
    [(None, 0.0), ("", 0.0), ("abc", 0.0), ("1.5", 1.5), (2, 2.0), (float("nan"), 0.0), (True, 1.0)],
)
def test_coerce_number(raw, expected):
    assert coerce_number(raw) == expected


def test_invalid_json_file_raises(tmp_path: Path):
    bad = tmp_path / "bad.json"
    bad.write_text("{not json")
    with pytest.raises(json.JSONDecodeError):
        load_countries_file(bad)


# ─── GeoJSON ───────────────────────────────────────────────────────────


def test_import_geojson_file(geojson_path):
    polygons = load_polygons_file(geojson_path)
    assert len(polygons) == 8
    assert polygons[3].name == "Russian Federation"
    assert polygons[3].geometry["type"] == "MultiPolygon"
    assert polygons[-1].name == ""


def test_geojson_tolerates_missing_payload():
    assert load_polygons(None) == []
    assert load_polygons({"type": "FeatureCollection"}) == []
    assert load_polygons([{"properties": {"name": "Chad"}}, "junk"])[0].name == "Chad"


# ─── Analytics pass-through ────────────────────────────────────────────


def test_analytics_passed_through_untouched():
    correlation = {"matrix": [[1.0, 0.3], [0.3, 1.0]], "labels": ["CEI", "GCI"]}
    importance = {"feature_importance": [{"feature": "GCI", "importance": 0.4}]}
    bundle = load_analytics(correlation, importance)
    assert bundle.correlation == correlation
    assert bundle.feature_importance == [{"feature": "GCI", "importance": 0.4}]


def test_analytics_missing_payloads():
    bundle = load_analytics()
    assert bundle.correlation == {}
    assert bundle.feature_importance == []
    assert load_analytics("bad", 7).correlation == {}
