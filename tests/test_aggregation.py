"""Tests for the aggregation engine."""

import math

import pytest

from cyberlens.aggregation.engine import (
    GLOBAL_KEY,
    AggregationEngine,
    by_region,
    by_risk_category,
)
from cyberlens.config import AggregationSettings, Settings
from cyberlens.filtering.engine import apply_filters
from cyberlens.models.enums import Indicator, RiskCategory
from cyberlens.models.filters import FilterState


def test_single_member_regions_mirror_their_member(engine, trio):
    aggregates = engine.by_region(trio)
    assert [a.key for a in aggregates] == ["Asia", "South America", "Europe"]
    for agg in aggregates:
        (member,) = agg.members
        assert agg.count == 1
        for indicator in Indicator:
            assert agg.stats.get(indicator) == pytest.approx(member.display_value(indicator))


def test_means_scale_unit_fields_at_aggregation(engine, record_factory):
    records = [
        record_factory("A", 0.2, cei=0.1, gci=10.0),
        record_factory("B", 0.4, cei=0.3, gci=30.0),
    ]
    (agg,) = engine.aggregate(records, by_region)
    assert agg.stats.risk_score == pytest.approx(30.0)
    assert agg.stats.cei == pytest.approx(20.0)
    assert agg.stats.gci == pytest.approx(20.0)
    # raw records keep their natural scale
    assert records[0].risk_score == 0.2


def test_display_stats_round_to_one_decimal(engine, record_factory):
    records = [
        record_factory("A", 0.111, gci=10.04),
        record_factory("B", 0.222, gci=10.05),
        record_factory("C", 0.333, gci=10.07),
    ]
    (agg,) = engine.aggregate(records, by_region)
    assert agg.stats.risk_score == pytest.approx(22.2)
    assert agg.display_stats.gci == 10.1
    assert agg.stats.gci != agg.display_stats.gci


def test_missing_values_are_excluded_from_mean(engine, record_factory):
    records = [record_factory("A", 0.5, gci=40.0), record_factory("B", 0.5, gci=math.nan)]
    (agg,) = engine.aggregate(records, by_region)
    assert agg.stats.gci == pytest.approx(40.0)


def test_aggregate_is_deterministic(engine, world):
    first = engine.by_region(world)
    second = engine.by_region(list(world))
    assert first == second
    assert [a.stats for a in first] == [a.stats for a in second]


def test_region_counts_sum_to_filtered_size(engine, world):
    filtered = apply_filters(world, FilterState(risk_score=[20, 80]))
    aggregates = engine.by_region(filtered)
    assert sum(a.count for a in aggregates) == len(filtered)
    members = [m.name for a in aggregates for m in a.members]
    assert sorted(members) == sorted(r.name for r in filtered)


def test_region_sort_descending_by_mean_risk(engine, world):
    risks = [a.stats.risk_score for a in engine.by_region(world)]
    assert risks == sorted(risks, reverse=True)


def test_region_ties_keep_discovery_order(engine, record_factory):
    records = [
        record_factory("A", 0.5, region="Zeta"),
        record_factory("B", 0.9, region="Alpha"),
        record_factory("C", 0.5, region="Mid"),
    ]
    assert [a.key for a in engine.by_region(records)] == ["Alpha", "Zeta", "Mid"]


def test_by_risk_category(engine, world):
    aggregates = engine.by_risk_category(world)
    assert {a.key for a in aggregates} == {c.value for c in RiskCategory}
    assert aggregates[0].key == RiskCategory.HIGH.value
    for agg in aggregates:
        assert all(m.risk_category.value == agg.key for m in agg.members)


def test_aggregate_with_custom_partition(engine, world):
    aggregates = engine.aggregate(world, lambda r: "odd" if r.ddl % 2 else "even")
    assert [a.key for a in aggregates] == ["even", "odd"]


def test_aggregate_empty_input(engine):
    assert engine.aggregate([], by_risk_category) == []
    assert engine.by_region(None) == []
    assert engine.overview([]) is None


def test_overview(engine, trio):
    overview = engine.overview(trio)
    assert overview.key == GLOBAL_KEY
    assert overview.count == 3
    assert overview.stats.risk_score == pytest.approx((82 + 15 + 55) / 3)


def test_top_one_scenario(engine, trio):
    assert [r.name for r in engine.top_by_risk(trio, 1)] == ["Japan"]
    assert [r.name for r in engine.bottom_by_risk(trio, 1)] == ["Norway"]


def test_top_and_bottom_default_to_ten(engine, world):
    top = engine.top_by_risk(world)
    bottom = engine.bottom_by_risk(world)
    assert len(top) == 10 and len(bottom) == 10
    assert {r.name for r in top}.isdisjoint({r.name for r in bottom})
    assert top[0].risk_score == max(r.risk_score for r in world)
    assert bottom[0].risk_score == min(r.risk_score for r in world)


def test_top_k_stable_for_ties(engine, record_factory):
    records = [
        record_factory("A", 0.5),
        record_factory("B", 0.9),
        record_factory("C", 0.5),
        record_factory("D", 0.5),
    ]
    assert [r.name for r in engine.top_by_risk(records, 3)] == ["B", "A", "C"]
    assert [r.name for r in engine.bottom_by_risk(records, 2)] == ["A", "C"]


def test_top_k_does_not_reorder_input(engine, world):
    snapshot = list(world)
    engine.top_by_risk(world)
    assert world == snapshot


def test_top_k_from_settings(world):
    engine = AggregationEngine(Settings(aggregation=AggregationSettings(top_k=3)))
    assert len(engine.top_by_risk(world)) == 3


def test_by_identity_keeps_order(engine, trio):
    aggregates = engine.by_identity(list(reversed(trio)))
    assert [a.key for a in aggregates] == ["Brazil", "Norway", "Japan"]
