"""Tests for the geo-name reconciler."""

from pathlib import Path

import pytest

from cyberlens.geo import reconciler as reconciler_module
from cyberlens.geo.reconciler import NameReconciler, load_aliases
from cyberlens.models.enums import MatchMethod


@pytest.fixture
def records(record_factory):
    return [
        record_factory("Russia", 0.74),
        record_factory("United States", 0.41, region="North America"),
        record_factory("Nigeria", 0.77, region="Africa"),
        record_factory("Japan", 0.82, region="Asia"),
        record_factory("Guinea", 0.6, region="Africa"),
    ]


def test_exact_match_is_case_insensitive(reconciler, records):
    result = reconciler.resolve("JAPAN", records)
    assert result.record.name == "Japan"
    assert result.method is MatchMethod.EXACT


def test_alias_match(reconciler, records):
    assert reconciler.match("Russian Federation", records).name == "Russia"
    result = reconciler.resolve("United States of America", records)
    assert result.record.name == "United States"
    assert result.method is MatchMethod.ALIAS


def test_unknown_name_returns_none(reconciler, records):
    assert reconciler.match("Atlantis", records) is None
    assert reconciler.resolve("Atlantis", records).method is MatchMethod.NONE


def test_substring_either_direction(reconciler, records):
    result = reconciler.resolve("Federal Republic of Nigeria", records)
    assert result.record.name == "Nigeria"
    assert result.method is MatchMethod.SUBSTRING
    assert reconciler.match("Niger", records).name == "Nigeria"


def test_exact_beats_substring(reconciler, records):
    # "Guinea" is also contained in other names but matches itself exactly
    extra = records + [records[0].model_copy(update={"name": "Papua New Guinea"})]
    assert reconciler.match("Guinea", extra).name == "Guinea"


def test_substring_prefers_input_order(reconciler, record_factory):
    records = [record_factory("Guinea-Bissau", 0.5), record_factory("Equatorial Guinea", 0.5)]
    assert reconciler.match("Guinea", records).name == "Guinea-Bissau"
    assert reconciler.match("Guinea", list(reversed(records))).name == "Equatorial Guinea"


def test_alias_to_missing_record_falls_through(record_factory):
    reconciler = NameReconciler({"Viet Nam": "Vietnam"})
    records = [record_factory("Viet Nam Republic", 0.5)]
    result = reconciler.resolve("Viet Nam", records)
    assert result.method is MatchMethod.SUBSTRING


def test_blank_names_never_match(reconciler, records):
    assert reconciler.match("", records) is None
    assert reconciler.match("   ", records) is None


def test_missing_records_treated_as_empty(reconciler):
    assert reconciler.match("Japan", None) is None
    assert reconciler.match("Japan", []) is None


def test_injected_alias_table(record_factory):
    reconciler = NameReconciler({"Nippon": "Japan"})
    assert reconciler.match("nippon", [record_factory("Japan", 0.8)]).name == "Japan"
    assert reconciler.aliases == {"nippon": "Japan"}


def test_resolve_all_is_deterministic(reconciler, records):
    names = ["Russian Federation", "Japan", "Atlantis", "Niger"]
    first = reconciler.resolve_all(names, records)
    second = reconciler.resolve_all(names, records)
    assert first == second
    assert [r.method for r in first] == [
        MatchMethod.ALIAS, MatchMethod.EXACT, MatchMethod.NONE, MatchMethod.SUBSTRING,
    ]


def test_default_alias_file_loads():
    aliases = load_aliases()
    assert aliases["Russian Federation"] == "Russia"
    assert aliases["Korea, Republic of"] == "South Korea"


def test_alias_file_override(tmp_path: Path, record_factory):
    path = tmp_path / "aliases.yaml"
    path.write_text("aliases:\n  Hellas: Greece\n")
    reconciler = NameReconciler.from_file(path)
    assert reconciler.match("Hellas", [record_factory("Greece", 0.3)]).name == "Greece"


def test_packaged_aliases_read_once(monkeypatch):
    load_aliases()

    def fail(path):
        raise AssertionError(f"re-read {path}")

    monkeypatch.setattr(reconciler_module, "_read_aliases", fail)
    aliases = load_aliases()
    aliases["atlantis"] = "Japan"
    assert "atlantis" not in load_aliases()
    assert NameReconciler().aliases
