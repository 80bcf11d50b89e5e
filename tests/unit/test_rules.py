from pathlib import Path

import pytest

from agenda.rules.loader import load_rules


def test_shipped_rules_reproduce_role_matrix(rules):
    assert rules.access.all_bands_roles == ["ADMIN", "MANAGER", "CONTRACTS"]
    assert rules.access.all_events_roles == ["ADMIN", "MANAGER"]
    assert rules.access.financials_roles == ["ADMIN", "MANAGER", "CONTRACTS", "SALES"]
    assert rules.access.contracts_roles == ["ADMIN", "CONTRACTS"]
    assert rules.access.fallback_role == "VIEWER"
    assert rules.sessions.ttl_hours == 24
    assert rules.importer.default_time == "21:00"


def test_storage_keys_are_prefixed(rules):
    assert rules.storage.key("sessions") == "agendade_prod_v1_sessions"
    assert rules.storage.collections.events == "ad_events"


def test_missing_file_raises(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_rules(tmp_path / "nope.yaml")


def test_invalid_yaml_raises_value_error(tmp_path: Path):
    path = tmp_path / "rules.yaml"
    path.write_text("access: [unclosed", encoding="utf-8")
    with pytest.raises(ValueError, match="Invalid YAML"):
        load_rules(path)


def test_schema_violation_raises_value_error(tmp_path: Path):
    path = tmp_path / "rules.yaml"
    path.write_text("project:\n  slug: x\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Rules validation failed"):
        load_rules(path)
