from pathlib import Path

import pytest

from agenda.app_shell.config import missing_env, validate_ops_rules


def test_no_required_env_passes(rules, tmp_path: Path):
    data_dir = tmp_path / "data"
    validate_ops_rules(rules, data_dir)
    assert data_dir.is_dir()


def test_missing_required_env_exits(rules, tmp_path: Path, monkeypatch):
    monkeypatch.delenv("AGENDA_TEST_REQUIRED", raising=False)
    strict = rules.model_copy(update={"ops": rules.ops.model_copy(update={"required_env": ["AGENDA_TEST_REQUIRED"]})})

    assert missing_env(strict) == ["AGENDA_TEST_REQUIRED"]
    with pytest.raises(SystemExit):
        validate_ops_rules(strict, tmp_path)

    monkeypatch.setenv("AGENDA_TEST_REQUIRED", "1")
    assert missing_env(strict) == []
