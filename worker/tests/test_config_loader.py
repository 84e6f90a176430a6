"""Tests for runtime configuration loading."""

import pytest
from pydantic import ValidationError

from worker.config.config_loader import _deep_merge, _resolve_env_placeholders, load_runtime_config
from worker.config.settings import RuntimeConfig


def test_bundled_config_loads(monkeypatch):
    monkeypatch.delenv("SYNC_INTERVAL_MINUTES", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)

    config = load_runtime_config()

    assert isinstance(config, RuntimeConfig)
    assert config.sync.interval_minutes == 30
    assert config.sync.school_year_start_month == 8
    assert config.risk.thresholds.critical == 25
    assert config.logging.level == "INFO"
    assert len(config.metadata["config_version"]) == 16


def test_env_placeholders_override_defaults(monkeypatch):
    monkeypatch.setenv("SYNC_INTERVAL_MINUTES", "15")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    config = load_runtime_config()

    assert config.sync.interval_minutes == 15
    assert config.logging.level == "DEBUG"


def test_missing_env_without_default_raises(monkeypatch):
    monkeypatch.delenv("ABSENCE_STATS_UNSET", raising=False)

    with pytest.raises(ValueError):
        _resolve_env_placeholders({"value": 'env("ABSENCE_STATS_UNSET")'})


def test_plain_strings_are_untouched():
    assert _resolve_env_placeholders(["environment", 'say env("X") later']) == ["environment", 'say env("X") later']


def test_overrides_are_deep_merged(tmp_path):
    path = tmp_path / "rules.yaml"
    path.write_text("sync:\n  interval_minutes: 45\n  client_identity: test\nrisk:\n  max_safe_rate: 20\n")

    config = load_runtime_config(path, overrides={"sync": {"interval_minutes": 10}})

    assert config.sync.interval_minutes == 10
    assert config.sync.client_identity == "test"
    assert config.risk.max_safe_rate == 20
    assert config.risk.thresholds.warning == 18


def test_config_version_tracks_overrides(tmp_path):
    path = tmp_path / "rules.yaml"
    path.write_text("sync:\n  interval_minutes: 45\n")

    base = load_runtime_config(path)
    overridden = load_runtime_config(path, overrides={"sync": {"interval_minutes": 10}})

    assert base.metadata["config_version"] != overridden.metadata["config_version"]


def test_invalid_values_fail_validation(tmp_path):
    path = tmp_path / "rules.yaml"
    path.write_text("sync:\n  school_year_start_month: 13\n")

    with pytest.raises(ValidationError):
        load_runtime_config(path)


def test_deep_merge_does_not_mutate_base():
    base = {"a": {"b": 1, "c": 2}}

    merged = _deep_merge(base, {"a": {"b": 3}})

    assert merged == {"a": {"b": 3, "c": 2}}
    assert base == {"a": {"b": 1, "c": 2}}
