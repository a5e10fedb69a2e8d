from __future__ import annotations

import json

import pytest

from call_reconciler.config import ConfigurationError, ReconcilerConfig, load_configuration


def test_defaults() -> None:
    config = ReconcilerConfig()

    assert config.match_window_ms == 60_000
    assert config.match_strategy == "linear"
    assert config.directory_ttl_seconds == 300.0


def test_load_json_configuration(tmp_path) -> None:
    path = tmp_path / "reconciler.json"
    path.write_text(
        json.dumps({"reconciliation": {"match_window_ms": 30000, "match_strategy": "bucketed"}}),
        encoding="utf-8",
    )

    config = ReconcilerConfig.from_file(path)

    assert config.match_window_ms == 30_000
    assert config.match_strategy == "bucketed"
    assert config.directory_ttl_seconds == 300.0


def test_load_yaml_configuration(tmp_path) -> None:
    pytest.importorskip("yaml")
    path = tmp_path / "reconciler.yaml"
    path.write_text("match_window_ms: 45000\ndirectory_ttl_seconds: 120\n", encoding="utf-8")

    config = ReconcilerConfig.from_file(path)

    assert config.match_window_ms == 45_000
    assert config.directory_ttl_seconds == 120


def test_missing_and_unsupported_files(tmp_path) -> None:
    with pytest.raises(ConfigurationError):
        load_configuration(tmp_path / "missing.json")

    ini = tmp_path / "reconciler.ini"
    ini.write_text("[reconciliation]\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_configuration(ini)

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_configuration(broken)


@pytest.mark.parametrize(
    "section",
    [
        {"match_window_ms": "sixty seconds"},
        {"match_window_ms": -1},
        {"directory_ttl_seconds": 0},
        {"match_strategy": "closest"},
        {"match_window_ms": True},
        {"match_window_ms": float("nan")},
        {"match_window_ms": float("inf")},
        {"directory_ttl_seconds": float("nan")},
        {"directory_ttl_seconds": float("inf")},
    ],
)
def test_invalid_values_are_rejected(section) -> None:
    with pytest.raises(ConfigurationError):
        ReconcilerConfig.from_mapping(section)
