"""Configuration helpers for the reconciliation service."""
from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .matcher import DEFAULT_MATCH_WINDOW_MS, MATCH_STRATEGIES

LOGGER = logging.getLogger(__name__)

DEFAULT_DIRECTORY_TTL_SECONDS = 300.0


class ConfigurationError(RuntimeError):
    """Raised when configuration files are missing or malformed."""


_SUPPORTED_EXTENSIONS = {".json", ".yaml", ".yml"}


def load_configuration(path: str | Path) -> Dict[str, Any]:
    """Load configuration data from a JSON or YAML file."""

    file_path = Path(path)
    if not file_path.exists():
        raise ConfigurationError(f"Configuration file '{file_path}' was not found")

    if file_path.suffix.lower() not in _SUPPORTED_EXTENSIONS:
        raise ConfigurationError(
            f"Unsupported configuration format '{file_path.suffix}'. Supported extensions: {sorted(_SUPPORTED_EXTENSIONS)}"
        )

    text = file_path.read_text(encoding="utf-8")
    if file_path.suffix.lower() == ".json":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f"Configuration file '{file_path}' is not valid JSON: {exc}") from exc
    else:
        try:
            import yaml  # type: ignore
        except ImportError as exc:  # pragma: no cover - dependency optional
            raise ConfigurationError(
                "YAML configuration requires the 'pyyaml' package to be installed"
            ) from exc
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Configuration file '{file_path}' is not valid YAML: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file '{file_path}' must contain a mapping at the top level")
    return data


@dataclass(frozen=True)
class ReconcilerConfig:
    """Explicit settings passed to the service at startup."""

    match_window_ms: float = DEFAULT_MATCH_WINDOW_MS
    match_strategy: str = "linear"
    directory_ttl_seconds: float = DEFAULT_DIRECTORY_TTL_SECONDS

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "ReconcilerConfig":
        data = dict(data or {})
        section = data.get("reconciliation", data)
        if not isinstance(section, Mapping):
            raise ConfigurationError("'reconciliation' section must be a mapping")

        unknown = set(section) - {"match_window_ms", "match_strategy", "directory_ttl_seconds"}
        for key in sorted(unknown):
            LOGGER.debug("Ignoring unknown configuration key %s", key)

        window = _as_number(section.get("match_window_ms", DEFAULT_MATCH_WINDOW_MS), "match_window_ms")
        ttl = _as_number(section.get("directory_ttl_seconds", DEFAULT_DIRECTORY_TTL_SECONDS), "directory_ttl_seconds")
        strategy = section.get("match_strategy", "linear")

        if window < 0:
            raise ConfigurationError("'match_window_ms' must not be negative")
        if ttl <= 0:
            raise ConfigurationError("'directory_ttl_seconds' must be positive")
        if strategy not in MATCH_STRATEGIES:
            raise ConfigurationError(f"'match_strategy' must be one of {MATCH_STRATEGIES}, got {strategy!r}")

        return cls(match_window_ms=window, match_strategy=strategy, directory_ttl_seconds=ttl)

    @classmethod
    def from_file(cls, path: str | Path) -> "ReconcilerConfig":
        return cls.from_mapping(load_configuration(path))


def _as_number(value: Any, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"'{name}' must be a number, got {value!r}")
    if not math.isfinite(value):
        raise ConfigurationError(f"'{name}' must be finite, got {value!r}")
    return float(value)


__all__ = ["ConfigurationError", "ReconcilerConfig", "load_configuration"]
