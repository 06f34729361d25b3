from __future__ import annotations

import json
import os
from datetime import date
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import DEFAULT_ZONE_OFFSET_HOURS, AppConfig, PipelineConfig
from ..models.window_policy import FixedCalendarWindow, RollingWindow, Unrestricted, WindowPolicy

"""Config loader.

Responsibilities:
- Load YAML (config/surfcast.yml by default, SURFCAST_CONFIG overrides)
- Validate against the packaged JSON schema (config_schema.json)
- Apply defaults (offset +9, unrestricted window, cache TTL 300s)
- Build the AppConfig / PipelineConfig domain objects
"""

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "CONFIG_ENV_VAR",
    "SCHEMA_PATH",
    "default_config_path",
    "parse_window_policy",
    "load_config",
]

DEFAULT_CONFIG_PATH = Path("config/surfcast.yml")
CONFIG_ENV_VAR = "SURFCAST_CONFIG"
SCHEMA_PATH = Path(__file__).with_name("config_schema.json")


class ConfigError(Exception):
    pass


def default_config_path() -> Path:
    """Config path from SURFCAST_CONFIG, else config/surfcast.yml."""
    env_path = os.getenv(CONFIG_ENV_VAR)
    return Path(env_path) if env_path else DEFAULT_CONFIG_PATH


def _dates_to_strings(value: Any) -> Any:
    # YAML は 2025-10-07 を date として読むので schema 検証前に文字列へ戻す
    if isinstance(value, dict):
        return {k: _dates_to_strings(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_dates_to_strings(v) for v in value]
    if isinstance(value, date):
        return value.isoformat()
    return value


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: If the schema file is missing or invalid, or the config
            data fails validation (missing keys, wrong types, unknown keys).
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def parse_window_policy(raw: dict[str, Any] | None) -> WindowPolicy:
    """Build a WindowPolicy from its config mapping (already schema-valid)."""
    if not raw or raw.get("type") == "unrestricted":
        return Unrestricted()
    kind = raw.get("type")
    try:
        if kind == "fixed":
            return FixedCalendarWindow(
                start=date.fromisoformat(str(raw["start"])),
                end=date.fromisoformat(str(raw["end"])),
            )
        if kind == "rolling":
            return RollingWindow(hours=int(raw["hours"]))
    except (KeyError, ValueError) as e:
        raise ConfigError(f"invalid window_policy: {e}") from e
    raise ConfigError(f"unknown window_policy type: {kind!r}")


def load_config(path: Path) -> AppConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")

    data = _dates_to_strings(data)
    _validate_config_schema(data)

    pipeline = PipelineConfig(
        window_policy=parse_window_policy(data.get("window_policy")),
        source_zone_offset_hours=data.get("source_zone_offset_hours", DEFAULT_ZONE_OFFSET_HOURS),
    )
    return AppConfig(
        source_directory=data["source_directory"],
        pipeline=pipeline,
        sources=tuple(data.get("sources", [])),
        cache_ttl_seconds=float(data.get("cache_ttl_seconds", 300)),
        request_timeout_seconds=float(data.get("request_timeout_seconds", 20)),
    )
