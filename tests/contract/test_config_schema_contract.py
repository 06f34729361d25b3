from __future__ import annotations

import json

import jsonschema
import pytest

from surfcast.config.loader import SCHEMA_PATH

"""Config schema contract (config_schema.json shipped with the package)."""


@pytest.fixture(scope="module")
def schema() -> dict:
    return json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))


@pytest.mark.parametrize(
    "config",
    [
        {"source_directory": "./data"},
        {"source_directory": "./data", "window_policy": {"type": "unrestricted"}},
        {"source_directory": "./data", "window_policy": {"type": "fixed", "start": "2025-10-07", "end": "2025-10-09"}},
        {"source_directory": "./data", "window_policy": {"type": "rolling", "hours": 48}},
        {"source_directory": "./data", "source_zone_offset_hours": -5, "sources": ["https://example.com/a.csv"]},
    ],
)
def test_schema_accepts(schema, config):
    jsonschema.validate(config, schema)


@pytest.mark.parametrize(
    "config",
    [
        {},
        {"source_directory": "./data", "unknown": 1},
        {"source_directory": "./data", "window_policy": {"type": "fixed", "start": "2025/10/07", "end": "2025-10-09"}},
        {"source_directory": "./data", "window_policy": {"type": "rolling", "hours": -1}},
        {"source_directory": "./data", "source_zone_offset_hours": 15},
        {"source_directory": "./data", "cache_ttl_seconds": -1},
    ],
)
def test_schema_rejects(schema, config):
    with pytest.raises(jsonschema.exceptions.ValidationError):
        jsonschema.validate(config, schema)
