from __future__ import annotations

from collections import Counter
from dataclasses import FrozenInstanceError
from datetime import UTC, date, datetime

import pytest

from surfcast.models import (
    ABSENT,
    ColumnIndex,
    FixedCalendarWindow,
    ForecastRecord,
    LoadResult,
    PipelineConfig,
    RollingWindow,
    SkipReason,
    SwellComponent,
    Unrestricted,
)
from surfcast.models.error_record import EMPTY_INPUT, ErrorRecord


def test_swell_component_defaults_and_frozen():
    s = SwellComponent(1.2)
    assert (s.height, s.period, s.direction) == (1.2, 0.0, 0.0)
    with pytest.raises(FrozenInstanceError):
        s.height = 2.0


def test_forecast_record_is_frozen():
    rec = ForecastRecord(
        instant=datetime(2025, 10, 6, 18, tzinfo=UTC),
        local_hour=3,
        temperature_c=18.6,
        tide_height_m=0.42,
        wind_speed_mps=4.0,
        wind_angle_deg=270.0,
        wind_direction_type="offshore",
        weather_icon_code="CLEAR",
        swells=(),
        wave_height_raw=0.0,
        wave_height_display=0.0,
    )
    with pytest.raises(FrozenInstanceError):
        rec.temperature_c = 0.0


def test_column_index_cell_defaults():
    cols = ColumnIndex(timestamp=0, temperature=1)
    row = ["2025-10-07 03:00:00", "18.6"]
    assert cols.has_timestamp
    assert cols.cell(row, "temperature") == "18.6"
    assert cols.cell(row, "swells") == ""  # absent
    assert not cols.is_present("swells")
    assert ColumnIndex(timestamp=0, swells=5).cell(row, "swells") == ""  # short row
    assert ColumnIndex().timestamp == ABSENT


def test_column_index_as_dict_covers_all_roles():
    d = ColumnIndex(timestamp=0).as_dict()
    assert set(d) == set(ColumnIndex.roles())
    assert d["timestamp"] == 0 and d["swells"] == ABSENT


def test_window_policy_validation():
    with pytest.raises(ValueError):
        FixedCalendarWindow(date(2025, 10, 9), date(2025, 10, 7))
    with pytest.raises(ValueError):
        RollingWindow(hours=-1)
    assert RollingWindow().hours == 48
    assert FixedCalendarWindow(date(2025, 10, 7), date(2025, 10, 7)).start == date(2025, 10, 7)


def test_pipeline_config_defaults_are_hashable():
    cfg = PipelineConfig()
    assert cfg.window_policy == Unrestricted()
    assert cfg.source_zone_offset_hours == 9
    assert hash(cfg) == hash(PipelineConfig())


def test_load_result_counts():
    diag = ErrorRecord.create("a.csv", -1, EMPTY_INPUT, "no header line")
    empty = LoadResult(source="a.csv", diagnostics=(diag,))
    assert not empty.ok
    assert len(empty) == 0
    assert empty.skipped_rows == 0

    result = LoadResult(
        source="b.csv",
        skipped=Counter({SkipReason.BLANK: 2, SkipReason.OUTSIDE_WINDOW: 3}),
    )
    assert result.ok
    assert result.skipped_rows == 5
    assert list(result) == []
