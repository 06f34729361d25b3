from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

"""Forecast record models for the surf-forecast ingestion pipeline.

ForecastRecord is the single output unit of the pipeline: one accepted CSV
data line, normalized and unit-converted. SwellComponent is one decoded
element of the embedded swells array.

Both are frozen; the pipeline builds them once and never mutates them.
"""

__all__ = [
    "SwellComponent",
    "ForecastRecord",
]


@dataclass(frozen=True)
class SwellComponent:
    """One directional wave train contributing to the sea state.

    Attributes:
        height: Significant height in meters (only > 0 survives decoding)
        period: Wave period in seconds
        direction: Direction in degrees (0 = north, clockwise)
    """
    height: float
    period: float = 0.0
    direction: float = 0.0


@dataclass(frozen=True)
class ForecastRecord:
    """Normalized hourly forecast sample.

    ``instant`` is the only time representation (aware UTC datetime);
    ``local_hour`` is derived from it at the source zone offset and is kept
    for chart axes that label by wall-clock hour.
    """
    instant: datetime  # aware, UTC
    local_hour: int  # 0-23, source wall-clock
    temperature_c: float = 0.0
    tide_height_m: float = 0.0
    wind_speed_mps: float = 0.0
    wind_angle_deg: float = 0.0
    wind_direction_type: str = ""
    weather_icon_code: str = ""
    swells: tuple[SwellComponent, ...] = field(default_factory=tuple)
    wave_height_raw: float = 0.0  # 棒グラフ用の生の値 (丸めなし)
    wave_height_display: float = 0.0  # ラベル用 (小数1桁切り捨て)
