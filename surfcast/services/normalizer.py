from __future__ import annotations

import math
import re
from collections.abc import Sequence
from datetime import datetime

from ..models.column_index import ColumnIndex
from ..models.config_models import DEFAULT_ZONE_OFFSET_HOURS
from ..models.forecast_record import ForecastRecord
from ..parsing.swells import decode_swells
from ..parsing.timestamps import local_hour

"""Record normalizer: one tokenized data line -> ForecastRecord.

Every numeric field follows "parse; if not a finite number, use 0" and every
text field is unquoted and trimmed, so normalize never raises for a row that
made it past the timestamp check.

Rounding policies differ on purpose:
- temperature and wind speed: round half up to 1 decimal
- wave_height_display: floor to 1 decimal, never above wave_height_raw
"""

__all__ = [
    "KPH_PER_MPS",
    "parse_number",
    "round_half_up",
    "floor_to_tenth",
    "unquote_cell",
    "normalize",
]

KPH_PER_MPS = 3.6

# parseFloat 相当: 先頭の数値部分のみ読む ("14.4kph" -> 14.4)
_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def unquote_cell(cell: str | None) -> str:
    """Trim a raw cell and drop one pair of enclosing double quotes."""
    if not cell:
        return ""
    text = cell.strip()
    if len(text) >= 2 and text[0] == '"' and text[-1] == '"':
        text = text[1:-1].strip()
    return text


def parse_number(cell: str | None) -> float:
    """Leading-number parse of a cell; 0.0 when nothing finite is found."""
    match = _FLOAT_PREFIX.match(unquote_cell(cell))
    if not match:
        return 0.0
    value = float(match.group(1))  # "1e999" -> inf
    return value if math.isfinite(value) else 0.0


def round_half_up(value: float, digits: int = 1) -> float:
    """Round to ``digits`` decimals with ties going up (2.25 -> 2.3, -2.25 -> -2.2)."""
    scale = 10 ** digits
    scaled = value * scale + 0.5
    if not math.isfinite(scaled):
        # 1e308 など: 桁あふれする値はすでに小数部を持たない
        return value if math.isfinite(value) else 0.0
    return math.floor(scaled) / scale


def floor_to_tenth(value: float) -> float:
    """Floor to 1 decimal; the result never exceeds ``value`` (1.29 -> 1.2)."""
    if not math.isfinite(value):
        return 0.0
    scaled = value * 10
    if not math.isfinite(scaled):
        return value
    tenths = math.floor(scaled)
    floored = tenths / 10
    # value*10 の丸め誤差で整数に繰り上がった場合の補正
    if floored > value:
        floored = (tenths - 1) / 10
    return floored


def normalize(
    raw_row: Sequence[str],
    columns: ColumnIndex,
    instant: datetime,
    zone_offset_hours: int = DEFAULT_ZONE_OFFSET_HOURS,
) -> ForecastRecord:
    """Build a ForecastRecord from a tokenized row.

    Args:
        raw_row: Fields from tokenize(), aligned to the header
        columns: Resolved column positions
        instant: Parsed UTC instant of the row's timestamp
        zone_offset_hours: Source offset, used for local_hour

    Returns:
        Immutable ForecastRecord
    """
    swells = tuple(decode_swells(columns.cell(raw_row, "swells")))
    wave_height_raw = max((s.height for s in swells), default=0.0)

    return ForecastRecord(
        instant=instant,
        local_hour=local_hour(instant, zone_offset_hours),
        temperature_c=round_half_up(parse_number(columns.cell(raw_row, "temperature"))),
        tide_height_m=parse_number(columns.cell(raw_row, "tide_height")),
        wind_speed_mps=round_half_up(
            parse_number(columns.cell(raw_row, "wind_speed_kph")) / KPH_PER_MPS
        ),
        wind_angle_deg=parse_number(columns.cell(raw_row, "wind_angle")),
        wind_direction_type=unquote_cell(columns.cell(raw_row, "direction_type")),
        weather_icon_code=unquote_cell(columns.cell(raw_row, "condition")),
        swells=swells,
        wave_height_raw=wave_height_raw,
        wave_height_display=floor_to_tenth(wave_height_raw),
    )
