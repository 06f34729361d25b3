from __future__ import annotations

from collections.abc import Iterable
from dataclasses import asdict

import pandas as pd

from ..models.forecast_record import ForecastRecord

"""Tabular export of forecast records.

records_to_frame gives analysis and charting code a pandas view of a
record sequence: one row per hour, ``instant`` as a tz-aware UTC column and
the swell list kept as a list of dicts next to a ``swell_count`` column.
"""

__all__ = [
    "FRAME_COLUMNS",
    "records_to_frame",
]

FRAME_COLUMNS = [
    "instant",
    "local_hour",
    "temperature_c",
    "tide_height_m",
    "wind_speed_mps",
    "wind_angle_deg",
    "wind_direction_type",
    "weather_icon_code",
    "wave_height_raw",
    "wave_height_display",
    "swell_count",
    "swells",
]


def records_to_frame(records: Iterable[ForecastRecord]) -> pd.DataFrame:
    rows = []
    for record in records:
        row = asdict(record)
        row["swells"] = [dict(s) for s in row["swells"]]
        row["swell_count"] = len(record.swells)
        rows.append(row)
    df = pd.DataFrame.from_records(rows, columns=FRAME_COLUMNS)
    df["instant"] = pd.to_datetime(df["instant"], utc=True)
    return df
