"""Tolerant ingestion of surf-forecast CSV exports.

Typical use::

    from surfcast import PipelineConfig, RollingWindow, load_forecast

    result = load_forecast(csv_text, PipelineConfig(window_policy=RollingWindow(48)))
    for record in result.records:
        ...
"""

from .models import (
    ABSENT,
    AppConfig,
    ColumnIndex,
    ErrorRecord,
    FixedCalendarWindow,
    ForecastRecord,
    LoadResult,
    PipelineConfig,
    RollingWindow,
    SwellComponent,
    Unrestricted,
    WindowPolicy,
)
from .parsing.header import resolve_columns
from .parsing.swells import decode_swells
from .parsing.timestamps import interpret_local_timestamp
from .parsing.tokenizer import tokenize
from .services.cache import ForecastCache
from .services.normalizer import normalize
from .services.pipeline import load_forecast, load_forecast_source
from .services.sequencer import sequence
from .services.source import SourceReadError
from .services.window_filter import build_window_filter, included

__version__ = "0.1.0"

__all__ = [
    "ABSENT",
    "AppConfig",
    "ColumnIndex",
    "ErrorRecord",
    "FixedCalendarWindow",
    "ForecastCache",
    "ForecastRecord",
    "LoadResult",
    "PipelineConfig",
    "RollingWindow",
    "SourceReadError",
    "SwellComponent",
    "Unrestricted",
    "WindowPolicy",
    "build_window_filter",
    "decode_swells",
    "included",
    "interpret_local_timestamp",
    "load_forecast",
    "load_forecast_source",
    "normalize",
    "resolve_columns",
    "sequence",
    "tokenize",
]
