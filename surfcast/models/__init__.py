"""Domain models for the surf-forecast ingestion pipeline.

This package contains the value types passed between pipeline stages and
returned to callers.
"""

from .column_index import ABSENT, ColumnIndex
from .config_models import DEFAULT_ZONE_OFFSET_HOURS, AppConfig, PipelineConfig
from .error_record import ErrorRecord
from .forecast_record import ForecastRecord, SwellComponent
from .processing_result import LoadResult, ProcessingResult, SkipReason, SourceStat
from .window_policy import FixedCalendarWindow, RollingWindow, Unrestricted, WindowPolicy

__all__ = [
    # Record models
    "ForecastRecord",
    "SwellComponent",
    "ColumnIndex",
    "ABSENT",
    # Configuration models
    "AppConfig",
    "PipelineConfig",
    "DEFAULT_ZONE_OFFSET_HOURS",
    "WindowPolicy",
    "Unrestricted",
    "FixedCalendarWindow",
    "RollingWindow",
    # Result models
    "ErrorRecord",
    "LoadResult",
    "ProcessingResult",
    "SkipReason",
    "SourceStat",
]
