from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime

from .column_index import ColumnIndex
from .error_record import ErrorRecord
from .forecast_record import ForecastRecord

"""Result models for single pipeline runs and batch runs.

LoadResult is what load_forecast returns for one CSV text. ProcessingResult
aggregates many LoadResults for the batch runner and the SUMMARY line.
"""

__all__ = [
    "SkipReason",
    "LoadResult",
    "SourceStat",
    "ProcessingResult",
]


class SkipReason:
    """Row-skip reasons; skips are counted, never reported as errors."""
    BLANK = "blank"
    BAD_TIMESTAMP = "bad_timestamp"
    OUTSIDE_WINDOW = "outside_window"


@dataclass(frozen=True)
class LoadResult:
    """Output of one pipeline invocation.

    An empty ``records`` tuple means "no data available"; inspect
    ``diagnostics`` to tell a broken file from an empty window.
    """
    source: str
    records: tuple[ForecastRecord, ...] = ()
    diagnostics: tuple[ErrorRecord, ...] = ()
    skipped: Counter[str] = field(default_factory=Counter)
    data_lines: int = 0  # lines after the header, blank ones included
    columns: ColumnIndex | None = None  # None when there was no header line

    @property
    def ok(self) -> bool:
        return not self.diagnostics

    @property
    def skipped_rows(self) -> int:
        return sum(self.skipped.values())

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)


@dataclass(frozen=True)
class SourceStat:
    """Per-source statistics used by the batch runner."""
    source: str
    status: str  # ok / empty / failed
    records: int
    skipped_rows: int
    elapsed_seconds: float


@dataclass(frozen=True)
class ProcessingResult:
    """Aggregated results of a batch run (feeds the SUMMARY line)."""
    ok_sources: int
    failed_sources: int  # empty output or unreadable source
    total_records: int
    skipped_rows: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    throughput_rows_per_sec: float
    source_stats: list[SourceStat] | None = None
    results: dict[str, LoadResult] | None = None
