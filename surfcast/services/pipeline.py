from __future__ import annotations

import logging
import re
from collections import Counter
from collections.abc import Iterable, Iterator
from datetime import datetime

from ..logging.init import SourceLogAdapter
from ..models.column_index import ColumnIndex
from ..models.config_models import PipelineConfig
from ..models.error_record import EMPTY_INPUT, MISSING_TIMESTAMP_COLUMN, ErrorRecord
from ..models.forecast_record import ForecastRecord
from ..models.processing_result import LoadResult, SkipReason
from ..parsing.header import resolve_columns
from ..parsing.timestamps import interpret_local_timestamp
from ..parsing.tokenizer import tokenize
from .cache import ForecastCache
from .normalizer import normalize
from .sequencer import sequence
from .source import read_source_text
from .window_filter import WindowFilter, build_window_filter

"""Forecast CSV ingestion pipeline.

load_forecast is a pure transform from CSV text to a LoadResult:

    header line -> tokenize -> resolve_columns           (once)
    data line   -> tokenize -> timestamp -> window -> normalize
    accepted    -> sequence

Nothing in here raises for malformed input. A header without a timestamp
column yields no records plus a MISSING_TIMESTAMP_COLUMN diagnostic; bad
rows are skipped and counted by reason; bad fields fall back to defaults.

load_forecast_source adds the only I/O (file or HTTP read) and optional
memoization on top.
"""

__all__ = [
    "split_lines",
    "iter_forecast_records",
    "load_forecast",
    "load_forecast_source",
]

logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r?\n")


def split_lines(text: str) -> list[str]:
    """Split on LF / CRLF after dropping a leading BOM."""
    if text.startswith("\ufeff"):
        text = text[1:]
    return _LINE_BREAK.split(text)


def iter_forecast_records(
    lines: Iterable[str],
    columns: ColumnIndex,
    window: WindowFilter,
    zone_offset_hours: int,
    skipped: Counter[str] | None = None,
) -> Iterator[ForecastRecord]:
    """Stream records for data lines (header already consumed).

    Rows are dropped, and counted in ``skipped`` when given, for being blank,
    carrying no interpretable timestamp, or falling outside ``window``.
    """
    for line in lines:
        if not line.strip():
            if skipped is not None:
                skipped[SkipReason.BLANK] += 1
            continue
        row = tokenize(line)
        instant = interpret_local_timestamp(columns.cell(row, "timestamp"), zone_offset_hours)
        if instant is None:
            if skipped is not None:
                skipped[SkipReason.BAD_TIMESTAMP] += 1
            continue
        if not window.included(instant):
            if skipped is not None:
                skipped[SkipReason.OUTSIDE_WINDOW] += 1
            continue
        yield normalize(row, columns, instant, zone_offset_hours)


def load_forecast(
    text: str,
    config: PipelineConfig | None = None,
    *,
    source: str = "<memory>",
    now: datetime | None = None,
) -> LoadResult:
    """Parse forecast CSV text into an ordered, normalized record sequence.

    Args:
        text: Whole CSV body (LF or CRLF)
        config: Window policy and source zone offset (defaults: Unrestricted, +9)
        source: Identifier used in diagnostics and logs
        now: Reference time for RollingWindow (evaluated once per call)

    Returns:
        LoadResult; ``records`` is empty when nothing usable was found
    """
    if config is None:
        config = PipelineConfig()
    offset = config.source_zone_offset_hours

    log = SourceLogAdapter(logger, source)
    lines = split_lines(text)
    # 先頭の空行は読み飛ばしてヘッダ行を探す
    start = 0
    while start < len(lines) and not lines[start].strip():
        start += 1
    if start >= len(lines):
        log.warning("input is empty")
        return LoadResult(
            source=source,
            diagnostics=(ErrorRecord.create(source, -1, EMPTY_INPUT, "no header line"),),
        )

    header_fields = tokenize(lines[start])
    columns = resolve_columns(header_fields)
    data_lines = lines[start + 1:]
    if not columns.has_timestamp:
        message = f"no timestamp column in header {header_fields!r}"
        log.warning(message)
        return LoadResult(
            source=source,
            diagnostics=(ErrorRecord.create(source, start + 1, MISSING_TIMESTAMP_COLUMN, message),),
            data_lines=len(data_lines),
            columns=columns,
        )

    window = build_window_filter(config.window_policy, offset, now)
    skipped: Counter[str] = Counter()
    accepted = list(iter_forecast_records(data_lines, columns, window, offset, skipped))
    records = tuple(sequence(accepted))
    log.debug(
        f"records={len(records)} skipped={dict(skipped)} columns={columns.as_dict()}"
    )
    return LoadResult(
        source=source,
        records=records,
        skipped=skipped,
        data_lines=len(data_lines),
        columns=columns,
    )


def load_forecast_source(
    source: str,
    config: PipelineConfig | None = None,
    *,
    cache: ForecastCache | None = None,
    timeout: float = 20.0,
    now: datetime | None = None,
) -> LoadResult:
    """Read ``source`` (path or http(s) URL) and run load_forecast on it.

    With a cache, a fresh entry for (source, config) is returned without
    reading the source again. Read failures raise SourceReadError and are
    never cached.
    """
    if config is None:
        config = PipelineConfig()

    def _load() -> LoadResult:
        text = read_source_text(source, timeout=timeout)
        return load_forecast(text, config, source=source, now=now)

    if cache is None:
        return _load()
    return cache.get_or_load((source, config), _load)
