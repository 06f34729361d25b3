from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path

from ..logging.error_log import ErrorLogBuffer
from ..logging.init import SourceLogAdapter
from ..models.config_models import AppConfig
from ..models.error_record import SOURCE_READ_ERROR, ErrorRecord
from ..models.processing_result import LoadResult, ProcessingResult, SourceStat
from .cache import ForecastCache
from .pipeline import load_forecast_source
from .progress import ProgressTracker
from .source import SourceReadError

"""Batch orchestration over configured forecast sources.

process_all runs the pipeline for every *.csv file in the configured
directory plus any extra sources (paths or URLs), collects diagnostics into
the JSON Lines error log and aggregates a ProcessingResult for the SUMMARY
line.

A source counts as failed when it cannot be read or yields no records; one
failed source never stops the others.
"""

__all__ = [
    "ProcessingError",
    "scan_csv_files",
    "collect_sources",
    "process_all",
]

logger = logging.getLogger(__name__)

STATUS_OK = "ok"
STATUS_EMPTY = "empty"
STATUS_FAILED = "failed"


class ProcessingError(Exception):
    """Fatal batch error (bad source directory)."""


def scan_csv_files(directory: Path) -> list[Path]:
    """Scan ``directory`` (non-recursive) for .csv files, sorted by name.

    Raises:
        ProcessingError: If the directory doesn't exist or can't be read
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")
    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")
    try:
        return sorted(p for p in directory.iterdir() if p.is_file() and p.suffix.lower() == ".csv")
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e


def collect_sources(config: AppConfig) -> list[str]:
    """Directory CSV files followed by configured extra sources, without duplicates."""
    found = [str(p) for p in scan_csv_files(Path(config.source_directory))]
    for extra in config.sources:
        if extra not in found:
            found.append(extra)
    return found


def _load_one(
    source: str,
    config: AppConfig,
    cache: ForecastCache | None,
    error_log: ErrorLogBuffer,
) -> tuple[str, LoadResult]:
    log = SourceLogAdapter(logger, source)
    try:
        result = load_forecast_source(
            source,
            config.pipeline,
            cache=cache,
            timeout=config.request_timeout_seconds,
        )
    except SourceReadError as e:
        log.error(f"read failed: {e}")
        record = ErrorRecord.create(source, -1, SOURCE_READ_ERROR, str(e))
        error_log.append(record)
        return STATUS_FAILED, LoadResult(source=source, diagnostics=(record,))

    error_log.extend(result.diagnostics)
    if not result.records:
        log.warning(f"no records (skipped={dict(result.skipped)})")
        return STATUS_EMPTY, result
    return STATUS_OK, result


def process_all(
    config: AppConfig,
    *,
    cache: ForecastCache | None = None,
    error_log: ErrorLogBuffer | None = None,
) -> ProcessingResult:
    """Run the pipeline over every configured source.

    Args:
        config: Application config (directory, extra sources, pipeline options)
        cache: Optional result cache shared across runs
        error_log: Diagnostics buffer; a fresh one is created when omitted

    Returns:
        ProcessingResult with aggregated counts, per-source stats and results

    Raises:
        ProcessingError: If the source directory is missing or unreadable
    """
    start_time = datetime.now(UTC)
    if error_log is None:
        error_log = ErrorLogBuffer()

    sources = collect_sources(config)

    source_stats: list[SourceStat] = []
    results: dict[str, LoadResult] = {}
    ok_count = 0
    failed_count = 0
    total_records = 0
    skipped_rows = 0

    with ProgressTracker(len(sources)) as progress:
        for source in sources:
            progress.start_source(Path(source).name or source)
            source_start = datetime.now(UTC)
            status, result = _load_one(source, config, cache, error_log)
            elapsed = (datetime.now(UTC) - source_start).total_seconds()

            if status == STATUS_OK:
                ok_count += 1
            else:
                failed_count += 1
            total_records += len(result.records)
            skipped_rows += result.skipped_rows
            results[source] = result
            source_stats.append(
                SourceStat(
                    source=source,
                    status=status,
                    records=len(result.records),
                    skipped_rows=result.skipped_rows,
                    elapsed_seconds=elapsed,
                )
            )
            progress.set_postfix(ok=ok_count, failed=failed_count, records=total_records)
            progress.finish_source()

    try:
        written = error_log.flush()
    except OSError as e:
        # ログ書き込み失敗でバッチ全体は失敗させない
        logger.error(f"diagnostics log flush failed: {e}")
    else:
        if written is not None:
            logger.info(f"diagnostics written to {written}")

    end_time = datetime.now(UTC)
    elapsed_seconds = (end_time - start_time).total_seconds()
    throughput = total_records / elapsed_seconds if elapsed_seconds > 0 else 0.0

    return ProcessingResult(
        ok_sources=ok_count,
        failed_sources=failed_count,
        total_records=total_records,
        skipped_rows=skipped_rows,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=elapsed_seconds,
        throughput_rows_per_sec=throughput,
        source_stats=source_stats,
        results=results,
    )
