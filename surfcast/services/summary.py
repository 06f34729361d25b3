from __future__ import annotations

from ..models.processing_result import ProcessingResult

"""SUMMARY line rendering for batch runs."""

__all__ = [
    "render_summary_line",
]


def _format_number(value: float) -> str:
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # Format very small numbers to avoid scientific notation
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return str(round(value, 3))


def render_summary_line(total_sources: int, result: ProcessingResult) -> str:
    """Render the SUMMARY line for a batch run.

    Format:
    SUMMARY sources={total}/{total} ok={ok} failed={failed} records={records}
    skipped_rows={skipped} elapsed_sec={elapsed} throughput_rps={throughput}

    Examples:
        >>> from datetime import datetime, timezone
        >>> start = datetime(2025, 10, 7, 0, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2025, 10, 7, 0, 0, 2, tzinfo=timezone.utc)
        >>> result = ProcessingResult(
        ...     ok_sources=1, failed_sources=0, total_records=48,
        ...     skipped_rows=3, start_time=start, end_time=end,
        ...     elapsed_seconds=2.0, throughput_rows_per_sec=24.0
        ... )
        >>> render_summary_line(1, result)
        'SUMMARY sources=1/1 ok=1 failed=0 records=48 skipped_rows=3 elapsed_sec=2 throughput_rps=24'
    """
    return (
        f"SUMMARY sources={total_sources}/{total_sources} "
        f"ok={result.ok_sources} "
        f"failed={result.failed_sources} "
        f"records={result.total_records} "
        f"skipped_rows={result.skipped_rows} "
        f"elapsed_sec={_format_number(result.elapsed_seconds)} "
        f"throughput_rps={_format_number(result.throughput_rows_per_sec)}"
    )
