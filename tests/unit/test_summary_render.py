from __future__ import annotations

from datetime import UTC, datetime, timedelta

from surfcast.models.processing_result import ProcessingResult
from surfcast.services.summary import render_summary_line


def _result(ok=1, failed=0, records=48, skipped=3, elapsed=2.0, throughput=24.0) -> ProcessingResult:
    start = datetime(2025, 10, 7, tzinfo=UTC)
    return ProcessingResult(
        ok_sources=ok,
        failed_sources=failed,
        total_records=records,
        skipped_rows=skipped,
        start_time=start,
        end_time=start + timedelta(seconds=elapsed),
        elapsed_seconds=elapsed,
        throughput_rows_per_sec=throughput,
    )


def test_render_summary_line_integers():
    line = render_summary_line(1, _result())
    assert line == (
        "SUMMARY sources=1/1 ok=1 failed=0 records=48 skipped_rows=3 "
        "elapsed_sec=2 throughput_rps=24"
    )


def test_render_summary_line_fractional_values():
    line = render_summary_line(3, _result(ok=2, failed=1, elapsed=1.23456, throughput=38.87654))
    assert "sources=3/3 ok=2 failed=1" in line
    assert "elapsed_sec=1.235" in line
    assert "throughput_rps=38.877" in line


def test_render_summary_line_small_values_no_scientific_notation():
    line = render_summary_line(0, _result(ok=0, records=0, skipped=0, elapsed=0.000123, throughput=0.0))
    assert "elapsed_sec=0.000123" in line
    assert "e-" not in line
    assert line.endswith("throughput_rps=0")
