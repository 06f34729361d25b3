from __future__ import annotations

from collections.abc import Iterable

from ..models.forecast_record import ForecastRecord

"""Sequencer: final ordering pass over accepted records."""

__all__ = [
    "sequence",
]


def sequence(records: Iterable[ForecastRecord]) -> list[ForecastRecord]:
    """Sort by instant ascending; sorted() is stable so ties keep input order."""
    return sorted(records, key=lambda r: r.instant)
