from __future__ import annotations

import re
from datetime import UTC, date, datetime, timedelta

"""Timestamp interpreter for fixed-offset local wall-clock strings.

Source timestamps look like ``YYYY-MM-DD HH:mm:ss`` and are written in a
fixed zone (JST, UTC+9, for the current exports). They are turned into
aware UTC datetimes with plain field arithmetic:

    instant = datetime(Y, M, D, tzinfo=UTC) + time-of-day - offset

Nothing here consults the host timezone or locale, so results are the same
wherever the pipeline runs.
"""

__all__ = [
    "interpret_local_timestamp",
    "local_hour",
    "local_midnight",
    "local_date",
]

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_DATE_TIME_SEP = re.compile(r"[T\s]+")


def _leading_int(text: str) -> int | None:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else None


def interpret_local_timestamp(text: str | None, zone_offset_hours: int) -> datetime | None:
    """Parse a local wall-clock timestamp into an aware UTC datetime.

    The time part is optional (``00:00:00``); missing or malformed time
    components default to 0 and overflow carries like calendar arithmetic
    (``24:00:00`` is midnight of the next day). A date that is not a valid
    calendar date returns None so the row can be rejected.

    Args:
        text: Raw cell, e.g. ``"2025-10-07 03:00:00"``
        zone_offset_hours: Fixed UTC offset of the source (9 for JST)

    Returns:
        Aware UTC datetime, or None when the date cannot be interpreted
    """
    if not text:
        return None
    cleaned = text.strip().strip('"').strip()
    if not cleaned:
        return None
    parts = _DATE_TIME_SEP.split(cleaned, maxsplit=1)
    date_part = parts[0]
    time_part = parts[1] if len(parts) > 1 else ""

    date_fields = [_leading_int(p) for p in date_part.split("-")]
    if len(date_fields) != 3 or any(f is None for f in date_fields):
        return None
    year, month, day = date_fields

    time_fields = [_leading_int(p) or 0 for p in time_part.split(":")] if time_part else []
    time_fields = (time_fields + [0, 0, 0])[:3]
    hours, minutes, seconds = time_fields

    try:
        midnight = datetime(year, month, day, tzinfo=UTC)
        return midnight + timedelta(
            hours=hours - zone_offset_hours, minutes=minutes, seconds=seconds
        )
    except (ValueError, OverflowError):
        return None


def local_hour(instant: datetime, zone_offset_hours: int) -> int:
    """Wall-clock hour (0-23) of ``instant`` at the given fixed offset."""
    return (instant + timedelta(hours=zone_offset_hours)).hour


def local_date(instant: datetime, zone_offset_hours: int) -> date:
    """Wall-clock calendar date of ``instant`` at the given fixed offset."""
    return (instant + timedelta(hours=zone_offset_hours)).date()


def local_midnight(day: date, zone_offset_hours: int) -> datetime:
    """UTC instant of 00:00 local time on ``day``."""
    return datetime(day.year, day.month, day.day, tzinfo=UTC) - timedelta(hours=zone_offset_hours)
