from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Union

"""Window policy variants for the pipeline's inclusion filter.

Exactly one policy is active per pipeline run:

- Unrestricted: keep every row (default)
- FixedCalendarWindow: keep rows in [start 00:00 local, end 00:00 local)
- RollingWindow: keep rows in [today 00:00 local, +hours)

The policies are plain values; window_filter turns them into concrete UTC
bounds once per run.
"""

__all__ = [
    "Unrestricted",
    "FixedCalendarWindow",
    "RollingWindow",
    "WindowPolicy",
]


@dataclass(frozen=True)
class Unrestricted:
    """No filtering; downstream display code applies its own window."""


@dataclass(frozen=True)
class FixedCalendarWindow:
    """Local calendar dates; ``end`` is exclusive (midnight starting that day)."""
    start: date
    end: date

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValueError(f"window end {self.end} precedes start {self.start}")


@dataclass(frozen=True)
class RollingWindow:
    """``hours`` from today's local midnight, "today" fixed when the filter is built."""
    hours: int = 48

    def __post_init__(self) -> None:
        if self.hours < 0:
            raise ValueError(f"rolling window hours must be >= 0, got {self.hours}")


WindowPolicy = Union[Unrestricted, FixedCalendarWindow, RollingWindow]
