from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from ..models.config_models import DEFAULT_ZONE_OFFSET_HOURS
from ..models.window_policy import FixedCalendarWindow, RollingWindow, Unrestricted, WindowPolicy
from ..parsing.timestamps import local_date, local_midnight

"""Window filter: inclusion policy evaluated against record instants.

build_window_filter resolves a WindowPolicy to concrete UTC bounds exactly
once. For RollingWindow this is where "today" is decided, so every row of
one pipeline run is judged against the same midnight even if the run
straddles it.
"""

__all__ = [
    "WindowFilter",
    "build_window_filter",
    "included",
]


@dataclass(frozen=True)
class WindowFilter:
    """Half-open UTC interval [start, end); None on both sides means unrestricted."""
    start: datetime | None = None
    end: datetime | None = None

    @property
    def unrestricted(self) -> bool:
        return self.start is None and self.end is None

    def included(self, instant: datetime | None) -> bool:
        if instant is None:
            return False
        if self.start is not None and instant < self.start:
            return False
        if self.end is not None and instant >= self.end:
            return False
        return True


def build_window_filter(
    policy: WindowPolicy | None = None,
    zone_offset_hours: int = DEFAULT_ZONE_OFFSET_HOURS,
    now: datetime | None = None,
) -> WindowFilter:
    """Resolve ``policy`` to UTC bounds.

    Args:
        policy: Active policy (None means Unrestricted)
        zone_offset_hours: Fixed offset used to place local midnights
        now: Reference time for RollingWindow; defaults to the current time.
            A naive value is taken as UTC.

    Returns:
        WindowFilter with fixed bounds
    """
    if policy is None or isinstance(policy, Unrestricted):
        return WindowFilter()
    if isinstance(policy, FixedCalendarWindow):
        return WindowFilter(
            start=local_midnight(policy.start, zone_offset_hours),
            end=local_midnight(policy.end, zone_offset_hours),
        )
    if isinstance(policy, RollingWindow):
        if now is None:
            now = datetime.now(UTC)
        elif now.tzinfo is None:
            now = now.replace(tzinfo=UTC)
        today = local_date(now.astimezone(UTC), zone_offset_hours)
        start = local_midnight(today, zone_offset_hours)
        return WindowFilter(start=start, end=start + timedelta(hours=policy.hours))
    raise TypeError(f"unsupported window policy: {policy!r}")


def included(
    instant: datetime | None,
    policy: WindowPolicy | None = None,
    zone_offset_hours: int = DEFAULT_ZONE_OFFSET_HOURS,
    now: datetime | None = None,
) -> bool:
    """One-off inclusion check; pipelines should build the filter once instead."""
    return build_window_filter(policy, zone_offset_hours, now).included(instant)
