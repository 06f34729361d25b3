from __future__ import annotations

import re
from collections.abc import Sequence

from ..models.column_index import ABSENT, ColumnIndex

"""Header resolver: header names -> semantic column roles.

Several revisions of the forecast export are in circulation (``height`` vs
``tideHeight``, ``speed`` vs ``windSpeedKph``, reordered columns, ...).
Every role is resolved in two passes:

1. exact, case-sensitive name match against the known names
2. case-insensitive regex match for the remaining roles

A header position is claimed by at most one role and exact matches win over
fuzzy ones. Roles that resolve to nothing get ABSENT.
"""

__all__ = [
    "EXACT_NAMES",
    "clean_header_name",
    "resolve_columns",
]

EXACT_NAMES: dict[str, tuple[str, ...]] = {
    "timestamp": ("timestamp",),
    "temperature": ("temperature",),
    "condition": ("condition",),
    "tide_height": ("height", "tideHeight"),
    "wind_speed_kph": ("speed", "windSpeedKph"),
    "wind_angle": ("direction", "windAngle"),
    "direction_type": ("directionType",),
    "swells": ("swells",),
}

# (include, exclude) per role. Order matters only for readability; every
# role takes the first unclaimed header matching its pattern.
_FUZZY: dict[str, tuple[re.Pattern[str], re.Pattern[str] | None]] = {
    "timestamp": (re.compile(r"time|date", re.I), None),
    "temperature": (re.compile(r"temp", re.I), None),
    "condition": (re.compile(r"condition|weather|icon", re.I), None),
    "swells": (re.compile(r"swell", re.I), None),
    "direction_type": (re.compile(r"(direction|wind)[\s_-]?type", re.I), None),
    "tide_height": (re.compile(r"tide|height", re.I), re.compile(r"swell|wave", re.I)),
    "wind_speed_kph": (re.compile(r"speed|kph|km/?h", re.I), re.compile(r"swell|wave", re.I)),
    # direction だが directionType は除外
    "wind_angle": (re.compile(r"direction|angle|deg", re.I), re.compile(r"type|swell|wave", re.I)),
}


def clean_header_name(name: str) -> str:
    """Strip BOM, surrounding whitespace and one pair of enclosing quotes."""
    cleaned = name.replace("\ufeff", "").strip()
    if len(cleaned) >= 2 and cleaned[0] == cleaned[-1] and cleaned[0] in "\"'":
        cleaned = cleaned[1:-1].strip()
    return cleaned


def resolve_columns(header_fields: Sequence[str]) -> ColumnIndex:
    """Build a ColumnIndex from tokenized header fields.

    Never raises; a header with no usable names resolves every role to
    ABSENT and it is up to the caller to treat a missing timestamp as fatal.
    """
    names = [clean_header_name(f) for f in header_fields]
    positions: dict[str, int] = {}
    claimed: set[int] = set()

    for role, candidates in EXACT_NAMES.items():
        for candidate in candidates:
            if candidate in names:
                pos = names.index(candidate)
                if pos not in claimed:
                    positions[role] = pos
                    claimed.add(pos)
                    break

    for role, (include, exclude) in _FUZZY.items():
        if role in positions:
            continue
        for pos, name in enumerate(names):
            if pos in claimed or not name:
                continue
            if include.search(name) and not (exclude and exclude.search(name)):
                positions[role] = pos
                claimed.add(pos)
                break

    return ColumnIndex(**{role: positions.get(role, ABSENT) for role in ColumnIndex.roles()})
