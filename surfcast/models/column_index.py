from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, fields

"""ColumnIndex model: semantic field name -> zero-based column position.

Built once from the header row by the header resolver and immutable
afterwards. A position of ABSENT (-1) means the column does not exist in
this file; consumers read it as "empty / zero", never as an error.
"""

__all__ = [
    "ABSENT",
    "ColumnIndex",
]

ABSENT = -1


@dataclass(frozen=True)
class ColumnIndex:
    """Column positions for each semantic role of a forecast CSV."""
    timestamp: int = ABSENT
    temperature: int = ABSENT
    condition: int = ABSENT
    tide_height: int = ABSENT
    wind_speed_kph: int = ABSENT
    wind_angle: int = ABSENT
    direction_type: int = ABSENT
    swells: int = ABSENT

    @classmethod
    def roles(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    @property
    def has_timestamp(self) -> bool:
        return self.timestamp != ABSENT

    def is_present(self, role: str) -> bool:
        return getattr(self, role) != ABSENT

    def cell(self, row: Sequence[str], role: str) -> str:
        """Return the raw cell for ``role`` or "" when absent / out of range.

        Short rows (fewer fields than the header) are common in hand-edited
        files, so an index past the end reads as an empty cell.
        """
        pos = getattr(self, role)
        if pos == ABSENT or pos >= len(row):
            return ""
        return row[pos]

    def as_dict(self) -> dict[str, int]:
        return {name: getattr(self, name) for name in self.roles()}
