from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ErrorRecord model for the diagnostic channel.

Diagnostics are how the pipeline reports input-level problems (for example
a header without any timestamp column) without raising. They travel back
inside LoadResult and can be appended to the JSON Lines diagnostics log.

``line`` uses -1 as a sentinel for input-level problems where no single
line is at fault.
"""

__all__ = [
    "ErrorRecord",
    "MISSING_TIMESTAMP_COLUMN",
    "EMPTY_INPUT",
    "SOURCE_READ_ERROR",
]

MISSING_TIMESTAMP_COLUMN = "MISSING_TIMESTAMP_COLUMN"
EMPTY_INPUT = "EMPTY_INPUT"
SOURCE_READ_ERROR = "SOURCE_READ_ERROR"


@dataclass(frozen=True)
class ErrorRecord:
    """Structured diagnostic record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        source: Source identifier (file path, URL or "<memory>")
        line: 1-based line number; -1 for input-level problems
        error_type: Classification in UPPER_SNAKE_CASE format
        message: Human readable description
    """
    timestamp: str  # ISO8601 UTC
    source: str
    line: int
    error_type: str  # UPPER_SNAKE
    message: str

    @staticmethod
    def create(source: str, line: int, error_type: str, message: str) -> ErrorRecord:
        """Create a new ErrorRecord stamped with the current UTC time."""
        ts = datetime.now(UTC).isoformat(timespec="seconds").replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            source=source,
            line=line,
            error_type=error_type,
            message=message,
        )

    def to_json_line(self) -> str:
        """Serialize to a single JSON Lines entry (fixed key set)."""
        return json.dumps(asdict(self), ensure_ascii=False)
