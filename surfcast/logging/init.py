from __future__ import annotations

import logging
import sys
from collections.abc import MutableMapping
from typing import IO, Any

"""Console logging for ingestion runs.

Every line is ``<LABEL> [<source>] <message>``:

    INFO Loading forecasts from: data
    WARN [data/broken.csv] no timestamp column in header ['foo', 'bar']
    SUMMARY sources=2/2 ok=1 failed=1 records=3 ...

The ``[<source>]`` tag appears when the record carries a ``source``
attribute, which SourceLogAdapter attaches. Pipeline code logs through
``logging.getLogger(__name__)`` under the ``surfcast`` namespace, so it is
silent for embedding applications until setup_logging() installs the
stdout handler.
"""

__all__ = [
    "LOGGER_NAME",
    "SUMMARY_LEVEL",
    "LabeledFormatter",
    "SourceLogAdapter",
    "setup_logging",
    "get_logger",
    "log_summary",
    "reset_logging",
]

LOGGER_NAME = "surfcast"

# Batch totals, above INFO so --quiet style filters still show them
SUMMARY_LEVEL = 25

_LABELS = {
    logging.DEBUG: "DEBUG",
    logging.INFO: "INFO",
    logging.WARNING: "WARN",
    logging.ERROR: "ERROR",
    logging.CRITICAL: "CRITICAL",
    SUMMARY_LEVEL: "SUMMARY",
}

_logger: logging.Logger | None = None


class LabeledFormatter(logging.Formatter):
    """``LABEL [source] message``; the tag is omitted for run-level lines."""

    def format(self, record: logging.LogRecord) -> str:
        label = _LABELS.get(record.levelno, record.levelname)
        source = getattr(record, "source", None)
        if source:
            return f"{label} [{source}] {record.getMessage()}"
        return f"{label} {record.getMessage()}"


class SourceLogAdapter(logging.LoggerAdapter):
    """Attach the forecast source (path or URL) to every record."""

    def __init__(self, logger: logging.Logger, source: str) -> None:
        super().__init__(logger, {"source": source})

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


def setup_logging(level: int = logging.INFO, stream: IO[str] | None = None) -> logging.Logger:
    """Install the labeled handler on the ``surfcast`` logger once.

    Later calls return the same logger untouched, whatever ``level`` they pass.
    """
    global _logger

    if _logger is not None:
        return _logger

    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)
    # SUMMARY 行が root 経由で二重に出ないように
    logger.propagate = False

    _logger = logger
    return logger


def get_logger() -> logging.Logger:
    if _logger is None:
        return setup_logging()
    return _logger


def log_summary(message: str) -> None:
    """Emit a batch total line (``SUMMARY <message>``)."""
    get_logger().log(SUMMARY_LEVEL, message)


def reset_logging() -> None:
    """Drop the handler and hand records back to the root logger (tests)."""
    global _logger
    if _logger is not None:
        for handler in _logger.handlers[:]:
            _logger.removeHandler(handler)
        _logger.propagate = True
    _logger = None
