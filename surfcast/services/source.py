from __future__ import annotations

from pathlib import Path

import requests

"""Source reader: the pipeline's only I/O.

A source is either a local path or an http(s) URL. The body is decoded as
UTF-8 (a BOM is dropped) and handed to the pipeline as one string.
"""

__all__ = [
    "SourceReadError",
    "HTTP_USER_AGENT",
    "is_remote",
    "read_source_text",
]

HTTP_USER_AGENT = "surfcast/0.1 (+forecast ingestion)"


class SourceReadError(Exception):
    """Raised when a source cannot be read or decoded."""


def is_remote(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def _read_remote(url: str, timeout: float) -> str:
    try:
        response = requests.get(url, timeout=timeout, headers={"User-Agent": HTTP_USER_AGENT})
        response.raise_for_status()
    except requests.RequestException as e:
        raise SourceReadError(f"failed to fetch {url}: {e}") from e
    try:
        return response.content.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise SourceReadError(f"response from {url} is not UTF-8: {e}") from e


def _read_local(path: Path) -> str:
    if not path.exists():
        raise SourceReadError(f"source not found: {path}")
    try:
        return path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise SourceReadError(f"failed to read {path}: {e}") from e


def read_source_text(source: str, *, timeout: float = 20.0) -> str:
    """Return the decoded text of ``source``.

    Args:
        source: Local path or http(s) URL
        timeout: Request timeout in seconds (remote sources only)

    Raises:
        SourceReadError: If the source is missing, unreachable or not UTF-8
    """
    if is_remote(source):
        return _read_remote(source, timeout)
    return _read_local(Path(source).expanduser())
