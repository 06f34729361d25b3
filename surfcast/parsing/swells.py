from __future__ import annotations

import json
import logging
import math
import re
from typing import Any

from ..models.forecast_record import SwellComponent

"""Swell field decoder.

The ``swells`` cell is meant to be a JSON array of
``{"height": .., "period": .., "direction": ..}`` objects, but exports seen
in practice arrive HTML-escaped, backslash-escaped, CSV double-quoted, with
single quotes or with bare keys. decode_swells walks a fixed chain of
strategies and stops at the first one that yields an array:

1. strip one pair of enclosing double quotes
2. unescape (&quot; / &#34;, \\", "")
3. strict json.loads; only a list counts as success
4. textual repair (quote single-quoted / bare keys, drop trailing commas)
   and json.loads again
5. last resort: regex scan of each {...} segment for height/period/direction

If everything fails the result is an empty list, which means "no swell data
for this hour" and is not an error.
"""

__all__ = [
    "decode_swells",
    "normalize_escaping",
    "repair_pseudo_json",
    "coerce_number",
]

logger = logging.getLogger(__name__)

_SINGLE_QUOTED_KEY = re.compile(r"([{,]\s*)'([^']+?)'(\s*:)")
_SINGLE_QUOTED_VALUE = re.compile(r":\s*'([^']*)'")
_BARE_KEY = re.compile(r"([{,]\s*)([A-Za-z_][A-Za-z0-9_]*)(\s*:)")
_TRAILING_COMMA = re.compile(r",\s*([}\]])")

_OBJECT_SEGMENT = re.compile(r"\{[^{}]*\}")
_NUMBER_LITERAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_FIELD_SCANNERS = {
    name: re.compile(
        r"[\"']?" + name + r"[\"']?\s*:\s*[\"']?(" + _NUMBER_LITERAL.pattern + ")"
    )
    for name in ("height", "period", "direction")
}


def normalize_escaping(text: str) -> str:
    """Collapse the escaping variants seen in exports to plain double quotes."""
    return (
        text.replace("&quot;", '"')  # HTML
        .replace("&#34;", '"')
        .replace('\\"', '"')  # バックスラッシュエスケープ
        .replace('""', '"')  # CSV の二重引用符
    )


def repair_pseudo_json(text: str) -> str:
    """Rewrite single-quoted and bare keys/values into JSON syntax."""
    fixed = _SINGLE_QUOTED_KEY.sub(r'\1"\2"\3', text)
    fixed = _SINGLE_QUOTED_VALUE.sub(r':"\1"', fixed)
    fixed = _BARE_KEY.sub(r'\1"\2"\3', fixed)
    return _TRAILING_COMMA.sub(r"\1", fixed)


def coerce_number(value: Any) -> float:
    """Numeric-or-0 coercion for one swell field.

    Numbers pass through, numeric strings are parsed, anything else
    (None, bool, dicts, "1.2m", NaN, inf) becomes 0.0.
    """
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:  # JSON integers have no size limit
            return 0.0
    elif isinstance(value, str) and _NUMBER_LITERAL.fullmatch(value.strip()):
        number = float(value.strip())
    else:
        return 0.0
    return number if math.isfinite(number) else 0.0


_NOT_JSON = object()


def _try_json(text: str) -> Any:
    try:
        return json.loads(text)
    except (ValueError, RecursionError):
        return _NOT_JSON


def _scan_segments(text: str) -> list[dict[str, float]]:
    """Regex fallback: pull numeric fields out of each {...} segment."""
    elements: list[dict[str, float]] = []
    for segment in _OBJECT_SEGMENT.findall(text):
        element: dict[str, float] = {}
        for name, scanner in _FIELD_SCANNERS.items():
            match = scanner.search(segment)
            if match:
                element[name] = float(match.group(1))
        if "height" in element:
            elements.append(element)
    return elements


def _decode_elements(raw: str) -> list[Any]:
    text = raw.strip()
    if len(text) >= 2 and text.startswith('"') and text.endswith('"'):
        text = text[1:-1]
    text = normalize_escaping(text)

    for candidate in (text, repair_pseudo_json(text)):
        parsed = _try_json(candidate)
        if parsed is _NOT_JSON:
            continue
        # 配列以外の JSON (object, string, ...) は失敗扱い
        return parsed if isinstance(parsed, list) else []

    scanned = _scan_segments(text)
    if scanned:
        logger.debug(f"swells decoded by regex fallback: {raw[:80]!r}")
    return scanned


def _to_component(element: Any) -> SwellComponent | None:
    if not isinstance(element, dict):
        return None
    height = coerce_number(element.get("height"))
    if height <= 0:
        return None
    return SwellComponent(
        height=height,
        period=max(0.0, coerce_number(element.get("period"))),
        direction=coerce_number(element.get("direction")),
    )


def decode_swells(raw: str | None) -> list[SwellComponent]:
    """Decode a swells cell into components with positive height.

    Never raises. Fields are coerced independently, so a component with a
    broken ``period`` still keeps its ``height`` and ``direction``.

    Examples:
        >>> decode_swells('[{"height":1.2,"period":10,"direction":270}]')
        [SwellComponent(height=1.2, period=10.0, direction=270.0)]
        >>> decode_swells("[{'height': 0.8, 'period': 9}]")
        [SwellComponent(height=0.8, period=9.0, direction=0.0)]
        >>> decode_swells("not json at all")
        []
    """
    if not raw or not raw.strip():
        return []
    components: list[SwellComponent] = []
    for element in _decode_elements(raw):
        component = _to_component(element)
        if component is not None:
            components.append(component)
    return components
