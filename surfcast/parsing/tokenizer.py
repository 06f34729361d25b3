from __future__ import annotations

"""CSV line tokenizer aware of brackets, braces and quotes.

The forecast CSV embeds a JSON-ish array in the ``swells`` column, and the
producer does not always quote it. A plain ``line.split(",")`` (or the csv
module) would cut that array at every element separator, so this splitter
only breaks on commas at nesting depth 0 and outside double-quoted text.

Quotes are not stripped and escapes are not decoded here; field consumers
do that.
"""

__all__ = [
    "tokenize",
]

_OPENERS = frozenset("[{")
_CLOSERS = frozenset("]}")


def tokenize(line: str) -> list[str]:
    """Split one CSV line into raw fields.

    - ``[`` / ``{`` increase depth, ``]`` / ``}`` decrease it (floored at 0)
    - an unescaped ``"`` at depth 0 toggles the in-quotes flag; ``\\"`` does not
    - commas split only at depth 0 outside quotes

    Never fails: unbalanced input yields a best-effort split and whatever is
    accumulated at the end becomes the final field.

    Examples:
        >>> tokenize('a,[1,2,3],b')
        ['a', '[1,2,3]', 'b']
        >>> tokenize('x,"a,b",{"k":1,"j":2}')
        ['x', '"a,b"', '{"k":1,"j":2}']
    """
    out: list[str] = []
    cur: list[str] = []
    depth = 0  # [ ] と { } のネスト深さ
    in_quotes = False
    prev = ""

    for ch in line:
        if ch == '"' and depth == 0 and prev != "\\":
            in_quotes = not in_quotes
        elif not in_quotes:
            if ch in _OPENERS:
                depth += 1
            elif ch in _CLOSERS:
                depth = max(0, depth - 1)
            elif ch == "," and depth == 0:
                out.append("".join(cur))
                cur = []
                prev = ch
                continue
        cur.append(ch)
        prev = ch

    out.append("".join(cur))
    return out
