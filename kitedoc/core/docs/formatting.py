"""Shared text layout and literal formatting rules.

Every renderer formats default values and aligns columns through these
functions, so the three output formats agree on how a value is written.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

_NUMERIC_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_BARE_TYPES = frozenset({"number", "integer"})
_LINE_BREAK_RE = re.compile(r"\r\n?|\n")


def is_numeric_literal(value: str) -> bool:
    """Whether ``value`` parses as a floating-point number."""
    return _NUMERIC_RE.fullmatch(value.strip()) is not None


def format_literal(value: str, type_tag: str) -> str:
    """Render a stored default value as a source literal.

    Parameters
    ----------
    value : str
        Raw stored value
    type_tag : str
        Semantic type of the property

    Returns
    -------
    str
        ``true``/``false`` for booleans, bare text for numbers, otherwise the
        value bare if it is numeric and double-quoted if not

    Examples
    --------
    >>> format_literal("42", "string")
    '"42"'
    >>> format_literal("42", "integer")
    '42'
    >>> format_literal("TRUE", "any")
    'true'
    >>> format_literal("1.5", "any")
    '1.5'
    """
    if type_tag == "boolean" or value.lower() in ("true", "false"):
        return value.lower()
    if type_tag in _BARE_TYPES:
        return value
    if type_tag == "string":
        return quote(value)
    if is_numeric_literal(value):
        return value
    return quote(value)


def quote(value: str) -> str:
    return f'"{value}"'


def align(pairs: Sequence[tuple[str, str]], gap: int = 0) -> list[str]:
    """Pad labels so the text following them starts in one column.

    Parameters
    ----------
    pairs : Sequence[tuple[str, str]]
        ``(label, inline suffix)`` pairs; the suffix is rendered right after
        the label and counts toward its width
    gap : int
        Extra spaces added after the widest entry

    Returns
    -------
    list[str]
        ``label + suffix`` padded to the widest entry of this block

    Examples
    --------
    >>> align([("abc", ""), ("abcdefg", ""), ("a", "")])
    ['abc    ', 'abcdefg', 'a      ']
    """
    if not pairs:
        return []
    width = max(len(label) + len(suffix) for label, suffix in pairs) + gap
    return [(label + suffix).ljust(width) for label, suffix in pairs]


def column_width(values: Sequence[str]) -> int:
    return max((len(v) for v in values), default=0)


def single_line(text: str | None) -> str:
    r"""Fold line breaks into spaces so ``text`` fits on one source line.

    >>> single_line("first line\r\nsecond line")
    'first line second line'
    """
    if not text:
        return ""
    return _LINE_BREAK_RE.sub(" ", text)


def truncate(text: str | None, max_length: int) -> str:
    """Shorten ``text`` to ``max_length`` characters, ending with ``...``."""
    if not text:
        return ""
    if len(text) <= max_length:
        return text
    return text[: max_length - 3] + "..."
