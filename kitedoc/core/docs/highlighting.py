"""Token classification for code listings.

Examples and schema listings are built once as lines of classified tokens.
Markdown and ``.kite`` output render the tokens as plain text; the HTML site
wraps each token in a ``<span>`` whose class names the token kind. Alignment
is always computed on the plain text.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from enum import Enum
from html import escape
from typing import NamedTuple


class TokenKind(str, Enum):
    """Kinds of tokens, valued by their CSS class."""

    KEYWORD = "kw"
    TYPE = "type"
    IDENTIFIER = "name"
    PROPERTY = "prop"
    STRING = "str"
    NUMBER = "num"
    BOOLEAN = "bool"
    DELIMITER = "brace"
    OPERATOR = "eq"
    COMMENT = "comment"
    DECORATOR = "decorator"
    TEXT = ""


class Token(NamedTuple):
    kind: TokenKind
    text: str


Line = tuple[Token, ...]


def kw(text: str) -> Token:
    return Token(TokenKind.KEYWORD, text)


def typ(text: str) -> Token:
    return Token(TokenKind.TYPE, text)


def ident(text: str) -> Token:
    return Token(TokenKind.IDENTIFIER, text)


def prop(text: str) -> Token:
    return Token(TokenKind.PROPERTY, text)


def string(text: str) -> Token:
    return Token(TokenKind.STRING, text)


def delim(text: str) -> Token:
    return Token(TokenKind.DELIMITER, text)


def op(text: str) -> Token:
    return Token(TokenKind.OPERATOR, text)


def comment(text: str) -> Token:
    return Token(TokenKind.COMMENT, text)


def decorator(text: str) -> Token:
    return Token(TokenKind.DECORATOR, text)


def text(value: str) -> Token:
    return Token(TokenKind.TEXT, value)


def literal_token(literal: str) -> Token:
    """Classify an already formatted literal."""
    if literal.startswith('"'):
        return Token(TokenKind.STRING, literal)
    if literal in ("true", "false"):
        return Token(TokenKind.BOOLEAN, literal)
    return Token(TokenKind.NUMBER, literal)


def plain_line(line: Sequence[Token]) -> str:
    return "".join(token.text for token in line)


def html_line(line: Sequence[Token]) -> str:
    parts = []
    for token in line:
        escaped = escape(token.text, quote=False)
        if token.kind is TokenKind.TEXT or not token.text.strip():
            parts.append(escaped)
        else:
            parts.append(f'<span class="{token.kind.value}">{escaped}</span>')
    return "".join(parts)


def render_plain(lines: Iterable[Sequence[Token]]) -> str:
    """Join token lines as plain text, one line per entry, newline-terminated."""
    return "".join(plain_line(line) + "\n" for line in lines)


def render_html(lines: Iterable[Sequence[Token]]) -> str:
    """Join token lines as highlighted HTML (no trailing newline, for ``<pre>``)."""
    return "\n".join(html_line(line) for line in lines)
