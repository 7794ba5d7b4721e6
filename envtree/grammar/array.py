"""Flat array parsing with quote-aware separator scanning."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from envtree.errors import ArrayError, ArrayErrorKind, LiteralError

from .literal import parse_literal


if TYPE_CHECKING:
    from collections.abc import Iterator

    from .literal import LiteralValue


SEPARATOR = ","
_ESCAPED = re.compile(r'\\(["\\])')


def is_array_syntax(raw: str) -> bool:
    """Return True when trimmed ``raw`` is bracketed like an array."""
    return len(raw) >= 2 and raw.startswith("[") and raw.endswith("]")


def parse_array(raw: str) -> list[LiteralValue]:
    """Parse ``[a, b, ...]`` into a list of literals.

    Elements are split on ``,`` except inside an element that starts with a
    double quote; there the separator search resumes after the matching
    closing quote. Inside quoted elements ``\\"`` and ``\\\\`` decode to
    ``"`` and ``\\``.
    """
    if not raw:
        raise ArrayError(ArrayErrorKind.EMPTY_INPUT, raw)
    if not is_array_syntax(raw):
        raise ArrayError(ArrayErrorKind.MALFORMED_BRACKETS, raw)

    body = raw[1:-1].strip()
    if not body:
        return []
    return [_parse_element(segment, raw) for segment in _split_elements(body, raw)]


def _split_elements(body: str, raw: str) -> Iterator[str]:
    start = 0
    while True:
        end = _next_separator(body, start, raw)
        if end == -1:
            yield body[start:].strip()
            return
        yield body[start:end].strip()
        start = end + 1


def _next_separator(body: str, start: int, raw: str) -> int:
    index = start
    while index < len(body) and body[index].isspace():
        index += 1
    if index < len(body) and body[index] == '"':
        closing = _closing_quote(body, index + 1)
        if closing == -1:
            raise ArrayError(ArrayErrorKind.UNTERMINATED_QUOTE, raw)
        index = closing + 1
    return body.find(SEPARATOR, index)


def _closing_quote(body: str, start: int) -> int:
    index = start
    while index < len(body):
        char = body[index]
        if char == "\\":
            index += 2
            continue
        if char == '"':
            return index
        index += 1
    return -1


def _parse_element(segment: str, raw: str) -> LiteralValue:
    try:
        value = parse_literal(segment)
    except LiteralError as error:
        raise ArrayError(ArrayErrorKind.LITERAL_ERROR, raw, element_error=error) from error
    if isinstance(value, str) and len(segment) >= 2 and segment[0] == segment[-1] == '"':
        return _ESCAPED.sub(r"\1", value)
    return value
