"""Dispatch a raw payload to the array or literal parser."""

from __future__ import annotations

from .array import is_array_syntax, parse_array
from .literal import LiteralValue, parse_literal


def parse_value(raw: str) -> LiteralValue | list[LiteralValue]:
    """Parse a raw payload, trying array syntax before the literal grammar."""
    text = raw.strip()
    if is_array_syntax(text):
        return parse_array(text)
    return parse_literal(text)
