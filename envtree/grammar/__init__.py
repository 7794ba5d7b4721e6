"""Literal and flat array grammar for raw payload strings."""

from .array import is_array_syntax, parse_array
from .literal import INT64_MAX, INT64_MIN, LiteralValue, ScanState, classify, parse_literal
from .payload import parse_value


__all__ = [
    "INT64_MAX",
    "INT64_MIN",
    "LiteralValue",
    "ScanState",
    "classify",
    "is_array_syntax",
    "parse_array",
    "parse_literal",
    "parse_value",
]
