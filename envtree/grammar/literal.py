"""Scalar literal classification and parsing."""

from __future__ import annotations

from enum import Enum, auto

from envtree.errors import LiteralError, LiteralErrorKind


LiteralValue = int | float | str | bool

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_DIGITS = frozenset("0123456789")


class ScanState(Enum):
    """States of the single-pass numeric classifier."""

    UNSET = auto()
    INTEGER = auto()
    DOUBLE = auto()
    STRING = auto()


def _step(state: ScanState, char: str) -> ScanState:
    if state is ScanState.UNSET:
        if char in _DIGITS or char == "-":
            return ScanState.INTEGER
        return ScanState.STRING
    if state is ScanState.INTEGER:
        if char in _DIGITS:
            return ScanState.INTEGER
        if char == ".":
            return ScanState.DOUBLE
        return ScanState.STRING
    if state is ScanState.DOUBLE and char in _DIGITS:
        return ScanState.DOUBLE
    return ScanState.STRING


def classify(raw: str) -> ScanState:
    """Run the numeric scan over ``raw`` and return the final state."""
    state = ScanState.UNSET
    for char in raw:
        state = _step(state, char)
        if state is ScanState.STRING:
            break
    return state


def parse_literal(raw: str) -> LiteralValue:
    """Parse one trimmed scalar payload.

    Quoted text is a string with the quotes stripped, ``true``/``false``
    are booleans, and anything else is classified by :func:`classify`.
    Integers must fit a signed 64-bit value.
    """
    if not raw:
        raise LiteralError(LiteralErrorKind.EMPTY_INPUT, raw)

    if raw.startswith('"') and raw.endswith('"'):
        if len(raw) < 2:
            raise LiteralError(LiteralErrorKind.SYNTAX_ERROR, raw)
        return raw[1:-1]

    if raw == "true":
        return True
    if raw == "false":
        return False

    state = classify(raw)
    if state is ScanState.INTEGER:
        return _parse_int(raw)
    if state is ScanState.DOUBLE:
        return _parse_float(raw)
    return raw


def _parse_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError as error:
        raise LiteralError(LiteralErrorKind.NUMBER_ERROR, raw) from error
    if not INT64_MIN <= value <= INT64_MAX:
        raise LiteralError(LiteralErrorKind.NUMBER_ERROR, raw)
    return value


def _parse_float(raw: str) -> float:
    try:
        return float(raw)
    except ValueError as error:
        raise LiteralError(LiteralErrorKind.NUMBER_ERROR, raw) from error
