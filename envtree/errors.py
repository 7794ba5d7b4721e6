"""Error types raised while parsing payloads and assembling trees."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from collections.abc import Sequence


class EnvTreeError(ValueError):
    """Base class for all envtree parsing and assembly errors."""


class LiteralErrorKind(StrEnum):
    EMPTY_INPUT = "empty input"
    NUMBER_ERROR = "invalid number"
    SYNTAX_ERROR = "invalid literal syntax"


class ArrayErrorKind(StrEnum):
    LITERAL_ERROR = "invalid array element"
    EMPTY_INPUT = "empty input"
    MALFORMED_BRACKETS = "array must start with '[' and end with ']'"
    UNTERMINATED_QUOTE = "unterminated quoted array element"


class AssembleErrorKind(StrEnum):
    LITERAL_ERROR = "invalid literal value"
    ARRAY_ERROR = "invalid array value"
    DUPLICATE_KEY = "duplicate key"
    TYPE_CONFLICT = "path bound both as a value and as an object"
    UNSORTED_INPUT = "pairs are not sorted by path"
    EMPTY_PATH = "pair path must not be empty or hold empty segments"


class LiteralError(EnvTreeError):
    """A scalar payload could not be parsed."""

    def __init__(self, kind: LiteralErrorKind, raw: str) -> None:
        msg = f"{kind}: {raw!r}"
        super().__init__(msg)
        self.kind = kind
        self.raw = raw


class ArrayError(EnvTreeError):
    """A bracketed array payload could not be parsed.

    ``element_error`` holds the failing element's :class:`LiteralError`
    when ``kind`` is :attr:`ArrayErrorKind.LITERAL_ERROR`.
    """

    def __init__(self, kind: ArrayErrorKind, raw: str, element_error: LiteralError | None = None) -> None:
        msg = f"{kind}: {raw!r}"
        if element_error is not None:
            msg = f"{msg} ({element_error})"
        super().__init__(msg)
        self.kind = kind
        self.raw = raw
        self.element_error = element_error


class AssembleError(EnvTreeError):
    """The pair stream could not be assembled into a tree."""

    def __init__(
        self,
        kind: AssembleErrorKind,
        path: Sequence[str] = (),
        cause: LiteralError | ArrayError | None = None,
    ) -> None:
        self.kind = kind
        self.path = tuple(path)
        self.cause = cause
        msg = str(kind)
        if self.path:
            msg = f"{msg} at {'.'.join(self.path)}"
        if cause is not None:
            msg = f"{msg}: {cause}"
        super().__init__(msg)


class BindError(EnvTreeError):
    """A tree could not be bound onto the requested target type."""
