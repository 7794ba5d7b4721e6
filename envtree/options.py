"""Reader and formatter options."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


DEFAULT_PAIR_SEP = "="
DEFAULT_FIELD_SEP = "__"


class QuoteStyle(Enum):
    """When the writer wraps string literals in double quotes."""

    ALWAYS = "always"
    WHEN_NEEDED = "needed"


class ArrayStyle(Enum):
    """Separator the writer places between array elements."""

    COMPACT = ","
    SPACED = ", "


def _check_separators(pair_sep: str, field_sep: str) -> None:
    if not pair_sep:
        msg = "pair_sep must not be empty"
        raise ValueError(msg)
    if not field_sep:
        msg = "field_sep must not be empty"
        raise ValueError(msg)
    if pair_sep in field_sep or field_sep in pair_sep:
        msg = "pair_sep and field_sep must not overlap"
        raise ValueError(msg)


def _check_comment_prefix(comment_prefix: str) -> None:
    if not comment_prefix:
        msg = "comment_prefix must not be empty"
        raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class ReaderOptions:
    """How ``KEY=VALUE`` lines are split into pairs."""

    pair_sep: str = DEFAULT_PAIR_SEP
    field_sep: str = DEFAULT_FIELD_SEP
    comment_prefix: str = "#"

    def __post_init__(self) -> None:
        _check_separators(self.pair_sep, self.field_sep)
        _check_comment_prefix(self.comment_prefix)


@dataclass(frozen=True, slots=True)
class FormatOptions:
    """How a tree is rendered back into ``KEY=VALUE`` lines."""

    pair_sep: str = DEFAULT_PAIR_SEP
    field_sep: str = DEFAULT_FIELD_SEP
    quote_style: QuoteStyle = QuoteStyle.ALWAYS
    array_style: ArrayStyle = ArrayStyle.SPACED
    comment_prefix: str = "#"

    def __post_init__(self) -> None:
        _check_separators(self.pair_sep, self.field_sep)
        _check_comment_prefix(self.comment_prefix)
