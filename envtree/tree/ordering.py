"""Total order over key paths and the pair type it sorts."""

from __future__ import annotations

from itertools import pairwise
from typing import TYPE_CHECKING, NamedTuple


if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence


class Pair(NamedTuple):
    """A key path and its unparsed payload."""

    path: tuple[str, ...]
    raw: str


def as_pair(item: Pair | tuple[Sequence[str], str]) -> Pair:
    if isinstance(item, Pair):
        return item
    path, raw = item
    return Pair(tuple(path), raw)


def compare_paths(left: Sequence[str], right: Sequence[str]) -> int:
    """Compare two paths segment by segment; a strict prefix sorts first.

    Returns -1, 0, or 1.
    """
    left_key, right_key = tuple(left), tuple(right)
    if left_key < right_key:
        return -1
    if left_key > right_key:
        return 1
    return 0


def common_prefix_length(left: Sequence[str], right: Sequence[str]) -> int:
    """Return the number of leading segments shared by both paths."""
    length = 0
    for left_segment, right_segment in zip(left, right, strict=False):
        if left_segment != right_segment:
            break
        length += 1
    return length


def sort_pairs(pairs: Iterable[Pair | tuple[Sequence[str], str]]) -> list[Pair]:
    """Return pairs stably sorted by path."""
    return sorted((as_pair(item) for item in pairs), key=lambda pair: pair.path)


def is_sorted(pairs: Iterable[Pair | tuple[Sequence[str], str]]) -> bool:
    """Return True when every path is ordered at or after its predecessor."""
    paths = (as_pair(item).path for item in pairs)
    return all(compare_paths(previous, current) <= 0 for previous, current in pairwise(paths))
