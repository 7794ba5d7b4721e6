"""Read ``KEY=VALUE`` lines into key/value pairs."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from envtree.key_mapping import KeyMapper
from envtree.options import DEFAULT_FIELD_SEP, ReaderOptions
from envtree.tree import Pair


if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


logger = logging.getLogger(__name__)


def split_lines(lines: Iterable[str], options: ReaderOptions | None = None) -> Iterator[tuple[str, str]]:
    """Yield trimmed ``(key, value)`` for every line holding the pair separator.

    Blank lines and comments are skipped; lines without the separator are
    dropped. Only the first separator splits, so values may contain it.
    """
    options = options or ReaderOptions()
    for lineno, line in enumerate(lines, start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith(options.comment_prefix):
            continue

        key, sep, value = stripped.partition(options.pair_sep)
        if not sep:
            logger.debug("dropping line %d: no %r separator", lineno, options.pair_sep)
            continue
        yield key.strip(), value.strip()


def pairs_from_items(
    items: Iterable[tuple[str, str]],
    *,
    entry_point: str | None = None,
    sep: str = DEFAULT_FIELD_SEP,
) -> Iterator[Pair]:
    """Yield pairs from already split ``(flat key, raw value)`` items.

    Keys outside ``entry_point`` and keys with empty segments are dropped.
    """
    mapper = KeyMapper(entry_point=entry_point, sep=sep)
    for key, raw in items:
        if not mapper.matches(key):
            continue
        try:
            path = mapper.relative_parts(key)
        except ValueError as error:
            logger.debug("dropping key %r: %s", key, error)
            continue
        yield Pair(path, raw)


def read_pairs(
    lines: Iterable[str],
    options: ReaderOptions | None = None,
    *,
    entry_point: str | None = None,
) -> Iterator[Pair]:
    """Yield pairs from ``KEY=VALUE`` lines in input order."""
    options = options or ReaderOptions()
    return pairs_from_items(split_lines(lines, options), entry_point=entry_point, sep=options.field_sep)


def parse_lines(
    text: str,
    options: ReaderOptions | None = None,
    *,
    entry_point: str | None = None,
) -> list[Pair]:
    """Read every pair from a block of text."""
    return list(read_pairs(text.splitlines(), options, entry_point=entry_point))
