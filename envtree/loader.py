"""Load trees from text, the environment, and backends, and store them back."""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING, Any

from envtree.key_mapping import KeyMapper
from envtree.lines import iter_entries, pairs_from_items, read_pairs
from envtree.options import DEFAULT_FIELD_SEP, FormatOptions, ReaderOptions
from envtree.tree import assemble, sort_pairs


if TYPE_CHECKING:
    from collections.abc import Mapping

    from envtree.backends import Backend
    from envtree.tree import Tree


logger = logging.getLogger(__name__)


def loads(text: str, options: ReaderOptions | None = None, *, entry_point: str | None = None) -> Tree:
    """Parse ``KEY=VALUE`` text into a tree."""
    return assemble(sort_pairs(read_pairs(text.splitlines(), options, entry_point=entry_point)))


def load_file(
    path: str | os.PathLike[str],
    options: ReaderOptions | None = None,
    *,
    entry_point: str | None = None,
    encoding: str = "utf-8",
) -> Tree:
    """Read a dotenv-style file into a tree."""
    return loads(Path(path).read_text(encoding=encoding), options, entry_point=entry_point)


def load_environ(
    environ: Mapping[str, str] | None = None,
    *,
    entry_point: str | None = None,
    sep: str = DEFAULT_FIELD_SEP,
) -> Tree:
    """Build a tree from environment variables (``os.environ`` by default).

    Without an ``entry_point`` every variable becomes a pair, so passing one
    is usually what you want.
    """
    source = os.environ if environ is None else environ
    return assemble(sort_pairs(pairs_from_items(source.items(), entry_point=entry_point, sep=sep)))


async def load_tree(backend: Backend, *, entry_point: str | None = None, sep: str = DEFAULT_FIELD_SEP) -> Tree:
    """Fetch every pair under ``entry_point`` from a backend and assemble it."""
    prefix = KeyMapper(entry_point=entry_point, sep=sep).prefix
    items = await backend.fetch(prefix)
    logger.debug("fetched %d keys under prefix %r", len(items), prefix)
    return assemble(sort_pairs(pairs_from_items(items, entry_point=entry_point, sep=sep)))


def load_tree_sync(backend: Backend, *, entry_point: str | None = None, sep: str = DEFAULT_FIELD_SEP) -> Tree:
    """Blocking variant of :func:`load_tree` for code without an event loop."""
    return asyncio.run(load_tree(backend, entry_point=entry_point, sep=sep))


async def store_tree(
    backend: Backend,
    tree: Mapping[str, Any],
    *,
    entry_point: str | None = None,
    options: FormatOptions | None = None,
    replace: bool = False,
) -> int:
    """Render every leaf of ``tree`` and write it to a backend.

    With ``replace=True`` keys under the entry point that ``tree`` no longer
    holds are deleted once the new values are stored; without an entry point
    that covers every key in the backend. A failed store leaves the previous
    keys in place. Returns the number of keys written.
    """
    options = options or FormatOptions()
    entries = dict(iter_entries(tree, options, entry_point=entry_point))
    previous: list[str] = []
    if replace:
        prefix = KeyMapper(entry_point=entry_point, sep=options.field_sep).prefix
        previous = [key for key, _ in await backend.fetch(prefix)]
    await backend.store(entries)
    logger.debug("stored %d keys", len(entries))
    stale = [key for key in previous if key not in entries]
    if stale:
        removed = await backend.delete(stale)
        logger.debug("deleted %d stale keys", removed)
    return len(entries)
