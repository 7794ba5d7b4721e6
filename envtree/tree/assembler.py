"""Single-pass assembly of sorted key/value pairs into a nested tree."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from envtree.errors import ArrayError, AssembleError, AssembleErrorKind, LiteralError
from envtree.grammar import parse_value

from .ordering import as_pair, common_prefix_length, compare_paths


if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from envtree.grammar import LiteralValue

    from .ordering import Pair
    from .value import Path, Tree, Value


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _Frame:
    """An open object whose children are still being collected."""

    path: Path
    children: dict[str, Value] = field(default_factory=dict)


def assemble(pairs: Iterable[Pair | tuple[Sequence[str], str]]) -> Tree:
    """Build the nested object tree from pairs sorted by path.

    The stack holds the root frame plus one frame per open ancestor of the
    previous pair. Each pair closes the frames below the prefix it shares
    with the previous path, opens the missing ancestors of its own path, and
    inserts its parsed value into the deepest frame.

    Raises AssembleError on unsorted input, duplicate keys, paths used both
    as a value and as an object, and unparseable payloads. No partial tree
    is returned.
    """
    stack: list[_Frame] = [_Frame(path=())]
    prev_path: Path = ()
    count = 0

    for item in pairs:
        pair = as_pair(item)
        path = pair.path
        if not path or not all(path):
            raise AssembleError(AssembleErrorKind.EMPTY_PATH, path)
        if compare_paths(prev_path, path) > 0:
            raise AssembleError(AssembleErrorKind.UNSORTED_INPUT, path)

        common = min(common_prefix_length(prev_path, path), len(path) - 1)
        _close_frames(stack, common)
        _open_frames(stack, path)
        _insert_leaf(stack[-1], path, _parse_leaf(path, pair.raw))

        prev_path = path
        count += 1

    _close_frames(stack, 0)
    root = stack[0].children
    logger.debug("assembled %d pairs into %d top-level keys", count, len(root))
    return root


def _close_frames(stack: list[_Frame], depth: int) -> None:
    while len(stack) - 1 > depth:
        frame = stack.pop()
        stack[-1].children[frame.path[-1]] = frame.children


def _open_frames(stack: list[_Frame], path: Path) -> None:
    for depth in range(len(stack) - 1, len(path) - 1):
        segment = path[depth]
        if segment in stack[-1].children:
            raise AssembleError(AssembleErrorKind.TYPE_CONFLICT, path[: depth + 1])
        stack.append(_Frame(path=path[: depth + 1]))


def _insert_leaf(frame: _Frame, path: Path, value: LiteralValue | list[LiteralValue]) -> None:
    key = path[-1]
    if key in frame.children:
        if isinstance(frame.children[key], dict):
            raise AssembleError(AssembleErrorKind.TYPE_CONFLICT, path)
        raise AssembleError(AssembleErrorKind.DUPLICATE_KEY, path)
    frame.children[key] = value


def _parse_leaf(path: Path, raw: str) -> LiteralValue | list[LiteralValue]:
    try:
        return parse_value(raw)
    except LiteralError as error:
        raise AssembleError(AssembleErrorKind.LITERAL_ERROR, path, cause=error) from error
    except ArrayError as error:
        raise AssembleError(AssembleErrorKind.ARRAY_ERROR, path, cause=error) from error
