"""Value tree data model: kinds, invariants, and lookups."""

from __future__ import annotations

import re
from enum import Enum
from typing import TYPE_CHECKING, Any

from envtree.grammar import LiteralValue


if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping, Sequence


Value = LiteralValue | list[LiteralValue] | dict[str, "Value"]
Tree = dict[str, Value]
Path = tuple[str, ...]

_INDEXED_SEGMENT = re.compile(r"^(?P<name>[^\[\]]*)(?P<indexes>(?:\[\d+\])*)$")


class ValueKind(Enum):
    INTEGER = "integer"
    DOUBLE = "double"
    STRING = "string"
    BOOL = "bool"
    ARRAY = "array"
    OBJECT = "object"


def kind_of(value: Any) -> ValueKind:
    """Return the kind of a tree node, raising TypeError for foreign types."""
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, int):
        return ValueKind.INTEGER
    if isinstance(value, float):
        return ValueKind.DOUBLE
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, list):
        return ValueKind.ARRAY
    if isinstance(value, dict):
        return ValueKind.OBJECT
    msg = f"unsupported tree value type: {type(value).__name__}"
    raise TypeError(msg)


def is_literal(value: Any) -> bool:
    return isinstance(value, bool | int | float | str)


def validate_tree(tree: Mapping[str, Any], path: Path = ()) -> None:
    """Check that ``tree`` only holds literals, flat arrays, and objects.

    Raises TypeError naming the first offending path.
    """
    for key, value in tree.items():
        child_path = (*path, key)
        if not isinstance(key, str) or not key:
            msg = f"object keys must be non-empty strings: {'.'.join(map(str, child_path))}"
            raise TypeError(msg)
        kind = _kind_at(value, child_path)
        if kind is ValueKind.OBJECT:
            validate_tree(value, child_path)
        elif kind is ValueKind.ARRAY:
            for index, item in enumerate(value):
                if not is_literal(item):
                    msg = f"arrays may only hold literals: {'.'.join(child_path)}[{index}]"
                    raise TypeError(msg)


def _kind_at(value: Any, path: Path) -> ValueKind:
    try:
        return kind_of(value)
    except TypeError as error:
        msg = f"{error} at {'.'.join(path)}"
        raise TypeError(msg) from error


def get_path(tree: Mapping[str, Any], path: Sequence[str]) -> Value:
    """Return the node at ``path``.

    Raises KeyError for a missing segment and TypeError when a segment
    steps into a literal or array.
    """
    node: Any = tree
    for depth, segment in enumerate(path):
        if not isinstance(node, dict):
            msg = f"cannot descend into {kind_of(node).value} at {'.'.join(path[:depth])}"
            raise TypeError(msg)
        if segment not in node:
            raise KeyError(".".join(path[: depth + 1]))
        node = node[segment]
    return node


def query(tree: Mapping[str, Any], expression: str, sep: str = ".") -> Value:
    """Look up a node with a dotted expression such as ``db.retries[1]``."""
    node: Any = tree
    for part in expression.split(sep):
        match = _INDEXED_SEGMENT.match(part)
        if match is None or not match.group("name"):
            msg = f"invalid query segment: {part!r}"
            raise ValueError(msg)
        node = get_path(node, (match.group("name"),))
        for index in re.findall(r"\[(\d+)\]", match.group("indexes")):
            if not isinstance(node, list):
                msg = f"cannot index {kind_of(node).value} in {expression!r}"
                raise TypeError(msg)
            node = node[int(index)]
    return node


def iter_leaves(tree: Mapping[str, Any], path: Path = ()) -> Iterator[tuple[Path, LiteralValue | list[LiteralValue]]]:
    """Yield ``(path, leaf)`` for every literal or array, in path order."""
    for key in sorted(tree):
        value = tree[key]
        child_path = (*path, key)
        if isinstance(value, dict):
            yield from iter_leaves(value, child_path)
        else:
            yield child_path, value
