"""Bind an assembled tree onto a caller-supplied typed structure."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import TypeAdapter, ValidationError

from envtree.errors import BindError


if TYPE_CHECKING:
    from collections.abc import Mapping


_T = TypeVar("_T")


def _lowercase_keys(tree: Mapping[str, Any], path: tuple[str, ...] = ()) -> dict[str, Any]:
    lowered: dict[str, Any] = {}
    for key, value in tree.items():
        name = key.lower()
        if name in lowered:
            msg = f"keys collide after lowercasing: {'.'.join((*path, key))}"
            raise BindError(msg)
        lowered[name] = _lowercase_keys(value, (*path, key)) if isinstance(value, dict) else value
    return lowered


def bind(tree: Mapping[str, Any], target: type[_T], *, lowercase_keys: bool = False) -> _T:
    """Validate ``tree`` into ``target``.

    ``target`` is anything pydantic can validate: a ``BaseModel``, a
    dataclass, a ``TypedDict``, or a plain annotated type. Environment keys
    are conventionally upper case, so ``lowercase_keys=True`` lowercases
    every object key before validation.
    """
    data = _lowercase_keys(tree) if lowercase_keys else dict(tree)
    try:
        return TypeAdapter(target).validate_python(data)
    except ValidationError as error:
        msg = f"cannot bind tree to {getattr(target, '__name__', target)!s}: {error}"
        raise BindError(msg) from error
