"""Render a value tree back into ``KEY=VALUE`` lines."""

from __future__ import annotations

import math
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from envtree.errors import LiteralError
from envtree.grammar import is_array_syntax, parse_literal
from envtree.key_mapping import KeyMapper
from envtree.options import FormatOptions, QuoteStyle
from envtree.tree import iter_leaves, validate_tree


if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from envtree.grammar import LiteralValue
    from envtree.tree import Path


_ARRAY_SPECIALS = (",", '"', "\\")
_LINE_BREAKS = frozenset("\n\r\v\f\x1c\x1d\x1e\x85\u2028\u2029")


def render_literal(value: LiteralValue, options: FormatOptions | None = None, *, in_array: bool = False) -> str:
    """Render one literal so that parsing the text gives the value back."""
    options = options or FormatOptions()
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _render_float(value)
    if isinstance(value, str):
        return _render_string(value, options, in_array=in_array)
    msg = f"not a literal: {value!r}"
    raise TypeError(msg)


def render_value(value: LiteralValue | list[LiteralValue], options: FormatOptions | None = None) -> str:
    """Render a literal or a flat array."""
    options = options or FormatOptions()
    if isinstance(value, list):
        items = options.array_style.value.join(render_literal(item, options, in_array=True) for item in value)
        return f"[{items}]"
    return render_literal(value, options)


def iter_entries(
    tree: Mapping[str, Any],
    options: FormatOptions | None = None,
    *,
    entry_point: str | None = None,
) -> Iterator[tuple[str, str]]:
    """Yield ``(flat key, rendered value)`` for every leaf in path order.

    Raises ValueError for a key that the line reader would not split back
    into the same path.
    """
    options = options or FormatOptions()
    validate_tree(tree)
    mapper = KeyMapper(entry_point=entry_point, sep=options.field_sep)
    for path, leaf in iter_leaves(tree):
        key = mapper.full_key(*path)
        _check_key(mapper, key, path, options)
        yield key, render_value(leaf, options)


def dumps(tree: Mapping[str, Any], options: FormatOptions | None = None, *, entry_point: str | None = None) -> str:
    """Render a tree as newline-terminated ``KEY=VALUE`` lines.

    Objects without any leaf below them have no line form and are omitted.
    """
    options = options or FormatOptions()
    return "".join(
        f"{key}{options.pair_sep}{value}\n" for key, value in iter_entries(tree, options, entry_point=entry_point)
    )


def _check_key(mapper: KeyMapper, key: str, path: Path, options: FormatOptions) -> None:
    if options.pair_sep in key:
        msg = f"keys must not contain the pair separator: {key!r}"
    elif any(char in _LINE_BREAKS for char in key):
        msg = f"keys cannot span lines: {key!r}"
    elif key != key.strip():
        msg = f"keys must not start or end with whitespace: {key!r}"
    elif key.startswith(options.comment_prefix):
        msg = f"keys must not start with the comment prefix: {key!r}"
    elif mapper.relative_parts(key) != path:
        msg = f"key does not split back into its path: {key!r}"
    else:
        return
    raise ValueError(msg)


def _render_float(value: float) -> str:
    # inf and nan have no literal form and come back as strings
    if not math.isfinite(value):
        return repr(value)
    text = repr(value)
    if "e" in text:
        text = format(Decimal(text), "f")
    if "." not in text:
        text = f"{text}.0"
    return text


def _render_string(value: str, options: FormatOptions, *, in_array: bool) -> str:
    if any(char in _LINE_BREAKS for char in value):
        msg = f"string literals cannot span lines: {value!r}"
        raise ValueError(msg)
    if options.quote_style is QuoteStyle.WHEN_NEEDED and not _needs_quotes(value, in_array=in_array):
        return value
    if in_array:
        value = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{value}"'


def _needs_quotes(value: str, *, in_array: bool) -> bool:
    if not value or value != value.strip() or is_array_syntax(value):
        return True
    if in_array and any(special in value for special in _ARRAY_SPECIALS):
        return True
    try:
        parsed = parse_literal(value)
    except LiteralError:
        return True
    return not isinstance(parsed, str) or parsed != value
