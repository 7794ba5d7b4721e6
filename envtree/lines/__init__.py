"""Line-oriented reading and writing of flat ``KEY=VALUE`` text."""

from .reader import pairs_from_items, parse_lines, read_pairs, split_lines
from .writer import dumps, iter_entries, render_literal, render_value


__all__ = [
    "dumps",
    "iter_entries",
    "pairs_from_items",
    "parse_lines",
    "read_pairs",
    "render_literal",
    "render_value",
    "split_lines",
]
