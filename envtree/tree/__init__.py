"""Path ordering, tree assembly, and the value tree model."""

from .assembler import assemble
from .ordering import Pair, as_pair, common_prefix_length, compare_paths, is_sorted, sort_pairs
from .value import Path, Tree, Value, ValueKind, get_path, is_literal, iter_leaves, kind_of, query, validate_tree


__all__ = [
    "Pair",
    "Path",
    "Tree",
    "Value",
    "ValueKind",
    "as_pair",
    "assemble",
    "common_prefix_length",
    "compare_paths",
    "get_path",
    "is_literal",
    "is_sorted",
    "iter_leaves",
    "kind_of",
    "query",
    "sort_pairs",
    "validate_tree",
]
