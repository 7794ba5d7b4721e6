"""envtree - typed nested trees from flat ``A__B__C=value`` configuration pairs"""

from ._version import version as __version__
from .backends import Backend, InMemoryBackend
from .binding import bind
from .errors import (
    ArrayError,
    ArrayErrorKind,
    AssembleError,
    AssembleErrorKind,
    BindError,
    EnvTreeError,
    LiteralError,
    LiteralErrorKind,
)
from .grammar import parse_array, parse_literal, parse_value
from .key_mapping import KeyMapper
from .lines import dumps, parse_lines, read_pairs
from .loader import load_environ, load_file, load_tree, load_tree_sync, loads, store_tree
from .options import ArrayStyle, FormatOptions, QuoteStyle, ReaderOptions
from .tree import Pair, ValueKind, assemble, compare_paths, get_path, kind_of, query, sort_pairs


__all__ = [
    "ArrayError",
    "ArrayErrorKind",
    "ArrayStyle",
    "AssembleError",
    "AssembleErrorKind",
    "Backend",
    "BindError",
    "EnvTreeError",
    "FormatOptions",
    "InMemoryBackend",
    "KeyMapper",
    "LiteralError",
    "LiteralErrorKind",
    "Pair",
    "QuoteStyle",
    "ReaderOptions",
    "ValueKind",
    "__version__",
    "assemble",
    "bind",
    "compare_paths",
    "dumps",
    "get_path",
    "kind_of",
    "load_environ",
    "load_file",
    "load_tree",
    "load_tree_sync",
    "loads",
    "parse_array",
    "parse_lines",
    "parse_literal",
    "parse_value",
    "query",
    "read_pairs",
    "sort_pairs",
    "store_tree",
]
