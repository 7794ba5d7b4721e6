"""Interface for ``python -m envtree``."""

from __future__ import annotations

import json
import logging
import sys
from argparse import ArgumentParser
from typing import TYPE_CHECKING

from ._version import version
from .lines import dumps
from .loader import load_environ, load_file, loads
from .options import DEFAULT_FIELD_SEP, DEFAULT_PAIR_SEP, FormatOptions, QuoteStyle, ReaderOptions


if TYPE_CHECKING:
    from argparse import Namespace
    from collections.abc import Sequence

    from .tree import Tree


__all__ = ["main"]


def _build_parser() -> ArgumentParser:
    parser = ArgumentParser(prog="envtree", description="Assemble flat KEY__PATH=value pairs into a nested tree")
    _ = parser.add_argument("-v", "--version", action="version", version=version)
    _ = parser.add_argument("source", nargs="?", default="-", help="dotenv-style file, or '-' for stdin")
    _ = parser.add_argument("--env", action="store_true", help="read the process environment instead of SOURCE")
    _ = parser.add_argument("--prefix", default=None, help="only keep keys under this entry point")
    _ = parser.add_argument("--field-sep", default=DEFAULT_FIELD_SEP, help="separator between path segments")
    _ = parser.add_argument("--pair-sep", default=DEFAULT_PAIR_SEP, help="separator between key and value")
    _ = parser.add_argument("--format", choices=("json", "env"), default="json", help="output format")
    _ = parser.add_argument(
        "--quote",
        choices=[style.value for style in QuoteStyle],
        default=QuoteStyle.ALWAYS.value,
        help="string quoting for --format env",
    )
    _ = parser.add_argument(
        "--log-level", choices=("DEBUG", "INFO", "WARNING", "ERROR"), default="WARNING", help="logging level"
    )
    return parser


def _load(args: Namespace, reader_options: ReaderOptions) -> Tree:
    if args.env:
        return load_environ(entry_point=args.prefix, sep=args.field_sep)
    if args.source == "-":
        return loads(sys.stdin.read(), reader_options, entry_point=args.prefix)
    return load_file(args.source, reader_options, entry_point=args.prefix)


def main(args: Sequence[str] | None = None) -> int:
    """Argument parser for the CLI."""
    parser = _build_parser()
    parsed = parser.parse_args(args)
    logging.basicConfig(level=parsed.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    try:
        reader_options = ReaderOptions(pair_sep=parsed.pair_sep, field_sep=parsed.field_sep)
        tree = _load(parsed, reader_options)
        if parsed.format == "json":
            output = json.dumps(tree, indent=2, sort_keys=True) + "\n"
        else:
            format_options = FormatOptions(
                pair_sep=parsed.pair_sep,
                field_sep=parsed.field_sep,
                quote_style=QuoteStyle(parsed.quote),
            )
            output = dumps(tree, format_options, entry_point=parsed.prefix)
    except FileNotFoundError:
        print(f"File not found: {parsed.source}", file=sys.stderr)
        return 2
    except OSError as error:
        print(f"Cannot read {parsed.source}: {error.strerror or error}", file=sys.stderr)
        return 2
    except ValueError as error:
        print(f"error: {error}", file=sys.stderr)
        return 2

    _ = sys.stdout.write(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
