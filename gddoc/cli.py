"""
gddoc – command-line interface
==============================

Usage
-----
::

    python -m gddoc.cli INPUT_DIR --output DIR [OPTIONS]

Options
-------
--output, -o        Directory receiving the generated files (required).
--backend, -b       Output format: ``markdown`` (default) or ``json``.
--config, -c        Configuration file (default: INPUT_DIR/godotdoc_config.json).
--exclude, -x       Extra exclusion glob; may be repeated.
--show-private      Document ``_``-prefixed symbols.
--indent-unit       Indentation unit: ``tab`` (default) or a number of spaces.
--keep-going, -k    Skip files that fail to parse instead of stopping.
--verbose, -v       Enable DEBUG logging.

Examples
--------
::

    python -m gddoc.cli ./my_game -o ./docs
    python -m gddoc.cli ./my_game -o ./docs --backend json --show-private
    python -m gddoc.cli ./my_game -o ./docs -x "addons/*" -k
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from .config import load_config
from .errors import ConfigError, GdDocError
from .output.backends import available_backends
from .pipeline.doc_generation import DocGeneration


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="gddoc",
        description="Documentation generator for GDScript",
    )
    p.add_argument("input", metavar="INPUT_DIR", help="Directory containing .gd sources")
    p.add_argument(
        "--output", "-o",
        required=True,
        metavar="DIR",
        help="Directory to write the generated files to",
    )
    p.add_argument(
        "--backend", "-b",
        choices=available_backends(),
        default=None,
        help="Output format (default: from config file, else markdown)",
    )
    p.add_argument(
        "--config", "-c",
        default="",
        metavar="FILE",
        help="Configuration file (default: INPUT_DIR/godotdoc_config.json)",
    )
    p.add_argument(
        "--exclude", "-x",
        action="append",
        default=[],
        metavar="GLOB",
        help="Exclude paths matching GLOB (relative to INPUT_DIR); may be repeated",
    )
    p.add_argument(
        "--show-private",
        action="store_true",
        default=None,
        help="Document symbols whose name starts with '_'",
    )
    p.add_argument(
        "--indent-unit",
        default=None,
        metavar="UNIT",
        help="Indentation unit: 'tab' or a number of spaces (default: tab)",
    )
    p.add_argument(
        "--keep-going", "-k",
        action="store_true",
        help="Skip files that fail to parse and report them at the end",
    )
    p.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )
    return p


def _indent_unit(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    if value == "tab":
        return "\t"
    if value.isdigit() and int(value) > 0:
        return " " * int(value)
    raise ConfigError(f"invalid indent unit {value!r}, expected 'tab' or a number of spaces")


def main(argv: Optional[list] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = load_config(args.input, args.config or None)
        config = config.merged(
            backend=args.backend,
            show_private=args.show_private,
            indent_unit=_indent_unit(args.indent_unit),
            excluded_files=config.excluded_files + tuple(args.exclude),
        )
        generation = DocGeneration(config, keep_going=args.keep_going)
        written = generation.generate(args.input, args.output)
    except GdDocError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(f"Documented {len(written)} file(s) into {args.output}", file=sys.stderr)

    if generation.failures:
        print(
            f"\nWARNING: {len(generation.failures)} file(s) could not be documented:",
            file=sys.stderr,
        )
        for failure in generation.failures:
            print(f"  [FAILED] {failure}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
