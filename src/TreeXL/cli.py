"""Command-line entry point: convert `tree` output into an .xlsx workbook.

Usage:
    tree -a | treexl -o layout.xlsx
    treexl -i tree.txt -o layout.xlsx --include-hidden
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from TreeXL.converter import convert
from TreeXL.tree_parser import MalformedInputError
from TreeXL.tree_renderer import render_tree
from TreeXL.xlsx_writer import write_xlsx

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT = "tree_output.xlsx"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="treexl",
        description="Convert tree command output into a spreadsheet with merged level cells.",
    )
    parser.add_argument(
        "-i",
        "--input",
        metavar="FILE",
        help="File holding tree output (default: read standard input).",
    )
    parser.add_argument(
        "-o",
        "--output",
        metavar="FILE",
        default=DEFAULT_OUTPUT,
        help=f"Spreadsheet to write (default: {DEFAULT_OUTPUT}).",
    )
    parser.add_argument(
        "-a",
        "--include-hidden",
        action="store_true",
        help="Keep entries starting with '.' such as .git, and everything below them.",
    )
    parser.add_argument(
        "--print-tree",
        action="store_true",
        help="Also print the retained entries as a tree listing.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def _read_input(path: str | None) -> str:
    if path is None:
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def main(argv: list[str] | None = None) -> None:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        text = _read_input(args.input)
    except FileNotFoundError:
        print(f"Error: input file not found: {args.input}", file=sys.stderr)
        sys.exit(1)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Error: cannot read input: {exc}", file=sys.stderr)
        sys.exit(1)

    try:
        result = convert(text.splitlines(), include_hidden=args.include_hidden)
    except MalformedInputError as exc:
        print(
            f"Error: malformed tree output at line {exc.line_number}: {exc.reason}\n"
            f"  {exc.line}",
            file=sys.stderr,
        )
        sys.exit(1)

    doc = result.document
    logger.info(
        "parsed %d entries, %d level columns, %d merged ranges",
        len(doc.entries),
        doc.max_depth + 1,
        len(result.merges),
    )

    if args.print_tree:
        print(render_tree(doc))

    try:
        write_xlsx(doc, result.merges, result.statistics, args.output)
    except OSError as exc:
        print(f"Error: cannot write {args.output}: {exc}", file=sys.stderr)
        sys.exit(1)

    print(f"Wrote {args.output} ({len(doc.entries)} rows; {result.statistics.summary()})")


if __name__ == "__main__":
    main()
