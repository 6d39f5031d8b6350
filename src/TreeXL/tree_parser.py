"""Parse `tree` command output into an ordered, depth-annotated entry list."""

from __future__ import annotations

import logging
from pathlib import PurePosixPath
from typing import Iterable

from TreeXL.models import ParsedDocument, TreeEntry
from TreeXL.name_rules import (
    is_hidden_name,
    parse_statistics_line,
    split_annotations,
    strip_ansi,
)

logger = logging.getLogger(__name__)

# One indentation unit is four characters wide: "│   " or "    "
UNIT_WIDTH = 4
VERTICAL_GLYPHS = frozenset("│|")
CONNECTORS = ("├──", "└──", "|--", "`--")
PREFIX_GLYPHS = frozenset("│├└─|`")


class MalformedInputError(ValueError):
    """Raised when a line's indentation cannot be mapped to a valid depth."""

    def __init__(self, line_number: int, line: str, reason: str):
        self.line_number = line_number
        self.line = line
        self.reason = reason
        super().__init__(f"line {line_number}: {reason}: {line!r}")


def _is_indent_unit(chars: str) -> bool:
    if len(chars) < UNIT_WIDTH:
        return False
    head, tail = chars[0], chars[1:UNIT_WIDTH]
    return (head in VERTICAL_GLYPHS or head.isspace()) and tail.isspace()


def parse_line(
    line: str, line_number: int = 0, classified: bool = False
) -> tuple[int, str, bool]:
    """Split one listing line into ``(depth, name, marked_directory)``.

    Connector lines are one level deeper than their indentation units:
        "├── src"           -> (1, "src", False)
        "│   └── main.rs"   -> (2, "main.rs", False)
    A line without any prefix is a root at depth 0; a root given as a path
    (`tree ./src`, `tree /home/u/proj`) is named by its last segment.

    Raises:
        MalformedInputError: the prefix is not made of whole indentation
            units followed by a connector.
    """
    text = strip_ansi(line).rstrip()
    pos = 0
    units = 0
    while _is_indent_unit(text[pos:pos + UNIT_WIDTH]):
        units += 1
        pos += UNIT_WIDTH

    if text[pos:pos + 3] in CONNECTORS:
        depth = units + 1
        rest = text[pos + 3:]
        if rest.startswith("─"):
            raise MalformedInputError(line_number, line, "connector is too wide")
        if rest and not rest[0].isspace():
            raise MalformedInputError(
                line_number, line, "connector is not followed by a space"
            )
    elif pos == 0 and text and text[0] not in PREFIX_GLYPHS and not text[0].isspace():
        depth = 0
        rest = text
    else:
        raise MalformedInputError(
            line_number, line, "unrecognized indentation prefix"
        )

    name, marked_directory = split_annotations(rest, classified)
    if not name:
        raise MalformedInputError(line_number, line, "entry has no name")
    if depth == 0:
        name = PurePosixPath(name).name or name
    return depth, name, marked_directory


def _measure(
    numbered: list[tuple[int, str]], classified: bool = False
) -> list[tuple[int, int, str, bool]]:
    """Assign depths and validate that each step goes at most one level down."""
    measured: list[tuple[int, int, str, bool]] = []
    offset = 0
    previous_depth = -1

    for line_number, line in numbered:
        depth, name, marked = parse_line(line, line_number, classified)
        # Root lines name the directories `tree` was pointed at.
        marked = marked or depth == 0
        if not measured and depth == 1:
            # Root line left out of the paste: top-level connectors become roots.
            logger.debug("listing has no root line; treating level 1 as roots")
            offset = 1
        depth -= offset
        if depth < 0:
            raise MalformedInputError(
                line_number, line, "root line inside a listing without a root"
            )
        if depth > previous_depth + 1:
            raise MalformedInputError(
                line_number,
                line,
                f"depth jumps from {max(previous_depth, 0)} to {depth}",
            )
        measured.append((line_number, depth, name, marked))
        previous_depth = depth

    return measured


def _classify(measured: list[tuple[int, int, str, bool]]) -> list[TreeEntry]:
    """Build entries with full paths and promote parents to directories."""
    entries: list[TreeEntry] = []
    stack: list[tuple[int, str]] = []

    for index, (line_number, depth, name, marked) in enumerate(measured):
        while stack and stack[-1][0] >= depth:
            stack.pop()
        stack.append((depth, name))

        has_children = (
            index + 1 < len(measured) and measured[index + 1][1] == depth + 1
        )
        entries.append(
            TreeEntry(
                depth=depth,
                name=name,
                is_directory=marked or has_children,
                full_path="/".join(part for _, part in stack),
                is_hidden=is_hidden_name(name),
                line_number=line_number,
            )
        )

    return entries


def _prune_hidden(entries: list[TreeEntry]) -> list[TreeEntry]:
    """Drop hidden entries together with every entry nested below them."""
    kept: list[TreeEntry] = []
    pruned_depth: int | None = None

    for entry in entries:
        if pruned_depth is not None:
            if entry.depth > pruned_depth:
                continue
            pruned_depth = None
        if entry.is_hidden:
            pruned_depth = entry.depth
            continue
        kept.append(entry)

    return kept


def _is_classified(numbered: list[tuple[int, str]]) -> bool:
    """True when connector lines carry `tree -F` type suffixes such as `src/`."""
    for _, line in numbered:
        text = strip_ansi(line).rstrip()
        if text.endswith("/") and any(c in text for c in CONNECTORS):
            return True
    return False


def parse(lines: Iterable[str], include_hidden: bool = False) -> ParsedDocument:
    """Parse tree-tool output into a :class:`ParsedDocument`.

    Args:
        lines: listing lines in output order, with or without newlines.
        include_hidden: keep dot-entries and their subtrees.
    """
    numbered = [
        (number, line.rstrip("\r\n"))
        for number, line in enumerate(lines, start=1)
        if strip_ansi(line).strip()
    ]

    raw_statistics = None
    if numbered:
        raw_statistics = parse_statistics_line(numbered[-1][1])
        if raw_statistics is not None:
            numbered.pop()

    entries = _classify(_measure(numbered, _is_classified(numbered)))
    if not include_hidden:
        before = len(entries)
        entries = _prune_hidden(entries)
        logger.debug("pruned %d hidden entries", before - len(entries))

    directory_count = sum(1 for e in entries if e.is_directory)
    return ParsedDocument(
        entries=tuple(entries),
        max_depth=max((e.depth for e in entries), default=0),
        directory_count=directory_count,
        file_count=len(entries) - directory_count,
        raw_statistics=raw_statistics,
    )
