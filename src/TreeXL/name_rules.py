"""Entry name cleanup, hidden-entry detection, and summary line matching."""

from __future__ import annotations

import re

from TreeXL.models import StatisticsSource, TreeStatistics

# SGR colour sequences emitted by `tree -C`
ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;?]*[A-Za-z~]")

# Metadata column printed right after the connector by `tree -s`, `-p`,
# `-D`, `-u` ...: "[4.0K]  name". tree always pads it with two spaces.
METADATA_PREFIX = re.compile(r"^\[[^\]]+\]  ")

# Fixed notes tree appends after a name it could not descend into
TRAILING_NOTES: tuple[str, ...] = (
    "[error opening dir]",
    "[recursive, not followed]",
)

# Type suffixes `tree -F` appends: executable, symlink, socket, fifo, door
CLASSIFIER_SUFFIXES = frozenset("*@=|>")

# `tree -l` / default symlink rendering: "name -> target"
SYMLINK_ARROW = " -> "

HIDDEN_MARKER = "."

# Names that start with the hidden marker but denote the listing root
ROOT_MARKERS: frozenset[str] = frozenset({".", ".."})

STATISTICS_LINE = re.compile(
    r"^\s*(\d+)\s+director(?:y|ies)(?:\s*,\s*(\d+)\s+files?)?\s*$"
)


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences from a line of `tree -C` output."""
    return ANSI_ESCAPE.sub("", text)


def is_hidden_name(name: str) -> bool:
    """Return True for dot-files and dot-directories such as `.git`."""
    return name.startswith(HIDDEN_MARKER) and name not in ROOT_MARKERS


def split_annotations(raw: str, classified: bool = False) -> tuple[str, bool]:
    """Split the text after the connector into ``(name, ends_with_slash)``.

    A metadata bracket, tree's own trailing notes, symlink targets and the
    trailing ``/`` that `tree -F` appends to directories are removed. When
    *classified* is set (the listing came from `tree -F`), the other type
    suffixes such as ``*`` and ``@`` are removed as well.
    """
    text = METADATA_PREFIX.sub("", raw.strip()).strip()
    for note in TRAILING_NOTES:
        if text.endswith(note):
            text = text[: -len(note)].rstrip()
            break
    if SYMLINK_ARROW in text:
        text = text.split(SYMLINK_ARROW, maxsplit=1)[0]
    text = text.rstrip()

    marked_directory = len(text) > 1 and text.endswith("/")
    if marked_directory:
        text = text.rstrip("/")
    elif classified and len(text) > 1 and text[-1] in CLASSIFIER_SUFFIXES:
        text = text[:-1]
    return text, marked_directory


def parse_statistics_line(line: str) -> TreeStatistics | None:
    """Parse ``"<N> directories, <M> files"``; return None for any other line."""
    match = STATISTICS_LINE.match(strip_ansi(line))
    if match is None:
        return None
    files = int(match.group(2)) if match.group(2) is not None else 0
    return TreeStatistics(
        directories=int(match.group(1)),
        files=files,
        source=StatisticsSource.DECLARED,
    )
