"""Data classes for TreeXL."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class StatisticsSource(Enum):
    DECLARED = "declared"
    RECOMPUTED = "recomputed"


@dataclass(frozen=True)
class TreeEntry:
    depth: int
    name: str
    is_directory: bool = False
    full_path: str = ""
    is_hidden: bool = False
    line_number: int = 0  # 1-based line in the source listing


@dataclass(frozen=True)
class TreeStatistics:
    directories: int
    files: int
    source: StatisticsSource = StatisticsSource.RECOMPUTED

    def summary(self) -> str:
        """Format the counts the way `tree` prints its report line."""
        dirs = "directory" if self.directories == 1 else "directories"
        files = "file" if self.files == 1 else "files"
        return f"{self.directories} {dirs}, {self.files} {files}"


@dataclass(frozen=True)
class ParsedDocument:
    entries: tuple[TreeEntry, ...] = ()
    max_depth: int = 0
    directory_count: int = 0
    file_count: int = 0
    raw_statistics: TreeStatistics | None = None


@dataclass(frozen=True)
class MergeInstruction:
    level: int
    row_start: int
    row_end: int
    value: str


@dataclass(frozen=True)
class Conversion:
    document: ParsedDocument
    merges: tuple[MergeInstruction, ...]
    statistics: TreeStatistics


@dataclass(frozen=True)
class SheetLayout:
    """Column configuration derived once from a parsed document."""

    level_count: int
    level_headers: tuple[str, ...] = field(default=())
    path_header: str = "Full Path"
    notes_header: str = "Notes"

    @classmethod
    def for_document(cls, doc: ParsedDocument) -> SheetLayout:
        count = doc.max_depth + 1
        return cls(
            level_count=count,
            level_headers=tuple(f"L{i}" for i in range(1, count + 1)),
        )

    @property
    def path_column(self) -> int:
        """1-based column index of the full path column."""
        return self.level_count + 1

    @property
    def notes_column(self) -> int:
        return self.level_count + 2

    @property
    def total_columns(self) -> int:
        return self.level_count + 2

    @property
    def headers(self) -> list[str]:
        return [*self.level_headers, self.path_header, self.notes_header]
