"""Per-level merge ranges and statistics reconciliation."""

from __future__ import annotations

import logging

from TreeXL.models import (
    MergeInstruction,
    ParsedDocument,
    StatisticsSource,
    TreeStatistics,
)

logger = logging.getLogger(__name__)


def ancestor_rows(doc: ParsedDocument) -> list[tuple[int, ...]]:
    """Return, for every row, the row indices of its ancestors and itself.

    ``ancestor_rows(doc)[i][level]`` is the row holding the level-``level``
    segment of row ``i``'s path.
    """
    chains: list[tuple[int, ...]] = []
    stack: list[int] = []
    for index, entry in enumerate(doc.entries):
        del stack[entry.depth:]
        stack.append(index)
        chains.append(tuple(stack))
    return chains


def resolve(doc: ParsedDocument) -> tuple[MergeInstruction, ...]:
    """Compute the merged-cell ranges for every level column.

    Rows merge at a level when they are contiguous and share the same
    ancestor at that level. The deepest level only holds leaves and is
    never merged.
    """
    chains = ancestor_rows(doc)
    merges: list[MergeInstruction] = []

    for level in range(doc.max_depth):
        run_key: int | None = None
        run_start = 0

        for row, chain in enumerate([*chains, ()]):
            key = chain[level] if len(chain) > level else None
            if key is not None and key == run_key:
                continue
            if run_key is not None and row - 1 > run_start:
                merges.append(
                    MergeInstruction(
                        level=level,
                        row_start=run_start,
                        row_end=row - 1,
                        value=doc.entries[run_key].name,
                    )
                )
            run_key = key
            run_start = row

    return tuple(merges)


def reconcile_statistics(doc: ParsedDocument, include_hidden: bool) -> TreeStatistics:
    """Choose the counts to report for a parsed listing.

    The summary printed by `tree` is only trusted when nothing was filtered
    out; otherwise the counts over retained entries win.
    """
    recomputed = TreeStatistics(
        directories=doc.directory_count,
        files=doc.file_count,
        source=StatisticsSource.RECOMPUTED,
    )
    declared = doc.raw_statistics
    if declared is None:
        return recomputed
    if include_hidden:
        return declared

    if (declared.directories, declared.files) != (
        recomputed.directories,
        recomputed.files,
    ):
        logger.debug(
            "declared counts %s differ from retained counts %s",
            declared.summary(),
            recomputed.summary(),
        )
    return recomputed
