"""Spreadsheet output assembly."""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font
from openpyxl.utils import get_column_letter

from TreeXL.merge_resolver import ancestor_rows
from TreeXL.models import MergeInstruction, ParsedDocument, SheetLayout, TreeStatistics

SHEET_TITLE = "tree"
STATISTICS_LABEL = "Statistics"
FIRST_DATA_ROW = 2  # row 1 holds the headers

BOLD = Font(bold=True)
MERGED_ALIGNMENT = Alignment(vertical="center")


def build_rows(doc: ParsedDocument, layout: SheetLayout) -> list[list[str]]:
    """Return the level-column values for every row.

    Each row repeats its ancestors' names so that unmerged rows still show
    their full chain:
        ["root", "src", "main.rs"]
        ["root", "README.md", ""]
    """
    rows: list[list[str]] = []
    for chain in ancestor_rows(doc):
        levels = [doc.entries[i].name for i in chain]
        levels += [""] * (layout.level_count - len(levels))
        rows.append(levels)
    return rows


def build_workbook(
    doc: ParsedDocument,
    merges: tuple[MergeInstruction, ...] | list[MergeInstruction],
    statistics: TreeStatistics,
    layout: SheetLayout | None = None,
) -> Workbook:
    """Lay out *doc* as a worksheet with merged level cells and a summary row."""
    layout = layout or SheetLayout.for_document(doc)

    wb = Workbook()
    ws = wb.active
    ws.title = SHEET_TITLE

    ws.append(layout.headers)
    for cell in ws[1]:
        cell.font = BOLD

    chains = ancestor_rows(doc)
    for offset, (entry, levels) in enumerate(zip(doc.entries, build_rows(doc, layout))):
        ws.append([*(name or None for name in levels), entry.full_path, None])
        row = FIRST_DATA_ROW + offset
        for cell in ws[row]:
            # Names are text; keep a leading "=" from being stored as a formula.
            if isinstance(cell.value, str) and cell.value.startswith("="):
                cell.data_type = "s"
        for level, ancestor in enumerate(chains[offset]):
            if doc.entries[ancestor].is_directory:
                ws.cell(row=row, column=level + 1).font = BOLD

    for merge in merges:
        column = merge.level + 1
        ws.merge_cells(
            start_row=FIRST_DATA_ROW + merge.row_start,
            start_column=column,
            end_row=FIRST_DATA_ROW + merge.row_end,
            end_column=column,
        )
        ws.cell(row=FIRST_DATA_ROW + merge.row_start, column=column).alignment = (
            MERGED_ALIGNMENT
        )

    stats_row = FIRST_DATA_ROW + len(doc.entries)
    summary = ws.cell(
        row=stats_row,
        column=1,
        value=f"{STATISTICS_LABEL}: {statistics.summary()}",
    )
    summary.font = BOLD
    ws.merge_cells(
        start_row=stats_row,
        start_column=1,
        end_row=stats_row,
        end_column=layout.total_columns,
    )

    ws.freeze_panes = "A2"
    if doc.entries:
        last_column = get_column_letter(layout.total_columns)
        ws.auto_filter.ref = f"A1:{last_column}{stats_row - 1}"

    return wb


def write_xlsx(
    doc: ParsedDocument,
    merges: tuple[MergeInstruction, ...] | list[MergeInstruction],
    statistics: TreeStatistics,
    target: str | Path | BinaryIO,
) -> None:
    """Build the workbook and save it to a path or a binary stream."""
    build_workbook(doc, merges, statistics).save(target)
