"""Tests for xlsx_writer module."""

import io

from openpyxl import load_workbook

from TreeXL.converter import convert
from TreeXL.models import ParsedDocument, SheetLayout, TreeStatistics
from TreeXL.xlsx_writer import build_rows, build_workbook, write_xlsx


LISTING = [
    "proj",
    "├── src",
    "│   ├── a.rs",
    "│   └── b.rs",
    "└── README.md",
    "",
    "1 directory, 3 files",
]


def _ranges(ws):
    return sorted(str(r) for r in ws.merged_cells.ranges)


class TestSheetLayout:
    def test_columns_follow_max_depth(self):
        layout = SheetLayout.for_document(convert(LISTING).document)
        assert layout.headers == ["L1", "L2", "L3", "Full Path", "Notes"]
        assert layout.path_column == 4
        assert layout.notes_column == 5
        assert layout.total_columns == 5

    def test_empty_document_has_one_level(self):
        layout = SheetLayout.for_document(ParsedDocument())
        assert layout.headers == ["L1", "Full Path", "Notes"]


class TestBuildRows:
    def test_rows_repeat_ancestors(self):
        doc = convert(LISTING).document
        rows = build_rows(doc, SheetLayout.for_document(doc))
        assert rows == [
            ["proj", "", ""],
            ["proj", "src", ""],
            ["proj", "src", "a.rs"],
            ["proj", "src", "b.rs"],
            ["proj", "README.md", ""],
        ]


class TestBuildWorkbook:
    def test_headers_and_paths(self):
        result = convert(LISTING)
        ws = build_workbook(result.document, result.merges, result.statistics).active
        assert [c.value for c in ws[1]] == ["L1", "L2", "L3", "Full Path", "Notes"]
        assert ws["D3"].value == "proj/src"
        assert ws["C4"].value == "a.rs"
        assert ws["D6"].value == "proj/README.md"

    def test_merged_ranges(self):
        result = convert(LISTING)
        ws = build_workbook(result.document, result.merges, result.statistics).active
        assert _ranges(ws) == ["A2:A6", "A7:E7", "B3:B5"]
        assert ws["A2"].value == "proj"
        assert ws["B3"].value == "src"

    def test_statistics_row(self):
        result = convert(LISTING)
        ws = build_workbook(result.document, result.merges, result.statistics).active
        assert ws["A7"].value == "Statistics: 2 directories, 3 files"

    def test_recomputed_statistics_row(self):
        lines = [".", "├── .git", "│   └── HEAD", "└── a.txt", "", "2 directories, 2 files"]
        result = convert(lines, include_hidden=False)
        ws = build_workbook(result.document, result.merges, result.statistics).active
        assert ws["A4"].value == "Statistics: 1 directory, 1 file"

    def test_directory_cells_bold(self):
        result = convert(LISTING)
        ws = build_workbook(result.document, result.merges, result.statistics).active
        assert ws["B6"].font.bold is False  # README.md
        assert ws["C4"].font.bold is False  # a.rs
        assert ws["A2"].font.bold is True

    def test_frozen_header_and_filter(self):
        result = convert(LISTING)
        ws = build_workbook(result.document, result.merges, result.statistics).active
        assert ws.freeze_panes == "A2"
        assert ws.auto_filter.ref == "A1:E6"

    def test_formula_like_names_stored_as_text(self):
        result = convert(["root", "└── =SUM(1,2)"])
        ws = build_workbook(result.document, result.merges, result.statistics).active
        assert ws["B3"].value == "=SUM(1,2)"
        assert ws["B3"].data_type == "s"
        assert ws["C3"].value == "root/=SUM(1,2)"

    def test_empty_document(self):
        stats = TreeStatistics(directories=0, files=0)
        ws = build_workbook(ParsedDocument(), (), stats).active
        assert [c.value for c in ws[1]] == ["L1", "Full Path", "Notes"]
        assert ws["A2"].value == "Statistics: 0 directories, 0 files"
        assert ws.auto_filter.ref is None


class TestWriteXlsx:
    def test_writes_to_path(self, tmp_path):
        result = convert(LISTING)
        target = tmp_path / "out.xlsx"
        write_xlsx(result.document, result.merges, result.statistics, target)
        ws = load_workbook(target).active
        assert ws.title == "tree"
        assert _ranges(ws) == ["A2:A6", "A7:E7", "B3:B5"]

    def test_writes_to_stream(self):
        result = convert(LISTING)
        buffer = io.BytesIO()
        write_xlsx(result.document, result.merges, result.statistics, buffer)
        buffer.seek(0)
        ws = load_workbook(buffer).active
        assert ws["E2"].value is None
        assert ws.max_row == 7

    def test_formula_like_names_survive_reload(self):
        result = convert(["=root", "└── =1+1"])
        buffer = io.BytesIO()
        write_xlsx(result.document, result.merges, result.statistics, buffer)
        buffer.seek(0)
        ws = load_workbook(buffer).active
        assert ws["A2"].data_type == "s"
        assert ws["B3"].value == "=1+1"
        assert ws["B3"].data_type == "s"
