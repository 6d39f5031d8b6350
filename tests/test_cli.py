"""Tests for the command-line entry point."""

import io

import pytest
from openpyxl import load_workbook

from TreeXL import cli


LISTING = "\n".join([
    ".",
    "├── .git",
    "│   └── config",
    "├── src",
    "│   ├── a.py",
    "│   └── b.py",
    "└── README.md",
    "",
    "3 directories, 4 files",
    "",
])


class TestMain:
    def test_converts_input_file(self, tmp_path, capsys):
        source = tmp_path / "tree.txt"
        source.write_text(LISTING, encoding="utf-8")
        target = tmp_path / "out.xlsx"

        cli.main(["-i", str(source), "-o", str(target)])

        ws = load_workbook(target).active
        assert [c.value for c in ws[1]] == ["L1", "L2", "L3", "Full Path", "Notes"]
        assert ws["D2"].value == "."
        assert ws["D3"].value == "./src"
        assert ws["A7"].value == "Statistics: 2 directories, 3 files"
        assert "Wrote" in capsys.readouterr().out

    def test_include_hidden_uses_declared_counts(self, tmp_path):
        source = tmp_path / "tree.txt"
        source.write_text(LISTING, encoding="utf-8")
        target = tmp_path / "out.xlsx"

        cli.main(["-i", str(source), "-o", str(target), "--include-hidden"])

        ws = load_workbook(target).active
        assert ws["D3"].value == "./.git"
        assert ws["A9"].value == "Statistics: 3 directories, 4 files"

    def test_reads_standard_input(self, tmp_path, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO(LISTING))
        target = tmp_path / "stdin.xlsx"

        cli.main(["-o", str(target)])

        assert target.exists()

    def test_print_tree(self, tmp_path, capsys):
        source = tmp_path / "tree.txt"
        source.write_text(LISTING, encoding="utf-8")

        cli.main(["-i", str(source), "-o", str(tmp_path / "out.xlsx"), "--print-tree"])

        out = capsys.readouterr().out
        assert "├── src/" in out
        assert ".git" not in out

    def test_malformed_input_writes_nothing(self, tmp_path, capsys):
        source = tmp_path / "tree.txt"
        source.write_text("root\n│   │   └── deep\n", encoding="utf-8")
        target = tmp_path / "out.xlsx"

        with pytest.raises(SystemExit) as info:
            cli.main(["-i", str(source), "-o", str(target)])

        assert info.value.code == 1
        assert not target.exists()
        err = capsys.readouterr().err
        assert "line 2" in err
        assert "└── deep" in err

    def test_missing_input_file(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as info:
            cli.main(["-i", str(tmp_path / "nope.txt"), "-o", str(tmp_path / "out.xlsx")])

        assert info.value.code == 1
        assert "not found" in capsys.readouterr().err

    def test_default_output_name(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr("sys.stdin", io.StringIO("root\n└── a.txt\n"))

        cli.main([])

        assert (tmp_path / cli.DEFAULT_OUTPUT).exists()
