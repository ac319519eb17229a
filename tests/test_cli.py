"""Tests for CLI commands."""

import json
import sys
from pathlib import Path

import pytest

from tagnote.cli import main
from tagnote.cli.commands.entries import Entries
from tagnote.cli.commands.show import Show
from tagnote.cli.commands.tags import Tags


@pytest.fixture
def project(tmp_path: Path, monkeypatch) -> Path:
    (tmp_path / "notes.md").write_text("#: draft important\n")
    (tmp_path / "main.c").write_text("/* main */\n// #: c draft\n")
    (tmp_path / "old.md").write_text("stale\n")
    (tmp_path / ".tag").write_text("old.md #: archived\n")
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("TAGNOTE_READ_LIMIT", raising=False)
    monkeypatch.delenv("TAGNOTE_DEBUG", raising=False)
    return tmp_path


class TestEntries:
    """Test the entries command."""

    def test_json(self, project: Path, capsys):
        assert Entries(paths=(project,), output_format="json").run() == 0
        data = json.loads(capsys.readouterr().out)
        assert {d["path"]: d["tags"] for d in data} == {
            "main.c": ["c", "draft"],
            "notes.md": ["draft", "important"],
            "old.md": ["archived"],
        }

    def test_filter(self, project: Path, capsys):
        cmd = Entries(paths=(project,), tags=("archived",), output_format="tsv")
        assert cmd.run() == 0
        assert capsys.readouterr().out.strip() == "old.md\tarchived"

    def test_defaults_to_cwd(self, project: Path, capsys):
        assert Entries(output_format="json").run() == 0
        assert len(json.loads(capsys.readouterr().out)) == 3

    def test_rich_output(self, project: Path, capsys):
        assert Entries(paths=(project,)).run() == 0
        out = capsys.readouterr().out
        assert "notes.md" in out
        assert "draft important" in out
        assert "3 files, 4 tags" in out

    def test_logs_stay_off_stdout(self, project: Path, capsys):
        cmd = Entries(paths=(project,), output_format="json", debug=True)
        assert cmd.run() == 0
        captured = capsys.readouterr()
        assert len(json.loads(captured.out)) == 3
        assert "registered file" in captured.err

    def test_debug_events_hidden_by_default(self, project: Path, capsys):
        assert Entries(paths=(project,), output_format="tsv").run() == 0
        captured = capsys.readouterr()
        assert "registered file" not in captured.out + captured.err

    def test_nothing_found(self, tmp_path: Path, capsys, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert Entries(paths=(tmp_path,)).run() == 0
        assert "no tagged files" in capsys.readouterr().out


class TestTags:
    """Test the tags command."""

    def test_json(self, project: Path, capsys):
        assert Tags(paths=(project,), output_format="json").run() == 0
        data = json.loads(capsys.readouterr().out)
        by_tag = {d["tag"]: sorted(d["entries"]) for d in data}
        assert by_tag["draft"] == ["main.c", "notes.md"]
        assert by_tag["archived"] == ["old.md"]
        assert set(by_tag) == {"draft", "important", "c", "archived"}

    def test_rich_output(self, project: Path, capsys):
        assert Tags(paths=(project,), tags=("c",)).run() == 0
        out = capsys.readouterr().out
        assert "c (1)" in out
        assert "main.c" in out
        assert "archived" not in out


class TestShow:
    """Test the show command."""

    def test_file_tags(self, project: Path, capsys):
        assert Show(file=Path("notes.md")).run() == 0
        out = capsys.readouterr().out
        assert "draft important" in out

    def test_tagfile_tags(self, project: Path, capsys):
        assert Show(file=Path("old.md")).run() == 0
        out = capsys.readouterr().out
        assert "from .tag" in out
        assert "archived" in out

    def test_missing_file(self, project: Path, capsys):
        assert Show(file=Path("gone.md")).run() == 1
        assert "file not found" in capsys.readouterr().err


class TestMain:
    """Test the tyro entry point."""

    def test_entries_subcommand(self, project: Path, capsys, monkeypatch):
        monkeypatch.setattr(
            sys,
            "argv",
            ["tagnote", "entries", str(project), "--output-format", "json"],
        )
        assert main() == 0
        data = json.loads(capsys.readouterr().out)
        assert len(data) == 3

    def test_help_exits_cleanly(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, "argv", ["tagnote", "--help"])
        assert main() == 0
