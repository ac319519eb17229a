"""Tests for presentation views."""

import json
from pathlib import Path

import pytest

from tagnote.filters import TagFilter
from tagnote.registry import Context
from tagnote.views import (
    EntryView,
    TagView,
    display_path,
    entry_views,
    tag_views,
    to_json,
    to_tsv,
)


@pytest.fixture
def ctx(tmp_path: Path) -> Context:
    ctx = Context()
    for name, tags in [("A", ["x", "y"]), ("B", ["y", "z"]), ("C", ["w"])]:
        with ctx.stage(tmp_path / name) as staged:
            for tag in tags:
                staged.add_tag(tag)
    return ctx


class TestDisplayPath:
    """Test display path computation."""

    def test_relative_under_root(self, tmp_path: Path):
        assert display_path(tmp_path / "a" / "b.md", tmp_path) == "a/b.md"

    def test_outside_root_stays_absolute(self, tmp_path: Path):
        assert display_path(Path("/x/y"), tmp_path) == "/x/y"

    def test_no_root(self):
        assert display_path(Path("/x/y")) == "/x/y"


class TestEntryViews:
    """Test entry listing."""

    def test_all(self, ctx: Context, tmp_path: Path):
        views = entry_views(ctx, root=tmp_path)
        assert [(v.path, v.tags) for v in views] == [
            ("A", ["x", "y"]),
            ("B", ["y", "z"]),
            ("C", ["w"]),
        ]

    def test_filtered(self, ctx: Context, tmp_path: Path):
        views = entry_views(ctx, TagFilter.of(["y"]), root=tmp_path)
        assert [v.path for v in views] == ["A", "B"]

    def test_to_dict(self):
        view = EntryView(id=3, path="a.md", tags=["x"])
        assert view.to_dict() == {"id": 3, "path": "a.md", "tags": ["x"]}


class TestTagViews:
    """Test tag listing."""

    def test_all(self, ctx: Context, tmp_path: Path):
        views = tag_views(ctx, root=tmp_path)
        assert [(v.text, v.entries) for v in views] == [
            ("x", ["A"]),
            ("y", ["A", "B"]),
            ("z", ["B"]),
            ("w", ["C"]),
        ]

    def test_filtered_drops_unused_tags(self, ctx: Context, tmp_path: Path):
        views = tag_views(ctx, TagFilter.of(["w"]), root=tmp_path)
        assert [(v.text, v.entries) for v in views] == [("w", ["C"])]


class TestSerialization:
    """Test JSON and TSV output."""

    def test_json(self):
        views = [TagView(id=0, text="x", entries=["a.md", "b.md"])]
        assert json.loads(to_json(views)) == [
            {"id": 0, "tag": "x", "entries": ["a.md", "b.md"]}
        ]

    def test_tsv(self):
        views = [
            EntryView(id=0, path="a.md", tags=["x", "y"]),
            EntryView(id=1, path="b.md", tags=["z"]),
        ]
        assert to_tsv(views) == "a.md\tx\ty\nb.md\tz"

    def test_empty(self):
        assert to_json([]) == "[]"
        assert to_tsv([]) == ""
