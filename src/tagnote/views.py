"""Read-only views of a Context for presentation layers."""

from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from tagnote.filters import NO_FILTER, TagFilter
from tagnote.registry import Context


def display_path(path: Path, root: Path | None = None) -> str:
    """``path`` relative to ``root`` when it lives under it."""
    if root is not None:
        try:
            return str(path.relative_to(root))
        except ValueError:
            pass
    return str(path)


@dataclass
class EntryView:
    """An entry's path and the text of its tags, in order."""

    id: int
    path: str
    tags: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "path": self.path, "tags": list(self.tags)}

    def to_row(self) -> str:
        return "\t".join([self.path, *self.tags])


@dataclass
class TagView:
    """A tag's text and the paths of the entries carrying it."""

    id: int
    text: str
    entries: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "tag": self.text, "entries": list(self.entries)}

    def to_row(self) -> str:
        return "\t".join([self.text, *self.entries])


def entry_views(
    ctx: Context,
    query: TagFilter = NO_FILTER,
    root: Path | None = None,
) -> list[EntryView]:
    return [
        EntryView(
            id=entry.id,
            path=display_path(entry.filepath, root),
            tags=ctx.tag_texts(entry.id),
        )
        for entry in ctx.filter_entries(query)
    ]


def tag_views(
    ctx: Context,
    query: TagFilter = NO_FILTER,
    root: Path | None = None,
) -> list[TagView]:
    """Tags with the entries admitted by ``query``.

    Tags left with no admitted entry are dropped.
    """
    admitted = {entry.id for entry in ctx.filter_entries(query)}
    views: list[TagView] = []
    for tag in ctx.tags:
        paths = [
            display_path(entry.filepath, root)
            for entry in ctx.tag_entries(tag.id)
            if entry.id in admitted
        ]
        if paths:
            views.append(TagView(id=tag.id, text=tag.text, entries=paths))
    return views


def to_json(views: Sequence[EntryView | TagView]) -> str:
    return json.dumps([v.to_dict() for v in views], indent=2)


def to_tsv(views: Sequence[EntryView | TagView]) -> str:
    return "\n".join(v.to_row() for v in views)
