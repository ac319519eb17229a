"""Bidirectional tag <-> entry registry.

Tags and entries live in two insertion-ordered tables keyed by integer ids.
Ids are handed out from counters and never reused, so an id held by one
side stays valid however the other side grows. Each Tag lists the ids of
the entries carrying it and each Entry lists the ids of its tags; every
mutation keeps the two lists mirror images of each other.

Registration of a file is speculative: the entry is created on its first
tag and may still be thrown away if it fails the active filter. That goes
through ``Context.stage()``, which records what it added so a rollback can
unwind exactly that.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

import structlog

from tagnote.errors import RegistryError
from tagnote.filters import NO_FILTER, TagFilter

logger = structlog.get_logger(__name__)

DiagnosticKind = Literal["read", "manifest", "missing"]


def normalize_path(
    path: str | os.PathLike[str],
    base: Path | None = None,
) -> Path:
    """Absolute, lexically normalized form of ``path``.

    Relative paths are taken relative to ``base`` (or the working
    directory). Symlinks are left alone.
    """
    anchor = os.fspath(base) if base is not None else os.getcwd()
    return Path(os.path.normpath(os.path.join(anchor, os.fspath(path))))


@dataclass
class Tag:
    """A tag and the entries carrying it."""

    id: int
    text: str
    entries: list[int] = field(default_factory=list)


@dataclass
class Entry:
    """A tagged file and its tags."""

    id: int
    filepath: Path
    tags: list[int] = field(default_factory=list)


@dataclass(frozen=True)
class Diagnostic:
    """Something that went wrong for one file or tagfile."""

    kind: DiagnosticKind
    path: Path
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


class Context:
    """Registry of every tag and entry seen during one indexing run."""

    def __init__(self) -> None:
        self._tags: dict[int, Tag] = {}
        self._tag_ids: dict[str, int] = {}
        self._entries: dict[int, Entry] = {}
        self._entry_ids: dict[Path, int] = {}
        self._next_tag_id = 0
        self._next_entry_id = 0
        self.diagnostics: list[Diagnostic] = []

    @property
    def tags(self) -> list[Tag]:
        return list(self._tags.values())

    @property
    def entries(self) -> list[Entry]:
        return list(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    # -- registration -----------------------------------------------------

    def register_tag(self, text: str) -> int:
        """Id of the tag with this text, creating it if needed."""
        tag_id = self._tag_ids.get(text)
        if tag_id is not None:
            return tag_id

        tag_id = self._next_tag_id
        self._next_tag_id += 1
        self._tags[tag_id] = Tag(id=tag_id, text=text)
        self._tag_ids[text] = tag_id
        return tag_id

    def register_entry(
        self,
        path: str | os.PathLike[str],
        base: Path | None = None,
    ) -> int:
        """Id of the entry for this path, creating it if needed."""
        filepath = normalize_path(path, base)
        entry_id = self._entry_ids.get(filepath)
        if entry_id is not None:
            return entry_id

        entry_id = self._next_entry_id
        self._next_entry_id += 1
        self._entries[entry_id] = Entry(id=entry_id, filepath=filepath)
        self._entry_ids[filepath] = entry_id
        return entry_id

    def link(self, entry_id: int, tag_id: int) -> bool:
        """Connect an entry and a tag both ways.

        Returns False if they were already linked.
        """
        entry = self._entries[entry_id]
        tag = self._tags[tag_id]
        if tag_id in entry.tags:
            return False
        entry.tags.append(tag_id)
        tag.entries.append(entry_id)
        return True

    def unlink(self, entry_id: int, tag_id: int) -> None:
        entry = self._entries[entry_id]
        tag = self._tags[tag_id]
        if tag_id in entry.tags:
            entry.tags.remove(tag_id)
        if entry_id in tag.entries:
            tag.entries.remove(entry_id)

    def stage(
        self,
        path: str | os.PathLike[str],
        base: Path | None = None,
    ) -> StagedEntry:
        """Start a speculative registration for ``path``."""
        return StagedEntry(self, normalize_path(path, base))

    def add(
        self,
        path: str | os.PathLike[str],
        tags: list[str],
        query: TagFilter = NO_FILTER,
        base: Path | None = None,
    ) -> int | None:
        """Stage ``tags`` for ``path`` in one go and finish with ``query``."""
        staged = self.stage(path, base)
        for tag in tags:
            staged.add_tag(tag)
        return staged.finish(query)

    def _evict_entry(self, entry_id: int) -> None:
        entry = self._entries.pop(entry_id)
        del self._entry_ids[entry.filepath]
        for tag_id in entry.tags:
            self._tags[tag_id].entries.remove(entry_id)
        logger.debug("evicted entry", path=str(entry.filepath))

    def _evict_tag(self, tag_id: int) -> None:
        tag = self._tags.pop(tag_id)
        del self._tag_ids[tag.text]
        for entry_id in tag.entries:
            self._entries[entry_id].tags.remove(tag_id)

    # -- lookup -----------------------------------------------------------

    def get_entry(self, entry_id: int) -> Entry | None:
        return self._entries.get(entry_id)

    def get_tag(self, tag_id: int) -> Tag | None:
        return self._tags.get(tag_id)

    def find_entry(
        self,
        path: str | os.PathLike[str],
        base: Path | None = None,
    ) -> Entry | None:
        entry_id = self._entry_ids.get(normalize_path(path, base))
        if entry_id is None:
            return None
        return self._entries[entry_id]

    def find_tag(self, text: str) -> Tag | None:
        tag_id = self._tag_ids.get(text)
        if tag_id is None:
            return None
        return self._tags[tag_id]

    def entry_tags(self, entry_id: int) -> list[Tag]:
        return [self._tags[t] for t in self._entries[entry_id].tags]

    def tag_entries(self, tag_id: int) -> list[Entry]:
        return [self._entries[e] for e in self._tags[tag_id].entries]

    def tag_texts(self, entry_id: int) -> list[str]:
        return [tag.text for tag in self.entry_tags(entry_id)]

    # -- filtering --------------------------------------------------------

    def admits(self, entry_id: int, query: TagFilter = NO_FILTER) -> bool:
        return query.admits(self.tag_texts(entry_id))

    def filter_entries(self, query: TagFilter = NO_FILTER) -> list[Entry]:
        """Entries admitted by ``query``, in id order."""
        return [e for e in self._entries.values() if self.admits(e.id, query)]

    # -- diagnostics ------------------------------------------------------

    def report(
        self,
        kind: DiagnosticKind,
        path: Path,
        message: str,
    ) -> Diagnostic:
        diagnostic = Diagnostic(kind=kind, path=path, message=message)
        self.diagnostics.append(diagnostic)
        return diagnostic

    def check_invariants(self) -> None:
        """Raise RegistryError if the two sides of the index disagree."""
        if len(self._tag_ids) != len(self._tags):
            raise RegistryError("tag text index out of sync")
        if len(self._entry_ids) != len(self._entries):
            raise RegistryError("entry path index out of sync")

        for entry in self._entries.values():
            if not entry.tags:
                raise RegistryError(f"entry {entry.filepath} has no tags")
            if len(set(entry.tags)) != len(entry.tags):
                raise RegistryError(f"entry {entry.filepath} repeats a tag")
            for tag_id in entry.tags:
                tag = self._tags.get(tag_id)
                if tag is None or entry.id not in tag.entries:
                    raise RegistryError(
                        f"entry {entry.filepath} -> tag {tag_id} not mirrored"
                    )

        for tag in self._tags.values():
            if len(set(tag.entries)) != len(tag.entries):
                raise RegistryError(f"tag {tag.text!r} repeats an entry")
            for entry_id in tag.entries:
                entry = self._entries.get(entry_id)
                if entry is None or tag.id not in entry.tags:
                    raise RegistryError(
                        f"tag {tag.text!r} -> entry {entry_id} not mirrored"
                    )


class StagedEntry:
    """A registration that is either committed or rolled back.

    The entry itself is only created by the first ``add_tag()``, so a file
    with no tags never shows up in the registry, not even briefly.
    """

    def __init__(self, ctx: Context, filepath: Path) -> None:
        self._ctx = ctx
        self.filepath = filepath
        self.entry_id: int | None = None
        self._created_entry = False
        self._created_tags: list[int] = []
        self._linked: list[int] = []
        self._done = False

    def __enter__(self) -> StagedEntry:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._done:
            return
        if exc_type is not None:
            self.rollback()
        else:
            self.commit()

    @property
    def tags(self) -> list[str]:
        """Text of the tags linked by this stage."""
        return [self._ctx._tags[t].text for t in self._linked]

    def add_tag(self, text: str) -> None:
        if not text:
            return
        if self._done:
            raise RegistryError(f"stage for {self.filepath} already finished")

        ctx = self._ctx
        if self.entry_id is None:
            self._created_entry = ctx.find_entry(self.filepath) is None
            self.entry_id = ctx.register_entry(self.filepath)

        is_new_tag = ctx.find_tag(text) is None
        tag_id = ctx.register_tag(text)
        if is_new_tag:
            self._created_tags.append(tag_id)
        if ctx.link(self.entry_id, tag_id):
            self._linked.append(tag_id)

    def commit(self) -> int | None:
        """Keep the entry; an entry left without tags is rolled back."""
        if self.entry_id is None or not self._ctx._entries[self.entry_id].tags:
            self.rollback()
            return None
        self._done = True
        return self.entry_id

    def rollback(self) -> None:
        """Undo every link, entry and tag this stage added."""
        ctx = self._ctx
        self._done = True
        if self.entry_id is None:
            return

        for tag_id in reversed(self._linked):
            ctx.unlink(self.entry_id, tag_id)
        self._linked.clear()

        entry = ctx._entries[self.entry_id]
        if self._created_entry and not entry.tags:
            ctx._evict_entry(self.entry_id)

        for tag_id in self._created_tags:
            tag = ctx._tags.get(tag_id)
            if tag is not None and not tag.entries:
                ctx._evict_tag(tag_id)
        self._created_tags.clear()

    def finish(self, query: TagFilter = NO_FILTER) -> int | None:
        """Commit if the entry passes ``query``, roll back otherwise."""
        if self.entry_id is None:
            self._done = True
            return None
        if not self._ctx.admits(self.entry_id, query):
            logger.debug(
                "entry rejected by filter",
                path=str(self.filepath),
                query=sorted(query.tags),
            )
            self.rollback()
            return None
        return self.commit()
