"""Tag-based admission of entries."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class TagFilter:
    """OR-filter over tag text.

    An empty filter admits everything; otherwise an entry is admitted when
    any of its tags is one of the query tags.
    """

    tags: frozenset[str] = frozenset()

    @classmethod
    def of(cls, tags: Iterable[str] | None = None) -> TagFilter:
        return cls(frozenset(tags or ()))

    def __bool__(self) -> bool:
        return bool(self.tags)

    def admits(self, tag_texts: Iterable[str]) -> bool:
        if not self.tags:
            return True
        return any(text in self.tags for text in tag_texts)


NO_FILTER = TagFilter()
