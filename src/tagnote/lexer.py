"""Tag lexer - comment skipping and tag tokenization.

A tag declaration is a line whose first non-noise characters are the tag
marker ``#:``, followed by whitespace-separated tag tokens. Leading
whitespace and comment openers from a handful of languages are skipped so
the declaration can hide inside a comment:

    // #: draft release
    ;; #: lisp notes
    % #: paper
    # #: shell-script
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

TAG_MARKER = "#:"
WHITESPACE = frozenset("\r\n \t\v")


@dataclass
class Cursor:
    """Read position over a piece of text."""

    text: str
    pos: int = 0

    def __bool__(self) -> bool:
        return self.pos < len(self.text)

    @property
    def rest(self) -> str:
        return self.text[self.pos :]

    def peek(self) -> str:
        """Current character, or "" at the end."""
        return self.text[self.pos : self.pos + 1]

    def startswith(self, prefix: str) -> bool:
        return self.text.startswith(prefix, self.pos)

    def advance(self, n: int = 1) -> None:
        self.pos = min(self.pos + n, len(self.text))

    def at_marker(self) -> bool:
        return self.startswith(TAG_MARKER)


class CommentDialect(Enum):
    """Comment openers skipped before a tag marker.

    Tried in definition order. ``trailing`` holds punctuation that may
    repeat after an opener (``/**``, ``///``).
    """

    C = (("//", "/*"), "/*")
    LISP = ((";",), "")
    LATEX = (("%",), "")
    SHELL = (("#",), "")

    def __init__(self, openers: tuple[str, ...], trailing: str) -> None:
        self.openers = openers
        self.trailing = trailing

    def consume(self, cursor: Cursor) -> bool:
        """Eat one opener of this dialect (plus trailing noise)."""
        for opener in self.openers:
            if cursor.startswith(opener):
                cursor.advance(len(opener))
                skip_whitespace(cursor)
                while cursor and cursor.peek() in self.trailing:
                    cursor.advance()
                    skip_whitespace(cursor)
                return True
        return False


def skip_whitespace(cursor: Cursor) -> bool:
    """Advance past whitespace, returning whether anything was skipped."""
    start = cursor.pos
    text = cursor.text
    while cursor.pos < len(text) and text[cursor.pos] in WHITESPACE:
        cursor.pos += 1
    return cursor.pos != start


def skip_comments(cursor: Cursor) -> bool:
    """Skip whitespace and comment openers, stopping at a tag marker."""
    changed = skip_whitespace(cursor)
    if cursor.at_marker():
        return changed

    for dialect in CommentDialect:
        while not cursor.at_marker() and dialect.consume(cursor):
            changed = True

    return changed


def take_token(cursor: Cursor) -> str:
    """Consume the run of non-whitespace at the cursor."""
    start = cursor.pos
    text = cursor.text
    while cursor.pos < len(text) and text[cursor.pos] not in WHITESPACE:
        cursor.pos += 1
    return text[start : cursor.pos]


def parse_tags(remainder: str | Cursor) -> list[str]:
    """Split into whitespace separated tags, dropping repeats.

    Order of first appearance is kept:

    >>> parse_tags("foo bar foo baz bar")
    ['foo', 'bar', 'baz']
    """
    cursor = remainder if isinstance(remainder, Cursor) else Cursor(remainder)
    tags: list[str] = []
    seen: set[str] = set()
    while True:
        skip_whitespace(cursor)
        if not cursor:
            break
        token = take_token(cursor)
        if token not in seen:
            seen.add(token)
            tags.append(token)
    return tags


def parse_line(line: str | Cursor) -> list[str]:
    """Return the tags declared on a line, or [] if it declares none."""
    cursor = line if isinstance(line, Cursor) else Cursor(line)

    # whitespace and comment openers may interleave ("  ;; // #: x")
    while cursor and (skip_whitespace(cursor) or skip_comments(cursor)):
        pass

    if not cursor:
        return []

    # past the noise, anything but a marker means no declaration here
    if not cursor.at_marker():
        return []

    cursor.advance(len(TAG_MARKER))
    return parse_tags(cursor)
