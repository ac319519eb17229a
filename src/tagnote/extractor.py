"""Per-file tag extraction.

Only the head of a file is read, and only its first two lines are looked
at: the second line is a fallback for files whose first line is taken
(shebangs, ``-*- coding -*-`` headers, a leading title comment).
"""

from __future__ import annotations

from pathlib import Path

import structlog

from tagnote.config import DEFAULT_READ_LIMIT
from tagnote.errors import FileReadError
from tagnote.filters import NO_FILTER, TagFilter
from tagnote.lexer import parse_line
from tagnote.registry import Context, normalize_path
from tagnote.sources import ReadHead, read_head

logger = structlog.get_logger(__name__)


def extract_tags(text: str) -> list[str]:
    """Tags declared on the first line, else on the second line."""
    end_of_line = text.find("\n")
    if end_of_line == -1:
        return parse_line(text)

    tags = parse_line(text[:end_of_line])
    if tags:
        return tags

    end_of_line2 = text.find("\n", end_of_line + 1)
    if end_of_line2 == -1:
        end_of_line2 = len(text)
    return parse_line(text[end_of_line + 1 : end_of_line2])


def read_file_tags(
    ctx: Context,
    path: Path,
    *,
    limit: int = DEFAULT_READ_LIMIT,
    reader: ReadHead = read_head,
) -> list[str]:
    """Tags declared in the head of ``path``; read failures go to ``ctx``."""
    try:
        head = reader(path, limit)
    except FileReadError as e:
        ctx.report("read", path, e.reason)
        logger.warning("skipping file", path=str(path), reason=e.reason)
        return []
    return extract_tags(head.decode("utf-8", errors="ignore"))


def traverse_file(
    ctx: Context,
    path: str | Path,
    query: TagFilter = NO_FILTER,
    *,
    limit: int = DEFAULT_READ_LIMIT,
    reader: ReadHead = read_head,
) -> int | None:
    """Register ``path`` in ``ctx`` if it declares tags and passes ``query``.

    Returns the entry id, or None when the file was skipped (unreadable,
    untagged, or filtered out).
    """
    filepath = normalize_path(path)
    tags = read_file_tags(ctx, filepath, limit=limit, reader=reader)
    if not tags:
        return None

    entry_id = ctx.add(filepath, tags, query)
    if entry_id is not None:
        logger.debug("registered file", path=str(filepath), tags=tags)
    return entry_id
