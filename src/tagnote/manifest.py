"""Directory tagfiles.

A directory may hold a ``.tag`` file declaring tags for files without
touching them, one record per line:

    notes.md   #: draft important
    old.md     #: archived

Paths are relative to the tagfile's directory and cannot contain
whitespace. A line without the tag marker after its path stops the whole
tagfile; earlier lines still count.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from tagnote.config import DEFAULT_MANIFEST_NAME
from tagnote.errors import FileReadError, ManifestError
from tagnote.filters import NO_FILTER, TagFilter
from tagnote.lexer import (
    TAG_MARKER,
    Cursor,
    parse_tags,
    skip_whitespace,
    take_token,
)
from tagnote.registry import Context, normalize_path
from tagnote.sources import ReadText, read_manifest

logger = structlog.get_logger(__name__)


@dataclass
class ManifestRecord:
    """One ``<path> #: <tags...>`` line."""

    path: str
    tags: list[str] = field(default_factory=list)
    line: int = 0


def parse_manifest(text: str) -> Iterator[ManifestRecord]:
    """Yield records in order; raise ManifestError at the first bad line."""
    lineno = 0
    for raw in text.split("\n"):
        lineno += 1
        line = Cursor(raw)
        skip_whitespace(line)
        if not line:
            continue

        # TODO: support quoted paths so filenames may contain spaces
        path = take_token(line)

        skip_whitespace(line)
        if not line.at_marker():
            raise ManifestError(path, lineno, TAG_MARKER)
        line.advance(len(TAG_MARKER))

        yield ManifestRecord(path=path, tags=parse_tags(line), line=lineno)


def read_tagfile(
    ctx: Context,
    dirpath: str | Path,
    *,
    name: str = DEFAULT_MANIFEST_NAME,
    reader: ReadText = read_manifest,
) -> list[ManifestRecord]:
    """Records of ``dirpath``'s tagfile, up to the first malformed line.

    Read and parse failures are reported to ``ctx``; a missing tagfile
    yields no records.
    """
    directory = normalize_path(dirpath)
    manifest = directory / name

    try:
        text = reader(manifest)
    except FileReadError as e:
        ctx.report("read", manifest, e.reason)
        logger.warning("skipping tagfile", path=str(manifest), reason=e.reason)
        return []

    if text is None:
        logger.debug("no tagfile", directory=str(directory))
        return []

    records: list[ManifestRecord] = []
    try:
        for record in parse_manifest(text):
            records.append(record)
    except ManifestError as e:
        error = e.with_manifest(manifest)
        ctx.report("manifest", manifest, str(error))
        logger.error(
            "malformed tagfile",
            path=str(manifest),
            line=error.line,
            filepath=error.path,
            expected=error.expected,
        )

    logger.debug("read tagfile", path=str(manifest), records=len(records))
    return records


def load_tagfile(
    ctx: Context,
    dirpath: str | Path,
    query: TagFilter = NO_FILTER,
    *,
    name: str = DEFAULT_MANIFEST_NAME,
    reader: ReadText = read_manifest,
) -> list[int]:
    """Register every record of ``dirpath``'s tagfile.

    Returns the ids of the entries committed from it. A missing tagfile
    contributes nothing.
    """
    directory = normalize_path(dirpath)
    committed: list[int] = []
    for record in read_tagfile(ctx, directory, name=name, reader=reader):
        entry_id = ctx.add(record.path, record.tags, query, base=directory)
        if entry_id is not None:
            committed.append(entry_id)
    return committed
