"""Walk paths and directories, feeding files and tagfiles to a Context."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import structlog

from tagnote.config import IndexConfig
from tagnote.extractor import read_file_tags, traverse_file
from tagnote.filters import NO_FILTER, TagFilter
from tagnote.manifest import read_tagfile
from tagnote.registry import Context, normalize_path

logger = structlog.get_logger(__name__)


def scan_directory(
    ctx: Context,
    root: str | Path,
    query: TagFilter = NO_FILTER,
    *,
    recursive: bool = False,
    config: IndexConfig | None = None,
) -> list[int]:
    """Index one directory's files and tagfile.

    Each file's head tags and its tagfile tags are staged together, so the
    filter sees the whole entry. Files come in name order, followed by
    tagfile records naming paths that are not files here. With
    ``recursive`` each subdirectory is handled the same way, its own
    tagfile only covering that subdirectory.
    """
    config = config or IndexConfig()
    directory = normalize_path(root)

    try:
        children = sorted(directory.iterdir())
    except OSError as e:
        reason = e.strerror or str(e)
        ctx.report("read", directory, reason)
        logger.warning("skipping directory", path=str(directory), reason=reason)
        return []

    from_tagfile: dict[Path, list[str]] = {}
    for record in read_tagfile(ctx, directory, name=config.manifest_name):
        path = normalize_path(record.path, directory)
        from_tagfile.setdefault(path, []).extend(record.tags)

    found: list[int] = []
    subdirs: list[Path] = []
    for child in children:
        if child.is_dir():
            if (
                recursive
                and not child.is_symlink()
                and child.name not in config.exclude_dirs
            ):
                subdirs.append(child)
        elif child.is_file() and child.name != config.manifest_name:
            tags = read_file_tags(ctx, child, limit=config.read_limit)
            tags += from_tagfile.pop(child, [])
            if tags:
                entry_id = ctx.add(child, tags, query)
                if entry_id is not None:
                    found.append(entry_id)

    for path, tags in from_tagfile.items():
        entry_id = ctx.add(path, tags, query)
        if entry_id is not None:
            found.append(entry_id)

    for subdir in subdirs:
        found.extend(
            scan_directory(
                ctx, subdir, query, recursive=True, config=config
            )
        )

    # the same entry can be reached from an earlier path argument
    return list(dict.fromkeys(found))


def index_paths(
    ctx: Context,
    paths: Iterable[str | Path],
    query: TagFilter = NO_FILTER,
    *,
    recursive: bool = False,
    config: IndexConfig | None = None,
) -> Context:
    """Index a mix of files and directories into ``ctx``.

    Paths that exist but are neither directories nor regular files
    (FIFOs, devices, sockets) are reported and never opened.
    """
    config = config or IndexConfig()
    for raw in paths:
        path = normalize_path(raw)
        if path.is_dir():
            scan_directory(
                ctx, path, query, recursive=recursive, config=config
            )
        elif path.is_file():
            traverse_file(ctx, path, query, limit=config.read_limit)
        elif path.exists():
            ctx.report("read", path, "not a regular file")
            logger.warning("skipping special file", path=str(path))
        else:
            ctx.report("missing", path, "no such file or directory")
            logger.warning("path not found", path=str(path))
    return ctx


def build_index(
    paths: Iterable[str | Path],
    tags: Iterable[str] | None = None,
    *,
    recursive: bool = False,
    config: IndexConfig | None = None,
) -> Context:
    """Fresh Context holding everything found under ``paths``."""
    return index_paths(
        Context(),
        paths,
        TagFilter.of(tags),
        recursive=recursive,
        config=config,
    )
