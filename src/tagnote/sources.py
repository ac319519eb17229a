"""Filesystem access used by the extractor and the tagfile loader.

Both operations are passed into the parsing functions as plain callables,
so tests (or other front-ends) can feed bytes from anywhere.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from tagnote.errors import FileReadError

ReadHead = Callable[[Path, int], bytes]
ReadText = Callable[[Path], str | None]


def read_head(path: Path, limit: int) -> bytes:
    """Read at most ``limit`` bytes from the start of ``path``.

    Raises FileReadError if the file can't be opened or the read comes up
    short of what the file size promised.
    """
    try:
        with path.open("rb") as f:
            size = path.stat().st_size
            expected = min(size, limit)
            data = f.read(expected)
    except OSError as e:
        raise FileReadError(path, e.strerror or str(e)) from e

    if len(data) != expected:
        raise FileReadError(
            path, f"expected {expected} bytes, got {len(data)}"
        )
    return data


def read_manifest(path: Path) -> str | None:
    """Whole text of a tagfile, or None when there is none."""
    if not path.is_file():
        return None
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except FileNotFoundError:
        return None
    except OSError as e:
        raise FileReadError(path, e.strerror or str(e)) from e
