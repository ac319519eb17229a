"""Exceptions raised while indexing tags."""

from __future__ import annotations

from pathlib import Path


class TagnoteError(Exception):
    """Base class for tagnote errors."""


class FileReadError(TagnoteError):
    """A file could not be opened or was cut short while reading.

    Soft failure: the file is skipped and indexing carries on.
    """

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"could not read {path}: {reason}")


class ManifestError(TagnoteError):
    """A tagfile line is missing its tag marker.

    Aborts the rest of that one tagfile; records parsed before the bad
    line stay registered.
    """

    def __init__(
        self,
        path: str,
        line: int,
        expected: str,
        manifest: Path | None = None,
    ) -> None:
        self.path = path
        self.line = line
        self.expected = expected
        self.manifest = manifest
        super().__init__(self._describe())

    def _describe(self) -> str:
        if self.manifest is not None:
            where = f"{self.manifest}:{self.line}"
        else:
            where = f"line {self.line}"
        return (
            f"expected tag marker {self.expected!r} after filepath "
            f"{self.path!r} ({where})"
        )

    def with_manifest(self, manifest: Path) -> ManifestError:
        """Copy of this error pointing at the tagfile it came from."""
        return ManifestError(self.path, self.line, self.expected, manifest)


class RegistryError(TagnoteError):
    """The tag/entry registry broke one of its invariants."""
