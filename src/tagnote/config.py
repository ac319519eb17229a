"""Configuration constants and environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

import structlog

logger = structlog.get_logger(__name__)

# Environment variable names
ENV_DEBUG = "TAGNOTE_DEBUG"
ENV_READ_LIMIT = "TAGNOTE_READ_LIMIT"
ENV_MANIFEST_NAME = "TAGNOTE_MANIFEST_NAME"

# tags live on the first two lines, so a small head of the file is enough
DEFAULT_READ_LIMIT = 512
DEFAULT_MANIFEST_NAME = ".tag"

DEFAULT_EXCLUDE_DIRS = frozenset(
    {
        ".git",
        ".hg",
        ".svn",
        "node_modules",
        "__pycache__",
        ".venv",
        "venv",
        ".mypy_cache",
        ".pytest_cache",
    }
)


def debug_enabled() -> bool:
    return os.environ.get(ENV_DEBUG, "").lower() in ("1", "true", "yes")


@dataclass(frozen=True)
class IndexConfig:
    """Knobs for a single indexing run."""

    read_limit: int = DEFAULT_READ_LIMIT
    manifest_name: str = DEFAULT_MANIFEST_NAME
    exclude_dirs: frozenset[str] = field(
        default_factory=lambda: DEFAULT_EXCLUDE_DIRS
    )

    @classmethod
    def from_env(cls) -> IndexConfig:
        """Load config from environment variables."""
        read_limit = DEFAULT_READ_LIMIT
        raw = os.environ.get(ENV_READ_LIMIT)
        if raw:
            try:
                read_limit = int(raw)
            except ValueError:
                read_limit = 0
            if read_limit <= 0:
                logger.warning(
                    "ignoring invalid read limit",
                    env=ENV_READ_LIMIT,
                    value=raw,
                    default=DEFAULT_READ_LIMIT,
                )
                read_limit = DEFAULT_READ_LIMIT

        manifest_name = (
            os.environ.get(ENV_MANIFEST_NAME, "").strip()
            or DEFAULT_MANIFEST_NAME
        )

        return cls(read_limit=read_limit, manifest_name=manifest_name)
