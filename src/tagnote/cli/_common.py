"""Shared helpers for CLI commands."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from tagnote import console
from tagnote.config import IndexConfig
from tagnote.logging_config import configure_logging
from tagnote.registry import Context
from tagnote.scanner import build_index


def resolve_paths(paths: Sequence[Path]) -> list[Path]:
    """Paths to index, defaulting to the working directory."""
    return list(paths) if paths else [Path.cwd()]


def index_for_cli(
    paths: Sequence[Path],
    tags: Sequence[str],
    recursive: bool,
    debug: bool,
) -> Context:
    """Build a Context for a command from its path and tag options."""
    configure_logging(debug=True if debug else None)
    return build_index(
        resolve_paths(paths),
        tags,
        recursive=recursive,
        config=IndexConfig.from_env(),
    )


def report_diagnostics(ctx: Context) -> None:
    if not ctx.diagnostics:
        return
    n = len(ctx.diagnostics)
    noun = "problem" if n == 1 else "problems"
    console.warning(f"{n} {noun} while indexing (see log above)")
