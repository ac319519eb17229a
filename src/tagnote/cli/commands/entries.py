"""Entries command - list tagged files and their tags."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

import tyro
from rich.markup import escape

from tagnote import console
from tagnote.cli._common import index_for_cli, report_diagnostics
from tagnote.filters import TagFilter
from tagnote.views import entry_views, to_json, to_tsv


@dataclass
class Entries:
    """List tagged files and their tags."""

    paths: tyro.conf.Positional[tuple[Path, ...]] = field(
        default=(),
        metadata={"help": "Files or directories (default: current dir)"},
    )
    tags: tuple[str, ...] = field(
        default=(),
        metadata={"help": "Only show files carrying any of these tags"},
    )
    recursive: bool = field(
        default=False,
        metadata={"help": "Descend into subdirectories"},
    )
    output_format: Literal["none", "json", "tsv"] = field(
        default="none",
        metadata={"help": "Output format (none=rich, json, tsv)"},
    )
    debug: bool = field(
        default=False,
        metadata={"help": "Enable debug logging"},
    )

    def run(self) -> int:
        """Execute the entries command."""
        ctx = index_for_cli(self.paths, self.tags, self.recursive, self.debug)
        views = entry_views(ctx, TagFilter.of(self.tags), root=Path.cwd())

        if self.output_format == "json":
            print(to_json(views))
            return 0
        if self.output_format == "tsv":
            if views:
                print(to_tsv(views))
            return 0

        if not views:
            console.dim("no tagged files found")
            report_diagnostics(ctx)
            return 0

        n_tags = len({t for v in views for t in v.tags})
        width = max(len(v.path) for v in views)
        for v in views:
            path = escape(v.path.ljust(width))
            tags = escape(" ".join(v.tags))
            console.print(f"{path}  [cyan]{tags}[/]")
        console.dim(f"\n{len(views)} files, {n_tags} tags")
        report_diagnostics(ctx)
        return 0
