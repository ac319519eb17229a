"""Tags command - list tags and the files carrying them."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

import tyro

from tagnote import console
from tagnote.cli._common import index_for_cli, report_diagnostics
from tagnote.filters import TagFilter
from tagnote.views import tag_views, to_json, to_tsv


@dataclass
class Tags:
    """List tags and the files carrying them."""

    paths: tyro.conf.Positional[tuple[Path, ...]] = field(
        default=(),
        metadata={"help": "Files or directories (default: current dir)"},
    )
    tags: tuple[str, ...] = field(
        default=(),
        metadata={"help": "Only count files carrying any of these tags"},
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
        """Execute the tags command."""
        ctx = index_for_cli(self.paths, self.tags, self.recursive, self.debug)
        views = tag_views(ctx, TagFilter.of(self.tags), root=Path.cwd())

        if self.output_format == "json":
            print(to_json(views))
            return 0
        if self.output_format == "tsv":
            if views:
                print(to_tsv(views))
            return 0

        if not views:
            console.dim("no tags found")
            report_diagnostics(ctx)
            return 0

        for v in views:
            console.header(f"{v.text} ({len(v.entries)})")
            for path in v.entries:
                console.item(path)
        report_diagnostics(ctx)
        return 0
