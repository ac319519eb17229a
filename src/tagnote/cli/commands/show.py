"""Show command - tags found for a single file."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import tyro

from tagnote import console
from tagnote.config import IndexConfig
from tagnote.extractor import traverse_file
from tagnote.logging_config import configure_logging
from tagnote.manifest import load_tagfile
from tagnote.registry import Context, normalize_path


@dataclass
class Show:
    """Show the tags of one file, from its head and its tagfile."""

    file: tyro.conf.Positional[Path] = field(
        metadata={"help": "File to inspect"},
    )
    debug: bool = field(
        default=False,
        metadata={"help": "Enable debug logging"},
    )

    def run(self) -> int:
        """Execute the show command."""
        configure_logging(debug=True if self.debug else None)

        path = normalize_path(self.file)
        if not path.exists():
            console.error(f"file not found: {self.file}")
            return 1

        config = IndexConfig.from_env()
        ctx = Context()

        entry_id = None
        if path.is_file():
            entry_id = traverse_file(ctx, path, limit=config.read_limit)
        from_head = ctx.tag_texts(entry_id) if entry_id is not None else []

        load_tagfile(ctx, path.parent, name=config.manifest_name)
        entry = ctx.find_entry(path)
        all_tags = ctx.tag_texts(entry.id) if entry else []
        from_tagfile = [t for t in all_tags if t not in from_head]

        console.header(str(self.file))
        if not all_tags:
            console.dim("  no tags")
        else:
            console.key_value("tags", " ".join(all_tags))
            if from_head:
                console.key_value("from file", " ".join(from_head))
            if from_tagfile:
                console.key_value(
                    f"from {config.manifest_name}", " ".join(from_tagfile)
                )

        for diagnostic in ctx.diagnostics:
            console.warning(str(diagnostic))
        return 0
