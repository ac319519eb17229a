"""tagnote CLI - list files by the tags they declare.

Uses tyro for type-driven CLI generation from dataclasses.
"""

from __future__ import annotations

from typing import Annotated

import tyro

from tagnote.cli.commands.entries import Entries
from tagnote.cli.commands.show import Show
from tagnote.cli.commands.tags import Tags

_Entries = Annotated[Entries, tyro.conf.subcommand("entries")]
_Ls = Annotated[Entries, tyro.conf.subcommand("ls")]  # alias
_Tags = Annotated[Tags, tyro.conf.subcommand("tags")]
_Show = Annotated[Show, tyro.conf.subcommand("show")]

Command = _Entries | _Ls | _Tags | _Show


def main() -> int:
    """Entry point for the CLI."""
    # configure structlog (respects TAGNOTE_DEBUG env var)
    from tagnote.logging_config import configure_logging

    configure_logging()

    try:
        cmd = tyro.cli(
            Command,
            prog="tagnote",
            description="Find files by the tags on their first lines.",
        )
        return cmd.run()
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 1
    except KeyboardInterrupt:
        return 130
    except Exception as e:
        from tagnote import console

        console.error(str(e))
        return 1
