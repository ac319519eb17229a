"""Terminal output helpers built on rich.

Text passed to these helpers is escaped, so paths and tags containing
square brackets are printed as-is rather than read as markup.
"""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.markup import escape

_out = Console(highlight=False, soft_wrap=True)
_err = Console(stderr=True, highlight=False, soft_wrap=True)


def print(*objects: Any, **kwargs: Any) -> None:  # noqa: A001
    _out.print(*objects, **kwargs)


def header(text: str) -> None:
    _out.print(f"\n[bold cyan]{escape(text)}[/]")


def info(text: str) -> None:
    _out.print(escape(text))


def dim(text: str) -> None:
    _out.print(f"[dim]{escape(text)}[/]")


def item(text: str, indent: int = 2) -> None:
    _out.print(" " * indent + escape(text))


def key_value(key: str, value: Any) -> None:
    _out.print(f"  [bold]{escape(key)}:[/] {escape(str(value))}")


def success(text: str) -> None:
    _out.print(f"[green]{escape(text)}[/]")


def warning(text: str) -> None:
    _err.print(f"[yellow]warning:[/] {escape(text)}")


def error(text: str) -> None:
    _err.print(f"[bold red]error:[/] {escape(text)}")
