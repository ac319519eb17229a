"""structlog setup for the tagnote CLI.

Log lines go to stderr so they never mix with listings on stdout. The
level is WARNING unless TAGNOTE_DEBUG is set, which is enough to surface
unreadable files and malformed tagfiles.
"""

from __future__ import annotations

import logging
import sys

import structlog

from tagnote.config import debug_enabled


def configure_logging(debug: bool | None = None) -> None:
    """Configure structlog once per process."""
    if debug is None:
        debug = debug_enabled()
    level = logging.DEBUG if debug else logging.WARNING

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
