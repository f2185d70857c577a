"""Logging setup for the fetchzip command line.

`fetchzip fetch` prints the new identifier on stdout so scripts can capture
it, so log records always go to stderr. The fetch, extract and find
operations never install handlers; they log one summary line through an
injected logger or their module logger, and the CLI calls
`configure_logging` once before dispatching a command.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

LOG_LEVEL_ENV = "FETCHZIP_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

_LEVEL_NAMES = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET")


def resolve_level(level: str | int | None) -> int:
    """Turn a level name or number into a logging level; unknown names mean INFO."""
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "INFO")
    if isinstance(level, int):
        return level
    name = level.strip().upper()
    return getattr(logging, name) if name in _LEVEL_NAMES else logging.INFO


def configure_logging(level: str | int | None = None, *, force: bool = False) -> None:
    """Send fetchzip's log records to stderr.

    The level is the explicit `level` argument, else `FETCHZIP_LOG_LEVEL`,
    else INFO.
    """
    logging.basicConfig(
        level=resolve_level(level),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=force,
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger under the ``fetchzip`` namespace without configuring it."""
    return logging.getLogger(name or "fetchzip")


__all__ = ["configure_logging", "get_logger", "resolve_level"]
