"""
Logging configuration — diagnostics for a discovery run.

The discovery transcript is written to stdout by the transcript
renderer and never passes through logging. This module configures the
other channel: diagnostics on stderr, optionally mirrored to a file.

Level precedence:
    --debug / --verbose / --quiet  >  SYSDISCOVERY_LOG_LEVEL  >  WARNING

File output via SYSDISCOVERY_LOG_FILE (level: SYSDISCOVERY_LOG_FILE_LEVEL).
"""

from __future__ import annotations

import logging
import os
import sys

ENV_LEVEL = "SYSDISCOVERY_LOG_LEVEL"
ENV_FILE = "SYSDISCOVERY_LOG_FILE"
ENV_FILE_LEVEL = "SYSDISCOVERY_LOG_FILE_LEVEL"

# Console formats, most verbose first: (max level, format, datefmt)
_CONSOLE_FORMATS = [
    (logging.DEBUG, "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s", "%H:%M:%S"),
    (logging.INFO, "%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
]
_CONSOLE_DEFAULT = "sysdiscovery: %(levelname)s: %(message)s"

# The file always gets full detail
_FILE_FORMAT = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"


def resolve_level(debug: bool = False, verbose: bool = False, quiet: bool = False) -> str:
    """Pick the console level from CLI flags, then the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return os.environ.get(ENV_LEVEL, "WARNING")


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Configure the root logger for the whole process.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR).
        log_file: Optional path of a log file.
        log_file_level: Level for the file (default: ``level``).
    """
    console_level = _parse_level(level)
    fmt, datefmt = _CONSOLE_DEFAULT, None
    for threshold, candidate_fmt, candidate_datefmt in _CONSOLE_FORMATS:
        if console_level <= threshold:
            fmt, datefmt = candidate_fmt, candidate_datefmt
            break

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root_level = console_level

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setLevel(file_level)
        handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATEFMT))
        root.addHandler(handler)
        root_level = min(root_level, file_level)

    root.setLevel(root_level)

    # Don't propagate exceptions from logging itself
    logging.raiseExceptions = False


def _parse_level(level: str | None) -> int:
    """Level name to number; anything unrecognised is WARNING."""
    numeric = getattr(logging, (level or "").upper(), None)
    return numeric if isinstance(numeric, int) else logging.WARNING
