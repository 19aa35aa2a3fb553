"""Logging setup shared by the smoother CLI and the web app.

Verbosity is split in two: our own loggers (filtering, imaging, cli, web)
and the libraries we run on. By default the libraries only report
warnings, which hides werkzeug's per-request lines under `serve`.

    flags     our loggers   PIL / werkzeug
    -qq       ERROR         ERROR
    -q        WARNING       WARNING
    (none)    INFO          WARNING
    -v        DEBUG         INFO      per-step timings, request lines
    -vv       DEBUG         DEBUG
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass

LOG_LEVEL_CHOICES = ("debug", "info", "warning", "error")

LIBRARY_LOGGERS = ("PIL", "werkzeug")


@dataclass(frozen=True)
class LogLevels:
    app: int
    libraries: int


def add_logging_args(parser) -> None:
    """Add --log-level, -v and -q to an argparse parser."""
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVEL_CHOICES,
        help="Use one level for every logger, overriding -v/-q",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="-v: per-step timings and HTTP request lines; -vv: Pillow/werkzeug debug output too",
    )
    parser.add_argument(
        "-q", "--quiet",
        action="count",
        default=0,
        help="-q: warnings only (skipped files); -qq: errors only",
    )


def resolve_log_levels(
    log_level: str | None = None,
    verbose: int = 0,
    quiet: int = 0,
) -> LogLevels:
    """Work out the levels for our loggers and for library loggers."""
    if log_level:
        level = getattr(logging, log_level.upper())
        return LogLevels(app=level, libraries=level)

    offset = verbose - quiet
    if offset >= 2:
        return LogLevels(app=logging.DEBUG, libraries=logging.DEBUG)
    if offset == 1:
        return LogLevels(app=logging.DEBUG, libraries=logging.INFO)
    if offset == 0:
        return LogLevels(app=logging.INFO, libraries=logging.WARNING)
    if offset == -1:
        return LogLevels(app=logging.WARNING, libraries=logging.WARNING)
    return LogLevels(app=logging.ERROR, libraries=logging.ERROR)


def configure_logging(
    log_level: str | None = None,
    verbose: int = 0,
    quiet: int = 0,
) -> LogLevels:
    """Apply the resolved levels to the root logger and the library loggers.

    Root logging is set up on first use; later calls (tests, the web app
    started from the CLI) only adjust levels.
    """
    levels = resolve_log_levels(log_level=log_level, verbose=verbose, quiet=quiet)
    for name in LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(levels.libraries)

    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
            datefmt="%H:%M:%S",
            stream=sys.stdout,
        )
    root.setLevel(levels.app)
    for handler in root.handlers:
        handler.setLevel(min(levels.app, levels.libraries))
    return levels
