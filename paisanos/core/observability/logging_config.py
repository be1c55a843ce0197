"""
Logging configuration — central setup for the CLI.

Called once at startup by main.py.  Every module that does
``logger = logging.getLogger(__name__)`` inherits this config.

Levels are resolved in precedence order:
    CLI flag  >  PAISANOS_LOG_LEVEL env var  >  WARNING (default)

Console records go to stderr.  While ``setup`` runs, stdout carries a
spinner line redrawn in place; on a terminal the console handler
erases that line before writing so a record never lands in the middle
of it.  The spinner reappears on the next tick.

Optional file output via PAISANOS_LOG_FILE / PAISANOS_LOG_FILE_LEVEL.
"""

from __future__ import annotations

import logging
import sys

_CLEAR_LINE = "\r\x1b[K"

# Default: the message alone, like any other CLI line.
_FMT_PLAIN = "%(message)s"

# -v / --debug: steps run on worker threads named step-N, so show them.
_FMT_DETAIL = "%(asctime)s %(levelname)-5s [%(threadName)s] %(name)s: %(message)s"
_DATEFMT_CONSOLE = "%H:%M:%S"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"


class ProgressAwareHandler(logging.StreamHandler):
    """StreamHandler that clears the live progress line before each record."""

    def emit(self, record: logging.LogRecord) -> None:
        isatty = getattr(self.stream, "isatty", None)
        if isatty is not None and isatty():
            self.stream.write(_CLEAR_LINE)
        super().emit(record)


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Configure Python logging for the entire process.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR).
        log_file: Optional path to a log file (always detailed format).
        log_file_level: Level for the file. Defaults to ``level``.
    """
    console_level = _parse_level(level)

    console = ProgressAwareHandler(sys.stderr)
    console.setLevel(console_level)
    if console_level <= logging.INFO:
        console.setFormatter(logging.Formatter(_FMT_DETAIL, datefmt=_DATEFMT_CONSOLE))
    else:
        console.setFormatter(logging.Formatter(_FMT_PLAIN))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)

    root_level = console_level
    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        root_level = min(root_level, file_level)

        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_DETAIL, datefmt=_DATEFMT_FILE))
        root.addHandler(fh)

    root.setLevel(root_level)


def resolve_level(
    *,
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    env_level: str | None = None,
) -> str:
    """Pick the console level from CLI flags, then the env var."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return env_level or "WARNING"


def _parse_level(level: str | None) -> int:
    """Level name to number; unknown or empty names mean WARNING."""
    if not level:
        return logging.WARNING
    return logging.getLevelNamesMapping().get(level.upper(), logging.WARNING)
