"""Centralized logging for fskit.

Four verbosity levels:
- QUIET (0): Warnings + errors
- NORMAL (1): Info + warnings + errors
- VERBOSE (2): Skipped files, per-directory detail
- DEBUG (3): Everything including per-file copies

Usage:
    from fskit.core.logging import get_logger, set_verbosity

    logger = get_logger(__name__)
    set_verbosity(2)  # VERBOSE

    logger.verbose("Skipped existing file X")
    logger.info("Copied directory")
"""

from __future__ import annotations

import contextlib
import sys
import traceback
from collections.abc import Callable
from enum import IntEnum

from fskit.core.config import LoggingPolicy


class VerbosityLevel(IntEnum):
    """Verbosity levels for fskit."""

    QUIET = 0  # Warnings + errors
    NORMAL = 1  # Info + warnings + errors
    VERBOSE = 2  # Detailed info
    DEBUG = 3  # Everything


_VERBOSITY: VerbosityLevel = VerbosityLevel.NORMAL

_USE_COLORS: bool = True

_LOG_SINK: Callable[[str], None] | None = None

_LEVELS_BY_NAME = {
    "quiet": VerbosityLevel.QUIET,
    "normal": VerbosityLevel.NORMAL,
    "verbose": VerbosityLevel.VERBOSE,
    "debug": VerbosityLevel.DEBUG,
}


def set_verbosity(level: int | VerbosityLevel) -> None:
    """Set global verbosity level.

    Args:
        level: Verbosity level (0-3 or VerbosityLevel enum)
    """
    global _VERBOSITY

    if isinstance(level, int):
        level = VerbosityLevel(level)

    _VERBOSITY = level


def get_verbosity() -> VerbosityLevel:
    """Get current verbosity level."""
    return _VERBOSITY


def apply_logging_policy(policy: LoggingPolicy) -> None:
    """Apply a resolved LoggingPolicy to the global verbosity."""
    set_verbosity(_LEVELS_BY_NAME[policy.level_name])


def set_colors(enabled: bool) -> None:
    """Enable or disable colored output."""
    global _USE_COLORS
    _USE_COLORS = enabled


def set_log_sink(sink: Callable[[str], None] | None) -> None:
    """Set a global log sink callback.

    The sink receives every emitted line without colors. Passing None
    removes the current sink.
    """
    global _LOG_SINK
    _LOG_SINK = sink


def _feed_sink(plain: str) -> None:
    sink = _LOG_SINK
    if sink is None:
        return
    try:
        sink(plain)
    except Exception:
        # Never call the logger from here (recursion).
        msg = "Log sink raised; suppressed.\n" + traceback.format_exc()
        with contextlib.suppress(Exception):
            sys.stderr.write(msg)


class FsKitLogger:
    """Logger with verbosity support."""

    # ANSI color codes
    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "VERBOSE": "\033[34m",  # Blue
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "RESET": "\033[0m",
    }

    def __init__(self, name: str):
        self.name = name

    def _should_log(self, level: VerbosityLevel) -> bool:
        return level <= _VERBOSITY

    def _format_message(self, level: str, message: str) -> str:
        if _USE_COLORS and sys.stdout.isatty():
            color = self.COLORS.get(level, "")
            reset = self.COLORS["RESET"]
            return f"{color}[{level.lower()}]{reset} {message}"
        return f"[{level.lower()}] {message}"

    def _log(self, level: VerbosityLevel, level_name: str, message: str) -> None:
        if not self._should_log(level):
            return

        formatted = self._format_message(level_name, message)

        plain = f"[{level_name.lower()}] {message}"
        _feed_sink(plain)

        print(formatted, file=sys.stderr if level_name == "ERROR" else sys.stdout)

    def debug(self, message: str) -> None:
        """Log debug message (verbosity >= DEBUG)."""
        self._log(VerbosityLevel.DEBUG, "DEBUG", message)

    def verbose(self, message: str) -> None:
        """Log verbose message (verbosity >= VERBOSE)."""
        self._log(VerbosityLevel.VERBOSE, "VERBOSE", message)

    def info(self, message: str) -> None:
        """Log info message (verbosity >= NORMAL)."""
        self._log(VerbosityLevel.NORMAL, "INFO", message)

    def warning(self, message: str) -> None:
        """Log warning message (verbosity >= QUIET)."""
        self._log(VerbosityLevel.QUIET, "WARNING", message)

    def error(self, message: str) -> None:
        """Log error message (always shown)."""
        formatted = self._format_message("ERROR", message)

        plain = f"[error] {message}"
        _feed_sink(plain)

        print(formatted, file=sys.stderr)


_LOGGERS: dict[str, FsKitLogger] = {}


def get_logger(name: str = __name__) -> FsKitLogger:
    """Get logger instance for module.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Logger instance
    """
    if name not in _LOGGERS:
        _LOGGERS[name] = FsKitLogger(name)

    return _LOGGERS[name]
