# src/pocket_props/utils_logs.py

"""The package logger.

Everything pocket_props reports goes through one logger with one handler,
so a SensitiveValueGuard can scrub every line by filtering that handler
(see get_handler()). The level lives in current_runtime and is re-read on
every get_logger() call.
"""

import logging
import sys
from collections.abc import Generator
from contextlib import contextmanager
from typing import Any, TextIO, cast

from .meta import PROGRAM_PACKAGE
from .runtime import current_runtime
from .utils import safe_log


# --- ANSI Colors -------------------------------------------------------------


RESET = "\033[0m"
CYAN = "\033[36m"
YELLOW = "\033[93m"
RED = "\033[91m"
GRAY = "\033[90m"


# --- Levels --------------------------------------------------------------------


TRACE_LEVEL = logging.DEBUG - 5
SILENT_LEVEL = logging.CRITICAL + 1
logging.addLevelName(TRACE_LEVEL, "TRACE")

# name → stdlib level number, quietest last
LEVELS: dict[str, int] = {
    "trace": TRACE_LEVEL,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
    "silent": SILENT_LEVEL,  # disables all logging
}
LEVEL_ORDER = list(LEVELS)

# levelname → (color, tag); info is printed bare
TAG_STYLES = {
    "TRACE": (GRAY, "[TRACE]"),
    "DEBUG": (CYAN, "[DEBUG]"),
    "WARNING": ("", "⚠️ "),
    "ERROR": ("", "❌ "),
    "CRITICAL": ("", "💥 "),
}


class LoggerWithTrace(logging.Logger):
    def trace(self, msg: str, *args: Any, **kwargs: Any) -> None:
        if self.isEnabledFor(TRACE_LEVEL):
            self._log(TRACE_LEVEL, msg, args, **kwargs)


# --- Formatting and output -----------------------------------------------------


class TagFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        msg = super().format(record)
        tag_color, tag_text = TAG_STYLES.get(record.levelname, ("", ""))
        if not tag_text:
            return msg
        if tag_color and current_runtime.get("use_color", True):
            tag_text = f"{tag_color}{tag_text}{RESET}"
        return f"{tag_text} {msg}"


class DualStreamHandler(logging.StreamHandler[TextIO]):
    """Send info/debug/trace to stdout, everything else to stderr."""

    def __init__(self) -> None:
        super().__init__(stream=sys.stdout)

    def emit(self, record: logging.LogRecord) -> None:
        # streams are looked up per record so redirection (capsys) is honored
        self.stream = sys.stderr if record.levelno >= logging.WARNING else sys.stdout
        super().emit(record)


# --- Logger initialization ---------------------------------------------------


def _make_logger() -> LoggerWithTrace:
    # Install our class only for this logger, not process-wide.
    previous = logging.getLoggerClass()
    logging.setLoggerClass(LoggerWithTrace)
    try:
        logger = logging.getLogger(PROGRAM_PACKAGE)
    finally:
        logging.setLoggerClass(previous)
    return cast("LoggerWithTrace", logger)


_logger = _make_logger()
_handler = DualStreamHandler()
_handler.setFormatter(TagFormatter("%(message)s"))


def _ensure_logger_initialized() -> None:
    if _handler not in _logger.handlers:
        _logger.addHandler(_handler)
        _logger.propagate = False  # don't double-log through the root logger


def _sync_level() -> None:
    """Apply current_runtime["log_level"] to the logger."""
    _ensure_logger_initialized()
    level_name = current_runtime.get("log_level")
    if level_name is None:  # pyright: ignore[reportUnnecessaryComparison]
        safe_log("[LOGGER ERROR] ❌ Runtime does not specify log_level")
        level_name = "error"
    _logger.setLevel(LEVELS.get(str(level_name).lower(), logging.INFO))


def get_logger() -> LoggerWithTrace:
    """Return the configured pocket_props logger."""
    _sync_level()
    return _logger


def get_handler() -> logging.Handler:
    """Return the handler every package log record goes through."""
    _ensure_logger_initialized()
    return _handler


def get_log_level() -> str:
    """Return the current log level, or 'error' if undefined or invalid."""
    level = cast("str | None", current_runtime.get("log_level"))  # type: ignore[redundant-cast]
    if level is None:
        safe_log("[LOGGER ERROR] ❌ Runtime does not specify log_level")
        return "error"
    if level not in LEVELS:
        safe_log(f"[LOGGER ERROR] ❌ Unknown log level: {level!r}")
        return "error"
    return level


def set_log_level(level: str) -> None:
    current_runtime["log_level"] = level
    _sync_level()


@contextmanager
def temporary_log_level(level: str) -> Generator[None, None, None]:
    prev = current_runtime["log_level"]
    set_log_level(level)
    try:
        yield
    finally:
        set_log_level(prev)


def log(level: str, message: str, *args: object) -> None:
    """Log a message at a dynamic level name (e.g. 'info', 'error', 'trace')."""
    logger = get_logger()
    if level.lower() not in LEVELS or level.lower() == "silent":
        logger.error("Unknown log level: %r", level)
        return
    getattr(logger, level.lower())(message, *args)


def colorize(text: str, color: str, *, use_color: bool | None = None) -> str:
    if use_color is None:
        use_color = current_runtime["use_color"]
    return f"{color}{text}{RESET}" if use_color else text
