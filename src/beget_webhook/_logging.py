"""Logging utilities for beget_webhook."""

import logging
import sys
import time
from datetime import UTC, datetime, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

# NullHandler on root logger (library best practice)
_root = logging.getLogger("beget_webhook")
_root.addHandler(logging.NullHandler())

RESET = "\033[0m"
RED = "\033[31m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
CYAN = "\033[36m"

# Attributes present on every LogRecord; anything else came in via extra=
_STANDARD_ATTRS = frozenset(
    {
        "args",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "message",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
    }
)

_LEVEL_TAGS = {
    logging.DEBUG: ("DBG", CYAN),
    logging.INFO: ("INF", GREEN),
    logging.WARNING: ("WRN", YELLOW),
    logging.ERROR: ("ERR", RED),
    logging.CRITICAL: ("FTL", RED),
}


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the beget_webhook namespace.

    Args:
        name: The module name (typically __name__).

    Returns:
        A logger instance for the module.
    """
    return logging.getLogger(name)


def resolve_timezone(name: str | None) -> tzinfo:
    """Resolve a TZ name for log timestamps, falling back to UTC.

    Args:
        name: IANA zone name such as "Europe/Moscow", or None.

    Returns:
        The zone, or UTC when the name is empty or unknown.
    """
    if not name:
        return UTC
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return UTC


class KeyValueFormatter(logging.Formatter):
    """Single-line formatter: ``<timestamp> <LVL> <message> key=value ...``.

    Extra fields passed by the caller are appended in insertion order.
    With ``color=True`` the level tag and the keys get ANSI colors.

    Args:
        tz: Zone used for the timestamp.
        color: Whether to emit ANSI color codes.
    """

    def __init__(self, tz: tzinfo = UTC, color: bool = False) -> None:
        super().__init__()
        self.tz = tz
        self.color = color

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        return datetime.fromtimestamp(record.created, tz=self.tz).isoformat(timespec="seconds")

    def format(self, record: logging.LogRecord) -> str:
        tag, tag_color = _LEVEL_TAGS.get(record.levelno, (record.levelname[:3], RESET))
        if self.color:
            tag = f"{tag_color}{tag}{RESET}"

        parts = [self.formatTime(record), tag, record.getMessage()]
        for key, value in record.__dict__.items():
            if key in _STANDARD_ATTRS or key.startswith("_"):
                continue
            key_text = f"{CYAN}{key}={RESET}" if self.color else f"{key}="
            parts.append(f"{key_text}{value}")

        line = " ".join(parts)
        if record.exc_info and record.exc_info[0] is not None:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def configure_logging(
    level: str = "INFO",
    tz_name: str | None = None,
    color: bool = False,
    stream=None,
) -> logging.Logger:
    """Configure the ``beget_webhook`` logger hierarchy for the server process.

    Replaces any previously installed handlers so repeated calls are safe.

    Args:
        level: Level name, e.g. "INFO" or "DEBUG".
        tz_name: Zone for timestamps (the TZ environment variable).
        color: Whether to colorize the level tag and keys.
        stream: Output stream (default: stdout).

    Returns:
        The root ``beget_webhook`` logger.
    """
    root = logging.getLogger("beget_webhook")
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()
    root.propagate = False

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(KeyValueFormatter(tz=resolve_timezone(tz_name), color=color))
    root.addHandler(handler)

    # httpx logs request URLs at INFO, and ours carry credentials
    for lib in ("werkzeug", "httpx", "httpcore"):
        logging.getLogger(lib).setLevel(logging.WARNING)

    return root


class Timer:
    """Context manager for timing operations.

    Usage:
        with Timer() as t:
            # do work
        print(f"Elapsed: {t.elapsed_ms}ms")
    """

    def __init__(self) -> None:
        self.elapsed_ms: float = 0
        self._start: float = 0

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, *args: object) -> None:
        self.elapsed_ms = (time.perf_counter() - self._start) * 1000
