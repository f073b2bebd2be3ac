# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Structured JSON logger for the release tools.

Release commands run inside CI jobs, where log output is collected and grepped
by machines as often as it is read by people. So every log entry is a single
JSON line: timestamped, leveled, tagged with the source module.

How this works:
  - Python's standard `logging` module does the routing, but the default
    formatter is replaced by JsonFormatter, which serializes every record
    into one JSON line.
  - One handler is always attached for stdout, a second one optionally for a file.
  - `get_logger` is the only way to create loggers in this package.

The JSON structure looks like:
  {"ts": "2025-...", "level": "INFO", "module": "sdkrelease.changelog.updater", "msg": "..."}
"""

import json
import logging
import sys
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, Optional, TextIO

# LogRecord attributes that are plumbing, not caller context.
_STANDARD_ATTRS: frozenset[str] = frozenset({
    "name",
    "msg",
    "args",
    "created",
    "relativeCreated",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "pathname",
    "filename",
    "module",
    "levelno",
    "levelname",
    "processName",
    "process",
    "threadName",
    "thread",
    "message",
    "msecs",
    "taskName",
})


class JsonFormatter(logging.Formatter):
    """
    Formats log records as single-line JSON objects.

    Each entry carries four mandatory fields:
      ts     ISO 8601 UTC timestamp
      level  log level name
      module the logger name (usually the Python module path)
      msg    the formatted message string

    Anything passed through the `extra` kwarg gets merged in as additional
    fields, which is how commands attach paths, versions and counts.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "ts": datetime.now(tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "module": record.name,
            "msg": record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key not in _STANDARD_ATTRS and not key.startswith("_"):
                entry[key] = value

        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

# Set while redirect_log_stream is active, so loggers created inside it follow.
_console_override: Optional[TextIO] = None


def _resolve_log_level(level_name: str) -> int:
    """Turn a level name string into the corresponding logging constant."""
    upper = level_name.upper()
    if upper not in _VALID_LOG_LEVELS:
        raise ValueError(
            f"Invalid log level '{level_name}'. Must be one of: {', '.join(sorted(_VALID_LOG_LEVELS))}"
        )
    return getattr(logging, upper)


def get_logger(
    name: str,
    log_level: str = "INFO",
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """
    Create a structured JSON logger.

    Every module calls this once at the top and keeps the returned instance.
    Calling it again for the same name only updates the level.

    Args:
        name: Logger name, typically __name__ of the calling module.
        log_level: One of DEBUG, INFO, WARNING, ERROR, CRITICAL.
        log_file: Optional path to a log file. If provided, logs go to both
                  stdout and the file.

    Returns:
        A configured logging.Logger that outputs structured JSON.
    """
    logger = logging.getLogger(name)
    level = _resolve_log_level(log_level)
    logger.setLevel(level)

    # Avoid stacking handlers when get_logger is called twice for one name.
    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(level)
        return logger

    formatter = JsonFormatter()

    stdout_handler = logging.StreamHandler(stream=_console_override or sys.stdout)
    stdout_handler.setLevel(level)
    stdout_handler.setFormatter(formatter)
    logger.addHandler(stdout_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.propagate = False

    return logger


def set_package_log_level(log_level: str, prefix: str = "sdkrelease") -> None:
    """
    Apply one level to every logger already created under `prefix`.

    Module loggers are created at import time with the default level; the CLI
    calls this once the requested level is known.
    """
    level = _resolve_log_level(log_level)
    for logger in _package_loggers(prefix):
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)


def _package_loggers(prefix: str) -> list[logging.Logger]:
    return [
        logging.getLogger(name)
        for name in list(logging.Logger.manager.loggerDict)
        if name == prefix or name.startswith(f"{prefix}.")
    ]


def attach_package_log_file(log_file: Path, prefix: str = "sdkrelease") -> None:
    """
    Send every logger under `prefix` to `log_file` as well as stdout.

    One shared handler is created; loggers that already write to the same
    file are skipped, so calling this twice does not duplicate lines.
    """
    log_file.parent.mkdir(parents=True, exist_ok=True)
    target = str(log_file.resolve())

    file_handler: Optional[logging.FileHandler] = None
    for logger in _package_loggers(prefix):
        if not logger.handlers:
            continue
        if any(
            isinstance(handler, logging.FileHandler) and handler.baseFilename == target
            for handler in logger.handlers
        ):
            continue
        if file_handler is None:
            file_handler = logging.FileHandler(target, encoding="utf-8")
            file_handler.setLevel(logger.level)
            file_handler.setFormatter(JsonFormatter())
        logger.addHandler(file_handler)


@contextmanager
def redirect_log_stream(stream: TextIO, prefix: str = "sdkrelease") -> Iterator[None]:
    """
    Point the console handlers of every logger under `prefix` at `stream`.

    `bump` uses this to keep stdout for the version alone. File handlers are
    left alone. Loggers created inside the block also write to `stream`.
    The previous streams are restored on exit.
    """
    global _console_override

    swapped: list[tuple[logging.StreamHandler, TextIO]] = []
    for logger in _package_loggers(prefix):
        for handler in logger.handlers:
            if isinstance(handler, logging.FileHandler):
                continue
            if isinstance(handler, logging.StreamHandler):
                # Assigned directly: setStream() flushes the old stream, which may be closed.
                with _handler_lock(handler):
                    swapped.append((handler, handler.stream))
                    handler.stream = stream
    previous_override = _console_override
    _console_override = stream
    try:
        yield
    finally:
        _console_override = previous_override
        for handler, previous in swapped:
            with _handler_lock(handler):
                handler.stream = previous


@contextmanager
def _handler_lock(handler: logging.Handler) -> Iterator[None]:
    handler.acquire()
    try:
        yield
    finally:
        handler.release()
