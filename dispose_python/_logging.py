"""
Structured JSON logging.

Every record is written as a single JSON line with ``ts``, ``level``,
``module`` and ``msg`` keys. Values passed through ``extra=`` are merged into
the object, which is how the runtime attaches instance names, tiers and
handle addresses to its cleanup messages.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

_STANDARD_ATTRS = frozenset(
    {
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
    }
)

_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class JsonFormatter(logging.Formatter):
    """Formats log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict = {
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


def resolve_log_level(level_name: str) -> int:
    """Turn a level name into the corresponding logging constant."""
    upper = level_name.upper()
    if upper not in _VALID_LOG_LEVELS:
        raise ValueError(
            f"Invalid log level '{level_name}'. "
            f"Must be one of: {', '.join(sorted(_VALID_LOG_LEVELS))}"
        )
    return getattr(logging, upper)


def _has_file_handler(logger: logging.Logger, log_file: Path) -> bool:
    target = os.path.abspath(str(log_file))
    return any(
        isinstance(handler, logging.FileHandler) and handler.baseFilename == target
        for handler in logger.handlers
    )


def get_logger(
    name: str,
    log_level: str = "WARNING",
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """
    Create a structured JSON logger.

    Args:
        name: Logger name, usually ``__name__`` of the calling module.
        log_level: One of DEBUG, INFO, WARNING, ERROR, CRITICAL.
        log_file: Optional file that receives the same records as stderr.

    Returns:
        The configured logger. Calling again with the same name updates
        the level and adds a file handler for a new ``log_file``, it never
        stacks a second handler for the same destination.
    """
    logger = logging.getLogger(name)
    level = resolve_log_level(log_level)
    logger.setLevel(level)

    for handler in logger.handlers:
        handler.setLevel(level)

    formatter = JsonFormatter()

    if not logger.handlers:
        stream_handler = logging.StreamHandler(stream=sys.stderr)
        stream_handler.setLevel(level)
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)

    if log_file is not None and not _has_file_handler(logger, log_file):
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.propagate = False

    return logger


def configure_logging(log_level: str, log_file: Optional[Path] = None) -> logging.Logger:
    """Apply a level (and optional file) to the package's root logger."""
    return get_logger("dispose_python", log_level=log_level, log_file=log_file)
