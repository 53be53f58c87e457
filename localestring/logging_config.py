"""Logging configuration for localestring.

Provides a JSON formatted logger named ``localestring`` and counters for
locale fallback reads.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

LOG_NAME = "localestring"
LOG_FILE = Path("logs/app.log")
MAX_BYTES = 5 * 1024 * 1024
BACKUP_COUNT = 5
STREAM_HANDLER_NAME = f"{LOG_NAME}.stream"
FILE_HANDLER_NAME = f"{LOG_NAME}.file"

# Attributes present on every LogRecord. Anything else is considered an extra field.
DEFAULT_LOG_RECORD_ATTRS = {
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "taskName",
    "message",
    "asctime",
}


class JsonFormatter(logging.Formatter):
    """Formatter returning log records as JSON strings."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401 - short description
        base: dict[str, Any] = {
            "time": datetime.now(timezone.utc).isoformat(timespec="seconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extras = {
            key: value
            for key, value in record.__dict__.items()
            if key not in DEFAULT_LOG_RECORD_ATTRS
        }
        locale = extras.pop("locale", None)
        if locale is not None:
            base["locale"] = locale
        if extras:
            base["extra"] = extras
        return json.dumps(base, ensure_ascii=False, default=str)


def _has_own_handlers(logger: logging.Logger) -> bool:
    names = {handler.get_name() for handler in logger.handlers}
    return {STREAM_HANDLER_NAME, FILE_HANDLER_NAME} <= names


def get_logger() -> logging.Logger:
    """Return the configured package logger.

    Module loggers (``logging.getLogger(__name__)``) propagate to it.
    """
    logger = logging.getLogger(LOG_NAME)
    if _has_own_handlers(logger):
        return logger

    for handler in logger.handlers[:]:
        if handler.get_name() in (STREAM_HANDLER_NAME, FILE_HANDLER_NAME):
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(logging.DEBUG)

    formatter = JsonFormatter()

    stream_handler = logging.StreamHandler()
    stream_handler.set_name(STREAM_HANDLER_NAME)
    stream_handler.setLevel(logging.DEBUG)
    stream_handler.setFormatter(formatter)

    LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
    file_handler = RotatingFileHandler(
        LOG_FILE,
        maxBytes=MAX_BYTES,
        backupCount=BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.set_name(FILE_HANDLER_NAME)
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(formatter)

    logger.addHandler(stream_handler)
    logger.addHandler(file_handler)
    logger.propagate = False
    return logger


class FieldStats:
    """Counts locale reads answered by the active locale versus the fallback.

    The fallback rate is logged every ``log_every`` reads.
    """

    def __init__(self, log_every: int = 100) -> None:
        if log_every < 1:
            raise ValueError("log_every must be positive")
        self.log_every = log_every
        self._direct = 0
        self._fallback = 0
        self._misses = 0
        self._logger = get_logger()

    def record_direct(self) -> None:
        self._direct += 1
        self._after_read()

    def record_fallback(self) -> None:
        self._fallback += 1
        self._after_read()

    def record_miss(self) -> None:
        self._misses += 1
        self._after_read()

    def _after_read(self) -> None:
        if self.reads % self.log_every == 0:
            self.log_fallback_rate()

    @property
    def reads(self) -> int:
        return self._direct + self._fallback + self._misses

    @property
    def fallback_rate(self) -> float:
        """Return the share of reads served by the fallback locale, as a percentage."""
        total = self.reads
        return (self._fallback / total * 100) if total else 0.0

    def log_fallback_rate(self) -> None:
        self._logger.info(
            "Locale fallback-rate",
            extra={"fallback_rate": round(self.fallback_rate, 2), "reads": self.reads},
        )
