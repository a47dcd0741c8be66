"""Logging configuration for the git clone step.

All modules obtain their logger through :func:`get_logger`. Records emitted through the standard ``logging``
module (GitPython logs that way) are intercepted and routed to ``loguru`` so the step writes a single,
consistently formatted stream to ``stderr``.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from typing import TYPE_CHECKING, Any

from loguru import logger

if TYPE_CHECKING:
    from loguru import Logger, Record

_TEXT_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{extra[name]}</cyan> - {message}"


class InterceptHandler(logging.Handler):
    """Forward standard ``logging`` records to ``loguru``."""

    def emit(self, record: logging.LogRecord) -> None:
        """Emit ``record`` through ``loguru``, keeping its level and caller depth."""
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.bind(name=record.name).opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def json_sink(message: Any) -> None:  # noqa: ANN401
    """Write a loguru message to ``stderr`` as a single JSON line."""
    record: Record = message.record
    payload = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "logger": record["extra"].get("name", record["name"]),
        "message": record["message"],
    }
    extra = record["extra"].get("extra")
    if extra:
        payload["extra"] = extra
    if record["exception"] is not None:
        payload["exception"] = str(record["exception"].value)
    sys.stderr.write(json.dumps(payload, default=str) + "\n")


def format_extra_fields(record: Record) -> str:
    """Render the ``extra={...}`` keyword passed to a log call as ``key=value`` pairs."""
    extra = record["extra"].get("extra")
    if not extra:
        return ""
    return " | " + " ".join(f"{key}={value!r}" for key, value in extra.items())


def _text_formatter(record: Record) -> str:
    record["extra"].setdefault("name", record["name"])
    record["extra"]["_fields"] = format_extra_fields(record)
    return _TEXT_FORMAT + "{extra[_fields]}\n{exception}"


def configure_logging() -> None:
    """Configure loguru from the ``LOG_LEVEL`` and ``LOG_FORMAT`` environment variables."""
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    log_format = os.getenv("LOG_FORMAT", "text").lower()

    logger.remove()
    if log_format == "json":
        logger.add(json_sink, level=level)
    else:
        logger.add(sys.stderr, level=level, format=_text_formatter, colorize=None)

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)


def get_logger(name: str | None = None) -> Logger:
    """Return a loguru logger bound to ``name``.

    Parameters
    ----------
    name : str | None
        Name of the module requesting the logger, usually ``__name__``.

    Returns
    -------
    Logger
        The bound logger.

    """
    if name:
        return logger.bind(name=name)
    return logger


configure_logging()
