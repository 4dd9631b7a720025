"""Logging configuration using Loguru.

This module provides:
- Structured JSON logging for production
- Human-readable colorized output for development
- Request-scoped context (request id, user id) via a ContextVar
- Interception of standard library logging (httpx, uvicorn)
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from typing import TYPE_CHECKING

import orjson
from loguru import logger


if TYPE_CHECKING:
    from typing import Any


_log_context: ContextVar[dict[str, Any]] = ContextVar("log_context", default={})

# Libraries whose INFO chatter drowns out upstream call logging
_NOISY_LOGGERS = (
    "uvicorn",
    "uvicorn.access",
    "uvicorn.error",
    "httpx",
    "httpcore",
    "asyncio",
)


class InterceptHandler(logging.Handler):
    """Forward standard library log records to Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        """Emit a log record by forwarding to Loguru."""
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def _serialize_record(record: dict[str, Any]) -> dict[str, Any]:
    """Flatten a Loguru record and the bound context into one JSON object."""
    payload: dict[str, Any] = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "message": record["message"],
        "logger": record["extra"].get("name", record["name"]),
        "function": record["function"],
        "line": record["line"],
    }
    payload.update(_log_context.get())
    payload.update(
        {key: value for key, value in record["extra"].items() if key != "name"}
    )

    exception = record["exception"]
    if exception:
        payload["exception"] = {
            "type": exception.type.__name__ if exception.type else None,
            "value": str(exception.value) if exception.value else None,
        }
    return payload


def _format_json(record: dict[str, Any]) -> str:
    # Stash the rendered line in extra so Loguru does not re-parse braces
    record["extra"]["_json"] = orjson.dumps(
        _serialize_record(record), default=str
    ).decode()
    return "{extra[_json]}\n{exception}"


def _format_text(record: dict[str, Any]) -> str:
    context = {**_log_context.get()}
    context.update(
        {
            key: value
            for key, value in record["extra"].items()
            if key not in {"name", "_json"}
        }
    )
    record["extra"]["_context"] = (
        " | " + " ".join(f"{k}={v}" for k, v in context.items()) if context else ""
    )
    return (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{extra[name]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan>"
        "{extra[_context]} - <level>{message}</level>\n{exception}"
    )


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "json",
    *,
    is_development: bool = False,
) -> None:
    """Configure Loguru sinks and route stdlib logging through them.

    Args:
        log_level: Minimum level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: "json" or "text".
        is_development: Force the human-readable format.
    """
    logger.remove()
    logger.configure(extra={"name": "catalog_service"})

    if log_format == "json" and not is_development:
        logger.add(
            sys.stdout,
            format=_format_json,
            level=log_level.upper(),
            colorize=False,
            backtrace=True,
            diagnose=False,
        )
    else:
        logger.add(
            sys.stdout,
            format=_format_text,
            level=log_level.upper(),
            colorize=True,
            backtrace=True,
            diagnose=True,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> Any:
    """Get a Loguru logger bound to a module name.

    Args:
        name: Logger name, usually ``__name__``.

    Returns:
        A bound Loguru logger. Keyword arguments passed to its log methods
        end up in the record's structured context.
    """
    return logger.bind(name=name)


def bind_context(**kwargs: Any) -> None:
    """Attach key/values to every log line emitted in the current context.

    Example:
        bind_context(request_id="abc-123", user_id="42")
    """
    current = _log_context.get().copy()
    current.update(kwargs)
    _log_context.set(current)


def clear_context() -> None:
    """Drop all request-scoped logging context."""
    _log_context.set({})


def get_context() -> dict[str, Any]:
    """Return a copy of the current logging context."""
    return _log_context.get().copy()


__all__ = [
    "bind_context",
    "clear_context",
    "get_context",
    "get_logger",
    "logger",
    "setup_logging",
]
