"""
Structured logging for the menu backend.

Loggers accept keyword context next to the message:

    logger.info("Menu item created", item_id=12, store_id=1)

Production emits one JSON object per line; other environments emit a short
colored line. Both carry the request correlation ID when one is set.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from shared.config.settings import settings


def _request_id(record: logging.LogRecord) -> str | None:
    request_id = getattr(record, "request_id", None)
    if request_id and request_id != "-":
        return request_id
    return None


def _context(record: logging.LogRecord) -> dict[str, Any]:
    return getattr(record, "context", None) or {}


class StructuredFormatter(logging.Formatter):
    """JSON lines for log aggregation."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        request_id = _request_id(record)
        if request_id:
            entry["request_id"] = request_id

        context = _context(record)
        if context:
            entry["context"] = context

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class DevelopmentFormatter(logging.Formatter):
    """Human-readable colored lines."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, self.RESET)
        timestamp = datetime.now().strftime("%H:%M:%S")
        request_id = _request_id(record)
        prefix = f"[{request_id[:8]}] " if request_id else ""

        line = (
            f"{color}{timestamp} {record.levelname:7}{self.RESET} "
            f"{prefix}{record.name}: {record.getMessage()}"
        )

        context = _context(record)
        if context:
            line += " (" + ", ".join(f"{k}={v}" for k, v in context.items()) + ")"

        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)

        return line


class StructuredLogger(logging.Logger):
    """Logger whose level methods take keyword context."""

    def _log_with_context(
        self,
        level: int,
        msg: str,
        args: tuple,
        exc_info: Any = None,
        **context: Any,
    ) -> None:
        if not self.isEnabledFor(level):
            return
        self._log(level, msg, args, exc_info=exc_info, extra={"context": context})

    def debug(self, msg: str, *args: Any, **context: Any) -> None:
        self._log_with_context(logging.DEBUG, msg, args, **context)

    def info(self, msg: str, *args: Any, **context: Any) -> None:
        self._log_with_context(logging.INFO, msg, args, **context)

    def warning(self, msg: str, *args: Any, **context: Any) -> None:
        self._log_with_context(logging.WARNING, msg, args, **context)

    def error(self, msg: str, *args: Any, **context: Any) -> None:
        self._log_with_context(logging.ERROR, msg, args, **context)


logging.setLoggerClass(StructuredLogger)


def setup_logging() -> None:
    """Install the single stdout handler on the root logger. Call once at startup."""
    from shared.infrastructure.correlation import CorrelationIdFilter

    log_level = logging.DEBUG if settings.debug else logging.INFO

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.addFilter(CorrelationIdFilter())
    if settings.environment == "production":
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(DevelopmentFormatter())

    root = logging.getLogger()
    root.setLevel(log_level)
    root.handlers.clear()
    root.addHandler(handler)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.sql_echo else logging.WARNING
    )


def get_logger(name: str) -> StructuredLogger:
    """
    Get a structured logger.

    Usage:
        logger = get_logger(__name__)
        logger.warning("Skipping customization group with missing name", key=key)
        logger.error("Unexpected failure", item_id=4, exc_info=True)
    """
    return logging.getLogger(name)  # type: ignore


menu_api_logger = get_logger("menu_api")
auth_logger = get_logger("menu_api.auth")
