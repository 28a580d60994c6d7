"""Structured logging configuration for the LinkedEvents client.

- JSON structured logging with StructuredFormatter
- Logger hierarchy under the linked_events namespace
- Environment variable control (LINKED_EVENTS_LOG_LEVEL, LINKED_EVENTS_LOG_FORMAT)
- log_exception(): best-effort failure records that never raise
"""

import json
import logging
import os
import traceback
from datetime import datetime, timezone
from typing import Any, Optional

__all__ = [
    "HANDLER_NAME",
    "LOGGER_NAME",
    "SENSITIVE_KEYS",
    "StructuredFormatter",
    "TextFormatter",
    "configure_logging",
    "log_exception",
]

LOGGER_NAME = "linked_events"
HANDLER_NAME = "linked_events.stream"

# Keys redacted from structured log output
SENSITIVE_KEYS = {
    "password", "token", "secret", "apikey", "api_key",
    "authorization", "credential", "auth", "key", "bearer",
}

_STANDARD_FIELDS = {
    "name",
    "msg",
    "args",
    "created",
    "filename",
    "funcName",
    "levelname",
    "levelno",
    "lineno",
    "module",
    "msecs",
    "message",
    "pathname",
    "process",
    "processName",
    "relativeCreated",
    "thread",
    "threadName",
    "exc_info",
    "exc_text",
    "stack_info",
    "taskName",
}


class StructuredFormatter(logging.Formatter):
    """JSON structured log formatter.

    Outputs one JSON object per record with:
    - timestamp: UTC ISO 8601 format with 'Z' suffix
    - level: Log level name (INFO, ERROR, etc.)
    - logger: Logger name (linked_events hierarchy)
    - message: Log message
    - context: Extras dict merged from LogRecord attributes

    Sensitive keys (password, token, api_key, etc.) are redacted.
    Values that are not JSON serializable are rendered with str().
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extras = {
            k: ("[REDACTED]" if k.lower() in SENSITIVE_KEYS else v)
            for k, v in record.__dict__.items()
            if k not in _STANDARD_FIELDS and not k.startswith("_")
        }

        if extras:
            log_data["context"] = extras

        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable text formatter for development.

    Used when LINKED_EVENTS_LOG_FORMAT=text.
    """

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )


def configure_logging(
    level: Optional[str] = None,
    log_format: Optional[str] = None,
) -> None:
    """Configure logging for all linked_events loggers.

    Args:
        level: Optional log level override. If not provided, uses
               LINKED_EVENTS_LOG_LEVEL (default: INFO).
        log_format: Optional format override (json, text). If not provided,
                    uses LINKED_EVENTS_LOG_FORMAT (default: json).

    Environment Variables:
        LINKED_EVENTS_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR). Default: INFO
        LINKED_EVENTS_LOG_FORMAT: Output format (json, text). Default: json
    """
    if level is None:
        level = os.getenv("LINKED_EVENTS_LOG_LEVEL", "INFO")

    log_level = getattr(logging, level.upper(), logging.INFO)

    if log_format is None:
        log_format = os.getenv("LINKED_EVENTS_LOG_FORMAT", "json")
    log_format = log_format.lower()

    if log_format == "text":
        formatter = TextFormatter()
    else:
        formatter = StructuredFormatter()

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(log_level)

    # Only add our handler once; handlers installed by others are left alone
    handler = next((h for h in logger.handlers if h.get_name() == HANDLER_NAME), None)
    if handler is None:
        handler = logging.StreamHandler()
        handler.set_name(HANDLER_NAME)
        logger.addHandler(handler)
    handler.setFormatter(formatter)

    logger.propagate = False


def _exception_location(exc: BaseException) -> str:
    frames = traceback.extract_tb(exc.__traceback__)
    if not frames:
        return "unknown"
    last = frames[-1]
    return f"{last.filename}:{last.lineno}"


def log_exception(
    logger: logging.Logger,
    event: str,
    exc: BaseException,
    **context: Any,
) -> None:
    """Write a structured failure record for an exception.

    The record carries ``error`` (message), ``code`` (HTTP status or 0) and
    ``location`` (file:line where the exception was raised), plus any extra
    context. Logging failures are swallowed: if the structured record cannot
    be built or emitted, a plain-text line is logged instead.

    Args:
        logger: Logger to write to
        event: Snake_case event name used as the log message
        exc: Exception being recorded
        **context: Additional structured fields (e.g. url, pages)
    """
    try:
        record = {
            "error": str(exc),
            "error_type": type(exc).__name__,
            "code": int(getattr(exc, "code", 0) or 0),
            "location": _exception_location(exc),
        }
        record.update(context)
        json.dumps(record)
        logger.error(event, extra=record)
    except Exception:
        try:
            logger.error("Tried to log %s as a structured record, but it failed.", event)
        except Exception:
            pass
