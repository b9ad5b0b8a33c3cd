"""Logging setup for the openpronounce CLI.

Text lines by default, or one JSON object per record with ``structured=True``,
written to stdout or to a file.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

# Attributes every LogRecord has; anything else on a record came from extra=.
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}

_NOISY_LOGGERS = ("httpx", "httpcore", "asyncio")

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class StructuredJSONFormatter(logging.Formatter):
    """Formats a record as ``{"level", "message", "timestamp", "context"}``.

    ``context`` holds the logger name and call site, exception details when
    the record carries one, and every field passed through ``extra=`` or a
    LoggerAdapter (for example ``project`` or an HTTP ``request_id``).
    """

    def format(self, record: logging.LogRecord) -> str:
        context: dict[str, Any] = {
            "logger_name": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info and record.exc_info[1] is not None:
            exc = record.exc_info[1]
            context["error_type"] = type(exc).__name__
            context["error_message"] = str(exc)
            context["stack_trace"] = self.formatException(record.exc_info)

        context.update(
            (k, v) for k, v in vars(record).items() if k not in _RECORD_ATTRS and k[0] != "_"
        )

        created = datetime.fromtimestamp(record.created, tz=UTC)
        return json.dumps(
            {
                "level": record.levelname,
                "message": record.getMessage(),
                "timestamp": created.isoformat(),
                "context": context,
            },
            default=str,
        )


def configure_logging(
    level: str = "INFO",
    format_string: str | None = None,
    filename: str | None = None,
    structured: bool = False,
) -> None:
    """Install a single root handler, replacing any earlier configuration.

    Args:
        level: Level name, any case
        format_string: Text format (ignored when structured)
        filename: Log file; stdout when None
        structured: Emit JSON lines instead of text

    Example:
        >>> configure_logging(level="DEBUG", structured=True, filename="openpronounce.jsonl")
    """
    handler = logging.FileHandler(filename) if filename else logging.StreamHandler(sys.stdout)
    if structured:
        handler.setFormatter(StructuredJSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))

    logging.basicConfig(level=level.upper(), handlers=[handler], force=True)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.ERROR)


def get_logger(name: str, **context: Any) -> logging.Logger | logging.LoggerAdapter:
    """``logging.getLogger(name)``, wrapped in a LoggerAdapter when context is given.

    Example:
        >>> log = get_logger(__name__, project="Apple")
        >>> log.warning("description.txt unreadable")
    """
    logger = logging.getLogger(name)
    return logging.LoggerAdapter(logger, context) if context else logger
