"""
Structured logging for the Daemon MCP Server.

Log records are emitted as JSON objects by default so request handling can be
followed in aggregated logs. Plain text output is available for local runs.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from daemon_mcp.config import LoggingConfig

ROOT_LOGGER_NAME = "daemon_mcp"

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Attributes every LogRecord carries; anything else came in through `extra`
_RESERVED_RECORD_KEYS = frozenset(
    {
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
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "exc_info",
        "exc_text",
        "thread",
        "threadName",
        "taskName",
        "message",
    }
)


class JSONFormatter(logging.Formatter):
    """
    A logging formatter that outputs log records as JSON objects.

    Each record becomes a JSON object with:
    - timestamp: ISO 8601 formatted timestamp in UTC
    - level: Log level name
    - logger: Logger name
    - message: Log message
    - exception: Formatted traceback, when present
    - any fields passed through the record's `extra` dict
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as a JSON string."""
        log_entry: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        for key in set(record.__dict__) - _RESERVED_RECORD_KEYS:
            value = getattr(record, key, None)
            if value is not None:
                log_entry[key] = value

        return json.dumps(log_entry, default=str)


def setup_logging(
    config: LoggingConfig | None = None,
    *,
    level: str = "INFO",
    json_format: bool = True,
    log_to_stdout: bool = True,
) -> logging.Logger:
    """
    Configure the daemon_mcp logger.

    Args:
        config: Optional LoggingConfig. When given it overrides the keyword
            arguments.
        level: Log level used when no config is provided.
        json_format: Whether to use JSON formatting.
        log_to_stdout: Whether to attach a stdout handler.

    Returns:
        The configured package logger.

    Example:
        >>> logger = setup_logging(level="DEBUG", json_format=False)
        >>> logger.info("Server started", extra={"port": 8000})
    """
    if config is not None:
        log_level = "DEBUG" if config.debug_mode else config.level.upper()
        json_format = config.json_format
        log_to_stdout = config.log_to_stdout
    else:
        log_level = level.upper()

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, log_level, logging.INFO))

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    if log_to_stdout:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(getattr(logging, log_level, logging.INFO))
        if json_format:
            handler.setFormatter(JSONFormatter())
        else:
            handler.setFormatter(logging.Formatter(DEFAULT_LOG_FORMAT))
        logger.addHandler(handler)

    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a child logger of the daemon_mcp logger.

    Args:
        name: Logger name, typically __name__. The "daemon_mcp." prefix is
            added when missing.
    """
    if not name.startswith(ROOT_LOGGER_NAME):
        name = f"{ROOT_LOGGER_NAME}.{name}"

    return logging.getLogger(name)
