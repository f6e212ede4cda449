"""
Tests for the logging module.

This test module validates:
- JSON-formatted structured logging output
- Logger configuration and setup
- Log level handling
"""

from __future__ import annotations

import json
import logging
import sys
from io import StringIO

import pytest

from daemon_mcp.config import LoggingConfig
from daemon_mcp.logging import JSONFormatter, get_logger, setup_logging

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def _cleanup_loggers() -> None:
    """Clean up loggers after each test (autouse fixture)."""
    yield
    logger = logging.getLogger("daemon_mcp")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


def _record(msg: str = "Test message", **extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="test_logger",
        level=logging.INFO,
        pathname="test.py",
        lineno=10,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


# =============================================================================
# Tests for JSONFormatter
# =============================================================================


class TestJSONFormatter:
    """Tests for JSONFormatter class."""

    def test_format_basic_log_record(self) -> None:
        parsed = json.loads(JSONFormatter().format(_record()))

        assert parsed["level"] == "INFO"
        assert parsed["logger"] == "test_logger"
        assert parsed["message"] == "Test message"
        assert "timestamp" in parsed

    def test_format_with_extra_fields(self) -> None:
        parsed = json.loads(
            JSONFormatter().format(_record(method="tools/call", request_id=7))
        )

        assert parsed["method"] == "tools/call"
        assert parsed["request_id"] == 7

    def test_none_extras_omitted(self) -> None:
        parsed = json.loads(JSONFormatter().format(_record(request_id=None)))

        assert "request_id" not in parsed

    def test_format_exception(self) -> None:
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = _record()
            record.exc_info = sys.exc_info()

        parsed = json.loads(JSONFormatter().format(record))

        assert "RuntimeError: boom" in parsed["exception"]


# =============================================================================
# Tests for setup_logging / get_logger
# =============================================================================


class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_default_setup(self) -> None:
        logger = setup_logging()

        assert logger.name == "daemon_mcp"
        assert logger.level == logging.INFO
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, JSONFormatter)
        assert logger.propagate is False

    def test_plain_text(self) -> None:
        logger = setup_logging(level="debug", json_format=False)

        assert logger.level == logging.DEBUG
        assert not isinstance(logger.handlers[0].formatter, JSONFormatter)

    def test_no_stdout(self) -> None:
        assert setup_logging(log_to_stdout=False).handlers == []

    def test_from_config(self) -> None:
        logger = setup_logging(LoggingConfig(level="warning", json_format=False))

        assert logger.level == logging.WARNING

    def test_debug_mode_forces_debug(self) -> None:
        logger = setup_logging(LoggingConfig(level="error", debug_mode=True))

        assert logger.level == logging.DEBUG

    def test_repeated_setup_no_duplicate_handlers(self) -> None:
        setup_logging()
        logger = setup_logging()

        assert len(logger.handlers) == 1

    def test_child_logger_output(self) -> None:
        logger = setup_logging()
        stream = StringIO()
        logger.handlers[0].setStream(stream)

        get_logger("daemon_mcp.server").info("Handling request", extra={"method": "tools/list"})

        parsed = json.loads(stream.getvalue())
        assert parsed["logger"] == "daemon_mcp.server"
        assert parsed["method"] == "tools/list"


class TestGetLogger:
    """Tests for get_logger()."""

    def test_prefix_added(self) -> None:
        assert get_logger("custom").name == "daemon_mcp.custom"

    def test_prefix_kept(self) -> None:
        assert get_logger("daemon_mcp.parser").name == "daemon_mcp.parser"
