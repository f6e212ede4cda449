"""
Pytest configuration and shared fixtures for the Daemon MCP Server tests.
"""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from daemon_mcp.errors import UnavailableError
from daemon_mcp.parser import ProfileDocument, parse_document

# Configure pytest-asyncio mode
pytest_plugins = ["pytest_asyncio"]

FIXED_NOW = datetime(2026, 1, 2, 3, 4, 5, tzinfo=UTC)

SAMPLE_DOCUMENT = """\
# Daemon

This preamble is not part of any section.

[ABOUT]
I build tools that help people think clearly.

[CURRENT_LOCATION]
Berlin, Germany

[MISSION]
Build trust.

[TELOS]
Problems:
- P1: People lack context about each other
- P2: Personal tools are fragmented

[FAVORITE_BOOKS]
- Gödel, Escher, Bach
- The Dispossessed
- Thinking in Systems

[PREDICTIONS]
- Personal APIs will be common by 2030

[DAILY_ROUTINE]
"""


class StaticSource:
    """Document source returning fixed text and counting fetches."""

    def __init__(self, text: str = SAMPLE_DOCUMENT) -> None:
        self.text = text
        self.fetch_count = 0

    async def fetch(self) -> str:
        self.fetch_count += 1
        return self.text


class FailingSource:
    """Document source that always fails like an unreachable upstream."""

    def __init__(self) -> None:
        self.fetch_count = 0

    async def fetch(self) -> str:
        self.fetch_count += 1
        raise UnavailableError(
            message="Failed to fetch daemon data",
            details={"url": "https://daemon.example.com/daemon.md"},
        )


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests (deselect with '-m \"not integration\"')",
    )


@pytest.fixture
def sample_text() -> str:
    """Raw sample daemon document."""
    return SAMPLE_DOCUMENT


@pytest.fixture
def document() -> ProfileDocument:
    """Sample daemon document parsed at a fixed time."""
    return parse_document(SAMPLE_DOCUMENT, now=FIXED_NOW)


@pytest.fixture
def source() -> StaticSource:
    """Document source serving the sample document."""
    return StaticSource()


@pytest.fixture
def failing_source() -> FailingSource:
    """Document source that cannot reach the upstream."""
    return FailingSource()
