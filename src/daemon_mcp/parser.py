"""
Section parser for the daemon profile document.

The upstream document is plain text split into named sections. Each section
starts with a line holding only an uppercase bracketed tag, for example::

    [MISSION]
    Build trust.

    [FAVORITE_BOOKS]
    Favorite books:
    - Gödel, Escher, Bach
    - The Dispossessed

Sections whose content has a "-" item on any line after the first are parsed
as lists of item texts; everything else is stored as trimmed text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from daemon_mcp.logging import get_logger

logger = get_logger(__name__)

# A tag alone on its line. The trailing newline is left in place so adjacent
# tags both match.
SECTION_TAG_PATTERN = re.compile(r"(?:\A|\n)\[([A-Z_]+)\](?=\n|\Z)")

LIST_ITEM_PREFIX = re.compile(r"^-\s*")

LAST_UPDATED_KEY = "last_updated"

SectionValue = str | list[str]


def format_timestamp(value: datetime) -> str:
    """Format a UTC datetime as ISO-8601 with milliseconds and a "Z" suffix."""
    text = value.astimezone(UTC).isoformat(timespec="milliseconds")
    return text.replace("+00:00", "Z")


@dataclass
class ProfileDocument:
    """
    Parsed form of the daemon document.

    Attributes:
        sections: Section values keyed by lower-cased tag name.
        last_updated: When the document was parsed (UTC).
    """

    sections: dict[str, SectionValue] = field(default_factory=dict)
    last_updated: datetime = field(default_factory=lambda: datetime.now(UTC))

    def get(self, key: str) -> Any:
        """Look up a section (or "last_updated") by key, None if absent."""
        return self.to_dict().get(key)

    def to_dict(self) -> dict[str, Any]:
        """
        Return the document as a plain mapping.

        The parse timestamp is included under "last_updated" and takes
        precedence over a section of the same name.
        """
        data: dict[str, Any] = dict(self.sections)
        data[LAST_UPDATED_KEY] = format_timestamp(self.last_updated)
        return data


def parse_section_content(content: str) -> SectionValue:
    """
    Turn trimmed section content into a text or list value.

    The content is a list only when some line after the first starts with
    "-"; a marker on the first line alone leaves the content as text.
    """
    if "\n-" not in content:
        return content

    items: list[str] = []
    for line in content.split("\n"):
        stripped = line.strip()
        if stripped.startswith("-"):
            items.append(LIST_ITEM_PREFIX.sub("", stripped).strip())
    return items


def parse_document(text: str, now: datetime | None = None) -> ProfileDocument:
    """
    Parse raw daemon document text into a ProfileDocument.

    Text before the first tag is ignored. Sections with empty content are
    dropped, and a repeated tag overwrites the earlier value.

    Args:
        text: Raw document text.
        now: Timestamp to stamp the document with (defaults to current UTC time).

    Returns:
        ProfileDocument with the parsed sections.

    Example:
        >>> doc = parse_document("# Daemon\\n[MISSION]\\nBuild trust.\\n")
        >>> doc.sections
        {'mission': 'Build trust.'}
    """
    parts = SECTION_TAG_PATTERN.split(text)
    sections: dict[str, SectionValue] = {}

    # parts = [preamble, tag1, content1, tag2, content2, ...]
    for i in range(1, len(parts), 2):
        key = parts[i].lower()
        content = parts[i + 1].strip() if i + 1 < len(parts) else ""
        if not content:
            continue
        sections[key] = parse_section_content(content)

    logger.debug(
        "Parsed daemon document",
        extra={"section_count": len(sections), "sections": sorted(sections)},
    )

    return ProfileDocument(
        sections=sections,
        last_updated=now if now is not None else datetime.now(UTC),
    )
