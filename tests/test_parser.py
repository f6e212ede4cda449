"""
Tests for the daemon document section parser.

This test module validates:
- Section tags become lower-cased keys
- Text vs list classification, including the first-line marker case
- Empty and duplicate sections
- The last_updated timestamp
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

from conftest import FIXED_NOW

from daemon_mcp.parser import (
    ProfileDocument,
    format_timestamp,
    parse_document,
    parse_section_content,
)

# =============================================================================
# Tests for parse_document
# =============================================================================


class TestParseDocument:
    """Tests for parse_document()."""

    def test_sample_document_sections(self, document: ProfileDocument) -> None:
        """Test every non-empty section of the sample is recorded once."""
        assert set(document.sections) == {
            "about",
            "current_location",
            "mission",
            "telos",
            "favorite_books",
            "predictions",
        }

    def test_text_sections_are_trimmed(self, document: ProfileDocument) -> None:
        """Test text sections are stored as trimmed strings."""
        assert document.sections["mission"] == "Build trust."
        assert document.sections["current_location"] == "Berlin, Germany"

    def test_list_section_keeps_order(self, document: ProfileDocument) -> None:
        """Test list items keep source order with markers stripped."""
        assert document.sections["favorite_books"] == [
            "Gödel, Escher, Bach",
            "The Dispossessed",
            "Thinking in Systems",
        ]

    def test_list_section_drops_non_item_lines(self, document: ProfileDocument) -> None:
        """Test lines without a marker are dropped from list sections."""
        assert document.sections["telos"] == [
            "P1: People lack context about each other",
            "P2: Personal tools are fragmented",
        ]

    def test_single_item_on_first_line_is_text(self, document: ProfileDocument) -> None:
        """Test a lone marker on the first content line is not a list."""
        assert document.sections["predictions"] == (
            "- Personal APIs will be common by 2030"
        )

    def test_single_item_after_first_line_is_list(self) -> None:
        """Test a single marker on a later line makes a one-item list."""
        doc = parse_document("\n[PREDICTIONS]\nSoon:\n- Robots\n", now=FIXED_NOW)

        assert doc.sections["predictions"] == ["Robots"]

    def test_first_line_marker_included_when_list(self) -> None:
        """Test the first line is an item once the section is a list."""
        doc = parse_document("\n[TELOS]\n- One\n- Two\n", now=FIXED_NOW)

        assert doc.sections["telos"] == ["One", "Two"]

    def test_empty_section_at_end_is_omitted(self, document: ProfileDocument) -> None:
        """Test a tag followed only by whitespace is not recorded."""
        assert "daily_routine" not in document.sections

    def test_tag_followed_by_tag_is_omitted(self) -> None:
        """Test a tag immediately followed by another tag is not recorded."""
        doc = parse_document("intro\n[ABOUT]\n[MISSION]\nBuild trust.", now=FIXED_NOW)

        assert doc.sections == {"mission": "Build trust."}

    def test_tag_at_end_of_document_is_omitted(self) -> None:
        """Test a tag with no following text is not recorded."""
        doc = parse_document("\n[MISSION]\nBuild trust.\n[ABOUT]", now=FIXED_NOW)

        assert doc.sections == {"mission": "Build trust."}

    def test_tag_on_first_line(self) -> None:
        """Test a tag at the very start of the text is recognized."""
        doc = parse_document("[MISSION]\nBuild trust.", now=FIXED_NOW)

        assert doc.sections == {"mission": "Build trust."}

    def test_duplicate_tag_last_wins(self) -> None:
        """Test a repeated tag overwrites the earlier value."""
        doc = parse_document(
            "\n[MISSION]\nFirst.\n[MISSION]\nSecond.\n", now=FIXED_NOW
        )

        assert doc.sections == {"mission": "Second."}

    def test_duplicate_empty_tag_keeps_earlier_value(self) -> None:
        """Test an empty repeat does not erase the earlier value."""
        doc = parse_document("\n[MISSION]\nFirst.\n[MISSION]\n\n", now=FIXED_NOW)

        assert doc.sections == {"mission": "First."}

    def test_no_tags(self) -> None:
        """Test text without tags yields no sections but is stamped."""
        doc = parse_document("just some notes\nwithout tags\n", now=FIXED_NOW)

        assert doc.sections == {}
        assert doc.last_updated == FIXED_NOW

    def test_empty_text(self) -> None:
        """Test empty input yields no sections."""
        assert parse_document("").sections == {}

    def test_lowercase_tag_not_recognized(self) -> None:
        """Test only uppercase tags start sections."""
        doc = parse_document("\n[mission]\nBuild trust.\n", now=FIXED_NOW)

        assert doc.sections == {}

    def test_inline_tag_not_recognized(self) -> None:
        """Test a tag that is not alone on its line is ordinary text."""
        doc = parse_document(
            "\n[ABOUT]\nSee [MISSION] below\n[MISSION] inline\n", now=FIXED_NOW
        )

        assert doc.sections == {"about": "See [MISSION] below\n[MISSION] inline"}

    def test_timestamp_defaults_to_now(self) -> None:
        """Test the document is stamped with the current UTC time."""
        before = datetime.now(UTC)
        doc = parse_document("\n[MISSION]\nBuild trust.\n")
        after = datetime.now(UTC)

        assert before <= doc.last_updated <= after


# =============================================================================
# Tests for parse_section_content
# =============================================================================


class TestParseSectionContent:
    """Tests for text/list classification of section content."""

    def test_plain_text(self) -> None:
        """Test content without markers stays text."""
        assert parse_section_content("Line one\nLine two") == "Line one\nLine two"

    def test_indented_items(self) -> None:
        """Test indented markers count as items once the section is a list."""
        content = "Notes:\n  -   spaced item\n-tight item"

        assert parse_section_content(content) == ["spaced item", "tight item"]

    def test_dash_inside_line_is_not_marker(self) -> None:
        """Test a dash within a line does not trigger list parsing."""
        assert parse_section_content("Early riser - mostly") == "Early riser - mostly"


# =============================================================================
# Tests for format_timestamp
# =============================================================================


class TestFormatTimestamp:
    """Tests for format_timestamp()."""

    def test_milliseconds_and_z_suffix(self) -> None:
        value = datetime(2026, 1, 2, 3, 4, 5, 123456, tzinfo=UTC)

        assert format_timestamp(value) == "2026-01-02T03:04:05.123Z"

    def test_whole_seconds_padded(self) -> None:
        assert format_timestamp(FIXED_NOW) == "2026-01-02T03:04:05.000Z"

    def test_converted_to_utc(self) -> None:
        value = datetime(2026, 1, 2, 5, 4, 5, tzinfo=timezone(timedelta(hours=2)))

        assert format_timestamp(value) == "2026-01-02T03:04:05.000Z"


# =============================================================================
# Tests for ProfileDocument
# =============================================================================


class TestProfileDocument:
    """Tests for ProfileDocument accessors."""

    def test_to_dict_includes_last_updated(self, document: ProfileDocument) -> None:
        """Test to_dict() adds the ISO timestamp."""
        data = document.to_dict()

        assert data["last_updated"] == "2026-01-02T03:04:05.000Z"
        assert data["mission"] == "Build trust."

    def test_last_updated_overrides_section(self) -> None:
        """Test the parse timestamp wins over a LAST_UPDATED section."""
        doc = parse_document("\n[LAST_UPDATED]\nyesterday\n", now=FIXED_NOW)

        assert doc.sections["last_updated"] == "yesterday"
        assert doc.to_dict()["last_updated"] == "2026-01-02T03:04:05.000Z"

    def test_get_missing_section(self, document: ProfileDocument) -> None:
        """Test get() returns None for absent keys."""
        assert document.get("favorite_movies") is None

    def test_to_dict_is_a_copy(self, document: ProfileDocument) -> None:
        """Test mutating to_dict() output leaves the document untouched."""
        document.to_dict()["mission"] = "changed"

        assert document.sections["mission"] == "Build trust."
