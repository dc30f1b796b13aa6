"""Tests for offset cursors."""

import pytest

from backend.pagination import next_offset_cursor, parse_cursor_offset


class TestParseCursorOffset:
    @pytest.mark.parametrize(
        "cursor,expected",
        [(None, None), ("", None), ("0", 0), ("25", 25), ("-1", None), ("abc", None), ("2.5", None)],
    )
    def test_parse(self, cursor, expected):
        assert parse_cursor_offset(cursor) == expected


class TestNextOffsetCursor:
    def test_full_first_page(self):
        assert next_offset_cursor(None, 25, 25) == "25"

    def test_full_later_page(self):
        assert next_offset_cursor("25", 25, 25) == "50"

    def test_short_page_ends_collection(self):
        assert next_offset_cursor("25", 10, 25) is None

    def test_garbage_cursor_counts_from_zero(self):
        assert next_offset_cursor("oops", 25, 25) == "25"
