"""Tests for display formatting helpers."""

from datetime import datetime, timedelta, timezone

import pytest

from frontend.utils import (
    format_date,
    format_meeting_time,
    format_relative_time,
    format_value,
    get_record_subtitle,
    get_record_title,
    get_task_subtitle,
    truncate_text,
)

NOW = datetime(2026, 1, 22, 12, 0, tzinfo=timezone.utc)


class TestTruncateText:
    """Test truncate_text."""

    def test_short_text_unchanged(self):
        assert truncate_text("Hello", 8) == "Hello"

    def test_long_text_gets_ellipsis(self):
        assert truncate_text("Hello world", 8) == "Hello..."

    def test_none_is_empty(self):
        assert truncate_text(None, 8) == ""


class TestDates:
    """Test date formatting."""

    def test_format_date(self):
        assert format_date("2026-01-22T09:30:00.000Z") == "2026-01-22"

    def test_format_date_empty(self):
        assert format_date(None) == "-"

    def test_unparseable_date_passes_through(self):
        assert format_date("soon") == "soon"

    def test_meeting_same_day(self):
        """Same-day meetings show only the end time."""
        assert (
            format_meeting_time("2026-01-22T09:00:00Z", "2026-01-22T10:00:00Z")
            == "2026-01-22 09:00 - 10:00"
        )

    def test_meeting_across_days(self):
        """Multi-day meetings show the full end."""
        assert (
            format_meeting_time("2026-01-22T22:00:00Z", "2026-01-23T01:00:00Z")
            == "2026-01-22 22:00 - 2026-01-23 01:00"
        )

    @pytest.mark.parametrize(
        "delta,expected",
        [
            (timedelta(seconds=10), "just now"),
            (timedelta(minutes=5), "5m ago"),
            (timedelta(hours=3), "3h ago"),
            (timedelta(days=2), "2d ago"),
            (timedelta(days=30), "2025-12-23"),
        ],
    )
    def test_relative_time(self, delta, expected):
        assert format_relative_time(NOW - delta, now=NOW) == expected

    def test_relative_time_missing(self):
        assert format_relative_time(None) == "-"


class TestTaskSubtitle:
    """Test get_task_subtitle."""

    def test_completed(self):
        assert get_task_subtitle(True, "2026-01-22") == "Completed"

    def test_due(self):
        assert get_task_subtitle(False, "2026-01-22T00:00:00Z") == "Due: 2026-01-22"

    def test_no_deadline(self):
        assert get_task_subtitle(False, None) == "No deadline"


class TestFormatValue:
    """Test attribute value rendering."""

    def test_scalars(self):
        assert format_value(None) == "-"
        assert format_value(True) == "Yes"
        assert format_value(3) == "3"

    def test_list_of_values(self):
        assert format_value([{"value": "a"}, {"value": "b"}]) == "a, b"

    def test_email_and_domain(self):
        assert format_value({"email_address": "ada@example.com"}) == "ada@example.com"
        assert format_value({"domain": "example.com"}) == "example.com"

    def test_currency(self):
        assert format_value({"currency_value": 1500, "currency_code": "USD"}) == "USD 1,500"

    def test_select_and_status(self):
        assert format_value({"option": {"title": "Hot"}}) == "Hot"
        assert format_value({"status": {"title": "Won"}}) == "Won"

    def test_record_reference(self):
        assert format_value({"target_object": "people", "target_record_id": "r1"}) == "people/r1"


class TestRecordTitle:
    """Test record title and subtitle extraction."""

    def test_name_value(self):
        values = {"name": [{"value": "Acme"}]}
        assert get_record_title(values) == "Acme"

    def test_person_name(self):
        values = {"name": [{"first_name": "Ada", "last_name": "Lovelace", "full_name": "Ada Lovelace"}]}
        assert get_record_title(values) == "Ada Lovelace"

    def test_unnamed_fallback(self):
        assert get_record_title({}) == "Unnamed"

    def test_subtitle_from_email(self):
        values = {"email_addresses": [{"email_address": "ada@example.com"}]}
        assert get_record_subtitle(values) == "ada@example.com"

    def test_subtitle_fallback(self):
        assert get_record_subtitle({}) == ""
