"""Tests for user-facing error messages."""

import pytest

from backend.errors import AttioApiError, extract_error_message, format_status_description


class TestFormatStatusDescription:
    @pytest.mark.parametrize(
        "status,expected",
        [(401, "Unauthorized"), (404, "Not Found"), (429, "Rate Limited"), (418, "HTTP 418")],
    )
    def test_descriptions(self, status, expected):
        assert format_status_description(status) == expected


class TestExtractErrorMessage:
    """Test extract_error_message."""

    def test_plain_exception(self):
        assert extract_error_message(RuntimeError("Boom")) == "Boom"

    def test_api_error_gets_status_prefix(self):
        error = AttioApiError("Record not found", status=404)
        assert extract_error_message(error) == "Not Found: Record not found"

    def test_status_already_in_message(self):
        """No prefix when the message already names the status."""
        error = AttioApiError("Request failed with status 500", status=500)
        assert extract_error_message(error) == "Request failed with status 500"

    def test_network_error(self):
        error = AttioApiError("Connection refused", is_network_error=True)
        assert extract_error_message(error) == "Network error: Connection refused"

    def test_empty_wrapper_unwraps_cause(self):
        """A wrapper without a message reports its root cause."""
        try:
            try:
                raise AttioApiError("slow down", status=429)
            except AttioApiError as inner:
                raise RuntimeError() from inner
        except RuntimeError as outer:
            assert extract_error_message(outer) == "Rate Limited: slow down"

    def test_non_exception_values(self):
        assert extract_error_message("plain text") == "plain text"
        assert extract_error_message("") == "Unknown error"

    def test_empty_exception(self):
        assert extract_error_message(ValueError()) == "Unknown error"

    def test_rate_limited_flag(self):
        assert AttioApiError("x", status=429).is_rate_limited is True
        assert AttioApiError("x", status=500).is_rate_limited is False
