"""Error types and user-facing error messages for Attio API failures."""

from __future__ import annotations

STATUS_DESCRIPTIONS = {
    400: "Bad Request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    429: "Rate Limited",
    500: "Server Error",
    502: "Bad Gateway",
    503: "Service Unavailable",
    504: "Gateway Timeout",
}


class AttioApiError(Exception):
    """Raised when the Attio API returns an error or cannot be reached."""

    def __init__(
        self,
        message: str,
        status: int | None = None,
        code: str | None = None,
        is_network_error: bool = False,
    ):
        super().__init__(message)
        self.message = message
        self.status = status
        self.code = code
        self.is_network_error = is_network_error

    @property
    def is_rate_limited(self) -> bool:
        return self.status == 429


def format_status_description(status: int) -> str:
    """Human-readable description for an HTTP status code."""
    return STATUS_DESCRIPTIONS.get(status, f"HTTP {status}")


def _root_cause(error: BaseException) -> BaseException:
    """Follow __cause__ to the deepest error, guarding against cycles."""
    seen: set[int] = set()
    current = error
    while current.__cause__ is not None and id(current) not in seen:
        seen.add(id(current))
        current = current.__cause__
    return current


def extract_error_message(error: BaseException | object) -> str:
    """Extract a message suitable for the status bar from any error.

    API errors get their status prefixed ("Not Found: ...") unless the
    message already mentions it. Network failures are labelled as such.
    Wrapped errors are unwrapped when the wrapper carries no detail.
    """
    if not isinstance(error, BaseException):
        return str(error) or "Unknown error"

    message = str(error)
    if not message and error.__cause__ is not None:
        return extract_error_message(_root_cause(error))

    if isinstance(error, AttioApiError):
        if error.status is not None and str(error.status) not in error.message:
            return f"{format_status_description(error.status)}: {error.message}"
        if error.is_network_error:
            return f"Network error: {error.message}"

    return message or "Unknown error"
