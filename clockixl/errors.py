"""Error types raised by clockiXL."""
from typing import Optional


class ClockiXLError(Exception):
    """Base class for all errors reported to the user."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ClockiXLError):
    """Required user input is missing or inconsistent."""


class AuthError(ClockiXLError):
    """The Clockify API rejected the API key, or could not be reached to check it."""


class FetchError(ClockiXLError):
    """A Clockify API call failed or answered with a non-success status."""

    def __init__(self, message: str, status: Optional[int] = None, category: Optional[str] = None):
        """Initialize a FetchError.

        Args:
            message: Human readable message
            status: HTTP status code, if a response was received
            category: Failure category ("http", "connection", "timeout", "decode", "request")
        """
        super().__init__(message)
        self.status = status
        self.category = category


class ExportError(ClockiXLError):
    """The result set could not be exported."""

    EMPTY = "empty"
    BACKEND = "backend"
    FORMAT = "format"

    def __init__(self, message: str, reason: str):
        super().__init__(message)
        self.reason = reason
