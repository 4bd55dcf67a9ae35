"""Errors raised by the transactions API client.

Every failed request surfaces as exactly one of three errors:

- ``ServerError``: the server answered with a non-2xx status
- ``NoResponse``: the request never got an answer (connection, timeout)
- ``SetupError``: the request could not be built in the first place
"""

from __future__ import annotations

from typing import Optional

SERVER_ERROR_FALLBACK = "Server error"
NO_RESPONSE_MESSAGE = "Error: No response from server. Check that the API is running."


class ApiError(Exception):
    """Base class for transactions API failures."""


class ServerError(ApiError):
    """The server responded with an error status."""

    def __init__(self, status: int, message: Optional[str] = None) -> None:
        super().__init__(f"{status} - {message or SERVER_ERROR_FALLBACK}")
        self.status = status
        self.message = message


class NoResponse(ApiError):
    """The request was sent but no response arrived."""


class SetupError(ApiError):
    """The request could not be prepared."""


def describe_error(error: ApiError) -> str:
    """Build the user-facing message for an API error."""
    if isinstance(error, ServerError):
        return f"Error: {error.status} - {error.message or SERVER_ERROR_FALLBACK}"
    if isinstance(error, NoResponse):
        return NO_RESPONSE_MESSAGE
    if isinstance(error, SetupError):
        return f"Error: Request setup failed - {error}"
    raise TypeError(f"Unhandled API error: {error!r}")
