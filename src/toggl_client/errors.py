"""Exceptions raised by the Toggl API client."""

from typing import Any


class TogglError(Exception):
    """Base class for all Toggl client errors."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class TransportError(TogglError):
    """Request could not be sent or its response body could not be read."""


class EmptyResponseError(TogglError):
    """Server answered with a zero-length body."""


class DecodeError(TogglError, ValueError):
    """Response body (or a single field) could not be decoded.

    Subclasses ValueError so that a failure raised from inside a pydantic
    validator is reported as a validation error for the offending field.
    """

    def __init__(self, message: str, path: str | None = None, body: str | None = None) -> None:
        super().__init__(message, path)
        self.body = body


class HTTPStatusError(TogglError):
    """Response status code outside of [200, 400)."""

    def __init__(
        self,
        message: str,
        status_code: int,
        path: str | None = None,
        reason: str = "",
        body: str | None = None,
    ) -> None:
        super().__init__(message, path)
        self.status_code = status_code
        self.reason = reason
        self.body = body


class TruncatedResultError(TogglError):
    """A range query hit the service's result ceiling.

    The entries that were returned are kept on the exception.
    """

    def __init__(self, message: str, entries: list[Any], path: str | None = None) -> None:
        super().__init__(message, path)
        self.entries = entries
