"""Client library for the Toggl time tracking API."""

from toggl_client.client import TogglClient
from toggl_client.errors import (
    DecodeError,
    EmptyResponseError,
    HTTPStatusError,
    TogglError,
    TransportError,
    TruncatedResultError,
)
from toggl_client.models import BlogPost, DataEnvelope, TimeEntry, User

__version__ = "0.1.0"

__all__ = [
    "TogglClient",
    "TimeEntry",
    "User",
    "BlogPost",
    "DataEnvelope",
    "TogglError",
    "TransportError",
    "EmptyResponseError",
    "DecodeError",
    "HTTPStatusError",
    "TruncatedResultError",
]
