"""Access to /time_entries."""

import logging
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Any

import httpx

from toggl_client.config import MAX_TIME_ENTRIES
from toggl_client.errors import TruncatedResultError
from toggl_client.models import DataEnvelope, TimeEntry

if TYPE_CHECKING:
    from toggl_client.client import TogglClient

logger = logging.getLogger(__name__)


def as_utc_if_naive(value: datetime) -> datetime:
    """Attach UTC to a naive datetime, leave aware ones alone."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def format_rfc3339(value: datetime) -> str:
    """Format a datetime as RFC 3339 with second precision.

    Naive datetimes are treated as UTC. A zero offset is written as ``Z``.

    Raises:
        ValueError: If the UTC offset is not a whole number of minutes.
    """
    value = as_utc_if_naive(value)
    offset = value.utcoffset()
    if offset % timedelta(minutes=1):
        raise ValueError(f"UTC offset {offset} can't be written in RFC 3339")

    formatted = value.replace(microsecond=0, tzinfo=None).isoformat()
    if not offset:
        return formatted + "Z"

    sign = "-" if offset < timedelta(0) else "+"
    hours, minutes = divmod(abs(offset) // timedelta(minutes=1), 60)
    return f"{formatted}{sign}{hours:02d}:{minutes:02d}"


class TimeEntriesService:
    """Accesses time entries of the authenticated user.

    Every method takes an optional ``timeout`` which overrides the client
    default for that request.
    """

    def __init__(self, client: "TogglClient") -> None:
        self.client = client

    def get(self, entry_id: int, timeout: Any = httpx.USE_CLIENT_DEFAULT) -> TimeEntry:
        """Get details of a single time entry.

        Args:
            entry_id: Time entry ID.
            timeout: Request timeout in seconds.

        Returns:
            The time entry.
        """
        response = self.client.get(f"time_entries/{entry_id}", DataEnvelope[TimeEntry], timeout=timeout)
        return response.data

    def current(self, timeout: Any = httpx.USE_CLIENT_DEFAULT) -> TimeEntry | None:
        """Get the running time entry.

        Returns:
            The running entry, or None if no timer is running.
        """
        response = self.client.get("time_entries/current", DataEnvelope[TimeEntry | None], timeout=timeout)
        return response.data

    def range(
        self,
        start: datetime,
        end: datetime,
        strict: bool = False,
        timeout: Any = httpx.USE_CLIENT_DEFAULT,
    ) -> list[TimeEntry]:
        """Get time entries started in a time range.

        Only the first 1000 entries found are returned; there is no
        pagination. Split wide ranges into smaller ones to get more.

        Args:
            start: Start of the range (inclusive). Naive values are UTC.
            end: End of the range (inclusive). Naive values are UTC.
            strict: Raise instead of warning when the result may be truncated.
            timeout: Request timeout in seconds.

        Returns:
            List of time entries.

        Raises:
            ValueError: If start is after end.
            TruncatedResultError: If strict and the result hit the ceiling.
        """
        start = as_utc_if_naive(start)
        end = as_utc_if_naive(end)
        if start > end:
            raise ValueError(f"Range start {start} is after end {end}")

        params = {
            "start_date": format_rfc3339(start),
            "end_date": format_rfc3339(end),
        }
        entries = self.client.get("time_entries", list[TimeEntry], params=params, timeout=timeout)
        entries = entries[:MAX_TIME_ENTRIES]

        if len(entries) == MAX_TIME_ENTRIES:
            message = (
                f"Got {MAX_TIME_ENTRIES} time entries between {params['start_date']} and "
                f"{params['end_date']}, the result is probably truncated"
            )
            if strict:
                raise TruncatedResultError(message, entries, path="time_entries")
            logger.warning(message)

        return entries
