"""Toggl API resource services."""

from toggl_client.services.me import MeService
from toggl_client.services.time_entries import TimeEntriesService

__all__ = ["MeService", "TimeEntriesService"]
