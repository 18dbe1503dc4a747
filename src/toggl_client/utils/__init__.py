"""Utility modules for the Toggl API client."""

from toggl_client.utils.logging import PACKAGE_LOGGER, setup_logging
from toggl_client.utils.storage import StorageManager

__all__ = ["PACKAGE_LOGGER", "setup_logging", "StorageManager"]
