"""Configuration for the Toggl API client."""

from pathlib import Path
from typing import Any

from toggl_client.utils.storage import StorageManager

TOGGL_API = "https://www.toggl.com/api/v8/"
# Reports API root. No implemented operation talks to it yet.
REPORTS_API = "https://toggl.com/reports/api/v2/"
USER_AGENT = "github.com/roessland/gotoggl"

# The service returns at most this many entries for a range query.
MAX_TIME_ENTRIES = 1000

DEFAULT_TIMEOUT = 30.0

LOG_FILE_NAME = "toggl-client.log"

DEFAULTS: dict[str, Any] = {
    "timeout": DEFAULT_TIMEOUT,
    # None means LOG_FILE_NAME inside the configuration directory
    "log_file": None,
}


class Config:
    """User settings persisted in the configuration directory."""

    def __init__(self, config_dir: Path | None = None) -> None:
        """Initialize configuration.

        Args:
            config_dir: Directory for storing configuration.
        """
        self.storage = StorageManager(config_dir)
        self._settings = {**DEFAULTS, **self.storage.load_settings()}

    def get(self, key: str, default: Any = None) -> Any:
        """Get a setting value.

        Args:
            key: Setting name.
            default: Value returned when the setting is unknown.

        Returns:
            Setting value.
        """
        return self._settings.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Update a setting and persist it.

        Args:
            key: Setting name.
            value: New value.
        """
        self._settings[key] = value
        stored = self.storage.load_settings()
        stored[key] = value
        self.storage.save_settings(stored)

    @property
    def timeout(self) -> float:
        """Request timeout in seconds."""
        return float(self._settings["timeout"])

    @property
    def log_file(self) -> Path:
        """File the command-line tool logs to."""
        configured = self._settings.get("log_file")
        if configured:
            return Path(configured).expanduser()
        return self.storage.config_dir / LOG_FILE_NAME
