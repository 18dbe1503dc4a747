"""Settings and API token storage for the Toggl API client."""

import json
from pathlib import Path
from typing import Any

import yaml


class StorageManager:
    """Keeps user settings and the Toggl API token on disk.

    Settings are YAML so they can be edited by hand. The token lives in a
    separate JSON file readable by the owner only.
    """

    def __init__(self, config_dir: Path | None = None) -> None:
        """Initialize storage manager.

        Args:
            config_dir: Directory to store configuration. Defaults to ~/.toggl-client/
        """
        self.config_dir = config_dir or Path.home() / ".toggl-client"
        self.config_dir.mkdir(parents=True, exist_ok=True)

        self.settings_file = self.config_dir / "settings.yaml"
        self.token_file = self.config_dir / "token.json"

    def load_settings(self) -> dict[str, Any]:
        """Load user settings.

        Returns:
            Settings dictionary, empty if nothing was saved yet.
        """
        if self.settings_file.exists():
            with open(self.settings_file) as f:
                return yaml.safe_load(f) or {}
        return {}

    def save_settings(self, settings: dict[str, Any]) -> None:
        """Save user settings."""
        with open(self.settings_file, "w") as f:
            yaml.safe_dump(settings, f, default_flow_style=False, sort_keys=False)

    def get_token(self) -> str | None:
        """Get the stored API token.

        Returns:
            Token if one was saved, None otherwise.
        """
        if not self.token_file.exists():
            return None
        with open(self.token_file) as f:
            return json.load(f).get("api_token") or None

    def set_token(self, token: str) -> None:
        """Save the API token, replacing any previous one."""
        # Create the file private before the token is written into it
        self.token_file.touch(mode=0o600, exist_ok=True)
        self.token_file.chmod(0o600)
        with open(self.token_file, "w") as f:
            json.dump({"api_token": token}, f)

    def clear_token(self) -> None:
        """Forget the stored API token."""
        self.token_file.unlink(missing_ok=True)
