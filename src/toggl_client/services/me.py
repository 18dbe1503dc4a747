"""Access to /me."""

from typing import TYPE_CHECKING, Any

import httpx

from toggl_client.models import DataEnvelope, User

if TYPE_CHECKING:
    from toggl_client.client import TogglClient


class MeService:
    """Accesses the profile of the authenticated user."""

    def __init__(self, client: "TogglClient") -> None:
        self.client = client

    def get(self, timeout: Any = httpx.USE_CLIENT_DEFAULT) -> User:
        """Get details of the current user."""
        response = self.client.get("me", DataEnvelope[User], timeout=timeout)
        return response.data
