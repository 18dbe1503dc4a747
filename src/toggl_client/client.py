"""Toggl API client."""

import logging
from functools import lru_cache
from typing import Any, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from toggl_client.config import DEFAULT_TIMEOUT, TOGGL_API, USER_AGENT
from toggl_client.errors import DecodeError, EmptyResponseError, HTTPStatusError, TransportError
from toggl_client.services import MeService, TimeEntriesService
from toggl_client.utils import StorageManager

logger = logging.getLogger(__name__)

T = TypeVar("T")

TimeoutTypes = float | httpx.Timeout | None


@lru_cache(maxsize=None)
def _adapter(response_type: Any) -> TypeAdapter:
    return TypeAdapter(response_type)


class TogglClient:
    """Client for the Toggl API.

    Owns a single HTTP connection pool which is shared by the resource
    services exposed as ``time_entries`` and ``me``. Constructing a client
    performs no network I/O.
    """

    def __init__(
        self,
        api_key: str,
        timeout: TimeoutTypes = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize Toggl client.

        Args:
            api_key: Toggl API token.
            timeout: Default request timeout in seconds.
            transport: Optional httpx transport, mainly for tests.

        Raises:
            ValueError: If no API key is given.
        """
        if not api_key:
            raise ValueError("Toggl API key not provided")

        self.api_key = api_key
        self.client = httpx.Client(
            auth=httpx.BasicAuth(api_key, "api_token"),
            headers={"User-Agent": USER_AGENT},
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
        )

        self.time_entries = TimeEntriesService(self)
        self.me = MeService(self)

    @classmethod
    def from_storage(
        cls, storage: StorageManager | None = None, timeout: TimeoutTypes = DEFAULT_TIMEOUT
    ) -> "TogglClient":
        """Create a client from the API token saved in storage.

        Args:
            storage: StorageManager holding the token.
            timeout: Default request timeout in seconds.

        Raises:
            ValueError: If no token is stored.
        """
        storage = storage or StorageManager()
        api_key = storage.get_token()
        if not api_key:
            raise ValueError("Toggl API key not found in storage")
        return cls(api_key, timeout=timeout)

    def get(
        self,
        path: str,
        response_type: type[T],
        params: dict[str, Any] | None = None,
        timeout: Any = httpx.USE_CLIENT_DEFAULT,
    ) -> T:
        """GET a path of the main API and decode the JSON body.

        Args:
            path: Path relative to the API root, optionally with a query string.
            response_type: Type the JSON body is validated into.
            params: Extra query parameters.
            timeout: Per-request timeout overriding the client default.

        Returns:
            The decoded response.

        Raises:
            TransportError: If the request fails or the body can't be read.
            EmptyResponseError: If the body is empty.
            HTTPStatusError: If the status code is outside [200, 400).
            DecodeError: If the body doesn't decode into ``response_type``.
        """
        if path.startswith("/"):
            logger.warning(f"Do not include / at the start of path: {path}")

        url = f"{TOGGL_API}{path}"
        logger.debug(f"GET {url} params={params}")

        try:
            with self.client.stream("GET", url, params=params, timeout=timeout) as response:
                body = self._read_body(response, path)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportError(f"GET couldn't do request {path}: {e}", path) from e

        if not body:
            raise EmptyResponseError(f"GET to {path} response had length zero", path)

        text = response.text
        if not 200 <= response.status_code < 400:
            raise HTTPStatusError(
                f"GET to {path} got wrong status code {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
                path=path,
                reason=response.reason_phrase,
                body=text,
            )

        try:
            return _adapter(response_type).validate_json(body)
        except ValidationError as e:
            raise DecodeError(
                f"GET to {path} couldn't decode response: {e} (Response was {text})",
                path=path,
                body=text,
            ) from e

    @staticmethod
    def _read_body(response: httpx.Response, path: str) -> bytes:
        try:
            return response.read()
        except (httpx.HTTPError, httpx.StreamError) as e:
            raise TransportError(f"GET to {path} couldn't read response body: {e}", path) from e

    def close(self) -> None:
        """Close the HTTP client."""
        self.client.close()

    def __enter__(self) -> "TogglClient":
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()
