"""Pytest configuration and fixtures."""

import json
import tempfile
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import httpx
import pytest

from toggl_client.client import TogglClient
from toggl_client.config import Config
from toggl_client.utils import StorageManager

API_KEY = "test_api_token"


class CountingStream(httpx.SyncByteStream):
    """Response body stream that records how often it is closed."""

    def __init__(self, body: bytes = b"", fail: bool = False) -> None:
        self.body = body
        self.fail = fail
        self.close_count = 0

    def __iter__(self) -> Iterator[bytes]:
        if self.fail:
            raise httpx.ReadError("connection reset by peer")
        if self.body:
            yield self.body

    def close(self) -> None:
        self.close_count += 1


def json_response(status_code: int, payload: Any) -> httpx.Response:
    """Build a JSON response backed by a CountingStream."""
    return httpx.Response(
        status_code,
        headers={"Content-Type": "application/json"},
        stream=CountingStream(json.dumps(payload).encode()),
    )


def make_time_entry(entry_id: int = 436694100, **overrides: Any) -> dict[str, Any]:
    """Build a time entry payload as the service sends it."""
    payload = {
        "id": entry_id,
        "guid": "cd5b7c8e-2a66-4a8c-9a5f-0c4a1d3b2f10",
        "wid": 777,
        "pid": 193791,
        "billable": False,
        "start": "2024-01-15T09:00:00+00:00",
        "stop": "2024-01-15T11:00:00+00:00",
        "duration": 7200,
        "description": "Meeting with the client",
        "tags": ["billed"],
        "duronly": False,
        "uid": 1001,
        "created_with": "toggl web",
        "at": "2024-01-15T11:00:05+00:00",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def temp_config_dir() -> Path:
    """Create a temporary configuration directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def storage_manager(temp_config_dir: Path) -> StorageManager:
    """Create a storage manager with temporary directory."""
    return StorageManager(temp_config_dir)


@pytest.fixture
def config(temp_config_dir: Path) -> Config:
    """Create a config instance with temporary directory."""
    return Config(temp_config_dir)


@pytest.fixture
def requests_seen() -> list[httpx.Request]:
    """Requests received by the mock transport."""
    return []


@pytest.fixture
def make_client(
    requests_seen: list[httpx.Request],
) -> Callable[[Callable[[httpx.Request], httpx.Response]], TogglClient]:
    """Create a TogglClient whose requests are answered by a handler."""
    clients: list[TogglClient] = []

    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> TogglClient:
        def recording_handler(request: httpx.Request) -> httpx.Response:
            requests_seen.append(request)
            return handler(request)

        client = TogglClient(API_KEY, transport=httpx.MockTransport(recording_handler))
        clients.append(client)
        return client

    yield factory

    for client in clients:
        client.close()
