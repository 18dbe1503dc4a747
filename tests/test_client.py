"""Tests for the Toggl client and its GET transport."""

import base64
import logging
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from toggl_client.client import TogglClient
from toggl_client.config import TOGGL_API, USER_AGENT
from toggl_client.errors import DecodeError, EmptyResponseError, HTTPStatusError, TransportError
from toggl_client.models import DataEnvelope, TimeEntry, User
from toggl_client.utils import StorageManager
from tests.conftest import API_KEY, CountingStream, json_response, make_time_entry

ClientFactory = Callable[[Callable[[httpx.Request], httpx.Response]], TogglClient]


class TestClientConstruction:
    """Test creating clients."""

    def test_requires_api_key(self) -> None:
        """Test that an empty key is rejected."""
        with pytest.raises(ValueError):
            TogglClient("")

    def test_wires_services(self, make_client: ClientFactory, requests_seen: list[httpx.Request]) -> None:
        """Test that services point back at the client and nothing is sent."""
        client = make_client(lambda request: json_response(200, {}))

        assert client.time_entries.client is client
        assert client.me.client is client
        assert requests_seen == []

    def test_from_storage(self, storage_manager: StorageManager) -> None:
        """Test creating a client from a stored token."""
        storage_manager.set_token("stored_token")

        with TogglClient.from_storage(storage_manager) as client:
            assert client.api_key == "stored_token"

    def test_from_storage_without_token(self, storage_manager: StorageManager) -> None:
        """Test that a missing stored token is an error."""
        with pytest.raises(ValueError):
            TogglClient.from_storage(storage_manager)


class TestGet:
    """Test the GET transport."""

    def test_builds_authenticated_request(
        self, make_client: ClientFactory, requests_seen: list[httpx.Request]
    ) -> None:
        """Test URL, basic auth and user agent of a request."""
        client = make_client(lambda request: json_response(200, {"data": {"email": "a@b.com"}}))

        client.get("me", DataEnvelope[User])

        request = requests_seen[0]
        expected_auth = base64.b64encode(f"{API_KEY}:api_token".encode()).decode()
        assert request.method == "GET"
        assert str(request.url) == f"{TOGGL_API}me"
        assert request.headers["Authorization"] == f"Basic {expected_auth}"
        assert request.headers["User-Agent"] == USER_AGENT

    def test_path_with_query_string(
        self, make_client: ClientFactory, requests_seen: list[httpx.Request]
    ) -> None:
        """Test that a query string in the path is sent as given."""
        client = make_client(lambda request: json_response(200, []))

        client.get("time_entries?start_date=2024-01-01T00:00:00Z", list[TimeEntry])

        assert requests_seen[0].url.path == "/api/v8/time_entries"
        assert requests_seen[0].url.params["start_date"] == "2024-01-01T00:00:00Z"

    def test_leading_slash_warns(self, make_client: ClientFactory, caplog: pytest.LogCaptureFixture) -> None:
        """Test that a leading slash is logged but not fatal."""
        client = make_client(lambda request: json_response(200, {"data": {}}))

        with caplog.at_level(logging.WARNING, logger="toggl_client.client"):
            user = client.get("/me", DataEnvelope[User])

        assert isinstance(user.data, User)
        assert "Do not include / at the start of path" in caplog.text

    def test_decodes_list(self, make_client: ClientFactory) -> None:
        """Test decoding a bare JSON array."""
        client = make_client(lambda request: json_response(200, [make_time_entry(1), make_time_entry(2)]))

        entries = client.get("time_entries", list[TimeEntry])

        assert [entry.id for entry in entries] == [1, 2]

    def test_server_error(self, make_client: ClientFactory) -> None:
        """Test that a 500 is a status error even if the body is JSON."""
        client = make_client(lambda request: json_response(500, {"data": {"email": "a@b.com"}}))

        with pytest.raises(HTTPStatusError) as exc_info:
            client.get("me", DataEnvelope[User])

        assert exc_info.value.status_code == 500
        assert exc_info.value.path == "me"
        assert "a@b.com" in exc_info.value.body

    def test_redirect_status_below_400_is_accepted(self, make_client: ClientFactory) -> None:
        """Test that a 3xx without a location is decoded like a success."""
        client = make_client(lambda request: json_response(304, {"data": {"email": "a@b.com"}}))

        envelope = client.get("me", DataEnvelope[User])

        assert envelope.data.email == "a@b.com"

    @pytest.mark.parametrize("status_code", [200, 404, 500])
    def test_empty_body(self, make_client: ClientFactory, status_code: int) -> None:
        """Test that an empty body is reported regardless of status."""
        client = make_client(lambda request: httpx.Response(status_code, stream=CountingStream(b"")))

        with pytest.raises(EmptyResponseError):
            client.get("me", DataEnvelope[User])

    def test_malformed_json(self, make_client: ClientFactory) -> None:
        """Test that invalid JSON is a decode error carrying the body."""
        body = b"<html>Service unavailable</html>"
        client = make_client(lambda request: httpx.Response(200, stream=CountingStream(body)))

        with pytest.raises(DecodeError) as exc_info:
            client.get("me", DataEnvelope[User])

        assert exc_info.value.body == body.decode()
        assert body.decode() in str(exc_info.value)

    def test_invalid_duration(self, make_client: ClientFactory) -> None:
        """Test that a bad duration field fails the whole response."""
        client = make_client(lambda request: json_response(200, [make_time_entry(duration=12.5)]))

        with pytest.raises(DecodeError) as exc_info:
            client.get("time_entries", list[TimeEntry])

        assert "12.5" in exc_info.value.body

    def test_huge_duration(self, make_client: ClientFactory) -> None:
        """Test that an out of range duration is a decode error, not an overflow."""
        client = make_client(lambda request: json_response(200, [make_time_entry(duration=10**15)]))

        with pytest.raises(DecodeError):
            client.get("time_entries", list[TimeEntry])

    def test_connection_failure(self, make_client: ClientFactory) -> None:
        """Test that network errors are transport errors."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("name resolution failed", request=request)

        client = make_client(handler)

        with pytest.raises(TransportError) as exc_info:
            client.get("me", DataEnvelope[User])

        assert exc_info.value.path == "me"
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    def test_read_failure(self, make_client: ClientFactory) -> None:
        """Test that a body read failure is a transport error."""
        client = make_client(lambda request: httpx.Response(200, stream=CountingStream(fail=True)))

        with pytest.raises(TransportError):
            client.get("me", DataEnvelope[User])

    def test_timeout_is_passed_through(
        self, make_client: ClientFactory, requests_seen: list[httpx.Request]
    ) -> None:
        """Test that a per-call timeout reaches the request."""
        client = make_client(lambda request: json_response(200, {"data": {}}))

        client.get("me", DataEnvelope[User], timeout=2.5)

        assert requests_seen[0].extensions["timeout"]["read"] == 2.5


class TestResponseRelease:
    """Test that every response body is closed exactly once."""

    @pytest.mark.parametrize(
        ("status_code", "stream_kwargs", "expected"),
        [
            (200, {"body": b'{"data": {"email": "a@b.com"}}'}, None),
            (500, {"body": b'{"error": "boom"}'}, HTTPStatusError),
            (200, {"body": b""}, EmptyResponseError),
            (200, {"body": b"not json"}, DecodeError),
            (200, {"fail": True}, TransportError),
        ],
    )
    def test_closed_once(
        self,
        make_client: ClientFactory,
        status_code: int,
        stream_kwargs: dict[str, Any],
        expected: type[Exception] | None,
    ) -> None:
        """Test close count on success and on each failure."""
        stream = CountingStream(**stream_kwargs)
        client = make_client(lambda request: httpx.Response(status_code, stream=stream))

        if expected is None:
            client.get("me", DataEnvelope[User])
        else:
            with pytest.raises(expected):
                client.get("me", DataEnvelope[User])

        assert stream.close_count == 1

