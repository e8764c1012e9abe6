"""
Unit Tests for core.http_client module.

Tests ApiClient error mapping and the client lifecycle helpers over
httpx.MockTransport.
"""

import httpx
import pytest

from core.config import ConsoleSettings
from core.exceptions import ApiConnectionError, ApiResponseError
from core.http_client import (
    DEFAULT_ERROR_MESSAGE,
    ApiClient,
    HttpClientManager,
    HttpClientProtocol,
    create_standalone_http_client,
)


class TestApiClient:
    """Tests for ApiClient."""

    def test_requires_client(self):
        with pytest.raises(ValueError):
            ApiClient(None)

    @pytest.mark.asyncio
    async def test_get_returns_json(self, make_mock_transport_client):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/employees/get-employees"
            assert request.url.params["page"] == "2"
            return httpx.Response(200, json={"data": [], "total": 0})

        async with make_mock_transport_client(handler) as client:
            payload = await ApiClient(client).get("/employees/get-employees", params={"page": 2})

        assert payload == {"data": [], "total": 0}

    @pytest.mark.asyncio
    async def test_put_sends_json_body(self, make_mock_transport_client):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["body"] = request.content
            return httpx.Response(200, json={"modifiedCount": 1})

        async with make_mock_transport_client(handler) as client:
            await ApiClient(client).put("/grantLeave/L1", json={"grantedBy": "hr@example.com"})

        assert seen["method"] == "PUT"
        assert b'"grantedBy"' in seen["body"]

    @pytest.mark.asyncio
    async def test_empty_body_is_none(self, make_mock_transport_client):
        async with make_mock_transport_client(lambda request: httpx.Response(204)) as client:
            assert await ApiClient(client).put("/declineLeave/L1") is None

    @pytest.mark.asyncio
    async def test_error_status_carries_server_message(self, make_mock_transport_client):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, json={"message": "Leave not found"})

        async with make_mock_transport_client(handler) as client:
            with pytest.raises(ApiResponseError) as exc_info:
                await ApiClient(client).put("/grantLeave/missing", json={})

        assert exc_info.value.status_code == 404
        assert str(exc_info.value) == "Leave not found"

    @pytest.mark.asyncio
    async def test_error_status_without_message(self, make_mock_transport_client):
        async with make_mock_transport_client(lambda request: httpx.Response(500, text="oops")) as client:
            with pytest.raises(ApiResponseError) as exc_info:
                await ApiClient(client).get("/getAppliedLeave")

        assert str(exc_info.value) == DEFAULT_ERROR_MESSAGE

    @pytest.mark.asyncio
    async def test_non_json_body(self, make_mock_transport_client):
        async with make_mock_transport_client(lambda request: httpx.Response(200, text="<html>")) as client:
            with pytest.raises(ApiResponseError, match="Malformed"):
                await ApiClient(client).get("/getAppliedLeave")

    @pytest.mark.asyncio
    async def test_transport_failure(self, make_mock_transport_client):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with make_mock_transport_client(handler) as client:
            with pytest.raises(ApiConnectionError, match="connection refused"):
                await ApiClient(client).get("/getAppliedLeave")


class TestHttpClientManager:
    """Tests for HttpClientManager lifecycle."""

    @pytest.mark.asyncio
    async def test_start_and_stop(self):
        settings = ConsoleSettings(_env_file=None, api_base_url="http://hr.test", api_token="secret-token")
        manager = HttpClientManager(settings)

        client = await manager.start()
        try:
            assert manager.is_running
            assert isinstance(client, HttpClientProtocol)
            assert client.base_url.host == "hr.test"
            assert client.headers["Authorization"] == "Bearer secret-token"
            with pytest.raises(RuntimeError):
                await manager.start()
        finally:
            await manager.stop()

        assert not manager.is_running
        with pytest.raises(RuntimeError):
            manager.client

    @pytest.mark.asyncio
    async def test_no_token_no_authorization_header(self, settings):
        manager = HttpClientManager(settings)
        client = await manager.start()
        try:
            assert "Authorization" not in client.headers
        finally:
            await manager.stop()


class TestStandaloneClient:
    """Tests for create_standalone_http_client()."""

    @pytest.mark.asyncio
    async def test_closed_on_exit(self, settings):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json=[]))
        async with create_standalone_http_client(settings, transport=transport) as client:
            assert await ApiClient(client).get("/getAppliedLeave") == []
        assert client.is_closed
