"""
HTTP Client Lifecycle Management.

Provides lifecycle-managed httpx.AsyncClient instances bound to the HR API
base URL, and ApiClient, the thin JSON wrapper every feature service talks to.

Design Principles:
    1. NO global singletons; the client is owned by the AppContext or by the
       caller's ``async with`` scope
    2. Explicit dependency injection; services receive an ApiClient
    3. No retries and no extra timeout layer; httpx defaults set at client
       creation time apply to every request

Usage:
    async with create_standalone_http_client(settings) as client:
        api = ApiClient(client)
        payload = await api.get("/employees/get-employees", params={...})
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Optional, Protocol, runtime_checkable

import httpx

from core.config import ConsoleSettings
from core.exceptions import ApiConnectionError, ApiResponseError

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "Internal server error"


# =============================================================================
# Protocol Definitions (for Type Safety and Testability)
# =============================================================================


@runtime_checkable
class HttpClientProtocol(Protocol):
    """
    Protocol for HTTP client operations.

    Allows mocking in tests and abstracting the actual client implementation.
    """

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: Optional[dict] = None,
        json: Any = None,
    ) -> httpx.Response: ...

    @property
    def is_closed(self) -> bool: ...

    async def aclose(self) -> None: ...


def _build_headers(settings: ConsoleSettings) -> dict[str, str]:
    headers = {"Accept": "application/json"}
    token = settings.api_token.get_secret_value()
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


class HttpClientManager:
    """
    Manages the lifecycle of httpx.AsyncClient.

    This class provides a clean interface for creating and closing
    HTTP clients, ensuring proper resource cleanup.
    """

    def __init__(
        self,
        settings: ConsoleSettings,
        max_connections: int = 20,
        max_keepalive_connections: int = 10,
        keepalive_expiry: float = 30.0,
    ) -> None:
        """
        Initialize the HTTP client manager.

        Args:
            settings: Console settings (base URL, token, timeout).
            max_connections: Maximum number of concurrent connections.
            max_keepalive_connections: Maximum keep-alive connections.
            keepalive_expiry: Keep-alive connection expiry in seconds.
        """
        self._settings = settings
        self._limits = httpx.Limits(
            max_connections=max_connections,
            max_keepalive_connections=max_keepalive_connections,
            keepalive_expiry=keepalive_expiry,
        )
        self._client: Optional[httpx.AsyncClient] = None

    async def start(self) -> httpx.AsyncClient:
        """
        Create and start the HTTP client.

        Returns:
            The initialized httpx.AsyncClient.

        Raises:
            RuntimeError: If client is already started.
        """
        if self._client is not None:
            raise RuntimeError("HTTP client already started")

        self._client = httpx.AsyncClient(
            base_url=self._settings.api_base_url,
            headers=_build_headers(self._settings),
            timeout=self._settings.request_timeout_seconds,
            limits=self._limits,
            follow_redirects=True,
        )
        logger.info(
            f"HTTP client started (base_url={self._settings.api_base_url}, "
            f"timeout={self._settings.request_timeout_seconds}s)"
        )
        return self._client

    async def stop(self) -> None:
        """Close the HTTP client and release resources."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.info("HTTP client closed")

    @property
    def client(self) -> httpx.AsyncClient:
        """
        Get the managed HTTP client.

        Raises:
            RuntimeError: If client is not started.
        """
        if self._client is None:
            raise RuntimeError("HTTP client not started. Call start() first.")
        return self._client

    @property
    def is_running(self) -> bool:
        """Check if the HTTP client is running."""
        return self._client is not None and not self._client.is_closed


@asynccontextmanager
async def create_standalone_http_client(
    settings: ConsoleSettings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> AsyncGenerator[httpx.AsyncClient, None]:
    """
    Create an HTTP client whose lifecycle is bound to the context manager scope.

    Args:
        settings: Console settings (base URL, token, timeout).
        transport: Optional transport override (tests use httpx.MockTransport).

    Yields:
        httpx.AsyncClient instance bound to the caller's event loop.
    """
    client = httpx.AsyncClient(
        base_url=settings.api_base_url,
        headers=_build_headers(settings),
        timeout=settings.request_timeout_seconds,
        follow_redirects=True,
        transport=transport,
    )
    logger.debug(f"Standalone HTTP client created (base_url={settings.api_base_url})")

    try:
        yield client
    finally:
        await client.aclose()
        logger.debug("Standalone HTTP client closed")


def _error_message(response: httpx.Response) -> str:
    """Extract the server supplied message from an error response."""
    try:
        body = response.json()
    except ValueError:
        return DEFAULT_ERROR_MESSAGE
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return DEFAULT_ERROR_MESSAGE


class ApiClient:
    """
    JSON client for the HR/payroll API.

    Translates transport failures into ApiConnectionError and error statuses
    into ApiResponseError. Successful responses are returned as decoded JSON.

    Args:
        http_client: httpx.AsyncClient configured with the API base URL (required).
    """

    def __init__(self, http_client: HttpClientProtocol) -> None:
        if http_client is None:
            raise ValueError(
                "http_client is required. Use create_standalone_http_client() "
                "or the AppContext to obtain one."
            )
        self._client = http_client

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict[str, Any]] = None,
        json: Any = None,
    ) -> Any:
        try:
            response = await self._client.request(method, path, params=params, json=json)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            message = _error_message(e.response)
            logger.error(f"API error: {method} {path} -> {e.response.status_code} {message}")
            raise ApiResponseError(message, status_code=e.response.status_code) from e
        except httpx.HTTPError as e:
            logger.error(f"API request failed: {method} {path}: {e}")
            raise ApiConnectionError(str(e) or DEFAULT_ERROR_MESSAGE) from e

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"API returned a non-JSON body for {method} {path}")
            raise ApiResponseError("Malformed response from server", response.status_code) from e

    async def get(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        """Issue a GET request and return the decoded body."""
        return await self._request("GET", path, params=params)

    async def put(self, path: str, json: Any = None) -> Any:
        """Issue a PUT request and return the decoded body."""
        return await self._request("PUT", path, json=json)

    async def post(self, path: str, json: Any = None) -> Any:
        """Issue a POST request and return the decoded body."""
        return await self._request("POST", path, json=json)
