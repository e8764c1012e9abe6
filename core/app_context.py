"""
AppContext - Dependency Injection Container.
Implements the Dependency Inversion Principle (DIP).

Everything a view or service needs (settings, the signed-in user, the API
client, the notifier, the refetch signal) is reached through one explicitly
passed AppContext rather than through module-level state.
"""
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncGenerator, Optional

import httpx

from core.config import ConsoleSettings, get_settings
from core.dashboards import resolve_dashboard
from core.events import RefetchSignal
from core.http_client import ApiClient, HttpClientManager
from core.interface import IDashboard
from core.notifications import Notifier
from core.registry import ModuleRegistry
from core.roles import Role


@dataclass(frozen=True)
class UserContext:
    """The signed-in operator."""

    email: str
    role: Role

    @classmethod
    def from_settings(cls, settings: ConsoleSettings) -> "UserContext":
        return cls(email=settings.user_email, role=Role.parse(settings.user_role))


class AppContext:
    """
    Application Context - Central Dependency Injection Container.

    The HTTP client is created lazily by start() (or injected), and released
    by stop().
    """

    def __init__(
        self,
        settings: Optional[ConsoleSettings] = None,
        user: Optional[UserContext] = None,
        api: Optional[ApiClient] = None,
    ) -> None:
        self._logger = logging.getLogger(__name__)
        self._settings = settings or get_settings()
        self._user = user or UserContext.from_settings(self._settings)
        self._api = api
        self._http_manager: Optional[HttpClientManager] = None

        self.notifier = Notifier()
        self.refetch = RefetchSignal()
        self.registry = ModuleRegistry(self)

    @property
    def settings(self) -> ConsoleSettings:
        return self._settings

    @property
    def user(self) -> UserContext:
        return self._user

    @property
    def api(self) -> ApiClient:
        """
        The shared API client.

        Raises:
            RuntimeError: If neither start() was awaited nor a client injected.
        """
        if self._api is None:
            raise RuntimeError("API client not available. Await AppContext.start() first.")
        return self._api

    def dashboard(self) -> IDashboard:
        """Dashboard matching the signed-in user's role."""
        return resolve_dashboard(self._user.role)

    async def start(self) -> None:
        """Create the HTTP client unless an API client was injected."""
        if self._api is not None:
            return
        self._http_manager = HttpClientManager(self._settings)
        client = await self._http_manager.start()
        self._api = ApiClient(client)

    async def stop(self) -> None:
        """Shut down modules and close the HTTP client if this context owns it."""
        self.registry.shutdown_all()
        if self._http_manager is not None:
            await self._http_manager.stop()
            self._http_manager = None
            self._api = None
        self._logger.debug("AppContext stopped")


@asynccontextmanager
async def open_app_context(
    settings: Optional[ConsoleSettings] = None,
    user: Optional[UserContext] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> AsyncGenerator[AppContext, None]:
    """
    Async context manager for an AppContext and its HTTP client.

    Args:
        settings: Console settings; cached settings when omitted.
        user: Signed-in operator; read from settings when omitted.
        transport: Optional httpx transport override (tests).

    Example:
        async with open_app_context() as context:
            await context.api.get("/getAppliedLeave", params={...})
    """
    settings = settings or get_settings()
    if transport is not None:
        http_client = httpx.AsyncClient(base_url=settings.api_base_url, transport=transport)
        context = AppContext(settings=settings, user=user, api=ApiClient(http_client))
        try:
            yield context
        finally:
            await context.stop()
            await http_client.aclose()
        return

    context = AppContext(settings=settings, user=user)
    await context.start()
    try:
        yield context
    finally:
        await context.stop()
