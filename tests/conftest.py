"""
Pytest Configuration and Shared Fixtures.

Provides common test fixtures for console core unit tests.
"""

import httpx
import pytest
from unittest.mock import AsyncMock, MagicMock

from core.app_context import AppContext, UserContext
from core.config import ConsoleSettings
from core.http_client import ApiClient
from core.interface import IAppModule
from core.roles import Role


# =============================================================================
# Settings Fixtures
# =============================================================================


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Set up mock environment variables for testing."""
    env_vars = {
        "HR_API_BASE_URL": "https://hr.test.example.com",
        "HR_API_TOKEN": "test-api-token",
        "HR_REQUEST_TIMEOUT_SECONDS": "5",
        "HR_SEARCH_DEBOUNCE_MS": "250",
        "HR_DEFAULT_PAGE_SIZE": "50",
        "HR_EXPORT_DIR": "out",
        "HR_LOG_LEVEL": "DEBUG",
        "HR_USER_EMAIL": "hr@example.com",
        "HR_USER_ROLE": "HR-ADMIN",
    }

    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)

    return env_vars


@pytest.fixture
def settings():
    """Default settings, not read from any .env file."""
    return ConsoleSettings(_env_file=None, api_base_url="http://hr.test")


# =============================================================================
# Context Fixtures
# =============================================================================


@pytest.fixture
def mock_api():
    """ApiClient with mocked verbs."""
    api = MagicMock(spec=ApiClient)
    api.get = AsyncMock(return_value={"data": [], "total": 0, "totalPages": 1})
    api.put = AsyncMock(return_value={"modifiedCount": 1})
    api.post = AsyncMock(return_value={"success": True})
    return api


@pytest.fixture
def admin_user():
    return UserContext(email="admin@example.com", role=Role.ADMIN)


@pytest.fixture
def app_context(settings, admin_user, mock_api):
    """AppContext with an injected API client."""
    return AppContext(settings=settings, user=admin_user, api=mock_api)


@pytest.fixture
def make_mock_transport_client():
    """Factory for an httpx.AsyncClient answering every request with ``handler``."""

    def _make(handler, base_url: str = "http://hr.test") -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=base_url, transport=httpx.MockTransport(handler))

    return _make


# =============================================================================
# Module Fixtures
# =============================================================================


class SampleModule(IAppModule):
    """Minimal staff-only module."""

    def __init__(self, name: str = "sample") -> None:
        self.name = name
        self.entered_with = None
        self.shut_down = False

    def get_module_name(self) -> str:
        return self.name

    def on_entry(self, context) -> None:
        self.entered_with = context

    def on_shutdown(self) -> None:
        self.shut_down = True


@pytest.fixture
def mock_module():
    return SampleModule()
