"""Core module - Console kernel components."""
from core.app_context import AppContext, UserContext, open_app_context
from core.config import ConsoleSettings, get_settings
from core.events import RefetchSignal
from core.exceptions import (
    ApiConnectionError,
    ApiError,
    ApiResponseError,
    ConsoleError,
    ConsoleValidationError,
    EmptySelectionError,
    FilterRequiredError,
    LeaveTransitionError,
)
from core.http_client import ApiClient, HttpClientManager, create_standalone_http_client
from core.interface import IAppModule, IDashboard
from core.logging_config import setup_logging
from core.notifications import Notification, NotificationLevel, Notifier
from core.registry import ModuleLoader, ModuleRegistry
from core.roles import Role

__all__ = [
    # Context
    "AppContext", "UserContext", "open_app_context",
    "ConsoleSettings", "get_settings",
    # Modules
    "IAppModule", "IDashboard", "ModuleRegistry", "ModuleLoader", "Role",
    # Transport
    "ApiClient", "HttpClientManager", "create_standalone_http_client",
    # Feedback
    "Notification", "NotificationLevel", "Notifier", "RefetchSignal",
    "setup_logging",
    # Errors
    "ConsoleError", "ConsoleValidationError", "FilterRequiredError",
    "LeaveTransitionError", "EmptySelectionError",
    "ApiError", "ApiConnectionError", "ApiResponseError",
]
