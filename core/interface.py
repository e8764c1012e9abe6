"""
IAppModule / IDashboard - Abstract base classes for console features.
Follows Interface Segregation Principle (ISP) and Open/Closed Principle (OCP).
"""
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, FrozenSet, Optional

from core.roles import STAFF_ROLES, Role

if TYPE_CHECKING:
    from core.app_context import AppContext
    from core.registry import ModuleRegistry


class IAppModule(ABC):
    """
    Abstract interface for pluggable feature modules.
    All feature modules must implement this interface to be registered.
    """

    #: Roles that may open this module. Staff only unless overridden.
    allowed_roles: FrozenSet[Role] = STAFF_ROLES

    @abstractmethod
    def get_module_name(self) -> str:
        """
        Returns the unique identifier for this module.
        Used for menu building and registry lookup.

        Returns:
            str: The module's unique name (e.g., 'leave', 'salary')
        """
        pass

    @abstractmethod
    def on_entry(self, context: "AppContext") -> None:
        """
        Called when the module is registered against a context.

        Args:
            context: The application context containing shared services
        """
        pass

    def is_visible_to(self, role: Role) -> bool:
        return role in self.allowed_roles

    def get_menu_config(self) -> dict:
        """
        Returns menu configuration for the navigation menu.
        Override this method to provide a custom label and route.

        Returns:
            dict: Menu configuration with structure:
                  {
                      "label": "Menu Label",
                      "route": "/path",
                      "command": "cli-subcommand"
                  }
        """
        return {
            "label": self.get_module_name(),
            "route": f"/{self.get_module_name()}",
            "command": None,
        }

    def on_shutdown(self) -> None:
        """
        Called when the module is being unloaded.
        Override for cleanup logic.
        """
        pass

    def get_status(self) -> dict:
        """
        Returns the current status of the module for monitoring.

        Returns:
            dict: Status info with structure:
                  {
                      "status": "active" | "warning" | "error" | "initializing",
                      "details": { "key": "value" }
                  }
        """
        return {
            "status": "active",
            "details": {}
        }


class IDashboard(ABC):
    """
    Landing view shown after sign-in.

    One implementation exists per role family; the registry picks it by role.
    """

    @abstractmethod
    def get_dashboard_name(self) -> str:
        pass

    @abstractmethod
    def get_title(self) -> str:
        pass

    def render(self, role: Role, registry: "ModuleRegistry") -> dict:
        """
        Build the dashboard description for a role.

        Returns:
            dict: {"dashboard": name, "title": title, "role": role, "menu": [...]}
        """
        return {
            "dashboard": self.get_dashboard_name(),
            "title": self.get_title(),
            "role": str(role),
            "menu": registry.get_menu_for_role(role),
        }

    def get_notice_board_route(self) -> Optional[str]:
        return None
