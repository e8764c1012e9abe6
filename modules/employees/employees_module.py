"""
Employees Module Entry Point.

Implements IAppModule for the employee directory.
"""

import logging
from typing import Optional, TYPE_CHECKING

from core.interface import IAppModule
from modules.employees.services.directory import EmployeeDirectory

if TYPE_CHECKING:
    from core.app_context import AppContext

logger = logging.getLogger(__name__)


class EmployeesModule(IAppModule):
    """Employee directory with search, sort and paging."""

    def __init__(self) -> None:
        self._context: Optional["AppContext"] = None
        self._directory: Optional[EmployeeDirectory] = None

    def get_module_name(self) -> str:
        return "employees"

    def on_entry(self, context: "AppContext") -> None:
        self._context = context
        logger.info("Employees module initialized")

    def get_menu_config(self) -> dict:
        return {
            "label": "Employees",
            "route": "/employees",
            "command": "employees",
        }

    @property
    def directory(self) -> EmployeeDirectory:
        if self._context is None:
            raise RuntimeError("Employees module is not registered with an AppContext")
        if self._directory is None:
            self._directory = EmployeeDirectory(self._context.api, self._context.notifier, self._context.settings)
        return self._directory
