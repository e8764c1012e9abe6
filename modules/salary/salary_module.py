"""
Salary Module Entry Point.

Implements IAppModule for the monthly salary sheet and its exports.
"""

import logging
from typing import Optional, TYPE_CHECKING

from core.interface import IAppModule
from modules.salary.services.exporter import SalaryExportService
from modules.salary.services.salary_sheet import SalarySheetService

if TYPE_CHECKING:
    from core.app_context import AppContext

logger = logging.getLogger(__name__)


class SalaryModule(IAppModule):
    """Salary Sheet: paginated monthly listing, spreadsheet and bank letter."""

    def __init__(self) -> None:
        self._context: Optional["AppContext"] = None
        self._sheet: Optional[SalarySheetService] = None
        self._exporter: Optional[SalaryExportService] = None

    def get_module_name(self) -> str:
        return "salary"

    def on_entry(self, context: "AppContext") -> None:
        self._context = context
        logger.info("Salary module initialized")

    def get_menu_config(self) -> dict:
        return {
            "label": "Salary Sheet",
            "route": "/salarySheet",
            "command": "salary",
        }

    def _require_context(self) -> "AppContext":
        if self._context is None:
            raise RuntimeError("Salary module is not registered with an AppContext")
        return self._context

    @property
    def sheet(self) -> SalarySheetService:
        if self._sheet is None:
            context = self._require_context()
            self._sheet = SalarySheetService(context.api, context.notifier, context.settings)
        return self._sheet

    @property
    def exporter(self) -> SalaryExportService:
        if self._exporter is None:
            context = self._require_context()
            self._exporter = SalaryExportService(self.sheet, context.notifier, context.settings)
        return self._exporter
