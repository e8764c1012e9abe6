"""
Shifts Module Entry Point.

Implements IAppModule for shift creation and editing.
"""

import logging
from typing import Optional, TYPE_CHECKING

from core.interface import IAppModule
from modules.shifts.services.shift_service import ShiftService

if TYPE_CHECKING:
    from core.app_context import AppContext

logger = logging.getLogger(__name__)


class ShiftsModule(IAppModule):
    """Shift management."""

    def __init__(self) -> None:
        self._context: Optional["AppContext"] = None
        self._service: Optional[ShiftService] = None

    def get_module_name(self) -> str:
        return "shifts"

    def on_entry(self, context: "AppContext") -> None:
        self._context = context
        logger.info("Shifts module initialized")

    def get_menu_config(self) -> dict:
        return {
            "label": "Shifts",
            "route": "/shifting",
            "command": "new-shift",
        }

    @property
    def service(self) -> ShiftService:
        if self._context is None:
            raise RuntimeError("Shifts module is not registered with an AppContext")
        if self._service is None:
            context = self._context
            self._service = ShiftService(context.api, context.notifier, context.refetch, context.user)
        return self._service
