"""
Leave Module Entry Point.

Implements IAppModule for the applied-leave view: listing leave
applications and granting, declining or revoking them.
"""

import asyncio
import logging
from typing import Any, Optional, TYPE_CHECKING

from core.interface import IAppModule
from modules.leave.services.leave_api import LeaveApiService
from modules.leave.services.workflow import ConfirmCallback, LeaveGrantWorkflow

if TYPE_CHECKING:
    from core.app_context import AppContext

logger = logging.getLogger(__name__)


class LeaveModule(IAppModule):
    """
    Applied Leave.

    The workflow is built on first use, once the context's API client
    exists, and reloads the list whenever the refetch signal fires.
    """

    def __init__(self) -> None:
        self._context: Optional["AppContext"] = None
        self._workflow: Optional[LeaveGrantWorkflow] = None
        self._unsubscribe = None
        # Store reload task references to prevent garbage collection
        self._reload_tasks: set[asyncio.Task[Any]] = set()

    def get_module_name(self) -> str:
        return "leave"

    def on_entry(self, context: "AppContext") -> None:
        self._context = context
        logger.info("Leave module initialized")

    def get_menu_config(self) -> dict:
        return {
            "label": "Applied Leave",
            "route": "/appliedLeave",
            "command": "leaves",
        }

    def workflow(self, confirm: Optional[ConfirmCallback] = None) -> LeaveGrantWorkflow:
        """
        The module's LeaveGrantWorkflow.

        Raises:
            RuntimeError: If the module was never registered with a context.
        """
        if self._context is None:
            raise RuntimeError("Leave module is not registered with an AppContext")
        if self._workflow is None:
            self._workflow = LeaveGrantWorkflow(
                LeaveApiService(self._context.api),
                self._context.notifier,
                self._context.refetch,
                self._context.user,
                confirm=confirm,
            )
            self._unsubscribe = self._context.refetch.subscribe(self._on_refetch)
        elif confirm is not None:
            self._workflow.set_confirm(confirm)
        return self._workflow

    def _on_refetch(self, source: str) -> None:
        if self._workflow is None:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug(f"Refetch from '{source}' outside an event loop; not reloading")
            return
        task = loop.create_task(self._workflow.load())
        self._reload_tasks.add(task)
        task.add_done_callback(self._reload_tasks.discard)

    def on_shutdown(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        for task in self._reload_tasks:
            task.cancel()
        logger.info("Leave module shut down")

    def get_status(self) -> dict:
        if self._workflow is None:
            return {"status": "initializing", "details": {}}
        summary = self._workflow.summary()
        return {
            "status": "active",
            "details": {
                "total": summary.total,
                "approved": summary.approved,
                "pending": summary.pending,
            },
        }
