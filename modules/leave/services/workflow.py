"""
Leave Grant Workflow.

State machine behind the applied-leave view:

    Pending  -> Approved   (full or partial grant)
    Pending  -> Declined   (decline)
    Approved -> Cancelled  (revoke, after confirmation)

The planners (plan_full_grant / plan_partial_grant) are pure and raise
ConsoleValidationError subclasses before any request is made. The workflow
object submits the transition, updates its local copy of the list on
success and emits the refetch signal.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Awaitable, Callable, Iterable, Optional

from core.app_context import UserContext
from core.events import RefetchSignal
from core.exceptions import ApiError, ConsoleValidationError, EmptySelectionError, LeaveTransitionError
from core.notifications import Notifier
from modules.leave.schemas import GrantDecision, GrantMode, LeaveRequest, LeaveStatus, LeaveSummary
from modules.leave.services.leave_api import LeaveApiService, is_acknowledged

logger = logging.getLogger(__name__)

REFETCH_SOURCE = "leave"

#: (title, text) -> whether the operator confirmed
ConfirmCallback = Callable[[str, str], Awaitable[bool]]


# =============================================================================
# Pure planning
# =============================================================================


def _ensure_pending(leave: LeaveRequest, action: str) -> None:
    if leave.status is not LeaveStatus.PENDING:
        raise LeaveTransitionError(
            f"Cannot {action} a leave application that is {leave.status}",
            leave_id=leave.id,
        )


def plan_full_grant(leave: LeaveRequest) -> GrantDecision:
    """Grant every requested date."""
    _ensure_pending(leave, "grant")
    return GrantDecision(granted_dates=tuple(leave.requested_dates), declined_dates=())


def plan_partial_grant(leave: LeaveRequest, selected: Iterable[date]) -> GrantDecision:
    """
    Split the requested dates into the selected (granted) and the rest.

    Raises:
        LeaveTransitionError: If the leave is not pending or a selected date
            was never requested.
        EmptySelectionError: If nothing is selected.
    """
    _ensure_pending(leave, "grant")
    chosen = set(selected)
    unknown = chosen.difference(leave.requested_dates)
    if unknown:
        listed = ", ".join(d.isoformat() for d in sorted(unknown))
        raise LeaveTransitionError(f"Dates were not requested: {listed}", leave_id=leave.id)
    if not chosen:
        raise EmptySelectionError("Select at least one date to grant", leave_id=leave.id)

    return GrantDecision(
        granted_dates=tuple(sorted(chosen)),
        declined_dates=tuple(d for d in leave.requested_dates if d not in chosen),
    )


class GrantSelection:
    """
    Dates ticked in the partial-grant dialog.

    Starts from the dates already granted; only requested dates can be toggled.
    """

    def __init__(self, leave: LeaveRequest) -> None:
        self._leave = leave
        self._requested = set(leave.requested_dates)
        self._selected: set[date] = {d for d in leave.granted_dates if d in self._requested}

    @property
    def leave(self) -> LeaveRequest:
        return self._leave

    @property
    def selected(self) -> list[date]:
        return sorted(self._selected)

    def is_selected(self, day: date) -> bool:
        return day in self._selected

    def toggle(self, day: date) -> bool:
        """
        Flip one date.

        Returns:
            Whether the date is selected afterwards.

        Raises:
            LeaveTransitionError: If ``day`` was not requested.
        """
        if day not in self._requested:
            raise LeaveTransitionError(
                f"{day.isoformat()} is not part of this application",
                leave_id=self._leave.id,
            )
        if day in self._selected:
            self._selected.discard(day)
            return False
        self._selected.add(day)
        return True

    def select_all(self) -> None:
        self._selected = set(self._requested)

    def clear(self) -> None:
        self._selected.clear()

    def decision(self) -> GrantDecision:
        return plan_partial_grant(self._leave, self._selected)


# =============================================================================
# Workflow
# =============================================================================


@dataclass(frozen=True)
class TransitionResult:
    """Outcome of one workflow action as shown to the operator."""

    ok: bool
    leave: LeaveRequest
    message: str


class LeaveGrantWorkflow:
    """
    Applied-leave list plus its grant / decline / revoke actions.

    Args:
        service: Leave endpoints.
        notifier: Receives success / warning / error messages.
        refetch: Emitted after every successful transition.
        user: Operator; their e-mail is sent as grantedBy / revokedBy.
        confirm: Asked before a revoke. Without it revokes are refused.
    """

    def __init__(
        self,
        service: LeaveApiService,
        notifier: Notifier,
        refetch: RefetchSignal,
        user: UserContext,
        confirm: Optional[ConfirmCallback] = None,
    ) -> None:
        self._service = service
        self._notifier = notifier
        self._refetch = refetch
        self._user = user
        self._confirm = confirm
        self._leaves: list[LeaveRequest] = []

    @property
    def leaves(self) -> list[LeaveRequest]:
        return list(self._leaves)

    def set_confirm(self, confirm: Optional[ConfirmCallback]) -> None:
        self._confirm = confirm

    def get(self, leave_id: str) -> Optional[LeaveRequest]:
        for leave in self._leaves:
            if leave.id == leave_id:
                return leave
        return None

    async def load(self, user_email: Optional[str] = None) -> list[LeaveRequest]:
        """
        Fetch the applied-leave list.

        On failure the previous list is kept and an error is notified.
        """
        email = user_email if user_email is not None else self._user.email
        if not email:
            logger.warning("No user e-mail configured; skipping leave fetch")
            return self.leaves
        try:
            self._leaves = await self._service.get_applied_leaves(email)
        except ApiError as e:
            self._notifier.error(f"Error fetching data: {e}")
        return self.leaves

    def summary(self) -> LeaveSummary:
        return LeaveSummary(
            total=len(self._leaves),
            approved=sum(1 for leave in self._leaves if leave.status is LeaveStatus.APPROVED),
            pending=sum(1 for leave in self._leaves if leave.status is LeaveStatus.PENDING),
        )

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    def begin_partial_grant(self, leave: LeaveRequest) -> GrantSelection:
        return GrantSelection(leave)

    async def accept(
        self,
        leave: LeaveRequest,
        mode: GrantMode,
        selected: Optional[Iterable[date]] = None,
    ) -> TransitionResult:
        """Accept an application in full or for the ``selected`` dates only."""
        if mode is GrantMode.FULL:
            return await self.full_grant(leave)
        selection = GrantSelection(leave)
        for day in selected or ():
            try:
                if not selection.is_selected(day):
                    selection.toggle(day)
            except LeaveTransitionError as e:
                return self._rejected(leave, e)
        return await self.submit_partial_grant(selection)

    async def full_grant(self, leave: LeaveRequest) -> TransitionResult:
        try:
            decision = plan_full_grant(leave)
        except ConsoleValidationError as e:
            return self._rejected(leave, e)
        return await self._submit_grant(
            leave,
            decision,
            success_message="Full leave granted",
            failure_message="Failed to grant full leave",
        )

    async def submit_partial_grant(self, selection: GrantSelection) -> TransitionResult:
        leave = selection.leave
        try:
            decision = selection.decision()
        except ConsoleValidationError as e:
            return self._rejected(leave, e)
        return await self._submit_grant(
            leave,
            decision,
            success_message="Leave granted successfully",
            failure_message="Failed to grant selected dates",
        )

    async def decline(self, leave: LeaveRequest) -> TransitionResult:
        try:
            _ensure_pending(leave, "decline")
        except ConsoleValidationError as e:
            return self._rejected(leave, e)
        updated = leave.model_copy(update={"status": LeaveStatus.DECLINED})
        return await self._submit(
            leave,
            updated,
            self._service.decline(leave.id),
            success_message="Leave application declined",
            failure_message="Failed to decline leave",
            error_prefix="Decline error",
        )

    async def revoke(self, leave: LeaveRequest) -> TransitionResult:
        """Cancel the granted days of an approved application."""
        if not leave.granted_dates:
            notification = self._notifier.info("No granted dates to revoke")
            return TransitionResult(ok=False, leave=leave, message=notification.message)
        if leave.status is not LeaveStatus.APPROVED:
            return self._rejected(
                leave,
                LeaveTransitionError(f"Cannot revoke a leave application that is {leave.status}", leave.id),
            )

        count = len(leave.granted_dates)
        confirmed = False
        if self._confirm is not None:
            confirmed = await self._confirm(
                "Revoke granted leave?",
                f"This will cancel {count} granted day(s) and restore leave balance.",
            )
        if not confirmed:
            logger.info(f"Revoke of leave {leave.id} not confirmed")
            return TransitionResult(ok=False, leave=leave, message="Revoke not confirmed")

        updated = leave.model_copy(update={"status": LeaveStatus.CANCELLED})
        return await self._submit(
            leave,
            updated,
            self._service.revoke(leave.id, leave.granted_dates, self._user.email),
            success_message="Grant revoked",
            failure_message="Failed to revoke leave",
            error_prefix="Revoke error",
        )

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    async def _submit_grant(
        self,
        leave: LeaveRequest,
        decision: GrantDecision,
        success_message: str,
        failure_message: str,
    ) -> TransitionResult:
        updated = leave.model_copy(
            update={
                "status": LeaveStatus.APPROVED,
                "granted_dates": list(decision.granted_dates),
                "declined_dates": list(decision.declined_dates),
            }
        )
        return await self._submit(
            leave,
            updated,
            self._service.grant(leave.id, decision, self._user.email),
            success_message=success_message,
            failure_message=failure_message,
            error_prefix="Grant error",
        )

    async def _submit(
        self,
        leave: LeaveRequest,
        updated: LeaveRequest,
        request: Awaitable[Any],
        success_message: str,
        failure_message: str,
        error_prefix: str,
    ) -> TransitionResult:
        try:
            response = await request
        except ApiError as e:
            logger.error(f"{error_prefix} for leave {leave.id}: {e}")
            notification = self._notifier.error(f"{error_prefix}: {e}")
            return TransitionResult(ok=False, leave=leave, message=notification.message)

        if not is_acknowledged(response):
            notification = self._notifier.error(failure_message)
            return TransitionResult(ok=False, leave=leave, message=notification.message)

        self._replace(updated)
        notification = self._notifier.success(success_message)
        self._refetch.emit(REFETCH_SOURCE)
        return TransitionResult(ok=True, leave=updated, message=notification.message)

    def _rejected(self, leave: LeaveRequest, error: ConsoleValidationError) -> TransitionResult:
        notification = self._notifier.warning(str(error))
        return TransitionResult(ok=False, leave=leave, message=notification.message)

    def _replace(self, updated: LeaveRequest) -> None:
        self._leaves = [updated if leave.id == updated.id else leave for leave in self._leaves]
