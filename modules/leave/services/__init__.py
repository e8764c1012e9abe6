"""Leave services."""

from modules.leave.services.leave_api import LeaveApiService, is_acknowledged
from modules.leave.services.workflow import (
    GrantSelection,
    LeaveGrantWorkflow,
    TransitionResult,
    plan_full_grant,
    plan_partial_grant,
)

__all__ = [
    "GrantSelection",
    "LeaveApiService",
    "LeaveGrantWorkflow",
    "TransitionResult",
    "is_acknowledged",
    "plan_full_grant",
    "plan_partial_grant",
]
