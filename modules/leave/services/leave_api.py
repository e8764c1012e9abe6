"""
Leave API Service.

HTTP calls for applied leave: listing and the grant / decline / revoke
transitions. Every transition is a single PUT; this layer does not
interpret the outcome beyond decoding it.
"""

import logging
from datetime import date
from typing import Any, Iterable

from pydantic import ValidationError

from core.exceptions import ApiResponseError
from core.http_client import ApiClient
from modules.leave.schemas import GrantDecision, LeaveRequest, LeaveStatus

logger = logging.getLogger(__name__)


def is_acknowledged(response: Any) -> bool:
    """
    Whether the server accepted a transition.

    The API answers ``{modifiedCount}`` from a raw update or ``{message}``
    from a handled one; either signals success.
    """
    if not isinstance(response, dict):
        return False
    modified = response.get("modifiedCount") or 0
    try:
        modified = int(modified)
    except (TypeError, ValueError):
        modified = 0
    return modified > 0 or bool(response.get("message"))


class LeaveApiService:
    """
    Client for the applied-leave endpoints.

    Args:
        api: Shared API client (required).
    """

    def __init__(self, api: ApiClient) -> None:
        self._api = api

    async def get_applied_leaves(self, user_email: str) -> list[LeaveRequest]:
        """
        Fetch the leave applications visible to ``user_email``.

        Raises:
            ApiError: On transport failure, error status or malformed body.
        """
        payload = await self._api.get("/getAppliedLeave", params={"userEmail": user_email})
        if payload is None:
            return []
        if not isinstance(payload, list):
            raise ApiResponseError("Malformed leave list from server")
        try:
            leaves = [LeaveRequest.model_validate(item) for item in payload]
        except ValidationError as e:
            logger.error(f"Could not parse leave applications: {e}")
            raise ApiResponseError("Malformed leave list from server") from e
        logger.debug(f"Fetched {len(leaves)} leave application(s)")
        return leaves

    async def grant(self, leave_id: str, decision: GrantDecision, granted_by: str) -> Any:
        return await self._api.put(f"/grantLeave/{leave_id}", json=decision.to_payload(granted_by))

    async def decline(self, leave_id: str) -> Any:
        return await self._api.put(f"/declineLeave/{leave_id}")

    async def revoke(
        self,
        leave_id: str,
        revoked_dates: Iterable[date],
        revoked_by: str,
        set_status_to: LeaveStatus = LeaveStatus.CANCELLED,
    ) -> Any:
        body = {
            "revokedDates": [d.isoformat() for d in revoked_dates],
            "revokedBy": revoked_by,
            "setStatusTo": str(set_status_to),
        }
        return await self._api.put(f"/revokeGrant/{leave_id}", json=body)
