"""
Shift Service.

Creates and updates shifts. The API answers ``{success, message}``; only
``success: true`` counts as done.
"""

import logging
from typing import Any

from core.app_context import UserContext
from core.events import RefetchSignal
from core.exceptions import ApiConnectionError, ApiError, ApiResponseError, ConsoleValidationError
from core.http_client import DEFAULT_ERROR_MESSAGE, ApiClient
from core.notifications import Notifier
from modules.shifts.schemas import ShiftConfig

logger = logging.getLogger(__name__)

REFETCH_SOURCE = "shifts"
NEW_SHIFT_PATH = "/shifts/new-shift"
UPDATE_SHIFT_PATH = "/shifts/update-shift"


class ShiftService:
    """
    Shift endpoints with operator feedback.

    Args:
        api: Shared API client.
        notifier: Receives success / error messages.
        refetch: Emitted after a successful create or update.
        user: Operator; sent as ``userEmail``.
    """

    def __init__(self, api: ApiClient, notifier: Notifier, refetch: RefetchSignal, user: UserContext) -> None:
        self._api = api
        self._notifier = notifier
        self._refetch = refetch
        self._user = user

    async def create_shift(self, config: ShiftConfig) -> bool:
        payload = config.model_copy(update={"id": None}).to_payload(self._user.email)
        return await self._submit(
            "POST",
            NEW_SHIFT_PATH,
            payload,
            success_message="Shift created successfully",
            failure_message="Failed to create shift",
            error_message="Something went wrong while creating the shift",
        )

    async def update_shift(self, config: ShiftConfig) -> bool:
        """
        Update an existing shift.

        Raises:
            ConsoleValidationError: If the shift has no server id.
        """
        if not config.id:
            raise ConsoleValidationError("Only saved shifts can be updated")
        return await self._submit(
            "PUT",
            UPDATE_SHIFT_PATH,
            config.to_payload(self._user.email),
            success_message="Shift updated successfully",
            failure_message="Failed to update shift",
            error_message="Something went wrong while updating the shift",
        )

    async def _submit(
        self,
        method: str,
        path: str,
        payload: dict[str, Any],
        success_message: str,
        failure_message: str,
        error_message: str,
    ) -> bool:
        try:
            if method == "POST":
                response = await self._api.post(path, json=payload)
            else:
                response = await self._api.put(path, json=payload)
        except ApiResponseError as e:
            message = str(e)
            self._notifier.error(failure_message if message == DEFAULT_ERROR_MESSAGE else message)
            return False
        except ApiConnectionError as e:
            logger.error(f"Shift request to {path} failed: {e}")
            self._notifier.error(error_message)
            return False
        except ApiError as e:
            self._notifier.error(str(e) or failure_message)
            return False

        server_message = response.get("message") if isinstance(response, dict) else None
        if not (isinstance(response, dict) and response.get("success")):
            self._notifier.error(server_message or failure_message)
            return False

        self._notifier.success(server_message or success_message)
        self._refetch.emit(REFETCH_SOURCE)
        return True
