"""
Unit Tests for LeaveApiService.

Tests request paths and bodies against a mocked ApiClient.
"""

from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest

from core.exceptions import ApiResponseError
from modules.leave.schemas import GrantDecision
from modules.leave.services.leave_api import LeaveApiService, is_acknowledged


@pytest.fixture
def mock_api():
    api = MagicMock()
    api.get = AsyncMock()
    api.put = AsyncMock(return_value={"modifiedCount": 1})
    return api


class TestIsAcknowledged:
    """Tests for the transition success rule."""

    @pytest.mark.parametrize("response, expected", [
        ({"modifiedCount": 1}, True),
        ({"modifiedCount": 0}, False),
        ({"message": "Leave granted"}, True),
        ({"modifiedCount": 0, "message": ""}, False),
        ({}, False),
        (None, False),
        ("ok", False),
    ])
    def test_rule(self, response, expected):
        assert is_acknowledged(response) is expected


class TestLeaveApiService:
    """Tests for LeaveApiService requests."""

    @pytest.mark.asyncio
    async def test_get_applied_leaves(self, mock_api):
        mock_api.get.return_value = [{"_id": "L1", "leaveDates": ["2025-03-02"]}]
        service = LeaveApiService(mock_api)

        leaves = await service.get_applied_leaves("hr@example.com")

        mock_api.get.assert_awaited_once_with("/getAppliedLeave", params={"userEmail": "hr@example.com"})
        assert leaves[0].requested_dates == [date(2025, 3, 2)]

    @pytest.mark.asyncio
    async def test_get_applied_leaves_empty_body(self, mock_api):
        mock_api.get.return_value = None
        assert await LeaveApiService(mock_api).get_applied_leaves("hr@example.com") == []

    @pytest.mark.asyncio
    async def test_get_applied_leaves_malformed(self, mock_api):
        mock_api.get.return_value = {"data": []}
        with pytest.raises(ApiResponseError):
            await LeaveApiService(mock_api).get_applied_leaves("hr@example.com")

    @pytest.mark.asyncio
    async def test_get_applied_leaves_null_fields(self, mock_api):
        mock_api.get.return_value = [{
            "_id": "1",
            "position": None,
            "reason": None,
            "employeeName": None,
            "leaveDates": ["2025-03-02"],
            "grantedDates": None,
            "status": "Pending",
        }]

        leaves = await LeaveApiService(mock_api).get_applied_leaves("hr@example.com")

        assert (leaves[0].position, leaves[0].reason, leaves[0].employee_name) == ("", "", "")
        assert leaves[0].granted_dates == []
        assert leaves[0].is_pending

    @pytest.mark.asyncio
    async def test_get_applied_leaves_timestamp_dates(self, mock_api):
        mock_api.get.return_value = [{"_id": "1", "leaveDates": ["2025-03-02T00:00:00.000Z", "2025-03-03"]}]

        leaves = await LeaveApiService(mock_api).get_applied_leaves("hr@example.com")

        assert leaves[0].requested_dates == [date(2025, 3, 2), date(2025, 3, 3)]

    @pytest.mark.asyncio
    async def test_get_applied_leaves_invalid_row(self, mock_api):
        mock_api.get.return_value = [{"_id": "1", "leaveDates": ["not a date"]}]
        with pytest.raises(ApiResponseError):
            await LeaveApiService(mock_api).get_applied_leaves("hr@example.com")

    @pytest.mark.asyncio
    async def test_grant_body(self, mock_api):
        decision = GrantDecision(granted_dates=(date(2025, 3, 2),), declined_dates=(date(2025, 3, 3),))

        await LeaveApiService(mock_api).grant("L1", decision, "hr@example.com")

        mock_api.put.assert_awaited_once_with(
            "/grantLeave/L1",
            json={
                "grantedDates": ["2025-03-02"],
                "declinedDates": ["2025-03-03"],
                "grantedBy": "hr@example.com",
            },
        )

    @pytest.mark.asyncio
    async def test_decline_path(self, mock_api):
        await LeaveApiService(mock_api).decline("L1")
        mock_api.put.assert_awaited_once_with("/declineLeave/L1")

    @pytest.mark.asyncio
    async def test_revoke_body(self, mock_api):
        await LeaveApiService(mock_api).revoke("L2", [date(2025, 4, 1)], "hr@example.com")
        mock_api.put.assert_awaited_once_with(
            "/revokeGrant/L2",
            json={
                "revokedDates": ["2025-04-01"],
                "revokedBy": "hr@example.com",
                "setStatusTo": "Cancelled",
            },
        )
