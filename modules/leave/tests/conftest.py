"""
Conftest for Leave Module Tests.

Provides shared fixtures for unit testing the leave workflow.
"""

from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest

from core.app_context import UserContext
from core.events import RefetchSignal
from core.notifications import Notifier
from core.roles import Role
from modules.leave.schemas import LeaveRequest


@pytest.fixture
def hr_user():
    """Signed-in HR operator."""
    return UserContext(email="hr@example.com", role=Role.HR_ADMIN)


@pytest.fixture
def notifier():
    return Notifier()


@pytest.fixture
def refetch():
    return RefetchSignal()


@pytest.fixture
def mock_leave_service():
    """LeaveApiService with every call mocked."""
    service = MagicMock()
    service.get_applied_leaves = AsyncMock(return_value=[])
    service.grant = AsyncMock(return_value={"modifiedCount": 1})
    service.decline = AsyncMock(return_value={"modifiedCount": 1})
    service.revoke = AsyncMock(return_value={"message": "Grant revoked"})
    return service


@pytest.fixture
def pending_leave():
    """A pending three-day application, as decoded from the API."""
    return LeaveRequest.model_validate({
        "_id": "L1",
        "employeeId": 1042,
        "employeeName": "Rahim Uddin",
        "position": "Operator",
        "leaveType": "Casual",
        "startDate": "2025-03-02",
        "endDate": "2025-03-04",
        "totalDays": 3,
        "leaveDates": ["2025-03-02", "2025-03-03", "2025-03-04"],
        "grantedDates": [],
        "status": "Pending",
    })


@pytest.fixture
def approved_leave():
    return LeaveRequest(
        id="L2",
        employee_name="Karim Ali",
        requested_dates=[date(2025, 4, 1), date(2025, 4, 2)],
        granted_dates=[date(2025, 4, 1)],
        declined_dates=[date(2025, 4, 2)],
        status="Approved",
    )
