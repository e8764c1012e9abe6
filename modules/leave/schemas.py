"""
Leave Schemas.

Pydantic models for leave applications as returned by the HR API, and the
value objects produced by the grant workflow.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LeaveStatus(str, Enum):
    """
    Lifecycle of a leave application.

    Pending -> Approved | Declined | Cancelled, Approved -> Cancelled (revoke).
    """

    PENDING = "Pending"
    APPROVED = "Approved"
    DECLINED = "Declined"
    CANCELLED = "Cancelled"

    def __str__(self) -> str:
        return self.value


class GrantMode(str, Enum):
    """Choice offered when accepting a leave application."""

    FULL = "full"
    PARTIAL = "partial"

    def __str__(self) -> str:
        return self.value


class LeaveRequest(BaseModel):
    """A leave application (wire names as aliases)."""

    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )

    id: str = Field(..., alias="_id")
    employee_id: str = Field(default="", alias="employeeId")
    employee_name: str = Field(default="", alias="employeeName")
    position: str = ""
    leave_type: str = Field(default="", alias="leaveType")
    start_date: str = Field(default="", alias="startDate")
    end_date: str = Field(default="", alias="endDate")
    total_days: Optional[int] = Field(default=None, alias="totalDays")
    requested_dates: list[date] = Field(default_factory=list, alias="leaveDates")
    granted_dates: list[date] = Field(default_factory=list, alias="grantedDates")
    declined_dates: list[date] = Field(default_factory=list, alias="declinedDates")
    status: LeaveStatus = LeaveStatus.PENDING
    reason: str = ""

    @field_validator(
        "employee_id", "employee_name", "position", "leave_type", "start_date", "end_date", "reason",
        mode="before",
    )
    @classmethod
    def _null_to_empty(cls, value):
        return "" if value is None else value

    @field_validator("requested_dates", "granted_dates", "declined_dates", mode="before")
    @classmethod
    def _wire_dates(cls, value):
        """Anything but a list means no dates; timestamps keep their date part."""
        if not isinstance(value, list):
            return []
        return [item[:10] if isinstance(item, str) else item for item in value]

    @field_validator("status", mode="before")
    @classmethod
    def _default_status(cls, value):
        return LeaveStatus.PENDING if value is None else value

    @property
    def is_pending(self) -> bool:
        return self.status is LeaveStatus.PENDING

    @property
    def can_revoke(self) -> bool:
        """Revoke is offered for approved applications with granted dates."""
        return self.status is LeaveStatus.APPROVED and bool(self.granted_dates)


@dataclass(frozen=True)
class GrantDecision:
    """
    Outcome of a grant: the requested dates split into granted and declined.

    granted_dates is sorted ascending; declined_dates keeps request order.
    """

    granted_dates: tuple[date, ...]
    declined_dates: tuple[date, ...]

    def to_payload(self, granted_by: str) -> dict:
        """Body of PUT /grantLeave/{id}."""
        return {
            "grantedDates": [d.isoformat() for d in self.granted_dates],
            "declinedDates": [d.isoformat() for d in self.declined_dates],
            "grantedBy": granted_by,
        }


@dataclass(frozen=True)
class LeaveSummary:
    """Counters shown above the applied-leave table."""

    total: int
    approved: int
    pending: int
