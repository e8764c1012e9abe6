"""
Shift Schemas.

Working shift configuration: hours, lateness thresholds, overtime and
weekly days off.
"""

import re
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class Weekday(str, Enum):
    """Days offered as weekends, in the order the form lists them."""

    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"

    def __str__(self) -> str:
        return self.value


class ShiftConfig(BaseModel):
    """
    A shift as sent to /shifts/new-shift and /shifts/update-shift.

    ``id`` is only set for shifts that already exist on the server.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    id: Optional[str] = Field(default=None, alias="_id")
    shift_name: str = Field(min_length=1, alias="shiftName")
    branch: str = "dhaka"
    start_time: str = Field(alias="startTime")
    end_time: str = Field(alias="endTime")
    late_after_minutes: int = Field(default=0, ge=0, alias="lateAfterMinutes")
    absent_after_minutes: int = Field(default=5, ge=0, alias="absentAfterMinutes")
    allow_ot: bool = Field(default=True, alias="allowOT")
    weekends: tuple[Weekday, ...] = ()

    @field_validator("start_time", "end_time")
    @classmethod
    def _check_time(cls, value: str) -> str:
        if not _TIME_PATTERN.match(value):
            raise ValueError("time must be HH:MM (24-hour)")
        return value

    @field_validator("weekends")
    @classmethod
    def _check_weekends(cls, value: tuple[Weekday, ...]) -> tuple[Weekday, ...]:
        if len(set(value)) != len(value):
            raise ValueError("weekends must not repeat a day")
        return value

    def to_payload(self, user_email: str) -> dict[str, Any]:
        """Request body; ``_id`` is included only when the shift exists."""
        body = self.model_dump(mode="json", by_alias=True, exclude_none=True)
        body["userEmail"] = user_email
        return body


def toggle_weekend(config: ShiftConfig, day: Union[Weekday, str]) -> ShiftConfig:
    """Return a copy of ``config`` with ``day`` added to or removed from its weekends."""
    day = Weekday(day)
    if day in config.weekends:
        weekends = tuple(d for d in config.weekends if d is not day)
    else:
        weekends = config.weekends + (day,)
    return config.model_copy(update={"weekends": weekends})
