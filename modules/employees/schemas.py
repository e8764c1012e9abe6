"""
Employee Schemas.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Employee(BaseModel):
    """Row of the employee directory."""

    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )

    eid: str = ""
    full_name: str = Field(default="", alias="fullName")
    designation: str = ""
    branch: str = ""
    status: str = ""
    phone_number: str = Field(default="", alias="phoneNumber")
    photo: Optional[str] = None

    @field_validator("eid", "full_name", "designation", "branch", "status", "phone_number", mode="before")
    @classmethod
    def _null_to_empty(cls, value):
        return "" if value is None else value
