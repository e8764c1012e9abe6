"""
Salary Sheet Schemas.

Rows of the monthly salary sheet. All amounts are computed by the server
and kept as Decimal; nothing is recomputed here.
"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


class SalaryRow(BaseModel):
    """One employee's line of the salary sheet."""

    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )

    name: str = ""
    email: str = ""
    account_number: str = Field(default="", alias="accountNumber")
    salary: Decimal = Decimal("0")
    per_day_salary: Decimal = Field(default=Decimal("0"), alias="perDaySalary")
    present: Optional[int] = None
    absent: Optional[int] = None
    total: Decimal = Decimal("0")

    @field_validator("name", "email", "account_number", mode="before")
    @classmethod
    def _null_to_empty(cls, value):
        return "" if value is None else value

    @field_validator("salary", "per_day_salary", "total", mode="before")
    @classmethod
    def _null_to_zero(cls, value):
        return Decimal("0") if value is None or value == "" else value
