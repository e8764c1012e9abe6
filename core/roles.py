"""
Operator Roles.

Enumerates the roles the HR API assigns to signed-in users and groups them
the way the console grants access.
"""

from enum import Enum


class Role(str, Enum):
    """
    Role of the signed-in operator.

    Values match the role strings stored by the HR API.
    """

    ADMIN = "Admin"
    DEVELOPER = "Developer"
    HR_ADMIN = "HR-ADMIN"
    CLIENT = "client"
    EMPLOYEE = "employee"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str | None) -> "Role":
        """Map a raw role string to a Role; unknown or empty values become EMPLOYEE."""
        if not value:
            return cls.EMPLOYEE
        for role in cls:
            if role.value == value.strip():
                return role
        return cls.EMPLOYEE

    @property
    def is_staff(self) -> bool:
        """Admin, Developer and HR-ADMIN manage employees, leave and payroll."""
        return self in STAFF_ROLES

    @property
    def is_owner(self) -> bool:
        return self in OWNER_ROLES


STAFF_ROLES = frozenset({Role.ADMIN, Role.DEVELOPER, Role.HR_ADMIN})
OWNER_ROLES = frozenset({Role.ADMIN, Role.DEVELOPER})
