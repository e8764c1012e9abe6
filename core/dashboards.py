"""
Role dashboards.

Concrete IDashboard implementations and the role -> dashboard table.
"""

from typing import Dict, Optional

from core.interface import IDashboard
from core.roles import Role


class AdminDashboard(IDashboard):
    """Company owners and developers."""

    def get_dashboard_name(self) -> str:
        return "admin"

    def get_title(self) -> str:
        return "Admin Dashboard"

    def get_notice_board_route(self) -> Optional[str]:
        return "/notice-board-admin"


class HrDashboard(IDashboard):
    """HR administrators."""

    def get_dashboard_name(self) -> str:
        return "hr"

    def get_title(self) -> str:
        return "HR Dashboard"

    def get_notice_board_route(self) -> Optional[str]:
        return "/notice-board-admin"


class ClientDashboard(IDashboard):
    def get_dashboard_name(self) -> str:
        return "client"

    def get_title(self) -> str:
        return "Client Dashboard"


class EmployeeDashboard(IDashboard):
    """Fallback for employees and any role the console does not know."""

    def get_dashboard_name(self) -> str:
        return "employee"

    def get_title(self) -> str:
        return "Employee Dashboard"

    def get_notice_board_route(self) -> Optional[str]:
        return "/notice-board-employee"


DASHBOARD_BY_ROLE: Dict[Role, IDashboard] = {
    Role.ADMIN: AdminDashboard(),
    Role.DEVELOPER: AdminDashboard(),
    Role.HR_ADMIN: HrDashboard(),
    Role.CLIENT: ClientDashboard(),
}

DEFAULT_DASHBOARD: IDashboard = EmployeeDashboard()


def resolve_dashboard(role: Role) -> IDashboard:
    """Return the dashboard for a role, falling back to the employee dashboard."""
    return DASHBOARD_BY_ROLE.get(role, DEFAULT_DASHBOARD)
