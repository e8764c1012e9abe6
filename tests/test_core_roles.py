"""
Unit Tests for roles, dashboards and role-based menus.
"""

import pytest

from core.dashboards import AdminDashboard, ClientDashboard, EmployeeDashboard, HrDashboard, resolve_dashboard
from core.interface import IAppModule
from core.registry import ModuleRegistry
from core.roles import OWNER_ROLES, STAFF_ROLES, Role


class TestRole:
    """Tests for Role parsing and groups."""

    @pytest.mark.parametrize("raw, expected", [
        ("Admin", Role.ADMIN),
        ("Developer", Role.DEVELOPER),
        ("HR-ADMIN", Role.HR_ADMIN),
        ("client", Role.CLIENT),
        ("employee", Role.EMPLOYEE),
        (" Admin ", Role.ADMIN),
        ("superuser", Role.EMPLOYEE),
        ("", Role.EMPLOYEE),
        (None, Role.EMPLOYEE),
    ])
    def test_parse(self, raw, expected):
        assert Role.parse(raw) is expected

    def test_groups(self):
        assert STAFF_ROLES == {Role.ADMIN, Role.DEVELOPER, Role.HR_ADMIN}
        assert OWNER_ROLES < STAFF_ROLES
        assert Role.HR_ADMIN.is_staff and not Role.HR_ADMIN.is_owner
        assert not Role.CLIENT.is_staff

    def test_str_is_wire_value(self):
        assert str(Role.HR_ADMIN) == "HR-ADMIN"


class TestDashboards:
    """Tests for dashboard dispatch."""

    @pytest.mark.parametrize("role, dashboard_type", [
        (Role.ADMIN, AdminDashboard),
        (Role.DEVELOPER, AdminDashboard),
        (Role.HR_ADMIN, HrDashboard),
        (Role.CLIENT, ClientDashboard),
        (Role.EMPLOYEE, EmployeeDashboard),
    ])
    def test_resolve(self, role, dashboard_type):
        assert isinstance(resolve_dashboard(role), dashboard_type)

    def test_notice_boards(self):
        assert resolve_dashboard(Role.HR_ADMIN).get_notice_board_route() == "/notice-board-admin"
        assert resolve_dashboard(Role.EMPLOYEE).get_notice_board_route() == "/notice-board-employee"
        assert resolve_dashboard(Role.CLIENT).get_notice_board_route() is None


class ClientPortal(IAppModule):
    allowed_roles = frozenset({Role.CLIENT})

    def get_module_name(self) -> str:
        return "portal"

    def on_entry(self, context) -> None:
        pass


class TestRoleMenus:
    """Tests for menus built from registered modules."""

    def test_render_filters_menu_by_role(self, mock_module):
        registry = ModuleRegistry()
        registry.register(mock_module)
        registry.register(ClientPortal())

        hr_view = resolve_dashboard(Role.HR_ADMIN).render(Role.HR_ADMIN, registry)
        client_view = resolve_dashboard(Role.CLIENT).render(Role.CLIENT, registry)
        employee_view = resolve_dashboard(Role.EMPLOYEE).render(Role.EMPLOYEE, registry)

        assert hr_view["title"] == "HR Dashboard"
        assert [item["label"] for item in hr_view["menu"]] == ["sample"]
        assert [item["route"] for item in client_view["menu"]] == ["/portal"]
        assert employee_view["menu"] == []
