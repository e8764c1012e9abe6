"""
Unit Tests for EmployeeDirectory.

Exercises the listing end to end over httpx.MockTransport.
"""

import httpx
import pytest

from core.config import ConsoleSettings
from core.http_client import ApiClient
from core.listing import ListQuery, SortOrder
from core.notifications import NotificationLevel, Notifier
from modules.employees.schemas import Employee
from modules.employees.services.directory import EmployeeDirectory, build_employee_params


@pytest.fixture
def settings():
    return ConsoleSettings(_env_file=None, api_base_url="http://hr.test")


@pytest.fixture
def notifier():
    return Notifier()


def make_directory(handler, settings, notifier) -> EmployeeDirectory:
    client = httpx.AsyncClient(base_url=settings.api_base_url, transport=httpx.MockTransport(handler))
    return EmployeeDirectory(ApiClient(client), notifier, settings)


class TestEmployeeParams:
    """Tests for the listing wire parameters."""

    def test_descending_sort_is_minus_one(self):
        query = ListQuery(search_text="ra", sort_key="branch", sort_order=SortOrder.DESC, page=3, page_size=50)
        assert build_employee_params(query) == {
            "search": "ra",
            "page": 3,
            "perPage": 50,
            "sortKey": "branch",
            "sortOrder": -1,
        }


class TestEmployeeDirectory:
    """Tests for EmployeeDirectory."""

    def test_query_state_defaults(self, settings, notifier):
        directory = EmployeeDirectory(api=None, notifier=notifier, settings=settings)
        state = directory.new_query_state()
        assert state.query.sort_key == "fullName"
        assert state.query.sort_order is SortOrder.ASC
        with pytest.raises(ValueError):
            state.set_sort_key("salary")

    @pytest.mark.asyncio
    async def test_fetch_page(self, settings, notifier):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen.update(request.url.params)
            return httpx.Response(200, json={
                "data": [{"eid": 7, "fullName": "Rahim Uddin", "branch": "dhaka", "status": "Active"}],
                "total": 41,
                "totalPages": 3,
            })

        directory = make_directory(handler, settings, notifier)
        state = await directory.fetch_page(ListQuery(sort_key="fullName", page=2))

        assert seen == {"search": "", "page": "2", "perPage": "20", "sortKey": "fullName", "sortOrder": "1"}
        assert state.rows[0].eid == "7"
        assert state.rows[0].full_name == "Rahim Uddin"
        assert (state.total_count, state.total_pages) == (41, 3)
        assert (state.first_row_number, state.last_row_number) == (21, 21)

    @pytest.mark.asyncio
    async def test_server_error_message_is_notified(self, settings, notifier):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, json={"message": "Database unavailable"})

        directory = make_directory(handler, settings, notifier)
        state = await directory.fetch_page(ListQuery(sort_key="fullName"))

        assert state.rows == []
        assert state.error is not None
        assert notifier.last.level is NotificationLevel.ERROR
        assert notifier.last.message == "Database unavailable"


class TestEmployeeRow:
    """Tests for the Employee row model."""

    def test_null_fields_become_empty(self):
        employee = Employee.model_validate({"eid": 1042, "fullName": None, "phoneNumber": None, "branch": None})
        assert employee.eid == "1042"
        assert (employee.full_name, employee.phone_number, employee.branch) == ("", "", "")
