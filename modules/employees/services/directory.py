"""
Employee Directory Service.

Server-side searched, sorted and paginated employee listing.
"""

import logging
from typing import Any

from core.config import ConsoleSettings
from core.http_client import ApiClient
from core.listing import ListDataFetcher, ListEndpoint, ListQuery, ListState, QueryStateManager
from core.notifications import Notifier
from modules.employees.schemas import Employee

logger = logging.getLogger(__name__)

EMPLOYEES_PATH = "/employees/get-employees"
EMPLOYEE_SORT_KEYS = ("fullName", "status", "branch")
DEFAULT_SORT_KEY = "fullName"


def build_employee_params(query: ListQuery) -> dict[str, Any]:
    return {
        "search": query.search_text,
        "page": query.page,
        "perPage": query.page_size,
        "sortKey": query.sort_key,
        "sortOrder": query.sort_order.wire_value,
    }


EMPLOYEES_ENDPOINT: ListEndpoint[Employee] = ListEndpoint(
    path=EMPLOYEES_PATH,
    build_params=build_employee_params,
    parse_row=Employee.model_validate,
)


class EmployeeDirectory:
    """
    Employee listing bound to the console settings.

    Args:
        api: Shared API client.
        notifier: Receives fetch errors.
        settings: Page size and search debounce defaults.
    """

    def __init__(self, api: ApiClient, notifier: Notifier, settings: ConsoleSettings) -> None:
        self._api = api
        self._notifier = notifier
        self._settings = settings

    def new_query_state(self) -> QueryStateManager:
        return QueryStateManager(
            ListQuery(sort_key=DEFAULT_SORT_KEY, page_size=self._settings.default_page_size),
            debounce_seconds=self._settings.search_debounce_seconds,
            sort_keys=EMPLOYEE_SORT_KEYS,
        )

    def new_fetcher(self) -> ListDataFetcher[Employee]:
        return ListDataFetcher(self._api, EMPLOYEES_ENDPOINT, self._notifier)

    async def fetch_page(self, query: ListQuery) -> ListState[Employee]:
        """Fetch one page; errors are notified and left on the returned state."""
        if query.sort_key not in EMPLOYEE_SORT_KEYS:
            raise ValueError(f"Unknown sort key '{query.sort_key}'")
        return await self.new_fetcher().fetch(query)
