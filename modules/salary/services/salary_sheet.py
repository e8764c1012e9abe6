"""
Salary Sheet Service.

Paginated salary sheet listing and the full-month fetch used by exports.
Every request needs a reporting month; without one nothing is sent.
"""

import logging
from typing import Any, Optional

from core.config import ConsoleSettings
from core.exceptions import ApiResponseError, FilterRequiredError
from core.http_client import ApiClient
from core.listing import ListDataFetcher, ListEndpoint, ListQuery, QueryStateManager, parse_list_payload
from core.notifications import Notifier
from modules.salary.schemas import MONTH_NAMES, SalaryRow

logger = logging.getLogger(__name__)

SALARY_SHEET_PATH = "/salary/get-salary-sheet"
MONTH_FILTER = "month"


def build_salary_params(query: ListQuery) -> dict[str, Any]:
    return {
        "search": query.search_text,
        "month": query.get_filter(MONTH_FILTER),
        "page": query.page,
        "limit": query.page_size,
    }


SALARY_SHEET_ENDPOINT: ListEndpoint[SalaryRow] = ListEndpoint(
    path=SALARY_SHEET_PATH,
    build_params=build_salary_params,
    parse_row=SalaryRow.model_validate,
)


def require_month(month: Optional[str], notifier: Optional[Notifier] = None, action: str = "searching") -> str:
    """
    Check that a reporting month was chosen.

    Args:
        month: Selected month name (e.g. "March").
        notifier: Receives "Please select a month before <action>." when missing.
        action: Wording for the warning ("searching", "exporting", ...).

    Raises:
        FilterRequiredError: If no month is selected.
        ValueError: If the month is not a calendar month name.
    """
    if not month:
        message = f"Please select a month before {action}."
        if notifier is not None:
            notifier.warning(message)
        raise FilterRequiredError(message, filter_name=MONTH_FILTER)
    if month not in MONTH_NAMES:
        raise ValueError(f"Unknown month '{month}'")
    return month


class SalarySheetService:
    """
    Salary sheet endpoints.

    Args:
        api: Shared API client.
        notifier: Receives list errors and month warnings.
        settings: Console settings (page size, debounce, export limit).
    """

    def __init__(self, api: ApiClient, notifier: Notifier, settings: ConsoleSettings) -> None:
        self._api = api
        self._notifier = notifier
        self._settings = settings

    def _month_guard(self, query: ListQuery, text: str) -> bool:
        if query.get_filter(MONTH_FILTER):
            return True
        self._notifier.warning("Please select a month before searching.")
        return False

    def new_query_state(self, month: str = "") -> QueryStateManager:
        """Query state whose search commits are refused until a month is set."""
        filters = {MONTH_FILTER: month} if month else {}
        return QueryStateManager(
            ListQuery(page_size=self._settings.default_page_size, filters=filters),
            debounce_seconds=self._settings.search_debounce_seconds,
            commit_guard=self._month_guard,
        )

    def new_fetcher(self) -> ListDataFetcher[SalaryRow]:
        return ListDataFetcher(self._api, SALARY_SHEET_ENDPOINT, self._notifier)

    async def fetch_page(self, query: ListQuery, fetcher: Optional[ListDataFetcher[SalaryRow]] = None):
        """
        Fetch one page of the sheet for the query's month.

        Raises:
            FilterRequiredError: If the query carries no month.
        """
        require_month(query.get_filter(MONTH_FILTER), self._notifier, "searching")
        fetcher = fetcher or self.new_fetcher()
        return await fetcher.fetch(query)

    async def fetch_all(self, month: str, search: str = "") -> list[SalaryRow]:
        """
        Fetch every row of a month in one request.

        Raises:
            ApiError: On transport failure or an unusable response.
        """
        params = {
            "search": search,
            "month": month,
            "page": 1,
            "limit": self._settings.export_fetch_limit,
        }
        payload = await self._api.get(SALARY_SHEET_PATH, params=params)
        if payload is None:
            raise ApiResponseError("Empty salary sheet response from server")
        query = ListQuery(page_size=self._settings.default_page_size, filters={MONTH_FILTER: month})
        page = parse_list_payload(payload, SALARY_SHEET_ENDPOINT, query)
        logger.info(f"Fetched {len(page.rows)} salary row(s) for {month}")
        return page.rows
