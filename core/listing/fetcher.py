"""
List Data Fetcher.

Fetches one page of a listing endpoint per ListQuery and keeps the view
state (rows, totals, loading flag, last error).

Only the most recently issued request may change the rows: every fetch takes
a generation number, and a response whose generation is no longer current
(or that arrives after close()) is discarded when it completes. Nothing is
cancelled at the transport level and nothing is retried.
"""

import asyncio
import logging
from typing import Any, Callable, Generic, Optional, TypeVar

from pydantic import ValidationError

from core.exceptions import ApiError, ApiResponseError
from core.http_client import DEFAULT_ERROR_MESSAGE, ApiClient
from core.listing.query_state import QueryStateManager
from core.listing.schemas import ListEndpoint, ListPage, ListQuery, ListState, compute_total_pages
from core.notifications import Notifier

logger = logging.getLogger(__name__)

T = TypeVar("T")


def parse_list_payload(payload: Any, endpoint: ListEndpoint[T], query: ListQuery) -> ListPage[T]:
    """
    Convert a ``{data, total, totalPages}`` body into a ListPage.

    A bare JSON array is accepted as a single, complete page. A missing
    ``total`` falls back to the number of rows returned, a missing
    ``totalPages`` is derived from the total.

    Raises:
        ApiResponseError: If the body does not have the expected shape.
    """
    if isinstance(payload, list):
        raw_rows, total, total_pages = payload, len(payload), 1
    elif isinstance(payload, dict) and isinstance(payload.get("data", []), list):
        raw_rows = payload.get("data") or []
        total = payload.get("total")
        total_pages = payload.get("totalPages")
    else:
        raise ApiResponseError("Malformed list response from server")

    try:
        rows = [endpoint.parse_row(item) for item in raw_rows]
        total_count = len(rows) if total is None else int(total)
        if total_pages is None:
            total_pages = compute_total_pages(total_count, query.page_size)
        total_pages = int(total_pages)
    except (ValidationError, TypeError, ValueError) as e:
        logger.error(f"Could not parse list response from {endpoint.path}: {e}")
        raise ApiResponseError("Malformed list response from server") from e

    return ListPage(rows=rows, total_count=total_count, total_pages=total_pages)


class ListDataFetcher(Generic[T]):
    """
    Fetches pages of one listing endpoint.

    Args:
        api: API client used for the GET requests.
        endpoint: Endpoint description (path, param builder, row parser).
        notifier: Receives an error notification when a fetch fails.
    """

    def __init__(
        self,
        api: ApiClient,
        endpoint: ListEndpoint[T],
        notifier: Optional[Notifier] = None,
    ) -> None:
        self._api = api
        self._endpoint = endpoint
        self._notifier = notifier
        self._state: ListState[T] = ListState()
        self._generation = 0
        self._closed = False
        self._last_query: Optional[ListQuery] = None
        self._tasks: set[asyncio.Task] = set()
        self._unsubscribe: Optional[Callable[[], None]] = None

    @property
    def state(self) -> ListState[T]:
        return self._state

    @property
    def endpoint(self) -> ListEndpoint[T]:
        return self._endpoint

    async def fetch(self, query: ListQuery) -> ListState[T]:
        """
        Fetch the page described by ``query``.

        Returns the state after this request settled. If a newer fetch was
        issued meanwhile, the returned state is untouched by this response.
        """
        self._generation += 1
        generation = self._generation
        self._last_query = query
        self._state.is_loading = True

        params = self._endpoint.build_params(query)
        try:
            payload = await self._api.get(self._endpoint.path, params=params)
            page = parse_list_payload(payload, self._endpoint, query)
        except ApiError as e:
            if self._is_current(generation):
                self._state.error = e
                self._state.is_loading = False
                if self._notifier is not None:
                    self._notifier.error(str(e) or DEFAULT_ERROR_MESSAGE)
            else:
                logger.debug(f"Ignoring failure of superseded request to {self._endpoint.path}")
            return self._state

        if not self._is_current(generation):
            logger.debug(f"Discarding stale response from {self._endpoint.path} (page {query.page})")
            return self._state

        self._state.rows = page.rows
        self._state.total_count = page.total_count
        self._state.total_pages = page.total_pages
        self._state.query = query
        self._state.error = None
        self._state.is_loading = False
        return self._state

    def _is_current(self, generation: int) -> bool:
        return not self._closed and generation == self._generation

    # =========================================================================
    # Binding to a QueryStateManager
    # =========================================================================

    def bind(self, query_state: QueryStateManager) -> None:
        """Fetch whenever the committed query of ``query_state`` changes."""
        if self._unsubscribe is not None:
            self._unsubscribe()
        self._unsubscribe = query_state.subscribe(self.schedule)

    def schedule(self, query: ListQuery) -> asyncio.Task:
        """Start fetch(query) as a task on the running loop."""
        task = asyncio.get_running_loop().create_task(self.fetch(query))
        # Keep a reference until done so the task is not garbage collected
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def refresh(self) -> Optional[asyncio.Task]:
        """Re-issue the last query (refetch signal handler)."""
        if self._last_query is None or self._closed:
            return None
        return self.schedule(self._last_query)

    async def wait_idle(self) -> None:
        """Wait until every scheduled fetch has completed."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    def close(self) -> None:
        """Stop applying responses and detach from the query state."""
        self._closed = True
        self._state.is_loading = False
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
