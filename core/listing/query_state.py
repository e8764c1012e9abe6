"""
Query State Manager.

Holds the search text, sort, page and page size of a list view and turns
operator input into committed ListQuery descriptors. Free-text search is
debounced so a fetch is not triggered per keystroke.

No network calls originate here; listeners (usually a ListDataFetcher)
react to the committed descriptors.
"""

import asyncio
import logging
from typing import Callable, Iterable, Optional

from core.listing.schemas import ListQuery, SortOrder

logger = logging.getLogger(__name__)

QueryListener = Callable[[ListQuery], None]

# Returns False to veto committing the given search text.
CommitGuard = Callable[[ListQuery, str], bool]


class QueryStateManager:
    """
    Owns the ListQuery of one list view.

    Rules:
        - committing search text, changing sort key, sort order, page size or
          a filter resets the page to 1
        - changing the page leaves every other field alone
        - listeners are only called when the committed query actually changes

    Args:
        initial: Starting query (defaults to page 1, size 20, no search).
        debounce_seconds: Delay before typed search text is committed.
        sort_keys: Allowed sort keys; any key is accepted when omitted.
        commit_guard: Optional veto for search commits.
    """

    def __init__(
        self,
        initial: Optional[ListQuery] = None,
        *,
        debounce_seconds: float = 0.5,
        sort_keys: Optional[Iterable[str]] = None,
        commit_guard: Optional[CommitGuard] = None,
    ) -> None:
        self._query = initial or ListQuery()
        self._debounce_seconds = debounce_seconds
        self._sort_keys = frozenset(sort_keys) if sort_keys is not None else None
        self._commit_guard = commit_guard
        self._listeners: list[QueryListener] = []
        self._pending_handle: Optional[asyncio.TimerHandle] = None
        self._pending_text: Optional[str] = None

        if self._sort_keys is not None and self._query.sort_key not in self._sort_keys:
            raise ValueError(f"Unknown sort key '{self._query.sort_key}'")

    @property
    def query(self) -> ListQuery:
        """The committed query descriptor."""
        return self._query

    @property
    def pending_search_text(self) -> Optional[str]:
        """Typed search text still waiting for its debounce delay, if any."""
        return self._pending_text

    def subscribe(self, listener: QueryListener) -> Callable[[], None]:
        """Register a listener; returns a callable that removes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # =========================================================================
    # Search (debounced)
    # =========================================================================

    def set_search_text(self, text: str) -> None:
        """
        Schedule ``text`` to be committed after the debounce delay.

        A newer call replaces the pending one. Without a running event loop
        (or with a zero delay) the text is committed immediately.
        """
        self._cancel_pending()

        if self._debounce_seconds <= 0:
            self._commit_search(text)
            return

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._commit_search(text)
            return

        self._pending_text = text
        self._pending_handle = loop.call_later(self._debounce_seconds, self._commit_search, text)

    def flush(self) -> None:
        """Commit a pending search right away (e.g. Enter pressed)."""
        if self._pending_text is None:
            return
        text = self._pending_text
        self._cancel_pending()
        self._commit_search(text)

    def cancel(self) -> None:
        """Drop a pending search without committing it (view closed)."""
        self._cancel_pending()

    def _cancel_pending(self) -> None:
        if self._pending_handle is not None:
            self._pending_handle.cancel()
        self._pending_handle = None
        self._pending_text = None

    def _commit_search(self, text: str) -> None:
        self._pending_handle = None
        self._pending_text = None

        if self._commit_guard is not None and not self._commit_guard(self._query, text):
            logger.debug("Search commit vetoed by guard")
            return

        self._update(self._query.replace(search_text=text, page=1))

    # =========================================================================
    # Sort / paging / filters
    # =========================================================================

    def set_sort_key(self, sort_key: str) -> None:
        if self._sort_keys is not None and sort_key not in self._sort_keys:
            raise ValueError(f"Unknown sort key '{sort_key}'")
        if sort_key == self._query.sort_key:
            return
        self._update(self._query.replace(sort_key=sort_key, page=1))

    def set_sort_order(self, sort_order: SortOrder) -> None:
        if sort_order == self._query.sort_order:
            return
        self._update(self._query.replace(sort_order=sort_order, page=1))

    def set_page_size(self, page_size: int) -> None:
        if page_size == self._query.page_size:
            return
        self._update(self._query.replace(page_size=page_size, page=1))

    def set_page(self, page: int) -> None:
        self._update(self._query.replace(page=page))

    def set_filter(self, name: str, value: Optional[str]) -> None:
        """Set (or clear, with an empty value) a view-specific filter."""
        filters = dict(self._query.filters)
        if value:
            filters[name] = value
        else:
            filters.pop(name, None)
        if filters == self._query.filters:
            return
        self._update(self._query.replace(filters=filters, page=1))

    def clamp_to(self, total_pages: int) -> None:
        """Send an out-of-range page back to 1 once the page count is known."""
        if self._query.page > max(total_pages, 1):
            self._update(self._query.replace(page=1))

    def _update(self, new_query: ListQuery) -> None:
        if new_query == self._query:
            return
        self._query = new_query
        for listener in list(self._listeners):
            try:
                listener(new_query)
            except Exception as e:
                logger.error(f"Query listener failed: {e}")
