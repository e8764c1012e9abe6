"""
Listing package.

Search/sort/pagination state and page fetching shared by all list views.
"""

from core.listing.fetcher import ListDataFetcher, parse_list_payload
from core.listing.query_state import QueryStateManager
from core.listing.schemas import (
    ListEndpoint,
    ListPage,
    ListQuery,
    ListState,
    SortOrder,
    compute_total_pages,
)

__all__ = [
    "ListDataFetcher",
    "ListEndpoint",
    "ListPage",
    "ListQuery",
    "ListState",
    "QueryStateManager",
    "SortOrder",
    "compute_total_pages",
    "parse_list_payload",
]
