"""
Listing Schemas.

The canonical query descriptor shared by every paginated list view, and the
result/state objects produced by the list fetcher.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.config import PAGE_SIZE_OPTIONS
from core.exceptions import ApiError

T = TypeVar("T")


class SortOrder(str, Enum):
    """Sort direction of a listing."""

    ASC = "asc"
    DESC = "desc"

    def __str__(self) -> str:
        return self.value

    @property
    def wire_value(self) -> int:
        """Numeric form used by the API (1 ascending, -1 descending)."""
        return 1 if self is SortOrder.ASC else -1


class ListQuery(BaseModel):
    """
    Parameters of one server-side listing request.

    Immutable; use replace() to derive a changed copy (validated again).
    """

    model_config = ConfigDict(frozen=True)

    search_text: str = ""
    sort_key: str = ""
    sort_order: SortOrder = SortOrder.ASC
    page: int = Field(default=1, ge=1)
    page_size: int = 20
    filters: Dict[str, str] = Field(default_factory=dict)

    @field_validator("page_size")
    @classmethod
    def _check_page_size(cls, value: int) -> int:
        if value not in PAGE_SIZE_OPTIONS:
            raise ValueError(f"page_size must be one of {PAGE_SIZE_OPTIONS}")
        return value

    def replace(self, **changes: Any) -> "ListQuery":
        """Return a validated copy with the given fields changed."""
        data = self.model_dump()
        data.update(changes)
        return type(self).model_validate(data)

    def get_filter(self, name: str) -> str:
        return self.filters.get(name, "")


@dataclass(frozen=True)
class ListPage(Generic[T]):
    """One page of records as returned by a listing endpoint."""

    rows: List[T]
    total_count: int
    total_pages: int


@dataclass
class ListState(Generic[T]):
    """
    What a list view renders.

    rows/total_count/total_pages always belong to ``query`` (the last
    applied query), even while a newer request is loading.
    """

    rows: List[T] = field(default_factory=list)
    total_count: int = 0
    total_pages: int = 1
    is_loading: bool = False
    error: Optional[ApiError] = None
    query: Optional[ListQuery] = None

    @property
    def is_empty(self) -> bool:
        return not self.rows

    @property
    def first_row_number(self) -> int:
        """1-based index of the first row on the page (0 when empty)."""
        if self.query is None or not self.rows:
            return 0
        return (self.query.page - 1) * self.query.page_size + 1

    @property
    def last_row_number(self) -> int:
        if self.query is None or not self.rows:
            return 0
        return self.first_row_number + len(self.rows) - 1


@dataclass(frozen=True)
class ListEndpoint(Generic[T]):
    """
    A listing endpoint of the HR API.

    Attributes:
        path: URL path relative to the API base URL.
        build_params: Translates a ListQuery into query-string parameters.
        parse_row: Builds a record from one element of the ``data`` array.
    """

    path: str
    build_params: Callable[[ListQuery], Dict[str, Any]]
    parse_row: Callable[[Dict[str, Any]], T]


def compute_total_pages(total_count: int, page_size: int) -> int:
    """Number of pages for a result set; at least 1 so page 1 always exists."""
    if total_count <= 0:
        return 1
    return math.ceil(total_count / page_size)
