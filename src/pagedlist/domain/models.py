"""Value objects shared by the controller and its collaborators."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from ..errors import ErrorKind


@dataclass(frozen=True)
class Page:
    """One page of items as returned by a fetch collaborator."""

    items: Tuple[Any, ...] = ()
    page_number: int = 1
    total_pages: int = 1
    total_count: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))
        if self.page_number < 1:
            raise ValueError(f"page_number must be >= 1, got {self.page_number}")
        if self.total_pages < 1:
            object.__setattr__(self, "total_pages", 1)
        if self.total_count < 0:
            raise ValueError(f"total_count must be >= 0, got {self.total_count}")


@dataclass
class PageQuery:
    """Query sent to ``PageFetcher.fetch_page``.

    Dates are already expanded to their day boundaries; see
    :meth:`pagedlist.domain.filters.FilterSet.to_query`.
    """

    page: int = 1
    limit: int = 20
    search: Optional[str] = None
    owner_id: Optional[Any] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    status: Optional[str] = None

    def to_params(self) -> Dict[str, Any]:
        """Render the camelCase wire contract, omitting unset values."""
        params: Dict[str, Any] = {"page": self.page, "limit": self.limit}
        if self.search:
            params["search"] = self.search
        if self.owner_id is not None:
            params["ownerId"] = self.owner_id
        if self.start_date is not None:
            params["startDate"] = self.start_date.isoformat(timespec="milliseconds")
        if self.end_date is not None:
            params["endDate"] = self.end_date.isoformat(timespec="milliseconds")
        if self.status:
            params["status"] = self.status
        return params


@dataclass(frozen=True)
class CollectionState:
    """Read-only snapshot of a controller's collection."""

    items: Tuple[Any, ...] = ()
    page_number: int = 1
    total_pages: int = 1
    total_count: int = 0
    is_loading_initial: bool = False
    is_loading_more: bool = False
    last_error: Optional[ErrorKind] = None
    last_error_message: Optional[str] = None
    generation: int = 0

    @property
    def is_loading(self) -> bool:
        return self.is_loading_initial or self.is_loading_more

    @property
    def has_more(self) -> bool:
        return self.page_number < self.total_pages
