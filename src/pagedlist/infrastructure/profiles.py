"""Per-collection wire conventions of the admin backend.

The three list pages talk to endpoints that disagree on parameter names and
payload shapes.  A :class:`CollectionProfile` captures those differences so
one :class:`~pagedlist.infrastructure.rest_fetcher.RestPageFetcher` serves all
of them.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from ..domain.models import Page, PageQuery
from ..errors import ServerError


@dataclass(frozen=True)
class CollectionProfile:
    name: str
    path: str
    page_size: int = 20
    # Maps a PageQuery wire key (``limit``, ``ownerId``, ...) to the name the
    # endpoint expects.  Keys mapped to ``None`` are not sent.
    param_names: Mapping[str, Optional[str]] = field(default_factory=dict)
    items_keys: Tuple[str, ...] = ("items", "data", "rows")
    total_count_keys: Tuple[str, ...] = ("total", "count")
    total_pages_key: Optional[str] = "totalPages"

    def build_params(self, query: PageQuery) -> Dict[str, Any]:
        params: Dict[str, Any] = {}
        for key, value in query.to_params().items():
            name = self.param_names.get(key, key)
            if name is not None:
                params[name] = value
        return params

    def parse_page(self, payload: Any, query: PageQuery) -> Page:
        """Turn a decoded JSON body into a :class:`Page`.

        A bare list is a complete, single page.  Missing totals are derived
        from the item count, and missing page counts from the totals.
        """
        if isinstance(payload, list):
            return Page(items=payload, page_number=query.page, total_pages=query.page, total_count=len(payload))
        if not isinstance(payload, Mapping):
            raise ServerError(f"Unexpected {self.name} payload of type {type(payload).__name__}")

        items = _first_list(payload, self.items_keys)
        if items is None:
            raise ServerError(f"{self.name} payload carries no item list (looked for {', '.join(self.items_keys)})")

        total_count = _first_int(payload, self.total_count_keys)
        if total_count is None:
            total_count = (query.page - 1) * query.limit + len(items)

        total_pages = None
        if self.total_pages_key is not None:
            total_pages = _as_int(payload.get(self.total_pages_key))
        if total_pages is None:
            total_pages = math.ceil(total_count / query.limit) if query.limit > 0 else 1

        return Page(
            items=items,
            page_number=query.page,
            total_pages=max(total_pages, 1),
            total_count=max(total_count, 0),
        )


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value)
    return None


def _first_int(payload: Mapping[str, Any], keys: Sequence[str]) -> Optional[int]:
    for key in keys:
        value = _as_int(payload.get(key))
        if value is not None:
            return value
    return None


def _first_list(payload: Mapping[str, Any], keys: Sequence[str]) -> Optional[list]:
    for key in keys:
        value = payload.get(key)
        if isinstance(value, list):
            return value
    return None


EXPENSES = CollectionProfile(
    name="expenses",
    path="/expenses",
    page_size=20,
    param_names={"ownerId": "userId"},
    items_keys=("expenses", "data"),
    total_count_keys=("totalExpenses", "total"),
    total_pages_key="totalPages",
)

SUPPORT_MESSAGES = CollectionProfile(
    name="support",
    path="/support",
    page_size=10,
    param_names={"limit": "pageSize", "ownerId": None},
    items_keys=("data", "rows", "messages"),
    total_count_keys=("total", "count"),
    total_pages_key=None,
)

TODOS = CollectionProfile(
    name="todos",
    path="/todos",
    page_size=20,
    param_names={"ownerId": None},
    items_keys=("todos", "data"),
    total_count_keys=("total",),
    total_pages_key="totalPages",
)

PROFILES: Dict[str, CollectionProfile] = {
    profile.name: profile for profile in (EXPENSES, SUPPORT_MESSAGES, TODOS)
}


def get_profile(name: str) -> CollectionProfile:
    try:
        return PROFILES[name]
    except KeyError:
        raise KeyError(f"Unknown collection {name!r}; expected one of {', '.join(sorted(PROFILES))}") from None
