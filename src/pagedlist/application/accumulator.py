"""Merge an arriving page into the collection state."""

from __future__ import annotations

from dataclasses import replace
from enum import Enum

from ..domain.models import CollectionState, Page


class MergeMode(Enum):
    REPLACE = "replace"
    APPEND = "append"


def merge(current: CollectionState, page: Page, mode: MergeMode) -> CollectionState:
    """Return the state that results from applying *page* to *current*.

    ``REPLACE`` discards the existing items (a reset fetch landed);
    ``APPEND`` keeps them and adds the page at the end in arrival order.
    Items are not deduplicated: the backend must not repeat items across the
    pages of one generation.
    """
    if mode is MergeMode.REPLACE:
        return replace(
            current,
            items=page.items,
            page_number=page.page_number,
            total_pages=page.total_pages,
            total_count=page.total_count,
            is_loading_initial=False,
            last_error=None,
            last_error_message=None,
        )
    return replace(
        current,
        items=current.items + page.items,
        page_number=page.page_number,
        total_pages=page.total_pages,
        total_count=page.total_count,
        is_loading_more=False,
        last_error=None,
        last_error_message=None,
    )
