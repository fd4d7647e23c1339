"""Filtered, paginated collection controller: pure Python, no Qt dependency.

One controller backs one list page (expenses, support messages, todos).  It
owns the active :class:`FilterSet` and the :class:`CollectionState`
snapshot, and drives two kinds of fetch through a ``PageFetcher``:

* a *reset fetch* (page 1, replaces the items) on every filter change or
  explicit refresh, which advances the request generation;
* a *continuation fetch* (next page, appended) when the end-of-list sentinel
  becomes visible, issued under the current generation.

Responses are applied only while their generation is still current, so a
slow response to an outdated query can never overwrite newer state.  Items
of the previous query stay visible until the replacement page arrives.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from typing import Any, Callable, Mapping, Optional

from pagedlist.application.accumulator import MergeMode, merge
from pagedlist.application.debounce import AsyncioDebounceScheduler
from pagedlist.application.generation import RequestGeneration
from pagedlist.application.interfaces import (
    IDebounceScheduler,
    IVisibilityTrigger,
    PageFetcher,
)
from pagedlist.config import DEFAULT_PAGE_SIZE
from pagedlist.domain.filters import FilterSet, Role
from pagedlist.domain.models import CollectionState, Page, PageQuery
from pagedlist.errors import FetchError, classify_error
from pagedlist.errors.handler import ErrorHandler
from pagedlist.events.bus import EventBus
from pagedlist.events.collection_events import (
    CollectionMutatedEvent,
    CollectionRefreshedEvent,
)
from pagedlist.gui.viewmodels.base import BaseViewModel
from pagedlist.gui.viewmodels.signal import ObservableProperty, Signal

LOGGER = logging.getLogger(__name__)


class CollectionController(BaseViewModel):
    """Incremental, filtered, paginated view over a remote collection.

    Sync entry points (:meth:`set_field`, :meth:`reset_filters`,
    :meth:`refresh`, :meth:`on_sentinel_visible`) must be called from code
    running on the asyncio loop; they return the scheduled fetch task, or
    ``None`` when nothing was issued, so callers may await the outcome.
    """

    def __init__(
        self,
        fetcher: PageFetcher,
        *,
        role: Role | str = Role.ADMIN,
        identity: Any = None,
        page_size: int = DEFAULT_PAGE_SIZE,
        debounce: Optional[IDebounceScheduler] = None,
        collection: Optional[str] = None,
        event_bus: Optional[EventBus] = None,
        error_handler: Optional[ErrorHandler] = None,
    ) -> None:
        super().__init__()
        if page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {page_size}")
        self._fetcher = fetcher
        self._page_size = page_size
        self._filters = FilterSet.create_default(role, identity)
        # Filters the current generation was issued with; continuation
        # fetches reuse them even while a new search is being debounced.
        self._issued_filters = self._filters.copy()
        self._generation = RequestGeneration()
        self._debounce = debounce or AsyncioDebounceScheduler()
        self._trigger: Optional[IVisibilityTrigger] = None
        self._tasks: set[asyncio.Task] = set()
        self._collection = collection
        self._event_bus = event_bus
        self._error_handler = error_handler

        # Observable state
        self.state = ObservableProperty(CollectionState())

        # Signals
        self.error_occurred = Signal()  # emits (exception, ErrorKind)
        self.page_loaded = Signal()  # emits (page_number, page_items)

        if event_bus is not None and collection:
            self.subscribe_event(event_bus, CollectionMutatedEvent, self._on_collection_mutated)

    # -- read side -----------------------------------------------------------

    def get_state(self) -> CollectionState:
        return self.state.value

    @property
    def filters(self) -> FilterSet:
        """A copy of the active filters; mutate through the controller."""
        return self._filters.copy()

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def collection(self) -> Optional[str]:
        return self._collection

    @property
    def can_load_more(self) -> bool:
        state = self.state.value
        return (
            not state.is_loading_initial
            and not state.is_loading_more
            and state.page_number < state.total_pages
        )

    def subscribe(self, callback: Callable[[CollectionState], Any]) -> Callable[[], None]:
        """Call *callback* with each new state; returns an unsubscribe callable."""
        return self.state.changed.connect(lambda new, _old: callback(new))

    # -- filter edits --------------------------------------------------------

    def set_search(self, text: Optional[str]) -> None:
        """Record *text* and issue a reset fetch after the quiet period."""
        if not self.is_active:
            return
        self._filters.set_search(text)
        self._debounce.schedule(self._on_search_settled)

    def set_field(self, name: str, value: Any) -> Optional[asyncio.Task]:
        """Update a structured filter and reset-fetch immediately.

        Raises ``InvalidFieldError`` for locked or unknown fields, leaving the
        filters and the state untouched.
        """
        if not self.is_active:
            return None
        self._filters.update(name, value)
        return self.refresh()

    def update_filters(
        self, fields: Mapping[str, Any], search: Optional[str] = None
    ) -> Optional[asyncio.Task]:
        """Apply several filter edits at once and issue a single reset fetch.

        All edits are validated before any is applied: one locked or unknown
        field raises ``InvalidFieldError`` and leaves the filters untouched.
        """
        if not self.is_active:
            return None
        candidate = self._filters.copy()
        for name, value in fields.items():
            candidate.update(name, value)
        if search is not None:
            candidate.set_search(search)
        self._filters = candidate
        return self.refresh()

    def reset_filters(self) -> Optional[asyncio.Task]:
        if not self.is_active:
            return None
        self._filters.reset()
        return self.refresh()

    def refresh(self) -> Optional[asyncio.Task]:
        """Issue a reset fetch with the current filters."""
        if not self.is_active:
            return None
        loop = asyncio.get_running_loop()
        # The reset carries the latest search text already.
        self._debounce.cancel()
        query, generation = self._begin_reset()
        return self._track(loop.create_task(self._run_fetch(query, generation, MergeMode.REPLACE)))

    # -- pagination ----------------------------------------------------------

    def attach_trigger(self, trigger: IVisibilityTrigger, sentinel: Any = None) -> None:
        """Load the next page whenever *trigger* reports *sentinel* visible."""
        self.detach_trigger()
        trigger.observe(sentinel, self.on_sentinel_visible)
        self._trigger = trigger

    def detach_trigger(self) -> None:
        if self._trigger is not None:
            self._trigger.unobserve()
            self._trigger = None

    def on_sentinel_visible(self) -> Optional[asyncio.Task]:
        if not self.is_active or not self.can_load_more:
            return None
        loop = asyncio.get_running_loop()
        query, generation = self._begin_continuation()
        return self._track(loop.create_task(self._run_fetch(query, generation, MergeMode.APPEND)))

    async def reset_fetch(self) -> None:
        if not self.is_active:
            return
        self._debounce.cancel()
        query, generation = self._begin_reset()
        await self._run_fetch(query, generation, MergeMode.REPLACE)

    async def continuation_fetch(self) -> bool:
        """Fetch and append the next page; ``False`` when not currently legal."""
        if not self.is_active or not self.can_load_more:
            return False
        query, generation = self._begin_continuation()
        await self._run_fetch(query, generation, MergeMode.APPEND)
        return True

    # -- lifecycle -----------------------------------------------------------

    def dispose(self) -> None:
        """Tear the controller down; late timers and responses become no-ops."""
        if not self.is_active:
            return
        super().dispose()
        self._debounce.cancel()
        self.detach_trigger()
        for task in list(self._tasks):
            task.cancel()
        self._tasks.clear()
        self.state.changed.disconnect_all()
        self.error_occurred.disconnect_all()
        self.page_loaded.disconnect_all()

    # -- internals -----------------------------------------------------------

    def _begin_reset(self) -> tuple[PageQuery, int]:
        generation = self._generation.advance()
        self._issued_filters = self._filters.copy()
        query = self._issued_filters.to_query(page=1, limit=self._page_size)
        self._set_state(
            replace(
                self.state.value,
                page_number=1,
                is_loading_initial=True,
                is_loading_more=False,
                last_error=None,
                last_error_message=None,
                generation=generation,
            )
        )
        LOGGER.debug("Reset fetch issued (generation %d): %s", generation, query)
        return query, generation

    def _begin_continuation(self) -> tuple[PageQuery, int]:
        state = self.state.value
        generation = self._generation.current
        query = self._issued_filters.to_query(page=state.page_number + 1, limit=self._page_size)
        self._set_state(replace(state, is_loading_more=True))
        LOGGER.debug("Continuation fetch issued (generation %d): page %d", generation, query.page)
        return query, generation

    async def _run_fetch(self, query: PageQuery, generation: int, mode: MergeMode) -> None:
        try:
            page = await self._fetcher.fetch_page(query)
        except Exception as exc:
            self._apply_failure(exc, generation, mode)
        else:
            self._apply_page(page, generation, mode)

    def _is_stale(self, generation: int) -> bool:
        return not self.is_active or not self._generation.is_current(generation)

    def _apply_page(self, page: Page, generation: int, mode: MergeMode) -> None:
        if self._is_stale(generation):
            LOGGER.debug(
                "Discarding page %d of generation %d (current %d)",
                page.page_number,
                generation,
                self._generation.current,
            )
            return
        self._set_state(merge(self.state.value, page, mode))
        self.page_loaded.emit(page.page_number, page.items)
        if mode is MergeMode.REPLACE and self._event_bus is not None and self._collection:
            self._event_bus.publish(
                CollectionRefreshedEvent(
                    collection=self._collection,
                    generation=generation,
                    total_count=page.total_count,
                )
            )

    def _apply_failure(self, exc: Exception, generation: int, mode: MergeMode) -> None:
        if self._is_stale(generation):
            LOGGER.debug("Ignoring failure of superseded generation %d: %s", generation, exc)
            return
        if not isinstance(exc, FetchError):
            LOGGER.error("Unexpected error from %r", self._fetcher, exc_info=exc)
        kind = classify_error(exc)
        state = self.state.value
        if mode is MergeMode.REPLACE:
            # Without the new first page the old items cannot be continued
            # under the new filters.
            failed = replace(
                state,
                is_loading_initial=False,
                total_pages=state.page_number,
                last_error=kind,
                last_error_message=str(exc),
            )
        else:
            failed = replace(
                state,
                is_loading_more=False,
                last_error=kind,
                last_error_message=str(exc),
            )
        self._set_state(failed)
        self.error_occurred.emit(exc, kind)
        if self._error_handler is not None:
            self._error_handler.handle(
                exc,
                context={
                    "collection": self._collection,
                    "generation": generation,
                    "mode": mode.value,
                },
            )

    def _set_state(self, state: CollectionState) -> None:
        self.state.value = state

    def _track(self, task: asyncio.Task) -> asyncio.Task:
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def _on_search_settled(self) -> None:
        if not self.is_active:
            return
        self.refresh()

    # -- EventBus handlers ---------------------------------------------------

    def _on_collection_mutated(self, event: CollectionMutatedEvent) -> None:
        if event.collection == self._collection:
            LOGGER.info("%s %s, resynchronising %s", event.action, event.item_id, self._collection)
            self.refresh()
