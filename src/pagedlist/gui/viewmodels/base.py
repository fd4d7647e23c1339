"""BaseViewModel: pure Python, no Qt dependency.

Tracks ``EventBus`` subscriptions so that concrete ViewModels have them
cancelled automatically via ``dispose()``.
"""

from __future__ import annotations

from typing import Callable, Type

from pagedlist.events.bus import EventBus, Subscription


class BaseViewModel:
    """ViewModel base class: pure Python, no Qt dependency."""

    def __init__(self) -> None:
        self._subscriptions: list[tuple[EventBus, Subscription]] = []
        self._disposed = False

    @property
    def is_active(self) -> bool:
        return not self._disposed

    def subscribe_event(
        self,
        event_bus: EventBus,
        event_type: Type,
        handler: Callable,
    ) -> Subscription:
        """Subscribe to an event type and track the subscription."""
        sub = event_bus.subscribe(event_type, handler)
        self._subscriptions.append((event_bus, sub))
        return sub

    def dispose(self) -> None:
        """Unsubscribe from every tracked event and mark the ViewModel inactive."""
        self._disposed = True
        for bus, sub in self._subscriptions:
            bus.unsubscribe(sub)
        self._subscriptions.clear()
