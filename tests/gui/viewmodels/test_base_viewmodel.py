"""Tests for BaseViewModel: pure Python, no Qt dependency."""

from pagedlist.events.bus import EventBus
from pagedlist.events.collection_events import CollectionMutatedEvent
from pagedlist.gui.viewmodels.base import BaseViewModel


class TestBaseViewModel:
    def test_subscribe_event_receives_events(self):
        bus = EventBus()
        vm = BaseViewModel()
        received = []

        vm.subscribe_event(bus, CollectionMutatedEvent, lambda e: received.append(e.action))
        bus.publish(CollectionMutatedEvent(collection="todos", action="created"))

        assert received == ["created"]

    def test_dispose_cancels_subscriptions(self):
        bus = EventBus()
        vm = BaseViewModel()
        received = []

        sub = vm.subscribe_event(bus, CollectionMutatedEvent, lambda e: received.append(e.action))
        bus.publish(CollectionMutatedEvent(collection="todos", action="before"))
        vm.dispose()
        bus.publish(CollectionMutatedEvent(collection="todos", action="after"))

        assert received == ["before"]
        assert sub.active is False
        assert bus.handler_count(CollectionMutatedEvent) == 0

    def test_is_active_until_disposed(self):
        vm = BaseViewModel()
        assert vm.is_active
        vm.dispose()
        assert not vm.is_active
