from dataclasses import dataclass
from unittest.mock import Mock

from pagedlist.events.bus import Event, EventBus
from pagedlist.events.collection_events import CollectionMutatedEvent, CollectionRefreshedEvent


@dataclass(kw_only=True)
class SimpleEvent(Event):
    payload: str = ""


def test_sync_subscribe_publish():
    bus = EventBus()
    received = []

    def handler(event: SimpleEvent):
        received.append(event.payload)

    bus.subscribe(SimpleEvent, handler)
    bus.publish(SimpleEvent(payload="hello"))

    assert received == ["hello"]


def test_multiple_handlers():
    bus = EventBus()
    count = 0

    def handler1(event):
        nonlocal count
        count += 1

    def handler2(event):
        nonlocal count
        count += 2

    bus.subscribe(SimpleEvent, handler1)
    bus.subscribe(SimpleEvent, handler2)

    bus.publish(SimpleEvent())

    assert count == 3


def test_base_class_subscription_sees_subclasses():
    bus = EventBus()
    seen = []
    bus.subscribe(Event, lambda e: seen.append(type(e).__name__))

    bus.publish(CollectionMutatedEvent(collection="expenses", action="created", item_id=1))
    bus.publish(CollectionRefreshedEvent(collection="expenses", generation=1, total_count=0))

    assert seen == ["CollectionMutatedEvent", "CollectionRefreshedEvent"]


def test_unsubscribe_and_cancel():
    bus = EventBus()
    received = []
    sub = bus.subscribe(SimpleEvent, lambda e: received.append("a"))
    other = bus.subscribe(SimpleEvent, lambda e: received.append("b"))

    bus.unsubscribe(sub)
    other.cancel()
    bus.publish(SimpleEvent())

    assert received == []
    assert bus.handler_count(SimpleEvent) == 0


def test_failing_handler_is_logged_and_isolated():
    logger = Mock()
    bus = EventBus(logger=logger)
    received = []

    def bad(event):
        raise RuntimeError("boom")

    bus.subscribe(SimpleEvent, bad)
    bus.subscribe(SimpleEvent, lambda e: received.append(e.payload))
    bus.publish(SimpleEvent(payload="ok"))

    assert received == ["ok"]
    logger.error.assert_called_once()
