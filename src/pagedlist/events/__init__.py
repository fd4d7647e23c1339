from .bus import Event, EventBus, Subscription
from .collection_events import CollectionMutatedEvent, CollectionRefreshedEvent

__all__ = [
    "Event",
    "EventBus",
    "Subscription",
    "CollectionMutatedEvent",
    "CollectionRefreshedEvent",
]
