from dataclasses import dataclass
from typing import Any, Optional

from .bus import Event


@dataclass(kw_only=True)
class CollectionMutatedEvent(Event):
    """Published by CRUD collaborators after a successful create/update/delete."""
    collection: str
    action: str
    item_id: Optional[Any] = None


@dataclass(kw_only=True)
class CollectionRefreshedEvent(Event):
    """Published when a reset fetch has been applied to a collection."""
    collection: str
    generation: int
    total_count: int
