"""PySide6 adapters for :class:`CollectionController`.

Importing this package requires PySide6.  Drive the controller's fetch tasks
from Qt with ``PySide6.QtAsyncio`` so the asyncio loop and the Qt event loop
are the same.
"""

from .debounce import QtDebounceScheduler
from .list_model import CollectionListModel, ItemRole
from .visibility import ScrollAreaVisibilityTrigger

__all__ = [
    "CollectionListModel",
    "ItemRole",
    "QtDebounceScheduler",
    "ScrollAreaVisibilityTrigger",
]
