from .signal import Signal, ObservableProperty
from .base import BaseViewModel
from .collection_controller import CollectionController

__all__ = [
    "BaseViewModel",
    "CollectionController",
    "ObservableProperty",
    "Signal",
]
