"""Framework-free end-of-list triggers."""

from __future__ import annotations

from typing import Any, Callable, Optional

from ..config import SENTINEL_THRESHOLD_ROWS
from .interfaces import IVisibilityTrigger


class ManualVisibilityTrigger(IVisibilityTrigger):
    """Trigger fired explicitly, e.g. by a "Load more" button."""

    def __init__(self) -> None:
        self._sentinel: Any = None
        self._callback: Optional[Callable[[], Any]] = None

    @property
    def is_observing(self) -> bool:
        return self._callback is not None

    def observe(self, sentinel: Any, callback: Callable[[], Any]) -> None:
        self._sentinel = sentinel
        self._callback = callback

    def unobserve(self) -> None:
        self._sentinel = None
        self._callback = None

    def fire(self) -> None:
        if self._callback is not None:
            self._callback()


class ThresholdVisibilityTrigger(ManualVisibilityTrigger):
    """Fire when the last visible row gets close to the end of the loaded list.

    Rendering layers without a visibility API report their scroll position via
    :meth:`report_position`; the sentinel is considered visible once the last
    visible row is within *threshold* rows of ``loaded_count``.
    """

    def __init__(self, threshold: int = SENTINEL_THRESHOLD_ROWS) -> None:
        super().__init__()
        self._threshold = max(threshold, 0)

    def report_position(self, last_visible_index: int, loaded_count: int) -> bool:
        if loaded_count <= 0:
            return False
        if last_visible_index < loaded_count - 1 - self._threshold:
            return False
        self.fire()
        return True
