"""Scroll-position based end-of-list trigger for Qt item views."""

from __future__ import annotations

from typing import Any, Callable, Optional

from PySide6.QtCore import QObject
from PySide6.QtWidgets import QAbstractScrollArea, QScrollBar

from ...application.interfaces import IVisibilityTrigger
from ...config import SENTINEL_THRESHOLD_PX


class ScrollAreaVisibilityTrigger(QObject):
    """Treat the bottom of a scroll area as the end-of-list sentinel.

    The callback fires when the vertical scroll bar comes within
    ``threshold_px`` of its maximum, either because the user scrolled or
    because the content shrank (``rangeChanged``).  A scroll area without a
    scroll range (all rows fit) also counts as showing its end, which is checked
    as soon as the area is observed.
    """

    def __init__(self, threshold_px: int = SENTINEL_THRESHOLD_PX, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._threshold_px = max(threshold_px, 0)
        self._scroll_bar: Optional[QScrollBar] = None
        self._callback: Optional[Callable[[], Any]] = None

    @property
    def is_observing(self) -> bool:
        return self._callback is not None

    def observe(self, sentinel: QAbstractScrollArea, callback: Callable[[], Any]) -> None:
        self.unobserve()
        self._scroll_bar = sentinel.verticalScrollBar()
        self._callback = callback
        self._scroll_bar.valueChanged.connect(self._on_scrolled)
        self._scroll_bar.rangeChanged.connect(self._on_range_changed)
        self.check()

    def unobserve(self) -> None:
        if self._scroll_bar is not None:
            self._scroll_bar.valueChanged.disconnect(self._on_scrolled)
            self._scroll_bar.rangeChanged.disconnect(self._on_range_changed)
        self._scroll_bar = None
        self._callback = None

    def check(self) -> bool:
        """Fire the callback if the end of the list is currently in view."""
        bar = self._scroll_bar
        if bar is None or self._callback is None:
            return False
        if bar.maximum() - bar.value() > self._threshold_px:
            return False
        self._callback()
        return True

    def _on_scrolled(self, _value: int) -> None:
        self.check()

    def _on_range_changed(self, _minimum: int, _maximum: int) -> None:
        self.check()


IVisibilityTrigger.register(ScrollAreaVisibilityTrigger)
