"""QTimer-backed debounce scheduler for Qt front-ends."""

from __future__ import annotations

from typing import Any, Callable, Optional

from PySide6.QtCore import QObject, QTimer

from ...application.interfaces import IDebounceScheduler
from ...config import SEARCH_DEBOUNCE_MS


class QtDebounceScheduler(QObject):
    """Single-shot ``QTimer`` that runs the last scheduled action.

    Every :meth:`schedule` call restarts the timer, so typing bursts collapse
    into one action once the user pauses for ``quiet_ms``.
    """

    def __init__(self, quiet_ms: int = SEARCH_DEBOUNCE_MS, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._action: Optional[Callable[[], Any]] = None
        self._timer = QTimer(self)
        self._timer.setInterval(max(quiet_ms, 0))
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self._fire)

    @property
    def quiet_ms(self) -> int:
        return self._timer.interval()

    @property
    def pending(self) -> bool:
        return self._timer.isActive()

    def schedule(self, action: Callable[[], Any]) -> None:
        self._action = action
        # start() on an active timer restarts it.
        self._timer.start()

    def cancel(self) -> None:
        self._timer.stop()
        self._action = None

    def _fire(self) -> None:
        action, self._action = self._action, None
        if action is not None:
            action()


IDebounceScheduler.register(QtDebounceScheduler)
