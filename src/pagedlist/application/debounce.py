"""asyncio implementation of the search debounce timer."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Optional

from ..config import SEARCH_DEBOUNCE_MS
from .interfaces import IDebounceScheduler

LOGGER = logging.getLogger(__name__)


class AsyncioDebounceScheduler(IDebounceScheduler):
    """Run the most recently scheduled action once the quiet period elapses.

    The timer is armed with ``loop.call_later`` on the running loop (or the
    loop passed in), so it must be used from code running on that loop.
    """

    def __init__(
        self,
        quiet_ms: int = SEARCH_DEBOUNCE_MS,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> None:
        self._quiet_sec = max(quiet_ms, 0) / 1000.0
        self._loop = loop
        self._handle: Optional[asyncio.TimerHandle] = None

    @property
    def quiet_ms(self) -> int:
        return int(self._quiet_sec * 1000)

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def schedule(self, action: Callable[[], Any]) -> None:
        self.cancel()
        loop = self._loop or asyncio.get_running_loop()
        self._handle = loop.call_later(self._quiet_sec, self._fire, action)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self, action: Callable[[], Any]) -> None:
        self._handle = None
        LOGGER.debug("Quiet period of %.3fs elapsed, running %r", self._quiet_sec, action)
        action()
