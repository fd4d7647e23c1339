from abc import ABC, abstractmethod
from typing import Any, Callable, Protocol

from ..domain.models import Page, PageQuery


class PageFetcher(Protocol):
    """Fetch collaborator consumed by ``CollectionController``.

    Implementations raise ``NetworkError``, ``AuthError`` or ``ServerError``
    from :mod:`pagedlist.errors`; timeouts are their responsibility.
    """

    async def fetch_page(self, query: PageQuery) -> Page: ...


class IDebounceScheduler(ABC):
    """Interface for coalescing rapid edits into one delayed action."""

    @abstractmethod
    def schedule(self, action: Callable[[], Any]) -> None:
        """Replace any pending action with *action* and restart the quiet period."""
        pass

    @abstractmethod
    def cancel(self) -> None:
        """Drop the pending action, if any, without running it."""
        pass

    @property
    @abstractmethod
    def pending(self) -> bool:
        pass


class IVisibilityTrigger(ABC):
    """Interface for an "end of list reached" signal source."""

    @abstractmethod
    def observe(self, sentinel: Any, callback: Callable[[], Any]) -> None:
        """Invoke *callback* whenever *sentinel* becomes visible."""
        pass

    @abstractmethod
    def unobserve(self) -> None:
        pass
