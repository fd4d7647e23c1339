"""Monotonic token used to recognise responses that arrive too late."""

from __future__ import annotations


class RequestGeneration:
    """Counter advanced once per reset fetch.

    Every fetch is tagged with the value current when it was issued; a
    response is only applied while :meth:`is_current` holds for its tag.
    """

    def __init__(self) -> None:
        self._value = 0

    @property
    def current(self) -> int:
        return self._value

    def advance(self) -> int:
        self._value += 1
        return self._value

    def is_current(self, tag: int) -> bool:
        return tag == self._value

    def __repr__(self) -> str:
        return f"RequestGeneration({self._value})"
