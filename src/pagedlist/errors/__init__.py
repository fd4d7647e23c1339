"""Custom exception hierarchy for pagedlist."""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    """Classification stored in ``CollectionState.last_error``."""

    NETWORK = "network"
    AUTH = "auth"
    SERVER = "server"


class PagedListError(Exception):
    """Base class for all custom errors raised by pagedlist."""


# --- 3-layer hierarchy ---

class DomainError(PagedListError):
    """Base class for domain-level errors."""


class InfrastructureError(PagedListError):
    """Base class for infrastructure-level errors."""


# --- Domain errors ---

class InvalidFieldError(DomainError):
    """Raised when a locked or unknown filter field is mutated."""

    def __init__(self, field: str, reason: str = "locked") -> None:
        super().__init__(f"Filter field {field!r} is {reason}")
        self.field = field
        self.reason = reason


# --- Fetch errors ---

class FetchError(InfrastructureError):
    """Base class for failures surfaced by a page fetch collaborator."""

    kind: ErrorKind = ErrorKind.SERVER


class NetworkError(FetchError):
    """Raised when the backend cannot be reached or does not answer in time."""

    kind = ErrorKind.NETWORK


class AuthError(FetchError):
    """Raised when the session is expired or the credentials are rejected."""

    kind = ErrorKind.AUTH


class ServerError(FetchError):
    """Raised when the backend answers with a non-2xx status."""

    kind = ErrorKind.SERVER

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


def classify_error(exc: BaseException) -> ErrorKind:
    """Map *exc* onto an :class:`ErrorKind`.

    Fetch errors carry their own kind; raw connectivity failures are treated as
    network errors and anything else as a server-side failure.
    """

    if isinstance(exc, FetchError):
        return exc.kind
    if isinstance(exc, (TimeoutError, ConnectionError)):
        return ErrorKind.NETWORK
    return ErrorKind.SERVER


# --- Settings errors ---

class SettingsError(PagedListError):
    """Base class for settings related failures."""


class SettingsLoadError(SettingsError):
    """Raised when the settings file cannot be parsed or loaded."""


class SettingsValidationError(SettingsError):
    """Raised when settings data fails schema validation."""


__all__ = [
    "AuthError",
    "DomainError",
    "ErrorKind",
    "FetchError",
    "InfrastructureError",
    "InvalidFieldError",
    "NetworkError",
    "PagedListError",
    "ServerError",
    "SettingsError",
    "SettingsLoadError",
    "SettingsValidationError",
    "classify_error",
]
