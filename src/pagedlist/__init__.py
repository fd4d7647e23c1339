"""Incremental, filtered, paginated collection controller for admin list views."""

from .domain.filters import FilterSet, Role
from .domain.models import CollectionState, Page, PageQuery
from .errors import (
    AuthError,
    ErrorKind,
    InvalidFieldError,
    NetworkError,
    PagedListError,
    ServerError,
)
from .gui.viewmodels.collection_controller import CollectionController

__version__ = "0.1.0"

__all__ = [
    "AuthError",
    "CollectionController",
    "CollectionState",
    "ErrorKind",
    "FilterSet",
    "InvalidFieldError",
    "NetworkError",
    "Page",
    "PageQuery",
    "PagedListError",
    "Role",
    "ServerError",
]
