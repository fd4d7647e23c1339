from .profiles import EXPENSES, PROFILES, SUPPORT_MESSAGES, TODOS, CollectionProfile, get_profile
from .rest_fetcher import RestPageFetcher

__all__ = [
    "CollectionProfile",
    "EXPENSES",
    "PROFILES",
    "RestPageFetcher",
    "SUPPORT_MESSAGES",
    "TODOS",
    "get_profile",
]
