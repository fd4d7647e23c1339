from .filters import FilterSet, Role
from .models import CollectionState, Page, PageQuery

__all__ = ["CollectionState", "FilterSet", "Page", "PageQuery", "Role"]
