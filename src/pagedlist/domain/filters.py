"""Filter state for a paginated collection and its role-based defaults.

A :class:`FilterSet` holds the free-text ``search`` plus a small set of
structured fields.  Restricted roles get their own identity seeded into
``owner_id`` and locked: :meth:`FilterSet.reset` restores locked fields
instead of clearing them and :meth:`FilterSet.update` refuses to touch them.
"""

from __future__ import annotations

from datetime import date, datetime, time
from enum import Enum
from typing import Any, Dict, Optional

from dateutil import parser as date_parser

from ..errors import InvalidFieldError
from .models import PageQuery

OWNER_ID = "owner_id"
START_DATE = "start_date"
END_DATE = "end_date"
STATUS = "status"

STRUCTURED_FIELDS: tuple[str, ...] = (OWNER_ID, START_DATE, END_DATE, STATUS)
DATE_FIELDS: frozenset[str] = frozenset({START_DATE, END_DATE})

# camelCase spellings used on the wire and by the web pages.
FIELD_ALIASES: Dict[str, str] = {
    "ownerId": OWNER_ID,
    "userId": OWNER_ID,
    "startDate": START_DATE,
    "endDate": END_DATE,
}

_END_OF_DAY = time(23, 59, 59, 999000)


class Role(str, Enum):
    SUPERADMIN = "superadmin"
    ADMIN = "admin"
    AGENT = "agent"

    @classmethod
    def parse(cls, value: "Role | str") -> "Role":
        if isinstance(value, Role):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown role: {value!r}") from None

    @property
    def is_restricted(self) -> bool:
        """Restricted roles only ever see their own records."""
        return self is Role.AGENT


def canonical_field(name: str) -> str:
    """Return the snake_case field name for *name*, or raise for unknown fields."""
    canonical = FIELD_ALIASES.get(name, name)
    if canonical not in STRUCTURED_FIELDS:
        raise InvalidFieldError(name, reason="unknown")
    return canonical


def _normalise_value(field: str, value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    if field in DATE_FIELDS:
        return _as_day(value)
    return value


def _as_day(value: Any) -> date:
    # ``datetime`` is a subclass of ``date``; check it first.
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date_parser.isoparse(value.strip()).date()
    raise TypeError(f"Cannot interpret {value!r} as a calendar date")


class FilterSet:
    """Active query of a collection: search text plus structured fields."""

    def __init__(
        self,
        search: str = "",
        fields: Optional[Dict[str, Any]] = None,
        locked: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.search = search
        self._locked: Dict[str, Any] = {
            canonical_field(name): _normalise_value(canonical_field(name), value)
            for name, value in (locked or {}).items()
        }
        self._fields: Dict[str, Any] = {}
        for name, value in (fields or {}).items():
            field = canonical_field(name)
            if field not in self._locked:
                self._fields[field] = _normalise_value(field, value)
        self._fields.update(self._locked)

    @classmethod
    def create_default(cls, role: "Role | str", identity: Any = None) -> "FilterSet":
        """Build the initial filters for a caller with *role*.

        Privileged roles see every owner.  Restricted roles are pinned to
        ``owner_id = identity`` and that field is locked.
        """
        role = Role.parse(role)
        if not role.is_restricted:
            return cls()
        if _normalise_value(OWNER_ID, identity) is None:
            raise ValueError(f"Role {role.value!r} requires an identity to seed owner_id")
        return cls(locked={OWNER_ID: identity})

    # -- accessors -----------------------------------------------------------

    def get(self, name: str) -> Any:
        return self._fields.get(canonical_field(name))

    def is_locked(self, name: str) -> bool:
        return canonical_field(name) in self._locked

    @property
    def locked_fields(self) -> Dict[str, Any]:
        return dict(self._locked)

    def structured_fields(self) -> Dict[str, Any]:
        """Fields that currently hold a value."""
        return {k: v for k, v in self._fields.items() if v is not None}

    # -- mutation ------------------------------------------------------------

    def set_search(self, text: Optional[str]) -> None:
        self.search = text or ""

    def update(self, name: str, value: Any) -> None:
        field = canonical_field(name)
        if field in self._locked:
            raise InvalidFieldError(field)
        normalised = _normalise_value(field, value)
        if normalised is None:
            self._fields.pop(field, None)
        else:
            self._fields[field] = normalised

    def reset(self) -> None:
        """Clear search and unlocked fields, restoring locked ones."""
        self.search = ""
        self._fields = dict(self._locked)

    def copy(self) -> "FilterSet":
        clone = FilterSet(search=self.search)
        clone._locked = dict(self._locked)
        clone._fields = dict(self._fields)
        return clone

    # -- query ---------------------------------------------------------------

    def to_query(self, page: int, limit: int) -> PageQuery:
        """Build the fetch query for *page*.

        Dates are widened to an inclusive day range: the start date becomes
        its midnight, the end date its last millisecond.
        """
        start = self._fields.get(START_DATE)
        end = self._fields.get(END_DATE)
        search = self.search.strip()
        return PageQuery(
            page=page,
            limit=limit,
            search=search or None,
            owner_id=self._fields.get(OWNER_ID),
            start_date=datetime.combine(start, time.min) if start else None,
            end_date=datetime.combine(end, _END_OF_DAY) if end else None,
            status=self._fields.get(STATUS),
        )

    # -- comparison ----------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FilterSet):
            return NotImplemented
        return (
            self.search == other.search
            and self.structured_fields() == other.structured_fields()
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"FilterSet(search={self.search!r}, fields={self.structured_fields()!r}, "
            f"locked={sorted(self._locked)!r})"
        )
