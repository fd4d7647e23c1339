"""Tests for FilterSet, Role seeding and PageQuery rendering."""

from __future__ import annotations

from datetime import date, datetime

import pytest

from pagedlist.domain.filters import FilterSet, Role, canonical_field
from pagedlist.domain.models import PageQuery
from pagedlist.errors import InvalidFieldError


# ---------------------------------------------------------------------------
# Roles
# ---------------------------------------------------------------------------


class TestRole:
    def test_parse_accepts_strings_case_insensitively(self):
        assert Role.parse("Agent") is Role.AGENT
        assert Role.parse(" superadmin ") is Role.SUPERADMIN
        assert Role.parse(Role.ADMIN) is Role.ADMIN

    def test_parse_rejects_unknown_role(self):
        with pytest.raises(ValueError):
            Role.parse("guest")

    def test_only_agents_are_restricted(self):
        assert Role.AGENT.is_restricted
        assert not Role.ADMIN.is_restricted
        assert not Role.SUPERADMIN.is_restricted


# ---------------------------------------------------------------------------
# Defaults per role
# ---------------------------------------------------------------------------


class TestCreateDefault:
    @pytest.mark.parametrize("role", ["admin", "superadmin"])
    def test_privileged_roles_start_unfiltered(self, role):
        filters = FilterSet.create_default(role, identity=1)
        assert filters.search == ""
        assert filters.structured_fields() == {}
        assert filters.locked_fields == {}

    def test_restricted_role_is_seeded_and_locked(self):
        filters = FilterSet.create_default(Role.AGENT, identity="u-7")
        assert filters.get("owner_id") == "u-7"
        assert filters.is_locked("owner_id")
        assert filters.locked_fields == {"owner_id": "u-7"}

    @pytest.mark.parametrize("identity", [None, "", "   "])
    def test_restricted_role_needs_identity(self, identity):
        with pytest.raises(ValueError):
            FilterSet.create_default("agent", identity)


# ---------------------------------------------------------------------------
# Mutation
# ---------------------------------------------------------------------------


class TestUpdate:
    def test_aliases_map_to_snake_case(self):
        filters = FilterSet()
        filters.update("userId", 4)
        filters.update("startDate", "2024-03-01")
        assert filters.get("owner_id") == 4
        assert filters.get("start_date") == date(2024, 3, 1)
        assert canonical_field("endDate") == "end_date"

    def test_unknown_field_is_rejected(self):
        filters = FilterSet()
        with pytest.raises(InvalidFieldError) as excinfo:
            filters.update("colour", "red")
        assert excinfo.value.reason == "unknown"

    def test_locked_field_is_rejected_and_unchanged(self):
        filters = FilterSet.create_default("agent", identity=7)
        with pytest.raises(InvalidFieldError) as excinfo:
            filters.update("ownerId", 8)
        assert excinfo.value.field == "owner_id"
        assert filters.get("owner_id") == 7

    def test_empty_values_clear_a_field(self):
        filters = FilterSet(fields={"status": "open", "start_date": date(2024, 1, 1)})
        filters.update("status", "")
        filters.update("start_date", None)
        assert filters.structured_fields() == {}

    def test_datetimes_are_reduced_to_days(self):
        filters = FilterSet()
        filters.update("end_date", datetime(2024, 5, 6, 17, 30))
        assert filters.get("end_date") == date(2024, 5, 6)

    def test_non_date_value_is_rejected(self):
        filters = FilterSet()
        with pytest.raises(TypeError):
            filters.update("start_date", 20240101)

    def test_reset_keeps_locked_fields(self):
        filters = FilterSet.create_default("agent", identity=7)
        filters.set_search("fuel")
        filters.update("status", "closed")
        filters.reset()
        assert filters.search == ""
        assert filters.structured_fields() == {"owner_id": 7}

    def test_copy_is_independent(self):
        filters = FilterSet.create_default("agent", identity=7)
        clone = filters.copy()
        clone.update("status", "open")
        assert filters.get("status") is None
        assert clone.is_locked("owner_id")


# ---------------------------------------------------------------------------
# Equality
# ---------------------------------------------------------------------------


def test_equality_compares_search_and_set_fields():
    a = FilterSet(search="x", fields={"start_date": "2024-01-10"})
    b = FilterSet(search="x", fields={"start_date": date(2024, 1, 10), "status": None})
    assert a == b
    b.set_search("y")
    assert a != b


def test_filter_sets_are_unhashable():
    with pytest.raises(TypeError):
        hash(FilterSet())


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


class TestToQuery:
    def test_date_bounds_cover_whole_days(self):
        filters = FilterSet(fields={"start_date": date(2024, 1, 10), "end_date": date(2024, 1, 12)})
        query = filters.to_query(page=2, limit=10)
        assert query.page == 2
        assert query.limit == 10
        assert query.start_date == datetime(2024, 1, 10, 0, 0, 0)
        assert query.end_date == datetime(2024, 1, 12, 23, 59, 59, 999000)
        params = query.to_params()
        assert params["startDate"] == "2024-01-10T00:00:00.000"
        assert params["endDate"] == "2024-01-12T23:59:59.999"

    def test_search_is_trimmed_and_empty_search_omitted(self):
        assert FilterSet(search="  taxi ").to_query(1, 20).search == "taxi"
        query = FilterSet(search="   ").to_query(1, 20)
        assert query.search is None
        assert query.to_params() == {"page": 1, "limit": 20}

    def test_params_use_wire_names(self):
        query = PageQuery(page=3, limit=5, search="a", owner_id=9, status="open")
        assert query.to_params() == {
            "page": 3,
            "limit": 5,
            "search": "a",
            "ownerId": 9,
            "status": "open",
        }
