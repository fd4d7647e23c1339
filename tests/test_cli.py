"""Tests for the Typer command line entry point."""

from __future__ import annotations

from pathlib import Path

import pytest

pytest.importorskip("PySide6", reason="PySide6 is required for the settings layer", exc_type=ImportError)

from typer.testing import CliRunner

from collection_helpers import PagedFetcher
from pagedlist import cli
from pagedlist.errors import AuthError


runner = CliRunner()


class _FailingFetcher:
    def __init__(self, error: Exception) -> None:
        self._error = error

    async def fetch_page(self, query):
        raise self._error


@pytest.fixture
def settings_file(tmp_path: Path) -> Path:
    return tmp_path / "settings.json"


@pytest.fixture
def fake_fetcher(monkeypatch):
    built = {}

    def install(fetcher):
        def _build(base_url, profile, token, timeout):
            built.update(base_url=base_url, profile=profile, token=token, timeout=timeout)
            return fetcher

        monkeypatch.setattr(cli, "_build_fetcher", _build)
        return built

    return install


def test_profiles_lists_collections():
    result = runner.invoke(cli.app, ["profiles"])
    assert result.exit_code == 0
    for name in ("expenses", "support", "todos"):
        assert name in result.output


def test_browse_loads_requested_pages(fake_fetcher, settings_file, monkeypatch):
    fetcher = PagedFetcher([[{"id": 1, "title": "a"}], [{"id": 2, "title": "b"}], [{"id": 3, "title": "c"}]])
    built = fake_fetcher(fetcher)
    monkeypatch.setenv("PAGEDLIST_TOKEN", "secret")

    result = runner.invoke(
        cli.app,
        [
            "browse",
            "todos",
            "--base-url",
            "http://backend.test",
            "--settings",
            str(settings_file),
            "--search",
            "milk",
            "--pages",
            "2",
        ],
    )

    assert result.exit_code == 0, result.output
    assert "page 2 of 3" in result.output
    assert built["token"] == "secret"
    assert built["base_url"] == "http://backend.test"
    assert built["profile"].name == "todos"
    assert [q.page for q in fetcher.queries] == [1, 2]
    assert all(q.search == "milk" for q in fetcher.queries)


def test_browse_agent_is_pinned_to_identity(fake_fetcher, settings_file):
    fetcher = PagedFetcher([["x"]])
    fake_fetcher(fetcher)

    result = runner.invoke(
        cli.app,
        [
            "browse",
            "expenses",
            "--base-url",
            "http://backend.test",
            "--settings",
            str(settings_file),
            "--role",
            "agent",
            "--identity",
            "u-9",
            "--start-date",
            "2024-01-10",
        ],
    )

    assert result.exit_code == 0, result.output
    query = fetcher.queries[0]
    assert query.owner_id == "u-9"
    assert query.to_params()["startDate"] == "2024-01-10T00:00:00.000"
    assert query.limit == 20


def test_browse_agent_cannot_pick_owner(fake_fetcher, settings_file):
    fake_fetcher(PagedFetcher([["x"]]))

    result = runner.invoke(
        cli.app,
        [
            "browse",
            "expenses",
            "--base-url",
            "http://backend.test",
            "--settings",
            str(settings_file),
            "--role",
            "agent",
            "--identity",
            "u-9",
            "--owner",
            "u-1",
        ],
    )

    assert result.exit_code == 1
    assert "locked" in result.output


def test_browse_agent_without_identity(fake_fetcher, settings_file):
    fake_fetcher(PagedFetcher([["x"]]))

    result = runner.invoke(
        cli.app,
        ["browse", "todos", "--base-url", "http://backend.test", "--settings", str(settings_file), "--role", "agent"],
    )

    assert result.exit_code == 2
    assert "identity" in result.output


def test_browse_reports_auth_failure(fake_fetcher, settings_file):
    fake_fetcher(_FailingFetcher(AuthError("jwt expired")))

    result = runner.invoke(
        cli.app,
        ["browse", "support", "--base-url", "http://backend.test", "--settings", str(settings_file)],
    )

    assert result.exit_code == 1
    assert "jwt expired" in result.output
    assert "log in again" in result.output


def test_browse_requires_backend_url(settings_file):
    result = runner.invoke(cli.app, ["browse", "todos", "--settings", str(settings_file)])
    assert result.exit_code == 2
    assert "no backend URL" in result.output


def test_browse_unknown_collection(settings_file):
    result = runner.invoke(cli.app, ["browse", "invoices", "--settings", str(settings_file)])
    assert result.exit_code == 1
    assert "Unknown collection" in result.output


def test_browse_agent_with_blank_identity(fake_fetcher, settings_file):
    fetcher = PagedFetcher([["x"]])
    fake_fetcher(fetcher)

    result = runner.invoke(
        cli.app,
        [
            "browse",
            "todos",
            "--base-url",
            "http://backend.test",
            "--settings",
            str(settings_file),
            "--role",
            "agent",
            "--identity",
            "",
        ],
    )

    assert result.exit_code == 2
    assert "identity" in result.output
    assert fetcher.queries == []
