"""Typer-based CLI entry point."""

from __future__ import annotations

import asyncio
import functools
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.table import Table

from .application.debounce import AsyncioDebounceScheduler
from .domain.models import CollectionState
from .errors import ErrorKind, PagedListError
from .gui.viewmodels.collection_controller import CollectionController
from .infrastructure.profiles import PROFILES, CollectionProfile, get_profile
from .infrastructure.rest_fetcher import RestPageFetcher
from .settings.manager import SettingsManager
from .utils.logging import ensure_console_logger, get_logger

app = typer.Typer(help="Browse filtered, paginated admin collections from the command line")
console = Console()

_MAX_COLUMNS = 6


def _handle_errors(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except KeyError as exc:
            typer.echo(f"Error: {exc.args[0]}", err=True)
            raise typer.Exit(1) from exc
        except PagedListError as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(1) from exc

    return wrapper


def _load_settings(path: Optional[Path]) -> SettingsManager:
    manager = SettingsManager(path=path)
    manager.load()
    return manager


def _build_fetcher(
    base_url: str, profile: CollectionProfile, token: Optional[str], timeout: float
) -> RestPageFetcher:
    return RestPageFetcher(base_url, profile, token=token, timeout=timeout)


def _render(state: CollectionState, profile: CollectionProfile) -> Table:
    table = Table(title=f"{profile.name}: {len(state.items)} of {state.total_count}")
    rows = list(state.items)
    columns: list[str] = []
    for item in rows:
        if isinstance(item, dict):
            for key in item:
                if key not in columns and len(columns) < _MAX_COLUMNS:
                    columns.append(key)
    if not columns:
        table.add_column("item")
        for item in rows:
            table.add_row(str(item))
        return table
    for column in columns:
        table.add_column(column)
    for item in rows:
        values = item if isinstance(item, dict) else {}
        table.add_row(*("" if values.get(c) is None else str(values.get(c)) for c in columns))
    return table


async def _browse(controller: CollectionController, fields: dict[str, Any], search: str, pages: int) -> None:
    await controller.update_filters(fields, search=search)
    loaded = 1
    while loaded < pages and await controller.continuation_fetch():
        loaded += 1
        if controller.get_state().last_error is not None:
            break


@app.command("profiles")
def profiles() -> None:
    """List the collections this client knows how to page through."""

    table = Table(title="Collections")
    for column in ("name", "path", "page size", "parameters"):
        table.add_column(column)
    for profile in PROFILES.values():
        renamed = ", ".join(
            f"{key}->{value or '-'}" for key, value in sorted(profile.param_names.items())
        )
        table.add_row(profile.name, profile.path, str(profile.page_size), renamed)
    console.print(table)


@app.command()
@_handle_errors
def browse(
    collection: str = typer.Argument(..., help="expenses, support or todos"),
    base_url: Optional[str] = typer.Option(None, help="Backend base URL (defaults to settings api.base_url)"),
    token: Optional[str] = typer.Option(None, envvar="PAGEDLIST_TOKEN", help="Bearer token"),
    role: str = typer.Option("admin", help="Caller role: superadmin, admin or agent"),
    identity: Optional[str] = typer.Option(None, help="Caller identifier, required for agents"),
    search: str = typer.Option("", help="Free-text search"),
    owner: Optional[str] = typer.Option(None, help="Restrict to one owner (privileged roles)"),
    start_date: Optional[datetime] = typer.Option(None, formats=["%Y-%m-%d"]),
    end_date: Optional[datetime] = typer.Option(None, formats=["%Y-%m-%d"]),
    status: Optional[str] = typer.Option(None, help="Status filter (support messages)"),
    pages: int = typer.Option(1, min=1, help="Number of pages to load"),
    settings_path: Optional[Path] = typer.Option(None, "--settings", help="Settings file"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Load COLLECTION page by page and print the accumulated items."""

    if verbose:
        ensure_console_logger(get_logger(), "pagedlist-cli", level=logging.DEBUG)

    profile = get_profile(collection)
    settings = _load_settings(settings_path)
    url = base_url or settings.base_url
    if not url:
        typer.echo("Error: no backend URL; pass --base-url or set api.base_url", err=True)
        raise typer.Exit(2)

    fetcher = _build_fetcher(url, profile, token, settings.timeout_sec)
    fields = {
        name: value
        for name, value in (
            ("owner_id", owner),
            ("start_date", start_date),
            ("end_date", end_date),
            ("status", status),
        )
        if value is not None
    }

    async def _run() -> CollectionState:
        controller = CollectionController(
            fetcher,
            role=role,
            identity=identity,
            page_size=settings.page_size_for(profile.name, profile.page_size),
            debounce=AsyncioDebounceScheduler(settings.debounce_ms),
            collection=profile.name,
        )
        try:
            await _browse(controller, fields, search, pages)
            return controller.get_state()
        finally:
            controller.dispose()

    try:
        state = asyncio.run(_run())
    except ValueError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(2) from exc

    if state.last_error is not None:
        hint = " (log in again)" if state.last_error is ErrorKind.AUTH else ""
        typer.echo(f"Error: {state.last_error.value}: {state.last_error_message}{hint}", err=True)
        raise typer.Exit(1)

    console.print(_render(state, profile))
    console.print(f"page {state.page_number} of {state.total_pages}")


if __name__ == "__main__":  # pragma: no cover
    app()
