"""
CLI utility helpers: context construction, flag parsing and output formatting.
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import asdict
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from capplane.capabilities.cache import LocalCapabilityCache
from capplane.capabilities.params import RawParam
from capplane.core.errors import ValidationError
from capplane.core.settings import CapPlaneSettings
from capplane.environments import FileEnvironmentStore
from capplane.ops.context import OperationContext
from capplane.ops.result import OperationResult, PagedResult
from capplane.store.sqlite import SqliteResourceStore

console = Console()
err_console = Console(stderr=True)


# ── Context helper ───────────────────────────────────────────────────────


@contextmanager
def make_context(
    store: str | None = None,
    *,
    dry_run: bool = False,
    settings: CapPlaneSettings | None = None,
) -> Iterator[OperationContext]:
    """Yield an ``OperationContext`` for one CLI command, closing the store after.

    Collaborators come from :class:`CapPlaneSettings`; ``store`` overrides
    the SQLite store file.
    """
    settings = settings or CapPlaneSettings()
    resource_store = SqliteResourceStore(store or settings.resolved_store_path)
    try:
        yield OperationContext(
            store=resource_store,
            cache=LocalCapabilityCache(settings.resolved_cache_dir),
            environments=FileEnvironmentStore(settings.resolved_environments_file),
            caller="cli",
            dry_run=dry_run,
            concurrent_fetch=settings.concurrent_fetch,
        )
    finally:
        resource_store.close()


# ── Parameter flags ──────────────────────────────────────────────────────


def parse_flag_args(args: list[str]) -> list[RawParam]:
    """Turn free-form ``--key value`` / ``--key=value`` tokens into raw params.

    A ``--key`` followed by another flag (or nothing) is a boolean switch
    and binds as ``"true"``.

    Raises:
        ValidationError: On a token that is not a flag.
    """
    params: list[RawParam] = []
    index = 0
    while index < len(args):
        token = args[index]
        if not token.startswith("--") or token == "--":
            raise ValidationError(token, "expected --name value")

        key, sep, value = token[2:].partition("=")
        if not key:
            raise ValidationError(token, "expected --name value")
        if sep:
            index += 1
        elif index + 1 < len(args) and not args[index + 1].startswith("--"):
            value = args[index + 1]
            index += 2
        else:
            value = "true"
            index += 1
        params.append(RawParam(name=key, value=value))
    return params


# ── Output helpers ───────────────────────────────────────────────────────


def _to_dict(obj: Any) -> dict[str, Any]:
    """Convert dataclass / pydantic model / dict to plain dict."""
    if hasattr(obj, "model_dump"):
        return obj.model_dump()
    if hasattr(obj, "__dataclass_fields__"):
        return asdict(obj)
    if isinstance(obj, dict):
        return obj
    return {"value": str(obj)}


def fail(code: str, message: str) -> None:
    """Print an error line and exit with status 1."""
    err_console.print(f"[bold red]Error[/bold red] ({code}): {escape(message)}")
    raise typer.Exit(code=1)


def _print_warnings(result: OperationResult) -> None:
    for warning in result.warnings:
        err_console.print(f"[yellow]Warning:[/yellow] {escape(warning)}")


def output_result(
    result: OperationResult,
    *,
    as_json: bool = False,
    title: str = "",
) -> None:
    """Render an ``OperationResult`` to the terminal."""
    _print_warnings(result)
    if not result.success:
        err = result.error
        fail(err.code if err else "ERROR", err.message if err else "Unknown error")

    data = result.data

    if as_json:
        payload = _to_dict(data) if not isinstance(data, list | tuple) else [_to_dict(d) for d in data]
        console.print_json(json.dumps(payload, default=str))
        return

    if isinstance(data, list):
        if not data:
            console.print("[dim]No items.[/dim]")
            return
        _print_table(data, title=title)
    else:
        _print_dict(_to_dict(data), title=title)


def output_paged(
    result: PagedResult,
    *,
    as_json: bool = False,
    title: str = "",
) -> None:
    """Render a ``PagedResult`` listing to the terminal."""
    _print_warnings(result)
    if not result.success:
        err = result.error
        fail(err.code if err else "ERROR", err.message if err else "Unknown error")

    items = result.data or []

    if as_json:
        payload = {
            "items": [_to_dict(d) for d in items],
            "total": result.total,
        }
        console.print_json(json.dumps(payload, default=str))
        return

    if not items:
        console.print("[dim]No items.[/dim]")
        return

    _print_table(items, title=title)


# ── Private helpers ──────────────────────────────────────────────────────


def _print_table(items: list, *, title: str = "") -> None:
    """Render a list of dataclasses/dicts as a Rich table."""
    first = _to_dict(items[0])
    table = Table(title=title or None, show_lines=False, pad_edge=False)
    for col in first:
        table.add_column(col.upper(), overflow="fold")
    for item in items:
        d = _to_dict(item)
        table.add_row(*(escape(_cell(v)) for v in d.values()))
    console.print(table)


def _print_dict(data: dict[str, Any], *, title: str = "") -> None:
    """Render a single dict as key-value pairs."""
    if title:
        console.print(f"[bold]{title}[/bold]")
    for k, v in data.items():
        console.print(f"  [cyan]{k}[/cyan]: {escape(_cell(v))}")


def _cell(value: Any) -> str:
    if isinstance(value, list | tuple):
        return ", ".join(_cell(v) for v in value) or "-"
    if isinstance(value, dict):
        return json.dumps(value, default=str)
    return "" if value is None else str(value)
