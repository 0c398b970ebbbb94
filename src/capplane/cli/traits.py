"""
CLI: ``capplane traits`` - trait listings.
"""

from __future__ import annotations

import typer

from capplane.cli.utils import make_context, output_paged, output_result

app = typer.Typer(no_args_is_help=True)


@app.command("list")
def list_traits(
    workload: str = typer.Option("", "--workload", "-w", help="Only traits applying to this workload type"),
    store: str | None = typer.Option(None, "--store", help="SQLite store file"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """List traits and the workload types they apply to."""
    from capplane.ops.capabilities import list_traits as _list
    from capplane.ops.requests import ListTraitsRequest

    with make_context(store) as ctx:
        result = _list(ctx, ListTraitsRequest(workload=workload))
    output_paged(result, as_json=json_out, title="Traits")


@app.command("show")
def show_trait(
    name: str = typer.Argument(..., help="Trait name or short alias"),
    store: str | None = typer.Option(None, "--store", help="SQLite store file"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Show one trait."""
    from capplane.ops.capabilities import get_trait as _get

    with make_context(store) as ctx:
        result = _get(ctx, name)
    output_result(result, as_json=json_out, title=f"Trait: {name}")


@app.command("applicability")
def applicability(
    store: str | None = typer.Option(None, "--store", help="SQLite store file"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Show which traits apply to each workload type."""
    from capplane.ops.capabilities import list_trait_applicability as _applicability

    with make_context(store) as ctx:
        result = _applicability(ctx)
    output_paged(result, as_json=json_out, title="Trait applicability")
