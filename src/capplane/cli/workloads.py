"""
CLI: ``capplane workloads`` - workload types and workload runs.
"""

from __future__ import annotations

import typer

from capplane.cli.utils import fail, make_context, output_paged, output_result, parse_flag_args

app = typer.Typer(no_args_is_help=True)


@app.command("list")
def list_workloads(
    store: str | None = typer.Option(None, "--store", help="SQLite store file"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """List workload types."""
    from capplane.ops.capabilities import list_workloads as _list

    with make_context(store) as ctx:
        result = _list(ctx)
    output_paged(result, as_json=json_out, title="Workloads")


@app.command("show")
def show_workload(
    name: str = typer.Argument(..., help="Workload type name or short alias"),
    store: str | None = typer.Option(None, "--store", help="SQLite store file"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Show one workload type with its parameters and compatible traits."""
    from capplane.ops.capabilities import get_workload as _get

    with make_context(store) as ctx:
        result = _get(ctx, name)
    output_result(result, as_json=json_out, title=f"Workload: {name}")


@app.command(
    "run",
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
)
def run(
    typer_ctx: typer.Context,
    workload_type: str = typer.Argument(..., help="Workload type name or short alias"),
    env: str = typer.Option(..., "--env", "-e", help="Target environment"),
    name: str = typer.Option("", "--name", "-n", help="Resource name"),
    app_group: str = typer.Option("", "--app-group", "-a", help="Application group"),
    staging: bool = typer.Option(False, "--staging", help="Render only, do not apply"),
    param: list[str] | None = typer.Option(None, "--param", "-p", help="Parameter as key=value (repeatable)"),
    store: str | None = typer.Option(None, "--store", help="SQLite store file"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Stage or apply a workload.

    Parameters are given with ``-p key=value`` or as free-form
    ``--key value`` flags after the known options.
    """
    from capplane.capabilities.params import parse_assignments
    from capplane.core.errors import ValidationError
    from capplane.ops.requests import RunWorkloadRequest
    from capplane.ops.workloads import run_workload as _run

    try:
        parameters = parse_assignments(param or []) + parse_flag_args(list(typer_ctx.args))
    except ValidationError as exc:
        fail(exc.code, exc.message)

    request = RunWorkloadRequest(
        env=env,
        workload_type=workload_type,
        workload_name=name,
        app_group=app_group,
        staging=staging,
        parameters=parameters,
    )
    with make_context(store) as ctx:
        result = _run(ctx, request)
    title = result.data.message if result.success else "Run"
    output_result(result, as_json=json_out, title=title)
