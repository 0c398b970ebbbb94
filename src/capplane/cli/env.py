"""
CLI: ``capplane env`` - configured environments.
"""

from __future__ import annotations

import typer

from capplane.cli.utils import make_context, output_paged, output_result

app = typer.Typer(no_args_is_help=True)


@app.command("list")
def list_envs(
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """List configured environments."""
    from capplane.ops.environments import list_environments

    with make_context() as ctx:
        result = list_environments(ctx)
    output_paged(result, as_json=json_out, title="Environments")


@app.command("show")
def show_env(
    name: str = typer.Argument(..., help="Environment name (case-sensitive)"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Show one environment."""
    from capplane.ops.environments import get_environment

    with make_context() as ctx:
        result = get_environment(ctx, name)
    output_result(result, as_json=json_out, title=f"Environment: {name}")
