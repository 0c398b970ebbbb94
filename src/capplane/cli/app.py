"""
Root Typer application for the capplane CLI.
"""

from __future__ import annotations

import typer
from typer import Typer

from capplane import __version__
from capplane.core.logging import configure_logging
from capplane.core.settings import CapPlaneSettings

app = Typer(
    name="capplane",
    help="capplane - discover capabilities and run workloads into environments.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"capplane {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """capplane CLI - traits, workloads and environments."""
    settings = CapPlaneSettings()
    configure_logging(level=settings.log_level, json_format=settings.log_json, service="capplane-cli")


# ── Sub-command registration ─────────────────────────────────────────────

from capplane.cli.env import app as env_app  # noqa: E402
from capplane.cli.serve import app as serve_app  # noqa: E402
from capplane.cli.traits import app as traits_app  # noqa: E402
from capplane.cli.workloads import app as workloads_app  # noqa: E402

app.add_typer(traits_app, name="traits", help="Trait listings.")
app.add_typer(workloads_app, name="workloads", help="Workload types and workload runs.")
app.add_typer(env_app, name="env", help="Configured environments.")
app.add_typer(serve_app, name="serve", help="Start the API server.")
