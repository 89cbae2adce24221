"""Unified CLI entry point for the Julius e2e suite.

Config precedence: settings.default.toml -> settings.<env>.toml -> settings.local.toml -> env vars (JULIUS_E2E_* with double underscores) -> CLI flags.
"""

from __future__ import annotations

import typer

from julius_e2e import __version__
from julius_e2e.cli.data_cmd import data_app
from julius_e2e.cli.run_cmd import run_tests
from julius_e2e.cli.settings_cmd import settings_app
from julius_e2e.log import configure_logging

APP_HELP = (
    "julius-e2e: end-to-end browser tests for the Julius web app. "
    "Config precedence: settings.default.toml -> settings.<env>.toml -> settings.local.toml "
    "-> env vars (JULIUS_E2E_* with __) -> CLI flags."
)

app = typer.Typer(add_completion=True, help=APP_HELP)

app.command("run")(run_tests)
app.add_typer(settings_app, name="settings")
app.add_typer(data_app, name="data")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
    log_level: str = typer.Option("INFO", "--log-level", help="Log level for the CLI process."),
) -> None:
    """Show help when no subcommand is provided."""
    if version:
        typer.echo(f"julius-e2e {__version__}")
        raise typer.Exit()
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()

    from julius_e2e.settings import get_settings

    configure_logging(log_level, json_output=get_settings().log_json)


if __name__ == "__main__":
    app()
