"""CLI commands for inspecting and validating suite settings."""

from __future__ import annotations

import json

import typer
from pydantic import ValidationError
from rich.console import Console

settings_app = typer.Typer(help="Inspect and validate suite configuration.")
console = Console()


@settings_app.command("show")
def show_settings() -> None:
    """Display the currently resolved settings."""
    from julius_e2e.settings import get_settings

    settings = get_settings()
    console.print_json(json.dumps(settings.model_dump(mode="json"), indent=2, default=str))


@settings_app.command("validate")
def validate_settings() -> None:
    """Validate settings and report any issues."""
    from julius_e2e.settings import get_settings

    try:
        settings = get_settings()
    except ValidationError as e:
        console.print(f"[red]✗[/red] Settings validation failed: {e}")
        raise typer.Exit(code=1)

    if settings.browser.name.lower() not in ("chromium", "firefox", "webkit"):
        console.print(f"[red]✗[/red] Unknown browser: {settings.browser.name}")
        raise typer.Exit(code=1)

    console.print("[green]✓[/green] Settings are valid.")
    console.print(f"  Environment: {settings.env}")
    console.print(f"  Base URL: {settings.app.base_url}")
    console.print(f"  Browser: {settings.browser.name} (headless={settings.browser.headless})")
    console.print(f"  Suite enabled: {settings.run.enabled}")
