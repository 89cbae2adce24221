"""CLI commands for the cross-test temp data and generated names."""

from __future__ import annotations

import json

import typer
from rich.console import Console
from rich.table import Table

from julius_e2e.testdata import names
from julius_e2e.testdata.store import get_temp_store

data_app = typer.Typer(help="Inspect and edit the temp data shared between tests.")
console = Console()


@data_app.command("show")
def show_data() -> None:
    """Print every stored key and value."""
    store = get_temp_store()
    data = store.all()
    if not data:
        console.print(f"[dim]No temp data in {store.path}[/dim]")
        return

    table = Table(title=str(store.path))
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    for key, value in sorted(data.items()):
        table.add_row(key, json.dumps(value) if not isinstance(value, str) else value)
    console.print(table)


@data_app.command("get")
def get_value(key: str = typer.Argument(..., help="Key to read, e.g. projectName.")) -> None:
    """Print one stored value; exit 1 when it is missing."""
    value = get_temp_store().get(key)
    if value is None:
        console.print(f"[red]✗[/red] '{key}' not found in temp data.")
        raise typer.Exit(code=1)
    typer.echo(value if isinstance(value, str) else json.dumps(value))


@data_app.command("set")
def set_value(
    key: str = typer.Argument(..., help="Key to write."),
    value: str = typer.Argument(..., help="Value to store (as a string)."),
) -> None:
    """Store a value, e.g. to point the list journey at an existing project."""
    get_temp_store().save(key, value)
    console.print(f"[green]✓[/green] {key} = {value}")


@data_app.command("clear")
def clear_data(yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation.")) -> None:
    """Delete the temp data file."""
    store = get_temp_store()
    if not yes and not typer.confirm(f"Delete {store.path}?"):
        raise typer.Abort()
    store.clear()
    console.print("[green]✓[/green] Temp data cleared.")


@data_app.command("names")
def show_names() -> None:
    """Print a sample of the names the suite generates."""
    table = Table(title="Generated names")
    table.add_column("Kind", style="cyan")
    table.add_column("Example")
    table.add_row("project", names.project_name())
    table.add_row("handle", names.handle_name())
    table.add_row("list", names.list_name())
    table.add_row("campaign", names.campaign_name())
    table.add_row("group", names.group_name())
    table.add_row("tag", names.tag_name())
    profile = names.fake_profile_details()
    table.add_row("profile", f"{profile.first_name} {profile.last_name}, {profile.job_title}")
    console.print(table)
