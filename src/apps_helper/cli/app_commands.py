from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape
from rich.prompt import Prompt
from rich.table import Table

from ..apps import RemovalStatus
from ..domain.errors import AppsHelperError
from ..domain.models import App
from ..utils.timestamps import format_timestamp
from .common import (
    console,
    describe_profile,
    fail,
    get_app_manager,
    get_selector,
    print_app_detail,
    require_selector,
)
from .profile_commands import app as profile_app

app = typer.Typer()

app.add_typer(profile_app, name="profile", help="Manage the profiles of an app")


@app.callback(invoke_without_command=True)
def app_callback(
    ctx: typer.Context,
    get: Optional[str] = typer.Option(None, "--get", help="Get specific app (supports fuzzy matching)"),
):
    """manage your apps and where they live."""
    ctx.ensure_object(dict)["get"] = get

    if ctx.invoked_subcommand is not None:
        return

    if get is None:
        console.print(
            "[red]Error:[/red] Please provide either --get <app-name> "
            "or a subcommand (add, list, get, remove, profile)"
        )
        raise typer.Exit(1)

    show_app(get)


def show_app(search_term: str):
    manager = get_app_manager()
    try:
        if not len(manager.list_apps()):
            console.print("[yellow]No apps found.[/yellow]")
            return
        found = manager.get_app(search_term)
    except AppsHelperError as e:
        fail(e)

    if found is None:
        console.print(f"[yellow]App '{escape(search_term)}' not found.[/yellow]")
        return

    print_app_detail(found)


@app.command("add")
def add_app(
    name: Optional[str] = typer.Argument(None, help="Name of the app"),
    dir: Optional[Path] = typer.Option(None, "--dir", help="Directory of the app's dev checkout"),
    tags: Optional[str] = typer.Option(None, "--tags", help="Comma-separated tags"),
    current_dir: bool = typer.Option(
        False,
        "--current-dir",
        help="Use current directory as app directory and derive name from directory name",
    ),
):
    """add a new app."""
    manager = get_app_manager()

    try:
        added = manager.add_app(name=name, directory=dir, tags=tags, use_current_dir=current_dir)
    except AppsHelperError as e:
        fail(e)

    console.print("Adding app:")
    console.print(f"  Name: {escape(added.name)}")
    if added.profiles:
        console.print("  Profiles:")
        for profile in added.profiles:
            console.print(f"    {describe_profile(profile)}")
            if profile.machine_name:
                console.print(f"      Machine: {escape(profile.machine_name)}")
    if added.tags:
        console.print(f"  Tags: {escape(', '.join(added.tags))}")
    console.print()
    console.print(f"[green]✓[/green] Added app: {escape(added.name)}")


@app.command("list")
def list_apps():
    """list all apps."""
    manager = get_app_manager()

    try:
        apps = manager.list_apps()
    except AppsHelperError as e:
        fail(e)

    if not len(apps):
        console.print("[yellow]No apps found.[/yellow]")
        console.print("\nAdd one with: [cyan]apps-helper app add <name> --dir <path>[/cyan]")
        return

    table = Table(title="Apps")
    table.add_column("Name", style="cyan")
    table.add_column("Location", style="white")
    table.add_column("Tags", style="magenta")
    table.add_column("GitHub", style="white")
    table.add_column("Created", style="dim")

    for summary in apps:
        if summary.active_profile is not None:
            location = describe_profile(summary.active_profile)
        elif summary.legacy_directory is not None:
            location = f"Directory: {escape(str(summary.legacy_directory))}"
        else:
            location = ""
        table.add_row(
            escape(summary.name),
            location,
            escape(", ".join(summary.tags)),
            escape(summary.source_repo or ""),
            format_timestamp(summary.created_at),
        )

    console.print(table)


@app.command("get")
def get_app(ctx: typer.Context):
    """show details of the app selected with --get."""
    show_app(require_selector(ctx, "the get command"))


def ask_confirmation(found: App) -> str:
    console.print(f"Found app: [cyan]{escape(found.name)}[/cyan]")
    active = found.active_profile
    if active is not None:
        console.print(f"  {describe_profile(active)}")
    elif found.legacy_directory is not None:
        console.print(f"  Directory: {escape(str(found.legacy_directory))}")
    if found.tags:
        console.print(f"  Tags: {escape(', '.join(found.tags))}")
    console.print()
    return Prompt.ask(
        "Are you sure you want to remove this app? (y/N)",
        console=console,
        default="",
        show_default=False,
    )


@app.command("remove")
def remove_app(
    ctx: typer.Context,
    get: Optional[str] = typer.Option(None, "--get", help="Remove app by name (supports fuzzy matching)"),
    current_dir: bool = typer.Option(False, "--current-dir", help="Remove app that matches current directory"),
):
    """remove an app."""
    search_term = get if get is not None else get_selector(ctx)
    manager = get_app_manager()

    try:
        result = manager.remove_app(
            search_term=search_term,
            use_current_dir=current_dir,
            confirm=ask_confirmation,
        )
    except AppsHelperError as e:
        fail(e)

    if result.status is RemovalStatus.EMPTY:
        console.print("[yellow]No apps found.[/yellow]")
    elif result.status is RemovalStatus.NOT_FOUND:
        if current_dir:
            console.print("[yellow]No app found for current directory.[/yellow]")
        else:
            console.print(f"[yellow]App '{escape(search_term)}' not found.[/yellow]")
    elif result.status is RemovalStatus.CANCELLED:
        console.print("[dim]Removal cancelled.[/dim]")
    else:
        console.print(f"[green]✓[/green] Removed app: {escape(result.app.name)}")
