from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from ..apps import AppManager, AppStore
from ..config import get_data_file
from ..domain.errors import AppsHelperError
from ..domain.models import App, AppProfile
from ..utils.timestamps import format_timestamp

console = Console()


def get_app_manager() -> AppManager:
    """get app manager instance."""
    try:
        return AppManager(AppStore(get_data_file()))
    except AppsHelperError as e:
        fail(e)


def fail(error: Exception):
    console.print(f"[red]Error:[/red] {escape(str(error))}")
    raise typer.Exit(1)


def get_selector(ctx: typer.Context) -> Optional[str]:
    """the --get value given to the `app` command, if any."""
    return (ctx.obj or {}).get("get")


def require_selector(ctx: typer.Context, command: str) -> str:
    search_term = get_selector(ctx)
    if search_term is None:
        console.print(f"[red]Error:[/red] --get is required for {command}")
        raise typer.Exit(1)
    return search_term


def describe_profile(profile: AppProfile) -> str:
    return f"{profile.profile_type.label}: {escape(str(profile.location))}"


def print_app_detail(app: App):
    """print everything known about an app."""
    console.print(f"[bold cyan]{escape(app.name)}[/bold cyan]")

    if app.profiles:
        console.print("  Profiles:")
        for profile in app.profiles:
            marker = " [green](active)[/green]" if profile.active else ""
            console.print(f"    {describe_profile(profile)}{marker}")
            if profile.machine_name:
                console.print(f"      Machine: {escape(profile.machine_name)}")
            if profile.notes:
                console.print(f"      Notes: {escape(profile.notes)}")
    elif app.legacy_directory is not None:
        console.print(f"  Directory: {escape(str(app.legacy_directory))}")

    if app.tags:
        console.print(f"  Tags: {escape(', '.join(app.tags))}")
    if app.source_repo:
        console.print(f"  GitHub: {escape(app.source_repo)}")
    console.print(f"  Created: {format_timestamp(app.created_at)}")
    console.print(f"  Updated: {format_timestamp(app.updated_at)}")
