from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from ..domain.errors import AppsHelperError
from ..domain.models import ProfileType
from .common import console, fail, get_app_manager, require_selector

app = typer.Typer()

PROFILE_COMMANDS = "profile commands"


def not_found(search_term: str):
    console.print(f"[yellow]App '{escape(search_term)}' not found.[/yellow]")


@app.command("add")
def add_profile(
    ctx: typer.Context,
    profile_type: ProfileType = typer.Option(..., "--type", case_sensitive=False, help="Kind of profile"),
    location: Optional[Path] = typer.Option(None, "--location", help="Where this profile lives"),
    current_dir: bool = typer.Option(False, "--current-dir", help="Use current directory as profile location"),
    machine: Optional[str] = typer.Option(None, "--machine", help="Machine name (defaults to this machine)"),
    notes: Optional[str] = typer.Option(None, "--notes"),
):
    """add a profile to an app."""
    search_term = require_selector(ctx, PROFILE_COMMANDS)
    manager = get_app_manager()

    try:
        updated = manager.add_profile(
            search_term,
            profile_type,
            location=location,
            use_current_dir=current_dir,
            machine=machine,
            notes=notes,
        )
    except AppsHelperError as e:
        fail(e)

    if updated is None:
        not_found(search_term)
        return
    console.print(f"[green]✓[/green] Added {profile_type.label} profile to app: {escape(updated.name)}")


@app.command("list")
def list_profiles(ctx: typer.Context):
    """list the profiles of an app."""
    search_term = require_selector(ctx, PROFILE_COMMANDS)
    manager = get_app_manager()

    try:
        found = manager.list_profiles(search_term)
    except AppsHelperError as e:
        fail(e)

    if found is None:
        not_found(search_term)
        return

    target, listing = found
    summaries = list(listing)
    if not summaries or summaries[0].legacy:
        console.print(f"[yellow]No profiles found for app:[/yellow] {escape(target.name)}")
        for summary in summaries:
            console.print(f"  Legacy directory: {escape(str(summary.location))}")
        return

    console.print(f"Profiles for app: [cyan]{escape(target.name)}[/cyan]")
    for summary in summaries:
        marker = " [green](active)[/green]" if summary.active else ""
        console.print(f"  {summary.profile_type.label}: {escape(str(summary.location))}{marker}")
        if summary.machine_name:
            console.print(f"    Machine: {escape(summary.machine_name)}")
        if summary.notes:
            console.print(f"    Notes: {escape(summary.notes)}")


@app.command("activate")
def activate_profile(
    ctx: typer.Context,
    profile_type: ProfileType = typer.Option(..., "--type", case_sensitive=False),
):
    """make one profile the active one."""
    search_term = require_selector(ctx, PROFILE_COMMANDS)
    manager = get_app_manager()

    try:
        updated = manager.activate_profile(search_term, profile_type)
    except AppsHelperError as e:
        fail(e)

    if updated is None:
        not_found(search_term)
        return
    console.print(f"[green]✓[/green] Activated {profile_type.label} profile for app: {escape(updated.name)}")


@app.command("remove")
def remove_profile(
    ctx: typer.Context,
    profile_type: ProfileType = typer.Option(..., "--type", case_sensitive=False),
):
    """remove a profile from an app."""
    search_term = require_selector(ctx, PROFILE_COMMANDS)
    manager = get_app_manager()

    try:
        updated = manager.remove_profile(search_term, profile_type)
    except AppsHelperError as e:
        fail(e)

    if updated is None:
        not_found(search_term)
        return
    console.print(f"[green]✓[/green] Removed {profile_type.label} profile from app: {escape(updated.name)}")
