import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from .app_commands import app as apps_app

app = typer.Typer(help="A CLI tool to manage your app usage and development")

app.add_typer(apps_app, name="app", help="Manage tracked apps")


def configure_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """callback that runs before every command to set up logging."""
    configure_logging(verbose)
    ctx.ensure_object(dict)


if __name__ == "__main__":
    app()
