#!/usr/bin/env python3
"""
Main CLI entry point for imgzoom
"""

import typer

from imgzoom import __version__
from imgzoom.commands.config import app as config_app
from imgzoom.commands.edit import edit
from imgzoom.commands.step import step
from imgzoom.commands.zoom import images, zoom
from imgzoom.config.settings import validate_all_env_vars
from imgzoom.error_handling import setup_logging
from imgzoom.utils.output import console


# Version command
def version():
    """Show imgzoom version"""
    typer.echo(f"imgzoom version {__version__}")


# Callback for global options
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-error output"),
):
    """
    imgzoom - resize images embedded in markdown documents

    Sizes are stored in the document itself: ![[pic.png|300]] for
    attachments, ![alt|300](https://...) for remote images.

    [bold]Examples:[/bold]

    Grow an attachment by one step:
        [cyan]imgzoom zoom notes.md pic.png --in[/cyan]

    Shrink line 12 by 100:
        [cyan]imgzoom step notes.md 12 --shrink[/cyan]

    Zoom with the mouse wheel:
        [cyan]imgzoom edit notes.md[/cyan]
    """
    if verbose and quiet:
        typer.echo("Error: --verbose and --quiet are mutually exclusive", err=True)
        raise typer.Exit(1)

    setup_logging(verbose=verbose, quiet=quiet)

    for error in validate_all_env_vars():
        console.print(f"[yellow]Warning: {error}[/yellow]")


def create_app() -> typer.Typer:
    """Create and configure the main CLI application"""
    app = typer.Typer(
        name="imgzoom",
        help="Resize images embedded in markdown documents",
        rich_markup_mode="rich",
        no_args_is_help=True,
    )
    app.callback()(main)

    app.command()(zoom)
    app.command()(images)
    app.command()(step)
    app.command()(edit)
    app.command()(version)
    app.add_typer(config_app, name="config")

    return app


# Create the app instance
app = create_app()


def run():
    """Entry point for the CLI"""
    app()


if __name__ == "__main__":
    run()
