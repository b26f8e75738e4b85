"""
Settings commands for imgzoom.

This is the preferences surface: `imgzoom config set` changes the modifier
key, the step size (0-100) and the initial size (0-1000 in steps of 25).
"""

import typer
from rich.table import Table

from imgzoom.config.constants import (
    INITIAL_SIZE_INCREMENT,
    INITIAL_SIZE_MAX,
    INITIAL_SIZE_MIN,
    STEP_SIZE_MAX,
    STEP_SIZE_MIN,
)
from imgzoom.config.settings import (
    ModifierKey,
    get_settings_path,
    load_settings,
    reset_settings,
    update_setting,
)
from imgzoom.error_handling import handle_error
from imgzoom.exceptions import ConfigurationError
from imgzoom.utils.output import console, print_json

app = typer.Typer(help="Show and change wheel-zoom settings")

_RANGES = {
    "modifierKey": " / ".join(m.label for m in ModifierKey),
    "stepSize": f"{STEP_SIZE_MIN}-{STEP_SIZE_MAX}",
    "initialSize": f"{INITIAL_SIZE_MIN}-{INITIAL_SIZE_MAX}, step {INITIAL_SIZE_INCREMENT}",
}


@app.command("show")
def show(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """Show current settings."""
    settings = load_settings()

    if json_output:
        print_json(settings.to_dict())
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    table.add_column("Allowed", style="dim")

    table.add_row("modifierKey", settings.modifier_key.label, _RANGES["modifierKey"])
    table.add_row("stepSize", str(settings.step_size), _RANGES["stepSize"])
    table.add_row("initialSize", str(settings.initial_size), _RANGES["initialSize"])

    console.print(table)
    console.print(f"[dim]Stored in {get_settings_path()}[/dim]")


@app.command("set")
def set_value(
    key: str = typer.Argument(..., help="modifierKey, stepSize or initialSize"),
    value: str = typer.Argument(..., help="New value"),
):
    """Change one setting."""
    try:
        settings = update_setting(key, value)
    except ConfigurationError as e:
        handle_error(e, "config set", show_details=True)
        return

    shown = settings.to_dict()[key]
    console.print(f"[green]✅ {key} set to {shown}[/green]")


@app.command("reset")
def reset(
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation"),
):
    """Restore default settings."""
    if not force and not typer.confirm("Reset all settings to defaults?"):
        console.print("[yellow]Cancelled[/yellow]")
        return

    reset_settings()
    console.print("[green]✅ Settings reset to defaults[/green]")
