"""
Keyboard-step command for imgzoom
"""

from pathlib import Path

import typer
from rich.markup import escape

from imgzoom.config.constants import KEY_GROW, KEY_MIN_SIZE, KEY_SHRINK
from imgzoom.error_handling import handle_error
from imgzoom.exceptions import ImgzoomError, NoOpEditError
from imgzoom.models.vault import Vault
from imgzoom.models.workspace import BufferEditor
from imgzoom.services.keystep import step_line
from imgzoom.utils.output import console

app = typer.Typer()


@app.command()
def step(
    file: Path = typer.Argument(..., help="Markdown document to edit"),
    line: int = typer.Argument(..., min=1, help="1-based line number"),
    grow: bool = typer.Option(True, "--grow/--shrink", help="Grow or shrink by 100"),
):
    """Step the |NNN] size annotation on LINE of FILE, like ctrl+shift+k/j."""
    path = file.expanduser().resolve()
    vault = Vault(path.parent)
    try:
        editor = BufferEditor(vault.read_text(path))
    except ImgzoomError as e:
        handle_error(e, "step")
        return

    if line > editor.line_count:
        console.print(f"[red]Error: {file} has only {editor.line_count} lines[/red]")
        raise typer.Exit(1)

    index = line - 1
    original = editor.get_line(index)
    try:
        updated = step_line(original, KEY_GROW if grow else KEY_SHRINK)
    except NoOpEditError:
        console.print(f"[yellow]Line {line} unchanged: size would drop below {KEY_MIN_SIZE}[/yellow]")
        return

    if updated == original:
        console.print(f"[yellow]Line {line} has no image to size[/yellow]")
        return

    editor.set_line(index, updated)
    try:
        vault.write_text(path, editor.text)
    except ImgzoomError as e:
        handle_error(e, "step")
        return

    console.print(f"[green]✅ Line {line}:[/green] {escape(updated.strip())}")
