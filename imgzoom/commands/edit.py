"""
Interactive editor command for imgzoom
"""

from pathlib import Path

import typer

from imgzoom.utils.output import console

app = typer.Typer()


@app.command()
def edit(
    file: Path = typer.Argument(..., help="Markdown document to open"),
):
    """Open FILE in the TUI editor (modifier + scroll to zoom images)."""
    if not file.is_file():
        console.print(f"[red]Error: {file} is not a file[/red]")
        raise typer.Exit(1)

    from imgzoom.ui.editor import run_editor

    try:
        run_editor(file)
    except KeyboardInterrupt:
        pass
    except Exception as e:
        console.print(f"❌ Error: {e}", style="red", markup=False)
        raise typer.Exit(1) from e
