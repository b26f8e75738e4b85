"""
Wheel-zoom commands for imgzoom
"""

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape
from rich.table import Table

from imgzoom.config.settings import get_probe_timeout, load_settings
from imgzoom.error_handling import handle_error
from imgzoom.exceptions import ImgzoomError
from imgzoom.models.events import ImageElement
from imgzoom.models.vault import Vault
from imgzoom.models.workspace import Pane, Workspace
from imgzoom.services.references import embed_element, find_references
from imgzoom.services.zoom_engine import ZoomEngine
from imgzoom.utils.output import console

app = typer.Typer()


def build_element(src: str, css_class: str = "", file_source: str = "") -> ImageElement:
    """Element for a command-line image source.

    A bare name is treated like the target of an ``![[name]]`` embed.
    """
    if css_class or "://" in src:
        return ImageElement(src=src, css_class=css_class, file_source=file_source)
    return embed_element(src)


@app.command()
def zoom(
    file: Path = typer.Argument(..., help="Markdown document containing the image"),
    src: str = typer.Argument(..., help="Image URL, app:// link, or embed name"),
    zoom_in: bool = typer.Option(True, "--in/--out", help="Grow (wheel up) or shrink (wheel down)"),
    css_class: str = typer.Option("", "--css-class", help="Render class of the image element"),
    file_source: str = typer.Option("", "--file-source", help="Source attribute of a drawing embed"),
    step: Optional[int] = typer.Option(None, "--step", "-s", min=0, max=100, help="Override the configured step size"),
    vault_dir: Optional[Path] = typer.Option(None, "--vault", help="Vault root for attachments (default: the file's folder)"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show the result without writing"),
):
    """Apply one wheel tick to an image in FILE."""
    try:
        settings = load_settings()
        if step is not None:
            settings.step_size = step

        path = file.expanduser().resolve()
        vault = Vault(vault_dir or path.parent)
        element = build_element(src, css_class, file_source)

        workspace = Workspace()
        workspace.open(Pane(path=path, elements=[element]))

        engine = ZoomEngine(vault, workspace, settings, probe_timeout=get_probe_timeout())
        result = engine.zoom(element, -1 if zoom_in else 1, write=not dry_run)
    except ImgzoomError as e:
        handle_error(e, "zoom")
        return

    if not result.changed:
        if result.new_size is None:
            console.print("[yellow]Image reference not found in document[/yellow]")
        else:
            console.print(f"[yellow]Size unchanged at {result.new_size}[/yellow]")
        return

    before = "unsized" if result.old_size is None else str(result.old_size)
    verb = "Would resize" if dry_run else "Resized"
    console.print(f"[green]✅ {verb}[/green] {escape(src)}: {before} → {result.new_size}")


@app.command()
def images(
    file: Path = typer.Argument(..., help="Markdown document to scan"),
):
    """List image references in FILE with their current size."""
    try:
        vault = Vault(file.expanduser().resolve().parent)
        text = vault.read_text(file.expanduser().resolve())
    except ImgzoomError as e:
        handle_error(e, "images")
        return

    refs = find_references(text)
    if not refs:
        console.print("[yellow]No images found[/yellow]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Line", justify="right")
    table.add_column("Reference")
    table.add_column("Source", style="dim")

    lines = text.split("\n")
    for ref in refs:
        snippet = lines[ref.line][ref.start:ref.end]
        source = ref.element.src or ref.element.file_source
        table.add_row(str(ref.line + 1), escape(snippet), escape(source))

    console.print(table)
