"""Find image references in markdown text and describe them as rendered elements.

A renderer turns ``![[pic.png]]`` into an image whose source is a resolved
``app://`` link, a remote image keeps its URL, and a drawing embed becomes
an element tagged with the drawing render class. Hosts without a real
renderer (the CLI and the TUI) use this module to produce the same
ImageElement values a renderer would.
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Sequence
from urllib.parse import quote

from imgzoom.models.events import ImageElement

EMBED_PATTERN = re.compile(r"!\[\[([^\]|\\]+?)(?:\\?\|\d+)?\]\]")
REMOTE_PATTERN = re.compile(r"!\[[^\]]*\]\((https?://[^)\s]+)\)")

LOCAL_LINK_PREFIX = "app://local/"
DRAWING_CLASS = "excalidraw-svg"
DRAWING_EXTENSION = ".excalidraw"


@dataclass(frozen=True)
class ImageReference:
    """An image reference located on one line of a document."""

    line: int
    start: int
    end: int
    element: ImageElement


def embed_element(name: str) -> ImageElement:
    """Rendered element for an ``![[name]]`` embed."""
    if name.endswith(DRAWING_EXTENSION):
        return ImageElement(src="", css_class=DRAWING_CLASS, file_source=f"{name}.md")
    return ImageElement(src=LOCAL_LINK_PREFIX + quote(name))


def references_on_line(line: str, line_number: int = 0) -> List[ImageReference]:
    """All image references on ``line`` in column order."""
    found = [
        ImageReference(line_number, m.start(), m.end(), embed_element(m.group(1)))
        for m in EMBED_PATTERN.finditer(line)
    ]
    found.extend(
        ImageReference(line_number, m.start(), m.end(), ImageElement(src=m.group(1)))
        for m in REMOTE_PATTERN.finditer(line)
    )
    return sorted(found, key=lambda ref: ref.start)


def find_references(text: str) -> List[ImageReference]:
    """All image references in a document."""
    refs: List[ImageReference] = []
    for number, line in enumerate(text.split("\n")):
        refs.extend(references_on_line(line, number))
    return refs


def pick_reference(
    refs: Sequence[ImageReference], line_number: int, column: int
) -> Optional[ImageReference]:
    """From already scanned ``refs``, the one under the pointer.

    A column between references falls back to the first one on the line.

    Hosts pass the references they rendered so the returned element is the
    very object their pane holds.
    """
    on_line = [ref for ref in refs if ref.line == line_number]
    for ref in on_line:
        if ref.start <= column < ref.end:
            return ref
    return on_line[0] if on_line else None

