"""Open document panes and the images they render.

The workspace answers two questions for an input event: which document
owns a given rendered image, and which editor has the cursor.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Protocol

from imgzoom.exceptions import NoOwningDocumentError

from .events import ImageElement

logger = logging.getLogger(__name__)


class ViewType(Enum):
    """Kinds of view a pane can host."""

    MARKDOWN = "markdown"
    GRAPH = "graph"
    EMPTY = "empty"


class LineEditor(Protocol):
    """Line-addressable text buffer with a cursor."""

    def cursor_line(self) -> int: ...

    def get_line(self, index: int) -> str: ...

    def set_line(self, index: int, text: str) -> None: ...


class BufferEditor:
    """In-memory LineEditor over a document's text."""

    def __init__(self, text: str = "", cursor: int = 0):
        self._lines = text.split("\n")
        self._cursor = cursor

    @property
    def text(self) -> str:
        return "\n".join(self._lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def move_cursor(self, index: int) -> None:
        if not 0 <= index < len(self._lines):
            raise IndexError(f"line {index} out of range (0-{len(self._lines) - 1})")
        self._cursor = index

    def cursor_line(self) -> int:
        return self._cursor

    def get_line(self, index: int) -> str:
        return self._lines[index]

    def set_line(self, index: int, text: str) -> None:
        self._lines[index] = text


@dataclass
class Pane:
    """One open pane: a document shown in some kind of view."""

    path: Path
    view_type: ViewType = ViewType.MARKDOWN
    elements: List[ImageElement] = field(default_factory=list)
    editor: Optional[LineEditor] = None

    def contains(self, element: ImageElement) -> bool:
        """Whether this pane rendered this very element.

        Elements are compared by identity: two documents embedding the same
        image produce equal but distinct elements.
        """
        return any(rendered is element for rendered in self.elements)


class Workspace:
    """Ordered collection of open panes with one active pane."""

    def __init__(self) -> None:
        self.panes: List[Pane] = []
        self._active: Optional[Pane] = None

    def open(self, pane: Pane, *, activate: bool = True) -> Pane:
        self.panes.append(pane)
        if activate or self._active is None:
            self._active = pane
        logger.debug("Opened %s pane for %s", pane.view_type.value, pane.path)
        return pane

    def close(self, pane: Pane) -> None:
        self.panes.remove(pane)
        if self._active is pane:
            self._active = self.panes[-1] if self.panes else None

    def activate(self, pane: Pane) -> None:
        if pane not in self.panes:
            raise ValueError("pane is not open in this workspace")
        self._active = pane

    @property
    def active_pane(self) -> Optional[Pane]:
        return self._active

    def find_owning_document(self, element: ImageElement) -> Path:
        """Return the document path of the markdown pane rendering ``element``.

        Raises:
            NoOwningDocumentError: If no open markdown pane renders it
        """
        for pane in self.panes:
            if pane.view_type is ViewType.MARKDOWN and pane.contains(element):
                return pane.path
        raise NoOwningDocumentError(src=element.src)
