"""
Markdown editor with image zooming for imgzoom.

Shows one document in a TextArea. Holding the configured modifier while
scrolling over a line with an image resizes that image; ctrl+shift+k and
ctrl+shift+j step the size on the cursor line.

Terminals do not report modifier keydown/keyup on their own, only the
modifier flags carried by each mouse event. Those flags are fed to the
session as a keydown before the wheel tick; when a tick arrives without
the flag the session drops its held state by itself.
"""

import logging
from pathlib import Path
from typing import Callable, List, Optional

from rich.markup import escape
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Static, TextArea

from imgzoom.config.settings import Settings, get_probe_timeout, load_settings
from imgzoom.exceptions import ImgzoomError
from imgzoom.models.events import KeyEvent, WheelEvent
from imgzoom.models.vault import Vault
from imgzoom.models.workspace import Pane, Workspace
from imgzoom.services.probe import probe_natural_width
from imgzoom.services.references import ImageReference, find_references, pick_reference
from imgzoom.services.zoom_engine import WidthProbe, ZoomEngine
from imgzoom.session import ZoomSession

logger = logging.getLogger(__name__)

WheelHandler = Callable[[events.MouseEvent, float], bool]

# Textual reports Alt as "meta"
TEXTUAL_FLAGS = {
    "alt": "meta",
    "ctrl": "ctrl",
    "shift": "shift",
}


class TextAreaEditor:
    """LineEditor adapter over a TextArea."""

    def __init__(self, text_area: TextArea):
        self.text_area = text_area

    def cursor_line(self) -> int:
        return self.text_area.cursor_location[0]

    def get_line(self, index: int) -> str:
        return self.text_area.document.get_line(index)

    def set_line(self, index: int, text: str) -> None:
        old = self.get_line(index)
        self.text_area.replace(text, (index, 0), (index, len(old)))


class ZoomTextArea(TextArea):
    """TextArea that offers wheel ticks to a zoom handler before scrolling."""

    def __init__(self, text: str = "", *, on_wheel: Optional[WheelHandler] = None, **kwargs):
        super().__init__(text, **kwargs)
        self._on_wheel = on_wheel

    def _offer_wheel(self, event: events.MouseEvent, delta_y: float) -> None:
        if self._on_wheel is not None and self._on_wheel(event, delta_y):
            event.prevent_default()
            event.stop()

    def _on_mouse_scroll_up(self, event: events.MouseScrollUp) -> None:
        self._offer_wheel(event, -1)

    def _on_mouse_scroll_down(self, event: events.MouseScrollDown) -> None:
        self._offer_wheel(event, 1)


class ImageZoomEditor(App[None]):
    """Single-document editor with wheel and keyboard image resizing."""

    CSS = """
    #editor {
        height: 1fr;
    }

    #status {
        dock: bottom;
        height: 1;
        background: $surface;
        color: $text-muted;
        padding: 0 1;
    }
    """

    BINDINGS = [
        Binding("ctrl+shift+k", "shortcut('k')", "Grow image", priority=True),
        Binding("ctrl+shift+j", "shortcut('j')", "Shrink image", priority=True),
        Binding("ctrl+s", "save", "Save"),
        Binding("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        path: Path,
        settings: Optional[Settings] = None,
        *,
        probe: WidthProbe = probe_natural_width,
        probe_timeout: Optional[float] = None,
    ):
        super().__init__()
        self.path = Path(path).expanduser().resolve()
        self.vault = Vault(self.path.parent)
        self.workspace = Workspace()
        engine = ZoomEngine(
            self.vault,
            self.workspace,
            settings or load_settings(),
            probe=probe,
            probe_timeout=get_probe_timeout() if probe_timeout is None else probe_timeout,
        )
        self.session = ZoomSession(engine)
        self.pane: Optional[Pane] = None
        self._references: List[ImageReference] = []

    def compose(self) -> ComposeResult:
        yield ZoomTextArea(
            self.vault.read_text(self.path),
            id="editor",
            on_wheel=self.handle_wheel,
        )
        yield Static("", id="status", markup=False)
        yield Footer()

    def on_mount(self) -> None:
        text_area = self.query_one("#editor", ZoomTextArea)
        self.pane = self.workspace.open(Pane(path=self.path, editor=TextAreaEditor(text_area)))
        self._refresh_elements()
        self._set_status(
            f"{self.path.name} | hold {self.session.settings.modifier_key.label} + scroll to zoom"
        )
        text_area.focus()

    @property
    def text_area(self) -> ZoomTextArea:
        return self.query_one("#editor", ZoomTextArea)

    def _set_status(self, message: str) -> None:
        self.query_one("#status", Static).update(message)

    def _refresh_elements(self) -> None:
        """Rendered elements follow the buffer's current references."""
        self._references = find_references(self.text_area.text)
        if self.pane is not None:
            self.pane.elements = [ref.element for ref in self._references]

    def _save(self) -> None:
        self.vault.write_text(self.path, self.text_area.text)

    def _flush(self) -> None:
        """Write unsaved buffer edits so the zoom reads what is on screen."""
        if self.text_area.text != self.vault.read_text(self.path):
            self._save()

    def action_save(self) -> None:
        try:
            self._save()
        except ImgzoomError as e:
            self.notify(escape(str(e)), severity="error")
            return
        self._set_status(f"Saved {self.path.name}")

    def action_shortcut(self, key: str) -> None:
        """ctrl+shift+<key> as the session sees it."""
        event = KeyEvent(code=f"Key{key.upper()}", key=key, ctrl=True, shift=True)
        if not self.session.on_key_down(event):
            return
        self._refresh_elements()
        try:
            self._save()
        except ImgzoomError as e:
            self.notify(escape(str(e)), severity="error")
            return
        row = self.text_area.cursor_location[0]
        self._set_status(f"Line {row + 1}: {self.text_area.document.get_line(row).strip()}")

    def handle_wheel(self, event: events.MouseEvent, delta_y: float) -> bool:
        row, column = self.text_area.get_target_document_location(event)
        return self.zoom_at(
            row,
            column,
            delta_y,
            **{flag: bool(getattr(event, attr, False)) for flag, attr in TEXTUAL_FLAGS.items()},
        )

    def zoom_at(
        self,
        row: int,
        column: int,
        delta_y: float,
        *,
        alt: bool = False,
        ctrl: bool = False,
        shift: bool = False,
    ) -> bool:
        """Zoom the image at a document location.

        Returns:
            True if the wheel tick was used for zooming
        """
        modifier = self.session.settings.modifier_key
        if {"alt": alt, "ctrl": ctrl, "shift": shift}[modifier.flag]:
            self.session.on_key_down(KeyEvent(code=modifier.value))

        # The element must be the one the pane holds for ownership to resolve
        self._refresh_elements()
        ref = pick_reference(self._references, row, column)
        if ref is None:
            return False

        try:
            self._flush()
            handled = self.session.on_wheel(
                WheelEvent(target=ref.element, delta_y=delta_y, alt=alt, ctrl=ctrl, shift=shift)
            )
        except ImgzoomError as e:
            self.notify(escape(str(e)), severity="error")
            return True

        result = self.session.last_result
        if handled and result is not None and result.changed:
            self._reload(result.text)
            label = ref.element.src or ref.element.file_source
            before = "-" if result.old_size is None else result.old_size
            self._set_status(f"{label}: {before} → {result.new_size}")
        return handled

    def _reload(self, text: str) -> None:
        """Replace the buffer keeping cursor and scroll position."""
        text_area = self.text_area
        cursor = text_area.cursor_location
        scroll_y = text_area.scroll_y
        text_area.load_text(text)
        text_area.move_cursor(cursor)
        text_area.scroll_to(y=scroll_y, animate=False)
        self._refresh_elements()


def run_editor(path: Path) -> None:
    """Run the editor on ``path`` until the user quits."""
    ImageZoomEditor(path).run()
