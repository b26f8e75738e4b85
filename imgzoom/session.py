"""Per-session input handling for both interaction modes.

A ZoomSession receives raw key and wheel events from a host (the TUI
editor, or tests) and turns them into document edits:

- holding the configured modifier and turning the wheel over an image zooms
  it through the ZoomEngine;
- ctrl+shift+k / ctrl+shift+j step the size annotation on the active
  editor's cursor line.

The key-held flag lives on the session, not in module state. A wheel event
that arrives while the flag is set but without the modifier reported as
active clears the flag: the keyup was lost (e.g. the window lost focus
while the key was down) and zooming must stop.
"""

import logging
from typing import Optional

from imgzoom.config.constants import KEY_GROW, KEY_SHRINK
from imgzoom.config.settings import Settings
from imgzoom.exceptions import NoOpEditError, ResolutionError
from imgzoom.models.events import KeyEvent, WheelEvent
from imgzoom.models.workspace import ViewType, Workspace
from imgzoom.services.keystep import step_line
from imgzoom.services.zoom_engine import ZoomEngine, ZoomResult

logger = logging.getLogger(__name__)

SHORTCUT_DELTAS = {
    "k": KEY_GROW,
    "j": KEY_SHRINK,
}


def shortcut_delta(event: KeyEvent) -> Optional[int]:
    """Step for a ctrl+shift+k / ctrl+shift+j keydown, None for anything else."""
    if not (event.ctrl and event.shift):
        return None
    return SHORTCUT_DELTAS.get(event.key.lower())


class ZoomSession:
    """Input state and dispatch for one running editor."""

    def __init__(self, engine: ZoomEngine):
        self.engine = engine
        self.key_held = False
        self.last_result: Optional[ZoomResult] = None

    @property
    def settings(self) -> Settings:
        return self.engine.settings

    @property
    def workspace(self) -> Workspace:
        return self.engine.workspace

    def _is_modifier(self, event: KeyEvent) -> bool:
        return event.code == self.settings.modifier_key.value

    def on_key_down(self, event: KeyEvent) -> bool:
        """Handle a keydown. Returns True if a line was edited."""
        if self._is_modifier(event):
            self.key_held = True

        delta = shortcut_delta(event)
        if delta is None:
            return False
        return self.step_active_line(delta)

    def on_key_up(self, event: KeyEvent) -> None:
        if self._is_modifier(event):
            self.key_held = False

    def on_wheel(self, event: WheelEvent) -> bool:
        """Handle a wheel tick.

        Returns:
            True if the tick was consumed as a zoom, in which case the host
            should suppress its default scrolling
        """
        if not self.key_held:
            return False

        if not getattr(event, self.settings.modifier_key.flag):
            logger.debug("Modifier released without keyup, clearing held state")
            self.key_held = False
            return False

        try:
            self.last_result = self.engine.zoom(event.target, event.delta_y)
        except ResolutionError as e:
            logger.debug("Zoom skipped: %s", e)
            return False
        return True

    def step_active_line(self, delta: int) -> bool:
        """Step the annotation on the cursor line of the active markdown pane."""
        pane = self.workspace.active_pane
        if pane is None or pane.view_type is not ViewType.MARKDOWN or pane.editor is None:
            return False

        editor = pane.editor
        index = editor.cursor_line()
        line = editor.get_line(index)
        try:
            new_line = step_line(line, delta)
        except NoOpEditError as e:
            logger.debug("Step skipped on line %d: %s", index, e)
            return False

        if new_line == line:
            return False
        editor.set_line(index, new_line)
        return True
