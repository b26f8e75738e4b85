"""Wheel zoom: one read-modify-write of the document owning an image.

Each wheel tick is handled on its own: read the owning document, find the
image's size annotation, compute the next size, replace the first
occurrence and write the document back only if the text changed.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Tuple

from imgzoom.config.constants import DEFAULT_PROBE_TIMEOUT_SECONDS
from imgzoom.config.settings import Settings
from imgzoom.exceptions import ProbeError
from imgzoom.models.events import ImageElement
from imgzoom.models.vault import Vault
from imgzoom.models.workspace import Workspace

from .probe import probe_natural_width
from .sizing import initial_size, next_size
from .syntax import ZoomParams, resolve_zoom_params

logger = logging.getLogger(__name__)

WidthProbe = Callable[[ZoomParams, Optional[Vault], float], int]


@dataclass
class ZoomResult:
    """Outcome of one wheel tick."""

    path: Path
    old_size: Optional[int]
    new_size: Optional[int]
    changed: bool
    text: str


def rewrite_size(
    text: str,
    params: ZoomParams,
    delta_y: float,
    step_size: int,
    get_initial_size: Callable[[], int],
) -> Tuple[str, Optional[int], Optional[int]]:
    """Apply one wheel tick to ``text``.

    Returns:
        (new_text, old_size, new_size). old_size is None when the image had
        no annotation; new_size is None when nothing could be rewritten.
    """
    match = params.size_pattern.search(text)
    if match is not None:
        # Rewrite the matched span so "|0300]]" is replaced as written
        old_size = int(match.group(1))
        new_size = next_size(old_size, delta_y, step_size)
        if new_size == old_size:
            return text, old_size, new_size
        replacement = params.size_exist.get_to(new_size)
        return text[: match.start()] + replacement + text[match.end():], old_size, new_size

    rule_ne = params.size_not_exist
    if rule_ne.from_text not in text:
        return text, None, None
    new_size = get_initial_size()
    return text.replace(rule_ne.from_text, rule_ne.get_to(new_size), 1), None, new_size


class ZoomEngine:
    """Resize images in the documents of a workspace."""

    def __init__(
        self,
        vault: Vault,
        workspace: Workspace,
        settings: Settings,
        *,
        probe: WidthProbe = probe_natural_width,
        probe_timeout: float = DEFAULT_PROBE_TIMEOUT_SECONDS,
    ):
        self.vault = vault
        self.workspace = workspace
        self.settings = settings
        self.probe = probe
        self.probe_timeout = probe_timeout

    def zoom(self, element: ImageElement, delta_y: float, *, write: bool = True) -> ZoomResult:
        """Zoom ``element`` in whichever open document renders it.

        Raises:
            NoOwningDocumentError: If no open markdown pane renders the element
            UnresolvableReferenceError: If the reference syntax is unknown
        """
        path = self.workspace.find_owning_document(element)
        return self.zoom_document(path, element, delta_y, write=write)

    def zoom_document(
        self,
        path: Path,
        element: ImageElement,
        delta_y: float,
        *,
        write: bool = True,
    ) -> ZoomResult:
        text = self.vault.read_text(path)
        params = resolve_zoom_params(element.src, element, text)

        new_text, old_size, new_size = rewrite_size(
            text,
            params,
            delta_y,
            self.settings.step_size,
            lambda: self._initial_size(params),
        )
        changed = new_text != text
        if changed and write:
            self.vault.write_text(path, new_text)
            logger.info("Resized %s in %s: %s -> %s", params.target, path.name, old_size, new_size)
        elif not changed:
            logger.debug("No size change for %s in %s", params.target, path.name)

        return ZoomResult(path=path, old_size=old_size, new_size=new_size, changed=changed, text=new_text)

    def _initial_size(self, params: ZoomParams) -> int:
        configured = self.settings.initial_size
        try:
            natural = self.probe(params, self.vault, self.probe_timeout)
        except ProbeError as e:
            logger.debug("Using configured initial size for %s: %s", params.target, e)
            return configured
        return initial_size(natural, configured)
