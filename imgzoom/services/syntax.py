"""Annotation syntaxes for image size markers.

An image reference is written in one of two markdown forms, and each form
stores its size differently:

    remote image       ![alt|300](https://example.com/pic.png)
    local attachment   ![[pic.png|300]]

Drawing embeds are rendered from a separate drawing document but are
referenced with the local attachment form, so they reuse its rules with a
file name derived from the element's source attribute.

Syntaxes are tried in a fixed order (remote, local, drawing) and the first
one that claims the reference builds the ZoomParams used to find and
rewrite its size. The order is significant: a remote URL served through the
app scheme must still be treated as remote.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Pattern, Sequence
from urllib.parse import unquote, urlsplit

from imgzoom.config.constants import (
    DRAWING_CLASS_PATTERN,
    DRAWING_SOURCE_SUFFIX_LEN,
    LOCAL_MARKER,
    REMOTE_MARKER,
)
from imgzoom.exceptions import UnresolvableReferenceError
from imgzoom.models.events import ImageElement

logger = logging.getLogger(__name__)

SIZE_SEPARATOR = "|"
# Inside a table row a bare pipe would start a new cell
TABLE_SIZE_SEPARATOR = "\\|"


class ReferenceKind(Enum):
    REMOTE = "remote"
    LOCAL = "local"
    DRAWING = "drawing"


@dataclass(frozen=True)
class SizeExistRule:
    """Rewrite an annotation that already carries a size."""

    get_from: Callable[[int], str]
    get_to: Callable[[int], str]


@dataclass(frozen=True)
class SizeNotExistRule:
    """Insert a size into a reference that has none."""

    from_text: str
    get_to: Callable[[int], str]


@dataclass(frozen=True)
class ZoomParams:
    """How to find and rewrite the size annotation of one image reference.

    Attributes:
        kind: Which syntax produced these params
        target: URL for remote images, bare file name otherwise
        size_pattern: Matches an existing annotation, group 1 is the size
        size_exist: Replacement used when size_pattern matches
        size_not_exist: Replacement used when it does not
    """

    kind: ReferenceKind
    target: str
    size_pattern: Pattern[str]
    size_exist: SizeExistRule
    size_not_exist: SizeNotExistRule

    def find_size(self, text: str) -> Optional[int]:
        """Return the current size annotated in ``text``, if any."""
        match = self.size_pattern.search(text)
        return int(match.group(1)) if match else None


def is_in_table(text: str, *needles: str) -> bool:
    """Whether the first line containing any of ``needles`` is a markdown table row."""
    for line in text.splitlines():
        if any(needle in line for needle in needles):
            return line.lstrip().startswith("|")
    return False


def local_image_name(src: str) -> str:
    """Bare, URL-decoded file name of a resolved local link.

    ``app://local/C:/vault/My%20Pic.png?1699`` -> ``My Pic.png``
    """
    path = unquote(urlsplit(src).path)
    return re.split(r"[/\\]", path)[-1]


def drawing_name(file_source: str) -> str:
    """Drawing document name from its source attribute.

    ``Drawings/sketch.excalidraw.md`` -> ``sketch.excalidraw``
    """
    stem = file_source[:-DRAWING_SOURCE_SUFFIX_LEN]
    return stem.rsplit("/", 1)[-1]


def local_attachment_params(name: str, document_text: str = "", kind: ReferenceKind = ReferenceKind.LOCAL) -> ZoomParams:
    """ZoomParams for a ``![[name|NNN]]`` embed."""
    # Closing delimiters keep "pic" from matching "pic.png"
    needles = (f"![[{name}]]", f"![[{name}{SIZE_SEPARATOR}", f"![[{name}{TABLE_SIZE_SEPARATOR}")
    sep = TABLE_SIZE_SEPARATOR if is_in_table(document_text, *needles) else SIZE_SEPARATOR
    return ZoomParams(
        kind=kind,
        target=name,
        size_pattern=re.compile(rf"!\[\[{re.escape(name)}{re.escape(sep)}(\d+)\]\]"),
        size_exist=SizeExistRule(
            get_from=lambda old: f"![[{name}{sep}{old}]]",
            get_to=lambda new: f"![[{name}{sep}{new}]]",
        ),
        size_not_exist=SizeNotExistRule(
            from_text=f"![[{name}]]",
            get_to=lambda new: f"![[{name}{sep}{new}]]",
        ),
    )


def remote_image_params(url: str, document_text: str = "") -> ZoomParams:
    """ZoomParams for a ``![alt|NNN](url)`` image."""
    sep = TABLE_SIZE_SEPARATOR if is_in_table(document_text, f"]({url})") else SIZE_SEPARATOR
    return ZoomParams(
        kind=ReferenceKind.REMOTE,
        target=url,
        size_pattern=re.compile(rf"{re.escape(sep)}(\d+)\]\({re.escape(url)}\)"),
        size_exist=SizeExistRule(
            get_from=lambda old: f"{sep}{old}]({url})",
            get_to=lambda new: f"{sep}{new}]({url})",
        ),
        size_not_exist=SizeNotExistRule(
            from_text=f"]({url})",
            get_to=lambda new: f"{sep}{new}]({url})",
        ),
    )


class ReferenceSyntax(ABC):
    """One way of writing an image reference into a document."""

    kind: ReferenceKind

    @abstractmethod
    def matches(self, src: str, element: Optional[ImageElement]) -> bool:
        """Whether this syntax claims the reference."""

    @abstractmethod
    def build(self, src: str, element: Optional[ImageElement], document_text: str) -> ZoomParams:
        """Build the ZoomParams for a claimed reference."""


class RemoteImageSyntax(ReferenceSyntax):
    kind = ReferenceKind.REMOTE

    def matches(self, src: str, element: Optional[ImageElement]) -> bool:
        return REMOTE_MARKER in src

    def build(self, src: str, element: Optional[ImageElement], document_text: str) -> ZoomParams:
        return remote_image_params(src, document_text)


class LocalAttachmentSyntax(ReferenceSyntax):
    kind = ReferenceKind.LOCAL

    def matches(self, src: str, element: Optional[ImageElement]) -> bool:
        return LOCAL_MARKER in src

    def build(self, src: str, element: Optional[ImageElement], document_text: str) -> ZoomParams:
        return local_attachment_params(local_image_name(src), document_text)


class DrawingEmbedSyntax(ReferenceSyntax):
    kind = ReferenceKind.DRAWING

    def matches(self, src: str, element: Optional[ImageElement]) -> bool:
        if element is None or not element.css_class:
            return False
        return re.search(DRAWING_CLASS_PATTERN, element.css_class) is not None

    def build(self, src: str, element: Optional[ImageElement], document_text: str) -> ZoomParams:
        if element is None:
            raise UnresolvableReferenceError(src=src)
        return local_attachment_params(
            drawing_name(element.file_source), document_text, kind=ReferenceKind.DRAWING
        )


# Precedence matters: first match wins
SYNTAXES: Sequence[ReferenceSyntax] = (
    RemoteImageSyntax(),
    LocalAttachmentSyntax(),
    DrawingEmbedSyntax(),
)


def resolve_zoom_params(
    src: str,
    element: Optional[ImageElement] = None,
    document_text: str = "",
) -> ZoomParams:
    """Pick the annotation syntax for an image reference.

    Args:
        src: Reference identifier, usually the rendered image's source URL
        element: The rendered element, needed to recognise drawing embeds
        document_text: Raw text of the owning document, used to detect
            references inside table rows

    Returns:
        ZoomParams for the first syntax that claims the reference

    Raises:
        UnresolvableReferenceError: If no syntax applies
    """
    for syntax in SYNTAXES:
        if syntax.matches(src, element):
            params = syntax.build(src, element, document_text)
            logger.debug("Resolved %s as %s reference to %r", src, params.kind.value, params.target)
            return params
    raise UnresolvableReferenceError(src=src)
