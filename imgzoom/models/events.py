"""Input events and rendered image elements delivered by a host."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ImageElement:
    """A rendered image that can receive wheel events.

    Attributes:
        src: Reference identifier (remote URL or resolved app:// link)
        css_class: Render marker class, e.g. "excalidraw-svg" for drawings
        file_source: Secondary source attribute carried by drawing embeds
    """

    src: str
    css_class: str = ""
    file_source: str = ""


@dataclass(frozen=True)
class KeyEvent:
    """A keydown or keyup.

    ``code`` is the physical key code ("AltLeft", "KeyK"), ``key`` the
    produced character ("k").
    """

    code: str
    key: str = ""
    alt: bool = False
    ctrl: bool = False
    shift: bool = False


@dataclass(frozen=True)
class WheelEvent:
    """A wheel tick over an image.

    Negative ``delta_y`` means the wheel moved away from the user.
    """

    target: ImageElement
    delta_y: float
    alt: bool = False
    ctrl: bool = False
    shift: bool = False
