"""Size arithmetic for wheel zooming."""

from typing import Optional


def next_size(old_size: int, delta_y: float, step_size: int) -> int:
    """Size after one wheel tick over an annotated image.

    Wheel away from the user (negative delta) grows by one step. Wheel
    toward the user shrinks by one step, but only while the current size is
    strictly greater than the step, so an image never reaches zero.
    """
    if delta_y < 0:
        return old_size + step_size
    if delta_y > 0 and old_size > step_size:
        return old_size - step_size
    return old_size


def initial_size(natural_width: Optional[int], configured: int) -> int:
    """Size given to an image that has no annotation yet.

    The configured initial size caps the image's natural width; when the
    natural width is unknown the configured size is used as is.
    """
    if natural_width is None or natural_width <= 0:
        return configured
    return min(natural_width, configured)
