"""Helpers shared by imgzoom tests."""

from pathlib import Path

from PIL import Image


def make_png(path: Path, width: int, height: int = 10) -> Path:
    """Write a blank PNG of the given size."""
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGB", (width, height), "white").save(path, format="PNG")
    return path


def png_bytes(width: int, height: int = 10) -> bytes:
    from io import BytesIO

    buffer = BytesIO()
    Image.new("RGB", (width, height), "white").save(buffer, format="PNG")
    return buffer.getvalue()


def fixed_probe(width):
    """Probe stand-in that always reports ``width``."""

    def probe(params, vault, timeout):
        return width

    return probe
