"""File-backed document storage.

A vault is a directory of markdown documents and their attachments. It is
the only place imgzoom reads or writes document text.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from imgzoom.exceptions import FileReadError, FileWriteError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class Vault:
    """Read and write documents below a root directory."""

    def __init__(self, root: PathLike):
        self.root = Path(root).expanduser().resolve()

    def resolve(self, path: PathLike) -> Path:
        """Return an absolute path; relative paths are taken from the root."""
        path = Path(path).expanduser()
        if not path.is_absolute():
            path = self.root / path
        return path

    def read_text(self, path: PathLike) -> str:
        target = self.resolve(path)
        try:
            return target.read_text(encoding="utf-8")
        except OSError as e:
            raise FileReadError(path=str(target), reason=str(e)) from e

    def write_text(self, path: PathLike, text: str) -> None:
        target = self.resolve(path)
        try:
            target.write_text(text, encoding="utf-8")
        except OSError as e:
            raise FileWriteError(path=str(target), reason=str(e)) from e
        logger.debug("Wrote %d chars to %s", len(text), target)

    def find_attachment(self, name: str) -> Optional[Path]:
        """Find the first file under the root called ``name``.

        Attachments are referenced by bare file name, so the first match in
        sorted order wins when names collide.
        """
        direct = self.root / name
        if direct.is_file():
            return direct
        for candidate in sorted(self.root.rglob(name)):
            if candidate.is_file():
                return candidate
        return None
