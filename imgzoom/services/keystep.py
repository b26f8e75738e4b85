"""Keyboard stepping of the ``|NNN]`` annotation on a single line.

Unlike wheel zooming this does not care which reference syntax the line
uses: the first ``|NNN]`` on the line is the size. Lines without one get a
default annotation before their first closing bracket.
"""

import logging
import re

from imgzoom.config.constants import KEY_DEFAULT_SIZE, KEY_MIN_SIZE
from imgzoom.exceptions import NoOpEditError

logger = logging.getLogger(__name__)

LINE_SIZE_PATTERN = re.compile(r"\|(\d+)\]")


def step_line(line: str, delta: int) -> str:
    """Return ``line`` with its size annotation moved by ``delta``.

    Raises:
        NoOpEditError: If the new size would fall below KEY_MIN_SIZE; the
            caller keeps the line as it was
    """
    match = LINE_SIZE_PATTERN.search(line)
    if match is None:
        # Inserted regardless of direction
        return line.replace("]", f"|{KEY_DEFAULT_SIZE}]", 1)

    new_size = int(match.group(1)) + delta
    if new_size < KEY_MIN_SIZE:
        raise NoOpEditError(size=new_size, minimum=KEY_MIN_SIZE)

    return line[: match.start()] + f"|{new_size}]" + line[match.end():]
