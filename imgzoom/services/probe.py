"""Natural (intrinsic) width lookup for images without a size annotation.

Remote images are streamed with requests into Pillow's incremental parser,
which knows the size as soon as the header has arrived. The download runs on
a daemon thread and the caller waits on its future for at most the timeout,
so a slow or dripping server can never stall an input event. Local
attachments are opened from the vault.
"""

import logging
import threading
from concurrent.futures import Future
from concurrent.futures import TimeoutError as FutureTimeoutError
from pathlib import Path
from typing import Optional

import requests
from PIL import Image, ImageFile

from imgzoom.config.constants import DEFAULT_PROBE_TIMEOUT_SECONDS
from imgzoom.exceptions import ProbeError
from imgzoom.models.vault import Vault

from .syntax import ReferenceKind, ZoomParams

logger = logging.getLogger(__name__)

CHUNK_SIZE = 4 * 1024
MAX_PROBE_BYTES = 4 * 1024 * 1024  # header is always within this


def _fetch_width(url: str, timeout: float, cancelled: threading.Event) -> int:
    """Stream ``url`` until its width is known, the cap is hit or the caller gives up."""
    parser = ImageFile.Parser()
    received = 0
    try:
        with requests.get(url, timeout=timeout, stream=True) as response:
            response.raise_for_status()
            for chunk in response.iter_content(CHUNK_SIZE):
                if cancelled.is_set():
                    raise ProbeError("Probe abandoned", target=url)
                try:
                    parser.feed(chunk)
                except OSError as e:
                    raise ProbeError("Not a readable image", target=url, reason=str(e)) from e
                if parser.image is not None:
                    return parser.image.width
                received += len(chunk)
                if received >= MAX_PROBE_BYTES:
                    break
    except requests.RequestException as e:
        raise ProbeError("Failed to fetch image", target=url, reason=str(e)) from e

    raise ProbeError("Not a readable image", target=url, bytes_read=received)


def probe_remote_width(url: str, timeout: float = DEFAULT_PROBE_TIMEOUT_SECONDS) -> int:
    """Width of the image at ``url``, giving up after ``timeout`` seconds in total."""
    future: "Future[int]" = Future()
    cancelled = threading.Event()

    def run() -> None:
        if not future.set_running_or_notify_cancel():
            return
        try:
            future.set_result(_fetch_width(url, timeout, cancelled))
        except Exception as e:
            future.set_exception(e)

    # Daemon thread: an abandoned download must not hold up interpreter exit
    threading.Thread(target=run, name="imgzoom-probe", daemon=True).start()
    try:
        return future.result(timeout=timeout)
    except FutureTimeoutError as e:
        cancelled.set()
        logger.debug("Gave up on %s after %.1fs", url, timeout)
        raise ProbeError("Timed out reading image", target=url, timeout_seconds=timeout) from e


def probe_local_width(path: Path) -> int:
    try:
        with Image.open(path) as img:
            return img.width
    except OSError as e:
        raise ProbeError("Not a readable image", target=str(path), reason=str(e)) from e


def probe_natural_width(
    params: ZoomParams,
    vault: Optional[Vault] = None,
    timeout: float = DEFAULT_PROBE_TIMEOUT_SECONDS,
) -> int:
    """Natural pixel width of the image ``params`` refers to.

    Raises:
        ProbeError: If the width cannot be determined in time
    """
    if params.kind is ReferenceKind.REMOTE:
        return probe_remote_width(params.target, timeout)

    if params.kind is ReferenceKind.LOCAL:
        if vault is None:
            raise ProbeError("No vault to look up attachment", target=params.target)
        path = vault.find_attachment(params.target)
        if path is None:
            raise ProbeError("Attachment not found in vault", target=params.target)
        return probe_local_width(path)

    raise ProbeError("Drawing embeds have no natural width", target=params.target)
