"""Shared pytest fixtures for imgzoom tests."""

import logging
import socketserver
import threading
from pathlib import Path

import pytest

from imgzoom.config.settings import Settings
from imgzoom.models.vault import Vault
from imgzoom.models.workspace import Pane, Workspace
from imgzoom.services.zoom_engine import ZoomEngine

from helpers import fixed_probe, make_png


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep settings and logs out of the real ~/.config/imgzoom."""
    config_dir = tmp_path / "config"
    monkeypatch.setenv("IMGZOOM_CONFIG_DIR", str(config_dir))
    monkeypatch.delenv("IMGZOOM_PROBE_TIMEOUT", raising=False)
    monkeypatch.delenv("IMGZOOM_LOG_LEVEL", raising=False)
    yield config_dir
    logging.getLogger("imgzoom").handlers.clear()


@pytest.fixture
def vault_dir(tmp_path):
    """A small vault with one note and a 300px wide attachment."""
    root = tmp_path / "vault"
    root.mkdir()
    make_png(root / "attachments" / "pic.png", 300)
    (root / "note.md").write_text("# Trip\n\n![[pic.png]]\n\nThe end.\n")
    return root


@pytest.fixture
def vault(vault_dir):
    return Vault(vault_dir)


@pytest.fixture
def make_engine(vault):
    """Build an engine with one open markdown pane rendering ``elements``."""

    def factory(path, elements, settings=None, probe=None):
        workspace = Workspace()
        workspace.open(Pane(path=Path(path), elements=list(elements)))
        return ZoomEngine(
            vault,
            workspace,
            settings or Settings(),
            probe=probe or fixed_probe(300),
            probe_timeout=1.0,
        )

    return factory


@pytest.fixture
def dripping_url(monkeypatch):
    """URL of a local HTTP server that sends its body one byte at a time."""
    monkeypatch.setenv("NO_PROXY", "127.0.0.1,localhost")
    stop = threading.Event()

    class DripHandler(socketserver.BaseRequestHandler):
        def handle(self):
            self.request.recv(4096)
            self.request.sendall(
                b"HTTP/1.1 200 OK\r\n"
                b"Content-Type: image/png\r\n"
                b"Content-Length: 100000\r\n\r\n"
            )
            while not stop.is_set():
                try:
                    self.request.sendall(b"\x00")
                except OSError:
                    return
                stop.wait(0.1)

    server = socketserver.ThreadingTCPServer(("127.0.0.1", 0), DripHandler)
    server.daemon_threads = True
    threading.Thread(target=server.serve_forever, daemon=True).start()

    yield f"http://127.0.0.1:{server.server_address[1]}/slow.png"

    stop.set()
    server.shutdown()
    server.server_close()
