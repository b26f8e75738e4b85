"""Tests for the ImageZoomEditor TUI."""

from __future__ import annotations

import pytest

from imgzoom.config.settings import ModifierKey, Settings
from imgzoom.services.references import embed_element
from imgzoom.ui.editor import ImageZoomEditor

from helpers import fixed_probe

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def make_app(path, settings=None) -> ImageZoomEditor:
    return ImageZoomEditor(path, settings or Settings(), probe=fixed_probe(300), probe_timeout=1.0)


@pytest.fixture
def sized_note(vault_dir):
    path = vault_dir / "sized.md"
    path.write_text("intro\n![[pic.png|200]]\n![[pic.png|120]]\n")
    return path


# ---------------------------------------------------------------------------
# Mount
# ---------------------------------------------------------------------------


class TestMount:
    """Test the editor's initial state."""

    @pytest.mark.asyncio
    async def test_loads_document(self, vault_dir) -> None:
        path = vault_dir / "note.md"
        app = make_app(path)
        async with app.run_test(size=(100, 30)) as pilot:
            await pilot.pause()
            assert app.text_area.text == path.read_text()
            assert app.workspace.active_pane is app.pane
            assert app.pane.elements == [embed_element("pic.png")]


# ---------------------------------------------------------------------------
# Wheel zoom
# ---------------------------------------------------------------------------


class TestWheelZoom:
    """Test zooming through zoom_at, as a wheel tick over a line would."""

    @pytest.mark.asyncio
    async def test_modifier_and_wheel_sizes_image(self, vault_dir) -> None:
        path = vault_dir / "note.md"
        app = make_app(path)
        async with app.run_test(size=(100, 30)) as pilot:
            await pilot.pause()
            assert app.zoom_at(2, 4, -1, alt=True) is True
            await pilot.pause()

            assert "![[pic.png|300]]" in path.read_text()
            assert app.text_area.document.get_line(2) == "![[pic.png|300]]"

    @pytest.mark.asyncio
    async def test_repeated_ticks(self, sized_note) -> None:
        app = make_app(sized_note)
        async with app.run_test(size=(100, 30)) as pilot:
            await pilot.pause()
            app.zoom_at(1, 3, -1, alt=True)
            app.zoom_at(1, 3, -1, alt=True)
            app.zoom_at(1, 3, 1, alt=True)
            await pilot.pause()

            assert sized_note.read_text().splitlines()[1] == "![[pic.png|225]]"

    @pytest.mark.asyncio
    async def test_plain_scroll_is_not_consumed(self, sized_note) -> None:
        app = make_app(sized_note)
        async with app.run_test(size=(100, 30)) as pilot:
            await pilot.pause()
            assert app.zoom_at(1, 3, -1) is False
            assert sized_note.read_text().splitlines()[1] == "![[pic.png|200]]"

    @pytest.mark.asyncio
    async def test_released_modifier_stops_zooming(self, sized_note) -> None:
        app = make_app(sized_note)
        async with app.run_test(size=(100, 30)) as pilot:
            await pilot.pause()
            app.zoom_at(1, 3, -1, alt=True)
            assert app.zoom_at(1, 3, -1) is False
            assert app.session.key_held is False
            assert sized_note.read_text().splitlines()[1] == "![[pic.png|225]]"

    @pytest.mark.asyncio
    async def test_configured_modifier(self, sized_note) -> None:
        app = make_app(sized_note, Settings(modifier_key=ModifierKey.CTRL))
        async with app.run_test(size=(100, 30)) as pilot:
            await pilot.pause()
            assert app.zoom_at(1, 3, -1, alt=True) is False
            assert app.zoom_at(1, 3, -1, ctrl=True) is True
            assert sized_note.read_text().splitlines()[1] == "![[pic.png|225]]"

    @pytest.mark.asyncio
    async def test_line_without_image(self, sized_note) -> None:
        app = make_app(sized_note)
        async with app.run_test(size=(100, 30)) as pilot:
            await pilot.pause()
            assert app.zoom_at(0, 1, -1, alt=True) is False
            assert app.zoom_at(99, 0, -1, alt=True) is False

    @pytest.mark.asyncio
    async def test_unsaved_edits_are_kept(self, sized_note) -> None:
        app = make_app(sized_note)
        async with app.run_test(size=(100, 30)) as pilot:
            await pilot.pause()
            app.text_area.replace("edited", (0, 0), (0, 5))
            await pilot.pause()

            app.zoom_at(1, 3, -1, alt=True)
            await pilot.pause()

            lines = sized_note.read_text().splitlines()
            assert lines[0] == "edited"
            assert lines[1] == "![[pic.png|225]]"
            assert app.text_area.document.get_line(0) == "edited"


    @pytest.mark.asyncio
    async def test_image_typed_after_mount(self, sized_note) -> None:
        app = make_app(sized_note)
        async with app.run_test(size=(100, 30)) as pilot:
            await pilot.pause()
            app.text_area.replace("![[pic.png|400]]", (0, 0), (0, 5))
            await pilot.pause()

            assert app.zoom_at(0, 3, -1, alt=True) is True
            await pilot.pause()

            lines = sized_note.read_text().splitlines()
            assert lines[0] == "![[pic.png|425]]"
            assert lines[1] == "![[pic.png|200]]"


# ---------------------------------------------------------------------------
# Keyboard step
# ---------------------------------------------------------------------------


class TestKeyboardStep:
    """Test ctrl+shift+k / ctrl+shift+j on the cursor line."""

    @pytest.mark.asyncio
    async def test_grow(self, sized_note) -> None:
        app = make_app(sized_note)
        async with app.run_test(size=(100, 30)) as pilot:
            await pilot.pause()
            app.text_area.move_cursor((1, 0))
            app.action_shortcut("k")
            await pilot.pause()

            assert app.text_area.document.get_line(1) == "![[pic.png|300]]"
            assert sized_note.read_text().splitlines()[1] == "![[pic.png|300]]"

    @pytest.mark.asyncio
    async def test_shrink_below_floor_keeps_line(self, sized_note) -> None:
        app = make_app(sized_note)
        async with app.run_test(size=(100, 30)) as pilot:
            await pilot.pause()
            app.text_area.move_cursor((2, 0))
            app.action_shortcut("j")
            await pilot.pause()

            assert app.text_area.document.get_line(2) == "![[pic.png|120]]"
            assert sized_note.read_text().splitlines()[2] == "![[pic.png|120]]"

    @pytest.mark.asyncio
    async def test_line_without_size(self, vault_dir) -> None:
        path = vault_dir / "note.md"
        app = make_app(path)
        async with app.run_test(size=(100, 30)) as pilot:
            await pilot.pause()
            app.text_area.move_cursor((2, 0))
            app.action_shortcut("k")
            await pilot.pause()

            assert path.read_text().splitlines()[2] == "![[pic.png|100]]"


class TestSave:
    """Test explicit saving."""

    @pytest.mark.asyncio
    async def test_save_writes_buffer(self, sized_note) -> None:
        app = make_app(sized_note)
        async with app.run_test(size=(100, 30)) as pilot:
            await pilot.pause()
            app.text_area.replace("hello", (0, 0), (0, 5))
            app.action_save()
            await pilot.pause()

            assert sized_note.read_text().startswith("hello\n")
