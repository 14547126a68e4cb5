from __future__ import annotations

from pathlib import Path

import pytest
from PIL import Image


@pytest.fixture
def pg(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")
    import pygame

    yield pygame
    pygame.quit()


def test_offscreen_frame_saved_as_png(pg, tmp_path: Path) -> None:
    from polyraster.platform.display.pygame_backend import PygameDisplayBackend

    backend = PygameDisplayBackend(size=(12, 10), create_window=True)
    # dummy driver never opens a real window
    assert backend.has_window is False
    assert backend.size() == (12, 10)
    sink = backend.begin_frame()
    sink.clear(0.0, 0.0, 0.0)
    sink.set_color(1.0, 1.0, 0.0)
    sink.set_pixel(5, 6)
    backend.end_frame()

    out = tmp_path / "pg" / "frame.png"
    backend.save_png(str(out))
    with Image.open(out) as png:
        rgb = png.convert("RGB")
        assert rgb.getpixel((5, 6)) == (255, 255, 0)
        assert rgb.getpixel((0, 0)) == (0, 0, 0)


def test_input_backend_translates_keys(pg) -> None:
    from polyraster.platform.input.pygame_input import PygameInputBackend

    backend = PygameInputBackend()
    pg.event.clear()
    pg.event.post(pg.event.Event(pg.KEYDOWN, key=pg.K_UP))
    pg.event.post(pg.event.Event(pg.KEYDOWN, key=pg.K_EQUALS))
    pg.event.post(pg.event.Event(pg.QUIT))
    assert list(backend.pump()) == ["up", "=", "quit"]


def test_display_leaves_event_queue_to_input_backend(pg) -> None:
    from polyraster.platform.display.pygame_backend import PygameDisplayBackend
    from polyraster.platform.input.pygame_input import PygameInputBackend

    display = PygameDisplayBackend(size=(4, 4))
    keys = PygameInputBackend()
    assert not hasattr(display, "poll_events")
    pg.event.clear()
    pg.event.post(pg.event.Event(pg.KEYDOWN, key=pg.K_q))
    display.begin_frame().clear(0.0, 0.0, 0.0)
    display.end_frame()
    assert list(keys.pump()) == ["q"]
