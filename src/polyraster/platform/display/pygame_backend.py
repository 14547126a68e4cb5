"""Pygame-based DisplayBackend with headless (offscreen) support.

Frames are drawn pixel by pixel into an offscreen surface and blitted to a
window on :meth:`PygameDisplayBackend.end_frame` when one was requested. It is
suitable for deterministic, headless tests by setting the environment
variable SDL_VIDEODRIVER=dummy before importing pygame.

Example:
    import os
    os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
    from polyraster.platform.display.pygame_backend import PygameDisplayBackend

    backend = PygameDisplayBackend(size=(320, 480))
    sink = backend.begin_frame()
    sink.clear(0.0, 0.0, 0.0)
    sink.set_color(1.0, 1.0, 0.0)
    sink.set_pixel(10, 10)
    backend.end_frame()
    backend.save_png("/tmp/frame.png")
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Tuple

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame as pg  # noqa: E402

from polyraster.render.canvas import DisplayBackend, PixelSink  # noqa: E402

logger = logging.getLogger(__name__)


def _pygame_color(r: float, g: float, b: float) -> Tuple[int, int, int, int]:
    return (int(round(r * 255)), int(round(g * 255)), int(round(b * 255)), 255)


class _PygameSink(PixelSink):
    def __init__(self, surface: Any) -> None:
        self._surface = surface
        self._color = _pygame_color(0.0, 0.0, 0.0)

    def set_color(self, r: float, g: float, b: float) -> None:
        self._color = _pygame_color(r, g, b)

    def set_pixel(self, x: int, y: int) -> None:
        self._surface.set_at((x, y), self._color)

    def clear(self, r: float, g: float, b: float) -> None:
        self._surface.fill(_pygame_color(r, g, b))


class PygameDisplayBackend(DisplayBackend):
    """Pygame implementation of DisplayBackend with offscreen surface.

    A window is only created with ``create_window=True`` and a real video
    driver; otherwise everything stays offscreen.
    """

    def __init__(
        self,
        size: Tuple[int, int] = (1000, 1000),
        *,
        create_window: bool = False,
        title: str = "polyraster",
    ) -> None:
        if os.environ.get("SDL_VIDEODRIVER") == "dummy":
            os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

        if not pg.get_init():
            pg.init()

        self._width, self._height = int(size[0]), int(size[1])
        self._window_surface = None
        if create_window and os.environ.get("SDL_VIDEODRIVER") != "dummy":
            try:
                self._window_surface = pg.display.set_mode((self._width, self._height))
                pg.display.set_caption(title)
            except pg.error:
                logger.warning(
                    "window creation failed; falling back to offscreen. "
                    "Check SDL_VIDEODRIVER and display permissions."
                )
                self._window_surface = None

        self._surface = pg.Surface((self._width, self._height))

    @property
    def has_window(self) -> bool:
        return self._window_surface is not None

    def size(self) -> Tuple[int, int]:
        return (self._width, self._height)

    def begin_frame(self) -> PixelSink:
        return _PygameSink(self._surface)

    def end_frame(self) -> None:
        if self._window_surface is not None:
            self._window_surface.blit(self._surface, (0, 0))
            pg.display.flip()

    def save_png(self, path: str) -> None:
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        pg.image.save(self._surface, path)

    def close(self) -> None:
        if pg.get_init():
            pg.quit()
