"""Pillow-backed offscreen display backend.

Headless and deterministic: frames are drawn into an RGB ``PIL.Image`` that
can be saved as PNG or inspected directly, which makes it the backend used by
the ``render`` command and by golden-style tests.

Example:
    backend = PillowDisplayBackend(size=(320, 240))
    sink = backend.begin_frame()
    sink.clear(1.0, 1.0, 1.0)
    sink.set_color(0.0, 0.0, 0.0)
    sink.set_pixel(10, 10)
    backend.end_frame()
    backend.save_png("/tmp/frame.png")
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Tuple

from PIL import Image, ImageDraw

from polyraster.render.canvas import DisplayBackend, PixelSink


def _rgb255(r: float, g: float, b: float) -> Tuple[int, int, int]:
    return (int(round(r * 255)), int(round(g * 255)), int(round(b * 255)))


class _PillowSink(PixelSink):
    """Pixel sink writing straight into the image's pixel access object."""

    def __init__(self, img: Image.Image) -> None:
        self._img = img
        self._px: Any = img.load()
        self._color: Tuple[int, int, int] = (0, 0, 0)
        self.pixels_written = 0

    def set_color(self, r: float, g: float, b: float) -> None:
        self._color = _rgb255(r, g, b)

    def set_pixel(self, x: int, y: int) -> None:
        self._px[x, y] = self._color
        self.pixels_written += 1

    def clear(self, r: float, g: float, b: float) -> None:
        w, h = self._img.size
        ImageDraw.Draw(self._img).rectangle((0, 0, w, h), fill=_rgb255(r, g, b))


class PillowDisplayBackend(DisplayBackend):
    def __init__(self, size: Tuple[int, int] = (1000, 1000)) -> None:
        self._w, self._h = int(size[0]), int(size[1])
        self._frame = Image.new("RGB", (self._w, self._h), (0, 0, 0))
        self._sink: _PillowSink | None = None

    @property
    def image(self) -> Image.Image:
        return self._frame

    def size(self) -> Tuple[int, int]:
        return (self._w, self._h)

    def begin_frame(self) -> PixelSink:
        self._sink = _PillowSink(self._frame)
        return self._sink

    def end_frame(self) -> None:
        self._sink = None

    def save_png(self, path: str) -> None:
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        self._frame.save(path, format="PNG")
