"""Framework-agnostic pixel sink and display backend protocols.

The rasterizer only ever talks to a :class:`PixelSink`: it selects a colour
and writes individual pixels. Display backends (Pillow, pygame) hand out a
sink per frame and take care of presenting or saving it.
"""

from __future__ import annotations

from typing import Protocol, Tuple


class PixelSink(Protocol):
    def set_color(self, r: float, g: float, b: float) -> None:
        """Select the drawing colour; components in ``[0, 1]``."""
        ...

    def set_pixel(self, x: int, y: int) -> None:
        ...

    def clear(self, r: float, g: float, b: float) -> None:
        ...


class DisplayBackend(Protocol):
    def size(self) -> Tuple[int, int]:
        ...

    def begin_frame(self) -> PixelSink:
        ...

    def end_frame(self) -> None:
        ...

    def save_png(self, path: str) -> None:
        ...
