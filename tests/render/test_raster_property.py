from __future__ import annotations

import hypothesis.strategies as st
from hypothesis import given, settings

from polyraster.core.geometry import Segment
from polyraster.render.raster import bresenham_line


class PixelList:
    def __init__(self) -> None:
        self.pixels: list[tuple[int, int]] = []

    def set_color(self, r: float, g: float, b: float) -> None:
        pass

    def set_pixel(self, x: int, y: int) -> None:
        self.pixels.append((x, y))

    def clear(self, r: float, g: float, b: float) -> None:
        pass


coord = st.integers(min_value=0, max_value=200)


@settings(deadline=None, max_examples=300)
@given(x0=coord, y0=coord, x1=coord, y1=coord)
def test_line_is_connected_and_covers_endpoints(
    x0: int, y0: int, x1: int, y1: int
) -> None:
    sink = PixelList()
    bresenham_line(sink, Segment(x0, y0, x1, y1))
    px = sink.pixels
    assert len(px) == max(abs(x1 - x0), abs(y1 - y0)) + 1
    assert {(x0, y0), (x1, y1)} <= set(px)
    for (ax, ay), (bx, by) in zip(px, px[1:]):
        assert max(abs(bx - ax), abs(by - ay)) == 1


@settings(deadline=None, max_examples=200)
@given(x0=coord, y0=coord, x1=coord, y1=coord)
def test_pixels_stay_near_ideal_line(x0: int, y0: int, x1: int, y1: int) -> None:
    sink = PixelList()
    bresenham_line(sink, Segment(x0, y0, x1, y1))
    dx, dy = x1 - x0, y1 - y0
    norm = max(abs(dx), abs(dy))
    if norm == 0:
        return
    for x, y in sink.pixels:
        # distance along the minor axis from the exact line
        if abs(dx) >= abs(dy):
            assert abs((y - y0) * dx - (x - x0) * dy) <= abs(dx) / 2 + 1e-9
        else:
            assert abs((x - x0) * dy - (y - y0) * dx) <= abs(dy) / 2 + 1e-9
