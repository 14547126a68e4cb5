"""Integer line rasterization (Bresenham) onto a pixel sink.

Segments are walked along their major axis: horizontal-major when
``|dx| >= |dy|``, vertical-major otherwise. Endpoints are swapped when needed
so the walk always runs in increasing coordinate order, which leaves only two
stepping routines; the minor axis steps by +1 or -1. Both endpoints are
plotted.

Only strokes are rendered. Polygons whose stroke colour is ``None`` are
skipped; fill colours are carried along but not painted.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Sequence

from polyraster.core.geometry import FramebufferPoint, Polygon, Segment
from polyraster.render.canvas import PixelSink

__all__ = [
    "bresenham_line",
    "polyline_segments",
    "polygon_segments",
    "draw_polygons",
]


def bresenham_line(sink: PixelSink, segment: Segment) -> None:
    x0, y0, x1, y1 = segment.x0, segment.y0, segment.x1, segment.y1
    if abs(x1 - x0) >= abs(y1 - y0):
        if x1 >= x0:
            _bresenham_horizontal(sink, x0, y0, x1, y1)
        else:
            _bresenham_horizontal(sink, x1, y1, x0, y0)
    else:
        if y1 >= y0:
            _bresenham_vertical(sink, x0, y0, x1, y1)
        else:
            _bresenham_vertical(sink, x1, y1, x0, y0)


def _bresenham_horizontal(sink: PixelSink, x0: int, y0: int, x1: int, y1: int) -> None:
    # x0 <= x1 and |dy| <= dx
    dy = y1 - y0
    yi = 1
    if dy < 0:
        yi, dy = -1, -dy
    dx = x1 - x0

    step_h = 2 * dy  # horizontal move
    step_d = 2 * (dy - dx)  # diagonal move
    d = 2 * dy - dx
    y = y0
    for x in range(x0, x1 + 1):
        sink.set_pixel(x, y)
        if d > 0:
            y += yi
            d += step_d
        else:
            d += step_h


def _bresenham_vertical(sink: PixelSink, x0: int, y0: int, x1: int, y1: int) -> None:
    # y0 <= y1 and |dx| < dy
    dx = x1 - x0
    xi = 1
    if dx < 0:
        xi, dx = -1, -dx
    dy = y1 - y0

    step_v = 2 * dx  # vertical move
    step_d = 2 * (dx - dy)  # diagonal move
    d = 2 * dx - dy
    x = x0
    for y in range(y0, y1 + 1):
        sink.set_pixel(x, y)
        if d > 0:
            x += xi
            d += step_d
        else:
            d += step_v


def polyline_segments(line: Sequence[FramebufferPoint]) -> Iterator[Segment]:
    """Segments between consecutive points; a lone point yields a dot."""
    if len(line) == 1:
        p = line[0]
        yield Segment(p.x, p.y, p.x, p.y)
        return
    for a, b in zip(line, line[1:]):
        yield Segment(a.x, a.y, b.x, b.y)


def polygon_segments(polygons: Iterable[Polygon]) -> Iterator[Segment]:
    for poly in polygons:
        for border in poly.borders:
            yield from polyline_segments(border)


def draw_polygons(sink: PixelSink, polygons: Iterable[Polygon]) -> None:
    """Stroke every polygon that has a stroke colour, in the given order."""
    for poly in polygons:
        if poly.stroke_color is None:
            continue
        c = poly.stroke_color
        sink.set_color(c.r, c.g, c.b)
        for segment in polygon_segments((poly,)):
            bresenham_line(sink, segment)
