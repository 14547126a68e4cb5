"""Viewport clipping of polygon borders.

A Sutherland–Hodgman style clipper: each border goes through four
half-plane passes (max-x, max-y, min-x, min-y). All passes share
:func:`clip_border`, parametrized by the edge value, an inside test and an
intersection function.

Per consecutive point pair ``(p, q)``:

====== ======= ============================
p in   q in    emitted
====== ======= ============================
yes    yes     q
yes    no      intersection(p, q)
no     yes     intersection(p, q), q
no     no      nothing
====== ======= ============================

A closed border stays closed: each pass prepends its own last output point.
An open border keeps its first point when that point is inside. Inside tests
are inclusive, so points on the viewport boundary survive. Given a
framebuffer size, the max edges are inset by one pixel span first.
"""

from __future__ import annotations

from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from .geometry import Polygon, UniversalPoint, is_closed
from .viewport import Viewport

__all__ = [
    "InsideFn",
    "IntersectFn",
    "intersect_vertical",
    "intersect_horizontal",
    "clip_border",
    "clip_line",
    "clip_polygon",
    "clip_scene",
]

InsideFn = Callable[[UniversalPoint, float], bool]
IntersectFn = Callable[[UniversalPoint, UniversalPoint, float], UniversalPoint]


def intersect_vertical(
    p0: UniversalPoint, p1: UniversalPoint, x_edge: float
) -> UniversalPoint:
    """Point where segment p0-p1 crosses the vertical line ``x = x_edge``."""
    m = (p1.y - p0.y) / (p1.x - p0.x)
    b = p0.y - m * p0.x
    return UniversalPoint(x_edge, m * x_edge + b)


def intersect_horizontal(
    p0: UniversalPoint, p1: UniversalPoint, y_edge: float
) -> UniversalPoint:
    """Point where segment p0-p1 crosses the horizontal line ``y = y_edge``."""
    if p0.x == p1.x:
        x = p0.x
    else:
        m = (p1.y - p0.y) / (p1.x - p0.x)
        b = p0.y - m * p0.x
        x = (y_edge - b) / m
    return UniversalPoint(x, y_edge)


def _inside_min_x(p: UniversalPoint, edge: float) -> bool:
    return p.x >= edge


def _inside_min_y(p: UniversalPoint, edge: float) -> bool:
    return p.y >= edge


def _inside_max_x(p: UniversalPoint, edge: float) -> bool:
    return p.x <= edge


def _inside_max_y(p: UniversalPoint, edge: float) -> bool:
    return p.y <= edge


def clip_border(
    border: Sequence[UniversalPoint],
    edge: float,
    inside: InsideFn,
    intersect: IntersectFn,
    *,
    closed: bool,
) -> Tuple[UniversalPoint, ...]:
    """Clip *border* against a single half-plane."""
    out: List[UniversalPoint] = []
    if not closed and border and inside(border[0], edge):
        out.append(border[0])
    for p, q in zip(border, border[1:]):
        p_in = inside(p, edge)
        q_in = inside(q, edge)
        if p_in and q_in:
            out.append(q)
        elif p_in:
            out.append(intersect(p, q, edge))
        elif q_in:
            out.append(intersect(p, q, edge))
            out.append(q)
    if closed and out:
        out.insert(0, out[-1])
    return tuple(out)


def clip_line(
    border: Sequence[UniversalPoint],
    viewport: Viewport,
    *,
    fb_size: Optional[Tuple[int, int]] = None,
) -> Tuple[UniversalPoint, ...]:
    """Clip one border against all four viewport edges.

    With *fb_size* the max edges move in by one pixel span,
    ``max - (max - min) / dim``, so the mapped result stays below ``dim``.
    """
    closed = is_closed(border)
    max_x, max_y = viewport.max_point.x, viewport.max_point.y
    if fb_size is not None:
        max_x -= viewport.width / fb_size[0]
        max_y -= viewport.height / fb_size[1]
    passes = (
        (max_x, _inside_max_x, intersect_vertical),
        (max_y, _inside_max_y, intersect_horizontal),
        (viewport.min_point.x, _inside_min_x, intersect_vertical),
        (viewport.min_point.y, _inside_min_y, intersect_horizontal),
    )
    clipped: Tuple[UniversalPoint, ...] = tuple(border)
    for edge, inside, intersect in passes:
        clipped = clip_border(clipped, edge, inside, intersect, closed=closed)
        if not clipped:
            break
    return clipped


def clip_polygon(
    polygon: Polygon,
    viewport: Viewport,
    *,
    fb_size: Optional[Tuple[int, int]] = None,
) -> Optional[Polygon]:
    """Clip every border; ``None`` when nothing of the polygon is visible."""
    borders = [clip_line(b, viewport, fb_size=fb_size) for b in polygon.borders]
    borders = [b for b in borders if b]
    if not borders:
        return None
    return polygon.with_borders(borders)


def clip_scene(
    polygons: Iterable[Polygon],
    viewport: Viewport,
    *,
    fb_size: Optional[Tuple[int, int]] = None,
) -> List[Polygon]:
    out: List[Polygon] = []
    for poly in polygons:
        clipped = clip_polygon(poly, viewport, fb_size=fb_size)
        if clipped is not None:
            out.append(clipped)
    return out
