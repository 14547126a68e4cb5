"""Universal to framebuffer coordinate conversion.

The viewport rectangle maps linearly onto pixel indices::

    fx = round(width * (x - min_x) / (max_x - min_x))
    fy = round(height * (y - min_y) / (max_y - min_y))

The exact max edge would land on pixel ``width``, one past the framebuffer,
so polygons are clipped against a max edge moved in by one pixel span first
(see :func:`polyraster.core.clip.clip_scene` with ``fb_size``). That inset
edge maps to ``dim - 1``.

The result is built with :meth:`FramebufferPoint.checked`, so a point outside
the inset viewport raises :class:`~polyraster.core.errors.RangeViolation`.
"""

from __future__ import annotations

from typing import Iterable, List

from polyraster.core.geometry import FramebufferPoint, Polygon, UniversalPoint
from polyraster.core.viewport import Viewport

__all__ = ["to_framebuffer", "map_polygon", "map_polygons"]


def to_framebuffer(
    point: UniversalPoint,
    viewport_min: UniversalPoint,
    viewport_max: UniversalPoint,
    fb_width: int,
    fb_height: int,
) -> FramebufferPoint:
    rx = round(
        fb_width * (point.x - viewport_min.x) / (viewport_max.x - viewport_min.x)
    )
    ry = round(
        fb_height * (point.y - viewport_min.y) / (viewport_max.y - viewport_min.y)
    )
    return FramebufferPoint.checked(int(rx), int(ry), fb_width, fb_height)


def map_polygon(
    polygon: Polygon, viewport: Viewport, fb_width: int, fb_height: int
) -> Polygon:
    lo, hi = viewport.min_point, viewport.max_point
    return polygon.with_borders(
        [
            [to_framebuffer(p, lo, hi, fb_width, fb_height) for p in border]
            for border in polygon.borders
        ]
    )


def map_polygons(
    polygons: Iterable[Polygon], viewport: Viewport, fb_width: int, fb_height: int
) -> List[Polygon]:
    return [map_polygon(p, viewport, fb_width, fb_height) for p in polygons]
