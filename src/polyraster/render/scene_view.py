"""Per-frame rendering of a scene through the viewport.

Pipeline per frame::

    scene polygons (by layer) -> clip to viewport -> map to framebuffer
        -> Bresenham strokes on the pixel sink

Every stage returns new polygon values; the scene itself is never modified,
so the same scene can be drawn repeatedly while the viewport changes.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from polyraster.core.clip import clip_scene
from polyraster.core.geometry import Color, Polygon
from polyraster.core.shapes import Scene
from polyraster.core.viewport import Viewport
from polyraster.render.canvas import PixelSink
from polyraster.render.mapper import map_polygons
from polyraster.render.raster import draw_polygons

logger = logging.getLogger(__name__)

DEFAULT_BACKGROUND = Color(0.9, 0.9, 0.9)


class SceneView:
    def __init__(
        self,
        size_px: Tuple[int, int],
        *,
        background: Optional[Color] = DEFAULT_BACKGROUND,
    ) -> None:
        self.width = int(size_px[0])
        self.height = int(size_px[1])
        if self.width <= 0 or self.height <= 0:
            raise ValueError("framebuffer size must be positive")
        self.background = background

    def frame_polygons(self, scene: Scene, viewport: Viewport) -> List[Polygon]:
        """Clip and map the scene; the result is in framebuffer coordinates."""
        clipped = clip_scene(
            scene.by_layer(), viewport, fb_size=(self.width, self.height)
        )
        return map_polygons(clipped, viewport, self.width, self.height)

    def draw(self, sink: PixelSink, scene: Scene, viewport: Viewport) -> List[Polygon]:
        """Render one frame onto *sink* and return the mapped polygons."""
        if self.background is not None:
            bg = self.background
            sink.clear(bg.r, bg.g, bg.b)
        polys = self.frame_polygons(scene, viewport)
        draw_polygons(sink, polys)
        logger.debug(
            "frame: %d/%d polygons visible in %s-%s",
            len(polys),
            len(scene),
            viewport.min_point,
            viewport.max_point,
        )
        return polys
