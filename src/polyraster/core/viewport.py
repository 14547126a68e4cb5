"""Viewport rectangle in universal coordinates and its navigation.

The viewport is the axis-aligned region of the scene that is currently shown.
It is an immutable value: :meth:`Viewport.zoomed` and :meth:`Viewport.panned`
return a new viewport or raise :class:`~polyraster.core.errors.NavigationError`
when the move would leave the scene, in which case the caller keeps the old
one.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .errors import NavigationError, RangeViolation
from .geometry import UniversalPoint

__all__ = ["Pan", "Viewport"]


class Pan(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True, slots=True)
class Viewport:
    min_point: UniversalPoint
    max_point: UniversalPoint
    scene_size: float

    def __post_init__(self) -> None:
        if not (
            self.min_point.x < self.max_point.x and self.min_point.y < self.max_point.y
        ):
            raise RangeViolation(
                f"viewport min {self.min_point} must be below max {self.max_point}"
            )

    @classmethod
    def full_scene(cls, scene_size: float) -> "Viewport":
        return cls(
            UniversalPoint.checked(0.0, 0.0, scene_size),
            UniversalPoint.checked(scene_size, scene_size, scene_size),
            float(scene_size),
        )

    @classmethod
    def initial(cls, scene_size: float, width: int, height: int) -> "Viewport":
        """Largest viewport with the framebuffer's aspect ratio, centred."""
        s = float(scene_size)
        if height > width:
            span = s * width / height
            pad = (s - span) / 2.0
            return cls(
                UniversalPoint.checked(pad, 0.0, s),
                UniversalPoint.checked(pad + span, s, s),
                s,
            )
        if width > height:
            span = s * height / width
            pad = (s - span) / 2.0
            return cls(
                UniversalPoint.checked(0.0, pad, s),
                UniversalPoint.checked(s, pad + span, s),
                s,
            )
        return cls.full_scene(s)

    @property
    def width(self) -> float:
        return self.max_point.x - self.min_point.x

    @property
    def height(self) -> float:
        return self.max_point.y - self.min_point.y

    @property
    def center(self) -> UniversalPoint:
        return UniversalPoint(
            (self.min_point.x + self.max_point.x) / 2.0,
            (self.min_point.y + self.max_point.y) / 2.0,
        )

    def contains(self, p: UniversalPoint) -> bool:
        return (
            self.min_point.x <= p.x <= self.max_point.x
            and self.min_point.y <= p.y <= self.max_point.y
        )

    def _point(self, x: float, y: float) -> UniversalPoint:
        return UniversalPoint.checked(x, y, self.scene_size)

    def zoomed(self, factor: float) -> "Viewport":
        """Scale the viewport about its centre.

        ``factor < 1`` zooms in, ``factor > 1`` zooms out. When zooming out
        pushes one corner past the scene the viewport is shifted back inside;
        when both corners overflow it snaps to the whole scene.
        """
        if factor <= 0:
            raise NavigationError(f"zoom factor must be > 0, got {factor}")
        try:
            return self._zoom(factor)
        except RangeViolation as exc:
            raise NavigationError(f"zoom {factor} rejected: {exc}") from exc

    def _zoom(self, factor: float) -> "Viewport":
        c = self.center
        min_x = (self.min_point.x - c.x) * factor + c.x
        min_y = (self.min_point.y - c.y) * factor + c.y
        max_x = (self.max_point.x - c.x) * factor + c.x
        max_y = (self.max_point.y - c.y) * factor + c.y
        s = self.scene_size

        min_ok = 0.0 <= min_x <= s and 0.0 <= min_y <= s
        max_ok = 0.0 <= max_x <= s and 0.0 <= max_y <= s
        if min_ok and max_ok:
            return Viewport(self._point(min_x, min_y), self._point(max_x, max_y), s)
        if factor <= 1.0:
            raise NavigationError(f"zoom {factor} leaves the scene")

        if not min_ok and max_ok:
            dx = min(min_x, 0.0)
            dy = min(min_y, 0.0)
            lo = self._point(min_x - dx, min_y - dy)
            hi = self._point(min(max_x - dx, s), min(max_y - dy, s))
        elif min_ok and not max_ok:
            dx = max(max_x - s, 0.0)
            dy = max(max_y - s, 0.0)
            lo = self._point(max(min_x - dx, 0.0), max(min_y - dy, 0.0))
            hi = self._point(max_x - dx, max_y - dy)
        else:
            return Viewport.full_scene(s)
        return Viewport(lo, hi, s)

    def panned(self, direction: Pan, percent: float) -> "Viewport":
        """Shift by *percent* of the viewport size along *direction*."""
        if direction in (Pan.UP, Pan.DOWN):
            d = self.height * percent
            dx, dy = 0.0, (-d if direction is Pan.UP else d)
        else:
            d = self.width * percent
            dx, dy = (-d if direction is Pan.LEFT else d), 0.0
        try:
            lo = self._point(self.min_point.x + dx, self.min_point.y + dy)
            hi = self._point(self.max_point.x + dx, self.max_point.y + dy)
        except RangeViolation as exc:
            raise NavigationError(
                f"scene limit reached panning {direction.value}"
            ) from exc
        return Viewport(lo, hi, self.scene_size)
