"""Geometry primitives: points in both coordinate spaces, colours, polygons.

Two point types are kept deliberately distinct:

- :class:`UniversalPoint` lives in the continuous scene space
  ``[0, scene_size] x [0, scene_size]``.
- :class:`FramebufferPoint` lives in the discrete pixel space
  ``[0, width-1] x [0, height-1]``.

Conversion between them only happens through
:func:`polyraster.render.mapper.to_framebuffer`. Both types have a ``checked``
constructor that raises :class:`~polyraster.core.errors.RangeViolation` when
the coordinates fall outside their space (``UniversalPoint.snapped`` first
absorbs floating point overshoot at the edges); the plain constructor is reserved
for intermediate values such as control points and clip intersections.

A "line" is not a two point segment: it is an ordered tuple of points that
may describe an open polyline or, when the first and last points coincide, a
closed border. Polygons hold several borders so shapes with holes can be
expressed.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from math import hypot
from typing import Generic, Iterable, Optional, Sequence, Tuple, TypeVar

from .errors import MalformedInput, RangeViolation

__all__ = [
    "UniversalPoint",
    "FramebufferPoint",
    "Segment",
    "Color",
    "Polygon",
    "Line",
    "is_closed",
    "parse_color",
]


def _check_range(kind: str, values: Sequence[float], lo: float, hi: float) -> None:
    bad = [v for v in values if not (lo <= v <= hi)]
    if bad:
        raise RangeViolation(
            f"{kind} values outside [{lo}, {hi}]: " + " ".join(str(v) for v in bad)
        )


# Relative overshoot still treated as lying on a scene edge.
SNAP_REL_TOL = 1e-9


def _snap(value: float, size: float, rel_tol: float) -> float:
    tol = rel_tol * size
    if -tol <= value < 0.0:
        return 0.0
    if size < value <= size + tol:
        return size
    return value


@dataclass(frozen=True, slots=True)
class UniversalPoint:
    """Point in continuous scene ("universal") coordinates."""

    x: float
    y: float

    @classmethod
    def checked(cls, x: float, y: float, scene_size: float) -> "UniversalPoint":
        _check_range("universal point", (x, y), 0.0, float(scene_size))
        return cls(float(x), float(y))

    @classmethod
    def snapped(
        cls, x: float, y: float, scene_size: float, rel_tol: float = SNAP_REL_TOL
    ) -> "UniversalPoint":
        """Like :meth:`checked`, but first pull values that overshoot an edge
        by rounding noise (within ``rel_tol * scene_size``) back onto it.

        Scaling by a non-integer factor such as ``1000 / 30`` can land a point
        meant to sit on the scene edge at ``1000.0000000000001``.
        """
        size = float(scene_size)
        return cls.checked(
            _snap(x, size, rel_tol), _snap(y, size, rel_tol), size
        )

    def offset(self, dx: float, dy: float) -> "UniversalPoint":
        return UniversalPoint(self.x + dx, self.y + dy)

    def distance_to(self, other: "UniversalPoint") -> float:
        return hypot(other.x - self.x, other.y - self.y)


@dataclass(frozen=True, slots=True)
class FramebufferPoint:
    """Pixel coordinates; ``checked`` bounds them to the framebuffer size."""

    x: int
    y: int

    @classmethod
    def checked(cls, x: int, y: int, width: int, height: int) -> "FramebufferPoint":
        _check_range("framebuffer x", (x,), 0, width - 1)
        _check_range("framebuffer y", (y,), 0, height - 1)
        return cls(int(x), int(y))


PointT = TypeVar("PointT", UniversalPoint, FramebufferPoint)

# Ordered points; closed when first == last.
Line = Tuple[PointT, ...]


@dataclass(frozen=True, slots=True)
class Segment:
    """A single straight edge in pixel space, used by the rasterizer."""

    x0: int
    y0: int
    x1: int
    y1: int


@dataclass(frozen=True, slots=True)
class Color:
    """RGB colour with components in ``[0, 1]``."""

    r: float
    g: float
    b: float

    def __post_init__(self) -> None:
        _check_range("color", (self.r, self.g, self.b), 0.0, 1.0)

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        """Parse ``#rrggbb``."""
        digits = value[1:]
        if (
            not value.startswith("#")
            or len(value) != 7
            or any(ch not in "0123456789abcdefABCDEF" for ch in digits)
        ):
            raise MalformedInput(f"invalid hex colour: {value!r}")
        return cls(
            int(digits[0:2], 16) / 255.0,
            int(digits[2:4], 16) / 255.0,
            int(digits[4:6], 16) / 255.0,
        )

    def to_rgb255(self) -> Tuple[int, int, int]:
        return (
            int(round(self.r * 255)),
            int(round(self.g * 255)),
            int(round(self.b * 255)),
        )


def parse_color(value: str) -> Optional[Color]:
    """Parse a style colour: ``none`` means "do not draw"."""
    value = value.strip()
    if value == "none":
        return None
    return Color.from_hex(value)


def is_closed(line: Sequence[object]) -> bool:
    return len(line) >= 2 and line[0] == line[-1]


@dataclass(frozen=True, slots=True)
class Polygon(Generic[PointT]):
    """One scene element: borders plus presentation attributes.

    ``borders`` keeps insertion order, which is also the draw order of the
    sub-borders. A ``None`` colour means the aspect is not drawn. Polygons are
    never mutated; transforms return a new value.
    """

    id: str
    layer: int = 0
    borders: Tuple[Tuple[PointT, ...], ...] = field(default_factory=tuple)
    stroke_color: Optional[Color] = None
    fill_color: Optional[Color] = None

    def with_borders(self, borders: Iterable[Sequence[PointT]]) -> "Polygon":
        return replace(self, borders=tuple(tuple(b) for b in borders))

    def add_border(self, border: Sequence[PointT]) -> "Polygon":
        return replace(self, borders=self.borders + (tuple(border),))

    def scaled(self, factor: float, scene_size: float) -> "Polygon":
        """Scale every point about the origin, re-checking scene bounds."""
        return self.with_borders(
            [
                [
                    UniversalPoint.snapped(p.x * factor, p.y * factor, scene_size)
                    for p in border
                ]
                for border in self.borders
            ]
        )

    @property
    def is_visible(self) -> bool:
        return any(len(b) > 0 for b in self.borders)

    def point_count(self) -> int:
        return sum(len(b) for b in self.borders)
