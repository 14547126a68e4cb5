"""Shape descriptors and their approximation into polygons.

Descriptors are pydantic models mirroring the elements the loader reads from
a shape document: paths (relative command strings), circles and ellipses.
Each carries an ``id``, a ``style`` string and the integer ``layer`` of the
group it belongs to.

:func:`approximate_shape` turns one descriptor into a :class:`Polygon` in
universal coordinates. :class:`Scene` collects the results; adding shapes is
all-or-nothing so a malformed shape never leaves a partial scene behind.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .curves import REFERENCE_N, sample_circle, sample_ellipse
from .errors import MalformedInput
from .geometry import Color, Polygon, UniversalPoint, parse_color
from .path import build_path

__all__ = [
    "Style",
    "parse_style",
    "PathShape",
    "CircleShape",
    "EllipseShape",
    "Shape",
    "ApproximationParams",
    "approximate_shape",
    "Scene",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Style:
    stroke: Optional[Color]
    fill: Optional[Color]


def parse_style(style: str) -> Style:
    """Parse ``"stroke:<#rrggbb|none>;fill:<#rrggbb|none>"``.

    Both keys are required; any other declarations are ignored.
    """
    decls: dict[str, str] = {}
    for part in style.split(";"):
        if not part.strip():
            continue
        pieces = part.split(":")
        if len(pieces) != 2:
            raise MalformedInput(f"cannot split key:value pair {part!r} in {style!r}")
        decls[pieces[0].strip()] = pieces[1].strip()
    for key in ("stroke", "fill"):
        if key not in decls:
            raise MalformedInput(f"style has no {key!r}: {style!r}")
    return Style(stroke=parse_color(decls["stroke"]), fill=parse_color(decls["fill"]))


class _ShapeBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    style: str
    layer: int = 0

    @field_validator("style")
    @classmethod
    def _chk_style(cls, v: str) -> str:
        parse_style(v)
        return v

    def parsed_style(self) -> Style:
        return parse_style(self.style)


class PathShape(_ShapeBase):
    """``<path d="...">`` using the relative command subset."""

    kind: Literal["path"] = "path"
    d: str


class CircleShape(_ShapeBase):
    kind: Literal["circle"] = "circle"
    cx: float
    cy: float
    r: float = Field(..., ge=0)


class EllipseShape(_ShapeBase):
    kind: Literal["ellipse"] = "ellipse"
    cx: float
    cy: float
    rx: float = Field(..., ge=0)
    ry: float = Field(..., ge=0)


Shape = Union[PathShape, CircleShape, EllipseShape]


@dataclass(frozen=True, slots=True)
class ApproximationParams:
    """Global parameters for turning descriptors into polylines.

    scene_size: side of the square scene in universal units.
    spacing: target distance between generated points, in scene units.
    scale: factor from descriptor units to scene units.
    reference_n: sample count used to estimate Bézier arc length.
    """

    scene_size: float
    spacing: float
    scale: float = 1.0
    reference_n: int = REFERENCE_N


def _snapped(
    points: Iterable[UniversalPoint], scene_size: float
) -> List[UniversalPoint]:
    return [UniversalPoint.snapped(p.x, p.y, scene_size) for p in points]


def approximate_shape(shape: Shape, params: ApproximationParams) -> Polygon:
    """Approximate one descriptor as a polygon in scene coordinates."""
    style = shape.parsed_style()
    poly: Polygon = Polygon(
        id=shape.id,
        layer=shape.layer,
        stroke_color=style.stroke,
        fill_color=style.fill,
    )
    s = params.scale
    size = params.scene_size

    if isinstance(shape, PathShape):
        # Paths are built in descriptor units, then scaled into the scene.
        borders = build_path(
            shape.d,
            params.spacing / s,
            size / s,
            reference_n=params.reference_n,
        )
        poly = poly.with_borders(borders).scaled(s, size)
    elif isinstance(shape, CircleShape):
        center = UniversalPoint.snapped(shape.cx * s, shape.cy * s, size)
        pts = sample_circle(center, shape.r * s, params.spacing)
        poly = poly.add_border(_snapped(pts, size))
    elif isinstance(shape, EllipseShape):
        center = UniversalPoint.snapped(shape.cx * s, shape.cy * s, size)
        pts = sample_ellipse(center, shape.rx * s, shape.ry * s, params.spacing)
        poly = poly.add_border(_snapped(pts, size))
    else:  # pragma: no cover - exhaustive over Shape
        raise MalformedInput(f"unknown shape type: {type(shape).__name__}")

    logger.debug(
        "approximated %s %r: %d borders, %d points",
        shape.kind,
        shape.id,
        len(poly.borders),
        poly.point_count(),
    )
    return poly


@dataclass(frozen=True, slots=True)
class Scene:
    """Ordered polygons of one loaded document."""

    scene_size: float
    polygons: Tuple[Polygon, ...] = field(default_factory=tuple)

    def with_shapes(
        self, shapes: Iterable[Shape], params: ApproximationParams
    ) -> "Scene":
        """Return a new scene with *shapes* appended.

        Every shape is approximated before anything is added, so an error
        leaves this scene untouched.
        """
        added = tuple(approximate_shape(shape, params) for shape in shapes)
        return Scene(self.scene_size, self.polygons + added)

    def by_layer(self) -> List[Polygon]:
        """Visible polygons sorted by layer; ties keep insertion order."""
        return sorted(
            (p for p in self.polygons if p.is_visible), key=lambda p: p.layer
        )

    def __len__(self) -> int:
        return len(self.polygons)
