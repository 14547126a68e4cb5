from __future__ import annotations

from math import pi

import pytest
from pydantic import ValidationError

from polyraster.core.errors import MalformedInput, RangeViolation, UnsupportedCommand
from polyraster.core.geometry import Color, Polygon, UniversalPoint
from polyraster.core.shapes import (
    ApproximationParams,
    CircleShape,
    EllipseShape,
    PathShape,
    Scene,
    approximate_shape,
    parse_style,
)

P = UniversalPoint
STYLE = "stroke:#000000;fill:none"


def test_parse_style() -> None:
    style = parse_style("stroke:#ffffff;fill:#ff0000;stroke-width:2")
    assert style.stroke == Color(1.0, 1.0, 1.0)
    assert style.fill == Color(1.0, 0.0, 0.0)
    style = parse_style("stroke:none; fill:none;")
    assert style.stroke is None and style.fill is None


@pytest.mark.parametrize(
    "style", ["stroke:#000000", "fill:none", "stroke;fill:none", "stroke:#00;fill:none"]
)
def test_parse_style_malformed(style: str) -> None:
    with pytest.raises(MalformedInput):
        parse_style(style)


def test_shape_models_validate() -> None:
    with pytest.raises(ValidationError):
        PathShape(id="", style=STYLE, d="m 0,0")
    with pytest.raises(ValidationError):
        CircleShape(id="c", style="stroke:#000000", cx=1, cy=1, r=1)
    with pytest.raises(ValidationError):
        EllipseShape(id="e", style=STYLE, cx=1, cy=1, rx=-1, ry=1)


def test_fill_colour_comes_from_fill() -> None:
    shape = CircleShape(id="c", style="stroke:#0000ff;fill:#00ff00", cx=50, cy=50, r=5)
    poly = approximate_shape(shape, ApproximationParams(scene_size=1000, spacing=1))
    assert poly.stroke_color == Color(0.0, 0.0, 1.0)
    assert poly.fill_color == Color(0.0, 1.0, 0.0)


def test_circle_scaled_then_sampled() -> None:
    shape = CircleShape(id="c", style=STYLE, cx=50, cy=50, r=10, layer=4)
    params = ApproximationParams(scene_size=1000, spacing=1.0, scale=2.0)
    poly = approximate_shape(shape, params)
    (border,) = poly.borders
    assert len(border) == round(2 * pi * 20) + 1
    assert border[0] == border[-1]
    assert border[0].distance_to(P(100, 100)) == pytest.approx(20.0)
    assert poly.layer == 4 and poly.id == "c"


def test_ellipse_border_closed() -> None:
    shape = EllipseShape(id="e", style=STYLE, cx=50, cy=50, rx=20, ry=10)
    poly = approximate_shape(shape, ApproximationParams(scene_size=1000, spacing=1))
    (border,) = poly.borders
    assert border[0] == border[-1]
    assert border[0] == P(70, 50)


def test_path_built_then_scaled() -> None:
    shape = PathShape(id="p", style=STYLE, d="m 10,10 l 10,0")
    params = ApproximationParams(scene_size=1000, spacing=1.0, scale=2.0)
    poly = approximate_shape(shape, params)
    assert poly.borders == ((P(20, 20), P(40, 20)),)


def test_shape_outside_scene_raises() -> None:
    params = ApproximationParams(scene_size=100, spacing=1.0)
    with pytest.raises(RangeViolation):
        approximate_shape(CircleShape(id="c", style=STYLE, cx=5, cy=50, r=10), params)
    with pytest.raises(RangeViolation):
        approximate_shape(PathShape(id="p", style=STYLE, d="m 90,90 h 20"), params)


def test_scene_is_unchanged_when_a_shape_fails() -> None:
    params = ApproximationParams(scene_size=1000, spacing=1.0)
    scene = Scene(1000.0).with_shapes(
        [PathShape(id="a", style=STYLE, d="m 0,0 l 10,0")], params
    )
    bad = [
        CircleShape(id="b", style=STYLE, cx=500, cy=500, r=5),
        PathShape(id="c", style=STYLE, d="M 0,0 L 10,10"),
    ]
    with pytest.raises(UnsupportedCommand):
        scene.with_shapes(bad, params)
    assert len(scene) == 1
    assert [p.id for p in scene.polygons] == ["a"]


def test_scene_by_layer_is_stable_and_skips_invisible() -> None:
    def poly(ident: str, layer: int) -> Polygon:
        return Polygon(id=ident, layer=layer).add_border([P(1, 1), P(2, 2)])

    scene = Scene(
        1000.0,
        (poly("a", 2), poly("b", 0), Polygon(id="empty"), poly("c", 2), poly("d", 1)),
    )
    assert [p.id for p in scene.by_layer()] == ["b", "d", "a", "c"]


def test_non_integer_scale_reaches_scene_edge() -> None:
    params = ApproximationParams(scene_size=1000, spacing=5.0, scale=1000 / 30)
    diagonal = approximate_shape(
        PathShape(id="d", style=STYLE, d="m 0,0 l 30,30"), params
    )
    ring = approximate_shape(
        CircleShape(id="c", style=STYLE, cx=15, cy=15, r=15), params
    )
    for poly in (diagonal, ring):
        for p in poly.borders[0]:
            assert 0.0 <= p.x <= 1000.0 and 0.0 <= p.y <= 1000.0
    last = diagonal.borders[0][-1]
    assert last.x == pytest.approx(1000.0) and last.y == pytest.approx(1000.0)
    assert ring.borders[0][0].x == pytest.approx(1000.0)
