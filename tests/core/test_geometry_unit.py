from __future__ import annotations

import pytest

from polyraster.core.errors import (
    MalformedInput,
    NavigationError,
    PolyrasterError,
    RangeViolation,
    UnsupportedCommand,
)
from polyraster.core.geometry import (
    Color,
    FramebufferPoint,
    Polygon,
    UniversalPoint,
    is_closed,
    parse_color,
)


def test_universal_point_checked_bounds() -> None:
    assert UniversalPoint.checked(0, 1000, 1000) == UniversalPoint(0.0, 1000.0)
    with pytest.raises(RangeViolation):
        UniversalPoint.checked(-0.5, 10, 1000)
    with pytest.raises(RangeViolation):
        UniversalPoint.checked(10, 1000.1, 1000)


def test_unchecked_point_allows_intermediate_values() -> None:
    p = UniversalPoint(-5.0, 2000.0)
    assert p.offset(5.0, -1000.0) == UniversalPoint(0.0, 1000.0)


def test_framebuffer_point_checked_bounds() -> None:
    assert FramebufferPoint.checked(9, 19, 10, 20) == FramebufferPoint(9, 19)
    with pytest.raises(RangeViolation):
        FramebufferPoint.checked(10, 0, 10, 20)
    with pytest.raises(RangeViolation):
        FramebufferPoint.checked(0, -1, 10, 20)


def test_color_from_hex() -> None:
    assert Color.from_hex("#ff0000") == Color(1.0, 0.0, 0.0)
    assert Color.from_hex("#FFFFFF").to_rgb255() == (255, 255, 255)
    for bad in ("red", "#ff00", "#gg0000", "ff00000"):
        with pytest.raises(MalformedInput):
            Color.from_hex(bad)


def test_color_component_range() -> None:
    with pytest.raises(RangeViolation):
        Color(1.5, 0.0, 0.0)


def test_parse_color_none() -> None:
    assert parse_color("none") is None
    assert parse_color(" #000000 ") == Color(0.0, 0.0, 0.0)


def test_is_closed() -> None:
    a = UniversalPoint(1, 1)
    b = UniversalPoint(2, 1)
    assert not is_closed([a])
    assert is_closed([a, a])
    assert is_closed([a, b, a])
    assert not is_closed([a, b])


def test_polygon_transforms_return_new_values() -> None:
    poly = Polygon(id="p", layer=3)
    assert not poly.is_visible
    with_border = poly.add_border([UniversalPoint(1, 2), UniversalPoint(3, 4)])
    assert poly.borders == ()
    assert with_border.is_visible
    assert with_border.point_count() == 2
    scaled = with_border.scaled(10.0, 1000.0)
    assert scaled.borders == ((UniversalPoint(10, 20), UniversalPoint(30, 40)),)
    assert scaled.layer == 3 and scaled.id == "p"


def test_polygon_scaled_outside_scene_raises() -> None:
    poly = Polygon(id="p").add_border([UniversalPoint(600, 10)])
    with pytest.raises(RangeViolation):
        poly.scaled(2.0, 1000.0)


def test_error_hierarchy() -> None:
    err = UnsupportedCommand("M")
    assert err.command == "M"
    assert "'M'" in str(err)
    for cls in (MalformedInput, UnsupportedCommand, RangeViolation, NavigationError):
        assert issubclass(cls, PolyrasterError)
    assert issubclass(PolyrasterError, ValueError)


def test_snapped_absorbs_edge_rounding_only() -> None:
    assert UniversalPoint.snapped(1000.0000000000001, -1e-12, 1000) == UniversalPoint(
        1000.0, 0.0
    )
    assert UniversalPoint.snapped(12.5, 999.5, 1000) == UniversalPoint(12.5, 999.5)
    with pytest.raises(RangeViolation):
        UniversalPoint.snapped(1000.1, 0, 1000)
    with pytest.raises(RangeViolation):
        UniversalPoint.snapped(0, -0.001, 1000)
