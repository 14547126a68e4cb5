"""Curve flattening and perimeter sampling.

Everything here is pure and works in universal coordinates without range
checks; callers validate the produced points against the scene bounds.

Cubic Béziers have no closed-form arc length, so :func:`adaptive_flatten`
estimates it from a dense reference polyline and then re-samples the curve
with a count that yields roughly ``spacing`` between consecutive points.
Ellipses have no closed-form equal-arc parametrization either; the sampler
integrates the speed function numerically and emits points as the travelled
fraction of the circumference crosses a running threshold.
"""

from __future__ import annotations

from math import cos, pi, sin, sqrt
from typing import List, Optional, Sequence

from .errors import MalformedInput
from .geometry import UniversalPoint

__all__ = [
    "REFERENCE_N",
    "ELLIPSE_STEP",
    "flatten_cubic_bezier",
    "polyline_length",
    "adaptive_flatten",
    "flatten_cubic_chain",
    "sample_circle",
    "sample_ellipse",
]

# Sample count of the reference polyline used to estimate Bézier arc length
REFERENCE_N: int = 1000

# Angular integration step (radians) for the ellipse circumference
ELLIPSE_STEP: float = 1e-4

_TAU = 2.0 * pi


def flatten_cubic_bezier(
    p0: UniversalPoint,
    p1: UniversalPoint,
    p2: UniversalPoint,
    p3: UniversalPoint,
    n: int,
) -> List[UniversalPoint]:
    """Return ``n + 1`` points of the curve at ``t = i / n``.

    B(t) = (1-t)^3 p0 + 3(1-t)^2 t p1 + 3(1-t) t^2 p2 + t^3 p3
    """
    if n <= 0:
        return [p0]
    out: List[UniversalPoint] = []
    for i in range(n + 1):
        t = i / n
        u = 1.0 - t
        b0 = u * u * u
        b1 = 3.0 * u * u * t
        b2 = 3.0 * u * t * t
        b3 = t * t * t
        out.append(
            UniversalPoint(
                b0 * p0.x + b1 * p1.x + b2 * p2.x + b3 * p3.x,
                b0 * p0.y + b1 * p1.y + b2 * p2.y + b3 * p3.y,
            )
        )
    return out


def polyline_length(points: Sequence[UniversalPoint]) -> float:
    return sum(a.distance_to(b) for a, b in zip(points, points[1:]))


def adaptive_flatten(
    p0: UniversalPoint,
    p1: UniversalPoint,
    p2: UniversalPoint,
    p3: UniversalPoint,
    spacing: float,
    *,
    reference_n: int = REFERENCE_N,
) -> List[UniversalPoint]:
    """Flatten with a sample count derived from the estimated arc length."""
    if spacing <= 0:
        raise ValueError("spacing must be > 0")
    length = polyline_length(flatten_cubic_bezier(p0, p1, p2, p3, reference_n))
    n = max(1, int(round(length / spacing)))
    return flatten_cubic_bezier(p0, p1, p2, p3, n)


def flatten_cubic_chain(
    anchor: UniversalPoint,
    params: Sequence[float],
    spacing: float,
    *,
    reference_n: int = REFERENCE_N,
) -> List[UniversalPoint]:
    """Flatten consecutive relative cubic segments starting at *anchor*.

    *params* holds 6-value chunks ``(dx1, dy1, dx2, dy2, dx3, dy3)``, each
    relative to the start of its own segment. The returned points exclude
    *anchor* itself. The running anchor advances by the raw ``(dx3, dy3)``
    offset rather than by the last flattened sample so rounding does not
    drift across segments.
    """
    if len(params) == 0 or len(params) % 6 != 0:
        raise MalformedInput(
            f"cubic curve expects groups of 6 parameters, got {len(params)}"
        )
    out: List[UniversalPoint] = []
    p0 = anchor
    for i in range(0, len(params), 6):
        dx1, dy1, dx2, dy2, dx3, dy3 = params[i : i + 6]
        pts = adaptive_flatten(
            p0,
            p0.offset(dx1, dy1),
            p0.offset(dx2, dy2),
            p0.offset(dx3, dy3),
            spacing,
            reference_n=reference_n,
        )
        out.extend(pts[1:])
        p0 = p0.offset(dx3, dy3)
    return out


def sample_circle(
    center: UniversalPoint, radius: float, spacing: float
) -> List[UniversalPoint]:
    """Evenly spaced perimeter points, closed by repeating the first one."""
    if spacing <= 0:
        raise ValueError("spacing must be > 0")
    num_points = max(1, int(round(_TAU * radius / spacing)))
    theta = _TAU / num_points
    border = [
        UniversalPoint(
            center.x + cos(theta * i) * radius, center.y + sin(theta * i) * radius
        )
        for i in range(num_points)
    ]
    border.append(border[0])
    return border


def sample_ellipse(
    center: UniversalPoint,
    rx: float,
    ry: float,
    spacing: float,
    *,
    step: float = ELLIPSE_STEP,
    threshold_step: Optional[float] = None,
) -> List[UniversalPoint]:
    """Sample an axis-aligned ellipse at roughly equal arc-length intervals.

    The target count comes from the RMS-radius perimeter approximation
    ``2*pi*sqrt((rx^2 + ry^2) / 2) / spacing``. A point is emitted whenever
    ``count * run / circ`` reaches the running threshold, after which the
    threshold advances by *threshold_step* (defaults to *spacing*). The two
    agree only when ``spacing == 1``; see DESIGN.md for the open question.
    """
    if spacing <= 0:
        raise ValueError("spacing must be > 0")
    if threshold_step is None:
        threshold_step = spacing
    if threshold_step <= 0:
        raise ValueError("threshold_step must be > 0")

    perimeter = _TAU * sqrt((rx * rx + ry * ry) / 2.0)
    num_points = int(round(perimeter / spacing))
    steps = int(_TAU / step)

    def dp(t: float) -> float:
        return sqrt((rx * sin(t)) ** 2 + (ry * cos(t)) ** 2)

    circ = sum(dp(i * step) for i in range(steps))
    if circ <= 0.0:
        return [center, center]

    border: List[UniversalPoint] = []
    run = 0.0
    next_point = 0.0
    for i in range(steps):
        theta = i * step
        if num_points * run / circ >= next_point:
            next_point += threshold_step
            border.append(
                UniversalPoint(center.x + cos(theta) * rx, center.y + sin(theta) * ry)
            )
        run += dp(theta)

    border.append(border[0])
    return border
