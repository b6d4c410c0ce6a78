# PathBool - Boolean Operations on Bezier Paths
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Geometry primitives shared by the path model and the boolean operators.

Points are immutable so tangents and positions can be handed between nodes
without aliasing surprises. Cubic helpers work on four control points in the
usual (p0, p1, p2, p3) bezier order; a line segment is represented as a cubic
whose inner control points coincide with its endpoints.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from .constants import PARALLEL_EPSILON, PARAMETER_SLACK

# ---------------------------------------------------------------------------
# Point
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, s: float) -> Point:
        return Point(self.x * s, self.y * s)

    def __rmul__(self, s: float) -> Point:
        return self.__mul__(s)

    def __neg__(self) -> Point:
        return Point(-self.x, -self.y)

    def __getitem__(self, axis: int) -> float:
        return self.x if axis == 0 else self.y

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y

    def normalized(self) -> Point:
        ln = self.length()
        if ln < 1e-12:
            return Point(0.0, 0.0)
        return Point(self.x / ln, self.y / ln)

    def dot(self, other: Point) -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: Point) -> float:
        return self.x * other.y - self.y * other.x

    def distance_to(self, other: Point) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)


ZERO = Point(0.0, 0.0)

Cubic = tuple[Point, Point, Point, Point]
Bounds = tuple[float, float, float, float]


def axis_vector(axis: int) -> Point:
    return Point(1.0, 0.0) if axis == 0 else Point(0.0, 1.0)


# ---------------------------------------------------------------------------
# De Casteljau evaluation and splitting
# ---------------------------------------------------------------------------

def lerp(a: Point, b: Point, t: float) -> Point:
    return Point(a.x + (b.x - a.x) * t, a.y + (b.y - a.y) * t)


def cubic_point(p0: Point, p1: Point, p2: Point, p3: Point, t: float) -> Point:
    mt = 1.0 - t
    a = mt * mt * mt
    b = 3.0 * mt * mt * t
    c = 3.0 * mt * t * t
    d = t * t * t
    return Point(a * p0.x + b * p1.x + c * p2.x + d * p3.x,
                 a * p0.y + b * p1.y + c * p2.y + d * p3.y)


def cubic_derivative(p0: Point, p1: Point, p2: Point, p3: Point, t: float) -> Point:
    mt = 1.0 - t
    a = 3.0 * mt * mt
    b = 6.0 * mt * t
    c = 3.0 * t * t
    return Point(a * (p1.x - p0.x) + b * (p2.x - p1.x) + c * (p3.x - p2.x),
                 a * (p1.y - p0.y) + b * (p2.y - p1.y) + c * (p3.y - p2.y))


def split_cubic(p0: Point, p1: Point, p2: Point, p3: Point, t: float) -> tuple[Cubic, Cubic]:
    """Split cubic Bézier at parameter t. Returns (left_cps, right_cps) each as 4 Points."""
    q0 = lerp(p0, p1, t)
    q1 = lerp(p1, p2, t)
    q2 = lerp(p2, p3, t)
    r0 = lerp(q0, q1, t)
    r1 = lerp(q1, q2, t)
    s = lerp(r0, r1, t)
    return (p0, q0, r0, s), (s, r1, q2, p3)


def sub_cubic(p0: Point, p1: Point, p2: Point, p3: Point, t0: float, t1: float) -> Cubic:
    """Control points of the piece of a cubic between t0 and t1."""
    if t1 <= 0.0:
        return p0, p0, p0, p0
    if t1 < 1.0:
        (p0, p1, p2, p3), _ = split_cubic(p0, p1, p2, p3, t1)
    if t0 > 0.0:
        _, (p0, p1, p2, p3) = split_cubic(p0, p1, p2, p3, t0 / t1)
    return p0, p1, p2, p3


def cubic_bounds(p0: Point, p1: Point, p2: Point, p3: Point) -> Bounds:
    """Control hull bounding box; always encloses the curve."""
    xs = (p0.x, p1.x, p2.x, p3.x)
    ys = (p0.y, p1.y, p2.y, p3.y)
    return min(xs), min(ys), max(xs), max(ys)


def bounds_overlap(a: Bounds, b: Bounds) -> bool:
    return a[0] <= b[2] and b[0] <= a[2] and a[1] <= b[3] and b[1] <= a[3]


# ---------------------------------------------------------------------------
# Root finding
# ---------------------------------------------------------------------------

def _unit_roots(coeffs: list[float]) -> list[float]:
    """Real roots in [0, 1] of a power-basis polynomial (highest order first)."""
    arr = np.asarray(coeffs, dtype=float)
    scale = np.max(np.abs(arr))
    if scale == 0.0:
        return []
    # Leading terms that are pure rounding noise inflate np.roots' companion matrix
    arr[np.abs(arr) < scale * 1e-12] = 0.0
    roots = np.roots(arr)
    result = []
    for r in roots:
        if abs(r.imag) > 1e-9:
            continue
        t = float(r.real)
        if -PARAMETER_SLACK <= t <= 1.0 + PARAMETER_SLACK:
            result.append(min(1.0, max(0.0, t)))
    result.sort()
    return result


def cubic_roots(f0: float, f1: float, f2: float, f3: float) -> list[float]:
    """Parameters in [0, 1] where a 1D cubic bezier with control values f0..f3 is zero."""
    a = -f0 + 3.0 * f1 - 3.0 * f2 + f3
    b = 3.0 * f0 - 6.0 * f1 + 3.0 * f2
    c = -3.0 * f0 + 3.0 * f1
    return _unit_roots([a, b, c, f0])


def cubic_extrema(f0: float, f1: float, f2: float, f3: float) -> list[float]:
    """Parameters in [0, 1] where the derivative of a 1D cubic bezier vanishes."""
    a = -f0 + 3.0 * f1 - 3.0 * f2 + f3
    b = 3.0 * f0 - 6.0 * f1 + 3.0 * f2
    c = -3.0 * f0 + 3.0 * f1
    return _unit_roots([3.0 * a, 2.0 * b, c])


# ---------------------------------------------------------------------------
# Lines
# ---------------------------------------------------------------------------

def line_intersection(p1: Point, q1: Point, p2: Point, q2: Point) -> tuple[float, float] | None:
    """Intersect the infinite lines through (p1, q1) and (p2, q2).

    Returns (s, t) so that p1 + s*(q1-p1) == p2 + t*(q2-p2), or None when the
    lines are parallel, colinear, or either one is degenerate. The caller
    decides which parameter ranges are meaningful.
    """
    d1 = q1 - p1
    d2 = q2 - p2
    denom = d1.cross(d2)
    if abs(denom) <= PARALLEL_EPSILON * d1.length() * d2.length() or denom == 0.0:
        return None
    r = p2 - p1
    return r.cross(d2) / denom, r.cross(d1) / denom


# ---------------------------------------------------------------------------
# Area
# ---------------------------------------------------------------------------

# Integrals of B3_i(t) * B2_j(t) scaled by C(5, i+j); rows are x control
# points, columns are the first differences of the y control points.
_AREA_WEIGHTS = np.array([
    [1.0, 0.4, 0.1],
    [0.6, 0.6, 0.3],
    [0.3, 0.6, 0.6],
    [0.1, 0.4, 1.0],
])


def cubic_area_term(p0: Point, p1: Point, p2: Point, p3: Point) -> float:
    """Exact integral of x dy along a cubic; summed over a closed chain this is its signed area."""
    xs = np.array([p0.x, p1.x, p2.x, p3.x])
    dy = np.diff([p0.y, p1.y, p2.y, p3.y])
    return float(0.5 * xs @ _AREA_WEIGHTS @ dy)
