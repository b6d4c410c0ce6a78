# PathBool - Boolean Operations on Bezier Paths
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Tests for the point type and the bezier helpers."""

import math

import pytest

from pathbool.core.geometry import (
    Point, cubic_area_term, cubic_bounds, cubic_extrema, cubic_point, cubic_roots,
    line_intersection, split_cubic, sub_cubic,
)

CURVE = (Point(0, 0), Point(1, 2), Point(3, 2), Point(4, 0))


def test_point_arithmetic_and_products() -> None:
    """Points add, scale and expose the standard dot and cross products."""

    a = Point(1, 2)
    b = Point(3, -1)
    assert a + b == Point(4, 1)
    assert b - a == Point(2, -3)
    assert 2 * a == Point(2, 4)
    assert -a == Point(-1, -2)
    assert a.dot(b) == 1
    assert a.cross(b) == -7
    assert a[0] == 1 and a[1] == 2
    assert Point(3, 4).length() == 5
    assert Point(0, 0).normalized() == Point(0, 0)


def test_split_cubic_halves_meet_on_the_curve() -> None:
    """Both halves share the split point, which lies on the original curve."""

    left, right = split_cubic(*CURVE, 0.3)
    assert left[0] == CURVE[0] and right[3] == CURVE[3]
    assert left[3] == right[0]
    expected = cubic_point(*CURVE, 0.3)
    assert left[3].distance_to(expected) < 1e-12


def test_sub_cubic_reproduces_the_window() -> None:
    """A window's own parameterisation maps linearly onto the parent's."""

    piece = sub_cubic(*CURVE, 0.2, 0.7)
    for u in (0.0, 0.25, 0.5, 1.0):
        parent = cubic_point(*CURVE, 0.2 + 0.5 * u)
        assert cubic_point(*piece, u).distance_to(parent) < 1e-12


def test_cubic_roots_and_extrema() -> None:
    """Roots and stationary points are reported inside [0, 1] only."""

    ys = [p.y for p in CURVE]
    roots = cubic_roots(*(y - 1.0 for y in ys))
    assert len(roots) == 2
    for t in roots:
        assert cubic_point(*CURVE, t).y == pytest.approx(1.0)

    extrema = cubic_extrema(*ys)
    assert extrema == pytest.approx([0.5])
    assert cubic_roots(1.0, 1.0, 1.0, 1.0) == []


def test_cubic_bounds_contains_curve() -> None:
    """The hull box encloses every sampled point of the curve."""

    x0, y0, x1, y1 = cubic_bounds(*CURVE)
    for i in range(11):
        p = cubic_point(*CURVE, i / 10)
        assert x0 <= p.x <= x1 and y0 <= p.y <= y1


def test_line_intersection_parameters_and_parallel_lines() -> None:
    """Crossing lines report both parameters; parallel lines report nothing."""

    s, t = line_intersection(Point(0, 0), Point(2, 0), Point(1, -1), Point(1, 3))
    assert s == pytest.approx(0.5)
    assert t == pytest.approx(0.25)
    assert line_intersection(Point(0, 0), Point(1, 0), Point(0, 1), Point(1, 1)) is None
    assert line_intersection(Point(0, 0), Point(1, 0), Point(2, 0), Point(3, 0)) is None


def test_cubic_area_term_matches_known_integrals() -> None:
    """Line and quarter-arc contributions of the x dy integral."""

    # Line from (0,0) to (1,1) as a degenerate cubic: integral of x dx = 1/2
    line = (Point(0, 0), Point(0, 0), Point(1, 1), Point(1, 1))
    assert cubic_area_term(*line) == pytest.approx(0.5)

    k = 4.0 * (math.sqrt(2) - 1) / 3.0
    arc = (Point(1, 0), Point(1, k), Point(k, 1), Point(0, 1))
    # Quarter disc area pi/4; the x dy integral along the arc alone equals it
    # because the two radii contribute nothing.
    assert cubic_area_term(*arc) == pytest.approx(math.pi / 4, abs=1e-3)
