# PathBool - Boolean Operations on Bezier Paths
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Tests for path element conversion and shape generators."""

import math

import pytest

from pathbool import (
    ClosePath, CurveTo, LineTo, MoveTo, Point, loop_from_path, loop_to_path,
    make_circle, make_ellipse, make_polygon, make_rect,
)
from pathbool.core.shapes import arc_to_cubics

from conftest import assert_links_consistent, segs


def test_closed_subpath_becomes_an_island() -> None:
    """A MoveTo/LineTo/ClosePath subpath produces one closed straight island."""

    path = [[MoveTo(0, 0), LineTo(4, 0), LineTo(4, 4), ClosePath()]]
    loop = loop_from_path(path)
    nodes = segs(loop)
    assert [n.pos for n in nodes] == [Point(0, 0), Point(4, 0), Point(4, 4)]
    assert all(n.is_line() for n in nodes)
    assert nodes[0].is_closed()
    assert loop.signed_area() == pytest.approx(8.0)
    assert_links_consistent(loop)


def test_explicit_closing_point_is_folded() -> None:
    """A last point that repeats the start does not create a duplicate node."""

    path = [[MoveTo(0, 0), LineTo(1, 0), LineTo(1, 1), LineTo(0, 0), ClosePath()]]
    loop = loop_from_path(path)
    assert loop.node_count() == 3


def test_curve_tangents_are_relative() -> None:
    """CurveTo control points are stored as tangents relative to their anchors."""

    path = [[MoveTo(0, 0), CurveTo(1, 2, 3, 2, 4, 0)]]
    loop = loop_from_path(path)
    first, last = segs(loop)
    assert first.tan_out == Point(1, 2) and first.use_tan_out
    assert last.tan_in == Point(-1, 2) and last.use_tan_in
    assert not first.is_closed()
    assert first.control_points() == (Point(0, 0), Point(1, 2), Point(3, 2), Point(4, 0))


def test_multiple_subpaths_share_one_loop() -> None:
    """Each subpath becomes its own chain in the same loop."""

    path = [
        [MoveTo(0, 0), LineTo(1, 0), LineTo(1, 1), ClosePath()],
        [MoveTo(5, 5), LineTo(6, 5)],
    ]
    loop = loop_from_path(path)
    assert loop.count_open_and_closed() == (1, 1)


def test_loop_to_path_closes_islands_explicitly() -> None:
    """Closed islands are written back with a closing segment and ClosePath."""

    loop = make_rect(0, 0, 2, 1)
    (sp,) = loop_to_path(loop)
    assert sp[0] == MoveTo(0, 0)
    assert sp[1:4] == [LineTo(2, 0), LineTo(2, 1), LineTo(0, 1)]
    assert sp[4] == LineTo(0, 0)
    assert isinstance(sp[-1], ClosePath)

    again = loop_from_path([sp])
    assert again.node_count() == 4
    assert again.signed_area() == pytest.approx(2.0)


def test_curves_survive_conversion_back_to_path() -> None:
    """Cubic segments come back out as CurveTo with absolute control points."""

    loop = make_circle(Point(1, 1), 1.0)
    (sp,) = loop_to_path(loop)
    curves = [e for e in sp if isinstance(e, CurveTo)]
    assert len(curves) == 4
    assert (curves[-1].x3, curves[-1].y3) == pytest.approx((2.0, 1.0))
    assert loop_from_path([sp]).signed_area() == pytest.approx(loop.signed_area())


def test_arc_to_cubics_splits_into_quarters() -> None:
    """Arcs are broken into pieces of at most ninety degrees."""

    assert len(arc_to_cubics(Point(0, 0), 1, 1, 0.0, math.pi / 2)) == 1
    assert len(arc_to_cubics(Point(0, 0), 1, 1, 0.0, math.pi)) == 2
    pieces = arc_to_cubics(Point(0, 0), 2, 1, 0.0, 1.5 * math.pi)
    assert len(pieces) == 3
    assert (pieces[-1].x3, pieces[-1].y3) == pytest.approx((0.0, -1.0))


def test_generated_shapes_run_counter_clockwise() -> None:
    """Every generator produces positive winding and the expected area."""

    assert make_rect(3, 3, 0, 0).signed_area() == pytest.approx(9.0)
    assert make_ellipse(Point(0, 0), 2, 1).signed_area() == pytest.approx(2 * math.pi, rel=1e-3)

    clockwise = make_polygon([(0, 0), (0, 2), (2, 2), (2, 0)])
    assert clockwise.calculate_winding() > 0
    assert clockwise.signed_area() == pytest.approx(4.0)
    assert_links_consistent(clockwise)
