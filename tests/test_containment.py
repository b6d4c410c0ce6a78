# PathBool - Boolean Operations on Bezier Paths
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Tests for ray-cast containment of non-intersecting islands."""

from pathbool import BoundingMode, ClosePath, CurveTo, Loop, MoveTo, Point, get_loop_bounding_mode, loop_from_path, make_circle, make_polygon, make_rect
from pathbool.operators.containment import count_ray_crossings, extremal_point, get_node_bounding_mode, islands_coincide

from conftest import segs

TRIANGLE = [(2, 3), (1, 3.5), (1, 2.5)]


def _segs(points) -> list:
    return segs(make_polygon(points))


def test_extremal_point_prefers_first_on_ties() -> None:
    nodes = segs(make_rect(0, 0, 6, 6))
    node, pt, t = extremal_point(nodes)
    assert node is nodes[0]
    assert pt == Point(6, 0) and t == 1.0


def test_transversal_crossings_are_counted() -> None:
    """A ray leaving a circle's interior crosses it once."""

    circle = segs(make_circle(Point(0, 0), 1.0))
    assert count_ray_crossings(Point(0, 0.5), circle) == 1
    assert count_ray_crossings(Point(-3, 0.5), circle) == 2
    assert count_ray_crossings(Point(3, 0.5), circle) == 0


def test_ray_through_a_crossing_vertex_counts_once() -> None:
    """A ray through a node where the outline passes from one side to the other counts once."""

    circle = segs(make_circle(Point(0, 0), 1.0))
    assert count_ray_crossings(Point(0, 0), circle) == 1


def test_tangential_curve_does_not_count() -> None:
    """A curve that only touches the ray is not a crossing."""

    bump = segs(loop_from_path([[MoveTo(0, 0), CurveTo(0, 2, 4, 2, 4, 0), ClosePath()]]))
    assert count_ray_crossings(Point(-1, 1.5), bump) == 0
    assert count_ray_crossings(Point(-1, 1.0), bump) == 2


def test_diamond_vertex_on_ray() -> None:
    """The ray from the triangle runs exactly through the diamond's right corner."""

    tri = _segs(TRIANGLE)
    diamond = _segs([(3, 0), (6, 3), (3, 6), (0, 3)])
    assert get_loop_bounding_mode(tri, diamond) == BoundingMode.RIGHT_SURROUNDS_LEFT
    assert get_loop_bounding_mode(diamond, tri) == BoundingMode.LEFT_SURROUNDS_RIGHT


def test_notch_vertex_touching_the_ray() -> None:
    """A notch whose tip touches the ray and turns back is not a crossing."""

    tri = _segs(TRIANGLE)
    notch = _segs([(0, 0), (10, 0), (10, 6), (7, 3), (4, 6), (0, 6)])
    assert count_ray_crossings(Point(2, 3), notch) == 1
    assert get_loop_bounding_mode(tri, notch) == BoundingMode.RIGHT_SURROUNDS_LEFT


def test_edge_lying_on_the_ray() -> None:
    """An edge along the ray counts as one crossing when the outline passes through."""

    tri = _segs(TRIANGLE)
    step = _segs([(0, 0), (10, 0), (10, 3), (6, 3), (6, 6), (0, 6)])
    assert count_ray_crossings(Point(2, 3), step) == 1
    assert get_loop_bounding_mode(tri, step) == BoundingMode.RIGHT_SURROUNDS_LEFT


def test_disjoint_islands_with_a_shared_edge_line() -> None:
    """Side-by-side squares whose bottom edges share a line are disjoint."""

    a = segs(make_rect(0, 0, 1, 1))
    b = segs(make_rect(3, 0, 4, 1))
    assert get_loop_bounding_mode(a, b) == BoundingMode.NO_COLLISION
    assert get_loop_bounding_mode(b, a) == BoundingMode.NO_COLLISION


def test_nested_squares(nested_squares) -> None:
    outer, inner = nested_squares
    assert get_loop_bounding_mode(segs(outer), segs(inner)) == BoundingMode.LEFT_SURROUNDS_RIGHT
    assert get_node_bounding_mode(segs(inner)[0], segs(outer)[2]) == BoundingMode.RIGHT_SURROUNDS_LEFT


def test_islands_coincide_in_either_direction() -> None:
    square = segs(make_rect(0, 0, 1, 1))
    backwards = segs(Loop.from_points([(0, 0), (0, 1), (1, 1), (1, 0)]))
    shifted = segs(make_rect(0, 0, 1, 2))
    assert islands_coincide(square, backwards)
    assert not islands_coincide(square, shifted)
    assert not islands_coincide(square, _segs(TRIANGLE))
