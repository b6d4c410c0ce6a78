# PathBool - Boolean Operations on Bezier Paths
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Tests for rebuilding islands from classified pieces."""

import pytest

from pathbool import Loop, Point, make_polygon, make_rect
from pathbool.core.constants import PieceSide
from pathbool.operators.intersection import get_loop_collision_info
from pathbool.operators.rebuild import (
    chain_pieces, classify_piece, cut_island, keeps_piece, merge_runs, rebuild_islands,
    touches_vertex,
)
from pathbool.operators.reflow import adopt

from conftest import assert_links_consistent, has_point, segs


def test_cut_island_at_vertices_of_the_other() -> None:
    """An edge carrying a corner of the other island is cut there, nowhere else."""

    square = segs(make_rect(0, 0, 2, 2))
    corner = segs(make_rect(1, -1, 3, 0))
    pieces = cut_island(square, corner, {}, from_a=True)
    assert len(pieces) == 5
    first, second = pieces[0], pieces[1]
    assert first.source is second.source is square[0]
    assert (first.t0, first.t1, second.t1) == (0.0, 0.5, 1.0)
    assert first.end == Point(1.0, 0.0)
    assert first.continues(second) and not second.continues(first)


def test_classify_pieces() -> None:
    square = segs(make_rect(0, 0, 2, 2))
    other = segs(make_rect(1, 0, 3, 2))
    sides = {(p.source.pos, p.t0): classify_piece(p, other) for p in cut_island(square, other, {}, True)}
    assert sides[(Point(0, 0), 0.0)] == PieceSide.OUTSIDE
    assert sides[(Point(0, 0), 0.5)] == PieceSide.SAME
    assert sides[(Point(2, 0), 0.0)] == PieceSide.INSIDE
    assert sides[(Point(2, 2), 0.0)] == PieceSide.SAME

    flipped = Loop.from_points([(1, 0), (1, 2), (3, 2), (3, 0)])
    sides = [classify_piece(p, segs(flipped)) for p in cut_island(square, segs(flipped), {}, True)]
    assert sides.count(PieceSide.OPPOSITE) == 2
    assert PieceSide.SAME not in sides


def test_keep_rule() -> None:
    """Inside or outside per the operator; shared stretches keep a single copy."""

    assert keeps_piece(PieceSide.INSIDE, keep_inside=True, from_a=False)
    assert not keeps_piece(PieceSide.INSIDE, keep_inside=False, from_a=True)
    assert keeps_piece(PieceSide.OUTSIDE, keep_inside=False, from_a=False)
    assert keeps_piece(PieceSide.SAME, keep_inside=False, from_a=True)
    assert not keeps_piece(PieceSide.SAME, keep_inside=True, from_a=False)
    assert not keeps_piece(PieceSide.OPPOSITE, keep_inside=True, from_a=True)


def test_chain_prefers_staying_on_the_same_island() -> None:
    """At a touch point the run carries on along its own island."""

    square = segs(make_rect(0, 0, 2, 2))
    tip = segs(make_polygon([(2, 1), (4, 0), (4, 2)]))
    pieces = cut_island(square, tip, {}, True) + cut_island(tip, square, {}, False)
    runs = chain_pieces(pieces)
    assert [len(run) for run in runs] == [5, 3]
    assert all(p.from_a for p in runs[0])
    assert len(merge_runs(runs[0])) == 4


def test_chain_that_cannot_close() -> None:
    square = segs(make_rect(0, 0, 2, 2))
    pieces = cut_island(square, [], {}, True)
    assert chain_pieces(pieces[:-1]) is None


def test_merge_runs_rotates_to_a_segment_start() -> None:
    edge = segs(make_rect(0, 0, 2, 2))
    cut = cut_island(edge, [], {edge[0]: [0.5], edge[3]: [0.25]}, True)
    run = cut[1:] + cut[:1]
    merged = merge_runs(run)
    assert len(merged) == 4
    assert all((p.t0, p.t1) == (0.0, 1.0) for p in merged)


def test_rebuild_union_sharing_an_edge() -> None:
    a, b = segs(make_rect(0, 0, 1, 1)), segs(make_rect(1, 0, 2, 1))
    collisions = get_loop_collision_info(a, b)
    assert touches_vertex(collisions)
    chains = rebuild_islands(a, b, collisions, keep_a_inside=False, keep_b_inside=False)
    assert len(chains) == 1
    out = Loop()
    adopt(out, chains[0])
    assert out.signed_area() == pytest.approx(2.0)
    assert has_point(out, 2, 1) and has_point(out, 0, 1)
    assert_links_consistent(out)
    # Inputs are only read
    assert a[0].parent is not None and a[0].next is a[1]


def test_rebuild_intersection_of_islands_touching_at_a_corner_is_empty() -> None:
    a, b = segs(make_rect(0, 0, 1, 1)), segs(make_rect(1, 1, 2, 2))
    collisions = get_loop_collision_info(a, b)
    assert rebuild_islands(a, b, collisions, keep_a_inside=True, keep_b_inside=True) == []
