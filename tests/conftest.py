# PathBool - Boolean Operations on Bezier Paths
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Shared helpers for the pathbool test-suite."""

from __future__ import annotations

import pytest

from pathbool import IslandTypeRequest, Loop, Node, Point, make_rect


def closed_islands(loop: Loop) -> list[Node]:
    return loop.get_islands(IslandTypeRequest.CLOSED)


def segs(loop: Loop) -> list[Node]:
    """Node list of the single island held by loop, in travel order."""
    islands = loop.get_islands()
    assert len(islands) == 1
    return list(islands[0].travel())


def assert_links_consistent(loop: Loop) -> None:
    for node in loop.nodes:
        assert node.parent is loop
        assert node.next is not None and node.prev is not None
        assert node.next.prev is node
        assert node.prev.next is node


def bounds(loop: Loop) -> tuple[float, float, float, float]:
    xs = [n.pos.x for n in loop.nodes]
    ys = [n.pos.y for n in loop.nodes]
    return min(xs), min(ys), max(xs), max(ys)


def has_point(loop: Loop, x: float, y: float, eps: float = 1e-9) -> bool:
    return any(n.pos.distance_to(Point(x, y)) <= eps for n in loop.nodes)


@pytest.fixture
def overlapping_squares() -> tuple[Loop, Loop]:
    """Squares (0,0)-(2,2) and (1,1)-(3,3), half overlapping."""
    return make_rect(0, 0, 2, 2), make_rect(1, 1, 3, 3)


@pytest.fixture
def nested_squares() -> tuple[Loop, Loop]:
    """Square (2,2)-(4,4) fully inside square (0,0)-(6,6)."""
    return make_rect(0, 0, 6, 6), make_rect(2, 2, 4, 4)
