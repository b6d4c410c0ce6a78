# PathBool - Boolean Operations on Bezier Paths
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Containment classification for islands that do not intersect.

The extremal point of one island along an axis is certainly on its outer
boundary, so casting a ray from it toward +infinity and counting crossings
with the other island tells whether the whole island is inside the other.

Rays through vertices and along edges are the hard part. Hits are handled
in two passes:

1. Transversal hits strictly inside a segment are counted when the segment
   actually changes side there; a curve that only touches the ray does not
   count.
2. Nodes lying on the ray are grouped into runs joined by segments that also
   lie on the ray. Each run counts as one crossing if the chain arrives on
   one side of the ray and leaves on the other, and as none if it returns
   to the side it came from.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..core.constants import BoundingMode, COINCIDENT_EPSILON, CONTAINMENT_EPSILON, SIDE_STEP
from ..core.geometry import Point, axis_vector
from ..core.node import Node

logger = logging.getLogger(__name__)


def extremal_point(segs: Sequence[Node], axis: int = 0) -> tuple[Node, Point, float]:
    """Node, point and parameter furthest along axis; the first one wins ties."""
    best_node = segs[0]
    best_pt, best_t = best_node.pos, 0.0
    for node in segs:
        pt, t = node.max_point(axis)
        if pt[axis] > best_pt[axis]:
            best_node, best_pt, best_t = node, pt, t
    return best_node, best_pt, best_t


def _sign(value: float, tol: float = 0.0) -> int:
    if abs(value) <= tol:
        return 0
    return 1 if value > 0 else -1


def count_ray_crossings(origin: Point, segs: Sequence[Node], axis: int = 0,
                        tol: float = CONTAINMENT_EPSILON) -> int:
    """Number of times the island segs crosses the ray from origin toward +axis."""
    across = 1 - axis
    level = origin[across]
    ray_end = origin + axis_vector(axis)

    def on_ray(pt: Point) -> bool:
        return abs(pt[across] - level) <= tol

    def segment_on_ray(node: Node) -> bool:
        return all(on_ray(p) for p in node.control_points())

    def side_at(node: Node, t: float) -> int:
        # Side of the ray the segment is on near t, looking further in if it is still on the line
        for u in (t, 0.5, 1.0 - t):
            s = _sign(node.calculate_point(u)[across] - level)
            if s:
                return s
        return 0

    crossings = 0
    for node in segs:
        if node.next is None or segment_on_ray(node):
            continue
        start_on = on_ray(node.pos)
        end_on = on_ray(node.next.pos)
        for t, s in node.project_segment(origin, ray_end):
            if not 0.0 <= t <= 1.0 or s <= tol:
                continue
            if (start_on and t <= SIDE_STEP) or (end_on and t >= 1.0 - SIDE_STEP):
                continue
            before = node.calculate_point(max(0.0, t - SIDE_STEP))[across] - level
            after = node.calculate_point(min(1.0, t + SIDE_STEP))[across] - level
            if before * after < 0.0:
                crossings += 1

    flags = [on_ray(node.pos) for node in segs]
    if all(flags):
        return crossings
    first_off = flags.index(False)
    order = list(segs[first_off:]) + list(segs[:first_off])
    i = 0
    while i < len(order):
        if not on_ray(order[i].pos):
            i += 1
            continue
        j = i
        while j + 1 < len(order) and on_ray(order[j + 1].pos) and segment_on_ray(order[j]):
            j += 1
        run = order[i:j + 1]
        if any(n.pos[axis] > origin[axis] + tol for n in run):
            first, last = run[0], run[-1]
            arrive = side_at(first.prev, 1.0 - SIDE_STEP) if first.prev is not None else 0
            leave = side_at(last, SIDE_STEP) if last.next is not None else 0
            if arrive and leave and arrive != leave:
                crossings += 1
        i = j + 1
    return crossings


def get_loop_bounding_mode(segs_a: Sequence[Node], segs_b: Sequence[Node], axis: int = 0,
                           tol: float = CONTAINMENT_EPSILON) -> BoundingMode:
    """Classify two non-intersecting islands.

    Returns RIGHT_SURROUNDS_LEFT when a is inside b, LEFT_SURROUNDS_RIGHT
    when b is inside a, and NO_COLLISION when they are disjoint.
    """
    _, pt_a, _ = extremal_point(segs_a, axis)
    hits = count_ray_crossings(pt_a, segs_b, axis, tol)
    if hits % 2 == 1:
        mode = BoundingMode.RIGHT_SURROUNDS_LEFT
    elif hits > 0:
        mode = BoundingMode.NO_COLLISION
    else:
        _, pt_b, _ = extremal_point(segs_b, axis)
        hits = count_ray_crossings(pt_b, segs_a, axis, tol)
        mode = BoundingMode.LEFT_SURROUNDS_RIGHT if hits % 2 == 1 else BoundingMode.NO_COLLISION
    logger.debug("Containment of %d-node vs %d-node island: %s", len(segs_a), len(segs_b), mode.name)
    return mode


def get_node_bounding_mode(left: Node, right: Node, axis: int = 0) -> BoundingMode:
    """get_loop_bounding_mode for the islands two nodes sit on."""
    return get_loop_bounding_mode(list(left.travel()), list(right.travel()), axis)


def islands_coincide(segs_a: Sequence[Node], segs_b: Sequence[Node],
                     eps: float = COINCIDENT_EPSILON) -> bool:
    """True when both islands are made of the same segments, in either direction."""
    if len(segs_a) != len(segs_b):
        return False
    remaining = [n.control_points() for n in segs_b]
    for node in segs_a:
        cps = node.control_points()
        for i, other in enumerate(remaining):
            forward = all(p.distance_to(q) <= eps for p, q in zip(cps, other))
            backward = all(p.distance_to(q) <= eps for p, q in zip(cps, reversed(other)))
            if forward or backward:
                del remaining[i]
                break
        else:
            return False
    return True
