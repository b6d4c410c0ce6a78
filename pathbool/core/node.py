# PathBool - Boolean Operations on Bezier Paths
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Path node model.

A Node is one anchor point of a path. The segment that starts at a node runs
to node.next and is a cubic bezier when either the node's outgoing tangent or
the next node's incoming tangent is in use; otherwise it is a straight line.
Tangents are stored relative to the anchor position.

prev/next are plain references, not ownership: a node is owned by exactly one
Loop (node.parent) and reparented explicitly with set_parent().
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .constants import EndpointResult, PARAMETER_SLACK, PathType, TANGENT_EPSILON
from .geometry import (
    ZERO, Cubic, Point, cubic_area_term, cubic_derivative, cubic_extrema,
    cubic_point, cubic_roots, lerp, line_intersection, split_cubic, sub_cubic,
)

if TYPE_CHECKING:
    from .loop import Loop


@dataclass(frozen=True)
class PathBridge:
    """Kind of the segment leaving a node and the tangents that shape it."""
    path_type: PathType
    prev_tan_out: Point
    next_tan_in: Point


@dataclass
class SubdivideInfo:
    """Geometry of a single cut through a segment.

    prev_out and next_in are the replacement tangents for the segment's
    original endpoints, sub_in/sub_out the tangents of the new anchor at
    sub_pos. wind_tangent points along the segment at the cut and is only
    used for orientation sign tests.
    """
    prev_out: Point
    next_in: Point
    sub_pos: Point
    sub_in: Point
    sub_out: Point
    wind_tangent: Point


class Node:

    def __init__(self, pos: Point, tan_in: Point = ZERO, tan_out: Point = ZERO,
                 use_tan_in: bool | None = None, use_tan_out: bool | None = None,
                 parent: Loop | None = None) -> None:
        self.pos = pos
        self.tan_in = tan_in
        self.tan_out = tan_out
        self.use_tan_in = tan_in.length_squared() > TANGENT_EPSILON if use_tan_in is None else use_tan_in
        self.use_tan_out = tan_out.length_squared() > TANGENT_EPSILON if use_tan_out is None else use_tan_out
        self.prev: Node | None = None
        self.next: Node | None = None
        self.parent: Loop | None = None
        if parent is not None:
            self.set_parent(parent)

    def __repr__(self) -> str:
        return f"Node({self.pos.x:g}, {self.pos.y:g})"

    # -----------------------------------------------------------------------
    # Ownership
    # -----------------------------------------------------------------------

    def set_parent(self, new_parent: Loop | None) -> None:
        """Move this node into new_parent's node list (None detaches it)."""
        if self.parent is new_parent:
            return
        if self.parent is not None:
            self.parent.nodes.remove(self)
        self.parent = new_parent
        if new_parent is not None:
            new_parent.nodes.append(self)

    def detach(self) -> None:
        """Drop links and ownership without touching the neighbors."""
        self.prev = None
        self.next = None
        self.set_parent(None)

    # -----------------------------------------------------------------------
    # Segment queries
    # -----------------------------------------------------------------------

    def path_bridge(self) -> PathBridge:
        if self.next is None:
            return PathBridge(PathType.NONE, ZERO, ZERO)
        out = self.tan_out if self.use_tan_out else ZERO
        nin = self.next.tan_in if self.next.use_tan_in else ZERO
        if out.length_squared() <= TANGENT_EPSILON and nin.length_squared() <= TANGENT_EPSILON:
            return PathBridge(PathType.LINE, ZERO, ZERO)
        return PathBridge(PathType.BEZIER, out, nin)

    def is_line(self) -> bool:
        return self.path_bridge().path_type == PathType.LINE

    def control_points(self) -> Cubic:
        """Bezier control points of the outgoing segment (inner points collapse onto the ends for lines)."""
        bridge = self.path_bridge()
        p3 = self.next.pos
        return self.pos, self.pos + bridge.prev_tan_out, p3 + bridge.next_tan_in, p3

    def calculate_point(self, t: float) -> Point:
        if self.next is None:
            return self.pos
        if self.is_line():
            return lerp(self.pos, self.next.pos, t)
        return cubic_point(*self.control_points(), t)

    def tangent_at(self, t: float) -> Point:
        """Forward direction of the outgoing segment at t."""
        if self.is_line():
            return self.next.pos - self.pos
        p0, p1, p2, p3 = self.control_points()
        d = cubic_derivative(p0, p1, p2, p3, t)
        if d.length_squared() > TANGENT_EPSILON:
            return d
        # Control point coincides with the anchor; fall back to the hull
        if t < 0.5:
            return (p2 - p0) if (p2 - p0).length_squared() > TANGENT_EPSILON else p3 - p0
        return (p3 - p1) if (p3 - p1).length_squared() > TANGENT_EPSILON else p3 - p0

    def segment_piece(self, t0: float, t1: float) -> tuple[Cubic, bool]:
        """Control points of the outgoing segment between t0 and t1, and whether it is a line."""
        if self.is_line():
            a = lerp(self.pos, self.next.pos, t0)
            b = self.next.pos if t1 == 1.0 else lerp(self.pos, self.next.pos, t1)
            return (a, a, b, b), True
        return sub_cubic(*self.control_points(), t0, t1), False

    def max_point(self, axis: int) -> tuple[Point, float]:
        """Point of the outgoing segment furthest along axis, and its parameter.

        Ties keep the smallest parameter.
        """
        if self.next is None:
            return self.pos, 0.0
        if self.is_line():
            if self.next.pos[axis] > self.pos[axis]:
                return self.next.pos, 1.0
            return self.pos, 0.0
        cps = self.control_points()
        best, best_t = self.pos, 0.0
        for t in cubic_extrema(*(p[axis] for p in cps)) + [1.0]:
            pt = cubic_point(*cps, t)
            if pt[axis] > best[axis]:
                best, best_t = pt, t
        return best, best_t

    def project_segment(self, ray_start: Point, ray_control: Point) -> list[tuple[float, float]]:
        """Intersections of the outgoing segment with the infinite line through the ray.

        Returns (t, s) pairs: t along this segment, s along the ray where
        s=0 is ray_start and s=1 is ray_control. No range filtering is done
        here; the caller decides which hits count.
        """
        if self.next is None:
            return []
        if self.is_line():
            hit = line_intersection(self.pos, self.next.pos, ray_start, ray_control)
            return [] if hit is None else [hit]
        d = ray_control - ray_start
        dd = d.length_squared()
        cps = self.control_points()
        hits = []
        for t in cubic_roots(*(d.cross(p - ray_start) for p in cps)):
            s = (cubic_point(*cps, t) - ray_start).dot(d) / dd
            hits.append((t, s))
        return hits

    def locate_point(self, pt: Point, eps: float) -> float | None:
        """Parameter at which the outgoing segment passes within eps of pt, or None."""
        if self.next is None:
            return None
        if self.is_line():
            d = self.next.pos - self.pos
            dd = d.length_squared()
            if dd == 0.0:
                return None
            t = (pt - self.pos).dot(d) / dd
            if not -PARAMETER_SLACK <= t <= 1.0 + PARAMETER_SLACK:
                return None
            t = min(1.0, max(0.0, t))
            return t if lerp(self.pos, self.next.pos, t).distance_to(pt) <= eps else None
        cps = self.control_points()
        # A point on the curve zeroes both coordinate polynomials; either one may be flat
        candidates = cubic_roots(*(p.x - pt.x for p in cps)) + cubic_roots(*(p.y - pt.y for p in cps))
        best, best_t = eps, None
        for t in candidates:
            dist = cubic_point(*cps, t).distance_to(pt)
            if dist <= best:
                best, best_t = dist, t
        return best_t

    # -----------------------------------------------------------------------
    # Subdivision
    # -----------------------------------------------------------------------

    def subdivide_info(self, t: float) -> SubdivideInfo:
        if self.is_line():
            d = self.next.pos - self.pos
            return SubdivideInfo(d, -d, lerp(self.pos, self.next.pos, t), -d, d, d)
        (p0, q0, r0, s), (_, r1, q2, p3) = split_cubic(*self.control_points(), t)
        return SubdivideInfo(q0 - p0, q2 - p3, s, r0 - s, r1 - s, r1 - s)

    def subdivide_range_info(self, t0: float, t1: float) -> tuple[SubdivideInfo, SubdivideInfo]:
        """Cut the outgoing segment at two parameters (t0 < t1) at once."""
        if self.is_line():
            d = self.next.pos - self.pos
            return (SubdivideInfo(d, -d, lerp(self.pos, self.next.pos, t0), -d, d, d),
                    SubdivideInfo(d, -d, lerp(self.pos, self.next.pos, t1), -d, d, d))
        (p0, q0, r0, s), right = split_cubic(*self.control_points(), t0)
        (_, a, b, m), (_, c, d, p3) = split_cubic(*right, (t1 - t0) / (1.0 - t0))
        first = SubdivideInfo(q0 - p0, b - m, s, r0 - s, a - s, a - s)
        second = SubdivideInfo(a - s, d - p3, m, b - m, c - m, c - m)
        return first, second

    # -----------------------------------------------------------------------
    # Island traversal
    # -----------------------------------------------------------------------

    def travel(self) -> Iterator[Node]:
        """Yield this node and its successors until the chain ends or cycles."""
        it = self
        while it is not None:
            yield it
            it = it.next
            if it is self:
                return

    def is_closed(self) -> bool:
        it = self.next
        while it is not None:
            if it is self:
                return True
            it = it.next
        return False

    def path_leftmost(self) -> tuple[Node, EndpointResult]:
        """Walk backwards to the start of the chain.

        An open chain returns its first node; a closed island returns self.
        """
        it = self
        while it.prev is not None:
            it = it.prev
            if it is self:
                return self, EndpointResult.CYCLICAL
        return it, EndpointResult.SUCCESSFUL_EDGE

    def calculate_winding(self) -> float:
        """Signed winding of the island this node is on; positive is counter-clockwise."""
        return calculate_winding(list(self.travel()))

    def signed_area(self) -> float:
        """Exact signed area enclosed by the island this node is on."""
        total = 0.0
        for node in self.travel():
            if node.next is not None:
                total += cubic_area_term(*node.control_points())
        return total

    def reverse_chain_order(self) -> None:
        """Reverse the direction of the whole chain this node is on."""
        start, _ = self.path_leftmost()
        for node in list(start.travel()):
            node.prev, node.next = node.next, node.prev
            node.swap_tangents()

    def swap_tangents(self) -> None:
        self.tan_in, self.tan_out = self.tan_out, self.tan_in
        self.use_tan_in, self.use_tan_out = self.use_tan_out, self.use_tan_in

    def remove_island(self, rewind: bool = True) -> None:
        """Detach every node of this node's chain from its loop."""
        start = self.path_leftmost()[0] if rewind else self
        for node in list(start.travel()):
            node.detach()

    # -----------------------------------------------------------------------
    # Cloning
    # -----------------------------------------------------------------------

    def clone(self, parent: Loop | None = None) -> Node:
        return Node(self.pos, self.tan_in, self.tan_out, self.use_tan_in, self.use_tan_out, parent)

    @staticmethod
    def clone_nodes(nodes: Iterable[Node], parent: Loop | None = None,
                    allow_only_remaps: bool = True) -> dict[Node, Node]:
        """Clone a node set, relinking the clones among themselves.

        Clones go into parent, or stay unowned when parent is None. Links
        that leave the set are dropped when allow_only_remaps is set and kept
        pointing at the originals otherwise.
        """
        nodes = list(nodes)
        mapping = {n: n.clone(parent) for n in nodes}
        for old, new in mapping.items():
            for attr in ("prev", "next"):
                neighbor = getattr(old, attr)
                if neighbor in mapping:
                    setattr(new, attr, mapping[neighbor])
                elif not allow_only_remaps:
                    setattr(new, attr, neighbor)
        return mapping


def calculate_winding(nodes: Iterable[Node]) -> float:
    """Orientation of a closed chain from its control polygon around the centroid.

    Sign matches signed area for simple islands: positive for counter-clockwise
    (with y up), negative for clockwise.
    """
    nodes = list(nodes)
    if not nodes:
        return 0.0
    cx = sum(n.pos.x for n in nodes) / len(nodes)
    cy = sum(n.pos.y for n in nodes) / len(nodes)
    center = Point(cx, cy)

    polygon = []
    for node in nodes:
        polygon.append(node.pos)
        if node.next is not None and not node.is_line():
            _, p1, p2, _ = node.control_points()
            polygon.append(p1)
            polygon.append(p2)

    total = 0.0
    for i, pt in enumerate(polygon):
        nxt = polygon[(i + 1) % len(polygon)]
        total += (pt - center).cross(nxt - center)
    return total
