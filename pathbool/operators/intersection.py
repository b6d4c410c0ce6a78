# PathBool - Boolean Operations on Bezier Paths
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Segment/segment intersection sampling.

Lines are intersected analytically, a line against a cubic by solving the
cubic along the line's normal, and two cubics by recursive bounding-box
subdivision: both curves are halved with de Casteljau, pairs of halves whose
control hulls do not overlap are dropped, and the surviving windows are
refined until the depth budget or the parameter tolerance runs out. The
chords of the final windows are then intersected to estimate the crossing.

Subdivision reports every leaf window that still overlaps, so one crossing
usually yields a small cluster of samples. clean_intersection_list() turns
the raw samples into one sample per crossing.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from ..core.constants import (
    FLAT_EPSILON, INTERSECTION_MERGE_EPSILON, NEIGHBOR_HIGH, NEIGHBOR_LOW, ON_BOUNDARY_EPSILON,
    PARAMETER_SLACK, SAMPLE_TOLERANCE, SUBDIVISION_DEPTH,
)
from ..core.geometry import Cubic, Point, bounds_overlap, cubic_bounds, line_intersection, split_cubic
from ..core.node import Node

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NodeTPos:
    """A parametric position on the segment leaving node."""
    node: Node
    t: float

    def point(self) -> Point:
        return self.node.calculate_point(self.t)


@dataclass(frozen=True)
class CollisionSample:
    """One detected crossing between the segments leaving a.node and b.node."""
    a: NodeTPos
    b: NodeTPos
    linear_a: bool = False
    linear_b: bool = False

    def reciprocal(self) -> CollisionSample:
        return CollisionSample(self.b, self.a, self.linear_b, self.linear_a)


def _clamp_unit(t: float) -> float:
    return min(1.0, max(0.0, t))


def _in_unit(t: float, slack: float = PARAMETER_SLACK) -> bool:
    return -slack <= t <= 1.0 + slack


# ---------------------------------------------------------------------------
# Curve/curve subdivision
# ---------------------------------------------------------------------------

def flat_and_colinear(piece_a: Cubic, piece_b: Cubic, eps: float = FLAT_EPSILON) -> bool:
    """True when every control point of both windows lies within eps of a's chord line."""
    p0 = piece_a[0]
    chord = piece_a[3] - p0
    length = chord.length()
    if length <= eps:
        return False
    return all(abs(chord.cross(p - p0)) <= eps * length for p in (piece_a[1], piece_a[2], *piece_b))


def subdivide_sample(rgn_a: tuple[Cubic, float, float], rgn_b: tuple[Cubic, float, float],
                     depth_left: int, tolerance: float, out: list[tuple[float, float]]) -> None:
    """Recursively collect (t_a, t_b) estimates where two curve windows cross.

    A region is (control points of the window, window start, window end) in
    the parameter space of the full segment. Windows that have become flat
    on one common line run along each other and are not refined further.
    """
    piece_a, a0, a1 = rgn_a
    piece_b, b0, b1 = rgn_b
    if not bounds_overlap(cubic_bounds(*piece_a), cubic_bounds(*piece_b)):
        return
    if flat_and_colinear(piece_a, piece_b):
        return

    if depth_left <= 0 or (a1 - a0) * 0.5 < tolerance or (b1 - b0) * 0.5 < tolerance:
        hit = line_intersection(piece_a[0], piece_a[3], piece_b[0], piece_b[3])
        if hit is None:
            return
        s, t = _clamp_unit(hit[0]), _clamp_unit(hit[1])
        out.append((a0 + (a1 - a0) * s, b0 + (b1 - b0) * t))
        return

    am = (a0 + a1) * 0.5
    bm = (b0 + b1) * 0.5
    la, ra = split_cubic(*piece_a, 0.5)
    lb, rb = split_cubic(*piece_b, 0.5)
    for sub_a in ((la, a0, am), (ra, am, a1)):
        for sub_b in ((lb, b0, bm), (rb, bm, b1)):
            subdivide_sample(sub_a, sub_b, depth_left - 1, tolerance, out)


def segments_overlap(node_a: Node, node_b: Node, eps: float = ON_BOUNDARY_EPSILON) -> bool:
    """True when the segments leaving node_a and node_b share a stretch of curve.

    The stretch is bounded by endpoints of either segment lying on the other
    one; it counts as shared when its middle lies on node_b's segment too.
    """
    ts = [t for t in (node_a.locate_point(node_b.pos, eps), node_a.locate_point(node_b.next.pos, eps))
          if t is not None]
    ts.extend(t for t, pt in ((0.0, node_a.pos), (1.0, node_a.next.pos))
              if node_b.locate_point(pt, eps) is not None)
    if len(ts) < 2 or max(ts) - min(ts) <= INTERSECTION_MERGE_EPSILON:
        return False
    mid = node_a.calculate_point((min(ts) + max(ts)) * 0.5)
    return node_b.locate_point(mid, eps) is not None


def node_intersections(node_a: Node, node_b: Node, depth: int = SUBDIVISION_DEPTH,
                       tolerance: float = SAMPLE_TOLERANCE) -> list[CollisionSample]:
    """Raw crossings between the segments leaving node_a and node_b.

    Parallel and colinear lines report nothing, and neither do two curves
    that run along each other; overlapping coincident segments are not
    intersections for the boolean operators. Where such an overlap ends, the
    neighboring segments cross or touch, and that is reported on them.
    """
    if node_a.next is None or node_b.next is None:
        return []
    linear_a = node_a.is_line()
    linear_b = node_b.is_line()

    if not (linear_a or linear_b) and segments_overlap(node_a, node_b):
        logger.debug("Segments from %r and %r overlap, no crossings sampled", node_a, node_b)
        return []

    if linear_b:
        # Works for a line or a cubic on side a: (t_a, s_b)
        pairs = node_a.project_segment(node_b.pos, node_b.next.pos)
    elif linear_a:
        pairs = [(s, t) for t, s in node_b.project_segment(node_a.pos, node_a.next.pos)]
    else:
        pairs = []
        subdivide_sample((node_a.control_points(), 0.0, 1.0),
                         (node_b.control_points(), 0.0, 1.0),
                         depth, tolerance, pairs)

    samples = []
    for ta, tb in pairs:
        if _in_unit(ta) and _in_unit(tb):
            samples.append(CollisionSample(NodeTPos(node_a, _clamp_unit(ta)),
                                           NodeTPos(node_b, _clamp_unit(tb)),
                                           linear_a, linear_b))
    return samples


# ---------------------------------------------------------------------------
# Cleanup
# ---------------------------------------------------------------------------

def is_neighbor_touch(sample: CollisionSample, low: float = NEIGHBOR_LOW,
                      high: float = NEIGHBOR_HIGH) -> bool:
    """True for the shared endpoint of two segments that follow each other on a chain."""
    a, b = sample.a, sample.b
    return (a.t < low and a.node.prev is b.node) or (a.t > high and a.node.next is b.node)


def _snap_to_vertex(pos: NodeTPos, eps: float) -> NodeTPos:
    # The end of a segment is the start of the next one; keep one spelling
    if pos.t >= 1.0 - eps and pos.node.next is not None:
        return NodeTPos(pos.node.next, 0.0)
    if pos.t <= eps:
        return NodeTPos(pos.node, 0.0)
    return pos


def clean_intersection_list(samples: Iterable[CollisionSample],
                            eps: float = INTERSECTION_MERGE_EPSILON) -> list[CollisionSample]:
    """Reduce raw samples to one sample per crossing.

    Out-of-range parameters and shared-endpoint neighbor touches are dropped,
    hits on a vertex are expressed as (vertex, 0), and clusters of samples on
    the same node pair whose parameters are all within eps of each other are
    averaged into one.
    """
    groups: dict[tuple[Node, Node], list[CollisionSample]] = {}
    for sample in samples:
        if not (_in_unit(sample.a.t, eps) and _in_unit(sample.b.t, eps)):
            continue
        if is_neighbor_touch(sample):
            continue
        a = _snap_to_vertex(NodeTPos(sample.a.node, _clamp_unit(sample.a.t)), eps)
        b = _snap_to_vertex(NodeTPos(sample.b.node, _clamp_unit(sample.b.t)), eps)
        if a == b:
            continue
        sample = CollisionSample(a, b, sample.linear_a, sample.linear_b)
        key = (a.node, b.node)
        if key not in groups and (b.node, a.node) in groups:
            key = (b.node, a.node)
            sample = sample.reciprocal()
        groups.setdefault(key, []).append(sample)

    cleaned = []
    for group in groups.values():
        group.sort(key=lambda s: (s.a.t, s.b.t))
        cluster = [group[0]]
        for sample in group[1:]:
            last = cluster[-1]
            if abs(sample.a.t - last.a.t) <= eps and abs(sample.b.t - last.b.t) <= eps:
                cluster.append(sample)
                continue
            cleaned.append(_merge_cluster(cluster))
            cluster = [sample]
        cleaned.append(_merge_cluster(cluster))
    return cleaned


def _merge_cluster(cluster: Sequence[CollisionSample]) -> CollisionSample:
    if len(cluster) == 1:
        return cluster[0]
    first = cluster[0]
    ta = sum(s.a.t for s in cluster) / len(cluster)
    tb = sum(s.b.t for s in cluster) / len(cluster)
    # Keep exact vertex hits exact
    if any(s.a.t == 0.0 for s in cluster):
        ta = 0.0
    if any(s.b.t == 0.0 for s in cluster):
        tb = 0.0
    return CollisionSample(NodeTPos(first.a.node, ta), NodeTPos(first.b.node, tb),
                           first.linear_a, first.linear_b)


def get_loop_collision_info(segs_a: Sequence[Node], segs_b: Sequence[Node],
                            depth: int = SUBDIVISION_DEPTH,
                            tolerance: float = SAMPLE_TOLERANCE) -> list[CollisionSample]:
    """Cleaned crossings between every segment of one island and every segment of another."""
    raw = []
    for node_a in segs_a:
        for node_b in segs_b:
            raw.extend(node_intersections(node_a, node_b, depth, tolerance))
    cleaned = clean_intersection_list(raw)
    logger.debug("%d raw samples, %d collisions between islands of %d and %d nodes",
                 len(raw), len(cleaned), len(segs_a), len(segs_b))
    return cleaned
