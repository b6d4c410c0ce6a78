# PathBool - Boolean Operations on Bezier Paths
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Boolean operators that rebuild the result by walking the inputs.

Instead of repointing links, a walker follows one island segment by segment
and, at every recorded collision, asks a junction-decision function whether
to carry on along the current island or jump to the other one. The pieces it
walks are emitted as brand-new nodes, so the inputs are never relinked; by
default they are detached from their loops once the new chains exist.

Union starts at the extremal point of both islands, which is always on the
outer boundary, and emits one chain. Intersection and difference start from
any collision not yet visited and keep going until every collision has been
passed through, so they can emit several chains.

When a collision sits on an existing vertex the junction cannot be decided
from two tangents, and the result is built by rebuild_islands() instead.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from ..core.constants import SAMPLE_TOLERANCE, SUBDIVISION_DEPTH
from ..core.geometry import Point
from ..core.loop import Loop
from ..core.node import Node
from .containment import extremal_point
from .intersection import CollisionSample, NodeTPos, clean_intersection_list, node_intersections
from .rebuild import emit_piece, rebuild_islands, touches_vertex
from .reflow import adopt, check_island, detached_copy, discard, orient_island
from .split import has_conflicting_claims

logger = logging.getLogger(__name__)

JunctionDecision = Callable[[Point, Point], bool]


@dataclass
class TraceData:
    """Every node of both islands and their collisions, bucketed per node."""
    nodes: list[Node]
    collisions: list[CollisionSample]
    by_node: dict[Node, list[CollisionSample]] = field(default_factory=dict)

    def following(self, pos: NodeTPos) -> CollisionSample | None:
        """First collision on pos.node strictly after pos.t, seen from pos.node's side."""
        for col in self.by_node.get(pos.node, ()):
            if col.a.t > pos.t:
                return col
        return None


def _key(col: CollisionSample) -> frozenset[NodeTPos]:
    return frozenset((col.a, col.b))


def gather_trace_data(isl_a: Node, isl_b: Node, depth: int = SUBDIVISION_DEPTH,
                      tolerance: float = SAMPLE_TOLERANCE) -> TraceData:
    """Collect the nodes of two islands and every crossing among them.

    All node pairs are sampled, including pairs on the same island, so
    self-intersections show up as collisions too. Adjacent segments always
    touch at their shared vertex; those touches are dropped.
    """
    nodes = list(isl_a.travel()) + list(isl_b.travel())
    raw = []
    for i, node_a in enumerate(nodes):
        for node_b in nodes[i + 1:]:
            raw.extend(node_intersections(node_a, node_b, depth, tolerance))
    data = TraceData(nodes, clean_intersection_list(raw))
    for col in data.collisions:
        data.by_node.setdefault(col.a.node, []).append(col)
        data.by_node.setdefault(col.b.node, []).append(col.reciprocal())
    for bucket in data.by_node.values():
        bucket.sort(key=lambda c: c.a.t)
    logger.debug("Trace data: %d nodes, %d collisions", len(nodes), len(data.collisions))
    return data


def trace_walk(data: TraceData, start: NodeTPos, switch: JunctionDecision,
               used: set[frozenset[NodeTPos]]) -> list[Node] | None:
    """Walk from start until the walk returns to it, emitting a new closed chain.

    switch(current_tangent, other_tangent) decides at each junction whether
    to continue on the other island. Returns None when the walk does not get
    back to start within a budget proportional to the input size.
    """
    budget = 4 * (len(data.nodes) + 2 * len(data.collisions)) + 8
    chain = [Node(start.point())]
    cur = start
    for _ in range(budget):
        col = data.following(cur)
        if col is not None:
            piece, linear = cur.node.segment_piece(cur.t, col.a.t)
            used.add(_key(col))
            here = cur.node.tangent_at(col.a.t)
            there = col.b.node.tangent_at(col.b.t)
            nxt = col.b if switch(here, there) else col.a
        else:
            piece, linear = cur.node.segment_piece(cur.t, 1.0)
            nxt = NodeTPos(cur.node.next, 0.0)
        done = nxt == start
        emit_piece(chain, piece, linear, done)
        if done:
            return chain
        cur = nxt
    logger.warning("Trace from (%r, %g) did not close after %d steps", start.node, start.t, budget)
    return None


def _prepare(isl_a: Node, isl_b: Node,
             opposite: bool) -> tuple[list[Node], list[Node], list[Node], float, TraceData] | None:
    segs_a = list(isl_a.travel())
    segs_b = list(isl_b.travel())
    check_island(segs_a)
    check_island(segs_b)
    wind, work_b = orient_island(segs_a, detached_copy(segs_b), opposite)
    data = gather_trace_data(segs_a[0], work_b[0])
    if not data.collisions:
        return None
    if has_conflicting_claims(data.collisions):
        logger.warning("Degenerate collision set, nothing traced")
        return None
    return segs_a, segs_b, work_b, wind, data


def _rebuild(segs_a: list[Node], work_b: list[Node], data: TraceData,
             keep_a_inside: bool, keep_b_inside: bool) -> list[list[Node]] | None:
    # Walking cannot decide a junction on a vertex; rebuild from pieces instead
    on_a = set(segs_a)
    across = [c for c in data.collisions if (c.a.node in on_a) != (c.b.node in on_a)]
    return rebuild_islands(segs_a, work_b, across, keep_a_inside, keep_b_inside)


def _finish(chains: list[list[Node]], loop_into: Loop, segs_a: list[Node], segs_b: list[Node],
            remove_inputs: bool) -> Node | None:
    for chain in chains:
        adopt(loop_into, chain)
    if remove_inputs:
        discard(segs_a)
        discard(segs_b)
    return chains[0][0] if chains else None


def trace_union(isl_a: Node, isl_b: Node, loop_into: Loop | None = None,
                remove_inputs: bool = True) -> Node | None:
    """Outer boundary of two crossing islands as one new chain.

    Returns a node of the new chain, or None when the islands do not cross
    (or the crossings are degenerate) and nothing was changed.
    """
    loop_into = loop_into if loop_into is not None else isl_a.parent
    prepared = _prepare(isl_a, isl_b, opposite=False)
    if prepared is None:
        return None
    segs_a, segs_b, work_b, wind, data = prepared

    if touches_vertex(data.collisions):
        chains = _rebuild(segs_a, work_b, data, keep_a_inside=False, keep_b_inside=False)
        return None if chains is None else _finish(chains, loop_into, segs_a, segs_b, remove_inputs)

    node, _, lam = extremal_point(data.nodes)
    before = [c for c in data.by_node.get(node, ()) if c.a.t <= lam]
    start = before[-1].a if before else NodeTPos(node, 0.0)
    chain = trace_walk(data, start, lambda here, there: here.cross(there) * wind < 0, set())
    if chain is None:
        return None
    return _finish([chain], loop_into, segs_a, segs_b, remove_inputs)


def _trace_inward(isl_a: Node, isl_b: Node, loop_into: Loop | None, remove_inputs: bool,
                  opposite: bool) -> Node | None:
    loop_into = loop_into if loop_into is not None else isl_a.parent
    prepared = _prepare(isl_a, isl_b, opposite)
    if prepared is None:
        return None
    segs_a, segs_b, work_b, wind, data = prepared

    if touches_vertex(data.collisions):
        chains = _rebuild(segs_a, work_b, data, keep_a_inside=not opposite, keep_b_inside=True)
        return None if chains is None else _finish(chains, loop_into, segs_a, segs_b, remove_inputs)

    # Always measured against island a's winding; for difference b has been
    # reversed, which flips the sense of every junction met while on b
    def switch(here: Point, there: Point) -> bool:
        return here.cross(there) * wind > 0

    used: set[frozenset[NodeTPos]] = set()
    chains = []
    for col in data.collisions:
        if _key(col) in used:
            continue
        used.add(_key(col))
        on_a = switch(col.b.node.tangent_at(col.b.t), col.a.node.tangent_at(col.a.t))
        chain = trace_walk(data, col.a if on_a else col.b, switch, used)
        if chain is None:
            return None
        chains.append(chain)
    return _finish(chains, loop_into, segs_a, segs_b, remove_inputs)


def trace_intersection(isl_a: Node, isl_b: Node, loop_into: Loop | None = None,
                       remove_inputs: bool = True) -> Node | None:
    """Overlap of two crossing islands as one or more new chains."""
    return _trace_inward(isl_a, isl_b, loop_into, remove_inputs, opposite=False)


def trace_difference(isl_a: Node, isl_b: Node, loop_into: Loop | None = None,
                     remove_inputs: bool = True) -> Node | None:
    """Island a minus island b as one or more new chains.

    Returns None when nothing is left of island a as well.
    """
    return _trace_inward(isl_a, isl_b, loop_into, remove_inputs, opposite=True)
