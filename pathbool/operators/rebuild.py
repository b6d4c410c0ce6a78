# PathBool - Boolean Operations on Bezier Paths
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Rebuild of two islands that touch at vertices or share boundary.

The splice and the trace walker decide every junction from the two forward
tangents at a crossing strictly inside both segments. When a collision lands
on an existing vertex, or the islands run along each other, those tangents
no longer say how the outline continues. Such collision sets are rebuilt
from pieces instead:

1. Every segment of both islands is cut at the collisions on it and at the
   vertices of the other island lying on it.
2. Each piece is classified by its midpoint against the other island: on
   its boundary running the same way, on it running the other way, inside
   it, or outside it.
3. The operator's keep rule selects pieces. Of a stretch both islands share,
   one copy survives when they run the same way and none when they run
   opposite ways.
4. Kept pieces are chained end to start into new closed chains. Consecutive
   pieces of one original segment are joined back into a single segment.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from ..core.constants import INTERSECTION_MERGE_EPSILON, ON_BOUNDARY_EPSILON, PieceSide
from ..core.geometry import Cubic, Point, cubic_derivative, cubic_point
from ..core.node import Node
from .containment import count_ray_crossings
from .intersection import CollisionSample

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Piece:
    """Part of the segment leaving source, between t0 and t1."""
    source: Node
    t0: float
    t1: float
    cubic: Cubic
    linear: bool
    from_a: bool

    @property
    def start(self) -> Point:
        return self.cubic[0]

    @property
    def end(self) -> Point:
        return self.cubic[3]

    def midpoint(self) -> Point:
        return cubic_point(*self.cubic, 0.5)

    def direction(self) -> Point:
        return cubic_derivative(*self.cubic, 0.5)

    def continues(self, other: Piece) -> bool:
        return other.source is self.source and other.t0 == self.t1


def touches_vertex(collisions: Iterable[CollisionSample]) -> bool:
    return any(col.a.t == 0.0 or col.b.t == 0.0 for col in collisions)


def emit_piece(chain: list[Node], piece: Cubic, linear: bool, close: bool) -> None:
    """Append a segment with the given control points to a chain of new nodes.

    close links the segment back to chain[0] instead of creating a node.
    """
    p0, p1, p2, p3 = piece
    last = chain[-1]
    if not linear:
        last.tan_out, last.use_tan_out = p1 - p0, True
    if close:
        target = chain[0]
    else:
        target = Node(p3)
        chain.append(target)
    if not linear:
        target.tan_in, target.use_tan_in = p2 - p3, True
    last.next = target
    target.prev = last


def locate_on_island(segs: Sequence[Node], pt: Point,
                     eps: float = ON_BOUNDARY_EPSILON) -> tuple[Node, float] | None:
    for node in segs:
        t = node.locate_point(pt, eps)
        if t is not None:
            return node, t
    return None


def cut_island(segs: Sequence[Node], other: Sequence[Node], params: dict[Node, list[float]],
               from_a: bool, eps: float = ON_BOUNDARY_EPSILON) -> list[Piece]:
    """Cut every segment of an island at its collision parameters and at the other island's vertices."""
    pieces = []
    for node in segs:
        cuts = list(params.get(node, ()))
        cuts.extend(t for t in (node.locate_point(o.pos, eps) for o in other) if t is not None)
        stops = [0.0]
        for t in sorted(cuts):
            if INTERSECTION_MERGE_EPSILON < t < 1.0 - INTERSECTION_MERGE_EPSILON \
                    and t - stops[-1] > INTERSECTION_MERGE_EPSILON:
                stops.append(t)
        stops.append(1.0)
        for t0, t1 in zip(stops, stops[1:]):
            cubic, linear = node.segment_piece(t0, t1)
            pieces.append(Piece(node, t0, t1, cubic, linear, from_a))
    return pieces


def classify_piece(piece: Piece, other: Sequence[Node], eps: float = ON_BOUNDARY_EPSILON) -> PieceSide:
    mid = piece.midpoint()
    hit = locate_on_island(other, mid, eps)
    if hit is not None:
        node, t = hit
        if piece.direction().dot(node.tangent_at(t)) > 0.0:
            return PieceSide.SAME
        return PieceSide.OPPOSITE
    if count_ray_crossings(mid, other) % 2:
        return PieceSide.INSIDE
    return PieceSide.OUTSIDE


def keeps_piece(side: PieceSide, keep_inside: bool, from_a: bool) -> bool:
    match side:
        case PieceSide.INSIDE:
            return keep_inside
        case PieceSide.OUTSIDE:
            return not keep_inside
        case PieceSide.SAME:
            return from_a
    return False


def chain_pieces(pieces: Sequence[Piece], eps: float = ON_BOUNDARY_EPSILON) -> list[list[Piece]] | None:
    """Link pieces end to start into closed runs, or None when some run cannot close.

    Where several pieces start at the end of the current one, a piece of the
    same island is preferred, and among those the continuation of the same
    segment or the next one.
    """
    unused = list(range(len(pieces)))
    chains = []
    while unused:
        first = unused.pop(0)
        run = [pieces[first]]
        while run[-1].end.distance_to(run[0].start) > eps:
            cur = run[-1]
            candidates = [i for i in unused if pieces[i].start.distance_to(cur.end) <= eps]
            if not candidates:
                logger.warning("Piece run from %r stops at (%g, %g)", run[0].source, cur.end.x, cur.end.y)
                return None

            def rank(i: int) -> tuple[bool, bool]:
                p = pieces[i]
                follows = p.source is cur.source or p.source is cur.source.next
                return p.from_a != cur.from_a, not follows

            best = min(candidates, key=rank)
            unused.remove(best)
            run.append(pieces[best])
        chains.append(run)
    return chains


def merge_runs(run: Sequence[Piece]) -> list[Piece]:
    """Join consecutive pieces of the same segment."""
    start = next((i for i in range(len(run)) if not run[i - 1].continues(run[i])), 0)
    ordered = list(run[start:]) + list(run[:start])
    merged = [ordered[0]]
    for piece in ordered[1:]:
        last = merged[-1]
        if last.continues(piece):
            cubic, linear = last.source.segment_piece(last.t0, piece.t1)
            merged[-1] = Piece(last.source, last.t0, piece.t1, cubic, linear, last.from_a)
        else:
            merged.append(piece)
    return merged


def build_chain(run: Sequence[Piece]) -> list[Node]:
    """New closed chain of unowned nodes following the pieces."""
    chain = [Node(run[0].start)]
    for i, piece in enumerate(run):
        emit_piece(chain, piece.cubic, piece.linear, i == len(run) - 1)
    return chain


def rebuild_islands(segs_a: Sequence[Node], segs_b: Sequence[Node], collisions: Iterable[CollisionSample],
                    keep_a_inside: bool, keep_b_inside: bool,
                    eps: float = ON_BOUNDARY_EPSILON) -> list[list[Node]] | None:
    """Result chains of a boolean between two islands, built from classified pieces.

    keep_a_inside selects the pieces of a lying inside b (otherwise those
    outside it), and keep_b_inside likewise for b. The inputs are only read.
    Returns None when the kept pieces do not close up.
    """
    params: dict[Node, list[float]] = {}
    for col in collisions:
        params.setdefault(col.a.node, []).append(col.a.t)
        params.setdefault(col.b.node, []).append(col.b.t)

    kept = []
    for segs, other, keep_inside, from_a in ((segs_a, segs_b, keep_a_inside, True),
                                             (segs_b, segs_a, keep_b_inside, False)):
        for piece in cut_island(segs, other, params, from_a, eps):
            if keeps_piece(classify_piece(piece, other, eps), keep_inside, from_a):
                kept.append(piece)

    runs = chain_pieces(kept, eps)
    if runs is None:
        return None
    chains = [build_chain(merge_runs(run)) for run in runs]
    logger.debug("Rebuilt %d chains from %d kept pieces", len(chains), len(kept))
    return chains
