# PathBool - Boolean Operations on Bezier Paths
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Island/island boolean operators that splice the inputs in place.

Each operator works on two closed islands, given as their node lists in
travel order:

1. The second island is reoriented so both islands have the winding the
   operator needs (equal for union and intersection, opposite for
   difference).
2. Without collisions the containment classifier decides which island, if
   any, survives whole.
3. With collisions every crossing gets one shared node. At each crossing
   the new node is linked from the diced node before it on one island to
   the diced node after it on the other; which island comes first depends
   on the sign of the cross product of the two forward tangents relative to
   the left island's winding.
4. The original link across every cut segment is dropped. Nodes cut out by
   the relinking still point at their old neighbors, or have lost a link,
   and are removed by clip_loose_ends().

Collision sets that touch an existing vertex, which includes every pair of
islands sharing part of their boundary, cannot be spliced this way. They are
rebuilt from classified pieces by reassemble() (see rebuild.py) and the
inputs the operator consumes are replaced by the new chains.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from ..core.constants import BoundingMode
from ..core.error import EmptyIslandError, OpenIslandError
from ..core.loop import Loop
from ..core.node import Node, calculate_winding
from .cleanup import clip_loose_ends
from .containment import get_loop_bounding_mode, islands_coincide
from .intersection import CollisionSample, get_loop_collision_info
from .rebuild import rebuild_islands, touches_vertex
from .split import SplitCollection, has_conflicting_claims, slice_collision_info

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IslandResult:
    """Outcome of one island/island step and a node on the resulting geometry, if any."""
    mode: BoundingMode
    node: Node | None = None


def check_island(segs: Sequence[Node]) -> None:
    if not segs:
        raise EmptyIslandError("boolean operators need a non-empty island")
    if not segs[0].is_closed():
        raise OpenIslandError(f"chain starting at {segs[0]!r} is not closed")


def orient_island(segs_a: Sequence[Node], segs_b: Sequence[Node],
                  opposite: bool) -> tuple[float, list[Node]]:
    """Reverse island b when its winding does not relate to a's as required.

    Returns a's winding and b's nodes in (possibly new) travel order.
    """
    left_wind = calculate_winding(segs_a)
    right_wind = calculate_winding(segs_b)
    if ((left_wind > 0) == (right_wind > 0)) == opposite:
        segs_b[0].reverse_chain_order()
        logger.debug("Reversed right island to %s winding", "opposite" if opposite else "matching")
    return left_wind, list(segs_b[0].travel())


def detached_copy(segs: Sequence[Node]) -> list[Node]:
    """Unowned clone of an island, in travel order."""
    mapping = Node.clone_nodes(segs)
    return [mapping[n] for n in segs]


def adopt(dst: Loop, segs: Sequence[Node]) -> None:
    for node in segs:
        node.set_parent(dst)


def discard(segs: Sequence[Node]) -> None:
    for node in segs:
        node.detach()


def splice(dst: Loop, collisions: Sequence[CollisionSample],
           a_to_b: Callable[[float], bool], adopted: Sequence[Node] = ()) -> IslandResult:
    """Relink two islands at every collision.

    a_to_b receives cross(tangent_a, tangent_b) for a collision and returns
    True when the joint should run from island a into island b. adopted
    nodes are moved into dst once the split data has been validated.
    """
    if has_conflicting_claims(collisions):
        logger.warning("Degenerate collision set: a split position is claimed twice")
        return IslandResult(BoundingMode.DEGENERATE)
    if touches_vertex(collisions):
        logger.warning("Cannot splice at an existing vertex")
        return IslandResult(BoundingMode.DEGENERATE)

    slices = slice_collision_info(collisions)
    adopt(dst, adopted)
    splits = SplitCollection()
    created = splits.setup_from_collisions(dst, collisions)
    if created is None:
        return IslandResult(BoundingMode.DEGENERATE)

    loose = []
    for col in collisions:
        joint = created[col.a]
        sdi_a, sdi_b = slices[col.a], slices[col.b]
        wind = sdi_a.wind_tangent.cross(sdi_b.wind_tangent)
        if a_to_b(wind):
            src, src_sdi, src_linear = col.a, sdi_a, col.linear_a
            dst_pos, dst_sdi, dst_linear = col.b, sdi_b, col.linear_b
        else:
            src, src_sdi, src_linear = col.b, sdi_b, col.linear_b
            dst_pos, dst_sdi, dst_linear = col.a, sdi_a, col.linear_a

        n_in = splits.previous_to(src.node, src.t)
        n_out = splits.next_to(dst_pos.node, dst_pos.t)
        loose.extend(n for n in (n_in.next, n_out.prev) if n is not None and n is not joint)

        if not src_linear:
            n_in.tan_out, n_in.use_tan_out = src_sdi.prev_out, True
        if not dst_linear:
            n_out.tan_in, n_out.use_tan_in = dst_sdi.next_in, True
        joint.tan_in, joint.use_tan_in = src_sdi.sub_in, not src_linear
        joint.tan_out, joint.use_tan_out = dst_sdi.sub_out, not dst_linear

        n_in.next = joint
        joint.prev = n_in
        joint.next = n_out
        n_out.prev = joint

    for node, info in splits.splits.items():
        # A cut segment no longer joins its original ends
        if node.next is info.orig_next:
            node.next = None
        if info.orig_next is not None and info.orig_next.prev is node:
            info.orig_next.prev = None
        loose.extend((node, info.orig_next))

    clip_loose_ends(loose)
    return IslandResult(BoundingMode.COLLISION, created[collisions[0].a])


def reassemble(dst: Loop, segs_a: Sequence[Node], segs_b: Sequence[Node],
               collisions: Sequence[CollisionSample], keep_a_inside: bool, keep_b_inside: bool,
               consumed: Sequence[Node] = ()) -> IslandResult:
    """Replace the consumed nodes by chains rebuilt from classified pieces.

    Nothing is modified when the collision set is degenerate. The result
    node is None when no piece survives.
    """
    if has_conflicting_claims(collisions):
        logger.warning("Degenerate collision set: a split position is claimed twice")
        return IslandResult(BoundingMode.DEGENERATE)
    chains = rebuild_islands(segs_a, segs_b, collisions, keep_a_inside, keep_b_inside)
    if chains is None:
        return IslandResult(BoundingMode.DEGENERATE)
    discard(consumed)
    for chain in chains:
        adopt(dst, chain)
    return IslandResult(BoundingMode.COLLISION, chains[0][0] if chains else None)


# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------

def union_islands(dst: Loop, segs_a: Sequence[Node], segs_b: Sequence[Node]) -> IslandResult:
    """Merge island b into island a; b's nodes end up in dst."""
    check_island(segs_a)
    check_island(segs_b)
    left_wind, segs_b = orient_island(segs_a, segs_b, opposite=False)

    if islands_coincide(segs_a, segs_b):
        discard(segs_b)
        return IslandResult(BoundingMode.LEFT_SURROUNDS_RIGHT, segs_a[0])

    collisions = get_loop_collision_info(segs_a, segs_b)
    if not collisions:
        mode = get_loop_bounding_mode(segs_a, segs_b)
        match mode:
            case BoundingMode.LEFT_SURROUNDS_RIGHT:
                discard(segs_b)
                return IslandResult(mode, segs_a[0])
            case BoundingMode.RIGHT_SURROUNDS_LEFT:
                discard(segs_a)
                adopt(dst, segs_b)
                return IslandResult(mode, segs_b[0])
            case _:
                adopt(dst, segs_b)
                return IslandResult(BoundingMode.NO_COLLISION, segs_b[0])

    if touches_vertex(collisions):
        return reassemble(dst, segs_a, segs_b, collisions, keep_a_inside=False, keep_b_inside=False,
                          consumed=list(segs_a) + segs_b)

    # Joint runs from a into b where a enters b
    return splice(dst, collisions, lambda wind: (wind > 0) != (left_wind > 0), adopted=segs_b)


def difference_islands(dst: Loop, segs_a: Sequence[Node], segs_b: Sequence[Node]) -> IslandResult:
    """Cut island b out of island a.

    Island b itself is left alone; a reversed copy of it is what gets
    spliced into a, or kept as a cavity when b lies wholly inside a.
    """
    check_island(segs_a)
    check_island(segs_b)
    left_wind, segs_b = orient_island(segs_a, detached_copy(segs_b), opposite=True)

    if islands_coincide(segs_a, segs_b):
        discard(segs_a)
        return IslandResult(BoundingMode.RIGHT_SURROUNDS_LEFT)

    collisions = get_loop_collision_info(segs_a, segs_b)
    if len(collisions) == 1:
        logger.debug("Single collision in difference, leaving islands untouched")
        return IslandResult(BoundingMode.NO_COLLISION)

    if not collisions:
        mode = get_loop_bounding_mode(segs_a, segs_b)
        match mode:
            case BoundingMode.RIGHT_SURROUNDS_LEFT:
                discard(segs_a)
                return IslandResult(mode)
            case BoundingMode.LEFT_SURROUNDS_RIGHT:
                adopt(dst, segs_b)
                return IslandResult(mode, segs_b[0])
            case _:
                return IslandResult(BoundingMode.NO_COLLISION)

    if touches_vertex(collisions):
        return reassemble(dst, segs_a, segs_b, collisions, keep_a_inside=False, keep_b_inside=True,
                          consumed=segs_a)

    # Joint runs from a into the reversed b where a enters b
    return splice(dst, collisions, lambda wind: (wind > 0) == (left_wind > 0), adopted=segs_b)


def intersection_islands(dst: Loop, segs_a: Sequence[Node], segs_b: Sequence[Node]) -> IslandResult:
    """Add the overlap of islands a and b to dst as new nodes; the inputs are not modified."""
    check_island(segs_a)
    check_island(segs_b)
    segs_a = detached_copy(segs_a)
    left_wind, segs_b = orient_island(segs_a, detached_copy(segs_b), opposite=False)

    if islands_coincide(segs_a, segs_b):
        adopt(dst, segs_a)
        return IslandResult(BoundingMode.LEFT_SURROUNDS_RIGHT, segs_a[0])

    collisions = get_loop_collision_info(segs_a, segs_b)
    if not collisions:
        mode = get_loop_bounding_mode(segs_a, segs_b)
        match mode:
            case BoundingMode.RIGHT_SURROUNDS_LEFT:
                adopt(dst, segs_a)
                return IslandResult(mode, segs_a[0])
            case BoundingMode.LEFT_SURROUNDS_RIGHT:
                adopt(dst, segs_b)
                return IslandResult(mode, segs_b[0])
            case _:
                return IslandResult(BoundingMode.NO_COLLISION)

    if touches_vertex(collisions):
        return reassemble(dst, segs_a, segs_b, collisions, keep_a_inside=True, keep_b_inside=True)

    # Joint runs from a into b where a leaves b
    return splice(dst, collisions, lambda wind: (wind > 0) == (left_wind > 0),
                  adopted=list(segs_a) + list(segs_b))
