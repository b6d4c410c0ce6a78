# PathBool - Boolean Operations on Bezier Paths
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Per-node cut ledgers and cut geometry for the splice operators.

Every original node touched by a collision gets a SplitInfo: the ordered list
of parameters its outgoing segment is cut at, each paired with the node that
now sits there (the original node itself at t=0). A SplitCollection holds the
ledgers of one operation and answers which diced node sits immediately
before or after a given cut.
"""

from __future__ import annotations

import bisect
import logging
from collections.abc import Iterable

from ..core.constants import SplitResult, TANGENT_EPSILON
from ..core.geometry import split_cubic
from ..core.loop import Loop
from ..core.node import Node, SubdivideInfo
from .intersection import CollisionSample, NodeTPos

logger = logging.getLogger(__name__)


class SplitInfo:
    """Cut ledger for the segment leaving one original node."""

    def __init__(self, node: Node) -> None:
        self.node = node
        self.orig_prev = node.prev
        self.orig_next = node.next
        self.splits: list[NodeTPos] = [NodeTPos(node, 0.0)]

    def add_entry(self, t: float, node: Node) -> bool:
        """Record a cut; fails for t outside [0, 1] or an already-recorded t."""
        if not 0.0 <= t <= 1.0:
            return False
        keys = [s.t for s in self.splits]
        idx = bisect.bisect_left(keys, t)
        if idx < len(keys) and keys[idx] == t:
            return False
        self.splits.insert(idx, NodeTPos(node, t))
        return True

    def get_node(self, t: float) -> tuple[SplitResult, Node | None, Node | None]:
        """Classify t against the recorded cuts and return the diced nodes around it."""
        if not 0.0 <= t <= 1.0:
            return SplitResult.NONE, None, None
        if len(self.splits) == 1:
            return SplitResult.ONLY_ONE, self.node, self.orig_next
        for i, entry in enumerate(self.splits):
            if entry.t == t:
                return SplitResult.ON_BOUNDARY, entry.node, entry.node
            if entry.t > t:
                return SplitResult.BETWEEN, self.splits[i - 1].node, entry.node
        return SplitResult.END, self.splits[-1].node, self.orig_next

    def previous_to(self, t: float) -> Node | None:
        """Last diced node strictly before t, or None if t is at the segment start."""
        found = None
        for entry in self.splits:
            if entry.t >= t:
                break
            found = entry.node
        return found

    def next_to(self, t: float) -> Node | None:
        """First diced node strictly after t, or the original next node."""
        for entry in self.splits:
            if entry.t > t:
                return entry.node
        return self.orig_next

    def last(self) -> Node:
        return self.splits[-1].node


class SplitCollection:
    """All cut ledgers of one splice operation, keyed by original node."""

    def __init__(self) -> None:
        self.splits: dict[Node, SplitInfo] = {}

    def get_split_info(self, node: Node) -> SplitInfo:
        info = self.splits.get(node)
        if info is None:
            info = self.splits[node] = SplitInfo(node)
        return info

    def previous_to(self, node: Node, t: float) -> Node | None:
        """Diced node immediately before parameter t on node's segment."""
        info = self.splits.get(node)
        if info is not None:
            found = info.previous_to(t)
            if found is not None:
                return found
            prev = info.orig_prev
        elif t > 0.0:
            return node
        else:
            prev = node.prev
        if prev is None:
            return None
        prev_info = self.splits.get(prev)
        return prev_info.last() if prev_info is not None else prev

    def next_to(self, node: Node, t: float) -> Node | None:
        """Diced node immediately after parameter t on node's segment."""
        info = self.splits.get(node)
        if info is not None:
            return info.next_to(t)
        return node.next

    def setup_from_collisions(self, dst: Loop,
                              collisions: Iterable[CollisionSample]) -> dict[NodeTPos, Node] | None:
        """Create one shared node per collision and record it on both sides.

        Returns the mapping from every (node, t) to its new node, or None when
        a (node, t) is claimed twice. The new nodes are only positioned; the
        caller links them.
        """
        created: dict[NodeTPos, Node] = {}
        collisions = list(collisions)
        for col in collisions:
            self.get_split_info(col.a.node)
            self.get_split_info(col.b.node)

        for col in collisions:
            new = Node(col.a.point(), parent=dst)
            if not (self.get_split_info(col.a.node).add_entry(col.a.t, new)
                    and self.get_split_info(col.b.node).add_entry(col.b.t, new)):
                logger.warning("Split position claimed twice at (%r, %g) / (%r, %g)",
                               col.a.node, col.a.t, col.b.node, col.b.t)
                for node in created.values():
                    node.detach()
                new.detach()
                return None
            created[col.a] = new
            created[col.b] = new
        return created


def slice_collision_info(collisions: Iterable[CollisionSample]) -> dict[NodeTPos, SubdivideInfo]:
    """Cut geometry at every collision position, computed per original segment.

    Line cuts interpolate and carry the segment direction as every tangent.
    Cubic cuts are applied in increasing order, each one re-parameterised
    against what is left of the curve, so the tangents of neighboring cuts
    describe the final pieces: prev_out belongs to the diced node before the
    cut and next_in to the one after it.
    """
    by_node: dict[Node, set[float]] = {}
    for col in collisions:
        by_node.setdefault(col.a.node, set()).add(col.a.t)
        by_node.setdefault(col.b.node, set()).add(col.b.t)

    result: dict[NodeTPos, SubdivideInfo] = {}
    for node, params in by_node.items():
        cuts = sorted(params)
        if node.is_line():
            d = node.next.pos - node.pos
            for t in cuts:
                pos = node.pos + d * t
                result[NodeTPos(node, t)] = SubdivideInfo(d, -d, pos, -d, d, d)
            continue

        p0, p1, p2, p3 = node.control_points()
        spots = [p0]
        done = 0.0
        for t in cuts:
            real_t = (t - done) / (1.0 - done)
            (_, q0, r0, s), (_, p1, p2, p3) = split_cubic(p0, p1, p2, p3, real_t)
            spots.extend((q0, r0, s))
            p0 = s
            done = t
        spots.extend((p1, p2, p3))

        for i, t in enumerate(cuts):
            idx = 3 + 3 * i
            pos = spots[idx]
            wind = spots[idx + 1] - pos
            if wind.length_squared() <= TANGENT_EPSILON:
                wind = node.tangent_at(t)
            result[NodeTPos(node, t)] = SubdivideInfo(
                prev_out=spots[idx - 2] - spots[idx - 3],
                next_in=spots[idx + 2] - spots[idx + 3],
                sub_pos=pos,
                sub_in=spots[idx - 1] - pos,
                sub_out=spots[idx + 1] - pos,
                wind_tangent=wind,
            )
    return result


def has_conflicting_claims(collisions: Iterable[CollisionSample]) -> bool:
    """True when one (node, t) is claimed by two collisions.

    Such a point is where three or more segments meet, and no pairing of
    the collisions describes how the outline continues. A t outside [0, 1)
    never comes out of the cleanup and is treated the same way.
    """
    seen: set[NodeTPos] = set()
    for col in collisions:
        for pos in (col.a, col.b):
            if not 0.0 <= pos.t < 1.0 or pos in seen:
                return True
            seen.add(pos)
    return False
