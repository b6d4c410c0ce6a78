# PathBool - Boolean Operations on Bezier Paths
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Loop-level boolean operators.

These apply the island operators of reflow.py to every closed island of the
loops involved. Open chains are left where they are. Each function returns a
node on the resulting geometry, or None when nothing changed.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from ..core.constants import BooleanKind, BoundingMode, IslandTypeRequest
from ..core.loop import Loop
from ..core.node import Node
from .reflow import IslandResult, difference_islands, intersection_islands, union_islands

logger = logging.getLogger(__name__)


def island_boolean(kind: BooleanKind, dst: Loop, segs_a: Sequence[Node],
                   segs_b: Sequence[Node]) -> IslandResult:
    match kind:
        case BooleanKind.UNION:
            return union_islands(dst, segs_a, segs_b)
        case BooleanKind.DIFFERENCE:
            return difference_islands(dst, segs_a, segs_b)
        case BooleanKind.INTERSECTION:
            return intersection_islands(dst, segs_a, segs_b)
    raise ValueError(f"unsupported boolean kind {kind!r}")


def remove_loop(loop: Loop, rm_shape_if_empty: bool = True) -> None:
    """Detach loop from its shape, dropping the shape from its layer once it has no loops left."""
    shape = loop.shape
    if shape is None:
        return
    shape.remove_loop(loop)
    if rm_shape_if_empty and not shape.loops and shape.layer is not None:
        shape.layer.shapes.remove(shape)
        shape.layer = None


def get_unique_loops_in_encountered_order(nodes: Iterable[Node]) -> list[Loop]:
    loops = []
    seen = set()
    for node in nodes:
        loop = node.parent
        if loop is not None and id(loop) not in seen:
            seen.add(id(loop))
            loops.append(loop)
    return loops


def _closed_islands(loop: Loop) -> list[Node]:
    return loop.get_islands(IslandTypeRequest.CLOSED)


def _union_island_into(dst: Loop, segs_b: list[Node]) -> Node | None:
    """Union one island with every closed island of dst in turn."""
    current = segs_b
    result = None
    for isl_a in _closed_islands(dst):
        if isl_a in current:
            continue
        res = union_islands(dst, list(isl_a.travel()), current)
        match res.mode:
            case BoundingMode.DEGENERATE:
                logger.warning("Union of %r into %r is degenerate, island left as is", current[0], dst)
                return None
            case BoundingMode.LEFT_SURROUNDS_RIGHT:
                return res.node
            case _:
                current = list(res.node.travel())
                result = res.node
    if result is None:
        for node in current:
            node.set_parent(dst)
        result = current[0]
    return result


def union(dst: Loop, *others: Loop, remove_others: bool = True) -> Node | None:
    """Merge every closed island of others into dst.

    Emptied loops are dropped from their shapes when remove_others is set;
    a loop still holding open chains or degenerate islands is kept.
    """
    result = None
    for other in others:
        if other is dst:
            continue
        for isl in _closed_islands(other):
            node = _union_island_into(dst, list(isl.travel()))
            if node is not None:
                result = node
        if remove_others and not other.has_nodes():
            remove_loop(other)
    return result


def union_islands_in_place(loop: Loop) -> Node | None:
    """Union all closed islands of a loop with each other."""
    islands = _closed_islands(loop)
    result = islands[0] if islands else None
    for isl in islands[1:]:
        if isl.parent is not loop:
            continue
        scratch = loop.extract_island(isl, Loop())
        node = _union_island_into(loop, list(scratch.nodes[0].travel()))
        if node is None:
            # Degenerate; give the island back untouched
            scratch.dump_into(loop)
        else:
            result = node
    return result


def difference(left: Loop, right: Loop) -> Node | None:
    """Cut every closed island of right out of left, then clear right and drop it from its shape.

    right is kept as it is when one of its islands could not be cut because
    the collision set was degenerate.
    """
    result = None
    degenerate = False
    for isl_b in _closed_islands(right):
        segs_b = list(isl_b.travel())
        for isl_a in _closed_islands(left):
            if isl_a.parent is not left:
                continue
            res = difference_islands(left, list(isl_a.travel()), segs_b)
            if res.mode == BoundingMode.DEGENERATE:
                logger.warning("Difference of %r from %r is degenerate, skipped", isl_b, isl_a)
                degenerate = True
            elif res.node is not None:
                result = res.node
    if not degenerate:
        right.clear()
        remove_loop(right)
    return result


def intersection(left: Loop, right: Loop, remove_right: bool = True) -> Node | None:
    """Replace left's islands by their overlap with right's islands.

    Islands within each loop are unioned first, so a loop counts as the area
    covered by any of its islands. A left island with a degenerate collision
    set against any right island is kept unchanged, and so is right.
    """
    union_islands_in_place(left)
    union_islands_in_place(right)
    rights = _closed_islands(right)

    result = None
    degenerate = False
    for isl_a in _closed_islands(left):
        overlap = Loop()
        for isl_b in rights:
            res = intersection_islands(overlap, list(isl_a.travel()), list(isl_b.travel()))
            if res.mode == BoundingMode.DEGENERATE:
                logger.warning("Intersection of %r and %r is degenerate, island kept", isl_a, isl_b)
                break
        else:
            isl_a.remove_island(rewind=False)
            if overlap.nodes:
                result = overlap.nodes[0]
            overlap.dump_into(left)
            continue
        overlap.clear()
        degenerate = True

    if remove_right and not degenerate:
        right.clear()
        remove_loop(right)
    return result
