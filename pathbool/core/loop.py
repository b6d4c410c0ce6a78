# PathBool - Boolean Operations on Bezier Paths
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Loop and Shape containers.

A Loop owns a flat list of nodes which may form several islands (closed
cyclic chains) and open edges. A Shape owns loops; it is the smallest piece
of the editing hierarchy the boolean operators need, so they can drop a loop
from its owner once it has been consumed.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from .constants import EndpointResult, IslandTypeRequest
from .error import LoopOwnershipError
from .geometry import Point
from .node import Node

logger = logging.getLogger(__name__)


class Loop:

    def __init__(self, shape: Shape | None = None) -> None:
        self.nodes: list[Node] = []
        self.shape: Shape | None = None
        if shape is not None:
            shape.add_loop(self)

    def __repr__(self) -> str:
        return f"Loop({len(self.nodes)} nodes)"

    @classmethod
    def from_points(cls, points: Iterable[Point | tuple[float, float]], closed: bool = True,
                    shape: Shape | None = None) -> Loop:
        """Build a loop holding one straight-edged chain through points."""
        loop = cls(shape)
        loop.add_chain([Node(p if isinstance(p, Point) else Point(*p)) for p in points], closed)
        return loop

    def add_chain(self, nodes: Sequence[Node], closed: bool = True) -> Node | None:
        """Link nodes in order, take ownership of them, and return the first."""
        for a, b in zip(nodes, nodes[1:]):
            a.next = b
            b.prev = a
        if closed and len(nodes) > 1:
            nodes[-1].next = nodes[0]
            nodes[0].prev = nodes[-1]
        for node in nodes:
            node.set_parent(self)
        return nodes[0] if nodes else None

    # -----------------------------------------------------------------------
    # Node set management
    # -----------------------------------------------------------------------

    def has_nodes(self) -> bool:
        return bool(self.nodes)

    def node_count(self) -> int:
        return len(self.nodes)

    def remove_node(self, node: Node) -> None:
        """Remove node, joining its neighbors where they still point at it."""
        if node.parent is not self:
            raise LoopOwnershipError(f"{node!r} is not owned by {self!r}")
        prev, nxt = node.prev, node.next
        if prev is not None and prev.next is node:
            prev.next = nxt if nxt is not node else None
        if nxt is not None and nxt.prev is node:
            nxt.prev = prev if prev is not node else None
        node.detach()

    def clear(self) -> None:
        for node in list(self.nodes):
            node.detach()

    def dump_into(self, dst: Loop) -> None:
        """Move every node of this loop into dst, keeping links."""
        for node in list(self.nodes):
            node.set_parent(dst)

    # -----------------------------------------------------------------------
    # Islands
    # -----------------------------------------------------------------------

    def get_islands(self, request: IslandTypeRequest = IslandTypeRequest.ANY) -> list[Node]:
        """One representative node per chain, in node-list order.

        Open chains are represented by their first node, closed islands by
        the first of their nodes found in the list.
        """
        visited: set[Node] = set()
        islands = []
        for node in self.nodes:
            if node in visited:
                continue
            start, result = node.path_leftmost()
            visited.update(start.travel())
            closed = result == EndpointResult.CYCLICAL
            if request == IslandTypeRequest.ANY \
                    or (request == IslandTypeRequest.CLOSED and closed) \
                    or (request == IslandTypeRequest.OPEN and not closed):
                islands.append(start)
        return islands

    def count_open_and_closed(self) -> tuple[int, int]:
        closed = len(self.get_islands(IslandTypeRequest.CLOSED))
        return len(self.get_islands()) - closed, closed

    def extract_island(self, node: Node, into: Loop | None = None) -> Loop:
        """Move the chain containing node into another loop (a new one by default)."""
        if node.parent is not self:
            raise LoopOwnershipError(f"{node!r} is not owned by {self!r}")
        into = into if into is not None else Loop(self.shape)
        start, _ = node.path_leftmost()
        for n in list(start.travel()):
            n.set_parent(into)
        return into

    def subdivide(self, node: Node, t: float) -> Node:
        """Insert a new node on node's outgoing segment at parameter t."""
        if node.parent is not self:
            raise LoopOwnershipError(f"{node!r} is not owned by {self!r}")
        info = node.subdivide_info(t)
        curved = not node.is_line()
        nxt = node.next
        new = Node(info.sub_pos, info.sub_in, info.sub_out, curved, curved, self)
        if curved:
            node.tan_out, node.use_tan_out = info.prev_out, True
            nxt.tan_in, nxt.use_tan_in = info.next_in, True
        new.prev, new.next = node, nxt
        node.next = new
        nxt.prev = new
        return new

    # -----------------------------------------------------------------------
    # Orientation and area
    # -----------------------------------------------------------------------

    def calculate_winding(self, node: Node | None = None) -> float:
        """Winding of the island holding node, or the sum over all closed islands."""
        if node is not None:
            return node.calculate_winding()
        return sum(isl.calculate_winding() for isl in self.get_islands(IslandTypeRequest.CLOSED))

    def signed_area(self) -> float:
        return sum(isl.signed_area() for isl in self.get_islands(IslandTypeRequest.CLOSED))

    def reverse(self) -> None:
        for isl in self.get_islands():
            isl.reverse_chain_order()


class Shape:
    """Owner of loops; layer is any object with a ``shapes`` list, or None."""

    def __init__(self, layer=None) -> None:
        self.loops: list[Loop] = []
        self.layer = layer
        if layer is not None:
            layer.shapes.append(self)

    def add_loop(self, loop: Loop) -> None:
        if loop.shape is self:
            return
        if loop.shape is not None:
            loop.shape.remove_loop(loop)
        loop.shape = self
        self.loops.append(loop)

    def remove_loop(self, loop: Loop) -> None:
        if loop.shape is not self:
            raise LoopOwnershipError(f"{loop!r} is not owned by this shape")
        self.loops.remove(loop)
        loop.shape = None
        logger.debug("Removed %r from shape, %d loops remain", loop, len(self.loops))
