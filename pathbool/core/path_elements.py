# PathBool - Boolean Operations on Bezier Paths
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
moveto/lineto/curveto path elements and conversion to and from loops.

Outline producers (glyph loaders, shape generators, importers) hand over
absolute-coordinate subpaths; the boolean engine works on linked nodes with
relative tangents. This module is the bridge in both directions.
"""

from __future__ import annotations

from dataclasses import dataclass

from .constants import COINCIDENT_EPSILON
from .geometry import Point
from .loop import Loop, Shape
from .node import Node

# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------

@dataclass
class MoveTo:
    x: float
    y: float

@dataclass
class LineTo:
    x: float
    y: float

@dataclass
class CurveTo:
    x1: float; y1: float
    x2: float; y2: float
    x3: float; y3: float

@dataclass
class ClosePath:
    pass


PathElement = MoveTo | LineTo | CurveTo | ClosePath
SubPath = list[PathElement]
Path = list[SubPath]


def subpath_is_closed(sp: SubPath) -> bool:
    return len(sp) > 0 and isinstance(sp[-1], ClosePath)


# ---------------------------------------------------------------------------
# Conversion
# ---------------------------------------------------------------------------

def _flush(loop: Loop, nodes: list[Node], closed: bool) -> None:
    if not nodes:
        return
    if closed and len(nodes) > 1 and nodes[-1].pos.distance_to(nodes[0].pos) <= COINCIDENT_EPSILON:
        # Explicit closing segment lands on the start point; fold it in
        last = nodes.pop()
        nodes[0].tan_in, nodes[0].use_tan_in = last.tan_in, last.use_tan_in
    loop.add_chain(nodes, closed)


def loop_from_path(path: Path, loop: Loop | None = None, shape: Shape | None = None) -> Loop:
    """Append one chain per subpath to loop (a new Loop when omitted)."""
    loop = loop if loop is not None else Loop(shape)
    for sp in path:
        nodes: list[Node] = []
        for elem in sp:
            if isinstance(elem, MoveTo):
                _flush(loop, nodes, False)
                nodes = [Node(Point(elem.x, elem.y))]
            elif isinstance(elem, LineTo):
                nodes.append(Node(Point(elem.x, elem.y)))
            elif isinstance(elem, CurveTo):
                prev = nodes[-1]
                prev.tan_out = Point(elem.x1, elem.y1) - prev.pos
                prev.use_tan_out = True
                end = Point(elem.x3, elem.y3)
                nodes.append(Node(end, Point(elem.x2, elem.y2) - end, use_tan_in=True))
        _flush(loop, nodes, subpath_is_closed(sp))
    return loop


def loop_to_path(loop: Loop) -> Path:
    """One subpath per chain; closed islands end with an explicit closing segment and ClosePath."""
    path: Path = []
    for start in loop.get_islands():
        sp: SubPath = [MoveTo(start.pos.x, start.pos.y)]
        for node in start.travel():
            if node.next is None:
                break
            if node.is_line():
                sp.append(LineTo(node.next.pos.x, node.next.pos.y))
            else:
                _, p1, p2, p3 = node.control_points()
                sp.append(CurveTo(p1.x, p1.y, p2.x, p2.y, p3.x, p3.y))
        if start.is_closed():
            sp.append(ClosePath())
        path.append(sp)
    return path
