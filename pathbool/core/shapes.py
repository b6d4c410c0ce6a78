# PathBool - Boolean Operations on Bezier Paths
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Primitive shape generators.

All closed shapes come out counter-clockwise (with y up), so two generated
shapes can be combined without orientation fix-ups.
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from .geometry import Point
from .loop import Loop, Shape
from .path_elements import ClosePath, CurveTo, MoveTo, loop_from_path


def arc_to_cubics(center: Point, rx: float, ry: float, start_angle: float, end_angle: float) -> list[CurveTo]:
    """Convert an elliptical **arc** to cubic Bézier approximations (max 90° per segment)."""
    result = []
    angle = end_angle - start_angle
    n_segs = max(1, int(math.ceil(abs(angle) / (math.pi / 2) - 1e-10)))
    seg_angle = angle / n_segs
    alpha = 4.0 * math.tan(seg_angle / 4.0) / 3.0

    for i in range(n_segs):
        a0 = start_angle + i * seg_angle
        a1 = a0 + seg_angle
        cos0, sin0 = math.cos(a0), math.sin(a0)
        cos1, sin1 = math.cos(a1), math.sin(a1)

        result.append(CurveTo(
            center.x + rx * (cos0 - alpha * sin0), center.y + ry * (sin0 + alpha * cos0),
            center.x + rx * (cos1 + alpha * sin1), center.y + ry * (sin1 - alpha * cos1),
            center.x + rx * cos1, center.y + ry * sin1,
        ))

    return result


def make_ellipse(center: Point, rx: float, ry: float, shape: Shape | None = None) -> Loop:
    """Closed ellipse made of four quarter arcs, starting on the +x axis."""
    sp = [MoveTo(center.x + rx, center.y)]
    sp.extend(arc_to_cubics(center, rx, ry, 0.0, 2.0 * math.pi))
    sp.append(ClosePath())
    return loop_from_path([sp], shape=shape)


def make_circle(center: Point, radius: float, shape: Shape | None = None) -> Loop:
    return make_ellipse(center, radius, radius, shape)


def make_rect(x0: float, y0: float, x1: float, y1: float, shape: Shape | None = None) -> Loop:
    x0, x1 = min(x0, x1), max(x0, x1)
    y0, y1 = min(y0, y1), max(y0, y1)
    return Loop.from_points([(x0, y0), (x1, y0), (x1, y1), (x0, y1)], shape=shape)


def make_polygon(points: Iterable[Point | tuple[float, float]], shape: Shape | None = None) -> Loop:
    """Closed polygon through points, reordered to run counter-clockwise."""
    loop = Loop.from_points(points, shape=shape)
    if loop.nodes and loop.calculate_winding() < 0:
        loop.reverse()
    return loop
