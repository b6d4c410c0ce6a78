# PathBool - Boolean Operations on Bezier Paths
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
PathBool - Public API

Union, difference and intersection of closed paths made of line and cubic
bezier segments, in two flavours:

- splice (``union``, ``difference``, ``intersection`` and the ``*_islands``
  island operators) repoints the links of the existing nodes in place;
- trace (``trace_union``, ``trace_difference``, ``trace_intersection``)
  walks the inputs and emits new chains.

**Usage:**
```python
from pathbool import Point, make_rect, union

a = make_rect(0, 0, 2, 2)
b = make_rect(1, 1, 3, 3)
union(a, b)
a.signed_area()  # 7.0
```
"""

# =============================================================================
# PUBLIC API EXPORTS
# =============================================================================

from .core.constants import BooleanKind, BoundingMode, IslandTypeRequest
from .core.error import EmptyIslandError, LoopOwnershipError, OpenIslandError, PathBoolError
from .core.geometry import Point
from .core.loop import Loop, Shape
from .core.node import Node
from .core.path_elements import ClosePath, CurveTo, LineTo, MoveTo, loop_from_path, loop_to_path
from .core.shapes import arc_to_cubics, make_circle, make_ellipse, make_polygon, make_rect
from .operators.boolean import difference, intersection, island_boolean, remove_loop, union
from .operators.cleanup import clip_loose_ends
from .operators.containment import get_loop_bounding_mode
from .operators.reflow import IslandResult, difference_islands, intersection_islands, union_islands
from .operators.trace import trace_difference, trace_intersection, trace_union

__version__ = "0.1.0"
