# PathBool - Boolean Operations on Bezier Paths
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Removal of nodes orphaned by a splice."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable

from ..core.node import Node

logger = logging.getLogger(__name__)


def clip_loose_ends(candidates: Iterable[Node | None]) -> int:
    """Remove every node whose neighbors no longer point back at it.

    A splice repoints one side of a link only, so a node that was cut out of
    the result still references its old neighbors while they have moved on,
    or has lost a link altogether.
    Such a node is unlinked and removed from its loop; its former neighbors
    are checked next, since they may now be dangling as well.

    Returns the number of nodes removed.
    """
    queue = deque(n for n in candidates if n is not None)
    removed = 0
    while queue:
        node = queue.popleft()
        if node.parent is None:
            continue
        prev, nxt = node.prev, node.next
        if prev is not None and prev.next is node and nxt is not None and nxt.prev is node:
            continue
        node.detach()
        removed += 1
        if prev is not None:
            queue.append(prev)
        if nxt is not None:
            queue.append(nxt)
    logger.debug("Clipped %d loose nodes", removed)
    return removed
