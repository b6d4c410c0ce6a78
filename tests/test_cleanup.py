# PathBool - Boolean Operations on Bezier Paths
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Tests for loose-end clipping after a splice."""

from pathbool import clip_loose_ends, make_rect

from conftest import assert_links_consistent, segs


def test_healthy_island_is_untouched() -> None:
    loop = make_rect(0, 0, 1, 1)
    assert clip_loose_ends(loop.nodes + [None]) == 0
    assert loop.node_count() == 4


def test_single_orphan_is_removed() -> None:
    """A node bypassed by its neighbors is dropped from the loop."""

    loop = make_rect(0, 0, 1, 1)
    a, b, c, _ = segs(loop)
    a.next, c.prev = c, a
    assert clip_loose_ends([b]) == 1
    assert b.parent is None and b.prev is None and b.next is None
    assert loop.node_count() == 3
    assert_links_consistent(loop)


def test_orphaned_run_is_removed_transitively() -> None:
    """Clipping one end of a bypassed run walks on to the rest of it."""

    loop = make_rect(0, 0, 1, 1)
    a, b, c, d = segs(loop)
    a.next, d.prev = d, a
    assert clip_loose_ends([b]) == 2
    assert c.parent is None
    assert loop.nodes == [a, d]
    assert_links_consistent(loop)
