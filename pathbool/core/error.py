# PathBool - Boolean Operations on Bezier Paths
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Contract violation errors.

Runtime outcomes of the boolean operators (no collision, containment,
degenerate split data) are returned as BoundingMode values and never raised.
These exceptions are reserved for callers handing the engine input it cannot
work with at all.
"""


class PathBoolError(Exception):
    """Base class for all pathbool errors."""


class OpenIslandError(PathBoolError):
    """An open chain was passed where a closed island is required."""


class EmptyIslandError(PathBoolError):
    """An operator received an empty node set."""


class LoopOwnershipError(PathBoolError):
    """A node was removed from, or queried against, a loop that does not own it."""
