# PathBool - Boolean Operations on Bezier Paths
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
PathBool Constants Module

This module contains the numerical tolerances, enums, and type definitions used
throughout the boolean engine. Operators take these as keyword defaults, so a
caller working at a very different coordinate scale can override any of them
per call.
"""

from enum import Enum, IntEnum

# Intersection sampler
SUBDIVISION_DEPTH = 20                      # Maximum curve/curve halving depth
SAMPLE_TOLERANCE = 1e-6                     # Parameter window at which subdivision stops
INTERSECTION_MERGE_EPSILON = 1e-5           # Samples on the same node pair closer than this coalesce
PARAMETER_SLACK = 1e-9                      # Root parameters this far outside [0,1] are clamped in
NEIGHBOR_LOW = 0.001                        # t below this against node.prev is a shared endpoint
NEIGHBOR_HIGH = 0.99                        # t above this against node.next is a shared endpoint
PARALLEL_EPSILON = 1e-12                    # |cross(d1, d2)| / (|d1||d2|) below this is parallel
FLAT_EPSILON = 1e-9                         # Control point distance from the chord for a flat window

# Containment classifier
CONTAINMENT_EPSILON = 1e-9                  # Transverse distance that counts as "on the ray"
SIDE_STEP = 1e-4                            # Parameter offset used to read which side a curve is on

# Geometry
TANGENT_EPSILON = 1e-12                     # Squared tangent length below this means "no tangent"
COINCIDENT_EPSILON = 1e-7                   # Control point distance for coincident segment matching
ON_BOUNDARY_EPSILON = 1e-6                  # Distance at which a point counts as lying on a segment


class BoundingMode(IntEnum):
    """Outcome of a boolean step between two islands."""
    NO_COLLISION = 0
    COLLISION = 1
    LEFT_SURROUNDS_RIGHT = 2
    RIGHT_SURROUNDS_LEFT = 3
    DEGENERATE = 4


class BooleanKind(Enum):
    UNION = "union"
    DIFFERENCE = "difference"
    INTERSECTION = "intersection"


class PathType(IntEnum):
    NONE = 0                                # No next node, the segment does not exist
    LINE = 1
    BEZIER = 2


class IslandTypeRequest(IntEnum):
    ANY = 0
    OPEN = 1
    CLOSED = 2


class EndpointResult(IntEnum):
    SUCCESSFUL_EDGE = 0                     # Walked back to the start of an open chain
    CYCLICAL = 1                            # Walked all the way around a closed island


class SplitResult(IntEnum):
    NONE = 0                                # Query outside [0, 1]
    ONLY_ONE = 1                            # Only the original node, no cuts recorded
    ON_BOUNDARY = 2                         # Exact match with a recorded cut
    BETWEEN = 3                             # Between two recorded cuts
    END = 4                                 # Past the last recorded cut


class PieceSide(IntEnum):
    """Where a cut piece of one island lies relative to the other island."""
    OUTSIDE = 0
    INSIDE = 1
    SAME = 2                                # On the other boundary, running the same way
    OPPOSITE = 3                            # On the other boundary, running the other way
