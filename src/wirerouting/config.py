"""
Configuration & Tolerances
==========================
This module serves as the central registry for geometric tolerances and
the option sets passed to the routing functions.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers (e.g., 1e-6) scattered
   throughout the geometry code.
2. Explicitness: Routing never reads global state. Callers build an
   options object here and hand it over with every request.

Exports:
    VERTEX_TOLERANCE (float): Max distance at which two points are the same point.
    ARC_SEGMENT_LENGTH (float): Chord length used when arcs are tessellated.
    BoundaryLocation, BoundaryOptions, RoutingOptions
"""
from dataclasses import dataclass, field
from enum import StrEnum


# Global Constants
VERTEX_TOLERANCE: float = 1e-6
ARC_SEGMENT_LENGTH: float = 0.05


class BoundaryLocation(StrEnum):
    """Which wall face the host measures room boundaries from."""
    FINISH = "finish"
    CENTER = "center"
    CORE_BOUNDARY = "core boundary"
    CORE_CENTER = "core center"


@dataclass(frozen=True)
class BoundaryOptions:
    """Option set for the host's per-room boundary query."""
    tolerance: float = VERTEX_TOLERANCE
    location: BoundaryLocation = BoundaryLocation.FINISH


@dataclass(frozen=True)
class RoutingOptions:
    """
    Parameters of a single routing request.

    Attributes:
        tolerance: Distance under which a picked point counts as lying on a
            boundary segment, and two curves count as touching.
        shortest: Allow walking around the loop through its closing junction
            when that crosses fewer junctions than the plain index span.
        boundary: Options for the boundary query the snapshot came from.
    """
    tolerance: float = VERTEX_TOLERANCE
    shortest: bool = False
    boundary: BoundaryOptions = field(default_factory=BoundaryOptions)
