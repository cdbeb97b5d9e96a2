"""Route electrical wires along the walls of a room."""
from wirerouting.config import BoundaryLocation, BoundaryOptions, RoutingOptions
from wirerouting.errors import (
    PointNotOnBoundaryError,
    PointsInDifferentRoomsError,
    RoutingError,
    UnboundRoomError,
)
from wirerouting.model.geometry_primitives import Arc, BoundaryLoop, BoundarySegment, Line, Point
from wirerouting.model.room import Room
from wirerouting.routing.orderer import AmbiguousOrdering, OrderedBoundary, order_boundary_loops
from wirerouting.routing.path_builder import WirePath, build_path, build_wire_path, locate_segment, route_wire

__all__ = [
    "AmbiguousOrdering",
    "Arc",
    "BoundaryLocation",
    "BoundaryLoop",
    "BoundaryOptions",
    "BoundarySegment",
    "Line",
    "OrderedBoundary",
    "Point",
    "PointNotOnBoundaryError",
    "PointsInDifferentRoomsError",
    "Room",
    "RoutingError",
    "RoutingOptions",
    "UnboundRoomError",
    "WirePath",
    "build_path",
    "build_wire_path",
    "locate_segment",
    "order_boundary_loops",
    "route_wire",
]
