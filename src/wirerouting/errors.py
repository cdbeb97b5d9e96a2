"""
Routing Errors
==============
Every way a routing request can be rejected. All of them derive from
RoutingError so callers (the UI layer) can catch one type and prompt the
user to pick again.
"""
from __future__ import annotations

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from wirerouting.model.geometry_primitives import Point


class RoutingError(Exception):
    """Base class for rejected routing requests."""


class UnboundRoomError(RoutingError):
    """The room has no boundary loops, so there is nothing to route along."""

    def __init__(self, room_name: Optional[str] = None):
        self.room_name = room_name
        where = f"Room '{room_name}'" if room_name else "The room"
        super().__init__(f"{where} is not bound: no boundary loops to route along.")


class PointNotOnBoundaryError(RoutingError, ValueError):
    """A picked point does not lie on any segment of the room boundary."""

    def __init__(self, point: Point, role: str = "point"):
        self.point = point
        self.role = role
        super().__init__(
            f"The {role} point ({point.x:.6g}, {point.y:.6g}, {point.z:.6g}) "
            f"does not lie on the room boundary."
        )


class PointsInDifferentRoomsError(RoutingError, ValueError):
    """The start and end points were not picked in the same room."""

    def __init__(self, start_room: Optional[str], end_room: Optional[str]):
        self.start_room = start_room
        self.end_room = end_room
        super().__init__(
            f"The start point room ({start_room}) differs from the end point room ({end_room})."
        )
