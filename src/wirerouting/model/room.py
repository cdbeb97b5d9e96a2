"""
Room Snapshot
=============
This module defines the read-only picture of a room the routing works on.

Why is this file needed?
------------------------
1. Snapshot: The host (CAD) application is queried once per request; the
   answer is frozen into a Room so the geometry code never talks to the host.
2. Room queries: Perimeter, center, point containment and the walls that
   bound the room are all answered from the boundary loops alone.

Classes:
    Room: Boundary loops plus placement point of one room.
    HostedElement: An element (e.g. a door) hosted by a wall.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Iterable, List, Optional, Sequence, Union

import numpy as np

from wirerouting.config import ARC_SEGMENT_LENGTH, VERTEX_TOLERANCE
from wirerouting.errors import PointsInDifferentRoomsError
from wirerouting.model.geometry_primitives import BoundaryLoop, Point, Vector
from wirerouting.model.geometry_utils import points_inside_edges

logger = logging.getLogger(__name__)

ElementId = Union[int, str]


@dataclass(frozen=True)
class HostedElement:
    """An element placed in a wall, e.g. a door."""
    element_id: ElementId
    host_id: ElementId
    category: str = "door"


@dataclass
class Room:
    """
    A room as reported by the host.

    `boundary` is None when the room is not spatially bound; that is an
    expected state, not an error. Loop 0 is the outer perimeter, further
    loops are interior obstructions.
    """
    name: str
    location: Point
    boundary: Optional[List[BoundaryLoop]] = None
    element_id: Optional[ElementId] = None
    level: Optional[str] = None

    def __post_init__(self) -> None:
        if self.boundary is not None:
            self.boundary = [
                loop if isinstance(loop, BoundaryLoop) else BoundaryLoop(list(loop))
                for loop in self.boundary
            ]

    @property
    def is_bound(self) -> bool:
        return bool(self.boundary)

    @property
    def elevation(self) -> float:
        """Z of the room's placement point, i.e. its nominal floor plane."""
        return self.location.z

    @property
    def loops(self) -> List[BoundaryLoop]:
        return list(self.boundary or [])

    @property
    def perimeter(self) -> float:
        """Sum of the lengths of every boundary segment in every loop."""
        perimeter = sum(loop.length for loop in self.loops)
        logger.debug(f"Calculated perimeter of '{self.name}': {perimeter}")
        return perimeter

    @property
    def center(self) -> Point:
        """
        Center of the boundary's bounding box. The z coordinate is the room
        elevation. Unbound rooms fall back to their placement point.
        """
        if not self.is_bound:
            return self.location
        pts = np.vstack([loop.to_edges(max_length=ARC_SEGMENT_LENGTH).reshape(-1, 3) for loop in self.loops])
        mid = (pts.min(axis=0) + pts.max(axis=0)) * 0.5
        return Point(float(mid[0]), float(mid[1]), self.elevation)

    def contains_point(self, point: Point, tolerance: float = VERTEX_TOLERANCE) -> bool:
        """
        Planar test: on any boundary segment, or inside the outer loop and
        outside every inner loop. Points picked on a wall face count as
        inside whatever height they were picked at.
        """
        if not self.is_bound:
            return False
        loops = self.loops
        flat = point.with_z(self.elevation)
        if any(segment.curve.project(flat, tolerance).is_on_curve for loop in loops for segment in loop):
            return True

        target = np.array([[point.x, point.y]])
        if not points_inside_edges(target, loops[0].to_edges(max_length=ARC_SEGMENT_LENGTH))[0]:
            return False
        for hole in loops[1:]:
            if points_inside_edges(target, hole.to_edges(max_length=ARC_SEGMENT_LENGTH))[0]:
                return False
        return True

    def bounding_element_ids(self) -> set[ElementId]:
        return {
            segment.element_id
            for loop in self.loops
            for segment in loop
            if segment.element_id is not None
        }


def filter_hosted_elements(elements: Iterable[HostedElement], room: Room) -> List[HostedElement]:
    """Elements hosted by one of the walls bounding `room`."""
    walls = room.bounding_element_ids()
    result = []
    for element in elements:
        if element.host_id in walls:
            logger.debug(f"{element.category} {element.element_id} found for room '{room.name}'")
            result.append(element)
    return result


def find_room_at_point(rooms: Iterable[Room], point: Point) -> Optional[Room]:
    """Return the first room the point lies in, or None."""
    for room in rooms:
        if room.contains_point(point):
            return room
    return None


def ensure_same_room(rooms: Sequence[Room], start: Point, end: Point) -> Room:
    """
    Return the room holding both points.

    Raises:
        PointsInDifferentRoomsError: When the points lie in different rooms
            (or either lies in none).
    """
    start_room = find_room_at_point(rooms, start)
    end_room = find_room_at_point(rooms, end)
    if start_room is None or end_room is None or start_room is not end_room:
        err = PointsInDifferentRoomsError(
            start_room.name if start_room else None,
            end_room.name if end_room else None,
        )
        logger.error(str(err))
        raise err
    return start_room


def group_placements(source_center: Point, group_origin: Point, targets: Iterable[Room]) -> List[Point]:
    """
    Placement points for copies of a group in each target room, keeping the
    group's horizontal offset from its source room center.
    """
    offset = group_origin - source_center
    offset_xy = Vector(offset.x, offset.y, 0.0)
    return [room.center + offset_xy for room in targets]
