"""
Wire Path Building
==================
Turns two points picked on a room's walls into the vertex list of a wire
that runs along the room boundary between them.

Exports:
    WirePath: The resulting polyline.
    locate_segment: Index of the boundary segment a point lies on.
    build_path: Path between two points on one ordered loop.
    build_wire_path: Path on the primary loop of an ordered boundary.
    route_wire: Whole request for a Room snapshot.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import List, Optional, Sequence, TYPE_CHECKING

import numpy as np

from wirerouting.config import VERTEX_TOLERANCE, RoutingOptions
from wirerouting.errors import PointNotOnBoundaryError, UnboundRoomError
from wirerouting.model.geometry_primitives import BoundaryLoop, BoundarySegment, Point
from wirerouting.model.geometry_utils import junction_point, polyline_length
from wirerouting.routing.orderer import order_boundary_loops

if TYPE_CHECKING:
    import numpy.typing as npt
    from wirerouting.model.room import Room

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WirePath:
    """
    Ordered wire vertices: the picked start point, the boundary junctions
    walked past, and the picked end point.
    """
    points: List[Point] = field(default_factory=list)
    start_segment: Optional[int] = None
    end_segment: Optional[int] = None
    wraps: bool = False  # True when the path runs through the loop's closing junction

    @property
    def start(self) -> Point:
        return self.points[0]

    @property
    def end(self) -> Point:
        return self.points[-1]

    @property
    def intermediate(self) -> List[Point]:
        return self.points[1:-1]

    @property
    def length(self) -> float:
        return polyline_length(self.to_array())

    def reversed(self) -> WirePath:
        return WirePath(
            points=list(reversed(self.points)),
            start_segment=self.end_segment,
            end_segment=self.start_segment,
            wraps=self.wraps,
        )

    def to_array(self) -> npt.NDArray[np.float64]:
        return np.array([p.to_array() for p in self.points]).reshape(-1, 3)


def locate_segment(
    segments: Sequence[BoundarySegment],
    point: Point,
    tolerance: float = VERTEX_TOLERANCE
    ) -> Optional[int]:
    """
    Finds the first boundary segment the point belongs to.

    A point on a junction matches both neighbours; the earlier one in
    traversal order wins.

    Returns:
        The segment index, or None if the point is on no segment.
    """
    for i, segment in enumerate(segments):
        if segment.curve.project(point, tolerance).is_on_curve:
            logger.debug(f"BoundarySegment is found: {i}")
            return i
    return None


def _junction_chain(
    segments: Sequence[BoundarySegment],
    start_index: int,
    end_index: int,
    wrap: bool
    ) -> List[Point]:
    """
    Junctions crossed walking from segment `start_index` to `end_index`.
    Junction k joins segment k and segment k + 1 (mod n).
    """
    n = len(segments)
    if start_index == end_index:
        return []

    lo, hi = min(start_index, end_index), max(start_index, end_index)
    if wrap:
        # hi, hi+1, ..., n-1 (closing junction), 0, ..., lo-1
        ks = [k % n for k in range(hi, lo + n)]
    else:
        ks = list(range(lo, hi))
    chain = [junction_point(segments[k].curve, segments[(k + 1) % n].curve) for k in ks]

    # The chain above runs lo -> hi (or hi -> lo when wrapping)
    forward = start_index < end_index
    if forward == wrap:
        chain.reverse()
    return chain


def build_path(
    segments: Sequence[BoundarySegment],
    start: Point,
    end: Point,
    elevation: Optional[float] = None,
    *,
    tolerance: float = VERTEX_TOLERANCE,
    shortest: bool = False
    ) -> WirePath:
    """
    Calculates the wire vertices along one ordered boundary loop.

    Args:
        segments: The ordered segments of the loop.
        start: The picked start point.
        end: The picked end point.
        elevation: Plane the boundary lies in. The picks are flattened onto it
            before being located, so any height on a wall face works. None
            locates the points as picked.
        tolerance: Distance under which a point counts as lying on a segment.
        shortest: Also consider walking through the loop's closing junction
            and take it when that crosses fewer junctions.

    Returns:
        WirePath of [start, junctions..., end]. Start and end are kept as
        picked; junction vertices take the start point's z.

    Raises:
        PointNotOnBoundaryError: If either point is on no segment.
    """
    located = []
    for role, point in (("start", start), ("end", end)):
        flat = point.with_z(elevation) if elevation is not None else point
        index = locate_segment(segments, flat, tolerance)
        if index is None:
            err = PointNotOnBoundaryError(point, role)
            logger.error(str(err))
            raise err
        located.append(index)
    start_index, end_index = located

    span = abs(end_index - start_index)
    wrap = False
    if shortest and span > 0:
        around = len(segments) - span
        wrap = around < span and BoundaryLoop(list(segments)).is_closed(tolerance)

    # For the sake of simplicity, use the start point's z for every vertex except the final one
    z = start.z
    intermediate = [p.with_z(z) for p in _junction_chain(segments, start_index, end_index, wrap)]
    logger.debug(
        f"Wire from segment {start_index} to {end_index}: "
        f"{len(intermediate)} intermediate vertices{' (wrapping)' if wrap else ''}."
    )

    return WirePath(
        points=[start, *intermediate, end],
        start_segment=start_index,
        end_segment=end_index,
        wraps=wrap,
    )


def build_wire_path(
    ordered_loops: Optional[Sequence[Sequence[BoundarySegment]]],
    start: Point,
    end: Point,
    room_elevation: float,
    *,
    tolerance: float = VERTEX_TOLERANCE,
    shortest: bool = False
    ) -> WirePath:
    """
    Routes a wire along the primary (first) loop of an ordered room boundary.

    Raises:
        UnboundRoomError: If there are no boundary loops.
        PointNotOnBoundaryError: If either point is not on the primary loop.
    """
    if not ordered_loops or len(ordered_loops[0]) == 0:
        err = UnboundRoomError()
        logger.error(str(err))
        raise err
    return build_path(
        ordered_loops[0], start, end, room_elevation,
        tolerance=tolerance, shortest=shortest,
    )


def route_wire(room: Room, start: Point, end: Point, options: Optional[RoutingOptions] = None) -> WirePath:
    """
    Calculates the full list of wire vertex points for a wire between two
    points picked on the walls of `room`.

    Raises:
        UnboundRoomError: If the room is not bound.
        PointNotOnBoundaryError: If either point is not on the room's outer loop.
    """
    options = options or RoutingOptions()
    if not room.is_bound:
        err = UnboundRoomError(room.name)
        logger.error(str(err))
        raise err

    ordered = order_boundary_loops(room.boundary, options.boundary.tolerance)
    if not ordered.is_reliable:
        logger.warning(
            f"Boundary of '{room.name}' could not be fully ordered "
            f"({len(ordered.ambiguities)} gap(s)); the wire path may be unreliable."
        )

    path = build_wire_path(
        ordered, start, end, room.elevation,
        tolerance=options.tolerance, shortest=options.shortest,
    )
    logger.info(f"Wire routed in '{room.name}' with {len(path.points)} vertices.")
    return path
