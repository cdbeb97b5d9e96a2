"""
Geometric Primitives for room boundaries and wire paths.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Iterator, List, Optional, Protocol, Union, TYPE_CHECKING, runtime_checkable
import numpy as np
import math

from wirerouting.config import VERTEX_TOLERANCE

if TYPE_CHECKING:
    import numpy.typing as npt


@dataclass
class Vector:
    """
    A vector in 3D space representing direction and magnitude.
    """
    x: float
    y: float
    z: float = 0.0

    def __add__(self, other: Vector) -> Vector:
        return Vector(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector) -> Vector:
        return Vector(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Vector:
        return Vector(self.x * scalar, self.y * scalar, self.z * scalar)

    def dot(self, other: Vector) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z


@dataclass(frozen=True)
class Point:
    """A point in the shared planar coordinate system (z is the elevation)."""
    x: float
    y: float
    z: float = 0.0

    def __add__(self, other: Vector) -> Point:
        # Point + Vector = Point (Translation)
        if isinstance(other, Vector):
            return Point(self.x + other.x, self.y + other.y, self.z + other.z)
        raise TypeError("Can only add a Vector to a Point.")

    def __sub__(self, other: Union[Vector, Point]) -> Union[Vector, Point]:
        # Point - Point = Vector (Direction)
        if isinstance(other, Point):
            return Vector(self.x - other.x, self.y - other.y, self.z - other.z)
        # Point - Vector = Point (Inverse translation)
        if isinstance(other, Vector):
            return Point(self.x - other.x, self.y - other.y, self.z - other.z)
        raise TypeError("Can only subtract a Vector or Point to a Point.")

    def distance_to(self, other: Point) -> float:
        return math.sqrt((self.x - other.x) ** 2 + (self.y - other.y) ** 2 + (self.z - other.z) ** 2)

    def is_almost_equal_to(self, other: Point, tolerance: float = VERTEX_TOLERANCE) -> bool:
        """Tolerance-based equality; curve evaluation never reproduces coordinates exactly."""
        return self.distance_to(other) <= tolerance

    def with_z(self, z: float) -> Point:
        """Same x, y on the horizontal plane at elevation `z`."""
        return Point(self.x, self.y, z)

    def to_array(self) -> npt.NDArray[np.float64]:
        return np.array([self.x, self.y, self.z])

    @classmethod
    def from_array(cls, values) -> Point:
        values = list(values)
        z = float(values[2]) if len(values) > 2 else 0.0
        return cls(float(values[0]), float(values[1]), z)


class SetComparisonResult(StrEnum):
    """How two curves relate to each other as point sets."""
    DISJOINT = "disjoint"
    OVERLAP = "overlap"   # share at least one point, neither contains the other
    SUBSET = "subset"     # the first curve lies within the second
    SUPERSET = "superset"
    EQUAL = "equal"


@dataclass(frozen=True)
class Projection:
    """
    Result of projecting a point onto a curve.

    Attributes:
        point: The closest point on the curve.
        distance: Distance from the projected point to `point`.
        parameter: Normalized curve parameter of `point` (0 at start, 1 at end).
        is_on_curve: True when the projected point itself lies on the curve
            within the tolerance used for the projection.
    """
    point: Point
    distance: float
    parameter: float
    is_on_curve: bool


@runtime_checkable
class Curve(Protocol):
    """
    Capabilities the routing algorithms need from a boundary curve.
    Any geometry kind (line, arc, spline...) providing these can be used.
    """
    @property
    def start(self) -> Point: ...
    @property
    def end(self) -> Point: ...
    @property
    def length(self) -> float: ...
    def point_at(self, parameter: float) -> Point: ...
    def project(self, point: Point, tolerance: float = VERTEX_TOLERANCE) -> Projection: ...
    def intersect(self, other: Curve, tolerance: float = VERTEX_TOLERANCE) -> SetComparisonResult: ...
    def reverse(self) -> Curve: ...
    def discretize(self, max_length: Optional[float] = None) -> npt.NDArray[np.float64]: ...


def _classify(curve: Curve, other: Curve, tolerance: float) -> SetComparisonResult:
    # geometry_utils depends on this module
    from wirerouting.model.geometry_utils import classify_intersection
    return classify_intersection(curve, other, tolerance=tolerance)


@dataclass(frozen=True)
class Line:
    """A straight line between two points."""
    start: Point
    end: Point

    def reverse(self) -> Line:
        return Line(start=self.end, end=self.start)

    def discretize(self, max_length: Optional[float] = None) -> npt.NDArray[np.float64]:
        if max_length is None:
            return np.array([self.start.to_array(), self.end.to_array()])

        resolution = max(2, math.ceil(self.length / max_length) + 1)
        return np.linspace(self.start.to_array(), self.end.to_array(), resolution)

    def to_vector(self) -> Vector:
        return self.end - self.start

    @property
    def length(self) -> float:
        return self.start.distance_to(self.end)

    def point_at(self, parameter: float) -> Point:
        return self.start + self.to_vector() * parameter

    def project(self, point: Point, tolerance: float = VERTEX_TOLERANCE) -> Projection:
        direction = self.to_vector()
        denom = direction.dot(direction)
        if denom == 0.0:
            t = 0.0
        else:
            t = min(1.0, max(0.0, (point - self.start).dot(direction) / denom))
        closest = self.point_at(t)
        distance = closest.distance_to(point)
        return Projection(point=closest, distance=distance, parameter=t, is_on_curve=distance <= tolerance)

    def intersect(self, other: Curve, tolerance: float = VERTEX_TOLERANCE) -> SetComparisonResult:
        return _classify(self, other, tolerance)


def normalize_angle(angle: float) -> float:
    """Wraps an angle into (-pi, pi]."""
    while angle <= -math.pi:
        angle += 2 * math.pi
    while angle > math.pi:
        angle -= 2 * math.pi
    return angle


@dataclass(frozen=True)
class Arc:
    """
    A circular arc defined by start, center and end, lying in the horizontal
    plane of its center.

    `clockwise` fixes the direction of travel from start to end, so arcs of
    180 degrees or more are unambiguous. Left as None, the arc takes the
    shorter way round.
    """
    start: Point
    center: Point
    end: Point
    clockwise: Optional[bool] = None

    def reverse(self) -> Arc:
        return Arc(center=self.center, start=self.end, end=self.start, clockwise=self.sweep > 0)

    @property
    def radius(self) -> float:
        return math.hypot(self.start.x - self.center.x, self.start.y - self.center.y)

    @property
    def start_angle(self) -> float:
        return math.atan2(self.start.y - self.center.y, self.start.x - self.center.x)

    @property
    def sweep(self) -> float:
        """Signed angular extent; positive is counter-clockwise."""
        end_angle = math.atan2(self.end.y - self.center.y, self.end.x - self.center.x)
        delta = end_angle - self.start_angle
        if self.clockwise is None:
            return normalize_angle(delta)
        if self.clockwise:
            return -((-delta) % (2 * math.pi))
        return delta % (2 * math.pi)

    @property
    def length(self) -> float:
        return self.radius * abs(self.sweep)

    def point_at(self, parameter: float) -> Point:
        angle = self.start_angle + self.sweep * parameter
        return Point(
            self.center.x + self.radius * math.cos(angle),
            self.center.y + self.radius * math.sin(angle),
            self.center.z
        )

    def discretize(self, max_length: Optional[float] = None) -> npt.NDArray[np.float64]:
        """
        Generates points along the arc from `start` to `end` via `center`.
        """
        if max_length is not None:
            resolution = max(2, math.ceil(self.length / max_length) + 1)
        else:
            resolution = 100

        angles = np.linspace(self.start_angle, self.start_angle + self.sweep, resolution)

        x = self.center.x + self.radius * np.cos(angles)
        y = self.center.y + self.radius * np.sin(angles)
        z = np.full_like(x, self.center.z)

        return np.array([x, y, z]).T

    def project(self, point: Point, tolerance: float = VERTEX_TOLERANCE) -> Projection:
        sweep = self.sweep
        dx = point.x - self.center.x
        dy = point.y - self.center.y

        if sweep == 0.0 or math.hypot(dx, dy) == 0.0:
            # Degenerate arc, or the point sits on the center: every arc point is equidistant
            t = 0.0
        else:
            rel = normalize_angle(math.atan2(dy, dx) - self.start_angle)
            if sweep > 0 and rel < 0:
                rel += 2 * math.pi
            elif sweep < 0 and rel > 0:
                rel -= 2 * math.pi

            if abs(rel) <= abs(sweep):
                t = rel / sweep
            else:
                # Outside the sweep: nearest endpoint wins
                t = 0.0 if point.distance_to(self.start) <= point.distance_to(self.end) else 1.0

        closest = self.point_at(t)
        distance = closest.distance_to(point)
        return Projection(point=closest, distance=distance, parameter=t, is_on_curve=distance <= tolerance)

    def intersect(self, other: Curve, tolerance: float = VERTEX_TOLERANCE) -> SetComparisonResult:
        return _classify(self, other, tolerance)


@dataclass(frozen=True)
class BoundarySegment:
    """
    One curve of a room boundary, tagged with the id of the wall (or other
    bounding element) it comes from.
    """
    curve: Curve
    element_id: Optional[Union[int, str]] = None

    @property
    def start(self) -> Point:
        return self.curve.start

    @property
    def end(self) -> Point:
        return self.curve.end

    @property
    def length(self) -> float:
        return self.curve.length


@dataclass
class BoundaryLoop:
    """
    An ordered sequence of boundary segments forming a closed (or nearly
    closed) path. Segment directions are not normalized: the end of one
    segment may meet either end of the next.
    """
    segments: List[BoundarySegment] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.segments)

    def __iter__(self) -> Iterator[BoundarySegment]:
        return iter(self.segments)

    def __getitem__(self, index: int) -> BoundarySegment:
        return self.segments[index]

    @property
    def length(self) -> float:
        return sum(segment.length for segment in self.segments)

    def is_closed(self, tolerance: float = VERTEX_TOLERANCE) -> bool:
        """True when the last segment meets the first one."""
        if len(self.segments) < 2:
            return False
        return self.segments[-1].curve.intersect(self.segments[0].curve, tolerance) == SetComparisonResult.OVERLAP

    def to_edges(self, max_length: Optional[float] = None) -> npt.NDArray[np.float64]:
        """
        Straight (K, 2, 3) edges approximating every segment of the loop.
        Edge order and direction follow the segments as stored, so the result
        is only meaningful as a set of edges.
        """
        chunks = []
        for segment in self.segments:
            pts = segment.curve.discretize(max_length=max_length)
            chunks.append(np.stack([pts[:-1], pts[1:]], axis=1))
        if not chunks:
            return np.empty((0, 2, 3))
        return np.concatenate(chunks)
