from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from math import sqrt
import numpy as np

if TYPE_CHECKING:
    from numpy import typing as npt

from wirerouting.config import VERTEX_TOLERANCE, ARC_SEGMENT_LENGTH
from wirerouting.model.geometry_primitives import (
    Arc,
    Curve,
    Line,
    Point,
    SetComparisonResult,
    Vector,
)


def line_circle_intersection(
    point: Point,
    vector: Vector,
    center: Point,
    radius: float,
    *,
    as_segment: bool = False,
    eps: float = 1e-9
    ) -> list[Point]:
    """
    Compute intersection point(s) between a circle and a 2D line or line segment.

    The line is given in parametric form: P(t) = P0 + t * v, where
    P0 is a point on the line and v is the (nonzero) direction vector.
    If `as_segment=True`, the result is restricted to the segment from P0 to (P0 + v),
    i.e., only solutions with 0 <= t <= 1 are returned.

    Args:
        point: A point (x0, y0) on the line (or the start of the segment if `as_segment=True`).
        vector: The line direction vector (vx, vy). If its length is ~0, the function treats the
           "line" as the single point P0.
        center: The circle center (cx, cy).
        radius: The circle radius (must be non-negative).
        as_segment: If True, return only intersections whose parameter t lies in [0, 1] (within `eps`).
                    Default is False (infinite line).
        eps: Numerical tolerance for zero checks and inclusive interval tests. Default 1e-9.

    Returns:
        A list containing 0, 1, or 2 intersection points. For tangency (discriminant ~ 0),
        a single point is returned. The z of each point is interpolated along the line.

    Notes:
        - Solves ||P0 + t*v - C||^2 = r^2, yielding a quadratic a t^2 + b t + c = 0 where:
          a = v·v
          b = 2 v·(P0 - C)
          c = ||P0 - C||^2 - r^2
    """
    x0, y0 = point.x, point.y
    vx, vy = vector.x, vector.y
    cx, cy = center.x, center.y
    r = radius
    a = vx * vx + vy * vy

    # degenerate direction: treat as point-circle intersection
    if abs(a) < eps:
        on_circle = abs((x0 - cx) ** 2 + (y0 - cy) ** 2 - r ** 2) <= eps
        return [point] if on_circle else []

    b = 2.0 * (vx * (x0 - cx) + vy * (y0 - cy))
    c = (x0 - cx) ** 2 + (y0 - cy) ** 2 - r * r
    disc = b * b - 4.0 * a * c

    # No real intersection
    if disc < -eps:
        return []

    # One or two intersection
    if abs(disc) <= eps:
        ts = [-b / (2.0 * a)]
    else:
        sqrt_disc = sqrt(max(0.0, disc))
        ts = [(-b - sqrt_disc) / (2.0 * a), (-b + sqrt_disc) / (2.0 * a)]

    if as_segment:
        ts = [t for t in ts if 0.0 - eps <= t <= 1.0 + eps]

    return [point + vector * t for t in ts]


def segment_intersection(p1: Point, p2: Point, p3: Point, p4: Point, eps=1e-12) -> Optional[Point]:
    """
    Intersection of two 2D line segments p1->p2 and p3->p4.
    Returns the crossing point on the first segment if they cross in a single
    point, otherwise None (disjoint / parallel / coincident).
    """
    x1, y1 = p1.x, p1.y
    x3, y3 = p3.x, p3.y

    # Solve using cross products
    r = (p2.x - x1, p2.y - y1)
    s = (p4.x - x3, p4.y - y3)

    def cross(a, b):
        return a[0]*b[1] - a[1]*b[0]

    rxs = cross(r, s)
    q_p = (x3 - x1, y3 - y1)

    if abs(rxs) < eps:
        # parallel (including possibly collinear)
        return None

    t = cross(q_p, s) / rxs  # parameter on the first segment
    u = cross(q_p, r) / rxs  # parameter on the second segment
    if not (-eps <= t <= 1.0 + eps and -eps <= u <= 1.0 + eps):
        return None
    return p1 + (p2 - p1) * t


def circle_circle_intersection(c1: Point, r1: float, c2: Point, r2: float, eps: float = 1e-9) -> list[Point]:
    """Intersection points of two circles in XY (0, 1 or 2 points, z of the first center)."""
    dx, dy = c2.x - c1.x, c2.y - c1.y
    d = sqrt(dx * dx + dy * dy)
    if d < eps or d > r1 + r2 + eps or d < abs(r1 - r2) - eps:
        return []

    a = (r1 * r1 - r2 * r2 + d * d) / (2.0 * d)
    h = sqrt(max(0.0, r1 * r1 - a * a))
    mx = c1.x + a * dx / d
    my = c1.y + a * dy / d
    if h <= eps:
        return [Point(mx, my, c1.z)]
    return [
        Point(mx + h * dy / d, my - h * dx / d, c1.z),
        Point(mx - h * dy / d, my + h * dx / d, c1.z),
    ]


def _sample_points(curve: Curve) -> list[Point]:
    return [curve.start, curve.point_at(0.5), curve.end]


def _lies_within(curve: Curve, other: Curve, tolerance: float) -> bool:
    return all(other.project(p, tolerance).is_on_curve for p in _sample_points(curve))


def _crossing_candidates(a: Curve, b: Curve) -> list[Point]:
    if isinstance(a, Line) and isinstance(b, Line):
        hit = segment_intersection(a.start, a.end, b.start, b.end)
        return [hit] if hit is not None else []
    if isinstance(a, Line) and isinstance(b, Arc):
        return line_circle_intersection(a.start, a.to_vector(), b.center, b.radius, as_segment=True)
    if isinstance(a, Arc) and isinstance(b, Line):
        return _crossing_candidates(b, a)
    if isinstance(a, Arc) and isinstance(b, Arc):
        return circle_circle_intersection(a.center, a.radius, b.center, b.radius)

    # Any other curve kind: compare the tessellated polylines
    hits: list[Point] = []
    pa = a.discretize(max_length=ARC_SEGMENT_LENGTH)
    pb = b.discretize(max_length=ARC_SEGMENT_LENGTH)
    for a0, a1 in zip(pa[:-1], pa[1:]):
        for b0, b1 in zip(pb[:-1], pb[1:]):
            hit = segment_intersection(
                Point.from_array(a0), Point.from_array(a1),
                Point.from_array(b0), Point.from_array(b1),
            )
            if hit is not None:
                hits.append(hit)
    return hits


def classify_intersection(
    curve: Curve,
    other: Curve,
    *,
    tolerance: float = VERTEX_TOLERANCE
    ) -> SetComparisonResult:
    """
    Classify how two curves relate as point sets.

    Two boundary curves meeting at a junction (or crossing each other) give
    OVERLAP. Collinear/co-circular curves where one lies within the other
    give SUBSET / SUPERSET / EQUAL, which is not an adjacency.

    Args:
        curve: The first curve.
        other: The second curve.
        tolerance: Distance under which points are considered coincident.

    Returns:
        The SetComparisonResult of `curve` relative to `other`.
    """
    inside = _lies_within(curve, other, tolerance)
    contains = _lies_within(other, curve, tolerance)
    if inside and contains:
        return SetComparisonResult.EQUAL
    if inside:
        return SetComparisonResult.SUBSET
    if contains:
        return SetComparisonResult.SUPERSET

    # Touching at an endpoint is the usual junction case
    for p in (curve.start, curve.end):
        if other.project(p, tolerance).is_on_curve:
            return SetComparisonResult.OVERLAP
    for p in (other.start, other.end):
        if curve.project(p, tolerance).is_on_curve:
            return SetComparisonResult.OVERLAP

    for candidate in _crossing_candidates(curve, other):
        # Candidates are found in XY; confirm them on both curves in 3D
        if curve.project(candidate, tolerance).is_on_curve and other.project(candidate, tolerance).is_on_curve:
            return SetComparisonResult.OVERLAP

    return SetComparisonResult.DISJOINT


def closest_endpoints(curve: Curve, other: Curve) -> tuple[Point, Point]:
    """The pair of endpoints (one of each curve) lying closest together."""
    pairs = [(p, q) for p in (curve.start, curve.end) for q in (other.start, other.end)]
    return min(pairs, key=lambda pq: pq[0].distance_to(pq[1]))


def junction_point(curve: Curve, other: Curve) -> Point:
    """
    The point where two adjacent curves meet. Works regardless of which end
    of either curve is its start.
    """
    p, q = closest_endpoints(curve, other)
    return Point((p.x + q.x) * 0.5, (p.y + q.y) * 0.5, (p.z + q.z) * 0.5)


def polyline_length(points: npt.NDArray[np.float64]) -> float:
    """Total length of an (N, 3) polyline."""
    if len(points) < 2:
        return 0.0
    return float(np.linalg.norm(np.diff(points, axis=0), axis=1).sum())


def points_inside_edges(points: npt.NDArray[np.float64], edges: npt.NDArray[np.float64]) -> npt.NDArray[np.bool_]:
    """
    Even-odd test of (M, 2+) points against a closed boundary given as
    (K, 2, 2+) edges in XY. Edge order and direction do not matter.

    Returns:
        Boolean array of length M.
    """
    pts = np.atleast_2d(points)[:, :2]
    e = np.asarray(edges)
    x = pts[:, 0][:, None]
    y = pts[:, 1][:, None]
    x0, y0 = e[:, 0, 0], e[:, 0, 1]
    x1, y1 = e[:, 1, 0], e[:, 1, 1]

    straddles = (y0 > y) != (y1 > y)
    with np.errstate(divide="ignore", invalid="ignore"):
        x_cross = x0 + (y - y0) * (x1 - x0) / (y1 - y0)
    crossings = straddles & (x < x_cross)
    return (crossings.sum(axis=1) % 2) == 1

