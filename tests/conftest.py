"""Shared room boundaries for the routing tests."""
import pytest

from wirerouting.model.geometry_primitives import Arc, BoundaryLoop, BoundarySegment, Line, Point
from wirerouting.model.room import Room


def _seg(x0, y0, x1, y1, element_id=None, z=0.0):
    return BoundarySegment(Line(Point(x0, y0, z), Point(x1, y1, z)), element_id)


@pytest.fixture
def make_segment():
    """Factory for straight boundary segments: make_segment(x0, y0, x1, y1, element_id, z)."""
    return _seg


@pytest.fixture
def rectangle_segments():
    """10 x 10 room: bottom, right, top, left (counter-clockwise)."""
    return [
        _seg(0, 0, 10, 0, "wall-1"),
        _seg(10, 0, 10, 10, "wall-2"),
        _seg(10, 10, 0, 10, "wall-3"),
        _seg(0, 10, 0, 0, "wall-4"),
    ]


@pytest.fixture
def l_shape_segments():
    """L-shaped room with six walls, ordered counter-clockwise from the origin."""
    return [
        _seg(0, 0, 10, 0, "L-1"),
        _seg(10, 0, 10, 5, "L-2"),
        _seg(10, 5, 5, 5, "L-3"),
        _seg(5, 5, 5, 10, "L-4"),
        _seg(5, 10, 0, 10, "L-5"),
        _seg(0, 10, 0, 0, "L-6"),
    ]


@pytest.fixture
def hole_segments():
    """Column in the middle of the rectangle room, listed out of order."""
    return [
        _seg(6, 6, 4, 6, "col-3"),
        _seg(4, 4, 6, 4, "col-1"),
        _seg(4, 6, 4, 4, "col-4"),
        _seg(6, 4, 6, 6, "col-2"),
    ]


@pytest.fixture
def quarter_disc_segments():
    """Quarter of a disc with radius 10: two straight walls and a curved one."""
    return [
        _seg(0, 0, 10, 0, "floor-wall"),
        BoundarySegment(Arc(start=Point(10, 0), center=Point(0, 0), end=Point(0, 10)), "curved-wall"),
        _seg(0, 10, 0, 0, "side-wall"),
    ]


@pytest.fixture
def rectangle_room(rectangle_segments):
    return Room(name="Office", location=Point(5, 5, 0.0), boundary=[BoundaryLoop(rectangle_segments)])
