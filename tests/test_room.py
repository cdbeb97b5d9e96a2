"""Tests for room snapshot queries."""
import math

import pytest

from wirerouting.errors import PointsInDifferentRoomsError
from wirerouting.model.geometry_primitives import BoundaryLoop, Point
from wirerouting.model.room import (
    HostedElement,
    Room,
    ensure_same_room,
    filter_hosted_elements,
    find_room_at_point,
    group_placements,
)


@pytest.fixture
def shifted_room(make_segment):
    """Same 10 x 10 room, 20 units further along x."""
    segments = [
        make_segment(20, 0, 30, 0, "w-5"),
        make_segment(30, 0, 30, 10, "w-6"),
        make_segment(30, 10, 20, 10, "w-7"),
        make_segment(20, 10, 20, 0, "w-8"),
    ]
    return Room(name="Meeting", location=Point(25, 5, 0.0), boundary=[BoundaryLoop(segments)])


def test_perimeter(rectangle_room, quarter_disc_segments):
    assert rectangle_room.perimeter == pytest.approx(40.0)

    disc = Room(name="Apse", location=Point(3, 3), boundary=[BoundaryLoop(quarter_disc_segments)])
    assert disc.perimeter == pytest.approx(20.0 + 5.0 * math.pi)


def test_unbound_room():
    room = Room(name="Void", location=Point(1, 2, 3))
    assert not room.is_bound
    assert room.perimeter == 0.0
    assert room.center == Point(1, 2, 3)
    assert not room.contains_point(Point(1, 2))
    assert room.bounding_element_ids() == set()


def test_center_uses_room_elevation(rectangle_segments):
    room = Room(name="Upstairs", location=Point(1, 1, 3.0), boundary=[BoundaryLoop(rectangle_segments)])
    center = room.center
    assert center.is_almost_equal_to(Point(5, 5, 3.0))
    assert room.elevation == 3.0


def test_center_of_curved_room(quarter_disc_segments):
    room = Room(name="Apse", location=Point(3, 3), boundary=[BoundaryLoop(quarter_disc_segments)])
    assert room.center.is_almost_equal_to(Point(5, 5, 0))


def test_contains_point(rectangle_room, rectangle_segments, hole_segments):
    assert rectangle_room.contains_point(Point(5, 5))
    assert not rectangle_room.contains_point(Point(15, 5))

    with_column = Room(
        name="Hall",
        location=Point(1, 1),
        boundary=[BoundaryLoop(rectangle_segments), BoundaryLoop(hole_segments)],
    )
    assert not with_column.contains_point(Point(5, 5))
    assert with_column.contains_point(Point(2, 2))


def test_contains_point_with_curved_wall(quarter_disc_segments):
    room = Room(name="Apse", location=Point(3, 3), boundary=[BoundaryLoop(quarter_disc_segments)])
    assert room.contains_point(Point(3, 3))
    assert not room.contains_point(Point(8, 8))


def test_points_on_every_wall_are_inside(rectangle_room, shifted_room):
    picks = [Point(5, 0, 1.2), Point(10, 5, 1.2), Point(5, 10, 1.2), Point(0, 5, 1.2)]
    for pick in picks:
        assert rectangle_room.contains_point(pick)
        assert find_room_at_point([rectangle_room, shifted_room], pick) is rectangle_room

    assert ensure_same_room([rectangle_room], Point(5, 0, 1.2), Point(5, 10, 1.2)) is rectangle_room
    assert ensure_same_room([rectangle_room], Point(10, 5), Point(0, 5)) is rectangle_room


def test_point_on_column_face_is_inside(rectangle_segments, hole_segments):
    with_column = Room(
        name="Hall",
        location=Point(1, 1),
        boundary=[BoundaryLoop(rectangle_segments), BoundaryLoop(hole_segments)],
    )
    assert with_column.contains_point(Point(6, 5))


def test_bounding_element_ids(rectangle_room):
    assert rectangle_room.bounding_element_ids() == {"wall-1", "wall-2", "wall-3", "wall-4"}


def test_filter_hosted_elements(rectangle_room):
    doors = [
        HostedElement("door-a", host_id="wall-2"),
        HostedElement("door-b", host_id="wall-9"),
        HostedElement("door-c", host_id="wall-4"),
    ]
    found = filter_hosted_elements(doors, rectangle_room)
    assert [d.element_id for d in found] == ["door-a", "door-c"]


def test_find_room_at_point(rectangle_room, shifted_room):
    rooms = [rectangle_room, shifted_room]
    assert find_room_at_point(rooms, Point(25, 5)) is shifted_room
    assert find_room_at_point(rooms, Point(2, 8)) is rectangle_room
    assert find_room_at_point(rooms, Point(15, 5)) is None


def test_ensure_same_room(rectangle_room, shifted_room):
    rooms = [rectangle_room, shifted_room]
    assert ensure_same_room(rooms, Point(1, 1), Point(9, 9)) is rectangle_room

    with pytest.raises(PointsInDifferentRoomsError) as exc:
        ensure_same_room(rooms, Point(1, 1), Point(25, 5))
    assert exc.value.start_room == "Office"
    assert exc.value.end_room == "Meeting"

    with pytest.raises(PointsInDifferentRoomsError):
        ensure_same_room(rooms, Point(1, 1), Point(15, 5))


def test_group_placements_keep_horizontal_offset(rectangle_room, shifted_room):
    source_center = rectangle_room.center
    placements = group_placements(source_center, Point(7, 6, 1.0), [shifted_room])
    assert len(placements) == 1
    assert placements[0].is_almost_equal_to(Point(27, 6, 0.0))
