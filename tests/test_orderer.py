"""Tests for ordering boundary loops into chains of touching segments."""
import itertools
import logging
import random

from wirerouting.model.geometry_primitives import BoundaryLoop
from wirerouting.routing.orderer import (
    AmbiguousOrdering,
    OrderedBoundary,
    find_adjacency_gaps,
    order_boundary_loops,
    order_loop,
)


def _ids(segments):
    return [s.element_id for s in segments]


def test_every_permutation_of_a_rectangle_is_chained(rectangle_segments):
    for perm in itertools.permutations(rectangle_segments):
        ordered, unmatched = order_loop(list(perm))
        assert unmatched == []
        assert find_adjacency_gaps(ordered) == []
        assert sorted(_ids(ordered)) == sorted(_ids(rectangle_segments))


def test_shuffled_l_shape_is_chained(l_shape_segments):
    rng = random.Random(7)
    for _ in range(10):
        shuffled = list(l_shape_segments)
        rng.shuffle(shuffled)
        result = order_boundary_loops([shuffled])
        assert result.is_reliable
        assert find_adjacency_gaps(result[0]) == []
        assert set(result[0]) == set(l_shape_segments)
        assert len(result[0]) == len(l_shape_segments)


def test_mixed_winding_is_chained_without_flipping(make_segment):
    segments = [
        make_segment(10, 10, 0, 10, "top"),
        make_segment(10, 0, 0, 0, "bottom-reversed"),
        make_segment(0, 0, 0, 10, "left-reversed"),
        make_segment(10, 0, 10, 10, "right"),
    ]
    ordered, unmatched = order_loop(segments)
    assert unmatched == []
    assert _ids(ordered) == ["top", "left-reversed", "bottom-reversed", "right"]
    # Directions stay as the host reported them
    assert ordered[2].start == segments[1].start


def test_first_matching_segment_is_swapped_in(rectangle_segments):
    bottom, right, top, left = rectangle_segments
    ordered, _ = order_loop([top, left, bottom, right])
    assert _ids(ordered) == ["wall-3", "wall-4", "wall-1", "wall-2"]


def test_input_is_not_modified(rectangle_segments):
    bottom, right, top, left = rectangle_segments
    loops = [[bottom, top, right, left]]
    snapshot = [list(loop) for loop in loops]
    order_boundary_loops(loops)
    assert loops == snapshot


def test_multiple_loops_are_ordered_independently(rectangle_segments, hole_segments):
    shuffled_outer = [rectangle_segments[i] for i in (2, 0, 3, 1)]
    result = order_boundary_loops([shuffled_outer, hole_segments])
    assert len(result) == 2
    assert result.is_reliable
    for loop in result:
        assert isinstance(loop, BoundaryLoop)
        assert find_adjacency_gaps(loop) == []
    assert set(_ids(result[1])) == {"col-1", "col-2", "col-3", "col-4"}


def test_short_loops_are_returned_unchanged(rectangle_segments):
    result = order_boundary_loops([[rectangle_segments[0]], []])
    assert _ids(result[0]) == ["wall-1"]
    assert len(result[1]) == 0
    assert result.is_reliable


def test_unbound_room_gives_empty_result():
    result = order_boundary_loops(None)
    assert isinstance(result, OrderedBoundary)
    assert len(result) == 0
    assert result.primary is None
    assert result.is_reliable


def test_detached_segment_is_reported(rectangle_segments, make_segment, caplog):
    bottom, right, top, left = rectangle_segments
    stray = make_segment(50, 50, 60, 50, "stray")

    with caplog.at_level(logging.WARNING, logger="wirerouting"):
        result = order_boundary_loops([[bottom, stray, right, top, left]])

    assert _ids(result[0]) == ["wall-1", "wall-2", "wall-3", "wall-4", "stray"]
    assert not result.is_reliable
    assert result.ambiguities == [AmbiguousOrdering(loop_index=0, position=3, element_id="wall-4")]
    assert find_adjacency_gaps(result[0]) == [3]
    assert "unreliable" in caplog.text


def test_adjacency_gaps_flag_unordered_loop(rectangle_segments):
    bottom, right, top, left = rectangle_segments
    assert find_adjacency_gaps([bottom, top, right, left]) == [0, 2]
