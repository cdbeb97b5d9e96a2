"""
Boundary Ordering
=================
Host boundary queries return each loop's segments in no particular order
and with inconsistent winding. This module puts every loop back into a
chain where each segment touches the next one.

The repair is a best-effort nearest-neighbour pass, not a topological sort:
positions that cannot be chained are left as found and reported as
AmbiguousOrdering diagnostics.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Iterable, Iterator, List, Optional, Sequence, Union

from wirerouting.config import VERTEX_TOLERANCE
from wirerouting.model.geometry_primitives import BoundaryLoop, BoundarySegment, SetComparisonResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AmbiguousOrdering:
    """No later segment of the loop touches the segment at `position`."""
    loop_index: int
    position: int
    element_id: Optional[Union[int, str]] = None


@dataclass
class OrderedBoundary:
    """
    Ordered loops of one room, usable as a plain sequence of loops.
    `ambiguities` lists every place the ordering pass could not chain.
    """
    loops: List[BoundaryLoop] = field(default_factory=list)
    ambiguities: List[AmbiguousOrdering] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.loops)

    def __iter__(self) -> Iterator[BoundaryLoop]:
        return iter(self.loops)

    def __getitem__(self, index: int) -> BoundaryLoop:
        return self.loops[index]

    @property
    def is_reliable(self) -> bool:
        return not self.ambiguities

    @property
    def primary(self) -> Optional[BoundaryLoop]:
        return self.loops[0] if self.loops else None


def _touches(a: BoundarySegment, b: BoundarySegment, tolerance: float) -> bool:
    return a.curve.intersect(b.curve, tolerance) == SetComparisonResult.OVERLAP


def order_loop(
    segments: Iterable[BoundarySegment],
    tolerance: float = VERTEX_TOLERANCE
    ) -> tuple[BoundaryLoop, List[int]]:
    """
    Reorder one loop so that each segment touches its predecessor.

    For each position i the first later segment touching segment i is
    swapped into i + 1. Segment directions are left as they are.

    Args:
        segments: The loop's segments in any order. Not modified.
        tolerance: Distance under which curves count as touching.

    Returns:
        The ordered copy, and the positions for which no touching
        successor was found.
    """
    ordered = list(segments)
    unmatched: List[int] = []
    for i in range(len(ordered) - 1):
        for j in range(i + 1, len(ordered)):
            if _touches(ordered[i], ordered[j], tolerance):
                ordered[i + 1], ordered[j] = ordered[j], ordered[i + 1]
                break
        else:
            unmatched.append(i)
    return BoundaryLoop(ordered), unmatched


def order_boundary_loops(
    loops: Optional[Iterable[Iterable[BoundarySegment]]],
    tolerance: float = VERTEX_TOLERANCE
    ) -> OrderedBoundary:
    """
    Order every loop of a room boundary.

    Args:
        loops: One segment collection per loop, or None for an unbound room.
        tolerance: Distance under which curves count as touching.

    Returns:
        OrderedBoundary holding one ordered BoundaryLoop per input loop.
    """
    result = OrderedBoundary()
    if loops is None:
        logger.debug("No boundary loops to order (room is not bound).")
        return result

    for loop_index, segments in enumerate(loops):
        ordered, unmatched = order_loop(segments, tolerance)
        result.loops.append(ordered)
        for position in unmatched:
            diag = AmbiguousOrdering(loop_index, position, ordered[position].element_id)
            result.ambiguities.append(diag)
            logger.warning(
                f"Loop {loop_index}: no segment touching position {position} "
                f"(element {diag.element_id}); boundary order may be unreliable."
            )

    logger.debug(f"Ordered {len(result.loops)} boundary loop(s).")
    return result


def find_adjacency_gaps(
    loop: Sequence[BoundarySegment],
    tolerance: float = VERTEX_TOLERANCE
    ) -> List[int]:
    """Positions i where segment i does not touch segment i + 1."""
    return [
        i for i in range(len(loop) - 1)
        if not _touches(loop[i], loop[i + 1], tolerance)
    ]
