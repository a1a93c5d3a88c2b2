"""
Geometry module for Mini Metro simulation.

Computes the right-angle paths lines follow between consecutive stations and
resolves a train's progress along a segment to a map position and heading.
"""

from typing import List, NamedTuple, Sequence, Tuple
import math
import numpy as np

# Fraction of the dominant axis travelled before the elbow turn
ELBOW_RATIO = 0.8


class Point(NamedTuple):
    """A position on the map plane."""
    x: float
    y: float


def elbow_waypoint(start: Tuple[float, float], end: Tuple[float, float]) -> Point:
    """
    Get the intermediate point that turns a station-to-station connection
    into an "L" shaped path.

    Args:
        start: (x, y) position of the first station
        end: (x, y) position of the second station

    Returns:
        Elbow point, offset along the dominant axis of travel
    """
    dx = end[0] - start[0]
    dy = end[1] - start[1]

    if abs(dx) > abs(dy):
        # Horizontal first, then vertical
        return Point(start[0] + dx * ELBOW_RATIO, start[1])

    # Vertical first, then horizontal
    return Point(start[0], start[1] + dy * ELBOW_RATIO)


def compute_waypoints(positions: Sequence[Tuple[float, float]]) -> List[Point]:
    """Get one elbow waypoint per consecutive pair of positions."""
    return [
        elbow_waypoint(positions[i], positions[i + 1])
        for i in range(len(positions) - 1)
    ]


def resolve_on_segment(
    start: Tuple[float, float],
    elbow: Tuple[float, float],
    end: Tuple[float, float],
    local_t: float
) -> Tuple[Point, float]:
    """
    Resolve progress along one segment to a position and heading.

    The first half of the progress range covers start -> elbow, the second
    half covers elbow -> end.

    Args:
        start: Segment start (station position)
        elbow: Elbow waypoint of the segment
        end: Segment end (station position)
        local_t: Progress within the segment, 0.0 to 1.0

    Returns:
        Tuple of (position, heading in radians)
    """
    if local_t < 0.5:
        a, b = np.asarray(start, dtype=float), np.asarray(elbow, dtype=float)
        t = local_t * 2
    else:
        a, b = np.asarray(elbow, dtype=float), np.asarray(end, dtype=float)
        t = (local_t - 0.5) * 2

    position = a + (b - a) * t
    heading = math.atan2(b[1] - a[1], b[0] - a[0])

    return Point(float(position[0]), float(position[1])), heading

