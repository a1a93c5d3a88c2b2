"""
Line module for Mini Metro simulation.

Implements metro lines as ordered, duplicate-free station paths with a cached
set of elbow waypoints used for both train positioning and drawing.
"""

from typing import List, Dict, Optional, Any
from enum import Enum
import logging

from .station import Station
from .geometry import Point, compute_waypoints

logger = logging.getLogger(__name__)

# Hue step between generated colors once the named palette is used up
GOLDEN_ANGLE_DEGREES = 137.508


class LineColor(Enum):
    """Available named line colors, handed out in order."""
    RED = "red"
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    ORANGE = "orange"
    PURPLE = "purple"
    BROWN = "brown"
    PINK = "pink"
    GRAY = "gray"
    CYAN = "cyan"


def line_color_for_index(line_index: int) -> str:
    """
    Get a display color for the line with the given index.

    The named palette is used first; later lines get HSL colors spaced by the
    golden angle so no two lines share a color.

    Args:
        line_index: Position of the line in creation order

    Returns:
        Color identifier string
    """
    palette = list(LineColor)
    if line_index < len(palette):
        return palette[line_index].value

    hue = ((line_index - len(palette)) * GOLDEN_ANGLE_DEGREES) % 360.0
    return f"hsl({hue:.1f}, 80%, 60%)"


class Line:
    """
    Represents a metro line.

    A line is a back-and-forth path: the first station added is the start,
    the most recently added one is the end. The paired train shuttles between
    them.
    """

    def __init__(
        self,
        line_id: int,
        color: str,
        initial_stations: Optional[List[Station]] = None
    ):
        """
        Initialize a metro line.

        Args:
            line_id: Unique identifier (index in the line list)
            color: Display color of the line
            initial_stations: Initial ordered stations
        """
        self.line_id = line_id
        self.color = color
        self.stations: List[Station] = []
        self.waypoints: List[Point] = []

        for station in initial_stations or []:
            if station not in self.stations:
                self.stations.append(station)

        self._update_waypoints()

        logger.debug(f"Created line {line_id} ({color}) with {len(self.stations)} stations")

    @property
    def is_active(self) -> bool:
        """A line needs at least two stations to carry a train."""
        return len(self.stations) >= 2

    @property
    def segment_count(self) -> int:
        return max(0, len(self.stations) - 1)

    def contains(self, station: Station) -> bool:
        return any(s is station for s in self.stations)

    def add_station(self, station: Station) -> bool:
        """
        Append a station to the end of the line.

        Args:
            station: Station to add

        Returns:
            True if the station was added, False if it is already on the line
        """
        if self.contains(station):
            logger.debug(f"Station {station.station_id} already on line {self.line_id}")
            return False

        self.stations.append(station)
        self._update_waypoints()
        logger.debug(f"Added station {station.station_id} to line {self.line_id}")
        return True

    def _update_waypoints(self) -> None:
        """Recompute every segment's elbow after the station list changes."""
        self.waypoints = compute_waypoints([s.position for s in self.stations])

    def get_detailed_state(self) -> Dict[str, Any]:
        """
        Get detailed state information for visualization and debugging.

        Returns:
            Dictionary containing line state
        """
        return {
            'line_id': self.line_id,
            'color': self.color,
            'stations': [s.station_id for s in self.stations],
            'waypoints': [list(p) for p in self.waypoints],
            'is_active': self.is_active,
        }

    def __repr__(self) -> str:
        """String representation of the line."""
        return (f"Line(id={self.line_id}, color={self.color}, "
                f"stations={[s.station_id for s in self.stations]})")
