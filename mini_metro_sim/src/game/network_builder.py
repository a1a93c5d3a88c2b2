"""
Network builder module for Mini Metro simulation.

Turns player gestures into network changes: activating a station starts a
new line with its own train, dragging over a station extends the most
recently created line.
"""

from typing import Iterable, Optional, Tuple, TYPE_CHECKING
import logging

from .station import Station
from .line import Line, line_color_for_index
from .train import Train
from ..utils.helpers import calculate_euclidean_distance

if TYPE_CHECKING:
    from .mini_metro_game import SimulationState
    from ..utils.config import GameConfig

logger = logging.getLogger(__name__)


class NetworkBuilder:
    """Creates and extends lines in response to station gestures."""

    def __init__(self, config: 'GameConfig'):
        """
        Initialize the builder.

        Args:
            config: Game configuration (pick radius, train capacity)
        """
        self.config = config

    def find_station(
        self,
        stations: Iterable[Station],
        point: Tuple[float, float],
        exclude: Optional[Line] = None
    ) -> Optional[Station]:
        """
        Hit-test a map point against station centers.

        Args:
            stations: Stations to test, in priority order
            point: (x, y) map point
            exclude: Line whose stations are ignored

        Returns:
            First station within the pick radius, or None
        """
        for station in stations:
            if exclude is not None and exclude.contains(station):
                continue
            if calculate_euclidean_distance(point, station.position) < self.config.pick_radius:
                return station
        return None

    def station_activated(self, state: 'SimulationState', point: Tuple[float, float]) -> Optional[Line]:
        """
        Start a new line at the station under the point.

        The line gets the next free color and a paired train at its start.

        Returns:
            The new line, or None if no station was hit
        """
        station = self.find_station(state.stations, point)
        if station is None:
            logger.debug(f"No station at {point}")
            return None

        line_id = len(state.lines)
        line = Line(line_id, line_color_for_index(line_id), [station])
        train = Train(len(state.trains), line_id, self.config.train_capacity)

        state.lines.append(line)
        state.trains.append(train)

        logger.info(f"Created line {line_id} ({line.color}) at station {station.station_id}")
        return line

    def station_dragged_over(self, state: 'SimulationState', point: Tuple[float, float]) -> Optional[Station]:
        """
        Extend the active line with the station under the point.

        Returns:
            The appended station, or None if nothing changed
        """
        line = state.active_line
        if line is None:
            return None

        station = self.find_station(state.stations, point, exclude=line)
        if station is None or not line.add_station(station):
            return None

        logger.info(f"Extended line {line.line_id} with station {station.station_id} "
                    f"({len(line.stations)} stations)")
        return station
