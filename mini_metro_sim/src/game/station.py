"""
Station module for Mini Metro simulation.

Implements typed stations that accumulate waiting passengers. A waiting
passenger has no identity beyond the station it waits at: the count is all
that is tracked.
"""

from enum import Enum
from typing import Dict, Tuple, Any
import logging

logger = logging.getLogger(__name__)


class StationType(Enum):
    """Station shapes. Passengers are matched to stations by shape."""
    CIRCLE = "circle"
    SQUARE = "square"
    TRIANGLE = "triangle"


class Station:
    """
    Represents a Mini Metro station.

    Features:
    - Shape type used for passenger matching
    - Waiting passenger count, capped by the overflow threshold on spawn
    - Boarding hand-off to trains
    """

    def __init__(
        self,
        station_id: int,
        position: Tuple[float, float],
        station_type: StationType,
        passengers: int = 0
    ):
        """
        Initialize a station.

        Args:
            station_id: Unique identifier for the station
            position: (x, y) coordinates on the map
            station_type: Type/shape of the station
            passengers: Initial number of waiting passengers
        """
        self.station_id = station_id
        self.position = (float(position[0]), float(position[1]))
        self.station_type = station_type
        self.passengers = max(0, int(passengers))

        logger.debug(f"Created station {station_id} of type {station_type.value} at {self.position}")

    @property
    def x(self) -> float:
        return self.position[0]

    @property
    def y(self) -> float:
        return self.position[1]

    def spawn_passenger(self, max_passengers: int) -> bool:
        """
        Add one waiting passenger unless the station is already full.

        Args:
            max_passengers: Overflow threshold

        Returns:
            True if a passenger was added
        """
        if self.passengers >= max_passengers:
            logger.debug(f"Station {self.station_id} is full, passenger not spawned")
            return False

        self.passengers += 1
        logger.debug(f"Spawned passenger at station {self.station_id} ({self.passengers} waiting)")
        return True

    def take_passengers(self, max_count: int) -> int:
        """
        Remove up to max_count waiting passengers for boarding.

        Returns:
            Number of passengers removed
        """
        taken = max(0, min(self.passengers, max_count))
        self.passengers -= taken
        return taken

    def is_overflowing(self, max_passengers: int) -> bool:
        """Check whether the waiting count has reached the overflow threshold."""
        return self.passengers >= max_passengers

    def get_detailed_state(self) -> Dict[str, Any]:
        return {
            'station_id': self.station_id,
            'position': list(self.position),
            'type': self.station_type.value,
            'passengers': self.passengers,
        }

    def __repr__(self) -> str:
        """String representation of the station."""
        return (f"Station(id={self.station_id}, type={self.station_type.value}, "
                f"pos={self.position}, passengers={self.passengers})")
