"""
Train module for Mini Metro simulation.

Implements trains that shuttle back and forth along their line, detect
station arrivals and exchange passengers: delivering the ones whose shape
matches the station and boarding waiting ones up to capacity.
"""

from typing import List, Optional, Tuple, Dict, Any
from enum import Enum
import math
import logging

from .station import Station, StationType
from .geometry import Point, resolve_on_segment

logger = logging.getLogger(__name__)


class TrainDirection(Enum):
    """Train movement direction on a line."""
    FORWARD = 1
    BACKWARD = -1


class Train:
    """
    Represents a train in the Mini Metro simulation.

    Position is normalized progress along the whole line: 0.0 is the first
    station, 1.0 the last. With N stations the line has N-1 equal-length
    segments and station k sits at k / (N-1).
    """

    def __init__(self, train_id: int, line_id: int, capacity: int = 4):
        """
        Initialize a train.

        Args:
            train_id: Unique identifier for the train
            line_id: Index of the line this train operates on
            capacity: Maximum number of carried passengers
        """
        self.train_id = train_id
        self.line_id = line_id
        self.capacity = capacity

        # Movement
        self.position = 0.0
        self.direction = TrainDirection.FORWARD

        # Each carried passenger is the station type it will get off at
        self.passengers: List[StationType] = []

        # Delivered since the last day rollover, and over the whole session
        self.delivered_passengers = 0
        self.total_delivered = 0

        # Delivery effect, cleared by a scheduled event
        self.show_delivery_effect = False
        self.effect_expires_at: Optional[float] = None

        logger.debug(f"Created train {train_id} on line {line_id} with capacity {capacity}")

    def advance(self, step: float) -> float:
        """
        Move along the line, reversing at either end.

        Args:
            step: Distance to travel this tick, in normalized line units

        Returns:
            Position before the move
        """
        previous = self.position
        self.position += step * self.direction.value

        if self.position >= 1.0:
            self.position = 1.0
            self.direction = TrainDirection.BACKWARD
        elif self.position <= 0.0:
            self.position = 0.0
            self.direction = TrainDirection.FORWARD

        return previous

    def arrived_station_indices(self, previous: float, station_count: int) -> List[int]:
        """
        Get the stations reached by the move from previous to the current
        position, in travel order.

        A station counts when the move ends on or passes over it. Leaving a
        station the train was sitting on does not count, so each pass
        triggers exactly one arrival.

        Args:
            previous: Position before the move
            station_count: Number of stations on the line

        Returns:
            Indices of the stations arrived at
        """
        if station_count < 2 or previous == self.position:
            return []

        segments = station_count - 1
        if self.position > previous:
            return [k for k in range(station_count)
                    if previous < k / segments <= self.position]

        return [k for k in reversed(range(station_count))
                if self.position <= k / segments < previous]

    def current_segment(self, station_count: int) -> int:
        """Index of the segment the train is on, never past the last one."""
        segments = station_count - 1
        segment_length = 1.0 / segments
        return min(int(math.floor(self.position / segment_length)), segments - 1)

    def unload_passengers(self, station_type: StationType) -> int:
        """
        Deliver every passenger whose destination matches the station type.

        Returns:
            Number of passengers delivered
        """
        remaining = [p for p in self.passengers if p != station_type]
        delivered = len(self.passengers) - len(remaining)
        self.passengers = remaining

        self.delivered_passengers += delivered
        self.total_delivered += delivered

        if delivered:
            logger.debug(f"Train {self.train_id} delivered {delivered} {station_type.value} passengers")

        return delivered

    def load_passengers(self, station: Station) -> int:
        """
        Board waiting passengers up to the train's spare capacity.

        Boarding passengers are tagged with the station's own type and get
        off at the next station of that type.

        Returns:
            Number of passengers boarded
        """
        boarded = station.take_passengers(self.capacity - len(self.passengers))
        self.passengers.extend([station.station_type] * boarded)

        if boarded:
            logger.debug(f"Train {self.train_id} loaded {boarded} passengers at station {station.station_id}")

        return boarded

    def exchange(self, station: Station) -> int:
        """
        Deliver then board passengers at a station.

        Returns:
            Number of passengers delivered
        """
        delivered = self.unload_passengers(station.station_type)
        self.load_passengers(station)
        return delivered

    def update(self, stations: List[Station], step: float) -> int:
        """
        Advance the train one tick and exchange passengers at every station
        it arrives at.

        Args:
            stations: Ordered stations of the train's line
            step: Distance to travel this tick, in normalized line units

        Returns:
            Number of passengers delivered this tick
        """
        previous = self.advance(step)

        delivered = 0
        for index in self.arrived_station_indices(previous, len(stations)):
            delivered += self.exchange(stations[index])

        return delivered

    def start_delivery_effect(self, expires_at: float) -> None:
        self.show_delivery_effect = True
        self.effect_expires_at = expires_at

    def clear_delivery_effect(self, now: float) -> bool:
        """
        Clear the delivery effect if its expiry has passed.

        A delivery made after the clear was scheduled pushes the expiry
        back, in which case the effect stays on.

        Returns:
            True if the effect was cleared
        """
        if self.effect_expires_at is None or now < self.effect_expires_at:
            return False

        self.show_delivery_effect = False
        self.effect_expires_at = None
        return True

    def collect_delivered(self) -> int:
        """Return and reset the per-day delivered counter."""
        delivered = self.delivered_passengers
        self.delivered_passengers = 0
        return delivered

    def resolve_position(self, stations: List[Station], waypoints: List[Point]) -> Optional[Tuple[Point, float]]:
        """
        Resolve the train's progress to a map position and heading.

        Args:
            stations: Ordered stations of the train's line
            waypoints: Elbow waypoints of the line, one per segment

        Returns:
            (position, heading) or None if the line has no segment
        """
        if len(stations) < 2 or len(waypoints) < len(stations) - 1:
            return None

        segments = len(stations) - 1
        segment = self.current_segment(len(stations))
        local_t = min(1.0, max(0.0, self.position * segments - segment))

        return resolve_on_segment(
            stations[segment].position,
            waypoints[segment],
            stations[segment + 1].position,
            local_t
        )

    def get_utilization(self) -> float:
        """Get current passenger utilization ratio."""
        return len(self.passengers) / self.capacity if self.capacity > 0 else 0.0

    def get_detailed_state(self) -> Dict[str, Any]:
        """
        Get detailed state information for visualization and debugging.

        Returns:
            Dictionary containing train state
        """
        return {
            'train_id': self.train_id,
            'line_id': self.line_id,
            'position': self.position,
            'direction': self.direction.value,
            'capacity': self.capacity,
            'passengers': [p.value for p in self.passengers],
            'utilization': self.get_utilization(),
            'delivered_today': self.delivered_passengers,
            'total_delivered': self.total_delivered,
            'show_delivery_effect': self.show_delivery_effect,
        }

    def __repr__(self) -> str:
        """String representation of the train."""
        return (f"Train(id={self.train_id}, line={self.line_id}, "
                f"pos={self.position:.3f}, passengers={len(self.passengers)}/{self.capacity})")
