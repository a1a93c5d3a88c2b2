"""
World clock module for Mini Metro simulation.

Drives everything that happens on a timer: the day countdown with its
scoring and station spawning, periodic passenger spawning, and expiry of
train delivery effects. Timers are scheduled events with a due time on the
simulation clock, applied inside the tick in due order.
"""

from typing import Any, List, Optional, TYPE_CHECKING
from dataclasses import dataclass, field
from enum import Enum
import heapq
import itertools
import logging
import math

import numpy as np

from .station import Station, StationType

if TYPE_CHECKING:
    from .mini_metro_game import SimulationState
    from ..utils.config import GameConfig

logger = logging.getLogger(__name__)


class ScheduledEventKind(Enum):
    """Kinds of deferred state changes."""
    SPAWN_PASSENGER = "spawn_passenger"
    CLEAR_DELIVERY_EFFECT = "clear_delivery_effect"


@dataclass(order=True)
class ScheduledEvent:
    """A state change due at a point on the simulation clock."""
    due_ms: float
    sequence: int
    kind: ScheduledEventKind = field(compare=False)
    payload: Any = field(default=None, compare=False)


class EventScheduler:
    """Priority queue of scheduled events, ordered by due time then insertion."""

    def __init__(self):
        self._queue: List[ScheduledEvent] = []
        self._counter = itertools.count()

    def schedule(self, due_ms: float, kind: ScheduledEventKind, payload: Any = None) -> ScheduledEvent:
        """
        Schedule an event.

        Args:
            due_ms: Simulation time at which the event applies
            kind: What the event does
            payload: Event target (e.g. the train whose effect expires)

        Returns:
            The scheduled event
        """
        event = ScheduledEvent(due_ms, next(self._counter), kind, payload)
        heapq.heappush(self._queue, event)
        return event

    def pop_due(self, now_ms: float) -> Optional[ScheduledEvent]:
        """Remove and return the earliest event due at or before now_ms."""
        if self._queue and self._queue[0].due_ms <= now_ms:
            return heapq.heappop(self._queue)
        return None

    def peek(self) -> Optional[ScheduledEvent]:
        return self._queue[0] if self._queue else None

    def clear(self) -> None:
        self._queue.clear()

    def __len__(self) -> int:
        return len(self._queue)


class WorldClock:
    """
    Advances simulation time and applies timer-driven changes.

    Features:
    - Day countdown; score collection at every rollover
    - New station every N days, placed on a random ring around the map center
    - Passenger spawning at a fixed interval, decoupled from the day
    - Delivery effect expiry
    """

    def __init__(self, config: 'GameConfig', rng: np.random.Generator):
        """
        Initialize the world clock.

        Args:
            config: Game configuration
            rng: Random source for spawning

        Raises:
            ValueError: If the configuration breaks a timing or spawning rule
        """
        issues = config.validate()
        if issues:
            raise ValueError(f"Invalid game configuration: {'; '.join(issues)}")

        self.config = config
        self.rng = rng

    def start(self, state: 'SimulationState') -> None:
        """Schedule the recurring timers of a fresh game."""
        state.scheduler.clear()
        state.scheduler.schedule(
            state.elapsed_ms + self.config.passenger_spawn_interval_ms,
            ScheduledEventKind.SPAWN_PASSENGER
        )

    def advance(self, state: 'SimulationState', dt_ms: float) -> bool:
        """
        Advance the clock by dt_ms, applying due events and the day countdown.

        Args:
            state: Simulation state to mutate
            dt_ms: Elapsed time since the previous tick, in milliseconds

        Returns:
            True if a new day started this tick
        """
        state.elapsed_ms += dt_ms

        event = state.scheduler.pop_due(state.elapsed_ms)
        while event is not None:
            self._apply(state, event)
            event = state.scheduler.pop_due(state.elapsed_ms)

        state.game.time_until_next_day -= dt_ms
        if state.game.time_until_next_day <= 0:
            self._roll_over_day(state)
            return True

        return False

    def schedule_effect_clear(self, state: 'SimulationState', train: Any) -> None:
        expires_at = state.elapsed_ms + self.config.delivery_effect_ms
        train.start_delivery_effect(expires_at)
        state.scheduler.schedule(expires_at, ScheduledEventKind.CLEAR_DELIVERY_EFFECT, train)

    def _apply(self, state: 'SimulationState', event: ScheduledEvent) -> None:
        if event.kind == ScheduledEventKind.SPAWN_PASSENGER:
            self.spawn_passenger(state)
            state.scheduler.schedule(
                event.due_ms + self.config.passenger_spawn_interval_ms,
                ScheduledEventKind.SPAWN_PASSENGER
            )
        elif event.kind == ScheduledEventKind.CLEAR_DELIVERY_EFFECT:
            event.payload.clear_delivery_effect(state.elapsed_ms)

    def _roll_over_day(self, state: 'SimulationState') -> None:
        """Start the next day: reset the timer, maybe spawn a station, bank deliveries."""
        game = state.game
        game.day += 1
        game.time_until_next_day = self.config.day_duration_ms

        if game.day % self.config.station_spawn_every_days == 0:
            self.spawn_station(state)

        delivered = sum(train.collect_delivered() for train in state.trains)
        game.score += delivered

        logger.info(f"Day {game.day} started: {delivered} passengers delivered yesterday, score {game.score}")

    def spawn_passenger(self, state: 'SimulationState') -> Optional[Station]:
        """
        Add one passenger to a random station, if it has room.

        Returns:
            The chosen station, or None if there are no stations
        """
        if not state.stations:
            return None

        station = state.stations[int(self.rng.integers(len(state.stations)))]
        station.spawn_passenger(self.config.max_station_passengers)
        return station

    def spawn_station(self, state: 'SimulationState') -> Station:
        """
        Spawn a station of random type at a random angle and distance
        from the map center.

        Returns:
            The new station
        """
        angle = float(self.rng.uniform(0.0, 2 * math.pi))
        radius = self.config.spawn_radius_min + float(self.rng.uniform(0.0, self.config.spawn_radius_range))
        center_x = self.config.map_width / 2
        center_y = self.config.map_height / 2

        station_types = list(StationType)
        station_type = station_types[int(self.rng.integers(len(station_types)))]

        station = state.add_station(
            (center_x + math.cos(angle) * radius, center_y + math.sin(angle) * radius),
            station_type
        )

        logger.info(f"Spawned new {station_type.value} station {station.station_id} at "
                    f"({station.x:.1f}, {station.y:.1f})")
        return station
