"""
Main Mini Metro simulation engine.

Holds the complete simulation state and the single per-tick update that
mutates it: input events, world clock, overflow and game over detection,
and train motion, in that order.
"""

from typing import Dict, List, Tuple, Optional, Any, Iterable
from enum import Enum
import logging
import math
from dataclasses import dataclass, field

import numpy as np

from .station import Station, StationType
from .train import Train
from .line import Line
from .events import InputEvent, StationActivated, StationDraggedOver, ResetRequested
from .world_clock import EventScheduler, WorldClock
from .network_builder import NetworkBuilder
from .snapshot import SimulationSnapshot, take_snapshot
from ..utils.config import GameConfig
from ..utils.helpers import create_rng

logger = logging.getLogger(__name__)

# Default frame time when the caller does not pass one (60 FPS)
DEFAULT_FRAME_MS = 1000.0 / 60.0


class GamePhase(Enum):
    """Current phase of the game."""
    PLAYING = "playing"
    GAME_OVER = "game_over"


@dataclass
class GameState:
    """
    Score, day and lifecycle state of one game.

    The day timer starts from the default day length; reset() sets it from
    the active configuration.
    """
    score: int = 0
    day: int = 1
    time_until_next_day: float = GameConfig.day_duration_ms
    station_overflow_count: int = 0
    phase: GamePhase = GamePhase.PLAYING

    @property
    def game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER


@dataclass
class SimulationState:
    """
    All mutable simulation state.

    Lines and trains are append-only and created in pairs, so a train's
    line_id is the index of its line. Input events queued between ticks
    wait in pending_events until the next tick drains them.
    """
    stations: List[Station] = field(default_factory=list)
    lines: List[Line] = field(default_factory=list)
    trains: List[Train] = field(default_factory=list)
    game: GameState = field(default_factory=GameState)
    scheduler: EventScheduler = field(default_factory=EventScheduler)
    elapsed_ms: float = 0.0
    next_station_id: int = 0
    pending_events: List[InputEvent] = field(default_factory=list)

    def add_station(self, position: Tuple[float, float], station_type: StationType) -> Station:
        station = Station(self.next_station_id, position, station_type)
        self.next_station_id += 1
        self.stations.append(station)
        return station

    @property
    def active_line(self) -> Optional[Line]:
        """The most recently created line, the one drag gestures extend."""
        return self.lines[-1] if self.lines else None

    def line_for(self, train: Train) -> Optional[Line]:
        """Get a train's line, or None if the index is stale."""
        if 0 <= train.line_id < len(self.lines):
            return self.lines[train.line_id]
        return None

    def count_overflowing(self, max_passengers: int) -> int:
        return sum(1 for s in self.stations if s.is_overflowing(max_passengers))


class MiniMetroGame:
    """
    Mini Metro simulation with a single-writer tick.

    Features:
    - Initial ring of stations, more spawned every few days
    - Timer-driven passenger spawning and daily scoring
    - Lines built from station gestures, one shuttling train per line
    - Game over once enough stations overflow; reset on request
    - Immutable snapshots for renderers
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rng: Optional[np.random.Generator] = None
    ):
        """
        Initialize the simulation.

        Args:
            config: Game configuration (defaults if None)
            rng: Random source; created from config.seed if None
        """
        self.config = config or GameConfig()
        self.rng = rng if rng is not None else create_rng(self.config.seed)

        self.clock = WorldClock(self.config, self.rng)
        self.builder = NetworkBuilder(self.config)
        self.state = SimulationState()

        self.reset()

        logger.info(f"Initialized Mini Metro simulation with {len(self.state.stations)} stations")

    def _initialize_map(self) -> None:
        """Place the initial stations evenly on a ring around the map center."""
        center_x = self.config.map_width / 2
        center_y = self.config.map_height / 2
        radius = self.config.initial_ring_radius
        count = self.config.initial_station_count
        station_types = list(StationType)

        for i in range(count):
            angle = (i / count) * 2 * math.pi
            self.state.add_station(
                (center_x + math.cos(angle) * radius, center_y + math.sin(angle) * radius),
                station_types[i % len(station_types)]
            )

    def reset(self) -> None:
        """Reset the simulation to a fresh game."""
        self.state = SimulationState(
            game=GameState(time_until_next_day=self.config.day_duration_ms)
        )
        self._initialize_map()
        self.clock.start(self.state)
        logger.info("Game reset")

    # ============ TICK ============

    def tick(self, events: Iterable[InputEvent] = (), dt_ms: Optional[float] = None) -> None:
        """
        Advance the simulation by one frame.

        Args:
            events: Input events received since the previous tick, in order
            dt_ms: Elapsed time since the previous tick, in milliseconds
        """
        if dt_ms is None:
            dt_ms = DEFAULT_FRAME_MS

        events = self.state.pending_events + list(events)
        self.state.pending_events = []

        if self.state.game.game_over:
            if any(isinstance(event, ResetRequested) for event in events):
                self.reset()
            return

        for event in events:
            self._apply_input(event)

        self.clock.advance(self.state, dt_ms)

        self._check_game_over_conditions()
        if self.state.game.game_over:
            return

        self._update_trains(dt_ms)

        # Boarding only lowers counts, so this cannot cross the threshold
        self.state.game.station_overflow_count = self.state.count_overflowing(
            self.config.max_station_passengers
        )

    def _apply_input(self, event: InputEvent) -> None:
        if isinstance(event, StationActivated):
            self.builder.station_activated(self.state, event.point)
        elif isinstance(event, StationDraggedOver):
            self.builder.station_dragged_over(self.state, event.point)
        elif isinstance(event, ResetRequested):
            logger.debug("Reset ignored: game is not over")

    def _check_game_over_conditions(self) -> None:
        game = self.state.game
        game.station_overflow_count = self.state.count_overflowing(self.config.max_station_passengers)

        if game.station_overflow_count >= self.config.overflow_game_over_count:
            self._trigger_game_over(f"{game.station_overflow_count} stations overflowing")

    def _trigger_game_over(self, reason: str) -> None:
        """Trigger game over."""
        self.state.game.phase = GamePhase.GAME_OVER
        logger.info(f"Game Over: {reason}")
        logger.info(f"Final stats - Day: {self.state.game.day}, Score: {self.state.game.score}, "
                    f"Duration: {self.state.elapsed_ms / 1000.0:.1f}s")

    def train_step(self, dt_ms: float) -> float:
        """Distance a train travels in one tick, in normalized line units."""
        if self.config.train_speed_per_second is not None:
            return self.config.train_speed_per_second * dt_ms / 1000.0
        return self.config.train_speed

    def _update_trains(self, dt_ms: float) -> None:
        """Move every train with a usable line and exchange passengers."""
        step = self.train_step(dt_ms)

        for train in self.state.trains:
            line = self.state.line_for(train)
            if line is None or not line.is_active:
                logger.debug(f"Skipping train {train.train_id}: line {train.line_id} has no segment")
                continue

            delivered = train.update(line.stations, step)
            if delivered:
                self.clock.schedule_effect_clear(self.state, train)

    # ============ PLAYER ACTIONS ============

    # Queued events are applied at the start of the next tick

    def activate_station(self, point: Tuple[float, float]) -> None:
        """Start a new line at the station under the point."""
        self.state.pending_events.append(StationActivated(point))

    def drag_over_station(self, point: Tuple[float, float]) -> None:
        """Extend the active line with the station under the point."""
        self.state.pending_events.append(StationDraggedOver(point))

    def request_reset(self) -> None:
        """Restart the game if it is over."""
        self.state.pending_events.append(ResetRequested())

    # ============ STATE ACCESS ============

    def is_game_over(self) -> bool:
        """Check if the game is over."""
        return self.state.game.game_over

    def snapshot(self) -> SimulationSnapshot:
        """Get an immutable copy of the current state for rendering."""
        return take_snapshot(self.state)

    def get_detailed_state(self) -> Dict[str, Any]:
        """
        Get detailed simulation state for logging and analysis.

        Returns:
            Dictionary containing the full simulation state
        """
        game = self.state.game
        return {
            'game_state': game.phase.value,
            'elapsed_ms': self.state.elapsed_ms,
            'day': game.day,
            'score': game.score,
            'time_until_next_day': game.time_until_next_day,
            'station_overflow_count': game.station_overflow_count,
            'stations': [s.get_detailed_state() for s in self.state.stations],
            'lines': [line.get_detailed_state() for line in self.state.lines],
            'trains': [t.get_detailed_state() for t in self.state.trains],
            'statistics': {
                'total_delivered': sum(t.total_delivered for t in self.state.trains),
                'waiting_passengers': sum(s.passengers for s in self.state.stations),
                'riding_passengers': sum(len(t.passengers) for t in self.state.trains),
            },
        }
