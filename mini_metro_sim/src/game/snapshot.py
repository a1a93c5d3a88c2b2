"""
Read-only snapshot of the simulation for renderers.

A snapshot is taken at a tick boundary and shares no mutable state with
the simulation.
"""

from dataclasses import dataclass
from typing import Optional, Tuple, TYPE_CHECKING

from .geometry import Point

if TYPE_CHECKING:
    from .mini_metro_game import SimulationState


@dataclass(frozen=True)
class StationView:
    station_id: int
    position: Tuple[float, float]
    station_type: str
    passengers: int


@dataclass(frozen=True)
class LineView:
    line_id: int
    color: str
    station_ids: Tuple[int, ...]
    waypoints: Tuple[Point, ...]


@dataclass(frozen=True)
class TrainView:
    train_id: int
    line_id: int
    progress: float
    direction: int
    point: Optional[Point]
    heading: Optional[float]
    passengers: Tuple[str, ...]
    capacity: int
    show_delivery_effect: bool


@dataclass(frozen=True)
class GameStateView:
    score: int
    day: int
    game_over: bool
    station_overflow_count: int
    time_until_next_day: float


@dataclass(frozen=True)
class SimulationSnapshot:
    """Everything a renderer draws in one frame."""
    stations: Tuple[StationView, ...]
    lines: Tuple[LineView, ...]
    trains: Tuple[TrainView, ...]
    game: GameStateView
    elapsed_ms: float


def take_snapshot(state: 'SimulationState') -> SimulationSnapshot:
    """
    Copy the simulation state into immutable view records.

    Trains whose line has no segment get no resolved point.

    Args:
        state: Simulation state to copy

    Returns:
        Snapshot of stations, lines, trains and game state
    """
    stations = tuple(
        StationView(s.station_id, s.position, s.station_type.value, s.passengers)
        for s in state.stations
    )

    lines = tuple(
        LineView(
            line.line_id,
            line.color,
            tuple(s.station_id for s in line.stations),
            tuple(line.waypoints)
        )
        for line in state.lines
    )

    trains = []
    for train in state.trains:
        line = state.line_for(train)
        resolved = train.resolve_position(line.stations, line.waypoints) if line is not None else None
        point, heading = resolved if resolved is not None else (None, None)
        trains.append(TrainView(
            train_id=train.train_id,
            line_id=train.line_id,
            progress=train.position,
            direction=train.direction.value,
            point=point,
            heading=heading,
            passengers=tuple(p.value for p in train.passengers),
            capacity=train.capacity,
            show_delivery_effect=train.show_delivery_effect
        ))

    game = state.game
    return SimulationSnapshot(
        stations=stations,
        lines=lines,
        trains=tuple(trains),
        game=GameStateView(
            score=game.score,
            day=game.day,
            game_over=game.game_over,
            station_overflow_count=game.station_overflow_count,
            time_until_next_day=game.time_until_next_day
        ),
        elapsed_ms=state.elapsed_ms
    )
