"""Game mechanics module for Mini Metro simulation."""

from .mini_metro_game import MiniMetroGame, SimulationState, GameState, GamePhase
from .station import Station, StationType
from .train import Train, TrainDirection
from .line import Line, LineColor
from .events import StationActivated, StationDraggedOver, ResetRequested
from .snapshot import SimulationSnapshot

__all__ = [
    "MiniMetroGame",
    "SimulationState",
    "GameState",
    "GamePhase",
    "Station",
    "StationType",
    "Train",
    "TrainDirection",
    "Line",
    "LineColor",
    "StationActivated",
    "StationDraggedOver",
    "ResetRequested",
    "SimulationSnapshot",
]
