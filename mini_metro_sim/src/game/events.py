"""Input events fed to the simulation tick."""

from dataclasses import dataclass
from typing import Tuple, Union


@dataclass(frozen=True)
class StationActivated:
    """A press at a map point: starts a new line at the station under it."""
    point: Tuple[float, float]


@dataclass(frozen=True)
class StationDraggedOver:
    """A drag over a map point: extends the active line with the station under it."""
    point: Tuple[float, float]


@dataclass(frozen=True)
class ResetRequested:
    """Restart request, honored only once the game is over."""


InputEvent = Union[StationActivated, StationDraggedOver, ResetRequested]
