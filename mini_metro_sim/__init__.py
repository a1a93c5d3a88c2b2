"""
Mini Metro Simulation

A headless simulation of a simplified Mini Metro network: typed stations
accumulate passengers, player gestures build lines, and trains shuttle along
them delivering passengers by shape. Renderers read immutable snapshots.
"""

__version__ = "1.0.0"
__author__ = "Mini Metro Sim Team"

# Core imports for easy access
from mini_metro_sim.src.game.mini_metro_game import MiniMetroGame, SimulationState
from mini_metro_sim.src.game.events import StationActivated, StationDraggedOver, ResetRequested
from mini_metro_sim.src.utils.config import Config, GameConfig, load_config

__all__ = [
    "MiniMetroGame",
    "SimulationState",
    "StationActivated",
    "StationDraggedOver",
    "ResetRequested",
    "Config",
    "GameConfig",
    "load_config",
]
