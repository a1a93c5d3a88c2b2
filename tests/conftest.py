"""Shared fixtures for the Mini Metro simulation tests."""

import numpy as np
import pytest

from mini_metro_sim.src.game.mini_metro_game import MiniMetroGame
from mini_metro_sim.src.game.station import Station, StationType
from mini_metro_sim.src.utils.config import GameConfig


@pytest.fixture
def config():
    return GameConfig(seed=1234)


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def game(config, rng):
    return MiniMetroGame(config, rng)


@pytest.fixture
def two_stations():
    """A circle station at the origin and a square one 100 units right."""
    return [
        Station(0, (0.0, 0.0), StationType.CIRCLE),
        Station(1, (100.0, 0.0), StationType.SQUARE),
    ]


@pytest.fixture
def three_stations():
    return [
        Station(0, (0.0, 0.0), StationType.CIRCLE),
        Station(1, (100.0, 0.0), StationType.SQUARE),
        Station(2, (100.0, 100.0), StationType.TRIANGLE),
    ]
