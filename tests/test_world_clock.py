"""Tests for the event scheduler, day rollover and spawning."""

import math

import pytest

from mini_metro_sim.src.game.mini_metro_game import GameState, SimulationState
from mini_metro_sim.src.game.station import StationType
from mini_metro_sim.src.game.train import Train
from mini_metro_sim.src.game.world_clock import (
    EventScheduler,
    ScheduledEventKind,
    WorldClock,
)
from mini_metro_sim.src.utils.config import GameConfig


@pytest.fixture
def clock(config, rng):
    return WorldClock(config, rng)


@pytest.fixture
def state(config):
    state = SimulationState(game=GameState(time_until_next_day=config.day_duration_ms))
    for i in range(3):
        state.add_station((400.0 + i * 50, 300.0), StationType.CIRCLE)
    return state


def test_scheduler_pops_in_due_order():
    scheduler = EventScheduler()
    scheduler.schedule(30.0, ScheduledEventKind.SPAWN_PASSENGER, "late")
    scheduler.schedule(10.0, ScheduledEventKind.SPAWN_PASSENGER, "early")

    assert scheduler.pop_due(5.0) is None
    assert scheduler.pop_due(40.0).payload == "early"
    assert scheduler.pop_due(40.0).payload == "late"
    assert scheduler.pop_due(40.0) is None


def test_scheduler_keeps_insertion_order_for_equal_due_times():
    scheduler = EventScheduler()
    scheduler.schedule(10.0, ScheduledEventKind.CLEAR_DELIVERY_EFFECT, "first")
    scheduler.schedule(10.0, ScheduledEventKind.CLEAR_DELIVERY_EFFECT, "second")

    assert [scheduler.pop_due(10.0).payload, scheduler.pop_due(10.0).payload] == ["first", "second"]


def test_scheduler_clear():
    scheduler = EventScheduler()
    scheduler.schedule(1.0, ScheduledEventKind.SPAWN_PASSENGER)
    assert len(scheduler) == 1

    scheduler.clear()
    assert len(scheduler) == 0
    assert scheduler.peek() is None


def test_advance_counts_down_day(clock, state):
    assert not clock.advance(state, 400.0)
    assert state.game.time_until_next_day == pytest.approx(600.0)
    assert state.game.day == 1
    assert state.elapsed_ms == pytest.approx(400.0)


def test_day_rollover_resets_timer(clock, state):
    assert clock.advance(state, 1000.0)
    assert state.game.day == 2
    assert state.game.time_until_next_day == 1000.0


def test_rollover_into_multiple_of_five_spawns_station(clock, state):
    state.game.day = 4
    state.game.time_until_next_day = 1.0

    clock.advance(state, 1.0)

    assert state.game.day == 5
    assert len(state.stations) == 4


def test_other_rollovers_do_not_spawn(clock, state):
    state.game.day = 5
    state.game.time_until_next_day = 1.0

    clock.advance(state, 1.0)

    assert state.game.day == 6
    assert len(state.stations) == 3


def test_rollover_banks_deliveries_into_score(clock, state):
    trains = [Train(0, 0), Train(1, 1)]
    trains[0].delivered_passengers = 2
    trains[1].delivered_passengers = 3
    state.trains.extend(trains)
    state.game.score = 10

    clock.advance(state, 1000.0)

    assert state.game.score == 15
    assert all(t.delivered_passengers == 0 for t in trains)


def test_score_not_updated_before_rollover(clock, state):
    train = Train(0, 0)
    train.delivered_passengers = 2
    state.trains.append(train)

    clock.advance(state, 500.0)

    assert state.game.score == 0
    assert train.delivered_passengers == 2


def test_passenger_spawns_every_interval(clock, state):
    clock.start(state)

    clock.advance(state, 1999.0)
    assert sum(s.passengers for s in state.stations) == 0

    clock.advance(state, 1.0)
    assert sum(s.passengers for s in state.stations) == 1

    clock.advance(state, 2000.0)
    assert sum(s.passengers for s in state.stations) == 2


def test_long_tick_applies_every_due_spawn(clock, state):
    clock.start(state)
    clock.advance(state, 6000.0)
    assert sum(s.passengers for s in state.stations) == 3


def test_spawn_passenger_respects_threshold(clock, state, config):
    for station in state.stations:
        station.passengers = config.max_station_passengers

    clock.spawn_passenger(state)

    assert all(s.passengers == config.max_station_passengers for s in state.stations)


def test_spawn_passenger_without_stations(clock, config):
    assert clock.spawn_passenger(SimulationState()) is None


def test_spawned_station_lies_on_outer_ring(clock, state, config):
    center = (config.map_width / 2, config.map_height / 2)

    for _ in range(20):
        station = clock.spawn_station(state)
        radius = math.hypot(station.x - center[0], station.y - center[1])
        assert config.spawn_radius_min - 1e-9 <= radius < config.spawn_radius_min + config.spawn_radius_range + 1e-9
        assert station.passengers == 0

    assert len(state.stations) == 23
    assert len({s.station_id for s in state.stations}) == 23


def test_delivery_effect_clears_through_scheduler(clock, state, config):
    train = Train(0, 0)
    state.trains.append(train)

    clock.schedule_effect_clear(state, train)
    assert train.show_delivery_effect

    clock.advance(state, config.delivery_effect_ms - 1)
    assert train.show_delivery_effect

    clock.advance(state, 1)
    assert not train.show_delivery_effect


def test_clock_rejects_zero_station_spawn_period(rng):
    with pytest.raises(ValueError, match="station_spawn_every_days"):
        WorldClock(GameConfig(station_spawn_every_days=0), rng)


def test_clock_rejects_zero_passenger_spawn_interval(rng):
    with pytest.raises(ValueError, match="passenger_spawn_interval_ms"):
        WorldClock(GameConfig(passenger_spawn_interval_ms=0.0), rng)


def test_clock_rejects_negative_passenger_spawn_interval(rng):
    with pytest.raises(ValueError, match="passenger_spawn_interval_ms"):
        WorldClock(GameConfig(passenger_spawn_interval_ms=-5.0), rng)
