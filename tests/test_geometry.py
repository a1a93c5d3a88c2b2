"""Tests for elbow waypoints and segment position resolution."""

import math

import pytest

from mini_metro_sim.src.game.geometry import (
    Point,
    compute_waypoints,
    elbow_waypoint,
    resolve_on_segment,
)


def test_elbow_horizontal_first_when_dx_dominates():
    assert elbow_waypoint((0.0, 0.0), (100.0, 10.0)) == Point(80.0, 0.0)


def test_elbow_vertical_first_when_dy_dominates():
    assert elbow_waypoint((0.0, 0.0), (10.0, 100.0)) == Point(0.0, 80.0)


def test_elbow_tie_goes_vertical():
    assert elbow_waypoint((0.0, 0.0), (10.0, 10.0)) == Point(0.0, pytest.approx(8.0))


def test_elbow_handles_negative_direction():
    """Test elbow when travelling left."""
    assert elbow_waypoint((100.0, 50.0), (0.0, 40.0)) == Point(pytest.approx(20.0), 50.0)


def test_compute_waypoints_one_per_pair():
    points = [(0.0, 0.0), (100.0, 0.0), (100.0, 100.0)]
    waypoints = compute_waypoints(points)

    assert len(waypoints) == 2
    assert waypoints[0] == Point(80.0, 0.0)
    assert waypoints[1] == Point(100.0, 80.0)


def test_compute_waypoints_empty_for_single_point():
    assert compute_waypoints([(5.0, 5.0)]) == []


def test_resolve_first_half_moves_toward_elbow():
    point, heading = resolve_on_segment((0, 0), (80, 0), (100, 10), 0.25)

    assert point == Point(pytest.approx(40.0), pytest.approx(0.0))
    assert heading == pytest.approx(0.0)


def test_resolve_midpoint_is_elbow():
    point, _ = resolve_on_segment((0, 0), (80, 0), (100, 10), 0.5)
    assert point == Point(pytest.approx(80.0), pytest.approx(0.0))


def test_resolve_second_half_moves_toward_end():
    point, heading = resolve_on_segment((0, 0), (80, 0), (100, 10), 0.75)

    assert point == Point(pytest.approx(90.0), pytest.approx(5.0))
    assert heading == pytest.approx(math.atan2(10, 20))


def test_resolve_endpoints():
    start, _ = resolve_on_segment((0, 0), (80, 0), (100, 10), 0.0)
    end, _ = resolve_on_segment((0, 0), (80, 0), (100, 10), 1.0)

    assert start == Point(0.0, 0.0)
    assert end == Point(pytest.approx(100.0), pytest.approx(10.0))


def test_resolve_is_repeatable():
    """Same inputs always give the same output."""
    args = ((10, 20), (10, 90), (30, 110), 0.6)
    assert resolve_on_segment(*args) == resolve_on_segment(*args)
