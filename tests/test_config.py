"""Tests for YAML configuration loading and validation."""

import pytest

from mini_metro_sim.src.utils.config import (
    Config,
    GameConfig,
    create_default_configs,
    load_config,
)


def test_defaults_match_game_rules():
    game = GameConfig()

    assert game.train_speed == 0.005
    assert game.train_capacity == 4
    assert game.max_station_passengers == 8
    assert game.overflow_game_over_count == 3
    assert game.day_duration_ms == 1000.0
    assert game.passenger_spawn_interval_ms == 2000.0
    assert game.delivery_effect_ms == 500.0
    assert game.pick_radius == 20.0
    assert game.initial_station_count == 5


def test_from_dict_fills_missing_sections():
    config = Config.from_dict({'game': {'train_capacity': 6}, 'experiment_name': 'big'})

    assert config.game.train_capacity == 6
    assert config.game.train_speed == 0.005
    assert config.simulation.max_ticks > 0
    assert config.experiment_name == 'big'


def test_update_merges_nested_values():
    config = Config().update({'game': {'seed': 9}, 'logging': {'log_level': 'DEBUG'}})

    assert config.game.seed == 9
    assert config.game.map_width == 800.0
    assert config.logging.log_level == 'DEBUG'


def test_yaml_file_is_read_back(tmp_path):
    path = tmp_path / "custom.yaml"
    original = Config(experiment_name="custom")
    original.game.train_speed_per_second = 0.3
    original.to_yaml(path)

    loaded = Config.from_yaml(path)

    assert loaded == original


def test_from_yaml_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        Config.from_yaml(tmp_path / "missing.yaml")


def test_validate_reports_bad_values():
    config = Config()
    config.game.train_speed = 0.0
    config.game.train_capacity = 0
    config.logging.log_level = "LOUD"

    issues = config.validate()

    assert "train_speed must be between 0 and 1" in issues
    assert "train_capacity must be positive" in issues
    assert any("log_level" in issue for issue in issues)


def test_default_config_is_valid():
    assert Config().validate() == []


def test_load_config_falls_back_to_defaults(tmp_path):
    config = load_config("nothing_here", tmp_path)
    assert config == Config()


def test_load_config_applies_overrides(tmp_path):
    config = load_config("nothing_here", tmp_path, {'simulation': {'max_ticks': 10}})
    assert config.simulation.max_ticks == 10


def test_packaged_default_config_matches_defaults():
    assert load_config("default") == Config()


def test_packaged_realtime_config():
    config = load_config("realtime")

    assert config.experiment_name == "realtime"
    assert config.game.train_speed_per_second == 0.3


def test_create_default_configs(tmp_path):
    create_default_configs(tmp_path)

    assert load_config("default", tmp_path) == Config()
    assert load_config("realtime", tmp_path) == load_config("realtime")


def test_game_config_validate_reports_spawn_rules():
    game = GameConfig(passenger_spawn_interval_ms=0.0, station_spawn_every_days=0)

    issues = game.validate()

    assert "passenger_spawn_interval_ms must be positive" in issues
    assert "station_spawn_every_days must be positive" in issues
    assert GameConfig().validate() == []
