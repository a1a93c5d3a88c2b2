"""
Configuration management for Mini Metro simulation.

Provides centralized configuration loading, validation, and management
using YAML files, with overrides from the command line.
"""

import yaml
from typing import Dict, Any, Optional, Union, List
from dataclasses import dataclass, field, asdict
from pathlib import Path
import logging

logger = logging.getLogger(__name__)


@dataclass
class GameConfig:
    """Configuration for simulation rules."""
    # Map
    map_width: float = 800.0
    map_height: float = 600.0
    initial_station_count: int = 5
    initial_ring_radius: float = 150.0
    spawn_radius_min: float = 200.0
    spawn_radius_range: float = 100.0
    seed: Optional[int] = None

    # Timing (milliseconds)
    day_duration_ms: float = 1000.0
    passenger_spawn_interval_ms: float = 2000.0
    delivery_effect_ms: float = 500.0
    station_spawn_every_days: int = 5

    # Overflow
    max_station_passengers: int = 8
    overflow_game_over_count: int = 3

    # Trains; train_speed_per_second replaces the per-tick speed when set
    train_speed: float = 0.005
    train_speed_per_second: Optional[float] = None
    train_capacity: int = 4

    # Input
    pick_radius: float = 20.0

    def validate(self) -> List[str]:
        """
        Validate the simulation rules and return list of issues.

        Returns:
            List of validation error messages
        """
        issues = []

        if self.map_width <= 0 or self.map_height <= 0:
            issues.append("map dimensions must be positive")

        if self.initial_station_count < 0:
            issues.append("initial_station_count must not be negative")

        for name in ("day_duration_ms", "passenger_spawn_interval_ms"):
            if getattr(self, name) <= 0:
                issues.append(f"{name} must be positive")

        if self.station_spawn_every_days <= 0:
            issues.append("station_spawn_every_days must be positive")

        if self.max_station_passengers <= 0:
            issues.append("max_station_passengers must be positive")

        if self.overflow_game_over_count <= 0:
            issues.append("overflow_game_over_count must be positive")

        if not 0 < self.train_speed < 1:
            issues.append("train_speed must be between 0 and 1")

        if self.train_speed_per_second is not None and self.train_speed_per_second <= 0:
            issues.append("train_speed_per_second must be positive")

        if self.train_capacity <= 0:
            issues.append("train_capacity must be positive")

        return issues


@dataclass
class SimulationConfig:
    """Configuration for headless runs."""
    max_ticks: int = 36000
    frame_ms: float = 1000.0 / 60.0
    auto_build: bool = False
    stats_every_days: int = 5
    dump_state: Optional[str] = None


@dataclass
class LoggingConfig:
    """Configuration for logging."""
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_file: Optional[str] = None


@dataclass
class Config:
    """Main configuration class combining all sub-configurations."""
    game: GameConfig = field(default_factory=GameConfig)
    simulation: SimulationConfig = field(default_factory=SimulationConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Experiment metadata
    experiment_name: str = "default"
    description: str = ""
    tags: List[str] = field(default_factory=list)

    @classmethod
    def from_yaml(cls, yaml_path: Union[str, Path]) -> 'Config':
        """
        Load configuration from YAML file.

        Args:
            yaml_path: Path to YAML configuration file

        Returns:
            Config object
        """
        yaml_path = Path(yaml_path)

        if not yaml_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {yaml_path}")

        with open(yaml_path, 'r') as f:
            config_dict = yaml.safe_load(f) or {}

        return cls.from_dict(config_dict)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'Config':
        """
        Create configuration from dictionary.

        Args:
            config_dict: Configuration dictionary

        Returns:
            Config object
        """
        return cls(
            game=GameConfig(**(config_dict.get('game') or {})),
            simulation=SimulationConfig(**(config_dict.get('simulation') or {})),
            logging=LoggingConfig(**(config_dict.get('logging') or {})),
            experiment_name=config_dict.get('experiment_name', 'default'),
            description=config_dict.get('description', ''),
            tags=config_dict.get('tags', [])
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return asdict(self)

    def to_yaml(self, yaml_path: Union[str, Path]) -> None:
        """
        Save configuration to YAML file.

        Args:
            yaml_path: Path to save YAML file
        """
        yaml_path = Path(yaml_path)
        yaml_path.parent.mkdir(parents=True, exist_ok=True)

        with open(yaml_path, 'w') as f:
            yaml.safe_dump(self.to_dict(), f, default_flow_style=False, indent=2)

    def update(self, updates: Dict[str, Any]) -> 'Config':
        """
        Update configuration with new values.

        Args:
            updates: Dictionary of updates

        Returns:
            New Config object with updates applied
        """
        config_dict = self.to_dict()

        def recursive_update(base_dict: Dict, update_dict: Dict):
            for key, value in update_dict.items():
                if key in base_dict and isinstance(base_dict[key], dict) and isinstance(value, dict):
                    recursive_update(base_dict[key], value)
                else:
                    base_dict[key] = value

        recursive_update(config_dict, updates)
        return self.from_dict(config_dict)

    def validate(self) -> List[str]:
        """
        Validate configuration and return list of issues.

        Returns:
            List of validation error messages
        """
        issues = self.game.validate()

        if self.simulation.frame_ms <= 0:
            issues.append("frame_ms must be positive")

        if self.logging.log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            issues.append(f"Invalid log_level: {self.logging.log_level}")

        return issues


def load_config(
    config_name: str = "default",
    config_dir: Union[str, Path] = None,
    overrides: Dict[str, Any] = None
) -> Config:
    """
    Load configuration with optional overrides.

    Args:
        config_name: Name of the configuration (without .yaml extension)
        config_dir: Directory containing configuration files
        overrides: Dictionary of configuration overrides

    Returns:
        Config object
    """
    if config_dir is None:
        # Default to configs directory shipped with the package
        config_dir = Path(__file__).parent.parent.parent / "configs"
    else:
        config_dir = Path(config_dir)

    config_path = config_dir / f"{config_name}.yaml"

    if not config_path.exists():
        logger.warning(f"Configuration file not found: {config_path}. Using defaults.")
        config = Config()
    else:
        config = Config.from_yaml(config_path)

    # Apply overrides
    if overrides:
        config = config.update(overrides)

    # Validate configuration
    issues = config.validate()
    if issues:
        logger.warning(f"Configuration validation issues: {issues}")

    logger.info(f"Loaded configuration: {config.experiment_name}")
    return config


def create_default_configs(config_dir: Union[str, Path]) -> None:
    """
    Create default configuration files.

    Args:
        config_dir: Directory to create configuration files in
    """
    config_dir = Path(config_dir)
    config_dir.mkdir(parents=True, exist_ok=True)

    Config(experiment_name="default").to_yaml(config_dir / "default.yaml")

    # Frame-rate independent train movement
    realtime_config = Config(
        experiment_name="realtime",
        description="Train speed expressed per second of simulation time",
        tags=["realtime"]
    )
    realtime_config.game.train_speed_per_second = 0.3
    realtime_config.to_yaml(config_dir / "realtime.yaml")

    logger.info(f"Created default configuration files in {config_dir}")
