#!/usr/bin/env python3
"""
Main entry point for Mini Metro simulation project.

Provides a command-line interface for running the simulation headless,
optionally building a line automatically, and dumping the final state.
"""

import argparse
import logging
import sys
from typing import Dict, Any

from mini_metro_sim.src.utils.config import load_config, Config
from mini_metro_sim.src.utils.helpers import Timer, save_json
from mini_metro_sim.src.game.mini_metro_game import MiniMetroGame
from mini_metro_sim.src.game.events import StationActivated, StationDraggedOver

logger = logging.getLogger(__name__)


def setup_logging(config: Config) -> None:
    """
    Setup logging configuration.

    Args:
        config: Project configuration
    """
    # Configure root logger
    logging.basicConfig(
        level=getattr(logging, config.logging.log_level.upper()),
        format=config.logging.log_format,
        filename=config.logging.log_file,
        filemode='a' if config.logging.log_file else None
    )

    # Also log to console if logging to file
    if config.logging.log_file:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, config.logging.log_level.upper()))
        console_formatter = logging.Formatter(config.logging.log_format)
        console_handler.setFormatter(console_formatter)
        logging.getLogger().addHandler(console_handler)


def auto_build_events(game: MiniMetroGame) -> list:
    """
    Build input events that connect every unconnected station to the network.

    With no line yet, a line is started at the first station. Every station
    not on the active line is then dragged onto it.

    Args:
        game: Running simulation

    Returns:
        Events to feed to the next tick
    """
    state = game.state
    events = []

    if state.active_line is None:
        if not state.stations:
            return events
        events.append(StationActivated(state.stations[0].position))
        on_line = {id(state.stations[0])}
    else:
        on_line = {id(s) for s in state.active_line.stations}

    for station in state.stations:
        if id(station) not in on_line:
            events.append(StationDraggedOver(station.position))

    return events


def run_simulation(game: MiniMetroGame, config: Config) -> Dict[str, Any]:
    """
    Run the simulation until game over or the tick limit.

    Args:
        game: Simulation to run
        config: Configuration

    Returns:
        Run summary
    """
    sim = config.simulation
    last_day = game.state.game.day
    ticks = 0

    while ticks < sim.max_ticks and not game.is_game_over():
        events = auto_build_events(game) if sim.auto_build else []
        game.tick(events, sim.frame_ms)
        ticks += 1

        day = game.state.game.day
        if day != last_day:
            last_day = day
            if sim.stats_every_days > 0 and day % sim.stats_every_days == 0:
                details = game.get_detailed_state()
                logger.info(f"Day {day}: score={details['score']}, "
                            f"waiting={details['statistics']['waiting_passengers']}, "
                            f"riding={details['statistics']['riding_passengers']}, "
                            f"overflowing={details['station_overflow_count']}")

    game_state = game.state.game
    return {
        'ticks': ticks,
        'day': game_state.day,
        'score': game_state.score,
        'game_over': game_state.game_over,
        'stations': len(game.state.stations),
        'lines': len(game.state.lines),
    }


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Mini Metro Simulation")

    # Configuration
    parser.add_argument("--config", type=str, default="default",
                       help="Configuration file name (without .yaml)")
    parser.add_argument("--config-dir", type=str, default=None,
                       help="Configuration directory")

    # Run options
    parser.add_argument("--ticks", type=int, help="Maximum number of ticks")
    parser.add_argument("--frame-ms", type=float, help="Simulated milliseconds per tick")
    parser.add_argument("--auto-build", action="store_true",
                       help="Connect every station into one line automatically")
    parser.add_argument("--dump-state", type=str, help="Write the final state as JSON to this path")

    # Logging options
    parser.add_argument("--log-level", type=str, choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                       help="Logging level")

    # Other options
    parser.add_argument("--seed", type=int, help="Random seed")

    args = parser.parse_args()

    # Load configuration
    config_overrides: Dict[str, Any] = {}
    simulation_overrides: Dict[str, Any] = {}
    if args.log_level:
        config_overrides['logging'] = {'log_level': args.log_level}
    if args.seed is not None:
        config_overrides['game'] = {'seed': args.seed}
    if args.ticks is not None:
        simulation_overrides['max_ticks'] = args.ticks
    if args.frame_ms is not None:
        simulation_overrides['frame_ms'] = args.frame_ms
    if args.auto_build:
        simulation_overrides['auto_build'] = True
    if args.dump_state:
        simulation_overrides['dump_state'] = args.dump_state
    if simulation_overrides:
        config_overrides['simulation'] = simulation_overrides

    config = load_config(args.config, args.config_dir, config_overrides)

    # Setup logging
    setup_logging(config)

    logger.info(f"Configuration: {config.experiment_name}")

    try:
        game = MiniMetroGame(config.game)

        with Timer("Simulation"):
            summary = run_simulation(game, config)

        logger.info(f"Simulation finished: {summary}")

        if config.simulation.dump_state:
            save_json(game.get_detailed_state(), config.simulation.dump_state)
            logger.info(f"Wrote final state to {config.simulation.dump_state}")

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.error(f"Error: {e}", exc_info=True)
        sys.exit(1)

    logger.info("Program completed successfully")


if __name__ == "__main__":
    main()
