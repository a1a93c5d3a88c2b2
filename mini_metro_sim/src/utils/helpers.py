"""
Helper functions and utilities for Mini Metro simulation.

Provides random source creation, distance math, timing and JSON output
shared by the simulation and the command line runner.
"""

import numpy as np
from typing import Dict, Tuple, Any, Optional, Union
import logging
from pathlib import Path
import json
import time

logger = logging.getLogger(__name__)


def create_rng(seed: Optional[int] = None) -> np.random.Generator:
    """
    Create the random source used for spawning.

    Args:
        seed: Random seed value (None for nondeterministic)

    Returns:
        Numpy random generator
    """
    if seed is not None:
        logger.info(f"Using random seed {seed}")
    return np.random.default_rng(seed)


def calculate_euclidean_distance(
    pos1: Tuple[float, float],
    pos2: Tuple[float, float]
) -> float:
    """
    Calculate Euclidean distance between two points.

    Args:
        pos1: First position (x, y)
        pos2: Second position (x, y)

    Returns:
        Euclidean distance
    """
    return float(np.sqrt((pos1[0] - pos2[0])**2 + (pos1[1] - pos2[1])**2))


def save_json(data: Dict[str, Any], filepath: Union[str, Path]) -> None:
    """
    Save data as JSON file.

    Args:
        data: Data to save
        filepath: Path to save file
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    with open(filepath, 'w') as f:
        json.dump(data, f, indent=2, default=str)

    logger.debug(f"Saved JSON to {filepath}")


def format_time(seconds: float) -> str:
    """
    Format time duration in human-readable format.

    Args:
        seconds: Time in seconds

    Returns:
        Formatted time string
    """
    if seconds < 60:
        return f"{seconds:.2f}s"
    elif seconds < 3600:
        minutes = seconds / 60
        return f"{minutes:.1f}m"
    else:
        hours = seconds / 3600
        return f"{hours:.1f}h"


class Timer:
    """Context manager for timing code execution."""

    def __init__(self, name: str = "Timer", log_result: bool = True):
        """
        Initialize timer.

        Args:
            name: Name for the timer
            log_result: Whether to log the result
        """
        self.name = name
        self.log_result = log_result
        self.start_time = None
        self.end_time = None

    def __enter__(self):
        """Start timing."""
        self.start_time = time.time()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """End timing and optionally log result."""
        self.end_time = time.time()
        if self.log_result:
            elapsed = self.elapsed_time()
            logger.info(f"{self.name} took {format_time(elapsed)}")

    def elapsed_time(self) -> float:
        """
        Get elapsed time.

        Returns:
            Elapsed time in seconds
        """
        if self.start_time is None:
            return 0.0

        end_time = self.end_time if self.end_time is not None else time.time()
        return end_time - self.start_time
