"""
GridRace - A turn-based vector racing simulation.

This package provides a discrete grid racing engine with:
- Grid tracks of road, wall, start and finish cells loaded from JSON
- Cars steered by per-turn acceleration vectors
- Line-of-travel collision resolution against walls and other cars
- CPU strategies and a human input adapter behind one interface
- Turn event recording and CSV/JSON export
"""

__version__ = "0.1.0"

import logging
import sys
from pathlib import Path

from gridrace.simulation.engine import RaceEngine, RaceConfig
from gridrace.car.car import Car, Acceleration
from gridrace.track.track import Track


def setup_logging(level: str = "INFO", log_file: str | Path | None = None) -> None:
    """Configure root logging for scripts and the command-line runner.

    Args:
        level: Logging level name
        log_file: Optional file receiving a copy of the log
    """
    log_format = "%(asctime)s [%(levelname)s] %(message)s"
    handlers = [logging.StreamHandler(sys.stdout)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=log_format,
        handlers=handlers,
        force=True,
    )


__all__ = [
    "RaceEngine",
    "RaceConfig",
    "Car",
    "Acceleration",
    "Track",
    "setup_logging",
    "__version__",
]
