"""
Track module - Grid track model and loading.

This module contains:
- Track: Immutable grid of typed cells with start/finish lookup
- CellType: Road, wall, start and finish cells
- TrackConfig: Track metadata
- load_track / parse_track: JSON track files with validation
"""

from gridrace.track.track import Track, TrackConfig, CellType, Coordinate
from gridrace.track.loader import load_track, parse_track

__all__ = [
    "Track",
    "TrackConfig",
    "CellType",
    "Coordinate",
    "load_track",
    "parse_track",
]
