"""
Errors - Exception taxonomy for the race engine.

Collisions and finishes are ordinary move outcomes, not exceptions.
"""


class GridRaceError(Exception):
    """Base class for all GridRace errors."""


class OutOfBoundsError(GridRaceError, IndexError):
    """Coordinate lies outside the track grid."""

    def __init__(self, x: int, y: int, width: int, height: int):
        super().__init__(f"({x}, {y}) outside {width}x{height} track")
        self.x = x
        self.y = y


class InvalidAccelerationError(GridRaceError, ValueError):
    """Acceleration component outside {-1, 0, 1} or unparseable input."""


class InvalidTrackError(GridRaceError):
    """Track definition could not be loaded or is malformed."""


class RaceStateError(GridRaceError, RuntimeError):
    """Engine operation not allowed in the current race state."""
