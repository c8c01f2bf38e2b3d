"""
Movement - Per-turn trajectory resolution.

Provides:
- Line rasterization between grid cells
- Move outcomes (legal, wall, car, finish)
- MovementResolver: pure outcome computation for one car's turn
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Mapping

from gridrace.car.car import Acceleration, Vector
from gridrace.errors import OutOfBoundsError
from gridrace.track.track import CellType, Coordinate, Track


class OutcomeKind(Enum):
    """Tag of a move outcome."""
    LEGAL = "legal"
    WALL_COLLISION = "wall_collision"
    CAR_COLLISION = "car_collision"
    FINISH_CROSSED = "finish_crossed"


@dataclass(frozen=True)
class MoveOutcome:
    """Base for the tagged result of one car's move attempt."""

    @property
    def kind(self) -> OutcomeKind:
        raise NotImplementedError

    @property
    def is_collision(self) -> bool:
        return self.kind in (OutcomeKind.WALL_COLLISION, OutcomeKind.CAR_COLLISION)


@dataclass(frozen=True)
class Legal(MoveOutcome):
    """Path is clear; the car lands on position with velocity."""
    position: Coordinate
    velocity: Vector

    @property
    def kind(self) -> OutcomeKind:
        return OutcomeKind.LEGAL


@dataclass(frozen=True)
class WallCollision(MoveOutcome):
    """Path hits a wall cell, or leaves the grid at cell."""
    cell: Coordinate
    out_of_bounds: bool = False

    @property
    def kind(self) -> OutcomeKind:
        return OutcomeKind.WALL_COLLISION


@dataclass(frozen=True)
class CarCollision(MoveOutcome):
    """Path runs through the cell held by another racing car."""
    other_car_id: int
    cell: Coordinate

    @property
    def kind(self) -> OutcomeKind:
        return OutcomeKind.CAR_COLLISION


@dataclass(frozen=True)
class FinishCrossed(MoveOutcome):
    """Path reaches a finish cell before any collision."""
    cell: Coordinate
    velocity: Vector

    @property
    def kind(self) -> OutcomeKind:
        return OutcomeKind.FINISH_CROSSED


def rasterize(start: Coordinate, end: Coordinate) -> List[Coordinate]:
    """Enumerate grid cells on the straight line from start to end.

    Integer Bresenham walk over all octants. Both endpoints are included
    and consecutive cells are 8-connected, so no cell on the line is
    skipped however long it is.

    Args:
        start: Start cell (x, y)
        end: End cell (x, y)

    Returns:
        Cells in path order
    """
    x0, y0 = start
    x1, y1 = end
    dx = abs(x1 - x0)
    dy = -abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx + dy

    cells = [(x0, y0)]
    x, y = x0, y0
    while (x, y) != (x1, y1):
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x += sx
        if e2 <= dx:
            err += dx
            y += sy
        cells.append((x, y))
    return cells


class MovementResolver:
    """Resolves the outcome of a single move on a track.

    Stateless apart from the shared, read-only track reference, so the
    same inputs always give the same outcome.

    Usage:
        resolver = MovementResolver(track)
        outcome = resolver.resolve((1, 1), (0, 0), Acceleration(1, 0))
    """

    def __init__(self, track: Track):
        self.track = track

    def resolve(
        self,
        position: Coordinate,
        velocity: Vector,
        acceleration: Acceleration,
        occupied: Mapping[Coordinate, int] | None = None,
    ) -> MoveOutcome:
        """Compute the outcome of applying acceleration for one turn.

        Each cell after the start is checked in path order: wall (or
        off-grid) first, then another racing car, then finish. The first
        cell that triggers decides the outcome.

        Args:
            position: Current cell (x, y)
            velocity: Current velocity (vx, vy)
            acceleration: Chosen acceleration
            occupied: Cells held by other racing cars, mapped to car id

        Returns:
            Exactly one MoveOutcome
        """
        occupied = occupied or {}
        new_velocity = (velocity[0] + acceleration.x, velocity[1] + acceleration.y)
        new_position = (position[0] + new_velocity[0], position[1] + new_velocity[1])

        for cell in self.trajectory(position, velocity, acceleration):
            try:
                cell_type = self.track.cell_at(*cell)
            except OutOfBoundsError:
                return WallCollision(cell=cell, out_of_bounds=True)

            if cell_type is CellType.WALL:
                return WallCollision(cell=cell)
            if cell in occupied:
                return CarCollision(other_car_id=occupied[cell], cell=cell)
            if cell_type is CellType.FINISH:
                return FinishCrossed(cell=cell, velocity=new_velocity)

        return Legal(position=new_position, velocity=new_velocity)

    def trajectory(
        self,
        position: Coordinate,
        velocity: Vector,
        acceleration: Acceleration,
    ) -> List[Coordinate]:
        """Full candidate path for a move, start cell excluded."""
        new_velocity = (velocity[0] + acceleration.x, velocity[1] + acceleration.y)
        new_position = (position[0] + new_velocity[0], position[1] + new_velocity[1])
        return rasterize(position, new_position)[1:]
