"""
Car - Racing car state for the grid simulation.

Contains:
- Acceleration: one-turn velocity adjustment
- CarStatus: racing / finished / crashed
- Car: mutable per-entity state owned by the race engine
- CarView: read-only snapshot handed to move providers
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Any, List, Tuple

from gridrace.errors import InvalidAccelerationError, RaceStateError


Vector = Tuple[int, int]

ACCELERATION_RANGE = (-1, 0, 1)


@dataclass(frozen=True)
class Acceleration:
    """Per-turn adjustment applied to a car's velocity.

    Each component must be -1, 0 or +1.
    """
    x: int = 0
    y: int = 0

    def __post_init__(self):
        for component in (self.x, self.y):
            if isinstance(component, bool) or component not in ACCELERATION_RANGE:
                raise InvalidAccelerationError(
                    f"Acceleration components must be in {ACCELERATION_RANGE}, "
                    f"got ({self.x}, {self.y})"
                )
        # Normalize numpy integers to plain ints
        object.__setattr__(self, "x", int(self.x))
        object.__setattr__(self, "y", int(self.y))

    @classmethod
    def choices(cls) -> List["Acceleration"]:
        """All 9 legal accelerations, x-major from (-1, -1) to (1, 1)."""
        return [cls(x, y) for x in ACCELERATION_RANGE for y in ACCELERATION_RANGE]

    @property
    def is_zero(self) -> bool:
        return self.x == 0 and self.y == 0

    def as_tuple(self) -> Vector:
        return (self.x, self.y)


ZERO_ACCELERATION = Acceleration(0, 0)


class CarStatus(Enum):
    """Race status of a car. FINISHED and CRASHED are terminal."""
    RACING = "racing"
    FINISHED = "finished"
    CRASHED = "crashed"


@dataclass(frozen=True)
class CarView:
    """Immutable snapshot of a car's public state."""
    car_id: int
    label: str
    is_human: bool
    position: Vector
    velocity: Vector
    status: CarStatus

    @property
    def is_racing(self) -> bool:
        return self.status is CarStatus.RACING


class Car:
    """Grid racing car.

    Holds identity and kinematic state. Only the race engine mutates
    a car; strategies receive CarView snapshots instead.

    Usage:
        car = Car(car_id=0, label="Red", position=(1, 1))
        car.move_to((2, 1), (1, 0))
    """

    def __init__(
        self,
        car_id: int,
        label: str,
        position: Vector,
        is_human: bool = False,
    ):
        """Initialize car at rest on its start cell.

        Args:
            car_id: Unique identifier for this car
            label: Display label
            position: Start cell (x, y)
            is_human: True if a human controls this car
        """
        self.car_id = car_id
        self.label = label
        self.is_human = is_human

        self.position: Vector = (int(position[0]), int(position[1]))
        self.velocity: Vector = (0, 0)
        self.status = CarStatus.RACING

        # Number of turns this car has taken
        self.turns: int = 0

    @property
    def is_racing(self) -> bool:
        """Check if the car still takes turns."""
        return self.status is CarStatus.RACING

    @property
    def speed(self) -> float:
        """Euclidean velocity magnitude in cells per turn."""
        vx, vy = self.velocity
        return (vx * vx + vy * vy) ** 0.5

    def move_to(self, position: Vector, velocity: Vector) -> None:
        """Commit a legal move.

        Args:
            position: New cell (x, y)
            velocity: New velocity (vx, vy)
        """
        self._require_racing()
        self.position = (int(position[0]), int(position[1]))
        self.velocity = (int(velocity[0]), int(velocity[1]))
        self.turns += 1

    def crash(self) -> None:
        """Mark the car crashed. Position stays at its last committed cell."""
        self._require_racing()
        self.status = CarStatus.CRASHED
        self.turns += 1

    def finish(self, position: Vector, velocity: Vector) -> None:
        """Mark the car finished on the finish cell it crossed."""
        self._require_racing()
        self.position = (int(position[0]), int(position[1]))
        self.velocity = (int(velocity[0]), int(velocity[1]))
        self.status = CarStatus.FINISHED
        self.turns += 1

    def _require_racing(self) -> None:
        if not self.is_racing:
            raise RaceStateError(f"Car {self.car_id} is {self.status.value}, no further moves")

    def view(self) -> CarView:
        """Get an immutable snapshot of this car."""
        return CarView(
            car_id=self.car_id,
            label=self.label,
            is_human=self.is_human,
            position=self.position,
            velocity=self.velocity,
            status=self.status,
        )

    def get_state(self) -> Dict[str, Any]:
        """Get car state as plain data."""
        return {
            "car_id": self.car_id,
            "label": self.label,
            "is_human": self.is_human,
            "position": self.position,
            "velocity": self.velocity,
            "status": self.status.value,
            "turns": self.turns,
        }

    def __repr__(self) -> str:
        return (
            f"Car({self.car_id}:{self.label}, pos={self.position}, "
            f"vel={self.velocity}, {self.status.value})"
        )
