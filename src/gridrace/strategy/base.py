"""
CPU strategy base - Candidate probing and the collision fallback.
"""

from abc import abstractmethod
from typing import List, Sequence, Tuple

from gridrace.car.car import Acceleration, CarView, ZERO_ACCELERATION
from gridrace.simulation.context import MoveProvider, RaceContext
from gridrace.simulation.movement import (
    CarCollision,
    MoveOutcome,
    MovementResolver,
    WallCollision,
)
from gridrace.track.track import Track


Probe = Tuple[Acceleration, MoveOutcome]


def collision_rank(outcome: MoveOutcome) -> int:
    """Order collisions from least to most bad.

    Running into a car ranks best, then an in-grid wall, then leaving
    the grid. Non-collisions rank 0.
    """
    if isinstance(outcome, CarCollision):
        return 1
    if isinstance(outcome, WallCollision):
        return 3 if outcome.out_of_bounds else 2
    return 0


class CpuStrategy(MoveProvider):
    """Base class for CPU decision policies.

    Subclasses implement choose_acceleration(). Instances hold no race
    state: everything they need arrives as arguments each turn.
    """

    name: str = "cpu"

    def acceleration_for(self, car: CarView, context: RaceContext) -> Acceleration:
        return self.choose_acceleration(car, context.track, context.other_cars)

    @abstractmethod
    def choose_acceleration(
        self,
        car: CarView,
        track: Track,
        other_cars: Sequence[CarView],
    ) -> Acceleration:
        """Pick one of the 9 accelerations. Must never raise."""

    @staticmethod
    def probe(
        car: CarView,
        track: Track,
        other_cars: Sequence[CarView],
    ) -> List[Probe]:
        """Resolve every candidate acceleration for car.

        Returns:
            (acceleration, outcome) pairs in Acceleration.choices() order
        """
        resolver = MovementResolver(track)
        occupied = {
            other.position: other.car_id
            for other in other_cars
            if other.is_racing and other.car_id != car.car_id
        }
        return [
            (acc, resolver.resolve(car.position, car.velocity, acc, occupied))
            for acc in Acceleration.choices()
        ]

    @staticmethod
    def safe_probes(probes: Sequence[Probe]) -> List[Probe]:
        """Probes whose outcome is not a collision."""
        return [(acc, outcome) for acc, outcome in probes if not outcome.is_collision]

    @staticmethod
    def least_bad(probes: Sequence[Probe]) -> Acceleration:
        """Deterministic choice when every candidate collides.

        Picks the lowest collision rank, first in candidate order on
        ties. Zero acceleration if there is nothing to choose from.
        """
        if not probes:
            return ZERO_ACCELERATION
        best_acc, _ = min(probes, key=lambda probe: collision_rank(probe[1]))
        return best_acc

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
