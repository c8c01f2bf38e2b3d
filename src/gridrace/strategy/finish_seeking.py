"""
Finish-seeking strategy - Greedy descent of the track's distance field.
"""

from typing import Dict, Sequence, Tuple

from gridrace.car.car import Acceleration, CarView
from gridrace.simulation.movement import FinishCrossed, Legal, MovementResolver
from gridrace.strategy.base import CpuStrategy
from gridrace.track.track import Coordinate, Track


class FinishSeekingStrategy(CpuStrategy):
    """Heads for the finish while avoiding collisions.

    Candidates that collide are discarded. A candidate that crosses the
    finish is taken at once. Otherwise the landing cell closest to the
    finish (by track distance) wins, preferring moves that leave at
    least one collision-free move for the next turn.

    Ties go to the slower move, then to candidate order.
    """

    name = "finish"

    def __init__(self, lookahead: bool = True):
        """Initialize strategy.

        Args:
            lookahead: Check that each landing state still has a safe move
        """
        self.lookahead = lookahead

    def choose_acceleration(
        self,
        car: CarView,
        track: Track,
        other_cars: Sequence[CarView],
    ) -> Acceleration:
        probes = self.probe(car, track, other_cars)
        safe = self.safe_probes(probes)
        if not safe:
            return self.least_bad(probes)

        for acc, outcome in safe:
            if isinstance(outcome, FinishCrossed):
                return acc

        resolver = MovementResolver(track)
        occupied = {
            other.position: other.car_id
            for other in other_cars
            if other.is_racing and other.car_id != car.car_id
        }

        def score(index: int) -> Tuple[bool, float, int, int]:
            acc, outcome = safe[index]
            x, y = outcome.position
            vx, vy = outcome.velocity
            trapped = self.lookahead and not self._has_escape(
                resolver, outcome, occupied
            )
            return (trapped, track.finish_distance(x, y), vx * vx + vy * vy, index)

        best = min(range(len(safe)), key=score)
        return safe[best][0]

    @staticmethod
    def _has_escape(
        resolver: MovementResolver,
        landing: Legal,
        occupied: Dict[Coordinate, int],
    ) -> bool:
        for acc in Acceleration.choices():
            outcome = resolver.resolve(landing.position, landing.velocity, acc, occupied)
            if not outcome.is_collision:
                return True
        return False
