"""
Random strategy - Uniform choice among collision-free moves.
"""

from typing import Sequence
import numpy as np

from gridrace.car.car import Acceleration, CarView
from gridrace.strategy.base import CpuStrategy
from gridrace.track.track import Track


class RandomStrategy(CpuStrategy):
    """Picks any move that does not collide, uniformly at random.

    Falls back to the least-bad collision when no such move exists.
    """

    name = "random"

    def __init__(self, seed: int | None = None):
        """Initialize strategy.

        Args:
            seed: Random seed (None for random)
        """
        self._rng = np.random.default_rng(seed)

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
        return safe[int(self._rng.integers(len(safe)))][0]
