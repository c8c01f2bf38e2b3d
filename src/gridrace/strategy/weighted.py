"""
Weighted strategy - Scores landing cells by type, wall clearance and speed.

Each collision-free candidate is scored as

    cell_type_weight * base(cell)
    + border_weight * sqrt(clearance)
    + velocity_weight * exp(-(speed - ideal)^2 / (2 * sigma^2))
    + progress_weight * (finish distance now - finish distance after)

where clearance is the distance to the nearest wall along the four grid
axes. Staying in place halves the score.
"""

from dataclasses import dataclass, field
from typing import Dict, Sequence
import numpy as np

from gridrace.car.car import Acceleration, CarView
from gridrace.simulation.movement import FinishCrossed
from gridrace.strategy.base import CpuStrategy
from gridrace.track.track import CellType, Coordinate, Track


@dataclass
class WeightedStrategyConfig:
    """Scoring weights."""
    cell_type_weight: float = 0.6
    border_weight: float = 0.3
    velocity_weight: float = 0.1
    progress_weight: float = 0.5

    # Speed preference (cells per turn)
    ideal_velocity: float = 2.0
    sigma: float = 1.0

    # Multiplier applied when the car would not move
    stay_in_place_factor: float = 0.5

    cell_weights: Dict[CellType, float] = field(default_factory=lambda: {
        CellType.ROAD: 10.0,
        CellType.START: 1.0,
        CellType.FINISH: 20.0,
    })


class WeightedStrategy(CpuStrategy):
    """Picks the best-scoring collision-free move.

    With sample=True the move is drawn at random with probability
    proportional to its score instead.
    """

    name = "weighted"

    def __init__(
        self,
        config: WeightedStrategyConfig | None = None,
        sample: bool = False,
        seed: int | None = None,
    ):
        """Initialize strategy.

        Args:
            config: Scoring weights. Uses defaults if None.
            sample: Draw proportionally to score instead of taking the max
            seed: Random seed for sampling
        """
        self.config = config or WeightedStrategyConfig()
        self.sample = sample
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

        here = track.finish_distance(*car.position)
        scores = np.array([
            self.score_move(track, car.position, here, outcome)
            for _, outcome in safe
        ])

        if self.sample:
            # Progress can push scores negative; shift before normalizing
            weights = scores - scores.min() + 1e-9
            index = int(self._rng.choice(len(safe), p=weights / weights.sum()))
        else:
            index = int(np.argmax(scores))
        return safe[index][0]

    def score_move(
        self,
        track: Track,
        position: Coordinate,
        current_distance: float,
        outcome,
    ) -> float:
        """Score a collision-free outcome landing from position."""
        cfg = self.config
        if isinstance(outcome, FinishCrossed):
            landing = outcome.cell
        else:
            landing = outcome.position

        cell_type = track.cell_at(*landing)
        base = cfg.cell_weights.get(cell_type, 0.0)
        clearance = self.clearance(track, landing)

        speed = float(np.hypot(landing[0] - position[0], landing[1] - position[1]))
        speed_pref = float(np.exp(
            -((speed - cfg.ideal_velocity) ** 2) / (2 * cfg.sigma ** 2)
        ))

        progress = 0.0
        after = track.finish_distance(*landing)
        if np.isfinite(current_distance) and np.isfinite(after):
            progress = current_distance - after

        score = (
            base * cfg.cell_type_weight
            + np.sqrt(clearance) * cfg.border_weight
            + speed_pref * cfg.velocity_weight
            + progress * cfg.progress_weight
        )
        if landing == position:
            score *= cfg.stay_in_place_factor
        return float(score)

    @staticmethod
    def clearance(track: Track, cell: Coordinate) -> int:
        """Steps to the nearest wall (or grid edge) along the four axes."""
        best = max(track.width, track.height)
        for dx, dy in ((0, -1), (1, 0), (0, 1), (-1, 0)):
            steps = 1
            while not track.is_wall(cell[0] + steps * dx, cell[1] + steps * dy):
                steps += 1
            best = min(best, steps)
        return best
