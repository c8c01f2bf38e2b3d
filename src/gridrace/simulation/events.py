"""
Race events - Plain-data records emitted by the race engine.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List

from gridrace.car.car import Acceleration, CarStatus, CarView, Vector
from gridrace.simulation.movement import MoveOutcome


class RaceState(Enum):
    """Race engine lifecycle."""
    SETUP = "setup"
    RUNNING = "running"
    FINISHED = "finished"


class FinishReason(Enum):
    """Why the race ended."""
    FINISH_CROSSED = "finish_crossed"
    ALL_CRASHED = "all_crashed"
    ROUND_LIMIT = "round_limit"


@dataclass(frozen=True)
class TurnEvent:
    """One car's resolved turn."""
    round_number: int
    car_id: int
    label: str
    old_position: Vector
    old_velocity: Vector
    acceleration: Acceleration
    outcome: MoveOutcome
    new_position: Vector
    new_velocity: Vector
    status: CarStatus

    def to_dict(self) -> Dict[str, Any]:
        """Flatten the event for export."""
        return {
            "round": self.round_number,
            "car_id": self.car_id,
            "label": self.label,
            "old_position": list(self.old_position),
            "old_velocity": list(self.old_velocity),
            "acceleration": list(self.acceleration.as_tuple()),
            "outcome": self.outcome.kind.value,
            "new_position": list(self.new_position),
            "new_velocity": list(self.new_velocity),
            "status": self.status.value,
        }


@dataclass(frozen=True)
class RaceResult:
    """Terminal race result."""
    winner_id: int | None
    rounds: int
    reason: FinishReason
    cars: List[CarView] = field(default_factory=list)

    @property
    def has_winner(self) -> bool:
        return self.winner_id is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "winner_id": self.winner_id,
            "rounds": self.rounds,
            "reason": self.reason.value,
            "cars": [
                {
                    "car_id": car.car_id,
                    "label": car.label,
                    "position": list(car.position),
                    "velocity": list(car.velocity),
                    "status": car.status.value,
                }
                for car in self.cars
            ],
        }
