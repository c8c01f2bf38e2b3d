"""
Move provider interface - What the race engine asks each turn.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Tuple

from gridrace.car.car import Acceleration, CarView
from gridrace.track.track import Coordinate, Track


@dataclass(frozen=True)
class RaceContext:
    """Read-only race state handed to a move provider."""
    track: Track
    other_cars: Tuple[CarView, ...]
    round_number: int = 0

    def occupied_cells(self) -> Dict[Coordinate, int]:
        """Cells held by other racing cars, mapped to car id."""
        return {car.position: car.car_id for car in self.other_cars if car.is_racing}


class MoveProvider(ABC):
    """Source of a car's acceleration for one turn.

    Implemented by the human input adapter and every CPU strategy. The
    engine depends only on this interface.
    """

    @abstractmethod
    def acceleration_for(self, car: CarView, context: RaceContext) -> Acceleration:
        """Choose the acceleration for car's next turn."""
