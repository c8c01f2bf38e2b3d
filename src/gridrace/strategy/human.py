"""
Human input adapter - Reads accelerations from a person.
"""

from typing import Callable
import re

from gridrace.car.car import Acceleration, CarView
from gridrace.errors import InvalidAccelerationError
from gridrace.simulation.context import MoveProvider, RaceContext


INPUT_PATTERN = re.compile(r"^\s*([+-]?\d+)\s*[,\s]\s*([+-]?\d+)\s*$")


def parse_acceleration(text: str) -> Acceleration:
    """Parse "dx dy" or "dx,dy" into an Acceleration.

    Raises:
        InvalidAccelerationError: If the text is malformed or out of range
    """
    match = INPUT_PATTERN.match(text)
    if not match:
        raise InvalidAccelerationError(
            f"Expected two integers like '1 0' or '-1,1', got {text!r}"
        )
    return Acceleration(int(match.group(1)), int(match.group(2)))


class HumanMoveProvider(MoveProvider):
    """Prompts a person for each turn's acceleration.

    Invalid input raises InvalidAccelerationError; the race engine then
    asks again, so a typo never ends the race.
    """

    def __init__(self, read_line: Callable[[str], str] = input):
        """Initialize adapter.

        Args:
            read_line: Blocking prompt function, input() by default
        """
        self._read_line = read_line

    def acceleration_for(self, car: CarView, context: RaceContext) -> Acceleration:
        prompt = (
            f"[round {context.round_number}] {car.label} at {car.position} "
            f"moving {car.velocity}, acceleration (dx dy): "
        )
        return parse_acceleration(self._read_line(prompt))
