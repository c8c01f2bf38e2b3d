"""
Race engine - Turn orchestration for the grid race.

Provides:
- Car setup on start cells
- Round-by-round turn resolution in join order
- Race end detection (winner, all crashed, round cap)
- Turn and finish listeners for reporting
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional
import logging

from gridrace.car.car import Acceleration, Car, CarView
from gridrace.errors import InvalidAccelerationError, RaceStateError
from gridrace.simulation.events import FinishReason, RaceResult, RaceState, TurnEvent
from gridrace.simulation.movement import (
    CarCollision,
    FinishCrossed,
    Legal,
    MovementResolver,
    WallCollision,
)
from gridrace.simulation.context import MoveProvider, RaceContext
from gridrace.track.track import Track


logger = logging.getLogger(__name__)


@dataclass
class RaceConfig:
    """Race engine configuration."""
    # Rounds before the race is called with no winner (None = unlimited)
    max_rounds: int | None = 1000

    # Rejected human inputs per turn before giving up (None = unlimited)
    max_input_attempts: int | None = None


class RaceEngine:
    """Turn-based race orchestrator.

    Owns the cars and the track reference. Each round every car that is
    still racing takes one turn, in the order it joined. A turn asks the
    car's move provider for an acceleration, resolves the move and
    commits the outcome.

    Usage:
        engine = RaceEngine(track)
        engine.add_car("Red", FinishSeekingStrategy())
        engine.add_car("Blue", WeightedStrategy())
        result = engine.run()
    """

    def __init__(self, track: Track, config: RaceConfig | None = None):
        """Initialize engine in the SETUP state.

        Args:
            track: Race track, shared read-only with every component
            config: Engine configuration. Uses defaults if None.
        """
        self.track = track
        self.config = config or RaceConfig()
        self.resolver = MovementResolver(track)

        self._cars: List[Car] = []
        self._providers: Dict[int, MoveProvider] = {}
        self._state = RaceState.SETUP
        self._round: int = 0
        self._winner: Optional[Car] = None
        self._result: Optional[RaceResult] = None

        self._turn_listeners: List[Callable[[TurnEvent], None]] = []
        self._finish_listeners: List[Callable[[RaceResult], None]] = []

    @property
    def state(self) -> RaceState:
        """Current lifecycle state."""
        return self._state

    @property
    def cars(self) -> List[Car]:
        """Cars in join order."""
        return list(self._cars)

    @property
    def round_number(self) -> int:
        """Number of rounds played."""
        return self._round

    @property
    def winner(self) -> Optional[Car]:
        return self._winner

    @property
    def result(self) -> Optional[RaceResult]:
        """Final result once the race is finished."""
        return self._result

    def get_car(self, car_id: int) -> Optional[Car]:
        for car in self._cars:
            if car.car_id == car_id:
                return car
        return None

    def add_car(
        self,
        label: str,
        provider: MoveProvider,
        is_human: bool = False,
    ) -> Car:
        """Add a car on the next free start cell.

        Args:
            label: Display label
            provider: Source of the car's accelerations
            is_human: True if the provider is driven by a person

        Returns:
            The new car

        Raises:
            RaceStateError: If the race has started or no start cell is free
        """
        if self._state is not RaceState.SETUP:
            raise RaceStateError("Cars can only join during setup")

        starts = self.track.start_positions()
        if len(self._cars) >= len(starts):
            raise RaceStateError(
                f"No free start cell: track has {len(starts)} start cells"
            )

        car_id = len(self._cars)
        car = Car(car_id=car_id, label=label, position=starts[car_id], is_human=is_human)
        self._cars.append(car)
        self._providers[car_id] = provider

        logger.debug(f"Car {car_id}:{label} placed at {car.position}")
        return car

    def add_turn_listener(self, callback: Callable[[TurnEvent], None]) -> None:
        """Register a callback receiving every TurnEvent."""
        self._turn_listeners.append(callback)

    def add_finish_listener(self, callback: Callable[[RaceResult], None]) -> None:
        """Register a callback receiving the final RaceResult."""
        self._finish_listeners.append(callback)

    def start(self) -> None:
        """Move from SETUP to RUNNING."""
        if self._state is not RaceState.SETUP:
            raise RaceStateError(f"Cannot start a race in state {self._state.value}")
        if not self._cars:
            raise RaceStateError("Cannot start a race with no cars")

        self._state = RaceState.RUNNING
        logger.info(
            f"Race started on '{self.track.name}' with {len(self._cars)} cars: "
            + ", ".join(f"{c.car_id}:{c.label}" for c in self._cars)
        )

    def play_round(self) -> List[TurnEvent]:
        """Play one turn for every car still racing.

        Stops mid-round as soon as a car finishes.

        Returns:
            Turn events in the order they were resolved
        """
        if self._state is not RaceState.RUNNING:
            raise RaceStateError(f"Cannot play a round in state {self._state.value}")

        self._round += 1
        events = []
        for car in self._cars:
            if not car.is_racing:
                continue
            events.append(self._play_turn(car))
            if self._winner is not None:
                self._finish(FinishReason.FINISH_CROSSED)
                return events

        if not any(car.is_racing for car in self._cars):
            self._finish(FinishReason.ALL_CRASHED)
        elif self.config.max_rounds is not None and self._round >= self.config.max_rounds:
            logger.warning(f"Round limit {self.config.max_rounds} reached, no winner")
            self._finish(FinishReason.ROUND_LIMIT)

        return events

    def run(self) -> RaceResult:
        """Run the race to completion.

        Returns:
            Final race result
        """
        if self._state is RaceState.SETUP:
            self.start()
        while self._state is RaceState.RUNNING:
            self.play_round()
        return self._result

    def _play_turn(self, car: Car) -> TurnEvent:
        old_position, old_velocity = car.position, car.velocity
        context = self._context_for(car)
        acceleration = self._request_acceleration(car, context)

        occupied = context.occupied_cells()
        outcome = self.resolver.resolve(car.position, car.velocity, acceleration, occupied)

        if isinstance(outcome, Legal):
            car.move_to(outcome.position, outcome.velocity)
        elif isinstance(outcome, FinishCrossed):
            car.finish(outcome.cell, outcome.velocity)
            self._winner = car
            logger.info(f"Car {car.car_id}:{car.label} crossed the finish at {outcome.cell}")
        elif isinstance(outcome, WallCollision):
            car.crash()
            where = "left the track" if outcome.out_of_bounds else "hit a wall"
            logger.info(f"Car {car.car_id}:{car.label} {where} at {outcome.cell}")
        elif isinstance(outcome, CarCollision):
            car.crash()
            logger.info(
                f"Car {car.car_id}:{car.label} crashed into car {outcome.other_car_id} "
                f"at {outcome.cell}"
            )

        event = TurnEvent(
            round_number=self._round,
            car_id=car.car_id,
            label=car.label,
            old_position=old_position,
            old_velocity=old_velocity,
            acceleration=acceleration,
            outcome=outcome,
            new_position=car.position,
            new_velocity=car.velocity,
            status=car.status,
        )
        logger.debug(
            f"Round {self._round} car {car.car_id}: {old_position} v{old_velocity} "
            f"a{acceleration.as_tuple()} -> {outcome.kind.value}"
        )
        for callback in self._turn_listeners:
            callback(event)
        return event

    def _request_acceleration(self, car: Car, context: RaceContext) -> Acceleration:
        """Ask the car's provider for an acceleration.

        Human input is requested again until it is valid. A CPU provider
        returning an invalid value is a contract violation and propagates.
        """
        provider = self._providers[car.car_id]
        attempts = 0
        while True:
            attempts += 1
            try:
                acceleration = provider.acceleration_for(car.view(), context)
                if not isinstance(acceleration, Acceleration):
                    raise InvalidAccelerationError(
                        f"Expected Acceleration, got {type(acceleration).__name__}"
                    )
                return acceleration
            except InvalidAccelerationError as e:
                if not car.is_human:
                    raise
                limit = self.config.max_input_attempts
                if limit is not None and attempts >= limit:
                    raise
                logger.warning(f"Rejected input for car {car.car_id}:{car.label}: {e}")

    def _context_for(self, car: Car) -> RaceContext:
        others = tuple(other.view() for other in self._cars if other is not car)
        return RaceContext(track=self.track, other_cars=others, round_number=self._round)

    def _finish(self, reason: FinishReason) -> None:
        self._state = RaceState.FINISHED
        self._result = RaceResult(
            winner_id=self._winner.car_id if self._winner else None,
            rounds=self._round,
            reason=reason,
            cars=[car.view() for car in self._cars],
        )
        if self._winner:
            logger.info(f"Winner: car {self._winner.car_id}:{self._winner.label} after {self._round} rounds")
        else:
            logger.info(f"Race over with no winner ({reason.value}) after {self._round} rounds")

        for callback in self._finish_listeners:
            callback(self._result)

    def get_state(self) -> Dict[str, object]:
        """Get complete race state as plain data."""
        return {
            "state": self._state.value,
            "round": self._round,
            "winner_id": self._winner.car_id if self._winner else None,
            "track": self.track.get_state(),
            "cars": [car.get_state() for car in self._cars],
        }

    def views(self) -> List[CarView]:
        """Snapshots of all cars in join order."""
        return [car.view() for car in self._cars]
