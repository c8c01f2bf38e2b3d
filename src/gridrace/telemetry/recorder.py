"""
Race recorder - Collects turn events and the race result.

Provides:
- Engine listener registration
- Per-car event lookup
- Flat records and summary counts for export
"""

from typing import Any, Dict, List, Optional

from gridrace.simulation.engine import RaceEngine
from gridrace.simulation.events import RaceResult, TurnEvent
from gridrace.simulation.movement import OutcomeKind


class RaceRecorder:
    """Records everything a race engine emits.

    Usage:
        recorder = RaceRecorder()
        recorder.attach(engine)
        engine.run()
        recorder.summary()
    """

    def __init__(self, engine: RaceEngine | None = None):
        """Initialize recorder.

        Args:
            engine: Engine to record (can be attached later)
        """
        self._events: List[TurnEvent] = []
        self._result: Optional[RaceResult] = None
        self._track_state: Dict[str, Any] = {}
        if engine is not None:
            self.attach(engine)

    def attach(self, engine: RaceEngine) -> None:
        """Register as a turn and finish listener on engine."""
        engine.add_turn_listener(self.record_turn)
        engine.add_finish_listener(self.record_result)
        self._track_state = engine.track.get_state()

    def record_turn(self, event: TurnEvent) -> None:
        self._events.append(event)

    def record_result(self, result: RaceResult) -> None:
        self._result = result

    @property
    def events(self) -> List[TurnEvent]:
        """Recorded turn events in order."""
        return list(self._events)

    @property
    def result(self) -> Optional[RaceResult]:
        return self._result

    @property
    def track_state(self) -> Dict[str, Any]:
        return dict(self._track_state)

    def events_for(self, car_id: int) -> List[TurnEvent]:
        """Turn events of a single car."""
        return [e for e in self._events if e.car_id == car_id]

    def path_of(self, car_id: int) -> List[tuple]:
        """Committed positions of a car, start cell first."""
        events = self.events_for(car_id)
        if not events:
            return []
        return [events[0].old_position] + [e.new_position for e in events]

    def to_records(self) -> List[Dict[str, Any]]:
        """Flatten events to dicts, one per turn."""
        return [e.to_dict() for e in self._events]

    def summary(self) -> Dict[str, Any]:
        """Counts of turns and outcomes, plus the result.

        Returns:
            Dictionary with summary statistics
        """
        counts = {kind.value: 0 for kind in OutcomeKind}
        for event in self._events:
            counts[event.outcome.kind.value] += 1

        if self._result:
            rounds = self._result.rounds
        else:
            rounds = max((e.round_number for e in self._events), default=0)
        crashes = (
            counts[OutcomeKind.WALL_COLLISION.value]
            + counts[OutcomeKind.CAR_COLLISION.value]
        )

        return {
            "turns": len(self._events),
            "rounds": rounds,
            "outcomes": counts,
            "crashes": crashes,
            "winner_id": self._result.winner_id if self._result else None,
            "reason": self._result.reason.value if self._result else None,
        }

    def clear(self) -> None:
        """Drop all recorded data."""
        self._events.clear()
        self._result = None
