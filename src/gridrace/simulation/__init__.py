"""
Simulation module - Turn resolution and race orchestration.

This module contains:
- MovementResolver: Pure per-turn outcome computation
- RaceEngine: Round loop, state machine and listeners
- Events: Turn events and the final race result
- render_race: Text visualization
"""

from gridrace.simulation.movement import (
    CarCollision,
    FinishCrossed,
    Legal,
    MoveOutcome,
    MovementResolver,
    OutcomeKind,
    WallCollision,
    rasterize,
)
from gridrace.simulation.events import FinishReason, RaceResult, RaceState, TurnEvent
from gridrace.simulation.context import MoveProvider, RaceContext
from gridrace.simulation.engine import RaceConfig, RaceEngine
from gridrace.simulation.visualizer import render_race

__all__ = [
    "CarCollision",
    "FinishCrossed",
    "Legal",
    "MoveOutcome",
    "MovementResolver",
    "OutcomeKind",
    "WallCollision",
    "rasterize",
    "FinishReason",
    "RaceResult",
    "RaceState",
    "TurnEvent",
    "MoveProvider",
    "RaceContext",
    "RaceConfig",
    "RaceEngine",
    "render_race",
]
