"""
Strategy module - Move providers for CPU and human cars.

This module contains:
- CpuStrategy: Base class with candidate probing and collision fallback
- FinishSeekingStrategy: Greedy descent toward the finish line
- WeightedStrategy: Cell/clearance/speed scoring
- RandomStrategy: Uniform choice among safe moves
- HumanMoveProvider: Console input adapter
- create_strategy / select_strategy: Factory helpers
"""

from gridrace.simulation.context import MoveProvider, RaceContext
from gridrace.strategy.base import CpuStrategy, collision_rank
from gridrace.strategy.finish_seeking import FinishSeekingStrategy
from gridrace.strategy.weighted import WeightedStrategy, WeightedStrategyConfig
from gridrace.strategy.random_strategy import RandomStrategy
from gridrace.strategy.human import HumanMoveProvider, parse_acceleration
from gridrace.strategy.factory import (
    available_strategies,
    create_strategy,
    select_strategy,
)

__all__ = [
    "MoveProvider",
    "RaceContext",
    "CpuStrategy",
    "collision_rank",
    "FinishSeekingStrategy",
    "WeightedStrategy",
    "WeightedStrategyConfig",
    "RandomStrategy",
    "HumanMoveProvider",
    "parse_acceleration",
    "available_strategies",
    "create_strategy",
    "select_strategy",
]
