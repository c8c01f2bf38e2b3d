"""
Strategy factory - Build CPU strategies by name or seat index.
"""

from typing import Callable, Dict, List

from gridrace.strategy.base import CpuStrategy
from gridrace.strategy.finish_seeking import FinishSeekingStrategy
from gridrace.strategy.random_strategy import RandomStrategy
from gridrace.strategy.weighted import WeightedStrategy


STRATEGIES: Dict[str, Callable[[int | None], CpuStrategy]] = {
    FinishSeekingStrategy.name: lambda seed: FinishSeekingStrategy(),
    WeightedStrategy.name: lambda seed: WeightedStrategy(seed=seed),
    RandomStrategy.name: lambda seed: RandomStrategy(seed=seed),
}

# Seat rotation: even seats seek the finish, odd seats use weighted scoring
ROTATION: List[str] = [FinishSeekingStrategy.name, WeightedStrategy.name]


def available_strategies() -> List[str]:
    """Registered strategy names."""
    return sorted(STRATEGIES)


def create_strategy(name: str, seed: int | None = None) -> CpuStrategy:
    """Build a strategy by registry name.

    Args:
        name: One of available_strategies()
        seed: Random seed for strategies that use randomness

    Raises:
        KeyError: If the name is unknown
    """
    try:
        builder = STRATEGIES[name]
    except KeyError:
        raise KeyError(
            f"Unknown strategy {name!r}; choose from {', '.join(available_strategies())}"
        ) from None
    return builder(seed)


def select_strategy(index: int, seed: int | None = None) -> CpuStrategy:
    """Strategy for the CPU car in seat index, alternating by ROTATION."""
    return create_strategy(ROTATION[index % len(ROTATION)], seed)
