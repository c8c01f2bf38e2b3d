"""
Car module - Car state and acceleration vectors.

This module contains:
- Car: Mutable position/velocity/status owned by the race engine
- CarView: Read-only snapshot given to move providers
- CarStatus: Racing, finished, crashed
- Acceleration: Per-turn velocity change, each axis in {-1, 0, 1}
"""

from gridrace.car.car import (
    Acceleration,
    Car,
    CarStatus,
    CarView,
    Vector,
    ZERO_ACCELERATION,
)

__all__ = [
    "Acceleration",
    "Car",
    "CarStatus",
    "CarView",
    "Vector",
    "ZERO_ACCELERATION",
]
