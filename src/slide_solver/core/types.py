"""
Core types, constants, and data structures.

This module contains the fundamental types used throughout the solver:
- Direction: the four move directions and their canonical iteration order
- SimulationResult: outcome of sliding a board in one direction
- AIMode / MoveSpeed: the selectable effort and cadence settings
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, NamedTuple, Tuple

import numpy as np


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


# Iteration order wherever it affects tie-breaking
DIRECTIONS: Tuple[Direction, ...] = (
    Direction.UP,
    Direction.DOWN,
    Direction.LEFT,
    Direction.RIGHT,
)


class SimulationResult(NamedTuple):
    """Result of sliding a board; `board` is always a fresh array."""

    board: np.ndarray
    moved: bool
    score: int


class AIMode(Enum):
    FAST = "fast"
    BALANCED = "balanced"
    OPTIMAL = "optimal"
    NTUPLE = "ntuple"


class MoveSpeed(Enum):
    TURBO = "turbo"
    FAST = "fast"
    NORMAL = "normal"
    SLOW = "slow"


# Inter-move delay in milliseconds
MOVE_SPEEDS: Dict[MoveSpeed, int] = {
    MoveSpeed.TURBO: 0,
    MoveSpeed.FAST: 100,
    MoveSpeed.NORMAL: 300,
    MoveSpeed.SLOW: 500,
}
