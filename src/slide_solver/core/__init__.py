"""
Core module - fundamental types, board queries and hashing.

This module provides the building blocks used throughout the solver.
"""

from slide_solver.core.types import (
    Direction,
    DIRECTIONS,
    SimulationResult,
    AIMode,
    MoveSpeed,
    MOVE_SPEEDS,
)
from slide_solver.core.board import (
    as_board,
    count_empty,
    empty_cells,
    max_tile,
    new_board,
    place_tile,
    tile_exponents,
    validate_board,
)
from slide_solver.core.hashing import board_key

__all__ = [
    # Types
    "Direction",
    "SimulationResult",
    "AIMode",
    "MoveSpeed",
    # Constants
    "DIRECTIONS",
    "MOVE_SPEEDS",
    # Functions
    "as_board",
    "board_key",
    "count_empty",
    "empty_cells",
    "max_tile",
    "new_board",
    "place_tile",
    "tile_exponents",
    "validate_board",
]
