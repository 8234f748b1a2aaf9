"""
Games module - move rules and the reference board owner.
"""

from slide_solver.games.game_state import GameState
from slide_solver.games.moves import (
    can_move,
    is_game_over,
    legal_directions,
    merge_line,
    simulate,
)
from slide_solver.games.twenty_forty_eight import TwentyFortyEight, random_tile_value

__all__ = [
    "GameState",
    "TwentyFortyEight",
    "can_move",
    "is_game_over",
    "legal_directions",
    "merge_line",
    "random_tile_value",
    "simulate",
]
