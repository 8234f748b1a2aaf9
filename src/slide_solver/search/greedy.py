"""
Fast mode - a one-ply priority rule, no lookahead.

Keeps tiles packed toward the bottom-right by preferring DOWN, then RIGHT,
then LEFT, then UP, as long as the move leaves some breathing room.
"""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np

from slide_solver.core.board import count_empty
from slide_solver.core.types import DIRECTIONS, Direction
from slide_solver.games.moves import simulate

PRIORITY: Tuple[Direction, ...] = (
    Direction.DOWN,
    Direction.RIGHT,
    Direction.LEFT,
    Direction.UP,
)

# Minimum empties a priority move must leave to be taken outright
MIN_EMPTY_AFTER_MOVE = 2


def fast_move(board: np.ndarray) -> Optional[Direction]:
    """
    First priority direction that is legal and leaves at least
    MIN_EMPTY_AFTER_MOVE empty cells; otherwise the legal direction that
    leaves the most empty cells. None if nothing is legal.
    """
    results = {d: simulate(board, d) for d in DIRECTIONS}

    for direction in PRIORITY:
        result = results[direction]
        if result.moved and count_empty(result.board) >= MIN_EMPTY_AFTER_MOVE:
            return direction

    best: Optional[Direction] = None
    max_empty = -1
    for direction in DIRECTIONS:
        result = results[direction]
        if result.moved:
            empty = count_empty(result.board)
            if empty > max_empty:
                max_empty = empty
                best = direction
    return best
