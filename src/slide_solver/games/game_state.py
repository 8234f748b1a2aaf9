"""
GameState - mutable game state container.

Optimized for fast copying.
"""

from __future__ import annotations

import numpy as np


class GameState:
    """
    Lightweight game state container.

    Board cells:
        0 = empty
        2, 4, 8, ... = tile values
    """
    __slots__ = ('board', 'score')

    def __init__(self, board: np.ndarray, score: int = 0):
        self.board = board
        self.score = score

    def copy(self) -> "GameState":
        """Fast copy - board.copy() is optimized for contiguous int arrays."""
        return GameState(self.board.copy(), self.score)
