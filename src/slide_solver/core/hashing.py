"""
Board hashing utilities - packed integer keys for memo tables.
"""

import numpy as np

from slide_solver.core.board import tile_exponents

# Bits per cell; exponents up to 31 (tiles up to 2^31)
CELL_BITS = 5


def board_key(board: np.ndarray) -> int:
    """
    Pack a board into a single integer.

    The board size is the leading field, so boards of different sizes
    never collide. Each cell contributes its tile exponent in CELL_BITS.
    """
    key = board.shape[0]
    for exp in tile_exponents(board).ravel().tolist():
        key = (key << CELL_BITS) | exp
    return key
