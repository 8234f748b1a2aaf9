"""
Board utilities - queries over N×N tile grids.

Boards are integer numpy arrays where 0 is an empty cell and every other
cell holds a power of two. Nothing in here mutates its input.
"""

from __future__ import annotations

from typing import List, Tuple

import numpy as np

BOARD_DTYPE = np.int64

# Supported board sizes
MIN_BOARD_SIZE = 4
MAX_BOARD_SIZE = 7


def new_board(size: int) -> np.ndarray:
    """Return an empty size×size board."""
    return np.zeros((size, size), dtype=BOARD_DTYPE)


def as_board(cells) -> np.ndarray:
    """Copy nested lists (or an array) into a fresh board array."""
    return np.array(cells, dtype=BOARD_DTYPE)


def validate_board(board: np.ndarray) -> None:
    """
    Raise ValueError if the board is not a square grid of 0 / powers of two.

    Search code assumes well-formed boards; call this at the edges.
    """
    if board.ndim != 2 or board.shape[0] != board.shape[1]:
        raise ValueError(f"Board must be square, got shape {board.shape}")
    if board.shape[0] < 2:
        raise ValueError(f"Board too small: {board.shape[0]}")
    if np.any(board < 0):
        raise ValueError("Board contains negative values")
    nonzero = board[board != 0]
    # x & (x - 1) == 0 only for powers of two; 1 is not a valid tile
    if np.any((nonzero & (nonzero - 1)) != 0) or np.any(nonzero == 1):
        raise ValueError("Board contains values that are not tiles")


def count_empty(board: np.ndarray) -> int:
    return int(np.count_nonzero(board == 0))


def empty_cells(board: np.ndarray) -> List[Tuple[int, int]]:
    """Empty cell coordinates in row-major scan order."""
    rows, cols = np.nonzero(board == 0)
    return list(zip(rows.tolist(), cols.tolist()))


def max_tile(board: np.ndarray) -> int:
    return int(board.max()) if board.size else 0


def tile_exponents(board: np.ndarray) -> np.ndarray:
    """log2 of each tile, 0 for empty cells (int array, same shape)."""
    safe = np.where(board > 0, board, 1)
    return np.log2(safe).astype(np.int64)


def log_values(board: np.ndarray) -> np.ndarray:
    """log2 of each tile as floats, 0.0 for empty cells."""
    safe = np.where(board > 0, board, 1)
    return np.log2(safe.astype(np.float64))


def place_tile(board: np.ndarray, row: int, col: int, value: int) -> np.ndarray:
    """Return a copy of the board with one cell set."""
    out = board.copy()
    out[row, col] = value
    return out


def state_string(board: np.ndarray) -> str:
    """Pretty box-drawing rendering of a board."""
    size = board.shape[0]
    width = max(4, len(str(max_tile(board))))
    bar = "─" * (width + 2)
    lines = ["╭" + "┬".join([bar] * size) + "╮"]
    for i in range(size):
        cells = [(str(v) if v else "").center(width) for v in board[i].tolist()]
        lines.append("│ " + " │ ".join(cells) + " │")
        if i < size - 1:
            lines.append("├" + "┼".join([bar] * size) + "┤")
    lines.append("╰" + "┴".join([bar] * size) + "╯")
    return "\n".join(lines)
