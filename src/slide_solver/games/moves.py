"""
Move simulation - the deterministic sliding and merging rules.

Every direction is reduced to "collapse toward the start of each line" by
looking at the board through an oriented view. Writing merged lines into
the same view of a copy applies the inverse mapping for free.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np

from slide_solver.core.types import DIRECTIONS, Direction, SimulationResult


def _oriented(board: np.ndarray, direction: Direction) -> np.ndarray:
    """View of `board` whose rows are the lines in collapse order."""
    if direction is Direction.LEFT:
        return board
    if direction is Direction.RIGHT:
        return board[:, ::-1]
    if direction is Direction.UP:
        return board.T
    return board[::-1, :].T


def merge_line(line: Sequence[int]) -> Tuple[List[int], int, bool]:
    """
    Compress and merge one line toward index 0.

    Adjacent equal tiles merge once per pair; a merged tile never merges
    again in the same pass, so [2, 2, 2, 2] becomes [4, 4, 0, 0].

    Returns:
        (new_line, score, moved) where score is the sum of merged values.
    """
    tiles = [v for v in line if v != 0]
    result: List[int] = []
    score = 0
    i = 0
    while i < len(tiles):
        if i + 1 < len(tiles) and tiles[i] == tiles[i + 1]:
            merged = tiles[i] * 2
            result.append(merged)
            score += merged
            i += 2
        else:
            result.append(tiles[i])
            i += 1

    result.extend([0] * (len(line) - len(result)))
    moved = any(a != b for a, b in zip(line, result))
    return result, score, moved


def simulate(board: np.ndarray, direction: Direction) -> SimulationResult:
    """Slide the board in one direction. Never mutates the input."""
    new_board = board.copy()
    view = _oriented(new_board, direction)
    total = 0
    any_moved = False

    for i, line in enumerate(view.tolist()):
        merged, score, moved = merge_line(line)
        if moved:
            view[i] = merged
            total += score
            any_moved = True

    return SimulationResult(new_board, any_moved, total)


def can_move(board: np.ndarray, direction: Direction) -> bool:
    for line in _oriented(board, direction).tolist():
        if merge_line(line)[2]:
            return True
    return False


def legal_directions(board: np.ndarray) -> List[Direction]:
    """Directions that change the board, in DIRECTIONS order."""
    return [d for d in DIRECTIONS if can_move(board, d)]


def is_game_over(board: np.ndarray) -> bool:
    """True when the board is full and no two neighbours are equal."""
    if np.any(board == 0):
        return False
    if np.any(board[:, 1:] == board[:, :-1]):
        return False
    return not np.any(board[1:, :] == board[:-1, :])
