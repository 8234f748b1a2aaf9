"""
Heuristic board evaluation.

Pure scoring functions over a board; higher is better. All terms work in
log2 space (empty cells count as 0) so that a 2048 tile and a 4096 tile
are one step apart, not 2048 apart. The only exception is the corner
bonus, which adds the raw max tile.
"""

from __future__ import annotations

from typing import Tuple

import numpy as np

from slide_solver.core.board import count_empty, log_values, max_tile
from slide_solver.evaluation.profiles import BALANCED_WEIGHTS, OPTIMAL_WEIGHTS, EvaluationWeights

# Snake bonus scaling and per-step decay away from the corner
SNAKE_SCALE = 0.1
SNAKE_DECAY = 0.5


def _axis_monotonicity(logs: np.ndarray) -> float:
    """Best of the two signed orderings along axis 1."""
    diff = logs[:, 1:] - logs[:, :-1]
    # Decreasing steps penalize the increasing ordering and vice versa
    decreasing = float(np.minimum(diff, 0.0).sum())
    increasing = float(-np.maximum(diff, 0.0).sum())
    return max(decreasing, increasing)


def monotonicity(board: np.ndarray) -> float:
    """
    Sum over both axes of the better monotone ordering.

    0 is perfect; more negative means magnitudes zig-zag.
    """
    logs = log_values(board)
    return _axis_monotonicity(logs) + _axis_monotonicity(logs.T)


def smoothness(board: np.ndarray) -> float:
    """Negative sum of log2 gaps between adjacent non-empty tiles."""
    logs = log_values(board)
    filled = board != 0

    h_mask = filled[:, 1:] & filled[:, :-1]
    v_mask = filled[1:, :] & filled[:-1, :]
    h = np.abs(logs[:, 1:] - logs[:, :-1])[h_mask].sum()
    v = np.abs(logs[1:, :] - logs[:-1, :])[v_mask].sum()
    return -float(h + v)


def merge_potential(board: np.ndarray) -> float:
    """Sum of log2(value) over adjacent equal non-empty pairs."""
    logs = log_values(board)
    filled = board != 0

    h_mask = filled[:, :-1] & (board[:, :-1] == board[:, 1:])
    v_mask = filled[:-1, :] & (board[:-1, :] == board[1:, :])
    return float(logs[:, :-1][h_mask].sum() + logs[:-1, :][v_mask].sum())


def corners(size: int) -> Tuple[Tuple[int, int], ...]:
    """Corner coordinates in checking order."""
    last = size - 1
    return ((0, 0), (0, last), (last, 0), (last, last))


def snake_weights(size: int, corner: Tuple[int, int]) -> np.ndarray:
    """0.5 ** (Manhattan distance from corner) for every cell."""
    rows, cols = np.indices((size, size))
    dist = np.abs(rows - corner[0]) + np.abs(cols - corner[1])
    return SNAKE_DECAY ** dist


def corner_bonus(board: np.ndarray) -> float:
    """
    Reward the largest tile sitting in a corner.

    The first corner holding the max tile earns the tile value plus a small
    snake term favouring big tiles close to that corner.
    """
    top = max_tile(board)
    size = board.shape[0]

    for corner in corners(size):
        if board[corner] == top:
            snake = float((log_values(board) * snake_weights(size, corner)).sum())
            return top + snake * SNAKE_SCALE

    return 0.0


def evaluate(board: np.ndarray, weights: EvaluationWeights = BALANCED_WEIGHTS) -> float:
    """Weighted sum of all heuristic terms."""
    empty = count_empty(board)
    empty_ratio = empty / board.size

    score = (
        empty * weights.empty_weight * weights.phase_multiplier(empty_ratio)
        + monotonicity(board) * weights.monotonicity_weight
        + smoothness(board) * weights.smoothness_weight
        + np.log2(max_tile(board) + 1) * weights.max_tile_weight
        + corner_bonus(board) * weights.corner_weight
    )
    if weights.merge_weight:
        score += merge_potential(board) * weights.merge_weight
    return float(score)


def evaluate_optimal(board: np.ndarray) -> float:
    return evaluate(board, OPTIMAL_WEIGHTS)
