"""
Minimax search (balanced mode).

Treats tile spawning as an adversary: the chance ply assumes the worst
placement of a 2 among the first few empty cells in scan order. Cheap and
fully deterministic, which is what balanced mode is for.
"""

from __future__ import annotations

import math
from typing import Callable, Hashable, Optional

import numpy as np

from slide_solver.core.board import empty_cells, place_tile
from slide_solver.core.hashing import board_key
from slide_solver.core.types import DIRECTIONS, Direction
from slide_solver.games.moves import simulate
from slide_solver.search.memo import MemoTable

Evaluator = Callable[[np.ndarray], float]

MINIMAX_DEPTH = 2

# Empty cells tried per chance ply (first N in row-major order)
CHANCE_SAMPLES = 4


def minimax(
    board: np.ndarray,
    depth: int,
    agent_turn: bool,
    evaluator: Evaluator,
    memo: Optional[MemoTable] = None,
    evaluator_id: Hashable = None,
) -> float:
    """
    Score a position `depth` plies from the leaves.

    Args:
        board: Position to score (not mutated)
        depth: Remaining plies; 0 returns the static evaluation
        agent_turn: True for the move ply, False for the spawn ply
        evaluator: Leaf scoring function
        memo: Optional cache keyed by (board, depth, ply kind, evaluator_id)
        evaluator_id: Distinguishes cache entries made with other evaluators
    """
    if depth == 0:
        return evaluator(board)

    key = None
    if memo is not None:
        key = (board_key(board), depth, agent_turn, evaluator_id)
        cached = memo.get(key)
        if cached is not None:
            return cached

    if agent_turn:
        best = -math.inf
        for direction in DIRECTIONS:
            result = simulate(board, direction)
            if result.moved:
                best = max(best, minimax(result.board, depth - 1, False, evaluator, memo, evaluator_id))
        score = best if best != -math.inf else evaluator(board)
    else:
        cells = empty_cells(board)
        if not cells:
            score = minimax(board, depth - 1, True, evaluator, memo, evaluator_id)
        else:
            score = min(
                minimax(place_tile(board, r, c, 2), depth - 1, True, evaluator, memo, evaluator_id)
                for r, c in cells[:CHANCE_SAMPLES]
            )

    if memo is not None:
        memo.put(key, score)
    return score


def minimax_move(
    board: np.ndarray,
    evaluator: Evaluator,
    memo: Optional[MemoTable] = None,
    depth: int = MINIMAX_DEPTH,
    evaluator_id: Hashable = None,
) -> Optional[Direction]:
    """Best direction by minimax; ties go to the earlier direction."""
    best_move: Optional[Direction] = None
    best_score = -math.inf

    for direction in DIRECTIONS:
        result = simulate(board, direction)
        if result.moved:
            score = minimax(result.board, depth - 1, False, evaluator, memo, evaluator_id)
            if score > best_score:
                best_score = score
                best_move = direction

    return best_move
