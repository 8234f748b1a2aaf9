"""
Expectimax search (optimal and ntuple modes).

The chance ply averages over spawn outcomes instead of assuming the worst:
each sampled empty cell is equally likely, and within a cell a 2 appears
with probability 0.9 and a 4 with probability 0.1.

Depth adapts to the position. A board with many empty cells branches
widely and is rarely critical, so it gets a shallow search; a crowded
board gets a deep one.
"""

from __future__ import annotations

import math
import random
from typing import Callable, Hashable, List, Optional, Sequence, Tuple

import numpy as np

from slide_solver.core.board import count_empty, empty_cells, place_tile
from slide_solver.core.hashing import board_key
from slide_solver.core.types import DIRECTIONS, Direction
from slide_solver.games.moves import simulate
from slide_solver.search.memo import MemoTable

Evaluator = Callable[[np.ndarray], float]

# Spawn outcomes: (value, probability)
SPAWN_OUTCOMES: Tuple[Tuple[int, float], ...] = ((2, 0.9), (4, 0.1))

# Chance-ply sample caps: fewer cells high in the tree, more near leaves
DEEP_SAMPLE_CAP = 4
SHALLOW_SAMPLE_CAP = 6
DEEP_DEPTH_THRESHOLD = 3

# (more than N empty cells, depth) checked in order; fallback is MAX_DEPTH
OPTIMAL_DEPTHS: Tuple[Tuple[int, int], ...] = ((8, 3), (5, 4), (3, 5))
NTUPLE_DEPTHS: Tuple[Tuple[int, int], ...] = ((10, 3), (6, 4), (3, 5))
MAX_DEPTH = 6


def adaptive_depth(board: np.ndarray, thresholds: Sequence[Tuple[int, int]] = OPTIMAL_DEPTHS) -> int:
    empty = count_empty(board)
    for min_empty, depth in thresholds:
        if empty > min_empty:
            return depth
    return MAX_DEPTH


def sample_cells(
    cells: List[Tuple[int, int]],
    cap: int,
    rng: random.Random,
) -> List[Tuple[int, int]]:
    """All cells if within the cap, else `cap` of them after a full shuffle."""
    if len(cells) <= cap:
        return cells
    shuffled = list(cells)
    rng.shuffle(shuffled)
    return shuffled[:cap]


def expectimax(
    board: np.ndarray,
    depth: int,
    agent_turn: bool,
    evaluator: Evaluator,
    memo: Optional[MemoTable] = None,
    rng: Optional[random.Random] = None,
    evaluator_id: Hashable = None,
) -> float:
    """
    Expected score of a position `depth` plies from the leaves.

    Args:
        board: Position to score (not mutated)
        depth: Remaining plies; 0 returns the leaf evaluation
        agent_turn: True for the move ply, False for the spawn ply
        evaluator: Leaf scoring function
        memo: Optional cache keyed by (board, depth, ply kind, evaluator_id)
        rng: Random source for chance-ply sampling
        evaluator_id: Distinguishes cache entries made with other evaluators
    """
    key = None
    if memo is not None:
        key = (board_key(board), depth, agent_turn, evaluator_id)
        cached = memo.get(key)
        if cached is not None:
            return cached

    if depth == 0:
        return evaluator(board)

    if agent_turn:
        best = -math.inf
        for direction in DIRECTIONS:
            result = simulate(board, direction)
            if result.moved:
                best = max(best, expectimax(result.board, depth - 1, False, evaluator, memo, rng, evaluator_id))
        score = best if best != -math.inf else evaluator(board)
    else:
        cells = empty_cells(board)
        if not cells:
            score = expectimax(board, depth - 1, True, evaluator, memo, rng, evaluator_id)
        else:
            cap = DEEP_SAMPLE_CAP if depth > DEEP_DEPTH_THRESHOLD else SHALLOW_SAMPLE_CAP
            sampled = sample_cells(cells, cap, rng or random)
            total = 0.0
            for r, c in sampled:
                for value, probability in SPAWN_OUTCOMES:
                    child = place_tile(board, r, c, value)
                    total += probability * expectimax(child, depth - 1, True, evaluator, memo, rng, evaluator_id)
            score = total / len(sampled)

    if memo is not None:
        memo.put(key, score)
    return score


def expectimax_move(
    board: np.ndarray,
    evaluator: Evaluator,
    depth: int,
    memo: Optional[MemoTable] = None,
    rng: Optional[random.Random] = None,
    evaluator_id: Hashable = None,
) -> Optional[Direction]:
    """Best direction by expected score; ties go to the earlier direction."""
    best_move: Optional[Direction] = None
    best_score = -math.inf

    for direction in DIRECTIONS:
        result = simulate(board, direction)
        if result.moved:
            score = expectimax(result.board, depth - 1, False, evaluator, memo, rng, evaluator_id)
            if score > best_score:
                best_score = score
                best_move = direction

    return best_move
