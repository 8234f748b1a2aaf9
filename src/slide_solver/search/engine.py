"""
SearchEngine - owns search state and dispatches on AI mode.

Memo tables, the pattern evaluator and the random source all live on the
engine instance, so independent engines never share cached results.
"""

from __future__ import annotations

import logging
import random
from typing import Optional

import numpy as np

from slide_solver.core.types import AIMode, Direction
from slide_solver.evaluation.heuristics import evaluate, evaluate_optimal
from slide_solver.evaluation.ntuple_weights import PatternEvaluator
from slide_solver.search.expectimax import NTUPLE_DEPTHS, OPTIMAL_DEPTHS, adaptive_depth, expectimax_move
from slide_solver.search.greedy import fast_move
from slide_solver.search.memo import DEFAULT_MAX_ENTRIES, MemoTable
from slide_solver.search.minimax import MINIMAX_DEPTH, minimax_move

logger = logging.getLogger(__name__)


class SearchEngine:
    """
    Chooses moves for every AI mode.

    Args:
        pattern_evaluator: Active N-Tuple evaluator (default heuristic set if omitted)
        cache_size: Entry ceiling for each memo table
        rng: Random source for expectimax sampling
        use_cache: Disable to run the searches without memoization
    """

    def __init__(
        self,
        pattern_evaluator: Optional[PatternEvaluator] = None,
        cache_size: int = DEFAULT_MAX_ENTRIES,
        rng: Optional[random.Random] = None,
        use_cache: bool = True,
    ):
        self.pattern_evaluator = pattern_evaluator or PatternEvaluator()
        self.rng = rng or random.Random()
        self.use_cache = use_cache

        self.minimax_memo = MemoTable(cache_size)
        self.expectimax_memo = MemoTable(cache_size)
        self.ntuple_memo = MemoTable(cache_size)

    def replace_pattern_evaluator(self, pattern_evaluator: PatternEvaluator) -> None:
        self.pattern_evaluator = pattern_evaluator
        self.ntuple_memo.clear()

    def clear_caches(self) -> None:
        self.minimax_memo.clear()
        self.expectimax_memo.clear()
        self.ntuple_memo.clear()

    # -------------------------------------------------------------------------
    # Modes
    # -------------------------------------------------------------------------

    def fast_move(self, board: np.ndarray) -> Optional[Direction]:
        return fast_move(board)

    def balanced_move(self, board: np.ndarray) -> Optional[Direction]:
        # Heuristic leaf never changes, so entries stay valid across moves
        memo = self.minimax_memo if self.use_cache else None
        return minimax_move(board, evaluate, memo, depth=MINIMAX_DEPTH, evaluator_id="balanced")

    def optimal_move(self, board: np.ndarray) -> Optional[Direction]:
        self.expectimax_memo.clear()
        memo = self.expectimax_memo if self.use_cache else None
        depth = adaptive_depth(board, OPTIMAL_DEPTHS)
        return expectimax_move(
            board, evaluate_optimal, depth, memo, self.rng, evaluator_id="optimal"
        )

    def ntuple_move(self, board: np.ndarray) -> Optional[Direction]:
        self.ntuple_memo.clear()
        memo = self.ntuple_memo if self.use_cache else None
        # Pin the network for this search; a concurrent swap only affects the next one
        network = self.pattern_evaluator.network
        depth = adaptive_depth(board, NTUPLE_DEPTHS)
        return expectimax_move(
            board,
            network.evaluate,
            depth,
            memo,
            self.rng,
            evaluator_id=("ntuple", self.pattern_evaluator.identity),
        )

    def choose_move(self, board: np.ndarray, mode: AIMode) -> Optional[Direction]:
        """
        Best direction for the board under the given mode.

        Returns None when no direction changes the board.
        """
        if mode is AIMode.BALANCED:
            move = self.balanced_move(board)
        elif mode is AIMode.OPTIMAL:
            move = self.optimal_move(board)
        elif mode is AIMode.NTUPLE:
            move = self.ntuple_move(board)
        else:
            move = self.fast_move(board)

        logger.debug("mode=%s move=%s", mode.value, move.value if move else None)
        return move


def choose_move(
    board: np.ndarray,
    mode: AIMode,
    engine: Optional[SearchEngine] = None,
) -> Optional[Direction]:
    """Convenience wrapper; a fresh engine is used when none is given."""
    return (engine or SearchEngine()).choose_move(board, mode)
