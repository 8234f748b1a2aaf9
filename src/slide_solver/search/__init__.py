"""
Search module - move choosers for every AI mode.

Provides the main entry points:
- SearchEngine.choose_move(): dispatch on AIMode with engine-owned caches
- choose_move(): one-off convenience wrapper
"""

from slide_solver.search.engine import SearchEngine, choose_move
from slide_solver.search.expectimax import adaptive_depth, expectimax, expectimax_move
from slide_solver.search.greedy import fast_move
from slide_solver.search.memo import MemoTable
from slide_solver.search.minimax import minimax, minimax_move

__all__ = [
    "SearchEngine",
    "MemoTable",
    "choose_move",
    "fast_move",
    "minimax",
    "minimax_move",
    "expectimax",
    "expectimax_move",
    "adaptive_depth",
]
