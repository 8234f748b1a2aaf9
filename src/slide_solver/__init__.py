"""
Slide Solver - move-choosing AI for 2048-style sliding-tile games.

This package scores boards with hand-tuned heuristics or an N-Tuple network,
searches ahead with greedy, minimax or expectimax strategies, and can drive
a board owner on an asyncio event loop at a configurable pace.

Quick Start:
    from slide_solver import AIMode, as_board, choose_move

    board = as_board([[2, 2, 0, 0], [0, 4, 0, 0], [0, 0, 0, 0], [0, 0, 0, 2]])
    direction = choose_move(board, AIMode.BALANCED)

Modules:
    core       - Directions, modes, speeds, board helpers and hashing
    games      - Slide/merge rules and a reference board owner
    evaluation - Heuristic weights and N-Tuple pattern networks
    search     - Greedy, minimax and expectimax move choosers
    scheduler  - Event-loop driver that plays moves at a set speed
"""

from slide_solver.api import (
    simulate,
    can_move,
    evaluate,
    evaluate_optimal,
    evaluate_patterns,
    choose_move,
    create_scheduler,
    play_game,
    SearchEngine,
)

from slide_solver.core import AIMode, Direction, MoveSpeed, SimulationResult, as_board
from slide_solver.scheduler import AIScheduler, SchedulerState

__version__ = "1.0.0"

__all__ = [
    # Main API
    "simulate",
    "can_move",
    "evaluate",
    "evaluate_optimal",
    "evaluate_patterns",
    "choose_move",
    "create_scheduler",
    "play_game",
    "SearchEngine",
    "AIScheduler",
    "SchedulerState",
    # Types
    "AIMode",
    "Direction",
    "MoveSpeed",
    "SimulationResult",
    "as_board",
]
