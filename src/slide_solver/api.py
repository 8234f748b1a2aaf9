"""
Public API for move choice and self-play.

Usage:
    from slide_solver import choose_move, AIMode, as_board

    board = as_board([[2, 2, 0, 0], [0, 4, 0, 0], [0, 0, 0, 0], [0, 0, 0, 2]])
    direction = choose_move(board, AIMode.OPTIMAL)

    # Or let the scheduler play a whole game on the event loop
    asyncio.run(play_game(create_game(config), config))
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional, TYPE_CHECKING

from slide_solver.core.types import Direction
from slide_solver.evaluation.heuristics import evaluate, evaluate_optimal
from slide_solver.evaluation.ntuple import evaluate_patterns
from slide_solver.games.moves import can_move, simulate
from slide_solver.scheduler.scheduler import SchedulerState, create_scheduler
from slide_solver.search.engine import SearchEngine, choose_move
from slide_solver.utils.factory import create_engine, create_weight_loader

if TYPE_CHECKING:
    from slide_solver.games.twenty_forty_eight import TwentyFortyEight
    from slide_solver.utils.config import Config

logger = logging.getLogger(__name__)

# How often play_game checks whether the scheduler has stopped (seconds)
POLL_INTERVAL = 0.02

MoveObserver = Callable[["TwentyFortyEight", Direction], None]


async def play_game(
    game: "TwentyFortyEight",
    config: "Config",
    engine: Optional[SearchEngine] = None,
    on_move: Optional[MoveObserver] = None,
    max_moves: Optional[int] = None,
) -> SchedulerState:
    """
    Let the AI play `game` until it ends, hits `max_moves`, or fails.

    If trained weights cannot be loaded for ntuple mode, the game is played
    in the scheduler's default mode and the reason is logged.

    Args:
        game: Board owner; mutated in place
        config: Mode, speed and weight source
        engine: Reuse an engine (and its caches) across games
        on_move: Called after every applied move with (game, direction)
        max_moves: Stop after this many moves

    Returns:
        Final scheduler snapshot; `last_error` is set if a cycle failed
    """
    applied = 0

    def apply(direction: Direction) -> None:
        nonlocal applied
        game.apply_move(direction)
        applied += 1
        if on_move is not None:
            on_move(game, direction)
        if game.is_over():
            scheduler.notify_game_over()
        elif max_moves is not None and applied >= max_moves:
            scheduler.stop()

    scheduler = create_scheduler(
        game.board,
        game.is_over,
        apply,
        apply,
        engine=engine or create_engine(config),
        speed=config.speed,
        weight_loader=create_weight_loader(config),
    )

    with scheduler:
        load = scheduler.set_mode(config.mode)
        if load is not None:
            await load
            error = scheduler.state.weight_load_error
            if error:
                logger.warning(
                    "Could not load N-Tuple weights, playing in %s mode: %s",
                    scheduler.state.mode.value, error,
                )

        scheduler.start()
        while scheduler.running:
            await asyncio.sleep(POLL_INTERVAL)

        return scheduler.state


__all__ = [
    "simulate",
    "can_move",
    "evaluate",
    "evaluate_optimal",
    "evaluate_patterns",
    "choose_move",
    "create_scheduler",
    "play_game",
    "SearchEngine",
]
