"""
Factory functions for creating engines, games and schedulers.
"""

import random
from typing import Optional

from slide_solver.evaluation.ntuple_weights import PatternEvaluator, WeightLoader, file_loader
from slide_solver.games.twenty_forty_eight import TwentyFortyEight
from slide_solver.scheduler.scheduler import AIScheduler
from slide_solver.search.engine import SearchEngine
from slide_solver.utils.config import Config


def _rng(config: Config, stream: int) -> random.Random:
    """Independent, reproducible random stream per component."""
    if config.seed is None:
        return random.Random()
    return random.Random(config.seed * 1_000_003 + stream)


def create_engine(config: Config) -> SearchEngine:
    """
    Create a search engine with its own caches and pattern evaluator.

    Args:
        config: Solver configuration

    Returns:
        Engine using the default N-Tuple weights until others are loaded
    """
    return SearchEngine(
        pattern_evaluator=PatternEvaluator(),
        cache_size=config.cache_size,
        rng=_rng(config, 1),
    )


def create_game(config: Config) -> TwentyFortyEight:
    """
    Create a game with its initial tiles placed.

    Args:
        config: Solver configuration

    Returns:
        Fresh game of config.board_size
    """
    game = TwentyFortyEight(config.board_size, rng=_rng(config, 2))
    game.new_game()
    return game


def create_weight_loader(config: Config) -> Optional[WeightLoader]:
    """File loader for config.weights_path, or None to stay on default weights."""
    if config.weights_path is None:
        return None
    return file_loader(config.weights_path)


def create_game_scheduler(
    game: TwentyFortyEight,
    config: Config,
    engine: Optional[SearchEngine] = None,
) -> AIScheduler:
    """
    Wire a scheduler to a game.

    The game has no animation, so both move callbacks apply directly.
    """
    def apply(direction) -> None:
        game.apply_move(direction)

    return AIScheduler(
        get_board=game.board,
        is_game_over=game.is_over,
        apply_move=apply,
        apply_move_immediate=apply,
        engine=engine or create_engine(config),
        speed=config.speed,
        weight_loader=create_weight_loader(config),
    )
