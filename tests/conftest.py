"""
Shared test fixtures for slide_solver tests.

Design principles:
- Small, hand-written boards whose outcomes are easy to verify by eye
- Seeded random sources so search and spawns are reproducible
- Minimal, focused fixtures
"""

import random
import tempfile
from pathlib import Path
from typing import Generator

import numpy as np
import pytest

from slide_solver.core.board import as_board, new_board
from slide_solver.evaluation.ntuple_weights import PatternEvaluator
from slide_solver.games.twenty_forty_eight import TwentyFortyEight
from slide_solver.search.engine import SearchEngine


# =============================================================================
# Path Fixtures
# =============================================================================

@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Temporary directory with cleanup."""
    with tempfile.TemporaryDirectory() as d:
        yield Path(d)


# =============================================================================
# Board Fixtures
# =============================================================================

@pytest.fixture
def empty_board() -> np.ndarray:
    return new_board(4)


@pytest.fixture
def sparse_board() -> np.ndarray:
    """Early-game board with plenty of empty cells."""
    return as_board([
        [2, 0, 0, 0],
        [0, 4, 0, 0],
        [0, 0, 2, 0],
        [0, 0, 0, 8],
    ])


@pytest.fixture
def midgame_board() -> np.ndarray:
    """Board with a big tile in the bottom-right corner and 9 empty cells."""
    return as_board([
        [0, 0, 0, 0],
        [0, 0, 2, 0],
        [0, 2, 4, 8],
        [0, 4, 16, 128],
    ])


@pytest.fixture
def locked_board() -> np.ndarray:
    """Full board with no adjacent equal tiles: no direction moves."""
    return as_board([
        [2, 4, 2, 4],
        [4, 2, 4, 2],
        [2, 4, 2, 4],
        [4, 2, 4, 2],
    ])


@pytest.fixture
def one_move_board() -> np.ndarray:
    """Full board where only a horizontal merge in the top row is possible."""
    return as_board([
        [2, 2, 4, 8],
        [4, 8, 16, 32],
        [8, 16, 32, 64],
        [16, 32, 64, 128],
    ])


# =============================================================================
# Engine / Game Fixtures
# =============================================================================

@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def engine(rng: random.Random) -> SearchEngine:
    """Engine with a seeded sampler and the default N-Tuple weights."""
    return SearchEngine(pattern_evaluator=PatternEvaluator(), rng=rng)


@pytest.fixture
def game() -> TwentyFortyEight:
    """Fresh seeded 4x4 game with its two starting tiles."""
    g = TwentyFortyEight(4, rng=random.Random(42))
    g.new_game()
    return g
