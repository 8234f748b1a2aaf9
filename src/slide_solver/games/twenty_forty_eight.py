"""
TwentyFortyEight - reference board owner for the sliding-tile puzzle.

Owns the board, score and game-over flag; spawns tiles after each move.
The solver only reads boards from it and hands it directions.
"""

from __future__ import annotations

import random
from typing import Optional

import numpy as np

from slide_solver.core.board import empty_cells, new_board, state_string, validate_board
from slide_solver.core.types import Direction
from slide_solver.games.game_state import GameState
from slide_solver.games.moves import is_game_over, simulate

# Tiles spawned on a fresh board
INITIAL_TILES = 2

# Cap for the geometric spawn distribution on large boards
MAX_SPAWN_VALUE = 65536


def random_tile_value(size: int, rng: random.Random) -> int:
    """
    Value of a newly spawned tile.

    Small boards use the classic 90/10 split of 2s and 4s; medium boards
    add 8s; large boards start at 64 and double with probability 0.6.
    """
    if size <= 4:
        return 2 if rng.random() < 0.9 else 4
    if size <= 6:
        if rng.random() < 0.7:
            return 2
        return 4 if rng.random() < 0.7 else 8

    value = 64
    while value < MAX_SPAWN_VALUE and rng.random() >= 0.4:
        value *= 2
    return value


class TwentyFortyEight:
    """Single-player sliding-tile game."""

    __slots__ = ('size', 'state', 'over', 'rng')

    def __init__(self, size: int = 4, rng: Optional[random.Random] = None):
        self.size = size
        self.rng = rng or random.Random()
        self.state = GameState(new_board(size))
        self.over = False

    def game_id(self) -> str:
        return f"2048_{self.size}x{self.size}"

    def new_game(self) -> None:
        """Reset to an empty board with the initial tiles."""
        self.state = GameState(new_board(self.size))
        for _ in range(INITIAL_TILES):
            self.spawn_tile()
        self.over = is_game_over(self.state.board)

    def deep_clone(self) -> "TwentyFortyEight":
        g = TwentyFortyEight.__new__(TwentyFortyEight)
        g.size = self.size
        g.state = self.state.copy()
        g.over = self.over
        g.rng = random.Random(self.rng.random())
        return g

    def get_state(self) -> GameState:
        return self.state

    def set_state(self, game_state: GameState) -> None:
        validate_board(game_state.board)
        if game_state.board.shape[0] != self.size:
            raise ValueError(
                f"Board is {game_state.board.shape[0]}x{game_state.board.shape[0]}, "
                f"game is {self.size}x{self.size}"
            )
        self.state = game_state
        # Recompute terminal flag from state
        self.over = is_game_over(self.state.board)

    def board(self) -> np.ndarray:
        """Copy of the current board (callers never alias game state)."""
        return self.state.board.copy()

    @property
    def score(self) -> int:
        return self.state.score

    def is_over(self) -> bool:
        return self.over

    def spawn_tile(self) -> Optional[tuple]:
        """Place a random tile in a random empty cell. Returns (row, col, value)."""
        cells = empty_cells(self.state.board)
        if not cells:
            return None
        row, col = self.rng.choice(cells)
        value = random_tile_value(self.size, self.rng)
        self.state.board[row, col] = value
        return row, col, value

    def apply_move(self, direction: Direction) -> bool:
        """
        Slide, score, spawn. Returns True if the board changed.

        A direction that does not move is ignored (no spawn).
        """
        if self.over:
            return False

        result = simulate(self.state.board, direction)
        if not result.moved:
            return False

        self.state.board = result.board
        self.state.score += result.score
        self.spawn_tile()
        self.over = is_game_over(self.state.board)
        return True

    def state_string(self) -> str:
        return f"Score: {self.state.score}\n" + state_string(self.state.board)
