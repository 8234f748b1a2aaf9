"""
N-Tuple weight management.

- Default patterns and the heuristic weights used before (or instead of)
  a trained set
- File-backed loaders for trained weight sets
- PatternEvaluator: the swappable active evaluator injected into search
"""

from __future__ import annotations

import asyncio
import functools
import logging
from pathlib import Path
from typing import Awaitable, Callable, List, Optional

import numpy as np

from slide_solver.evaluation.ntuple import (
    INDEX_BASE,
    WEIGHTS_DTYPE,
    NTupleNetwork,
    Pattern,
    PatternSet,
    WeightLoadError,
    lut_size,
)

logger = logging.getLogger(__name__)

WeightLoader = Callable[[], Awaitable[PatternSet]]


# ---------------------------------------------------------------------------
# Default patterns
# ---------------------------------------------------------------------------

HORIZONTAL_4TUPLE: List[Pattern] = [tuple((r, c) for c in range(4)) for r in range(4)]
VERTICAL_4TUPLE: List[Pattern] = [tuple((r, c) for r in range(4)) for c in range(4)]

# 2x3 blocks at every position on a 4x4 board
RECTANGLE_6TUPLE: List[Pattern] = [
    tuple((r + dr, c + dc) for dr in range(2) for dc in range(3))
    for r in range(3) for c in range(2)
]

# 3x2 blocks anchored on the left and right edges
CORNER_6TUPLE: List[Pattern] = [
    tuple((r + dr, c + dc) for dr in range(3) for dc in range(2))
    for r in range(2) for c in (0, 2)
]

# Every row and column of a 4x4 board; small enough to ship as JSON
DEFAULT_PATTERNS: List[Pattern] = HORIZONTAL_4TUPLE + VERTICAL_4TUPLE
SIMPLE_4TUPLE_PATTERNS: List[Pattern] = HORIZONTAL_4TUPLE + VERTICAL_4TUPLE

# Layout of large trained weight files (16^6 weights per tuple)
FULL_6TUPLE_PATTERNS: List[Pattern] = RECTANGLE_6TUPLE + CORNER_6TUPLE


@functools.lru_cache(maxsize=None)
def _heuristic_lut(tuple_size: int) -> np.ndarray:
    """
    Heuristic weight for every index of a tuple of `tuple_size` cells.

    Rewards big tiles, monotone tuples and empty cells; penalizes large
    exponent jumps between neighbouring non-empty cells.
    """
    indices = np.arange(lut_size(tuple_size), dtype=np.int64)
    place = INDEX_BASE ** np.arange(tuple_size - 1, -1, -1, dtype=np.int64)
    exps = (indices[:, None] // place) % INDEX_BASE

    score = np.where(exps > 0, np.exp2(exps) * 0.1, 0.0).sum(axis=1)

    steps = np.diff(exps, axis=1)
    score += np.all(steps >= 0, axis=1) * 100.0
    score += np.all(steps <= 0, axis=1) * 100.0

    both_filled = (exps[:, 1:] > 0) & (exps[:, :-1] > 0)
    jumps = np.abs(steps)
    score -= np.where(both_filled & (jumps > 2), jumps * 10.0, 0.0).sum(axis=1)

    score += (exps == 0).sum(axis=1) * 50.0

    lut = score.astype(WEIGHTS_DTYPE)
    lut.setflags(write=False)
    return lut


def create_default_pattern_set() -> PatternSet:
    """Heuristic weights over DEFAULT_PATTERNS. No I/O, always available."""
    return PatternSet(
        patterns=list(DEFAULT_PATTERNS),
        weights=[_heuristic_lut(len(p)) for p in DEFAULT_PATTERNS],
        version=1,
        metadata={"trainedGames": 0, "avgScore": 0, "maxTile": 0},
    )


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def load_pattern_set(path: str | Path) -> PatternSet:
    """Read and validate a weights JSON file."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise WeightLoadError(f"Cannot read weights file {path}: {e}") from e
    return PatternSet.from_json(text)


async def load_pattern_set_async(path: str | Path) -> PatternSet:
    """Same as load_pattern_set, off the event loop thread."""
    return await asyncio.to_thread(load_pattern_set, path)


def file_loader(path: str | Path) -> WeightLoader:
    """Zero-argument async loader bound to one file (for the scheduler)."""
    async def _load() -> PatternSet:
        return await load_pattern_set_async(path)
    return _load


def save_pattern_set(pattern_set: PatternSet, path: str | Path, pretty: bool = False) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(pattern_set.to_json(pretty=pretty), encoding="utf-8")


# ---------------------------------------------------------------------------
# Active evaluator
# ---------------------------------------------------------------------------

class PatternEvaluator:
    """
    Holds the active N-Tuple network.

    Starts on the default heuristic set so evaluation never waits on I/O.
    Replacing the network swaps a single reference: an evaluation already
    running keeps the network it started with.
    """

    def __init__(self, pattern_set: Optional[PatternSet] = None):
        self._network = NTupleNetwork.from_pattern_set(pattern_set or create_default_pattern_set())
        self._generation = 0
        self.loading = False
        self.last_error: Optional[str] = None

    @property
    def network(self) -> NTupleNetwork:
        return self._network

    @property
    def identity(self) -> int:
        """Changes every time the active weights change (part of memo keys)."""
        return self._generation

    def evaluate(self, board: np.ndarray) -> float:
        return self._network.evaluate(board)

    def replace(self, pattern_set: PatternSet) -> None:
        """Validate and swap in a new weight set."""
        pattern_set.validate()
        self._network = NTupleNetwork.from_pattern_set(pattern_set)
        self._generation += 1
        self.last_error = None

    def reset(self) -> None:
        """Back to the default heuristic weights."""
        self._network = NTupleNetwork.from_pattern_set(create_default_pattern_set())
        self._generation += 1
        self.last_error = None

    async def load(self, loader: WeightLoader) -> bool:
        """
        Fetch a weight set and swap it in.

        Returns False on failure; the current weights stay active and the
        message is kept in `last_error`.
        """
        self.loading = True
        try:
            pattern_set = await loader()
            self.replace(pattern_set)
        except Exception as e:
            self.last_error = str(e) or type(e).__name__
            logger.warning("Failed to load N-Tuple weights, keeping current set: %s", self.last_error)
            return False
        finally:
            self.loading = False

        logger.info("Loaded N-Tuple weights (%d patterns)", len(self._network.patterns))
        return True
