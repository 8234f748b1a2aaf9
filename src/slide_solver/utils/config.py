"""
Configuration and registries.
"""

from pathlib import Path
from typing import Optional

from slide_solver.core.board import MAX_BOARD_SIZE, MIN_BOARD_SIZE
from slide_solver.core.types import AIMode, MoveSpeed
from slide_solver.search.memo import DEFAULT_MAX_ENTRIES


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------

PACKAGE_DIR = Path(__file__).parent.parent  # src/slide_solver/
DATA_DIR = PACKAGE_DIR / "data"
DEFAULT_WEIGHTS_PATH = DATA_DIR / "weights.json"


# ---------------------------------------------------------------------------
# Registries
# ---------------------------------------------------------------------------

MODES = {mode.value: mode for mode in AIMode}
SPEEDS = {speed.value: speed for speed in MoveSpeed}
BOARD_SIZES = tuple(range(MIN_BOARD_SIZE, MAX_BOARD_SIZE + 1))


# ---------------------------------------------------------------------------
# Default Settings
# ---------------------------------------------------------------------------

class Config:
    """Solver configuration with sensible defaults."""

    def __init__(
        self,
        board_size: int = 4,
        mode: str = "balanced",
        speed: str = "normal",
        cache_size: int = DEFAULT_MAX_ENTRIES,
        weights_path: Optional[str | Path] = None,
        seed: Optional[int] = None,
    ):
        if board_size not in BOARD_SIZES:
            raise ValueError(
                f"Unsupported board size: {board_size}. "
                f"Supported: {BOARD_SIZES[0]}-{BOARD_SIZES[-1]}"
            )
        if cache_size < 1:
            raise ValueError(f"cache_size must be positive, got {cache_size}")
        if mode not in MODES:
            raise ValueError(f"Unknown mode: {mode}. Available: {', '.join(MODES)}")
        if speed not in SPEEDS:
            raise ValueError(f"Unknown speed: {speed}. Available: {', '.join(SPEEDS)}")

        self.board_size = board_size
        self.mode = MODES[mode]
        self.speed = SPEEDS[speed]
        self.cache_size = cache_size
        self.weights_path = Path(weights_path) if weights_path is not None else None
        self.seed = seed


# Default configuration
DEFAULT_CONFIG = Config()
