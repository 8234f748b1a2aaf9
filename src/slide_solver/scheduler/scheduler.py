"""
AI scheduler - drives the search engine at a fixed cadence on an asyncio loop.

The scheduler is a two-state machine (idle / running) that owns exactly one
pending loop handle. Every cycle asks the engine for a move on the latest
board and hands it to the board owner. Stopping cancels the handle, so no
move is applied after stop() or close() returns.

Turbo speed reschedules with loop.call_soon, which yields to the event loop
between cycles instead of spinning, so the host keeps rendering.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from slide_solver.core.types import MOVE_SPEEDS, AIMode, Direction, MoveSpeed
from slide_solver.evaluation.ntuple_weights import WeightLoader
from slide_solver.search.engine import SearchEngine

logger = logging.getLogger(__name__)

BoardProvider = Callable[[], np.ndarray]
GameOverProvider = Callable[[], bool]
MoveCallback = Callable[[Direction], None]

DEFAULT_MODE = AIMode.BALANCED
DEFAULT_SPEED = MoveSpeed.NORMAL


@dataclass(frozen=True)
class SchedulerState:
    """Read-only snapshot of the scheduler."""
    running: bool
    mode: AIMode
    speed: MoveSpeed
    loading_weights: bool
    pending_mode: Optional[AIMode]
    weight_load_error: Optional[str]
    last_error: Optional[str]
    moves_applied: int


class AIScheduler:
    """
    Repeatedly chooses and applies moves until stopped or the game ends.

    Args:
        get_board: Returns the current board (read fresh every cycle)
        is_game_over: Returns the owner's game-over flag
        apply_move: Applies a direction (animated)
        apply_move_immediate: Applies a direction without animation; used at turbo speed
        engine: Search engine (a fresh one if omitted)
        mode: Initial AI mode
        speed: Initial move speed
        weight_loader: Async source of trained N-Tuple weights for ntuple mode
        loop: Event loop to schedule on (the running loop if omitted)
    """

    def __init__(
        self,
        get_board: BoardProvider,
        is_game_over: GameOverProvider,
        apply_move: MoveCallback,
        apply_move_immediate: Optional[MoveCallback] = None,
        *,
        engine: Optional[SearchEngine] = None,
        mode: AIMode = DEFAULT_MODE,
        speed: MoveSpeed = DEFAULT_SPEED,
        weight_loader: Optional[WeightLoader] = None,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        self.engine = engine or SearchEngine()
        self._get_board = get_board
        self._is_game_over = is_game_over
        self._apply_move = apply_move
        self._apply_move_immediate = apply_move_immediate
        self._weight_loader = weight_loader
        self._loop = loop

        self._running = False
        self._closed = False
        self._mode = mode
        self._speed = speed
        self._pending_mode: Optional[AIMode] = None
        self._weights_loaded = False
        self._weight_load_error: Optional[str] = None
        self._last_error: Optional[str] = None
        self._moves_applied = 0

        self._handle: Optional[asyncio.Handle] = None
        self._load_task: Optional[asyncio.Task] = None

    def __enter__(self):
        return self

    def __exit__(self, *_):
        self.close()

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def state(self) -> SchedulerState:
        return SchedulerState(
            running=self._running,
            mode=self._mode,
            speed=self._speed,
            loading_weights=self._load_task is not None,
            pending_mode=self._pending_mode,
            weight_load_error=self._weight_load_error,
            last_error=self._last_error,
            moves_applied=self._moves_applied,
        )

    @property
    def running(self) -> bool:
        return self._running

    @property
    def closed(self) -> bool:
        return self._closed

    # -------------------------------------------------------------------------
    # Controls
    # -------------------------------------------------------------------------

    def start(self) -> None:
        """Run one cycle now, then keep cycling at the current speed."""
        if self._closed or self._running:
            return
        if self._is_game_over():
            logger.debug("start ignored: game is over")
            return

        self._running = True
        self._last_error = None
        self._run_cycle()
        if self._running:
            self._arm()

    def stop(self) -> None:
        self._running = False
        self._cancel_handle()

    def notify_game_over(self) -> None:
        """Board owner reports the game ended."""
        if self._running:
            logger.info("Game over after %d AI moves", self._moves_applied)
        self.stop()

    def set_speed(self, speed: MoveSpeed) -> None:
        """Change the delay; a running schedule is re-armed immediately."""
        if self._closed:
            return
        self._speed = speed
        if self._running:
            self._arm()

    def set_mode(self, mode: AIMode) -> Optional[asyncio.Task]:
        """
        Use `mode` for the following cycles without interrupting the schedule.

        Switching to ntuple with a weight loader first loads trained weights
        in the background and returns that task. The previous mode stays
        active until the load succeeds; on failure it stays for good and
        the error is exposed as `state.weight_load_error`.
        """
        if self._closed:
            return None

        self._weight_load_error = None
        self._cancel_load()

        if mode is AIMode.NTUPLE and self._weight_loader is not None and not self._weights_loaded:
            self._pending_mode = mode
            self._load_task = self._get_loop().create_task(self._load_weights(mode))
            return self._load_task

        self._mode = mode
        return None

    def close(self) -> None:
        """Tear down: cancel the timer and any weight load. Irreversible."""
        self._closed = True
        self.stop()
        self._cancel_load()

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def _cancel_handle(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _cancel_load(self) -> None:
        if self._load_task is not None:
            self._load_task.cancel()
            self._load_task = None
        self._pending_mode = None

    def _arm(self) -> None:
        self._cancel_handle()
        loop = self._get_loop()
        delay_ms = MOVE_SPEEDS[self._speed]
        if delay_ms == 0:
            self._handle = loop.call_soon(self._tick)
        else:
            self._handle = loop.call_later(delay_ms / 1000.0, self._tick)

    def _tick(self) -> None:
        self._handle = None
        if not self._running or self._closed:
            return
        self._run_cycle()
        if self._running:
            self._arm()

    def _run_cycle(self) -> bool:
        """
        One choose-and-apply step. Returns True if a move was applied.

        Errors from the engine or the callbacks stop the scheduler and are
        kept in `state.last_error`; they never reach the event loop.
        """
        try:
            if self._is_game_over():
                self.notify_game_over()
                return False

            direction = self.engine.choose_move(self._get_board(), self._mode)
            if direction is None:
                return False

            if self._speed is MoveSpeed.TURBO and self._apply_move_immediate is not None:
                self._apply_move_immediate(direction)
            else:
                self._apply_move(direction)
            self._moves_applied += 1
            return True

        except Exception as e:
            logger.exception("AI cycle failed, stopping")
            self._last_error = str(e) or type(e).__name__
            self.stop()
            return False

    async def _load_weights(self, mode: AIMode) -> bool:
        evaluator = self.engine.pattern_evaluator
        ok = await evaluator.load(self._weight_loader)

        self._load_task = None
        self._pending_mode = None
        if ok:
            self._weights_loaded = True
            self._mode = mode
            self.engine.ntuple_memo.clear()
        else:
            self._weight_load_error = evaluator.last_error
        return ok


def create_scheduler(
    get_board: BoardProvider,
    is_game_over: GameOverProvider,
    apply_move: MoveCallback,
    apply_move_immediate: Optional[MoveCallback] = None,
    **options,
) -> AIScheduler:
    """Build a scheduler; keyword options are passed to AIScheduler."""
    return AIScheduler(get_board, is_game_over, apply_move, apply_move_immediate, **options)
