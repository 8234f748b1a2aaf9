#!/usr/bin/env python3
"""
Move Search Benchmark
=====================

Location: src/slide_solver/scripts/benchmarks.py

Times how long each AI mode takes to choose a move on a spread of boards,
and optionally shows a cProfile breakdown for one mode.

USAGE
-----
    python -m slide_solver.scripts.benchmarks [mode ...] [num_boards] [options]

ARGUMENTS
---------
    mode        One or more of: fast, balanced, optimal, ntuple (default: all)
    num_boards  Random boards per fill level (default: 5)

OPTIONS
-------
    --size=N    Board size 4-7 (default: 4)
    --profile   cProfile the slowest mode after timing
    --no-cache  Run searches without memo tables

OUTPUT
------
For every mode, the mean and worst time per move, grouped by how full the
board is. Nearly-empty boards are the cheap case for minimax and the
expensive case for expectimax before adaptive depth kicks in.

| Symptom                          | Likely Cause                 |
|----------------------------------|------------------------------|
| optimal > 1s on sparse boards    | Sample cap or depth table    |
| cache on ~ cache off             | Keys too specific / evicted  |
| ntuple >> optimal at same depth  | Pattern LUT lookups dominate |
"""

import cProfile
import io
import pstats
import random
import sys
import time

import numpy as np

from slide_solver.core.board import new_board
from slide_solver.core.types import AIMode
from slide_solver.search.engine import SearchEngine
from slide_solver.utils.config import BOARD_SIZES, MODES

# Fraction of cells filled, from early game to late game
FILL_LEVELS = (0.25, 0.5, 0.75)


def random_board(size: int, fill: float, rng: random.Random) -> np.ndarray:
    """Board with `fill` of its cells holding tiles from 2 to 1024."""
    board = new_board(size)
    cells = [(r, c) for r in range(size) for c in range(size)]
    for r, c in rng.sample(cells, int(len(cells) * fill)):
        board[r, c] = 2 ** rng.randint(1, 10)
    return board


def time_mode(engine: SearchEngine, mode: AIMode, boards) -> tuple:
    """Mean and max seconds per choose_move call."""
    timings = []
    for board in boards:
        start = time.perf_counter()
        engine.choose_move(board, mode)
        timings.append(time.perf_counter() - start)
    return sum(timings) / len(timings), max(timings)


def profile_mode(engine: SearchEngine, mode: AIMode, boards, top_n: int = 20) -> None:
    pr = cProfile.Profile()
    pr.enable()
    for board in boards:
        engine.choose_move(board, mode)
    pr.disable()

    stream = io.StringIO()
    stats = pstats.Stats(pr, stream=stream)
    stats.sort_stats("cumulative").print_stats(top_n)
    print(stream.getvalue())


def main():
    if "--help" in sys.argv or "-h" in sys.argv:
        print(__doc__)
        sys.exit(0)

    modes = []
    num_boards = 5
    size = 4
    do_profile = False
    use_cache = True

    for arg in sys.argv[1:]:
        if arg == "--profile":
            do_profile = True
        elif arg == "--no-cache":
            use_cache = False
        elif arg.startswith("--size="):
            size = int(arg.split("=", 1)[1])
        elif arg in MODES:
            modes.append(MODES[arg])
        elif arg.isdigit():
            num_boards = int(arg)
        else:
            print(f"Unknown argument: {arg}")
            print("Use --help for usage information")
            sys.exit(1)

    if size not in BOARD_SIZES:
        print(f"Unsupported size: {size}")
        sys.exit(1)

    modes = modes or list(AIMode)
    rng = random.Random(0)
    boards = {
        fill: [random_board(size, fill, rng) for _ in range(num_boards)]
        for fill in FILL_LEVELS
    }

    print(f"\n{'='*72}")
    print(f"Board {size}x{size}, {num_boards} boards per fill level, cache {'on' if use_cache else 'off'}")
    print(f"{'='*72}")
    print(f"{'mode':<10}" + "".join(f"{f'fill {fill:.0%}':>20}" for fill in FILL_LEVELS))

    slowest = None
    for mode in modes:
        engine = SearchEngine(rng=random.Random(1), use_cache=use_cache)
        cells = []
        total = 0.0
        for fill in FILL_LEVELS:
            mean, worst = time_mode(engine, mode, boards[fill])
            total += mean
            cells.append(f"{mean * 1000:8.1f} / {worst * 1000:7.1f}ms")
        print(f"{mode.value:<10}" + "".join(f"{cell:>20}" for cell in cells))
        if slowest is None or total > slowest[1]:
            slowest = (mode, total)

    print("(mean / worst per move)")

    if do_profile and slowest is not None:
        mode = slowest[0]
        print(f"\nProfiling {mode.value}...")
        engine = SearchEngine(rng=random.Random(1), use_cache=use_cache)
        profile_mode(engine, mode, [b for fill in FILL_LEVELS for b in boards[fill]])

    print("\nDone!")


if __name__ == "__main__":
    main()
