"""
Command-line interface for watching the AI play.
"""

import argparse
import asyncio
import logging

from slide_solver.api import play_game
from slide_solver.core.board import max_tile
from slide_solver.utils.config import BOARD_SIZES, DEFAULT_WEIGHTS_PATH, MODES, SPEEDS, Config
from slide_solver.utils.factory import create_game


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Let the sliding-tile AI play a game"
    )
    parser.add_argument(
        "--size", "-s",
        type=int,
        choices=BOARD_SIZES,
        default=4,
        help="Board size (default: 4)",
    )
    parser.add_argument(
        "--mode", "-m",
        choices=list(MODES.keys()),
        default="balanced",
        help="AI mode (default: balanced)",
    )
    parser.add_argument(
        "--speed",
        choices=list(SPEEDS.keys()),
        default="turbo",
        help="Delay between moves (default: turbo)",
    )
    parser.add_argument(
        "--weights", "-w",
        type=str,
        default=None,
        help="N-Tuple weight file for ntuple mode (default: bundled file if present)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for tile spawns and search sampling",
    )
    parser.add_argument(
        "--max-moves",
        type=int,
        default=None,
        help="Stop after this many moves",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only print the final result",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Debug logging",
    )
    return parser.parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    weights_path = args.weights
    if weights_path is None and args.mode == "ntuple" and DEFAULT_WEIGHTS_PATH.exists():
        weights_path = DEFAULT_WEIGHTS_PATH

    config = Config(
        board_size=args.size,
        mode=args.mode,
        speed=args.speed,
        weights_path=weights_path,
        seed=args.seed,
    )
    game = create_game(config)

    def show(game, direction):
        print(f"\n{direction.value.upper()}  score: {game.score}")
        print(game.state_string())

    if not args.quiet:
        print(game.state_string())

    try:
        state = asyncio.run(play_game(
            game,
            config,
            on_move=None if args.quiet else show,
            max_moves=args.max_moves,
        ))
    except KeyboardInterrupt:
        print("\nInterrupted")
        return

    print(f"\nMoves: {state.moves_applied}  Score: {game.score}  Max tile: {max_tile(game.board())}")
    if state.last_error:
        print(f"Stopped on error: {state.last_error}")


if __name__ == "__main__":
    main()
