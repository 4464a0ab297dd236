#!/usr/bin/env python3
"""
Minesweeper - Main entry point.

Usage:
    python main.py play [--rows R] [--cols C] [--mines M] [--seed S]
    python main.py demo [--games N] [--seed S]
"""
import argparse
import logging
from typing import Optional

import numpy as np

from src.game.board import BoardConfig, InvalidConfigError, OutOfBoundsError
from src.game.environment import MinesweeperEnv, render_ansi
from src.game.game import Game


HELP_TEXT = (
    "Commands: r ROW COL (reveal), f ROW COL (flag), "
    "n (new game), q (quit)"
)


def config_from_args(args: argparse.Namespace) -> BoardConfig:
    """Build the board configuration from command line options."""
    return BoardConfig.from_options(
        {"rows": args.rows, "cols": args.cols, "mines": args.mines}
    )


def show(game: Game) -> None:
    """Print the board, the mine counter and the end banner if any."""
    print(render_ansi(game.board, axes=True))
    print(f"Mines left: {game.mines_remaining}")
    if game.banner:
        print(game.banner)


def handle_command(game: Game, line: str) -> Optional[str]:
    """
    Apply one line of player input.

    Returns:
        A message for the player, "quit" to stop, or None when the
        board changed and should be redrawn.
    """
    parts = line.split()
    if not parts:
        return HELP_TEXT

    command = parts[0].lower()
    if command == "q":
        return "quit"
    if command == "n":
        game.reset()
        return None
    if command not in ("r", "f") or len(parts) != 3:
        return HELP_TEXT

    try:
        row, col = int(parts[1]), int(parts[2])
    except ValueError:
        return "Row and column must be numbers"

    try:
        if command == "r":
            game.click(row, col)
        else:
            game.right_click(row, col)
    except OutOfBoundsError as exc:
        return str(exc)
    return None


def play(args: argparse.Namespace) -> None:
    """Play an interactive game in the terminal."""
    config = config_from_args(args)
    game = Game(config, rng=np.random.default_rng(args.seed))

    print(
        f"Board: {config.height}x{config.width} with {config.num_mines} mines"
    )
    print(HELP_TEXT)
    show(game)

    while True:
        try:
            line = input("> ")
        except EOFError:
            break
        message = handle_command(game, line)
        if message == "quit":
            break
        if message is not None:
            print(message)
            continue
        show(game)


def demo(args: argparse.Namespace) -> None:
    """Let a random player play several games and report the results."""
    config = config_from_args(args)
    env = MinesweeperEnv(config=config)
    env.action_space.seed(args.seed)

    wins = 0
    for game_index in range(args.games):
        seed = None if args.seed is None else args.seed + game_index
        env.reset(seed=seed)
        info = {}
        terminated = False

        while not terminated:
            action = env.action_space.sample(mask=env.get_action_mask())
            _, _, terminated, _, info = env.step(action)

        if info["game_state"] == "WON":
            wins += 1
        print(
            f"Game {game_index + 1}: {info['banner']} "
            f"({info['revealed']} cells revealed in {info['steps']} steps)"
        )

    print(f"\nWins: {wins}/{args.games} ({wins / args.games:.1%})")


def add_board_arguments(parser: argparse.ArgumentParser) -> None:
    """Add --rows/--cols/--mines/--seed to a sub-command."""
    default = BoardConfig()
    parser.add_argument(
        "--rows", type=int, default=default.height, help="Grid height"
    )
    parser.add_argument(
        "--cols", type=int, default=default.width, help="Grid width"
    )
    parser.add_argument(
        "--mines", type=int, default=default.num_mines, help="Mine count"
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed"
    )


def main(argv: Optional[list] = None) -> int:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(description="Minesweeper")
    parser.add_argument(
        "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    add_board_arguments(play_parser)

    demo_parser = subparsers.add_parser(
        "demo", help="Watch a random player"
    )
    add_board_arguments(demo_parser)
    demo_parser.add_argument(
        "--games", type=int, default=10, help="Number of games to play"
    )

    args = parser.parse_args(argv)
    if args.command == "demo" and args.games < 1:
        parser.error("--games must be at least 1")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        if args.command == "play":
            play(args)
        elif args.command == "demo":
            demo(args)
        else:
            parser.print_help()
    except InvalidConfigError as exc:
        parser.error(str(exc))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
