#!/usr/bin/env python3
"""Watch a random player clear (or blow up) Minesweeper boards."""
import time
import os

from src.game.environment import MinesweeperEnv
from src.game.board import BoardConfig


def clear_screen():
    os.system('cls' if os.name == 'nt' else 'clear')


def demo(delay: float = 0.3, games: int = 5, rows: int = 10, cols: int = 10,
         mines: int = 20, seed: int = None):
    """Run demo games with visualization."""
    config = BoardConfig(height=rows, width=cols, num_mines=mines)
    env = MinesweeperEnv(config=config, render_mode="ansi")
    env.action_space.seed(seed)

    print(f"Board: {rows}x{cols} with {mines} mines ({100*mines/(rows*cols):.1f}% density)")
    print("Starting in 2 seconds...")
    time.sleep(2)

    wins = 0

    for game in range(games):
        env.reset(seed=None if seed is None else seed + game)

        clear_screen()
        print(f"=== Game {game + 1}/{games} ===")
        print(f"Wins so far: {wins}\n")
        print(env.render())
        time.sleep(delay)

        done = False
        step = 0

        while not done:
            action = env.action_space.sample(mask=env.get_action_mask())
            flag, row, col = env.decode_action(action)

            _, _, terminated, truncated, info = env.step(action)
            done = terminated or truncated
            step += 1

            clear_screen()
            print(f"=== Game {game + 1}/{games} | Step {step} ===")
            print(f"Wins so far: {wins}")
            print(f"Last move: {'flag' if flag else 'reveal'} ({row}, {col})\n")
            print(env.render())

            if done:
                if info["game_state"] == "WON":
                    wins += 1
                print(f"\n*** {info['banner']} ***")

            time.sleep(delay)

        time.sleep(1.0)  # Pause between games

    print(f"\n=== Final: {wins}/{games} wins ({100*wins/games:.0f}%) ===")


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser()
    parser.add_argument("--delay", type=float, default=0.3, help="Delay between moves")
    parser.add_argument("--games", type=int, default=5, help="Number of games")
    parser.add_argument("--rows", type=int, default=10, help="Grid height")
    parser.add_argument("--cols", type=int, default=10, help="Grid width")
    parser.add_argument("--mines", type=int, default=20, help="Number of mines")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    args = parser.parse_args()
    if args.games < 1:
        parser.error("--games must be at least 1")

    demo(delay=args.delay, games=args.games, rows=args.rows, cols=args.cols,
         mines=args.mines, seed=args.seed)
