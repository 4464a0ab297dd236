"""
Minesweeper game module.

Provides core game logic including board generation, cell state,
the game session and a Gymnasium environment wrapper.
"""
from .cell import Cell, CellState
from .board import (
    Board,
    BoardConfig,
    InvalidConfigError,
    OutOfBoundsError,
    generate,
    DEFAULT,
    BEGINNER,
    INTERMEDIATE,
    EXPERT,
)
from .game import Game, GameState, RevealOutcome, RevealResult
from .environment import MinesweeperEnv, render_ansi

__all__ = [
    "Cell",
    "CellState",
    "Board",
    "BoardConfig",
    "InvalidConfigError",
    "OutOfBoundsError",
    "generate",
    "DEFAULT",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "Game",
    "GameState",
    "RevealOutcome",
    "RevealResult",
    "MinesweeperEnv",
    "render_ansi",
]
