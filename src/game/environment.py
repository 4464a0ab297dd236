"""
Gymnasium environment wrapper for Minesweeper.

Exposes the two player actions (reveal and flag) through a standard
environment interface, and provides the text renderer shared with the CLI.
"""
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import Board, BoardConfig
from .cell import FLAGGED_VALUE, MINE_VALUE
from .game import Game, GameState


# ============================================================================
# Rendering
# ============================================================================

def render_ansi(board: Board, axes: bool = False) -> str:
    """
    Render board as ASCII string.

    Args:
        board: Board to draw.
        axes: Prefix rows and columns with their indices.

    Returns:
        One line per row; ``.`` hidden, ``F`` flagged, ``*`` mine,
        blank for an empty revealed cell, otherwise the count.
    """
    lines = []
    label_width = len(str(board.config.height - 1))
    if axes:
        header = " " * (label_width + 1) + " ".join(
            str(col % 10) for col in range(board.config.width)
        )
        lines.append(header)

    for row in range(board.config.height):
        row_str = " ".join(
            board.get_cell(row, col).to_symbol()
            for col in range(board.config.width)
        )
        if axes:
            row_str = f"{row:>{label_width}} {row_str}"
        lines.append(row_str)

    return "\n".join(lines)


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D array where:
        - -1 = hidden cell
        - -2 = flagged cell
        - 0-8 = revealed cell with adjacent mine count
        - 9 = revealed mine

    Actions:
        Discrete action space of size 2 * width * height.
        Action i < width * height clicks cell (i // width, i % width);
        the upper half toggles the flag on the same cells.

    Rewards:
        - +1 for revealing a safe cell
        - +10 for winning the game
        - -10 for hitting a mine
        - 0 for toggling a flag
        - -0.1 for an action that changes nothing
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Board configuration (default: 10x10 with 20 mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or BoardConfig()
        self.render_mode = render_mode
        self.game = Game(self.config, rng=self.np_random)

        self._cells = self.config.height * self.config.width

        self.observation_space = spaces.Box(
            low=FLAGGED_VALUE,
            high=MINE_VALUE,
            shape=(self.config.height, self.config.width),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(2 * self._cells)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        self.game.reset(rng=self.np_random)
        self._steps = 0

        return self.game.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Flat action index, see class docstring.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        flag, row, col = self.decode_action(action)
        self._steps += 1

        reward = self._apply(flag, row, col)

        observation = self.game.board.get_observation()
        terminated = self.game.is_terminal
        truncated = False

        return observation, reward, terminated, truncated, self._get_info()

    def decode_action(self, action: int) -> Tuple[bool, int, int]:
        """Convert flat action index to (is_flag, row, col)."""
        action = int(action)
        if not 0 <= action < 2 * self._cells:
            raise ValueError(f"Action {action} outside action space")
        flag = action >= self._cells
        index = action - self._cells if flag else action
        return flag, index // self.config.width, index % self.config.width

    def encode_action(self, row: int, col: int, flag: bool = False) -> int:
        """Convert a cell position and action kind to a flat index."""
        index = row * self.config.width + col
        return index + self._cells if flag else index

    def _apply(self, flag: bool, row: int, col: int) -> float:
        """Run the player action and score it."""
        cell = self.game.board.get_cell(row, col)
        if self.game.is_terminal or cell.is_revealed:
            return -0.1

        if flag:
            self.game.right_click(row, col)
            return 0.0

        if cell.is_flagged:
            return -0.1

        self.game.click(row, col)
        if self.game.state == GameState.WON:
            return 10.0
        if self.game.state == GameState.LOST:
            return -10.0
        return 1.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        board = self.game.board
        return {
            "steps": self._steps,
            "revealed": board.revealed_count,
            "flags": board.flag_count,
            "total_safe": self.config.safe_cells,
            "game_state": self.game.state.name,
            "banner": self.game.banner,
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return render_ansi(self.game.board)
        if self.render_mode == "human":
            print(render_ansi(self.game.board))
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of actions that would change the game.

        Returns:
            int8 array where 1 = valid action, usable as a
            ``Discrete.sample`` mask.
        """
        mask = np.zeros(self.action_space.n, dtype=np.int8)
        if self.game.is_terminal:
            return mask
        for row, col in self.game.board.get_hidden_positions():
            mask[self.encode_action(row, col)] = 1
        for row, col in self.game.board.get_unrevealed_positions():
            mask[self.encode_action(row, col, flag=True)] = 1
        return mask
