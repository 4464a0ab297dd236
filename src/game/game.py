"""
Game module for Minesweeper.

Wraps one board with its status and exposes the player actions.
"""
import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

import numpy as np

from .board import Board, BoardConfig, generate

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of the game."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


class RevealOutcome(Enum):
    """Whether a reveal ended the game."""

    CONTINUING = auto()
    LOST = auto()


BANNERS = {
    GameState.LOST: "Game Over!",
    GameState.WON: "You Found All Mines!",
}


@dataclass
class RevealResult:
    """Outcome of a reveal plus the board it was applied to."""

    outcome: RevealOutcome
    board: Board

    @property
    def lost(self) -> bool:
        return self.outcome == RevealOutcome.LOST


# ============================================================================
# Game Class
# ============================================================================

class Game:
    """
    One Minesweeper session.

    The board is mutated in place. ``state`` is the single source of truth
    for the outcome; once it leaves ``PLAYING`` no further reveal or flag
    changes the board.
    """

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        rng: Optional[np.random.Generator] = None,
        board: Optional[Board] = None,
    ) -> None:
        """
        Start a game.

        Args:
            config: Board configuration (default: 10x10 with 20 mines).
            rng: Randomness for mine placement, reused on reset.
            board: Prebuilt board to play on instead of generating one.
        """
        self.config = board.config if board is not None else (
            config or BoardConfig()
        )
        self.rng = rng if rng is not None else np.random.default_rng()
        self.board = board if board is not None else generate(
            self.config, self.rng
        )
        self.state = GameState.PLAYING

    def reset(self, rng: Optional[np.random.Generator] = None) -> Board:
        """Discard the current board and start over on a fresh one."""
        if rng is not None:
            self.rng = rng
        self.board = generate(self.config, self.rng)
        self.state = GameState.PLAYING
        return self.board

    # ========================================================================
    # Core Operations
    # ========================================================================

    def reveal(self, row: int, col: int) -> RevealResult:
        """
        Uncover a cell.

        A mine loses the game and uncovers every mine. A zero-count cell
        cascades through its region. Already revealed or flagged targets,
        and any move after the game ended, leave the board untouched.

        Raises:
            OutOfBoundsError: If the position is outside the board.
        """
        cell = self.board.get_cell(row, col)
        if self.is_terminal or not cell.is_hidden:
            return self._result()

        if cell.is_mine:
            cell.reveal()
            self.state = GameState.LOST
            self.board.reveal_mines()
            logger.info("Mine hit at (%d, %d), game lost", row, col)
            return self._result()

        self.board.flood_reveal(row, col)
        return self._result()

    def toggle_flag(self, row: int, col: int) -> Board:
        """
        Flip the flag on a hidden cell. No-op on revealed cells and
        once the game has ended.

        Raises:
            OutOfBoundsError: If the position is outside the board.
        """
        cell = self.board.get_cell(row, col)
        if not self.is_terminal:
            cell.toggle_flag()
        return self.board

    def check_complete(self) -> bool:
        """
        Check whether every safe cell is revealed.

        The first time this holds during play the game is won and all
        mines are uncovered.
        """
        complete = self.board.all_safe_revealed()
        if complete and self.state == GameState.PLAYING:
            self.state = GameState.WON
            self.board.reveal_mines()
            logger.info("All safe cells revealed, game won")
        return complete

    # ========================================================================
    # Player Actions
    # ========================================================================

    def click(self, row: int, col: int) -> RevealResult:
        """Primary action: reveal unless flagged, then check completion."""
        cell = self.board.get_cell(row, col)
        if self.is_terminal or cell.is_flagged:
            return self._result()
        result = self.reveal(row, col)
        self.check_complete()
        return result

    def right_click(self, row: int, col: int) -> Board:
        """Secondary action: toggle the flag, then check completion."""
        self.board.get_cell(row, col)
        if self.is_terminal:
            return self.board
        self.toggle_flag(row, col)
        self.check_complete()
        return self.board

    # ========================================================================
    # State Accessors
    # ========================================================================

    def _result(self) -> RevealResult:
        outcome = (
            RevealOutcome.LOST if self.state == GameState.LOST
            else RevealOutcome.CONTINUING
        )
        return RevealResult(outcome, self.board)

    @property
    def is_playing(self) -> bool:
        """Check if game is still in progress."""
        return self.state == GameState.PLAYING

    @property
    def is_terminal(self) -> bool:
        return self.state != GameState.PLAYING

    @property
    def game_over(self) -> bool:
        """True once a mine was revealed."""
        return self.state == GameState.LOST

    @property
    def game_won(self) -> bool:
        """True once all safe cells were revealed."""
        return self.state == GameState.WON

    @property
    def banner(self) -> Optional[str]:
        """Status line shown when the game has ended."""
        return BANNERS.get(self.state)

    @property
    def mines_remaining(self) -> int:
        """Mine count minus placed flags, as shown on a counter."""
        return self.config.num_mines - self.board.flag_count
