"""
Cell module for Minesweeper game.

A cell is one grid position: whether it holds a mine, how many mines
touch it, and whether the player has uncovered or marked it.
"""
from enum import Enum, auto
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Visible state of a cell. Flagged and revealed are mutually exclusive."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()


HIDDEN_VALUE = -1
FLAGGED_VALUE = -2
MINE_VALUE = 9


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the Minesweeper grid.

    Attributes:
        is_mine: Whether this cell contains a mine. Fixed at generation.
        adjacent_mines: Count of mines in neighboring cells (0-8).
            Meaningless for a mine cell.
        state: Current visible state (hidden, revealed, or flagged).
    """

    is_mine: bool = False
    adjacent_mines: int = 0
    state: CellState = CellState.HIDDEN

    def reveal(self) -> bool:
        """
        Uncover this cell.

        Returns:
            True if the cell changed, False if it was already revealed
            or is flagged.
        """
        if self.state != CellState.HIDDEN:
            return False
        self.state = CellState.REVEALED
        return True

    def expose(self) -> None:
        """Uncover the cell unconditionally, dropping any flag on it."""
        self.state = CellState.REVEALED

    def toggle_flag(self) -> bool:
        """
        Flip the flag marker on this cell.

        Returns:
            True if the flag was toggled, False if the cell is revealed.
        """
        if self.state == CellState.REVEALED:
            return False
        if self.state == CellState.HIDDEN:
            self.state = CellState.FLAGGED
        else:
            self.state = CellState.HIDDEN
        return True

    @property
    def is_hidden(self) -> bool:
        """Check if cell is hidden and unflagged."""
        return self.state == CellState.HIDDEN

    @property
    def is_revealed(self) -> bool:
        """Check if cell is revealed."""
        return self.state == CellState.REVEALED

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.state == CellState.FLAGGED

    def to_observation(self) -> int:
        """
        Encode the cell for the board observation array.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Revealed cell with adjacent mine count
            9: Revealed mine
        """
        if self.state == CellState.HIDDEN:
            return HIDDEN_VALUE
        if self.state == CellState.FLAGGED:
            return FLAGGED_VALUE
        if self.is_mine:
            return MINE_VALUE
        return self.adjacent_mines

    def to_symbol(self) -> str:
        """Single character used by the text renderer."""
        if self.state == CellState.HIDDEN:
            return "."
        if self.state == CellState.FLAGGED:
            return "F"
        if self.is_mine:
            return "*"
        if self.adjacent_mines == 0:
            return " "
        return str(self.adjacent_mines)
