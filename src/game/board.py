"""
Board module for Minesweeper game.

Implements the grid of cells: configuration, mine placement,
adjacency counting and the flood-fill reveal.
"""
import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

import numpy as np

from .cell import Cell, CellState

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


# ============================================================================
# Errors
# ============================================================================

class InvalidConfigError(ValueError):
    """Board configuration cannot produce a playable board."""


class OutOfBoundsError(IndexError):
    """A position lies outside the board."""

    def __init__(self, row: int, col: int, height: int, width: int) -> None:
        super().__init__(
            f"Position ({row}, {col}) is outside the {height}x{width} board"
        )
        self.row = row
        self.col = col


# ============================================================================
# Configuration
# ============================================================================

@dataclass
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        num_mines: Total mines to place.
    """

    width: int = 10
    height: int = 10
    num_mines: int = 20

    OPTIONS = ("rows", "cols", "mines")

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 1 or self.height < 1:
            raise InvalidConfigError("Board dimensions must be positive")
        if self.num_mines < 0:
            raise InvalidConfigError("Number of mines cannot be negative")
        max_mines = self.width * self.height - 1
        if self.num_mines > max_mines:
            raise InvalidConfigError(f"Too many mines (max {max_mines})")

    @property
    def total_cells(self) -> int:
        return self.width * self.height

    @property
    def safe_cells(self) -> int:
        return self.total_cells - self.num_mines

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> "BoardConfig":
        """
        Build a configuration from startup options.

        Recognized keys are ``rows``, ``cols`` and ``mines``; missing keys
        fall back to the defaults.

        Raises:
            InvalidConfigError: On unknown keys, non-integer values or an
                unplayable combination.
        """
        unknown = sorted(set(options) - set(cls.OPTIONS))
        if unknown:
            raise InvalidConfigError(f"Unknown options: {', '.join(unknown)}")

        default = cls()
        values: Dict[str, int] = {}
        for key, fallback in zip(
            cls.OPTIONS, (default.height, default.width, default.num_mines)
        ):
            values[key] = _parse_option(key, options.get(key, fallback))
        return cls(
            width=values["cols"],
            height=values["rows"],
            num_mines=values["mines"],
        )


def _parse_option(key: str, raw: Any) -> int:
    """Accept an int or a string of digits; bools and floats are rejected."""
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        text = raw.strip()
        digits = text[1:] if text.startswith("-") else text
        if digits.isdecimal():
            return int(text)
    raise InvalidConfigError(f"Option {key!r} must be an integer, got {raw!r}")


# Preset difficulty levels
DEFAULT = BoardConfig(10, 10, 20)
BEGINNER = BoardConfig(9, 9, 10)
INTERMEDIATE = BoardConfig(16, 16, 40)
EXPERT = BoardConfig(30, 16, 99)


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minesweeper game board.

    Holds the grid of cells and the operations that only depend on the
    grid itself. Game status lives on :class:`~game.game.Game`.
    """

    config: BoardConfig = field(default_factory=lambda: BoardConfig())
    _grid: List[List[Cell]] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        """Initialize the grid after dataclass creation."""
        if not self._grid:
            self._init_grid()

    @classmethod
    def from_mines(
        cls, config: BoardConfig, mines: Iterable[Position]
    ) -> "Board":
        """
        Build a board with a fixed mine layout.

        Args:
            config: Board configuration; ``num_mines`` must match the layout.
            mines: (row, col) positions of the mines.

        Raises:
            OutOfBoundsError: If a mine lies outside the grid.
            InvalidConfigError: On duplicate positions or a count mismatch.
        """
        board = cls(config)
        placed = set()
        for row, col in mines:
            board._check_position(row, col)
            if (row, col) in placed:
                raise InvalidConfigError(f"Duplicate mine at ({row}, {col})")
            placed.add((row, col))
            board._grid[row][col].is_mine = True
        if len(placed) != config.num_mines:
            raise InvalidConfigError(
                f"Layout has {len(placed)} mines, "
                f"configuration expects {config.num_mines}"
            )
        board._calculate_adjacent_mines()
        return board

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create empty grid of cells."""
        self._grid = [
            [Cell() for _ in range(self.config.width)]
            for _ in range(self.config.height)
        ]

    def _place_mines(self, rng: np.random.Generator) -> None:
        """
        Place mines by rejection sampling.

        Draws uniform positions until ``num_mines`` distinct cells are
        mined; a position that is already mined is drawn again.
        """
        placed = 0
        draws = 0
        while placed < self.config.num_mines:
            row = int(rng.integers(self.config.height))
            col = int(rng.integers(self.config.width))
            draws += 1
            cell = self._grid[row][col]
            if not cell.is_mine:
                cell.is_mine = True
                placed += 1
        logger.debug(
            "Placed %d mines in %d draws on %dx%d board",
            placed, draws, self.config.height, self.config.width,
        )

    def _calculate_adjacent_mines(self) -> None:
        """Calculate adjacent mine counts for all non-mine cells."""
        for row in range(self.config.height):
            for col in range(self.config.width):
                if not self._grid[row][col].is_mine:
                    count = self.count_adjacent_mines(row, col)
                    self._grid[row][col].adjacent_mines = count

    def count_adjacent_mines(self, row: int, col: int) -> int:
        """Count mines adjacent to a specific cell."""
        count = 0
        for neighbor_row, neighbor_col in self.get_neighbors(row, col):
            if self._grid[neighbor_row][neighbor_col].is_mine:
                count += 1
        return count

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def get_neighbors(self, row: int, col: int) -> List[Position]:
        """
        Get valid neighboring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples for the up to 8 in-bounds neighbors.
        """
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self.is_valid_position(new_row, new_col):
                    neighbors.append((new_row, new_col))
        return neighbors

    def is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.config.height and 0 <= col < self.config.width

    def _check_position(self, row: int, col: int) -> None:
        if not self.is_valid_position(row, col):
            raise OutOfBoundsError(
                row, col, self.config.height, self.config.width
            )

    # ========================================================================
    # Grid Mutation (Mid-level)
    # ========================================================================

    def flood_reveal(self, row: int, col: int) -> int:
        """
        Reveal a safe cell and cascade through zero-count regions.

        Uses an explicit queue; a cell is enqueued only while hidden, and
        is revealed before its neighbors are looked at, so each cell is
        visited at most once. Flagged cells and mines are never touched.

        Returns:
            Number of cells revealed.
        """
        start = self._grid[row][col]
        if start.is_mine or not start.reveal():
            return 0

        revealed = 1
        queue = deque([(row, col)])
        while queue:
            current_row, current_col = queue.popleft()
            if self._grid[current_row][current_col].adjacent_mines != 0:
                continue
            for neighbor_row, neighbor_col in self.get_neighbors(
                current_row, current_col
            ):
                neighbor = self._grid[neighbor_row][neighbor_col]
                if neighbor.is_mine or not neighbor.reveal():
                    continue
                revealed += 1
                queue.append((neighbor_row, neighbor_col))

        logger.debug("Reveal at (%d, %d) uncovered %d cells", row, col, revealed)
        return revealed

    def reveal_mines(self) -> None:
        """Uncover every mine so the full layout is visible."""
        for row in self._grid:
            for cell in row:
                if cell.is_mine:
                    cell.expose()

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    def get_cell(self, row: int, col: int) -> Cell:
        """
        Get cell at position.

        Raises:
            OutOfBoundsError: If the position is outside the board.
        """
        self._check_position(row, col)
        return self._grid[row][col]

    def cells(self) -> Iterable[Tuple[int, int, Cell]]:
        """Iterate over (row, col, cell) in row-major order."""
        for row in range(self.config.height):
            for col in range(self.config.width):
                yield row, col, self._grid[row][col]

    @property
    def mine_positions(self) -> List[Position]:
        return [(row, col) for row, col, cell in self.cells() if cell.is_mine]

    @property
    def revealed_count(self) -> int:
        return sum(1 for _, _, cell in self.cells() if cell.is_revealed)

    @property
    def flag_count(self) -> int:
        return sum(1 for _, _, cell in self.cells() if cell.is_flagged)

    def all_safe_revealed(self) -> bool:
        """True iff every non-mine cell is revealed."""
        return all(
            cell.is_revealed for _, _, cell in self.cells() if not cell.is_mine
        )

    def get_observation(self) -> np.ndarray:
        """
        Get board state as numpy array.

        Returns:
            2D numpy array where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        obs = np.zeros((self.config.height, self.config.width), dtype=np.int8)
        for row, col, cell in self.cells():
            obs[row, col] = cell.to_observation()
        return obs

    def get_hidden_positions(self) -> List[Position]:
        """Positions of cells that are neither revealed nor flagged."""
        return [(row, col) for row, col, cell in self.cells() if cell.is_hidden]

    def get_unrevealed_positions(self) -> List[Position]:
        """Positions of cells that can still be flagged or unflagged."""
        return [
            (row, col)
            for row, col, cell in self.cells()
            if cell.state != CellState.REVEALED
        ]


# ============================================================================
# Generation
# ============================================================================

def generate(
    config: Optional[BoardConfig] = None,
    rng: Optional[np.random.Generator] = None,
) -> Board:
    """
    Create a fresh board with randomly placed mines.

    Args:
        config: Board configuration (default: 10x10 with 20 mines).
        rng: Source of uniform randomness.

    Returns:
        Board with all cells hidden and adjacency counts filled in.
    """
    config = config or BoardConfig()
    rng = rng if rng is not None else np.random.default_rng()
    board = Board(config)
    board._place_mines(rng)
    board._calculate_adjacent_mines()
    return board
