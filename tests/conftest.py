"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path

import numpy as np

# Add src to path for imports, and the project root for the entry points
ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT / "src"))
sys.path.insert(1, str(ROOT))

from game import Board, BoardConfig, Cell, Game, generate


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded generator so random boards are reproducible."""
    return np.random.default_rng(1234)


@pytest.fixture
def default_board(rng: np.random.Generator) -> Board:
    """Create a default 10x10 board with 20 mines."""
    return generate(BoardConfig(), rng)


@pytest.fixture
def corner_board() -> Board:
    """
    5x5 board with a single mine in the bottom-right corner.

    Layout (counts):
        0 0 0 0 0
        0 0 0 0 0
        0 0 0 0 0
        0 0 0 1 1
        0 0 0 1 *
    """
    return Board.from_mines(BoardConfig(5, 5, 1), [(4, 4)])


@pytest.fixture
def walled_board() -> Board:
    """
    5x5 board with a column of mines splitting it in two.

    Layout (counts):
        0 2 * 2 0
        0 3 * 3 0
        0 3 * 3 0
        0 3 * 3 0
        0 2 * 2 0
    """
    return Board.from_mines(
        BoardConfig(5, 5, 5), [(row, 2) for row in range(5)]
    )


@pytest.fixture
def corner_game(corner_board: Board) -> Game:
    """Game played on the corner board."""
    return Game(board=corner_board)


@pytest.fixture
def walled_game(walled_board: Board) -> Game:
    """Game played on the walled board."""
    return Game(board=walled_board)


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(9, 9, 10)
