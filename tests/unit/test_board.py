"""
Unit tests for Board class.

Tests configuration, generation, adjacency counts, flood fill
and observation generation.
"""
import pytest
import numpy as np
from game import (
    Board,
    BoardConfig,
    InvalidConfigError,
    OutOfBoundsError,
    generate,
)


def count_mines(board: Board) -> int:
    return sum(1 for _, _, cell in board.cells() if cell.is_mine)


def brute_force_count(board: Board, row: int, col: int) -> int:
    total = 0
    for r in range(row - 1, row + 2):
        for c in range(col - 1, col + 2):
            if (r, c) == (row, col):
                continue
            if 0 <= r < board.config.height and 0 <= c < board.config.width:
                total += board.get_cell(r, c).is_mine
    return total


# ============================================================================
# Board Configuration Tests
# ============================================================================

class TestBoardConfig:
    """Test board configuration validation."""

    def test_default_config(self) -> None:
        """Default configuration is 10x10 with 20 mines."""
        config = BoardConfig()
        assert (config.height, config.width, config.num_mines) == (10, 10, 20)

    def test_zero_width_raises_error(self) -> None:
        with pytest.raises(InvalidConfigError, match="dimensions must be positive"):
            BoardConfig(0, 9, 10)

    def test_zero_height_raises_error(self) -> None:
        with pytest.raises(InvalidConfigError, match="dimensions must be positive"):
            BoardConfig(9, 0, 10)

    def test_negative_mines_raises_error(self) -> None:
        with pytest.raises(InvalidConfigError, match="cannot be negative"):
            BoardConfig(9, 9, -1)

    def test_mines_filling_board_raises_error(self) -> None:
        """A mine on every cell is rejected instead of hanging placement."""
        with pytest.raises(InvalidConfigError, match="Too many mines"):
            BoardConfig(3, 3, 9)

    def test_invalid_config_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            BoardConfig(2, 2, 4)

    def test_max_mines_is_valid(self) -> None:
        """One safe cell is the minimum."""
        assert BoardConfig(3, 3, 8).num_mines == 8

    def test_from_options(self) -> None:
        config = BoardConfig.from_options({"rows": 4, "cols": 6, "mines": 3})
        assert (config.height, config.width, config.num_mines) == (4, 6, 3)

    def test_from_options_uses_defaults(self) -> None:
        config = BoardConfig.from_options({"mines": 5})
        assert (config.height, config.width, config.num_mines) == (10, 10, 5)

    def test_from_options_rejects_unknown_key(self) -> None:
        with pytest.raises(InvalidConfigError, match="Unknown options: depth"):
            BoardConfig.from_options({"depth": 3})

    def test_from_options_rejects_non_integer(self) -> None:
        with pytest.raises(InvalidConfigError, match="must be an integer"):
            BoardConfig.from_options({"rows": "tall"})

    @pytest.mark.parametrize("value", [2.9, 3.0, True, False, "2.5", None])
    def test_from_options_rejects_non_int_types(self, value) -> None:
        """Floats and bools are not truncated into a board size."""
        with pytest.raises(InvalidConfigError, match="must be an integer"):
            BoardConfig.from_options({"rows": value, "cols": 2, "mines": 1})

    def test_from_options_accepts_digit_strings(self) -> None:
        config = BoardConfig.from_options({"rows": " 4 ", "cols": "5", "mines": "2"})
        assert (config.height, config.width, config.num_mines) == (4, 5, 2)

    def test_from_options_negative_string_fails_validation(self) -> None:
        with pytest.raises(InvalidConfigError, match="cannot be negative"):
            BoardConfig.from_options({"mines": "-1"})

    def test_from_options_validates(self) -> None:
        with pytest.raises(InvalidConfigError, match="Too many mines"):
            BoardConfig.from_options({"rows": 2, "cols": 2, "mines": 4})


# ============================================================================
# Generation Tests
# ============================================================================

class TestGenerate:
    """Test random board generation."""

    @pytest.mark.parametrize("seed", range(10))
    def test_exact_mine_count(self, seed: int) -> None:
        """Generated boards carry exactly the configured mine count."""
        board = generate(BoardConfig(), np.random.default_rng(seed))
        assert count_mines(board) == 20

    def test_dense_board_terminates(self) -> None:
        """Rejection sampling fills all but one cell."""
        board = generate(BoardConfig(3, 3, 8), np.random.default_rng(0))
        assert count_mines(board) == 8

    @pytest.mark.parametrize("seed", range(5))
    def test_adjacent_counts_match_neighbors(self, seed: int) -> None:
        """Every safe cell counts exactly its mine neighbors."""
        board = generate(BoardConfig(8, 6, 12), np.random.default_rng(seed))
        for row, col, cell in board.cells():
            if not cell.is_mine:
                assert cell.adjacent_mines == brute_force_count(board, row, col)

    def test_new_board_all_cells_hidden(self, default_board: Board) -> None:
        for _, _, cell in default_board.cells():
            assert cell.is_hidden is True

    def test_same_seed_same_layout(self) -> None:
        first = generate(BoardConfig(), np.random.default_rng(7))
        second = generate(BoardConfig(), np.random.default_rng(7))
        assert first.mine_positions == second.mine_positions

    def test_zero_mines(self) -> None:
        board = generate(BoardConfig(4, 4, 0))
        assert count_mines(board) == 0
        assert all(cell.adjacent_mines == 0 for _, _, cell in board.cells())


# ============================================================================
# Fixed Layout Tests
# ============================================================================

class TestFromMines:
    """Test building boards from a known layout."""

    def test_counts_computed(self, walled_board: Board) -> None:
        assert walled_board.get_cell(0, 0).adjacent_mines == 0
        assert walled_board.get_cell(0, 1).adjacent_mines == 2
        assert walled_board.get_cell(2, 3).adjacent_mines == 3

    def test_diagonal_neighbor_counts(self) -> None:
        board = Board.from_mines(BoardConfig(2, 2, 1), [(0, 0)])
        assert board.get_cell(1, 1).adjacent_mines == 1

    def test_count_mismatch_raises(self) -> None:
        with pytest.raises(InvalidConfigError, match="expects 2"):
            Board.from_mines(BoardConfig(3, 3, 2), [(0, 0)])

    def test_duplicate_raises(self) -> None:
        with pytest.raises(InvalidConfigError, match="Duplicate"):
            Board.from_mines(BoardConfig(3, 3, 2), [(0, 0), (0, 0)])

    def test_out_of_range_raises(self) -> None:
        with pytest.raises(OutOfBoundsError):
            Board.from_mines(BoardConfig(3, 3, 1), [(3, 0)])


# ============================================================================
# Neighbor Tests
# ============================================================================

class TestNeighbors:
    """Test 8-connectivity clamped to the board edge."""

    def test_corner_has_three_neighbors(self) -> None:
        board = Board(BoardConfig(5, 5, 0))
        assert sorted(board.get_neighbors(0, 0)) == [(0, 1), (1, 0), (1, 1)]

    def test_edge_has_five_neighbors(self) -> None:
        board = Board(BoardConfig(5, 5, 0))
        assert len(board.get_neighbors(0, 2)) == 5

    def test_interior_has_eight_neighbors(self) -> None:
        board = Board(BoardConfig(5, 5, 0))
        assert len(board.get_neighbors(2, 2)) == 8

    def test_single_cell_has_none(self) -> None:
        board = Board(BoardConfig(1, 1, 0))
        assert board.get_neighbors(0, 0) == []


# ============================================================================
# Flood Fill Tests
# ============================================================================

class TestFloodReveal:
    """Test the cascading reveal."""

    def test_region_stops_at_numbered_boundary(self, walled_board: Board) -> None:
        """Zero region plus its numbered rim is revealed, nothing beyond."""
        revealed = walled_board.flood_reveal(0, 0)
        assert revealed == 10
        for row, col, cell in walled_board.cells():
            assert cell.is_revealed is (col < 2)

    def test_numbered_cell_does_not_propagate(self, walled_board: Board) -> None:
        assert walled_board.flood_reveal(0, 1) == 1
        assert walled_board.revealed_count == 1

    def test_flags_block_cascade(self, corner_board: Board) -> None:
        corner_board.get_cell(0, 4).toggle_flag()
        corner_board.flood_reveal(0, 0)
        assert corner_board.get_cell(0, 4).is_flagged is True
        assert corner_board.get_cell(0, 4).is_revealed is False
        assert corner_board.revealed_count == 23

    def test_mines_never_revealed(self, corner_board: Board) -> None:
        corner_board.flood_reveal(0, 0)
        assert corner_board.get_cell(4, 4).is_revealed is False
        assert corner_board.all_safe_revealed() is True

    def test_large_open_board(self) -> None:
        """Queue based fill handles boards far beyond recursion depth."""
        board = Board.from_mines(BoardConfig(200, 200, 1), [(199, 199)])
        assert board.flood_reveal(0, 0) == 200 * 200 - 1

    def test_reveal_mines(self, walled_board: Board) -> None:
        walled_board.get_cell(0, 2).toggle_flag()
        walled_board.reveal_mines()
        for row in range(5):
            assert walled_board.get_cell(row, 2).is_revealed is True
        assert walled_board.flag_count == 0
        assert walled_board.get_cell(0, 0).is_revealed is False


# ============================================================================
# Accessor Tests
# ============================================================================

class TestAccessors:
    """Test bounds checks and observation output."""

    @pytest.mark.parametrize("row, col", [(-1, 0), (0, -1), (10, 0), (0, 10)])
    def test_get_cell_out_of_bounds(
        self, default_board: Board, row: int, col: int
    ) -> None:
        with pytest.raises(OutOfBoundsError, match="outside the 10x10 board"):
            default_board.get_cell(row, col)

    def test_out_of_bounds_is_index_error(self, default_board: Board) -> None:
        with pytest.raises(IndexError):
            default_board.get_cell(100, 100)

    def test_observation_shape_and_dtype(self, default_board: Board) -> None:
        obs = default_board.get_observation()
        assert obs.shape == (10, 10)
        assert obs.dtype == np.int8
        assert np.all(obs == -1)

    def test_observation_values(self, walled_board: Board) -> None:
        walled_board.flood_reveal(0, 0)
        walled_board.get_cell(0, 4).toggle_flag()
        walled_board.reveal_mines()
        obs = walled_board.get_observation()
        assert obs[0, 0] == 0
        assert obs[1, 1] == 3
        assert obs[0, 2] == 9
        assert obs[0, 4] == -2
        assert obs[1, 4] == -1

    def test_position_lists(self, corner_board: Board) -> None:
        corner_board.get_cell(0, 0).reveal()
        corner_board.get_cell(0, 1).toggle_flag()
        assert (0, 0) not in corner_board.get_hidden_positions()
        assert (0, 1) not in corner_board.get_hidden_positions()
        assert (0, 1) in corner_board.get_unrevealed_positions()
        assert len(corner_board.get_unrevealed_positions()) == 24
