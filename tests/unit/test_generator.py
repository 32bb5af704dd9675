"""
Unit tests for mine generation.

Tests mine counts, neighbour counts, first-click policies and seeded
reproducibility.
"""
import random

import pytest

from minefield import Board, BoardConfig, FirstClick, InvalidParameters, OutOfBounds, generate
from minefield.generator import excluded_positions, sample_mine_positions


def _count_mines_around(board: Board, row: int, col: int) -> int:
    return sum(1 for r, c in board.neighbors(row, col) if board.cell(r, c).is_mine)


# ============================================================================
# Generated Board Properties
# ============================================================================

class TestGeneratedBoards:
    """Properties that hold for every generated board."""

    @pytest.mark.parametrize("seed", range(20))
    def test_exact_mine_count(self, seed: int) -> None:
        board = generate(9, 9, 10, rng=random.Random(seed))
        assert len(board.mine_positions()) == 10

    @pytest.mark.parametrize("seed", range(20))
    def test_adjacent_counts_match_neighbors(self, seed: int) -> None:
        board = generate(8, 6, 12, avoid=(2, 3), rng=random.Random(seed))
        for row, col in board.positions():
            cell = board.cell(row, col)
            if not cell.is_mine:
                assert cell.adjacent_mines == _count_mines_around(board, row, col)

    def test_all_cells_hidden(self) -> None:
        board = generate(5, 4, 3, rng=random.Random(0))
        assert all(board.cell(r, c).is_hidden for r, c in board.positions())
        assert board.revealed_count == 0

    def test_same_seed_same_board(self) -> None:
        first = generate(16, 16, 40, avoid=(3, 3), rng=random.Random(99))
        second = generate(16, 16, 40, avoid=(3, 3), rng=random.Random(99))
        assert first.mine_positions() == second.mine_positions()

    def test_zero_mines(self) -> None:
        board = generate(4, 4, 0, rng=random.Random(0))
        assert board.mine_positions() == set()
        assert all(board.cell(r, c).adjacent_mines == 0 for r, c in board.positions())

    @pytest.mark.parametrize(
        "width,height,mines",
        [(0, 5, 1), (5, 0, 1), (3, 3, 9), (2, 2, 10), (3, 3, -1)],
    )
    def test_invalid_parameters(self, width: int, height: int, mines: int) -> None:
        with pytest.raises(InvalidParameters):
            generate(width, height, mines)


# ============================================================================
# First Click Tests
# ============================================================================

class TestFirstClick:
    """Test first-click protection policies."""

    @pytest.mark.parametrize("seed", range(30))
    def test_safe_area_keeps_neighbors_clear(self, seed: int) -> None:
        board = generate(9, 9, 10, avoid=(4, 4), rng=random.Random(seed))
        assert board.cell(4, 4).is_mine is False
        assert board.cell(4, 4).adjacent_mines == 0

    @pytest.mark.parametrize("seed", range(30))
    def test_safe_cell_keeps_only_cell_clear(self, seed: int) -> None:
        board = generate(
            3, 3, 8, avoid=(1, 1), rng=random.Random(seed),
            first_click=FirstClick.SAFE_CELL,
        )
        assert board.mine_positions() == {p for p in board.positions() if p != (1, 1)}

    def test_safe_area_falls_back_when_crowded(self) -> None:
        """4x4 with 10 mines cannot keep a 3x3 area clear."""
        board = Board(BoardConfig(4, 4, 10))
        assert excluded_positions(board, (1, 1)) == {(1, 1)}

    def test_safe_area_at_corner(self) -> None:
        board = Board(BoardConfig(4, 4, 3))
        assert excluded_positions(board, (0, 0)) == {(0, 0), (0, 1), (1, 0), (1, 1)}

    def test_unprotected_excludes_nothing(self) -> None:
        board = Board(BoardConfig(4, 4, 3))
        assert excluded_positions(board, (0, 0), FirstClick.UNPROTECTED) == set()
        assert excluded_positions(board, None) == set()

    def test_avoid_out_of_bounds(self) -> None:
        with pytest.raises(OutOfBounds):
            generate(3, 3, 1, avoid=(5, 5))


# ============================================================================
# Sampling Tests
# ============================================================================

class TestSampling:
    """Test the sampling helper directly."""

    def test_sample_respects_exclusion(self) -> None:
        config = BoardConfig(3, 3, 5)
        exclude = {(0, 0), (0, 1), (0, 2)}
        positions = sample_mine_positions(config, random.Random(3), exclude)
        assert len(set(positions)) == 5
        assert not exclude & set(positions)

    def test_sample_rejects_overfull_exclusion(self) -> None:
        config = BoardConfig(3, 3, 5)
        exclude = {(0, 0), (0, 1), (0, 2), (1, 0), (1, 1)}
        with pytest.raises(InvalidParameters, match="Cannot place"):
            sample_mine_positions(config, random.Random(3), exclude)
