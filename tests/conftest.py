"""
Pytest configuration and shared fixtures.
"""
import random

import pytest

from minefield import Board, BoardConfig, Cell, FirstClick, Game


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_board() -> Board:
    """Create a default 9x9 board with 10 mines, not yet laid."""
    return Board()


@pytest.fixture
def corner_mine_board() -> Board:
    """3x3 board with a single mine in the top-left corner."""
    return Board.from_layout([
        "*..",
        "...",
        "...",
    ])


@pytest.fixture
def center_mine_board() -> Board:
    """3x3 board with a single mine in the centre."""
    return Board.from_layout([
        "...",
        ".*.",
        "...",
    ])


@pytest.fixture
def walled_board() -> Board:
    """
    5x5 board split by a column of mines.

    Mines fill column 2 in rows 0-3. Column 0 and column 4 are zero cells,
    columns 1 and 3 are numbers, and (4, 2) is a 1 reachable only by a
    direct reveal.
    """
    return Board.from_layout([
        "..*..",
        "..*..",
        "..*..",
        "..*..",
        ".....",
    ])


@pytest.fixture
def empty_board() -> Board:
    """5x5 board with no mines for cascade testing."""
    return Board.from_layout(["....."] * 5)


# ============================================================================
# Game Fixtures
# ============================================================================

@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible mine placement."""
    return random.Random(1234)


@pytest.fixture
def default_game(rng: random.Random) -> Game:
    """9x9 game with 10 mines and a safe first-click area."""
    return Game(BoardConfig(9, 9, 10), rng)


@pytest.fixture
def center_mine_game(center_mine_board: Board) -> Game:
    """Game on the 3x3 board with its only mine in the centre."""
    return Game.from_board(center_mine_board, random.Random(7))


@pytest.fixture
def unprotected_game(rng: random.Random) -> Game:
    """Game whose mines are laid before the first click."""
    return Game(BoardConfig(9, 9, 10), rng, FirstClick.UNPROTECTED)


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
