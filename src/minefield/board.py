"""
Board module for the minefield engine.

Holds the grid of cells, its dimensions and the running counters the
state machine reads to decide wins. Mine layout is supplied from outside
(see ``generator``); the board only records it and derives the numbers.
"""
from dataclasses import dataclass, field
from typing import Iterable, List, Sequence, Set, Tuple

from .cell import Cell, CellState
from .errors import InvalidParameters, OutOfBounds


Position = Tuple[int, int]

MINE_CHAR = "*"


# ============================================================================
# Configuration
# ============================================================================

@dataclass(frozen=True)
class BoardConfig:
    """
    Dimensions and mine count of a board.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        num_mines: Total mines to place.
    """

    width: int = 9
    height: int = 9
    num_mines: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 1 or self.height < 1:
            raise InvalidParameters("Board dimensions must be positive")
        if self.num_mines < 0:
            raise InvalidParameters("Number of mines cannot be negative")
        max_mines = self.width * self.height - 1
        if self.num_mines > max_mines:
            raise InvalidParameters(f"Too many mines (max {max_mines})")

    @property
    def cell_count(self) -> int:
        return self.width * self.height


# Preset difficulty levels
BEGINNER = BoardConfig(9, 9, 10)
INTERMEDIATE = BoardConfig(16, 16, 40)
EXPERT = BoardConfig(30, 16, 99)

PRESETS = {
    "beginner": BEGINNER,
    "intermediate": INTERMEDIATE,
    "expert": EXPERT,
}


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Grid of cells indexed by (row, col), row-major and 0-based.

    The board starts without mines; ``lay_mines`` writes the layout exactly
    once. Visibility changes go through ``reveal_cell`` and ``toggle_mark``
    so the counters stay in step with the grid.
    """

    config: BoardConfig = field(default_factory=BoardConfig)
    _grid: List[List[Cell]] = field(default_factory=list, repr=False)
    _mines_laid: bool = False
    _revealed_count: int = 0
    _marked_count: int = 0
    _detonated: bool = False

    def __post_init__(self) -> None:
        """Initialize the grid after dataclass creation."""
        self._grid = [
            [Cell() for _ in range(self.config.width)]
            for _ in range(self.config.height)
        ]

    @classmethod
    def from_layout(cls, rows: Sequence[str]) -> "Board":
        """
        Build a board with mines laid from a text picture.

        Each string is one row; ``*`` marks a mine, any other character an
        empty cell. All rows must have the same length.
        """
        if not rows or any(len(row) != len(rows[0]) for row in rows):
            raise InvalidParameters("Layout rows must be non-empty and equal length")
        mines = [
            (row, col)
            for row, line in enumerate(rows)
            for col, char in enumerate(line)
            if char == MINE_CHAR
        ]
        board = cls(BoardConfig(len(rows[0]), len(rows), len(mines)))
        board.lay_mines(mines)
        return board

    # ========================================================================
    # Geometry
    # ========================================================================

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    def contains(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.config.height and 0 <= col < self.config.width

    def check_position(self, row: int, col: int) -> None:
        """Raise OutOfBounds unless the position is on the board."""
        if not self.contains(row, col):
            raise OutOfBounds(row, col, self.config.height, self.config.width)

    def neighbors(self, row: int, col: int) -> List[Position]:
        """
        Get the neighbouring positions of a cell.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            Up to 8 (row, col) tuples, orthogonal and diagonal, clipped
            at the edges.
        """
        result = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self.contains(new_row, new_col):
                    result.append((new_row, new_col))
        return result

    def positions(self) -> Iterable[Position]:
        """Iterate every position in row-major order."""
        for row in range(self.config.height):
            for col in range(self.config.width):
                yield row, col

    # ========================================================================
    # Mine Layout
    # ========================================================================

    def lay_mines(self, mine_positions: Iterable[Position]) -> None:
        """
        Place mines and compute adjacent counts for every other cell.

        Args:
            mine_positions: Exactly ``config.num_mines`` distinct positions.

        Raises:
            InvalidParameters: If mines were already laid or the positions
                do not match the configured count.
            OutOfBounds: If a position is off the board.
        """
        if self._mines_laid:
            raise InvalidParameters("Mines have already been laid on this board")
        mines: Set[Position] = set(mine_positions)
        if len(mines) != self.config.num_mines:
            raise InvalidParameters(
                f"Expected {self.config.num_mines} distinct mine positions, "
                f"got {len(mines)}"
            )
        for row, col in mines:
            self.check_position(row, col)

        for row, col in mines:
            self._grid[row][col].is_mine = True
        for row, col in self.positions():
            cell = self._grid[row][col]
            if not cell.is_mine:
                cell.adjacent_mines = self._count_adjacent_mines(row, col)
        self._mines_laid = True

    def _count_adjacent_mines(self, row: int, col: int) -> int:
        return sum(
            1 for neighbor_row, neighbor_col in self.neighbors(row, col)
            if self._grid[neighbor_row][neighbor_col].is_mine
        )

    @property
    def mines_laid(self) -> bool:
        return self._mines_laid

    def mine_positions(self) -> Set[Position]:
        """Positions of every mine (empty before mines are laid)."""
        return {
            (row, col) for row, col in self.positions()
            if self._grid[row][col].is_mine
        }

    # ========================================================================
    # Cell Transitions
    # ========================================================================

    def cell(self, row: int, col: int) -> Cell:
        """Get the cell at a position, raising OutOfBounds when off the board."""
        self.check_position(row, col)
        return self._grid[row][col]

    def reveal_cell(self, row: int, col: int) -> bool:
        """Reveal a single hidden cell without any cascade."""
        cell = self.cell(row, col)
        if not cell.reveal():
            return False
        self._revealed_count += 1
        if cell.is_mine:
            self._detonated = True
        return True

    def toggle_mark(self, row: int, col: int) -> bool:
        """Toggle the mark on a hidden or marked cell."""
        cell = self.cell(row, col)
        if not cell.toggle_mark():
            return False
        if cell.state == CellState.MARKED:
            self._marked_count += 1
        else:
            self._marked_count -= 1
        return True

    def count_marked_neighbors(self, row: int, col: int) -> int:
        return sum(
            1 for neighbor_row, neighbor_col in self.neighbors(row, col)
            if self._grid[neighbor_row][neighbor_col].is_marked
        )

    # ========================================================================
    # Counters
    # ========================================================================

    @property
    def revealed_count(self) -> int:
        return self._revealed_count

    @property
    def marked_count(self) -> int:
        return self._marked_count

    @property
    def safe_cell_count(self) -> int:
        """Number of cells without a mine."""
        return self.config.cell_count - self.config.num_mines

    @property
    def has_detonated(self) -> bool:
        """Whether any mine has been revealed."""
        return self._detonated

    @property
    def is_cleared(self) -> bool:
        """Whether every non-mine cell is revealed (and no mine is)."""
        return (
            self._mines_laid
            and not self._detonated
            and self._revealed_count == self.safe_cell_count
        )
