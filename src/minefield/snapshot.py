"""
Read-only views of a board for renderers and agents.

A snapshot is a copy: it exposes only what the player may see (plus the
mine layout once the game is over) and does not change when play goes on.
"""
from dataclasses import dataclass
from typing import FrozenSet, List, Optional, Tuple, TYPE_CHECKING

import numpy as np

from .board import Board, Position
from .cell import CellState, HIDDEN_VALUE, MARKED_VALUE, MINE_VALUE
from .errors import OutOfBounds

if TYPE_CHECKING:
    from .game import Phase


@dataclass(frozen=True)
class CellView:
    """What the player sees of one cell."""

    state: CellState
    is_mine: Optional[bool] = None
    adjacent_mines: Optional[int] = None

    def to_observation(self) -> int:
        if self.state == CellState.HIDDEN:
            return HIDDEN_VALUE
        if self.state == CellState.MARKED:
            return MARKED_VALUE
        if self.is_mine:
            return MINE_VALUE
        return self.adjacent_mines


@dataclass(frozen=True)
class BoardSnapshot:
    """
    Immutable picture of a game at one moment.

    ``is_mine`` and ``adjacent_mines`` are only filled for revealed cells.
    ``mine_positions`` stays empty while the game is undecided and lists
    every mine once it is won or lost.
    """

    width: int
    height: int
    num_mines: int
    phase: "Phase"
    cells: Tuple[Tuple[CellView, ...], ...]
    revealed_count: int
    marked_count: int
    mine_positions: FrozenSet[Position] = frozenset()

    @classmethod
    def capture(cls, board: Board, phase: "Phase") -> "BoardSnapshot":
        rows = []
        for row in range(board.height):
            views = []
            for col in range(board.width):
                cell = board.cell(row, col)
                if cell.is_revealed:
                    views.append(CellView(cell.state, cell.is_mine, cell.adjacent_mines))
                else:
                    views.append(CellView(cell.state))
            rows.append(tuple(views))
        return cls(
            width=board.width,
            height=board.height,
            num_mines=board.config.num_mines,
            phase=phase,
            cells=tuple(rows),
            revealed_count=board.revealed_count,
            marked_count=board.marked_count,
            mine_positions=frozenset(board.mine_positions()) if phase.is_terminal else frozenset(),
        )

    def cell(self, row: int, col: int) -> CellView:
        if not (0 <= row < self.height and 0 <= col < self.width):
            raise OutOfBounds(row, col, self.height, self.width)
        return self.cells[row][col]

    @property
    def mines_remaining(self) -> int:
        """Mine count minus marks; negative when over-marked."""
        return self.num_mines - self.marked_count

    def hidden_positions(self) -> List[Position]:
        """Positions still hidden (marked cells excluded)."""
        return [
            (row, col)
            for row in range(self.height)
            for col in range(self.width)
            if self.cells[row][col].state == CellState.HIDDEN
        ]

    def to_observation(self) -> np.ndarray:
        """
        Board as an int8 array of shape (height, width).

        Returns:
            2D numpy array where:
                -1 = hidden
                -2 = marked
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        obs = np.zeros((self.height, self.width), dtype=np.int8)
        for row in range(self.height):
            for col in range(self.width):
                obs[row, col] = self.cells[row][col].to_observation()
        return obs

    def render(self) -> str:
        """Render the grid as text, one line per row."""
        lines = []
        for row in range(self.height):
            chars = [self._render_char(row, col) for col in range(self.width)]
            lines.append(" ".join(chars))
        return "\n".join(lines)

    def _render_char(self, row: int, col: int) -> str:
        view = self.cells[row][col]
        buried = (row, col) in self.mine_positions
        if view.state == CellState.MARKED:
            if self.phase.is_terminal and not buried:
                return "X"
            return "F"
        if view.state == CellState.HIDDEN:
            return "*" if buried else "."
        if view.is_mine:
            return "*"
        if view.adjacent_mines == 0:
            return " "
        return str(view.adjacent_mines)
