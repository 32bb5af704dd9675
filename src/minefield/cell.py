"""
Cell module for the minefield engine.

A cell pairs its fixed content (mine or number), written once when mines are
laid, with the visibility state the player changes.
"""
from enum import Enum, auto
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Visibility states of a cell."""

    HIDDEN = auto()
    REVEALED = auto()
    MARKED = auto()


HIDDEN_VALUE = -1
MARKED_VALUE = -2
MINE_VALUE = 9


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    A single position on the grid.

    Attributes:
        is_mine: Whether revealing this cell loses the game.
        adjacent_mines: Mines among the up-to-8 neighbours (0-8). Unused
            for mine cells.
        state: Current visibility state.
    """

    is_mine: bool = False
    adjacent_mines: int = 0
    state: CellState = CellState.HIDDEN

    def reveal(self) -> bool:
        """
        Turn a hidden cell face up.

        Returns:
            True if the cell was hidden, False if it is already revealed
            or carries a mark.
        """
        if self.state != CellState.HIDDEN:
            return False
        self.state = CellState.REVEALED
        return True

    def toggle_mark(self) -> bool:
        """
        Switch between hidden and marked.

        Returns:
            True if the mark changed, False if the cell is revealed.
        """
        if self.state == CellState.REVEALED:
            return False
        if self.state == CellState.HIDDEN:
            self.state = CellState.MARKED
        else:
            self.state = CellState.HIDDEN
        return True

    @property
    def is_hidden(self) -> bool:
        return self.state == CellState.HIDDEN

    @property
    def is_revealed(self) -> bool:
        return self.state == CellState.REVEALED

    @property
    def is_marked(self) -> bool:
        return self.state == CellState.MARKED

    def to_observation(self) -> int:
        """
        Encode what the player can see of this cell.

        Returns:
            -1: Hidden cell
            -2: Marked cell
            0-8: Revealed cell with adjacent mine count
            9: Revealed mine
        """
        if self.state == CellState.HIDDEN:
            return HIDDEN_VALUE
        if self.state == CellState.MARKED:
            return MARKED_VALUE
        if self.is_mine:
            return MINE_VALUE
        return self.adjacent_mines
