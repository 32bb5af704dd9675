"""
Reveal and chord operations on a board.

Both functions mutate the board in place and report what changed through a
``RevealResult``. They know nothing about game phases; the caller decides
whether an intent is allowed at all.
"""
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List, Optional

from .board import Board, Position


@dataclass
class RevealResult:
    """
    Cells turned face up by one operation.

    Attributes:
        revealed: Newly revealed positions, in the order they were revealed.
        exploded: The first mine revealed, if any.
    """

    revealed: List[Position] = field(default_factory=list)
    exploded: Optional[Position] = None

    @property
    def hit_mine(self) -> bool:
        return self.exploded is not None

    def extend(self, other: "RevealResult") -> None:
        """Fold another result into this one."""
        self.revealed.extend(other.revealed)
        if self.exploded is None:
            self.exploded = other.exploded

    def __bool__(self) -> bool:
        return bool(self.revealed)


def reveal(board: Board, row: int, col: int) -> RevealResult:
    """
    Reveal a hidden cell, flooding outward from zero-count cells.

    A mine is revealed and reported in ``exploded``. A safe cell with no
    adjacent mines opens every hidden neighbour, and each newly opened zero
    cell keeps the fill going. The fill stops at numbered cells (which are
    opened) and never touches marked cells.

    Cells are revealed as they enter the worklist, so each is visited at
    most once and the stack depth stays constant.

    Returns:
        An empty result when the cell is not hidden.
    """
    result = RevealResult()
    if not board.reveal_cell(row, col):
        return result

    result.revealed.append((row, col))
    cell = board.cell(row, col)
    if cell.is_mine:
        result.exploded = (row, col)
        return result
    if cell.adjacent_mines != 0:
        return result

    pending: Deque[Position] = deque([(row, col)])
    while pending:
        current = pending.popleft()
        for neighbor in board.neighbors(*current):
            # Zero cells have no mine neighbours, so everything hidden here is safe
            if not board.reveal_cell(*neighbor):
                continue
            result.revealed.append(neighbor)
            if board.cell(*neighbor).adjacent_mines == 0:
                pending.append(neighbor)
    return result


def chord(board: Board, row: int, col: int) -> RevealResult:
    """
    Reveal all hidden neighbours of a satisfied number.

    Applies only to a revealed, non-zero cell whose marked-neighbour count
    equals its number; anything else returns an empty result. Marks are
    trusted for the count only: every hidden neighbour is revealed for real,
    so a wrong mark leads to an exploded mine. All neighbours are revealed
    even after a mine is hit.
    """
    result = RevealResult()
    cell = board.cell(row, col)
    if not cell.is_revealed or cell.is_mine or cell.adjacent_mines == 0:
        return result
    if board.count_marked_neighbors(row, col) != cell.adjacent_mines:
        return result

    for neighbor in board.neighbors(row, col):
        result.extend(reveal(board, *neighbor))
    return result
