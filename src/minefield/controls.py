"""
Mapping of pointer clicks to game intents.

Front ends translate device events into a ``Button`` and a cell position;
what that click means depends on the cell's current visibility.
"""
from enum import Enum, auto
from typing import Optional

from .cell import CellState
from .game import Intent
from .snapshot import BoardSnapshot


class Button(Enum):
    PRIMARY = auto()
    SECONDARY = auto()


def intent_for_click(
    snapshot: BoardSnapshot, row: int, col: int, button: Button
) -> Optional[Intent]:
    """
    Choose the intent for a click on a cell.

    Primary reveals a hidden cell and chords a revealed one. Secondary
    toggles the mark on a hidden or marked cell and chords a revealed one.
    A primary click on a marked cell does nothing.
    """
    state = snapshot.cell(row, col).state
    if state == CellState.REVEALED:
        return Intent.CHORD
    if button == Button.SECONDARY:
        return Intent.MARK
    if state == CellState.HIDDEN:
        return Intent.REVEAL
    return None


def can_restart(snapshot: BoardSnapshot) -> bool:
    """Restart is offered only after the game is decided."""
    return snapshot.phase.is_terminal
