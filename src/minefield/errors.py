"""
Exceptions raised by the minefield engine.

Only caller mistakes are exceptions. Intents that simply do not apply to a
cell's current state (revealing a marked cell, chording a mismatched number,
playing after the game ended) are reported through return values.
"""


class MinefieldError(Exception):
    """Base class for all engine errors."""


class InvalidParameters(MinefieldError, ValueError):
    """Board dimensions or mine count cannot form a valid game."""


class OutOfBounds(MinefieldError, IndexError):
    """A coordinate lies outside the board."""

    def __init__(self, row: int, col: int, height: int, width: int) -> None:
        super().__init__(
            f"Position ({row}, {col}) is outside the {height}x{width} board"
        )
        self.row = row
        self.col = col
