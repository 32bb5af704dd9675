"""
Game state machine.

A ``Game`` owns one board and its phase, validates every player intent
against them and delegates the actual work to ``generator`` and ``reveal``.
The input layer calls the intent methods; the render layer reads
``snapshot()``.
"""
import logging
import random
from enum import Enum, auto
from typing import Optional, Union

from .board import Board, BoardConfig
from .errors import InvalidParameters
from .generator import FirstClick, lay_random_mines
from .reveal import RevealResult, chord as chord_cells, reveal as reveal_cells
from .snapshot import BoardSnapshot


logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class Phase(Enum):
    """Overall progress of a game."""

    NOT_STARTED = auto()
    PLAYING = auto()
    WON = auto()
    LOST = auto()

    @property
    def is_terminal(self) -> bool:
        return self in (Phase.WON, Phase.LOST)


class Intent(Enum):
    """Cell-level actions a player can request."""

    REVEAL = auto()
    MARK = auto()
    CHORD = auto()


# ============================================================================
# Game Class
# ============================================================================

class Game:
    """
    One game of minesweeper, from first click to win or loss.

    With a protecting first-click policy the mines are laid on the first
    reveal, so the game stays ``NOT_STARTED`` until then (marks may already
    be placed). With ``FirstClick.UNPROTECTED`` the mines are laid right
    away and the game starts ``PLAYING``.

    Once ``WON`` or ``LOST`` the board is frozen: intents become no-ops until
    ``restart``.
    """

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        rng: Optional[random.Random] = None,
        first_click: FirstClick = FirstClick.SAFE_AREA,
    ) -> None:
        """
        Start a new game.

        Args:
            config: Board configuration (default: 9x9 with 10 mines).
            rng: Random source for mine placement. Pass a seeded
                ``random.Random`` for reproducible games.
            first_click: Protection applied to the first reveal.
        """
        self._config = config or BoardConfig()
        self._rng = rng or random.Random()
        self._first_click = first_click
        self._start()

    @classmethod
    def from_board(
        cls,
        board: Board,
        rng: Optional[random.Random] = None,
        first_click: FirstClick = FirstClick.SAFE_AREA,
    ) -> "Game":
        """
        Play on a board whose mines are already laid.

        The game starts ``PLAYING``. ``restart`` later generates a random
        board with the same configuration.

        Raises:
            InvalidParameters: If the board has no mine layout yet.
        """
        if not board.mines_laid:
            raise InvalidParameters("Board has no mine layout to play on")
        game = cls.__new__(cls)
        game._config = board.config
        game._rng = rng or random.Random()
        game._first_click = first_click
        game._board = board
        game._phase = Phase.PLAYING
        return game

    def _start(self) -> None:
        self._board = Board(self._config)
        self._phase = Phase.NOT_STARTED
        if self._first_click == FirstClick.UNPROTECTED:
            lay_random_mines(self._board, self._rng, first_click=FirstClick.UNPROTECTED)
            self._phase = Phase.PLAYING

    # ========================================================================
    # Intents
    # ========================================================================

    def reveal(self, row: int, col: int) -> RevealResult:
        """
        Reveal a cell, laying the mines first if this is the first reveal.

        Returns:
            The cells revealed; empty if the cell is not hidden or the game
            is over.

        Raises:
            OutOfBounds: If the position is off the board.
        """
        self._board.check_position(row, col)
        if self._phase.is_terminal or not self._board.cell(row, col).is_hidden:
            return RevealResult()

        if self._phase == Phase.NOT_STARTED:
            lay_random_mines(self._board, self._rng, (row, col), self._first_click)
            self._phase = Phase.PLAYING

        result = reveal_cells(self._board, row, col)
        logger.debug("Reveal (%d, %d) opened %d cells", row, col, len(result.revealed))
        self._settle(result)
        return result

    def mark(self, row: int, col: int) -> bool:
        """
        Toggle the mark on a hidden or marked cell.

        Returns:
            True if the mark changed, False on revealed cells or once the
            game is over.

        Raises:
            OutOfBounds: If the position is off the board.
        """
        self._board.check_position(row, col)
        if self._phase.is_terminal:
            return False
        changed = self._board.toggle_mark(row, col)
        if changed:
            logger.debug(
                "Mark (%d, %d) -> %s", row, col, self._board.cell(row, col).state.name
            )
        return changed

    def chord(self, row: int, col: int) -> RevealResult:
        """
        Reveal the hidden neighbours of a revealed number whose marks match.

        Returns:
            The cells revealed; empty when the marks do not match, the cell
            is not a revealed number, or the game is over.

        Raises:
            OutOfBounds: If the position is off the board.
        """
        self._board.check_position(row, col)
        if self._phase != Phase.PLAYING:
            return RevealResult()
        result = chord_cells(self._board, row, col)
        logger.debug("Chord (%d, %d) opened %d cells", row, col, len(result.revealed))
        self._settle(result)
        return result

    def dispatch(self, intent: Intent, row: int, col: int) -> Union[RevealResult, bool]:
        """Apply an intent produced by an input layer."""
        if intent == Intent.REVEAL:
            return self.reveal(row, col)
        if intent == Intent.MARK:
            return self.mark(row, col)
        if intent == Intent.CHORD:
            return self.chord(row, col)
        raise ValueError(f"Unknown intent: {intent!r}")

    def restart(self, config: Optional[BoardConfig] = None) -> None:
        """
        Throw the current board away and start over.

        Accepted in any phase. Keeps the previous configuration unless a new
        one is given.
        """
        if config is not None:
            self._config = config
        logger.debug(
            "Restart %dx%d with %d mines",
            self._config.width, self._config.height, self._config.num_mines,
        )
        self._start()

    def _settle(self, result: RevealResult) -> None:
        """Recompute the phase after cells were revealed."""
        if result.hit_mine:
            self._phase = Phase.LOST
            logger.info("Game lost at %s", result.exploded)
        elif self._board.is_cleared:
            self._phase = Phase.WON
            logger.info("Game won")

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def config(self) -> BoardConfig:
        return self._config

    @property
    def first_click(self) -> FirstClick:
        return self._first_click

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def is_over(self) -> bool:
        return self._phase.is_terminal

    @property
    def is_won(self) -> bool:
        return self._phase == Phase.WON

    @property
    def is_lost(self) -> bool:
        return self._phase == Phase.LOST

    @property
    def mines_remaining(self) -> int:
        """Configured mines minus placed marks."""
        return self._config.num_mines - self._board.marked_count

    def snapshot(self) -> BoardSnapshot:
        """Copy of the visible board for renderers and agents."""
        return BoardSnapshot.capture(self._board, self._phase)


def new_game(
    width: int,
    height: int,
    mine_count: int,
    rng: Optional[random.Random] = None,
    first_click: FirstClick = FirstClick.SAFE_AREA,
) -> Game:
    """
    Create a game from its three basic parameters.

    Raises:
        InvalidParameters: For non-positive dimensions or too many mines.
    """
    return Game(BoardConfig(width, height, mine_count), rng, first_click)
