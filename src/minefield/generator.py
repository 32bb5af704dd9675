"""
Mine placement.

Mines are sampled without replacement from every position the first-click
policy allows. The random source is always passed in, so a seeded
``random.Random`` reproduces a board exactly.
"""
import logging
import random
from enum import Enum, auto
from typing import Collection, List, Optional, Set

from .board import Board, BoardConfig, Position
from .errors import InvalidParameters


logger = logging.getLogger(__name__)


class FirstClick(Enum):
    """How the first revealed cell is protected from mines."""

    UNPROTECTED = auto()
    SAFE_CELL = auto()
    SAFE_AREA = auto()


def excluded_positions(
    board: Board,
    avoid: Optional[Position],
    first_click: FirstClick = FirstClick.SAFE_AREA,
) -> Set[Position]:
    """
    Positions that must stay mine-free.

    ``SAFE_AREA`` keeps the clicked cell and its neighbours clear. When the
    rest of the board is too small to hold every mine it falls back to
    keeping only the clicked cell clear.
    """
    if avoid is None or first_click == FirstClick.UNPROTECTED:
        return set()

    board.check_position(*avoid)
    if first_click == FirstClick.SAFE_CELL:
        return {avoid}

    config = board.config
    area = {avoid, *board.neighbors(*avoid)}
    if config.cell_count - len(area) < config.num_mines:
        logger.debug(
            "Safe area around %s leaves no room for %d mines, keeping only the cell",
            avoid, config.num_mines,
        )
        return {avoid}
    return area


def sample_mine_positions(
    config: BoardConfig,
    rng: random.Random,
    exclude: Collection[Position] = (),
) -> List[Position]:
    """
    Pick ``config.num_mines`` distinct positions outside ``exclude``.

    Raises:
        InvalidParameters: If fewer allowed positions remain than mines
            (only possible with a hand-built exclusion set).
    """
    pool = [
        (row, col)
        for row in range(config.height)
        for col in range(config.width)
        if (row, col) not in exclude
    ]
    if config.num_mines > len(pool):
        raise InvalidParameters(
            f"Cannot place {config.num_mines} mines in {len(pool)} free cells"
        )
    return rng.sample(pool, config.num_mines)


def lay_random_mines(
    board: Board,
    rng: Optional[random.Random] = None,
    avoid: Optional[Position] = None,
    first_click: FirstClick = FirstClick.SAFE_AREA,
) -> None:
    """Lay random mines on an existing board, keeping its visibility states."""
    rng = rng or random.Random()
    exclude = excluded_positions(board, avoid, first_click)
    board.lay_mines(sample_mine_positions(board.config, rng, exclude))
    logger.debug(
        "Laid %d mines on %dx%d board (avoiding %d cells)",
        board.config.num_mines, board.height, board.width, len(exclude),
    )


def generate(
    width: int,
    height: int,
    mine_count: int,
    avoid: Optional[Position] = None,
    rng: Optional[random.Random] = None,
    first_click: FirstClick = FirstClick.SAFE_AREA,
) -> Board:
    """
    Create a fresh board with every cell hidden and mines laid.

    Args:
        width: Number of columns.
        height: Number of rows.
        mine_count: Mines to place, at most ``width * height - 1``.
        avoid: (row, col) of the first click, protected per ``first_click``.
        rng: Random source; a new unseeded one if omitted.
        first_click: Protection policy applied to ``avoid``.

    Raises:
        InvalidParameters: For non-positive dimensions or too many mines.
        OutOfBounds: If ``avoid`` is off the board.
    """
    board = Board(BoardConfig(width, height, mine_count))
    lay_random_mines(board, rng, avoid, first_click)
    return board
