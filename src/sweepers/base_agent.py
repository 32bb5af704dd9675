"""
Base agent interface for automated minefield players.

Agents pick actions in the ``MinesweeperEnv`` action space from an
observation array.
"""
from abc import ABC, abstractmethod
from typing import Optional, Tuple

import numpy as np

from minefield.cell import HIDDEN_VALUE, MARKED_VALUE
from minefield.game import Intent


ACTION_INTENTS = (Intent.REVEAL, Intent.MARK, Intent.CHORD)


# ============================================================================
# Base Agent Interface
# ============================================================================

class BaseAgent(ABC):
    """
    Abstract base class for minefield agents.

    Actions are flat indices: ``intent_index * cells + row * width + col``
    with intents ordered reveal, mark, chord, matching the environment.
    """

    def __init__(self, board_height: int, board_width: int) -> None:
        """
        Initialize the agent.

        Args:
            board_height: Number of rows in the board.
            board_width: Number of columns in the board.
        """
        self.board_height = board_height
        self.board_width = board_width
        self.total_cells = board_height * board_width

    @abstractmethod
    def select_action(
        self,
        observation: np.ndarray,
        valid_actions: Optional[np.ndarray] = None,
    ) -> int:
        """
        Select an action based on the current observation.

        Args:
            observation: 2D array of cell states.
            valid_actions: Optional mask of valid actions.

        Returns:
            Flat action index.
        """

    def action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to (row, col) position."""
        cell = action % self.total_cells
        return cell // self.board_width, cell % self.board_width

    def action_to_intent(self, action: int) -> Intent:
        return ACTION_INTENTS[action // self.total_cells]

    def position_to_action(
        self, row: int, col: int, intent: Intent = Intent.REVEAL
    ) -> int:
        """Convert an intent on (row, col) to a flat action index."""
        offset = ACTION_INTENTS.index(intent) * self.total_cells
        return offset + row * self.board_width + col

    def get_valid_actions_from_obs(self, observation: np.ndarray) -> np.ndarray:
        """
        Actions that can change the board.

        Reveals and marks of hidden cells, unmarking of marked cells and
        chords of revealed numbers.

        Args:
            observation: 2D array of cell states.

        Returns:
            Boolean mask over the full action space.
        """
        mask = np.zeros(len(ACTION_INTENTS) * self.total_cells, dtype=bool)
        cells = observation.flatten()
        hidden = cells == HIDDEN_VALUE
        n = self.total_cells
        mask[:n] = hidden
        mask[n : 2 * n] = hidden | (cells == MARKED_VALUE)
        mask[2 * n :] = (cells >= 1) & (cells <= 8)
        return mask

    def reset(self) -> None:
        """Reset agent state for a new game."""
