"""
Logic-based agent.

Plays certain moves found by ``deduction`` and falls back to the cell with
the lowest estimated mine probability when nothing is certain.
"""
from typing import Optional, Set, Tuple

import numpy as np

from minefield.cell import HIDDEN_VALUE, MARKED_VALUE
from minefield.game import Intent

from .base_agent import BaseAgent
from .deduction import Deduction, estimate_mine_probabilities, find_certain_cells


# ============================================================================
# Logic Agent
# ============================================================================

class LogicAgent(BaseAgent):
    """
    Agent that reveals only proven-safe cells whenever it can.

    Strategy:
        1. Open the board in the centre (the safe first-click area makes
           this the most likely cascade).
        2. Reveal a cell deduced safe.
        3. With ``mark_mines``, mark a cell deduced to be a mine.
        4. Otherwise reveal the hidden cell with the lowest estimated mine
           probability, treating unconstrained cells as the board-wide
           mine density.
    """

    def __init__(
        self,
        board_height: int = 9,
        board_width: int = 9,
        total_mines: Optional[int] = None,
        mark_mines: bool = False,
    ) -> None:
        """
        Initialize the logic agent.

        Args:
            board_height: Number of rows in the board.
            board_width: Number of columns in the board.
            total_mines: Mine count of the board, enabling global deductions.
            mark_mines: Whether to spend moves marking deduced mines.
        """
        super().__init__(board_height, board_width)
        self.total_mines = total_mines
        self.mark_mines = mark_mines
        self._first_move = True

    def select_action(
        self,
        observation: np.ndarray,
        valid_actions: Optional[np.ndarray] = None,
    ) -> int:
        """
        Select the next action.

        Args:
            observation: 2D array of cell states.
            valid_actions: Optional mask of valid actions.

        Returns:
            Flat action index, a reveal unless a mine is being marked.
        """
        if valid_actions is None:
            valid_actions = self.get_valid_actions_from_obs(observation)

        reveal_mask = valid_actions[: self.total_cells]
        if not reveal_mask.any():
            return 0

        if self._first_move:
            self._first_move = False
            centre = self.position_to_action(self.board_height // 2, self.board_width // 2)
            if reveal_mask[centre]:
                return centre

        deduction = self.deduce(observation)
        for row, col in sorted(deduction.safe):
            action = self.position_to_action(row, col)
            if reveal_mask[action]:
                return action

        if self.mark_mines:
            for row, col in sorted(deduction.mines):
                action = self.position_to_action(row, col, Intent.MARK)
                if valid_actions[action]:
                    return action

        return self._select_by_probability(observation, reveal_mask, deduction.mines)

    def deduce(self, observation: np.ndarray) -> Deduction:
        """Certain cells for the current observation."""
        return find_certain_cells(observation, self.total_mines)

    def _select_by_probability(
        self,
        observation: np.ndarray,
        reveal_mask: np.ndarray,
        known_mines: Set[Tuple[int, int]],
    ) -> int:
        """Reveal the valid cell least likely to hold a mine."""
        probabilities = estimate_mine_probabilities(observation, known_mines)
        default = self._density(observation)

        best_action = int(np.flatnonzero(reveal_mask)[0])
        best_probability = 2.0
        for action in np.flatnonzero(reveal_mask):
            position = self.action_to_position(int(action))
            if position in known_mines:
                continue
            probability = probabilities.get(position, default)
            if probability < best_probability:
                best_probability = probability
                best_action = int(action)
        return best_action

    def _density(self, observation: np.ndarray) -> float:
        """Share of unknown cells expected to hold a mine."""
        hidden = int(np.count_nonzero(observation == HIDDEN_VALUE))
        if self.total_mines is None or hidden == 0:
            return 0.5
        marked = int(np.count_nonzero(observation == MARKED_VALUE))
        return max(0.0, min(1.0, (self.total_mines - marked) / hidden))

    def reset(self) -> None:
        """Reset for a new game."""
        self._first_move = True
