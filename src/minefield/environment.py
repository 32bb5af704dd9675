"""
Gymnasium environment wrapper around ``Game``.

Lets automated players drive the engine through the standard RL interface.
"""
import random
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import BoardConfig
from .cell import CellState
from .game import Game, Intent
from .generator import FirstClick


INTENTS = (Intent.REVEAL, Intent.MARK, Intent.CHORD)

WIN_REWARD = 10.0
LOSS_REWARD = -10.0
REVEAL_REWARD = 1.0
NO_OP_REWARD = -0.1


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for minesweeper.

    Observation:
        2D int8 array where:
        - -1 = hidden cell
        - -2 = marked cell
        - 0-8 = revealed cell with adjacent mine count
        - 9 = revealed mine

    Actions:
        Discrete space of size 3 * width * height. With n cells, action
        ``a`` targets cell ``a % n`` at (cell // width, cell % width):
        ``a < n`` reveals, ``n <= a < 2n`` toggles a mark, ``a >= 2n`` chords.

    Rewards:
        - +1 for a reveal or chord that opens cells
        - +10 for winning the game
        - -10 for hitting a mine
        - 0 for a mark
        - -0.1 for an action that changes nothing
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
        first_click: FirstClick = FirstClick.SAFE_AREA,
        max_steps: Optional[int] = None,
    ) -> None:
        """
        Initialize the environment.

        Args:
            config: Board configuration (default: 9x9 with 10 mines).
            render_mode: How to render the environment.
            first_click: Mine protection for the first reveal of each game.
            max_steps: Steps before an episode is truncated (default:
                three per cell).
        """
        super().__init__()

        self.config = config or BoardConfig()
        self.render_mode = render_mode
        self.first_click = first_click
        self.max_steps = max_steps if max_steps is not None else 3 * self.config.cell_count
        self._rng = random.Random()
        self.game = Game(self.config, self._rng, first_click)
        self._steps = 0

        self.observation_space = spaces.Box(
            low=-2,
            high=9,
            shape=(self.config.height, self.config.width),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(len(INTENTS) * self.config.cell_count)

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Start a new game.

        Args:
            seed: Seeds mine placement for this and later games.
            options: Unused.

        Returns:
            Initial observation and info dict.
        """
        super().reset(seed=seed)
        if seed is not None:
            self._rng.seed(seed)
        self.game.restart()
        self._steps = 0
        return self.game.snapshot().to_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Apply one action.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        self._steps += 1
        intent, row, col = self.decode_action(int(action))
        reward = self._apply(intent, row, col)

        observation = self.game.snapshot().to_observation()
        terminated = self.game.is_over
        truncated = not terminated and self._steps >= self.max_steps
        return observation, reward, terminated, truncated, self._get_info()

    def decode_action(self, action: int) -> Tuple[Intent, int, int]:
        """Split a flat action index into (intent, row, col)."""
        cell_count = self.config.cell_count
        intent = INTENTS[action // cell_count]
        cell = action % cell_count
        return intent, cell // self.config.width, cell % self.config.width

    def encode_action(self, intent: Intent, row: int, col: int) -> int:
        """Flat action index for an intent on a cell."""
        offset = INTENTS.index(intent) * self.config.cell_count
        return offset + row * self.config.width + col

    def _apply(self, intent: Intent, row: int, col: int) -> float:
        outcome = self.game.dispatch(intent, row, col)
        if not outcome:
            return NO_OP_REWARD
        if self.game.is_won:
            return WIN_REWARD
        if self.game.is_lost:
            return LOSS_REWARD
        if intent == Intent.MARK:
            return 0.0
        return REVEAL_REWARD

    def _get_info(self) -> Dict[str, Any]:
        snapshot = self.game.snapshot()
        return {
            "steps": self._steps,
            "revealed": snapshot.revealed_count,
            "total_safe": self.config.cell_count - self.config.num_mines,
            "mines_remaining": snapshot.mines_remaining,
            "game_state": self.game.phase.name,
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        text = self.game.snapshot().render()
        if self.render_mode == "ansi":
            return text
        if self.render_mode == "human":
            print(text)
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Mask of actions that can change the board.

        Reveals of hidden cells, marks of hidden or marked cells and chords
        of revealed numbers are flagged True. Chords are not checked against
        the mark count.

        Returns:
            Boolean array of length ``action_space.n``.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        if self.game.is_over:
            return mask
        snapshot = self.game.snapshot()
        for row in range(snapshot.height):
            for col in range(snapshot.width):
                view = snapshot.cell(row, col)
                if view.state == CellState.HIDDEN:
                    mask[self.encode_action(Intent.REVEAL, row, col)] = True
                if view.state != CellState.REVEALED:
                    mask[self.encode_action(Intent.MARK, row, col)] = True
                elif view.adjacent_mines:
                    mask[self.encode_action(Intent.CHORD, row, col)] = True
        return mask
