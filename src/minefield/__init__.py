"""
Minefield game engine.

Provides board generation, cell state, the reveal/chord logic and the game
state machine, plus a gymnasium environment for automated players.
"""
from .errors import MinefieldError, InvalidParameters, OutOfBounds
from .cell import Cell, CellState
from .board import Board, BoardConfig, BEGINNER, INTERMEDIATE, EXPERT, PRESETS
from .generator import FirstClick, generate
from .reveal import RevealResult, reveal, chord
from .game import Game, Intent, Phase, new_game
from .snapshot import BoardSnapshot, CellView
from .controls import Button, intent_for_click, can_restart
from .environment import MinesweeperEnv

__all__ = [
    "MinefieldError",
    "InvalidParameters",
    "OutOfBounds",
    "Cell",
    "CellState",
    "Board",
    "BoardConfig",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "PRESETS",
    "FirstClick",
    "generate",
    "RevealResult",
    "reveal",
    "chord",
    "Game",
    "Intent",
    "Phase",
    "new_game",
    "BoardSnapshot",
    "CellView",
    "Button",
    "intent_for_click",
    "can_restart",
    "MinesweeperEnv",
]
