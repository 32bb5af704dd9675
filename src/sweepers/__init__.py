"""
Automated minefield players.

Provides:
- BaseAgent: action index helpers shared by all agents
- LogicAgent: constraint deduction with a probability fallback
- deduction: the constraint solver used by LogicAgent
"""
from .base_agent import BaseAgent
from .deduction import (
    Constraint,
    Deduction,
    build_constraints,
    estimate_mine_probabilities,
    find_certain_cells,
    solve_constraints,
)
from .logic_agent import LogicAgent

__all__ = [
    "BaseAgent",
    "Constraint",
    "Deduction",
    "build_constraints",
    "find_certain_cells",
    "estimate_mine_probabilities",
    "solve_constraints",
    "LogicAgent",
]
