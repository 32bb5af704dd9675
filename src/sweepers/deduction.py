"""
Constraint deduction over a minefield observation.

Every revealed number says how many mines hide among its unknown
neighbours. Combining those statements finds cells that are certainly safe
or certainly mined:

- a constraint with no mines left clears all its cells,
- a constraint with as many mines as cells mines all of them,
- when one constraint's cells are a strict subset of another's, the
  difference carries the difference in mines.

The rules are applied repeatedly until nothing new is learned.
"""
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional, Set, Tuple

import numpy as np

from minefield.cell import HIDDEN_VALUE, MARKED_VALUE


Position = Tuple[int, int]

MAX_ROUNDS = 100


# ============================================================================
# Constraint Types
# ============================================================================

@dataclass(frozen=True)
class Constraint:
    """Exactly ``mine_count`` of ``cells`` are mines."""

    cells: FrozenSet[Position]
    mine_count: int


@dataclass
class Deduction:
    """Cells proven safe or mined."""

    safe: Set[Position] = field(default_factory=set)
    mines: Set[Position] = field(default_factory=set)

    def __bool__(self) -> bool:
        return bool(self.safe or self.mines)


@dataclass
class NumberInfo:
    """Neighbourhood of a revealed number."""

    row: int
    col: int
    adjacent_mines: int
    hidden_neighbors: Set[Position]
    marked_neighbors: Set[Position]

    @property
    def remaining_mines(self) -> int:
        return self.adjacent_mines - len(self.marked_neighbors)


# ============================================================================
# Observation Helpers
# ============================================================================

def _neighbors(observation: np.ndarray, row: int, col: int) -> List[Position]:
    height, width = observation.shape
    return [
        (row + dr, col + dc)
        for dr in (-1, 0, 1)
        for dc in (-1, 0, 1)
        if (dr or dc) and 0 <= row + dr < height and 0 <= col + dc < width
    ]


def numbered_cells(observation: np.ndarray) -> List[NumberInfo]:
    """Revealed numbers (1-8) with their hidden and marked neighbours."""
    height, width = observation.shape
    infos = []
    for row in range(height):
        for col in range(width):
            value = int(observation[row, col])
            if value < 1 or value > 8:
                continue
            hidden: Set[Position] = set()
            marked: Set[Position] = set()
            for position in _neighbors(observation, row, col):
                neighbor = observation[position]
                if neighbor == HIDDEN_VALUE:
                    hidden.add(position)
                elif neighbor == MARKED_VALUE:
                    marked.add(position)
            infos.append(NumberInfo(row, col, value, hidden, marked))
    return infos


def build_constraints(observation: np.ndarray) -> List[Constraint]:
    """
    One constraint per revealed number that still touches hidden cells.

    Marks are taken at face value here; numbers contradicted by the marks
    around them are skipped.
    """
    constraints = []
    for info in numbered_cells(observation):
        if not info.hidden_neighbors:
            continue
        if not 0 <= info.remaining_mines <= len(info.hidden_neighbors):
            continue
        constraints.append(
            Constraint(frozenset(info.hidden_neighbors), info.remaining_mines)
        )
    return constraints


# ============================================================================
# Solver
# ============================================================================

def find_certain_cells(
    observation: np.ndarray, total_mines: Optional[int] = None
) -> Deduction:
    """
    Find hidden cells that are certainly safe or certainly mines.

    Args:
        observation: 2D array with -1 hidden, -2 marked, 0-8 numbers.
        total_mines: Mines on the whole board. Adds a global constraint
            over every hidden cell, counting marks as mines.

    Returns:
        A Deduction; both sets hold hidden positions only.
    """
    constraints = build_constraints(observation)

    if total_mines is not None:
        hidden = {
            (int(row), int(col))
            for row, col in zip(*np.nonzero(observation == HIDDEN_VALUE))
        }
        remaining = total_mines - int(np.count_nonzero(observation == MARKED_VALUE))
        if hidden and 0 <= remaining <= len(hidden):
            constraints.append(Constraint(frozenset(hidden), remaining))

    return solve_constraints(constraints)


def solve_constraints(constraints: List[Constraint]) -> Deduction:
    """
    Apply the rules until neither the known cells nor the constraint set
    change any more.

    Constraints derived by subset reduction take part in later rounds, so
    chains of nested constraints are followed to the end.
    """
    result = Deduction()
    for _ in range(MAX_ROUNDS):
        before = set(constraints)
        constraints, learned = _apply_simple_rules(constraints, result)
        constraints, subset_learned = _subset_reduction(constraints)
        fresh = (subset_learned.safe | subset_learned.mines) - result.safe - result.mines
        result.safe |= subset_learned.safe
        result.mines |= subset_learned.mines
        if not learned and not fresh and set(constraints) == before:
            break
    return result


def _apply_simple_rules(
    constraints: List[Constraint], known: Deduction
) -> Tuple[List[Constraint], bool]:
    """Strip known cells and resolve all-safe or all-mine constraints."""
    learned = False
    kept = []
    for constraint in constraints:
        cells = constraint.cells - known.safe - known.mines
        mines = constraint.mine_count - len(constraint.cells & known.mines)
        if not cells:
            continue
        if mines == 0:
            known.safe |= cells
            learned = True
        elif mines == len(cells):
            known.mines |= cells
            learned = True
        else:
            kept.append(Constraint(frozenset(cells), mines))
    return list(dict.fromkeys(kept)), learned


def _subset_reduction(
    constraints: List[Constraint],
) -> Tuple[List[Constraint], Deduction]:
    """
    Combine constraints whose cells nest.

    Example:
        A: {X, Y} has 1 mine
        B: {X, Y, Z} has 1 mine
        -> Z is safe
    """
    learned = Deduction()
    derived: List[Constraint] = []

    for i, first in enumerate(constraints):
        for second in constraints[i + 1:]:
            if first.cells < second.cells:
                small, large = first, second
            elif second.cells < first.cells:
                small, large = second, first
            else:
                continue

            cells = large.cells - small.cells
            mines = large.mine_count - small.mine_count
            if mines == 0:
                learned.safe |= cells
            elif mines == len(cells):
                learned.mines |= cells
            elif 0 < mines < len(cells):
                derived.append(Constraint(cells, mines))

    return list(dict.fromkeys(constraints + derived)), learned


# ============================================================================
# Probabilities
# ============================================================================

def estimate_mine_probabilities(
    observation: np.ndarray,
    known_mines: Optional[Set[Position]] = None,
) -> Dict[Position, float]:
    """
    Rough mine probability for hidden cells next to numbers.

    Each number spreads its remaining mines evenly over its unknown
    neighbours; a cell touched by several numbers keeps the highest value.
    Cells next to no number are absent from the result.
    """
    known_mines = known_mines or set()
    estimates: Dict[Position, List[float]] = defaultdict(list)

    for info in numbered_cells(observation):
        unknown = info.hidden_neighbors - known_mines
        remaining = info.remaining_mines - len(info.hidden_neighbors & known_mines)
        if not unknown or remaining < 0:
            continue
        probability = remaining / len(unknown)
        for position in unknown:
            estimates[position].append(probability)

    return {position: max(values) for position, values in estimates.items()}
