"""Validation utilities for value grids."""

from __future__ import annotations
from dataclasses import dataclass
from typing import List

from .grid import Grid
from .topology import SIZE, DIGITS


@dataclass(frozen=True)
class Conflict:
    """A digit that appears more than once in one row, column or box."""
    kind: str
    number: int
    digit: int
    count: int


def find_conflicts(grid: Grid) -> List[Conflict]:
    """
    List every uniqueness violation in the grid.

    Empty cells are ignored, so a partially filled grid without repeats
    yields an empty list.
    """
    conflicts = []
    getters = (("row", grid.get_row), ("col", grid.get_col), ("box", grid.get_box))
    for kind, getter in getters:
        for number in range(SIZE):
            unit = getter(number)
            for digit in DIGITS:
                count = int((unit == digit).sum())
                if count > 1:
                    conflicts.append(Conflict(kind, number, digit, count))
    return conflicts


def is_valid_grid(grid: Grid) -> bool:
    """True if no digit repeats in any row, column or box."""
    return not find_conflicts(grid)


def respects_givens(puzzle: Grid, candidate: Grid) -> bool:
    """True if every given of the puzzle is unchanged in the candidate grid."""
    mask = puzzle.grid != 0
    return bool((puzzle.grid[mask] == candidate.grid[mask]).all())


def validate_solution(puzzle: Grid, solution: Grid) -> bool:
    """
    Validate that a solution correctly solves the puzzle.

    Args:
        puzzle: The original puzzle.
        solution: The proposed solution.

    Returns:
        True if the solution is complete, valid and keeps the puzzle's givens.
    """
    return respects_givens(puzzle, solution) and solution.is_solved()
