"""Propagation engine: cells, groups, the board and solving sessions."""

from .board import Board, CellChange
from .cell import Cell
from .config import PropagationConfig, PRESETS
from .group import Group
from .session import DeductionSolver, SessionStats

__all__ = [
    "Board",
    "CellChange",
    "Cell",
    "Group",
    "PropagationConfig",
    "PRESETS",
    "DeductionSolver",
    "SessionStats",
]
