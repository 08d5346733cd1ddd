"""Candidate propagation engine for 9x9 Sudoku."""

from .core import (
    Grid,
    GroupKind,
    PropagationError,
    InvalidStateError,
    ContradictionError,
    InternalInconsistencyError,
)
from .engine import Board, Cell, Group, PropagationConfig, DeductionSolver

__version__ = "1.0.0"

__all__ = [
    "Board",
    "Cell",
    "Group",
    "GroupKind",
    "Grid",
    "PropagationConfig",
    "DeductionSolver",
    "PropagationError",
    "InvalidStateError",
    "ContradictionError",
    "InternalInconsistencyError",
]
