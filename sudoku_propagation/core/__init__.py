"""Core module: grid topology, value grids, validation and errors."""

from .errors import (
    PropagationError,
    InvalidStateError,
    ContradictionError,
    InternalInconsistencyError,
)
from .grid import Grid
from .topology import GroupKind, CellLocation, locate, index_of, DIGITS
from .validator import find_conflicts, is_valid_grid, validate_solution

__all__ = [
    "PropagationError",
    "InvalidStateError",
    "ContradictionError",
    "InternalInconsistencyError",
    "Grid",
    "GroupKind",
    "CellLocation",
    "locate",
    "index_of",
    "DIGITS",
    "find_conflicts",
    "is_valid_grid",
    "validate_solution",
]
