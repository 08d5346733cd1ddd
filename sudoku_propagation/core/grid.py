"""Plain 9x9 value grid used to feed puzzles in and read results out."""

from __future__ import annotations
import numpy as np
from typing import Iterable, List, Optional, Sequence

from .topology import SIZE, BOX_SIZE, CELL_COUNT


class Grid:
    """
    Row-major snapshot of digit values, 0 for an empty cell.

    This is the exchange format between the engine and whatever loads or
    displays puzzles. It holds values only; candidates live in the Board.
    """

    def __init__(self, grid: Optional[np.ndarray] = None):
        """
        Initialize a grid.

        Args:
            grid: Optional 9x9 array of values. If None, creates an empty grid.
        """
        if grid is None:
            self.grid = np.zeros((SIZE, SIZE), dtype=np.int32)
            return

        arr = np.asarray(grid)
        if arr.shape != (SIZE, SIZE):
            raise ValueError(f"Grid shape must be ({SIZE}, {SIZE}), got {arr.shape}")
        if arr.min() < 0 or arr.max() > SIZE:
            raise ValueError(f"Grid values must be 0-{SIZE}")
        self.grid = arr.astype(np.int32)

    def copy(self) -> Grid:
        """Create an independent copy of the grid."""
        return Grid(self.grid.copy())

    def get(self, row: int, col: int) -> int:
        """Get value at (row, col). 0 means empty."""
        return int(self.grid[row, col])

    def set(self, row: int, col: int, value: int) -> None:
        """Set value at (row, col). Use 0 to clear."""
        if value < 0 or value > SIZE:
            raise ValueError(f"Value must be 0-{SIZE}, got {value}")
        self.grid[row, col] = value

    def is_empty(self, row: int, col: int) -> bool:
        return self.grid[row, col] == 0

    def get_row(self, row: int) -> np.ndarray:
        return self.grid[row, :]

    def get_col(self, col: int) -> np.ndarray:
        return self.grid[:, col]

    def get_box(self, box: int) -> np.ndarray:
        """Values of box 0-8, numbered left to right, top to bottom."""
        top = (box // BOX_SIZE) * BOX_SIZE
        left = (box % BOX_SIZE) * BOX_SIZE
        return self.grid[top:top + BOX_SIZE, left:left + BOX_SIZE].flatten()

    def units(self) -> Iterable[np.ndarray]:
        """Every row, then every column, then every box."""
        for i in range(SIZE):
            yield self.get_row(i)
        for i in range(SIZE):
            yield self.get_col(i)
        for i in range(SIZE):
            yield self.get_box(i)

    def count_filled(self) -> int:
        return int(np.count_nonzero(self.grid))

    def count_empty(self) -> int:
        return CELL_COUNT - self.count_filled()

    def is_complete(self) -> bool:
        return self.count_empty() == 0

    def is_valid(self) -> bool:
        """True if no row, column or box repeats a digit. Empty cells are ignored."""
        for unit in self.units():
            filled = unit[unit != 0]
            if len(filled) != len(np.unique(filled)):
                return False
        return True

    def is_solved(self) -> bool:
        return self.is_complete() and self.is_valid()

    def flat(self) -> List[int]:
        """All 81 values in row-major order."""
        return [int(v) for v in self.grid.reshape(-1)]

    def to_string(self) -> str:
        """Compact 81-character form, '0' for empty cells."""
        return "".join(str(v) for v in self.flat())

    @classmethod
    def from_string(cls, s: str) -> Grid:
        """
        Parse an 81-character puzzle string.

        Args:
            s: Digits 1-9 for givens, '0' or '.' for empty cells. Surrounding
               whitespace is ignored.
        """
        s = s.strip()
        if len(s) != CELL_COUNT:
            raise ValueError(f"String length must be {CELL_COUNT}, got {len(s)}")

        values = []
        for c in s:
            if c in "0.":
                values.append(0)
            elif c.isdigit():
                values.append(int(c))
            else:
                raise ValueError(f"Unexpected character in puzzle string: {c!r}")
        return cls(np.array(values, dtype=np.int32).reshape(SIZE, SIZE))

    @classmethod
    def from_2d_list(cls, data: Sequence[Sequence[int]]) -> Grid:
        """Create a grid from nested lists, one list per row."""
        return cls(np.array(data, dtype=np.int32))

    @classmethod
    def from_values(cls, values: Sequence[int]) -> Grid:
        """Create a grid from 81 row-major values."""
        arr = np.asarray(values, dtype=np.int32)
        if arr.size != CELL_COUNT:
            raise ValueError(f"Expected {CELL_COUNT} values, got {arr.size}")
        return cls(arr.reshape(SIZE, SIZE))

    def __str__(self) -> str:
        lines = []
        separator = "+" + ("-" * (BOX_SIZE * 2 + 1) + "+") * BOX_SIZE

        for i in range(SIZE):
            if i % BOX_SIZE == 0:
                lines.append(separator)
            row_str = "|"
            for j in range(SIZE):
                val = self.grid[i, j]
                row_str += f" {val}" if val else " ."
                if (j + 1) % BOX_SIZE == 0:
                    row_str += " |"
            lines.append(row_str)

        lines.append(separator)
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"Grid(filled={self.count_filled()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return False
        return np.array_equal(self.grid, other.grid)

    def __hash__(self) -> int:
        return hash(self.to_string())
