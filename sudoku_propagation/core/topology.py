"""Fixed 9x9 grid topology: which box, row and column each cell belongs to.

Cells are addressed by a linear index 0-80 that walks the grid box by box:
indices 0-8 fill the top-left box left to right, top to bottom, 9-17 the
top-middle box, and so on. Persisted layouts depend on this numbering, so
the arithmetic below must not change.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

SIZE = 9
BOX_SIZE = 3
CELL_COUNT = SIZE * SIZE
DIGITS: Tuple[int, ...] = tuple(range(1, SIZE + 1))


class GroupKind(Enum):
    """The three kinds of group every cell belongs to."""
    BOX = "box"
    ROW = "row"
    COL = "col"


# Sweep order used everywhere a cell's groups are visited
GROUP_KINDS: Tuple[GroupKind, ...] = (GroupKind.BOX, GroupKind.ROW, GroupKind.COL)


@dataclass(frozen=True)
class CellLocation:
    """Group membership of one cell and its position inside each group."""
    index: int
    box: int
    row: int
    col: int
    box_pos: int
    row_pos: int
    col_pos: int

    def group_number(self, kind: GroupKind) -> int:
        """Number (0-8) of the group of the given kind holding this cell."""
        if kind is GroupKind.BOX:
            return self.box
        if kind is GroupKind.ROW:
            return self.row
        return self.col

    def position_in(self, kind: GroupKind) -> int:
        """Local position (0-8) of this cell inside its group of that kind."""
        if kind is GroupKind.BOX:
            return self.box_pos
        if kind is GroupKind.ROW:
            return self.row_pos
        return self.col_pos


def locate(index: int) -> CellLocation:
    """
    Map a linear cell index to its box, row and column.

    Args:
        index: Linear cell index (0-80).

    Returns:
        The cell's location.
    """
    if index < 0 or index >= CELL_COUNT:
        raise ValueError(f"Cell index must be 0-{CELL_COUNT - 1}, got {index}")

    box = index // SIZE
    row = (index % SIZE) // BOX_SIZE + BOX_SIZE * (index // 27)
    col = (index % BOX_SIZE + BOX_SIZE * (index // SIZE)) % SIZE

    # Inside a row the cells are ordered by column, inside a column by row
    return CellLocation(
        index=index,
        box=box,
        row=row,
        col=col,
        box_pos=index % SIZE,
        row_pos=col,
        col_pos=row,
    )


def index_of(row: int, col: int) -> int:
    """Inverse of locate(): linear index of the cell at (row, col)."""
    if not (0 <= row < SIZE and 0 <= col < SIZE):
        raise ValueError(f"Position must be within 0-{SIZE - 1}, got ({row}, {col})")
    box = (row // BOX_SIZE) * BOX_SIZE + col // BOX_SIZE
    return box * SIZE + (row % BOX_SIZE) * BOX_SIZE + col % BOX_SIZE


LOCATIONS: Tuple[CellLocation, ...] = tuple(locate(i) for i in range(CELL_COUNT))
