"""Groups of nine cells that must hold each digit exactly once."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple

from ..core.topology import GroupKind, LOCATIONS, SIZE, CELL_COUNT


@dataclass(frozen=True)
class Group:
    """
    A box, row or column.

    Holds the indices of its nine cells ordered by their local position in
    the group; the cells themselves live in the Board's arena.
    """
    kind: GroupKind
    number: int
    cell_ids: Tuple[int, ...]

    def __post_init__(self):
        if len(self.cell_ids) != SIZE or len(set(self.cell_ids)) != SIZE:
            raise ValueError(f"A group needs {SIZE} distinct cells, got {self.cell_ids}")

    def __contains__(self, index: int) -> bool:
        return index in self.cell_ids

    def __iter__(self):
        return iter(self.cell_ids)

    def __str__(self) -> str:
        return f"{self.kind.value} {self.number}"


def build_groups(kind: GroupKind) -> Tuple[Group, ...]:
    """Wire all 81 cells into the nine groups of one kind."""
    slots = [[-1] * SIZE for _ in range(SIZE)]
    for index in range(CELL_COUNT):
        location = LOCATIONS[index]
        slots[location.group_number(kind)][location.position_in(kind)] = index
    return tuple(Group(kind, number, tuple(ids)) for number, ids in enumerate(slots))
