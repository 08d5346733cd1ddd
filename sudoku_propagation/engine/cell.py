"""A single grid cell: its value and the digits it may still take."""

from __future__ import annotations
from typing import FrozenSet, Iterable, Set, Tuple, TYPE_CHECKING

from ..core.errors import ContradictionError
from ..core.topology import DIGITS, GROUP_KINDS, LOCATIONS, CellLocation, GroupKind

if TYPE_CHECKING:
    from .board import Board
    from .group import Group


class Cell:
    """
    One of the 81 cells of a Board.

    The value is 0 while unresolved. Candidates are only ever changed
    through assign() and eliminate(); every change is reported to the Board,
    which schedules the follow-up deductions.
    """

    def __init__(self, index: int, board: Board):
        self.index = index
        self.board = board
        self.location: CellLocation = LOCATIONS[index]
        self.value = 0
        self._candidates: Set[int] = set(DIGITS)

    @property
    def candidates(self) -> FrozenSet[int]:
        return frozenset(self._candidates)

    @property
    def is_resolved(self) -> bool:
        return self.value != 0

    def has_candidate(self, digit: int) -> bool:
        return digit in self._candidates

    def sorted_candidates(self) -> Tuple[int, ...]:
        return tuple(sorted(self._candidates))

    def group_id(self, kind: GroupKind) -> int:
        """Number of the group of this kind that owns the cell."""
        return self.location.group_number(kind)

    @property
    def groups(self) -> Tuple[Group, ...]:
        """The cell's box, row and column, in that order."""
        return tuple(self.board.group(kind, self.group_id(kind)) for kind in GROUP_KINDS)

    def assign(self, value: int) -> bool:
        """
        Resolve this cell to a value and propagate the consequences.

        Does nothing if the cell is already resolved or the value is not one
        of its candidates.

        Returns:
            True if the cell was resolved by this call.
        """
        if self.value != 0 or value not in self._candidates:
            return False

        board = self.board
        with board.propagation():
            self.value = value
            board.record_assignment(self)

            for digit in DIGITS:
                if digit != value:
                    self.eliminate(digit)

            for group in self.groups:
                board.eliminate_from_group_except(group, value, (self,))

            # A placement anywhere can enable deductions anywhere
            board.request_pass()
        return True

    def eliminate(self, value: int) -> bool:
        """
        Remove a digit from this cell's candidates.

        Removing a digit that is already gone is a no-op. For an unresolved
        cell the removal schedules the forced-value and naked-set checks.

        Returns:
            True if the candidate set changed.
        """
        if value == self.value or value not in self._candidates:
            return False

        with self.board.propagation():
            self.discard(value)
            if self.value == 0:
                self.board.schedule_follow_up(self, value)
        return True

    def eliminate_all_except(self, keep: Iterable[int]) -> bool:
        """Eliminate every digit not in keep. Returns True if anything changed."""
        keep = set(keep)
        changed = False
        with self.board.propagation():
            for digit in DIGITS:
                if digit not in keep:
                    changed |= self.eliminate(digit)
        return changed

    def discard(self, value: int) -> bool:
        """
        Drop a candidate without scheduling any follow-up.

        Used by the Board's bulk elimination, which schedules the follow-ups
        itself once the whole group has been updated.
        """
        if value not in self._candidates:
            return False
        self._candidates.discard(value)
        self.board.record_elimination(self)
        if self.value == 0 and not self._candidates:
            raise ContradictionError(
                f"No candidates left for cell {self.index}",
                digit=value,
                expected=1,
                actual=0,
                cell=self.index,
            )
        return True

    def __repr__(self) -> str:
        if self.value:
            return f"Cell({self.index}, value={self.value})"
        return f"Cell({self.index}, candidates={list(self.sorted_candidates())})"
