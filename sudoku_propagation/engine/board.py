"""The Board: cell arena, group wiring, elimination primitives and strategies."""

from __future__ import annotations
import collections
import contextlib
import logging
from dataclasses import dataclass
from typing import (
    Callable, Deque, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple
)

import numpy as np

from ..core.errors import (
    ContradictionError, InternalInconsistencyError, InvalidStateError
)
from ..core.grid import Grid
from ..core.topology import (
    CELL_COUNT, DIGITS, GROUP_KINDS, SIZE, GroupKind, index_of
)
from .cell import Cell
from .config import PropagationConfig
from .group import Group, build_groups

log = logging.getLogger(__name__)

Strategy = Callable[[Group], object]


@dataclass(frozen=True)
class CellChange:
    """State of a cell that changed during the last top-level mutation."""
    index: int
    value: int
    candidates: Tuple[int, ...]


class _Sweep:
    """A queued full pass: (strategy, group) steps consumed one at a time."""

    def __init__(self, steps: Iterator[Tuple[Strategy, Group]]):
        self.steps = steps
        self.started = False


class Board:
    """
    Candidate-propagation engine for one 9x9 puzzle.

    Owns the 81 cells and the 27 groups wired over them. Consequences of a
    change are not applied by recursion but queued: cell follow-ups
    (forced value, naked sets) in one FIFO, full passes in another. Cell
    follow-ups always drain before the next step of a pass, so a cell left
    with one candidate is resolved before any further group is swept.
    """

    def __init__(self, givens=None, config: Optional[PropagationConfig] = None):
        """
        Build a board and place the givens.

        Args:
            givens: Optional starting values in row-major order, 0 for empty.
                    A Grid, 81 values or a 9x9 nested sequence/array.
            config: Which strategies to run (default: all of them).
        """
        self.config = config or PropagationConfig()
        self.cells: List[Cell] = [Cell(i, self) for i in range(CELL_COUNT)]
        self.boxes = build_groups(GroupKind.BOX)
        self.rows = build_groups(GroupKind.ROW)
        self.cols = build_groups(GroupKind.COL)
        self._groups: Dict[GroupKind, Tuple[Group, ...]] = {
            GroupKind.BOX: self.boxes,
            GroupKind.ROW: self.rows,
            GroupKind.COL: self.cols,
        }

        self._follow_ups: Deque[Tuple[Cell, int]] = collections.deque()
        self._sweeps: Deque[_Sweep] = collections.deque()
        self._active = False
        self._changed: Dict[int, None] = {}
        self._listeners: List[Callable[[List[CellChange]], None]] = []

        self.contradiction: Optional[InvalidStateError] = None
        self.tally: collections.Counter = collections.Counter()

        if givens is not None:
            self.place_givens(givens)

    # ------------------------------------------------------------------
    # Construction

    def place_givens(self, givens) -> None:
        """Assign the non-zero givens in row-major order, each fully propagated."""
        values = _flatten_givens(givens)
        for position, value in enumerate(values):
            if value == 0:
                continue
            row, col = divmod(position, SIZE)
            cell = self.cell_at(row, col)
            # Earlier givens may already have forced this one
            if cell.value == value:
                continue
            if not cell.assign(value):
                error = ContradictionError(
                    f"Given {value} at ({row}, {col}) conflicts with the other givens",
                    digit=value,
                    expected=value,
                    actual=cell.value,
                    cell=cell.index,
                )
                self.contradiction = error
                log.warning("%s", error)
                raise error

    # ------------------------------------------------------------------
    # Queries

    def cell(self, index: int) -> Cell:
        if index < 0 or index >= CELL_COUNT:
            raise ValueError(f"Cell index must be 0-{CELL_COUNT - 1}, got {index}")
        return self.cells[index]

    def cell_at(self, row: int, col: int) -> Cell:
        return self.cells[index_of(row, col)]

    def group(self, kind: GroupKind, number: int) -> Group:
        return self._groups[kind][number]

    def all_groups(self) -> Iterator[Group]:
        """Box i, row i, column i for i = 0..8: the order passes sweep in."""
        for i in range(SIZE):
            for kind in GROUP_KINDS:
                yield self._groups[kind][i]

    def value_at(self, index: int) -> int:
        return self.cell(index).value

    def candidates_at(self, index: int) -> Tuple[int, ...]:
        return self.cell(index).sorted_candidates()

    def unresolved_count(self) -> int:
        return sum(1 for cell in self.cells if cell.value == 0)

    def is_solved(self) -> bool:
        return self.contradiction is None and self.unresolved_count() == 0

    def to_grid(self) -> Grid:
        """Snapshot of the resolved values in row-major order."""
        values = np.zeros((SIZE, SIZE), dtype=np.int32)
        for cell in self.cells:
            values[cell.location.row, cell.location.col] = cell.value
        return Grid(values)

    def __str__(self) -> str:
        return str(self.to_grid())

    def __repr__(self) -> str:
        return f"Board(unresolved={self.unresolved_count()})"

    # ------------------------------------------------------------------
    # Commands and change notification

    def assign(self, index: int, digit: int) -> bool:
        """
        Place a digit in a cell. The only mutation offered to callers.

        Ignored when the cell is resolved or the digit is not a candidate.

        Raises:
            ValueError: index or digit out of range.
            ContradictionError: the placement leaves the puzzle unsolvable.
            InvalidStateError: the board is already inconsistent.
        """
        if digit not in DIGITS:
            raise ValueError(f"Digit must be 1-{SIZE}, got {digit}")
        return self.cell(index).assign(digit)

    def add_listener(self, listener: Callable[[List[CellChange]], None]) -> None:
        """Call listener with the changed cells after each top-level mutation."""
        self._listeners.append(listener)

    def remove_listener(self, listener: Callable[[List[CellChange]], None]) -> None:
        self._listeners.remove(listener)

    def record_assignment(self, cell: Cell) -> None:
        self.tally["assignments"] += 1
        self._changed[cell.index] = None

    def record_elimination(self, cell: Cell) -> None:
        self.tally["eliminations"] += 1
        self._changed[cell.index] = None

    def _notify(self) -> None:
        if not self._changed:
            return
        changes = [
            CellChange(i, self.cells[i].value, self.cells[i].sorted_candidates())
            for i in self._changed
        ]
        self._changed.clear()
        for listener in list(self._listeners):
            listener(changes)

    # ------------------------------------------------------------------
    # Work-list

    @contextlib.contextmanager
    def propagation(self) -> Iterator[None]:
        """
        Scope of one mutation.

        The outermost scope drains every queued consequence before it exits;
        nested scopes only queue. A contradiction, or any other exception
        escaping the scope, marks the board as inconsistent and refuses later
        mutations.
        """
        if self._active:
            yield
            return

        if self.contradiction is not None:
            raise InvalidStateError(
                f"Board is inconsistent ({self.contradiction}); no further deductions",
                group=self.contradiction.group,
                digit=self.contradiction.digit,
                cell=self.contradiction.cell,
            )

        self._active = True
        try:
            yield
            self._drain()
        except InvalidStateError as exc:
            self.contradiction = exc
            self._changed.clear()
            log.warning("Propagation stopped: %s", exc)
            raise
        except BaseException as exc:
            # Candidates may be half-updated, so nothing further can be trusted
            self.contradiction = InternalInconsistencyError(
                f"Propagation interrupted by {type(exc).__name__}: {exc}"
            )
            self._changed.clear()
            log.error("Propagation interrupted: %r", exc)
            raise
        finally:
            self._active = False
            self._follow_ups.clear()
            self._sweeps.clear()
        self._notify()

    def schedule_follow_up(self, cell: Cell, digit: int) -> None:
        """Queue the checks that follow removing digit from an unresolved cell."""
        self._follow_ups.append((cell, digit))

    def request_pass(self) -> None:
        """Queue a full pass unless one is already waiting to start."""
        if self._sweeps and not self._sweeps[-1].started:
            return
        self._sweeps.append(_Sweep(self._pass_steps()))
        self.tally["passes"] += 1

    def full_pass(self) -> None:
        """Run hidden singles, hidden pairs and pointing over every group."""
        with self.propagation():
            self.request_pass()

    def _pass_steps(self) -> Iterator[Tuple[Strategy, Group]]:
        strategies: List[Strategy] = []
        if self.config.hidden_singles:
            strategies.append(self.hidden_single)
        if self.config.hidden_pairs:
            strategies.append(self.hidden_pair)
        if self.config.pointing:
            strategies.append(self.pointing_pair)
            strategies.append(self.pointing_triple)

        for strategy in strategies:
            for group in self.all_groups():
                yield strategy, group

    def _drain(self) -> None:
        steps = 0
        while self._follow_ups or self._sweeps:
            steps += 1
            if steps > self.config.max_steps:
                raise InternalInconsistencyError(
                    f"Propagation did not settle within {self.config.max_steps} steps",
                    expected=self.config.max_steps,
                    actual=steps,
                )

            if self._follow_ups:
                cell, digit = self._follow_ups.popleft()
                self._follow_up(cell, digit)
                continue

            sweep = self._sweeps[0]
            sweep.started = True
            step = next(sweep.steps, None)
            if step is None:
                self._sweeps.popleft()
                continue
            strategy, group = step
            strategy(group)

    def _follow_up(self, cell: Cell, digit: int) -> None:
        if cell.value != 0:
            return
        remaining = cell.sorted_candidates()
        if len(remaining) == 1:
            log.debug("Cell %d forced to %d after losing %d", cell.index, remaining[0], digit)
            self.tally["naked_single"] += 1
            cell.assign(remaining[0])
        elif self.config.naked_sets:
            for group in cell.groups:
                self.naked_set(group, remaining)

    # ------------------------------------------------------------------
    # Group primitives

    def eliminate_from_group_except(
        self, group: Group, value: int, exceptions: Iterable[Cell] = ()
    ) -> List[Cell]:
        """
        Remove a digit from every unresolved cell of a group except some.

        All removals happen first; the follow-up checks are queued afterwards
        so none of them sees the group half-updated.

        Returns:
            The cells that actually lost the digit.
        """
        skip = {cell.index for cell in exceptions}
        affected = []
        with self.propagation():
            for index in group:
                if index in skip:
                    continue
                cell = self.cells[index]
                if cell.value == 0 and cell.discard(value):
                    affected.append(cell)
            for cell in affected:
                self.schedule_follow_up(cell, value)
        return affected

    def candidate_counts(self, group: Group) -> List[int]:
        """For digits 1-9, how many unresolved cells of the group can hold it."""
        counts = [0] * SIZE
        for index in group:
            cell = self.cells[index]
            if cell.value != 0:
                continue
            for digit in DIGITS:
                if cell.has_candidate(digit):
                    counts[digit - 1] += 1
        return counts

    def cells_holding(self, group: Group, value: int) -> List[Cell]:
        """
        Cells of the group carrying value as a candidate.

        Returns an empty list when a resolved cell carries it, which means
        the digit is already placed in the group.
        """
        holders = []
        for index in group:
            cell = self.cells[index]
            if not cell.has_candidate(value):
                continue
            if cell.value != 0:
                if not self.is_placed(group, value):
                    raise InternalInconsistencyError(
                        f"Resolved cell {cell.index} still carries {value} "
                        f"but {value} is not placed in {group}",
                        group=group,
                        digit=value,
                        cell=cell.index,
                    )
                return []
            holders.append(cell)
        return holders

    def is_placed(self, group: Group, value: int) -> bool:
        """True if some cell of the group is resolved to value."""
        return any(self.cells[index].value == value for index in group)

    def _shared_group(self, cells: Sequence[Cell], exclude: Group) -> Optional[Group]:
        """First box/row/column other than exclude that contains all cells."""
        for kind in GROUP_KINDS:
            numbers = {cell.group_id(kind) for cell in cells}
            if len(numbers) == 1:
                group = self.group(kind, numbers.pop())
                if group is not exclude:
                    return group
        return None

    # ------------------------------------------------------------------
    # Strategies

    def hidden_single(self, group: Group) -> None:
        """Place every digit that only one cell of the group can hold."""
        with self.propagation():
            counts = self.candidate_counts(group)
            for digit in DIGITS:
                count = counts[digit - 1]
                if count == 0:
                    if not self.is_placed(group, digit):
                        raise ContradictionError(
                            f"No cell of {group} can hold {digit}",
                            group=group,
                            digit=digit,
                            expected=1,
                            actual=0,
                        )
                    continue
                if count != 1:
                    continue

                holders = self.cells_holding(group, digit)
                if len(holders) == 1:
                    log.debug("Hidden single %d at cell %d in %s", digit, holders[0].index, group)
                    self.tally["hidden_single"] += 1
                    holders[0].assign(digit)
                    counts = self.candidate_counts(group)
                elif not self.is_placed(group, digit):
                    raise InternalInconsistencyError(
                        f"{group} counts one cell for {digit} but {len(holders)} hold it",
                        group=group,
                        digit=digit,
                        expected=1,
                        actual=len(holders),
                    )

    def hidden_pair(self, group: Group) -> None:
        """Two digits confined to the same two cells: strip those cells to the pair."""
        with self.propagation():
            counts = self.candidate_counts(group)
            for high in DIGITS:
                for low in range(1, high):
                    if counts[high - 1] != 2 or counts[low - 1] != 2:
                        continue
                    first = self.cells_holding(group, high)
                    second = self.cells_holding(group, low)
                    if len(first) != 2 or set(first) != set(second):
                        continue

                    changed = False
                    for cell in first:
                        changed |= cell.eliminate_all_except((low, high))
                    if changed:
                        log.debug(
                            "Hidden pair %d/%d at cells %s in %s",
                            low, high, [c.index for c in first], group,
                        )
                        self.tally["hidden_pair"] += 1
                        counts = self.candidate_counts(group)

    def pointing_pair(self, group: Group) -> None:
        """A digit confined to two cells that share another group."""
        self._pointing(group, 2, "pointing_pair")

    def pointing_triple(self, group: Group) -> None:
        """A digit confined to three cells that share another group."""
        self._pointing(group, 3, "pointing_triple")

    def _pointing(self, group: Group, size: int, name: str) -> None:
        with self.propagation():
            counts = self.candidate_counts(group)
            for digit in DIGITS:
                if counts[digit - 1] != size:
                    continue

                holders = self.cells_holding(group, digit)
                if len(holders) != size:
                    if not self.is_placed(group, digit):
                        raise InternalInconsistencyError(
                            f"{group} counts {size} cells for {digit} "
                            f"but {len(holders)} hold it",
                            group=group,
                            digit=digit,
                            expected=size,
                            actual=len(holders),
                        )
                    continue

                target = self._shared_group(holders, group)
                if target is None:
                    continue
                if self.eliminate_from_group_except(target, digit, holders):
                    log.debug("%s on %d from %s into %s", name, digit, group, target)
                    self.tally[name] += 1
                    counts = self.candidate_counts(group)

    def naked_set(self, group: Group, digits: Sequence[int]) -> bool:
        """
        N cells of a group whose candidates all fall within the same N digits
        claim those digits: remove them from the rest of the group.

        Args:
            group: Group to inspect.
            digits: The N digits (2 <= N <= 8).

        Returns:
            True if any candidate was removed.
        """
        allowed = frozenset(digits)
        assert 2 <= len(allowed) <= SIZE - 1, f"naked set needs 2-8 digits, got {digits}"

        with self.propagation():
            matched = [
                self.cells[index] for index in group
                if self.cells[index].value == 0 and self.cells[index].candidates <= allowed
            ]
            if len(matched) > len(allowed):
                raise ContradictionError(
                    f"{len(matched)} cells of {group} share only digits {sorted(allowed)}",
                    group=group,
                    expected=len(allowed),
                    actual=len(matched),
                )
            if len(matched) != len(allowed):
                return False

            changed = False
            for digit in sorted(allowed):
                if self.eliminate_from_group_except(group, digit, matched):
                    changed = True
            if changed:
                log.debug(
                    "Naked set %s at cells %s in %s",
                    sorted(allowed), [c.index for c in matched], group,
                )
                self.tally["naked_set"] += 1
        return changed


def _flatten_givens(givens) -> List[int]:
    if isinstance(givens, Grid):
        return givens.flat()
    values = np.asarray(givens).reshape(-1)
    if values.size != CELL_COUNT:
        raise ValueError(f"Expected {CELL_COUNT} givens, got {values.size}")
    if values.min() < 0 or values.max() > SIZE:
        raise ValueError(f"Givens must be 0-{SIZE}")
    return [int(v) for v in values]
