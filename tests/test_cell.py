"""Tests for the Cell assignment and elimination primitives."""

import pytest
from sudoku_propagation.core.topology import DIGITS, GroupKind
from sudoku_propagation.engine.board import Board


@pytest.fixture
def board():
    return Board()


class TestAssign:
    """Tests for Cell.assign."""

    def test_assign_resolves_cell(self, board):
        """Test a successful assignment."""
        cell = board.cell_at(4, 4)
        assert cell.assign(6)
        assert cell.value == 6
        assert cell.is_resolved
        assert cell.candidates == frozenset({6})

    def test_assign_non_candidate_is_ignored(self, board):
        """Test assigning a removed digit does nothing."""
        cell = board.cell_at(0, 0)
        cell.eliminate(3)
        assert not cell.assign(3)
        assert cell.value == 0
        assert 3 not in cell.candidates

    def test_assign_resolved_cell_is_ignored(self, board):
        """Test a second assignment does nothing."""
        cell = board.cell_at(0, 0)
        cell.assign(1)
        assert not cell.assign(2)
        assert cell.value == 1

    def test_assign_clears_digit_from_peers(self, board):
        """Test the assigned digit leaves the cell's box, row and column."""
        cell = board.cell_at(3, 5)
        cell.assign(9)
        for group in cell.groups:
            for index in group:
                if index != cell.index:
                    assert 9 not in board.candidates_at(index)


class TestEliminate:
    """Tests for Cell.eliminate and Cell.eliminate_all_except."""

    def test_eliminate_removes_candidate(self, board):
        """Test a plain elimination."""
        cell = board.cell_at(2, 7)
        assert cell.eliminate(4)
        assert cell.sorted_candidates() == (1, 2, 3, 5, 6, 7, 8, 9)

    def test_eliminate_is_idempotent(self, board):
        """Test removing an absent digit changes nothing."""
        cell = board.cell_at(2, 7)
        cell.eliminate(4)
        before = dict(board.tally)

        assert not cell.eliminate(4)
        assert dict(board.tally) == before
        assert cell.sorted_candidates() == (1, 2, 3, 5, 6, 7, 8, 9)

    def test_last_candidate_is_forced(self, board):
        """Test a cell left with one digit resolves to it."""
        cell = board.cell_at(0, 0)
        for digit in range(1, 9):
            cell.eliminate(digit)

        assert cell.value == 9
        assert board.tally["naked_single"] == 1
        for group in cell.groups:
            for index in group:
                if index != cell.index:
                    assert 9 not in board.candidates_at(index)

    def test_eliminate_all_except(self, board):
        """Test narrowing a cell to a set of digits."""
        cell = board.cell_at(8, 8)
        assert cell.eliminate_all_except({2, 7})
        assert cell.sorted_candidates() == (2, 7)
        assert not cell.eliminate_all_except({2, 7})

    def test_eliminate_on_resolved_cell_keeps_value(self, board):
        """Test the resolved value can't be eliminated."""
        cell = board.cell_at(1, 1)
        cell.assign(5)
        assert not cell.eliminate(5)
        assert cell.value == 5


class TestCellWiring:
    """Tests for a cell's view of its groups."""

    def test_groups_are_box_row_col(self, board):
        """Test the three owning groups."""
        cell = board.cell_at(4, 7)
        box, row, col = cell.groups
        assert (box.kind, box.number) == (GroupKind.BOX, 5)
        assert (row.kind, row.number) == (GroupKind.ROW, 4)
        assert (col.kind, col.number) == (GroupKind.COL, 7)
        assert all(cell.index in group for group in cell.groups)

    def test_new_cell_state(self, board):
        """Test every cell starts unresolved with all digits."""
        for cell in board.cells:
            assert cell.value == 0
            assert cell.sorted_candidates() == DIGITS

    def test_repr(self, board):
        """Test the debug representation."""
        cell = board.cell(0)
        assert repr(cell) == "Cell(0, candidates=[1, 2, 3, 4, 5, 6, 7, 8, 9])"
        cell.assign(3)
        assert repr(cell) == "Cell(0, value=3)"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
