"""Tests for the deduction strategies, each set up on an otherwise empty board."""

import pytest
from sudoku_propagation.core.errors import ContradictionError, InternalInconsistencyError
from sudoku_propagation.engine.board import Board
from sudoku_propagation.engine.config import PropagationConfig


def strip(board, row, col, *digits):
    """Eliminate digits from one cell, in order."""
    cell = board.cell_at(row, col)
    for digit in digits:
        cell.eliminate(digit)
    return cell


class TestHiddenSingle:
    """Tests for hidden singles."""

    def test_only_place_for_digit(self):
        """Test a digit with one possible cell in a row is placed there."""
        board = Board()
        extras = [1, 2, 3, 5, 6, 7, 8, 9]
        for col, extra in enumerate(extras, start=1):
            strip(board, 0, col, extra, 4)

        board.hidden_single(board.rows[0])

        assert board.cell_at(0, 0).value == 4
        assert board.tally["hidden_single"] == 1

    def test_nothing_to_find(self):
        """Test an empty board has no hidden singles."""
        board = Board()
        board.hidden_single(board.rows[0])
        assert board.unresolved_count() == 81
        assert board.tally["hidden_single"] == 0


class TestHiddenPair:
    """Tests for hidden pairs."""

    def test_pair_strips_other_candidates(self):
        """Test two digits confined to two cells leave only the pair there."""
        board = Board()
        extras = [1, 3, 4, 5, 6, 8, 9]
        for col, extra in enumerate(extras, start=2):
            strip(board, 0, col, extra, 2, 7)
        before = [board.candidates_at(board.cell_at(0, col).index) for col in range(2, 9)]

        board.hidden_pair(board.rows[0])

        assert board.cell_at(0, 0).sorted_candidates() == (2, 7)
        assert board.cell_at(0, 1).sorted_candidates() == (2, 7)
        after = [board.candidates_at(board.cell_at(0, col).index) for col in range(2, 9)]
        assert after == before
        assert board.tally["hidden_pair"] == 1

    def test_pair_found_as_naked_complement(self):
        """Test the same pair emerging from the naked set of the other seven cells."""
        board = Board()
        keep = [board.cell_at(0, 0), board.cell_at(0, 1)]
        board.eliminate_from_group_except(board.rows[0], 2, keep)
        board.eliminate_from_group_except(board.rows[0], 7, keep)

        for cell in keep:
            assert cell.sorted_candidates() == (2, 7)
        for col in range(2, 9):
            assert board.cell_at(0, col).sorted_candidates() == (1, 3, 4, 5, 6, 8, 9)
        # The pair now also claims 2 and 7 within box 0
        for row in (1, 2):
            for col in range(3):
                assert board.cell_at(row, col).sorted_candidates() == (1, 3, 4, 5, 6, 8, 9)
        assert board.unresolved_count() == 81


class TestPointing:
    """Tests for pointing pairs and triples."""

    def test_pointing_triple(self):
        """Test a digit confined to a box row is removed from the rest of the row."""
        board = Board()
        for row in (1, 2):
            for col in range(3):
                strip(board, row, col, 5)

        board.pointing_triple(board.boxes[0])

        for col in range(3, 9):
            assert 5 not in board.cell_at(0, col).candidates
        for col in range(3):
            assert 5 in board.cell_at(0, col).candidates
        assert 5 in board.cell_at(1, 4).candidates
        assert board.tally["pointing_triple"] == 1

    def test_pointing_pair(self):
        """Test a digit confined to two cells of a box row."""
        board = Board()
        for row in (1, 2):
            for col in range(3):
                strip(board, row, col, 5)
        strip(board, 0, 2, 5)

        board.pointing_pair(board.boxes[0])

        for col in range(3, 9):
            assert 5 not in board.cell_at(0, col).candidates
        assert 5 in board.cell_at(0, 0).candidates
        assert 5 in board.cell_at(0, 1).candidates
        assert board.tally["pointing_pair"] == 1

    def test_pointing_needs_shared_group(self):
        """Test two cells on a diagonal point nowhere."""
        board = Board()
        for row in range(3):
            for col in range(3):
                if (row, col) not in ((0, 0), (1, 1)):
                    strip(board, row, col, 5)

        board.pointing_pair(board.boxes[0])

        assert board.tally["pointing_pair"] == 0
        assert 5 in board.cell_at(0, 5).candidates
        assert 5 in board.cell_at(5, 0).candidates


class TestNakedSets:
    """Tests for naked sets found by the cell follow-ups."""

    def test_naked_pair(self):
        """Test two cells holding the same two digits claim them in their row."""
        board = Board()
        for col in (0, 4):
            strip(board, 0, col, 3, 4, 5, 6, 7, 8, 9)

        for col in (1, 2, 3, 5, 6, 7, 8):
            assert board.cell_at(0, col).sorted_candidates() == (3, 4, 5, 6, 7, 8, 9)
        assert len(board.cell_at(1, 0).candidates) == 9
        assert board.tally["naked_set"] >= 1

    def test_naked_quad(self):
        """Test four cells sharing four digits."""
        board = Board()
        for col in range(4):
            strip(board, 0, col, 5, 6, 7, 8, 9)

        for col in range(4, 9):
            assert board.cell_at(0, col).sorted_candidates() == (5, 6, 7, 8, 9)
        for col in range(4):
            assert board.cell_at(0, col).sorted_candidates() == (1, 2, 3, 4)

    def test_disabled(self):
        """Test naked sets can be switched off."""
        board = Board(config=PropagationConfig(naked_sets=False))
        for col in (0, 4):
            strip(board, 0, col, 3, 4, 5, 6, 7, 8, 9)

        assert len(board.cell_at(0, 1).candidates) == 9
        assert board.tally["naked_set"] == 0

    @pytest.mark.parametrize("digits", [[5], list(range(1, 10))])
    def test_set_size_bounds(self, digits):
        """Test the digit set must hold between 2 and 8 digits."""
        board = Board()
        with pytest.raises(AssertionError):
            board.naked_set(board.rows[0], digits)

    def test_too_few_matching_cells(self):
        """Test a set without enough cells changes nothing."""
        board = Board()
        strip(board, 0, 0, 3, 4, 5, 6, 7, 8, 9)
        assert not board.naked_set(board.rows[0], [1, 2])
        assert len(board.cell_at(0, 1).candidates) == 9


class TestGroupPrimitives:
    """Tests for the shared group helpers."""

    def test_bulk_elimination_forces_remaining_cell(self):
        """Test removing a digit from all but one cell of a row places it there."""
        board = Board()
        affected = board.eliminate_from_group_except(
            board.rows[0], 3, [board.cell_at(0, 0)]
        )

        assert len(affected) == 8
        assert board.cell_at(0, 0).value == 3
        assert board.tally["naked_single"] >= 1

    def test_cells_holding_after_placement(self):
        """Test a placed digit has no holders and no count in its group."""
        board = Board()
        board.assign(0, 5)

        assert board.cells_holding(board.rows[0], 5) == []
        assert board.candidate_counts(board.rows[0])[4] == 0
        assert board.is_placed(board.rows[0], 5)
        assert not board.is_placed(board.rows[1], 5)

    def test_candidate_counts(self):
        """Test per-digit counts over unresolved cells."""
        board = Board()
        strip(board, 0, 0, 1)
        counts = board.candidate_counts(board.rows[0])
        assert counts[0] == 8
        assert counts[1:] == [9] * 8


class TestBookkeepingErrors:
    """Tests for contradictions and count/lookup disagreements found by strategies."""

    def test_digit_with_no_place_in_group(self):
        """Test a digit neither placed nor possible anywhere in a row."""
        board = Board(config=PropagationConfig(naked_sets=False))

        with pytest.raises(ContradictionError) as info:
            with board.propagation():
                board.eliminate_from_group_except(board.rows[3], 6)
                board.hidden_single(board.rows[3])

        error = info.value
        assert error.group is board.rows[3]
        assert error.digit == 6
        assert (error.expected, error.actual) == (1, 0)
        assert board.contradiction is error

    def test_resolved_cell_carrying_foreign_digit(self):
        """Test a resolved cell still listing a digit that is not placed."""
        board = Board()
        board.assign(0, 5)
        board.cell(0)._candidates.add(7)

        with pytest.raises(InternalInconsistencyError) as info:
            board.cells_holding(board.rows[0], 7)

        error = info.value
        assert error.group is board.rows[0]
        assert error.digit == 7
        assert error.cell == 0

    def test_hidden_single_skips_placed_digit(self):
        """Test a stray candidate of an already placed digit is not a hidden single."""
        board = Board()
        board.assign(0, 5)
        stray = board.cell_at(0, 1)
        stray._candidates.add(5)

        board.hidden_single(board.rows[0])

        assert stray.value == 0
        assert board.tally["hidden_single"] == 0
        assert board.contradiction is None

    def test_hidden_single_stale_count(self, monkeypatch):
        """Test a count of one with nine actual holders is an internal error."""
        board = Board()
        monkeypatch.setattr(board, "candidate_counts", lambda group: [1] + [9] * 8)

        with pytest.raises(InternalInconsistencyError) as info:
            board.hidden_single(board.boxes[2])

        error = info.value
        assert error.group is board.boxes[2]
        assert error.digit == 1
        assert (error.expected, error.actual) == (1, 9)

    def test_pointing_skips_placed_digit(self):
        """Test stray candidates of an already placed digit point nowhere."""
        board = Board()
        board.assign(0, 5)
        for col in (1, 2):
            board.cell_at(0, col)._candidates.add(5)

        board.pointing_pair(board.rows[0])

        assert board.tally["pointing_pair"] == 0
        assert board.contradiction is None
        assert 5 in board.cell_at(0, 1).candidates

    def test_pointing_stale_count(self, monkeypatch):
        """Test a count of two with nine actual holders is an internal error."""
        board = Board()
        monkeypatch.setattr(board, "candidate_counts", lambda group: [2] + [9] * 8)

        with pytest.raises(InternalInconsistencyError) as info:
            board.pointing_pair(board.boxes[0])

        error = info.value
        assert error.group is board.boxes[0]
        assert error.digit == 1
        assert (error.expected, error.actual) == (2, 9)
        assert board.contradiction is error


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
