import pytest

from sudoku_bt.candidates import CandidateCell
from sudoku_bt.errors import InvalidGridError, StructuralError
from sudoku_bt.models import Coord
from sudoku_bt.tracker import ConstraintTracker

# ---------- Constraint tracker ----------


def test_build_marks_every_given(puzzle_grid):
    tracker = ConstraintTracker.build(puzzle_grid, 3)
    # 5 sits at (row 0, col 0): digit index 4
    assert tracker.rows[0 * 9 + 4]
    assert tracker.cols[0 * 9 + 4]
    assert tracker.blocks[0 * 9 + 4]
    assert tracker.is_occupied(Coord(2, 0), 4)  # same row
    assert tracker.is_occupied(Coord(0, 2), 4)  # same column
    assert tracker.is_occupied(Coord(1, 1), 4)  # same block


def test_full_valid_grid_sets_every_entry(solved_grid):
    tracker = ConstraintTracker.build(solved_grid, 3)
    assert all(tracker.rows) and all(tracker.cols) and all(tracker.blocks)


def test_full_invalid_grid_is_rejected(swapped_solution_grid, solved_grid):
    bad = list(solved_grid)
    bad[0], bad[1] = bad[1], bad[0]  # breaks two columns
    with pytest.raises(InvalidGridError):
        ConstraintTracker.build(bad, 3)
    # an alternative valid filling is fine
    ConstraintTracker.build(swapped_solution_grid, 3)


def test_invalid_grid_is_a_structural_error(solved_grid):
    bad = list(solved_grid)
    bad[9] = bad[0]
    with pytest.raises(StructuralError):
        ConstraintTracker.build(bad, 3)


def test_conflicting_givens_are_rejected():
    grid = [0] * 81
    grid[0] = 7
    grid[8] = 7
    with pytest.raises(InvalidGridError):
        ConstraintTracker.build(grid, 3)


def test_set_occupied_marks_and_unmarks():
    tracker = ConstraintTracker.build([0] * 81, 3)
    coord = Coord(4, 4)
    tracker.set_occupied(coord, 2, True)
    assert tracker.is_occupied(Coord(0, 4), 2)
    assert tracker.is_occupied(Coord(4, 0), 2)
    assert tracker.is_occupied(Coord(3, 5), 2)
    assert not tracker.is_occupied(Coord(0, 0), 2)
    tracker.set_occupied(coord, 2, False)
    assert not any(tracker.rows) and not any(tracker.cols) and not any(tracker.blocks)


def test_candidates_are_ascending_and_exclude_neighbours(puzzle_grid):
    tracker = ConstraintTracker.build(puzzle_grid, 3)
    # cell (row 0, col 2): row has 5,3,7; column has 8; block has 5,3,6,9,8
    assert tracker.candidates(Coord(2, 0)) == [0, 1, 3]


def test_candidates_empty_when_all_digits_are_blocked():
    grid = [0] * 81
    grid[1:9] = [1, 2, 3, 4, 5, 6, 7, 8]
    grid[3 * 9] = 9
    tracker = ConstraintTracker.build(grid, 3)
    assert tracker.candidates(Coord(0, 0)) == []


# ---------- Candidate cells ----------


def test_candidate_cell_starts_empty_and_loads_snapshot(puzzle_grid):
    tracker = ConstraintTracker.build(puzzle_grid, 3)
    cell = CandidateCell(Coord(2, 0))
    assert cell.candidates == [] and len(cell) == 0
    cell.load_candidates(tracker)
    assert cell.candidates == [0, 1, 3]
    # the snapshot does not follow later changes to the tracker
    tracker.set_occupied(Coord(5, 0), 0, True)
    assert cell.candidates == [0, 1, 3]


def test_candidate_cell_cursor_resumes_and_resets(puzzle_grid):
    tracker = ConstraintTracker.build(puzzle_grid, 3)
    cell = CandidateCell(Coord(2, 0))
    cell.load_candidates(tracker)
    assert cell.next_candidate() == 0
    assert cell.next_candidate() == 1
    assert cell.next_candidate() == 3
    assert cell.next_candidate() is None
    cell.reset_cursor()
    assert cell.next_candidate() == 0


def test_candidate_cells_sort_by_count_and_keep_ties_in_order():
    a = CandidateCell(Coord(0, 0), candidates=[0, 1, 2])
    b = CandidateCell(Coord(1, 0), candidates=[4])
    c = CandidateCell(Coord(2, 0), candidates=[5, 6, 7])
    d = CandidateCell(Coord(3, 0), candidates=[8])
    ordered = sorted([a, b, c, d], key=len)
    assert ordered == [b, d, a, c]
    assert b < a and not (a < c) and not (c < a)
