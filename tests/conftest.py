from typing import List

import pytest

from sudoku_bt.models import flatten

SOLVED_ROWS = [
    [5, 3, 4, 6, 7, 8, 9, 1, 2],
    [6, 7, 2, 1, 9, 5, 3, 4, 8],
    [1, 9, 8, 3, 4, 2, 5, 6, 7],
    [8, 5, 9, 7, 6, 1, 4, 2, 3],
    [4, 2, 6, 8, 5, 3, 7, 9, 1],
    [7, 1, 3, 9, 2, 4, 8, 5, 6],
    [9, 6, 1, 5, 3, 7, 2, 8, 4],
    [2, 8, 7, 4, 1, 9, 6, 3, 5],
    [3, 4, 5, 2, 8, 6, 1, 7, 9],
]

PUZZLE_ROWS = [
    [5, 3, 0, 0, 7, 0, 0, 0, 0],
    [6, 0, 0, 1, 9, 5, 0, 0, 0],
    [0, 9, 8, 0, 0, 0, 0, 6, 0],
    [8, 0, 0, 0, 6, 0, 0, 0, 3],
    [4, 0, 0, 8, 0, 3, 0, 0, 1],
    [7, 0, 0, 0, 2, 0, 0, 0, 6],
    [0, 6, 0, 0, 0, 0, 2, 8, 0],
    [0, 0, 0, 4, 1, 9, 0, 0, 5],
    [0, 0, 0, 0, 8, 0, 0, 7, 9],
]

# Rows 3 and 4 hold 1/3 and 3/1 in columns 5 and 8: clearing those four cells
# leaves exactly two completions.
TWO_SOLUTION_HOLES = [(3, 5), (3, 8), (4, 5), (4, 8)]


@pytest.fixture
def solved_grid() -> List[int]:
    return flatten(SOLVED_ROWS)


@pytest.fixture
def puzzle_grid() -> List[int]:
    return flatten(PUZZLE_ROWS)


@pytest.fixture
def two_solution_grid() -> List[int]:
    rows = [row[:] for row in SOLVED_ROWS]
    for r, c in TWO_SOLUTION_HOLES:
        rows[r][c] = 0
    return flatten(rows)


@pytest.fixture
def swapped_solution_grid() -> List[int]:
    rows = [row[:] for row in SOLVED_ROWS]
    rows[3][5], rows[3][8] = rows[3][8], rows[3][5]
    rows[4][5], rows[4][8] = rows[4][8], rows[4][5]
    return flatten(rows)
