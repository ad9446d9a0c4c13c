from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .candidates import CandidateCell
from .errors import StructuralError, UnsatisfiableError
from .models import DEFAULT_SIZE, Coord, Grid, check_grid, grid_spec
from .solutions import SolutionStore
from .tracker import ConstraintTracker

log = logging.getLogger(__name__)


@dataclass
class SearchStats:
    empty_cells: int = 0
    placements: int = 0
    backtracks: int = 0
    solutions: int = 0


class BacktrackingSolver:
    """
    Backtracking search over the empty cells, most constrained cell first.

    With ``bound == 1`` the search stops at the first completion. With a larger
    bound it keeps going and collects up to ``bound`` completions.

    A solver owns its tracker, cell list and solution store for the whole search:
    an instance is not reentrant and must not be shared between threads.
    """

    def __init__(self, grid: Sequence[int], size: int = DEFAULT_SIZE, bound: int = 1):
        if not isinstance(bound, int) or isinstance(bound, bool) or bound <= 0:
            raise StructuralError("Amount of solutions desired must be > 0.")
        spec = grid_spec(size)
        self.size = spec.size
        self.side = spec.side
        self.bound = bound
        self.grid = check_grid(grid, size)
        self.tracker = ConstraintTracker.build(self.grid, size)
        self.store = SolutionStore(self.side, bound)
        self.cells: List[CandidateCell] = []
        self.stats = SearchStats()
        self._attempted = False

    def _build_cells(self) -> List[CandidateCell]:
        """Empty cells in row-major order, then stable-sorted by candidate count."""
        cells: List[CandidateCell] = []
        for i, v in enumerate(self.grid):
            if v == 0:
                cells.append(CandidateCell(Coord.from_index(i, self.side)))
        for cell in cells:
            cell.load_candidates(self.tracker)
        return sorted(cells, key=len)

    def _search(self, first_only: bool) -> bool:
        """
        Walk the cell list with an index cursor.

        Moving forward places a digit, moving back undoes the placement of the
        cell we return to and resumes its candidate cursor. When ``first_only`` is
        set, reaching the end stops the walk and every placement stays in the
        tables. Otherwise the working snapshot is committed and the walk backs up
        to look for further completions until the store has enough.
        """
        cells = self.cells
        tracker = self.tracker
        store = self.store
        stats = self.stats
        placed: List[Optional[int]] = [None] * len(cells)
        pos = 0

        while True:
            if pos == len(cells):
                if first_only:
                    return True
                store.commit_solution()
                stats.solutions += 1
                if store.has_enough() or pos == 0:
                    return True
                pos -= 1

            cell = cells[pos]
            if placed[pos] is not None:
                tracker.set_occupied(cell.coord, placed[pos], False)
                placed[pos] = None

            digit = cell.next_candidate()
            while digit is not None and tracker.is_occupied(cell.coord, digit):
                digit = cell.next_candidate()

            if digit is None:
                cell.reset_cursor()
                stats.backtracks += 1
                if pos == 0:
                    return False
                pos -= 1
                continue

            tracker.set_occupied(cell.coord, digit, True)
            store.write(cell.coord, digit)
            placed[pos] = digit
            stats.placements += 1
            pos += 1

    def solve(self) -> Optional[List[Grid]]:
        """
        Returns a list of solved grids, or None if the grid has no completion.
        """
        if self._attempted:
            self.tracker = ConstraintTracker.build(self.grid, self.size)
            self.stats = SearchStats()
        self._attempted = True

        self.store.init_from_grid(self.grid)
        self.cells = self._build_cells()
        self.stats.empty_cells = len(self.cells)

        if self.bound > 1:
            self._search(first_only=False)
            result = self.store.finalize_multi() if self.store.has_solution() else None
        else:
            found = self._search(first_only=True)
            if found:
                self.stats.solutions = 1
            result = self.store.finalize_single() if found else None

        log.debug(
            "Search finished: %d empty cells, %d placements, %d backtracks, %d solution(s)",
            self.stats.empty_cells,
            self.stats.placements,
            self.stats.backtracks,
            self.stats.solutions,
        )
        return result


def solve(grid: Sequence[int], size: int = DEFAULT_SIZE, bound: int = 1) -> List[Grid]:
    """
    Solve ``grid`` and return between 1 and ``bound`` solutions.

    Raises StructuralError for malformed input and UnsatisfiableError when the
    search ends without a completion.
    """
    solutions = BacktrackingSolver(grid, size, bound).solve()
    if solutions is None:
        raise UnsatisfiableError("The grid submitted admits no solutions.")
    return solutions


def count_solutions(grid: Sequence[int], size: int = DEFAULT_SIZE, limit: int = 2) -> int:
    """Number of completions of ``grid``, counting no further than ``limit``."""
    solutions = BacktrackingSolver(grid, size, limit).solve()
    return len(solutions) if solutions else 0
