from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .blocks import seed_grid
from .engine import BacktrackingSolver
from .errors import GenerationInvariantError, SudokuError, StructuralError
from .models import DEFAULT_SIZE, Grid, grid_spec

log = logging.getLogger(__name__)

MIN_SHAKES = 20
MAX_SHAKES = 120  # exclusive


@dataclass
class GeneratedPuzzle:
    puzzle: Grid
    solution: Grid


class Shaker:
    """
    Puzzle generator: block-algebra seed, within-band shuffles, completion, removal.

    All randomness comes from ``rng`` (or a generator seeded with ``seed``), so a
    fixed seed gives a reproducible puzzle.
    """

    def __init__(
        self,
        size: int = DEFAULT_SIZE,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
    ):
        spec = grid_spec(size)
        self.size = spec.size
        self.side = spec.side
        self.cells = spec.cells
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.grid: Grid = seed_grid(self.size, self.rng)
        self.solution: Optional[Grid] = None

    def _partner(self, line: int) -> int:
        """Another line of the same band/stack as ``line``, chosen uniformly."""
        band = (line // self.size) * self.size
        others = [band + k for k in range(self.size) if band + k != line]
        return others[int(self.rng.integers(len(others)))]

    def swap_rows(self, a: int, b: int) -> None:
        side = self.side
        ra = self.grid[a * side:(a + 1) * side]
        self.grid[a * side:(a + 1) * side] = self.grid[b * side:(b + 1) * side]
        self.grid[b * side:(b + 1) * side] = ra

    def swap_cols(self, a: int, b: int) -> None:
        side = self.side
        for r in range(side):
            i, j = r * side + a, r * side + b
            self.grid[i], self.grid[j] = self.grid[j], self.grid[i]

    def shake(self) -> Grid:
        """
        Shuffle rows and columns inside their band, then complete the grid.

        Raises GenerationInvariantError if the shuffled grid cannot be completed.
        """
        operations = int(self.rng.integers(MIN_SHAKES, MAX_SHAKES))
        for _ in range(operations):
            line = int(self.rng.integers(self.side))
            if self.rng.integers(2) == 0:
                self.swap_rows(line, self._partner(line))
            else:
                self.swap_cols(line, self._partner(line))
        log.debug("Shaker applied %d swaps", operations)

        try:
            solutions = BacktrackingSolver(self.grid, self.size).solve()
        except SudokuError as e:
            raise GenerationInvariantError("Error while loading a new grid") from e
        if not solutions:
            raise GenerationInvariantError("Shaken grid admits no completion")

        self.grid = list(solutions[0])
        self.solution = list(solutions[0])
        return self.grid

    def remove_cells(self, retained: int) -> Grid:
        """Zero random cells until exactly ``retained`` cells are left filled."""
        if retained <= 0 or retained > self.cells:
            raise StructuralError(
                f"retained must be between 1 and {self.cells} (got {retained})."
            )
        cleared = set()
        to_clear = self.cells - retained
        while len(cleared) < to_clear:
            i = int(self.rng.integers(self.cells))
            if i in cleared:
                continue
            self.grid[i] = 0
            cleared.add(i)
        log.debug("Cleared %d cells, %d retained", len(cleared), retained)
        return self.grid

    def generate(self, retained: int) -> Grid:
        if retained <= 0 or retained > self.cells:
            raise StructuralError(
                f"retained must be between 1 and {self.cells} (got {retained})."
            )
        self.shake()
        return self.remove_cells(retained)


def generate(
    size: int = DEFAULT_SIZE,
    retained: int = 30,
    seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
) -> GeneratedPuzzle:
    """New puzzle with exactly ``retained`` givens, plus the grid it was cut from."""
    shaker = Shaker(size, rng=rng, seed=seed)
    puzzle = shaker.generate(retained)
    return GeneratedPuzzle(puzzle=list(puzzle), solution=list(shaker.solution))
