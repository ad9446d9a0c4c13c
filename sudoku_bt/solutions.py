from __future__ import annotations

from typing import List, Sequence

from .errors import StructuralError
from .models import Coord, Grid


class SolutionStore:
    """
    Grid snapshots collected by one search.

    The last snapshot is always the working copy the engine writes into. With a
    bound above one, every completed solution is frozen by appending a clone,
    so ``len(self.snapshots) - 1`` solutions are kept.
    """

    def __init__(self, side: int, bound: int = 1):
        if bound <= 0:
            raise StructuralError("Amount of solutions desired must be > 0.")
        self.side = side
        self.bound = bound
        self.snapshots: List[Grid] = []

    def init_from_grid(self, grid: Sequence[int]) -> None:
        self.snapshots = [list(grid)]

    @property
    def working(self) -> Grid:
        return self.snapshots[-1]

    def write(self, coord: Coord, digit: int) -> None:
        self.snapshots[-1][coord.index(self.side)] = digit + 1

    def commit_solution(self) -> None:
        self.snapshots.append(list(self.snapshots[-1]))

    def has_solution(self) -> bool:
        return len(self.snapshots) > 1

    def has_enough(self) -> bool:
        return len(self.snapshots) > self.bound

    @property
    def solution_count(self) -> int:
        return len(self.snapshots) - 1

    def finalize_multi(self) -> List[Grid]:
        self.snapshots.pop()
        return self.snapshots

    def finalize_single(self) -> List[Grid]:
        return self.snapshots
