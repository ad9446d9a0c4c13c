from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence

from .errors import StructuralError

Grid = List[int]  # row-major, side * side cells, 0 = empty, digits 1..side

MIN_SIZE = 2
MAX_SIZE = 10
DEFAULT_SIZE = 3


@dataclass(frozen=True)
class GridSpec:
    size: int   # block edge N (e.g., 3)
    side: int   # digits per row: N * N (e.g., 9)
    cells: int  # side * side (e.g., 81)


def grid_spec(size: int) -> GridSpec:
    """Validate the block edge and build the derived constants."""
    if not isinstance(size, int) or isinstance(size, bool):
        raise StructuralError(f"Invalid size: {size!r}. Block edge must be an integer.")
    if size < MIN_SIZE or size > MAX_SIZE:
        raise StructuralError(
            f"Invalid size: {size}. Block edge must be between {MIN_SIZE} and {MAX_SIZE}."
        )
    side = size * size
    return GridSpec(size=size, side=side, cells=side * side)


@dataclass(frozen=True)
class Coord:
    x: int  # column
    y: int  # row

    def index(self, side: int) -> int:
        return self.y * side + self.x

    def block_id(self, size: int) -> int:
        return size * (self.y // size) + self.x // size

    @staticmethod
    def from_index(i: int, side: int) -> "Coord":
        return Coord(x=i % side, y=i // side)


def check_grid(grid: Sequence[int], size: int) -> Grid:
    """
    Checks:
      - the grid holds exactly side * side cells
      - every cell is an integer in 0..side
    Returns a fresh list so callers never share storage with the input.
    """
    spec = grid_spec(size)
    cells = list(grid)
    if len(cells) != spec.cells:
        raise StructuralError(
            f"Grid has {len(cells)} cells, expected {spec.cells} for size {size}."
        )
    for i, v in enumerate(cells):
        if not isinstance(v, int) or isinstance(v, bool):
            raise StructuralError(f"Invalid value at index {i}: {v!r} (not an integer).")
        if v < 0 or v > spec.side:
            raise StructuralError(f"Invalid value at index {i}: {v} (allowed: 0..{spec.side}).")
    return cells


def count_filled(grid: Iterable[int]) -> int:
    return sum(1 for v in grid if v != 0)


def rows_of(grid: Sequence[int], side: int) -> List[List[int]]:
    return [list(grid[r * side:(r + 1) * side]) for r in range(side)]


def flatten(board: Sequence[Sequence[int]]) -> Grid:
    return [v for row in board for v in row]
