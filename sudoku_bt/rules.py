from __future__ import annotations

from typing import Sequence, Tuple

from .errors import StructuralError
from .models import Coord, grid_spec


def validate_grid(grid: Sequence[int], size: int) -> Tuple[bool, str]:
    """
    Checks:
      - grid holds side * side cells
      - values in 0..side
      - no duplicate values in any row/col/block (ignoring 0)
    """
    try:
        spec = grid_spec(size)
    except StructuralError as e:
        return False, str(e)

    side = spec.side
    if len(grid) != spec.cells:
        return False, f"Grid must hold {spec.cells} cells (got {len(grid)})."

    row_used = [0] * side
    col_used = [0] * side
    block_used = [0] * side

    for i, v in enumerate(grid):
        coord = Coord.from_index(i, side)
        r, c = coord.y, coord.x
        if not isinstance(v, int) or isinstance(v, bool):
            return False, f"Invalid value at ({r+1},{c+1}): {v} (not an integer)."
        if v < 0 or v > side:
            return False, f"Invalid value at ({r+1},{c+1}): {v} (allowed: 0..{side})."
        if v == 0:
            continue

        bit = 1 << v
        b = coord.block_id(spec.size)

        if (row_used[r] & bit) or (col_used[c] & bit) or (block_used[b] & bit):
            return False, f"Conflict: value {v} appears twice in a row/column/block (cell {r+1},{c+1})."

        row_used[r] |= bit
        col_used[c] |= bit
        block_used[b] |= bit

    return True, "OK"


def is_complete_solution(grid: Sequence[int], size: int) -> bool:
    """Every row, column and block holds each digit 1..side exactly once."""
    ok, _ = validate_grid(grid, size)
    return ok and all(v != 0 for v in grid)
