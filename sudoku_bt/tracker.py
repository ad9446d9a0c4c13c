from __future__ import annotations

import logging
from typing import List, Sequence

from .errors import InvalidGridError
from .models import Coord, check_grid, count_filled, grid_spec

log = logging.getLogger(__name__)


class ConstraintTracker:
    """
    Presence tables for one solving attempt.

    ``rows[line * side + d]`` is True iff digit ``d + 1`` sits somewhere on row
    ``line``; ``cols`` and ``blocks`` work the same way for columns and blocks.
    Digits are zero-based throughout this class.
    """

    def __init__(self, size: int):
        spec = grid_spec(size)
        self.size = spec.size
        self.side = spec.side
        self.rows: List[bool] = [False] * spec.cells
        self.cols: List[bool] = [False] * spec.cells
        self.blocks: List[bool] = [False] * spec.cells

    @classmethod
    def build(cls, grid: Sequence[int], size: int) -> "ConstraintTracker":
        """
        Populate the tables from every given of ``grid``.

        Raises InvalidGridError when two givens share a digit on a row, column or
        block, and when a fully initialized grid leaves any table entry unset.
        """
        cells = check_grid(grid, size)
        tracker = cls(size)
        side = tracker.side

        for i, v in enumerate(cells):
            if v == 0:
                continue
            coord = Coord.from_index(i, side)
            if tracker.is_occupied(coord, v - 1):
                raise InvalidGridError(
                    f"Conflict: value {v} appears twice in a row/column/block "
                    f"(cell {coord.y + 1},{coord.x + 1})."
                )
            tracker.set_occupied(coord, v - 1, True)

        filled = count_filled(cells)
        if filled == len(cells):
            if not (all(tracker.rows) and all(tracker.cols) and all(tracker.blocks)):
                raise InvalidGridError("Grid is invalid and full.")

        log.debug("Constraint tables built from %d givens (size %d)", filled, size)
        return tracker

    def _slots(self, coord: Coord, digit: int):
        side = self.side
        return (
            coord.y * side + digit,
            coord.x * side + digit,
            coord.block_id(self.size) * side + digit,
        )

    def is_occupied(self, coord: Coord, digit: int) -> bool:
        r, c, b = self._slots(coord, digit)
        return self.rows[r] or self.cols[c] or self.blocks[b]

    def set_occupied(self, coord: Coord, digit: int, value: bool) -> None:
        r, c, b = self._slots(coord, digit)
        self.rows[r] = value
        self.cols[c] = value
        self.blocks[b] = value

    def candidates(self, coord: Coord) -> List[int]:
        return [d for d in range(self.side) if not self.is_occupied(coord, d)]
