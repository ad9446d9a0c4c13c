from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .models import Coord
from .tracker import ConstraintTracker


@dataclass
class CandidateCell:
    """
    An empty cell with the digits that were legal when the search list was built.

    The list is a snapshot: it is not refreshed as neighbours get filled, the
    engine re-checks every digit against the tracker before placing it.
    ``cursor`` lets the engine leave the cell and come back to the next digit.
    """

    coord: Coord
    candidates: List[int] = field(default_factory=list)
    cursor: int = 0

    def load_candidates(self, tracker: ConstraintTracker) -> None:
        self.candidates = tracker.candidates(self.coord)
        self.cursor = 0

    def reset_cursor(self) -> None:
        self.cursor = 0

    def next_candidate(self) -> Optional[int]:
        if self.cursor >= len(self.candidates):
            return None
        digit = self.candidates[self.cursor]
        self.cursor += 1
        return digit

    def __len__(self) -> int:
        return len(self.candidates)

    def __lt__(self, other: "CandidateCell") -> bool:
        return len(self.candidates) < len(other.candidates)
