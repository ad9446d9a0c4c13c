from __future__ import annotations

import logging
import os
from typing import List, Sequence

from .errors import StructuralError
from .models import Grid, check_grid, grid_spec, rows_of

log = logging.getLogger(__name__)


def format_grid(grid: Sequence[int], size: int) -> str:
    """Space separated digits, one grid row per line, 0 for empty cells."""
    side = grid_spec(size).side
    return "\n".join(" ".join(str(v) for v in row) for row in rows_of(grid, side))


def format_grids(grids: Sequence[Sequence[int]], size: int) -> str:
    """Several grids separated by a blank line."""
    return "\n\n".join(format_grid(g, size) for g in grids)


def parse_grid(text: str, size: int) -> Grid:
    """Read every whitespace separated integer of ``text`` as one grid."""
    try:
        values = [int(tok) for tok in text.split()]
    except ValueError as e:
        raise StructuralError(f"Grid text must contain integers only: {e}") from e
    return check_grid(values, size)


def parse_grids(text: str, size: int) -> List[Grid]:
    """Split ``text`` on blank lines and parse each chunk as a grid."""
    chunks: List[List[str]] = [[]]
    for line in text.splitlines():
        if line.strip():
            chunks[-1].append(line)
        elif chunks[-1]:
            chunks.append([])
    return [parse_grid("\n".join(chunk), size) for chunk in chunks if chunk]


def ensure_parent_dir(path: str) -> None:
    os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)


def load_grid(path: str, size: int) -> Grid:
    with open(path, "r", encoding="utf-8") as f:
        text = f.read()
    log.debug("Read grid from %s", path)
    return parse_grid(text, size)


def save_grids(grids: Sequence[Sequence[int]], path: str, size: int) -> None:
    ensure_parent_dir(path)
    with open(path, "w", encoding="utf-8") as f:
        f.write(format_grids(grids, size) + "\n")
    log.debug("Wrote %d grid(s) to %s", len(grids), path)
