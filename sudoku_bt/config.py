from __future__ import annotations

import os
from dataclasses import dataclass

from .models import DEFAULT_SIZE


def default_grid_path() -> str:
    return os.path.join(".", "grid.txt")


def default_solutions_path() -> str:
    return os.path.join(".", "solutions.txt")


@dataclass(frozen=True)
class Settings:
    grid_path: str = default_grid_path()
    solutions_path: str = default_solutions_path()
    default_size: int = DEFAULT_SIZE
    default_retained: int = 30
    default_bound: int = 1


def resolve_settings() -> Settings:
    """Defaults, with file locations overridable from the environment."""
    return Settings(
        grid_path=os.environ.get("SUDOKU_BT_GRID", default_grid_path()),
        solutions_path=os.environ.get("SUDOKU_BT_SOLUTIONS", default_solutions_path()),
    )
