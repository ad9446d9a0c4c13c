from .engine import BacktrackingSolver, SearchStats, count_solutions, solve
from .errors import (
    GenerationInvariantError,
    InvalidGridError,
    StructuralError,
    SudokuError,
    UnsatisfiableError,
)
from .models import Coord, Grid, GridSpec, grid_spec
from .shaker import GeneratedPuzzle, Shaker, generate

__version__ = "1.0.0"
