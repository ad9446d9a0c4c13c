from __future__ import annotations


class SudokuError(Exception):
    """Base class for every error raised by sudoku_bt."""


class StructuralError(SudokuError, ValueError):
    """Malformed input: bad size, bad cell count, bad digit, bad bound."""


class InvalidGridError(StructuralError):
    """A fully initialized grid that breaks row/column/block uniqueness."""


class UnsatisfiableError(SudokuError, RuntimeError):
    """The search was exhausted without finding a completion."""


class GenerationInvariantError(SudokuError, RuntimeError):
    """A shaken grid could not be completed; the generator has a defect."""
