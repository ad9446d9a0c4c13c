"""
Block algebra used to seed the generator.

A block is an N x N array holding the digits 1..N*N once each. Multiplying a
block by a permutation matrix moves whole rows (``P @ B``) or whole columns
(``B @ P``), so the result is still a valid block. The derangement matrices used
here have no fixed point, so every row (or column) actually moves.

The seed grid places one random block in the top-left corner and one derived
block on each other block row, each in its own block column::

    X O O
    O O X      (N = 3)
    O X O

Blocks that share neither a band nor a stack cannot conflict, so the seed is
always consistent and always completable.
"""

from __future__ import annotations

from typing import List

import numpy as np

from .models import Grid, grid_spec


def random_block(size: int, rng: np.random.Generator) -> np.ndarray:
    """Block holding a shuffled 1..N*N."""
    return rng.permutation(np.arange(1, size * size + 1)).reshape(size, size)


def constant_block(size: int, value: int = 0) -> np.ndarray:
    """Placeholder block, all cells set to ``value``."""
    return np.full((size, size), value, dtype=int)


def derangement_matrices(size: int) -> List[np.ndarray]:
    """
    The cyclic-shift permutation matrices ``P_k[i, (i + k) % N] = 1``, k = 1..N-1.
    For N = 3 these are the only two derangement matrices.
    """
    eye = np.eye(size, dtype=int)
    return [np.roll(eye, k, axis=1) for k in range(1, size)]


def pick_derangement(size: int, rng: np.random.Generator) -> np.ndarray:
    family = derangement_matrices(size)
    return family[int(rng.integers(len(family)))]


def derive_row_block(block: np.ndarray, matrix: np.ndarray) -> np.ndarray:
    """Row ``i`` of the result is row ``perm[i]`` of ``block``."""
    return matrix @ block


def derive_col_block(block: np.ndarray, matrix: np.ndarray) -> np.ndarray:
    """Column ``j`` of the result is column ``perm[j]`` of ``block``."""
    return block @ matrix


def assemble_blocks(base: np.ndarray, matrix: np.ndarray) -> List[List[np.ndarray]]:
    """
    Block layout of the seed grid, indexed ``[block_row][block_col]``.

    Block row ``i`` (i >= 1) gets a derived block in block column ``(-i) % N``:
    ``i`` column derivations followed by ``(-i) % N`` row derivations.
    """
    size = base.shape[0]
    layout = [[constant_block(size) for _ in range(size)] for _ in range(size)]
    layout[0][0] = base
    for i in range(1, size):
        j = (-i) % size
        block = base
        for _ in range(i):
            block = derive_col_block(block, matrix)
        for _ in range(j):
            block = derive_row_block(block, matrix)
        layout[i][j] = block
    return layout


def blocks_to_grid(layout: List[List[np.ndarray]]) -> Grid:
    return [int(v) for v in np.block(layout).ravel()]


def seed_grid(size: int, rng: np.random.Generator) -> Grid:
    """Partially filled, internally consistent grid built by block algebra."""
    grid_spec(size)
    matrix = pick_derangement(size, rng)
    base = random_block(size, rng)
    return blocks_to_grid(assemble_blocks(base, matrix))
