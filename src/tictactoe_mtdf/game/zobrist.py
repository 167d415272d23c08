"""
Zobrist hashing for tic-tac-toe positions.

Zobrist hashing gives every position a 64-bit fingerprint that can be updated
in O(1) when a single cell changes, which is what lets the search engine
consult its transposition table at every node.

Implementation:
- Pre-generate random 64-bit keys for each (mark, row, col) combination
- The EMPTY layer is all zeros, so an empty board hashes to 0
- Hash = XOR of the keys of every cell's current mark
- Changing a cell: hash ^= key[old][row][col] ^ key[new][row][col]
  (applying the same change twice restores the original hash)
"""

from typing import Optional, Union

import numpy as np

from tictactoe_mtdf.game.types import Mark

RandomSource = Union[None, int, np.random.RandomState]


def make_rng(source: RandomSource = None) -> np.random.RandomState:
    """
    Normalize a seed or generator into a ``RandomState``.

    Args:
        source: None (fresh entropy), an integer seed, or an existing generator

    Returns:
        A generator owned by the caller (existing generators are passed through)
    """
    if isinstance(source, np.random.RandomState):
        return source
    return np.random.RandomState(source)


class ZobristTable:
    """
    Zobrist keys for an N x N tic-tac-toe board.

    3 marks x N rows x N cols keys; layer 0 (EMPTY) is all zeros.

    The keys are generated with numpy and mirrored into plain Python ints,
    since XOR on Python ints is much faster than on numpy scalars in the
    search's inner loop.
    """

    def __init__(self, size: int, rng: RandomSource = None):
        """
        Initialize the table with random 64-bit keys.

        Args:
            size: Board size (the table covers size x size cells)
            rng: Seed or ``numpy.random.RandomState`` used to draw the keys
        """
        if size < 1:
            raise ValueError(f"Board size must be positive, got {size}")

        rng = make_rng(rng)
        self.capacity = size

        self.table = np.zeros((len(Mark), size, size), dtype=np.uint64)
        self.table[1:] = rng.randint(
            0, np.iinfo(np.uint64).max,
            size=(len(Mark) - 1, size, size),
            dtype=np.uint64
        )
        self._keys = self.table.tolist()

    def key(self, mark: Mark, row: int, col: int) -> int:
        """Return the key for ``mark`` placed at (row, col)."""
        return self._keys[mark][row][col]

    def update(self, current_hash: int, row: int, col: int, old: Mark, new: Mark) -> int:
        """
        Incremental hash update for a single cell change.

        Args:
            current_hash: Hash before the change
            row: Row of the changed cell
            col: Column of the changed cell
            old: Mark that was in the cell
            new: Mark that is now in the cell

        Returns:
            Updated hash value
        """
        keys = self._keys
        return current_hash ^ keys[old][row][col] ^ keys[new][row][col]

    def hash_grid(self, grid: np.ndarray) -> int:
        """
        Compute the hash of a grid from scratch.

        Args:
            grid: (size, size) array of mark ordinals, size <= capacity

        Returns:
            64-bit hash value (int)
        """
        size = grid.shape[0]
        if size > self.capacity:
            raise ValueError(f"Grid of size {size} exceeds table capacity {self.capacity}")

        hash_value = np.uint64(0)
        for mark in (Mark.X, Mark.O):
            keys = self.table[mark, :size, :size][grid == mark]
            if keys.size:
                hash_value ^= np.bitwise_xor.reduce(keys)
        return int(hash_value)

    def copy(self) -> 'ZobristTable':
        """Return an independent table with identical keys."""
        clone = ZobristTable.__new__(ZobristTable)
        clone.capacity = self.capacity
        clone.table = self.table.copy()
        clone._keys = clone.table.tolist()
        return clone
