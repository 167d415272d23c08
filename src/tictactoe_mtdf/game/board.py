from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from tictactoe_mtdf.config import GAME_CONFIG
from tictactoe_mtdf.game.types import Cell, Combo, Mark
from tictactoe_mtdf.game.zobrist import RandomSource, ZobristTable, make_rng

logger = logging.getLogger(__name__)

MAX_COMBO_SIZE = GAME_CONFIG['max_combo_size']

# Default turn order: X moves first unless the marks are swapped at start
TURN_ORDER = (Mark.X, Mark.O)
X_TURN_INDEX = 0
O_TURN_INDEX = 1


class Board:
    """
    N x N tic-tac-toe board with an incrementally maintained Zobrist hash.

    Tracks the marks, the side to move and the number of empty cells. Knows
    nothing about the game lifecycle (see ``TicTacToeGame``) and produces no
    events, so the search can mutate it freely.

    Storage only grows: shrinking the board reuses the larger grid and the
    larger zobrist table instead of reallocating them.
    """

    def __init__(self, rng: RandomSource = None):
        self._rng = make_rng(rng)
        self._cells: Optional[np.ndarray] = None
        self._zobrist: Optional[ZobristTable] = None

        self.grid = np.zeros((0, 0), dtype=np.int8)
        self.size = 0
        self.combo_size = 0
        self.empty_cell_count = 0
        self.position_hash = 0
        self._turn_index = X_TURN_INDEX

    def __repr__(self):
        return f"{type(self).__name__}({self.size}x{self.size}, combo={self.combo_size}, turn={self.current_turn})"

    def reset(self, size: int, swap_marks: bool = False):
        """
        Clear the board to ``size`` x ``size`` empty cells.

        Args:
            size: New board size
            swap_marks: If True, O moves first
        """
        if size < 1:
            raise ValueError(f"Board size must be positive, got {size}")

        if self._cells is None or self._cells.shape[0] < size:
            self._cells = np.zeros((size, size), dtype=np.int8)
        self.grid = self._cells[:size, :size]
        self.grid.fill(Mark.EMPTY)

        if self._zobrist is None or self._zobrist.capacity < size:
            logger.debug("Building zobrist table for %dx%d board", size, size)
            self._zobrist = ZobristTable(size, self._rng)

        self.size = size
        self.combo_size = min(size, MAX_COMBO_SIZE)
        self.empty_cell_count = size * size
        self.position_hash = 0
        self._turn_index = O_TURN_INDEX if swap_marks else X_TURN_INDEX

    @property
    def zobrist(self) -> Optional[ZobristTable]:
        return self._zobrist

    @property
    def current_turn(self) -> Mark:
        return TURN_ORDER[self._turn_index]

    @property
    def next_turn(self) -> Mark:
        return TURN_ORDER[self._turn_index ^ 1]

    def switch_turn(self):
        self._turn_index ^= 1

    def set_turn(self, mark: Mark):
        if mark is Mark.EMPTY:
            raise ValueError("EMPTY cannot take a turn")
        self._turn_index = TURN_ORDER.index(mark)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def _check_bounds(self, row: int, col: int):
        if not self.in_bounds(row, col):
            raise IndexError(f"Cell ({row}, {col}) is outside the {self.size}x{self.size} board")

    def mark_at(self, row: int, col: int) -> Mark:
        self._check_bounds(row, col)
        return Mark(int(self.grid[row, col]))

    def is_board_full(self) -> bool:
        return self.empty_cell_count == 0

    def empty_cells(self) -> list[Cell]:
        """Empty cells in row-major order."""
        return [Cell(r, c) for r, c in np.argwhere(self.grid == Mark.EMPTY).tolist()]

    def place_mark_unchecked(self, row: int, col: int, mark: Mark):
        """
        Write ``mark`` into (row, col) without any turn or lifecycle checks.

        Keeps the hash and the empty cell count consistent. Writing EMPTY is
        how the search undoes a trial move.

        Raises:
            IndexError: If (row, col) is off the board (negative indices are
                        rejected, the zobrist table may be larger than the grid)
        """
        self._check_bounds(row, col)
        old = int(self.grid[row, col])
        self.position_hash = self._zobrist.update(self.position_hash, row, col, old, mark)
        self.grid[row, col] = mark
        if old == Mark.EMPTY:
            if mark != Mark.EMPTY:
                self.empty_cell_count -= 1
        elif mark == Mark.EMPTY:
            self.empty_cell_count += 1

    def find_winning_combo(self, row: int, col: int) -> Optional[Combo]:
        """
        Look for a winning combo on the lines through (row, col).

        Lines are checked in order: row, column, backslash diagonal (\\),
        slash diagonal (/). A line wins when the contiguous run of marks
        identical to (row, col) has at least ``combo_size`` cells.

        Returns:
            The first winning combo found, or None
        """
        grid = self.grid
        sample = grid[row, col]
        if sample == Mark.EMPTY:
            return None

        n = self.size

        # Row
        left = 0
        while left < col and grid[row, col - left - 1] == sample:
            left += 1
        right = 0
        while col + right + 1 < n and grid[row, col + right + 1] == sample:
            right += 1
        if left + right + 1 >= self.combo_size:
            return Combo(row, col - left, row, col + right)

        # Column
        top = 0
        while top < row and grid[row - top - 1, col] == sample:
            top += 1
        bottom = 0
        while row + bottom + 1 < n and grid[row + bottom + 1, col] == sample:
            bottom += 1
        if top + bottom + 1 >= self.combo_size:
            return Combo(row - top, col, row + bottom, col)

        # Backslash diagonal: up-left to down-right
        top = 0
        while top < row and top < col and grid[row - top - 1, col - top - 1] == sample:
            top += 1
        bottom = 0
        while row + bottom + 1 < n and col + bottom + 1 < n and grid[row + bottom + 1, col + bottom + 1] == sample:
            bottom += 1
        if top + bottom + 1 >= self.combo_size:
            return Combo(row - top, col - top, row + bottom, col + bottom)

        # Slash diagonal: up-right to down-left
        top = 0
        while top < row and col + top + 1 < n and grid[row - top - 1, col + top + 1] == sample:
            top += 1
        bottom = 0
        while row + bottom + 1 < n and bottom < col and grid[row + bottom + 1, col - bottom - 1] == sample:
            bottom += 1
        if top + bottom + 1 >= self.combo_size:
            return Combo(row - top, col + top, row + bottom, col - bottom)

        return None

    def render(self) -> str:
        """Pretty print the board with row/column indices."""
        width = len(str(max(self.size - 1, 0)))
        header = ' ' * (width + 1) + ' '.join(f"{c:>{width}}" for c in range(self.size))
        lines = [header]
        for r in range(self.size):
            cells = ' '.join(f"{str(Mark(int(v))):>{width}}" for v in self.grid[r])
            lines.append(f"{r:>{width}} {cells}")
        return '\n'.join(lines)

    def _assign(self, other: 'Board'):
        """Deep-copy ``other``'s board state into this board."""
        self._cells = other.grid.copy()
        self.grid = self._cells
        self._zobrist = other._zobrist.copy() if other._zobrist is not None else None
        self.size = other.size
        self.combo_size = other.combo_size
        self.empty_cell_count = other.empty_cell_count
        self.position_hash = other.position_hash
        self._turn_index = other._turn_index
