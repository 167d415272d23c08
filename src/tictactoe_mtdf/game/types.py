from __future__ import annotations

import enum
from typing import Iterator, NamedTuple


class Mark(enum.IntEnum):
    """Cell marks. EMPTY must stay at ordinal 0 (its zobrist layer is all zeros)."""
    EMPTY = 0
    X = 1
    O = 2

    @classmethod
    def from_ordinal(cls, ordinal: int) -> Mark:
        if ordinal < 0 or ordinal >= len(cls):
            raise ValueError(f"There is no mark with such ordinal: {ordinal}")
        return cls(ordinal)

    @property
    def opponent(self) -> Mark:
        if self is Mark.EMPTY:
            raise ValueError("EMPTY has no opponent")
        return Mark.O if self is Mark.X else Mark.X

    def __str__(self) -> str:
        return '.' if self is Mark.EMPTY else self.name


class GameResult(enum.Enum):
    UNDEFINED = 0   # Game in progress (or never started)
    CANCELED = 1    # Finished explicitly by the caller
    DRAW = 2        # Board full, no combo
    COMBO = 3       # A player collected a winning combo


class Cell(NamedTuple):
    row: int
    col: int


class Combo(NamedTuple):
    """Inclusive coordinates of a winning run of marks."""
    start_row: int
    start_col: int
    stop_row: int
    stop_col: int

    def cells(self) -> Iterator[Cell]:
        """Yield every cell of the run, from start to stop."""
        length = max(abs(self.stop_row - self.start_row), abs(self.stop_col - self.start_col)) + 1
        dr = (self.stop_row > self.start_row) - (self.stop_row < self.start_row)
        dc = (self.stop_col > self.start_col) - (self.stop_col < self.start_col)
        for step in range(length):
            yield Cell(self.start_row + dr * step, self.start_col + dc * step)
