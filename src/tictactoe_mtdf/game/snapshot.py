from __future__ import annotations

from typing import Optional, Sequence

from tictactoe_mtdf.game.board import Board
from tictactoe_mtdf.game.types import Mark
from tictactoe_mtdf.game.zobrist import RandomSource

_MARK_CHARS = {'.': Mark.EMPTY, '_': Mark.EMPTY, 'X': Mark.X, 'O': Mark.O}


class GameSnapshot(Board):
    """
    Value-semantics copy of a game's board state.

    Carries only the grid, the zobrist table, the hash and the side to move.
    The search engine mutates it freely with ``place_mark_unchecked`` and
    ``switch_turn``; a snapshot has no lifecycle and emits no events.
    """

    @classmethod
    def from_board(cls, board: Board) -> 'GameSnapshot':
        snapshot = cls()
        snapshot._assign(board)
        return snapshot

    @classmethod
    def from_marks(
        cls,
        rows: Sequence[str],
        seed: RandomSource = None,
        turn: Optional[Mark] = None
    ) -> 'GameSnapshot':
        """
        Build a snapshot from a textual board.

        Args:
            rows: One string per row using 'X', 'O' and '.' (or '_') for empty
            seed: Seed for zobrist key generation
            turn: Side to move; by default X when both sides have the same
                  number of marks, O otherwise

        Returns:
            GameSnapshot with hash and empty cell count matching the marks

        Example:
            >>> GameSnapshot.from_marks(["XX.", "OO.", "..."]).current_turn
            <Mark.X: 1>
        """
        size = len(rows)
        if size == 0:
            raise ValueError("At least one row is required")

        snapshot = cls(seed)
        snapshot.reset(size)

        counts = {Mark.X: 0, Mark.O: 0}
        for r, line in enumerate(rows):
            if len(line) != size:
                raise ValueError(f"Row {r} has {len(line)} cells, expected {size}")
            for c, char in enumerate(line.upper()):
                if char not in _MARK_CHARS:
                    raise ValueError(f"Unknown mark {char!r} at ({r}, {c})")
                mark = _MARK_CHARS[char]
                if mark is not Mark.EMPTY:
                    snapshot.place_mark_unchecked(r, c, mark)
                    counts[mark] += 1

        if turn is None:
            turn = Mark.X if counts[Mark.X] == counts[Mark.O] else Mark.O
        snapshot.set_turn(turn)
        return snapshot

    def copy(self) -> 'GameSnapshot':
        """Return a fully independent copy (own grid, zobrist table and hash)."""
        return GameSnapshot.from_board(self)
