from __future__ import annotations

import logging
from typing import Optional

from tictactoe_mtdf.config import GAME_CONFIG
from tictactoe_mtdf.errors import InvalidStateError
from tictactoe_mtdf.game.board import Board
from tictactoe_mtdf.game.events import GameEvent, GameFinished, GameStarted, MarkPlaced, MoveResult
from tictactoe_mtdf.game.snapshot import GameSnapshot
from tictactoe_mtdf.game.types import Combo, GameResult, Mark
from tictactoe_mtdf.game.zobrist import RandomSource

logger = logging.getLogger(__name__)


class TicTacToeGame:
    """
    Tic-tac-toe game on a board of arbitrary size.

    Lifecycle: inactive -> start() -> active -> (combo | full board | finish())
    -> inactive, carrying a final ``GameResult``.

    All state-changing calls return the events they produced instead of
    notifying listeners.
    """

    def __init__(self, seed: RandomSource = None):
        """
        Args:
            seed: Seed or ``numpy.random.RandomState`` for zobrist key generation
                  (defaults to ``GAME_CONFIG['hash_seed']``)
        """
        if seed is None:
            seed = GAME_CONFIG['hash_seed']
        self._board = Board(seed)
        self._active = False
        self._result = GameResult.UNDEFINED
        self._combo: Optional[Combo] = None

    def __repr__(self):
        state = 'active' if self._active else self._result.name.lower()
        return f"TicTacToeGame({self._board.size}x{self._board.size}, {state})"

    def start(self, size: int, swap_marks: bool = False) -> list[GameEvent]:
        """
        Start a new game on a ``size`` x ``size`` board.

        The previous game must be finished first.

        Args:
            size: Board size
            swap_marks: If True, the first player uses the O mark

        Returns:
            [GameStarted]
        """
        if self._active:
            raise InvalidStateError("Attempt to start an active game.")

        self._board.reset(size, swap_marks)
        self._active = True
        self._result = GameResult.UNDEFINED
        self._combo = None

        logger.debug("Game started: %dx%d, combo size %d, %s first",
                     size, size, self._board.combo_size, self._board.current_turn)
        return [GameStarted(size=size, first_turn=self._board.current_turn)]

    def place_mark(self, row: int, col: int) -> MoveResult:
        """
        Place the current player's mark at (row, col).

        Checks for a combo or a full board afterwards and either finishes the
        game or passes the turn.

        Returns:
            Truthy ``MoveResult`` with the produced events if the mark was set;
            falsy if the cell is occupied
        """
        if not self._active:
            raise InvalidStateError("Attempt to play an inactive game.")

        board = self._board
        if board.mark_at(row, col) is not Mark.EMPTY:
            return MoveResult(placed=False)

        mark = board.current_turn
        board.place_mark_unchecked(row, col, mark)
        events: list[GameEvent] = [MarkPlaced(mark=mark, row=row, col=col)]

        combo = board.find_winning_combo(row, col)
        if combo is not None:
            self._combo = combo
            events.extend(self._finish(GameResult.COMBO))
        elif board.is_board_full():
            events.extend(self._finish(GameResult.DRAW))
        else:
            board.switch_turn()

        return MoveResult(placed=True, events=tuple(events))

    def finish(self) -> list[GameEvent]:
        """
        Cancel the current game.

        Finishing a game that is already inactive does nothing.
        """
        return self._finish(GameResult.CANCELED)

    def _finish(self, result: GameResult) -> list[GameEvent]:
        if not self._active:
            return []
        self._active = False
        self._result = result

        logger.debug("Game finished: %s %s", result.name, self._combo or '')
        return [GameFinished(result=result, combo=self._combo)]

    def snapshot(self) -> GameSnapshot:
        """
        Return an independent copy of the board state for the search engine.

        The copy has its own grid, zobrist table and hash, so speculative moves
        on it never affect this game.
        """
        if self._board.size == 0:
            raise InvalidStateError("Attempt to snapshot a game that was never started.")
        return GameSnapshot.from_board(self._board)

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def size(self) -> int:
        return self._board.size

    @property
    def combo_size(self) -> int:
        return self._board.combo_size

    @property
    def empty_cell_count(self) -> int:
        return self._board.empty_cell_count

    @property
    def position_hash(self) -> int:
        return self._board.position_hash

    @property
    def current_turn(self) -> Mark:
        return self._board.current_turn

    @property
    def next_turn(self) -> Mark:
        return self._board.next_turn

    @property
    def result(self) -> GameResult:
        """UNDEFINED while the game is in progress."""
        return self._result

    @property
    def combo(self) -> Combo:
        if self._active or self._result is not GameResult.COMBO:
            raise InvalidStateError("The game did not finish with a combo.")
        return self._combo

    def mark_at(self, row: int, col: int) -> Mark:
        return self._board.mark_at(row, col)

    def find_winning_combo(self, row: int, col: int) -> Optional[Combo]:
        return self._board.find_winning_combo(row, col)

    def is_board_full(self) -> bool:
        return self._board.is_board_full()

    def render(self) -> str:
        return self._board.render()
