"""
MTD(f) search engine with iterative deepening.

MTD(f) finds the minimax value with a series of null-window alpha-beta
searches (window (beta - 1, beta)). Each pass proves the value is either
below beta (new upper bound) or at least beta (new lower bound); the bounds
close in on the value, and the transposition table makes repeated passes over
the same tree cheap.

Key features:
- Iterative deepening: depth 1, 2, 3... carrying the previous value as the
  first guess of the next depth
- Stops early once a depth is searched without touching the cutoff (the game
  tree is solved)
- Time management: the in-flight depth is abandoned when the budget runs out,
  and the last completed depth's move is returned (if even the first depth
  runs out of time, the best root move scored so far)
- Cooperative cancellation between depths
- Node pool owned by the engine and reused across searches

See https://people.csail.mit.edu/plaat/mtdf.html
"""

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Optional

from tictactoe_mtdf.config import ENGINE_CONFIG
from tictactoe_mtdf.engine import heuristic
from tictactoe_mtdf.engine.minimax import Evaluator, MinimaxSearch, SearchTimeout
from tictactoe_mtdf.engine.transposition_table import MAX_SCORE, MIN_SCORE, NodePool, TranspositionTable
from tictactoe_mtdf.errors import InvalidStateError
from tictactoe_mtdf.game.snapshot import GameSnapshot
from tictactoe_mtdf.game.types import Cell

logger = logging.getLogger(__name__)


@dataclass
class SearchResult:
    """Result of an MTD(f) search."""
    move: Cell
    score: int
    depth_reached: int
    nodes_searched: int
    time_ms: int
    solved: bool = False
    canceled: bool = False
    tt_stats: dict = field(default_factory=dict)


class MtdfEngine:
    """
    Tic-tac-toe move recommender based on MTD(f).

    The engine never modifies the snapshot it is given: each search works on
    a private copy. Only one search may run at a time per engine.
    """

    def __init__(
        self,
        max_search_time_ms: Optional[int] = None,
        max_depth: Optional[int] = None,
        evaluator: Evaluator = heuristic.evaluate
    ):
        """
        Args:
            max_search_time_ms: Time budget per search; <= 0 disables the limit
            max_depth: Hard cap on iterative deepening (None = until solved or out of time)
            evaluator: (grid, mark, combo_size) -> score used at the depth cutoff
        """
        if max_search_time_ms is None:
            max_search_time_ms = ENGINE_CONFIG['max_search_time_ms']
        if max_depth is None:
            max_depth = ENGINE_CONFIG['max_depth']

        self.max_search_time_ms = max_search_time_ms
        self.max_depth = max_depth
        self.evaluator = evaluator

        self._pool: Optional[NodePool] = None
        self._lock = threading.Lock()
        self._searching = False

    @property
    def pool(self) -> Optional[NodePool]:
        return self._pool

    @property
    def is_searching(self) -> bool:
        with self._lock:
            return self._searching

    def discard_pool(self):
        """Drop the node pool; the next search rebuilds it."""
        self._pool = None

    def _setup_pool(self) -> NodePool:
        if self._pool is None:
            logger.debug("Node pool missing, creating a new one")
            self._pool = NodePool()
        return self._pool

    @staticmethod
    def mtdf(search: MinimaxSearch, first_guess: int) -> tuple[int, Cell]:
        """
        Converge on the root value with null-window searches.

        Args:
            search: Minimax search configured for the current depth
            first_guess: Initial estimate of the root value

        Returns:
            (value, move) where move comes from the last pass that failed high,
            i.e. a move proven to reach the value
        """
        g = first_guess
        upper_bound = MAX_SCORE
        lower_bound = MIN_SCORE
        move = None
        while lower_bound < upper_bound:
            beta = g + 1 if g == lower_bound else g
            g = search.root(beta - 1, beta)
            if g < beta:
                upper_bound = g
            else:
                lower_bound = g
                move = search.best_move
        if move is None:
            move = search.best_move
        return g, move

    def guess_next_move(self, snapshot: GameSnapshot) -> Cell:
        """Return the recommended move for the side to move in ``snapshot``."""
        return self.search(snapshot).move

    def search(
        self,
        snapshot: GameSnapshot,
        cancel_event: Optional[threading.Event] = None
    ) -> SearchResult:
        """
        Main search entry point with iterative deepening.

        Strategy:
        - Search depth 1, then 2, then 3... until solved, out of time or canceled
        - Always keep the move from the last completed depth (or, if the
          first depth runs out of time, the best root move scored so far)
        - Return gracefully when time runs out (never an error)

        Args:
            snapshot: Position to search (not modified)
            cancel_event: Set by another thread to stop after the current depth

        Returns:
            SearchResult; ``canceled`` is True if the search was stopped by
            ``cancel_event`` and the result should be discarded
        """
        with self._lock:
            if self._searching:
                raise InvalidStateError("A search is already in progress on this engine.")
            self._searching = True
        try:
            return self._search(snapshot, cancel_event)
        finally:
            with self._lock:
                self._searching = False

    def _search(self, snapshot: GameSnapshot, cancel_event: Optional[threading.Event]) -> SearchResult:
        if snapshot.is_board_full():
            raise ValueError("No empty cells left to play")

        start_time = time.monotonic()
        deadline = None
        if self.max_search_time_ms > 0:
            deadline = start_time + self.max_search_time_ms / 1000

        board = snapshot.copy()
        table = TranspositionTable(self._setup_pool())
        search = MinimaxSearch(board, table, self.evaluator)

        first_guess = 0
        best_move = board.empty_cells()[0]
        depth_reached = 0
        solved = False
        canceled = False
        tt_stats = {}

        depth = 1
        try:
            while self.max_depth is None or depth <= self.max_depth:
                # Bounds are only valid for the depth they were computed at
                table.clear()
                search.max_depth = depth
                search.max_depth_touched = False
                search.deadline = deadline

                try:
                    score, move = self.mtdf(search, first_guess)
                except SearchTimeout:
                    logger.debug("Depth %d abandoned: time limit exceeded", depth)
                    if depth_reached == 0 and search.best_move is not None:
                        best_move = search.best_move
                    break

                first_guess = score
                best_move = move
                depth_reached = depth
                tt_stats = table.get_stats()
                logger.debug("Depth %d: move=(%d, %d) score=%d nodes=%d",
                             depth, move.row, move.col, score, search.nodes_searched)

                if not search.max_depth_touched:
                    solved = True
                    break
                if cancel_event is not None and cancel_event.is_set():
                    canceled = True
                    break
                if deadline is not None and time.monotonic() >= deadline:
                    break
                depth += 1
        finally:
            table.clear()

        elapsed_ms = int((time.monotonic() - start_time) * 1000)
        logger.info("Search finished: move=(%d, %d) score=%d depth=%d nodes=%d time=%dms%s",
                    best_move.row, best_move.col, first_guess, depth_reached,
                    search.nodes_searched, elapsed_ms, ' (canceled)' if canceled else '')

        return SearchResult(
            move=best_move,
            score=first_guess,
            depth_reached=depth_reached,
            nodes_searched=search.nodes_searched,
            time_ms=elapsed_ms,
            solved=solved,
            canceled=canceled,
            tt_stats=tt_stats
        )
