"""
Minimax search with alpha-beta pruning and a transposition table.

This is the memory-enhanced alpha-beta used as the inner search of MTD(f)
(see mtdf.py). Every node is scored from the point of view of the player to
move at the root (the max player).

Algorithm overview:

    def nested(minimize, prev_move, depth, alpha, beta):
        # Cached bounds may cut off or narrow the window
        if entry := table.probe(hash):
            if entry.lower >= beta: return entry.lower
            if entry.upper <= alpha: return entry.upper
            alpha, beta = max(alpha, entry.lower), min(beta, entry.upper)

        # Terminal states: faster wins and slower losses score better
        if prev_move made a combo:
            return MAX_SCORE - depth if minimize else MIN_SCORE + depth
        if board full:
            return 0

        # Depth cutoff
        if depth == max_depth:
            return heuristic(max) - heuristic(min)

        # Try every empty cell, undo, prune
        ...

        # Store the result as an upper, exact or lower bound
        table.store(hash, g, alpha, beta)
        return g
"""

import time
from typing import Callable, Optional

import numpy as np

from tictactoe_mtdf.engine import heuristic
from tictactoe_mtdf.engine.transposition_table import MAX_SCORE, MIN_SCORE, TranspositionTable
from tictactoe_mtdf.game.snapshot import GameSnapshot
from tictactoe_mtdf.game.types import Cell, Mark

# Check the deadline every this many nodes (must be a power of two)
TIME_CHECK_INTERVAL = 256

Evaluator = Callable[[np.ndarray, Mark, int], int]


class SearchTimeout(Exception):
    """Raised inside the recursion when the search deadline has passed."""


class MinimaxSearch:
    """
    Depth-limited alpha-beta search over a private game snapshot.

    The snapshot is mutated in place: each trial move is placed, searched and
    undone. If ``SearchTimeout`` escapes, the snapshot is left with trial moves
    on it and must be discarded; ``best_move`` is still valid.
    """

    def __init__(
        self,
        snapshot: GameSnapshot,
        table: TranspositionTable,
        evaluator: Evaluator = heuristic.evaluate
    ):
        """
        Args:
            snapshot: Position to search; the side to move is the max player
            table: Transposition table shared by all passes at one depth
            evaluator: (grid, mark, combo_size) -> score used at the cutoff
        """
        self.snapshot = snapshot
        self.table = table
        self.evaluator = evaluator

        self.max_player = snapshot.current_turn
        self.min_player = snapshot.next_turn

        # Maximum search depth at the current iteration
        self.max_depth = 1
        # Set when any branch reached max_depth during the current iteration;
        # if it stays False the tree below the root was searched to the end
        self.max_depth_touched = False
        # Monotonic time after which SearchTimeout is raised (None = no limit)
        # Applies to every depth, including the first one
        self.deadline: Optional[float] = None

        self.nodes_searched = 0
        self.best_move: Optional[Cell] = None

    def root(self, alpha: int, beta: int) -> int:
        """
        Search the root position for the max player.

        Records the empty cell with the highest score in ``best_move``. The
        previous pass's move stays there until this pass has scored a move,
        so a timeout always leaves the best move seen so far.

        Args:
            alpha: Alpha bound
            beta: Beta bound

        Returns:
            Score of the root (fail-soft)
        """
        board = self.snapshot
        mark = self.max_player

        move = None
        best = MIN_SCORE
        a = alpha
        for row, col in board.empty_cells():
            board.place_mark_unchecked(row, col, mark)
            value = self.nested(True, row, col, 0, a, beta)
            board.place_mark_unchecked(row, col, Mark.EMPTY)

            if value > best or move is None:
                best = value
                move = Cell(row, col)
                self.best_move = move

            a = max(a, best)
            if best >= beta:
                break

        return best

    def nested(self, minimize: bool, prev_row: int, prev_col: int, depth: int, alpha: int, beta: int) -> int:
        """
        Alpha-beta search below the root.

        Args:
            minimize: True if the min player is to move
            prev_row: Row of the move that led to this position
            prev_col: Column of the move that led to this position
            depth: Plies below the root's children
            alpha: Alpha bound
            beta: Beta bound

        Returns:
            Score from the max player's perspective (fail-soft)
        """
        self.nodes_searched += 1
        if (self.deadline is not None
                and self.nodes_searched & (TIME_CHECK_INTERVAL - 1) == 0
                and time.monotonic() >= self.deadline):
            raise SearchTimeout("Time limit exceeded")

        board = self.snapshot

        # Cached bounds
        entry = self.table.probe(board.position_hash)
        if entry is not None:
            if entry.lower_bound >= beta:
                return entry.lower_bound
            if entry.upper_bound <= alpha:
                return entry.upper_bound
            alpha = max(alpha, entry.lower_bound)
            beta = min(beta, entry.upper_bound)

        # Terminal states
        if board.find_winning_combo(prev_row, prev_col) is not None:
            # The previous move won: it was the max player's if min is to move
            return MAX_SCORE - depth if minimize else MIN_SCORE + depth
        if board.is_board_full():
            return 0

        # Depth cutoff
        if depth == self.max_depth:
            self.max_depth_touched = True
            return (self.evaluator(board.grid, self.max_player, board.combo_size)
                    - self.evaluator(board.grid, self.min_player, board.combo_size))

        child_depth = depth + 1
        if minimize:
            g = MAX_SCORE
            b = beta
            for row, col in board.empty_cells():
                board.place_mark_unchecked(row, col, self.min_player)
                g = min(g, self.nested(False, row, col, child_depth, alpha, b))
                board.place_mark_unchecked(row, col, Mark.EMPTY)
                b = min(b, g)
                if g <= alpha:
                    break
        else:
            g = MIN_SCORE
            a = alpha
            for row, col in board.empty_cells():
                board.place_mark_unchecked(row, col, self.max_player)
                g = max(g, self.nested(True, row, col, child_depth, a, beta))
                board.place_mark_unchecked(row, col, Mark.EMPTY)
                a = max(a, g)
                if g >= beta:
                    break

        # Cache the result
        if entry is None:
            entry = self.table.obtain(board.position_hash)
        if g <= alpha:
            entry.upper_bound = g
        elif g < beta:
            entry.lower_bound = g
            entry.upper_bound = g
        else:
            entry.lower_bound = g

        return g
