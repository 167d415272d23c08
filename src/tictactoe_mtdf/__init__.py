"""
tictactoe_mtdf: tic-tac-toe on boards of any size with an MTD(f) opponent.
"""

from tictactoe_mtdf.errors import InvalidStateError
from tictactoe_mtdf.game import (
    Mark, GameResult, Combo, Cell, TicTacToeGame, GameSnapshot, MoveResult
)
from tictactoe_mtdf.engine import MtdfEngine, SearchResult, SearchExecutor, ExecutorResult

__all__ = [
    'InvalidStateError',
    'Mark',
    'GameResult',
    'Combo',
    'Cell',
    'TicTacToeGame',
    'GameSnapshot',
    'MoveResult',
    'MtdfEngine',
    'SearchResult',
    'SearchExecutor',
    'ExecutorResult',
]
