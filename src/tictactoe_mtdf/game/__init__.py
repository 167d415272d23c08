"""
Tic-tac-toe game core.

- Board state with incremental Zobrist hashing
- Game lifecycle producing explicit events
- Independent snapshots for the search engine
"""

from tictactoe_mtdf.game.types import Mark, GameResult, Combo, Cell
from tictactoe_mtdf.game.zobrist import ZobristTable
from tictactoe_mtdf.game.board import Board, MAX_COMBO_SIZE
from tictactoe_mtdf.game.snapshot import GameSnapshot
from tictactoe_mtdf.game.events import GameEvent, GameStarted, MarkPlaced, GameFinished, MoveResult
from tictactoe_mtdf.game.game import TicTacToeGame

__all__ = [
    'Mark',
    'GameResult',
    'Combo',
    'Cell',
    'ZobristTable',
    'Board',
    'MAX_COMBO_SIZE',
    'GameSnapshot',
    'GameEvent',
    'GameStarted',
    'MarkPlaced',
    'GameFinished',
    'MoveResult',
    'TicTacToeGame',
]
