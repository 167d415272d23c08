"""
MTD(f) search engine for tic-tac-toe.

This module contains the engine components:
- Transposition table and node pool for caching search bounds
- Line-scanning heuristic evaluator used at the depth cutoff
- Alpha-beta minimax search with memory
- MTD(f) driver with iterative deepening and time management
- Background executor with cooperative cancellation
"""

from tictactoe_mtdf.engine.transposition_table import (
    MAX_SCORE, MIN_SCORE, SearchBound, NodePool, TranspositionTable
)
from tictactoe_mtdf.engine.heuristic import evaluate, score_line, iter_lines
from tictactoe_mtdf.engine.minimax import MinimaxSearch, SearchTimeout
from tictactoe_mtdf.engine.mtdf import MtdfEngine, SearchResult
from tictactoe_mtdf.engine.executor import SearchExecutor, ExecutorResult

__all__ = [
    'MAX_SCORE',
    'MIN_SCORE',
    'SearchBound',
    'NodePool',
    'TranspositionTable',
    'evaluate',
    'score_line',
    'iter_lines',
    'MinimaxSearch',
    'SearchTimeout',
    'MtdfEngine',
    'SearchResult',
    'SearchExecutor',
    'ExecutorResult',
]
