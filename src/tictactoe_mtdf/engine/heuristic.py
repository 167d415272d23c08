"""
Heuristic evaluation for positions at the search depth cutoff.

Every row, column and diagonal of the board is scanned as an independent line.
Within a line, an opponent mark splits the line into segments. A segment that
could still hold a winning combo (own marks + empty cells >= combo size) earns:

- HIT_POINTS[own marks]           collect marks in a row
- empty cells * EMPTY_POINTS      fill in the gaps between own marks
- empty cells * SEQUENCE_POINTS   if the longest gap-free run of own marks is
                                  longer than MIN_REWARDED_SEQUENCE; makes an
                                  almost finished open run dominate the score,
                                  so the engine completes its own and blocks
                                  the opponent's

The engine scores a cutoff node as evaluate(max player) - evaluate(min player).
"""

from typing import Iterator

import numpy as np

from tictactoe_mtdf.game.types import Mark

HIT_POINTS = (0, 10, 100, 1000, 10000, 100000, 1000000)
EMPTY_POINTS = 10
SEQUENCE_POINTS = 100_000_000
MIN_REWARDED_SEQUENCE = 3


def iter_lines(grid: np.ndarray) -> Iterator[list[int]]:
    """
    Yield every line of the board as a list of mark ordinals.

    Order: rows, columns, backslash diagonals (\\), slash diagonals (/).
    """
    size = grid.shape[0]
    for i in range(size):
        yield grid[i, :].tolist()
    for j in range(size):
        yield grid[:, j].tolist()
    for offset in range(-(size - 1), size):
        yield grid.diagonal(offset).tolist()
    flipped = np.fliplr(grid)
    for offset in range(-(size - 1), size):
        yield flipped.diagonal(offset).tolist()


def _segment_points(hits: int, empties: int, longest_run: int, combo_size: int) -> int:
    if hits + empties < combo_size:
        return 0
    points = HIT_POINTS[min(hits, len(HIT_POINTS) - 1)] + empties * EMPTY_POINTS
    if longest_run > MIN_REWARDED_SEQUENCE:
        points += empties * SEQUENCE_POINTS
    return points


def score_line(line: list[int], target: Mark, combo_size: int) -> int:
    """
    Score one line for ``target``.

    Args:
        line: Mark ordinals along the line
        target: Mark being evaluated
        combo_size: Length of a winning run

    Returns:
        Sum of the points of every segment of the line
    """
    total = 0
    hits = empties = longest_run = run = 0
    for mark in line:
        if mark == target:
            hits += 1
            run += 1
        elif mark == Mark.EMPTY:
            empties += 1
            longest_run = max(longest_run, run)
            run = 0
        else:
            # Opponent mark: close the current segment
            longest_run = max(longest_run, run)
            total += _segment_points(hits, empties, longest_run, combo_size)
            hits = empties = longest_run = run = 0

    longest_run = max(longest_run, run)
    total += _segment_points(hits, empties, longest_run, combo_size)
    return total


def evaluate(grid: np.ndarray, target: Mark, combo_size: int) -> int:
    """
    Heuristic score of ``target`` over the whole board.

    Args:
        grid: (size, size) array of mark ordinals
        target: Mark being evaluated
        combo_size: Length of a winning run

    Returns:
        Sum of ``score_line`` over all lines long enough to hold a combo
    """
    total = 0
    for line in iter_lines(grid):
        if len(line) >= combo_size:
            total += score_line(line, target, combo_size)
    return total
