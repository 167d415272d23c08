"""
Outbound game events.

Every state-changing call on ``TicTacToeGame`` returns the events it produced;
the orchestration layer consumes them synchronously. The game keeps no
listener references.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

from tictactoe_mtdf.game.types import Combo, GameResult, Mark


@dataclass(frozen=True)
class GameStarted:
    size: int
    first_turn: Mark


@dataclass(frozen=True)
class MarkPlaced:
    mark: Mark
    row: int
    col: int


@dataclass(frozen=True)
class GameFinished:
    result: GameResult
    combo: Optional[Combo] = None


GameEvent = Union[GameStarted, MarkPlaced, GameFinished]


@dataclass(frozen=True)
class MoveResult:
    """
    Outcome of ``TicTacToeGame.place_mark``.

    Truthy when the mark was placed. Placing on an occupied cell is not an
    error: it yields a falsy result with no events.
    """
    placed: bool
    events: tuple[GameEvent, ...] = field(default_factory=tuple)

    def __bool__(self) -> bool:
        return self.placed

    @property
    def finished(self) -> Optional[GameFinished]:
        """The ``GameFinished`` event if this move ended the game."""
        for event in self.events:
            if isinstance(event, GameFinished):
                return event
        return None
