"""Outbound notifications raised by a game session.

Hosts either read the event lists returned by the session's intent methods
and `tick`, or register a `GameListener` subclass that overrides the hooks it
cares about.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

from .shapes import TetrominoType


@dataclass(frozen=True)
class PieceSpawned:
    kind: TetrominoType
    next_kind: TetrominoType


@dataclass(frozen=True)
class PieceRested:
    kind: TetrominoType
    cells: Tuple[Tuple[int, int], ...]


@dataclass(frozen=True)
class LinesCleared:
    count: int


@dataclass(frozen=True)
class ScoreChanged:
    total: int


@dataclass(frozen=True)
class LevelChanged:
    level: int


@dataclass(frozen=True)
class GameOver:
    final_score: int


@dataclass(frozen=True)
class PausedChanged:
    paused: bool


GameEvent = Union[
    PieceSpawned, PieceRested, LinesCleared, ScoreChanged, LevelChanged, GameOver, PausedChanged
]


class GameListener:
    """No-op base; override the hooks you need."""

    def on_piece_spawned(self, kind: TetrominoType, next_kind: TetrominoType) -> None:
        pass

    def on_piece_rested(self, kind: TetrominoType, cells: Tuple[Tuple[int, int], ...]) -> None:
        pass

    def on_lines_cleared(self, count: int) -> None:
        pass

    def on_score_changed(self, total: int) -> None:
        pass

    def on_level_changed(self, level: int) -> None:
        pass

    def on_game_over(self, final_score: int) -> None:
        pass

    def on_paused_changed(self, paused: bool) -> None:
        pass


def dispatch(listener: GameListener, event: GameEvent) -> None:
    if isinstance(event, PieceSpawned):
        listener.on_piece_spawned(event.kind, event.next_kind)
    elif isinstance(event, PieceRested):
        listener.on_piece_rested(event.kind, event.cells)
    elif isinstance(event, LinesCleared):
        listener.on_lines_cleared(event.count)
    elif isinstance(event, ScoreChanged):
        listener.on_score_changed(event.total)
    elif isinstance(event, LevelChanged):
        listener.on_level_changed(event.level)
    elif isinstance(event, GameOver):
        listener.on_game_over(event.final_score)
    elif isinstance(event, PausedChanged):
        listener.on_paused_changed(event.paused)
