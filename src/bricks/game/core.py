from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, List, Optional

import numpy as np

from .events import (
    GameEvent,
    GameListener,
    GameOver,
    LevelChanged,
    LinesCleared,
    PausedChanged,
    PieceRested,
    PieceSpawned,
    ScoreChanged,
    dispatch,
)
from .grid import GameGrid
from .pieces import ActivePiece, drop_one, try_move, try_rotate
from .rules import ScoringRules, clamp_start_level
from .scheduler import DropScheduler, DropTiming
from .shapes import TetrominoType, random_kind
from .validator import is_valid_move


logger = logging.getLogger(__name__)


class SessionState(IntEnum):
    HOME = 0
    ACTIVE = 1
    PAUSED = 2
    GAME_OVER = 3


class Action(IntEnum):
    NOOP = 0
    LEFT = 1
    RIGHT = 2
    ROTATE = 3
    SOFT_DROP = 4
    HARD_DROP = 5


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    start_level: int = 1
    random_seed: Optional[int] = None
    spawn_x: Optional[int] = None  # defaults to the middle column
    spawn_y: Optional[int] = None  # defaults to the top visible row

    def __post_init__(self) -> None:
        if self.width < 4 or self.height < 4:
            raise ValueError(f"playfield must be at least 4x4, got {self.width}x{self.height}")
        self.start_level = clamp_start_level(self.start_level)
        if self.spawn_x is None:
            self.spawn_x = self.width // 2 - 1
        if self.spawn_y is None:
            self.spawn_y = self.height - 1


class GameSession:
    """Spawn, control, rest, clear, respawn.

    The host calls `tick(elapsed)` once per frame and forwards player intents
    through the public methods. Every call returns the events it raised; the
    same events are also passed to registered listeners. Intents that make no
    sense in the current state are ignored.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        timing: Optional[DropTiming] = None,
        listeners: Iterable[GameListener] = (),
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = random.Random(self.config.random_seed)
        self.grid = GameGrid(self.config.width, self.config.height)
        self.scheduler = DropScheduler(timing, level=self.config.start_level)
        self.listeners: List[GameListener] = list(listeners)
        self.state = SessionState.HOME
        self.start_level = self.config.start_level
        self.level = self.start_level
        self.score = 0
        self.lines = 0
        self.clock = 0.0
        self.piece: Optional[ActivePiece] = None
        self.next_kind: Optional[TetrominoType] = None
        self._pending: List[GameEvent] = []

    # -- read access -------------------------------------------------------

    @property
    def is_paused(self) -> bool:
        return self.state == SessionState.PAUSED

    @property
    def is_game_over(self) -> bool:
        return self.state == SessionState.GAME_OVER

    def add_listener(self, listener: GameListener) -> None:
        self.listeners.append(listener)

    def get_state(self) -> np.ndarray:
        """Board of kind values with the falling piece as negative values.

        Row 0 of the returned array is the top of the playfield.
        """
        state = self.grid.kinds_matrix()
        if self.piece is not None and self.state != SessionState.GAME_OVER:
            for x, y in self.piece.cells():
                if 0 <= y < self.grid.height and 0 <= x < self.grid.width:
                    state[y, x] = -int(self.piece.kind)
        return np.flipud(state).copy()

    # -- intents -----------------------------------------------------------

    def change_start_level(self, direction: int) -> List[GameEvent]:
        if self.state == SessionState.HOME and direction != 0:
            level = clamp_start_level(self.start_level + (1 if direction > 0 else -1))
            if level != self.start_level:
                self.start_level = level
                self.level = level
                self._emit(LevelChanged(level))
        return self._drain()

    def confirm(self) -> List[GameEvent]:
        if self.state == SessionState.HOME:
            self._start_run()
        elif self.state in (SessionState.PAUSED, SessionState.GAME_OVER):
            if self.state == SessionState.PAUSED:
                self._emit(PausedChanged(False))
            self._go_home()
        return self._drain()

    def pause(self) -> List[GameEvent]:
        if self.state == SessionState.ACTIVE:
            self.state = SessionState.PAUSED
            logger.info("paused at score %d", self.score)
            self._emit(PausedChanged(True))
        elif self.state == SessionState.PAUSED:
            self.state = SessionState.ACTIVE
            logger.info("resumed")
            self._emit(PausedChanged(False))
        return self._drain()

    def move(self, direction: int) -> List[GameEvent]:
        if self.state == SessionState.ACTIVE:
            self.scheduler.set_move_direction(direction)
            if self.scheduler.move_direction != 0:
                self._shift(self.scheduler.move_direction)
                self.scheduler.mark_move(self.clock)
        return self._drain()

    def rotate(self) -> List[GameEvent]:
        if self.state == SessionState.ACTIVE and self.piece is not None:
            self.piece = try_rotate(self.grid, self.piece)
        return self._drain()

    def soft_drop(self, start: bool) -> List[GameEvent]:
        if self.state == SessionState.ACTIVE:
            if start:
                self.scheduler.start_soft_drop()
                self._drop()
            else:
                self.scheduler.stop_soft_drop()
        return self._drain()

    def hard_drop(self) -> List[GameEvent]:
        if self.state == SessionState.ACTIVE:
            while not self._drop():
                pass
        return self._drain()

    def tick(self, elapsed: float) -> List[GameEvent]:
        if self.state == SessionState.ACTIVE and elapsed > 0:
            self.clock += elapsed
            if self.scheduler.move_due(self.clock):
                self._shift(self.scheduler.move_direction)
                self.scheduler.mark_move(self.clock)
            if self.scheduler.drop_due(self.clock):
                self._drop()
        return self._drain()

    def apply(self, action: Action) -> List[GameEvent]:
        """Single discrete action, as a tap of the matching key."""
        events: List[GameEvent] = []
        if action == Action.LEFT:
            events += self.move(-1)
            events += self.move(0)
        elif action == Action.RIGHT:
            events += self.move(1)
            events += self.move(0)
        elif action == Action.ROTATE:
            events += self.rotate()
        elif action == Action.SOFT_DROP:
            events += self.soft_drop(True)
            events += self.soft_drop(False)
        elif action == Action.HARD_DROP:
            events += self.hard_drop()
        return events

    def new_game(self, seed: Optional[int] = None) -> List[GameEvent]:
        """Start a fresh run from any state, optionally reseeding."""
        if seed is not None:
            self.rng.seed(seed)
        self._go_home()
        self._start_run()
        return self._drain()

    # -- internals ---------------------------------------------------------

    def _emit(self, event: GameEvent) -> None:
        self._pending.append(event)

    def _drain(self) -> List[GameEvent]:
        events, self._pending = self._pending, []
        for event in events:
            for listener in self.listeners:
                dispatch(listener, event)
        return events

    def _go_home(self) -> None:
        self.state = SessionState.HOME
        self.grid.reset()
        self.piece = None
        self.next_kind = None
        self.score = 0
        self.lines = 0
        self.level = self.start_level
        self.clock = 0.0
        self.scheduler.reset(self.clock)

    def _start_run(self) -> None:
        self.grid.reset()
        self.score = 0
        self.lines = 0
        self.level = self.start_level
        self.scheduler.level = self.level
        self.clock = 0.0
        self.next_kind = random_kind(self.rng)
        self.state = SessionState.ACTIVE
        logger.info("run started at level %d", self.level)
        self._emit(ScoreChanged(0))
        self._emit(LevelChanged(self.level))
        self._spawn()

    def _spawn(self) -> None:
        assert self.next_kind is not None
        kind = self.next_kind
        self.next_kind = random_kind(self.rng)
        self.piece = ActivePiece.spawn(kind, self.config.spawn_x, self.config.spawn_y)
        self.scheduler.reset(self.clock)
        logger.debug("spawned %s, next %s", kind.name, self.next_kind.name)
        self._emit(PieceSpawned(kind, self.next_kind))
        if not is_valid_move(self.grid, self.piece.cells()):
            self._end_run()

    def _shift(self, direction: int) -> None:
        if self.piece is not None:
            self.piece = try_move(self.grid, self.piece, direction)

    def _drop(self) -> bool:
        """Drop one row; True when the piece came to rest instead."""
        if self.piece is None or self.state != SessionState.ACTIVE:
            return True
        lower = drop_one(self.grid, self.piece)
        if lower is not None:
            self.piece = lower
            self.scheduler.mark_drop(self.clock)
            return False
        self._rest()
        return True

    def _rest(self) -> None:
        piece = self.piece
        assert piece is not None
        result = self.grid.commit(piece.cells(), piece.kind)
        if result.spawn_blocked:
            self._end_run()
            return
        logger.debug("%s rested at %s", piece.kind.name, piece.cells())
        self._emit(PieceRested(piece.kind, tuple(piece.cells())))
        lines = self.grid.clear_completed_lines()
        if lines > 0:
            self._award(lines)
        self._spawn()

    def _award(self, lines: int) -> None:
        previous = self.lines
        self.score += self.rules.score_delta(lines, self.level)
        self.lines += lines
        self._emit(LinesCleared(lines))
        self._emit(ScoreChanged(self.score))
        gained = self.rules.levels_gained(previous, self.lines)
        if gained > 0:
            self.level += gained
            self.scheduler.level = self.level
            logger.info("level up to %d", self.level)
            self._emit(LevelChanged(self.level))

    def _end_run(self) -> None:
        self.state = SessionState.GAME_OVER
        self.scheduler.stop_soft_drop()
        self.scheduler.set_move_direction(0)
        logger.info("game over: score %d, lines %d, level %d", self.score, self.lines, self.level)
        self._emit(GameOver(self.score))
