from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional


class DropState(IntEnum):
    IDLE = 0
    SOFT_DROPPING = 1


@dataclass
class DropTiming:
    base_drop_time: float = 1.0  # seconds between auto-drops at level 1
    level_multiplier: float = 0.1  # speed-up per level
    move_interval: float = 0.1  # held move / soft drop repeat

    def auto_drop_interval(self, level: int) -> float:
        return self.base_drop_time * (1.0 - self.level_multiplier) ** (max(1, level) - 1)


class DropScheduler:
    """Decides when gravity and held-key repeats should act.

    Times are session-clock seconds supplied by the caller. A drop or move is
    due once strictly more than its interval has elapsed since the last one.
    """

    def __init__(self, timing: Optional[DropTiming] = None, level: int = 1) -> None:
        self.timing = timing or DropTiming()
        self.state = DropState.IDLE
        self.move_direction = 0
        self.previous_drop = 0.0
        self.previous_move = 0.0
        self._level = 1
        self._drop_time = self.timing.base_drop_time
        self.level = level

    @property
    def level(self) -> int:
        return self._level

    @level.setter
    def level(self, value: int) -> None:
        self._level = max(1, int(value))
        self._drop_time = self.timing.auto_drop_interval(self._level)

    @property
    def drop_interval(self) -> float:
        if self.state == DropState.SOFT_DROPPING:
            return self.timing.move_interval
        return self._drop_time

    def reset(self, now: float) -> None:
        self.state = DropState.IDLE
        self.move_direction = 0
        self.previous_drop = now
        self.previous_move = now

    def start_soft_drop(self) -> None:
        self.state = DropState.SOFT_DROPPING

    def stop_soft_drop(self) -> None:
        self.state = DropState.IDLE

    def set_move_direction(self, direction: int) -> None:
        self.move_direction = (direction > 0) - (direction < 0)

    def drop_due(self, now: float) -> bool:
        return now - self.previous_drop > self.drop_interval

    def move_due(self, now: float) -> bool:
        return self.move_direction != 0 and now - self.previous_move > self.timing.move_interval

    def mark_drop(self, now: float) -> None:
        self.previous_drop = now

    def mark_move(self, now: float) -> None:
        self.previous_move = now
