from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    line_score: int = 10
    multi_line_base: int = 3
    level_bonus: float = 0.5
    lines_per_level: int = 10

    def score_delta(self, lines: int, level: int) -> int:
        if lines <= 0:
            return 0
        raw = self.line_score * self.multi_line_base ** (lines - 1) * (1 + (level - 1) * self.level_bonus)
        return int(round(raw))

    def levels_gained(self, previous_total: int, total: int) -> int:
        gained = total // self.lines_per_level - previous_total // self.lines_per_level
        return max(0, gained)


def clamp_start_level(level: int) -> int:
    return max(1, int(level))
