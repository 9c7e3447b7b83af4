from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

from .shapes import TetrominoType


logger = logging.getLogger(__name__)

Coordinate = Tuple[int, int]


@dataclass
class CommitResult:
    """Outcome of committing a resting piece to the grid.

    `instance_id` is 0 when the commit was refused; in that case nothing was
    written and `blocked_cells` lists the offending cells.
    """

    instance_id: int = 0
    blocked_cells: List[Coordinate] = field(default_factory=list)

    @property
    def spawn_blocked(self) -> bool:
        return self.instance_id == 0


class GameGrid:
    """Occupancy matrix of resting blocks.

    Cells are `(column, row)` with row 0 at the floor. The backing array is
    indexed `[row, column]` and stores piece-instance ids (0 = empty). Rows at
    or above `height` count as inside the field but are never occupied, which
    lets a fresh piece hang above the visible area.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int32)
        self._kinds: Dict[int, TetrominoType] = {}
        self._next_id = 1

    def reset(self) -> None:
        self.grid.fill(0)
        self._kinds.clear()
        self._next_id = 1

    def is_inside_field(self, cell: Coordinate) -> bool:
        x, y = cell
        return 0 <= x < self.width and y >= 0

    def is_occupied(self, cell: Coordinate) -> bool:
        x, y = cell
        if y >= self.height:
            return False
        return bool(self.grid[y, x] != 0)

    def kind_at(self, cell: Coordinate) -> Optional[TetrominoType]:
        x, y = cell
        if not (0 <= x < self.width and 0 <= y < self.height):
            return None
        return self._kinds.get(int(self.grid[y, x]))

    def commit(self, cells: Iterable[Coordinate], kind: TetrominoType) -> CommitResult:
        """Write a resting piece into the grid, all or nothing."""
        cells = list(cells)
        blocked = [
            (x, y)
            for x, y in cells
            if y >= self.height or not self.is_inside_field((x, y)) or self.grid[y, x] != 0
        ]
        if blocked:
            logger.debug("commit refused for %s at %s", kind.name, blocked)
            return CommitResult(blocked_cells=blocked)
        instance_id = self._next_id
        self._next_id += 1
        for x, y in cells:
            self.grid[y, x] = instance_id
        self._kinds[instance_id] = kind
        return CommitResult(instance_id=instance_id)

    def row_filled(self, y: int) -> bool:
        return bool(np.all(self.grid[y] != 0))

    def clear_completed_lines(self) -> int:
        lines = 0
        y = 0
        while y < self.height:
            if not self.row_filled(y):
                y += 1
                continue
            self.grid[y:-1] = self.grid[y + 1 :].copy()
            self.grid[-1] = 0
            lines += 1
            # Stay on the same row: it now holds what was above it.
        if lines:
            self._discard_consumed()
            logger.debug("cleared %d line(s)", lines)
        return lines

    def _discard_consumed(self) -> None:
        alive = set(int(v) for v in np.unique(self.grid) if v != 0)
        for instance_id in list(self._kinds):
            if instance_id not in alive:
                del self._kinds[instance_id]

    def instance_ids(self) -> List[int]:
        return sorted(self._kinds)

    def blocks_of(self, instance_id: int) -> List[Coordinate]:
        rows, cols = np.nonzero(self.grid == instance_id)
        return [(int(x), int(y)) for y, x in zip(rows, cols)]

    def filled_count(self) -> int:
        return int(np.count_nonzero(self.grid))

    def kinds_matrix(self) -> np.ndarray:
        """Kind value per cell (0 = empty), indexed `[row, column]`."""
        out = np.zeros((self.height, self.width), dtype=np.int8)
        for instance_id, kind in self._kinds.items():
            out[self.grid == instance_id] = int(kind)
        return out

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
