from __future__ import annotations

from typing import Iterable

from .grid import Coordinate, GameGrid


def is_valid_move(grid: GameGrid, candidate: Iterable[Coordinate]) -> bool:
    """True iff every candidate cell is inside the field and free."""
    for cell in candidate:
        if not grid.is_inside_field(cell):
            return False
        if grid.is_occupied(cell):
            return False
    return True
