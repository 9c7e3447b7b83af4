from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

from .grid import GameGrid
from .shapes import SHAPES, Shape, TetrominoType
from .validator import is_valid_move


@dataclass(frozen=True)
class ActivePiece:
    shape: Shape
    x: int
    y: int
    rotation: int = 0  # 0..rotation_count-1

    @classmethod
    def spawn(cls, kind: TetrominoType, x: int, y: int) -> "ActivePiece":
        return cls(SHAPES[kind], int(x), int(y), 0)

    @property
    def kind(self) -> TetrominoType:
        return self.shape.kind

    def cells(self) -> List[Tuple[int, int]]:
        return [(self.x + dx, self.y + dy) for dx, dy in self.shape.cells(self.rotation)]

    def moved(self, dx: int, dy: int) -> "ActivePiece":
        return replace(self, x=self.x + dx, y=self.y + dy)

    def rotated(self) -> "ActivePiece":
        return replace(self, rotation=(self.rotation + 1) % self.shape.rotation_count)


def try_move(grid: GameGrid, piece: ActivePiece, direction: int) -> ActivePiece:
    """Shift sideways by `direction`; returns `piece` itself when blocked."""
    if direction == 0:
        return piece
    candidate = piece.moved(1 if direction > 0 else -1, 0)
    if is_valid_move(grid, candidate.cells()):
        return candidate
    return piece


def try_rotate(grid: GameGrid, piece: ActivePiece) -> ActivePiece:
    if piece.shape.rotation_count == 1:
        return piece
    candidate = piece.rotated()
    if is_valid_move(grid, candidate.cells()):
        return candidate
    return piece


def drop_one(grid: GameGrid, piece: ActivePiece) -> Optional[ActivePiece]:
    """One row down, or None when the piece has come to rest."""
    candidate = piece.moved(0, -1)
    if is_valid_move(grid, candidate.cells()):
        return candidate
    return None


def landing(grid: GameGrid, piece: ActivePiece) -> ActivePiece:
    """Lowest legal position straight below `piece` (hard-drop target)."""
    current = piece
    while True:
        lower = drop_one(grid, current)
        if lower is None:
            return current
        current = lower
