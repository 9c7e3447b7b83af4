from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Iterable, List, Tuple

import numpy as np


Offset = Tuple[int, int]


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    J = 6
    L = 7


# Clockwise quarter turn for y-up coordinates: (x, y) -> (y, -x)
_CW = np.array([[0, 1], [-1, 0]], dtype=float)


def _rotate_cw(offsets: np.ndarray, pivot: np.ndarray, turns: int) -> np.ndarray:
    rel = offsets.astype(float) - pivot
    for _ in range(turns % 4):
        rel = rel @ _CW.T
    return np.rint(rel + pivot).astype(int)


@dataclass(frozen=True)
class Shape:
    """Catalog entry for one piece kind.

    `offsets[r]` holds the four block offsets of rotation state `r`, relative
    to the piece origin. States are derived from the base offsets directly so
    repeated rotation never accumulates rounding error.
    """

    kind: TetrominoType
    offsets: Tuple[Tuple[Offset, ...], ...]
    pivot: Tuple[float, float]

    @property
    def rotation_count(self) -> int:
        return len(self.offsets)

    def cells(self, rotation: int = 0) -> Tuple[Offset, ...]:
        return self.offsets[rotation % self.rotation_count]


def build_shape(
    kind: TetrominoType,
    base: Iterable[Offset],
    pivot: Tuple[float, float] = (0.0, 0.0),
    rotation_count: int = 4,
) -> Shape:
    base_arr = np.array(list(base), dtype=int)
    pivot_arr = np.array(pivot, dtype=float)
    states: List[Tuple[Offset, ...]] = []
    for r in range(rotation_count):
        rotated = _rotate_cw(base_arr, pivot_arr, r)
        states.append(tuple((int(x), int(y)) for x, y in rotated))
    return Shape(kind=kind, offsets=tuple(states), pivot=(float(pivot[0]), float(pivot[1])))


SHAPES: Dict[TetrominoType, Shape] = {
    TetrominoType.I: build_shape(TetrominoType.I, [(-1, 0), (0, 0), (1, 0), (2, 0)], pivot=(0.5, -0.5)),
    # O has a single rotation state, so rotating it is a no-op
    TetrominoType.O: build_shape(TetrominoType.O, [(0, 0), (1, 0), (0, 1), (1, 1)], pivot=(0.5, 0.5), rotation_count=1),
    TetrominoType.T: build_shape(TetrominoType.T, [(-1, 0), (0, 0), (1, 0), (0, 1)]),
    TetrominoType.S: build_shape(TetrominoType.S, [(-1, 0), (0, 0), (0, 1), (1, 1)]),
    TetrominoType.Z: build_shape(TetrominoType.Z, [(-1, 1), (0, 1), (0, 0), (1, 0)]),
    TetrominoType.J: build_shape(TetrominoType.J, [(-1, 1), (-1, 0), (0, 0), (1, 0)]),
    TetrominoType.L: build_shape(TetrominoType.L, [(1, 1), (-1, 0), (0, 0), (1, 0)]),
}

ALL_KINDS: Tuple[TetrominoType, ...] = tuple(TetrominoType)


def random_kind(rng: random.Random) -> TetrominoType:
    return rng.choice(ALL_KINDS)
