from __future__ import annotations

from bricks.game.grid import GameGrid
from bricks.game.shapes import TetrominoType
from bricks.game.validator import is_valid_move


def test_free_cells_are_valid():
    grid = GameGrid(10, 20)
    assert is_valid_move(grid, [(0, 0), (9, 19)])


def test_cells_above_the_field_are_valid():
    grid = GameGrid(10, 20)
    assert is_valid_move(grid, [(4, 20), (4, 21)])


def test_walls_and_floor_are_invalid():
    grid = GameGrid(10, 20)
    assert not is_valid_move(grid, [(0, 0), (-1, 0)])
    assert not is_valid_move(grid, [(10, 5)])
    assert not is_valid_move(grid, [(3, -1)])


def test_occupied_cells_are_invalid():
    grid = GameGrid(10, 20)
    grid.commit([(3, 0)], TetrominoType.O)
    assert not is_valid_move(grid, [(2, 0), (3, 0)])


def test_empty_candidate_is_valid():
    assert is_valid_move(GameGrid(10, 20), [])
