from __future__ import annotations

import pytest

from bricks.game.grid import GameGrid
from bricks.game.shapes import TetrominoType


WIDTH, HEIGHT = 10, 20


@pytest.fixture
def grid() -> GameGrid:
    return GameGrid(WIDTH, HEIGHT)


def fill_row(grid: GameGrid, y: int, skip=()) -> None:
    cells = [(x, y) for x in range(WIDTH) if x not in skip]
    assert not grid.commit(cells, TetrominoType.I).spawn_blocked


def test_inside_field_has_no_upper_bound(grid):
    assert grid.is_inside_field((0, 0))
    assert grid.is_inside_field((9, 25))
    assert not grid.is_inside_field((-1, 0))
    assert not grid.is_inside_field((10, 0))
    assert not grid.is_inside_field((0, -1))


def test_rows_above_height_are_never_occupied(grid):
    fill_row(grid, HEIGHT - 1)
    assert grid.is_occupied((0, HEIGHT - 1))
    assert not grid.is_occupied((0, HEIGHT))
    assert not grid.is_occupied((0, HEIGHT + 3))


def test_commit_writes_all_cells(grid):
    result = grid.commit([(0, 0), (1, 0), (1, 1), (2, 1)], TetrominoType.S)
    assert not result.spawn_blocked
    assert grid.filled_count() == 4
    assert grid.kind_at((1, 1)) == TetrominoType.S
    assert grid.blocks_of(result.instance_id) == [(0, 0), (1, 0), (1, 1), (2, 1)]


def test_commit_above_field_is_refused_without_writing(grid):
    result = grid.commit([(4, 19), (5, 19), (4, 20), (5, 20)], TetrominoType.O)
    assert result.spawn_blocked
    assert result.blocked_cells == [(4, 20), (5, 20)]
    assert grid.filled_count() == 0


def test_commit_onto_occupied_cell_is_all_or_nothing(grid):
    grid.commit([(3, 0)], TetrominoType.T)
    result = grid.commit([(2, 0), (3, 0), (4, 0)], TetrominoType.T)
    assert result.spawn_blocked
    assert not grid.is_occupied((2, 0))
    assert not grid.is_occupied((4, 0))
    assert grid.filled_count() == 1


def test_instance_ids_are_distinct(grid):
    a = grid.commit([(0, 0)], TetrominoType.J).instance_id
    b = grid.commit([(1, 0)], TetrominoType.L).instance_id
    assert a != b
    assert grid.instance_ids() == [a, b]


def test_clear_on_empty_grid(grid):
    before = grid.clone_state()
    assert grid.clear_completed_lines() == 0
    assert (grid.clone_state() == before).all()


def test_clear_single_row_only(grid):
    fill_row(grid, 3)
    assert grid.clear_completed_lines() == 1
    assert grid.filled_count() == 0
    assert not grid.row_filled(3)


def test_clear_single_row_shifts_rows_above(grid):
    fill_row(grid, 3)
    grid.commit([(0, 5), (4, 4)], TetrominoType.T)
    grid.commit([(9, 1)], TetrominoType.Z)
    assert grid.clear_completed_lines() == 1
    assert grid.is_occupied((4, 3))
    assert grid.is_occupied((0, 4))
    assert not grid.is_occupied((4, 4))
    assert not grid.is_occupied((0, 5))
    # rows below the cleared one stay put
    assert grid.is_occupied((9, 1))


def test_clear_two_adjacent_rows(grid):
    fill_row(grid, 0)
    fill_row(grid, 1)
    grid.commit([(2, 2), (7, 5)], TetrominoType.T)
    assert grid.clear_completed_lines() == 2
    assert grid.is_occupied((2, 0))
    assert grid.is_occupied((7, 3))
    assert grid.filled_count() == 2


def test_clear_separated_rows(grid):
    fill_row(grid, 0)
    grid.commit([(5, 1)], TetrominoType.T)
    fill_row(grid, 2)
    grid.commit([(5, 3)], TetrominoType.T)
    assert grid.clear_completed_lines() == 2
    assert grid.is_occupied((5, 0))
    assert grid.is_occupied((5, 1))
    assert grid.filled_count() == 2


def test_clear_top_row(grid):
    fill_row(grid, HEIGHT - 1)
    assert grid.clear_completed_lines() == 1
    assert grid.filled_count() == 0


def test_incomplete_row_is_kept(grid):
    fill_row(grid, 0, skip=(4,))
    assert grid.clear_completed_lines() == 0
    assert grid.filled_count() == WIDTH - 1


def test_fully_consumed_instances_are_discarded(grid):
    partial = grid.commit([(x, 0) for x in range(5)] + [(0, 1)], TetrominoType.L).instance_id
    grid.commit([(x, 0) for x in range(5, 10)], TetrominoType.I)
    assert grid.clear_completed_lines() == 1
    assert grid.instance_ids() == [partial]
    assert grid.blocks_of(partial) == [(0, 0)]


def test_kinds_matrix(grid):
    grid.commit([(0, 0), (1, 0)], TetrominoType.Z)
    kinds = grid.kinds_matrix()
    assert kinds[0, 0] == int(TetrominoType.Z)
    assert kinds[0, 1] == int(TetrominoType.Z)
    assert kinds[1, 0] == 0


def test_reset(grid):
    fill_row(grid, 0, skip=(1,))
    grid.reset()
    assert grid.filled_count() == 0
    assert grid.instance_ids() == []
