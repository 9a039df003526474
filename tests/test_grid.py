from __future__ import annotations

import numpy as np
import pytest

from blockfall.game import GameGrid, TetrominoType, format_grid
from blockfall.game.pieces import CATALOG


def test_new_grid_is_empty_with_fixed_dimensions():
    grid = GameGrid()
    assert grid.grid.shape == (20, 10)
    assert not grid.grid.any()


@pytest.mark.parametrize("width,height", [(0, 20), (10, 0), (-1, 5)])
def test_invalid_dimensions_rejected(width, height):
    with pytest.raises(ValueError):
        GameGrid(width, height)


def test_is_inside_and_is_occupied():
    grid = GameGrid()
    grid.grid[19, 0] = int(TetrominoType.S)
    assert grid.is_inside(0, 0)
    assert grid.is_inside(19, 9)
    assert not grid.is_inside(20, 0)
    assert not grid.is_inside(0, 10)
    assert not grid.is_inside(-1, 0)
    assert grid.is_occupied(19, 0)
    assert not grid.is_occupied(18, 0)


def test_is_occupied_off_board_is_false():
    grid = GameGrid()
    grid.grid[19, 0] = 1
    grid.grid[0, 9] = 1
    assert not grid.is_occupied(-1, 0)
    assert not grid.is_occupied(0, -1)
    assert not grid.is_occupied(20, 0)
    assert not grid.is_occupied(0, 10)


def test_lock_writes_kind_at_footprint():
    grid = GameGrid()
    t_shape = CATALOG[2].shape
    grid.lock(t_shape, 3, 18, TetrominoType.T)
    assert grid.grid[18, 4] == TetrominoType.T
    assert list(grid.grid[19, 3:6]) == [3, 3, 3]
    assert grid.grid[18, 3] == 0
    assert int(np.count_nonzero(grid.grid)) == 4


def test_lock_drops_cells_above_top():
    grid = GameGrid()
    vertical_i = np.ones((4, 1), dtype=bool)
    grid.lock(vertical_i, 0, -2, TetrominoType.I)
    assert grid.grid[0, 0] == TetrominoType.I
    assert grid.grid[1, 0] == TetrominoType.I
    assert int(np.count_nonzero(grid.grid)) == 2


def test_lock_outside_board_raises_and_leaves_grid_untouched():
    grid = GameGrid()
    with pytest.raises(ValueError):
        grid.lock(CATALOG[0].shape, 8, 5, TetrominoType.I)
    with pytest.raises(ValueError):
        grid.lock(CATALOG[1].shape, 0, 19, TetrominoType.O)
    assert not grid.grid.any()


def test_clear_without_full_rows_is_a_no_op():
    grid = GameGrid()
    grid.grid[19, :9] = 1
    grid.grid[10, 4] = 5
    before = grid.clone_state()
    assert grid.clear_full_rows() == 0
    assert np.array_equal(grid.grid, before)


def test_clear_single_row_shifts_rows_down():
    grid = GameGrid()
    grid.grid[19, :] = 1
    grid.grid[18, 0] = 2
    grid.grid[17, 9] = 3
    assert grid.clear_full_rows() == 1
    assert grid.grid[19, 0] == 2
    assert grid.grid[18, 9] == 3
    assert int(np.count_nonzero(grid.grid)) == 2
    assert not grid.grid[0].any()


def test_clear_adjacent_full_rows_in_one_pass():
    grid = GameGrid()
    grid.grid[18:, :] = 4
    grid.grid[17, 5] = 6
    assert grid.clear_full_rows() == 2
    assert grid.grid[19, 5] == 6
    assert int(np.count_nonzero(grid.grid)) == 1


def test_clear_separated_full_rows():
    grid = GameGrid()
    grid.grid[19, :] = 1
    grid.grid[17, :] = 1
    grid.grid[18, :3] = 7
    assert grid.clear_full_rows() == 2
    assert list(grid.grid[19]) == [7, 7, 7] + [0] * 7
    assert int(np.count_nonzero(grid.grid)) == 3


def test_clear_full_top_row():
    grid = GameGrid()
    grid.grid[0, :] = 2
    assert grid.clear_full_rows() == 1
    assert not grid.grid.any()


def test_clone_state_is_independent():
    grid = GameGrid()
    state = grid.clone_state()
    state[0, 0] = 1
    assert grid.grid[0, 0] == 0


def test_reset_empties_grid():
    grid = GameGrid()
    grid.grid[5:, :] = 3
    grid.reset()
    assert not grid.grid.any()


def test_format_grid():
    state = np.zeros((2, 3), dtype=np.int8)
    state[0, 1] = -2
    state[1, :] = 1
    assert format_grid(state) == "·▒·\n███"
