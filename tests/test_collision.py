from __future__ import annotations

import numpy as np
import pytest

from blockfall.game import CATALOG, GameGrid, collides


O_SHAPE = CATALOG[1].shape
VERTICAL_I = np.ones((4, 1), dtype=bool)


@pytest.fixture
def grid() -> GameGrid:
    return GameGrid()


def test_open_position_is_free(grid):
    assert not collides(grid, O_SHAPE, 4, 0)


@pytest.mark.parametrize(
    "x,y,dx,dy",
    [
        (0, 0, -1, 0),   # left wall
        (8, 0, 1, 0),    # right wall
        (4, 18, 0, 1),   # floor
        (-1, 5, 0, 0),
        (9, 5, 0, 0),
        (4, 19, 0, 0),
    ],
)
def test_walls_and_floor_block(grid, x, y, dx, dy):
    assert collides(grid, O_SHAPE, x, y, dx, dy)


def test_locked_cell_blocks(grid):
    grid.grid[10, 5] = 4
    assert collides(grid, O_SHAPE, 4, 9)
    assert collides(grid, O_SHAPE, 4, 8, 0, 1)
    assert not collides(grid, O_SHAPE, 4, 7)


def test_empty_cells_of_shape_are_ignored(grid):
    t_shape = CATALOG[2].shape
    grid.grid[0, 0] = 1
    grid.grid[0, 2] = 1
    # T's top row only fills the middle column
    assert not collides(grid, t_shape, 0, 0)


def test_cells_above_top_are_exempt(grid):
    assert not collides(grid, VERTICAL_I, 3, -3)
    assert not collides(grid, VERTICAL_I, 3, -10)
    grid.grid[0, 3] = 2
    assert collides(grid, VERTICAL_I, 3, -3)
    assert not collides(grid, VERTICAL_I, 3, -4)


def test_cells_above_top_are_exempt_past_side_walls(grid):
    assert not collides(grid, np.ones((1, 1), dtype=bool), -1, -1)
    assert not collides(grid, VERTICAL_I, -1, -5)
    assert not collides(grid, VERTICAL_I, 10, -5)
    # once a cell reaches row 0 the walls apply again
    assert collides(grid, VERTICAL_I, -1, -3)
    assert collides(grid, VERTICAL_I, 10, -3)


def test_matches_cellwise_definition(rng):
    grid = GameGrid()
    grid.grid[:] = np.array(
        [[1 if rng.random() < 0.3 else 0 for _ in range(10)] for _ in range(20)],
        dtype=np.int8,
    )
    for entry in CATALOG:
        shape = entry.shape
        for y in range(-3, 21):
            for x in range(-2, 11):
                expected = False
                for r, c in zip(*np.nonzero(shape)):
                    row, col = y + r, x + c
                    if row < 0:
                        continue
                    if not 0 <= col < 10 or row >= 20:
                        expected = True
                    elif row >= 0 and grid.grid[row, col] != 0:
                        expected = True
                assert collides(grid, shape, x, y) is expected
