from __future__ import annotations

import numpy as np

from .grid import GameGrid
from .pieces import Shape


def collides(grid: GameGrid, shape: Shape, x: int, y: int, dx: int = 0, dy: int = 0) -> bool:
    """Return True if ``shape`` placed at (x + dx, y + dy) is blocked.

    Side walls, the floor and locked cells block. Cells above the top edge
    never do, not even past a side wall, so pieces may spawn or turn partly
    outside the visible board.
    """
    for r, c in zip(*np.nonzero(shape)):
        row = y + int(r) + dy
        col = x + int(c) + dx
        if row < 0:
            continue
        if col < 0 or col >= grid.width or row >= grid.height:
            return True
        if grid.is_occupied(row, col):
            return True
    return False
