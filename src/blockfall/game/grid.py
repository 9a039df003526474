from __future__ import annotations

import numpy as np

from .pieces import Shape


EMPTY = 0


class GameGrid:
    """Fixed-size board of locked cells.

    The grid uses 0 for empty cells and the tetromino kind value (1-7) for
    occupied ones. Rows grow downwards, row 0 is the top of the board.
    """

    def __init__(self, width: int = 10, height: int = 20) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"board dimensions must be positive, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(EMPTY)

    def is_inside(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def is_occupied(self, row: int, col: int) -> bool:
        """False for positions off the board."""
        if not self.is_inside(row, col):
            return False
        return bool(self.grid[row, col] != EMPTY)

    def lock(self, shape: Shape, origin_x: int, origin_y: int, kind: int) -> None:
        """Write every filled cell of ``shape`` as ``kind``.

        Cells above the top edge are dropped. Anything else outside the board
        is rejected before the grid is touched.
        """
        rows, cols = np.nonzero(shape)
        rows = rows + origin_y
        cols = cols + origin_x
        visible = rows >= 0
        rows, cols = rows[visible], cols[visible]
        if rows.size and (rows.max() >= self.height or cols.min() < 0 or cols.max() >= self.width):
            raise ValueError(f"piece at ({origin_x}, {origin_y}) does not fit the board")
        self.grid[rows, cols] = int(kind)

    def _row_full(self, row: int) -> bool:
        return bool(np.all(self.grid[row] != EMPTY))

    def clear_full_rows(self) -> int:
        cleared = 0
        row = self.height - 1
        while row >= 0:
            if self._row_full(row):
                cleared += 1
                self.grid[1 : row + 1] = self.grid[0:row].copy()
                self.grid[0] = EMPTY
                # the row shifted into this index may be full as well
                continue
            row -= 1
        return cleared

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()


def format_grid(state: np.ndarray) -> str:
    """Text rendering: locked cells as '█', the falling piece as '▒'."""
    lines = []
    for row in state:
        lines.append("".join("▒" if v < 0 else "█" if v > 0 else "·" for v in row))
    return "\n".join(lines)
