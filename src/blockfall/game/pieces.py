from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, Tuple

import numpy as np


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    J = 4
    L = 5
    S = 6
    Z = 7


Shape = np.ndarray


def _frozen(rows) -> Shape:
    arr = np.array(rows, dtype=np.bool_)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True)
class CatalogEntry:
    kind: TetrominoType
    shape: Shape


# Spawn order and canonical orientations
CATALOG: Tuple[CatalogEntry, ...] = (
    CatalogEntry(TetrominoType.I, _frozen([[1, 1, 1, 1]])),
    CatalogEntry(TetrominoType.O, _frozen([[1, 1], [1, 1]])),
    CatalogEntry(TetrominoType.T, _frozen([[0, 1, 0], [1, 1, 1]])),
    CatalogEntry(TetrominoType.J, _frozen([[1, 0, 0], [1, 1, 1]])),
    CatalogEntry(TetrominoType.L, _frozen([[0, 0, 1], [1, 1, 1]])),
    CatalogEntry(TetrominoType.S, _frozen([[0, 1, 1], [1, 1, 0]])),
    CatalogEntry(TetrominoType.Z, _frozen([[1, 1, 0], [0, 1, 1]])),
)


def spawn_shape_for(index: int) -> Tuple[TetrominoType, Shape]:
    """Return the kind at ``index`` with a writable copy of its shape."""
    if not 0 <= index < len(CATALOG):
        raise IndexError(f"catalog index out of range: {index}")
    entry = CATALOG[index]
    return entry.kind, entry.shape.copy()


def catalog_index(kind: TetrominoType) -> int:
    return int(kind) - 1


def rotate_shape(shape: Shape) -> Shape:
    """Quarter turn clockwise: transpose, then reverse each row."""
    return shape.T[:, ::-1].copy()


@dataclass
class ActivePiece:
    kind: TetrominoType
    shape: Shape
    x: int
    y: int

    @classmethod
    def spawn(cls, kind: TetrominoType, shape: Shape, board_width: int) -> "ActivePiece":
        width = shape.shape[1]
        return cls(kind=kind, shape=shape, x=board_width // 2 - width // 2, y=0)

    @property
    def width(self) -> int:
        return int(self.shape.shape[1])

    @property
    def height(self) -> int:
        return int(self.shape.shape[0])

    def cells(self, dx: int = 0, dy: int = 0) -> Iterator[Tuple[int, int]]:
        """Yield absolute (row, col) for every filled cell."""
        for r, c in zip(*np.nonzero(self.shape)):
            yield self.y + int(r) + dy, self.x + int(c) + dx
