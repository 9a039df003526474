"""Game module for Blockfall.

Exports the core game engine and supporting classes:
- GameGrid: Board of locked cells and line clearing
- ActivePiece: The falling piece and its position
- TetrominoType: Enum of the seven piece kinds
- collides: Collision test for a shape at a board position
- ScoringRules: Points awarded per cleared line
- BlockfallGame: Spawn, fall, lock and clear cycle
"""

from .grid import GameGrid, format_grid
from .pieces import CATALOG, ActivePiece, TetrominoType, rotate_shape, spawn_shape_for
from .collision import collides
from .rules import ScoringRules
from .core import Action, BlockfallGame, GameConfig, GameSnapshot, GameStatus

__all__ = [
    "GameGrid",
    "format_grid",
    "CATALOG",
    "ActivePiece",
    "TetrominoType",
    "rotate_shape",
    "spawn_shape_for",
    "collides",
    "ScoringRules",
    "Action",
    "BlockfallGame",
    "GameConfig",
    "GameSnapshot",
    "GameStatus",
]
