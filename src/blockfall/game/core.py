from __future__ import annotations

import logging
import random
import threading
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Callable, List, Optional

import numpy as np

from .collision import collides
from .grid import GameGrid
from .pieces import CATALOG, ActivePiece, TetrominoType, catalog_index, rotate_shape, spawn_shape_for
from .rules import ScoringRules


logger = logging.getLogger(__name__)


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    SOFT_DROP = 2
    ROTATE = 3
    NONE = 4


class GameStatus(Enum):
    RUNNING = "running"
    GAME_OVER = "game_over"


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    random_seed: Optional[int] = None


@dataclass(frozen=True)
class GameSnapshot:
    """Everything a renderer needs after a command."""

    board: np.ndarray
    piece_kind: Optional[TetrominoType]
    piece_shape: Optional[np.ndarray]
    piece_x: int
    piece_y: int
    score: int
    lines_cleared_total: int
    game_over: bool


class BlockfallGame:
    """One game session: board, falling piece, score and status.

    Commands (``tick``, ``move_left``, ``move_right``, ``soft_drop``,
    ``rotate``) never raise during play. A blocked move or rotation leaves the
    piece where it was; callers see the outcome in the returned snapshot. Once
    a freshly spawned piece collides the session is over and every command
    becomes a no-op until ``reset``.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = rng or random.Random(self.config.random_seed)
        self.grid = GameGrid(self.config.width, self.config.height)
        self.score = 0
        self.lines_cleared_total = 0
        self.status = GameStatus.RUNNING
        self.current_piece: Optional[ActivePiece] = None
        self._lock = threading.RLock()
        self._game_over_listeners: List[Callable[[], None]] = []
        self._game_over_fired = False
        self.reset()

    @property
    def game_over(self) -> bool:
        return self.status is GameStatus.GAME_OVER

    def add_game_over_listener(self, callback: Callable[[], None]) -> None:
        """Register ``callback`` to run once when the session ends."""
        with self._lock:
            self._game_over_listeners.append(callback)

    def reset(self) -> GameSnapshot:
        with self._lock:
            self.grid.reset()
            self.score = 0
            self.lines_cleared_total = 0
            self.status = GameStatus.RUNNING
            self._game_over_fired = False
            self.spawn()
            return self.snapshot()

    # --- piece lifecycle ---

    def spawn(self, kind: Optional[TetrominoType] = None) -> bool:
        """Put a new piece at the top centre.

        Picks a kind uniformly at random unless ``kind`` is given. Returns
        False and ends the game if the piece collides where it appears.
        """
        with self._lock:
            if self.game_over:
                return False
            if kind is None:
                index = self.rng.randrange(len(CATALOG))
            else:
                index = catalog_index(kind)
            kind, shape = spawn_shape_for(index)
            piece = ActivePiece.spawn(kind, shape, self.grid.width)
            if collides(self.grid, piece.shape, piece.x, piece.y):
                self.current_piece = None
                self._end_game()
                return False
            self.current_piece = piece
            logger.debug("spawned %s at (%d, %d)", kind.name, piece.x, piece.y)
            return True

    def move(self, dx: int, dy: int) -> bool:
        with self._lock:
            piece = self.current_piece
            if self.game_over or piece is None:
                return False
            if collides(self.grid, piece.shape, piece.x, piece.y, dx, dy):
                return False
            piece.x += dx
            piece.y += dy
            return True

    def _rotate(self) -> bool:
        piece = self.current_piece
        if self.game_over or piece is None:
            return False
        rotated = rotate_shape(piece.shape)
        if collides(self.grid, rotated, piece.x, piece.y):
            return False
        piece.shape = rotated
        return True

    def _fall(self) -> None:
        piece = self.current_piece
        if self.game_over or piece is None:
            return
        if not self.move(0, 1):
            self._lock_piece()

    def _lock_piece(self) -> int:
        piece = self.current_piece
        assert piece is not None
        self.grid.lock(piece.shape, piece.x, piece.y, int(piece.kind))
        logger.debug("locked %s at (%d, %d)", piece.kind.name, piece.x, piece.y)
        lines = self.grid.clear_full_rows()
        if lines > 0:
            self.lines_cleared_total += lines
            self.score += self.rules.score_for_lines(lines)
            logger.info("cleared %d line(s), score %d", lines, self.score)
        self.current_piece = None
        self.spawn()
        return lines

    def _end_game(self) -> None:
        self.status = GameStatus.GAME_OVER
        logger.info("game over, final score %d", self.score)
        if self._game_over_fired:
            return
        self._game_over_fired = True
        for callback in list(self._game_over_listeners):
            callback()

    # --- commands ---

    def tick(self) -> GameSnapshot:
        """Gravity: move down one row, or lock when blocked."""
        with self._lock:
            self._fall()
            return self.snapshot()

    def move_left(self) -> GameSnapshot:
        with self._lock:
            self.move(-1, 0)
            return self.snapshot()

    def move_right(self) -> GameSnapshot:
        with self._lock:
            self.move(1, 0)
            return self.snapshot()

    def soft_drop(self) -> GameSnapshot:
        with self._lock:
            self._fall()
            return self.snapshot()

    def rotate(self) -> GameSnapshot:
        with self._lock:
            self._rotate()
            return self.snapshot()

    def step(self, action: Action) -> GameSnapshot:
        if action == Action.LEFT:
            return self.move_left()
        elif action == Action.RIGHT:
            return self.move_right()
        elif action == Action.SOFT_DROP:
            return self.soft_drop()
        elif action == Action.ROTATE:
            return self.rotate()
        return self.snapshot()

    # --- observation ---

    def snapshot(self) -> GameSnapshot:
        with self._lock:
            piece = self.current_piece
            return GameSnapshot(
                board=self.grid.clone_state(),
                piece_kind=piece.kind if piece is not None else None,
                piece_shape=piece.shape.copy() if piece is not None else None,
                piece_x=piece.x if piece is not None else 0,
                piece_y=piece.y if piece is not None else 0,
                score=self.score,
                lines_cleared_total=self.lines_cleared_total,
                game_over=self.game_over,
            )

    def get_state(self) -> np.ndarray:
        """Board copy with the falling piece written in as ``-kind``.

        Piece cells above the top edge are left out.
        """
        with self._lock:
            state = self.grid.clone_state()
            piece = self.current_piece
            if piece is not None and not self.game_over:
                for row, col in piece.cells():
                    if self.grid.is_inside(row, col):
                        state[row, col] = -int(piece.kind)
            return state
