from __future__ import annotations

import random

import pytest

from blockfall.game import BlockfallGame, GameConfig


@pytest.fixture
def game() -> BlockfallGame:
    return BlockfallGame(GameConfig(random_seed=7))


def _drop_until_locked(game: BlockfallGame, limit: int = 100) -> None:
    piece = game.current_piece
    for _ in range(limit):
        if game.current_piece is not piece:
            return
        game.tick()
    raise AssertionError("piece never locked")


@pytest.fixture
def drop_until_locked():
    """Tick until the current piece locks."""
    return _drop_until_locked


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)
