from __future__ import annotations

import argparse
import logging
from typing import Callable, Dict

import pygame

from blockfall.game import BlockfallGame, GameConfig, GameSnapshot
from .renderer import Renderer


logger = logging.getLogger(__name__)

# held keys keep sending KEYDOWN
KEY_REPEAT_DELAY_MS = 170
KEY_REPEAT_INTERVAL_MS = 50


def _commands(game: BlockfallGame) -> Dict[int, Callable[[], GameSnapshot]]:
    return {
        pygame.K_LEFT: game.move_left,
        pygame.K_RIGHT: game.move_right,
        pygame.K_DOWN: game.soft_drop,
        pygame.K_UP: game.rotate,
        pygame.K_x: game.rotate,
    }


class GravityTimer:
    """Fixed-interval tick source driven by the frame loop's clock."""

    def __init__(self, interval_ms: int) -> None:
        self.interval_ms = interval_ms
        self.running = False
        self.stop_count = 0
        self._last = 0

    def start(self, now: int) -> None:
        self.running = True
        self._last = now

    def stop(self) -> None:
        if not self.running:
            return
        self.running = False
        self.stop_count += 1
        logger.debug("gravity stopped")

    def due(self, now: int) -> bool:
        if not self.running or now - self._last < self.interval_ms:
            return False
        self._last = now
        return True


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Blockfall with the keyboard")
    p.add_argument("--gravity-ms", type=int, default=1000, help="Milliseconds between gravity ticks")
    p.add_argument("--cell-size", type=int, default=25)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p


def run(gravity_ms: int = 1000, cell_size: int = 25, seed: int | None = None) -> None:
    pygame.init()
    try:
        clock = pygame.time.Clock()
        game = BlockfallGame(GameConfig(random_seed=seed))
        renderer = Renderer(cell_size=cell_size)
        screen = pygame.display.set_mode(renderer.window_size(game.grid.height, game.grid.width))
        pygame.display.set_caption("Blockfall")
        pygame.key.set_repeat(KEY_REPEAT_DELAY_MS, KEY_REPEAT_INTERVAL_MS)

        gravity = GravityTimer(gravity_ms)
        game.add_game_over_listener(gravity.stop)
        gravity.start(pygame.time.get_ticks())
        commands = _commands(game)

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_r and game.game_over:
                        game.reset()
                        gravity.start(pygame.time.get_ticks())
                    elif event.key in commands:
                        commands[event.key]()

            if gravity.due(pygame.time.get_ticks()):
                game.tick()

            renderer.draw(screen, game.get_state(), game.snapshot())
            clock.tick(60)
    finally:
        pygame.quit()


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    run(gravity_ms=args.gravity_ms, cell_size=args.cell_size, seed=args.seed)


if __name__ == "__main__":  # pragma: no cover
    main()
