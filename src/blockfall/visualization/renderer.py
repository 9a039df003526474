from __future__ import annotations

from typing import Optional

import numpy as np
import pygame

from blockfall.game import GameSnapshot
from .palette import color_for_value


class Renderer:
    def __init__(self, cell_size: int = 25, margin: int = 20) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self._font: Optional[pygame.font.Font] = None

    def window_size(self, rows: int, cols: int) -> tuple[int, int]:
        # extra strip under the board for the score line
        return cols * self.cell_size + self.margin * 2, rows * self.cell_size + self.margin * 3 + 24

    def _grid_surface(self, state: np.ndarray) -> pygame.Surface:
        h, w = state.shape
        width = w * self.cell_size
        height = h * self.cell_size
        surf = pygame.Surface((width, height))
        surf.fill((30, 30, 36))
        for y in range(h):
            for x in range(w):
                color = color_for_value(int(state[y, x]))
                rect = pygame.Rect(
                    x * self.cell_size,
                    y * self.cell_size,
                    self.cell_size - 1,
                    self.cell_size - 1,
                )
                pygame.draw.rect(surf, color, rect)
        return surf

    def _text(self, text: str) -> pygame.Surface:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 28)
        return self._font.render(text, True, (255, 255, 255))

    def draw(self, screen: pygame.Surface, state: np.ndarray, snapshot: GameSnapshot) -> None:
        grid_surf = self._grid_surface(state)
        screen.fill((10, 10, 14))
        screen.blit(grid_surf, (self.margin, self.margin))
        score_y = self.margin * 2 + grid_surf.get_height()
        screen.blit(self._text(f"Score: {snapshot.score}"), (self.margin, score_y))
        if snapshot.game_over:
            banner = self._text("GAME OVER - R to restart")
            rect = banner.get_rect(center=(screen.get_width() // 2, screen.get_height() // 2))
            screen.blit(banner, rect)
        pygame.display.flip()
