from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
import pygame

from bricks.game import SHAPES, GameSession, SessionState, TetrominoType
from bricks.game.pieces import landing


def color_for_value(v: int) -> Tuple[int, int, int]:
    palette = {
        0: (20, 20, 26),
        1: (0, 240, 240),  # I
        2: (240, 240, 0),  # O
        3: (160, 0, 240),  # T
        4: (0, 240, 0),    # S
        5: (240, 0, 0),    # Z
        6: (0, 0, 240),    # J
        7: (240, 160, 0),  # L
    }
    return palette.get(abs(v), (200, 200, 200))


class Renderer:
    def __init__(self, cell_size: int = 30, margin: int = 20, panel_cells: int = 6) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_width = panel_cells * cell_size
        self._font: Optional[pygame.font.Font] = None
        self._big_font: Optional[pygame.font.Font] = None

    def window_size(self, session: GameSession) -> Tuple[int, int]:
        w = session.grid.width * self.cell_size
        h = session.grid.height * self.cell_size
        return self.margin * 3 + w + self.panel_width, self.margin * 2 + h

    def _fonts(self) -> Tuple[pygame.font.Font, pygame.font.Font]:
        if self._font is None or self._big_font is None:
            self._font = pygame.font.SysFont(None, 26)
            self._big_font = pygame.font.SysFont(None, 44)
        return self._font, self._big_font

    def _grid_surface(self, state: np.ndarray) -> pygame.Surface:
        h, w = state.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill((30, 30, 36))
        for y in range(h):
            for x in range(w):
                rect = pygame.Rect(
                    x * self.cell_size,
                    y * self.cell_size,
                    self.cell_size - 1,
                    self.cell_size - 1,
                )
                pygame.draw.rect(surf, color_for_value(int(state[y, x])), rect)
        return surf

    def _draw_ghost(self, surf: pygame.Surface, session: GameSession) -> None:
        if session.piece is None or session.state != SessionState.ACTIVE:
            return
        ghost = landing(session.grid, session.piece)
        color = color_for_value(int(ghost.kind))
        top = session.grid.height - 1
        for x, y in ghost.cells():
            if 0 <= y < session.grid.height:
                rect = pygame.Rect(x * self.cell_size, (top - y) * self.cell_size,
                                   self.cell_size - 1, self.cell_size - 1)
                pygame.draw.rect(surf, color, rect, width=2)

    def _draw_panel(self, screen: pygame.Surface, session: GameSession) -> None:
        font, _ = self._fonts()
        x0 = self.margin * 2 + session.grid.width * self.cell_size
        y = self.margin
        for label, value in (("Score", session.score), ("Lines", session.lines), ("Level", session.level)):
            screen.blit(font.render(f"{label}: {value}", True, (230, 230, 230)), (x0, y))
            y += 30
        y += 10
        screen.blit(font.render("Next", True, (230, 230, 230)), (x0, y))
        y += 30
        if session.next_kind is not None:
            self._draw_preview(screen, session.next_kind, x0, y)

    def _draw_preview(self, screen: pygame.Surface, kind: TetrominoType, x0: int, y0: int) -> None:
        size = self.cell_size * 3 // 4
        cells = SHAPES[kind].cells(0)
        max_y = max(dy for _, dy in cells)
        min_x = min(dx for dx, _ in cells)
        for dx, dy in cells:
            rect = pygame.Rect(x0 + (dx - min_x) * size, y0 + (max_y - dy) * size, size - 1, size - 1)
            pygame.draw.rect(screen, color_for_value(int(kind)), rect)

    def _draw_banner(self, screen: pygame.Surface, session: GameSession, lines: Tuple[str, ...]) -> None:
        font, big = self._fonts()
        cx = self.margin + session.grid.width * self.cell_size // 2
        cy = screen.get_height() // 2
        for i, text in enumerate(lines):
            f = big if i == 0 else font
            rendered = f.render(text, True, (255, 255, 255))
            screen.blit(rendered, rendered.get_rect(center=(cx, cy + i * 40)))

    def draw(self, screen: pygame.Surface, session: GameSession) -> None:
        grid_surf = self._grid_surface(session.get_state())
        self._draw_ghost(grid_surf, session)
        screen.fill((10, 10, 14))
        screen.blit(grid_surf, (self.margin, self.margin))
        self._draw_panel(screen, session)
        if session.state == SessionState.HOME:
            self._draw_banner(screen, session, ("BRICKS", f"Start level: {session.start_level}", "Enter to play"))
        elif session.state == SessionState.PAUSED:
            self._draw_banner(screen, session, ("Paused", "P to resume", "Enter to restart"))
        elif session.state == SessionState.GAME_OVER:
            self._draw_banner(screen, session, ("Game Over", f"Score {session.score}", "Enter to restart"))
        pygame.display.flip()
