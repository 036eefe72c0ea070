"""
utils/scaler.py — Fit the 360x640 DotQuest surface into any window.

Everything is drawn once at native resolution, then scaled by a single
uniform factor and centred, leaving bars on the long axis. Pointer
positions travel the other way through to_game().

    scaler = Scaler(window.get_size())
    scaler.present(window, game_surface)
    pos = scaler.to_game(event.pos)
"""

from __future__ import annotations
import pygame

from settings import SCREEN_W, SCREEN_H

_BAR_COLOR = (0, 0, 0)


class Scaler:
    """Maps between window pixels and native game pixels.

    Attributes:
        scale:    Uniform factor from game to window pixels.
        viewport: Window-space rect the scaled game occupies.
    """

    def __init__(self, window_size: tuple[int, int]) -> None:
        self.scale = 1.0
        self.viewport = pygame.Rect(0, 0, SCREEN_W, SCREEN_H)
        self.resize(window_size)

    def resize(self, window_size: tuple[int, int]) -> None:
        """Refit after a VIDEORESIZE or WINDOWSIZECHANGED event."""
        window_w, window_h = (max(1, v) for v in window_size)
        self.scale = min(window_w / SCREEN_W, window_h / SCREEN_H)
        width  = max(1, round(SCREEN_W * self.scale))
        height = max(1, round(SCREEN_H * self.scale))
        self.viewport = pygame.Rect(0, 0, width, height)
        self.viewport.center = (window_w // 2, window_h // 2)

    def present(self, window: pygame.Surface, game_surface: pygame.Surface) -> None:
        """Letterbox game_surface onto the window surface."""
        window.fill(_BAR_COLOR)
        if self.viewport.size == game_surface.get_size():
            window.blit(game_surface, self.viewport)
        else:
            window.blit(pygame.transform.smoothscale(game_surface, self.viewport.size), self.viewport)

    def to_game(self, window_pos: tuple[int, int]) -> tuple[int, int]:
        """Convert a window position to game coordinates.

        Points in the bars map outside 0..SCREEN_W / 0..SCREEN_H;
        check contains() first when that matters.
        """
        x = (window_pos[0] - self.viewport.x) / self.scale
        y = (window_pos[1] - self.viewport.y) / self.scale
        return int(x), int(y)

    def contains(self, window_pos: tuple[int, int]) -> bool:
        return self.viewport.collidepoint(window_pos)
