"""
renderer/shapes.py — Drawing primitives shared by every DotQuest screen.

Buttons and cards use a raised look: a face rect sitting on a darker
"lip" a few pixels below it, so pressable things read as 3D without
images. Everything is pygame.draw calls plus the cached default font.

Coordinate system: native 360x640 game space. Scaler handles the rest.
"""

from __future__ import annotations
import math
import pygame

from settings import COLOR
from utils.color import RGBColor, darker, lighter, with_alpha

_LIP = 4            # px of darker edge under raised shapes
_RADIUS = 14

# ── Fonts ─────────────────────────────────────────────────────────────────────
_fonts: dict[int, pygame.font.Font] = {}


def font(size: int) -> pygame.font.Font:
    """Return a cached default-face font at the given pixel size."""
    if size not in _fonts:
        if not pygame.font.get_init():
            pygame.font.init()
        _fonts[size] = pygame.font.Font(None, size)
    return _fonts[size]


def draw_text(
    surface: pygame.Surface,
    text: str,
    size: int,
    color: RGBColor,
    center: tuple[int, int] | None = None,
    topleft: tuple[int, int] | None = None,
    topright: tuple[int, int] | None = None,
) -> pygame.Rect:
    """Render text anchored at exactly one of center/topleft/topright.

    Returns:
        The rect the text occupies.
    """
    rendered = font(size).render(text, True, color)
    if center is not None:
        rect = rendered.get_rect(center=center)
    elif topright is not None:
        rect = rendered.get_rect(topright=topright)
    else:
        rect = rendered.get_rect(topleft=topleft or (0, 0))
    surface.blit(rendered, rect)
    return rect


# ── Panels & buttons ──────────────────────────────────────────────────────────

def draw_panel(
    surface: pygame.Surface,
    rect: pygame.Rect,
    color: RGBColor = COLOR["panel"],
    border_color: RGBColor | None = None,
    radius: int = _RADIUS,
) -> None:
    """Draw a flat rounded card."""
    pygame.draw.rect(surface, color, rect, border_radius=radius)
    if border_color is not None:
        pygame.draw.rect(surface, border_color, rect, 2, border_radius=radius)


def draw_button(
    surface: pygame.Surface,
    rect: pygame.Rect,
    label: str,
    color: RGBColor,
    text_color: RGBColor = COLOR["text_light"],
    hovered: bool = False,
    enabled: bool = True,
    size: int = 22,
) -> pygame.Rect:
    """Draw a raised button and return its hit rect.

    Hovering lifts the face; disabled buttons are drawn flat and muted.
    """
    if not enabled:
        draw_panel(surface, rect, lighter(color, 90))
        draw_text(surface, label, size, COLOR["text_muted"], center=rect.center)
        return rect

    face = lighter(color, 20) if hovered else color
    lip_rect = rect.move(0, _LIP)
    pygame.draw.rect(surface, darker(color, 50), lip_rect, border_radius=_RADIUS)
    pygame.draw.rect(surface, face, rect, border_radius=_RADIUS)
    draw_text(surface, label, size, text_color, center=rect.center)
    return rect


# ── Bars ──────────────────────────────────────────────────────────────────────

def draw_progress_bar(
    surface: pygame.Surface,
    rect: pygame.Rect,
    fill: float,
    fill_color: RGBColor,
    bg_color: RGBColor = COLOR["panel_border"],
) -> None:
    """Draw a rounded bar filled left-to-right by fill in [0.0, 1.0]."""
    fill = max(0.0, min(1.0, fill))
    radius = rect.h // 2
    pygame.draw.rect(surface, bg_color, rect, border_radius=radius)
    filled_w = int(rect.w * fill)
    if filled_w > 0:
        pygame.draw.rect(surface, fill_color, (rect.x, rect.y, filled_w, rect.h), border_radius=radius)


# ── Stars ─────────────────────────────────────────────────────────────────────

def star_points(cx: float, cy: float, outer: float, inner: float | None = None) -> list[tuple[float, float]]:
    """Return the ten vertices of a five-pointed star, top point first."""
    inner = inner if inner is not None else outer * 0.45
    points = []
    for i in range(10):
        radius = outer if i % 2 == 0 else inner
        angle = -math.pi / 2 + i * math.pi / 5
        points.append((cx + radius * math.cos(angle), cy + radius * math.sin(angle)))
    return points


def draw_star(
    surface: pygame.Surface,
    center: tuple[int, int],
    radius: int,
    filled: bool,
    color: RGBColor = COLOR["star"],
) -> None:
    """Draw a gold star, or a grey outline for an unearned one."""
    points = star_points(center[0], center[1], radius)
    if filled:
        pygame.draw.polygon(surface, color, points)
    else:
        pygame.draw.polygon(surface, COLOR["panel_border"], points, 2)


def draw_dim(surface: pygame.Surface, alpha: int = 102) -> None:
    """Darken the whole screen behind a modal overlay."""
    overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
    overlay.fill(with_alpha(COLOR["overlay"], alpha))
    surface.blit(overlay, (0, 0))
