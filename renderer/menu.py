"""
renderer/menu.py — Main menu screen for DotQuest.

Layout, top to bottom:
    - Title
    - Three stat cards: total stars, current level, best streak
    - "Continue Level N" primary button
    - Level picker: a paged row of level circles, page 0 ending at the frontier
    - Mode grid: Daily, Infinite, Practice, Difficulty, Theme,
      Achievements, Leaderboard

The menu keeps no state of its own. draw_menu() takes a MenuModel
snapshot and returns the hit rects of every button; game.py decides
what a click on each key means. Level circles are keyed "level:<n>";
the picker arrows are "page:older" and "page:newer".
"""

from __future__ import annotations
from dataclasses import dataclass

import pygame

from core.progress import GameProgress
from core.themes import theme_by_id
from renderer.shapes import draw_button, draw_panel, draw_text
from settings import (
    SCREEN_W, TITLE,
    COLOR, LEVEL_PICKER_COUNT,
    FONT_SIZE_XL, FONT_SIZE_LG, FONT_SIZE_MD, FONT_SIZE_SM,
)
from utils.color import RGBColor, hex_to_rgb

_MARGIN = 16
_GAP    = 10


@dataclass
class MenuModel:
    """Everything the menu shows, read from the services each frame."""
    progress:           GameProgress
    total_stars:        int
    achievements_done:  int
    achievements_total: int
    picker_page:        int = 0


def level_picker_pages(current_level: int) -> int:
    """Number of pages needed to reach every level from 1 to the frontier."""
    last = max(current_level, LEVEL_PICKER_COUNT)
    return (last + LEVEL_PICKER_COUNT - 1) // LEVEL_PICKER_COUNT


def level_picker_range(current_level: int, page: int = 0) -> range:
    """Return the level numbers shown on one page of the picker row.

    Page 0 ends at the frontier (or at LEVEL_PICKER_COUNT for new
    players); each higher page steps LEVEL_PICKER_COUNT levels back.
    The oldest page may hold fewer levels.

    Raises:
        ValueError: If page is outside 0 .. level_picker_pages() - 1.
    """
    if not 0 <= page < level_picker_pages(current_level):
        raise ValueError(f"Picker page {page} out of range for level {current_level}")
    last = max(current_level, LEVEL_PICKER_COUNT) - page * LEVEL_PICKER_COUNT
    first = max(1, last - LEVEL_PICKER_COUNT + 1)
    return range(first, last + 1)


def _stat_card(surface: pygame.Surface, rect: pygame.Rect, value: str, title: str, color: RGBColor) -> None:
    draw_panel(surface, rect, COLOR["panel"])
    pygame.draw.circle(surface, color, (rect.centerx, rect.y + 14), 6)
    draw_text(surface, value, FONT_SIZE_LG, COLOR["text"], center=(rect.centerx, rect.y + 36))
    draw_text(surface, title, FONT_SIZE_SM, COLOR["text_muted"], center=(rect.centerx, rect.y + 58))


def _draw_level_picker(
    surface: pygame.Surface,
    progress: GameProgress,
    palette: dict[str, RGBColor],
    top: int,
    page: int = 0,
) -> dict[str, pygame.Rect]:
    buttons = {}
    draw_text(surface, "Select Level", FONT_SIZE_MD, palette["primary"], topleft=(_MARGIN, top))

    # "<" pages back toward level 1, ">" forward toward the frontier
    if page < level_picker_pages(progress.current_level) - 1:
        rect = pygame.Rect(SCREEN_W - _MARGIN - 76, top - 6, 34, 28)
        buttons["page:older"] = draw_button(surface, rect, "<", COLOR["panel"],
                                            text_color=palette["primary"], size=FONT_SIZE_LG)
    if page > 0:
        rect = pygame.Rect(SCREEN_W - _MARGIN - 34, top - 6, 34, 28)
        buttons["page:newer"] = draw_button(surface, rect, ">", COLOR["panel"],
                                            text_color=palette["primary"], size=FONT_SIZE_LG)

    levels = level_picker_range(progress.current_level, page)
    slot = (SCREEN_W - 2 * _MARGIN) // LEVEL_PICKER_COUNT
    cy = top + 50
    for i, number in enumerate(levels):
        cx = _MARGIN + slot * i + slot // 2
        current = number == progress.current_level
        fill = palette["primary"] if current else COLOR["panel"]
        pygame.draw.circle(surface, fill, (cx, cy), 25)
        text_color = COLOR["text_light"] if current else COLOR["text"]
        if number in progress.completed_levels:
            pygame.draw.lines(surface, COLOR["text_light"] if current else palette["primary"], False,
                              [(cx - 9, cy), (cx - 3, cy + 7), (cx + 10, cy - 8)], 4)
        else:
            draw_text(surface, str(number), FONT_SIZE_LG, text_color, center=(cx, cy))
        draw_text(surface, f"Level {number}", FONT_SIZE_SM, COLOR["text_muted"], center=(cx, cy + 36))
        buttons[f"level:{number}"] = pygame.Rect(cx - 25, cy - 25, 50, 50)
    return buttons


def draw_menu(
    surface: pygame.Surface,
    model: MenuModel,
    palette: dict[str, RGBColor],
    hover: tuple[int, int] | None = None,
) -> dict[str, pygame.Rect]:
    """Draw the full main menu and return its buttons.

    Args:
        surface: Native 360x640 game surface.
        model:   Snapshot of player state to display.
        palette: Active theme colours.
        hover:   Mouse position in game coordinates, for hover lift.

    Returns:
        Button name → rect. Keys: "continue", "level:<n>", "page:older",
        "page:newer" (when there is a page that way), "daily",
        "infinite", "practice", "difficulty", "theme", "achievements",
        "leaderboard".
    """
    progress = model.progress
    surface.fill(palette["background"])
    cx = SCREEN_W // 2
    draw_text(surface, TITLE, FONT_SIZE_XL, palette["primary"], center=(cx, 32))

    # ── Stats ─────────────────────────────────────────────────────────────────
    card_w = (SCREEN_W - 2 * _MARGIN - 2 * _GAP) // 3
    stats = (
        (str(model.total_stars),            "Total Stars", COLOR["star"]),
        (str(progress.current_level),       "Level",       palette["secondary"]),
        (str(progress.best_streak),         "Best Streak", COLOR["streak"]),
    )
    for i, (value, title, color) in enumerate(stats):
        rect = pygame.Rect(_MARGIN + i * (card_w + _GAP), 60, card_w, 72)
        _stat_card(surface, rect, value, title, color)

    buttons: dict[str, pygame.Rect] = {}

    def button(key: str, rect: pygame.Rect, label: str, color: RGBColor,
               text_color: RGBColor = COLOR["text_light"], size: int = FONT_SIZE_MD) -> None:
        hovered = hover is not None and rect.collidepoint(hover)
        buttons[key] = draw_button(surface, rect, label, color, text_color=text_color,
                                   hovered=hovered, size=size)

    # ── Continue ──────────────────────────────────────────────────────────────
    button("continue", pygame.Rect(_MARGIN, 146, SCREEN_W - 2 * _MARGIN, 56),
           f"Continue Level {progress.current_level}", palette["primary"], size=FONT_SIZE_LG)

    buttons.update(_draw_level_picker(surface, progress, palette, top=218, page=model.picker_page))

    # ── Mode grid ─────────────────────────────────────────────────────────────
    half_w = (SCREEN_W - 2 * _MARGIN - _GAP) // 2
    row_h  = 50
    top    = 334

    def cell(col: int, row: int, span: int = 1) -> pygame.Rect:
        w = half_w if span == 1 else SCREEN_W - 2 * _MARGIN
        return pygame.Rect(_MARGIN + col * (half_w + _GAP), top + row * (row_h + _GAP + 4), w, row_h)

    daily_label = "Daily: Done" if progress.daily_challenge_completed else "Daily Challenge"
    button("daily", cell(0, 0), daily_label, hex_to_rgb("#F39C12"))
    button("infinite", cell(1, 0), f"Infinite ({progress.best_streak})", hex_to_rgb("#9B59B6"))
    button("practice", cell(0, 1), f"Practice ({len(progress.completed_levels)})", hex_to_rgb("#27AE60"))
    button("difficulty", cell(1, 1), progress.difficulty.value, hex_to_rgb(progress.difficulty.color))
    button("theme", cell(0, 2), theme_by_id(progress.selected_theme).name, palette["secondary"],
           size=FONT_SIZE_SM + 2)
    button("achievements", cell(1, 2),
           f"Awards {model.achievements_done}/{model.achievements_total}",
           COLOR["panel"], text_color=palette["primary"])
    button("leaderboard", cell(0, 3, span=2), "Leaderboard", COLOR["panel"],
           text_color=palette["primary"])
    return buttons
