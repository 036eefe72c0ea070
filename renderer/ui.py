"""
renderer/ui.py — In-game chrome and secondary screens for DotQuest.

Draws everything that is not the board or the main menu:
    - Level header (back button, level number, type badge, score)
    - Status row (countdown or moves left, path progress)
    - Clear-path button
    - Result overlay (level complete / level failed)
    - Achievements screen
    - Leaderboard screen

All functions are stateless. Each one that draws pressable things
returns a dict of button name → pygame.Rect, which game.py keeps for
hit detection on the next click.

Coordinate system: native 360x640 game space.
"""

from __future__ import annotations
import pygame

from core.achievements import Achievement, LeaderboardEntry
from core.levels import LevelType
from core.session import LevelSession, Status
from renderer.shapes import (
    draw_button, draw_dim, draw_panel, draw_progress_bar, draw_star, draw_text,
)
from settings import (
    SCREEN_W, SCREEN_H,
    HEADER_H, HUD_H, BUTTON_H,
    COLOR,
    FONT_SIZE_XL, FONT_SIZE_LG, FONT_SIZE_MD, FONT_SIZE_SM,
)
from utils.color import RGBColor, with_alpha

Buttons = dict[str, pygame.Rect]

_TYPE_LABELS = {
    LevelType.TIMED:    "Timed",
    LevelType.LIMITED:  "Limited Moves",
    LevelType.SURVIVAL: "Survival",
    LevelType.PUZZLE:   "Puzzle",
}

_MARGIN = 16
_LIST_ROWS = 8


def _hovered(rect: pygame.Rect, hover: tuple[int, int] | None) -> bool:
    return hover is not None and rect.collidepoint(hover)


def draw_back_button(surface: pygame.Surface, palette: dict[str, RGBColor]) -> pygame.Rect:
    """Draw the "<" back chevron in the top-left corner."""
    rect = pygame.Rect(8, 14, 44, 44)
    x, y = rect.center
    pygame.draw.lines(surface, palette["primary"], False,
                      [(x + 6, y - 11), (x - 5, y), (x + 6, y + 11)], 4)
    return rect


# ── Playing screen ────────────────────────────────────────────────────────────

def draw_level_header(
    surface: pygame.Surface,
    session: LevelSession,
    palette: dict[str, RGBColor],
) -> Buttons:
    """Draw the header: back button, level title, type badge and score."""
    buttons: Buttons = {"back": draw_back_button(surface, palette)}
    level = session.level
    cx = SCREEN_W // 2

    draw_text(surface, f"Level {level.number}", FONT_SIZE_LG, palette["primary"], center=(cx, 24))

    label = _TYPE_LABELS.get(level.level_type)
    if label:
        badge = draw_text(surface, label, FONT_SIZE_SM, palette["secondary"], center=(cx, 44))
        pygame.draw.rect(surface, palette["secondary"], badge.inflate(12, 4), 1, border_radius=8)

    draw_text(surface, f"Score: {session.score}", FONT_SIZE_SM, COLOR["text_muted"],
              topright=(SCREEN_W - _MARGIN, 20))
    draw_text(surface, level.difficulty.value, FONT_SIZE_SM, COLOR["text_muted"],
              topright=(SCREEN_W - _MARGIN, 38))
    return buttons


def draw_status_row(
    surface: pygame.Surface,
    session: LevelSession,
    palette: dict[str, RGBColor],
) -> None:
    """Draw countdown and moves on the left, path progress on the right.

    Timed LIMITED levels show both, moves to the right of the countdown.
    """
    level = session.level
    y = HEADER_H + 6
    x = _MARGIN

    seconds = session.time_remaining()
    if seconds is not None:
        color = COLOR["fail"] if seconds < 10 else palette["primary"]
        rect = draw_text(surface, f"Time {seconds}s", FONT_SIZE_MD, color, topleft=(x, y))
        x = rect.right + 14

    moves = session.moves_remaining
    if moves is not None:
        color = COLOR["fail"] if moves < 2 else palette["primary"]
        draw_text(surface, f"Moves {moves}", FONT_SIZE_MD, color, topleft=(x, y))

    count = len(session.board.path)
    required = level.required_connections
    done = count >= required
    color = COLOR["pass"] if done else palette["primary"]
    draw_text(surface, f"{count} / {required}", FONT_SIZE_MD, color,
              topright=(SCREEN_W - _MARGIN, y))

    bar = pygame.Rect(_MARGIN, HEADER_H + HUD_H - 14, SCREEN_W - 2 * _MARGIN, 8)
    draw_progress_bar(surface, bar, count / required, color)

    if seconds is not None:
        timer_bar = pygame.Rect(_MARGIN, HEADER_H + HUD_H - 2, SCREEN_W - 2 * _MARGIN, 4)
        draw_progress_bar(surface, timer_bar, session.timer.fill(), COLOR["fail"])


def draw_clear_button(
    surface: pygame.Surface,
    session: LevelSession,
    palette: dict[str, RGBColor],
    hover: tuple[int, int] | None = None,
) -> Buttons:
    """Draw the "Clear Path" button, disabled while the path is empty."""
    rect = pygame.Rect(_MARGIN * 3, SCREEN_H - BUTTON_H - 28, SCREEN_W - _MARGIN * 6, BUTTON_H)
    enabled = bool(session.board.path) and session.status is Status.PLAYING
    draw_button(surface, rect, "Clear Path", palette["secondary"],
                hovered=_hovered(rect, hover), enabled=enabled)
    return {"clear": rect} if enabled else {}


def draw_flash(surface: pygame.Surface, color: RGBColor, alpha: float) -> None:
    """Tint the screen for pass/fail feedback; alpha fades 1.0 → 0.0."""
    if alpha <= 0.0:
        return
    overlay = pygame.Surface((SCREEN_W, SCREEN_H), pygame.SRCALPHA)
    overlay.fill(with_alpha(color, int(alpha * 90)))
    surface.blit(overlay, (0, 0))


# ── Result overlay ────────────────────────────────────────────────────────────

def draw_result(
    surface: pygame.Surface,
    session: LevelSession,
    has_next: bool,
    palette: dict[str, RGBColor],
    unlocked: list[str] | None = None,
    hover: tuple[int, int] | None = None,
) -> Buttons:
    """Draw the level complete / level failed modal.

    Args:
        surface:  Native game surface.
        session:  Finished session (COMPLETE or FAILED).
        has_next: True if the mode offers a following level.
        palette:  Active theme colours.
        unlocked: Titles of achievements unlocked by this win.
        hover:    Mouse position for button hover.

    Returns:
        Buttons: "next" or "retry", plus "menu".
    """
    draw_dim(surface)
    card = pygame.Rect(28, 150, SCREEN_W - 56, 330)
    draw_panel(surface, card, palette["background"])
    cx = SCREEN_W // 2
    buttons: Buttons = {}

    if session.status is Status.COMPLETE:
        draw_text(surface, "Level Complete!", FONT_SIZE_XL, palette["primary"], center=(cx, card.y + 40))
        for i in range(3):
            draw_star(surface, (cx - 50 + i * 50, card.y + 95), 20, filled=i < session.stars)
        draw_text(surface, f"Score: {session.score}", FONT_SIZE_LG, COLOR["text"],
                  center=(cx, card.y + 145))
        for i, title in enumerate((unlocked or [])[:2]):
            draw_text(surface, f"Unlocked: {title}", FONT_SIZE_SM, palette["secondary"],
                      center=(cx, card.y + 172 + i * 18))
        primary_key, primary_label = ("next", "Next Level") if has_next else (None, None)
    else:
        title = "Time's Up!" if session.fail_reason == "time" else "Out of Moves"
        draw_text(surface, title, FONT_SIZE_XL, COLOR["fail"], center=(cx, card.y + 50))
        draw_text(surface, f"Level {session.level.number}", FONT_SIZE_MD, COLOR["text_muted"],
                  center=(cx, card.y + 95))
        primary_key, primary_label = "retry", "Try Again"

    btn_w = card.w - 48
    if primary_key:
        rect = pygame.Rect(card.x + 24, card.bottom - 2 * BUTTON_H - 36, btn_w, BUTTON_H)
        buttons[primary_key] = draw_button(surface, rect, primary_label, palette["primary"],
                                           hovered=_hovered(rect, hover))
    rect = pygame.Rect(card.x + 24, card.bottom - BUTTON_H - 20, btn_w, BUTTON_H)
    buttons["menu"] = draw_button(surface, rect, "Main Menu", COLOR["panel"],
                                  text_color=palette["primary"], hovered=_hovered(rect, hover))
    return buttons


# ── Achievements screen ───────────────────────────────────────────────────────

def draw_achievements(
    surface: pygame.Surface,
    achievements: list[Achievement],
    completion: float,
    palette: dict[str, RGBColor],
) -> Buttons:
    """Draw the achievement list with per-item progress bars."""
    surface.fill(palette["background"])
    buttons: Buttons = {"back": draw_back_button(surface, palette)}
    cx = SCREEN_W // 2
    unlocked = sum(1 for a in achievements if a.unlocked)

    draw_text(surface, "Achievements", FONT_SIZE_LG, palette["primary"], center=(cx, 36))
    draw_text(surface, f"{unlocked}/{len(achievements)} unlocked  ({completion:.0f}%)",
              FONT_SIZE_SM, COLOR["text_muted"], center=(cx, 66))

    row_h = 62
    for i, achievement in enumerate(achievements[:_LIST_ROWS]):
        row = pygame.Rect(_MARGIN, 88 + i * (row_h + 4), SCREEN_W - 2 * _MARGIN, row_h)
        draw_panel(surface, row, COLOR["panel"])
        title_color = palette["primary"] if achievement.unlocked else COLOR["text"]
        draw_text(surface, achievement.definition.title, FONT_SIZE_MD, title_color,
                  topleft=(row.x + 12, row.y + 8))
        draw_text(surface, achievement.definition.description, FONT_SIZE_SM, COLOR["text_muted"],
                  topleft=(row.x + 12, row.y + 28))
        bar = pygame.Rect(row.x + 12, row.bottom - 12, row.w - 80, 6)
        draw_progress_bar(surface, bar, achievement.progress,
                          COLOR["pass"] if achievement.unlocked else palette["secondary"])
        draw_star(surface, (row.right - 28, row.centery), 14, filled=achievement.unlocked)
    return buttons


# ── Leaderboard screen ────────────────────────────────────────────────────────

_RANK_COLORS = {1: COLOR["gold"], 2: COLOR["silver"], 3: COLOR["bronze"]}


def draw_leaderboard(
    surface: pygame.Surface,
    entries: list[LeaderboardEntry],
    palette: dict[str, RGBColor],
) -> Buttons:
    """Draw the top leaderboard rows, or an empty-state message."""
    surface.fill(palette["background"])
    buttons: Buttons = {"back": draw_back_button(surface, palette)}
    cx = SCREEN_W // 2
    draw_text(surface, "Leaderboard", FONT_SIZE_LG, palette["primary"], center=(cx, 36))

    if not entries:
        draw_star(surface, (cx, 240), 50, filled=False)
        draw_text(surface, "No Scores Yet", FONT_SIZE_LG, palette["primary"], center=(cx, 320))
        draw_text(surface, "Complete levels to appear", FONT_SIZE_MD, COLOR["text_muted"],
                  center=(cx, 352))
        draw_text(surface, "on the leaderboard!", FONT_SIZE_MD, COLOR["text_muted"],
                  center=(cx, 374))
        return buttons

    row_h = 58
    for i, entry in enumerate(entries[:_LIST_ROWS]):
        rank = i + 1
        row = pygame.Rect(_MARGIN, 72 + i * (row_h + 8), SCREEN_W - 2 * _MARGIN, row_h)
        draw_panel(surface, row, COLOR["panel"], radius=12)
        rank_color = _RANK_COLORS.get(rank, palette["primary"])
        pygame.draw.circle(surface, rank_color, (row.x + 30, row.centery), 20, 3)
        draw_text(surface, str(rank), FONT_SIZE_MD, rank_color, center=(row.x + 30, row.centery))
        draw_text(surface, entry.player_name, FONT_SIZE_MD, COLOR["text"],
                  topleft=(row.x + 62, row.y + 10))
        draw_text(surface, f"Level {entry.level}", FONT_SIZE_SM, COLOR["text_muted"],
                  topleft=(row.x + 62, row.y + 32))
        draw_text(surface, str(entry.score), FONT_SIZE_LG, palette["primary"],
                  topright=(row.right - 14, row.y + 18))
    return buttons
