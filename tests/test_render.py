from dataclasses import replace

import pygame
import pytest

from core.achievements import LeaderboardEntry
from core.levels import LevelType, generate_level
from core.session import LevelSession
from core.themes import theme_by_id
from renderer import ui
from renderer.board import draw_board
from renderer.menu import level_picker_pages, level_picker_range
from renderer.shapes import draw_dim
from settings import COLOR, SCREEN_W, SCREEN_H
from utils.scaler import Scaler

PALETTE = theme_by_id("default").rgb()


@pytest.fixture
def surface():
    return pygame.Surface((SCREEN_W, SCREEN_H))


def test_level_picker_ends_at_frontier():
    assert list(level_picker_range(1)) == [1, 2, 3, 4, 5]
    assert list(level_picker_range(12)) == [8, 9, 10, 11, 12]


def test_level_picker_pages_reach_level_one():
    assert level_picker_pages(1) == 1
    assert level_picker_pages(12) == 3
    assert list(level_picker_range(12, 1)) == [3, 4, 5, 6, 7]
    assert list(level_picker_range(12, 2)) == [1, 2]
    with pytest.raises(ValueError):
        level_picker_range(12, 3)


def _spy_text(monkeypatch):
    drawn = []
    real = ui.draw_text

    def spy(surface, text, size, color, **anchor):
        drawn.append((text, color))
        return real(surface, text, size, color, **anchor)

    monkeypatch.setattr(ui, "draw_text", spy)
    return drawn


def test_status_row_shows_time_and_moves_together(surface, monkeypatch):
    level = generate_level(18)
    assert level.time_limit is not None and level.max_moves is not None
    drawn = _spy_text(monkeypatch)
    ui.draw_status_row(surface, LevelSession(level), PALETTE)
    texts = [text for text, _ in drawn]
    assert f"Time {level.time_limit}s" in texts
    assert f"Moves {level.max_moves}" in texts
    assert f"0 / {level.required_connections}" in texts


def test_status_row_warning_colours(surface, monkeypatch, easy_level):
    level = replace(easy_level, time_limit=10, level_type=LevelType.LIMITED, max_moves=1)
    drawn = _spy_text(monkeypatch)
    session = LevelSession(level)
    ui.draw_status_row(surface, session, PALETTE)
    colours = dict(drawn)
    assert colours["Time 10s"] == PALETTE["primary"]
    assert colours["Moves 1"] == COLOR["fail"]

    drawn.clear()
    session.update(1.0)
    ui.draw_status_row(surface, session, PALETTE)
    assert dict(drawn)["Time 9s"] == COLOR["fail"]


def test_board_draws_dots(surface, easy_level):
    surface.fill((255, 255, 255))
    session = LevelSession(easy_level)
    draw_board(surface, session.board)
    dot = session.board.dots[0]
    assert surface.get_at((dot.x, dot.y))[:3] == dot.color


def test_clear_button_only_when_path_exists(surface, easy_level):
    session = LevelSession(easy_level)
    assert ui.draw_clear_button(surface, session, PALETTE) == {}
    first = session.board.dots[0]
    session.touch(first.x, first.y)
    assert "clear" in ui.draw_clear_button(surface, session, PALETTE)


def test_leaderboard_rows(surface):
    entries = [LeaderboardEntry("Player", 300 - i, 3) for i in range(12)]
    buttons = ui.draw_leaderboard(surface, entries, PALETTE)
    assert set(buttons) == {"back"}


def test_scaler_letterboxes_tall_window():
    scaler = Scaler((720, 1280))
    assert scaler.scale == pytest.approx(2.0)
    assert scaler.to_game((360, 640)) == (180, 320)


def test_scaler_letterboxes_wide_window():
    scaler = Scaler((1000, 640))
    assert scaler.viewport.topleft == (320, 0)
    assert scaler.to_game((320, 0)) == (0, 0)
    assert not scaler.contains((10, 10))
    assert scaler.contains((500, 300))


def test_scaler_present_fills_bars():
    window = pygame.Surface((1000, 640))
    game_surface = pygame.Surface((SCREEN_W, SCREEN_H))
    game_surface.fill((10, 200, 30))
    scaler = Scaler(window.get_size())
    scaler.present(window, game_surface)
    assert window.get_at((5, 5))[:3] == (0, 0, 0)
    assert window.get_at((500, 300))[:3] == (10, 200, 30)


def test_flash_and_dim_tint_the_surface(surface):
    surface.fill((255, 255, 255))
    ui.draw_flash(surface, COLOR["fail"], 1.0)
    r, g, b = surface.get_at((5, 5))[:3]
    assert (r, g, b) != (255, 255, 255)
    assert r > g and r > b

    surface.fill((255, 255, 255))
    draw_dim(surface)
    assert surface.get_at((5, 5))[0] < 255
