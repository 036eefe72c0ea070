import datetime
import random

import pytest

from core.difficulty import Difficulty
from core.levels import (
    LevelType,
    generate_daily_challenge, generate_infinite_level, generate_level,
)
from settings import SCREEN_W, BOARD_MARGIN, BOARD_OFFSET_Y


def test_first_level_defaults():
    level = generate_level(1)
    assert level.grid_size == 3
    assert level.required_connections == 3
    assert level.time_limit is None
    assert level.level_type is LevelType.NORMAL
    assert level.max_moves is None
    assert len(level.colors) == 2
    assert level.target_score == 100
    assert level.bonus_multiplier == pytest.approx(1.2)


def test_time_limit_starts_after_level_five():
    assert generate_level(5).time_limit is None
    assert generate_level(6).time_limit == 58
    assert generate_level(10).time_limit == 50
    assert generate_level(30).time_limit == 30


@pytest.mark.parametrize("number, level_type", [
    (5, LevelType.PUZZLE),
    (10, LevelType.SURVIVAL),
    (12, LevelType.NORMAL),
    (13, LevelType.TIMED),
    (18, LevelType.LIMITED),
    (20, LevelType.SURVIVAL),
])
def test_level_types(number, level_type):
    assert generate_level(number).level_type is level_type


def test_limited_level_has_move_budget():
    level = generate_level(18)
    assert level.required_connections == 8
    assert level.max_moves == 10


def test_tiers_grow_the_grid():
    assert generate_level(10).grid_size == 3
    assert generate_level(11).grid_size == 4
    assert generate_level(41).grid_size == 6
    assert generate_level(200).grid_size == 6
    assert generate_level(41, Difficulty.HARD).grid_size == 7


def test_difficulty_modifiers():
    hard = generate_level(1, Difficulty.HARD)
    assert hard.grid_size == 4
    assert hard.required_connections == 4
    assert len(hard.colors) == 3
    assert hard.bonus_multiplier == pytest.approx(1.5)

    easy = generate_level(6, Difficulty.EASY)
    assert easy.time_limit == 88
    assert easy.required_connections == 3
    assert len(easy.colors) == 1

    master = generate_level(41, Difficulty.MASTER)
    assert master.grid_size == 7
    assert master.time_limit == 15


def test_generation_is_deterministic():
    assert generate_level(17, Difficulty.HARD) == generate_level(17, Difficulty.HARD)


def test_level_number_must_be_positive():
    with pytest.raises(ValueError):
        generate_level(0)


def test_dots_fit_on_screen_for_largest_grid():
    level = generate_level(41, Difficulty.MASTER)
    dots = level.generate_dots(random.Random(3))
    assert len(dots) == 49
    xs = [d.x for d in dots]
    assert min(xs) >= BOARD_MARGIN
    assert max(xs) <= SCREEN_W - BOARD_MARGIN
    assert level.touch_radius <= level.spacing / 2


def test_dots_are_centred_row_major():
    level = generate_level(1)
    dots = level.generate_dots(random.Random(0))
    assert [(d.col, d.row) for d in dots[:4]] == [(0, 0), (1, 0), (2, 0), (0, 1)]
    assert [d.x for d in dots[:3]] == [120, 180, 240]
    assert dots[0].y == BOARD_OFFSET_Y
    assert dots[3].y == BOARD_OFFSET_Y + 60


def test_dot_colours_come_from_level_palette():
    level = generate_level(11, Difficulty.HARD)
    for dot in level.generate_dots(random.Random(5)):
        assert dot.color == level.colors[dot.color_index]


def test_same_seed_same_colours_fresh_ids():
    level = generate_level(21)
    a = level.generate_dots(random.Random(9))
    b = level.generate_dots(random.Random(9))
    assert [d.color_index for d in a] == [d.color_index for d in b]
    assert {d.id for d in a}.isdisjoint({d.id for d in b})


@pytest.mark.parametrize("day, number", [
    (datetime.date(1970, 1, 1), 1),
    (datetime.date(1970, 1, 5), 5),
    (datetime.date(1970, 1, 21), 1),
])
def test_daily_challenge_is_hard_and_date_derived(day, number):
    level = generate_daily_challenge(day)
    assert level.number == number
    assert level.difficulty is Difficulty.HARD


@pytest.mark.parametrize("streak, number, difficulty", [
    (0, 1, Difficulty.NORMAL),
    (9, 4, Difficulty.NORMAL),
    (10, 4, Difficulty.HARD),
    (25, 9, Difficulty.EXPERT),
    (50, 17, Difficulty.MASTER),
    (1000, 51, Difficulty.MASTER),
])
def test_infinite_levels_escalate(streak, number, difficulty):
    level = generate_infinite_level(streak)
    assert level.number == number
    assert level.difficulty is difficulty
