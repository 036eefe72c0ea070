"""
core/levels.py — Procedural level generation for DotQuest.

Every level is derived from its number and a Difficulty; nothing is
stored. Numbers are grouped into tiers of ten. Each tier widens the
grid, adds colours and raises the score multiplier, while the required
path length grows by one every three levels. Levels past 5 carry a
countdown that shrinks two seconds per level down to a 30 s floor.

Three entry points:
    generate_level(number, difficulty)   — campaign / practice
    generate_daily_challenge(today)      — one fixed HARD level per date
    generate_infinite_level(streak)      — escalates with the win streak

Dot colours are rolled by Level.generate_dots(rng) each time a level is
(re)started, so retrying a level deals a fresh board.
"""

from __future__ import annotations
import datetime
import random
from dataclasses import dataclass
from enum import Enum, auto

from core.board import Dot
from core.difficulty import Difficulty
from settings import (
    DOT_COLORS_HEX,
    SCREEN_W, DOT_SPACING, BOARD_MARGIN, BOARD_OFFSET_Y, TOUCH_RADIUS,
    MAX_GRID_SIZE, DAILY_LEVEL_CYCLE, INFINITE_MAX_STEP,
)
from utils.color import RGBColor, hex_to_rgb

_PALETTE: list[RGBColor] = [hex_to_rgb(h) for h in DOT_COLORS_HEX]
_EPOCH = datetime.date(1970, 1, 1)


class LevelType(Enum):
    """Flavour of a level. Shown as a badge in the HUD."""
    NORMAL   = auto()
    TIMED    = auto()
    LIMITED  = auto()   # capped number of moves
    SURVIVAL = auto()
    PUZZLE   = auto()


@dataclass(frozen=True)
class Level:
    """Immutable parameters of one generated level.

    Attributes:
        number:               1-based level number.
        grid_size:            Dots per side (3–7).
        required_connections: Minimum path length that completes the level.
        time_limit:           Countdown in seconds, or None for untimed.
        target_score:         Reference score shown to the player.
        colors:               RGB colours dots are drawn from.
        level_type:           LevelType badge.
        max_moves:            Release budget on LIMITED levels, else None.
        bonus_multiplier:     Applied to every point award.
        difficulty:           Difficulty the level was generated at.
    """
    number:               int
    grid_size:            int
    required_connections: int
    time_limit:           int | None
    target_score:         int
    colors:               tuple[RGBColor, ...]
    level_type:           LevelType
    max_moves:            int | None
    bonus_multiplier:     float
    difficulty:           Difficulty = Difficulty.NORMAL

    @property
    def spacing(self) -> int:
        """Pixel distance between neighbouring dots.

        DOT_SPACING, shrunk on wide grids so the outer columns stay
        BOARD_MARGIN away from the screen edge.
        """
        if self.grid_size < 2:
            return DOT_SPACING
        fit = (SCREEN_W - 2 * BOARD_MARGIN) // (self.grid_size - 1)
        return min(DOT_SPACING, fit)

    @property
    def touch_radius(self) -> float:
        """Hit radius that never lets two neighbouring dots overlap."""
        return min(TOUCH_RADIUS, self.spacing / 2)

    def generate_dots(self, rng: random.Random | None = None) -> list[Dot]:
        """Lay out grid_size² dots row-major with random colours.

        The grid is centred horizontally; row 0 sits at BOARD_OFFSET_Y.

        Args:
            rng: Random source. Defaults to the module-level generator.

        Returns:
            Fresh Dot list. Each call produces new ids and new colours.
        """
        rng = rng or random
        spacing  = self.spacing
        origin_x = (SCREEN_W - spacing * (self.grid_size - 1)) // 2
        dots = []
        for row in range(self.grid_size):
            for col in range(self.grid_size):
                index = rng.randrange(len(self.colors))
                dots.append(Dot(
                    col=col,
                    row=row,
                    x=origin_x + col * spacing,
                    y=BOARD_OFFSET_Y + row * spacing,
                    color_index=index,
                    color=self.colors[index],
                ))
        return dots


def _level_type(number: int) -> LevelType:
    mod = number % 10
    if mod == 0:
        return LevelType.SURVIVAL
    if mod == 5:
        return LevelType.PUZZLE
    if number > 10 and mod % 3 == 0:
        return LevelType.TIMED
    if number > 15 and mod % 4 == 0:
        return LevelType.LIMITED
    return LevelType.NORMAL


def generate_level(number: int, difficulty: Difficulty = Difficulty.NORMAL) -> Level:
    """Build the level with the given number at the given difficulty.

    Args:
        number:     1-based level number.
        difficulty: Tier whose modifiers are applied.

    Returns:
        A Level. Identical arguments always give identical parameters.

    Raises:
        ValueError: If number is less than 1.
    """
    if number < 1:
        raise ValueError(f"Level number must be >= 1, got {number}")

    mod  = difficulty.modifier
    tier = (number - 1) // 10

    grid_size = min(min(3 + tier, MAX_GRID_SIZE - 1) + mod.grid, MAX_GRID_SIZE)
    required  = max(3, 3 + (number - 1) // 3 + mod.connections)

    time_limit = None
    if number > 5:
        base_time  = max(60 - (number - 5) * 2, 30)
        time_limit = max(base_time + mod.time, 15)

    level_type = _level_type(number)
    max_moves  = required + 2 if level_type is LevelType.LIMITED else None

    color_count = min(min(2 + tier // 2, len(_PALETTE)) + mod.colors, len(_PALETTE))
    color_count = max(1, color_count)

    return Level(
        number=number,
        grid_size=grid_size,
        required_connections=required,
        time_limit=time_limit,
        target_score=100 * number * (tier + 1),
        colors=tuple(_PALETTE[:color_count]),
        level_type=level_type,
        max_moves=max_moves,
        bonus_multiplier=1.0 + tier * 0.1 + difficulty.bonus,
        difficulty=difficulty,
    )


def generate_daily_challenge(today: datetime.date | None = None) -> Level:
    """Return today's challenge: a HARD level picked from the date alone."""
    today = today or datetime.date.today()
    day_number = (today - _EPOCH).days
    return generate_level(day_number % DAILY_LEVEL_CYCLE + 1, Difficulty.HARD)


def generate_infinite_level(streak: int) -> Level:
    """Return the next endless-mode level for a player on a win streak.

    The level number climbs one step per three wins (capped at 51) and
    the difficulty escalates at streaks of 10, 25 and 50.
    """
    number = min(streak // 3, INFINITE_MAX_STEP) + 1
    if streak < 10:
        difficulty = Difficulty.NORMAL
    elif streak < 25:
        difficulty = Difficulty.HARD
    elif streak < 50:
        difficulty = Difficulty.EXPERT
    else:
        difficulty = Difficulty.MASTER
    return generate_level(number, difficulty)
