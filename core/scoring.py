"""
core/scoring.py — Points and star rating for a completed path.

Both functions are pure: session.py calls them once, at the moment a
released path meets the level's required length.

Points:
    base  = path_len * 10
    combo = max(1, path_len - required)          # extra dots past the goal
    total = (base * (1 + combo) + seconds_left + moves_left * 5) * bonus

Stars average three efficiencies: path length against the requirement,
time left against the limit and moves left against the budget. Untimed
or unlimited levels score a perfect 1.0 on the axis they lack.
"""

from __future__ import annotations
from core.levels import Level

_POINTS_PER_DOT  = 10
_POINTS_PER_MOVE = 5

_THREE_STARS = 0.8
_TWO_STARS   = 0.5


def calculate_points(
    path_len: int,
    level: Level,
    time_remaining: int | None,
    moves_remaining: int | None,
) -> int:
    """Return the points awarded for a completed path.

    Args:
        path_len:        Number of dots in the released path.
        level:           The level being played.
        time_remaining:  Whole seconds left, or None if untimed.
        moves_remaining: Moves left after this release, or None.

    Returns:
        Integer points, truncated after applying the bonus multiplier.
    """
    base  = path_len * _POINTS_PER_DOT
    combo = max(1, path_len - level.required_connections)
    raw   = base * (1 + combo) + (time_remaining or 0) + (moves_remaining or 0) * _POINTS_PER_MOVE
    return int(raw * level.bonus_multiplier)


def calculate_stars(
    path_len: int,
    level: Level,
    time_remaining: int | None,
    moves_remaining: int | None,
) -> int:
    """Return a 1–3 star rating for a completed path."""
    efficiency = path_len / level.required_connections

    if level.time_limit is not None and time_remaining is not None:
        time_efficiency = time_remaining / level.time_limit
    else:
        time_efficiency = 1.0

    if level.max_moves is not None and moves_remaining is not None:
        moves_efficiency = (moves_remaining + 1) / level.max_moves
    else:
        moves_efficiency = 1.0

    total = (efficiency + time_efficiency + moves_efficiency) / 3.0
    if total >= _THREE_STARS:
        return 3
    if total >= _TWO_STARS:
        return 2
    return 1
