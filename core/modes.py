"""
core/modes.py — Play modes and the levels they serve.

LevelPicker is the only place that knows how each mode turns player
state into a Level. game.py asks it for the first level when a mode is
started, and for the next one after every win.

    CAMPAIGN  — the chosen (default: current) level at the selected difficulty
    PRACTICE  — replay of an earlier level, same difficulty rules
    DAILY     — one HARD level per calendar day, no follow-up
    INFINITE  — endless run; each win feeds the streak into the generator
"""

from __future__ import annotations
import datetime
from enum import Enum

from core.levels import (
    Level,
    generate_level, generate_daily_challenge, generate_infinite_level,
)
from core.progress import GameProgress


class PlayMode(Enum):
    CAMPAIGN = "Campaign"
    DAILY    = "Daily Challenge"
    INFINITE = "Infinite Mode"
    PRACTICE = "Practice"

    @property
    def advances_campaign(self) -> bool:
        """True if wins in this mode count as campaign level completions."""
        return self in (PlayMode.CAMPAIGN, PlayMode.PRACTICE)


class LevelPicker:
    """Maps (mode, player state) to the level to play."""

    @staticmethod
    def first_level(
        mode: PlayMode,
        progress: GameProgress,
        today: datetime.date | None = None,
        level_number: int | None = None,
    ) -> Level:
        """Return the level a freshly started mode opens with.

        Args:
            mode:         Mode being started.
            progress:     Current player progress.
            today:        Date for the daily challenge. Defaults to today.
            level_number: Explicit campaign/practice level (level picker).

        Returns:
            The Level to play.
        """
        if mode is PlayMode.DAILY:
            return generate_daily_challenge(today)
        if mode is PlayMode.INFINITE:
            return generate_infinite_level(0)
        if mode is PlayMode.PRACTICE:
            number = level_number or max(1, progress.current_level - 1)
        else:
            number = level_number or progress.current_level
        return generate_level(number, progress.difficulty)

    @staticmethod
    def next_level(mode: PlayMode, current: Level, streak: int) -> Level | None:
        """Return the level that follows a win, or None if the mode ends.

        Args:
            mode:    Mode being played.
            current: Level just completed.
            streak:  Consecutive wins including the one just scored.
        """
        if mode is PlayMode.DAILY:
            return None
        if mode is PlayMode.INFINITE:
            return generate_infinite_level(streak)
        return generate_level(current.number + 1, current.difficulty)
