"""
core/difficulty.py — Difficulty tiers for DotQuest.

A difficulty shifts every generated level by a fixed set of modifiers
(grid size, time limit, required connections, colour count) and adds a
flat bonus to the score multiplier. Harder tiers stay locked until the
player's campaign reaches their required level.
"""

from __future__ import annotations
from enum import Enum
from typing import NamedTuple


class Modifier(NamedTuple):
    """Additive adjustments applied on top of the base level curve."""
    grid:        int
    time:        int
    connections: int
    colors:      int


class Difficulty(Enum):
    """Player-selectable difficulty. Values are the display names."""
    EASY   = "Easy"
    NORMAL = "Normal"
    HARD   = "Hard"
    EXPERT = "Expert"
    MASTER = "Master"

    @property
    def description(self) -> str:
        return _TABLE[self][0]

    @property
    def color(self) -> str:
        """Badge colour as a hex string."""
        return _TABLE[self][1]

    @property
    def required_level(self) -> int:
        return _TABLE[self][2]

    @property
    def modifier(self) -> Modifier:
        return _TABLE[self][3]

    @property
    def bonus(self) -> float:
        """Flat amount added to a level's bonus multiplier."""
        return _TABLE[self][4]

    def is_unlocked(self, current_level: int) -> bool:
        """Return True if a player on current_level may pick this tier."""
        return current_level >= self.required_level

    @classmethod
    def from_value(cls, value: str) -> Difficulty:
        """Look up a difficulty by its display value, e.g. "Hard".

        Raises:
            ValueError: If value names no difficulty.
        """
        return cls(value)


# ── Tier table ────────────────────────────────────────────────────────────────
# description, badge colour, required level, modifier, score bonus
_TABLE: dict[Difficulty, tuple[str, str, int, Modifier, float]] = {
    Difficulty.EASY:   ("Relaxed gameplay",   "#4CAF50",  1, Modifier(0,  30, -1, -1), 0.0),
    Difficulty.NORMAL: ("Balanced challenge", "#2196F3",  1, Modifier(0,   0,  0,  0), 0.2),
    Difficulty.HARD:   ("Intense puzzles",    "#FF9800", 10, Modifier(1, -15,  1,  1), 0.5),
    Difficulty.EXPERT: ("For experts only",   "#F44336", 25, Modifier(1, -25,  2,  2), 1.0),
    Difficulty.MASTER: ("Ultimate challenge", "#9C27B0", 50, Modifier(2, -30,  3,  2), 2.0),
}


class DifficultyLockedError(ValueError):
    """Raised when selecting a difficulty the player has not unlocked."""

    def __init__(self, difficulty: Difficulty, current_level: int) -> None:
        super().__init__(
            f"{difficulty.value} unlocks at level {difficulty.required_level}, "
            f"player is on level {current_level}"
        )
        self.difficulty = difficulty
        self.current_level = current_level
