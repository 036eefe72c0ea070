"""
core/progress.py — Persistent player progress for DotQuest.

GameProgress is the plain data: campaign position, score, unlocks,
stars per level, daily challenge state. ProgressService owns one
instance, loads it from the "progress" section of the save file and
writes it back after every mutation.

JSON shape (see GameProgress.to_dict):
    {
        "current_level": 4,
        "completed_levels": [1, 2, 3],
        "stars_earned": {"1": 3, "2": 2, "3": 1},
        "difficulty": "Normal",
        "daily_challenge_date": "2026-10-19",
        ...
    }

Unknown keys are ignored and missing keys fall back to defaults, so
older save files keep loading as fields are added.
"""

from __future__ import annotations
import datetime
import logging
from dataclasses import dataclass, field
from typing import Any

from core.difficulty import Difficulty, DifficultyLockedError
from core.storage import JsonStore
from core.themes import DEFAULT_THEME_ID, theme_by_id

logger = logging.getLogger(__name__)

SECTION = "progress"


@dataclass
class GameProgress:
    current_level:             int = 1
    score:                     int = 0
    high_score:                int = 0
    unlocked_themes:           list[str] = field(default_factory=lambda: [DEFAULT_THEME_ID])
    selected_theme:            str = DEFAULT_THEME_ID
    completed_levels:          set[int] = field(default_factory=set)
    difficulty:                Difficulty = Difficulty.NORMAL
    total_games_played:        int = 0
    best_streak:               int = 0
    daily_challenge_completed: bool = False
    daily_challenge_date:      datetime.date | None = None
    stars_earned:              dict[int, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "current_level":             self.current_level,
            "score":                     self.score,
            "high_score":                self.high_score,
            "unlocked_themes":           list(self.unlocked_themes),
            "selected_theme":            self.selected_theme,
            "completed_levels":          sorted(self.completed_levels),
            "difficulty":                self.difficulty.value,
            "total_games_played":        self.total_games_played,
            "best_streak":               self.best_streak,
            "daily_challenge_completed": self.daily_challenge_completed,
            "daily_challenge_date": (
                self.daily_challenge_date.isoformat() if self.daily_challenge_date else None
            ),
            "stars_earned": {str(k): v for k, v in sorted(self.stars_earned.items())},
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GameProgress:
        """Rebuild progress from to_dict() output.

        Raises:
            ValueError: If a field has the wrong type or an unknown value.
        """
        progress = cls()
        try:
            progress.current_level      = int(data.get("current_level", 1))
            progress.score              = int(data.get("score", 0))
            progress.high_score         = int(data.get("high_score", 0))
            progress.unlocked_themes    = list(data.get("unlocked_themes", [DEFAULT_THEME_ID]))
            progress.selected_theme     = str(data.get("selected_theme", DEFAULT_THEME_ID))
            progress.completed_levels   = {int(n) for n in data.get("completed_levels", [])}
            progress.difficulty         = Difficulty.from_value(data.get("difficulty", "Normal"))
            progress.total_games_played = int(data.get("total_games_played", 0))
            progress.best_streak        = int(data.get("best_streak", 0))
            progress.daily_challenge_completed = bool(data.get("daily_challenge_completed", False))
            raw_date = data.get("daily_challenge_date")
            progress.daily_challenge_date = (
                datetime.date.fromisoformat(raw_date) if raw_date else None
            )
            progress.stars_earned = {
                int(k): int(v) for k, v in data.get("stars_earned", {}).items()
            }
        except (TypeError, AttributeError) as e:
            raise ValueError(f"Malformed progress data: {e}") from e
        return progress


class ProgressService:
    """Loads, mutates and saves GameProgress.

    Attributes:
        state: The live GameProgress. Read freely; mutate through methods
               so every change is persisted.
    """

    def __init__(self, store: JsonStore, today: datetime.date | None = None) -> None:
        self._store = store
        self.state  = self._load()
        self.check_daily_challenge(today)

    def _load(self) -> GameProgress:
        raw = self._store.load_section(SECTION)
        if raw is None:
            logger.info("No saved progress, starting fresh")
            return GameProgress()
        try:
            return GameProgress.from_dict(raw)
        except ValueError as e:
            logger.error("Discarding corrupt progress data: %s", e, exc_info=True)
            return GameProgress()

    def save(self) -> None:
        self._store.save_section(SECTION, self.state.to_dict())

    # ── Score ─────────────────────────────────────────────────────────────────

    def update_score(self, points: int) -> None:
        """Add points to the running score and lift the high score with it."""
        self.state.score += points
        if self.state.score > self.state.high_score:
            self.state.high_score = self.state.score
        self.save()

    def reset_current_score(self) -> None:
        self.state.score = 0
        self.save()

    # ── Levels ────────────────────────────────────────────────────────────────

    def complete_level(self, level: int, stars: int = 1) -> None:
        """Record a finished campaign or practice level.

        Advances current_level past level if level is the frontier, keeps
        the best star rating seen for it, and counts one game played.
        """
        self.state.completed_levels.add(level)
        if level >= self.state.current_level:
            self.state.current_level = level + 1
        if stars > self.state.stars_earned.get(level, 0):
            self.state.stars_earned[level] = stars
        self.state.total_games_played += 1
        self.save()

    def record_game_played(self) -> None:
        """Count a win from a mode that does not touch the campaign."""
        self.state.total_games_played += 1
        self.save()

    def total_stars(self) -> int:
        return sum(self.state.stars_earned.values())

    # ── Unlocks ───────────────────────────────────────────────────────────────

    def unlock_theme(self, theme_id: str) -> bool:
        """Unlock a theme. Returns True if it was newly unlocked.

        Raises:
            ValueError: If theme_id is unknown.
        """
        theme_by_id(theme_id)
        if theme_id in self.state.unlocked_themes:
            return False
        self.state.unlocked_themes.append(theme_id)
        self.save()
        logger.info("Theme unlocked: %s", theme_id)
        return True

    def select_theme(self, theme_id: str) -> None:
        """Make an unlocked theme the active one.

        Raises:
            ValueError: If theme_id is unknown or still locked.
        """
        theme_by_id(theme_id)
        if theme_id not in self.state.unlocked_themes:
            raise ValueError(f"Theme '{theme_id}' is locked")
        self.state.selected_theme = theme_id
        self.save()

    def set_difficulty(self, difficulty: Difficulty) -> None:
        """Select a difficulty for campaign and practice play.

        Raises:
            DifficultyLockedError: If the player has not reached its level.
        """
        if not difficulty.is_unlocked(self.state.current_level):
            raise DifficultyLockedError(difficulty, self.state.current_level)
        self.state.difficulty = difficulty
        self.save()

    # ── Streaks & daily challenge ─────────────────────────────────────────────

    def update_best_streak(self, streak: int) -> None:
        if streak > self.state.best_streak:
            self.state.best_streak = streak
            self.save()

    def complete_daily_challenge(self, today: datetime.date | None = None) -> None:
        self.state.daily_challenge_completed = True
        self.state.daily_challenge_date = today or datetime.date.today()
        self.save()

    def check_daily_challenge(self, today: datetime.date | None = None) -> None:
        """Re-open the daily challenge once the day it was finished has passed."""
        today = today or datetime.date.today()
        last = self.state.daily_challenge_date
        if last is None:
            self.state.daily_challenge_completed = False
            return
        if today > last and self.state.daily_challenge_completed:
            self.state.daily_challenge_completed = False
            self.save()

    # ── Reset ─────────────────────────────────────────────────────────────────

    def reset_game(self) -> None:
        """Throw away all progress."""
        logger.info("Resetting all progress")
        self.state = GameProgress()
        self.save()
