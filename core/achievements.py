"""
core/achievements.py — Achievements and the local leaderboard.

Achievements are declared once in ACHIEVEMENT_DEFS. Each definition
names the metric it tracks; check_and_unlock() copies the matching
metric into every still-locked achievement and unlocks those that reach
their target. Unlocked achievements are frozen: later values never
lower them.

Adding an achievement:
    1. Append an AchievementDef below.
    2. If it tracks a new metric, feed that metric in check_and_unlock().

The leaderboard is a score-sorted list capped at LEADERBOARD_LIMIT,
stored next to the achievements in the same save file.
"""

from __future__ import annotations
import datetime
import logging
import uuid
from dataclasses import dataclass, field
from typing import Any

from core.storage import JsonStore
from settings import LEADERBOARD_LIMIT

logger = logging.getLogger(__name__)

ACHIEVEMENTS_SECTION = "achievements"
LEADERBOARD_SECTION  = "leaderboard"


@dataclass(frozen=True)
class AchievementDef:
    id:             str
    title:          str
    description:    str
    metric:         str     # "wins", "level", "score", "streak" or "themes"
    required_value: int
    initial_value:  int = 0


ACHIEVEMENT_DEFS: tuple[AchievementDef, ...] = (
    AchievementDef("first_win",  "First Victory",   "Complete your first level",   "wins",    1),
    AchievementDef("level_5",    "Getting Started", "Reach level 5",               "level",   5),
    AchievementDef("level_10",   "Halfway Hero",    "Reach level 10",              "level",  10),
    AchievementDef("level_20",   "Master Swiper",   "Reach level 20",              "level",  20),
    AchievementDef("score_1000", "Score Hunter",    "Earn 1000 total points",      "score", 1000),
    AchievementDef("score_5000", "Point Master",    "Earn 5000 total points",      "score", 5000),
    AchievementDef("perfect_10", "Perfect Streak",  "Complete 10 levels in a row", "streak", 10),
    AchievementDef("all_themes", "Theme Collector", "Unlock all themes",           "themes",  5, 1),
)


@dataclass
class Achievement:
    """Live progress toward one AchievementDef."""
    definition:    AchievementDef
    current_value: int
    unlocked:      bool = False

    @property
    def id(self) -> str:
        return self.definition.id

    @property
    def progress(self) -> float:
        """Completion fraction in [0.0, 1.0]."""
        return min(self.current_value / self.definition.required_value, 1.0)

    def record(self, value: int) -> bool:
        """Store a new metric value. Returns True if this unlocked it."""
        if self.unlocked:
            return False
        self.current_value = value
        if self.current_value >= self.definition.required_value:
            self.unlocked = True
            return True
        return False


def _fresh_achievements() -> list[Achievement]:
    return [Achievement(d, d.initial_value) for d in ACHIEVEMENT_DEFS]


class AchievementService:
    """Tracks and persists every achievement.

    Attributes:
        achievements: One Achievement per definition, in declaration order.
    """

    def __init__(self, store: JsonStore) -> None:
        self._store = store
        self.achievements = self._load()

    def _load(self) -> list[Achievement]:
        achievements = _fresh_achievements()
        raw = self._store.load_section(ACHIEVEMENTS_SECTION)
        if not isinstance(raw, dict):
            return achievements
        for achievement in achievements:
            saved = raw.get(achievement.id)
            if not isinstance(saved, dict):
                continue
            try:
                achievement.current_value = int(saved.get("current_value", achievement.current_value))
            except (TypeError, ValueError):
                logger.warning("Ignoring bad saved value for achievement %s", achievement.id)
                continue
            achievement.unlocked = bool(saved.get("unlocked", False))
        return achievements

    def save(self) -> None:
        self._store.save_section(ACHIEVEMENTS_SECTION, {
            a.id: {"current_value": a.current_value, "unlocked": a.unlocked}
            for a in self.achievements
        })

    def get(self, achievement_id: str) -> Achievement:
        """Return the achievement with the given id.

        Raises:
            ValueError: If no achievement has that id.
        """
        for achievement in self.achievements:
            if achievement.id == achievement_id:
                return achievement
        raise ValueError(f"Unknown achievement '{achievement_id}'")

    def check_and_unlock(self, level: int, total_score: int, consecutive_wins: int) -> list[Achievement]:
        """Feed the post-win metrics to every locked achievement.

        Args:
            level:            Number of the level just completed.
            total_score:      Player's running score after the win.
            consecutive_wins: Length of the current win streak.

        Returns:
            Achievements unlocked by this call, in declaration order.
        """
        metrics = {"level": level, "score": total_score, "streak": consecutive_wins}
        newly_unlocked = []
        for achievement in self.achievements:
            if achievement.unlocked:
                continue
            metric = achievement.definition.metric
            if metric == "wins":
                value = max(achievement.current_value, 1)
            elif metric in metrics:
                value = metrics[metric]
            else:
                continue
            if achievement.record(value):
                newly_unlocked.append(achievement)

        if newly_unlocked:
            for achievement in newly_unlocked:
                logger.info("Achievement unlocked: %s", achievement.definition.title)
            self.save()
        return newly_unlocked

    def update_theme_achievement(self, unlocked_count: int) -> bool:
        """Track how many themes are unlocked. Returns True on unlock."""
        achievement = self.get("all_themes")
        unlocked = achievement.record(unlocked_count)
        if unlocked:
            logger.info("Achievement unlocked: %s", achievement.definition.title)
        self.save()
        return unlocked

    def unlocked(self) -> list[Achievement]:
        return [a for a in self.achievements if a.unlocked]

    def locked(self) -> list[Achievement]:
        return [a for a in self.achievements if not a.unlocked]

    def completion_percentage(self) -> float:
        if not self.achievements:
            return 0.0
        return len(self.unlocked()) / len(self.achievements) * 100

    def reset_achievements(self) -> None:
        self.achievements = _fresh_achievements()
        self.save()


# ── Leaderboard ───────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class LeaderboardEntry:
    player_name: str
    score:       int
    level:       int
    date:        datetime.datetime = field(default_factory=datetime.datetime.now)
    id:          uuid.UUID = field(default_factory=uuid.uuid4)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id":          str(self.id),
            "player_name": self.player_name,
            "score":       self.score,
            "level":       self.level,
            "date":        self.date.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LeaderboardEntry:
        return cls(
            player_name=str(data["player_name"]),
            score=int(data["score"]),
            level=int(data["level"]),
            date=datetime.datetime.fromisoformat(data["date"]),
            id=uuid.UUID(data["id"]),
        )


class Leaderboard:
    """Local high-score table, best first."""

    def __init__(self, store: JsonStore, limit: int = LEADERBOARD_LIMIT) -> None:
        self._store = store
        self._limit = limit
        self._entries = self._load()

    def _load(self) -> list[LeaderboardEntry]:
        raw = self._store.load_section(LEADERBOARD_SECTION)
        if not isinstance(raw, list):
            return []
        entries = []
        for item in raw:
            try:
                entries.append(LeaderboardEntry.from_dict(item))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping malformed leaderboard entry: %s", e)
        entries.sort(key=lambda e: e.score, reverse=True)
        return entries[: self._limit]

    def save(self) -> None:
        self._store.save_section(LEADERBOARD_SECTION, [e.to_dict() for e in self._entries])

    def entries(self) -> list[LeaderboardEntry]:
        return list(self._entries)

    def add(self, entry: LeaderboardEntry) -> int | None:
        """Insert an entry, keeping the table sorted and capped.

        Ties keep insertion order, so an earlier equal score ranks higher.

        Returns:
            1-based rank of the entry, or None if it fell off the table.
        """
        self._entries.append(entry)
        self._entries.sort(key=lambda e: e.score, reverse=True)
        del self._entries[self._limit:]
        self.save()
        logger.info("Leaderboard: %s scored %d on level %d", entry.player_name, entry.score, entry.level)
        for rank, existing in enumerate(self._entries, start=1):
            if existing.id == entry.id:
                return rank
        return None

    def reset(self) -> None:
        self._entries = []
        self.save()
