"""
core/session.py — One attempt at one DotQuest level.

LevelSession ties together the pieces a single level needs while it is
on screen:
    - Board     (dots + path under construction)
    - Timer     (only on levels with a time limit)
    - Moves     (only on LIMITED levels)
    - Score and stars for the attempt
    - Flash feedback (green on completion, red on failure)

It does NOT touch persistent progress, achievements or the leaderboard.
game.py watches status and applies those side effects once, when the
status leaves PLAYING.

Drag lifecycle:
    session.touch(x, y)    # button down and every motion sample
    session.release()      # button up: complete, retry, or fail

Failure rules:
    - The countdown reaching zero fails the level.
    - On LIMITED levels each non-empty release uses one move; a short
      path released with no moves left fails the level.
"""

from __future__ import annotations
import logging
import random
import uuid
from enum import Enum, auto

from core.board import Board, TapResult
from core.levels import Level
from core.scoring import calculate_points, calculate_stars
from core.timer import Timer
from settings import COLOR, COMPLETE_DELAY_S

logger = logging.getLogger(__name__)


class Status(Enum):
    PLAYING  = auto()
    COMPLETE = auto()
    FAILED   = auto()


class LevelSession:
    """Mutable state for a single level attempt.

    Attributes:
        level:           The Level being played.
        board:           Board dealt for this attempt.
        timer:           Countdown; idle on untimed levels.
        moves_remaining: Releases left on LIMITED levels, else None.
        score:           Points earned in this attempt.
        points_awarded:  Points from the completing release (0 until then).
        stars:           1–3 once complete, else 0.
        status:          PLAYING, COMPLETE or FAILED.
        fail_reason:     "time" or "moves" once FAILED, else None.
    """

    def __init__(self, level: Level, rng: random.Random | None = None) -> None:
        self.level = level
        self._rng  = rng
        self.timer = Timer()
        self.reset()

    # ── Lifecycle ─────────────────────────────────────────────────────────────

    def reset(self) -> None:
        """Deal a fresh board and restore the timer and move budget."""
        self.board = Board(self.level.generate_dots(self._rng), self.level.touch_radius)
        self.moves_remaining: int | None = self.level.max_moves
        self.score          = 0
        self.points_awarded = 0
        self.stars          = 0
        self.status         = Status.PLAYING
        self.fail_reason: str | None = None
        self._flash_color: tuple | None = None
        self._flash_timer: float = 0.0

        if self.level.time_limit is not None:
            self.timer.start(self.level.time_limit)
        else:
            self.timer.stop()

    def time_remaining(self) -> int | None:
        """Whole seconds left, or None on untimed levels."""
        if self.level.time_limit is None:
            return None
        return self.timer.remaining()

    # ── Input ─────────────────────────────────────────────────────────────────

    def touch(self, x: float, y: float) -> TapResult:
        """Feed a drag sample in game coordinates to the board."""
        if self.status is not Status.PLAYING:
            return TapResult.IGNORED
        return self.board.touch(x, y)

    def tap(self, dot_id: uuid.UUID) -> TapResult:
        if self.status is not Status.PLAYING:
            return TapResult.IGNORED
        return self.board.tap(dot_id)

    def clear_path(self) -> None:
        """Drop the current path without spending a move."""
        if self.status is Status.PLAYING:
            self.board.clear_path()

    def release(self) -> Status:
        """End the current drag and judge the path.

        Returns:
            The status after judging. COMPLETE if the path was long
            enough; FAILED if that release used up the last move;
            otherwise PLAYING with the path cleared.
        """
        if self.status is not Status.PLAYING or not self.board.path:
            return self.status

        path_len = len(self.board.path)
        if self.moves_remaining is not None:
            self.moves_remaining -= 1

        if path_len >= self.level.required_connections:
            self._complete(path_len)
            return self.status

        self.board.clear_path()
        if self.moves_remaining is not None and self.moves_remaining <= 0:
            self._fail("moves")
        return self.status

    # ── Per-frame update ──────────────────────────────────────────────────────

    def update(self, dt: float) -> None:
        """Tick the countdown and the flash overlay."""
        if self.status is Status.PLAYING and self.level.time_limit is not None:
            self.timer.update(dt)
            if self.timer.is_expired():
                self._fail("time")

        if self._flash_timer > 0.0:
            self._flash_timer = max(0.0, self._flash_timer - dt)
            if self._flash_timer == 0.0:
                self._flash_color = None

    def flash_state(self) -> tuple[tuple | None, float]:
        """Return (color, alpha) of the result flash; (None, 0.0) when idle."""
        if self._flash_color is None or COMPLETE_DELAY_S <= 0:
            return None, 0.0
        return self._flash_color, self._flash_timer / COMPLETE_DELAY_S

    def result_ready(self) -> bool:
        """True once the attempt is over and its flash has faded out."""
        return self.status is not Status.PLAYING and self._flash_timer <= 0.0

    # ── Transitions ───────────────────────────────────────────────────────────

    def _complete(self, path_len: int) -> None:
        time_left = self.time_remaining()
        self.timer.stop()

        self.points_awarded = calculate_points(path_len, self.level, time_left, self.moves_remaining)
        self.score += self.points_awarded
        self.stars  = calculate_stars(path_len, self.level, time_left, self.moves_remaining)
        self.status = Status.COMPLETE
        self._start_flash(COLOR["pass"])
        logger.info(
            "Level %d complete: path=%d points=%d stars=%d",
            self.level.number, path_len, self.points_awarded, self.stars,
        )

    def _fail(self, reason: str) -> None:
        self.timer.stop()
        self.board.clear_path()
        self.status = Status.FAILED
        self.fail_reason = reason
        self._start_flash(COLOR["fail"])
        logger.info("Level %d failed: %s", self.level.number, reason)

    def _start_flash(self, color: tuple) -> None:
        self._flash_color = color
        self._flash_timer = COMPLETE_DELAY_S
