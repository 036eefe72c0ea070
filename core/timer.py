"""
core/timer.py — Countdown timer for timed DotQuest levels.

The timer is frame-driven: session.py feeds it the delta time each
frame instead of relying on a wall-clock callback, so pausing the game
loop (tab switch, result overlay) pauses the countdown too.

The HUD shows whole seconds. remaining() drops one second each time a
full second elapses, so a 30 s timer reads 30 until one second has
passed, then 29, and so on down to 0.

Usage:
    timer = Timer()
    timer.start(level.time_limit)

    # each frame:
    timer.update(dt)
    if timer.is_expired():
        ...
"""

import math


class Timer:
    """Countdown with a fixed limit in seconds.

    Attributes:
        _limit:    Total seconds allowed.
        _elapsed:  Seconds counted so far.
        _running:  True while update() advances the clock.
    """

    def __init__(self) -> None:
        self._limit:   float = 0.0
        self._elapsed: float = 0.0
        self._running: bool  = False

    def start(self, limit_s: float) -> None:
        """Reset elapsed time and begin counting down from limit_s.

        Args:
            limit_s: Seconds the player gets. Must be positive.

        Raises:
            ValueError: If limit_s is not positive.
        """
        if limit_s <= 0:
            raise ValueError(f"Timer limit must be positive, got {limit_s}")
        self._limit   = float(limit_s)
        self._elapsed = 0.0
        self._running = True

    def stop(self) -> None:
        """Freeze the timer where it is. remaining() keeps its value."""
        self._running = False

    def update(self, dt: float) -> None:
        """Advance by dt seconds. No-op when stopped or already expired."""
        if self._running and self._elapsed < self._limit:
            self._elapsed = min(self._elapsed + dt, self._limit)

    def remaining(self) -> int:
        """Return whole seconds left, as shown in the HUD."""
        return max(0, int(self._limit) - math.floor(self._elapsed))

    def fill(self) -> float:
        """Return the fraction of time left in [0.0, 1.0] for the timer bar."""
        if self._limit <= 0:
            return 0.0
        return max(0.0, 1.0 - self._elapsed / self._limit)

    def is_expired(self) -> bool:
        return self._limit > 0 and self._elapsed >= self._limit

    def is_running(self) -> bool:
        return self._running

    def limit(self) -> float:
        return self._limit
