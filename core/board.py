"""
core/board.py — Dot grid and path-building rules for DotQuest.

Board owns the dots of one level and the ordered path the player is
dragging through them. It knows nothing about scoring, timers or moves;
session.py reads path length and decides what a released path is worth.

Path rules (applied by tap()):
    - An empty path starts at whatever dot is touched.
    - Touching the last dot again does nothing.
    - Touching an earlier dot in the path cuts everything after it,
      which is how dragging backwards undoes a stroke.
    - Otherwise the dot joins the path only if it is one of the eight
      neighbours of the last dot and shares its colour.

Usage:
    board = Board(level.generate_dots(rng), level.touch_radius)
    board.touch(x, y)        # every drag sample, game coordinates
    len(board.path)          # on release
    board.clear_path()
"""

from __future__ import annotations
import math
import uuid
from dataclasses import dataclass, field
from enum import Enum, auto

from settings import TOUCH_RADIUS
from utils.color import RGBColor


class TapResult(Enum):
    """What a single tap did to the path."""
    STARTED  = auto()
    EXTENDED = auto()
    TRIMMED  = auto()
    IGNORED  = auto()
    REJECTED = auto()


@dataclass
class Dot:
    """One node of the board.

    Attributes:
        col, row:     Grid coordinates, 0-based.
        x, y:         Centre in native game pixels.
        color_index:  Index into the level's colour list. Equality of
                      colour is decided on this, not on the RGB value.
        color:        RGB used for drawing.
        connected:    True while the dot is part of the current path.
        id:           Stable identity for the lifetime of the board.
    """
    col:         int
    row:         int
    x:           int
    y:           int
    color_index: int
    color:       RGBColor
    connected:   bool = False
    id:          uuid.UUID = field(default_factory=uuid.uuid4)


class Board:
    """The dots of one level plus the path being built through them.

    Attributes:
        dots:         All dots, row-major.
        touch_radius: Hit radius around each dot centre, in pixels.
        path:         Ordered ids of the dots in the current path.
    """

    def __init__(self, dots: list[Dot], touch_radius: float = TOUCH_RADIUS) -> None:
        self.dots: list[Dot] = list(dots)
        self.touch_radius = touch_radius
        self.path: list[uuid.UUID] = []
        self._by_id: dict[uuid.UUID, Dot] = {dot.id: dot for dot in self.dots}

    def dot(self, dot_id: uuid.UUID) -> Dot | None:
        return self._by_id.get(dot_id)

    def path_dots(self) -> list[Dot]:
        """Return the path as Dot objects, in drag order."""
        return [self._by_id[dot_id] for dot_id in self.path]

    @staticmethod
    def is_adjacent(a: Dot, b: Dot) -> bool:
        """True for distinct dots that touch horizontally, vertically or diagonally."""
        dc = abs(a.col - b.col)
        dr = abs(a.row - b.row)
        return max(dc, dr) == 1

    def dot_at(self, x: float, y: float) -> Dot | None:
        """Return the first dot whose centre is strictly within touch_radius of (x, y)."""
        for dot in self.dots:
            if math.hypot(x - dot.x, y - dot.y) < self.touch_radius:
                return dot
        return None

    def touch(self, x: float, y: float) -> TapResult:
        """Hit-test a game coordinate and tap whatever dot is under it."""
        dot = self.dot_at(x, y)
        if dot is None:
            return TapResult.IGNORED
        return self.tap(dot.id)

    def tap(self, dot_id: uuid.UUID) -> TapResult:
        """Apply the path rules to a tap on dot_id.

        Args:
            dot_id: Id of a dot on this board. Unknown ids are ignored.

        Returns:
            The TapResult describing how the path changed.
        """
        dot = self._by_id.get(dot_id)
        if dot is None:
            return TapResult.IGNORED

        if not self.path:
            self.path.append(dot_id)
            dot.connected = True
            return TapResult.STARTED

        if self.path[-1] == dot_id:
            return TapResult.IGNORED

        if dot_id in self.path:
            cut = self.path.index(dot_id) + 1
            for removed in self.path[cut:]:
                self._by_id[removed].connected = False
            del self.path[cut:]
            return TapResult.TRIMMED

        last = self._by_id[self.path[-1]]
        if self.is_adjacent(last, dot) and last.color_index == dot.color_index:
            self.path.append(dot_id)
            dot.connected = True
            return TapResult.EXTENDED

        return TapResult.REJECTED

    def clear_path(self) -> None:
        """Drop the whole path and un-mark its dots."""
        for dot_id in self.path:
            self._by_id[dot_id].connected = False
        self.path.clear()
