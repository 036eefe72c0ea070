"""
core/game.py — Central game state machine for DotQuest.

Game owns the top-level state enum and orchestrates all subsystems:
    - ProgressService     (campaign, score, unlocks; persisted)
    - AchievementService  (achievements; persisted)
    - Leaderboard         (best runs; persisted)
    - LevelPicker         (which level each mode serves)
    - LevelSession        (the level on screen)

States:
    MENU          — main menu, level picker, mode buttons
    PLAYING       — a level is on screen (including its result flash)
    RESULT        — complete / failed overlay
    ACHIEVEMENTS  — achievement list
    LEADERBOARD   — leaderboard list

Transitions:
    MENU      → PLAYING      : continue, level circle or a mode button
    PLAYING   → RESULT       : session finished and its flash has faded
    RESULT    → PLAYING      : next level (on a win) or try again (on a loss)
    RESULT    → MENU         : main menu button
    PLAYING   → MENU         : back button or Escape
    MENU      ↔ ACHIEVEMENTS / LEADERBOARD

Runs:
    A run is the sequence of levels played since a mode was started.
    Wins extend the run streak and add to the run score. A failure,
    or leaving to the menu, ends the run and submits a positive run
    score to the leaderboard.

game.py does NOT call pygame.display.flip() or manage the window.
That is main.py's responsibility.
"""

from __future__ import annotations
import datetime
import logging
import random
from enum import Enum, auto
from typing import Callable

import pygame

from core.achievements import AchievementService, Leaderboard, LeaderboardEntry
from core.difficulty import Difficulty
from core.levels import Level
from core.modes import LevelPicker, PlayMode
from core.progress import ProgressService
from core.session import LevelSession, Status
from core.storage import JsonStore
from core.themes import ALL_THEMES, theme_by_id, themes_unlocked_by
from renderer import ui
from renderer.board import draw_board
from renderer.menu import MenuModel, draw_menu, level_picker_pages, level_picker_range
from settings import PLAYER_NAME, SAVE_PATH

logger = logging.getLogger(__name__)


class GameState(Enum):
    """Top-level state machine states."""
    MENU         = auto()
    PLAYING      = auto()
    RESULT       = auto()
    ACHIEVEMENTS = auto()
    LEADERBOARD  = auto()


class Game:
    """Orchestrates all game subsystems via a state machine.

    Attributes:
        state:        Current GameState.
        progress:     ProgressService for persistent player state.
        achievements: AchievementService.
        leaderboard:  Leaderboard.
        mode:         PlayMode of the current run, or None on the menu.
        session:      LevelSession on screen, or None.
        run_streak:   Consecutive wins in the current run.
        run_score:    Points earned in the current run.
        last_unlocked: Titles of achievements unlocked by the last win.
        picker_page:  Page of the menu level picker, 0 ending at the frontier.
    """

    def __init__(
        self,
        store: JsonStore | None = None,
        today: Callable[[], datetime.date] = datetime.date.today,
        rng: random.Random | None = None,
    ) -> None:
        self._store = store or JsonStore(SAVE_PATH)
        self._today = today
        self._rng   = rng

        self.progress     = ProgressService(self._store, today())
        self.achievements = AchievementService(self._store)
        self.leaderboard  = Leaderboard(self._store)

        self.state:   GameState           = GameState.MENU
        self.mode:    PlayMode | None     = None
        self.session: LevelSession | None = None

        self.run_streak     = 0
        self.run_score      = 0
        self.run_best_level = 0
        self.last_unlocked: list[str] = []
        self.picker_page    = 0

        self._finished_handled = False
        self._dragging = False
        self._buttons: dict[str, pygame.Rect] = {}
        self._hover: tuple[int, int] | None = None

    # ── State transitions ─────────────────────────────────────────────────────

    def start_menu(self) -> None:
        """End any run in progress and show the main menu."""
        self._end_run()
        self.progress.check_daily_challenge(self._today())
        self.session = None
        self.mode = None
        self._dragging = False
        self._buttons = {}
        self.picker_page = 0
        self.state = GameState.MENU

    def start_mode(self, mode: PlayMode, level_number: int | None = None) -> None:
        """Begin a new run in mode.

        Args:
            mode:         Mode to play.
            level_number: Explicit campaign/practice level. Must not be
                          past the player's frontier.

        Raises:
            ValueError: If level_number is beyond the current level.
        """
        if level_number is not None and level_number > self.progress.state.current_level:
            raise ValueError(
                f"Level {level_number} is locked; frontier is {self.progress.state.current_level}"
            )
        self._end_run()
        self.mode = mode
        level = LevelPicker.first_level(mode, self.progress.state, self._today(), level_number)
        logger.info("Starting %s at level %d (%s)", mode.value, level.number, level.difficulty.value)
        self._play(level)

    def _play(self, level: Level) -> None:
        self.session = LevelSession(level, self._rng)
        self.last_unlocked = []
        self._finished_handled = False
        self._dragging = False
        self._buttons = {}
        self.state = GameState.PLAYING

    def next_level(self) -> None:
        """Continue the run after a win, or return to the menu if it ends."""
        if self.session is None or self.session.status is not Status.COMPLETE or self.mode is None:
            return
        level = LevelPicker.next_level(self.mode, self.session.level, self.run_streak)
        if level is None:
            self.start_menu()
            return
        self._play(level)

    def retry(self) -> None:
        """Start a fresh run on the level that was just failed."""
        if self.session is None:
            return
        self._end_run()
        self._play(self.session.level)

    # ── Run bookkeeping ───────────────────────────────────────────────────────

    def _on_session_finished(self) -> None:
        """Apply the side effects of a finished session exactly once."""
        if self._finished_handled or self.session is None:
            return
        self._finished_handled = True
        if self.session.status is Status.COMPLETE:
            self._reward()
        else:
            self._end_run()

    def _reward(self) -> None:
        session  = self.session
        mode     = self.mode or PlayMode.CAMPAIGN
        number   = session.level.number
        points   = session.points_awarded
        today    = self._today()

        self.progress.update_score(points)
        if mode.advances_campaign:
            self.progress.complete_level(number, session.stars)
        else:
            self.progress.record_game_played()
        if mode is PlayMode.DAILY:
            self.progress.complete_daily_challenge(today)

        self.run_streak += 1
        self.run_score  += points
        self.run_best_level = max(self.run_best_level, number)
        self.progress.update_best_streak(self.run_streak)

        unlocked = self.achievements.check_and_unlock(
            level=number,
            total_score=self.progress.state.score,
            consecutive_wins=self.run_streak,
        )

        if mode.advances_campaign:
            for theme in themes_unlocked_by(number):
                self.progress.unlock_theme(theme.id)
        if self.achievements.update_theme_achievement(len(self.progress.state.unlocked_themes)):
            unlocked.append(self.achievements.get("all_themes"))

        self.last_unlocked = [a.definition.title for a in unlocked]

    def _end_run(self) -> None:
        if self.run_score > 0:
            self.leaderboard.add(LeaderboardEntry(
                player_name=PLAYER_NAME,
                score=self.run_score,
                level=self.run_best_level,
            ))
        self.run_streak     = 0
        self.run_score      = 0
        self.run_best_level = 0

    # ── Menu actions ──────────────────────────────────────────────────────────

    def cycle_difficulty(self) -> Difficulty:
        """Select the next unlocked difficulty, wrapping around."""
        current_level = self.progress.state.current_level
        options = [d for d in Difficulty if d.is_unlocked(current_level)]
        current = self.progress.state.difficulty
        index = options.index(current) if current in options else -1
        choice = options[(index + 1) % len(options)]
        self.progress.set_difficulty(choice)
        return choice

    def cycle_theme(self) -> str:
        """Select the next unlocked theme, wrapping around."""
        unlocked = [t.id for t in ALL_THEMES if t.id in self.progress.state.unlocked_themes]
        current = self.progress.state.selected_theme
        index = unlocked.index(current) if current in unlocked else -1
        choice = unlocked[(index + 1) % len(unlocked)]
        self.progress.select_theme(choice)
        return choice

    @property
    def buttons(self) -> dict[str, pygame.Rect]:
        """Hit rects drawn by the last render(), keyed by button name."""
        return dict(self._buttons)

    def palette(self) -> dict:
        return theme_by_id(self.progress.state.selected_theme).rgb()

    # ── Per-frame update ──────────────────────────────────────────────────────

    def update(self, dt: float, game_mouse_pos: tuple[int, int] | None = None) -> None:
        """Advance game logic by one frame.

        Args:
            dt:             Delta time in seconds since last frame.
            game_mouse_pos: Mouse position in native game coordinates,
                            used for button hover.
        """
        self._hover = game_mouse_pos
        if self.state is not GameState.PLAYING or self.session is None:
            return

        self.session.update(dt)
        if self.session.status is not Status.PLAYING:
            self._dragging = False
            self._on_session_finished()
            if self.session.result_ready():
                self.state = GameState.RESULT

    # ── Event handling ────────────────────────────────────────────────────────

    def handle_event(self, event: pygame.event.Event) -> None:
        """Route a pygame event to the handler for the current state.

        Mouse positions in events are expected to already be in game
        coordinates; main.py translates them via Scaler.to_game().
        """
        if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            if self.state is not GameState.MENU:
                self.start_menu()
            return

        if self.state is GameState.PLAYING:
            self._handle_playing_event(event)
            return

        clicked = self._clicked(event)
        if clicked is None:
            return
        if self.state is GameState.MENU:
            self._handle_menu_click(clicked)
        elif self.state is GameState.RESULT:
            self._handle_result_click(clicked)
        elif clicked == "back":
            self.state = GameState.MENU

    def _clicked(self, event: pygame.event.Event) -> str | None:
        """Return the name of the button under a left click, if any."""
        if event.type != pygame.MOUSEBUTTONDOWN or event.button != 1:
            return None
        for name, rect in self._buttons.items():
            if rect.collidepoint(event.pos):
                return name
        return None

    def _handle_menu_click(self, name: str) -> None:
        if name == "continue":
            self.start_mode(PlayMode.CAMPAIGN)
        elif name.startswith("level:"):
            number = int(name.split(":", 1)[1])
            if number <= self.progress.state.current_level:
                self.start_mode(PlayMode.CAMPAIGN, number)
        elif name == "page:older":
            last_page = level_picker_pages(self.progress.state.current_level) - 1
            self.picker_page = min(self.picker_page + 1, last_page)
        elif name == "page:newer":
            self.picker_page = max(self.picker_page - 1, 0)
        elif name == "daily":
            self.start_mode(PlayMode.DAILY)
        elif name == "infinite":
            self.start_mode(PlayMode.INFINITE)
        elif name == "practice":
            self.start_mode(PlayMode.PRACTICE)
        elif name == "difficulty":
            self.cycle_difficulty()
        elif name == "theme":
            self.cycle_theme()
        elif name == "achievements":
            self.state = GameState.ACHIEVEMENTS
        elif name == "leaderboard":
            self.state = GameState.LEADERBOARD

    def _handle_result_click(self, name: str) -> None:
        if name == "next":
            self.next_level()
        elif name == "retry":
            self.retry()
        elif name == "menu":
            self.start_menu()

    def _handle_playing_event(self, event: pygame.event.Event) -> None:
        """Drag handling: press starts a stroke, motion extends it, release judges it."""
        session = self.session
        if session is None:
            return

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            clicked = self._clicked(event)
            if clicked == "back":
                self.start_menu()
                return
            if clicked == "clear":
                session.clear_path()
                return
            self._dragging = True
            session.touch(*event.pos)

        elif event.type == pygame.MOUSEMOTION and self._dragging:
            session.touch(*event.pos)

        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1 and self._dragging:
            self._dragging = False
            session.release()
            if session.status is not Status.PLAYING:
                self._on_session_finished()

    # ── Rendering ─────────────────────────────────────────────────────────────

    def render(self, surface: pygame.Surface) -> None:
        """Draw the current state onto the native game surface."""
        palette = self.palette()

        if self.state is GameState.MENU:
            model = MenuModel(
                progress=self.progress.state,
                total_stars=self.progress.total_stars(),
                achievements_done=len(self.achievements.unlocked()),
                achievements_total=len(self.achievements.achievements),
                picker_page=self.picker_page,
            )
            self._buttons = draw_menu(surface, model, palette, self._hover)

        elif self.state in (GameState.PLAYING, GameState.RESULT) and self.session:
            self._render_level(surface, palette)

        elif self.state is GameState.ACHIEVEMENTS:
            self._buttons = ui.draw_achievements(
                surface, self.achievements.achievements,
                self.achievements.completion_percentage(), palette,
            )

        elif self.state is GameState.LEADERBOARD:
            self._buttons = ui.draw_leaderboard(surface, self.leaderboard.entries(), palette)

    def _render_level(self, surface: pygame.Surface, palette: dict) -> None:
        session = self.session
        surface.fill(palette["background"])
        buttons = ui.draw_level_header(surface, session, palette)
        ui.draw_status_row(surface, session, palette)
        draw_board(surface, session.board)
        buttons.update(ui.draw_clear_button(surface, session, palette, self._hover))

        color, alpha = session.flash_state()
        if color and alpha > 0.0:
            ui.draw_flash(surface, color, alpha)

        if self.state is GameState.RESULT:
            has_next = self.mode is not PlayMode.DAILY
            buttons = ui.draw_result(surface, session, has_next, palette,
                                     self.last_unlocked, self._hover)
        self._buttons = buttons

    def visible_levels(self) -> range:
        """Level numbers the menu's picker row currently offers."""
        return level_picker_range(self.progress.state.current_level, self.picker_page)
