"""
main.py — Entry point and frame loop for DotQuest.

Responsibilities:
    - Configure logging
    - Initialise pygame and open a resizable window
    - Own the Scaler and translate pointer events into game coordinates
    - Drive Game: events → update → render → present
    - Run as a coroutine so pygbag can yield to the browser each frame

Everything about the game itself lives in core/game.py.

Usage (local):
    python main.py

Usage (web build):
    pygbag main.py
"""

import asyncio
import logging
import sys

import pygame

from core.game import Game
from settings import SCREEN_W, SCREEN_H, FPS, TITLE, LOG_LEVEL, LOG_FORMAT
from utils.scaler import Scaler

logger = logging.getLogger(__name__)

_START_SCALE = 1.25
_MAX_DT      = 0.05   # seconds; one long frame must not drain a countdown
_POINTER_EVENTS = (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP, pygame.MOUSEMOTION)


def setup_logging(level: str = LOG_LEVEL) -> None:
    """Send log records to stderr in a single-line format."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def _to_game_event(event: pygame.event.Event, scaler: Scaler) -> pygame.event.Event | None:
    """Rebuild a pointer event with its position in game coordinates.

    Presses that land in the letterbox bars are dropped. Motion and
    release are always forwarded so a drag that leaves the viewport
    still ends cleanly.
    """
    if event.type == pygame.MOUSEBUTTONDOWN and not scaler.contains(event.pos):
        return None
    attrs = dict(event.dict)
    attrs["pos"] = scaler.to_game(event.pos)
    return pygame.event.Event(event.type, attrs)


async def main() -> None:
    setup_logging()
    pygame.init()

    window = pygame.display.set_mode(
        (int(SCREEN_W * _START_SCALE), int(SCREEN_H * _START_SCALE)),
        pygame.RESIZABLE,
    )
    pygame.display.set_caption(TITLE)
    game_surface = pygame.Surface((SCREEN_W, SCREEN_H))
    scaler = Scaler(window.get_size())

    clock = pygame.time.Clock()
    game = Game()
    game.start_menu()
    logger.info("%s started", TITLE)

    running = True
    while running:
        dt = min(clock.tick(FPS) / 1000.0, _MAX_DT)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.VIDEORESIZE:
                scaler.resize((event.w, event.h))
            elif event.type in _POINTER_EVENTS:
                translated = _to_game_event(event, scaler)
                if translated is not None:
                    game.handle_event(translated)
            elif event.type == pygame.KEYDOWN:
                game.handle_event(event)

        game.update(dt, scaler.to_game(pygame.mouse.get_pos()))
        game.render(game_surface)
        scaler.present(window, game_surface)
        pygame.display.flip()

        await asyncio.sleep(0)

    game.start_menu()   # submits any run still in progress
    pygame.quit()
    logger.info("%s closed", TITLE)


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
