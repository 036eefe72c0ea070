"""
renderer/board.py — Dots and the connecting path.

The path is drawn first as thick line segments in the path's colour,
then every dot on top. Dots in the path grow by 20% and get a white
ring so the stroke stays readable where segments cross dot centres.
"""

import pygame

from core.board import Board
from settings import DOT_RADIUS, PATH_WIDTH, COLOR
from utils.color import lighter

_CONNECTED_SCALE = 1.2
_RING_WIDTH      = 4


def draw_board(surface: pygame.Surface, board: Board) -> None:
    """Draw every dot of board and its current path.

    Args:
        surface: Native 360x640 game surface.
        board:   The Board of the active session.
    """
    path = board.path_dots()
    if len(path) > 1:
        color = lighter(path[0].color, 30)
        points = [(dot.x, dot.y) for dot in path]
        pygame.draw.lines(surface, color, False, points, PATH_WIDTH)
        for point in points:
            pygame.draw.circle(surface, color, point, PATH_WIDTH // 2)

    for dot in board.dots:
        if dot.connected:
            radius = int(DOT_RADIUS * _CONNECTED_SCALE)
            pygame.draw.circle(surface, dot.color, (dot.x, dot.y), radius)
            pygame.draw.circle(surface, COLOR["text_light"], (dot.x, dot.y), radius, _RING_WIDTH)
        else:
            pygame.draw.circle(surface, dot.color, (dot.x, dot.y), DOT_RADIUS)
