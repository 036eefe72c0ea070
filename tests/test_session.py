from dataclasses import replace

import pytest

from core.board import TapResult
from core.levels import LevelType
from core.session import LevelSession, Status
from settings import COLOR, COMPLETE_DELAY_S


def _drag(session, count):
    """Touch the first `count` dots of row 0, left to right."""
    for dot in session.board.dots[:count]:
        session.touch(dot.x, dot.y)


def test_long_enough_path_completes(easy_level):
    session = LevelSession(easy_level)
    _drag(session, 3)
    assert session.release() is Status.COMPLETE
    assert session.points_awarded == 60
    assert session.score == 60
    assert session.stars == 3


def test_short_path_is_cleared_and_play_continues(easy_level):
    session = LevelSession(easy_level)
    _drag(session, 2)
    assert session.release() is Status.PLAYING
    assert session.board.path == []
    assert session.score == 0


def test_empty_release_does_nothing(easy_level):
    level = replace(easy_level, level_type=LevelType.LIMITED, max_moves=2)
    session = LevelSession(level)
    assert session.release() is Status.PLAYING
    assert session.moves_remaining == 2


def test_limited_level_fails_when_moves_run_out(easy_level):
    level = replace(easy_level, level_type=LevelType.LIMITED, max_moves=2)
    session = LevelSession(level)
    _drag(session, 2)
    session.release()
    assert session.moves_remaining == 1
    _drag(session, 2)
    assert session.release() is Status.FAILED
    assert session.fail_reason == "moves"


def test_completing_on_limited_level_spends_a_move(easy_level):
    level = replace(easy_level, level_type=LevelType.LIMITED, max_moves=3)
    session = LevelSession(level)
    _drag(session, 3)
    session.release()
    assert session.moves_remaining == 2
    assert session.points_awarded == 70


def test_clear_path_keeps_moves(easy_level):
    level = replace(easy_level, level_type=LevelType.LIMITED, max_moves=2)
    session = LevelSession(level)
    _drag(session, 2)
    session.clear_path()
    assert session.board.path == []
    assert session.moves_remaining == 2


def test_countdown_fails_level(easy_level):
    session = LevelSession(replace(easy_level, time_limit=10))
    _drag(session, 2)
    session.update(4.0)
    assert session.time_remaining() == 6
    session.update(6.0)
    assert session.status is Status.FAILED
    assert session.fail_reason == "time"
    assert session.time_remaining() == 0
    assert session.board.path == []


def test_untimed_level_has_no_countdown(easy_level):
    session = LevelSession(easy_level)
    session.update(1000.0)
    assert session.time_remaining() is None
    assert session.status is Status.PLAYING


def test_input_ignored_after_finish(easy_level):
    session = LevelSession(easy_level)
    _drag(session, 3)
    session.release()
    dot = session.board.dots[4]
    assert session.touch(dot.x, dot.y) is TapResult.IGNORED
    assert session.tap(dot.id) is TapResult.IGNORED


def test_timer_stops_on_completion(easy_level):
    session = LevelSession(replace(easy_level, time_limit=30))
    _drag(session, 3)
    session.release()
    session.update(50.0)
    assert session.status is Status.COMPLETE
    assert session.time_remaining() == 30


def test_flash_delays_result(easy_level):
    session = LevelSession(easy_level)
    assert session.flash_state() == (None, 0.0)
    _drag(session, 3)
    session.release()
    color, alpha = session.flash_state()
    assert color == COLOR["pass"]
    assert alpha == pytest.approx(1.0)
    assert not session.result_ready()
    session.update(COMPLETE_DELAY_S)
    assert session.result_ready()
    assert session.flash_state() == (None, 0.0)


def test_reset_deals_fresh_board(easy_level):
    session = LevelSession(replace(easy_level, time_limit=20))
    _drag(session, 3)
    session.release()
    old_ids = {d.id for d in session.board.dots}
    session.reset()
    assert session.status is Status.PLAYING
    assert session.score == 0
    assert session.time_remaining() == 20
    assert old_ids.isdisjoint({d.id for d in session.board.dots})
